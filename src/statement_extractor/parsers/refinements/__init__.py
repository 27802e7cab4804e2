"""Provider-specific strategy refinements.

Each refinement extends GenericStrategy and overrides only the field
rules where that issuer's layout differs.
"""

from .axis import AxisStrategy
from .hdfc import HDFCStrategy
from .icici import ICICIStrategy
from .kotak import KotakStrategy
from .sbi import SBIStrategy

__all__ = ["HDFCStrategy", "SBIStrategy", "ICICIStrategy", "AxisStrategy", "KotakStrategy"]
