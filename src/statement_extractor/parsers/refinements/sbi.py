"""SBI Card strategy refinement.

SBI statements follow the generic label layout; only the variant label
differs.
"""

from statement_extractor.parsers.generic import GenericStrategy
from statement_extractor.schemas.internal import ProviderIdentity


class SBIStrategy(GenericStrategy):
    """Strategy refinement for SBI (State Bank of India) credit card statements."""

    VARIANT_LABEL = "SBI Credit Card"

    def __init__(self):
        """Initialize SBI strategy."""
        super().__init__()
        self.provider = ProviderIdentity.SBI
