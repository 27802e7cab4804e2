"""ICICI Bank strategy refinement."""

from statement_extractor.parsers.generic import GenericStrategy
from statement_extractor.schemas.internal import ProviderIdentity


class ICICIStrategy(GenericStrategy):
    """Strategy refinement for ICICI Bank credit card statements.

    Uses the generic label patterns throughout.
    """

    VARIANT_LABEL = "ICICI Credit Card"

    def __init__(self):
        super().__init__()
        self.provider = ProviderIdentity.ICICI
