"""Provider detection from statement text.

This module identifies which bank issued a credit card statement
based on tokens found in the extracted text.
"""

from collections.abc import Callable

from statement_extractor.core.banks import WATCHLIST
from statement_extractor.schemas.internal import ProviderIdentity

DetectionRule = tuple[Callable[[str], bool], ProviderIdentity]

HDFC_GSTIN = "33AAACH2702H2Z6"


def _contains_any(*tokens: str) -> Callable[[str], bool]:
    def predicate(text: str) -> bool:
        return any(token in text for token in tokens)

    return predicate


def _is_hdfc(text: str) -> bool:
    if any(phrase in text for phrase in ("HDFC BANK CREDIT", "HDFC BANK", "STATEMENT FOR HDFC")):
        return True
    if "HDFC" in text and ("CREDIT CARD" in text or "CREDIT CARDS" in text):
        return True
    return HDFC_GSTIN in text or ("HDFC" in text and "GSTIN" in text)


class ProviderDetector:
    """Detects the issuing bank from credit card statement text.

    Rules are evaluated top to bottom and the first match wins. Providers
    share tokens (co-branded Axis statements mention HDFC, for instance),
    so the order is the priority contract, not a convenience.

    Example:
        >>> detector = ProviderDetector()
        >>> detector.detect("Statement for HDFC Bank Credit Card")
        <ProviderIdentity.HDFC: 'hdfc'>
    """

    # All predicates receive upper-cased text.
    RULES: list[DetectionRule] = [
        (_is_hdfc, ProviderIdentity.HDFC),
        (_contains_any("AXIS BANK", "AXIS", "FLIPKART"), ProviderIdentity.AXIS),
        (_contains_any("STATE BANK", "SBI", "STATE BANK OF INDIA"), ProviderIdentity.SBI),
        (_contains_any("ICICI"), ProviderIdentity.ICICI),
        (_contains_any("KOTAK", "KOTAK MAHINDRA"), ProviderIdentity.KOTAK),
    ]

    def __init__(self, rules: list[DetectionRule] | None = None):
        self._rules = list(rules if rules is not None else self.RULES)

    def detect(self, text: str | None) -> ProviderIdentity:
        """Detect the provider from statement text.

        Args:
            text: Full statement text

        Returns:
            Matching ProviderIdentity, or ProviderIdentity.UNKNOWN
        """
        if not text:
            return ProviderIdentity.UNKNOWN

        upper = text.upper()
        for predicate, provider in self._rules:
            if predicate(upper):
                return provider
        return ProviderIdentity.UNKNOWN

    def found_watchlist_banks(self, text: str | None) -> list[str]:
        """List watch-listed bank names mentioned in the text.

        Used to explain a detection failure; a name here does not mean the
        bank is supported.
        """
        if not text:
            return []
        upper = text.upper()
        return [name for name, tokens in WATCHLIST if any(token in upper for token in tokens)]

    def get_supported_providers(self) -> list[ProviderIdentity]:
        """Get supported providers in precedence order."""
        return [provider for _, provider in self._rules]
