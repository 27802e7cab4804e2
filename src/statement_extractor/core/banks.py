"""Provider metadata helpers (UI-friendly)."""

from __future__ import annotations

from typing import Final

from statement_extractor.schemas.internal import ProviderIdentity

PROVIDER_NAMES: Final[dict[ProviderIdentity, str]] = {
    ProviderIdentity.HDFC: "HDFC Bank",
    ProviderIdentity.AXIS: "Axis Bank",
    ProviderIdentity.SBI: "SBI",
    ProviderIdentity.ICICI: "ICICI Bank",
    ProviderIdentity.KOTAK: "Kotak Bank",
    ProviderIdentity.UNKNOWN: "Unknown",
}

# Banks we recognise by name but cannot parse. Reported on detection failure.
WATCHLIST: Final[list[tuple[str, tuple[str, ...]]]] = [
    ("HDFC", ("HDFC",)),
    ("CHASE", ("CHASE",)),
    ("AMEX", ("AMEX", "AMERICAN EXPRESS")),
    ("CITI", ("CITI",)),
    ("CAPITAL ONE", ("CAPITAL ONE",)),
    ("BANK OF AMERICA", ("BANK OF AMERICA",)),
]


def get_provider_name(provider: ProviderIdentity | str | None) -> str:
    if not provider:
        return PROVIDER_NAMES[ProviderIdentity.UNKNOWN]
    try:
        return PROVIDER_NAMES[ProviderIdentity(provider)]
    except ValueError:
        return PROVIDER_NAMES[ProviderIdentity.UNKNOWN]
