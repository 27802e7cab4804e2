"""Date and amount normalization for statement fragments.

Both normalizers are total functions: malformed input yields ``None``,
never an exception and never a best-guess value.
"""

import re
from decimal import Decimal, InvalidOperation

from statement_extractor.schemas.internal import DateValue, MoneyValue

# Day/month/year token as it appears in statement text (05/03/2024, 5-3-24, 05.03.2024)
DATE_TOKEN = r"\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}(?!\d)"

_DATE_SEPARATORS = re.compile(r"[/\-.]")
_DEBIT_MARKER = re.compile(r"\bDr\b", re.IGNORECASE)
# NOTE: "Rs." must go before stripping, otherwise its dot survives as a decimal point.
_CURRENCY_MARKERS = re.compile(r"(?i)(?:\bRs\.?|\bINR\b|₹)")
_NON_NUMERIC = re.compile(r"[^0-9.\-,]")
_NUMERIC_PREFIX = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_date(fragment: str | None) -> DateValue | None:
    """Parse a day-month-year fragment.

    Supported shapes: DD/MM/YYYY, DD-MM-YY, D.M.YYYY. Two-digit years are
    taken to be in the 2000s. No calendar validation is done here.

    Args:
        fragment: Date text such as "05/03/24"

    Returns:
        DateValue, or None for wrong arity or non-numeric components
    """
    if not fragment:
        return None

    parts = [part.strip() for part in _DATE_SEPARATORS.split(fragment.strip())]
    if len(parts) != 3:
        return None
    if any(not (part.isascii() and part.isdigit()) for part in parts):
        return None

    day, month, year = (int(part) for part in parts)
    if year < 100:
        year += 2000
    return DateValue(year=year, month=month, day=day)


def parse_amount(fragment: str | None) -> MoneyValue | None:
    """Parse a currency-formatted amount.

    Handles:
        - Rs. 83,794.00 Dr (Indian format with debit suffix)
        - ₹1,23,456.00
        - 1320.00

    Args:
        fragment: Amount text

    Returns:
        MoneyValue with the magnitude, or None when there is no number
    """
    if not fragment:
        return None

    is_debit = bool(_DEBIT_MARKER.search(fragment))
    numeric = _NON_NUMERIC.sub("", _CURRENCY_MARKERS.sub("", fragment))
    if not numeric:
        return None

    match = _NUMERIC_PREFIX.match(numeric.replace(",", ""))
    if not match:
        return None

    try:
        value = Decimal(match.group(0))
    except InvalidOperation:
        return None
    return MoneyValue(amount=abs(value), is_debit=is_debit)
