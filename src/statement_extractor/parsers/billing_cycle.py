"""Billing cycle inference for statements without an explicit period.

The window ends on the statement date and starts one calendar month
earlier. When the dates printed in the document are all close together
they bound the real period more precisely, so they replace the window.
"""

import re
from datetime import date, timedelta

from statement_extractor.parsers.normalizers import DATE_TOKEN, parse_date
from statement_extractor.schemas.internal import DateValue, ExtractionDiagnostics

STATEMENT_DATE = re.compile(rf"(?i)Statement\s+Date[\s:]*({DATE_TOKEN})")
DATE_TOKENS = re.compile(DATE_TOKEN)

# Widest span of document dates still treated as a single billing period
MAX_TRANSACTION_SPAN = timedelta(days=90)
FALLBACK_CYCLE_LENGTH = timedelta(days=30)


def find_statement_date(text: str | None) -> DateValue | None:
    """Date printed after the "Statement Date" label, if any."""
    return _statement_date_match(text or "")[1]


def infer_billing_cycle(
    text: str | None, diagnostics: ExtractionDiagnostics | None = None
) -> tuple[DateValue, DateValue] | None:
    """Infer the billing cycle from the statement date.

    Args:
        text: Full statement text
        diagnostics: Optional collector; receives the source of the window

    Returns:
        (start, end) pair, or None when there is no usable statement date
    """
    text = text or ""
    match, statement_date = _statement_date_match(text)
    if statement_date is None:
        return None

    try:
        end = statement_date.to_date()
    except ValueError:
        return None

    window = (DateValue.from_date(_one_month_before(end)), DateValue.from_date(end))
    source = "statement_date"

    dates = _document_dates(text, exclude=match.span(1))
    if dates and dates[-1] - dates[0] <= MAX_TRANSACTION_SPAN:
        window = (DateValue.from_date(dates[0]), DateValue.from_date(dates[-1]))
        source = "transaction_dates"

    if diagnostics is not None:
        diagnostics.billing_cycle_source = source
    return window


def _statement_date_match(text: str) -> tuple[re.Match | None, DateValue | None]:
    match = STATEMENT_DATE.search(text)
    return match, (parse_date(match.group(1)) if match else None)


def _one_month_before(end: date) -> date:
    """Same day one month earlier, or 30 days earlier when that day does not exist."""
    year, month = (end.year - 1, 12) if end.month == 1 else (end.year, end.month - 1)
    try:
        return end.replace(year=year, month=month)
    except ValueError:
        return end - FALLBACK_CYCLE_LENGTH


def _document_dates(text: str, exclude: tuple[int, int]) -> list[date]:
    """Sorted calendar dates of every date token except the excluded span."""
    dates = []
    for token in DATE_TOKENS.finditer(text):
        if token.span() == exclude:
            continue
        value = parse_date(token.group(0))
        if value is None:
            continue
        try:
            dates.append(value.to_date())
        except ValueError:
            continue
    return sorted(dates)
