"""Generic credit card statement field extraction.

This module provides the GenericStrategy class which handles the field
patterns shared by most issuers. Provider-specific refinements inherit
from it and override only what's different.
"""

import re
from collections.abc import Callable
from typing import Any

from statement_extractor.parsers.normalizers import DATE_TOKEN, parse_amount, parse_date
from statement_extractor.schemas.internal import (
    Candidate,
    DateValue,
    ExtractionDiagnostics,
    ExtractionRecord,
    MoneyValue,
    ProviderIdentity,
)

# Amount as printed on statements, with optional currency prefix and debit/credit suffix.
CURRENCY = r"(?:Rs\.?|INR|₹)?\s*"
AMOUNT = r"\d[\d,]*(?:\.\d{1,2})?"
DR_CR = r"(?:\s*(?:Dr|Cr)\b)?"

NAME_LABEL = r"\b(?i:Name|Account\s+Holder|Cardholder)"

Rule = Callable[[str], Any]


class GenericStrategy:
    """Field extraction shared by all providers.

    Each field is an ordered list of rules. A rule is a pure function of the
    statement text returning a value or None; the first rule that returns a
    value wins and later rules are skipped.

    Subclasses can override specific methods for provider quirks:
        - _find_name(): Different holder labels
        - _find_card_last4(): Different masking layouts
        - _find_billing_cycle(): Different period labels
        - _find_total_balance() / _find_minimum_due(): Summary tables

    Example:
        >>> strategy = GenericStrategy()
        >>> record = strategy.extract("Card No: XXXX XXXX XXXX 1234")
        >>> record.card_last4
        '1234'
    """

    VARIANT_LABEL: str | None = None

    def __init__(self):
        """Initialize the generic strategy."""
        self.provider: ProviderIdentity | None = None
        self._diagnostics: ExtractionDiagnostics | None = None

    def extract(
        self, text: str, diagnostics: ExtractionDiagnostics | None = None
    ) -> ExtractionRecord:
        """Extract every field this strategy knows about.

        Args:
            text: Full statement text
            diagnostics: Optional collector for rule and candidate details

        Returns:
            ExtractionRecord with the fields that were found (others None)
        """
        self._diagnostics = diagnostics
        try:
            data = self._extract_fields(text or "")
            return self._build_record(data)
        finally:
            self._diagnostics = None

    def _extract_fields(self, text: str) -> dict[str, Any]:
        data: dict[str, Any] = {
            "account_holder_name": self._find_name(text),
            "card_last4": self._find_card_last4(text),
            "card_variant": self._find_card_variant(text),
            "payment_due_date": self._find_due_date(text),
            "total_balance": self._find_total_balance(text),
            "minimum_due": self._find_minimum_due(text),
        }
        cycle = self._find_billing_cycle(text)
        if cycle:
            data["billing_cycle_start"], data["billing_cycle_end"] = cycle
        return data

    def _build_record(self, data: dict[str, Any]) -> ExtractionRecord:
        """Create the record, dropping values that break record invariants."""
        for field in ("billing_cycle_start", "billing_cycle_end", "payment_due_date"):
            value = data.get(field)
            if value is not None and not _is_convertible(value):
                self._reject(field, Candidate(value.isoformat(), -1, value), "date out of range")
                data[field] = None

        start, end = data.get("billing_cycle_start"), data.get("billing_cycle_end")
        if start is not None and end is not None and start.to_date() > end.to_date():
            raw = f"{start.isoformat()} - {end.isoformat()}"
            self._reject("billing_cycle", Candidate(raw, -1, (start, end)), "start after end")
            data["billing_cycle_start"] = data["billing_cycle_end"] = None

        last4 = data.get("card_last4")
        if last4 is not None and not re.fullmatch(r"\d{4}", last4):
            self._reject("card_last4", Candidate(last4, -1, None), "not four digits")
            data["card_last4"] = None

        return ExtractionRecord(**{k: v for k, v in data.items() if v is not None})

    # Cascade helpers

    def _cascade(self, field: str, rules: list[Rule], text: str) -> Any:
        """Run rules in order and return the first non-empty result."""
        for rule in rules:
            value = rule(text)
            if value:
                self._note(field, rule.__name__.lstrip("_"))
                return value
        return None

    def _note(self, field: str, rule_name: str) -> None:
        if self._diagnostics is not None:
            self._diagnostics.record_tier(field, rule_name)

    def _reject(self, field: str, candidate: Candidate, reason: str) -> None:
        if self._diagnostics is not None:
            self._diagnostics.reject(field, candidate, reason)

    @staticmethod
    def _search_date(pattern: str, text: str) -> DateValue | None:
        match = re.search(pattern, text)
        return parse_date(match.group(1)) if match else None

    @staticmethod
    def _search_amount(pattern: str, text: str) -> MoneyValue | None:
        match = re.search(pattern, text)
        return parse_amount(match.group(1)) if match else None

    @staticmethod
    def _search_date_pair(pattern: str, text: str) -> tuple[DateValue, DateValue] | None:
        match = re.search(pattern, text)
        if not match:
            return None
        start, end = parse_date(match.group(1)), parse_date(match.group(2))
        if start is None or end is None:
            return None
        return start, end

    # Account holder

    def _find_name(self, text: str) -> str | None:
        return self._cascade(
            "account_holder_name", [self._name_all_caps, self._name_title_case], text
        )

    def _name_all_caps(self, text: str) -> str | None:
        """All-caps run after a holder label, ending at a line break or contact label."""
        match = re.search(
            NAME_LABEL + r"[\s:]+([A-Z][A-Z ]{2,}?)(?=[ \t]*(?:Email|Address|\n|$))", text
        )
        return match.group(1).strip() if match else None

    def _name_title_case(self, text: str) -> str | None:
        """Two or more Title Case words after a holder label."""
        match = re.search(NAME_LABEL + r"[\s:]+([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)+)", text)
        return match.group(1).strip() if match else None

    # Card number

    def _find_card_last4(self, text: str) -> str | None:
        return self._cascade("card_last4", [self._card_masked_number, self._card_labelled], text)

    def _card_labelled(self, text: str) -> str | None:
        """Trailing 4-digit group after "Card No", "ending in" or "Last 4"."""
        match = re.search(
            r"(?i)(?:Card\s+No|ending\s+in|Last\s+4)[\s:]*(?:[\dX*]{1,6}[ \t-]?){0,3}(\d{4})\b",
            text,
        )
        return match.group(1) if match else None

    def _card_masked_number(self, text: str) -> str | None:
        """Trailing group of a masked 16-digit number anywhere in the text."""
        match = re.search(
            r"(?i)\b(?:\d{4}|[X*]{4})[\s-]?[\dX*]{2,4}[\s-]?[X*]{4}[\s-]?(\d{4})\b", text
        )
        return match.group(1) if match else None

    # Variant

    def _find_card_variant(self, text: str) -> str | None:
        if self.VARIANT_LABEL:
            self._note("card_variant", "variant_label")
        return self.VARIANT_LABEL

    # Dates

    def _find_billing_cycle(self, text: str) -> tuple[DateValue, DateValue] | None:
        return self._cascade("billing_cycle", [self._cycle_labelled_period], text)

    def _cycle_labelled_period(self, text: str) -> tuple[DateValue, DateValue] | None:
        return self._search_date_pair(
            rf"(?i)(?:Statement\s+period|Billing\s+period|Billing\s+Cycle)[\s:]+"
            rf"({DATE_TOKEN})[\s\-–to]{{1,6}}({DATE_TOKEN})",
            text,
        )

    def _find_due_date(self, text: str) -> DateValue | None:
        return self._cascade("payment_due_date", [self._due_labelled], text)

    def _due_labelled(self, text: str) -> DateValue | None:
        return self._search_date(
            rf"(?i)(?:Payment\s+Due(?:\s+Date)?|Due\s+Date)[\s:]+({DATE_TOKEN})", text
        )

    # Amounts

    def _find_total_balance(self, text: str) -> MoneyValue | None:
        return self._cascade("total_balance", [self._total_labelled], text)

    def _total_labelled(self, text: str) -> MoneyValue | None:
        return self._search_amount(
            r"(?i)(?:Total\s+Dues|Total\s+Amount(?:\s+Due)?|Total\s+Balance|Current\s+Balance)"
            rf"[:\s]*({CURRENCY}{AMOUNT}{DR_CR})",
            text,
        )

    def _find_minimum_due(self, text: str) -> MoneyValue | None:
        return self._cascade("minimum_due", [self._minimum_labelled], text)

    def _minimum_labelled(self, text: str) -> MoneyValue | None:
        return self._search_amount(
            r"(?i)(?:Minimum\s+Amount\s+Due|Minimum\s+Due|Min\s+Due)"
            rf"[:\s]*({CURRENCY}{AMOUNT}{DR_CR})",
            text,
        )


def _is_convertible(value: DateValue) -> bool:
    try:
        value.to_date()
    except ValueError:
        return False
    return True


MASKED_CARD = (
    r"\d{6}\*+\d{4}|\d{4}\*{2,}\d{4}|\d{4}\s*\*+\s*\d{4}|ending\s+in\s*\d{4}|Last\s+4\s*[:\s]*\d{4}"
)


def last_four_group(card_text: str) -> str | None:
    """Trailing 4-digit group of a masked number, else the first one."""
    match = re.search(r"(\d{4})\s*$", card_text) or re.search(r"(\d{4})", card_text)
    return match.group(1) if match else None


def date_in_match(match: re.Match | None) -> DateValue | None:
    """First date token inside group 1 of a loose date capture."""
    if not match:
        return None
    token = re.search(rf"({DATE_TOKEN})", match.group(1))
    return parse_date(token.group(1)) if token else None
