"""Axis Bank strategy refinement.

Axis statements (including the Flipkart co-branded card) carry a
"PAYMENT SUMMARY" block; searching inside it avoids picking up amounts
and dates from the transaction listing.
"""

import re
from typing import Any, NamedTuple

from statement_extractor.parsers.generic import (
    AMOUNT,
    CURRENCY,
    DR_CR,
    MASKED_CARD,
    GenericStrategy,
    date_in_match,
    last_four_group,
)
from statement_extractor.parsers.normalizers import DATE_TOKEN, parse_amount, parse_date
from statement_extractor.schemas.internal import DateValue, MoneyValue, ProviderIdentity

SUMMARY_BLOCK = re.compile(
    r"(?i)PAYMENT\s+SUMMARY[\s\S]{0,400}(?=ACCOUNT\s+SUMMARY|TRANSACTION\s+DETAILS|$)"
)
SUMMARY_HEADING = re.compile(r"(?i)PAYMENT\s*SUMMARY")
SUMMARY_LOOKAHEAD_LINES = 8
# Amounts in the summary layout always carry paise, which keeps dates out.
SUMMARY_AMOUNT = re.compile(r"((?:₹|Rs\.?)?\s*\d[\d,]*\.\d{2})(?:\s*(Dr|Cr))?", re.IGNORECASE)
HEADING_WORDS = ("AXIS", "BANK", "FLIPKART", "STATEMENT", "CREDIT CARD")


class SummaryLayout(NamedTuple):
    """Values read from the lines right under the PAYMENT SUMMARY heading."""

    cycle: tuple[DateValue, DateValue] | None
    due_date: DateValue | None
    total: MoneyValue | None
    minimum: MoneyValue | None


class AxisStrategy(GenericStrategy):
    """Strategy refinement for Axis Bank credit card statements.

    Axis-specific behaviors:
    - Searches the PAYMENT SUMMARY block first, the whole text after
    - Reads a date range line followed by an amounts line under the heading
    - Falls back to the first line for the holder name
    """

    VARIANT_LABEL = "Axis Bank Credit Card"

    def __init__(self):
        """Initialize Axis strategy."""
        super().__init__()
        self.provider = ProviderIdentity.AXIS

    def _extract_fields(self, text: str) -> dict[str, Any]:
        data: dict[str, Any] = {
            "account_holder_name": self._find_name(text),
            "card_last4": self._find_card_last4(text),
            "card_variant": self._find_card_variant(text),
        }

        summary = self._summary_layout(text)
        if summary is not None:
            for field, value in (
                ("billing_cycle", summary.cycle),
                ("payment_due_date", summary.due_date),
                ("total_balance", summary.total),
                ("minimum_due", summary.minimum),
            ):
                if value is not None:
                    self._note(field, "summary_layout")
            if summary.cycle:
                data["billing_cycle_start"], data["billing_cycle_end"] = summary.cycle
            data["payment_due_date"] = summary.due_date
            data["total_balance"] = summary.total
            data["minimum_due"] = summary.minimum

        if data.get("billing_cycle_start") is None:
            cycle = self._find_billing_cycle(text)
            if cycle:
                data["billing_cycle_start"], data["billing_cycle_end"] = cycle
        if data.get("total_balance") is None:
            data["total_balance"] = self._find_total_balance(text)
        if data.get("minimum_due") is None:
            data["minimum_due"] = self._find_minimum_due(text)
        if data.get("payment_due_date") is None:
            data["payment_due_date"] = self._find_due_date(text)
        return data

    @staticmethod
    def _block(text: str) -> str:
        """PAYMENT SUMMARY block, or the whole text when there is none."""
        match = SUMMARY_BLOCK.search(text)
        return match.group(0) if match else text

    def _summary_layout(self, text: str) -> SummaryLayout | None:
        """Date range line with the amounts on the next line.

        Example::

            PAYMENT SUMMARY
            Statement Period Payment Due Date
            16/02/2024 - 15/03/2024 04/04/2024
            Total Payment Due Minimum Payment Due
            15,564.03 Dr 1,320.00 Dr
        """
        lines = text.splitlines()
        heading = next((i for i, line in enumerate(lines) if SUMMARY_HEADING.search(line)), None)
        if heading is None:
            return None

        for j in range(heading, min(len(lines), heading + SUMMARY_LOOKAHEAD_LINES)):
            date_line = lines[j]
            date_range = re.search(rf"({DATE_TOKEN})\s*[-–]\s*({DATE_TOKEN})", date_line)
            if not date_range:
                continue

            start, end = parse_date(date_range.group(1)), parse_date(date_range.group(2))
            cycle = (start, end) if start and end else None
            due = re.search(rf"({DATE_TOKEN})", date_line[date_range.end() :])
            due_date = parse_date(due.group(1)) if due else None

            amounts = self._summary_amounts(lines, j)
            return SummaryLayout(
                cycle=cycle,
                due_date=due_date,
                total=amounts[0] if amounts else None,
                minimum=amounts[1] if len(amounts) > 1 else None,
            )
        return None

    @staticmethod
    def _summary_amounts(lines: list[str], date_index: int) -> list[MoneyValue]:
        """Amounts on the first line after the range that has any, else on the range line."""
        for line in lines[date_index + 1 : date_index + 3] + [lines[date_index]]:
            found = [
                parse_amount(f"{m.group(1)} {m.group(2) or ''}")
                for m in SUMMARY_AMOUNT.finditer(line)
            ]
            found = [amount for amount in found if amount is not None]
            if found:
                return found
        return []

    # Account holder

    def _find_name(self, text: str) -> str | None:
        return self._cascade(
            "account_holder_name",
            [self._name_account_holder, self._name_label, self._name_first_line],
            text,
        )

    def _name_account_holder(self, text: str) -> str | None:
        match = re.search(r"(?i)Account\s+Holder[:\s]+([A-Z][A-Za-z .]{2,})", text)
        return match.group(1).strip() if match else None

    def _name_label(self, text: str) -> str | None:
        match = re.search(r"(?i)\bName[:\s]+([A-Z][A-Za-z .]{2,})", text)
        return match.group(1).strip() if match else None

    def _name_first_line(self, text: str) -> str | None:
        """An all-caps first line is the addressee on Axis statements."""
        first = next((line.strip() for line in text.splitlines() if line.strip()), "")
        if not re.fullmatch(r"[A-Z][A-Z\s.]{3,60}", first):
            return None
        if any(word in first for word in HEADING_WORDS):
            return None
        return first

    # Card number

    def _find_card_last4(self, text: str) -> str | None:
        return self._cascade(
            "card_last4",
            [self._card_summary_label, self._card_masked_shapes, self._card_any_label],
            text,
        )

    def _card_summary_label(self, text: str) -> str | None:
        match = re.search(r"(?i)Card\s*(?:No|Number)[:\s]*([0-9*X \t-]{6,})", self._block(text))
        return last_four_group(match.group(1)) if match else None

    def _card_masked_shapes(self, text: str) -> str | None:
        match = re.search(rf"(?i){MASKED_CARD}", text)
        return last_four_group(match.group(0)) if match else None

    def _card_any_label(self, text: str) -> str | None:
        match = re.search(r"(?i)Card\s*No[:\s]*([0-9*X \t-]{6,})", text)
        return last_four_group(match.group(1)) if match else None

    # Variant

    def _find_card_variant(self, text: str) -> str | None:
        # Co-branded statements that mention HDFC keep the HDFC label.
        if re.search(r"(?i)\bHDFC\b", text):
            self._note("card_variant", "hdfc_mention")
            return "HDFC Bank Credit Card"
        return super()._find_card_variant(text)

    # Summary-block fallbacks

    def _find_total_balance(self, text: str) -> MoneyValue | None:
        return self._cascade(
            "total_balance", [self._total_payment_due_block, self._total_payment_due], text
        )

    def _total_payment_due_block(self, text: str) -> MoneyValue | None:
        return self._search_amount(
            rf"(?i)Total\s+Payment\s+Due[:\s]*({CURRENCY}{AMOUNT}{DR_CR})", self._block(text)
        )

    def _total_payment_due(self, text: str) -> MoneyValue | None:
        return self._search_amount(rf"(?i)Total\s+Payment\s+Due[:\s]*({CURRENCY}{AMOUNT})", text)

    def _find_minimum_due(self, text: str) -> MoneyValue | None:
        return self._cascade(
            "minimum_due", [self._minimum_payment_due_block, self._minimum_payment_due], text
        )

    def _minimum_payment_due_block(self, text: str) -> MoneyValue | None:
        return self._search_amount(
            rf"(?i)Minimum\s+Payment\s+Due[:\s]*({CURRENCY}{AMOUNT}{DR_CR})", self._block(text)
        )

    def _minimum_payment_due(self, text: str) -> MoneyValue | None:
        return self._search_amount(
            rf"(?i)Minimum\s+Payment\s+Due[:\s]*({CURRENCY}{AMOUNT})", text
        )

    def _find_due_date(self, text: str) -> DateValue | None:
        return self._cascade(
            "payment_due_date", [self._due_date_block, self._due_anywhere], text
        )

    def _due_date_block(self, text: str) -> DateValue | None:
        return date_in_match(
            re.search(r"(?i)Payment\s+Due\s+Date[:\s]*([\d/\-.]{6,20})", self._block(text))
        )

    def _due_anywhere(self, text: str) -> DateValue | None:
        return date_in_match(re.search(r"(?i)Payment\s+Due[:\s]*([\d/\-.]{6,20})", text))
