"""Kotak Mahindra Bank strategy refinement."""

import re

from statement_extractor.parsers.generic import (
    AMOUNT,
    CURRENCY,
    DR_CR,
    MASKED_CARD,
    GenericStrategy,
    date_in_match,
    last_four_group,
)
from statement_extractor.parsers.normalizers import DATE_TOKEN, parse_amount
from statement_extractor.schemas.internal import DateValue, MoneyValue, ProviderIdentity

PAYMENT_BLOCK = re.compile(r"(?i)PAYMENT[\s\S]{0,400}(?=ACCOUNT|TRANSACTION|STATEMENT|$)")

TOTAL_LABELS = r"(?:Total\s+Payment\s+Due|Amount\s+Due|Total\s+Amount\s+Due|Total\s+Due)"
MINIMUM_LABELS = r"(?:Minimum\s+Payment\s+Due|Minimum\s+Amount\s+Due|Minimum\s+Due|Min\s+Due)"


class KotakStrategy(GenericStrategy):
    """Strategy refinement for Kotak Mahindra Bank credit card statements.

    Kotak-specific behaviors:
    - Searches the first PAYMENT block first, the whole text after
    - Statement period is printed as "Statement Period: <from> - <to>"
    """

    VARIANT_LABEL = "Kotak Bank Credit Card"

    def __init__(self):
        """Initialize Kotak strategy."""
        super().__init__()
        self.provider = ProviderIdentity.KOTAK

    @staticmethod
    def _block(text: str) -> str:
        match = PAYMENT_BLOCK.search(text)
        return match.group(0) if match else text

    def _find_card_last4(self, text: str) -> str | None:
        return self._cascade(
            "card_last4",
            [self._card_block_label, self._card_masked_shapes, self._card_any_label],
            text,
        )

    def _card_block_label(self, text: str) -> str | None:
        match = re.search(r"(?i)Card\s*(?:No|Number)[:\s]*([0-9*X \t-]{6,})", self._block(text))
        return last_four_group(match.group(1)) if match else None

    def _card_masked_shapes(self, text: str) -> str | None:
        match = re.search(rf"(?i){MASKED_CARD}", text)
        return last_four_group(match.group(0)) if match else None

    def _card_any_label(self, text: str) -> str | None:
        match = re.search(r"(?i)Card\s*No[:\s]*([0-9*X \t-]{6,})", text)
        return last_four_group(match.group(1)) if match else None

    def _find_total_balance(self, text: str) -> MoneyValue | None:
        return self._cascade("total_balance", [self._total_block, self._total_anywhere], text)

    def _total_block(self, text: str) -> MoneyValue | None:
        return _amount_after(TOTAL_LABELS, self._block(text))

    def _total_anywhere(self, text: str) -> MoneyValue | None:
        return _amount_after(TOTAL_LABELS, text)

    def _find_minimum_due(self, text: str) -> MoneyValue | None:
        return self._cascade("minimum_due", [self._minimum_block, self._minimum_anywhere], text)

    def _minimum_block(self, text: str) -> MoneyValue | None:
        return _amount_after(MINIMUM_LABELS, self._block(text))

    def _minimum_anywhere(self, text: str) -> MoneyValue | None:
        return _amount_after(MINIMUM_LABELS, text)

    def _find_billing_cycle(self, text: str) -> tuple[DateValue, DateValue] | None:
        return self._cascade(
            "billing_cycle",
            [
                self._cycle_statement_period_block,
                self._cycle_statement_period,
                self._cycle_statement_period_line,
            ],
            text,
        )

    def _cycle_statement_period_block(self, text: str) -> tuple[DateValue, DateValue] | None:
        return self._cycle_statement_period(self._block(text))

    def _cycle_statement_period(self, text: str) -> tuple[DateValue, DateValue] | None:
        return self._search_date_pair(
            rf"(?i)Statement\s+Period[:\s]*({DATE_TOKEN})\s*(?:-|to|–)\s*({DATE_TOKEN})", text
        )

    def _cycle_statement_period_line(self, text: str) -> tuple[DateValue, DateValue] | None:
        """Any two dates on the rest of the "Statement Period" line."""
        line = re.search(r"(?i)Statement\s+Period[:\s]*([^\n]+)", text)
        if not line:
            return None
        return self._search_date_pair(rf"({DATE_TOKEN}).*?({DATE_TOKEN})", line.group(1))

    def _find_due_date(self, text: str) -> DateValue | None:
        return self._cascade("payment_due_date", [self._due_date_block, self._due_anywhere], text)

    def _due_date_block(self, text: str) -> DateValue | None:
        return date_in_match(
            re.search(r"(?i)Payment\s+Due\s+Date[:\s]*([\d/\-.]{6,20})", self._block(text))
        )

    def _due_anywhere(self, text: str) -> DateValue | None:
        return date_in_match(re.search(r"(?i)Payment\s+Due[:\s]*([\d/\-.]{6,20})", text))


def _amount_after(labels: str, text: str) -> MoneyValue | None:
    match = re.search(rf"(?i){labels}[:\s]*({CURRENCY}{AMOUNT}{DR_CR})", text)
    return parse_amount(match.group(1)) if match else None
