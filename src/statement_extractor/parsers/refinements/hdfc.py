"""HDFC Bank strategy refinement.

HDFC statements print the due date, total dues and minimum due together
in a header table, repeat "Total Dues" / "Minimum Amount Due" labels in
several places, and mask card numbers in a handful of layouts.
"""

import re
from typing import Any, NamedTuple

from statement_extractor.parsers.generic import DR_CR, GenericStrategy
from statement_extractor.parsers.normalizers import DATE_TOKEN, parse_amount, parse_date
from statement_extractor.schemas.internal import (
    Candidate,
    DateValue,
    MoneyValue,
    ProviderIdentity,
)

PRODUCT_LINES = [
    "Regalia",
    "Diners",
    "Club",
    "MoneyBack",
    "Platinum",
    "Titanium",
    "Freedom",
    "Millennia",
    "IndianOil",
    "Business",
]

# A whole number token: never part of a longer number or of a date.
NUMBER = r"(?<![\d,/\-])(?<!\d\.)\d[\d,]*(?:\.\d{1,2})?(?![\d,/\-]|\.\d)"

# Header-table value shape: date, the total, then the minimum when printed.
HEADER_AMOUNT = rf"[₹Rs.\s]*{NUMBER}{DR_CR}"
TRIPLE_VALUES = rf"({DATE_TOKEN}).{{0,80}}?({HEADER_AMOUNT})(?:.{{0,80}}?({HEADER_AMOUNT}))?"

# Phrases that identify the statement summary rather than a transaction line.
SUMMARY_CONTEXT = ("PAYMENT DUE DATE", "STATEMENT FOR HDFC")
CONTEXT_BEFORE = 100
CONTEXT_AFTER = 120


class HeaderTriple(NamedTuple):
    due_date: DateValue | None
    total: MoneyValue | None
    minimum: MoneyValue | None


class HDFCStrategy(GenericStrategy):
    """Strategy refinement for HDFC Bank credit card statements.

    HDFC-specific behaviors:
    - Card last 4: four masking layouts tried in order
    - Due date, total and minimum: header table first, standalone labels after
    - Billing cycle: "Billing Cycle ... From ... To ..." with widening windows
    - Variant: product line appended to "HDFC Bank" when recognisable
    """

    VARIANT_LABEL = "HDFC Bank Credit Card"

    def __init__(self):
        """Initialize HDFC strategy."""
        super().__init__()
        self.provider = ProviderIdentity.HDFC

    def _extract_fields(self, text: str) -> dict[str, Any]:
        data: dict[str, Any] = {
            "account_holder_name": self._find_name(text),
            "card_last4": self._find_card_last4(text),
            "card_variant": self._find_card_variant(text),
        }
        cycle = self._find_billing_cycle(text)
        if cycle:
            data["billing_cycle_start"], data["billing_cycle_end"] = cycle

        triple = self._find_header_triple(text)
        if triple:
            data["payment_due_date"] = triple.due_date
            data["total_balance"] = triple.total
            data["minimum_due"] = triple.minimum

        # Standalone labels only fill what the header table left empty.
        if data.get("payment_due_date") is None:
            data["payment_due_date"] = self._find_due_date(text)

        total_candidates = self._total_candidates(text)
        chosen_total = self._choose_total(total_candidates, text)
        if data.get("total_balance") is None and chosen_total is not None:
            self._note("total_balance", "total_dues_label")
            data["total_balance"] = chosen_total.value

        if data.get("minimum_due") is None:
            chosen_min = self._choose_minimum(self._minimum_candidates(text), chosen_total, text)
            if chosen_min is not None:
                self._note("minimum_due", "minimum_amount_due_label")
                data["minimum_due"] = chosen_min.value
        return data

    # Card number

    def _find_card_last4(self, text: str) -> str | None:
        return self._cascade(
            "card_last4",
            [
                self._card_masked_with_terminator,
                self._card_no_section,
                self._card_no_context_window,
                self._card_no_last_group,
            ],
            text,
        )

    def _card_masked_with_terminator(self, text: str) -> str | None:
        match = re.search(r"(?i)X{3,4}\s*(\d{4})(?=\s|$|AAN|Statement|Credit|Limit)", text)
        return match.group(1) if match else None

    def _card_no_section(self, text: str) -> str | None:
        section = re.search(
            r"(?i)Card\s+No\s*:?\s*([^\n]{10,50}?)(?=\s*(?:AAN|Statement|Date|$|\n))", text
        )
        if not section:
            return None
        card_text = section.group(1)
        spaced = re.search(r"(?i)\d{4}\s+\d{1,2}X{1,2}\s+X{2,4}\s*(\d{4})", card_text)
        if spaced:
            return spaced.group(1)
        unspaced = re.search(r"(?i)X{3,4}(\d{4})", card_text)
        return unspaced.group(1) if unspaced else None

    def _card_no_context_window(self, text: str) -> str | None:
        context = re.search(r"(?i)Card\s+No[:\s]*[\d\sX]{15,60}", text)
        if not context:
            return None
        match = re.search(r"(?i)X{3,4}\s*(\d{4})", context.group(0))
        return match.group(1) if match else None

    def _card_no_last_group(self, text: str) -> str | None:
        """Last of the 4-digit groups on the "Card No" line (least masked)."""
        line = re.search(r"(?i)Card\s+No[:\s]+([^\n]{10,50})", text)
        if not line:
            return None
        groups = re.findall(r"\d{4}", line.group(1))
        return groups[-1] if len(groups) >= 2 else None

    # Variant

    def _find_card_variant(self, text: str) -> str | None:
        if not re.search(r"(?i)HDFC\s+Bank\s+Credit\s+Card", text):
            return None
        product = re.search(r"(?i)\b(?:" + "|".join(PRODUCT_LINES) + r")\b", text)
        if product:
            self._note("card_variant", "product_line")
            return f"HDFC Bank {product.group(0)}"
        self._note("card_variant", "variant_label")
        return self.VARIANT_LABEL

    # Header table: due date + total + minimum

    def _find_header_triple(self, text: str) -> HeaderTriple | None:
        for rule in (self._triple_header_lines, self._triple_inline, self._triple_positional):
            triple = rule(text)
            if triple:
                rule_name = rule.__name__.lstrip("_")
                for field, value in zip(
                    ("payment_due_date", "total_balance", "minimum_due"), triple
                ):
                    if value is not None:
                        self._note(field, rule_name)
                return triple
        return None

    def _triple_header_lines(self, text: str) -> HeaderTriple | None:
        """Header line naming all three columns, values on the next one or two lines."""
        lines = text.splitlines()
        for i, line in enumerate(lines):
            if not (
                re.search(r"(?i)payment\s*due", line)
                and re.search(r"(?i)total\s*(?:dues|due|amount)", line)
                and re.search(r"(?i)minimum", line)
            ):
                continue
            following = " ".join(lines[i + 1 : i + 3]).strip()
            values = re.search(rf"(?i){TRIPLE_VALUES}", following)
            if values:
                return _triple_from_match(values)
        return None

    def _triple_inline(self, text: str) -> HeaderTriple | None:
        """Headers and values run together on one line or paragraph."""
        header = re.search(
            r"(?i)Payment\s*Due\s*Date[\s:\-]*.*?Total\s*(?:Dues|Due|Amount)[\s:\-]*.*?"
            r"Minimum\s*(?:Amount\s*)?Due[\s:]*([\s\S]{0,200})",
            text,
        )
        if not header:
            return None
        values = re.search(rf"(?i){TRIPLE_VALUES}", header.group(1))
        return _triple_from_match(values) if values else None

    def _triple_positional(self, text: str) -> HeaderTriple | None:
        """Date and the next two whole amount tokens after the due-date label."""
        match = re.search(
            rf"(?i)Payment\s+Due\s+Date[\s\S]{{0,120}}?({DATE_TOKEN})"
            rf"[\s\S]{{0,80}}?({NUMBER})[\s\S]{{0,80}}?({NUMBER})",
            text,
        )
        return _triple_from_match(match) if match else None

    # Billing cycle

    def _find_billing_cycle(self, text: str) -> tuple[DateValue, DateValue] | None:
        return self._cascade(
            "billing_cycle",
            [self._cycle_billing_block, self._cycle_from_to, self._cycle_from_to_wide],
            text,
        )

    def _cycle_billing_block(self, text: str) -> tuple[DateValue, DateValue] | None:
        block = re.search(r"(?i)Billing\s+Cycle[\s\S]{0,200}", text)
        if not block:
            return None
        return self._search_date_pair(
            rf"(?i)From\s*[:\-]?\s*({DATE_TOKEN})[\s\S]{{0,80}}?To\s*[:\-]?\s*({DATE_TOKEN})",
            block.group(0),
        )

    def _cycle_from_to(self, text: str) -> tuple[DateValue, DateValue] | None:
        return self._search_date_pair(
            rf"(?i)From[\s:]+({DATE_TOKEN})[\s\S]{{1,50}}To[\s:]+({DATE_TOKEN})", text
        )

    def _cycle_from_to_wide(self, text: str) -> tuple[DateValue, DateValue] | None:
        return self._search_date_pair(
            rf"(?i)(?:Billing\s+Cycle[\s:]*)?From[\s:]+({DATE_TOKEN})"
            rf"[\s\S]{{0,200}}?To[\s:]+({DATE_TOKEN})",
            text,
        )

    # Standalone due date

    def _find_due_date(self, text: str) -> DateValue | None:
        return self._cascade(
            "payment_due_date",
            [self._due_date_label, self._due_date_line],
            text,
        )

    def _due_date_label(self, text: str) -> DateValue | None:
        return self._search_date(rf"(?i)Payment\s+Due\s+Date[\s:]+({DATE_TOKEN})", text)

    def _due_date_line(self, text: str) -> DateValue | None:
        """First date within 40 characters of the label on the same line."""
        section = re.search(r"(?i)Payment\s+Due\s+Date[:\s]*([^\n]{0,40})", text)
        if not section:
            return None
        return self._search_date(rf"({DATE_TOKEN})", section.group(1))

    # Standalone totals and disambiguation

    def _total_candidates(self, text: str) -> list[Candidate]:
        candidates = _label_candidates(r"Total\s+Dues", text)
        if candidates:
            return candidates
        loose = re.search(rf"(?i)Total\s+Dues[:\s]*[Rs.\s]*({NUMBER})", text)
        if loose:
            return [Candidate(loose.group(1), loose.start(), parse_amount(loose.group(1)))]
        return []

    def _minimum_candidates(self, text: str) -> list[Candidate]:
        candidates = _label_candidates(r"Minimum\s+Amount\s+Due", text)
        if candidates:
            return candidates
        loose = re.search(rf"(?i)Minimum\s+Amount\s+Due[:\s]*[Rs.\s]*({NUMBER})", text)
        if loose:
            return [Candidate(loose.group(1), loose.start(), parse_amount(loose.group(1)))]
        return []

    def _choose_total(self, candidates: list[Candidate], text: str) -> Candidate | None:
        """Summary-context candidate first, else the largest amount.

        The largest-amount fallback is a known accuracy limit: a large
        one-off transaction printed next to a "Total Dues" label can win.
        """
        candidates = [c for c in candidates if c.value is not None]
        if not candidates:
            return None
        for candidate in candidates:
            if self._in_summary_context(candidate, text):
                self._reject_others("total_balance", candidates, candidate, "outside summary")
                return candidate
        chosen = max(candidates, key=lambda c: c.value.amount)
        self._reject_others("total_balance", candidates, chosen, "smaller amount")
        return chosen

    def _choose_minimum(
        self, candidates: list[Candidate], chosen_total: Candidate | None, text: str
    ) -> Candidate | None:
        """Nearest to the chosen total, else summary context, else the smallest."""
        candidates = [c for c in candidates if c.value is not None]
        if not candidates:
            return None
        if chosen_total is not None:
            chosen = min(candidates, key=lambda c: abs(c.position - chosen_total.position))
            self._reject_others("minimum_due", candidates, chosen, "farther from total")
            return chosen
        for candidate in candidates:
            if self._in_summary_context(candidate, text):
                self._reject_others("minimum_due", candidates, candidate, "outside summary")
                return candidate
        chosen = min(candidates, key=lambda c: c.value.amount)
        self._reject_others("minimum_due", candidates, chosen, "larger amount")
        return chosen

    @staticmethod
    def _in_summary_context(candidate: Candidate, text: str) -> bool:
        start = max(0, candidate.position - CONTEXT_BEFORE)
        window = text[start : candidate.position + CONTEXT_AFTER].upper()
        return any(phrase in window for phrase in SUMMARY_CONTEXT)

    def _reject_others(
        self, field: str, candidates: list[Candidate], chosen: Candidate, reason: str
    ) -> None:
        for candidate in candidates:
            if candidate is not chosen:
                self._reject(field, candidate, reason)


def _label_candidates(label: str, text: str) -> list[Candidate]:
    """Every occurrence of a label with the first amount on its line, within 60 chars."""
    candidates = []
    for match in re.finditer(rf"(?i){label}[: \t]*([^\n]{{0,60}})", text):
        amount = re.search(NUMBER, match.group(1))
        if amount:
            candidates.append(
                Candidate(amount.group(0), match.start(), parse_amount(amount.group(0)))
            )
    return candidates


def _triple_from_match(match: re.Match) -> HeaderTriple | None:
    triple = HeaderTriple(
        due_date=parse_date(match.group(1)),
        total=parse_amount(match.group(2)),
        minimum=parse_amount(match.group(3)),
    )
    return triple if any(value is not None for value in triple) else None
