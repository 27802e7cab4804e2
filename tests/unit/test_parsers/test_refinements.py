"""Tests for provider-specific strategy refinements."""

from decimal import Decimal

import pytest

from statement_extractor.parsers.refinements import (
    AxisStrategy,
    HDFCStrategy,
    ICICIStrategy,
    KotakStrategy,
    SBIStrategy,
)
from statement_extractor.parsers.refinements.hdfc import HeaderTriple
from statement_extractor.schemas.internal import (
    Candidate,
    DateValue,
    ExtractionDiagnostics,
    MoneyValue,
    ProviderIdentity,
)


def _date(year: int, month: int, day: int) -> DateValue:
    return DateValue(year=year, month=month, day=day)


def _money(amount: str, is_debit: bool = False) -> MoneyValue:
    return MoneyValue(amount=Decimal(amount), is_debit=is_debit)


class TestGoldenStatements:
    """Every field of a known sample statement, per provider."""

    def test_hdfc(self, hdfc_statement):
        """Test HDFC sample with header table."""
        record = HDFCStrategy().extract(hdfc_statement)

        assert record.account_holder_name == "JOHN DOE"
        assert record.card_last4 == "7890"
        assert record.card_variant == "HDFC Bank Regalia"
        assert record.billing_cycle_start == _date(2024, 2, 16)
        assert record.billing_cycle_end == _date(2024, 3, 15)
        assert record.payment_due_date == _date(2024, 4, 4)
        assert record.total_balance == _money("83794.00")
        assert record.minimum_due == _money("4190.00")

    def test_sbi(self, sbi_statement):
        """Test SBI sample."""
        record = SBIStrategy().extract(sbi_statement)

        assert record.account_holder_name == "ANITA DESAI"
        assert record.card_last4 == "2345"
        assert record.card_variant == "SBI Credit Card"
        assert record.billing_cycle_start == _date(2024, 2, 5)
        assert record.billing_cycle_end == _date(2024, 3, 4)
        assert record.payment_due_date == _date(2024, 3, 24)
        assert record.total_balance == _money("45210.75")
        assert record.minimum_due == _money("2260.55")

    def test_icici(self, icici_statement):
        """Test ICICI sample with title case holder name."""
        record = ICICIStrategy().extract(icici_statement)

        assert record.account_holder_name == "Vikram Singh"
        assert record.card_last4 == "6789"
        assert record.card_variant == "ICICI Credit Card"
        assert record.billing_cycle_start == _date(2024, 1, 10)
        assert record.billing_cycle_end == _date(2024, 2, 9)
        assert record.payment_due_date == _date(2024, 2, 29)
        assert record.total_balance == _money("18900.00")
        assert record.minimum_due == _money("945.00")

    def test_axis(self, axis_statement):
        """Test Axis sample with the payment summary layout."""
        record = AxisStrategy().extract(axis_statement)

        assert record.account_holder_name == "Priya Sharma"
        assert record.card_last4 == "9876"
        assert record.card_variant == "Axis Bank Credit Card"
        assert record.billing_cycle_start == _date(2024, 2, 16)
        assert record.billing_cycle_end == _date(2024, 3, 15)
        assert record.payment_due_date == _date(2024, 4, 4)
        assert record.total_balance == _money("15564.03", is_debit=True)
        assert record.minimum_due == _money("1320.00", is_debit=True)

    def test_kotak(self, kotak_statement):
        """Test Kotak sample with a payment block."""
        record = KotakStrategy().extract(kotak_statement)

        assert record.account_holder_name == "RAHUL VERMA"
        assert record.card_last4 == "4455"
        assert record.card_variant == "Kotak Bank Credit Card"
        assert record.billing_cycle_start == _date(2024, 3, 1)
        assert record.billing_cycle_end == _date(2024, 3, 31)
        assert record.payment_due_date == _date(2024, 4, 20)
        assert record.total_balance == _money("23450.50")
        assert record.minimum_due == _money("1172.50")

    @pytest.mark.parametrize(
        "strategy_class,provider",
        [
            (HDFCStrategy, ProviderIdentity.HDFC),
            (SBIStrategy, ProviderIdentity.SBI),
            (ICICIStrategy, ProviderIdentity.ICICI),
            (AxisStrategy, ProviderIdentity.AXIS),
            (KotakStrategy, ProviderIdentity.KOTAK),
        ],
    )
    def test_provider_set(self, strategy_class, provider):
        """Test each refinement identifies its provider."""
        assert strategy_class().provider == provider

    @pytest.mark.parametrize(
        "strategy_class,text",
        [
            (SBIStrategy, "SBI Card\nCard No: 5241 XXXX XXXX 2345\n"),
            (ICICIStrategy, "ICICI Bank\nCard No: 4375 51XX XXXX 2345\n"),
        ],
    )
    def test_card_with_leading_digits_keeps_last_group(self, strategy_class, text):
        """Test the visible leading digits are never taken as the last four."""
        assert strategy_class().extract(text).card_last4 == "2345"



class TestHDFCStrategy:
    """Test suite for HDFC tiers."""

    def test_card_section_with_spaced_mask(self):
        """Test the 'Card No' section rule on its own."""
        strategy = HDFCStrategy()
        assert strategy._card_no_section("Card No: 4321 56XX XXXX 7890\n") == "7890"

    def test_card_last_group_for_unmasked_number(self):
        """Test unmasked numbers fall through to the last-group tier."""
        diagnostics = ExtractionDiagnostics()
        record = HDFCStrategy().extract("Card No: 4321 5678 9012 3456\n", diagnostics)

        assert record.card_last4 == "3456"
        assert diagnostics.tiers["card_last4"] == "card_no_last_group"

    def test_variant_requires_full_label(self):
        """Test no variant without the 'HDFC Bank Credit Card' phrase."""
        assert HDFCStrategy().extract("HDFC Bank statement").card_variant is None
        assert (
            HDFCStrategy().extract("HDFC Bank Credit Card Statement").card_variant
            == "HDFC Bank Credit Card"
        )

    def test_triple_inline(self):
        """Test headers and values on one line."""
        text = "Payment Due Date Total Dues Minimum Amount Due 05/04/2024 12,000.00 600.00"
        diagnostics = ExtractionDiagnostics()
        record = HDFCStrategy().extract(text, diagnostics)

        assert record.payment_due_date == _date(2024, 4, 5)
        assert record.total_balance == _money("12000.00")
        assert record.minimum_due == _money("600.00")
        assert diagnostics.tiers["total_balance"] == "triple_inline"

    def test_triple_positional(self):
        """Test date and two amounts after the due-date label."""
        text = "Payment Due Date\n10/04/2024\nSummary\n12,345.00\n617.00\n"
        triple = HDFCStrategy()._find_header_triple(text)

        assert triple == HeaderTriple(_date(2024, 4, 10), _money("12345.00"), _money("617.00"))

    def test_positional_does_not_split_the_due_date(self):
        """Test labelled amounts before the due date are not replaced by year digits."""
        text = (
            "HDFC Bank Credit Card Statement\n"
            "Total Dues: 83,794.00\n"
            "Minimum Amount Due: 4,190.00\n"
            "Payment Due Date: 04/04/2024\n"
        )
        diagnostics = ExtractionDiagnostics()
        record = HDFCStrategy().extract(text, diagnostics)

        assert record.payment_due_date == _date(2024, 4, 4)
        assert record.total_balance == _money("83794.00")
        assert record.minimum_due == _money("4190.00")
        assert diagnostics.tiers["total_balance"] == "total_dues_label"

    def test_header_row_with_single_amount(self):
        """Test a missing minimum stays absent instead of being cut from the total."""
        text = "Payment Due Date Total Dues Minimum Amount Due\n04/04/2024 83,794.00\n"
        record = HDFCStrategy().extract(text)

        assert record.payment_due_date == _date(2024, 4, 4)
        assert record.total_balance == _money("83794.00")
        assert record.minimum_due is None

    def test_header_values_split_over_two_lines(self):
        """Test the header-line tier joins the next two lines."""
        text = (
            "Payment Due Date Total Dues Minimum Amount Due\n"
            "04/04/2024\n"
            "83,794.00 4,190.00\n"
        )
        diagnostics = ExtractionDiagnostics()
        record = HDFCStrategy().extract(text, diagnostics)

        assert record.payment_due_date == _date(2024, 4, 4)
        assert record.total_balance == _money("83794.00")
        assert record.minimum_due == _money("4190.00")
        assert diagnostics.tiers["minimum_due"] == "triple_header_lines"

    def test_header_triple_is_not_overwritten_by_labels(self, hdfc_statement):
        """Test standalone labels later in the text never replace header values."""
        text = hdfc_statement + "Total Dues 99,999.00\nMinimum Amount Due 9,999.00\n"
        record = HDFCStrategy().extract(text)

        assert record.total_balance == _money("83794.00")
        assert record.minimum_due == _money("4190.00")

    def test_header_minimum_filled_from_label(self):
        """Test a label fills the minimum the header row did not print."""
        text = (
            "Payment Due Date Total Dues Minimum Amount Due\n"
            "04/04/2024 83,794.00\n"
            "\n\n"
            "Minimum Amount Due: 4,190.00\n"
        )
        record = HDFCStrategy().extract(text)

        assert record.total_balance == _money("83794.00")
        assert record.minimum_due == _money("4190.00")


    def test_cycle_from_to_without_label(self):
        """Test 'From ... To ...' anywhere in the text."""
        cycle = HDFCStrategy()._find_billing_cycle("From 01/02/2024 until To 29/02/2024")
        assert cycle == (_date(2024, 2, 1), _date(2024, 2, 29))

    def test_cycle_from_to_wide_window(self):
        """Test the widened window when the dates are far apart."""
        text = "From 01/02/2024 " + "-" * 100 + " To 29/02/2024"
        diagnostics = ExtractionDiagnostics()
        record = HDFCStrategy().extract(text, diagnostics)

        assert record.billing_cycle_start == _date(2024, 2, 1)
        assert diagnostics.tiers["billing_cycle"] == "cycle_from_to_wide"

    def test_choose_total_prefers_summary_context(self):
        """Test a 'Total Dues' near 'Payment Due Date' beats a larger one."""
        strategy = HDFCStrategy()
        text = "Total Dues 99,999.00" + " " * 200 + "Payment Due Date 01/01/2024 Total Dues 12,345.00"

        chosen = strategy._choose_total(strategy._total_candidates(text), text)

        assert chosen.value == _money("12345.00")

    def test_choose_total_falls_back_to_largest(self):
        """Test the largest amount wins without summary context."""
        strategy = HDFCStrategy()
        text = "Total Dues 500.00\nTotal Dues 1,200.00\n"

        chosen = strategy._choose_total(strategy._total_candidates(text), text)

        assert chosen.value == _money("1200.00")

    def test_choose_minimum_nearest_to_total(self):
        """Test the minimum closest to the chosen total wins."""
        strategy = HDFCStrategy()
        total = Candidate("5,000.00", 500, _money("5000.00"))
        candidates = [
            Candidate("10.00", 10, _money("10.00")),
            Candidate("250.00", 540, _money("250.00")),
        ]

        assert strategy._choose_minimum(candidates, total, "").value == _money("250.00")

    def test_choose_minimum_falls_back_to_smallest(self):
        """Test the smallest amount wins without total or context."""
        strategy = HDFCStrategy()
        text = "Minimum Amount Due 900.00\nMinimum Amount Due 150.00\n"

        chosen = strategy._choose_minimum(strategy._minimum_candidates(text), None, text)

        assert chosen.value == _money("150.00")

    def test_losing_candidates_are_recorded(self):
        """Test rejected candidates appear in diagnostics."""
        text = "HDFC Bank\nTotal Dues 500.00\nTotal Dues 1,200.00\n"
        diagnostics = ExtractionDiagnostics()
        record = HDFCStrategy().extract(text, diagnostics)

        assert record.total_balance == _money("1200.00")
        assert [(r.field, r.raw) for r in diagnostics.rejected] == [("total_balance", "500.00")]


class TestAxisStrategy:
    """Test suite for Axis tiers."""

    def test_summary_amounts_on_range_line(self):
        """Test amounts printed on the same line as the date range."""
        text = "Axis Bank\nPAYMENT SUMMARY\n01/01/2024 - 31/01/2024 20/02/2024 5,000.00 250.00\n"
        record = AxisStrategy().extract(text)

        assert record.billing_cycle_start == _date(2024, 1, 1)
        assert record.billing_cycle_end == _date(2024, 1, 31)
        assert record.payment_due_date == _date(2024, 2, 20)
        assert record.total_balance == _money("5000.00")
        assert record.minimum_due == _money("250.00")

    def test_labelled_fallbacks(self):
        """Test label rules when there is no summary layout."""
        text = (
            "Axis Bank\n"
            "Total Payment Due: Rs. 3,000.00 Dr\n"
            "Minimum Payment Due: 150.00\n"
            "Payment Due Date: 05/05/2024\n"
        )
        record = AxisStrategy().extract(text)

        assert record.total_balance == _money("3000.00", is_debit=True)
        assert record.minimum_due == _money("150.00")
        assert record.payment_due_date == _date(2024, 5, 5)

    def test_first_line_name(self):
        """Test an all-caps addressee on the first line."""
        assert AxisStrategy()._find_name("RAVI KUMAR\nAxis Bank Statement") == "RAVI KUMAR"

    def test_first_line_bank_heading_is_not_a_name(self):
        """Test the bank heading is never taken as the holder."""
        assert AxisStrategy()._find_name("AXIS BANK LTD\nStatement") is None

    def test_hdfc_mention_changes_variant(self):
        """Test co-branded statements mentioning HDFC keep the HDFC label."""
        assert (
            AxisStrategy().extract("Axis Bank\nPay using HDFC netbanking").card_variant
            == "HDFC Bank Credit Card"
        )


class TestKotakStrategy:
    """Test suite for Kotak tiers."""

    def test_statement_period_outside_block(self, kotak_statement):
        """Test the period printed before the payment block is still found."""
        diagnostics = ExtractionDiagnostics()
        KotakStrategy().extract(kotak_statement, diagnostics)

        assert diagnostics.tiers["billing_cycle"] == "cycle_statement_period"
        assert diagnostics.tiers["card_last4"] == "card_block_label"

    def test_loose_due_date(self):
        """Test 'Payment Due' without 'Date' outside the block."""
        record = KotakStrategy().extract("Kotak\nPayment Due: 01.05.2024\n")
        assert record.payment_due_date == _date(2024, 5, 1)

    def test_masked_card_shape(self):
        """Test card number without a label."""
        assert KotakStrategy().extract("Kotak 4567********1234").card_last4 == "1234"
