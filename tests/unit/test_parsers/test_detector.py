"""Tests for provider detector."""

import pytest

from statement_extractor.parsers.detector import HDFC_GSTIN, ProviderDetector
from statement_extractor.schemas.internal import ProviderIdentity


class TestProviderDetector:
    """Test suite for ProviderDetector."""

    def test_supported_providers_in_precedence_order(self):
        """Test the rule list order is the precedence contract."""
        detector = ProviderDetector()
        assert detector.get_supported_providers() == [
            ProviderIdentity.HDFC,
            ProviderIdentity.AXIS,
            ProviderIdentity.SBI,
            ProviderIdentity.ICICI,
            ProviderIdentity.KOTAK,
        ]

    @pytest.mark.parametrize(
        "text",
        [
            "HDFC Bank Credit Card Statement",
            "Statement for HDFC Millennia",
            "hdfc credit cards division",
            f"GSTIN: {HDFC_GSTIN}",
            "HDFC ... GSTIN 27ABCDE1234F1Z5",
        ],
    )
    def test_detect_hdfc(self, text):
        """Test each HDFC signature."""
        assert ProviderDetector().detect(text) == ProviderIdentity.HDFC

    def test_detect_axis(self):
        """Test Axis Bank and Flipkart co-brand detection."""
        detector = ProviderDetector()
        assert detector.detect("Axis Bank Statement") == ProviderIdentity.AXIS
        assert detector.detect("Flipkart Credit Card") == ProviderIdentity.AXIS

    def test_detect_sbi(self):
        """Test SBI detection."""
        detector = ProviderDetector()
        assert detector.detect("State Bank of India") == ProviderIdentity.SBI
        assert detector.detect("SBI Card Statement") == ProviderIdentity.SBI

    def test_detect_icici(self):
        """Test ICICI detection."""
        assert ProviderDetector().detect("ICICI Bank Ltd") == ProviderIdentity.ICICI

    def test_detect_kotak(self):
        """Test Kotak detection."""
        assert ProviderDetector().detect("Kotak Mahindra Bank") == ProviderIdentity.KOTAK

    def test_hdfc_wins_over_axis(self):
        """Test text with both HDFC and AXIS BANK tokens is HDFC."""
        text = "AXIS BANK\nPayments to HDFC Bank Credit Card account"
        assert ProviderDetector().detect(text) == ProviderIdentity.HDFC

    def test_axis_wins_over_sbi(self):
        """Test earlier rules win when several providers match."""
        assert ProviderDetector().detect("Axis Bank transfer to SBI") == ProviderIdentity.AXIS

    def test_case_insensitive(self):
        """Test detection ignores case."""
        assert ProviderDetector().detect("kotak mahindra bank") == ProviderIdentity.KOTAK

    @pytest.mark.parametrize("text", [None, "", "Random Bank Statement"])
    def test_detect_unknown(self, text):
        """Test empty and unrecognised text."""
        assert ProviderDetector().detect(text) == ProviderIdentity.UNKNOWN

    def test_bare_hdfc_mention_is_not_hdfc(self):
        """Test a lone HDFC token without a second signal is not enough."""
        assert ProviderDetector().detect("Paid via HDFC netbanking") == ProviderIdentity.UNKNOWN

    def test_custom_rules(self):
        """Test detector with an injected rule list."""
        detector = ProviderDetector(rules=[(lambda text: "ACME" in text, ProviderIdentity.ICICI)])

        assert detector.detect("acme card") == ProviderIdentity.ICICI
        assert detector.detect("HDFC Bank") == ProviderIdentity.UNKNOWN
        assert detector.get_supported_providers() == [ProviderIdentity.ICICI]


class TestWatchlist:
    """Test suite for the diagnostic watch-list scan."""

    def test_found_in_watchlist_order(self):
        """Test names are reported in watch-list order."""
        text = "Bank of America and Citi and Chase"
        assert ProviderDetector().found_watchlist_banks(text) == ["CHASE", "CITI", "BANK OF AMERICA"]

    def test_american_express_alias(self):
        """Test the long form maps to the AMEX name."""
        assert ProviderDetector().found_watchlist_banks("American Express") == ["AMEX"]

    def test_nothing_found(self):
        """Test texts without watch-listed names."""
        detector = ProviderDetector()
        assert detector.found_watchlist_banks("Some Bank") == []
        assert detector.found_watchlist_banks(None) == []
