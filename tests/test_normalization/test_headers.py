"""Tests for header resolution."""

from dispute_delta.normalization.headers import (
    BOOKING_ALIASES,
    CAPTURE_ALIASES,
    LEDGER_ALIASES,
    HeaderMapper,
    match_exact,
    match_normalized,
    match_substring,
    normalize_header,
)


def _sample(*headers: str) -> dict:
    return {header: "" for header in headers}


class TestTiers:
    def test_normalize_header(self):
        assert normalize_header(" Amount (Inc. Surcharge) ") == "amountincsurcharge"

    def test_exact_is_case_insensitive(self):
        assert match_exact(" Case Ref ", "case ref")
        assert not match_exact("CaseRef", "case ref")

    def test_normalized_ignores_punctuation(self):
        assert match_normalized("Amount (Inc. Surcharge)", "Amount(Inc. Surcharge)")

    def test_substring(self):
        assert match_substring("Total Transaction Amount GBP", "transaction amount")
        assert not match_substring("Amount", "transaction amount")

    def test_empty_alias_never_matches(self):
        assert not match_normalized("", "--")
        assert not match_substring("anything", "  ")


class TestHeaderMapper:
    def setup_method(self):
        self.mapper = HeaderMapper()

    def test_ledger_headers(self):
        sample = _sample(
            "Cycle", "Merchant Name", "Reply By", "Case Ref", "Reason Code",
            "Reason Category", "Transaction Date", "Transaction Amount",
            "Post Date", "Dispute Amount", "Card Number",
        )
        mapping = self.mapper.resolve(sample, LEDGER_ALIASES)
        assert mapping.columns == {
            "cycle": "Cycle",
            "merchant": "Merchant Name",
            "due_date": "Reply By",
            "case_reference": "Case Ref",
            "reason_code": "Reason Code",
            "reason_category": "Reason Category",
            "transaction_date": "Transaction Date",
            "transaction_amount": "Transaction Amount",
            "post_date": "Post Date",
            "dispute_amount": "Dispute Amount",
            "card_last4": "Card Number",
        }
        assert mapping.missing() == []

    def test_exact_tier_beats_normalized_on_earlier_alias(self):
        # "Amount" is the last capture alias but matches exactly; the first
        # alias only matches after normalization.
        sample = _sample("AMOUNT ( INC SURCHARGE )", "Amount")
        mapping = self.mapper.resolve(sample, CAPTURE_ALIASES)
        assert mapping.get("amount") == "Amount"

    def test_normalized_tier(self):
        sample = _sample("AMOUNT ( INC SURCHARGE )", "Last 4 Digits")
        mapping = self.mapper.resolve(sample, CAPTURE_ALIASES)
        assert mapping.get("amount") == "AMOUNT ( INC SURCHARGE )"
        assert mapping.get("last4") == "Last 4 Digits"

    def test_alias_order_decides_within_tier(self):
        sample = _sample("Amount", "Amount(Inc. Surcharge)")
        mapping = self.mapper.resolve(sample, CAPTURE_ALIASES)
        assert mapping.get("amount") == "Amount(Inc. Surcharge)"

    def test_substring_fallback(self):
        sample = _sample("Total Transaction Amount GBP", "Case Ref")
        mapping = self.mapper.resolve(sample, LEDGER_ALIASES)
        assert mapping.get("transaction_amount") == "Total Transaction Amount GBP"

    def test_substring_can_pick_a_neighbouring_column(self):
        # Known hazard of the last-resort tier.
        sample = _sample("Case Ref", "Dispute Amount")
        mapping = self.mapper.resolve(sample, LEDGER_ALIASES)
        assert mapping.get("transaction_amount") == "Dispute Amount"

    def test_unresolved_field(self):
        sample = _sample("Case Ref", "Merchant")
        mapping = self.mapper.resolve(sample, LEDGER_ALIASES)
        assert mapping.get("card_last4") is None
        assert "card_last4" in mapping.missing()
        assert mapping.missing(["case_reference", "merchant"]) == []

    def test_booking_reference_variants(self):
        for header in ("Inet Ref", "InetRef", "INET-REF", "Ref No"):
            mapping = self.mapper.resolve(_sample(header), BOOKING_ALIASES)
            assert mapping.get("reference") == header

    def test_empty_sample(self):
        mapping = self.mapper.resolve({}, CAPTURE_ALIASES)
        assert mapping.missing() == list(CAPTURE_ALIASES)

    def test_custom_tiers(self):
        mapper = HeaderMapper(tiers=(match_exact,))
        mapping = mapper.resolve(_sample("Amount (Inc Surcharge)"), CAPTURE_ALIASES)
        assert mapping.get("amount") is None
