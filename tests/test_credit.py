"""
Tests for credit business rules, bank comparison and credit rating.
"""

import pytest

from cliquealo.calculations.comparison import (
    BankOffer,
    compare_banks,
    quote_bank,
    rate_credit,
)
from cliquealo.calculations.credit import (
    CreditStatus,
    can_transition,
    compute_down_payment,
    transition,
    validate_term,
)
from cliquealo.calculations.errors import InvalidArgument, InvalidStatusTransition
from cliquealo.calculations.payment import compute_monthly_payment


OFFERS = [
    BankOffer("Scotiabank", 14.2, 18.3, 1.5),
    BankOffer("BBVA", 12.5, 16.2, 2.0),
    BankOffer("Santander", 13.8, 17.5, 2.2),
]


class TestDownPayment:
    """Test the down payment split."""

    def test_split(self):
        split = compute_down_payment(500000, 20)
        assert split.down_payment_amount == pytest.approx(100000)
        assert split.financed_amount == pytest.approx(400000)
        assert split.total_value == 500000

    def test_bounds_inclusive(self):
        assert compute_down_payment(100000, 10).financed_amount == pytest.approx(90000)
        assert compute_down_payment(100000, 60).financed_amount == pytest.approx(40000)

    @pytest.mark.parametrize("percent", [5, 9.99, 60.01, 100])
    def test_out_of_bounds_rejected(self, percent):
        with pytest.raises(InvalidArgument):
            compute_down_payment(100000, percent)

    def test_custom_bounds(self):
        split = compute_down_payment(100000, 0, min_percent=0, max_percent=100)
        assert split.financed_amount == 100000

    def test_non_positive_value_rejected(self):
        with pytest.raises(InvalidArgument):
            compute_down_payment(0, 20)


class TestTerms:
    """Test allowed credit terms."""

    @pytest.mark.parametrize("term", [12, 24, 36, 48, 60])
    def test_allowed_terms(self, term):
        validate_term(term)

    @pytest.mark.parametrize("term", [0, 6, 18, 72])
    def test_other_terms_rejected(self, term):
        with pytest.raises(InvalidArgument, match="12, 24, 36, 48 o 60 meses"):
            validate_term(term)

    def test_custom_terms(self):
        validate_term(72, allowed_terms=[36, 48, 60, 72])
        with pytest.raises(InvalidArgument):
            validate_term(12, allowed_terms=[36, 48, 60, 72])


class TestStatusTransitions:
    """Test the credit status life cycle."""

    @pytest.mark.parametrize(
        "current, new",
        [
            (CreditStatus.simulation, CreditStatus.requested),
            (CreditStatus.requested, CreditStatus.in_review),
            (CreditStatus.in_review, CreditStatus.approved),
            (CreditStatus.in_review, CreditStatus.rejected),
            (CreditStatus.approved, CreditStatus.finished),
            (CreditStatus.rejected, CreditStatus.requested),
            (CreditStatus.cancelled, CreditStatus.requested),
        ],
    )
    def test_valid_transitions(self, current, new):
        assert can_transition(current, new)
        assert transition(current, new) == new

    @pytest.mark.parametrize(
        "current, new",
        [
            (CreditStatus.simulation, CreditStatus.approved),
            (CreditStatus.requested, CreditStatus.finished),
            (CreditStatus.finished, CreditStatus.cancelled),
            (CreditStatus.cancelled, CreditStatus.approved),
        ],
    )
    def test_invalid_transitions(self, current, new):
        assert not can_transition(current, new)
        with pytest.raises(InvalidStatusTransition):
            transition(current, new)

    def test_any_open_credit_can_be_cancelled(self):
        for status in (
            CreditStatus.simulation,
            CreditStatus.requested,
            CreditStatus.in_review,
            CreditStatus.approved,
            CreditStatus.rejected,
        ):
            assert can_transition(status, CreditStatus.cancelled)

    def test_status_values(self):
        assert CreditStatus("En revisión") == CreditStatus.in_review


class TestBankComparison:
    """Test quoting a credit across banks."""

    def test_quote(self):
        quote = quote_bank(OFFERS[1], 240000, 24)
        payment = compute_monthly_payment(240000, 12.5, 24)
        assert quote.monthly_payment == pytest.approx(payment)
        assert quote.total_paid == pytest.approx(payment * 24)
        assert quote.total_interest == pytest.approx(payment * 24 - 240000)
        assert quote.opening_commission == pytest.approx(4800)

    def test_ordered_by_rate(self):
        quotes = compare_banks(OFFERS, 240000, 24)
        assert [q.offer.name for q in quotes] == ["BBVA", "Santander", "Scotiabank"]

    def test_ordered_by_commission(self):
        quotes = compare_banks(OFFERS, 240000, 24, order_by="commission")
        assert [q.offer.name for q in quotes] == ["Scotiabank", "BBVA", "Santander"]

    def test_lower_rate_means_lower_payment(self):
        quotes = compare_banks(OFFERS, 240000, 24, order_by="monthly_payment")
        assert quotes[0].offer.name == "BBVA"
        assert quotes[0].monthly_payment < quotes[-1].monthly_payment

    def test_unknown_order_rejected(self):
        with pytest.raises(InvalidArgument):
            compare_banks(OFFERS, 240000, 24, order_by="logo")

    def test_invalid_amount_rejected(self):
        with pytest.raises(InvalidArgument):
            compare_banks(OFFERS, 0, 24)


class TestCreditRating:
    """Test the credit cost rating."""

    def test_rating(self):
        rating = rate_credit(
            total_interest=10000,
            opening_commission=2000,
            financed_amount=100000,
            annual_rate_percent=12.5,
            cat_percent=16.2,
            term_months=36,
        )
        assert rating.total_cost == 12000
        assert rating.cost_percentage == pytest.approx(12)
        assert rating.cost_rating == "Bueno"
        assert rating.cat_vs_rate_diff == pytest.approx(3.7)
        assert rating.rate_rating == "Regular"
        assert rating.term_rating == "Bueno"
        assert rating.cost_score == pytest.approx(76)
        assert rating.rate_score == pytest.approx(63)
        assert rating.term_score == pytest.approx(40)
        assert rating.overall_score == pytest.approx(64.9)
        assert rating.overall_rating == "Regular"

    def test_expensive_long_credit(self):
        rating = rate_credit(
            total_interest=45000,
            opening_commission=2000,
            financed_amount=100000,
            annual_rate_percent=14,
            cat_percent=24,
            term_months=72,
        )
        assert rating.cost_rating == "Muy alto"
        assert rating.rate_rating == "Muy alto"
        assert rating.term_rating == "Muy alto"
        assert rating.cost_score == pytest.approx(6)
        assert rating.rate_score == 0
        assert rating.term_score == 0
        assert rating.overall_rating == "Muy alto"

    def test_invalid_financed_amount(self):
        with pytest.raises(InvalidArgument):
            rate_credit(0, 0, 0, 10, 12, 12)
