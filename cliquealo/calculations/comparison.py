"""
Bank Comparison and Credit Rating

Quotes the same credit across banks and rates how expensive a credit is.
"""

from typing import List, Sequence
from dataclasses import dataclass

from cliquealo.calculations.errors import InvalidArgument
from cliquealo.calculations.payment import (
    compute_monthly_payment,
    compute_opening_commission,
)


@dataclass(frozen=True)
class BankOffer:
    """Published conditions of a bank's car credit."""

    name: str
    annual_rate_percent: float
    cat_percent: float  # Costo Anual Total
    commission_percent: float  # Opening fee


@dataclass(frozen=True)
class BankQuote:
    """A credit quoted with one bank's conditions."""

    offer: BankOffer
    monthly_payment: float
    total_paid: float
    total_interest: float
    opening_commission: float


SORT_KEYS = {
    "rate": lambda q: q.offer.annual_rate_percent,
    "cat": lambda q: q.offer.cat_percent,
    "commission": lambda q: q.offer.commission_percent,
    "monthly_payment": lambda q: q.monthly_payment,
}


def quote_bank(offer: BankOffer, amount: float, term_months: int) -> BankQuote:
    payment = compute_monthly_payment(amount, offer.annual_rate_percent, term_months)
    total_paid = payment * term_months

    return BankQuote(
        offer=offer,
        monthly_payment=payment,
        total_paid=total_paid,
        total_interest=total_paid - amount,
        opening_commission=compute_opening_commission(amount, offer.commission_percent),
    )


def compare_banks(
    offers: Sequence[BankOffer],
    amount: float,
    term_months: int,
    order_by: str = "rate",
) -> List[BankQuote]:
    """
    Quote a credit with every bank, cheapest first.

    Args:
        offers: Bank conditions to compare
        amount: Amount to finance
        term_months: Credit term in months
        order_by: One of "rate", "cat", "commission" or "monthly_payment"

    Returns:
        Quotes sorted ascending by the chosen criterion
    """
    if order_by not in SORT_KEYS:
        raise InvalidArgument(
            f"Criterio de orden no válido: {order_by}. "
            f"Los valores válidos son: {', '.join(SORT_KEYS)}"
        )

    quotes = [quote_bank(offer, amount, term_months) for offer in offers]
    return sorted(quotes, key=SORT_KEYS[order_by])


# Rating labels, best to worst
RATING_LABELS = ("Bueno", "Regular", "Alto", "Muy alto")


@dataclass(frozen=True)
class CreditRating:
    """Qualitative and numeric evaluation of a credit's cost."""

    cost_rating: str
    rate_rating: str
    term_rating: str
    overall_rating: str
    cost_score: float
    rate_score: float
    term_score: float
    overall_score: float
    cost_percentage: float
    cat_vs_rate_diff: float
    total_cost: float


def _band(value: float, thresholds: Sequence[float]) -> str:
    """Label for the first threshold ``value`` does not exceed."""
    for label, limit in zip(RATING_LABELS, thresholds):
        if value <= limit:
            return label
    return RATING_LABELS[-1]


def _clamp_score(score: float) -> float:
    return max(0.0, min(100.0, score))


def rate_credit(
    total_interest: float,
    opening_commission: float,
    financed_amount: float,
    annual_rate_percent: float,
    cat_percent: float,
    term_months: int,
) -> CreditRating:
    """
    Rate a credit by cost, CAT spread over the nominal rate and term length.

    The overall score weighs cost 50%, rate spread 30% and term 20%.
    """
    if financed_amount <= 0:
        raise InvalidArgument("El monto financiado debe ser mayor a 0")

    total_cost = total_interest + opening_commission
    cost_percentage = total_cost / financed_amount * 100
    cat_vs_rate_diff = cat_percent - annual_rate_percent

    cost_score = _clamp_score(100 - cost_percentage * 2)
    rate_score = _clamp_score(100 - cat_vs_rate_diff * 10)
    term_score = _clamp_score(100 - term_months / 60 * 100)
    overall_score = cost_score * 0.5 + rate_score * 0.3 + term_score * 0.2

    if overall_score >= 75:
        overall_rating = RATING_LABELS[0]
    elif overall_score >= 50:
        overall_rating = RATING_LABELS[1]
    elif overall_score >= 25:
        overall_rating = RATING_LABELS[2]
    else:
        overall_rating = RATING_LABELS[3]

    return CreditRating(
        cost_rating=_band(cost_percentage, (15, 25, 35)),
        rate_rating=_band(cat_vs_rate_diff, (3, 5, 8)),
        term_rating=_band(term_months, (36, 48, 60)),
        overall_rating=overall_rating,
        cost_score=cost_score,
        rate_score=rate_score,
        term_score=term_score,
        overall_score=overall_score,
        cost_percentage=cost_percentage,
        cat_vs_rate_diff=cat_vs_rate_diff,
        total_cost=total_cost,
    )
