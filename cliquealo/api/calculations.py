"""
Credit calculation API endpoints.

These endpoints accept loan parameters and return calculated results
without touching the database.
"""

from dataclasses import asdict

from fastapi import APIRouter
from pydantic import BaseModel

from cliquealo.api.schemas import LoanTermsInput, ScheduleResponse, schedule_to_response
from cliquealo.calculations.amortization import LoanTerms, build_schedule_report
from cliquealo.calculations.comparison import rate_credit
from cliquealo.calculations.payment import (
    compute_monthly_payment,
    compute_opening_commission,
)
from cliquealo.config import get_settings

router = APIRouter()


class PaymentInput(BaseModel):
    """Input for monthly payment calculation."""

    principal: float
    annual_rate_percent: float
    term_months: int


class PaymentResponse(BaseModel):
    monthly_payment: float
    total_paid: float
    total_interest: float


@router.post("/payment", response_model=PaymentResponse)
async def calculate_payment_endpoint(inputs: PaymentInput):
    """Calculate the fixed monthly payment of a credit."""
    payment = compute_monthly_payment(
        inputs.principal, inputs.annual_rate_percent, inputs.term_months
    )
    total_paid = payment * inputs.term_months

    return PaymentResponse(
        monthly_payment=payment,
        total_paid=total_paid,
        total_interest=total_paid - inputs.principal,
    )


@router.post("/amortization", response_model=ScheduleResponse)
async def calculate_amortization(inputs: LoanTermsInput):
    """Generate a credit amortization schedule."""
    terms = LoanTerms(
        principal=inputs.principal,
        annual_rate_percent=inputs.annual_rate_percent,
        term_months=inputs.term_months,
        start_date=inputs.start_date,
    )
    schedule, summary = build_schedule_report(
        terms, tolerance=get_settings().final_payment_tolerance
    )
    return schedule_to_response(schedule, summary)


class RatingInput(BaseModel):
    """Input for credit rating."""

    financed_amount: float
    annual_rate_percent: float
    cat_percent: float
    term_months: int
    commission_percent: float = 0.0


class RatingResponse(BaseModel):
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


@router.post("/rating", response_model=RatingResponse)
async def calculate_rating(inputs: RatingInput):
    """Rate how expensive a credit is."""
    payment = compute_monthly_payment(
        inputs.financed_amount, inputs.annual_rate_percent, inputs.term_months
    )
    rating = rate_credit(
        total_interest=payment * inputs.term_months - inputs.financed_amount,
        opening_commission=compute_opening_commission(
            inputs.financed_amount, inputs.commission_percent
        ),
        financed_amount=inputs.financed_amount,
        annual_rate_percent=inputs.annual_rate_percent,
        cat_percent=inputs.cat_percent,
        term_months=inputs.term_months,
    )
    return RatingResponse(**asdict(rating))
