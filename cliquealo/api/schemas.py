"""
Shared API schemas for schedules and summaries.
"""

from dataclasses import asdict
from datetime import date
from typing import List, Sequence

from pydantic import BaseModel, Field

from cliquealo.calculations.amortization import PaymentRecord, ScheduleSummary


class LoanTermsInput(BaseModel):
    """Loan parameters. Only the start date has a default."""

    principal: float
    annual_rate_percent: float
    term_months: int
    start_date: date = Field(default_factory=date.today)


class PaymentRecordResponse(BaseModel):
    period_number: int
    due_date: date
    total_payment: float
    interest_portion: float
    principal_portion: float
    remaining_balance: float


class ScheduleSummaryResponse(BaseModel):
    principal: float
    term_months: int
    annual_rate_percent: float
    monthly_payment: float
    total_paid: float
    total_principal_paid: float
    total_interest_paid: float
    financing_cost: float


class ScheduleResponse(BaseModel):
    """Amortization schedule with its totals."""

    summary: ScheduleSummaryResponse
    schedule: List[PaymentRecordResponse]


class AmortizationRowResponse(BaseModel):
    """Stored amortization table row."""

    numero_pago: int
    fecha_pago: date
    pago_total: float
    pago_capital: float
    pago_interes: float
    saldo_insoluto: float

    class Config:
        from_attributes = True


def schedule_to_response(
    schedule: Sequence[PaymentRecord], summary: ScheduleSummary
) -> ScheduleResponse:
    return ScheduleResponse(
        summary=ScheduleSummaryResponse(**asdict(summary)),
        schedule=[PaymentRecordResponse(**asdict(row)) for row in schedule],
    )
