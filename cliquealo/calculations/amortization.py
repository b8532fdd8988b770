"""
Loan Amortization Calculations

Generates the monthly amortization schedule of a fixed-rate credit and
aggregates it into a summary for reporting.
"""

from typing import List, Optional, Sequence, Tuple
from datetime import date
from dataclasses import dataclass
from dateutil.relativedelta import relativedelta

from cliquealo.calculations.errors import InvalidArgument
from cliquealo.calculations.payment import (
    compute_monthly_payment,
    monthly_rate_from_annual,
    validate_loan_parameters,
)

# Final-period drift absorbed into the last principal payment, in currency units
DEFAULT_FINAL_PAYMENT_TOLERANCE = 1.0


@dataclass(frozen=True)
class LoanTerms:
    """Parameters of a simulated credit."""

    principal: float  # Amount financed, down payment excluded
    annual_rate_percent: float  # 12.5 means 12.5%
    term_months: int
    start_date: date  # Disbursement date; first payment is due one month later

    def validate(self) -> None:
        validate_loan_parameters(
            self.principal, self.annual_rate_percent, self.term_months
        )


@dataclass(frozen=True)
class PaymentRecord:
    """One period of an amortization schedule."""

    period_number: int  # 1-based
    due_date: date
    total_payment: float
    interest_portion: float
    principal_portion: float
    remaining_balance: float  # Balance after this period's principal payment


@dataclass(frozen=True)
class ScheduleSummary:
    """Totals of an amortization schedule."""

    principal: float
    term_months: int
    annual_rate_percent: float
    monthly_payment: float
    total_paid: float
    total_principal_paid: float
    total_interest_paid: float
    financing_cost: float


def add_months(start: date, months: int) -> date:
    """
    Add calendar months to a date.

    Days past the end of the target month are clamped to its last day,
    so January 31 plus one month is February 28 (29 in leap years).
    """
    return start + relativedelta(months=months)


def generate_schedule(
    terms: LoanTerms,
    tolerance: float = DEFAULT_FINAL_PAYMENT_TOLERANCE,
) -> Tuple[PaymentRecord, ...]:
    """
    Generate the full amortization schedule for a credit.

    Every period pays the same amount. On the last period, if the principal
    portion is within ``tolerance`` of the outstanding balance, it is set to
    the balance so the credit closes at exactly zero.

    Args:
        terms: Loan parameters
        tolerance: Final-period correction threshold in currency units

    Returns:
        Payment records ordered by period number, one per month of the term

    Raises:
        InvalidArgument: Invalid loan parameters (raised before any record is built)
        NumericInstability: The monthly payment is not finite
    """
    monthly_payment = compute_monthly_payment(
        terms.principal, terms.annual_rate_percent, terms.term_months
    )
    monthly_rate = monthly_rate_from_annual(terms.annual_rate_percent)

    try:
        add_months(terms.start_date, terms.term_months)
    except (ValueError, OverflowError) as e:
        raise InvalidArgument(
            "La fecha del último pago está fuera del calendario soportado"
        ) from e

    schedule: List[PaymentRecord] = []
    balance = terms.principal

    for period in range(1, terms.term_months + 1):
        interest = balance * monthly_rate
        principal_pmt = monthly_payment - interest

        if period == terms.term_months and abs(principal_pmt - balance) < tolerance:
            principal_pmt = balance

        balance = max(0.0, balance - principal_pmt)

        schedule.append(
            PaymentRecord(
                period_number=period,
                due_date=add_months(terms.start_date, period),
                total_payment=monthly_payment,
                interest_portion=interest,
                principal_portion=principal_pmt,
                remaining_balance=balance,
            )
        )

    return tuple(schedule)


def summarize(schedule: Sequence[PaymentRecord], terms: LoanTerms) -> ScheduleSummary:
    """Aggregate a schedule into totals. An empty schedule yields zero totals."""
    total_paid = sum(row.total_payment for row in schedule)
    total_principal = sum(row.principal_portion for row in schedule)
    total_interest = sum(row.interest_portion for row in schedule)

    return ScheduleSummary(
        principal=terms.principal,
        term_months=terms.term_months,
        annual_rate_percent=terms.annual_rate_percent,
        monthly_payment=schedule[0].total_payment if schedule else 0.0,
        total_paid=total_paid,
        total_principal_paid=total_principal,
        total_interest_paid=total_interest,
        financing_cost=total_paid - terms.principal,
    )


def build_schedule_report(
    terms: LoanTerms,
    tolerance: Optional[float] = None,
) -> Tuple[Tuple[PaymentRecord, ...], ScheduleSummary]:
    """Generate a schedule and its summary in one call."""
    if tolerance is None:
        tolerance = DEFAULT_FINAL_PAYMENT_TOLERANCE
    schedule = generate_schedule(terms, tolerance=tolerance)
    return schedule, summarize(schedule, terms)
