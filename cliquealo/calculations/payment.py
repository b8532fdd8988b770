"""
Loan Payment Calculations

Single source of the annuity formula used by credits, bank quotes and
amortization schedules.
"""

import math
import sys

from cliquealo.calculations.errors import InvalidArgument, NumericInstability


def monthly_rate_from_annual(annual_rate_percent: float) -> float:
    """Convert a nominal annual rate in percent (12.5 = 12.5%) to a monthly decimal rate."""
    return annual_rate_percent / 100 / 12


def validate_loan_parameters(
    principal: float, annual_rate_percent: float, term_months: int
) -> None:
    """
    Check loan parameters before any computation.

    Raises:
        InvalidArgument: principal <= 0, negative rate, or term below one month
    """
    if not isinstance(term_months, int) or isinstance(term_months, bool):
        raise InvalidArgument("El plazo debe ser un número entero positivo de meses")
    if term_months < 1:
        raise InvalidArgument("El plazo debe ser un número entero positivo de meses")
    if not math.isfinite(principal) or principal <= 0:
        raise InvalidArgument("El monto financiado debe ser mayor a 0")
    if not math.isfinite(annual_rate_percent) or annual_rate_percent < 0:
        raise InvalidArgument("La tasa de interés no puede ser negativa")


def compute_monthly_payment(
    principal: float, annual_rate_percent: float, term_months: int
) -> float:
    """
    Calculate the fixed monthly payment of a fully amortizing loan.

    A zero rate is paid off in straight-line installments.

    Args:
        principal: Amount financed (down payment excluded)
        annual_rate_percent: Nominal annual rate as a percentage (e.g., 12.5)
        term_months: Number of monthly payments

    Returns:
        Monthly payment, unrounded

    Raises:
        InvalidArgument: Parameters outside their valid domain
        NumericInstability: The payment is not a finite number
    """
    validate_loan_parameters(principal, annual_rate_percent, term_months)

    monthly_rate = monthly_rate_from_annual(annual_rate_percent)

    # Zero and subnormal rates repay in straight-line installments
    if monthly_rate < sys.float_info.min:
        return principal / term_months

    # (1 + r)^n - 1 without cancellation for tiny rates
    try:
        growth = math.expm1(term_months * math.log1p(monthly_rate))
    except OverflowError as e:
        raise NumericInstability(
            f"Payment factor overflows for rate {annual_rate_percent}% "
            f"over {term_months} months"
        ) from e

    if growth == 0:
        return principal / term_months

    payment = principal * (monthly_rate / growth) * (growth + 1)

    if not math.isfinite(payment) or payment <= 0:
        raise NumericInstability(
            f"Monthly payment is not finite for rate {annual_rate_percent}% "
            f"over {term_months} months"
        )

    return payment


def compute_opening_commission(
    financed_amount: float, commission_percent: float
) -> float:
    """Opening fee charged by the bank, as a share of the financed amount."""
    if commission_percent < 0:
        raise InvalidArgument("La comisión por apertura no puede ser negativa")
    return financed_amount * commission_percent / 100


def compute_total_to_pay(
    monthly_payment: float,
    term_months: int,
    financed_amount: float,
    opening_commission: float = 0.0,
) -> float:
    """
    Calculate the total amount the borrower pays over the life of the credit.

    Args:
        monthly_payment: Fixed monthly payment
        term_months: Number of monthly payments
        financed_amount: Amount financed
        opening_commission: Opening fee in currency units

    Returns:
        Financed amount plus total interest plus opening fee
    """
    total_interest = monthly_payment * term_months - financed_amount
    return financed_amount + total_interest + opening_commission
