"""
Credit Terms

Business rules of a dealership car credit: down payment split, allowed
terms and the credit status life cycle.
"""

import enum
from typing import Dict, FrozenSet, Iterable
from dataclasses import dataclass

from cliquealo.calculations.errors import InvalidArgument, InvalidStatusTransition

DEFAULT_ALLOWED_TERMS = (12, 24, 36, 48, 60)
DEFAULT_MIN_DOWN_PAYMENT_PERCENT = 10.0
DEFAULT_MAX_DOWN_PAYMENT_PERCENT = 60.0


class CreditStatus(str, enum.Enum):
    """Credit life cycle status."""

    simulation = "Simulación"
    requested = "Solicitado"
    in_review = "En revisión"
    approved = "Aprobado"
    rejected = "Rechazado"
    cancelled = "Cancelado"
    finished = "Finalizado"


STATUS_TRANSITIONS: Dict[CreditStatus, FrozenSet[CreditStatus]] = {
    CreditStatus.simulation: frozenset(
        {CreditStatus.requested, CreditStatus.cancelled}
    ),
    CreditStatus.requested: frozenset(
        {CreditStatus.in_review, CreditStatus.cancelled}
    ),
    CreditStatus.in_review: frozenset(
        {CreditStatus.approved, CreditStatus.rejected, CreditStatus.cancelled}
    ),
    CreditStatus.approved: frozenset(
        {CreditStatus.finished, CreditStatus.cancelled}
    ),
    CreditStatus.rejected: frozenset(
        {CreditStatus.requested, CreditStatus.cancelled}
    ),
    CreditStatus.cancelled: frozenset({CreditStatus.requested}),
    CreditStatus.finished: frozenset(),
}


@dataclass(frozen=True)
class DownPaymentSplit:
    """How the vehicle value is split between down payment and financing."""

    total_value: float
    down_payment_percent: float
    down_payment_amount: float
    financed_amount: float


def compute_down_payment(
    total_value: float,
    down_payment_percent: float,
    min_percent: float = DEFAULT_MIN_DOWN_PAYMENT_PERCENT,
    max_percent: float = DEFAULT_MAX_DOWN_PAYMENT_PERCENT,
) -> DownPaymentSplit:
    """
    Split the value of the financed vehicles into down payment and credit.

    Args:
        total_value: Combined value of the vehicles
        down_payment_percent: Down payment as a percentage (e.g., 20 for 20%)
        min_percent: Lowest down payment the dealership accepts
        max_percent: Highest down payment the dealership accepts

    Returns:
        DownPaymentSplit with the amount left to finance

    Raises:
        InvalidArgument: Non-positive value or percentage out of bounds
    """
    if total_value <= 0:
        raise InvalidArgument("El monto total debe ser mayor a 0")
    if not min_percent <= down_payment_percent <= max_percent:
        raise InvalidArgument(
            f"El porcentaje de enganche debe estar entre "
            f"{min_percent:g}% y {max_percent:g}%"
        )

    down_payment = total_value * down_payment_percent / 100

    return DownPaymentSplit(
        total_value=total_value,
        down_payment_percent=down_payment_percent,
        down_payment_amount=down_payment,
        financed_amount=total_value - down_payment,
    )


def validate_term(term_months: int, allowed_terms: Iterable[int] = DEFAULT_ALLOWED_TERMS) -> None:
    """Raise InvalidArgument unless the term is one the dealership offers."""
    allowed = sorted(allowed_terms)
    if term_months not in allowed:
        options = ", ".join(str(t) for t in allowed[:-1])
        raise InvalidArgument(
            f"El plazo debe ser {options} o {allowed[-1]} meses"
            if len(allowed) > 1
            else f"El plazo debe ser {allowed[0]} meses"
        )


def can_transition(current: CreditStatus, new: CreditStatus) -> bool:
    return new in STATUS_TRANSITIONS[current]


def transition(current: CreditStatus, new: CreditStatus) -> CreditStatus:
    """
    Validate a status change and return the new status.

    Raises:
        InvalidStatusTransition: The change is not allowed from ``current``
    """
    if not can_transition(current, new):
        raise InvalidStatusTransition(
            f"No se puede cambiar el estatus de '{current.value}' a '{new.value}'"
        )
    return new
