"""
Credit service.

Connects the calculation engine with persistence: simulates credits,
stores them together with their amortization table and drives status changes.
"""

import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from cliquealo.calculations.amortization import (
    LoanTerms,
    PaymentRecord,
    ScheduleSummary,
    build_schedule_report,
)
from cliquealo.calculations.comparison import BankOffer
from cliquealo.calculations.credit import (
    CreditStatus,
    compute_down_payment,
    transition,
    validate_term,
)
from cliquealo.calculations.errors import InvalidArgument
from cliquealo.calculations.payment import (
    compute_opening_commission,
    compute_total_to_pay,
)
from cliquealo.config import get_settings
from cliquealo.db.models import AmortizationDetail, Bank, Credit, payment_record_to_row

logger = logging.getLogger(__name__)


def bank_to_offer(bank: Bank) -> BankOffer:
    """Convert a Bank row to the engine's offer type."""
    return BankOffer(
        name=bank.nombre,
        annual_rate_percent=bank.tasa or 0.0,
        cat_percent=bank.cat or 0.0,
        commission_percent=bank.comision or 0.0,
    )


def require_active_bank(bank: Bank) -> None:
    """Deactivated banks keep their credits but cannot take new ones."""
    if not bank.activo:
        raise InvalidArgument(f"El banco {bank.nombre} no está activo")


def resolve_rate(annual_rate_percent: Optional[float], bank: Optional[Bank]) -> float:
    """
    Pick the rate for a credit: an explicit rate wins over the bank's rate.

    Raises:
        InvalidArgument: Neither an explicit rate nor a bank rate is available
    """
    if annual_rate_percent is not None:
        return annual_rate_percent
    if bank is not None and bank.tasa is not None:
        require_active_bank(bank)
        return bank.tasa
    raise InvalidArgument("Se requiere una tasa anual o un banco válido")


def simulate_credit(
    amount: float,
    term_months: int,
    annual_rate_percent: Optional[float] = None,
    bank: Optional[Bank] = None,
    start_date: Optional[date] = None,
) -> Tuple[LoanTerms, Tuple[PaymentRecord, ...], ScheduleSummary]:
    """
    Simulate a credit without storing it.

    Args:
        amount: Amount to finance
        term_months: Credit term in months
        annual_rate_percent: Explicit annual rate; falls back to the bank's rate
        bank: Bank whose rate applies when no explicit rate is given
        start_date: Disbursement date, defaults to today

    Returns:
        Tuple of (loan terms, schedule, summary)
    """
    terms = LoanTerms(
        principal=amount,
        annual_rate_percent=resolve_rate(annual_rate_percent, bank),
        term_months=term_months,
        start_date=start_date or date.today(),
    )
    schedule, summary = build_schedule_report(
        terms, tolerance=get_settings().final_payment_tolerance
    )
    return terms, schedule, summary


def _replace_schedule(db: Session, credit: Credit) -> List[AmortizationDetail]:
    """Regenerate the credit's amortization rows and its calculated amounts."""
    terms = LoanTerms(
        principal=credit.monto_financiado,
        annual_rate_percent=credit.tasa_anual,
        term_months=credit.plazo_meses,
        start_date=credit.fecha_inicio,
    )
    schedule, summary = build_schedule_report(
        terms, tolerance=get_settings().final_payment_tolerance
    )

    commission_percent = credit.banco.comision if credit.banco else 0.0
    credit.pago_mensual = summary.monthly_payment
    credit.comision_apertura = compute_opening_commission(
        credit.monto_financiado, commission_percent or 0.0
    )
    credit.monto_total_pagar = compute_total_to_pay(
        summary.monthly_payment,
        credit.plazo_meses,
        credit.monto_financiado,
        credit.comision_apertura,
    )

    db.query(AmortizationDetail).filter(
        AmortizationDetail.credito_id == credit.id
    ).delete(synchronize_session=False)
    db.expire(credit, ["detalles"])

    rows = [payment_record_to_row(record, credit.id) for record in schedule]
    db.add_all(rows)
    return rows


def create_credit(
    db: Session,
    *,
    bank: Bank,
    cliente_id: int,
    monto_total: float,
    porcentaje_enganche: float,
    plazo_meses: int,
    vehiculo_id: Optional[int] = None,
    tasa_anual: Optional[float] = None,
    cat_personalizado: Optional[float] = None,
    fecha_inicio: Optional[date] = None,
) -> Credit:
    """
    Create a credit and its amortization table in a single transaction.

    Raises:
        InvalidArgument: Term, down payment or rate outside business rules
    """
    require_active_bank(bank)
    settings = get_settings()

    validate_term(plazo_meses, settings.allowed_terms)
    split = compute_down_payment(
        monto_total,
        porcentaje_enganche,
        min_percent=settings.min_down_payment_percent,
        max_percent=settings.max_down_payment_percent,
    )
    rate = resolve_rate(tasa_anual, bank)

    credit = Credit(
        cliente_id=cliente_id,
        vehiculo_id=vehiculo_id,
        banco=bank,
        monto_total=split.total_value,
        porcentaje_enganche=split.down_payment_percent,
        monto_enganche=split.down_payment_amount,
        monto_financiado=split.financed_amount,
        plazo_meses=plazo_meses,
        tasa_anual=rate,
        cat_personalizado=cat_personalizado,
        fecha_inicio=fecha_inicio or date.today(),
        estatus=CreditStatus.simulation,
    )

    try:
        db.add(credit)
        db.flush()
        _replace_schedule(db, credit)
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"Error creating credit for client {cliente_id}", exc_info=True)
        raise

    db.refresh(credit)
    logger.info(
        f"Credit {credit.id} created: {credit.monto_financiado:,.2f} "
        f"at {credit.tasa_anual}% over {credit.plazo_meses} months"
    )
    return credit


def regenerate_schedule(db: Session, credit: Credit) -> Credit:
    """Rebuild a stored credit's amortization table after its terms changed."""
    try:
        _replace_schedule(db, credit)
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"Error regenerating schedule for credit {credit.id}", exc_info=True)
        raise

    db.refresh(credit)
    logger.info(f"Schedule regenerated for credit {credit.id}")
    return credit


def update_credit_terms(
    db: Session,
    credit: Credit,
    *,
    plazo_meses: Optional[int] = None,
    porcentaje_enganche: Optional[float] = None,
    tasa_anual: Optional[float] = None,
    fecha_inicio: Optional[date] = None,
) -> Credit:
    """Change a credit's terms and rebuild its amortization table."""
    settings = get_settings()

    if plazo_meses is not None:
        validate_term(plazo_meses, settings.allowed_terms)
        credit.plazo_meses = plazo_meses
    if porcentaje_enganche is not None:
        split = compute_down_payment(
            credit.monto_total,
            porcentaje_enganche,
            min_percent=settings.min_down_payment_percent,
            max_percent=settings.max_down_payment_percent,
        )
        credit.porcentaje_enganche = split.down_payment_percent
        credit.monto_enganche = split.down_payment_amount
        credit.monto_financiado = split.financed_amount
    if tasa_anual is not None:
        credit.tasa_anual = tasa_anual
    if fecha_inicio is not None:
        credit.fecha_inicio = fecha_inicio

    return regenerate_schedule(db, credit)


def update_credit_status(db: Session, credit: Credit, new_status: CreditStatus) -> Credit:
    """
    Move a credit to a new status.

    Raises:
        InvalidStatusTransition: The change is not allowed
    """
    previous = credit.estatus
    credit.estatus = transition(previous, new_status)
    db.commit()
    db.refresh(credit)

    logger.info(
        f"Credit {credit.id} status changed: {previous.value} -> {new_status.value}"
    )
    return credit


def get_amortization_table(db: Session, credit_id: int) -> List[AmortizationDetail]:
    """Stored amortization rows of a credit, ordered by payment number."""
    return (
        db.query(AmortizationDetail)
        .filter(AmortizationDetail.credito_id == credit_id)
        .order_by(AmortizationDetail.numero_pago)
        .all()
    )
