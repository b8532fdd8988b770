"""
Credit management API endpoints.
"""

from datetime import date, datetime
from typing import Optional, List

from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from cliquealo.api.banks import get_bank_or_404
from cliquealo.api.schemas import (
    AmortizationRowResponse,
    ScheduleResponse,
    schedule_to_response,
)
from cliquealo.calculations.credit import CreditStatus
from cliquealo.db.database import get_db
from cliquealo.db.models import Credit
from cliquealo.services import credits as credit_service

router = APIRouter()


class SimulationInput(BaseModel):
    """Credit simulation request. Either a rate or a bank is required."""

    monto_financiado: float
    plazo_meses: int
    tasa_anual: Optional[float] = None
    banco_id: Optional[int] = None
    fecha_inicio: Optional[date] = None


class SimulationResponse(BaseModel):
    monto_financiado: float
    plazo_meses: int
    tasa_anual: float
    amortizacion: ScheduleResponse


class CreditCreate(BaseModel):
    """Schema for creating a credit."""

    cliente_id: int
    banco_id: int
    vehiculo_id: Optional[int] = None
    monto_total: float
    porcentaje_enganche: float
    plazo_meses: int
    tasa_anual: Optional[float] = None
    cat_personalizado: Optional[float] = None
    fecha_inicio: Optional[date] = None


class CreditTermsUpdate(BaseModel):
    """Schema for changing a credit's terms."""

    plazo_meses: Optional[int] = None
    porcentaje_enganche: Optional[float] = None
    tasa_anual: Optional[float] = None
    fecha_inicio: Optional[date] = None


class StatusUpdate(BaseModel):
    estatus: CreditStatus


class CreditResponse(BaseModel):
    """Schema for credit response."""

    id: int
    cliente_id: int
    vehiculo_id: Optional[int]
    banco_id: int
    monto_total: Optional[float]
    porcentaje_enganche: Optional[float]
    monto_enganche: Optional[float]
    monto_financiado: float
    plazo_meses: int
    tasa_anual: float
    cat_personalizado: Optional[float]
    fecha_inicio: date
    pago_mensual: float
    comision_apertura: float
    monto_total_pagar: float
    estatus: CreditStatus
    fecha_creacion: datetime
    fecha_actualizacion: datetime

    class Config:
        from_attributes = True


class CreditListResponse(BaseModel):
    credits: List[CreditResponse]
    total: int


def get_credit_or_404(db: Session, credit_id: int) -> Credit:
    credit = db.query(Credit).filter(Credit.id == credit_id).first()
    if not credit:
        raise HTTPException(status_code=404, detail="Crédito no encontrado")
    return credit


@router.post("/simulate", response_model=SimulationResponse)
async def simulate_credit(inputs: SimulationInput, db: Session = Depends(get_db)):
    """Simulate a credit without storing it."""
    bank = None
    if inputs.banco_id is not None and inputs.tasa_anual is None:
        bank = get_bank_or_404(db, inputs.banco_id)

    terms, schedule, summary = credit_service.simulate_credit(
        amount=inputs.monto_financiado,
        term_months=inputs.plazo_meses,
        annual_rate_percent=inputs.tasa_anual,
        bank=bank,
        start_date=inputs.fecha_inicio,
    )

    return SimulationResponse(
        monto_financiado=terms.principal,
        plazo_meses=terms.term_months,
        tasa_anual=terms.annual_rate_percent,
        amortizacion=schedule_to_response(schedule, summary),
    )


@router.get("/", response_model=CreditListResponse)
async def list_credits(
    skip: int = 0,
    limit: int = 100,
    cliente_id: Optional[int] = None,
    estatus: Optional[CreditStatus] = None,
    db: Session = Depends(get_db),
):
    """List credits with optional filtering."""
    query = db.query(Credit)

    if cliente_id is not None:
        query = query.filter(Credit.cliente_id == cliente_id)
    if estatus is not None:
        query = query.filter(Credit.estatus == estatus)

    total = query.count()
    credits = query.order_by(Credit.id).offset(skip).limit(limit).all()

    return CreditListResponse(
        credits=[CreditResponse.model_validate(c) for c in credits],
        total=total,
    )


@router.post("/", response_model=CreditResponse, status_code=201)
async def create_credit(credit_data: CreditCreate, db: Session = Depends(get_db)):
    """Create a credit and its amortization table."""
    bank = get_bank_or_404(db, credit_data.banco_id)

    credit = credit_service.create_credit(
        db,
        bank=bank,
        **credit_data.model_dump(exclude={"banco_id"}),
    )
    return CreditResponse.model_validate(credit)


@router.get("/{credit_id}", response_model=CreditResponse)
async def get_credit(credit_id: int, db: Session = Depends(get_db)):
    """Get a credit by ID."""
    return CreditResponse.model_validate(get_credit_or_404(db, credit_id))


@router.put("/{credit_id}", response_model=CreditResponse)
async def update_credit(
    credit_id: int, terms: CreditTermsUpdate, db: Session = Depends(get_db)
):
    """Change a credit's terms. The amortization table is regenerated."""
    credit = get_credit_or_404(db, credit_id)
    credit = credit_service.update_credit_terms(
        db, credit, **terms.model_dump(exclude_unset=True)
    )
    return CreditResponse.model_validate(credit)


@router.patch("/{credit_id}/status", response_model=CreditResponse)
async def update_status(
    credit_id: int, status_data: StatusUpdate, db: Session = Depends(get_db)
):
    """Move a credit to a new status."""
    credit = get_credit_or_404(db, credit_id)
    credit = credit_service.update_credit_status(db, credit, status_data.estatus)
    return CreditResponse.model_validate(credit)


@router.delete("/{credit_id}")
async def delete_credit(credit_id: int, db: Session = Depends(get_db)):
    """Delete a credit together with its amortization table."""
    credit = get_credit_or_404(db, credit_id)
    db.delete(credit)
    db.commit()
    return {"deleted": True}


@router.get("/{credit_id}/amortization", response_model=List[AmortizationRowResponse])
async def get_amortization(credit_id: int, db: Session = Depends(get_db)):
    """Get the stored amortization table of a credit."""
    get_credit_or_404(db, credit_id)
    rows = credit_service.get_amortization_table(db, credit_id)
    return [AmortizationRowResponse.model_validate(row) for row in rows]
