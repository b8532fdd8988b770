"""
Bank catalogue API endpoints.
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from pydantic import BaseModel
from typing import Optional, List
from sqlalchemy.orm import Session

from cliquealo.calculations.comparison import compare_banks
from cliquealo.db.database import get_db
from cliquealo.db.models import Bank
from cliquealo.services.credits import bank_to_offer

router = APIRouter()


class BankCreate(BaseModel):
    """Schema for creating a bank."""

    nombre: str
    tasa: Optional[float] = None
    cat: Optional[float] = None
    comision: Optional[float] = None
    logo: Optional[str] = None
    activo: bool = True


class BankUpdate(BaseModel):
    """Schema for updating a bank."""

    nombre: Optional[str] = None
    tasa: Optional[float] = None
    cat: Optional[float] = None
    comision: Optional[float] = None
    logo: Optional[str] = None
    activo: Optional[bool] = None


class BankResponse(BaseModel):
    id: int
    nombre: str
    tasa: Optional[float]
    cat: Optional[float]
    comision: Optional[float]
    logo: Optional[str]
    activo: bool

    class Config:
        from_attributes = True


class BankListResponse(BaseModel):
    banks: List[BankResponse]
    total: int


class BankQuoteResponse(BaseModel):
    bank: BankResponse
    monthly_payment: float
    total_paid: float
    total_interest: float
    opening_commission: float


def validate_bank_values(tasa, cat, comision):
    for field, value in (("tasa", tasa), ("cat", cat), ("comision", comision)):
        if value is not None and value < 0:
            raise HTTPException(
                status_code=400, detail=f"El campo '{field}' no puede ser negativo"
            )


def get_bank_or_404(db: Session, bank_id: int) -> Bank:
    bank = db.query(Bank).filter(Bank.id == bank_id).first()
    if not bank:
        raise HTTPException(status_code=404, detail="Banco no encontrado")
    return bank


@router.get("/", response_model=BankListResponse)
async def list_banks(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
):
    """List banks ordered by interest rate."""
    query = db.query(Bank)
    if not include_inactive:
        query = query.filter(Bank.activo == True)

    banks = query.order_by(Bank.tasa).all()
    return BankListResponse(
        banks=[BankResponse.model_validate(b) for b in banks],
        total=len(banks),
    )


@router.get("/compare", response_model=List[BankQuoteResponse])
async def compare_bank_offers(
    amount: float = Query(..., gt=0),
    term_months: int = Query(..., ge=1),
    order_by: str = "rate",
    db: Session = Depends(get_db),
):
    """Quote the same credit with every active bank."""
    banks = (
        db.query(Bank)
        .filter(Bank.activo == True, Bank.tasa.isnot(None))
        .all()
    )
    by_name = {bank.nombre: bank for bank in banks}

    quotes = compare_banks(
        [bank_to_offer(bank) for bank in banks], amount, term_months, order_by
    )

    return [
        BankQuoteResponse(
            bank=BankResponse.model_validate(by_name[q.offer.name]),
            monthly_payment=q.monthly_payment,
            total_paid=q.total_paid,
            total_interest=q.total_interest,
            opening_commission=q.opening_commission,
        )
        for q in quotes
    ]


@router.post("/", response_model=BankResponse, status_code=201)
async def create_bank(bank_data: BankCreate, db: Session = Depends(get_db)):
    """Create a bank."""
    validate_bank_values(bank_data.tasa, bank_data.cat, bank_data.comision)

    if db.query(Bank).filter(Bank.nombre == bank_data.nombre).first():
        raise HTTPException(status_code=409, detail="El banco ya existe")

    bank = Bank(**bank_data.model_dump())
    db.add(bank)
    db.commit()
    db.refresh(bank)
    return BankResponse.model_validate(bank)


@router.get("/{bank_id}", response_model=BankResponse)
async def get_bank(bank_id: int, db: Session = Depends(get_db)):
    """Get a bank by ID."""
    return BankResponse.model_validate(get_bank_or_404(db, bank_id))


@router.put("/{bank_id}", response_model=BankResponse)
async def update_bank(
    bank_id: int, bank_data: BankUpdate, db: Session = Depends(get_db)
):
    """Update a bank."""
    bank = get_bank_or_404(db, bank_id)
    validate_bank_values(bank_data.tasa, bank_data.cat, bank_data.comision)

    for field, value in bank_data.model_dump(exclude_unset=True).items():
        setattr(bank, field, value)

    db.commit()
    db.refresh(bank)
    return BankResponse.model_validate(bank)


@router.delete("/{bank_id}")
async def delete_bank(bank_id: int, db: Session = Depends(get_db)):
    """Deactivate a bank. Banks referenced by credits are never removed."""
    bank = get_bank_or_404(db, bank_id)
    bank.activo = False
    db.commit()
    return {"deleted": True}
