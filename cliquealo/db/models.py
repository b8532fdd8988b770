"""
SQLAlchemy ORM models for the credit simulator.
"""

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Float,
    Integer,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Enum as SQLEnum,
)
from sqlalchemy.orm import declarative_base, relationship

from cliquealo.calculations.amortization import PaymentRecord
from cliquealo.calculations.credit import CreditStatus

Base = declarative_base()


class Bank(Base):
    """Bank offering car credits."""

    __tablename__ = "bancos"

    id = Column("banco_id", Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(50), nullable=False, unique=True)
    tasa = Column(Float)  # Annual rate, 12.50 = 12.5%
    cat = Column(Float)  # Costo Anual Total, 16.20 = 16.2%
    comision = Column(Float)  # Opening commission, 2.00 = 2%
    logo = Column(String(255))
    activo = Column(Boolean, default=True, nullable=False)

    creditos = relationship("Credit", back_populates="banco", lazy="dynamic")


class Credit(Base):
    """A simulated or requested car credit."""

    __tablename__ = "creditos"

    id = Column("credito_id", Integer, primary_key=True, autoincrement=True)

    # Client and vehicle records are owned by other services
    cliente_id = Column(Integer, nullable=False, index=True)
    vehiculo_id = Column(Integer, nullable=True)
    banco_id = Column(Integer, ForeignKey("bancos.banco_id"), nullable=False)

    # Amounts
    monto_total = Column(Float)
    porcentaje_enganche = Column(Float)
    monto_enganche = Column(Float)
    monto_financiado = Column(Float, nullable=False)

    # Terms
    plazo_meses = Column(Integer, nullable=False)
    tasa_anual = Column(Float)
    cat_personalizado = Column(Float)
    fecha_inicio = Column(Date, nullable=False)

    # Calculated
    pago_mensual = Column(Float)
    comision_apertura = Column(Float, default=0)
    monto_total_pagar = Column(Float)

    estatus = Column(
        SQLEnum(CreditStatus, values_callable=lambda e: [m.value for m in e]),
        default=CreditStatus.simulation,
        nullable=False,
    )

    fecha_creacion = Column(DateTime, default=datetime.utcnow, nullable=False)
    fecha_actualizacion = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    banco = relationship("Bank", back_populates="creditos")
    detalles = relationship(
        "AmortizationDetail",
        back_populates="credito",
        cascade="all, delete-orphan",
        order_by="AmortizationDetail.numero_pago",
    )


class AmortizationDetail(Base):
    """One row of a credit's amortization table."""

    __tablename__ = "amortizacion_detalle"

    id = Column(Integer, primary_key=True, autoincrement=True)
    credito_id = Column(
        Integer, ForeignKey("creditos.credito_id"), nullable=False, index=True
    )
    numero_pago = Column(Integer, nullable=False)
    fecha_pago = Column(Date, nullable=False)
    pago_total = Column(Float, nullable=False)
    pago_capital = Column(Float, nullable=False)
    pago_interes = Column(Float, nullable=False)
    saldo_insoluto = Column(Float, nullable=False)
    fecha_creacion = Column(DateTime, default=datetime.utcnow, nullable=False)

    credito = relationship("Credit", back_populates="detalles")


def payment_record_to_row(record: PaymentRecord, credito_id: int) -> AmortizationDetail:
    """Map a generated payment record to its amortization table row."""
    return AmortizationDetail(
        credito_id=credito_id,
        numero_pago=record.period_number,
        fecha_pago=record.due_date,
        pago_total=record.total_payment,
        pago_capital=record.principal_portion,
        pago_interes=record.interest_portion,
        saldo_insoluto=record.remaining_balance,
    )
