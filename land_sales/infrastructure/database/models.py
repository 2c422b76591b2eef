"""SQLAlchemy ORM models for sales and their payment schedules"""

import uuid
from sqlalchemy import Column, String, Date, DateTime, Integer, Numeric, ForeignKey, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

from land_sales.domain.models import PaymentStatus, SaleStatus

Base = declarative_base()


class Sale(Base):
    """Seller-financed land sale with its financing snapshot"""

    __tablename__ = "sales"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    property_id = Column(Text, nullable=False, index=True)
    buyer_id = Column(Text, nullable=False, index=True)
    sale_date = Column(Date, nullable=False)
    sale_price = Column(Numeric(12, 2), nullable=False)
    down_payment = Column(Numeric(12, 2), nullable=False, default=0)
    interest_rate = Column(Numeric(5, 2), nullable=False)
    term_months = Column(Integer, nullable=False)
    # Snapshot values computed once at creation
    finance_amount = Column(Numeric(12, 2), nullable=False)
    monthly_payment = Column(Numeric(12, 2), nullable=False)
    total_payment = Column(Numeric(12, 2), nullable=False)
    status = Column(String(16), nullable=False, default=SaleStatus.ACTIVE.value, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    payments = relationship(
        "Payment",
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="Payment.payment_number",
    )


class Payment(Base):
    """Scheduled installment plus payment tracking"""

    __tablename__ = "payments"
    __table_args__ = (UniqueConstraint("sale_id", "payment_number", name="uq_payments_sale_number"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    sale_id = Column(Uuid(as_uuid=True), ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    payment_number = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    amount_due = Column(Numeric(12, 2), nullable=False)
    principal = Column(Numeric(12, 2), nullable=False)
    interest = Column(Numeric(12, 2), nullable=False)
    paid_amount = Column(Numeric(12, 2), nullable=True)
    paid_date = Column(Date, nullable=True)
    status = Column(String(16), nullable=False, default=PaymentStatus.PENDING.value, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    sale = relationship("Sale", back_populates="payments")
