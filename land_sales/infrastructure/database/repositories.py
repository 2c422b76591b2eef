"""Data access layer for sales and payment schedules"""

import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
from land_sales.infrastructure.database.models import Sale, Payment
from land_sales.domain.exceptions import PaymentAlreadyPaidError
from land_sales.domain.models import PaymentRecord, PaymentStatus, SaleFinancials, SaleStatus, ScheduleEntry


def to_payment_record(payment: Payment) -> PaymentRecord:
    """Convert an ORM row into the domain value used by payoff calculations"""
    return PaymentRecord(
        payment_number=payment.payment_number,
        due_date=payment.due_date,
        amount_due=payment.amount_due,
        principal=payment.principal,
        interest=payment.interest,
        status=payment.status,
        paid_amount=payment.paid_amount,
        paid_date=payment.paid_date,
    )


def _settle(payment: Payment, paid_date: date, paid_amount: Optional[Decimal] = None) -> None:
    payment.status = PaymentStatus.PAID.value
    payment.paid_amount = payment.amount_due if paid_amount is None else paid_amount
    payment.paid_date = paid_date


class SaleRepository:
    """Repository for sales"""

    def __init__(self, db: Session):
        self.db = db

    def create_sale(
        self,
        property_id: str,
        buyer_id: str,
        sale_date: date,
        sale_price: Decimal,
        down_payment: Decimal,
        interest_rate: Decimal,
        term_months: int,
        financials: SaleFinancials,
        schedule: List[ScheduleEntry],
    ) -> Sale:
        """Persist a sale and one pending payment per schedule entry (caller commits)"""
        db_sale = Sale(
            property_id=property_id,
            buyer_id=buyer_id,
            sale_date=sale_date,
            sale_price=sale_price,
            down_payment=down_payment,
            interest_rate=interest_rate,
            term_months=term_months,
            finance_amount=financials.finance_amount,
            monthly_payment=financials.monthly_payment,
            total_payment=financials.total_payment,
            status=SaleStatus.ACTIVE.value,
        )
        self.db.add(db_sale)
        self.db.flush()  # Get ID without committing

        for entry in schedule:
            record = PaymentRecord.from_entry(entry)
            db_sale.payments.append(
                Payment(
                    sale_id=db_sale.id,
                    payment_number=record.payment_number,
                    due_date=record.due_date,
                    amount_due=record.amount_due,
                    principal=record.principal,
                    interest=record.interest,
                    status=record.status.value,
                )
            )
        self.db.flush()

        return db_sale

    def get_sale(self, sale_id: uuid.UUID) -> Optional[Sale]:
        """Fetch sale with its payments"""
        return self.db.query(Sale).filter(Sale.id == sale_id).first()

    def list_sales(self, buyer_id: Optional[str] = None, limit: int = 50) -> List[Sale]:
        """Fetch recent sales, optionally for a single buyer"""
        query = self.db.query(Sale)
        if buyer_id is not None:
            query = query.filter(Sale.buyer_id == buyer_id)
        return query.order_by(Sale.created_at.desc(), Sale.sale_date.desc()).limit(limit).all()

    def mark_paid_off(self, sale: Sale, paid_date: date) -> int:
        """Settle every unpaid installment at its amount due and close the sale"""
        settled = 0
        for payment in sale.payments:
            if payment.status != PaymentStatus.PAID.value:
                _settle(payment, paid_date)
                settled += 1

        sale.status = SaleStatus.PAID_OFF.value
        self.db.flush()
        return settled


class PaymentRepository:
    """Repository for scheduled payments"""

    def __init__(self, db: Session):
        self.db = db

    def get_payment(self, payment_id: uuid.UUID) -> Optional[Payment]:
        return self.db.query(Payment).filter(Payment.id == payment_id).first()

    def mark_paid(
        self,
        payment: Payment,
        paid_date: date,
        paid_amount: Optional[Decimal] = None,
    ) -> Payment:
        """
        Record a payment against one installment.

        paid_amount defaults to the amount due. When this settles the last
        unpaid installment with an amount owed, the sale is marked paid off;
        $0.00 installments left by a sub-cent payment never hold it open.

        Raises:
            PaymentAlreadyPaidError: If the installment was already paid
        """
        if payment.status == PaymentStatus.PAID.value:
            raise PaymentAlreadyPaidError(f"Payment {payment.id} is already paid")

        _settle(payment, paid_date, paid_amount)

        sale = payment.sale
        if all(p.status == PaymentStatus.PAID.value or p.amount_due == 0 for p in sale.payments):
            sale.status = SaleStatus.PAID_OFF.value

        self.db.flush()
        return payment

    def mark_overdue(self, as_of: date) -> int:
        """
        Promote pending installments due before `as_of` to late; returns rows updated

        $0.00 installments owe nothing and are never marked late.
        """
        return (
            self.db.query(Payment)
            .filter(
                Payment.status == PaymentStatus.PENDING.value,
                Payment.due_date < as_of,
                Payment.amount_due > 0,
            )
            .update({Payment.status: PaymentStatus.LATE.value}, synchronize_session="fetch")
        )
