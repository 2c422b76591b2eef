"""Payment endpoints - record installments and sweep overdue ones"""

import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from land_sales.api.v1.schemas import OverdueRequest, OverdueResponse, RecordPaymentRequest, RecordPaymentResponse
from land_sales.api.v1.sales import payment_schema
from land_sales.api.dependencies import get_request_id, get_today, parse_uuid
from land_sales.config import settings
from land_sales.infrastructure.database.session import get_db
from land_sales.infrastructure.database.repositories import PaymentRepository
from land_sales.domain.exceptions import PaymentAlreadyPaidError
from land_sales.domain.models import SaleStatus
from land_sales.domain.money import round2
from land_sales.utils.date_utils import days_ago
from land_sales.infrastructure.observability.metrics import payments_marked_late_counter, record_payments
from land_sales.infrastructure.observability.logging import log_payment_recorded

router = APIRouter()


@router.post("/payments/mark-overdue", response_model=OverdueResponse)
def mark_overdue(
    request: Request,
    request_body: Optional[OverdueRequest] = Body(None),
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """
    Promote pending installments past their due date to late.

    A payment is late once its due date is more than `overdue_grace_days`
    before `as_of` (today unless given).
    """
    request_id = get_request_id(request)
    as_of = request_body.as_of if request_body and request_body.as_of else today
    cutoff = days_ago(as_of, settings.overdue_grace_days)

    try:
        marked = PaymentRepository(db).mark_overdue(cutoff)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error marking overdue payments: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    payments_marked_late_counter.inc(marked)
    logging.info("Overdue sweep completed", extra={"request_id": request_id, "as_of": as_of.isoformat(), "marked_late": marked})

    return OverdueResponse(as_of=as_of, cutoff=cutoff, marked_late=marked)


@router.post("/payments/{payment_id}/pay", response_model=RecordPaymentResponse)
def record_payment(
    payment_id: str,
    request: Request,
    request_body: Optional[RecordPaymentRequest] = Body(None),
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """
    Mark an installment paid.

    Paid amount defaults to the amount due and paid date to today. Paying the
    last unpaid installment closes the sale as paid off.
    """
    request_id = get_request_id(request)
    repo = PaymentRepository(db)
    payment = repo.get_payment(parse_uuid(payment_id, "payment"))
    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")

    body = request_body or RecordPaymentRequest()
    paid_amount = round2(body.paid_amount) if body.paid_amount is not None else None

    try:
        repo.mark_paid(payment, paid_date=body.paid_date or today, paid_amount=paid_amount)
        db.commit()
    except PaymentAlreadyPaidError as e:
        db.rollback()
        logging.warning(f"Duplicate payment: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error recording payment: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    sale = payment.sale
    record_payments("manual")
    log_payment_recorded(
        request_id,
        str(payment.id),
        str(sale.id),
        payment.paid_amount,
        sale.status == SaleStatus.PAID_OFF.value,
    )

    return RecordPaymentResponse(
        payment=payment_schema(payment),
        sale_id=str(sale.id),
        sale_status=sale.status,
    )
