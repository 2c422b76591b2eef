"""Sale endpoints - financing preview, creation, detail and payoff"""

import time
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from land_sales.api.v1.schemas import (
    FinancialsResponse,
    PaidOffResponse,
    PaymentSchema,
    PayoffResponse,
    SaleCreateRequest,
    SaleListResponse,
    SaleResponse,
    SaleSummary,
    SaleTermsRequest,
)
from land_sales.api.dependencies import get_request_id, get_today, parse_uuid
from land_sales.config import settings
from land_sales.infrastructure.database.session import get_db
from land_sales.infrastructure.database.models import Payment, Sale
from land_sales.infrastructure.database.repositories import SaleRepository, to_payment_record
from land_sales.domain.amortization import schedule_for
from land_sales.domain.exceptions import ValidationError
from land_sales.domain.financials import calculate_sale_details, finance_amount, payoff_amount, total_interest
from land_sales.domain.models import LoanTerms
from land_sales.domain.money import ZERO, round2
from land_sales.infrastructure.observability.metrics import record_payments, record_sale
from land_sales.infrastructure.observability.logging import log_sale_created

router = APIRouter()


def payment_schema(payment: Payment) -> PaymentSchema:
    return PaymentSchema(
        payment_id=str(payment.id),
        payment_number=payment.payment_number,
        due_date=payment.due_date,
        amount_due=payment.amount_due,
        principal=payment.principal,
        interest=payment.interest,
        status=payment.status,
        paid_amount=payment.paid_amount,
        paid_date=payment.paid_date,
    )


def _summary_fields(sale: Sale) -> dict:
    return dict(
        sale_id=str(sale.id),
        property_id=sale.property_id,
        buyer_id=sale.buyer_id,
        sale_date=sale.sale_date,
        sale_price=sale.sale_price,
        finance_amount=sale.finance_amount,
        monthly_payment=sale.monthly_payment,
        term_months=sale.term_months,
        status=sale.status,
    )


def _sale_response(sale: Sale) -> SaleResponse:
    records = [to_payment_record(p) for p in sale.payments]
    paid = [r for r in records if r.is_paid]

    return SaleResponse(
        **_summary_fields(sale),
        down_payment=sale.down_payment,
        interest_rate=sale.interest_rate,
        total_payment=sale.total_payment,
        payoff_amount=payoff_amount(records),
        paid_count=len(paid),
        total_paid=round2(sum((r.paid_amount or ZERO for r in paid), ZERO)),
        payments=[payment_schema(p) for p in sale.payments],
        created_at=sale.created_at.isoformat(),
    )


def _load_sale(db: Session, sale_id: str) -> Sale:
    sale = SaleRepository(db).get_sale(parse_uuid(sale_id, "sale"))
    if not sale:
        raise HTTPException(status_code=404, detail="Sale not found")
    return sale


def _term(requested: Optional[int]) -> int:
    return settings.default_term_months if requested is None else requested


@router.post("/sales/preview", response_model=FinancialsResponse)
def preview_sale(request_body: SaleTermsRequest):
    """
    Preview the financing of a proposed sale without saving anything.

    Submitting the sale recomputes these values from the submitted terms.
    """
    details = calculate_sale_details(
        request_body.sale_price,
        request_body.down_payment,
        request_body.interest_rate,
        _term(request_body.term_months),
    )

    return FinancialsResponse(
        finance_amount=details.finance_amount,
        monthly_payment=details.monthly_payment,
        total_payment=details.total_payment,
        total_interest=round2(total_interest(details.total_payment, request_body.sale_price)),
    )


@router.post("/sales", response_model=SaleResponse, status_code=201)
def create_sale(
    request_body: SaleCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Create a financed sale.

    Flow:
    1. Recompute the financing snapshot from the submitted terms
    2. Generate the amortization schedule starting at the sale date
    3. Persist sale + one pending payment per installment in one transaction
    """
    start_time = time.time()
    request_id = get_request_id(request)
    term_months = _term(request_body.term_months)

    try:
        terms = LoanTerms(
            principal=finance_amount(request_body.sale_price, request_body.down_payment),
            annual_rate_percent=request_body.interest_rate,
            term_months=term_months,
            start_date=request_body.sale_date,
        )
        financials = calculate_sale_details(
            request_body.sale_price,
            request_body.down_payment,
            terms.annual_rate_percent,
            terms.term_months,
        )
        schedule = schedule_for(terms)

        db_sale = SaleRepository(db).create_sale(
            property_id=request_body.property_id,
            buyer_id=request_body.buyer_id,
            sale_date=request_body.sale_date,
            sale_price=round2(request_body.sale_price),
            down_payment=round2(request_body.down_payment),
            interest_rate=round2(terms.annual_rate_percent),
            term_months=terms.term_months,
            financials=financials,
            schedule=schedule,
        )
        db.commit()

    except ValidationError as e:
        db.rollback()
        logging.warning(f"Invalid sale terms: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error creating sale: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_sale(financials.finance_amount)
    log_sale_created(
        request_id,
        str(db_sale.id),
        request_body.buyer_id,
        financials.finance_amount,
        terms.term_months,
        duration_ms,
    )

    return _sale_response(db_sale)


@router.get("/sales", response_model=SaleListResponse)
def list_sales(
    buyer_id: Optional[str] = Query(None, description="Only sales to this buyer"),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
):
    sales = SaleRepository(db).list_sales(buyer_id=buyer_id, limit=limit)
    return SaleListResponse(sales=[SaleSummary(**_summary_fields(s)) for s in sales])


@router.get("/sales/{sale_id}", response_model=SaleResponse)
def get_sale(sale_id: str, db: Session = Depends(get_db)):
    """Sale with its full payment schedule, payoff and amounts paid so far"""
    return _sale_response(_load_sale(db, sale_id))


@router.get("/sales/{sale_id}/payoff", response_model=PayoffResponse)
def get_payoff(sale_id: str, db: Session = Depends(get_db)):
    """Remaining scheduled principal, retired only by installments marked paid"""
    sale = _load_sale(db, sale_id)
    records = [to_payment_record(p) for p in sale.payments]
    paid_count = sum(1 for r in records if r.is_paid)

    return PayoffResponse(
        sale_id=str(sale.id),
        payoff_amount=payoff_amount(records),
        paid_count=paid_count,
        remaining_count=len(records) - paid_count,
    )


@router.post("/sales/{sale_id}/payoff", response_model=PaidOffResponse)
def pay_off_sale(
    sale_id: str,
    request: Request,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """Settle every unpaid installment at its amount due and mark the sale paid off"""
    request_id = get_request_id(request)
    sale = _load_sale(db, sale_id)

    try:
        settled = SaleRepository(db).mark_paid_off(sale, paid_date=today)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error paying off sale: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_payments("payoff", settled)
    logging.info(
        "Sale paid off",
        extra={"request_id": request_id, "sale_id": str(sale.id), "payments_settled": settled},
    )

    return PaidOffResponse(sale_id=str(sale.id), status=sale.status, payments_settled=settled)
