"""POST /v1/schedule - Amortization schedule preview"""

import logging
from fastapi import APIRouter, HTTPException, Request

from land_sales.api.v1.schemas import ScheduleEntrySchema, ScheduleRequest, ScheduleResponse
from land_sales.api.dependencies import get_request_id
from land_sales.domain.amortization import monthly_payment, schedule_for
from land_sales.domain.exceptions import ValidationError
from land_sales.domain.models import LoanTerms
from land_sales.domain.money import round2

router = APIRouter()


@router.post("/schedule", response_model=ScheduleResponse)
def preview_schedule(request_body: ScheduleRequest, request: Request):
    """
    Generate the full amortization schedule for raw loan terms.

    Returns:
        Fixed monthly payment and one entry per installment; no entries
        when nothing is financed
    """
    try:
        terms = LoanTerms(
            principal=request_body.finance_amount,
            annual_rate_percent=request_body.interest_rate,
            term_months=request_body.term_months,
            start_date=request_body.start_date,
        )
    except ValidationError as e:
        logging.warning(f"Invalid loan terms: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    schedule = schedule_for(terms)

    return ScheduleResponse(
        monthly_payment=round2(monthly_payment(terms.principal, terms.annual_rate_percent, terms.term_months)),
        total_principal=sum((e.principal for e in schedule), round2(0)),
        total_interest=sum((e.interest for e in schedule), round2(0)),
        entries=[
            ScheduleEntrySchema(
                payment_number=e.payment_number,
                due_date=e.due_date,
                amount_due=e.amount_due,
                principal=e.principal,
                interest=e.interest,
                balance=e.balance,
            )
            for e in schedule
        ],
    )
