"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import List, Optional


class SaleTermsRequest(BaseModel):
    """Request body for POST /v1/sales/preview"""

    sale_price: Decimal = Field(..., ge=0, description="Agreed sale price")
    down_payment: Decimal = Field(Decimal("0"), ge=0, description="Cash paid at closing")
    interest_rate: Decimal = Field(..., ge=0, description="Annual rate in percent, 9.9 for 9.9%")
    term_months: Optional[int] = Field(None, ge=0, le=600, description="Number of monthly installments, up to 50 years")


class SaleCreateRequest(SaleTermsRequest):
    """Request body for POST /v1/sales"""

    property_id: str = Field(..., min_length=1, description="Parcel identifier")
    buyer_id: str = Field(..., min_length=1, description="Buyer identifier")
    sale_date: date


class ScheduleRequest(BaseModel):
    """Request body for POST /v1/schedule"""

    finance_amount: Decimal = Field(..., ge=0)
    interest_rate: Decimal = Field(..., ge=0)
    term_months: int = Field(..., ge=0, le=600)
    start_date: date


class FinancialsResponse(BaseModel):
    """Response for POST /v1/sales/preview"""

    finance_amount: Decimal
    monthly_payment: Decimal
    total_payment: Decimal
    total_interest: Decimal


class ScheduleEntrySchema(BaseModel):
    """Single installment of a generated schedule"""

    payment_number: int
    due_date: date
    amount_due: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


class ScheduleResponse(BaseModel):
    """Response for POST /v1/schedule"""

    monthly_payment: Decimal
    total_principal: Decimal
    total_interest: Decimal
    entries: List[ScheduleEntrySchema]


class PaymentSchema(BaseModel):
    """Persisted installment with payment tracking"""

    payment_id: str
    payment_number: int
    due_date: date
    amount_due: Decimal
    principal: Decimal
    interest: Decimal
    status: str
    paid_amount: Optional[Decimal] = None
    paid_date: Optional[date] = None


class SaleSummary(BaseModel):
    """Sale row in GET /v1/sales"""

    sale_id: str
    property_id: str
    buyer_id: str
    sale_date: date
    sale_price: Decimal
    finance_amount: Decimal
    monthly_payment: Decimal
    term_months: int
    status: str


class SaleListResponse(BaseModel):
    """Response for GET /v1/sales"""

    sales: List[SaleSummary]


class SaleResponse(SaleSummary):
    """Response for GET /v1/sales/{sale_id} and POST /v1/sales"""

    down_payment: Decimal
    interest_rate: Decimal
    total_payment: Decimal
    payoff_amount: Decimal
    paid_count: int
    total_paid: Decimal
    payments: List[PaymentSchema]
    created_at: str


class PayoffResponse(BaseModel):
    """Response for GET /v1/sales/{sale_id}/payoff"""

    sale_id: str
    payoff_amount: Decimal
    paid_count: int
    remaining_count: int


class PaidOffResponse(BaseModel):
    """Response for POST /v1/sales/{sale_id}/payoff"""

    sale_id: str
    status: str
    payments_settled: int


class RecordPaymentRequest(BaseModel):
    """Request body for POST /v1/payments/{payment_id}/pay"""

    paid_amount: Optional[Decimal] = Field(None, ge=0, description="Defaults to the amount due")
    paid_date: Optional[date] = Field(None, description="Defaults to today")


class RecordPaymentResponse(BaseModel):
    """Response for POST /v1/payments/{payment_id}/pay"""

    payment: PaymentSchema
    sale_id: str
    sale_status: str


class OverdueRequest(BaseModel):
    """Request body for POST /v1/payments/mark-overdue"""

    as_of: Optional[date] = None


class OverdueResponse(BaseModel):
    """Response for POST /v1/payments/mark-overdue"""

    as_of: date
    cutoff: date
    marked_late: int
