"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from land_sales.domain.exceptions import ValidationError
from land_sales.domain.money import Number, to_decimal


class PaymentStatus(str, Enum):
    """Lifecycle of a scheduled installment"""

    PENDING = "pending"
    PAID = "paid"
    LATE = "late"
    MISSED = "missed"


class SaleStatus(str, Enum):
    """Lifecycle of a financed sale"""

    ACTIVE = "active"
    PAID_OFF = "paid_off"
    DEFAULTED = "defaulted"


def non_negative_amount(name: str, value: Number) -> Decimal:
    """Parse a finite, non-negative decimal or raise ValidationError"""
    try:
        amount = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be numeric, got {value!r}") from e

    if not amount.is_finite():
        raise ValidationError(f"{name} must be finite, got {value!r}")
    if amount < 0:
        raise ValidationError(f"{name} must not be negative, got {value!r}")
    return amount


def term_in_months(value: int) -> int:
    """Validate a loan term: a whole, non-negative number of months"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"term_months must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"term_months must not be negative, got {value}")
    return value


@dataclass
class LoanTerms:
    """
    Inputs to the amortization engine.

    A zero principal or zero term is valid and means nothing is financed.
    """

    principal: Decimal
    annual_rate_percent: Decimal  # 9.9 means 9.9% per year
    term_months: int
    start_date: date

    def __post_init__(self) -> None:
        self.principal = non_negative_amount("principal", self.principal)
        self.annual_rate_percent = non_negative_amount("annual_rate_percent", self.annual_rate_percent)
        self.term_months = term_in_months(self.term_months)
        if not isinstance(self.start_date, date):
            raise ValidationError(f"start_date must be a date, got {self.start_date!r}")

    @property
    def is_financed(self) -> bool:
        return self.principal > 0 and self.term_months > 0


@dataclass(frozen=True)
class ScheduleEntry:
    """Single installment of an amortization schedule (1-indexed)"""

    payment_number: int
    due_date: date
    amount_due: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal  # Remaining principal after this installment

    def __post_init__(self) -> None:
        if self.payment_number < 1:
            raise ValidationError(f"payment_number starts at 1, got {self.payment_number}")
        if self.amount_due != self.principal + self.interest:
            raise ValidationError(
                f"amount_due {self.amount_due} != principal {self.principal} + interest {self.interest}"
            )


@dataclass
class PaymentRecord:
    """Persisted twin of a ScheduleEntry with payment tracking"""

    payment_number: int
    due_date: date
    amount_due: Decimal
    principal: Decimal
    interest: Decimal
    status: PaymentStatus = PaymentStatus.PENDING
    paid_amount: Optional[Decimal] = None
    paid_date: Optional[date] = None

    def __post_init__(self) -> None:
        try:
            self.status = PaymentStatus(self.status)
        except ValueError as e:
            raise ValidationError(f"Unknown payment status: {self.status!r}") from e

        self.amount_due = to_decimal(self.amount_due)
        self.principal = to_decimal(self.principal)
        self.interest = to_decimal(self.interest)
        if self.paid_amount is not None:
            self.paid_amount = non_negative_amount("paid_amount", self.paid_amount)

    @classmethod
    def from_entry(cls, entry: ScheduleEntry) -> "PaymentRecord":
        """New pending record for a freshly generated installment"""
        return cls(
            payment_number=entry.payment_number,
            due_date=entry.due_date,
            amount_due=entry.amount_due,
            principal=entry.principal,
            interest=entry.interest,
        )

    @property
    def is_paid(self) -> bool:
        return self.status == PaymentStatus.PAID


@dataclass(frozen=True)
class SaleFinancials:
    """Snapshot stored with a sale at creation time, never recomputed"""

    finance_amount: Decimal
    monthly_payment: Decimal
    total_payment: Decimal
