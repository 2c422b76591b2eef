"""Derived sale metrics - finance amount, totals, payoff"""

from decimal import Decimal
from typing import Iterable

from land_sales.domain.amortization import monthly_payment, monthly_rate
from land_sales.domain.models import PaymentRecord, PaymentStatus, SaleFinancials
from land_sales.domain.money import ZERO, Number, round2, to_decimal


def finance_amount(sale_price: Number, down_payment: Number) -> Decimal:
    """Amount loaned to the buyer; never negative"""
    return max(ZERO, to_decimal(sale_price) - to_decimal(down_payment))


def total_payment(monthly: Number, term_months: int, down_payment: Number) -> Decimal:
    """Everything the buyer pays over the life of the sale, down payment included"""
    return to_decimal(monthly) * term_months + to_decimal(down_payment)


def total_interest(total: Number, sale_price: Number) -> Decimal:
    return max(ZERO, to_decimal(total) - to_decimal(sale_price))


def discount_price(list_price: Number, discount_percent: Number) -> Decimal:
    """List price reduced by a percentage, e.g. the 50% and 20% parcel price tiers"""
    return to_decimal(list_price) * (1 - to_decimal(discount_percent) / 100)


def payoff_amount(payments: Iterable[PaymentRecord]) -> Decimal:
    """
    Remaining principal still owed on a sale.

    Only installments with status `paid` retire their scheduled principal.
    The actual paid_amount is ignored, so an over- or under-payment on a paid
    installment does not change the payoff.
    """
    payments = list(payments)
    total_principal = sum((p.principal for p in payments), ZERO)
    paid_principal = sum((p.principal for p in payments if p.status == PaymentStatus.PAID), ZERO)
    return round2(total_principal - paid_principal)


def remaining_balance(
    original_principal: Number,
    annual_rate_percent: Number,
    total_months: int,
    payments_made: int,
) -> Decimal:
    """
    Balance left after `payments_made` fixed installments, recomputed from terms.

    Runs the unrounded amortization loop rather than reading a stored schedule.
    """
    if payments_made >= total_months:
        return round2(0)

    balance = to_decimal(original_principal)
    rate = to_decimal(annual_rate_percent)
    payment = monthly_payment(balance, rate, total_months)
    r = monthly_rate(rate)

    for _ in range(payments_made):
        interest = ZERO if rate == 0 else balance * r
        balance -= payment - interest

    return round2(max(ZERO, balance))


def calculate_sale_details(
    sale_price: Number,
    down_payment: Number,
    annual_rate_percent: Number,
    term_months: int,
) -> SaleFinancials:
    """
    Compose the financing snapshot for a proposed sale.

    Used both for the preview before a sale is confirmed and again, from the
    submitted values, when the sale is persisted.
    """
    financed = finance_amount(sale_price, down_payment)
    monthly = monthly_payment(financed, annual_rate_percent, term_months)
    total = total_payment(monthly, term_months, down_payment)

    return SaleFinancials(
        finance_amount=round2(financed),
        monthly_payment=round2(monthly),
        total_payment=round2(total),
    )
