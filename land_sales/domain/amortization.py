"""Amortization engine - fixed monthly payments for seller-financed land sales"""

from datetime import date
from decimal import Decimal
from typing import List

from land_sales.domain.models import LoanTerms, ScheduleEntry
from land_sales.domain.money import ZERO, Number, round2, to_decimal
from land_sales.utils.date_utils import add_months


def monthly_rate(annual_rate_percent: Number) -> Decimal:
    """Convert an annual percentage (9.9) to a monthly fraction (0.00825)"""
    return to_decimal(annual_rate_percent) / 100 / 12


def monthly_payment(principal: Number, annual_rate_percent: Number, term_months: int) -> Decimal:
    """
    Fixed monthly payment for a fully amortizing loan.

    M = P * [r(1+r)^n] / [(1+r)^n - 1]

    The result is unrounded; callers round at their own boundary.
    Nothing financed (principal or term <= 0) means no payment.
    """
    principal = to_decimal(principal)
    if principal <= 0 or term_months <= 0:
        return ZERO

    annual_rate_percent = to_decimal(annual_rate_percent)
    if annual_rate_percent == 0:
        return principal / term_months

    r = monthly_rate(annual_rate_percent)
    factor = (1 + r) ** term_months
    return principal * (r * factor) / (factor - 1)


def generate_schedule(
    finance_amount: Number,
    annual_rate_percent: Number,
    term_months: int,
    start_date: date,
) -> List[ScheduleEntry]:
    """
    Generate the payment-by-payment amortization schedule.

    Requirements:
    - One entry per month, due `payment_number` calendar months after start_date
    - Interest accrues on the unrounded running balance and principal is the
      unrounded monthly payment less that interest; amounts are rounded to
      cents only when each entry is stored
    - amount_due == principal + interest exactly for every stored entry
    - Last installment's principal is the finance amount less every earlier
      stored principal, so principal sums to the finance amount and the final
      balance is exactly 0
    - Stored balance is the finance amount less principal retired so far

    A payment smaller than a cent (e.g. $1.00 over 200 months) retires the
    balance early; the remaining installments are stored as $0.00 entries.

    Args:
        finance_amount: Amount loaned (sale price minus down payment)
        annual_rate_percent: Annual interest rate, 9.9 for 9.9%
        term_months: Number of monthly installments
        start_date: Sale date; accrual starts here

    Returns:
        List of ScheduleEntry, empty when nothing is financed

    Example:
        $1000.00 at 0% over 3 months → [333.33, 333.33, 333.34]
    """
    finance_amount = to_decimal(finance_amount)
    annual_rate_percent = to_decimal(annual_rate_percent)
    if finance_amount <= 0 or term_months <= 0:
        return []

    payment = monthly_payment(finance_amount, annual_rate_percent, term_months)
    r = monthly_rate(annual_rate_percent)
    total = round2(finance_amount)
    balance = finance_amount
    retired = ZERO

    schedule = []
    for payment_number in range(1, term_months + 1):
        interest = ZERO if annual_rate_percent == 0 else balance * r
        principal = payment - interest
        balance = max(ZERO, balance - principal)

        # Final installment retires whatever the stored principals left over
        if payment_number == term_months:
            stored_principal = total - retired
        else:
            stored_principal = min(round2(principal), total - retired)
        stored_interest = round2(interest)
        retired += stored_principal

        schedule.append(
            ScheduleEntry(
                payment_number=payment_number,
                due_date=add_months(start_date, payment_number),
                amount_due=stored_principal + stored_interest,
                principal=stored_principal,
                interest=stored_interest,
                balance=total - retired,
            )
        )

    return schedule


def schedule_for(terms: LoanTerms) -> List[ScheduleEntry]:
    """Generate the schedule for validated loan terms"""
    return generate_schedule(
        terms.principal,
        terms.annual_rate_percent,
        terms.term_months,
        terms.start_date,
    )
