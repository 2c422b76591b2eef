"""Date manipulation utilities"""

from datetime import date, timedelta
from dateutil.relativedelta import relativedelta


def add_months(from_date: date, months: int) -> date:
    """
    Advance a date by whole calendar months.

    The day of month is clamped to the last valid day of the target month,
    so Jan 31 + 1 month is Feb 28 (or Feb 29 in a leap year).
    """
    return from_date + relativedelta(months=months)


def days_ago(as_of: date, days: int) -> date:
    """Date that lies `days` calendar days before `as_of`"""
    return as_of - timedelta(days=days)
