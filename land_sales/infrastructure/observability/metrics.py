"""Prometheus metrics for sale volume, financed amounts and payment activity"""

from decimal import Decimal
from prometheus_client import Counter, Histogram

# Sale metrics
sales_created_counter = Counter(
    "land_sales_created_total",
    "Total financed land sales created",
    ["financed"],  # yes | no (paid in full at closing)
)

financed_amount_histogram = Histogram(
    "land_sales_financed_amount",
    "Amount financed per sale in dollars",
    buckets=[1_000, 5_000, 10_000, 25_000, 50_000, 100_000, 250_000],
)

# Payment metrics
payments_recorded_counter = Counter(
    "land_payments_recorded_total",
    "Installments marked paid",
    ["source"],  # manual | payoff
)

payments_marked_late_counter = Counter(
    "land_payments_marked_late_total",
    "Pending installments promoted to late by the overdue sweep",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_sale(finance_amount: Decimal) -> None:
    """Record sale metrics; cash sales are counted but not observed in the histogram"""
    financed = finance_amount > 0
    sales_created_counter.labels(financed="yes" if financed else "no").inc()
    if financed:
        financed_amount_histogram.observe(float(finance_amount))


def record_payments(source: str, count: int = 1) -> None:
    if count > 0:
        payments_recorded_counter.labels(source=source).inc(count)
