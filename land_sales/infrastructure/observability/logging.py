"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from land_sales.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_sale_created(
    request_id: str,
    sale_id: str,
    buyer_id: str,
    finance_amount: Decimal,
    term_months: int,
    duration_ms: float,
) -> None:
    """Log structured sale creation outcome"""
    logging.info(
        "Sale created",
        extra={
            "request_id": request_id,
            "sale_id": sale_id,
            "buyer_id": buyer_id,
            "step": "sale_created",
            "finance_amount": str(finance_amount),
            "term_months": term_months,
            "duration_ms": duration_ms,
        },
    )


def log_payment_recorded(
    request_id: str,
    payment_id: str,
    sale_id: str,
    paid_amount: Decimal,
    sale_paid_off: bool,
) -> None:
    """Log a payment applied to an installment"""
    logging.info(
        "Payment recorded",
        extra={
            "request_id": request_id,
            "payment_id": payment_id,
            "sale_id": sale_id,
            "step": "payment_recorded",
            "paid_amount": str(paid_amount),
            "sale_paid_off": sale_paid_off,
        },
    )
