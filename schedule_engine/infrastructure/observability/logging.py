"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from schedule_engine.config import settings


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

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_cascade_payment(
    request_id: str,
    amount_cents: int,
    installments_affected: int,
    overpayment_cents: int,
    duration_ms: Optional[float] = None,
) -> None:
    """Log structured cascade payment outcome for analysis"""
    logging.info(
        "Cascade payment processed",
        extra={
            "request_id": request_id,
            "step": "cascade_payment",
            "amount_cents": amount_cents,
            "installments_affected": installments_affected,
            "overpayment_cents": overpayment_cents,
            "duration_ms": duration_ms,
        },
    )
