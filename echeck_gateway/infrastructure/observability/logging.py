"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger.json import JsonFormatter
from echeck_gateway.config import settings


class CustomJsonFormatter(JsonFormatter):
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


def log_payout(
    request_id: str,
    user_id: str,
    transaction_id: str,
    delivery_method: str,
    amount_cents: int,
    external_id: Optional[str],
    duration_ms: float,
) -> None:
    """Log structured payout outcome; bank account numbers never go to logs"""
    logging.info(
        "Payout issued",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "payout_complete",
            "transaction_id": transaction_id,
            "delivery_method": delivery_method,
            "amount_cents": amount_cents,
            "external_id": external_id,
            "duration_ms": duration_ms,
        },
    )
