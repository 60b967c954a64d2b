"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = "credit-scoring", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "credit-scoring") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_score_computed(
    request_id: str,
    user_id: str,
    score_id: str,
    score: int,
    grade: str,
    duration_ms: float,
) -> None:
    """Log structured scoring outcome for analysis"""
    logging.getLogger("credit_scoring.scores").info(
        "Credit score calculated",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "score_id": score_id,
            "step": "score_complete",
            "score": score,
            "grade": grade,
            "duration_ms": duration_ms,
        },
    )
