"""Structured JSON logging for the wizard engine"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from loan_wizard.config import settings


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


def log_submission(
    step: int,
    application_id: str | None,
    succeeded: bool,
    duration_ms: float,
    error: str | None = None,
) -> None:
    """Log structured step submission outcome"""
    extra = {
        "step": step,
        "application_id": application_id,
        "outcome": "success" if succeeded else "failed",
        "duration_ms": duration_ms,
    }
    if succeeded:
        logging.getLogger("loan_wizard.submission").info("Step submitted", extra=extra)
    else:
        extra["error"] = error
        logging.getLogger("loan_wizard.submission").warning("Step submission failed", extra=extra)
