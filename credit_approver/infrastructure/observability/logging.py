"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from credit_approver.config import settings


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


def log_transition(
    session_id: str,
    operation: str,
    phase_before: str,
    phase_after: str,
    step: int,
    score: int,
    **fields: Any,
) -> None:
    """Log one state machine transition of an assessment session"""
    logging.getLogger("credit_approver.assessment").info(
        "Assessment transition",
        extra={
            "session_id": session_id,
            "operation": operation,
            "phase_before": phase_before,
            "phase_after": phase_after,
            "step": step,
            "score": score,
            **fields,
        },
    )


def log_dispatch(
    recipient: str,
    outcome: str,
    credit_amount: int,
    duration_ms: float,
    stage: str | None = None,
    reason: str | None = None,
) -> None:
    """Log structured dispatch outcome"""
    extra = {
        "step": "dispatch_complete",
        "recipient": recipient,
        "outcome": outcome,
        "credit_amount": credit_amount,
        "duration_ms": duration_ms,
    }
    logger = logging.getLogger("credit_approver.dispatch")
    if stage is None:
        logger.info("Assessment summary sent", extra=extra)
    else:
        logger.error("Assessment summary dispatch failed", extra={**extra, "stage": stage, "reason": reason})
