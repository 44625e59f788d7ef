"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from loan_assessor.config import settings
from loan_assessor.domain.models import BatchSummary, CompositeScore


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


def log_assessment(
    request_id: str,
    assessment_id: str,
    composite: CompositeScore,
    loan_offered: bool,
    duration_ms: float,
) -> None:
    """Log structured assessment outcome for analysis"""
    logging.info(
        "Assessment completed",
        extra={
            "request_id": request_id,
            "assessment_id": assessment_id,
            "step": "assessment_complete",
            "decision": composite.decision.value,
            "composite_score": composite.total,
            "loan_offered": loan_offered,
            "duration_ms": duration_ms,
        },
    )


def log_batch_completed(request_id: str, summary: BatchSummary) -> None:
    """Log structured batch summary"""
    logging.info(
        "Batch completed",
        extra={
            "request_id": request_id,
            "step": "batch_complete",
            "total_processed": summary.total_processed,
            "approved_count": summary.approved_count,
            "review_count": summary.review_count,
            "rejected_count": summary.rejected_count,
            "error_count": summary.error_count,
            "duration_ms": summary.total_time_ms,
        },
    )
