"""Dashboard metrics over completed assessments"""

from datetime import date, datetime, timezone
from typing import Iterable, Optional, Tuple

from loan_assessor.domain.models import Assessment, CompositeScore, DashboardMetrics, LoanDecision

# Manual underwriting baseline: 5 minutes per borrower
MANUAL_TIME_MS = 5 * 60 * 1000


def summarize_scores(
    scored: Iterable[Tuple[datetime, Optional[CompositeScore]]],
    today: Optional[date] = None,
) -> DashboardMetrics:
    """
    Summarize today's scores from (created_at, composite_score) pairs.

    - approval_rate: percent of today's assessments that were APPROVED
    - average_time_seconds: mean composite processing time
    - time_saved_percent: saving vs the manual baseline, floored at 0

    Pairs without a composite score are ignored.
    """
    today = today or datetime.now(timezone.utc).date()
    todays = [
        composite for created_at, composite in scored
        if created_at.date() == today and composite is not None
    ]

    count = len(todays)
    approved = sum(1 for composite in todays if composite.decision == LoanDecision.APPROVED)
    total_time_ms = sum(composite.processing_time_ms for composite in todays)
    avg_time_ms = total_time_ms / count if count else 0.0

    time_saved = (MANUAL_TIME_MS - avg_time_ms) / MANUAL_TIME_MS * 100

    return DashboardMetrics(
        today_assessments=count,
        approval_rate=approved / count * 100 if count else 0.0,
        average_time_seconds=avg_time_ms / 1000,
        time_saved_percent=max(0.0, time_saved),
    )


def calculate_dashboard_metrics(
    assessments: Iterable[Assessment],
    today: Optional[date] = None,
) -> DashboardMetrics:
    """Summarize today's scored assessments"""
    return summarize_scores(((a.created_at, a.composite_score) for a in assessments), today)
