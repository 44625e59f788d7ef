"""Batch aggregator - scores many borrower rows and summarizes the outcome"""

import asyncio
import logging
import time
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence

from loan_assessor.domain.models import BatchOutcome, BatchResult, BatchSummary, LoanDecision
from loan_assessor.domain.providers import get_credit_score_sync, get_esg_score_sync
from loan_assessor.domain.scoring import calculate_composite_score, calculate_income_assets_score
from loan_assessor.utils.numbers import parse_number, round_int

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

DEFAULT_CHUNK_SIZE = 10


def _elapsed_ms(start: float) -> int:
    return round_int((time.perf_counter() - start) * 1000)


def _fallback_name(row: Any, row_index: int) -> str:
    name = row.get("name") if isinstance(row, Mapping) else None
    return name if isinstance(name, str) and name else f"Row {row_index + 1}"


def process_row(row: Mapping[str, Any], row_index: int) -> BatchResult:
    """
    Score one batch row through the full pipeline.

    Unparseable numbers count as 0. Any exception raised while scoring is
    turned into an error result (score 0, REJECTED) instead of propagating.
    """
    start = time.perf_counter()

    try:
        annual_income = parse_number(row.get("annual_income"))
        total_assets = parse_number(row.get("total_assets"))

        credit_score = get_credit_score_sync(row["ssn"])
        esg_score = get_esg_score_sync(row["company"], row["industry"])
        income_assets = calculate_income_assets_score(annual_income, total_assets)

        composite = calculate_composite_score(credit_score, income_assets.score, esg_score)

        return BatchResult(
            row_index=row_index,
            borrower_name=_fallback_name(row, row_index),
            composite_score=composite.total,
            decision=composite.decision,
            processing_time_ms=_elapsed_ms(start),
        )

    except Exception as e:
        logger.warning(f"Batch row {row_index} failed: {e!r}", extra={"row_index": row_index})
        return BatchResult(
            row_index=row_index,
            borrower_name=_fallback_name(row, row_index),
            composite_score=0,
            decision=LoanDecision.REJECTED,
            processing_time_ms=_elapsed_ms(start),
            error=str(e) or type(e).__name__,
        )


def calculate_summary(results: Sequence[BatchResult], total_time_ms: int) -> BatchSummary:
    """
    Count results per bucket.

    total_processed is the sum of the four buckets, never an externally
    supplied row count, so the counts always add up.
    """
    approved = sum(1 for r in results if r.error is None and r.decision == LoanDecision.APPROVED)
    review = sum(1 for r in results if r.error is None and r.decision == LoanDecision.REVIEW)
    rejected = sum(1 for r in results if r.error is None and r.decision == LoanDecision.REJECTED)
    errors = sum(1 for r in results if r.error is not None)

    total_processed = approved + review + rejected + errors
    average = round_int(total_time_ms / total_processed) if total_processed > 0 else 0

    return BatchSummary(
        total_processed=total_processed,
        approved_count=approved,
        review_count=review,
        rejected_count=rejected,
        error_count=errors,
        total_time_ms=total_time_ms,
        average_time_ms=average,
    )


def validate_summary_counts(summary: BatchSummary) -> bool:
    """True when the bucket counts add up to total_processed"""
    counted = summary.approved_count + summary.review_count + summary.rejected_count + summary.error_count
    return counted == summary.total_processed


def _iter_results(
    rows: Sequence[Mapping[str, Any]],
    on_progress: Optional[ProgressCallback],
) -> Iterator[BatchResult]:
    """Score rows in order, reporting 1-indexed progress after each one"""
    total = len(rows)
    for index, row in enumerate(rows):
        result = process_row(row, index)
        if on_progress is not None:
            on_progress(index + 1, total)
        yield result


def process_batch(
    rows: Sequence[Mapping[str, Any]],
    on_progress: Optional[ProgressCallback] = None,
) -> BatchOutcome:
    """Score every row synchronously and summarize"""
    start = time.perf_counter()
    results = list(_iter_results(rows, on_progress))
    return BatchOutcome(results=results, summary=calculate_summary(results, _elapsed_ms(start)))


async def process_batch_async(
    rows: Sequence[Mapping[str, Any]],
    on_progress: Optional[ProgressCallback] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> BatchOutcome:
    """
    Cooperative variant of process_batch.

    Rows are scored in work units of chunk_size; control returns to the event
    loop between units. Ordering, scores and decisions match process_batch.
    """
    chunk_size = max(1, chunk_size)
    start = time.perf_counter()
    results = []

    pending = _iter_results(rows, on_progress)
    for index, result in enumerate(pending, start=1):
        results.append(result)
        if index % chunk_size == 0 and index < len(rows):
            await asyncio.sleep(0)

    return BatchOutcome(results=results, summary=calculate_summary(results, _elapsed_ms(start)))
