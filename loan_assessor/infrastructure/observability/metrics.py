"""Prometheus metrics for monitoring decisions, batch throughput, and provider latency"""

from prometheus_client import Counter, Histogram

from loan_assessor.domain.models import BatchSummary, CompositeScore

# Decision metrics
decision_counter = Counter(
    "loan_assessor_decision_total",
    "Total lending decisions made",
    ["decision"],  # APPROVED | REVIEW | REJECTED
)

composite_score_histogram = Histogram(
    "loan_assessor_composite_score",
    "Composite scores issued",
    buckets=[200, 400, 500, 600, 650, 700, 750, 800, 900, 1000],
)

# Batch metrics
batch_rows_counter = Counter(
    "loan_assessor_batch_rows_total",
    "Batch rows processed by outcome",
    ["outcome"],  # approved | review | rejected | error
)

batch_duration_histogram = Histogram(
    "loan_assessor_batch_duration_seconds",
    "Time to score a full batch",
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0],
)

# Provider metrics
provider_latency_histogram = Histogram(
    "provider_latency_seconds",
    "Mock provider response time",
    ["provider"],  # credit_bureau | esg
    buckets=[0.1, 0.25, 0.5, 1.0, 1.5, 2.5, 5.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_decision(composite: CompositeScore) -> None:
    """Record a single assessment's decision and score distribution"""
    decision_counter.labels(decision=composite.decision.value).inc()
    composite_score_histogram.observe(composite.total)


def record_batch(summary: BatchSummary) -> None:
    """Record per-outcome row counts and duration for a processed batch"""
    batch_rows_counter.labels(outcome="approved").inc(summary.approved_count)
    batch_rows_counter.labels(outcome="review").inc(summary.review_count)
    batch_rows_counter.labels(outcome="rejected").inc(summary.rejected_count)
    batch_rows_counter.labels(outcome="error").inc(summary.error_count)
    batch_duration_histogram.observe(summary.total_time_ms / 1000)
