"""Prometheus metrics for monitoring assessment outcomes, credit amounts and summary dispatch"""

from prometheus_client import Counter, Histogram

# Assessment metrics
assessment_outcome_counter = Counter(
    "credit_approver_assessment_total",
    "Completed credit assessments",
    ["outcome"],  # approved | rejected | no_credit
)

credit_amount_bucket_counter = Counter(
    "credit_approver_credit_amount_bucket",
    "Credit amounts offered by bucket",
    ["bucket"],  # $0, $0-$10k, $10k-$50k, $50k+
)

# Dispatch metrics
dispatch_counter = Counter(
    "credit_approver_dispatch_total",
    "Assessment summary dispatch attempts",
    ["outcome"],  # sent | render_failed | delivery_failed
)

render_latency_histogram = Histogram(
    "pdf_render_latency_seconds",
    "PDF rendering time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

delivery_latency_histogram = Histogram(
    "mail_delivery_latency_seconds",
    "Mail delivery time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_assessment_outcome(outcome: str, credit_amount: int = 0) -> None:
    """Record a finished assessment and, once financials are in, the offered amount"""
    assessment_outcome_counter.labels(outcome=outcome).inc()

    if outcome == "rejected":
        return

    if credit_amount <= 0:
        bucket = "$0"
    elif credit_amount <= 10_000:
        bucket = "$0-$10k"
    elif credit_amount <= 50_000:
        bucket = "$10k-$50k"
    else:
        bucket = "$50k+"

    credit_amount_bucket_counter.labels(bucket=bucket).inc()


def record_dispatch(outcome: str) -> None:
    dispatch_counter.labels(outcome=outcome).inc()
