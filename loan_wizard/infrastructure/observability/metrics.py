"""Prometheus metrics for step submissions, validation failures, and record store latency"""

from prometheus_client import Counter, Histogram

# Wizard metrics
step_submission_counter = Counter(
    "loan_wizard_step_submissions_total",
    "Step submissions by outcome",
    ["step", "outcome"],  # success | failed
)

validation_failure_counter = Counter(
    "loan_wizard_validation_failures_total",
    "Rejected section payloads",
    ["section"],  # section name or "application" for the combined check
)

affordability_rejection_counter = Counter(
    "loan_wizard_affordability_rejections_total",
    "Financial steps blocked by the affordability check",
)

# Record store metrics
remote_call_latency_histogram = Histogram(
    "loan_service_latency_seconds",
    "Record store response time",
    ["operation"],  # create | fetch | update
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_submission(step: int, succeeded: bool) -> None:
    """Record the outcome of one step submission"""
    outcome = "success" if succeeded else "failed"
    step_submission_counter.labels(step=str(step), outcome=outcome).inc()


def record_validation_failure(section: str) -> None:
    validation_failure_counter.labels(section=section).inc()
