"""Prometheus metrics for schedule edits, carry-overs and cascade payments"""

from prometheus_client import Counter, Histogram

# Payment metrics
cascade_payment_counter = Counter(
    "schedule_cascade_payments_total",
    "Cascade payments processed",
    ["outcome"],  # settled | partial | overpayment
)

installments_per_payment_histogram = Histogram(
    "schedule_installments_per_payment",
    "Installments touched by a single cascade payment",
    buckets=[1, 2, 3, 4, 6, 12, 24],
)

overpayment_cents_counter = Counter(
    "schedule_overpayment_cents_total",
    "Payment amounts left unapplied because they exceeded the schedule balance",
)

# Schedule maintenance
carryover_counter = Counter(
    "schedule_carryovers_total",
    "Overdue balances carried over to a later installment",
)

ignored_edit_counter = Counter(
    "schedule_ignored_edits_total",
    "Edits ignored because the installment was not editable",
    ["operation"],
)

validation_failure_counter = Counter(
    "schedule_validation_failures_total",
    "Schedules that failed validation",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_cascade_payment(remaining_cents: int, installments_affected: int, settled: bool) -> None:
    """Record payment metrics for monitoring partial payments and overpayments"""
    if remaining_cents > 0:
        outcome = "overpayment"
        overpayment_cents_counter.inc(remaining_cents)
    elif settled:
        outcome = "settled"
    else:
        outcome = "partial"

    cascade_payment_counter.labels(outcome=outcome).inc()
    installments_per_payment_histogram.observe(installments_affected)
