"""Prometheus metrics for calculator usage, lead capture, and upstream performance"""

from prometheus_client import Counter, Histogram

# Calculator metrics
calculation_counter = Counter(
    "shelters_calculation_total",
    "Loan calculations served",
    ["kind", "outcome"],  # kind: emi | eligibility; outcome: financed | zero
)

# Lead metrics
lead_counter = Counter(
    "shelters_lead_total",
    "Leads submitted",
    ["lead_type", "outcome"],  # lead_type: loan | insurance; outcome: captured | failed
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "lead_webhook_latency_seconds",
    "Lead webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "lead_webhook_failures_total",
    "Failed lead webhook deliveries",
)

# Airtable metrics
airtable_failures_counter = Counter(
    "airtable_failures_total",
    "Failed Airtable API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(kind: str, amount: float) -> None:
    """Count a calculation, separating zero results from financed ones"""
    outcome = "financed" if amount > 0 else "zero"
    calculation_counter.labels(kind=kind, outcome=outcome).inc()


def record_lead(lead_type: str, captured: bool) -> None:
    lead_counter.labels(lead_type=lead_type, outcome="captured" if captured else "failed").inc()
