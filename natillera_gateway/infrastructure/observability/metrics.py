"""Prometheus metrics for monitoring summaries served and backend health"""

from prometheus_client import Counter, Histogram

# Summary metrics
summary_counter = Counter(
    "natillera_summary_total",
    "Total summaries served",
    ["kind"],  # contributions | member_share | pending | loans | loan_balance | transactions | balance | raffle
)

summary_records_histogram = Histogram(
    "natillera_summary_records",
    "Backend records aggregated per summary",
    ["kind"],
    buckets=[0, 1, 5, 10, 25, 50, 100, 250, 500, 1000],
)

# Backend API metrics
backend_fetch_failures_counter = Counter(
    "backend_fetch_failures_total",
    "Failed natillera backend calls",
    ["reason"],  # unauthorized | not_found | unavailable
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_summary(kind: str, record_count: int) -> None:
    """Record a served summary and how many backend records fed it"""
    summary_counter.labels(kind=kind).inc()
    summary_records_histogram.labels(kind=kind).observe(record_count)
