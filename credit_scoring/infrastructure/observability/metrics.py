"""Prometheus metrics for monitoring score distribution, cache efficiency and side-effect failures"""

from prometheus_client import Counter, Histogram

# Scoring metrics
score_calculation_counter = Counter(
    "credit_score_calculations_total",
    "Total credit scores calculated",
    ["grade"],  # Excellent | Very Good | Good | Fair | Poor
)

score_histogram = Histogram(
    "credit_score_value",
    "Distribution of calculated credit scores",
    buckets=[300, 580, 670, 740, 800, 850],
)

# Cache metrics
cache_lookup_counter = Counter(
    "credit_score_cache_lookups_total",
    "Score cache lookups",
    ["result"],  # hit | miss | error
)

# Side effects that never fail the request
advisory_failure_counter = Counter(
    "credit_score_advisory_failures_total",
    "Swallowed cache and event publishing failures",
    ["component"],  # cache | publisher
)

# Store metrics
store_failure_counter = Counter(
    "credit_score_store_failures_total",
    "Failed score store operations",
    ["operation"],  # create | get_latest | get_history
)

# Webhook transport
webhook_latency_histogram = Histogram(
    "event_webhook_latency_seconds",
    "Event webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(score: int, grade: str) -> None:
    """Record a computed score for grade mix and distribution analysis"""
    score_calculation_counter.labels(grade=grade).inc()
    score_histogram.observe(score)
