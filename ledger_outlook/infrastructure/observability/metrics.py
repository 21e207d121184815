"""Prometheus metrics for projection volume, outcomes and latency"""

from prometheus_client import Counter, Histogram

# Projection metrics
projection_counter = Counter(
    "ledger_projection_total",
    "Total projections computed",
    ["engine", "outcome"],  # engine: payoff | forecast
)

projection_duration_histogram = Histogram(
    "ledger_projection_duration_seconds",
    "Time spent computing a projection",
    ["engine"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

projected_points_histogram = Histogram(
    "ledger_projected_points",
    "Number of points returned per projection",
    ["engine"],
    buckets=[0, 8, 16, 32, 61, 120, 366],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_projection(engine: str, outcome: str, points: int, duration_seconds: float) -> None:
    """Record projection metrics for monitoring outcome mix and cost"""
    projection_counter.labels(engine=engine, outcome=outcome).inc()
    projection_duration_histogram.labels(engine=engine).observe(duration_seconds)
    projected_points_histogram.labels(engine=engine).observe(points)
