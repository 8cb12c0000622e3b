"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total licenses issued",
    ["tier"],
)

licenses_activated_total = Counter(
    "licenses_activated_total",
    "Total license activations",
    ["created"],
)

licenses_renewed_total = Counter(
    "licenses_renewed_total",
    "Total licenses renewed",
)

licenses_deactivated_total = Counter(
    "licenses_deactivated_total",
    "Total licenses deactivated",
)

licenses_expired_total = Counter(
    "licenses_expired_total",
    "Total licenses switched off by a validation past expiry",
)

licenses_bound_total = Counter(
    "licenses_bound_total",
    "Total licenses pinned to an address",
)

license_validations_total = Counter(
    "license_validations_total",
    "Total license validations",
    ["result"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
