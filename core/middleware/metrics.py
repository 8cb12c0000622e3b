"""
Metrics middleware for Prometheus.

Records HTTP request metrics for monitoring.
"""

import time
from typing import Callable

from django.http import HttpRequest, HttpResponse
from django.urls import Resolver404, resolve

from core.metrics import (
    http_request_duration_seconds,
    http_requests_total,
)

UNMATCHED_ENDPOINT = "unmatched"


def endpoint_label(request: HttpRequest) -> str:
    """
    Label a request by the URL pattern it resolved to.

    Per-key paths share their route (``/api/v1/licenses/<str:key>``) and
    requests that match no route share a single label. Requests answered
    by middleware before routing are resolved here.
    """
    match = getattr(request, "resolver_match", None)
    if match is None:
        try:
            match = resolve(request.path_info)
        except Resolver404:
            return UNMATCHED_ENDPOINT
    return "/" + match.route


class MetricsMiddleware:
    """
    Middleware to record HTTP metrics for Prometheus.

    Records:
    - Request count by method, endpoint, status
    - Request duration histogram
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process request and record metrics."""
        start_time = time.time()

        try:
            response = self.get_response(request)
        except Exception:
            self._record(request.method, endpoint_label(request), 500, time.time() - start_time)
            raise

        self._record(
            request.method, endpoint_label(request), response.status_code, time.time() - start_time
        )
        return response

    @staticmethod
    def _record(method: str, endpoint: str, status_code: int, duration: float) -> None:
        http_requests_total.labels(
            method=method,
            endpoint=endpoint,
            status_code=status_code,
        ).inc()

        http_request_duration_seconds.labels(
            method=method,
            endpoint=endpoint,
        ).observe(duration)
