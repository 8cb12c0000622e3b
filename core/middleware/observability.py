"""
Request logging middleware.

Every request gets a correlation id (taken from X-Correlation-ID when the
caller sends one) that is echoed back and attached to the log lines of
its start and finish.
"""

import logging
import time
import uuid
from typing import Any, Callable, Dict

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_trace_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "HTTP_X_CORRELATION_ID"


def current_trace_id() -> str:
    """Return the id of the active span's trace, or an empty string."""
    span_context = trace.get_current_span().get_span_context()
    return format_trace_id(span_context.trace_id) if span_context.is_valid else ""


class ObservabilityMiddleware:
    """
    Middleware for request logging.

    Logs one line when a request starts and one when it finishes, with
    the level following the response class (5xx error, 4xx warning).
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = request.META.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore

        context = self._context(request, correlation_id)
        logger.info("Request started %s %s", request.method, request.path, extra=context)

        started = time.perf_counter()
        try:
            response = self.get_response(request)
        except Exception as e:
            logger.error(
                "Request failed %s %s",
                request.method,
                request.path,
                extra={
                    **context,
                    "error_type": type(e).__name__,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        context.update(status_code=response.status_code, duration_ms=duration_ms)
        if getattr(request, "is_license_admin", False):
            context["actor"] = "admin"

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(
            level,
            "Request finished %s %s -> %s",
            request.method,
            request.path,
            response.status_code,
            extra=context,
        )

        response["X-Correlation-ID"] = correlation_id
        response["X-Request-Duration"] = f"{duration_ms / 1000:.3f}"
        if context["trace_id"]:
            response["X-Trace-ID"] = context["trace_id"]
        return response

    @staticmethod
    def _context(request: HttpRequest, correlation_id: str) -> Dict[str, Any]:
        return {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "remote_addr": getattr(request, "client_ip", None),
            "user_agent": request.META.get("HTTP_USER_AGENT", ""),
            "trace_id": current_trace_id(),
        }
