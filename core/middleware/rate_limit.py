"""
Rate limiting middleware.

Implements a fixed-window rate limit per client address on the public
validation endpoint.
"""

import hashlib
import time
from typing import Callable, Tuple

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.metrics import errors_total
from core.middleware.client_ip import resolve_peer_ip

RATE_LIMITED_PATHS = ("/api/v1/licenses/validate",)


class RateLimitMiddleware:
    """
    Rate limiting middleware per client address.

    Counters are stored in the Django cache, one key per address and window.
    Default limit: RATE_LIMIT_PER_MINUTE requests per minute.
    """

    DEFAULT_RATE_LIMIT = 60  # requests per minute
    RATE_LIMIT_WINDOW = 60  # seconds

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    @property
    def limit(self) -> int:
        return getattr(settings, "RATE_LIMIT_PER_MINUTE", self.DEFAULT_RATE_LIMIT)

    def _get_rate_limit_key(self, client_ip: str) -> str:
        """
        Generate cache key for rate limiting.

        Args:
            client_ip: Client address

        Returns:
            Cache key string
        """
        ip_hash = hashlib.sha256(client_ip.encode()).hexdigest()[:16]
        return f"rate_limit:validate:{ip_hash}"

    def _check_rate_limit(self, client_ip: str, limit: int) -> Tuple[bool, int, int]:
        """
        Check if request is within rate limit.

        Args:
            client_ip: Client address
            limit: Requests allowed per window

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        window_start = int(time.time() / self.RATE_LIMIT_WINDOW)
        reset_time = (window_start + 1) * self.RATE_LIMIT_WINDOW
        full_key = f"{self._get_rate_limit_key(client_ip)}:{window_start}"

        if cache.get(full_key, 0) >= limit:
            return False, 0, reset_time

        # add() is a no-op when the key exists, so incr() always has a target.
        cache.add(full_key, 0, timeout=self.RATE_LIMIT_WINDOW)
        try:
            new_count = cache.incr(full_key, 1)
        except ValueError:
            cache.set(full_key, 1, timeout=self.RATE_LIMIT_WINDOW)
            new_count = 1

        return True, max(0, limit - new_count), reset_time

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response with rate limit headers
        """
        if not getattr(settings, "RATE_LIMIT_ENABLED", True):
            return self.get_response(request)

        if not request.path.startswith(RATE_LIMITED_PATHS):
            return self.get_response(request)

        client_ip = resolve_peer_ip(request)
        if not client_ip:
            return self.get_response(request)

        limit = self.limit
        is_allowed, remaining, reset_time = self._check_rate_limit(client_ip, limit)

        if not is_allowed:
            errors_total.labels(error_type="rate_limit_exceeded", endpoint=request.path).inc()

            response = JsonResponse(
                {
                    "error": {
                        "code": "RATE_LIMIT_EXCEEDED",
                        "message": "Rate limit exceeded. Please try again later.",
                    }
                },
                status=429,
            )
        else:
            response = self.get_response(request)

        # Add rate limit headers (RFC 6585)
        response["X-RateLimit-Limit"] = str(limit)
        response["X-RateLimit-Remaining"] = str(remaining)
        response["X-RateLimit-Reset"] = str(reset_time)
        if not is_allowed:
            response["Retry-After"] = str(max(0, reset_time - int(time.time())))

        return response
