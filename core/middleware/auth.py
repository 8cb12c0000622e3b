"""
Admin secret authentication middleware.

This middleware guards the administrative API with a pre-shared
secret before any view code runs.
"""

import logging
import secrets
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

ADMIN_API_PREFIX = "/api/v1/admin/"


def extract_admin_token(request: HttpRequest) -> Optional[str]:
    """
    Extract the admin secret from the request.

    Checks the X-Admin-Token header, then an Authorization bearer token.

    Args:
        request: HTTP request

    Returns:
        Token string or None
    """
    token = request.headers.get("X-Admin-Token")
    if token:
        return token

    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:] or None

    return None


def is_admin_token_valid(token: Optional[str]) -> bool:
    """Compare a presented token with LICENSE_ADMIN_SECRET in constant time."""
    secret = getattr(settings, "LICENSE_ADMIN_SECRET", "")
    if not secret or not token:
        return False
    return secrets.compare_digest(token.encode(), secret.encode())


class AdminTokenMiddleware(MiddlewareMixin):
    """
    Middleware for admin API authentication.

    This middleware:
    1. Leaves everything outside /api/v1/admin/ alone
    2. Validates the admin secret for admin APIs
    3. Returns 401 Unauthorized if authentication fails
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        if not request.path.startswith(ADMIN_API_PREFIX):
            return None

        token = extract_admin_token(request)
        if is_admin_token_valid(token):
            request.is_license_admin = True  # type: ignore
            return None

        if not getattr(settings, "LICENSE_ADMIN_SECRET", ""):
            logger.error("Admin API called but LICENSE_ADMIN_SECRET is not configured")
        else:
            logger.warning(
                "Rejected admin request to %s (token %s)",
                request.path,
                "mismatched" if token else "missing",
                extra={"remote_addr": getattr(request, "client_ip", None)},
            )

        return JsonResponse(
            {
                "error": {
                    "code": "UNAUTHORIZED",
                    "message": "Missing or invalid admin token.",
                }
            },
            status=401,
        )
