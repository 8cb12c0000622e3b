"""
Permissions for admin API endpoints.
"""

from rest_framework.permissions import BasePermission

from core.domain.exceptions import UnauthorizedError
from core.middleware.auth import extract_admin_token, is_admin_token_valid


class HasAdminToken(BasePermission):
    """
    Require the admin secret on the view itself.

    AdminTokenMiddleware normally rejects bad tokens first; this keeps
    the views closed if the middleware is ever left out of MIDDLEWARE.
    """

    def has_permission(self, request, view) -> bool:
        if getattr(request, "is_license_admin", False):
            return True
        if is_admin_token_valid(extract_admin_token(request)):
            return True
        raise UnauthorizedError("Missing or invalid admin token.")
