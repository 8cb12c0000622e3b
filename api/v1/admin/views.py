"""
Admin API views.

These endpoints are used by the license administrator to:
- Generate new license keys
- Activate, renew and deactivate licenses
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.admin.permissions import HasAdminToken
from api.v1.admin.serializers import (
    ActivateLicenseRequestSerializer,
    ActivateLicenseResponseSerializer,
    DeactivateLicenseRequestSerializer,
    DeactivateLicenseResponseSerializer,
    GenerateLicenseRequestSerializer,
    GenerateLicenseResponseSerializer,
    RenewLicenseRequestSerializer,
    RenewLicenseResponseSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.commands.deactivate_license import DeactivateLicenseCommand
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.handlers.license_lifecycle_handlers import (
    ActivateLicenseHandler,
    DeactivateLicenseHandler,
    IssueLicenseHandler,
    RenewLicenseHandler,
)
from licenses.infrastructure.repositories import get_license_store

tracer = get_tracer(__name__)

ADMIN_ERRORS = {
    400: {"description": "Bad Request - invalid input or tier"},
    401: {"description": "Unauthorized - Missing or invalid admin token"},
    500: {"description": "Internal error - store unavailable"},
}


def _days(validated_data) -> int:
    return validated_data.get("days") or settings.LICENSE_DEFAULT_DAYS


class AdminAPIView(APIView):
    """Base view for admin endpoints."""

    permission_classes = [HasAdminToken]


class GenerateLicenseView(AdminAPIView):
    """View for generating licenses."""

    @extend_schema(
        operation_id="generate_license",
        summary="Generate License",
        description=(
            "Create a new license key for a tier (S/G/A or Sentinel/Guardian/Aegis). "
            "Requires the admin secret via X-Admin-Token or Authorization: Bearer."
        ),
        tags=["Admin API"],
        request=GenerateLicenseRequestSerializer,
        responses={201: GenerateLicenseResponseSerializer, **ADMIN_ERRORS},
    )
    def post(self, request: Request) -> Response:
        """Generate a license key."""
        return async_to_sync(self._handle_generate)(request)

    async def _handle_generate(self, request: Request) -> Response:
        """Async handler for generate license."""
        with tracer.start_as_current_span("generate_license") as span:
            serializer = GenerateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            span.set_attribute("license.tier", data["tier"])

            handler = IssueLicenseHandler(license_store=get_license_store())
            result = await handler.handle(
                IssueLicenseCommand(
                    tier=data["tier"],
                    owner_email=data.get("owner_email"),
                    days=_days(data),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(
                GenerateLicenseResponseSerializer(result).data,
                status=status.HTTP_201_CREATED,
            )


class ActivateLicenseView(AdminAPIView):
    """View for activating licenses."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Re-enable a license and set its expiry to now + days. "
            "Unknown keys are provisioned as Sentinel licenses (created=true)."
        ),
        tags=["Admin API"],
        request=ActivateLicenseRequestSerializer,
        responses={200: ActivateLicenseResponseSerializer, **ADMIN_ERRORS},
    )
    def post(self, request: Request) -> Response:
        """Activate a license."""
        return async_to_sync(self._handle_activate)(request)

    async def _handle_activate(self, request: Request) -> Response:
        """Async handler for activate license."""
        with tracer.start_as_current_span("activate_license") as span:
            serializer = ActivateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = ActivateLicenseHandler(license_store=get_license_store())
            result = await handler.handle(
                ActivateLicenseCommand(
                    key=data["key"],
                    days=_days(data),
                    owner_email=data.get("owner_email"),
                )
            )

            span.set_attribute("license.created", result.created)
            span.set_status(Status(StatusCode.OK))
            return Response(ActivateLicenseResponseSerializer(result).data)


class RenewLicenseView(AdminAPIView):
    """View for renewing licenses."""

    @extend_schema(
        operation_id="renew_license",
        summary="Renew License",
        description="Set a license's expiry to now + days and re-enable it.",
        tags=["Admin API"],
        request=RenewLicenseRequestSerializer,
        responses={
            200: RenewLicenseResponseSerializer,
            404: {"description": "Not Found - unknown license key"},
            **ADMIN_ERRORS,
        },
    )
    def post(self, request: Request) -> Response:
        """Renew a license."""
        return async_to_sync(self._handle_renew)(request)

    async def _handle_renew(self, request: Request) -> Response:
        """Async handler for renew license."""
        with tracer.start_as_current_span("renew_license") as span:
            serializer = RenewLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = RenewLicenseHandler(license_store=get_license_store())
            result = await handler.handle(RenewLicenseCommand(key=data["key"], days=_days(data)))

            span.set_status(Status(StatusCode.OK))
            return Response(RenewLicenseResponseSerializer(result).data)


class DeactivateLicenseView(AdminAPIView):
    """View for deactivating licenses."""

    @extend_schema(
        operation_id="deactivate_license",
        summary="Deactivate License",
        description="Turn a license off. Reports ok even when the key is unknown.",
        tags=["Admin API"],
        request=DeactivateLicenseRequestSerializer,
        responses={200: DeactivateLicenseResponseSerializer, **ADMIN_ERRORS},
    )
    def post(self, request: Request) -> Response:
        """Deactivate a license."""
        return async_to_sync(self._handle_deactivate)(request)

    async def _handle_deactivate(self, request: Request) -> Response:
        """Async handler for deactivate license."""
        with tracer.start_as_current_span("deactivate_license") as span:
            serializer = DeactivateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = DeactivateLicenseHandler(license_store=get_license_store())
            result = await handler.handle(
                DeactivateLicenseCommand(key=serializer.validated_data["key"])
            )

            span.set_status(Status(StatusCode.OK))
            return Response(DeactivateLicenseResponseSerializer(result).data)
