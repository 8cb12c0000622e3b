"""
Public license API views.

These endpoints are used by bots to:
- Validate their license on startup
- Read non-sensitive license details
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.public.serializers import (
    LicenseInfoSerializer,
    ValidateLicenseRequestSerializer,
    ValidationResultSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from core.middleware.client_ip import resolve_client_ip
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.handlers.get_license_info_handler import GetLicenseInfoHandler
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.application.queries.get_license_info import GetLicenseInfoQuery
from licenses.infrastructure.repositories import get_license_store

tracer = get_tracer(__name__)


class ValidateLicenseView(APIView):
    """View for validating a license."""

    @extend_schema(
        operation_id="validate_license_post",
        summary="Validate License",
        description=(
            "Validate a license key for the calling address. Negative outcomes "
            "(not_found, deactivated, expired, ip_mismatch) are 200 responses "
            "with valid=false and a reason."
        ),
        tags=["Public API"],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: ValidationResultSerializer,
            400: {"description": "Bad Request - missing key"},
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a license from the request body."""
        data = request.data if hasattr(request.data, "get") else {}
        if "key" not in data and "license" not in data:
            data = request.query_params
        return async_to_sync(self._handle_validate)(request, data)

    @extend_schema(
        operation_id="validate_license_get",
        summary="Validate License (query string)",
        tags=["Public API"],
        parameters=[
            OpenApiParameter(name="key", description="License key", required=False, type=str),
            OpenApiParameter(name="license", description="Alias of key", required=False, type=str),
        ],
        responses={
            200: ValidationResultSerializer,
            400: {"description": "Bad Request - missing key"},
        },
    )
    def get(self, request: Request) -> Response:
        """Validate a license from the query string."""
        return async_to_sync(self._handle_validate)(request, request.query_params)

    async def _handle_validate(self, request: Request, data) -> Response:
        """Async handler for validate license."""
        with tracer.start_as_current_span("validate_license") as span:
            serializer = ValidateLicenseRequestSerializer(data=data)
            serializer.is_valid(raise_exception=True)

            requester_ip = getattr(request, "client_ip", None) or resolve_client_ip(request)
            handler = ValidateLicenseHandler(license_store=get_license_store())
            result = await handler.handle(
                ValidateLicenseCommand(
                    key=serializer.validated_data["key"],
                    requester_ip=requester_ip,
                )
            )

            span.set_attribute("license.valid", result.valid)
            if result.reason:
                span.set_attribute("license.reason", result.reason)
            span.set_status(Status(StatusCode.OK))
            return Response(ValidationResultSerializer(result).data)


class LicenseInfoView(APIView):
    """View for public license info."""

    @extend_schema(
        operation_id="get_license_info",
        summary="License Info",
        description="Non-sensitive license details. Owner email and addresses are never returned.",
        tags=["Public API"],
        responses={
            200: LicenseInfoSerializer,
            404: {"description": "Not Found - unknown license key"},
        },
    )
    def get(self, request: Request, key: str) -> Response:
        """Get license info."""
        return async_to_sync(self._handle_info)(key)

    async def _handle_info(self, key: str) -> Response:
        """Async handler for license info."""
        with tracer.start_as_current_span("get_license_info"):
            handler = GetLicenseInfoHandler(license_store=get_license_store())
            result = await handler.handle(GetLicenseInfoQuery(key=key))
            return Response(LicenseInfoSerializer(result).data)
