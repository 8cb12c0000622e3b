"""
Serializers for admin API endpoints.
"""

from rest_framework import serializers


class GenerateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for generate license request."""

    tier = serializers.CharField(required=True, max_length=20)
    owner_email = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=254
    )
    days = serializers.IntegerField(required=False, min_value=1)


class GenerateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for IssuedLicenseDTO."""

    key = serializers.CharField()
    tier = serializers.CharField()
    tier_name = serializers.CharField()
    owner_email = serializers.CharField(allow_null=True)
    expires_at = serializers.DateTimeField()
    created_at = serializers.DateTimeField()


class ActivateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for activate license request."""

    key = serializers.CharField(required=True, max_length=100)
    days = serializers.IntegerField(required=False, min_value=1)
    owner_email = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=254
    )


class ActivateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for ActivationResultDTO."""

    ok = serializers.BooleanField()
    key = serializers.CharField()
    expires_at = serializers.DateTimeField()
    created = serializers.BooleanField()


class RenewLicenseRequestSerializer(serializers.Serializer):
    """Serializer for renew license request."""

    key = serializers.CharField(required=True, max_length=100)
    days = serializers.IntegerField(required=False, min_value=1)


class RenewLicenseResponseSerializer(serializers.Serializer):
    """Serializer for RenewalResultDTO."""

    ok = serializers.BooleanField()
    key = serializers.CharField()
    expires_at = serializers.DateTimeField()


class DeactivateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for deactivate license request."""

    key = serializers.CharField(required=True, max_length=100)


class DeactivateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for DeactivationResultDTO."""

    ok = serializers.BooleanField()
