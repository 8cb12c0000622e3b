"""
Serializers for public license API endpoints.
"""

from rest_framework import serializers


class ValidateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for validate license request."""

    key = serializers.CharField(required=True)

    def to_internal_value(self, data):
        # Older bots send the key as ``license``.
        if "key" not in data and "license" in data:
            data = {"key": data.get("license")}
        return super().to_internal_value(data)


class ValidationResultSerializer(serializers.Serializer):
    """Serializer for ValidationResultDTO. Unset fields are omitted."""

    valid = serializers.BooleanField()
    reason = serializers.CharField(required=False)
    tier = serializers.CharField(required=False)
    tier_name = serializers.CharField(required=False)
    expires_at = serializers.DateTimeField(required=False)
    bound_ip = serializers.CharField(required=False)
    requester_ip = serializers.CharField(required=False)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {name: value for name, value in data.items() if value is not None}


class LicenseInfoSerializer(serializers.Serializer):
    """Serializer for LicenseInfoDTO."""

    key = serializers.CharField()
    tier = serializers.CharField()
    tier_name = serializers.CharField()
    active = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    expires_at = serializers.DateTimeField()
    bound = serializers.BooleanField()
    last_validated = serializers.DateTimeField(allow_null=True)
