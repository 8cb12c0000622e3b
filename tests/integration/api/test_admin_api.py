"""
Integration tests for the admin license API.
"""

from datetime import timedelta

import pytest
from django.conf import settings
from django.utils.dateparse import parse_datetime

from licenses.domain.license_key import looks_like_generated_key
from licenses.infrastructure.models import AuditLog
from licenses.infrastructure.models import License as LicenseModel

GENERATE_URL = "/api/v1/admin/licenses/generate"
ACTIVATE_URL = "/api/v1/admin/licenses/activate"
RENEW_URL = "/api/v1/admin/licenses/renew"
DEACTIVATE_URL = "/api/v1/admin/licenses/deactivate"


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminAuthentication:
    """Tests for the admin secret check."""

    def test_missing_token(self, api_client):
        response = api_client.post(GENERATE_URL, {"tier": "S"}, format="json")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"
        assert LicenseModel.objects.count() == 0

    def test_wrong_token(self, api_client):
        api_client.credentials(HTTP_X_ADMIN_TOKEN="not-the-secret")

        response = api_client.post(DEACTIVATE_URL, {"key": "S-ANY"}, format="json")

        assert response.status_code == 401

    def test_bearer_token(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {settings.LICENSE_ADMIN_SECRET}")

        response = api_client.post(GENERATE_URL, {"tier": "S"}, format="json")

        assert response.status_code == 201


@pytest.mark.django_db
@pytest.mark.integration
class TestGenerateLicense:
    """Tests for POST /api/v1/admin/licenses/generate."""

    def test_generate(self, admin_api_client):
        response = admin_api_client.post(
            GENERATE_URL,
            {"tier": "A", "days": 1, "owner_email": "buyer@example.com"},
            format="json",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["tier"] == "A"
        assert body["tier_name"] == "Aegis"
        assert body["key"].startswith("A-")
        assert looks_like_generated_key(body["key"])
        assert parse_datetime(body["expires_at"]) - parse_datetime(
            body["created_at"]
        ) == timedelta(days=1)

        row = LicenseModel.objects.get(key=body["key"])
        assert row.active is True
        assert row.bound_ip is None
        assert row.owner_email == "buyer@example.com"

    def test_generate_by_tier_name(self, admin_api_client):
        response = admin_api_client.post(GENERATE_URL, {"tier": "guardian"}, format="json")

        assert response.status_code == 201
        assert response.json()["tier"] == "G"

    def test_generate_writes_audit_log(self, admin_api_client):
        response = admin_api_client.post(GENERATE_URL, {"tier": "S"}, format="json")

        key = response.json()["key"]
        entry = AuditLog.objects.get(entity_id=key, action="LicenseIssued")
        assert entry.actor == "admin"
        assert entry.changes["tier"] == "S"

    def test_invalid_tier(self, admin_api_client):
        response = admin_api_client.post(GENERATE_URL, {"tier": "Z"}, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_TIER"
        assert LicenseModel.objects.count() == 0

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"tier": "S", "days": 0},
            {"tier": "S", "days": -3},
            {"tier": "S", "owner_email": "not-an-email"},
        ],
    )
    def test_invalid_input(self, admin_api_client, payload):
        response = admin_api_client.post(GENERATE_URL, payload, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"
        assert LicenseModel.objects.count() == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestActivateLicense:
    """Tests for POST /api/v1/admin/licenses/activate."""

    def test_activate_unknown_key_creates_sentinel(self, admin_api_client):
        response = admin_api_client.post(
            ACTIVATE_URL, {"key": "X-NEW", "days": 7}, format="json"
        )

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["created"] is True
        assert body["key"] == "X-NEW"

        row = LicenseModel.objects.get(key="X-NEW")
        assert row.tier == "S"
        assert row.active is True
        assert row.expires_at - row.created_at == timedelta(days=7)

    def test_activate_existing(self, admin_api_client, db_license):
        deactivated = admin_api_client.post(
            DEACTIVATE_URL, {"key": db_license.key}, format="json"
        )
        assert deactivated.status_code == 200

        response = admin_api_client.post(
            ACTIVATE_URL, {"key": db_license.key, "days": 10}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["created"] is False
        row = LicenseModel.objects.get(key=db_license.key)
        assert row.active is True
        assert row.tier == "G"
        assert row.owner_email == "owner@example.com"
        assert LicenseModel.objects.count() == 1

    def test_activate_missing_key(self, admin_api_client):
        response = admin_api_client.post(ACTIVATE_URL, {"days": 7}, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"


@pytest.mark.django_db
@pytest.mark.integration
class TestRenewLicense:
    """Tests for POST /api/v1/admin/licenses/renew."""

    def test_renew_unknown_key(self, admin_api_client):
        response = admin_api_client.post(
            RENEW_URL, {"key": "X-DOESNOTEXIST", "days": 5}, format="json"
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_NOT_FOUND"
        assert LicenseModel.objects.filter(key="X-DOESNOTEXIST").count() == 0

    def test_renew(self, admin_api_client, db_license):
        response = admin_api_client.post(
            RENEW_URL, {"key": db_license.key, "days": 90}, format="json"
        )

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert parse_datetime(body["expires_at"]) > db_license.expires_at
        assert AuditLog.objects.filter(
            entity_id=db_license.key, action="LicenseRenewed"
        ).exists()


@pytest.mark.django_db
@pytest.mark.integration
class TestDeactivateLicense:
    """Tests for POST /api/v1/admin/licenses/deactivate."""

    def test_deactivate_twice(self, admin_api_client, db_license):
        first = admin_api_client.post(DEACTIVATE_URL, {"key": db_license.key}, format="json")
        second = admin_api_client.post(DEACTIVATE_URL, {"key": db_license.key}, format="json")

        assert first.status_code == 200
        assert second.json() == {"ok": True}
        assert LicenseModel.objects.get(key=db_license.key).active is False

    def test_deactivate_unknown_key(self, admin_api_client):
        response = admin_api_client.post(DEACTIVATE_URL, {"key": "S-UNKNOWN"}, format="json")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert LicenseModel.objects.count() == 0
        assert not AuditLog.objects.filter(entity_id="S-UNKNOWN").exists()
