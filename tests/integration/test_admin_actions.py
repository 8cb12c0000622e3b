"""
Integration tests for the Django admin license actions.
"""

import pytest
from asgiref.sync import async_to_sync

from licenses.admin import clear_ip_binding
from licenses.infrastructure.models import AuditLog
from licenses.infrastructure.models import License as LicenseModel

CHANGELIST_URL = "/admin/licenses/license/"


@pytest.fixture
def bound_license(django_store, db_license):
    """Fixture for a saved license pinned to 10.0.0.1."""
    license, _ = async_to_sync(django_store.conditional_update)(
        db_license.key, lambda current: (current.bind("10.0.0.1"), None)
    )
    return license


@pytest.mark.django_db
@pytest.mark.integration
class TestClearIpBinding:
    """Tests for clear_ip_binding."""

    def test_clears_bound_license(self, django_store, bound_license):
        cleared = clear_ip_binding([bound_license.key], store=django_store)

        assert cleared == 1
        assert LicenseModel.objects.get(key=bound_license.key).bound_ip is None
        entry = AuditLog.objects.get(entity_id=bound_license.key, action="LicenseUnbound")
        assert entry.changes["previous_ip"] == "10.0.0.1"

    def test_unbound_license_is_not_counted(self, django_store, db_license):
        assert clear_ip_binding([db_license.key], store=django_store) == 0

    def test_next_validation_binds_again(self, api_client, django_store, bound_license):
        clear_ip_binding([bound_license.key], store=django_store)

        response = api_client.post(
            "/api/v1/licenses/validate",
            {"key": bound_license.key},
            format="json",
            REMOTE_ADDR="10.0.0.2",
        )

        assert response.json()["valid"] is True
        assert response.json()["bound_ip"] == "10.0.0.2"


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseAdminActions:
    """Tests for the changelist actions of LicenseAdmin."""

    def test_clear_binding_action(self, admin_client, bound_license):
        row = LicenseModel.objects.get(key=bound_license.key)

        response = admin_client.post(
            CHANGELIST_URL,
            {"action": "clear_binding_action", "_selected_action": [str(row.pk)]},
        )

        assert response.status_code == 302
        assert LicenseModel.objects.get(pk=row.pk).bound_ip is None

    def test_deactivate_action(self, admin_client, db_license):
        row = LicenseModel.objects.get(key=db_license.key)

        admin_client.post(
            CHANGELIST_URL,
            {"action": "deactivate_action", "_selected_action": [str(row.pk)]},
        )

        assert LicenseModel.objects.get(pk=row.pk).active is False
        assert AuditLog.objects.filter(
            entity_id=db_license.key, action="LicenseDeactivated"
        ).exists()
