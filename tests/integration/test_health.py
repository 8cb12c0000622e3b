"""
Integration tests for health, readiness and metrics endpoints.
"""

import pytest
from django.test import Client


@pytest.mark.django_db
@pytest.mark.integration
class TestHealthEndpoints:
    """Tests for operational endpoints."""

    def test_health(self):
        response = Client().get("/health/")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "bot-license-service"}

    def test_health_db(self):
        response = Client().get("/health/db/")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    def test_ready(self):
        response = Client().get("/ready/")

        assert response.status_code == 200
        assert response.json()["checks"] == {"database": True, "cache": True}

    def test_correlation_id_is_propagated(self):
        response = Client().get("/health/", HTTP_X_CORRELATION_ID="abc-123")

        assert response["X-Correlation-ID"] == "abc-123"

    def test_metrics(self, admin_api_client):
        admin_api_client.post("/api/v1/admin/licenses/generate", {"tier": "S"}, format="json")
        admin_api_client.post("/api/v1/licenses/validate", {"key": "S-UNKNOWN"}, format="json")

        response = Client().get("/metrics")

        assert response.status_code == 200
        body = response.content.decode()
        assert "licenses_issued_total" in body
        assert 'license_validations_total{result="not_found"}' in body
        assert "http_requests_total" in body

    def test_unrouted_paths_do_not_add_label_series(self):
        Client().get("/scan-target-0193")

        body = Client().get("/metrics").content.decode()

        assert 'endpoint="unmatched"' in body
        assert "scan-target-0193" not in body
