"""
Unit tests for HTTP metric endpoint labels.
"""
import pytest
from django.test import RequestFactory

from core.middleware.metrics import UNMATCHED_ENDPOINT, endpoint_label


@pytest.fixture
def rf():
    return RequestFactory()


class TestEndpointLabel:
    """Tests for endpoint_label."""

    def test_license_keys_share_one_label(self, rf):
        first = endpoint_label(rf.get("/api/v1/licenses/G-0123456789ABCDEF01234567"))
        second = endpoint_label(rf.get("/api/v1/licenses/X-NEW"))

        assert first == second == "/api/v1/licenses/<str:key>"

    def test_validate_route(self, rf):
        assert endpoint_label(rf.post("/api/v1/licenses/validate")) == "/api/v1/licenses/validate"

    @pytest.mark.parametrize("path", ["/wp-login.php", "/.env", "/api/v1/nope/deeper"])
    def test_unrouted_paths_share_one_label(self, rf, path):
        assert endpoint_label(rf.get(path)) == UNMATCHED_ENDPOINT
