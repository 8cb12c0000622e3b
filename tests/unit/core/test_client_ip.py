"""
Unit tests for requester address resolution.
"""
import pytest
from django.test import RequestFactory, override_settings

from core.middleware.client_ip import resolve_client_ip, resolve_peer_ip, strip_ipv4_mapped


@pytest.fixture
def rf():
    return RequestFactory()


class TestResolveClientIP:
    """Tests for resolve_client_ip."""

    def test_remote_addr(self, rf):
        request = rf.get("/", REMOTE_ADDR="198.51.100.4")
        assert resolve_client_ip(request) == "198.51.100.4"

    def test_forwarded_for_wins(self, rf):
        request = rf.get("/", REMOTE_ADDR="10.0.0.1", HTTP_X_FORWARDED_FOR="203.0.113.9")
        assert resolve_client_ip(request) == "203.0.113.9"

    def test_forwarded_for_first_entry(self, rf):
        """Test only the first entry of a forwarded chain is used."""
        request = rf.get(
            "/",
            REMOTE_ADDR="10.0.0.1",
            HTTP_X_FORWARDED_FOR=" 203.0.113.9 , 10.1.1.1, 10.2.2.2",
        )
        assert resolve_client_ip(request) == "203.0.113.9"

    def test_empty_forwarded_for_falls_back(self, rf):
        request = rf.get("/", REMOTE_ADDR="10.0.0.1", HTTP_X_FORWARDED_FOR="")
        assert resolve_client_ip(request) == "10.0.0.1"

    def test_ipv4_mapped_prefix_stripped(self, rf):
        request = rf.get("/", REMOTE_ADDR="::ffff:192.0.2.7")
        assert resolve_client_ip(request) == "192.0.2.7"

    def test_ipv4_mapped_prefix_stripped_from_forwarded(self, rf):
        request = rf.get("/", HTTP_X_FORWARDED_FOR="::FFFF:192.0.2.8")
        assert resolve_client_ip(request) == "192.0.2.8"

    def test_no_address(self, rf):
        request = rf.get("/", REMOTE_ADDR="")
        assert resolve_client_ip(request) is None


def test_plain_ipv6_untouched():
    assert strip_ipv4_mapped("2001:db8::1") == "2001:db8::1"


class TestResolvePeerIP:
    """Tests for resolve_peer_ip."""

    def test_forwarded_for_ignored_from_untrusted_peer(self, rf):
        request = rf.get("/", REMOTE_ADDR="10.0.0.1", HTTP_X_FORWARDED_FOR="198.51.100.7")
        assert resolve_peer_ip(request) == "10.0.0.1"

    @override_settings(TRUSTED_PROXIES=["10.0.0.1"])
    def test_forwarded_for_used_from_trusted_proxy(self, rf):
        request = rf.get("/", REMOTE_ADDR="10.0.0.1", HTTP_X_FORWARDED_FOR="198.51.100.7")
        assert resolve_peer_ip(request) == "198.51.100.7"

    @override_settings(TRUSTED_PROXIES=["10.0.0.1", "10.0.0.2"])
    def test_rightmost_untrusted_hop(self, rf):
        """Test a spoofed leading entry does not pick the limit key."""
        request = rf.get(
            "/",
            REMOTE_ADDR="10.0.0.1",
            HTTP_X_FORWARDED_FOR="1.1.1.1, 198.51.100.7, 10.0.0.2",
        )
        assert resolve_peer_ip(request) == "198.51.100.7"

    @override_settings(TRUSTED_PROXIES=["10.0.0.1"])
    def test_trusted_proxy_without_header(self, rf):
        request = rf.get("/", REMOTE_ADDR="10.0.0.1")
        assert resolve_peer_ip(request) == "10.0.0.1"

    def test_no_peer(self, rf):
        request = rf.get("/", REMOTE_ADDR="")
        assert resolve_peer_ip(request) is None
