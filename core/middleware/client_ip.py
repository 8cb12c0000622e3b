"""
Client address resolution.

The bot usually sits behind a reverse proxy, so the forwarded header
wins over the socket peer address for binding. Rate limiting keys on
the peer instead and only honours the forwarded header when the peer
is one of TRUSTED_PROXIES.
"""

from typing import Callable, Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse

IPV4_MAPPED_PREFIX = "::ffff:"


def strip_ipv4_mapped(address: str) -> str:
    """Turn ``::ffff:1.2.3.4`` into ``1.2.3.4``; other addresses pass through."""
    if address.lower().startswith(IPV4_MAPPED_PREFIX):
        return address[len(IPV4_MAPPED_PREFIX):]
    return address


def resolve_client_ip(request: HttpRequest) -> Optional[str]:
    """
    Resolve the requester address.

    Uses the first entry of X-Forwarded-For when present and non-empty,
    else REMOTE_ADDR.

    Args:
        request: HTTP request

    Returns:
        Address string, or None if neither source is set
    """
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    first = forwarded.split(",")[0].strip()
    address = first or (request.META.get("REMOTE_ADDR") or "").strip()
    if not address:
        return None
    return strip_ipv4_mapped(address)


def resolve_peer_ip(request: HttpRequest) -> Optional[str]:
    """
    Resolve the address of the connecting peer for rate limiting.

    X-Forwarded-For is only read when REMOTE_ADDR is a trusted proxy; the
    rightmost entry that is not itself a trusted proxy is used.

    Args:
        request: HTTP request

    Returns:
        Address string, or None if REMOTE_ADDR is not set
    """
    peer = strip_ipv4_mapped((request.META.get("REMOTE_ADDR") or "").strip())
    if not peer:
        return None

    trusted = getattr(settings, "TRUSTED_PROXIES", ())
    if peer not in trusted:
        return peer

    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    hops = [strip_ipv4_mapped(hop.strip()) for hop in forwarded.split(",") if hop.strip()]
    for hop in reversed(hops):
        if hop not in trusted:
            return hop
    return peer


class ClientIPMiddleware:
    """Attach the resolved requester address as ``request.client_ip``."""

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request.client_ip = resolve_client_ip(request)  # type: ignore
        return self.get_response(request)
