"""
Pytest configuration and shared fixtures.
"""

from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync

from core.domain.events import EventHandler
from core.infrastructure.events import InMemoryEventBus
from licenses.domain.events import LICENSE_EVENTS
from licenses.domain.license import License, utcnow
from licenses.domain.license_key import generate_license_key
from licenses.infrastructure.repositories.django_license_store import DjangoLicenseStore
from licenses.infrastructure.repositories.memory_license_store import InMemoryLicenseStore

ADMIN_SECRET = "test-admin-secret"


class RecordingEventHandler(EventHandler):
    """Event handler that keeps every event it sees."""

    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


@pytest.fixture
def memory_store():
    """Fixture for an empty InMemoryLicenseStore."""
    return InMemoryLicenseStore()


@pytest.fixture
def django_store():
    """Fixture for DjangoLicenseStore."""
    return DjangoLicenseStore()


@pytest.fixture
def event_bus():
    """Fixture for an isolated event bus with no subscribers."""
    return InMemoryEventBus()


@pytest.fixture
def recorded_events(event_bus):
    """Subscribe a recording handler to every license event and return its list."""
    handler = RecordingEventHandler()
    for event_type in LICENSE_EVENTS:
        event_bus.subscribe(event_type, handler)
    return handler.events


@pytest.fixture
def sample_license():
    """Fixture for an active, unbound Guardian license."""
    return License.create(
        key=generate_license_key("G"),
        tier="G",
        days=30,
        owner_email="owner@example.com",
    )


@pytest.fixture
def expired_license():
    """Fixture for a license whose expiry passed an hour ago."""
    issued_at = utcnow() - timedelta(days=1, hours=1)
    return License.create(
        key=generate_license_key("A"),
        tier="A",
        days=1,
        current_time=issued_at,
    )


@pytest.fixture
def db_license(db, django_store, sample_license):
    """Fixture for a License saved in database."""
    return async_to_sync(django_store.insert)(sample_license)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_api_client():
    """Fixture for DRF API client carrying the admin secret."""
    from rest_framework.test import APIClient

    client = APIClient()
    client.credentials(HTTP_X_ADMIN_TOKEN=ADMIN_SECRET)
    return client
