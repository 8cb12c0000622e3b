"""
Integration tests for concurrent validation against DjangoLicenseStore.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from asgiref.sync import async_to_sync
from django.db import connection

from core.infrastructure.events import InMemoryEventBus
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.infrastructure.models import License as LicenseModel


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
def test_concurrent_first_validations_bind_exactly_one(django_store, sample_license):
    """Test N simultaneous first validations from N addresses bind one address."""
    workers = 12
    async_to_sync(django_store.insert)(sample_license)
    handler = ValidateLicenseHandler(django_store, InMemoryEventBus(), bind_ip=True)
    barrier = threading.Barrier(workers)

    def validate(index):
        try:
            barrier.wait()
            return async_to_sync(handler.handle)(
                ValidateLicenseCommand(key=sample_license.key, requester_ip=f"10.0.0.{index}")
            )
        finally:
            connection.close()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(validate, range(workers)))

    row = LicenseModel.objects.get(key=sample_license.key)
    winners = [r for r in results if r.valid]

    assert len(winners) == 1
    assert winners[0].bound_ip == row.bound_ip
    assert row.last_seen_ip == row.bound_ip
    losers = [r for r in results if not r.valid]
    assert all(r.reason == "ip_mismatch" for r in losers)
    assert all(r.bound_ip == row.bound_ip for r in losers)
