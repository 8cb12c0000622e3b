"""
Unit tests for InMemoryLicenseStore.
"""

import pytest

from core.domain.exceptions import DuplicateLicenseKeyError, LicenseNotFoundError
from licenses.domain.license import License


@pytest.mark.asyncio
class TestInMemoryLicenseStore:
    """Tests for InMemoryLicenseStore."""

    async def test_insert_and_get(self, memory_store, sample_license):
        await memory_store.insert(sample_license)

        assert await memory_store.get(sample_license.key) == sample_license
        assert await memory_store.get("S-MISSING") is None

    async def test_insert_duplicate(self, memory_store, sample_license):
        await memory_store.insert(sample_license)

        with pytest.raises(DuplicateLicenseKeyError):
            await memory_store.insert(sample_license)

    async def test_conditional_update(self, memory_store, sample_license):
        await memory_store.insert(sample_license)

        updated, result = await memory_store.conditional_update(
            sample_license.key, lambda current: (current.deactivate(), "done")
        )

        assert result == "done"
        assert updated.active is False
        assert (await memory_store.get(sample_license.key)).active is False

    async def test_conditional_update_missing(self, memory_store):
        with pytest.raises(LicenseNotFoundError):
            await memory_store.conditional_update("S-MISSING", lambda current: (current, None))

    async def test_unknown_keys_leave_no_locks(self, memory_store, sample_license):
        await memory_store.insert(sample_license)

        for i in range(50):
            assert await memory_store.get(f"S-NOPE{i}") is None
            with pytest.raises(LicenseNotFoundError):
                await memory_store.conditional_update(
                    f"S-NOPE{i}", lambda current: (current, None)
                )

        assert list(memory_store._locks) == [sample_license.key]

    async def test_conditional_update_rejects_key_change(self, memory_store, sample_license):
        await memory_store.insert(sample_license)

        def rekey(current):
            return License.create(key="S-OTHER", tier="S"), None

        with pytest.raises(ValueError):
            await memory_store.conditional_update(sample_license.key, rekey)
        assert await memory_store.get("S-OTHER") is None

    async def test_upsert_inserts_defaults(self, memory_store):
        defaults = License.create(key="X-NEW", tier="S", days=7)

        license, created = await memory_store.upsert_on_missing(
            "X-NEW", defaults, lambda current: current.deactivate()
        )

        assert created is True
        assert license == defaults
        assert len(memory_store) == 1

    async def test_upsert_mutates_existing(self, memory_store, sample_license):
        await memory_store.insert(sample_license.deactivate())
        defaults = License.create(key=sample_license.key, tier="S")

        license, created = await memory_store.upsert_on_missing(
            sample_license.key, defaults, lambda current: current.activate(days=3)
        )

        assert created is False
        assert license.active is True
        assert license.tier == sample_license.tier

    async def test_upsert_requires_matching_defaults(self, memory_store):
        with pytest.raises(ValueError):
            await memory_store.upsert_on_missing(
                "X-ONE", License.create(key="X-TWO", tier="S"), lambda current: current
            )
