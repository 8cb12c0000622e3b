"""
In-memory implementation of the LicenseStore port.

Records live in a process-local dict; each key has its own lock so
read-modify-write on one key is serialized while different keys
proceed in parallel. Nothing survives a restart.
"""
import threading
from typing import Callable, Dict, Optional, Tuple, TypeVar

from core.domain.exceptions import DuplicateLicenseKeyError, LicenseNotFoundError
from licenses.domain.license import License
from licenses.ports.license_store import LicenseStore

R = TypeVar("R")


class InMemoryLicenseStore(LicenseStore):
    """Process-local LicenseStore with one lock per key."""

    def __init__(self):
        """Initialize an empty store."""
        self._records: Dict[str, License] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, key: str, existing_only: bool = False) -> Optional[threading.Lock]:
        """
        Return the lock guarding ``key``, creating it on first use.

        With ``existing_only`` no lock is created for a key that has no
        record, and None is returned instead. Locks therefore only ever
        exist for stored keys and keys being inserted.
        """
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                if existing_only and key not in self._records:
                    return None
                lock = self._locks[key] = threading.Lock()
            return lock

    def __len__(self) -> int:
        return len(self._records)

    async def get(self, key: str) -> Optional[License]:
        return self._records.get(key)

    async def insert(self, license: License) -> License:
        with self._lock_for(license.key):
            if license.key in self._records:
                raise DuplicateLicenseKeyError(f"License key {license.key[:8]}... already exists")
            self._records[license.key] = license
        return license

    async def conditional_update(
        self, key: str, mutation: Callable[[License], Tuple[License, R]]
    ) -> Tuple[License, R]:
        lock = self._lock_for(key, existing_only=True)
        if lock is None:
            raise LicenseNotFoundError(f"License {key[:8]}... not found")

        with lock:
            current = self._records.get(key)
            if current is None:
                raise LicenseNotFoundError(f"License {key[:8]}... not found")

            updated, result = mutation(current)
            if updated.key != current.key:
                raise ValueError("License key is immutable")
            self._records[key] = updated
        return updated, result

    async def upsert_on_missing(
        self,
        key: str,
        defaults: License,
        mutation: Callable[[License], License],
    ) -> Tuple[License, bool]:
        if defaults.key != key:
            raise ValueError("Default record must carry the requested key")

        with self._lock_for(key):
            current = self._records.get(key)
            if current is None:
                self._records[key] = defaults
                return defaults, True

            updated = mutation(current)
            if updated.key != current.key:
                raise ValueError("License key is immutable")
            self._records[key] = updated
        return updated, False
