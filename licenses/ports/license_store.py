"""
License store port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.

Every operation is atomic with respect to concurrent callers on the
same key, and writes are durable before the operation returns.
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple, TypeVar

from licenses.domain.license import License

R = TypeVar("R")


class LicenseStore(ABC):
    """
    Abstract store for License records keyed by license key.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[License]:
        """
        Find a license by key.

        Args:
            key: License key string

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def insert(self, license: License) -> License:
        """
        Insert a new license record.

        Args:
            license: License entity to insert

        Returns:
            Inserted license entity

        Raises:
            DuplicateLicenseKeyError: If the key already exists
        """
        pass

    @abstractmethod
    async def conditional_update(
        self, key: str, mutation: Callable[[License], Tuple[License, R]]
    ) -> Tuple[License, R]:
        """
        Read, mutate and write a license as one atomic unit.

        The mutation receives the freshly read record while the key is
        exclusively held and returns the new state plus a result to hand
        back. The new state is only written when it differs.

        Args:
            key: License key string
            mutation: Pure function of the current record

        Returns:
            Tuple of (persisted license, mutation result)

        Raises:
            LicenseNotFoundError: If the key does not exist
        """
        pass

    @abstractmethod
    async def upsert_on_missing(
        self,
        key: str,
        defaults: License,
        mutation: Callable[[License], License],
    ) -> Tuple[License, bool]:
        """
        Insert ``defaults`` if the key is absent, otherwise apply ``mutation``.

        Args:
            key: License key string
            defaults: Record to insert when the key is unknown
            mutation: Pure function applied to an existing record

        Returns:
            Tuple of (persisted license, created)
        """
        pass
