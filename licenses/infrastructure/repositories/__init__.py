"""
License store adapters and backend selection.
"""
from functools import lru_cache

from django.conf import settings

from licenses.ports.license_store import LicenseStore

STORE_BACKENDS = ("django", "memory")


@lru_cache(maxsize=None)
def _build_store(backend: str) -> LicenseStore:
    if backend == "django":
        from licenses.infrastructure.repositories.django_license_store import DjangoLicenseStore

        return DjangoLicenseStore()
    if backend == "memory":
        from licenses.infrastructure.repositories.memory_license_store import (
            InMemoryLicenseStore,
        )

        return InMemoryLicenseStore()
    raise ValueError(
        f"Unknown LICENSE_STORE_BACKEND {backend!r}; expected one of {', '.join(STORE_BACKENDS)}"
    )


def get_license_store() -> LicenseStore:
    """
    Return the configured license store.

    One store instance is shared per backend so the in-memory backend
    keeps its records across requests.
    """
    return _build_store(getattr(settings, "LICENSE_STORE_BACKEND", "django"))
