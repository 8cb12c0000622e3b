"""
Django implementation of the LicenseStore port.

This adapter converts between domain entities and Django ORM models.
Per-key atomicity comes from ``transaction.atomic()`` plus a
``select_for_update()`` row lock; on SQLite the connection opens
transactions with BEGIN IMMEDIATE, which serializes writers.
"""
import logging
from typing import Callable, Optional, Tuple, TypeVar

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import DuplicateLicenseKeyError, LicenseNotFoundError
from core.domain.value_objects import Tier
from core.infrastructure.database import translate_database_errors
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_store import LicenseStore

logger = logging.getLogger(__name__)

R = TypeVar("R")


class DjangoLicenseStore(LicenseStore):
    """
    Django ORM implementation of LicenseStore.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Serializes read-modify-write per key with row locks
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            key=model.key,
            tier=Tier(model.tier),
            owner_email=model.owner_email,
            created_at=model.created_at,
            expires_at=model.expires_at,
            active=model.active,
            bound_ip=model.bound_ip,
            last_seen_ip=model.last_seen_ip,
            last_validated=model.last_validated,
        )

    def _apply(self, model: LicenseModel, license: License) -> LicenseModel:
        """
        Copy domain entity state onto a Django model.

        Args:
            model: Django License model (new or loaded)
            license: License domain entity

        Returns:
            The same Django model
        """
        model.id = license.id
        model.key = license.key
        model.tier = license.tier.code
        model.owner_email = license.owner_email
        model.created_at = license.created_at
        model.expires_at = license.expires_at
        model.active = license.active
        model.bound_ip = license.bound_ip
        model.last_seen_ip = license.last_seen_ip
        model.last_validated = license.last_validated
        return model

    def _locked(self, key: str) -> Optional[LicenseModel]:
        """Fetch a row under an exclusive lock. Call inside a transaction."""
        # pylint: disable=no-member
        return LicenseModel.objects.select_for_update().filter(key=key).first()

    def _write_if_changed(
        self, model: LicenseModel, current: License, updated: License
    ) -> None:
        """Persist ``updated`` onto ``model`` unless nothing changed."""
        if updated.key != current.key:
            raise ValueError("License key is immutable")
        if updated != current:
            self._apply(model, updated).save()

    @sync_to_async
    def get(self, key: str) -> Optional[License]:
        """
        Find a license by key.

        Args:
            key: License key string

        Returns:
            License entity or None if not found
        """
        with translate_database_errors("get"):
            # pylint: disable=no-member
            model = LicenseModel.objects.filter(key=key).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def insert(self, license: License) -> License:
        """
        Insert a new license record.

        Args:
            license: License entity to insert

        Returns:
            Inserted license entity

        Raises:
            DuplicateLicenseKeyError: If the key already exists
        """
        model = self._apply(LicenseModel(), license)
        with translate_database_errors("insert"):
            try:
                with transaction.atomic():
                    model.save(force_insert=True)
            except IntegrityError as exc:
                raise DuplicateLicenseKeyError(
                    f"License key {license.key[:8]}... already exists"
                ) from exc
        return self._to_domain(model)

    @sync_to_async
    def conditional_update(
        self, key: str, mutation: Callable[[License], Tuple[License, R]]
    ) -> Tuple[License, R]:
        """
        Read, mutate and write a license as one atomic unit.

        Args:
            key: License key string
            mutation: Pure function of the current record

        Returns:
            Tuple of (persisted license, mutation result)

        Raises:
            LicenseNotFoundError: If the key does not exist
        """
        with translate_database_errors("conditional_update"), transaction.atomic():
            model = self._locked(key)
            if model is None:
                raise LicenseNotFoundError(f"License {key[:8]}... not found")

            current = self._to_domain(model)
            updated, result = mutation(current)
            self._write_if_changed(model, current, updated)
        return updated, result

    @sync_to_async
    def upsert_on_missing(
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
        if defaults.key != key:
            raise ValueError("Default record must carry the requested key")

        with translate_database_errors("upsert_on_missing"), transaction.atomic():
            model = self._locked(key)
            if model is None:
                model = self._apply(LicenseModel(), defaults)
                try:
                    with transaction.atomic():
                        model.save(force_insert=True)
                    return defaults, True
                except IntegrityError:
                    logger.info("Concurrent insert for %s..., updating instead", key[:8])
                    model = self._locked(key)
                    if model is None:
                        raise

            current = self._to_domain(model)
            updated = mutation(current)
            self._write_if_changed(model, current, updated)
        return updated, False
