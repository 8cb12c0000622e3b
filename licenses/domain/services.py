"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity: key generation, the validation state
machine and the administrative lifecycle transitions.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple, Union

from core.domain.exceptions import (
    DuplicateLicenseKeyError,
    InvalidInputError,
    LicenseNotFoundError,
)
from core.domain.value_objects import Tier, ValidationReason
from licenses.domain.license import (
    DEFAULT_LICENSE_DAYS,
    License,
    compute_expiry,
    utcnow,
)
from licenses.domain.license_key import generate_license_key, looks_like_generated_key
from licenses.ports.license_store import LicenseStore

logger = logging.getLogger(__name__)

# One regeneration after a key collision, then give up.
KEY_GENERATION_ATTEMPTS = 2


class LicenseKeyGenerator:
    """Domain service for license key generation."""

    @staticmethod
    def generate(tier: Union[Tier, str]) -> str:
        """
        Generate a license key.

        Args:
            tier: Tier, tier code or tier name

        Returns:
            Generated license key string
        """
        return generate_license_key(tier)


@dataclass(frozen=True)
class ValidationDecision:
    """Outcome of evaluating one validation request against a record."""

    valid: bool
    reason: Optional[ValidationReason] = None
    tier: Optional[Tier] = None
    expires_at: Optional[datetime] = None
    bound_ip: Optional[str] = None
    requester_ip: Optional[str] = None
    newly_bound: bool = False
    newly_expired: bool = False


class LicenseValidator:
    """Domain service for license validation."""

    @staticmethod
    def not_found() -> ValidationDecision:
        """Decision for a key that has no record."""
        return ValidationDecision(valid=False, reason=ValidationReason.NOT_FOUND)

    @staticmethod
    def evaluate(
        license: License,
        requester_ip: Optional[str],
        bind_ip: bool = True,
        current_time: Optional[datetime] = None,
    ) -> Tuple[License, ValidationDecision]:
        """
        Decide validity and compute the record's next state.

        Rules apply in strict order: deactivated, expired, IP mismatch,
        one-time binding, then last-seen tracking. Only the expired and
        successful paths change the record.

        Args:
            license: Freshly read License entity
            requester_ip: Resolved address of the caller
            bind_ip: Whether an unbound license gets pinned to the caller
            current_time: Decision instant (defaults to now)

        Returns:
            Tuple of (next license state, decision)
        """
        now = current_time or utcnow()

        if not license.active:
            return license, ValidationDecision(valid=False, reason=ValidationReason.DEACTIVATED)

        if license.is_expired(now):
            return license.mark_expired(), ValidationDecision(
                valid=False,
                reason=ValidationReason.EXPIRED,
                expires_at=license.expires_at,
                newly_expired=True,
            )

        if license.is_bound and license.bound_ip != requester_ip:
            return license, ValidationDecision(
                valid=False,
                reason=ValidationReason.IP_MISMATCH,
                bound_ip=license.bound_ip,
                requester_ip=requester_ip,
            )

        updated = license
        newly_bound = False
        if not license.is_bound and bind_ip and requester_ip:
            updated = updated.bind(requester_ip)
            newly_bound = True

        updated = updated.record_validation(requester_ip, now)
        return updated, ValidationDecision(
            valid=True,
            tier=updated.tier,
            expires_at=updated.expires_at,
            bound_ip=updated.bound_ip,
            requester_ip=requester_ip,
            newly_bound=newly_bound,
        )


class LicenseLifecycleManager:
    """Domain service for managing license lifecycle."""

    @staticmethod
    async def issue_license(
        tier: Union[Tier, str],
        store: LicenseStore,
        owner_email: Optional[str] = None,
        days: int = DEFAULT_LICENSE_DAYS,
        current_time: Optional[datetime] = None,
    ) -> License:
        """
        Generate a key and insert a new active license.

        Args:
            tier: Tier, tier code or tier name
            store: License store
            owner_email: Optional purchaser email
            days: Validity period in days
            current_time: Issuance time (defaults to now)

        Returns:
            Inserted license entity

        Raises:
            InvalidTierError: If tier is invalid
            DuplicateLicenseKeyError: If regeneration also collided
        """
        tier = Tier.parse(tier)
        for attempt in range(1, KEY_GENERATION_ATTEMPTS + 1):
            license = License.create(
                key=LicenseKeyGenerator.generate(tier),
                tier=tier,
                days=days,
                owner_email=owner_email,
                current_time=current_time,
            )
            try:
                return await store.insert(license)
            except DuplicateLicenseKeyError:
                logger.warning(
                    "Generated license key collided (attempt %d/%d)",
                    attempt,
                    KEY_GENERATION_ATTEMPTS,
                )
                if attempt == KEY_GENERATION_ATTEMPTS:
                    raise
        raise DuplicateLicenseKeyError()

    @staticmethod
    async def activate_license(
        key: str,
        store: LicenseStore,
        days: int = DEFAULT_LICENSE_DAYS,
        owner_email: Optional[str] = None,
        current_time: Optional[datetime] = None,
    ) -> Tuple[License, bool]:
        """
        Activate a license, creating a Sentinel license if the key is unknown.

        Args:
            key: License key string
            store: License store
            days: Validity period in days, counted from now
            owner_email: Optional purchaser email to record
            current_time: Activation time (defaults to now)

        Returns:
            Tuple of (license, created)
        """
        _require_key(key)
        now = current_time or utcnow()
        defaults = License.create(
            key=key,
            tier=Tier.SENTINEL,
            days=days,
            owner_email=owner_email,
            current_time=now,
        )
        license, created = await store.upsert_on_missing(
            key,
            defaults,
            lambda current: current.activate(days, owner_email, now),
        )
        if created:
            logger.warning(
                "Activation provisioned unknown license key %s... (generated format: %s)",
                key[:8],
                looks_like_generated_key(key),
            )
        return license, created

    @staticmethod
    async def renew_license(
        key: str,
        store: LicenseStore,
        days: int = DEFAULT_LICENSE_DAYS,
        current_time: Optional[datetime] = None,
    ) -> License:
        """
        Renew a license.

        Args:
            key: License key string
            store: License store
            days: Validity period in days, counted from now
            current_time: Renewal time (defaults to now)

        Returns:
            Renewed license entity

        Raises:
            LicenseNotFoundError: If the key is unknown
        """
        _require_key(key)
        now = current_time or utcnow()
        # Bad input is rejected before the row lock is taken.
        compute_expiry(days, now)
        renewed, _ = await store.conditional_update(
            key, lambda current: (current.renew(days, now), None)
        )
        return renewed

    @staticmethod
    async def deactivate_license(key: str, store: LicenseStore) -> Optional[License]:
        """
        Deactivate a license. Unknown keys are ignored.

        Args:
            key: License key string
            store: License store

        Returns:
            Deactivated license entity, or None if the key is unknown
        """
        _require_key(key)
        try:
            deactivated, _ = await store.conditional_update(
                key, lambda current: (current.deactivate(), None)
            )
        except LicenseNotFoundError:
            logger.info("Deactivate requested for unknown license key %s...", key[:8])
            return None
        return deactivated

    @staticmethod
    async def clear_binding(key: str, store: LicenseStore) -> Tuple[License, Optional[str]]:
        """
        Clear the address binding of a license.

        Args:
            key: License key string
            store: License store

        Returns:
            Tuple of (license, previously bound address)

        Raises:
            LicenseNotFoundError: If the key is unknown
        """
        _require_key(key)
        return await store.conditional_update(
            key, lambda current: (current.unbind(), current.bound_ip)
        )


def _require_key(key: str) -> None:
    """Reject missing or blank keys before touching the store."""
    if not key or not key.strip():
        raise InvalidInputError("License key is required")
