"""
License domain entity.

This is the core domain entity representing a license record.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from core.domain.exceptions import InvalidInputError
from core.domain.value_objects import Email, Tier

DEFAULT_LICENSE_DAYS = 30
SECONDS_PER_DAY = 86400


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def compute_expiry(days: int, start: datetime) -> datetime:
    """
    Compute an absolute expiry ``days`` whole days after ``start``.

    Args:
        days: Validity period in days (positive integer)
        start: Start instant

    Returns:
        Expiry datetime

    Raises:
        InvalidInputError: If days is not a positive integer
    """
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise InvalidInputError(f"days must be a positive integer, got {days!r}")
    return start + timedelta(seconds=days * SECONDS_PER_DAY)


def normalize_email(owner_email: Optional[str]) -> Optional[str]:
    """Validate an optional owner email; blank values mean no email."""
    if owner_email is None or not owner_email.strip():
        return None
    return str(Email(owner_email.strip()))


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Represents a single license record keyed by its opaque key.
    This is an immutable value object; every transition returns
    a new instance.
    """

    id: uuid.UUID
    key: str
    tier: Tier
    owner_email: Optional[str]
    created_at: datetime
    expires_at: datetime
    active: bool = True
    bound_ip: Optional[str] = None
    last_seen_ip: Optional[str] = None
    last_validated: Optional[datetime] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.key or len(self.key.strip()) == 0:
            raise InvalidInputError("License key cannot be empty")
        if len(self.key) > 100:
            raise InvalidInputError("License key too long")
        if not isinstance(self.tier, Tier):
            raise InvalidInputError("Tier is required")

    @classmethod
    def create(
        cls,
        key: str,
        tier: Union[Tier, str],
        days: int = DEFAULT_LICENSE_DAYS,
        owner_email: Optional[str] = None,
        current_time: Optional[datetime] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new, active and unbound License entity.

        Args:
            key: License key string
            tier: Tier, tier code or tier name
            days: Validity period in days
            owner_email: Optional purchaser email
            current_time: Issuance time (defaults to now)
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        now = current_time or utcnow()
        return cls(
            id=license_id or uuid.uuid4(),
            key=key,
            tier=Tier.parse(tier),
            owner_email=normalize_email(owner_email),
            created_at=now,
            expires_at=compute_expiry(days, now),
            active=True,
        )

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check if the license is expired at the given instant.

        A license is invalid at and after ``expires_at``.
        """
        return self.expires_at <= (current_time or utcnow())

    @property
    def is_bound(self) -> bool:
        """True once an address has been pinned to this license."""
        return bool(self.bound_ip)

    def activate(
        self,
        days: int = DEFAULT_LICENSE_DAYS,
        owner_email: Optional[str] = None,
        current_time: Optional[datetime] = None,
    ) -> "License":
        """
        Re-enable the license and restart its validity window.

        The expiry is recomputed from now, not extended from the old expiry.
        The owner email is only replaced when one is given.
        """
        now = current_time or utcnow()
        email = normalize_email(owner_email)
        return replace(
            self,
            active=True,
            expires_at=compute_expiry(days, now),
            owner_email=email if email else self.owner_email,
        )

    def renew(
        self, days: int = DEFAULT_LICENSE_DAYS, current_time: Optional[datetime] = None
    ) -> "License":
        """Set a fresh expiry of ``days`` from now and re-enable the license."""
        now = current_time or utcnow()
        return replace(self, active=True, expires_at=compute_expiry(days, now))

    def deactivate(self) -> "License":
        """Turn the administrative kill switch off."""
        return replace(self, active=False)

    def mark_expired(self) -> "License":
        """Record that a validation observed the license past its expiry."""
        return replace(self, active=False)

    def bind(self, ip: str) -> "License":
        """
        Pin the license to a network address.

        Raises:
            ValueError: If the license is already bound or ip is empty
        """
        if self.is_bound:
            raise ValueError("License is already bound to an address")
        if not ip:
            raise ValueError("Cannot bind to an empty address")
        return replace(self, bound_ip=ip)

    def unbind(self) -> "License":
        """Clear the address binding. Administrative use only."""
        return replace(self, bound_ip=None)

    def record_validation(
        self, ip: Optional[str], current_time: Optional[datetime] = None
    ) -> "License":
        """Track the address and time of a successful validation."""
        return replace(self, last_seen_ip=ip, last_validated=current_time or utcnow())
