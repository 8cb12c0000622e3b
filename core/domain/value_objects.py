"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Union

from core.domain.exceptions import InvalidInputError, InvalidTierError


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True, eq=False)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise InvalidInputError(f"Invalid email address: {self.value}")
        if len(self.value) > 254:
            raise InvalidInputError("Email address too long")

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


class Tier(Enum):
    """License tier value object, stored by its one-letter code."""

    SENTINEL = "S"
    GUARDIAN = "G"
    AEGIS = "A"

    @property
    def code(self) -> str:
        """Return the one-letter tier code used in keys."""
        return self.value

    @property
    def display_name(self) -> str:
        """Return the human-readable tier name."""
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: Union["Tier", str, None]) -> "Tier":
        """
        Parse a tier from a code ("S") or a name ("Sentinel").

        Args:
            value: Tier, tier code or tier name (case-insensitive)

        Returns:
            Matching Tier

        Raises:
            InvalidTierError: If value names no tier
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise InvalidTierError(f"Invalid tier: {value!r}. Expected one of S, G, A")

        candidate = value.strip().upper()
        for tier in cls:
            if candidate in (tier.value, tier.name):
                return tier
        raise InvalidTierError(f"Invalid tier: {value!r}. Expected one of S, G, A")

    def __str__(self) -> str:
        """Return tier code as string."""
        return self.value


class ValidationReason(Enum):
    """Reason codes for a negative validation decision."""

    NOT_FOUND = "not_found"
    DEACTIVATED = "deactivated"
    EXPIRED = "expired"
    IP_MISMATCH = "ip_mismatch"

    def __str__(self) -> str:
        """Return reason as string."""
        return self.value
