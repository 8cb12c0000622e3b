"""
License domain events.

Domain events represent something that happened in the license domain.
The aggregate id of every event is the license key.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseIssued(DomainEvent):
    """Event raised when an administrator creates a license."""

    tier: str = ""
    expires_at: Optional[datetime] = None

    def payload(self) -> Dict[str, Any]:
        return {
            "tier": self.tier,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }


@dataclass(frozen=True)
class LicenseActivated(DomainEvent):
    """Event raised when a license is activated, possibly by creating it."""

    created: bool = False
    expires_at: Optional[datetime] = None

    def payload(self) -> Dict[str, Any]:
        return {
            "created": self.created,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }


@dataclass(frozen=True)
class LicenseRenewed(DomainEvent):
    """Event raised when a license is renewed."""

    expires_at: Optional[datetime] = None

    def payload(self) -> Dict[str, Any]:
        return {"expires_at": self.expires_at.isoformat() if self.expires_at else None}


@dataclass(frozen=True)
class LicenseDeactivated(DomainEvent):
    """Event raised when an administrator deactivates a license."""


@dataclass(frozen=True)
class LicenseExpired(DomainEvent):
    """Event raised when a validation observes an expired license."""

    expires_at: Optional[datetime] = None

    def payload(self) -> Dict[str, Any]:
        return {"expires_at": self.expires_at.isoformat() if self.expires_at else None}


@dataclass(frozen=True)
class LicenseBound(DomainEvent):
    """Event raised when a license is pinned to its first validating address."""

    bound_ip: str = ""

    def payload(self) -> Dict[str, Any]:
        return {"bound_ip": self.bound_ip}


@dataclass(frozen=True)
class LicenseUnbound(DomainEvent):
    """Event raised when an administrator clears an address binding."""

    previous_ip: str = ""

    def payload(self) -> Dict[str, Any]:
        return {"previous_ip": self.previous_ip}


LICENSE_EVENTS = (
    LicenseIssued,
    LicenseActivated,
    LicenseRenewed,
    LicenseDeactivated,
    LicenseExpired,
    LicenseBound,
    LicenseUnbound,
)
