"""
License DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class IssuedLicenseDTO:
    """DTO for a newly issued license."""

    key: str
    tier: str
    tier_name: str
    owner_email: Optional[str]
    expires_at: datetime
    created_at: datetime


@dataclass
class ActivationResultDTO:
    """DTO for activate response."""

    key: str
    expires_at: datetime
    created: bool
    ok: bool = True


@dataclass
class RenewalResultDTO:
    """DTO for renew response."""

    key: str
    expires_at: datetime
    ok: bool = True


@dataclass
class DeactivationResultDTO:
    """DTO for deactivate response. Reports ok whether or not the key existed."""

    ok: bool = True


@dataclass
class ValidationResultDTO:
    """DTO for a validation decision."""

    valid: bool
    reason: Optional[str] = None
    tier: Optional[str] = None
    tier_name: Optional[str] = None
    expires_at: Optional[datetime] = None
    bound_ip: Optional[str] = None
    requester_ip: Optional[str] = None


@dataclass
class LicenseInfoDTO:
    """DTO for the public license info view."""

    key: str
    tier: str
    tier_name: str
    active: bool
    created_at: datetime
    expires_at: datetime
    bound: bool
    last_validated: Optional[datetime]
