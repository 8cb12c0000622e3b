"""
IssueLicenseCommand.

Command to generate and store a new license key.
"""
from dataclasses import dataclass
from typing import Optional

from licenses.domain.license import DEFAULT_LICENSE_DAYS


@dataclass
class IssueLicenseCommand:
    """Command to issue a new license for a tier."""

    tier: str
    owner_email: Optional[str] = None
    days: int = DEFAULT_LICENSE_DAYS
