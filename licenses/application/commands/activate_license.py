"""
ActivateLicenseCommand.

Command to (re)activate a license key, creating it when unknown.
"""
from dataclasses import dataclass
from typing import Optional

from licenses.domain.license import DEFAULT_LICENSE_DAYS


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license and restart its validity window."""

    key: str
    days: int = DEFAULT_LICENSE_DAYS
    owner_email: Optional[str] = None
