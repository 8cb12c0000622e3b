"""
RenewLicenseCommand.

Command to renew an existing license.
"""
from dataclasses import dataclass

from licenses.domain.license import DEFAULT_LICENSE_DAYS


@dataclass
class RenewLicenseCommand:
    """Command to renew a license with a fresh validity period."""

    key: str
    days: int = DEFAULT_LICENSE_DAYS
