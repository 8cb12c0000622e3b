"""
ValidateLicenseCommand.

Validation reads and may write the record (expiry, binding, last seen),
so it is modelled as a command rather than a query.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ValidateLicenseCommand:
    """Command to validate a license key for a requesting address."""

    key: str
    requester_ip: Optional[str] = None
