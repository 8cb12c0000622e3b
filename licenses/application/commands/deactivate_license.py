"""
DeactivateLicenseCommand.
"""
from dataclasses import dataclass


@dataclass
class DeactivateLicenseCommand:
    """Command to deactivate a license."""

    key: str
