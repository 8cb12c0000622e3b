"""
GetLicenseInfoQuery.

Query for the public, non-sensitive view of a license.
"""
from dataclasses import dataclass


@dataclass
class GetLicenseInfoQuery:
    """Query to get license info for a license key."""

    key: str
