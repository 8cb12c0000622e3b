"""
GetLicenseInfoHandler.

Handler for the public license info query.
"""
from core.domain.exceptions import InvalidInputError, LicenseNotFoundError
from licenses.application.dto.license_dto import LicenseInfoDTO
from licenses.application.queries.get_license_info import GetLicenseInfoQuery
from licenses.ports.license_store import LicenseStore


class GetLicenseInfoHandler:
    """Handler for GetLicenseInfoQuery."""

    def __init__(self, license_store: LicenseStore):
        """Initialize handler with the license store."""
        self.license_store = license_store

    async def handle(self, query: GetLicenseInfoQuery) -> LicenseInfoDTO:
        """
        Handle get license info query.

        Owner email and addresses are never exposed; only whether the
        license is bound.

        Args:
            query: GetLicenseInfoQuery

        Returns:
            LicenseInfoDTO

        Raises:
            LicenseNotFoundError: If license key not found
        """
        if not query.key or not query.key.strip():
            raise InvalidInputError("License key is required")

        license = await self.license_store.get(query.key)
        if not license:
            raise LicenseNotFoundError(f"License {query.key[:8]}... not found")

        return LicenseInfoDTO(
            key=license.key,
            tier=license.tier.code,
            tier_name=license.tier.display_name,
            active=license.active,
            created_at=license.created_at,
            expires_at=license.expires_at,
            bound=license.is_bound,
            last_validated=license.last_validated,
        )
