"""
License lifecycle handlers.

Handlers for issue, activate, renew and deactivate license commands.
Every successful transition publishes a domain event.
"""
import logging

from core.domain.events import EventBus
from core.infrastructure.events import event_bus as default_event_bus
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.commands.deactivate_license import DeactivateLicenseCommand
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.dto.license_dto import (
    ActivationResultDTO,
    DeactivationResultDTO,
    IssuedLicenseDTO,
    RenewalResultDTO,
)
from licenses.domain.events import (
    LicenseActivated,
    LicenseDeactivated,
    LicenseIssued,
    LicenseRenewed,
)
from licenses.domain.services import LicenseLifecycleManager
from licenses.ports.license_store import LicenseStore

logger = logging.getLogger(__name__)


class IssueLicenseHandler:
    """Handler for IssueLicenseCommand."""

    def __init__(self, license_store: LicenseStore, event_bus: EventBus = None):
        """Initialize handler with the license store."""
        self.license_store = license_store
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: IssueLicenseCommand) -> IssuedLicenseDTO:
        """
        Handle issue license command.

        Args:
            command: IssueLicenseCommand

        Returns:
            IssuedLicenseDTO

        Raises:
            InvalidTierError: If tier is invalid
            InvalidInputError: If days or owner email are invalid
            DuplicateLicenseKeyError: If key generation collided twice
        """
        license = await LicenseLifecycleManager.issue_license(
            tier=command.tier,
            store=self.license_store,
            owner_email=command.owner_email,
            days=command.days,
        )
        logger.info(
            "License issued: %s... tier=%s", license.key[:8], license.tier.code
        )

        await self.event_bus.publish(
            LicenseIssued.new(
                license.key, tier=license.tier.code, expires_at=license.expires_at
            )
        )

        return IssuedLicenseDTO(
            key=license.key,
            tier=license.tier.code,
            tier_name=license.tier.display_name,
            owner_email=license.owner_email,
            expires_at=license.expires_at,
            created_at=license.created_at,
        )


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(self, license_store: LicenseStore, event_bus: EventBus = None):
        """Initialize handler with the license store."""
        self.license_store = license_store
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: ActivateLicenseCommand) -> ActivationResultDTO:
        """
        Handle activate license command.

        Unknown keys are provisioned as Sentinel licenses.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivationResultDTO with the created flag
        """
        license, created = await LicenseLifecycleManager.activate_license(
            key=command.key,
            store=self.license_store,
            days=command.days,
            owner_email=command.owner_email,
        )

        await self.event_bus.publish(
            LicenseActivated.new(license.key, created=created, expires_at=license.expires_at)
        )

        return ActivationResultDTO(
            key=license.key, expires_at=license.expires_at, created=created
        )


class RenewLicenseHandler:
    """Handler for RenewLicenseCommand."""

    def __init__(self, license_store: LicenseStore, event_bus: EventBus = None):
        """Initialize handler with the license store."""
        self.license_store = license_store
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: RenewLicenseCommand) -> RenewalResultDTO:
        """
        Handle renew license command.

        Args:
            command: RenewLicenseCommand

        Returns:
            RenewalResultDTO

        Raises:
            LicenseNotFoundError: If license not found
        """
        renewed = await LicenseLifecycleManager.renew_license(
            key=command.key, store=self.license_store, days=command.days
        )

        await self.event_bus.publish(
            LicenseRenewed.new(renewed.key, expires_at=renewed.expires_at)
        )

        return RenewalResultDTO(key=renewed.key, expires_at=renewed.expires_at)


class DeactivateLicenseHandler:
    """Handler for DeactivateLicenseCommand."""

    def __init__(self, license_store: LicenseStore, event_bus: EventBus = None):
        """Initialize handler with the license store."""
        self.license_store = license_store
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: DeactivateLicenseCommand) -> DeactivationResultDTO:
        """
        Handle deactivate license command.

        Args:
            command: DeactivateLicenseCommand

        Returns:
            DeactivationResultDTO (ok even when the key is unknown)
        """
        deactivated = await LicenseLifecycleManager.deactivate_license(
            key=command.key, store=self.license_store
        )

        if deactivated:
            await self.event_bus.publish(LicenseDeactivated.new(deactivated.key))

        return DeactivationResultDTO()
