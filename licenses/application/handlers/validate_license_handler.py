"""
ValidateLicenseHandler.

Runs the validation state machine as one atomic read-decide-write
against the license store.
"""
import logging
from typing import Optional

from django.conf import settings

from core import metrics
from core.domain.events import EventBus
from core.domain.exceptions import InvalidInputError, LicenseNotFoundError
from core.infrastructure.events import event_bus as default_event_bus
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.dto.license_dto import ValidationResultDTO
from licenses.domain.events import LicenseBound, LicenseExpired
from licenses.domain.services import LicenseValidator, ValidationDecision
from licenses.ports.license_store import LicenseStore

logger = logging.getLogger(__name__)


class ValidateLicenseHandler:
    """Handler for ValidateLicenseCommand."""

    def __init__(
        self,
        license_store: LicenseStore,
        event_bus: EventBus = None,
        bind_ip: Optional[bool] = None,
    ):
        """
        Initialize handler.

        Args:
            license_store: License store
            event_bus: Event bus (defaults to the process bus)
            bind_ip: Auto-bind policy (defaults to settings.LICENSE_BIND_IP)
        """
        self.license_store = license_store
        self.event_bus = event_bus or default_event_bus
        self.bind_ip = settings.LICENSE_BIND_IP if bind_ip is None else bind_ip

    async def handle(self, command: ValidateLicenseCommand) -> ValidationResultDTO:
        """
        Handle validate license command.

        Negative outcomes are returned as decisions, never raised.

        Args:
            command: ValidateLicenseCommand

        Returns:
            ValidationResultDTO

        Raises:
            InvalidInputError: If the key is missing
        """
        if not command.key or not command.key.strip():
            raise InvalidInputError("License key is required")

        try:
            license, decision = await self.license_store.conditional_update(
                command.key,
                lambda current: LicenseValidator.evaluate(
                    current, command.requester_ip, bind_ip=self.bind_ip
                ),
            )
        except LicenseNotFoundError:
            decision = LicenseValidator.not_found()
        else:
            if decision.newly_expired:
                await self.event_bus.publish(
                    LicenseExpired.new(license.key, expires_at=license.expires_at)
                )
            if decision.newly_bound:
                await self.event_bus.publish(
                    LicenseBound.new(license.key, bound_ip=license.bound_ip)
                )

        result = "valid" if decision.valid else decision.reason.value
        metrics.license_validations_total.labels(result=result).inc()
        logger.info(
            "License validation: %s... result=%s", command.key[:8], result,
            extra={"requester_ip": command.requester_ip},
        )

        return self._to_dto(decision)

    @staticmethod
    def _to_dto(decision: ValidationDecision) -> ValidationResultDTO:
        return ValidationResultDTO(
            valid=decision.valid,
            reason=decision.reason.value if decision.reason else None,
            tier=decision.tier.code if decision.tier else None,
            tier_name=decision.tier.display_name if decision.tier else None,
            expires_at=decision.expires_at,
            bound_ip=decision.bound_ip,
            requester_ip=decision.requester_ip,
        )
