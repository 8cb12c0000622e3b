"""
Event handlers for domain events.

These handlers process domain events asynchronously for side effects
like audit logging and business metrics.
"""

import logging

from asgiref.sync import sync_to_async

from core import metrics
from core.domain.events import DomainEvent, EventBus, EventHandler
from licenses.domain.events import (
    LICENSE_EVENTS,
    LicenseActivated,
    LicenseBound,
    LicenseDeactivated,
    LicenseExpired,
    LicenseIssued,
    LicenseRenewed,
)

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "system"
ADMIN_ACTOR = "admin"

# Events caused by a validation rather than an administrator.
_SYSTEM_EVENTS = (LicenseExpired, LicenseBound)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Persists one AuditLog row per domain event.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s...",
            event.event_type,
            event.aggregate_id[:8],
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )
        await self._write(event)

    @sync_to_async
    def _write(self, event: DomainEvent) -> None:
        from licenses.infrastructure.models import AuditLog

        actor = SYSTEM_ACTOR if isinstance(event, _SYSTEM_EVENTS) else ADMIN_ACTOR
        # pylint: disable=no-member
        AuditLog.objects.get_or_create(
            event_id=event.event_id,
            defaults={
                "entity_type": "license",
                "entity_id": event.aggregate_id,
                "action": event.event_type,
                "changes": event.payload(),
                "actor": actor,
            },
        )


class MetricsEventHandler(EventHandler):
    """
    Event handler for business metrics.

    Increments Prometheus counters for license lifecycle events.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for metrics.

        Args:
            event: Domain event
        """
        if isinstance(event, LicenseIssued):
            metrics.licenses_issued_total.labels(tier=event.tier).inc()
        elif isinstance(event, LicenseActivated):
            metrics.licenses_activated_total.labels(created=str(event.created).lower()).inc()
        elif isinstance(event, LicenseRenewed):
            metrics.licenses_renewed_total.inc()
        elif isinstance(event, LicenseDeactivated):
            metrics.licenses_deactivated_total.inc()
        elif isinstance(event, LicenseExpired):
            metrics.licenses_expired_total.inc()
        elif isinstance(event, LicenseBound):
            metrics.licenses_bound_total.inc()


def register_event_handlers(bus: EventBus = None) -> None:
    """Register all event handlers with the event bus."""
    if bus is None:
        from core.infrastructure.events import event_bus

        bus = event_bus

    audit_handler = AuditLogEventHandler()
    metrics_handler = MetricsEventHandler()

    for event_type in LICENSE_EVENTS:
        bus.subscribe(event_type, audit_handler)
        bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")
