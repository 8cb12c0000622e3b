"""
Unit tests for the in-memory event bus.
"""
import pytest

from core.domain.events import EventHandler
from core.infrastructure.events import InMemoryEventBus
from licenses.domain.events import LicenseBound, LicenseRenewed


class FailingHandler(EventHandler):
    async def handle(self, event):
        raise RuntimeError("handler failed")


class CollectingHandler(EventHandler):
    def __init__(self):
        self.seen = []

    async def handle(self, event):
        self.seen.append(event)


class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    @pytest.mark.asyncio
    async def test_publish_reaches_subscribers(self):
        bus = InMemoryEventBus()
        handler = CollectingHandler()
        bus.subscribe(LicenseBound, handler)

        event = LicenseBound.new("S-ABC", bound_ip="10.0.0.1")
        await bus.publish(event)

        assert handler.seen == [event]

    @pytest.mark.asyncio
    async def test_other_event_types_not_delivered(self):
        bus = InMemoryEventBus()
        handler = CollectingHandler()
        bus.subscribe(LicenseBound, handler)

        await bus.publish(LicenseRenewed.new("S-ABC"))

        assert handler.seen == []

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_fail_publisher(self):
        """Test a failing handler neither raises nor blocks other handlers."""
        bus = InMemoryEventBus()
        collecting = CollectingHandler()
        bus.subscribe(LicenseBound, FailingHandler())
        bus.subscribe(LicenseBound, collecting)

        await bus.publish(LicenseBound.new("S-ABC", bound_ip="10.0.0.1"))

        assert len(collecting.seen) == 1

    def test_subscribe_same_handler_class_once(self):
        bus = InMemoryEventBus()
        bus.subscribe(LicenseBound, CollectingHandler())
        bus.subscribe(LicenseBound, CollectingHandler())

        assert len(bus.handlers_for(LicenseBound)) == 1


def test_event_to_dict():
    event = LicenseBound.new("G-0123", bound_ip="10.0.0.1")
    data = event.to_dict()

    assert data["event_type"] == "LicenseBound"
    assert data["aggregate_id"] == "G-0123"
    assert data["data"] == {"bound_ip": "10.0.0.1"}
