"""
事件总线与审计处理器测试
"""
import logging

import pytest

from hoteldesk.models.events import EventType
from hoteldesk.services.event_bus import Event, EventBus
from hoteldesk.services.event_handlers import log_lifecycle_event, register_event_handlers


@pytest.fixture
def bus():
    return EventBus()


def _event(event_type=EventType.ROOM_CREATED, **data):
    return Event(event_type=event_type, data=data or {"room_id": "r1"}, source="test")


class TestEventBus:

    def test_publish_to_subscriber(self, bus):
        received = []
        bus.subscribe(EventType.ROOM_CREATED, received.append)

        bus.publish(_event())

        assert len(received) == 1
        assert received[0].data == {"room_id": "r1"}

    def test_string_and_enum_keys_match(self, bus):
        received = []
        bus.subscribe("booking.created", received.append)
        bus.publish(_event(EventType.BOOKING_CREATED, booking_id="b1"))
        assert len(received) == 1

    def test_subscribe_once(self, bus):
        received = []
        bus.subscribe(EventType.ROOM_CREATED, received.append)
        bus.subscribe(EventType.ROOM_CREATED, received.append)
        bus.publish(_event())
        assert len(received) == 1

    def test_failing_handler_does_not_stop_others(self, bus):
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(EventType.ROOM_CREATED, broken)
        bus.subscribe(EventType.ROOM_CREATED, received.append)
        bus.publish(_event())

        assert len(received) == 1

    def test_history_newest_first(self, bus):
        bus.publish(_event(room_id="r1"))
        bus.publish(_event(EventType.ROOM_DELETED, room_id="r2"))

        assert [e.data["room_id"] for e in bus.get_history()] == ["r2", "r1"]
        assert [e.data["room_id"] for e in bus.get_history(EventType.ROOM_CREATED)] == ["r1"]

    def test_history_bounded(self):
        bus = EventBus(history_size=2)
        for n in range(3):
            bus.publish(_event(room_id=f"r{n}"))

        assert [e.data["room_id"] for e in bus.get_history()] == ["r2", "r1"]
        assert len(bus.get_history(limit=1)) == 1


class TestAuditHandler:

    def test_register_covers_all_events(self, bus, caplog):
        register_event_handlers(bus)

        with caplog.at_level(logging.INFO, logger="hoteldesk.audit"):
            bus.publish(_event(EventType.STAY_COMPLETED, booking_id="b1", total="236.50"))

        assert "stay.completed" in caplog.text
        assert "booking_id=b1" in caplog.text

    def test_log_lifecycle_event(self, caplog):
        with caplog.at_level(logging.INFO, logger="hoteldesk.audit"):
            log_lifecycle_event(_event(EventType.GUEST_CREATED, guest_id="g1"))
        assert "[test] guest.created: guest_id=g1" in caplog.text
