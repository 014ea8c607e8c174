"""
预订生命周期状态机测试
"""
import pytest

from hoteldesk.engine.state_machine import StateMachine, StateMachineConfig, StateTransition
from hoteldesk.errors import ConflictError
from hoteldesk.models.hotel import Booking, BookingStatus
from hoteldesk.services.lifecycle import (
    BOOKING_LIFECYCLE, CHECK_IN, CHECK_OUT, COMPLETE,
    booking_state_machine, next_booking_status
)


def _booking(status: BookingStatus) -> Booking:
    return Booking(id="b-1", status=status)


class TestStateMachine:
    """通用状态机"""

    @pytest.fixture
    def door(self):
        config = StateMachineConfig(
            name="Door",
            states=["closed", "open", "locked"],
            transitions=[
                StateTransition("closed", "open", "open"),
                StateTransition("open", "closed", "close"),
                StateTransition("closed", "locked", "lock"),
            ],
            initial_state="closed",
        )
        return config

    def test_initial_state(self, door):
        machine = StateMachine(door)
        assert machine.current_state == "closed"

    def test_unknown_state_rejected(self, door):
        with pytest.raises(ValueError):
            StateMachine(door, current_state="ajar")

    def test_valid_transition(self, door):
        machine = StateMachine(door)
        assert machine.can_transition_to("open", "open")
        assert machine.transition_to("open", "open") is True
        assert machine.current_state == "open"

    def test_invalid_transition_keeps_state(self, door):
        machine = StateMachine(door, current_state="open")
        assert machine.transition_to("locked", "lock") is False
        assert machine.current_state == "open"

    def test_trigger_must_match_target(self, door):
        machine = StateMachine(door)
        assert not machine.can_transition_to("locked", "open")

    def test_get_transition(self, door):
        machine = StateMachine(door)
        assert machine.get_transition("lock").to_state == "locked"
        assert machine.get_transition("close") is None


class TestBookingLifecycle:
    """reserved -> checked-in -> checked-out -> completed"""

    def test_states_cover_booking_status(self):
        assert set(BOOKING_LIFECYCLE.states) == {s.value for s in BookingStatus}

    def test_enum_state_accepted(self):
        machine = booking_state_machine(BookingStatus.CHECKED_IN)
        assert machine.current_state == "checked-in"

    @pytest.mark.parametrize("status,trigger,expected", [
        (BookingStatus.RESERVED, CHECK_IN, BookingStatus.CHECKED_IN),
        (BookingStatus.CHECKED_IN, CHECK_OUT, BookingStatus.CHECKED_OUT),
        (BookingStatus.CHECKED_OUT, COMPLETE, BookingStatus.COMPLETED),
    ])
    def test_forward_steps(self, status, trigger, expected):
        assert next_booking_status(_booking(status), trigger) == expected

    @pytest.mark.parametrize("status,trigger", [
        (BookingStatus.RESERVED, CHECK_OUT),
        (BookingStatus.RESERVED, COMPLETE),
        (BookingStatus.CHECKED_IN, CHECK_IN),
        (BookingStatus.CHECKED_IN, COMPLETE),
        (BookingStatus.CHECKED_OUT, CHECK_IN),
        (BookingStatus.COMPLETED, CHECK_IN),
    ])
    def test_skips_and_reversals_rejected(self, status, trigger):
        with pytest.raises(ConflictError) as exc:
            next_booking_status(_booking(status), trigger)
        assert status.value in exc.value.message

    @pytest.mark.parametrize("trigger", [CHECK_IN, CHECK_OUT, COMPLETE])
    def test_completed_has_no_exit(self, trigger):
        assert booking_state_machine(BookingStatus.COMPLETED).get_transition(trigger) is None
