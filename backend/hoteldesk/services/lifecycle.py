"""
预订生命周期状态机
reserved -> checked-in -> checked-out -> completed，不能跳步，不能回退
"""
import logging

from hoteldesk.engine.state_machine import StateMachine, StateMachineConfig, StateTransition
from hoteldesk.errors import ConflictError
from hoteldesk.models.hotel import Booking, BookingStatus

logger = logging.getLogger(__name__)

CHECK_IN = "check_in"
CHECK_OUT = "check_out"
COMPLETE = "complete"

BOOKING_LIFECYCLE = StateMachineConfig(
    name="Booking",
    states=[s.value for s in BookingStatus],
    transitions=[
        StateTransition(BookingStatus.RESERVED.value, BookingStatus.CHECKED_IN.value, CHECK_IN),
        StateTransition(BookingStatus.CHECKED_IN.value, BookingStatus.CHECKED_OUT.value, CHECK_OUT),
        StateTransition(BookingStatus.CHECKED_OUT.value, BookingStatus.COMPLETED.value, COMPLETE),
    ],
    initial_state=BookingStatus.RESERVED.value,
)

# 可以生成账单的预订状态
BILLABLE_STATUSES = (BookingStatus.CHECKED_IN, BookingStatus.CHECKED_OUT)


def booking_state_machine(status) -> StateMachine:
    """以预订当前状态构造状态机"""
    return StateMachine(BOOKING_LIFECYCLE, current_state=status)


def next_booking_status(booking: Booking, trigger: str) -> BookingStatus:
    """
    计算触发动作后的预订状态

    Raises:
        ConflictError: 当前状态不允许该动作
    """
    machine = booking_state_machine(booking.status)
    transition = machine.get_transition(trigger)
    if transition is None:
        current = BookingStatus(machine.current_state)
        logger.warning(f"Booking {booking.id}: '{trigger}' rejected in status {current.value}")
        raise ConflictError(f"Booking {booking.id} cannot {trigger.replace('_', ' ')} while {current.value}")
    machine.transition_to(transition.to_state, trigger)
    return BookingStatus(machine.current_state)
