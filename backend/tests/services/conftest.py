"""
服务层 fixtures：通过服务创建数据，两种仓储共用
"""
from decimal import Decimal

import pytest

from hoteldesk.models.hotel import RoomType
from hoteldesk.models.schemas import BookingCreate, GuestCreate, RoomCreate
from hoteldesk.services.billing_service import BillingService
from hoteldesk.services.booking_service import BookingService
from hoteldesk.services.guest_service import GuestService
from hoteldesk.services.room_service import RoomService


@pytest.fixture
def room_service(repo, published):
    return RoomService(repo, event_publisher=published.append)


@pytest.fixture
def guest_service(repo, published):
    return GuestService(repo, event_publisher=published.append)


@pytest.fixture
def booking_service(repo, published):
    return BookingService(repo, event_publisher=published.append)


@pytest.fixture
def billing_service(repo, published):
    return BillingService(repo, event_publisher=published.append, tax_rate=Decimal("10.00"))


@pytest.fixture
def room(room_service):
    """标准间 101，100.00/晚，可住 2 人"""
    return room_service.create_room(RoomCreate(
        number="101",
        type=RoomType.STANDARD,
        capacity=2,
        price_per_night=Decimal("100.00"),
        floor=1,
        amenities=["wifi"],
    ))


@pytest.fixture
def guest(guest_service):
    return guest_service.create_guest(GuestCreate(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        phone="555-0101",
        id_number="ID-0001",
    ))


@pytest.fixture
def make_booking(booking_service, stay_dates):
    """按需创建预订"""
    def _make(room, guest, number_of_guests=2, dates=None):
        check_in, check_out = dates or stay_dates
        return booking_service.create_booking(BookingCreate(
            guest_id=guest.id,
            room_id=room.id,
            check_in_date=check_in,
            check_out_date=check_out,
            number_of_guests=number_of_guests,
        ))
    return _make


@pytest.fixture
def booking(make_booking, room, guest):
    return make_booking(room, guest)


@pytest.fixture
def checked_in_booking(booking_service, booking):
    return booking_service.check_in(booking.id)


@pytest.fixture
def checked_out_booking(booking_service, checked_in_booking):
    return booking_service.check_out(checked_in_booking.id)


