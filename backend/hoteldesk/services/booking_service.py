"""
预订服务 - 预订生命周期
创建预订、入住、退房；每一步都在同一事务中同步房间状态

状态对照：
    reserved     -> 房间 reserved
    checked-in   -> 房间 occupied
    checked-out  -> 房间保持 occupied，结账完成后才释放
"""
from datetime import datetime, date, time, timedelta
from typing import List, Optional
import logging

from hoteldesk.errors import ConflictError, ConcurrentUpdateError, NotFoundError, ValidationError
from hoteldesk.models.events import EventType
from hoteldesk.models.hotel import Booking, BookingStatus, RoomStatus, new_id
from hoteldesk.models.schemas import BookingCreate
from hoteldesk.repositories.base import HotelRepository
from hoteldesk.services.event_bus import event_bus, Event, EventPublisher
from hoteldesk.services.lifecycle import CHECK_IN, CHECK_OUT, next_booking_status

logger = logging.getLogger(__name__)


class BookingService:
    """预订服务"""

    def __init__(self, repo: HotelRepository, event_publisher: EventPublisher = None):
        self.repo = repo
        self._publish_event = event_publisher or event_bus.publish

    # ============== 查询 ==============

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.repo.get_booking(booking_id)
        if not booking:
            raise NotFoundError(f"Booking {booking_id} not found")
        return booking

    def get_booking_detail(self, booking_id: str) -> dict:
        """预订详情，包含客人和房间"""
        return self._detail(self.get_booking(booking_id))

    def get_bookings(self, status: Optional[BookingStatus] = None,
                     limit: Optional[int] = None) -> List[dict]:
        """预订列表（最新在前），可按状态筛选"""
        return [self._detail(b) for b in self.repo.list_bookings(status, limit)]

    def get_today_check_ins(self, today: Optional[date] = None) -> List[dict]:
        """今日待入住：状态为 reserved 且入住时间在今天之内"""
        start = datetime.combine(today or date.today(), time.min)
        end = start + timedelta(days=1)
        bookings = self.repo.list_bookings_checking_in(start, end, BookingStatus.RESERVED)
        return [self._detail(b) for b in bookings]

    def _detail(self, booking: Booking) -> dict:
        guest = self.repo.get_guest(booking.guest_id)
        room = self.repo.get_room(booking.room_id)
        if guest is None or room is None:
            raise NotFoundError(f"Booking {booking.id} references a missing guest or room")
        return {
            'id': booking.id,
            'guest_id': booking.guest_id,
            'room_id': booking.room_id,
            'check_in_date': booking.check_in_date,
            'check_out_date': booking.check_out_date,
            'number_of_guests': booking.number_of_guests,
            'special_requests': booking.special_requests,
            'status': booking.status,
            'created_at': booking.created_at,
            'guest': guest,
            'room': room,
        }

    # ============== 生命周期 ==============

    def create_booking(self, data: BookingCreate) -> Booking:
        """
        创建预订
        检查顺序：房间存在 -> 人数不超过容量 -> 房间空闲
        预订写入和房间置为 reserved 在同一事务中完成
        """
        if data.check_out_date <= data.check_in_date:
            raise ValidationError("Check-out date must be after check-in date")

        room = self.repo.get_room(data.room_id)
        if not room:
            raise NotFoundError(f"Room {data.room_id} not found")

        if data.number_of_guests > room.capacity:
            logger.warning(f"Booking rejected: room {room.number} capacity {room.capacity} < {data.number_of_guests}")
            raise ValidationError(
                f"Room {room.number} has capacity {room.capacity}, "
                f"but {data.number_of_guests} guests were requested"
            )

        if room.status != RoomStatus.AVAILABLE:
            logger.warning(f"Booking rejected: room {room.number} is {room.status.value}")
            raise ConflictError(f"Room {room.number} is not available (current status: {room.status.value})")

        guest = self.repo.get_guest(data.guest_id)
        if not guest:
            raise NotFoundError(f"Guest {data.guest_id} not found")

        booking = Booking(
            id=new_id(),
            guest_id=guest.id,
            room_id=room.id,
            check_in_date=data.check_in_date,
            check_out_date=data.check_out_date,
            number_of_guests=data.number_of_guests,
            special_requests=data.special_requests,
            status=BookingStatus.RESERVED,
            created_at=datetime.now(),
        )
        room_number = room.number

        with self.repo.transaction():
            self.repo.add_booking(booking)
            # 可用性检查与状态写入是同一条条件更新
            if self.repo.update_room_status(room.id, RoomStatus.RESERVED,
                                            expected=(RoomStatus.AVAILABLE,)) == 0:
                raise ConflictError(f"Room {room_number} is no longer available")

        logger.info(f"Booking {booking.id} reserved room {room_number} for guest {guest.id}")
        self._publish_event(Event(
            event_type=EventType.BOOKING_CREATED,
            data={"booking_id": booking.id, "room_id": booking.room_id,
                  "room_number": room_number, "guest_id": booking.guest_id},
            source="booking_service",
        ))
        return self.get_booking(booking.id)

    def check_in(self, booking_id: str) -> Booking:
        """
        入住：预订 -> checked-in，房间 -> occupied
        已生成账单的预订不能再次入住
        """
        booking = self.get_booking(booking_id)

        if self.repo.get_bill_by_booking(booking_id) is not None:
            logger.warning(f"Check-in rejected for booking {booking_id}: bill already exists")
            raise ConflictError(f"Bill already exists for booking {booking_id}; it cannot be checked in again")

        current = booking.status
        target = next_booking_status(booking, CHECK_IN)
        # 事务前记下房间，避免读取到过期状态
        room_id = booking.room_id

        with self.repo.transaction():
            if self.repo.update_booking_status(booking_id, target, expected=(current,)) == 0:
                raise ConcurrentUpdateError(f"Booking {booking_id} was modified by another request")
            if self.repo.update_room_status(room_id, RoomStatus.OCCUPIED,
                                            expected=(RoomStatus.RESERVED,)) == 0:
                raise ConflictError(f"Room {room_id} is not reserved for booking {booking_id}")

        logger.info(f"Booking {booking_id} checked in, room {room_id} occupied")
        self._publish_event(Event(
            event_type=EventType.BOOKING_CHECKED_IN,
            data={"booking_id": booking_id, "room_id": room_id},
            source="booking_service",
        ))
        return self.get_booking(booking_id)

    def check_out(self, booking_id: str) -> Booking:
        """
        退房：预订 -> checked-out
        房间保持 occupied，直到账单结清归档后才释放
        """
        booking = self.get_booking(booking_id)
        current = booking.status
        target = next_booking_status(booking, CHECK_OUT)
        room_id = booking.room_id

        with self.repo.transaction():
            if self.repo.update_booking_status(booking_id, target, expected=(current,)) == 0:
                raise ConcurrentUpdateError(f"Booking {booking_id} was modified by another request")

        logger.info(f"Booking {booking_id} checked out, room {room_id} awaiting settlement")
        self._publish_event(Event(
            event_type=EventType.BOOKING_CHECKED_OUT,
            data={"booking_id": booking_id, "room_id": room_id},
            source="booking_service",
        ))
        return self.get_booking(booking_id)
