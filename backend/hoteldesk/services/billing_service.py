"""
账单服务 - 账单引擎与结账归档

金额规则：
    subtotal   = Σ 单价 × 数量（全部明细）
    tax_amount = subtotal × tax_rate / 100
    total      = subtotal + tax_amount
三个派生字段每次追加明细后都从全部明细重新计算，不允许直接修改
"""
import math
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple
import logging

from hoteldesk.config import settings
from hoteldesk.errors import ConflictError, ConcurrentUpdateError, NotFoundError
from hoteldesk.models.events import EventType
from hoteldesk.models.hotel import (
    ArchivedBill, Bill, BillItem, BillItemCategory, BookingStatus, RoomStatus, new_id
)
from hoteldesk.models.schemas import BillItemCreate
from hoteldesk.repositories.base import HotelRepository
from hoteldesk.services.event_bus import event_bus, Event, EventPublisher
from hoteldesk.services.lifecycle import BILLABLE_STATUSES, COMPLETE, next_booking_status

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
SECONDS_PER_DAY = 24 * 60 * 60


def to_money(value) -> Decimal:
    """金额统一保留两位小数，四舍五入"""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_nights(check_in: datetime, check_out: datetime) -> int:
    """入住晚数，向上取整，至少 1 晚（同日预订不会产生零金额账单）"""
    seconds = (check_out - check_in).total_seconds()
    return max(1, math.ceil(seconds / SECONDS_PER_DAY))


def calculate_totals(items: Iterable[BillItem], tax_rate: Decimal) -> Tuple[Decimal, Decimal, Decimal]:
    """由全部明细计算 (subtotal, tax_amount, total)"""
    subtotal = to_money(sum((Decimal(str(i.amount)) * i.quantity for i in items), Decimal("0")))
    tax_amount = to_money(subtotal * Decimal(str(tax_rate)) / 100)
    return subtotal, tax_amount, subtotal + tax_amount


class BillingService:
    """账单服务"""

    def __init__(self, repo: HotelRepository, event_publisher: EventPublisher = None,
                 tax_rate: Optional[Decimal] = None):
        self.repo = repo
        self._publish_event = event_publisher or event_bus.publish
        self.tax_rate = to_money(tax_rate if tax_rate is not None else settings.TAX_RATE)

    def generate_bill(self, booking_id: str) -> dict:
        """
        生成账单
        自动创建一条房费明细（单价 = 房价，数量 = 晚数），明细和账单在同一事务写入
        """
        if self.repo.get_bill_by_booking(booking_id) is not None:
            logger.warning(f"Bill generation rejected for booking {booking_id}: bill already exists")
            raise ConflictError(f"Bill already exists for booking {booking_id}")

        booking = self.repo.get_booking(booking_id)
        if not booking:
            raise NotFoundError(f"Booking {booking_id} not found")

        if booking.status not in BILLABLE_STATUSES:
            logger.warning(f"Bill generation rejected for booking {booking_id} in status {booking.status.value}")
            raise ConflictError(
                f"Booking {booking_id} is {booking.status.value}; bills are generated after check-in"
            )

        room = self.repo.get_room(booking.room_id)
        if not room:
            raise NotFoundError(f"Room {booking.room_id} not found")

        nights = calculate_nights(booking.check_in_date, booking.check_out_date)
        now = datetime.now()
        room_item = BillItem(
            id=new_id(),
            booking_id=booking_id,
            description=f"{room.type.value.capitalize()} room {room.number} - {nights} night{'s' if nights > 1 else ''}",
            amount=to_money(room.price_per_night),
            quantity=nights,
            category=BillItemCategory.ROOM,
            created_at=now,
        )
        subtotal, tax_amount, total = calculate_totals([room_item], self.tax_rate)
        bill = Bill(
            id=new_id(),
            booking_id=booking_id,
            subtotal=subtotal,
            tax_rate=self.tax_rate,
            tax_amount=tax_amount,
            total=total,
            is_paid=False,
            created_at=now,
        )

        with self.repo.transaction():
            self.repo.add_bill_item(room_item)
            self.repo.add_bill(bill)

        logger.info(f"Bill generated for booking {booking_id}: {nights} night(s), total {total}")
        self._publish_event(Event(
            event_type=EventType.BILL_GENERATED,
            data={"booking_id": booking_id, "nights": nights, "total": str(total)},
            source="billing_service",
        ))
        return self.get_bill(booking_id)

    def add_bill_item(self, data: BillItemCreate) -> BillItem:
        """
        追加账单明细并从全部明细重新计算账单金额
        """
        bill = self.repo.get_bill_by_booking(data.booking_id)
        if not bill:
            raise NotFoundError(f"Bill for booking {data.booking_id} not found")

        description, amount, category = data.description, data.amount, data.category
        if data.service_id is not None:
            service = self.repo.get_service(data.service_id)
            if not service:
                raise NotFoundError(f"Service {data.service_id} not found")
            description = description or service.name
            amount = amount if amount is not None else service.price
            category = category or service.category

        item = BillItem(
            id=new_id(),
            booking_id=data.booking_id,
            description=description,
            amount=to_money(amount),
            quantity=data.quantity,
            category=category,
            created_at=datetime.now(),
        )
        bill_id, tax_rate = bill.id, bill.tax_rate

        with self.repo.transaction():
            self.repo.add_bill_item(item)
            items = self.repo.list_bill_items(data.booking_id)
            subtotal, tax_amount, total = calculate_totals(items, tax_rate)
            self.repo.update_bill_totals(bill_id, subtotal, tax_amount, total)

        logger.info(f"Bill item '{description}' x{data.quantity} added to booking {data.booking_id}, total {total}")
        self._publish_event(Event(
            event_type=EventType.BILL_ITEM_ADDED,
            data={"booking_id": data.booking_id, "item_id": item.id, "total": str(total)},
            source="billing_service",
        ))
        return item

    def get_bill(self, booking_id: str) -> Optional[dict]:
        """账单详情：账单 + 预订（含客人、房间）+ 全部明细；尚未生成时返回 None"""
        bill = self.repo.get_bill_by_booking(booking_id)
        if not bill:
            return None

        booking = self.repo.get_booking(booking_id)
        if not booking:
            return None
        guest = self.repo.get_guest(booking.guest_id)
        room = self.repo.get_room(booking.room_id)
        if guest is None or room is None:
            return None

        return {
            'id': bill.id,
            'booking_id': bill.booking_id,
            'subtotal': bill.subtotal,
            'tax_rate': bill.tax_rate,
            'tax_amount': bill.tax_amount,
            'total': bill.total,
            'is_paid': bill.is_paid,
            'created_at': bill.created_at,
            'booking': {
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
            },
            'items': self.repo.list_bill_items(booking_id),
        }

    def complete_bill(self, booking_id: str) -> ArchivedBill:
        """
        结账归档（单一事务）：
        1. 写入归档快照
        2. 账单标记已付
        3. 房间释放为 available
        4. 删除明细、账单、预订
        5. 删除客人（该客人已无其他预订时）
        任一步失败整体回滚：归档未写入时房间不会被释放
        """
        booking = self.repo.get_booking(booking_id)
        if not booking:
            raise NotFoundError(f"Booking {booking_id} not found")
        guest = self.repo.get_guest(booking.guest_id)
        if not guest:
            raise NotFoundError(f"Guest {booking.guest_id} not found")
        room = self.repo.get_room(booking.room_id)
        if not room:
            raise NotFoundError(f"Room {booking.room_id} not found")
        bill = self.repo.get_bill_by_booking(booking_id)
        if not bill:
            raise NotFoundError(f"Bill for booking {booking_id} not found")

        current = booking.status
        next_booking_status(booking, COMPLETE)

        archived = ArchivedBill(
            id=new_id(),
            guest_name=guest.full_name,
            phone=guest.phone,
            room_number=room.number,
            room_type=room.type.value,
            check_in_date=booking.check_in_date,
            check_out_date=booking.check_out_date,
            total=to_money(bill.total),
            completed_at=datetime.now(),
        )
        bill_id, room_id, guest_id, room_number = bill.id, room.id, guest.id, room.number

        with self.repo.transaction():
            self.repo.add_archived_bill(archived)
            self.repo.mark_bill_paid(bill_id)
            if self.repo.update_room_status(room_id, RoomStatus.AVAILABLE,
                                            expected=(RoomStatus.OCCUPIED,)) == 0:
                raise ConflictError(f"Room {room_number} is not occupied by booking {booking_id}")
            self.repo.delete_bill_items(booking_id)
            self.repo.delete_bill(bill_id)
            if self.repo.delete_booking(booking_id, expected=(current,)) == 0:
                raise ConcurrentUpdateError(f"Booking {booking_id} was modified by another request")
            # 客人只在没有其他预订引用时删除
            guest_deleted = self.repo.count_bookings(guest_id=guest_id) == 0
            if guest_deleted:
                self.repo.delete_guest(guest_id)

        logger.info(
            f"Stay for booking {booking_id} completed: archived {archived.id}, "
            f"room {room_number} available, guest removed={guest_deleted}"
        )
        self._publish_event(Event(
            event_type=EventType.STAY_COMPLETED,
            data={"booking_id": booking_id, "archived_bill_id": archived.id,
                  "room_number": room_number, "total": str(archived.total)},
            source="billing_service",
        ))
        return archived
