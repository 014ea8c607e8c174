"""
内存仓储 - 与 SqlHotelRepository 行为一致的字典实现
用于测试和无数据库的本地演示；读写都复制记录，调用方拿到的对象不会被后续写入改变；
transaction() 在异常时恢复进入前的快照
"""
import copy
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy import inspect as sa_inspect

from hoteldesk.errors import ConflictError
from hoteldesk.models.hotel import (
    Room, RoomStatus, Guest, Booking, BookingStatus,
    Bill, BillItem, ArchivedBill, Service
)
from hoteldesk.repositories.base import HotelRepository

_TABLES = ("rooms", "guests", "bookings", "bills", "bill_items", "archived_bills", "services")


def _clone(obj):
    """复制一条记录的全部列值"""
    values = {
        attr.key: copy.copy(getattr(obj, attr.key))
        for attr in sa_inspect(type(obj)).column_attrs
    }
    return type(obj)(**values)


def _read(obj):
    """读取返回副本，与 SQL 仓储每次查询得到独立行一致"""
    return _clone(obj) if obj is not None else None


def _matches(status, expected) -> bool:
    return expected is None or status in set(expected)


class InMemoryHotelRepository(HotelRepository):
    """字典仓储，插入顺序即存储顺序"""

    def __init__(self):
        self.rooms: Dict[str, Room] = {}
        self.guests: Dict[str, Guest] = {}
        self.bookings: Dict[str, Booking] = {}
        self.bills: Dict[str, Bill] = {}
        self.bill_items: Dict[str, BillItem] = {}
        self.archived_bills: Dict[str, ArchivedBill] = {}
        self.services: Dict[str, Service] = {}
        self._depth = 0

    @contextmanager
    def transaction(self):
        if self._depth:
            yield self
            return

        snapshot = {name: {k: _clone(v) for k, v in getattr(self, name).items()} for name in _TABLES}
        self._depth += 1
        try:
            yield self
        except Exception:
            for name, records in snapshot.items():
                setattr(self, name, records)
            raise
        finally:
            self._depth -= 1

    # ============== 房间 ==============

    def list_rooms(self, status: Optional[RoomStatus] = None) -> List[Room]:
        rooms = [_clone(r) for r in self.rooms.values() if status is None or r.status == status]
        return sorted(rooms, key=lambda r: (r.floor, r.number))

    def get_room(self, room_id: str) -> Optional[Room]:
        return _read(self.rooms.get(room_id))

    def get_room_by_number(self, number: str) -> Optional[Room]:
        return _read(next((r for r in self.rooms.values() if r.number == number), None))

    def add_room(self, room: Room) -> Room:
        self.rooms[room.id] = _clone(room)
        return room

    def update_room_status(self, room_id: str, status: RoomStatus,
                           expected: Optional[Iterable[RoomStatus]] = None) -> int:
        room = self.rooms.get(room_id)
        if room is None or not _matches(room.status, expected):
            return 0
        room.status = status
        return 1

    def delete_room(self, room_id: str, expected: Optional[Iterable[RoomStatus]] = None) -> int:
        room = self.rooms.get(room_id)
        if room is None or not _matches(room.status, expected):
            return 0
        del self.rooms[room_id]
        return 1

    def count_rooms(self, status: Optional[RoomStatus] = None) -> int:
        return sum(1 for r in self.rooms.values() if status is None or r.status == status)

    # ============== 客人 ==============

    def list_guests(self) -> List[Guest]:
        return sorted((_clone(g) for g in self.guests.values()), key=lambda g: g.created_at, reverse=True)

    def get_guest(self, guest_id: str) -> Optional[Guest]:
        return _read(self.guests.get(guest_id))

    def add_guest(self, guest: Guest) -> Guest:
        self.guests[guest.id] = _clone(guest)
        return guest

    def delete_guest(self, guest_id: str) -> int:
        return 1 if self.guests.pop(guest_id, None) is not None else 0

    def count_guests(self) -> int:
        return len(self.guests)

    # ============== 预订 ==============

    def list_bookings(self, status: Optional[BookingStatus] = None,
                      limit: Optional[int] = None) -> List[Booking]:
        bookings = [_clone(b) for b in self.bookings.values() if status is None or b.status == status]
        bookings.sort(key=lambda b: b.created_at, reverse=True)
        return bookings[:limit] if limit is not None else bookings

    def list_bookings_checking_in(self, start: datetime, end: datetime,
                                  status: BookingStatus) -> List[Booking]:
        bookings = [
            _clone(b) for b in self.bookings.values()
            if b.status == status and start <= b.check_in_date < end
        ]
        return sorted(bookings, key=lambda b: b.check_in_date)

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        return _read(self.bookings.get(booking_id))

    def add_booking(self, booking: Booking) -> Booking:
        self.bookings[booking.id] = _clone(booking)
        return booking

    def update_booking_status(self, booking_id: str, status: BookingStatus,
                              expected: Optional[Iterable[BookingStatus]] = None) -> int:
        booking = self.bookings.get(booking_id)
        if booking is None or not _matches(booking.status, expected):
            return 0
        booking.status = status
        return 1

    def delete_booking(self, booking_id: str,
                       expected: Optional[Iterable[BookingStatus]] = None) -> int:
        booking = self.bookings.get(booking_id)
        if booking is None or not _matches(booking.status, expected):
            return 0
        del self.bookings[booking_id]
        return 1

    def count_bookings(self, statuses: Optional[Iterable[BookingStatus]] = None,
                       guest_id: Optional[str] = None) -> int:
        wanted = set(statuses) if statuses is not None else None
        return sum(
            1 for b in self.bookings.values()
            if (wanted is None or b.status in wanted) and (guest_id is None or b.guest_id == guest_id)
        )

    # ============== 账单 ==============

    def _bill_for(self, booking_id: str) -> Optional[Bill]:
        return next((b for b in self.bills.values() if b.booking_id == booking_id), None)

    def get_bill_by_booking(self, booking_id: str) -> Optional[Bill]:
        return _read(self._bill_for(booking_id))

    def add_bill(self, bill: Bill) -> Bill:
        if self._bill_for(bill.booking_id) is not None:
            # 与 bills.booking_id 唯一约束一致
            raise ConflictError(f"Bill already exists for booking {bill.booking_id}")
        self.bills[bill.id] = _clone(bill)
        return bill

    def update_bill_totals(self, bill_id: str, subtotal: Decimal,
                           tax_amount: Decimal, total: Decimal) -> int:
        bill = self.bills.get(bill_id)
        if bill is None:
            return 0
        bill.subtotal, bill.tax_amount, bill.total = subtotal, tax_amount, total
        return 1

    def mark_bill_paid(self, bill_id: str) -> int:
        bill = self.bills.get(bill_id)
        if bill is None:
            return 0
        bill.is_paid = True
        return 1

    def delete_bill(self, bill_id: str) -> int:
        return 1 if self.bills.pop(bill_id, None) is not None else 0

    def list_bill_items(self, booking_id: str) -> List[BillItem]:
        return [_clone(i) for i in self.bill_items.values() if i.booking_id == booking_id]

    def add_bill_item(self, item: BillItem) -> BillItem:
        self.bill_items[item.id] = _clone(item)
        return item

    def delete_bill_items(self, booking_id: str) -> int:
        doomed = [k for k, i in self.bill_items.items() if i.booking_id == booking_id]
        for key in doomed:
            del self.bill_items[key]
        return len(doomed)

    # ============== 归档 ==============

    def add_archived_bill(self, archived: ArchivedBill) -> ArchivedBill:
        self.archived_bills[archived.id] = _clone(archived)
        return archived

    def list_archived_bills(self) -> List[ArchivedBill]:
        return sorted((_clone(a) for a in self.archived_bills.values()),
                      key=lambda a: a.completed_at, reverse=True)

    def get_archived_bill(self, archived_id: str) -> Optional[ArchivedBill]:
        return _read(self.archived_bills.get(archived_id))

    def sum_archived_totals(self, since: datetime) -> Decimal:
        return sum(
            (a.total for a in self.archived_bills.values() if a.completed_at >= since),
            Decimal("0")
        )

    # ============== 服务目录 ==============

    def list_services(self) -> List[Service]:
        return sorted((_clone(s) for s in self.services.values()), key=lambda s: s.name)

    def get_service(self, service_id: str) -> Optional[Service]:
        return _read(self.services.get(service_id))

    def add_service(self, service: Service) -> Service:
        self.services[service.id] = _clone(service)
        return service
