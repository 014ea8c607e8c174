"""
SQLAlchemy 仓储实现
状态写入使用 UPDATE ... WHERE status IN (...)，检查与写入在数据库层面是同一步
"""
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional
import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hoteldesk.errors import HotelError, ConflictError, InternalError
from hoteldesk.models.hotel import (
    Room, RoomStatus, Guest, Booking, BookingStatus,
    Bill, BillItem, ArchivedBill, Service
)
from hoteldesk.repositories.base import HotelRepository

logger = logging.getLogger(__name__)


class SqlHotelRepository(HotelRepository):
    """基于 Session 的仓储"""

    def __init__(self, db: Session):
        self.db = db
        self._depth = 0

    @contextmanager
    def transaction(self):
        if self._depth:
            # 已在事务中，由最外层负责提交
            yield self
            return

        self._depth += 1
        try:
            yield self
            self.db.commit()
        except HotelError:
            self.db.rollback()
            raise
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Transaction rejected by integrity constraint: {e.orig}")
            raise ConflictError("Conflicting write, the record was changed by another request") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Transaction failed")
            raise InternalError() from e
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._depth -= 1

    def _add(self, obj):
        self.db.add(obj)
        self.db.flush()
        return obj

    @staticmethod
    def _update(query, values: dict) -> int:
        return query.update(values, synchronize_session="fetch")

    # ============== 房间 ==============

    def list_rooms(self, status: Optional[RoomStatus] = None) -> List[Room]:
        query = self.db.query(Room)
        if status is not None:
            query = query.filter(Room.status == status)
        return query.order_by(Room.floor, Room.number).all()

    def get_room(self, room_id: str) -> Optional[Room]:
        return self.db.query(Room).filter(Room.id == room_id).first()

    def get_room_by_number(self, number: str) -> Optional[Room]:
        return self.db.query(Room).filter(Room.number == number).first()

    def add_room(self, room: Room) -> Room:
        return self._add(room)

    def update_room_status(self, room_id: str, status: RoomStatus,
                           expected: Optional[Iterable[RoomStatus]] = None) -> int:
        query = self.db.query(Room).filter(Room.id == room_id)
        if expected is not None:
            query = query.filter(Room.status.in_(list(expected)))
        return self._update(query, {Room.status: status})

    def delete_room(self, room_id: str, expected: Optional[Iterable[RoomStatus]] = None) -> int:
        query = self.db.query(Room).filter(Room.id == room_id)
        if expected is not None:
            query = query.filter(Room.status.in_(list(expected)))
        return query.delete(synchronize_session="fetch")

    def count_rooms(self, status: Optional[RoomStatus] = None) -> int:
        query = self.db.query(Room)
        if status is not None:
            query = query.filter(Room.status == status)
        return query.count()

    # ============== 客人 ==============

    def list_guests(self) -> List[Guest]:
        return self.db.query(Guest).order_by(Guest.created_at.desc()).all()

    def get_guest(self, guest_id: str) -> Optional[Guest]:
        return self.db.query(Guest).filter(Guest.id == guest_id).first()

    def add_guest(self, guest: Guest) -> Guest:
        return self._add(guest)

    def delete_guest(self, guest_id: str) -> int:
        return self.db.query(Guest).filter(Guest.id == guest_id).delete(synchronize_session="fetch")

    def count_guests(self) -> int:
        return self.db.query(Guest).count()

    # ============== 预订 ==============

    def list_bookings(self, status: Optional[BookingStatus] = None,
                      limit: Optional[int] = None) -> List[Booking]:
        query = self.db.query(Booking)
        if status is not None:
            query = query.filter(Booking.status == status)
        query = query.order_by(Booking.created_at.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def list_bookings_checking_in(self, start: datetime, end: datetime,
                                  status: BookingStatus) -> List[Booking]:
        return self.db.query(Booking).filter(
            Booking.status == status,
            Booking.check_in_date >= start,
            Booking.check_in_date < end
        ).order_by(Booking.check_in_date).all()

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def add_booking(self, booking: Booking) -> Booking:
        return self._add(booking)

    def update_booking_status(self, booking_id: str, status: BookingStatus,
                              expected: Optional[Iterable[BookingStatus]] = None) -> int:
        query = self.db.query(Booking).filter(Booking.id == booking_id)
        if expected is not None:
            query = query.filter(Booking.status.in_(list(expected)))
        return self._update(query, {Booking.status: status})

    def delete_booking(self, booking_id: str,
                       expected: Optional[Iterable[BookingStatus]] = None) -> int:
        query = self.db.query(Booking).filter(Booking.id == booking_id)
        if expected is not None:
            query = query.filter(Booking.status.in_(list(expected)))
        return query.delete(synchronize_session="fetch")

    def count_bookings(self, statuses: Optional[Iterable[BookingStatus]] = None,
                       guest_id: Optional[str] = None) -> int:
        query = self.db.query(Booking)
        if statuses is not None:
            query = query.filter(Booking.status.in_(list(statuses)))
        if guest_id is not None:
            query = query.filter(Booking.guest_id == guest_id)
        return query.count()

    # ============== 账单 ==============

    def get_bill_by_booking(self, booking_id: str) -> Optional[Bill]:
        return self.db.query(Bill).filter(Bill.booking_id == booking_id).first()

    def add_bill(self, bill: Bill) -> Bill:
        return self._add(bill)

    def update_bill_totals(self, bill_id: str, subtotal: Decimal,
                           tax_amount: Decimal, total: Decimal) -> int:
        query = self.db.query(Bill).filter(Bill.id == bill_id)
        return self._update(query, {
            Bill.subtotal: subtotal,
            Bill.tax_amount: tax_amount,
            Bill.total: total,
        })

    def mark_bill_paid(self, bill_id: str) -> int:
        return self._update(self.db.query(Bill).filter(Bill.id == bill_id), {Bill.is_paid: True})

    def delete_bill(self, bill_id: str) -> int:
        return self.db.query(Bill).filter(Bill.id == bill_id).delete(synchronize_session="fetch")

    def list_bill_items(self, booking_id: str) -> List[BillItem]:
        return self.db.query(BillItem).filter(
            BillItem.booking_id == booking_id
        ).order_by(BillItem.created_at, BillItem.id).all()

    def add_bill_item(self, item: BillItem) -> BillItem:
        return self._add(item)

    def delete_bill_items(self, booking_id: str) -> int:
        return self.db.query(BillItem).filter(
            BillItem.booking_id == booking_id
        ).delete(synchronize_session="fetch")

    # ============== 归档 ==============

    def add_archived_bill(self, archived: ArchivedBill) -> ArchivedBill:
        return self._add(archived)

    def list_archived_bills(self) -> List[ArchivedBill]:
        return self.db.query(ArchivedBill).order_by(ArchivedBill.completed_at.desc()).all()

    def get_archived_bill(self, archived_id: str) -> Optional[ArchivedBill]:
        return self.db.query(ArchivedBill).filter(ArchivedBill.id == archived_id).first()

    def sum_archived_totals(self, since: datetime) -> Decimal:
        result = self.db.query(func.sum(ArchivedBill.total)).filter(
            ArchivedBill.completed_at >= since
        ).scalar()
        return Decimal(str(result)) if result is not None else Decimal("0")

    # ============== 服务目录 ==============

    def list_services(self) -> List[Service]:
        return self.db.query(Service).order_by(Service.name).all()

    def get_service(self, service_id: str) -> Optional[Service]:
        return self.db.query(Service).filter(Service.id == service_id).first()

    def add_service(self, service: Service) -> Service:
        return self._add(service)
