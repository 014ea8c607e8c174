"""
持久化接口 - 生命周期与账单逻辑只依赖这个抽象

状态写入均为条件更新：传入 expected 时只有当前状态在 expected 中的记录会被修改，
返回受影响的行数。调用方据此判断检查与写入之间是否发生了并发修改。
"""
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import ContextManager, Iterable, List, Optional

from hoteldesk.models.hotel import (
    Room, RoomStatus, Guest, Booking, BookingStatus,
    Bill, BillItem, ArchivedBill, Service
)


class HotelRepository(ABC):
    """酒店数据仓储接口"""

    @abstractmethod
    def transaction(self) -> ContextManager["HotelRepository"]:
        """原子执行块：块内所有写入要么全部提交，要么全部回滚"""

    # ============== 房间 ==============

    @abstractmethod
    def list_rooms(self, status: Optional[RoomStatus] = None) -> List[Room]:
        """房间列表（按楼层、房间号排序）"""

    @abstractmethod
    def get_room(self, room_id: str) -> Optional[Room]:
        pass

    @abstractmethod
    def get_room_by_number(self, number: str) -> Optional[Room]:
        pass

    @abstractmethod
    def add_room(self, room: Room) -> Room:
        pass

    @abstractmethod
    def update_room_status(self, room_id: str, status: RoomStatus,
                           expected: Optional[Iterable[RoomStatus]] = None) -> int:
        pass

    @abstractmethod
    def delete_room(self, room_id: str, expected: Optional[Iterable[RoomStatus]] = None) -> int:
        pass

    @abstractmethod
    def count_rooms(self, status: Optional[RoomStatus] = None) -> int:
        pass

    # ============== 客人 ==============

    @abstractmethod
    def list_guests(self) -> List[Guest]:
        """客人列表（最新在前）"""

    @abstractmethod
    def get_guest(self, guest_id: str) -> Optional[Guest]:
        pass

    @abstractmethod
    def add_guest(self, guest: Guest) -> Guest:
        pass

    @abstractmethod
    def delete_guest(self, guest_id: str) -> int:
        pass

    @abstractmethod
    def count_guests(self) -> int:
        pass

    # ============== 预订 ==============

    @abstractmethod
    def list_bookings(self, status: Optional[BookingStatus] = None,
                      limit: Optional[int] = None) -> List[Booking]:
        """预订列表（按创建时间倒序）"""

    @abstractmethod
    def list_bookings_checking_in(self, start: datetime, end: datetime,
                                  status: BookingStatus) -> List[Booking]:
        """入住日期落在 [start, end) 且状态为 status 的预订"""

    @abstractmethod
    def get_booking(self, booking_id: str) -> Optional[Booking]:
        pass

    @abstractmethod
    def add_booking(self, booking: Booking) -> Booking:
        pass

    @abstractmethod
    def update_booking_status(self, booking_id: str, status: BookingStatus,
                              expected: Optional[Iterable[BookingStatus]] = None) -> int:
        pass

    @abstractmethod
    def delete_booking(self, booking_id: str,
                       expected: Optional[Iterable[BookingStatus]] = None) -> int:
        pass

    @abstractmethod
    def count_bookings(self, statuses: Optional[Iterable[BookingStatus]] = None,
                       guest_id: Optional[str] = None) -> int:
        pass

    # ============== 账单 ==============

    @abstractmethod
    def get_bill_by_booking(self, booking_id: str) -> Optional[Bill]:
        pass

    @abstractmethod
    def add_bill(self, bill: Bill) -> Bill:
        pass

    @abstractmethod
    def update_bill_totals(self, bill_id: str, subtotal: Decimal,
                           tax_amount: Decimal, total: Decimal) -> int:
        pass

    @abstractmethod
    def mark_bill_paid(self, bill_id: str) -> int:
        pass

    @abstractmethod
    def delete_bill(self, bill_id: str) -> int:
        pass

    @abstractmethod
    def list_bill_items(self, booking_id: str) -> List[BillItem]:
        """账单明细（按添加顺序）"""

    @abstractmethod
    def add_bill_item(self, item: BillItem) -> BillItem:
        pass

    @abstractmethod
    def delete_bill_items(self, booking_id: str) -> int:
        pass

    # ============== 归档 ==============

    @abstractmethod
    def add_archived_bill(self, archived: ArchivedBill) -> ArchivedBill:
        pass

    @abstractmethod
    def list_archived_bills(self) -> List[ArchivedBill]:
        """归档列表（完成时间倒序）"""

    @abstractmethod
    def get_archived_bill(self, archived_id: str) -> Optional[ArchivedBill]:
        pass

    @abstractmethod
    def sum_archived_totals(self, since: datetime) -> Decimal:
        """completed_at >= since 的归档账单金额合计"""

    # ============== 服务目录 ==============

    @abstractmethod
    def list_services(self) -> List[Service]:
        pass

    @abstractmethod
    def get_service(self, service_id: str) -> Optional[Service]:
        pass

    @abstractmethod
    def add_service(self, service: Service) -> Service:
        pass
