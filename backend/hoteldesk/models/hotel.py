"""
业务实体定义
房间、客人、预订、账单、账单明细、归档账单、服务目录与系统用户
主键统一使用 UUID 字符串，由服务层在创建时生成
"""
import uuid
from datetime import datetime
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Text, JSON,
    Enum as SQLEnum, Boolean, Numeric
)
from hoteldesk.database import Base


def new_id() -> str:
    """生成记录主键"""
    return str(uuid.uuid4())


# ============== 枚举定义 ==============

class RoomType(str, Enum):
    """房型"""
    STANDARD = "standard"
    DELUXE = "deluxe"
    SUITE = "suite"
    PRESIDENTIAL = "presidential"


class RoomStatus(str, Enum):
    """房间状态枚举"""
    AVAILABLE = "available"        # 空闲
    RESERVED = "reserved"          # 已预订
    OCCUPIED = "occupied"          # 入住中（含退房待结账）
    MAINTENANCE = "maintenance"    # 维修中


class BookingStatus(str, Enum):
    """预订状态，只能按顺序前进"""
    RESERVED = "reserved"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    COMPLETED = "completed"        # 终态：记录删除，仅保留归档


class BillItemCategory(str, Enum):
    """账单明细类别"""
    ROOM = "room"
    SERVICE = "service"
    FOOD = "food"
    AMENITY = "amenity"
    OTHER = "other"


class UserRole(str, Enum):
    """系统用户角色"""
    ADMIN = "admin"
    STAFF = "staff"


# ============== 实体定义 ==============

class Room(Base):
    """
    房间
    status 只由预订生命周期和人工维修切换修改
    """
    __tablename__ = "rooms"

    id = Column(String(36), primary_key=True, default=new_id)
    number = Column(String(10), unique=True, nullable=False, index=True)
    type = Column(SQLEnum(RoomType), nullable=False)
    capacity = Column(Integer, nullable=False)
    price_per_night = Column(Numeric(10, 2), nullable=False)
    floor = Column(Integer, nullable=False)
    amenities = Column(JSON, nullable=False, default=list)
    status = Column(SQLEnum(RoomStatus), nullable=False, default=RoomStatus.AVAILABLE)


class Guest(Base):
    """
    客人身份记录
    被预订引用；住宿完成后删除，历史只保留在归档快照中
    """
    __tablename__ = "guests"

    id = Column(String(36), primary_key=True, default=new_id)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=False)
    id_number = Column(String(50), nullable=False)
    address = Column(Text)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Booking(Base):
    """预订 - 住宿生命周期的聚合根"""
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=new_id)
    guest_id = Column(String(36), ForeignKey("guests.id"), nullable=False, index=True)
    room_id = Column(String(36), ForeignKey("rooms.id"), nullable=False, index=True)
    check_in_date = Column(DateTime, nullable=False)
    check_out_date = Column(DateTime, nullable=False)
    number_of_guests = Column(Integer, nullable=False)
    special_requests = Column(Text)
    status = Column(SQLEnum(BookingStatus), nullable=False, default=BookingStatus.RESERVED)
    created_at = Column(DateTime, nullable=False, default=datetime.now)


class BillItem(Base):
    """账单明细，amount 为单价"""
    __tablename__ = "bill_items"

    id = Column(String(36), primary_key=True, default=new_id)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False, index=True)
    description = Column(String(200), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    category = Column(SQLEnum(BillItemCategory), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)


class Bill(Base):
    """
    账单
    subtotal / tax_amount / total 是派生字段，只能由明细重新计算
    """
    __tablename__ = "bills"

    id = Column(String(36), primary_key=True, default=new_id)
    booking_id = Column(String(36), ForeignKey("bookings.id"), unique=True, nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)
    tax_rate = Column(Numeric(5, 2), nullable=False)
    tax_amount = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    is_paid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)


class ArchivedBill(Base):
    """归档账单 - 住宿完成后唯一的持久历史记录，只追加不修改"""
    __tablename__ = "archived_bills"

    id = Column(String(36), primary_key=True, default=new_id)
    guest_name = Column(String(200), nullable=False)
    phone = Column(String(30), nullable=False)
    room_number = Column(String(10), nullable=False)
    room_type = Column(String(20), nullable=False)
    check_in_date = Column(DateTime, nullable=False)
    check_out_date = Column(DateTime, nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    completed_at = Column(DateTime, nullable=False, default=datetime.now, index=True)


class Service(Base):
    """可加入账单的服务目录项"""
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(SQLEnum(BillItemCategory), nullable=False, default=BillItemCategory.SERVICE)


class User(Base):
    """系统用户（前台员工/管理员）"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.STAFF)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
