"""
Pydantic 模式定义
用于 API 请求/响应验证
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, List
from pydantic import BaseModel, Field, ConfigDict, model_validator
from hoteldesk.models.hotel import (
    RoomType, RoomStatus, BookingStatus, BillItemCategory, UserRole
)


# ============== 房间 Schemas ==============

class RoomBase(BaseModel):
    number: str = Field(..., min_length=1, max_length=10)
    type: RoomType
    capacity: int = Field(..., ge=1)
    price_per_night: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    floor: int
    amenities: List[str] = Field(default_factory=list)


class RoomCreate(RoomBase):
    status: RoomStatus = RoomStatus.AVAILABLE


class RoomResponse(RoomBase):
    id: str
    status: RoomStatus
    model_config = ConfigDict(from_attributes=True)


class RoomStatusUpdate(BaseModel):
    status: RoomStatus


# ============== 客人 Schemas ==============

class GuestBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=100)
    phone: str = Field(..., max_length=30)
    id_number: str = Field(..., max_length=50)
    address: Optional[str] = None


class GuestCreate(GuestBase):
    pass


class GuestResponse(GuestBase):
    id: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== 预订 Schemas ==============

class BookingCreate(BaseModel):
    guest_id: str
    room_id: str
    check_in_date: datetime
    check_out_date: datetime
    number_of_guests: int = Field(..., ge=1)
    special_requests: Optional[str] = None


class BookingResponse(BaseModel):
    id: str
    guest_id: str
    room_id: str
    check_in_date: datetime
    check_out_date: datetime
    number_of_guests: int
    special_requests: Optional[str] = None
    status: BookingStatus
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class BookingDetailResponse(BookingResponse):
    """预订详情，包含客人和房间"""
    guest: GuestResponse
    room: RoomResponse


# ============== 账单 Schemas ==============

class BillGenerateRequest(BaseModel):
    booking_id: str


class BillItemCreate(BaseModel):
    """
    追加账单明细
    指定 service_id 时，未填写的描述/单价/类别取自服务目录
    """
    booking_id: str
    service_id: Optional[str] = None
    description: Optional[str] = Field(None, min_length=1, max_length=200)
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    quantity: int = Field(default=1, ge=1)
    category: Optional[BillItemCategory] = None

    @model_validator(mode="after")
    def check_item_source(self):
        if self.service_id is None:
            missing = [name for name in ("description", "amount", "category")
                       if getattr(self, name) is None]
            if missing:
                raise ValueError(f"缺少字段: {', '.join(missing)}（或指定 service_id）")
        return self


class BillItemResponse(BaseModel):
    id: str
    booking_id: str
    description: str
    amount: Decimal
    quantity: int
    category: BillItemCategory
    model_config = ConfigDict(from_attributes=True)


class BillResponse(BaseModel):
    id: str
    booking_id: str
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal
    is_paid: bool
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class BillDetailResponse(BillResponse):
    """账单详情：预订（含客人、房间）与全部明细"""
    booking: BookingDetailResponse
    items: List[BillItemResponse]


class ArchivedBillResponse(BaseModel):
    id: str
    guest_name: str
    phone: str
    room_number: str
    room_type: str
    check_in_date: datetime
    check_out_date: datetime
    total: Decimal
    completed_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== 服务目录 Schemas ==============

class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: BillItemCategory = BillItemCategory.SERVICE


class ServiceResponse(ServiceCreate):
    id: str
    model_config = ConfigDict(from_attributes=True)


# ============== 用户与认证 Schemas ==============

class LoginRequest(BaseModel):
    username: str
    password: str


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.STAFF


class UserResponse(BaseModel):
    id: str
    username: str
    role: UserRole
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# ============== 仪表盘 Schemas ==============

class DashboardStats(BaseModel):
    total_rooms: int
    available_rooms: int
    reserved_bookings: int
    active_bookings: int
    total_guests: int
    occupancy_rate: int
    monthly_revenue: Decimal


# ============== 事件 Schemas ==============

class EventRecord(BaseModel):
    event_type: str
    source: str
    data: Dict[str, Any]
    timestamp: datetime
