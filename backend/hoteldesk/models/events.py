"""
领域事件定义
生命周期每一步提交成功后发布，供审计日志等订阅者使用
"""
from enum import Enum


class EventType(str, Enum):
    """事件类型枚举"""
    # 房间相关
    ROOM_CREATED = "room.created"
    ROOM_STATUS_CHANGED = "room.status_changed"
    ROOM_DELETED = "room.deleted"

    # 客人相关
    GUEST_CREATED = "guest.created"

    # 预订生命周期
    BOOKING_CREATED = "booking.created"
    BOOKING_CHECKED_IN = "booking.checked_in"
    BOOKING_CHECKED_OUT = "booking.checked_out"

    # 账单相关
    BILL_GENERATED = "bill.generated"
    BILL_ITEM_ADDED = "bill.item_added"
    STAY_COMPLETED = "stay.completed"
