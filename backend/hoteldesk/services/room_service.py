"""
房间服务 - 房间库存
房间状态只由预订生命周期和人工维修切换修改
"""
from typing import List, Optional
import logging

from hoteldesk.errors import ConflictError, NotFoundError, ValidationError
from hoteldesk.models.events import EventType
from hoteldesk.models.hotel import Room, RoomStatus, new_id
from hoteldesk.models.schemas import RoomCreate
from hoteldesk.repositories.base import HotelRepository
from hoteldesk.services.event_bus import event_bus, Event, EventPublisher

logger = logging.getLogger(__name__)

# 人工可切换的状态：空闲 <-> 维修
MANUAL_STATUSES = (RoomStatus.AVAILABLE, RoomStatus.MAINTENANCE)
# 可删除的状态
DELETABLE_STATUSES = (RoomStatus.AVAILABLE, RoomStatus.MAINTENANCE)


class RoomService:
    """房间服务"""

    def __init__(self, repo: HotelRepository, event_publisher: EventPublisher = None):
        self.repo = repo
        # 支持依赖注入事件发布器，便于测试
        self._publish_event = event_publisher or event_bus.publish

    def get_rooms(self, status: Optional[RoomStatus] = None) -> List[Room]:
        """获取房间列表"""
        return self.repo.list_rooms(status)

    def get_room(self, room_id: str) -> Room:
        """获取单个房间"""
        room = self.repo.get_room(room_id)
        if not room:
            raise NotFoundError(f"Room {room_id} not found")
        return room

    def create_room(self, data: RoomCreate) -> Room:
        """创建房间，房间号唯一"""
        if data.status not in MANUAL_STATUSES:
            raise ValidationError(f"New rooms must be available or maintenance, got {data.status.value}")

        if self.repo.get_room_by_number(data.number):
            logger.warning(f"Room creation rejected: number {data.number} already exists")
            raise ConflictError(f"Room number '{data.number}' already exists")

        room = Room(
            id=new_id(),
            number=data.number,
            type=data.type,
            capacity=data.capacity,
            price_per_night=data.price_per_night,
            floor=data.floor,
            amenities=list(data.amenities),
            status=data.status,
        )
        with self.repo.transaction():
            self.repo.add_room(room)

        logger.info(f"Room {room.number} created ({room.type.value}, capacity {room.capacity})")
        self._publish_event(Event(
            event_type=EventType.ROOM_CREATED,
            data={"room_id": room.id, "room_number": room.number},
            source="room_service",
        ))
        return room

    def update_room_status(self, room_id: str, status: RoomStatus) -> Room:
        """
        人工切换房间状态（空闲 <-> 维修）
        已预订/入住中的房间只能通过预订生命周期改变状态
        """
        room = self.get_room(room_id)
        if status not in MANUAL_STATUSES:
            raise ValidationError(
                f"Room status can only be set to available or maintenance manually, got {status.value}"
            )
        if room.status not in MANUAL_STATUSES:
            raise ConflictError(f"Room {room.number} is {room.status.value}; its status follows the booking")

        old_status = room.status
        with self.repo.transaction():
            if self.repo.update_room_status(room.id, status, expected=MANUAL_STATUSES) == 0:
                raise ConflictError(f"Room {room.number} was booked while its status was being changed")

        room = self.get_room(room_id)
        if old_status != status:
            logger.info(f"Room {room.number} status: {old_status.value} -> {status.value}")
            self._publish_event(Event(
                event_type=EventType.ROOM_STATUS_CHANGED,
                data={"room_id": room.id, "room_number": room.number,
                      "old_status": old_status.value, "new_status": status.value},
                source="room_service",
            ))
        return room

    def delete_room(self, room_id: str) -> None:
        """删除房间，已预订或入住中的房间不能删除"""
        room = self.get_room(room_id)
        if room.status not in DELETABLE_STATUSES:
            logger.warning(f"Refused to delete room {room.number} in status {room.status.value}")
            raise ConflictError(f"Room {room.number} currently booked ({room.status.value})")

        number = room.number
        with self.repo.transaction():
            if self.repo.delete_room(room_id, expected=DELETABLE_STATUSES) == 0:
                raise ConflictError(f"Room {number} currently booked")

        logger.info(f"Room {number} deleted")
        self._publish_event(Event(
            event_type=EventType.ROOM_DELETED,
            data={"room_id": room_id, "room_number": number},
            source="room_service",
        ))
