"""
房间管理路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from hoteldesk.errors import HotelError
from hoteldesk.models.hotel import RoomStatus, User
from hoteldesk.models.schemas import RoomCreate, RoomResponse, RoomStatusUpdate
from hoteldesk.repositories import HotelRepository, get_repository
from hoteldesk.services.room_service import RoomService
from hoteldesk.security.auth import require_admin, require_staff_or_admin

router = APIRouter(prefix="/rooms", tags=["房间管理"])


@router.get("", response_model=List[RoomResponse])
def list_rooms(
    status: Optional[RoomStatus] = Query(None, description="按状态筛选"),
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """获取房间列表"""
    return RoomService(repo).get_rooms(status)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: str,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """获取房间详情"""
    try:
        return RoomService(repo).get_room(room_id)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=RoomResponse, status_code=201)
def create_room(
    data: RoomCreate,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """创建房间"""
    try:
        return RoomService(repo).create_room(data)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{room_id}/status", response_model=RoomResponse)
def update_room_status(
    room_id: str,
    data: RoomStatusUpdate,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """手动切换房间状态（空闲 / 维修）"""
    try:
        return RoomService(repo).update_room_status(room_id, data.status)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{room_id}")
def delete_room(
    room_id: str,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_admin)
):
    """删除房间（仅管理员，已预订或入住的房间不可删除）"""
    try:
        RoomService(repo).delete_room(room_id)
        return {"message": "Room deleted"}
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
