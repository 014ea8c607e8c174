"""
预订与入住/退房路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from hoteldesk.config import settings
from hoteldesk.errors import HotelError
from hoteldesk.models.hotel import BookingStatus, User
from hoteldesk.models.schemas import BookingCreate, BookingResponse, BookingDetailResponse
from hoteldesk.repositories import HotelRepository, get_repository
from hoteldesk.services.booking_service import BookingService
from hoteldesk.security.auth import require_staff_or_admin

router = APIRouter(prefix="/bookings", tags=["预订管理"])


@router.get("", response_model=List[BookingDetailResponse])
def list_bookings(
    status: Optional[BookingStatus] = Query(None, description="按状态筛选"),
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """获取预订列表（最新在前）"""
    return BookingService(repo).get_bookings(status)


@router.get("/recent", response_model=List[BookingDetailResponse])
def list_recent_bookings(
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """最近预订"""
    return BookingService(repo).get_bookings(limit=settings.RECENT_BOOKINGS_LIMIT)


@router.get("/today-checkins", response_model=List[BookingDetailResponse])
def list_today_check_ins(
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """今日待入住"""
    return BookingService(repo).get_today_check_ins()


@router.get("/{booking_id}", response_model=BookingDetailResponse)
def get_booking(
    booking_id: str,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    try:
        return BookingService(repo).get_booking_detail(booking_id)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=BookingResponse, status_code=201)
def create_booking(
    data: BookingCreate,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """创建预订，房间转为已预订"""
    try:
        return BookingService(repo).create_booking(data)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/{booking_id}/checkin", response_model=BookingResponse)
def check_in(
    booking_id: str,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """办理入住"""
    try:
        return BookingService(repo).check_in(booking_id)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/{booking_id}/checkout", response_model=BookingResponse)
def check_out(
    booking_id: str,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """办理退房，房间保持占用直到结账完成"""
    try:
        return BookingService(repo).check_out(booking_id)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
