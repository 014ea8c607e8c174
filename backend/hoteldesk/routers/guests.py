"""
客人管理路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from hoteldesk.errors import HotelError
from hoteldesk.models.hotel import User
from hoteldesk.models.schemas import GuestCreate, GuestResponse
from hoteldesk.repositories import HotelRepository, get_repository
from hoteldesk.services.guest_service import GuestService
from hoteldesk.security.auth import require_staff_or_admin

router = APIRouter(prefix="/guests", tags=["客人管理"])


@router.get("", response_model=List[GuestResponse])
def list_guests(
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    return GuestService(repo).get_guests()


@router.get("/{guest_id}", response_model=GuestResponse)
def get_guest(
    guest_id: str,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    try:
        return GuestService(repo).get_guest(guest_id)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=GuestResponse, status_code=201)
def create_guest(
    data: GuestCreate,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """登记客人"""
    try:
        return GuestService(repo).create_guest(data)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
