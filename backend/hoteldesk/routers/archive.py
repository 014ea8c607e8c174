"""
归档账单路由（只读）
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from hoteldesk.errors import HotelError
from hoteldesk.models.hotel import User
from hoteldesk.models.schemas import ArchivedBillResponse
from hoteldesk.repositories import HotelRepository, get_repository
from hoteldesk.services.archive_service import ArchiveService
from hoteldesk.security.auth import require_staff_or_admin

router = APIRouter(prefix="/archive", tags=["归档"])


@router.get("", response_model=List[ArchivedBillResponse])
def list_archived_bills(
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    return ArchiveService(repo).get_archived_bills()


@router.get("/{archived_id}", response_model=ArchivedBillResponse)
def get_archived_bill(
    archived_id: str,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    try:
        return ArchiveService(repo).get_archived_bill(archived_id)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
