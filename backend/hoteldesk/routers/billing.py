"""
账单路由
"""
from fastapi import APIRouter, Depends, HTTPException, status
from hoteldesk.errors import HotelError
from hoteldesk.models.hotel import User
from hoteldesk.models.schemas import (
    BillGenerateRequest, BillItemCreate, BillItemResponse,
    BillDetailResponse, ArchivedBillResponse
)
from hoteldesk.repositories import HotelRepository, get_repository
from hoteldesk.services.billing_service import BillingService
from hoteldesk.security.auth import require_staff_or_admin

router = APIRouter(prefix="/bills", tags=["账单管理"])


@router.post("/generate", response_model=BillDetailResponse, status_code=201)
def generate_bill(
    data: BillGenerateRequest,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """为预订生成账单（含房费明细）"""
    try:
        return BillingService(repo).generate_bill(data.booking_id)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/add-item", response_model=BillItemResponse, status_code=201)
def add_bill_item(
    data: BillItemCreate,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """添加账单明细并重新计算合计"""
    try:
        return BillingService(repo).add_bill_item(data)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{booking_id}", response_model=BillDetailResponse)
def get_bill(
    booking_id: str,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """获取账单详情"""
    bill = BillingService(repo).get_bill(booking_id)
    if not bill:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bill not found")
    return bill


@router.post("/{booking_id}/complete", response_model=ArchivedBillResponse)
def complete_bill(
    booking_id: str,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """结账归档"""
    try:
        return BillingService(repo).complete_bill(booking_id)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
