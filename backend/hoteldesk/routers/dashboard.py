"""
仪表盘路由
"""
from fastapi import APIRouter, Depends
from hoteldesk.models.hotel import User
from hoteldesk.models.schemas import DashboardStats
from hoteldesk.repositories import HotelRepository, get_repository
from hoteldesk.services.report_service import ReportService
from hoteldesk.security.auth import require_staff_or_admin

router = APIRouter(prefix="/dashboard", tags=["仪表盘"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    return ReportService(repo).get_dashboard_stats()
