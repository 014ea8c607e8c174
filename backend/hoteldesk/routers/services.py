"""
服务目录路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from hoteldesk.errors import HotelError
from hoteldesk.models.hotel import User
from hoteldesk.models.schemas import ServiceCreate, ServiceResponse
from hoteldesk.repositories import HotelRepository, get_repository
from hoteldesk.services.catalog_service import CatalogService
from hoteldesk.security.auth import require_staff_or_admin

router = APIRouter(prefix="/services", tags=["服务目录"])


@router.get("", response_model=List[ServiceResponse])
def list_services(
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    return CatalogService(repo).get_services()


@router.post("", response_model=ServiceResponse, status_code=201)
def create_service(
    data: ServiceCreate,
    repo: HotelRepository = Depends(get_repository),
    current_user: User = Depends(require_staff_or_admin)
):
    """添加服务项目"""
    try:
        return CatalogService(repo).create_service(data)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
