"""
用户管理路由（仅管理员）
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from hoteldesk.database import get_db
from hoteldesk.errors import HotelError
from hoteldesk.models.hotel import User
from hoteldesk.models.schemas import UserCreate, UserResponse
from hoteldesk.services.user_service import UserService
from hoteldesk.security.auth import require_admin

router = APIRouter(prefix="/users", tags=["用户管理"])


@router.get("", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """获取用户列表"""
    return UserService(db).get_users()


@router.post("", response_model=UserResponse, status_code=201)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """创建用户"""
    try:
        return UserService(db).create_user(data)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """删除用户"""
    try:
        UserService(db).delete_user(user_id, current_user)
        return {"message": "User deleted"}
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
