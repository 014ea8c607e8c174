"""
仓储层
请求层通过 get_repository 获取绑定当前会话的 SQL 仓储
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from hoteldesk.database import get_db
from hoteldesk.repositories.base import HotelRepository
from hoteldesk.repositories.sql import SqlHotelRepository
from hoteldesk.repositories.memory import InMemoryHotelRepository


def get_repository(db: Session = Depends(get_db)) -> HotelRepository:
    """依赖注入：获取仓储"""
    return SqlHotelRepository(db)


__all__ = [
    "HotelRepository", "SqlHotelRepository", "InMemoryHotelRepository", "get_repository",
]
