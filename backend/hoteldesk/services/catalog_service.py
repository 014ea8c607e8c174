"""
服务目录 - 可加入账单的附加服务
"""
from decimal import Decimal
from typing import List
import logging

from hoteldesk.models.hotel import BillItemCategory, Service, new_id
from hoteldesk.models.schemas import ServiceCreate
from hoteldesk.repositories.base import HotelRepository

logger = logging.getLogger(__name__)

DEFAULT_SERVICES = [
    ("Room Service", "24/7 room service", Decimal("25.00")),
    ("Spa Treatment", "Relaxing spa session", Decimal("75.00")),
    ("Airport Transfer", "Airport pickup/drop", Decimal("50.00")),
]


class CatalogService:
    """服务目录"""

    def __init__(self, repo: HotelRepository):
        self.repo = repo

    def get_services(self) -> List[Service]:
        return self.repo.list_services()

    def create_service(self, data: ServiceCreate) -> Service:
        service = Service(id=new_id(), **data.model_dump())
        with self.repo.transaction():
            self.repo.add_service(service)
        logger.info(f"Service '{service.name}' added to catalog")
        return service

    def seed_defaults(self) -> int:
        """目录为空时写入默认服务，返回写入数量"""
        if self.repo.list_services():
            return 0
        with self.repo.transaction():
            for name, description, price in DEFAULT_SERVICES:
                self.repo.add_service(Service(
                    id=new_id(), name=name, description=description,
                    price=price, category=BillItemCategory.SERVICE,
                ))
        return len(DEFAULT_SERVICES)
