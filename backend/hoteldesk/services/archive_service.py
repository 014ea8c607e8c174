"""
归档服务 - 已完成住宿的只读查询
归档记录只在结账时由 BillingService 写入
"""
from typing import List

from hoteldesk.errors import NotFoundError
from hoteldesk.models.hotel import ArchivedBill
from hoteldesk.repositories.base import HotelRepository


class ArchiveService:
    """归档服务"""

    def __init__(self, repo: HotelRepository):
        self.repo = repo

    def get_archived_bills(self) -> List[ArchivedBill]:
        """归档列表，最近完成的在前"""
        return self.repo.list_archived_bills()

    def get_archived_bill(self, archived_id: str) -> ArchivedBill:
        archived = self.repo.get_archived_bill(archived_id)
        if not archived:
            raise NotFoundError(f"Archived bill {archived_id} not found")
        return archived
