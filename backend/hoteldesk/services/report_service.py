"""
报表服务 - 仪表盘统计
"""
from datetime import datetime
from typing import Optional

from hoteldesk.models.hotel import BookingStatus, RoomStatus
from hoteldesk.repositories.base import HotelRepository
from hoteldesk.services.billing_service import to_money


class ReportService:
    """报表服务"""

    def __init__(self, repo: HotelRepository):
        self.repo = repo

    def get_dashboard_stats(self, now: Optional[datetime] = None) -> dict:
        """
        仪表盘数据
        本月营收 = completed_at 不早于本月 1 日的归档账单合计
        """
        now = now or datetime.now()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

        total_rooms = self.repo.count_rooms()
        available_rooms = self.repo.count_rooms(RoomStatus.AVAILABLE)
        occupancy_rate = round((total_rooms - available_rooms) / total_rooms * 100) if total_rooms else 0

        return {
            'total_rooms': total_rooms,
            'available_rooms': available_rooms,
            'reserved_bookings': self.repo.count_bookings([BookingStatus.RESERVED]),
            'active_bookings': self.repo.count_bookings([BookingStatus.RESERVED, BookingStatus.CHECKED_IN]),
            'total_guests': self.repo.count_guests(),
            'occupancy_rate': occupancy_rate,
            'monthly_revenue': to_money(self.repo.sum_archived_totals(month_start)),
        }
