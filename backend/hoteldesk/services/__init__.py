# Services
from hoteldesk.services.room_service import RoomService
from hoteldesk.services.guest_service import GuestService
from hoteldesk.services.booking_service import BookingService
from hoteldesk.services.billing_service import BillingService
from hoteldesk.services.archive_service import ArchiveService
from hoteldesk.services.report_service import ReportService
from hoteldesk.services.catalog_service import CatalogService
from hoteldesk.services.user_service import UserService

__all__ = [
    'RoomService', 'GuestService', 'BookingService', 'BillingService',
    'ArchiveService', 'ReportService', 'CatalogService', 'UserService',
]
