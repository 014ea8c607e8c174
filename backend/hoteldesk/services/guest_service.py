"""
客人服务 - 客人登记
"""
from datetime import datetime
from typing import List
import logging

from hoteldesk.errors import NotFoundError
from hoteldesk.models.events import EventType
from hoteldesk.models.hotel import Guest, new_id
from hoteldesk.models.schemas import GuestCreate
from hoteldesk.repositories.base import HotelRepository
from hoteldesk.services.event_bus import event_bus, Event, EventPublisher

logger = logging.getLogger(__name__)


class GuestService:
    """客人服务"""

    def __init__(self, repo: HotelRepository, event_publisher: EventPublisher = None):
        self.repo = repo
        self._publish_event = event_publisher or event_bus.publish

    def get_guests(self) -> List[Guest]:
        return self.repo.list_guests()

    def get_guest(self, guest_id: str) -> Guest:
        guest = self.repo.get_guest(guest_id)
        if not guest:
            raise NotFoundError(f"Guest {guest_id} not found")
        return guest

    def create_guest(self, data: GuestCreate) -> Guest:
        """登记客人"""
        guest = Guest(id=new_id(), created_at=datetime.now(), **data.model_dump())
        with self.repo.transaction():
            self.repo.add_guest(guest)

        logger.info(f"Guest {guest.id} registered")
        self._publish_event(Event(
            event_type=EventType.GUEST_CREATED,
            data={"guest_id": guest.id},
            source="guest_service",
        ))
        return guest
