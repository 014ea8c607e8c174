"""
事件历史路由（仅管理员）
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from hoteldesk.models.events import EventType
from hoteldesk.models.hotel import User
from hoteldesk.models.schemas import EventRecord
from hoteldesk.services.event_bus import event_bus
from hoteldesk.security.auth import require_admin

router = APIRouter(prefix="/events", tags=["事件"])


@router.get("", response_model=List[EventRecord])
def list_recent_events(
    event_type: Optional[EventType] = None,
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(require_admin)
):
    """最近发布的生命周期事件，最新的在前"""
    return [
        EventRecord(
            event_type=getattr(e.event_type, "value", e.event_type),
            source=e.source,
            data=e.data,
            timestamp=e.timestamp,
        )
        for e in event_bus.get_history(event_type, limit=limit)
    ]
