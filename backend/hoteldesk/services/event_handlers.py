"""
事件处理器
把生命周期事件写入审计日志
"""
import logging

from hoteldesk.models.events import EventType
from hoteldesk.services.event_bus import event_bus, Event, EventBus

audit_logger = logging.getLogger("hoteldesk.audit")


def log_lifecycle_event(event: Event) -> None:
    """审计日志：记录每一次提交成功的状态变化"""
    details = ", ".join(f"{k}={v}" for k, v in sorted(event.data.items()))
    audit_logger.info(f"[{event.source}] {getattr(event.event_type, 'value', event.event_type)}: {details}")


def register_event_handlers(bus: EventBus = None) -> None:
    """在应用启动时注册所有处理器"""
    bus = bus or event_bus
    for event_type in EventType:
        bus.subscribe(event_type, log_lifecycle_event)
