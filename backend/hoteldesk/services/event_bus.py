"""
事件总线 - 进程内发布/订阅
同步执行处理器，处理器异常只记录日志，不影响发布方
"""
from typing import Callable, Dict, List, Any
from dataclasses import dataclass, field
from datetime import datetime
from collections import deque
import logging
import threading

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """事件"""
    event_type: str
    data: Dict[str, Any]
    source: str  # 触发来源（服务名）
    timestamp: datetime = field(default_factory=datetime.now)


EventPublisher = Callable[[Event], None]


class EventBus:
    """
    内存级事件总线

    使用方式：
    1. 订阅事件：event_bus.subscribe(EventType.STAY_COMPLETED, handler)
    2. 发布事件：event_bus.publish(Event(...))
    """

    def __init__(self, history_size: int = 100):
        self._subscribers: Dict[str, List[Callable]] = {}
        self._history: deque = deque(maxlen=history_size)
        self._lock = threading.Lock()

    @staticmethod
    def _key(event_type) -> str:
        return getattr(event_type, "value", event_type)

    def subscribe(self, event_type, handler: Callable) -> None:
        """订阅事件（同一处理器只登记一次）"""
        key = self._key(event_type)
        with self._lock:
            handlers = self._subscribers.setdefault(key, [])
            if handler not in handlers:
                handlers.append(handler)
                logger.info(f"Handler {handler.__name__} subscribed to {key}")

    def publish(self, event: Event) -> None:
        """发布事件"""
        key = self._key(event.event_type)
        self._history.append(event)

        with self._lock:
            handlers = list(self._subscribers.get(key, []))

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Event handler {handler.__name__} error for {key}: {e}", exc_info=True)

    def get_history(self, event_type=None, limit: int = 50) -> List[Event]:
        """事件历史（最新的在前）"""
        history = list(self._history)
        if event_type is not None:
            key = self._key(event_type)
            history = [e for e in history if self._key(e.event_type) == key]
        return list(reversed(history))[:limit]


# 全局事件总线实例
event_bus = EventBus()
