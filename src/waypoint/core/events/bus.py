from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

EventHandler = Callable[[Dict[str, Any]], None]

WILDCARD = "*"


class EventNotifier(Protocol):
    def publish(self, topic: str, payload: Dict[str, Any]) -> None:
        ...


class InMemoryEventBus:
    """Synchronous in-process bus; handlers run in subscription order.

    Handler errors propagate to the publisher.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[EventHandler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: EventHandler) -> None:
        self._subscribers[topic].append(handler)

    def unsubscribe(self, topic: str, handler: EventHandler) -> bool:
        handlers = self._subscribers.get(topic, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def publish(self, topic: str, payload: Dict[str, Any]) -> None:
        logger.debug("Publishing %s to %d handler(s)", topic, self.subscriber_count(topic))
        # Exact subscribers
        for handler in list(self._subscribers.get(topic, [])):
            handler(payload)

        # Wildcard subscribers
        if topic != WILDCARD:
            for handler in list(self._subscribers.get(WILDCARD, [])):
                handler(payload)

    def subscriber_count(self, topic: str) -> int:
        count = len(self._subscribers.get(topic, []))
        if topic != WILDCARD:
            count += len(self._subscribers.get(WILDCARD, []))
        return count

    def clear(self) -> None:
        self._subscribers.clear()


_default_bus: Optional[EventNotifier] = None


def get_event_bus() -> EventNotifier:
    """Process-wide notifier used by engines built without an explicit one."""
    global _default_bus
    if _default_bus is None:
        _default_bus = InMemoryEventBus()
    return _default_bus


def set_event_bus(bus: Optional[EventNotifier]) -> None:
    """Replace the process-wide notifier; ``None`` resets to a fresh in-memory bus."""
    global _default_bus
    _default_bus = bus


__all__ = [
    "EventHandler",
    "EventNotifier",
    "InMemoryEventBus",
    "WILDCARD",
    "get_event_bus",
    "set_event_bus",
]
