"""Post-transition notifications."""
from .bus import (
    EventHandler,
    EventNotifier,
    InMemoryEventBus,
    WILDCARD,
    get_event_bus,
    set_event_bus,
)
from .contracts import STATE_TRANSITIONED, StateTransitioned, validate_payload

__all__ = [
    "EventHandler",
    "EventNotifier",
    "InMemoryEventBus",
    "WILDCARD",
    "get_event_bus",
    "set_event_bus",
    "STATE_TRANSITIONED",
    "StateTransitioned",
    "validate_payload",
]
