"""
Waypoint - guarded state transitions for domain entities

Declare which ``from -> to`` edges a field may take, guard them with runtime
predicates, run hooks around the change and announce it on an event bus.
"""

__version__ = "1.0.0"

from waypoint.core.entity import MappingAdapter, ObjectAdapter, adapt_entity
from waypoint.core.events import InMemoryEventBus, StateTransitioned, get_event_bus, set_event_bus
from waypoint.core.exceptions import (
    ConfigError,
    GuardEvaluationError,
    InvalidHookBindingError,
    MissingRegistrationError,
    PersistenceFailureError,
    TransitionDeniedError,
    UnknownFieldError,
    WaypointError,
)
from waypoint.core.state import (
    CallbackHook,
    HookResolver,
    Rule,
    TransitionEngine,
    TransitionHook,
    TransitionRegistry,
    TransitionReport,
)

__all__ = [
    "__version__",
    "TransitionEngine",
    "TransitionReport",
    "TransitionRegistry",
    "Rule",
    "HookResolver",
    "TransitionHook",
    "CallbackHook",
    "ObjectAdapter",
    "MappingAdapter",
    "adapt_entity",
    "InMemoryEventBus",
    "StateTransitioned",
    "get_event_bus",
    "set_event_bus",
    "WaypointError",
    "UnknownFieldError",
    "TransitionDeniedError",
    "GuardEvaluationError",
    "InvalidHookBindingError",
    "PersistenceFailureError",
    "MissingRegistrationError",
    "ConfigError",
]
