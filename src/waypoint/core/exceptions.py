from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional


def format_state(value: Any) -> str:
    """Render a state value for messages (enum members by value)."""
    if isinstance(value, Enum):
        value = value.value
    return repr(value)


class WaypointError(Exception):
    """Base exception for waypoint."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": {k: _json_safe(v) for k, v in self.context.items()},
        }


def _json_safe(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


class UnknownFieldError(WaypointError, AttributeError):
    """Raised when the requested field is not an attribute of the entity."""

    def __init__(self, field: str, *, entity_type: Optional[str] = None) -> None:
        owner = f" on {entity_type}" if entity_type else ""
        message = f"Field '{field}' does not exist{owner}"
        WaypointError.__init__(self, message, context={"field": field, "entity_type": entity_type})
        AttributeError.__init__(self, message)
        self.field = field
        self.entity_type = entity_type


class TransitionDeniedError(WaypointError, ValueError):
    """Raised when no rule allows the requested transition.

    ``reason`` tells the two denial causes apart for diagnostics only;
    callers that just need to know "denied" should catch this class.
    """

    NO_MATCHING_RULE = "no_matching_rule"
    GUARD_REJECTED = "guard_rejected"

    def __init__(
        self,
        field: str,
        from_state: Any,
        to_state: Any,
        *,
        entity_type: Optional[str] = None,
        reason: str = NO_MATCHING_RULE,
        message: Optional[str] = None,
    ) -> None:
        owner = f" on {entity_type}" if entity_type else ""
        msg = message or (
            f"Transition of field '{field}'{owner} from {format_state(from_state)} "
            f"to {format_state(to_state)} is not allowed"
        )
        WaypointError.__init__(
            self,
            msg,
            context={
                "field": field,
                "from": from_state,
                "to": to_state,
                "entity_type": entity_type,
                "reason": reason,
            },
        )
        ValueError.__init__(self, msg)
        self.field = field
        self.from_state = from_state
        self.to_state = to_state
        self.entity_type = entity_type
        self.reason = reason


class GuardEvaluationError(TransitionDeniedError):
    """Raised when a guard itself fails; the transition is treated as denied."""

    GUARD_FAILED = "guard_failed"

    def __init__(
        self,
        field: str,
        from_state: Any,
        to_state: Any,
        *,
        entity_type: Optional[str] = None,
        error: BaseException,
    ) -> None:
        super().__init__(
            field,
            from_state,
            to_state,
            entity_type=entity_type,
            reason=self.GUARD_FAILED,
            message=(
                f"Guard for field '{field}' transition {format_state(from_state)} -> "
                f"{format_state(to_state)} raised {type(error).__name__}: {error}"
            ),
        )


class InvalidHookBindingError(WaypointError, TypeError):
    """Raised when a bound hook does not provide callable before/after."""

    def __init__(self, key: str, binding: Any, *, detail: str = "") -> None:
        kind = binding.__name__ if isinstance(binding, type) else type(binding).__name__
        message = f"Invalid transition hook bound to '{key}': {kind}"
        if detail:
            message = f"{message} ({detail})"
        WaypointError.__init__(self, message, context={"key": key, "binding": kind})
        TypeError.__init__(self, message)
        self.key = key
        self.binding = binding


class PersistenceFailureError(WaypointError, RuntimeError):
    """Raised when the entity could not be persisted after mutation.

    The field value on the in-memory entity has already changed when this
    is raised and is not restored.
    """

    def __init__(
        self,
        field: str,
        from_state: Any,
        to_state: Any,
        *,
        entity_type: Optional[str] = None,
        detail: str = "",
    ) -> None:
        message = f"Failed to persist transition of field '{field}' to {format_state(to_state)}"
        if detail:
            message = f"{message}: {detail}"
        WaypointError.__init__(
            self,
            message,
            context={"field": field, "from": from_state, "to": to_state, "entity_type": entity_type},
        )
        RuntimeError.__init__(self, message)
        self.field = field
        self.from_state = from_state
        self.to_state = to_state
        self.entity_type = entity_type


class MissingRegistrationError(WaypointError, TypeError):
    """Raised when an engine has no way to register its transitions."""

    def __init__(self, entity_type: str) -> None:
        message = (
            f"{entity_type} does not implement register_transitions(registry) "
            "and no registration callback was given"
        )
        WaypointError.__init__(self, message, context={"entity_type": entity_type})
        TypeError.__init__(self, message)
        self.entity_type = entity_type


class ConfigError(WaypointError, ValueError):
    """Raised when configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        WaypointError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "WaypointError",
    "UnknownFieldError",
    "TransitionDeniedError",
    "GuardEvaluationError",
    "InvalidHookBindingError",
    "PersistenceFailureError",
    "MissingRegistrationError",
    "ConfigError",
    "format_state",
]
