from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from waypoint.core.utils.time import utc_timestamp

STATE_TRANSITIONED = "state.transitioned"

REQUIRED_KEYS = frozenset({"entity", "field", "from", "to"})


@dataclass(frozen=True)
class StateTransitioned:
    """Announced once per committed transition, after persistence."""

    entity: Any
    field: str
    from_state: Any
    to_state: Any
    entity_type: str = ""
    occurred_at: str = field(default_factory=utc_timestamp)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "entity": self.entity,
            "entity_type": self.entity_type,
            "field": self.field,
            "from": self.from_state,
            "to": self.to_state,
            "occurred_at": self.occurred_at,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "StateTransitioned":
        validate_payload(payload)
        return cls(
            entity=payload["entity"],
            field=str(payload["field"]),
            from_state=payload["from"],
            to_state=payload["to"],
            entity_type=str(payload.get("entity_type") or ""),
            occurred_at=str(payload.get("occurred_at") or utc_timestamp()),
        )


def validate_payload(payload: Mapping[str, Any]) -> None:
    missing = sorted(k for k in REQUIRED_KEYS if k not in payload)
    if missing:
        raise ValueError(f"Transition payload missing required keys: {missing}")


__all__ = ["STATE_TRANSITIONED", "StateTransitioned", "validate_payload"]
