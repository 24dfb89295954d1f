"""Transition rules and guards.

A rule is one allowed ``from -> to`` edge on one field. Its ``name`` is the
pascal-cased ``<From>To<To>`` form and is only used to look up hooks.

Guards are capability objects with ``evaluate(entity) -> bool``. Plain
callables are accepted wherever a guard is expected and are wrapped in
``CallableGuard``; the wrapped callable is kept by reference.
"""
from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from typing import Any, Callable, Optional, Protocol, Union, runtime_checkable

from waypoint.core.utils.text import studly


@runtime_checkable
class Guard(Protocol):
    """Predicate deciding whether a structurally valid edge is currently allowed."""

    def evaluate(self, entity: Any) -> bool:
        ...


@dataclass(frozen=True)
class CallableGuard:
    """Adapts ``fn(entity) -> bool`` to the ``Guard`` protocol."""

    fn: Callable[[Any], Any]

    def evaluate(self, entity: Any) -> bool:
        return bool(self.fn(entity))


GuardLike = Union[Guard, Callable[[Any], Any]]


def as_guard(guard: Optional[GuardLike]) -> Optional[Guard]:
    """Normalize a guard argument; ``None`` means unguarded."""
    if guard is None:
        return None
    if isinstance(guard, Guard):
        return guard
    if callable(guard):
        return CallableGuard(guard)
    raise TypeError(
        f"guard must provide evaluate(entity) or be callable, got {type(guard).__name__}"
    )


def transition_name(from_state: Any, to_state: Any) -> str:
    """Derive the hook lookup name for an edge: ``("draft", "published")`` -> ``"DraftToPublished"``."""
    return f"{studly(from_state)}To{studly(to_state)}"


@dataclass(frozen=True)
class Rule:
    field: str
    from_state: Any
    to_state: Any
    name: str
    guard: Optional[Guard] = dataclass_field(default=None, compare=False)

    @classmethod
    def create(
        cls,
        field: str,
        from_state: Any,
        to_state: Any,
        guard: Optional[GuardLike] = None,
    ) -> "Rule":
        return cls(
            field=field,
            from_state=from_state,
            to_state=to_state,
            name=transition_name(from_state, to_state),
            guard=as_guard(guard),
        )

    @property
    def guarded(self) -> bool:
        return self.guard is not None

    def matches(self, from_state: Any, to_state: Any) -> bool:
        """Structural match: equality on both ends, guard not consulted."""
        return self.from_state == from_state and self.to_state == to_state

    def allows(self, entity: Any) -> bool:
        """Evaluate the guard; unguarded rules always allow."""
        if self.guard is None:
            return True
        return bool(self.guard.evaluate(entity))

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_state,
            "to": self.to_state,
            "name": self.name,
            "guarded": self.guarded,
        }


__all__ = [
    "Guard",
    "CallableGuard",
    "GuardLike",
    "Rule",
    "as_guard",
    "transition_name",
]
