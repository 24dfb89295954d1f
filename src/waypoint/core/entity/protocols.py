"""Protocols for entities handled by the transition engine.

These protocols describe capabilities; nothing checks them when an entity is
created. The engine only asks ``isinstance(entity, EntityAdapter)`` to decide
whether an entity can be used without an adapter.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from waypoint.core.state.registry import TransitionRegistry


@runtime_checkable
class EntityAdapter(Protocol):
    """Attribute access and persistence for one entity instance."""

    def has_attribute(self, name: str) -> bool:
        ...

    def get_attribute(self, name: str) -> Any:
        ...

    def set_attribute(self, name: str, value: Any) -> None:
        ...

    def persist(self) -> Optional[bool]:
        """Store the entity. Raising, or returning ``False``, is a failure."""
        ...


@runtime_checkable
class TransitionSource(Protocol):
    """Entities that declare their own allowed transitions.

    Example:
        def register_transitions(self, registry):
            registry.allow("status", "pending", "processing")
            registry.allow("status", "processing", "completed")

            if self.has_special_permission():
                registry.allow("status", "cancelled", "processing")
    """

    def register_transitions(self, registry: "TransitionRegistry") -> None:
        ...


__all__ = ["EntityAdapter", "TransitionSource"]
