"""Transition hooks and their explicit resolution tables.

Hooks are bound explicitly instead of being discovered by class name:

    resolver.bind("status", "draft", "published", NotifyEditors())
    resolver.bind_common("status", AuditStatus(), entity_type="Article")

A *specific* hook bound with ``bind`` is keyed by field and the exact
``from -> to`` edge. The constructor table is keyed by transition name
(``DraftToPublished``) instead; edges whose names collide (``a -> b_to_c`` and
``a_to_b -> c``) share such an entry, so prefer ``bind`` for those.
A *common* hook is keyed by field alone and wraps every transition on it.
Keys scoped to an entity type win over shared keys, the same fallback used
by the guard/action registries this mirrors.

Example usage:
    resolver = HookResolver()
    resolver.bind("status", "draft", "published", PublishHook(), entity_type="Article")

    resolver.resolve_specific("Article", "status", "draft", "published")  # PublishHook
    resolver.resolve_specific("Order", "status", "draft", "published")    # None
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Tuple, runtime_checkable

from waypoint.core.exceptions import InvalidHookBindingError
from waypoint.core.utils.text import state_token

from .rules import transition_name


@runtime_checkable
class Hook(Protocol):
    """Capability every bound hook must provide."""

    def before(self, entity: Any, from_state: Any, to_state: Any) -> None:
        ...

    def after(self, entity: Any, from_state: Any, to_state: Any) -> None:
        ...


class TransitionHook(ABC):
    """Base class for hooks that run around a state transition.

    Extend this class for logic that must run before and after an entity's
    field changes state:
      - Validate business rules before the change
      - Send notifications after the change
      - Write audit trails

    Raising from ``before`` aborts the transition before the field is
    touched. ``after`` only runs once the new state has been persisted and
    announced; raising from it does not undo the transition.
    """

    @abstractmethod
    def before(self, entity: Any, from_state: Any, to_state: Any) -> None:
        """Runs before the field is changed."""

    @abstractmethod
    def after(self, entity: Any, from_state: Any, to_state: Any) -> None:
        """Runs after the new state was persisted and announced."""


HookCallback = Callable[[Any, Any, Any], Any]


class CallbackHook(TransitionHook):
    """Hook assembled from plain functions; a missing side is a no-op."""

    def __init__(
        self,
        before: Optional[HookCallback] = None,
        after: Optional[HookCallback] = None,
    ) -> None:
        self._before = before
        self._after = after

    def before(self, entity: Any, from_state: Any, to_state: Any) -> None:
        if self._before is not None:
            self._before(entity, from_state, to_state)

    def after(self, entity: Any, from_state: Any, to_state: Any) -> None:
        if self._after is not None:
            self._after(entity, from_state, to_state)


class HookResolver:
    """Explicit ``(field, from, to) -> hook`` and ``field -> hook`` tables.

    Attributes:
        SHARED: Entity-type scope for bindings that apply to every entity type
    """

    SHARED = "shared"
    COMMON = "Common"

    def __init__(
        self,
        specific: Optional[Mapping[Tuple[str, str], Any]] = None,
        common: Optional[Mapping[str, Any]] = None,
        *,
        entity_type: str = SHARED,
    ) -> None:
        """Initialize resolver.

        Args:
            specific: Initial ``{(field, transition_name): hook}`` table
            common: Initial ``{field: hook}`` table
            entity_type: Scope applied to both initial tables (default: shared)
        """
        self._specific: Dict[str, Any] = {}
        self._edges: Dict[Tuple[str, str, Any, Any], Any] = {}
        self._common: Dict[str, Any] = {}
        for (field, name), hook in (specific or {}).items():
            self._specific[self._make_key(f"{field}.{name}", entity_type)] = hook
        for field, hook in (common or {}).items():
            self._common[self._make_key(f"{field}.{self.COMMON}", entity_type)] = hook

    def _make_key(self, name: str, entity_type: str = SHARED) -> str:
        if entity_type == self.SHARED:
            return name
        return f"{entity_type}:{name}"

    def bind(
        self,
        field: str,
        from_state: Any,
        to_state: Any,
        hook: Any,
        *,
        entity_type: str = SHARED,
    ) -> None:
        """Bind a hook to exactly one ``from -> to`` edge of ``field``."""
        self._edges[(entity_type, field, from_state, to_state)] = hook

    def bind_common(self, field: str, hook: Any, *, entity_type: str = SHARED) -> None:
        """Bind a hook that wraps every transition of ``field``."""
        self._common[self._make_key(f"{field}.{self.COMMON}", entity_type)] = hook

    def _lookup(self, table: Dict[str, Any], name: str, entity_type: str) -> Optional[Any]:
        candidates = [name]
        if entity_type != self.SHARED:
            candidates.insert(0, self._make_key(name, entity_type))
        for key in candidates:
            if key in table:
                return self._validated(key, table[key])
        return None

    def _validated(self, key: str, binding: Any) -> Any:
        if isinstance(binding, type):
            raise InvalidHookBindingError(key, binding, detail="bind an instance, not a class")
        missing = [
            name for name in ("before", "after") if not callable(getattr(binding, name, None))
        ]
        if missing:
            raise InvalidHookBindingError(key, binding, detail=f"missing {', '.join(missing)}")
        return binding

    def resolve_specific(
        self, entity_type: str, field: str, from_state: Any, to_state: Any
    ) -> Optional[Hook]:
        """Hook bound to this edge, or None.

        Per scope (entity type, then shared) an exact ``bind`` edge wins over
        a constructor entry keyed by transition name.
        """
        name = f"{field}.{transition_name(from_state, to_state)}"
        scopes = [self.SHARED] if entity_type == self.SHARED else [entity_type, self.SHARED]
        for scope in scopes:
            edge = (scope, field, from_state, to_state)
            if edge in self._edges:
                return self._validated(self._edge_key(edge), self._edges[edge])
            key = self._make_key(name, scope)
            if key in self._specific:
                return self._validated(key, self._specific[key])
        return None

    def _edge_key(self, edge: Tuple[str, str, Any, Any]) -> str:
        scope, field, from_state, to_state = edge
        return self._make_key(
            f"{field}.{state_token(from_state)}->{state_token(to_state)}", scope
        )

    def resolve_common(self, entity_type: str, field: str) -> Optional[Hook]:
        """Hook bound to the whole field, or None."""
        return self._lookup(self._common, f"{field}.{self.COMMON}", entity_type)

    def bindings(self) -> Dict[str, str]:
        """``{key: hook type name}`` for inspection."""
        entries = list(self._common.items()) + list(self._specific.items())
        entries += [(self._edge_key(edge), hook) for edge, hook in self._edges.items()]
        return {
            key: hook.__name__ if isinstance(hook, type) else type(hook).__name__
            for key, hook in entries
        }


__all__ = [
    "Hook",
    "TransitionHook",
    "CallbackHook",
    "HookCallback",
    "HookResolver",
]
