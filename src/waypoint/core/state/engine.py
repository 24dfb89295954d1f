"""Transition execution for one entity instance.

``TransitionEngine`` wraps an entity together with its ``TransitionRegistry``
and runs a transition in a fixed order:

1. field check        (UnknownFieldError)
2. lazy registration  (once per engine)
3. rule lookup + guard (TransitionDeniedError)
4. hook resolution    (InvalidHookBindingError)
5. common.before, specific.before
6. set field
7. persist            (PersistenceFailureError, after-hooks skipped)
8. notify
9. specific.after, common.after

Nothing is rolled back: if persistence fails, the in-memory field value and
any before-hook side effects stay as they are.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field as dataclass_field
from pathlib import Path
from typing import Any, Dict, List, Optional

from waypoint.core.audit.logger import audit_event
from waypoint.core.config.domains.engine import EngineConfig
from waypoint.core.entity.adapters import SaveCallback, adapt_entity
from waypoint.core.entity.protocols import EntityAdapter, TransitionSource
from waypoint.core.events.bus import EventNotifier, get_event_bus
from waypoint.core.events.contracts import StateTransitioned
from waypoint.core.exceptions import (
    GuardEvaluationError,
    MissingRegistrationError,
    PersistenceFailureError,
    TransitionDeniedError,
    UnknownFieldError,
)

from .hooks import Hook, HookResolver
from .registry import RegistrationCallback, TransitionRegistry
from .rules import Rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionReport:
    """What inspection tooling shows for one field of one entity."""

    entity_type: str
    field: str
    current: Any
    transitions: List[Dict[str, Any]] = dataclass_field(default_factory=list)
    reachable: List[Any] = dataclass_field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entity_type": self.entity_type,
            "field": self.field,
            "current": self.current,
            "transitions": list(self.transitions),
            "reachable": list(self.reachable),
        }


class TransitionEngine:
    """Guarded state transitions for the fields of one entity.

    Args:
        entity: The domain object; guards and hooks receive it unchanged.
        registration: ``fn(registry)`` declaring the allowed transitions.
            Defaults to ``entity.register_transitions``.
        hooks: Resolver holding the before/after hook bindings.
        notifier: Receives the post-transition event. Defaults to the
            process-wide bus from ``get_event_bus()``.
        adapter: Attribute access and persistence for ``entity``. Defaults to
            ``adapt_entity(entity, save=save)``.
        entity_type: Name used for hook scoping and messages. Defaults to the
            entity's class name.
        config: Engine settings; loaded from project config when omitted.

    One engine owns one registry, so keep one engine per entity instance.
    The engine performs no locking.
    """

    def __init__(
        self,
        entity: Any,
        *,
        registration: Optional[RegistrationCallback] = None,
        hooks: Optional[HookResolver] = None,
        notifier: Optional[EventNotifier] = None,
        adapter: Optional[EntityAdapter] = None,
        save: Optional[SaveCallback] = None,
        entity_type: Optional[str] = None,
        config: Optional[EngineConfig] = None,
        repo_root: Optional[Path] = None,
    ) -> None:
        self.entity = entity
        self.entity_type = entity_type or type(entity).__name__
        if registration is None:
            if not isinstance(entity, TransitionSource):
                raise MissingRegistrationError(self.entity_type)
            registration = entity.register_transitions
        self._registration = registration
        self.adapter = adapter if adapter is not None else adapt_entity(entity, save=save)
        self.registry = TransitionRegistry()
        self.hooks = hooks if hooks is not None else HookResolver()
        self._notifier = notifier
        self._config = config
        self._repo_root = repo_root

    @property
    def config(self) -> EngineConfig:
        if self._config is None:
            self._config = EngineConfig(repo_root=self._repo_root)
        return self._config

    @property
    def notifier(self) -> EventNotifier:
        return self._notifier if self._notifier is not None else get_event_bus()

    # ---------------------------------------------------------------- helpers

    def _field(self, field: Optional[str]) -> str:
        """Resolve the target field, reading every engine setting up front.

        A broken config must fail before any hook runs or the entity changes.
        """
        config = self.config
        for setting in ("notify", "event_topic"):
            getattr(config, setting)
        return field or config.default_field

    def _require_field(self, field: str) -> None:
        if not self.adapter.has_attribute(field):
            raise UnknownFieldError(field, entity_type=self.entity_type)

    def _ensure_registry(self) -> None:
        self.registry.ensure_initialized(self._registration)

    def _audit(self, event: str, **fields: Any) -> None:
        audit_event(
            event,
            repo_root=self._repo_root,
            entity_type=self.entity_type,
            entity_id=getattr(self.entity, "id", None),
            **fields,
        )

    def _debug(self, event: str, **fields: Any) -> None:
        logger.debug("%s %s %r", self.entity_type, event, fields)

    def _resolve_rule(self, field: str, current: Any, target: Any, *, audit: bool = True) -> Rule:
        """Matching rule whose guard allows ``current -> target``.

        With ``audit=False`` nothing is written to the audit stream; queries
        such as ``can_transition`` only log at debug level.
        """
        record = self._audit if audit else self._debug
        rule = self.registry.find(field, current, target)
        if rule is None:
            record("transition.denied", field=field, to=target, **{"from": current})
            raise TransitionDeniedError(
                field,
                current,
                target,
                entity_type=self.entity_type,
                reason=TransitionDeniedError.NO_MATCHING_RULE,
            )

        try:
            allowed = rule.allows(self.entity)
        except Exception as exc:
            record("guard.error", field=field, rule=rule.name, error=str(exc))
            raise GuardEvaluationError(
                field, current, target, entity_type=self.entity_type, error=exc
            ) from exc

        if not allowed:
            record("guard.blocked", field=field, rule=rule.name)
            raise TransitionDeniedError(
                field,
                current,
                target,
                entity_type=self.entity_type,
                reason=TransitionDeniedError.GUARD_REJECTED,
            )
        return rule

    def _run_hook(self, hook: Optional[Hook], stage: str, field: str, current: Any, target: Any) -> None:
        if hook is None:
            return
        try:
            getattr(hook, stage)(self.entity, current, target)
        except Exception as exc:
            self._audit(
                "hook.error",
                field=field,
                stage=stage,
                hook=type(hook).__name__,
                error=str(exc),
            )
            raise

    def _persist(self, field: str, current: Any, target: Any) -> None:
        try:
            result = self.adapter.persist()
        except Exception as exc:
            self._audit("persist.failed", field=field, to=target, error=str(exc), **{"from": current})
            raise PersistenceFailureError(
                field, current, target, entity_type=self.entity_type, detail=str(exc)
            ) from exc
        if result is False:
            self._audit("persist.failed", field=field, to=target, error="persist() returned False", **{"from": current})
            raise PersistenceFailureError(
                field, current, target, entity_type=self.entity_type, detail="persist() returned False"
            )

    def _notify(self, field: str, current: Any, target: Any) -> None:
        if not self.config.notify:
            return
        event = StateTransitioned(
            entity=self.entity,
            field=field,
            from_state=current,
            to_state=target,
            entity_type=self.entity_type,
        )
        self.notifier.publish(self.config.event_topic, event.to_payload())

    # -------------------------------------------------------------- operations

    def transition_to(self, target: Any, field: Optional[str] = None) -> bool:
        """Move ``field`` from its current value to ``target``.

        Returns:
            True once the transition is persisted, announced and after-hooks ran.

        Raises:
            UnknownFieldError: ``field`` is not an attribute of the entity.
            TransitionDeniedError: no rule for the pair, or its guard rejected.
            InvalidHookBindingError: a bound hook lacks before/after.
            PersistenceFailureError: the entity could not be stored.
        """
        field = self._field(field)
        self._require_field(field)
        self._ensure_registry()

        current = self.adapter.get_attribute(field)
        rule = self._resolve_rule(field, current, target)

        common = self.hooks.resolve_common(self.entity_type, field)
        specific = self.hooks.resolve_specific(self.entity_type, field, rule.from_state, rule.to_state)

        self._run_hook(common, "before", field, current, target)
        self._run_hook(specific, "before", field, current, target)

        self.adapter.set_attribute(field, target)
        self._persist(field, current, target)
        self._notify(field, current, target)

        self._run_hook(specific, "after", field, current, target)
        self._run_hook(common, "after", field, current, target)

        logger.info(
            "%s.%s transitioned %r -> %r", self.entity_type, field, current, target
        )
        self._audit("transition.completed", field=field, rule=rule.name, to=target, **{"from": current})
        return True

    def can_transition(self, target: Any, field: Optional[str] = None) -> bool:
        """Whether ``transition_to(target, field)`` would pass lookup and guard.

        Never mutates the entity, runs no hooks, publishes nothing.
        """
        field = self._field(field)
        if not self.adapter.has_attribute(field):
            return False
        self._ensure_registry()
        current = self.adapter.get_attribute(field)
        try:
            self._resolve_rule(field, current, target, audit=False)
        except TransitionDeniedError:
            return False
        return True

    # -------------------------------------------------------------- inspection

    def current_state(self, field: Optional[str] = None) -> Any:
        field = self._field(field)
        self._require_field(field)
        return self.adapter.get_attribute(field)

    def snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        """``{field: [{from, to, name, guarded}, ...]}`` for every registered field."""
        self._ensure_registry()
        return self.registry.snapshot()

    def available_transitions(self, field: Optional[str] = None) -> List[Any]:
        """Targets reachable from the current state whose guards currently allow."""
        field = self._field(field)
        if not self.adapter.has_attribute(field):
            return []
        self._ensure_registry()
        current = self.adapter.get_attribute(field)
        return [
            target
            for target in self.registry.targets_from(field, current)
            if self.can_transition(target, field)
        ]

    def describe(self, field: Optional[str] = None) -> TransitionReport:
        """Current value, registered edges and structural targets for ``field``."""
        field = self._field(field)
        current = self.current_state(field)
        self._ensure_registry()
        return TransitionReport(
            entity_type=self.entity_type,
            field=field,
            current=current,
            transitions=[
                {"from": rule.from_state, "to": rule.to_state} for rule in self.registry.rules(field)
            ],
            reachable=self.registry.targets_from(field, current),
        )


__all__ = ["TransitionEngine", "TransitionReport"]
