"""Per-entity registry of allowed transitions.

Rules are kept per field in insertion order. Lookup returns the first rule
whose ``(from, to)`` matches; a later rule with the same pair is never
reached, even when the first one's guard rejects.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .rules import GuardLike, Rule

logger = logging.getLogger(__name__)

RegistrationCallback = Callable[["TransitionRegistry"], None]


class TransitionRegistry:
    """Ordered ``field -> [Rule, ...]`` table with one-shot lazy initialization.

    Not thread-safe: one registry belongs to one entity instance.
    """

    def __init__(self) -> None:
        self._rules: Dict[str, List[Rule]] = {}
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def register(
        self,
        field: str,
        from_state: Any,
        to_state: Any,
        guard: Optional[GuardLike] = None,
    ) -> Rule:
        """Append an edge for ``field``. Duplicated pairs are kept but unreachable."""
        if not field:
            raise ValueError("field must be a non-empty string")
        rule = Rule.create(field, from_state, to_state, guard)
        self._rules.setdefault(field, []).append(rule)
        return rule

    # Reads as the declaration it is inside register_transitions().
    allow = register

    def ensure_initialized(self, callback: RegistrationCallback) -> bool:
        """Run ``callback(self)`` once; returns True when it ran on this call.

        If the callback raises, rules it added are discarded and the registry
        stays uninitialized so the next call starts from the same state.
        """
        if self._initialized:
            return False

        before = {f: list(rules) for f, rules in self._rules.items()}
        try:
            callback(self)
        except Exception:
            self._rules = before
            raise
        self._initialized = True
        logger.debug(
            "Registered transitions: %s",
            {f: len(rules) for f, rules in self._rules.items()},
        )
        return True

    def fields(self) -> List[str]:
        return list(self._rules.keys())

    def rules(self, field: str) -> List[Rule]:
        return list(self._rules.get(field, ()))

    def find(self, field: str, from_state: Any, to_state: Any) -> Optional[Rule]:
        """First structurally matching rule, without evaluating its guard."""
        for rule in self._rules.get(field, ()):
            if rule.matches(from_state, to_state):
                return rule
        return None

    def lookup(self, field: str, from_state: Any, to_state: Any, entity: Any) -> Optional[Rule]:
        """First matching rule if its guard allows, else None.

        A rejecting guard on the first match denies immediately; scanning
        does not continue.
        """
        rule = self.find(field, from_state, to_state)
        if rule is None or not rule.allows(entity):
            return None
        return rule

    def targets_from(self, field: str, from_state: Any) -> List[Any]:
        """Distinct structural targets reachable from ``from_state``, in rule order."""
        targets: List[Any] = []
        for rule in self._rules.get(field, ()):
            if rule.from_state == from_state and rule.to_state not in targets:
                targets.append(rule.to_state)
        return targets

    def snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        """Read-only copy of the table for inspection tooling."""
        return {f: [rule.to_dict() for rule in rules] for f, rules in self._rules.items()}

    def __len__(self) -> int:
        return sum(len(rules) for rules in self._rules.values())


__all__ = ["TransitionRegistry", "RegistrationCallback"]
