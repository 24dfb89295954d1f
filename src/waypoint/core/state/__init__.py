"""Guarded field-state transitions.

Example usage:
    class Article:
        def __init__(self):
            self.status = "draft"

        def register_transitions(self, registry):
            registry.allow("status", "draft", "published", guard=lambda a: a.title)
            registry.allow("status", "published", "archived")

    engine = TransitionEngine(article, hooks=resolver)
    engine.can_transition("published")   # guard evaluated, nothing changes
    engine.transition_to("published")    # hooks, save, notify
"""
from .engine import TransitionEngine, TransitionReport
from .hooks import CallbackHook, Hook, HookCallback, HookResolver, TransitionHook
from .registry import RegistrationCallback, TransitionRegistry
from .rules import CallableGuard, Guard, GuardLike, Rule, as_guard, transition_name

__all__ = [
    "TransitionEngine",
    "TransitionReport",
    "TransitionRegistry",
    "RegistrationCallback",
    "Rule",
    "Guard",
    "GuardLike",
    "CallableGuard",
    "as_guard",
    "transition_name",
    "Hook",
    "HookCallback",
    "HookResolver",
    "TransitionHook",
    "CallbackHook",
]
