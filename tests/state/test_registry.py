from __future__ import annotations

import pytest

from tests.helpers.models import Priority
from waypoint.core.state.registry import TransitionRegistry


def _publishing(registry: TransitionRegistry) -> None:
    registry.allow("status", "draft", "published")
    registry.allow("status", "published", "archived")
    registry.allow("status", "published", "draft")


def test_register_appends_rules_in_order() -> None:
    registry = TransitionRegistry()
    _publishing(registry)

    assert registry.fields() == ["status"]
    assert [(r.from_state, r.to_state) for r in registry.rules("status")] == [
        ("draft", "published"),
        ("published", "archived"),
        ("published", "draft"),
    ]
    assert len(registry) == 3


def test_register_requires_field_name() -> None:
    with pytest.raises(ValueError):
        TransitionRegistry().register("", "a", "b")


def test_lookup_skips_non_matching_rules() -> None:
    registry = TransitionRegistry()
    _publishing(registry)

    rule = registry.lookup("status", "published", "draft", entity=object())

    assert rule is not None
    assert rule.name == "PublishedToDraft"


def test_lookup_returns_none_when_no_edge() -> None:
    registry = TransitionRegistry()
    _publishing(registry)

    assert registry.lookup("status", "draft", "archived", entity=object()) is None
    assert registry.lookup("missing", "draft", "published", entity=object()) is None


def test_first_match_guard_rejection_does_not_fall_through() -> None:
    registry = TransitionRegistry()
    registry.register("status", "draft", "published", guard=lambda e: False)
    registry.register("status", "draft", "published")

    # Duplicate pair is stored but unreachable.
    assert len(registry.rules("status")) == 2
    assert registry.find("status", "draft", "published") is registry.rules("status")[0]
    assert registry.lookup("status", "draft", "published", entity=object()) is None


def test_ensure_initialized_runs_callback_once() -> None:
    calls = []

    def register(registry: TransitionRegistry) -> None:
        calls.append(1)
        _publishing(registry)

    registry = TransitionRegistry()
    assert registry.is_initialized is False
    assert registry.ensure_initialized(register) is True
    before = registry.snapshot()

    assert registry.ensure_initialized(register) is False
    assert registry.ensure_initialized(register) is False

    assert calls == [1]
    assert registry.is_initialized is True
    assert registry.snapshot() == before


def test_failed_registration_discards_partial_rules_and_can_retry() -> None:
    attempts = []

    def register(registry: TransitionRegistry) -> None:
        attempts.append(1)
        registry.allow("status", "draft", "published")
        if len(attempts) == 1:
            raise RuntimeError("boom")

    registry = TransitionRegistry()
    with pytest.raises(RuntimeError, match="boom"):
        registry.ensure_initialized(register)

    assert registry.is_initialized is False
    assert len(registry) == 0

    assert registry.ensure_initialized(register) is True
    assert len(registry) == 1


def test_targets_from_dedupes_in_rule_order() -> None:
    registry = TransitionRegistry()
    registry.allow("status", "published", "archived")
    registry.allow("status", "published", "draft")
    registry.allow("status", "published", "archived", guard=lambda e: True)
    registry.allow("status", "draft", "published")

    assert registry.targets_from("status", "published") == ["archived", "draft"]
    assert registry.targets_from("status", "archived") == []


def test_snapshot_is_a_copy_grouped_by_field() -> None:
    registry = TransitionRegistry()
    registry.allow("status", "draft", "published", guard=lambda e: True)
    registry.allow("priority", Priority.LOW, Priority.HIGH)

    snap = registry.snapshot()
    snap["status"].clear()

    assert registry.snapshot() == {
        "status": [{"from": "draft", "to": "published", "name": "DraftToPublished", "guarded": True}],
        "priority": [{"from": Priority.LOW, "to": Priority.HIGH, "name": "LowToHigh", "guarded": False}],
    }


def test_enum_states_match_by_equality() -> None:
    registry = TransitionRegistry()
    registry.allow("priority", Priority.LOW, Priority.HIGH)

    assert registry.lookup("priority", Priority.LOW, Priority.HIGH, entity=object()) is not None
    assert registry.lookup("priority", "low", "high", entity=object()) is None
