from __future__ import annotations

import pytest

from tests.helpers.models import Priority
from waypoint.core.state.rules import CallableGuard, Guard, Rule, as_guard, transition_name


@pytest.mark.parametrize(
    "from_state,to_state,expected",
    [
        ("draft", "published", "DraftToPublished"),
        ("in_review", "needs-changes", "InReviewToNeedsChanges"),
        (Priority.LOW, Priority.HIGH, "LowToHigh"),
    ],
)
def test_transition_name_is_pascal_cased_edge(from_state, to_state, expected) -> None:
    assert transition_name(from_state, to_state) == expected


def test_as_guard_wraps_callables_and_keeps_guard_objects() -> None:
    class AlwaysNo:
        def evaluate(self, entity) -> bool:
            return False

    explicit = AlwaysNo()
    assert as_guard(None) is None
    assert as_guard(explicit) is explicit

    fn = lambda entity: entity == "ok"  # noqa: E731
    wrapped = as_guard(fn)
    assert isinstance(wrapped, CallableGuard)
    assert isinstance(wrapped, Guard)
    # The callable is stored by reference, not copied.
    assert wrapped.fn is fn
    assert wrapped.evaluate("ok") is True
    assert wrapped.evaluate("nope") is False


def test_as_guard_rejects_non_callables() -> None:
    with pytest.raises(TypeError, match="guard must provide evaluate"):
        as_guard("not a guard")


def test_rule_create_derives_name_and_reports_guard() -> None:
    rule = Rule.create("status", "draft", "published", guard=lambda a: True)

    assert rule.name == "DraftToPublished"
    assert rule.guarded is True
    assert rule.to_dict() == {
        "from": "draft",
        "to": "published",
        "name": "DraftToPublished",
        "guarded": True,
    }


def test_rule_matches_structurally_without_consulting_guard() -> None:
    calls = []
    rule = Rule.create("status", "draft", "published", guard=lambda a: calls.append(a) or False)

    assert rule.matches("draft", "published") is True
    assert rule.matches("draft", "archived") is False
    assert calls == []

    assert rule.allows("entity") is False
    assert calls == ["entity"]


def test_unguarded_rule_always_allows() -> None:
    assert Rule.create("status", "a", "b").allows(object()) is True
