from __future__ import annotations

import pytest

from waypoint.core.events import (
    STATE_TRANSITIONED,
    InMemoryEventBus,
    StateTransitioned,
    get_event_bus,
    set_event_bus,
    validate_payload,
)


def test_publish_reaches_exact_then_wildcard_subscribers() -> None:
    bus = InMemoryEventBus()
    seen = []
    bus.subscribe("*", lambda p: seen.append(("wildcard", p["n"])))
    bus.subscribe("state.transitioned", lambda p: seen.append(("exact", p["n"])))
    bus.subscribe("other", lambda p: seen.append(("other", p["n"])))

    bus.publish("state.transitioned", {"n": 1})

    assert seen == [("exact", 1), ("wildcard", 1)]
    assert bus.subscriber_count("state.transitioned") == 2


def test_unsubscribe() -> None:
    bus = InMemoryEventBus()
    handler = lambda p: None  # noqa: E731
    bus.subscribe("t", handler)

    assert bus.unsubscribe("t", handler) is True
    assert bus.unsubscribe("t", handler) is False
    assert bus.subscriber_count("t") == 0


def test_handler_errors_propagate() -> None:
    bus = InMemoryEventBus()

    def broken(payload) -> None:
        raise RuntimeError("handler failed")

    bus.subscribe("t", broken)
    with pytest.raises(RuntimeError, match="handler failed"):
        bus.publish("t", {})


def test_default_bus_singleton_and_reset() -> None:
    first = get_event_bus()
    assert get_event_bus() is first

    custom = InMemoryEventBus()
    set_event_bus(custom)
    assert get_event_bus() is custom

    set_event_bus(None)
    assert get_event_bus() is not custom


def test_state_transitioned_payload() -> None:
    entity = object()
    event = StateTransitioned(entity=entity, field="status", from_state="draft", to_state="published", entity_type="Article")

    payload = event.to_payload()
    validate_payload(payload)

    assert payload["entity"] is entity
    assert (payload["from"], payload["to"]) == ("draft", "published")
    assert payload["occurred_at"].endswith("Z")
    assert StateTransitioned.from_payload(payload) == event
    assert STATE_TRANSITIONED == "state.transitioned"


def test_validate_payload_rejects_missing_keys() -> None:
    with pytest.raises(ValueError, match=r"\['from', 'to'\]"):
        validate_payload({"entity": None, "field": "status"})
