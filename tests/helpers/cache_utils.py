"""Cache utilities for test isolation."""
from __future__ import annotations


def reset_waypoint_caches() -> None:
    """Reset every process-wide cache and singleton waypoint keeps."""
    from waypoint.core.audit.stdlib_logging import reset_stdlib_logging_for_tests
    from waypoint.core.config.cache import clear_all_caches
    from waypoint.core.events.bus import set_event_bus
    from waypoint.data import clear_caches

    clear_all_caches()
    clear_caches()
    set_event_bus(None)
    reset_stdlib_logging_for_tests()

    from tests.helpers.models import Article

    Article.STORE.clear()
