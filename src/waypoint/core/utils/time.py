"""Timezone-aware time helpers."""
from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current UTC time without microseconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def utc_timestamp() -> str:
    """Return an ISO 8601 UTC timestamp with a ``Z`` suffix."""
    return utc_now().isoformat(timespec="seconds").replace("+00:00", "Z")


__all__ = ["utc_now", "utc_timestamp"]
