"""Shared helpers used across waypoint core and CLI."""
from .merge import deep_merge
from .text import snake_case, state_token, studly
from .time import utc_timestamp

__all__ = [
    "deep_merge",
    "snake_case",
    "state_token",
    "studly",
    "utc_timestamp",
]
