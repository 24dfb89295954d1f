"""Name derivation helpers for states, fields and generated classes."""
from __future__ import annotations

import re
from enum import Enum
from typing import Any

_WORD_SPLIT_RE = re.compile(r"[\s_\-]+")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def state_token(value: Any) -> str:
    """Return the text form of a state value (enum members by value)."""
    if isinstance(value, Enum):
        value = value.value
    return "" if value is None else str(value)


def studly(value: Any) -> str:
    """Pascal-case a value: ``"in_review"`` -> ``"InReview"``.

    Existing capitals inside a word are kept (``"draftMode"`` -> ``"DraftMode"``).
    """
    words = [w for w in _WORD_SPLIT_RE.split(state_token(value)) if w]
    return "".join(w[:1].upper() + w[1:] for w in words)


def snake_case(value: Any) -> str:
    """Snake-case a value: ``"DraftToPublished"`` -> ``"draft_to_published"``."""
    text = _CAMEL_BOUNDARY_RE.sub("_", state_token(value))
    words = [w for w in _WORD_SPLIT_RE.split(text) if w]
    return "_".join(w.lower() for w in words)


__all__ = ["state_token", "studly", "snake_case"]
