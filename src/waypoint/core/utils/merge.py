"""Layering of configuration mappings."""
from __future__ import annotations

from typing import Any, Dict, Mapping


def deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``base`` with ``overlay`` laid on top; neither input is mutated.

    Nested mappings merge key by key. Any other value in ``overlay``,
    lists included, replaces the one in ``base``.

        >>> deep_merge({"engine": {"notify": True, "default_field": "status"}},
        ...            {"engine": {"notify": False}})
        {'engine': {'notify': False, 'default_field': 'status'}}
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in (overlay or {}).items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


__all__ = ["deep_merge"]
