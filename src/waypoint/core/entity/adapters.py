"""Adapters exposing plain objects and mappings as ``EntityAdapter``."""
from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, Callable, Optional

from .protocols import EntityAdapter

logger = logging.getLogger(__name__)

SaveCallback = Callable[[Any], Optional[bool]]


class ObjectAdapter:
    """Adapter for ordinary Python objects (dataclasses, ORM models, ...).

    A field is recognized when it is a non-callable, non-private attribute of
    the object. Persistence goes through ``save(entity)`` when given, else the
    entity's own ``save()`` method; objects with neither are in-memory only.
    """

    def __init__(self, entity: Any, *, save: Optional[SaveCallback] = None) -> None:
        self.entity = entity
        self._save = save

    def has_attribute(self, name: str) -> bool:
        if not name or name.startswith("_"):
            return False
        if not hasattr(self.entity, name):
            return False
        return not callable(getattr(self.entity, name))

    def get_attribute(self, name: str) -> Any:
        return getattr(self.entity, name)

    def set_attribute(self, name: str, value: Any) -> None:
        setattr(self.entity, name, value)

    def persist(self) -> Optional[bool]:
        if self._save is not None:
            return self._save(self.entity)
        save = getattr(self.entity, "save", None)
        if callable(save):
            return save()
        logger.debug("%s has no save(); transition kept in memory", type(self.entity).__name__)
        return None


class MappingAdapter:
    """Adapter for dict-like records; keys are fields."""

    def __init__(
        self, record: MutableMapping[str, Any], *, save: Optional[SaveCallback] = None
    ) -> None:
        self.entity = record
        self._save = save

    def has_attribute(self, name: str) -> bool:
        return name in self.entity

    def get_attribute(self, name: str) -> Any:
        return self.entity[name]

    def set_attribute(self, name: str, value: Any) -> None:
        self.entity[name] = value

    def persist(self) -> Optional[bool]:
        if self._save is not None:
            return self._save(self.entity)
        return None


def adapt_entity(entity: Any, *, save: Optional[SaveCallback] = None) -> EntityAdapter:
    """Return an adapter for ``entity``.

    Entities that already implement ``EntityAdapter`` are used as-is.
    """
    if save is None and isinstance(entity, EntityAdapter):
        return entity
    if isinstance(entity, MutableMapping):
        return MappingAdapter(entity, save=save)
    return ObjectAdapter(entity, save=save)


__all__ = ["ObjectAdapter", "MappingAdapter", "adapt_entity", "SaveCallback"]
