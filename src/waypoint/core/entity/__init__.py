"""Entity capabilities consumed by the transition engine."""
from .adapters import MappingAdapter, ObjectAdapter, SaveCallback, adapt_entity
from .protocols import EntityAdapter, TransitionSource

__all__ = [
    "EntityAdapter",
    "TransitionSource",
    "ObjectAdapter",
    "MappingAdapter",
    "SaveCallback",
    "adapt_entity",
]
