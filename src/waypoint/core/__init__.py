"""Waypoint core library: state engine, entity adapters, events, config and audit."""

from . import exceptions  # noqa: F401

__all__ = ["exceptions"]
