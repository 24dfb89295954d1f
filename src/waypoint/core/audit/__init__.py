"""Structured audit events and stdlib logging setup."""
from .logger import audit_event
from .stdlib_logging import configure_from_config, configure_stdlib_logging

__all__ = ["audit_event", "configure_from_config", "configure_stdlib_logging"]
