"""Configuration for the transition engine and hook scaffolding."""
from __future__ import annotations

from functools import cached_property

from waypoint.core.events.contracts import STATE_TRANSITIONED

from ..base import BaseDomainConfig


class EngineConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "engine"

    @cached_property
    def default_field(self) -> str:
        return str(self.section.get("default_field") or "status")

    @cached_property
    def event_topic(self) -> str:
        return str(self.section.get("event_topic") or STATE_TRANSITIONED)

    @cached_property
    def notify(self) -> bool:
        """Whether successful transitions are published to the event notifier."""
        return bool(self.section.get("notify", True))


class ScaffoldConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "scaffold"

    @cached_property
    def output_dir(self) -> str:
        return str(self.section.get("output_dir") or "hooks")


__all__ = ["EngineConfig", "ScaffoldConfig"]
