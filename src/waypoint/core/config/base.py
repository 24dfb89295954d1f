"""Typed, cached views over one top-level section of the merged config."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from waypoint.core.utils.paths import resolve_project_root

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """One config section, e.g. ``engine`` or ``logging``.

    Subclasses name the section and expose settings as cached properties:

        class EngineConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "engine"

            @cached_property
            def default_field(self) -> str:
                return self.section.get("default_field", "status")

    The merged document is read through ``get_cached_config`` when the
    instance is created, so later config edits need a new instance.
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self._repo_root = Path(repo_root) if repo_root else None
        self._config = get_cached_config(repo_root=self._repo_root)

    @property
    def repo_root(self) -> Path:
        return self._repo_root or resolve_project_root()

    @abstractmethod
    def _config_section(self) -> str:
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        return self._config.get(self._config_section()) or {}


__all__ = ["BaseDomainConfig"]
