"""Audit stream and stdlib logging settings (``logging`` section).

Relative paths resolve against the project root.
"""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    def _block(self, name: str) -> Dict[str, Any]:
        return self.section.get(name) or {}

    def _path(self, raw: Any) -> Optional[Path]:
        text = str(raw or "").strip()
        if not text:
            return None
        path = Path(text).expanduser()
        return path if path.is_absolute() else self.repo_root / path

    @cached_property
    def enabled(self) -> bool:
        """Master switch for audit events; off unless a project turns it on."""
        return bool(self.section.get("enabled", False))

    @cached_property
    def audit_enabled(self) -> bool:
        return bool(self._block("audit").get("enabled", True))

    @cached_property
    def audit_path(self) -> Optional[Path]:
        return self._path(self._block("audit").get("path"))

    def category_enabled(self, event: str) -> bool:
        """``guard.blocked`` is gated by ``categories.guards``; unknown categories are on."""
        prefix = event.partition(".")[0]
        key = prefix if prefix.endswith("s") else f"{prefix}s"
        return bool(self._block("categories").get(key, True))

    @cached_property
    def stdlib_enabled(self) -> bool:
        return bool(self._block("stdlib").get("enabled", False))

    @cached_property
    def stdlib_level(self) -> str:
        return str(self._block("stdlib").get("level") or "INFO")

    @cached_property
    def stdlib_path(self) -> Optional[Path]:
        return self._path(self._block("stdlib").get("path"))


__all__ = ["LoggingConfig"]
