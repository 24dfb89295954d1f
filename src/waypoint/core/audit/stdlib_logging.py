from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

_CONFIGURED_LOG_PATH: str | None = None
_WAYPOINT_FILE_HANDLER: logging.Handler | None = None

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path, level: str = "INFO") -> None:
    """Route the ``waypoint`` logger hierarchy to ``log_path``.

    Idempotent per-process: if already configured for the same file, no-op.
    """
    global _CONFIGURED_LOG_PATH, _WAYPOINT_FILE_HANDLER

    resolved = str(Path(log_path).resolve())
    if _CONFIGURED_LOG_PATH == resolved and _WAYPOINT_FILE_HANDLER is not None:
        return

    Path(resolved).parent.mkdir(parents=True, exist_ok=True)

    package_logger = logging.getLogger("waypoint")
    package_logger.setLevel(_level_from_name(level))

    # Replace the previously installed file handler when switching paths.
    if _WAYPOINT_FILE_HANDLER is not None:
        package_logger.removeHandler(_WAYPOINT_FILE_HANDLER)
        _WAYPOINT_FILE_HANDLER.close()
        _WAYPOINT_FILE_HANDLER = None

    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(_level_from_name(level))
    fh.setFormatter(logging.Formatter(_FORMAT))
    package_logger.addHandler(fh)

    _WAYPOINT_FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def configure_from_config(repo_root: Optional[Path] = None) -> bool:
    """Apply ``logging.stdlib`` settings; returns True when a handler was installed."""
    from waypoint.core.config.domains.logging import LoggingConfig

    cfg = LoggingConfig(repo_root=repo_root)
    if not cfg.stdlib_enabled or cfg.stdlib_path is None:
        return False
    configure_stdlib_logging(log_path=cfg.stdlib_path, level=cfg.stdlib_level)
    return True


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the installed file handler."""
    global _CONFIGURED_LOG_PATH, _WAYPOINT_FILE_HANDLER
    if _WAYPOINT_FILE_HANDLER is not None:
        logging.getLogger("waypoint").removeHandler(_WAYPOINT_FILE_HANDLER)
        _WAYPOINT_FILE_HANDLER.close()
    _CONFIGURED_LOG_PATH = None
    _WAYPOINT_FILE_HANDLER = None


__all__ = [
    "configure_stdlib_logging",
    "configure_from_config",
    "reset_stdlib_logging_for_tests",
]
