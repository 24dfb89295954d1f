"""Centralized configuration caching.

All domain configs read through ``get_cached_config`` so a project's YAML is
parsed once per process. The cache key fingerprints ``WAYPOINT_*`` environment
variables and project config file mtimes, so edits are picked up without an
explicit ``clear_all_caches()``.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from waypoint.core.utils.paths import get_project_config_dir, resolve_project_root

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return resolve_project_root()
    return Path(repo_root).expanduser().resolve()


def _fingerprint_dir(directory: Path) -> List[Tuple[str, int, int]]:
    files: List[Tuple[str, int, int]] = []
    if not directory.is_dir():
        return files
    for path in sorted(directory.glob("*.y*ml")):
        try:
            st = path.stat()
            files.append((path.name, int(st.st_mtime_ns), int(st.st_size)))
        except OSError:
            files.append((path.name, 0, 0))
    return files


def _cache_key(repo_root: Path) -> str:
    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith("WAYPOINT_")
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]
    cfg_files = _fingerprint_dir(get_project_config_dir(repo_root) / "config")
    cfg_fp = hashlib.sha256(repr(cfg_files).encode("utf-8")).hexdigest()[:12]
    return f"{repo_root}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None, validate: bool = True) -> Dict[str, Any]:
    """Return the merged config for ``repo_root`` (treat as immutable)."""
    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root)
    if key not in _config_cache:
        from .manager import ConfigManager

        manager = ConfigManager(repo_root=normalized_root)
        _config_cache[key] = manager.load_config_uncached(validate=validate)
    return _config_cache[key]


def clear_all_caches() -> None:
    """Drop every cached config; the next access reloads from disk."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None) -> bool:
    return _cache_key(_normalize_repo_root(repo_root)) in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
