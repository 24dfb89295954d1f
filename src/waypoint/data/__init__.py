"""
Bundled waypoint data: default configuration, schemas and scaffold templates.

Files are located with importlib.resources so they resolve from an installed
package as well as from a source checkout.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Example:
        >>> get_data_path("config", "defaults.yaml")
        PosixPath('/path/to/waypoint/data/config/defaults.yaml')
    """
    pkg = resources.files("waypoint.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=16)
def read_yaml(subpackage: str, filename: str) -> dict[str, Any]:
    """Read and parse a bundled YAML file (cached)."""
    path = get_data_path(subpackage, filename)
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def read_text(subpackage: str, filename: str) -> str:
    return get_data_path(subpackage, filename).read_text(encoding="utf-8")


def clear_caches() -> None:
    """Clear all read caches."""
    read_yaml.cache_clear()


__all__ = ["get_data_path", "read_yaml", "read_text", "clear_caches"]
