"""Project root and project config directory resolution.

The project root is:
1. ``WAYPOINT_PROJECT_ROOT`` when set (must exist)
2. the nearest ancestor of the working directory holding ``.waypoint/``
3. the working directory itself
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

PROJECT_CONFIG_DIR_NAME = ".waypoint"
PROJECT_ROOT_ENV = "WAYPOINT_PROJECT_ROOT"


def resolve_project_root(start: Optional[Path] = None) -> Path:
    env_root = os.environ.get(PROJECT_ROOT_ENV, "").strip()
    if env_root:
        path = Path(env_root).expanduser().resolve()
        if not path.is_dir():
            raise FileNotFoundError(f"{PROJECT_ROOT_ENV} points at missing path: {path}")
        return path

    here = (start or Path.cwd()).expanduser().resolve()
    for candidate in (here, *here.parents):
        if (candidate / PROJECT_CONFIG_DIR_NAME).is_dir():
            return candidate
    return here


def get_project_config_dir(repo_root: Path) -> Path:
    return Path(repo_root) / PROJECT_CONFIG_DIR_NAME


__all__ = [
    "PROJECT_CONFIG_DIR_NAME",
    "PROJECT_ROOT_ENV",
    "resolve_project_root",
    "get_project_config_dir",
]
