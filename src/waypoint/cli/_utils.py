"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path
from typing import Any, Optional

from waypoint.core.utils.paths import resolve_project_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get project root from ``--repo-root`` or auto-detect."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return resolve_project_root()


def import_entity_class(reference: str, *, repo_root: Optional[Path] = None) -> type:
    """Import ``package.module:ClassName`` (``package.module.ClassName`` also works).

    The project root is put on ``sys.path`` so project-local modules resolve
    when the console script runs from elsewhere.

    Raises:
        ImportError: The module or the attribute cannot be found.
        TypeError: The attribute is not a class.
    """
    if ":" in reference:
        module_name, _, attr = reference.partition(":")
    else:
        module_name, _, attr = reference.rpartition(".")
    if not module_name or not attr:
        raise ImportError(f"Invalid entity reference '{reference}', expected 'module:ClassName'")

    if repo_root is not None and str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

    module = importlib.import_module(module_name)
    try:
        obj: Any = getattr(module, attr)
    except AttributeError as exc:
        raise ImportError(f"Module '{module_name}' has no attribute '{attr}'") from exc
    if not isinstance(obj, type):
        raise TypeError(f"'{reference}' is not a class")
    return obj


__all__ = ["get_repo_root", "import_entity_class"]
