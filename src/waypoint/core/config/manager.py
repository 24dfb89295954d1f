"""
waypoint configuration management (YAML + environment, validated by JSON Schema).
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import jsonschema
import yaml

from waypoint.core.exceptions import ConfigError
from waypoint.core.utils.merge import deep_merge
from waypoint.core.utils.paths import (
    PROJECT_ROOT_ENV,
    get_project_config_dir,
    resolve_project_root,
)
from waypoint.data import get_data_path, read_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "WAYPOINT_"
# Environment variables under the prefix that are not config overrides.
_RESERVED_ENV_KEYS = frozenset({PROJECT_ROOT_ENV})


class ConfigManager:
    """Load, merge, and validate waypoint configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: WAYPOINT_<section>__<key>
    2. Project config: <project-root>/.waypoint/config/*.yaml (alphabetical order)
    3. Bundled defaults: waypoint.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root else resolve_project_root()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = get_project_config_dir(self.repo_root) / "config"

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            # Fail closed: configuration must never silently ignore invalid YAML.
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a mapping, got {type(data).__name__}",
                context={"path": str(path)},
            )
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        if not directory.is_dir():
            return cfg
        for path in sorted(list(directory.glob("*.yaml")) + list(directory.glob("*.yml"))):
            logger.debug("Loading config layer %s", path)
            cfg = deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ========== Environment overrides ==========

    def _coerce_type(self, value: str) -> Any:
        """Parse an env value as a YAML scalar or flow collection.

        ``"false"`` -> False, ``"3"`` -> 3, ``'{"guards": false}'`` -> dict;
        anything unparsable or empty stays the stripped string.
        """
        text = value.strip()
        if not text:
            return text
        try:
            parsed = yaml.safe_load(text)
        except yaml.YAMLError:
            return text
        return text if parsed is None else parsed

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key in _RESERVED_ENV_KEYS:
                continue
            raw = key[len(ENV_PREFIX):]
            segments = raw.split("__")
            if not raw or any(seg == "" for seg in segments):
                raise ConfigError(f"Malformed {ENV_PREFIX}* key: '{key}'", context={"key": key})
            yield [seg.lower() for seg in segments], self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        current = root
        for seg in path[:-1]:
            nxt = current.get(seg)
            if not isinstance(nxt, dict):
                nxt = {}
                current[seg] = nxt
            current = nxt
        current[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, path, typed_value)

    # ========== Validation ==========

    def validate_schema(self, config: Dict[str, Any]) -> None:
        schema = read_yaml("schemas", "config.schema.yaml")
        validator = jsonschema.Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(config), key=lambda e: list(e.path))
        if errors:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err.path) or '<root>'}: {err.message}" for err in errors
            )
            raise ConfigError(
                f"Configuration failed schema validation: {details}",
                context={"repo_root": str(self.repo_root), "errors": len(errors)},
            )

    # ========== Loading ==========

    def load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        self.apply_env_overrides(cfg)
        if validate:
            self.validate_schema(cfg)
        return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load configuration through the process-wide cache.

        Returned dict should be treated as immutable.
        """
        from .cache import get_cached_config

        return get_cached_config(repo_root=self.repo_root, validate=validate)

    def get(self, dotted: str, default: Any = None) -> Any:
        current: Any = self.load_config()
        for part in dotted.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


__all__ = ["ConfigManager", "ENV_PREFIX"]
