from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers.io_utils import write_project_config
from waypoint.core.config import (
    ConfigManager,
    EngineConfig,
    LoggingConfig,
    ScaffoldConfig,
    clear_all_caches,
    get_cached_config,
)
from waypoint.core.config.cache import is_cached
from waypoint.core.events import STATE_TRANSITIONED
from waypoint.core.exceptions import ConfigError


def test_bundled_defaults(isolated_project_env: Path) -> None:
    cfg = ConfigManager(isolated_project_env).load_config()

    assert cfg["engine"] == {
        "default_field": "status",
        "event_topic": STATE_TRANSITIONED,
        "notify": True,
    }
    assert cfg["logging"]["enabled"] is False
    assert cfg["scaffold"]["output_dir"] == "hooks"


def test_project_layer_overrides_defaults(isolated_project_env: Path) -> None:
    write_project_config(isolated_project_env, "engine", {"engine": {"event_topic": "articles.changed"}})

    engine = EngineConfig(repo_root=isolated_project_env)

    assert engine.event_topic == "articles.changed"
    assert engine.default_field == "status"


def test_env_overrides_win_and_are_typed(isolated_project_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_project_config(isolated_project_env, "engine", {"engine": {"default_field": "state"}})
    monkeypatch.setenv("WAYPOINT_ENGINE__DEFAULT_FIELD", "phase")
    monkeypatch.setenv("WAYPOINT_ENGINE__NOTIFY", "false")
    monkeypatch.setenv("WAYPOINT_LOGGING__CATEGORIES", '{"guards": false}')

    manager = ConfigManager(isolated_project_env)

    assert manager.get("engine.default_field") == "phase"
    assert manager.get("engine.notify") is False
    assert manager.get("logging.categories") == {"guards": False}
    assert manager.get("engine.missing", "fallback") == "fallback"


def test_project_root_env_is_not_an_override(isolated_project_env: Path) -> None:
    cfg = ConfigManager(isolated_project_env).load_config_uncached()

    assert "project_root" not in cfg


def test_malformed_env_key_raises(isolated_project_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WAYPOINT_ENGINE____NOTIFY", "true")

    with pytest.raises(ConfigError, match="Malformed"):
        ConfigManager(isolated_project_env).load_config_uncached()


def test_invalid_yaml_fails_closed(isolated_project_env: Path) -> None:
    path = isolated_project_env / ".waypoint" / "config" / "broken.yaml"
    path.parent.mkdir(parents=True)
    path.write_text("engine: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        ConfigManager(isolated_project_env).load_config_uncached()


def test_non_mapping_yaml_rejected(isolated_project_env: Path) -> None:
    path = isolated_project_env / ".waypoint" / "config" / "list.yaml"
    path.parent.mkdir(parents=True)
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="must contain a mapping"):
        ConfigManager(isolated_project_env).load_config_uncached()


def test_schema_validation_rejects_unknown_keys(isolated_project_env: Path) -> None:
    write_project_config(isolated_project_env, "engine", {"engine": {"defualt_field": "status"}})

    with pytest.raises(ConfigError, match="schema validation") as exc_info:
        ConfigManager(isolated_project_env).load_config_uncached()
    assert exc_info.value.context["errors"] == 1


def test_schema_validation_can_be_skipped(isolated_project_env: Path) -> None:
    write_project_config(isolated_project_env, "extra", {"plugins": {"enabled": True}})

    cfg = ConfigManager(isolated_project_env).load_config_uncached(validate=False)

    assert cfg["plugins"] == {"enabled": True}


def test_cache_reloads_when_project_config_changes(isolated_project_env: Path) -> None:
    first = get_cached_config(isolated_project_env)
    assert is_cached(isolated_project_env)
    assert get_cached_config(isolated_project_env) is first

    write_project_config(isolated_project_env, "scaffold", {"scaffold": {"output_dir": "app/hooks"}})

    assert get_cached_config(isolated_project_env)["scaffold"]["output_dir"] == "app/hooks"
    clear_all_caches()
    assert not is_cached(isolated_project_env)


def test_logging_config_paths_resolve_against_root(isolated_project_env: Path) -> None:
    write_project_config(
        isolated_project_env,
        "logging",
        {"logging": {"enabled": True, "categories": {"guards": False}}},
    )

    cfg = LoggingConfig(repo_root=isolated_project_env)

    assert cfg.enabled is True
    assert cfg.audit_path == isolated_project_env / ".waypoint" / "logs" / "audit.jsonl"
    assert cfg.category_enabled("guard.blocked") is False
    assert cfg.category_enabled("transition.completed") is True
    assert cfg.category_enabled("persist.failed") is True


def test_scaffold_config_default() -> None:
    assert ScaffoldConfig().output_dir == "hooks"
