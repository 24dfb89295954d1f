import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'waypoint' and tests/ importable as 'tests'
for p in (SRC_ROOT, REPO_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from tests.helpers.cache_utils import reset_waypoint_caches
from tests.helpers.io_utils import write_project_config


@pytest.fixture(autouse=True)
def isolated_project_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run every test inside its own project root with no WAYPOINT_* leakage."""
    for key in list(os.environ):
        if key.startswith("WAYPOINT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("WAYPOINT_PROJECT_ROOT", str(tmp_path))
    reset_waypoint_caches()
    yield tmp_path
    reset_waypoint_caches()


@pytest.fixture
def audit_log(isolated_project_env: Path) -> Path:
    """Enable the audit stream for the test project; returns the JSONL path."""
    write_project_config(
        isolated_project_env,
        "logging",
        {"logging": {"enabled": True, "audit": {"enabled": True, "path": ".waypoint/logs/audit.jsonl"}}},
    )
    reset_waypoint_caches()
    return isolated_project_env / ".waypoint" / "logs" / "audit.jsonl"
