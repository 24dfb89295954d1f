from __future__ import annotations

import json
from pathlib import Path

import pytest

from tests.helpers.models import Article
from waypoint.cli._dispatcher import main as waypoint_main

ARTICLE = "tests.helpers.models:Article"


def test_debug_prints_current_and_reachable(isolated_project_env: Path, capsys: pytest.CaptureFixture) -> None:
    Article.STORE["7"] = Article(id="7", status="published")

    rc = waypoint_main(["state", "debug", ARTICLE, "7", "--repo-root", str(isolated_project_env)])

    assert rc == 0
    out = capsys.readouterr().out
    assert "Article #7" in out
    assert "current: published" in out
    assert "possible transitions: archived" in out
    assert "draft -> published" in out
    assert "archived -> draft" in out


def test_debug_json(isolated_project_env: Path, capsys: pytest.CaptureFixture) -> None:
    Article.STORE["1"] = Article()

    rc = waypoint_main(["state", "debug", ARTICLE, "1", "--json"])

    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data["status"] == "success"
    assert data["entity_type"] == "Article"
    assert data["current"] == "draft"
    assert data["reachable"] == ["published"]
    assert len(data["transitions"]) == 3


def test_debug_does_not_mutate_entity(isolated_project_env: Path) -> None:
    article = Article()
    Article.STORE["1"] = article

    waypoint_main(["state", "debug", ARTICLE, "1"])

    assert article.status == "draft"
    assert article.save_count == 0


def test_debug_record_not_found(capsys: pytest.CaptureFixture) -> None:
    rc = waypoint_main(["state", "debug", ARTICLE, "404"])

    assert rc == 1
    assert "not found" in capsys.readouterr().err


def test_debug_unknown_class(capsys: pytest.CaptureFixture) -> None:
    rc = waypoint_main(["state", "debug", "tests.helpers.models:Nope", "1"])

    assert rc == 1
    assert "has no attribute 'Nope'" in capsys.readouterr().err


def test_debug_class_without_find(capsys: pytest.CaptureFixture) -> None:
    rc = waypoint_main(["state", "debug", "tests.helpers.models:Ticket", "1"])

    assert rc == 1
    assert "find" in capsys.readouterr().err


def test_debug_field_without_transitions(capsys: pytest.CaptureFixture) -> None:
    Article.STORE["1"] = Article()

    rc = waypoint_main(["state", "debug", ARTICLE, "1", "--field", "archivable"])

    assert rc == 1
    assert "No transitions registered for field 'archivable'" in capsys.readouterr().err


def test_debug_unknown_field_json_error(capsys: pytest.CaptureFixture) -> None:
    Article.STORE["1"] = Article()

    rc = waypoint_main(["state", "debug", ARTICLE, "1", "--field", "nonexistent", "--json"])

    assert rc == 1
    err = json.loads(capsys.readouterr().err)
    assert err["error"] == "UnknownFieldError"
    assert err["context"]["field"] == "nonexistent"
