"""
Waypoint state debug command.

SUMMARY: Show the current state and transitions of one entity

Loads the record with ``Class.find(id)``, builds its transition engine and
prints the current state of the field, the states reachable from it and
every registered ``from -> to`` edge.
"""

from __future__ import annotations

import argparse
from typing import Any, Dict

from waypoint.cli import (
    OutputFormatter,
    add_entity_arg,
    add_field_flag,
    add_standard_flags,
    get_repo_root,
    import_entity_class,
)
from waypoint.core.exceptions import WaypointError
from waypoint.core.state import TransitionEngine
from waypoint.core.utils.text import state_token

SUMMARY = "Show the current state and transitions of one entity"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_entity_arg(parser)
    parser.add_argument("record_id", help="Identifier passed to Class.find()")
    add_field_flag(parser)
    add_standard_flags(parser)


def _load(entity_cls: type, record_id: str) -> Any:
    finder = getattr(entity_cls, "find", None)
    if not callable(finder):
        raise LookupError(f"{entity_cls.__name__} has no find(id) classmethod")
    return finder(record_id)


def main(args: argparse.Namespace) -> int:
    """Print the transition report for one record."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    repo_root = get_repo_root(args)

    try:
        entity_cls = import_entity_class(args.entity, repo_root=repo_root)
    except (ImportError, TypeError) as e:
        formatter.error(e, error_code="entity_not_found")
        return 1

    try:
        entity = _load(entity_cls, args.record_id)
    except LookupError as e:
        formatter.error(e, error_code="record_not_found")
        return 1
    if entity is None:
        formatter.error(
            LookupError(f"{entity_cls.__name__} '{args.record_id}' not found"),
            error_code="record_not_found",
        )
        return 1

    try:
        engine = TransitionEngine(entity, entity_type=entity_cls.__name__, repo_root=repo_root)
        report = engine.describe(args.field)
    except WaypointError as e:
        formatter.error(e, error_code=type(e).__name__)
        return 1

    if not report.transitions:
        formatter.error(
            LookupError(f"No transitions registered for field '{report.field}' on {report.entity_type}"),
            error_code="no_transitions",
        )
        return 1

    data: Dict[str, Any] = {
        "entity_type": report.entity_type,
        "id": args.record_id,
        "field": report.field,
        "current": state_token(report.current),
        "reachable": [state_token(s) for s in report.reachable],
        "transitions": [
            {"from": state_token(t["from"]), "to": state_token(t["to"])} for t in report.transitions
        ],
    }

    lines = [
        f"{report.entity_type} #{args.record_id}",
        f"  field: {data['field']}",
        f"  current: {data['current']}",
        f"  possible transitions: {', '.join(data['reachable']) or '(none)'}",
        "  registered transitions:",
    ]
    lines.extend(f"    {t['from']} -> {t['to']}" for t in data["transitions"])
    formatter.success(data, "\n".join(lines))
    return 0
