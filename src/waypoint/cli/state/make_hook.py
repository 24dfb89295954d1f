"""
Waypoint state make-hook command.

SUMMARY: Scaffold a transition hook class for an entity

Renders a ``TransitionHook`` subclass into
``<output-dir>/<entity>/<entity>_<field>_<transition>.py``. Without a
transition name the common hook (wrapping every transition of the field)
is generated.

Examples:
    waypoint state make-hook app.models:Article
    waypoint state make-hook app.models:Article draft:published
    waypoint state make-hook app.models:Article DraftToPublished --field review_state
"""

from __future__ import annotations

import argparse
from pathlib import Path

from waypoint.cli import (
    OutputFormatter,
    add_entity_arg,
    add_field_flag,
    add_force_flag,
    add_standard_flags,
    get_repo_root,
    import_entity_class,
)
from waypoint.core.config import EngineConfig, ScaffoldConfig
from waypoint.core.state.hooks import HookResolver
from waypoint.core.state.rules import transition_name
from waypoint.core.utils.templates import render_template_text
from waypoint.core.utils.text import snake_case, studly
from waypoint.data import read_text

SUMMARY = "Scaffold a transition hook class for an entity"

EXIT_ENTITY_NOT_FOUND = 1
EXIT_FILE_EXISTS = 2


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_entity_arg(parser)
    parser.add_argument(
        "transition",
        nargs="?",
        default=HookResolver.COMMON,
        help="Transition as 'from:to' or 'FromToTo' (default: Common)",
    )
    add_field_flag(parser)
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for generated hooks (default: scaffold.output_dir)",
    )
    add_force_flag(parser)
    add_standard_flags(parser)


def _transition_label(value: str) -> str:
    if ":" in value:
        from_state, _, to_state = value.partition(":")
        return transition_name(from_state, to_state)
    return studly(value)


def main(args: argparse.Namespace) -> int:
    """Render the hook template and write it to disk."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    repo_root = get_repo_root(args)

    try:
        entity_cls = import_entity_class(args.entity, repo_root=repo_root)
    except (ImportError, TypeError) as e:
        formatter.error(e, error_code="entity_not_found")
        return EXIT_ENTITY_NOT_FOUND

    entity = entity_cls.__name__
    field = args.field or EngineConfig(repo_root=repo_root).default_field
    transition = _transition_label(args.transition)
    class_name = f"{studly(entity)}{studly(field)}{transition}Hook"

    output_dir = Path(args.output_dir or ScaffoldConfig(repo_root=repo_root).output_dir)
    if not output_dir.is_absolute():
        output_dir = repo_root / output_dir
    entity_snake = snake_case(entity)
    target = output_dir / entity_snake / f"{entity_snake}_{snake_case(field)}_{snake_case(transition)}.py"

    if target.exists() and not args.force:
        formatter.error(
            FileExistsError(f"{target} already exists (use --force to overwrite)"),
            error_code="file_exists",
        )
        return EXIT_FILE_EXISTS

    source = render_template_text(
        read_text("templates", "hook.py.j2"),
        {
            "entity": entity,
            "field": field,
            "transition": transition,
            "class_name": class_name,
            "is_common": transition == HookResolver.COMMON,
        },
    )
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(source, encoding="utf-8")

    formatter.success(
        {"class_name": class_name, "path": str(target)},
        f"Created {class_name} at {target}",
    )
    return 0
