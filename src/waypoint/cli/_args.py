"""Argument helpers shared by ``waypoint`` commands."""
from __future__ import annotations

import argparse


def add_entity_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("entity", help="Entity class as 'package.module:ClassName'")


def add_field_flag(parser: argparse.ArgumentParser) -> None:
    """``--field``; commands fall back to ``engine.default_field`` when omitted."""
    parser.add_argument(
        "--field",
        default=None,
        help="State field name (default: engine.default_field)",
    )


def add_force_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--force", "-f", action="store_true", help="Overwrite existing files")


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """``--json`` output and ``--repo-root`` (which ``.waypoint/config`` applies)."""
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--repo-root", type=str, help="Override project root path")


__all__ = [
    "add_entity_arg",
    "add_field_flag",
    "add_force_flag",
    "add_standard_flags",
]
