"""
Waypoint CLI package.

Commands are discovered from domain subfolders (``state/``) by
``_dispatcher``; each command module exposes ``SUMMARY``,
``register_args(parser)`` and ``main(args) -> int``.
"""
from ._output import OutputFormatter, format_json
from ._args import add_entity_arg, add_field_flag, add_force_flag, add_standard_flags
from ._utils import get_repo_root, import_entity_class

__all__ = [
    "OutputFormatter",
    "format_json",
    "add_entity_arg",
    "add_field_flag",
    "add_force_flag",
    "add_standard_flags",
    "get_repo_root",
    "import_entity_class",
]
