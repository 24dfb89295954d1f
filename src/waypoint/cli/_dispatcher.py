"""
Entry point of the ``waypoint`` console script.

Commands are found on disk: every public module in a public subpackage of
``waypoint.cli`` becomes ``waypoint <domain> <command>``. A command module
defines ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``;
``make_hook.py`` is exposed as ``make-hook`` with ``make_hook`` as alias.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import pkgutil
import sys
from functools import lru_cache
from types import ModuleType
from typing import Callable, Dict, NamedTuple, Optional

logger = logging.getLogger(__name__)

CommandMain = Callable[[argparse.Namespace], int]


class Command(NamedTuple):
    name: str
    module: ModuleType

    @property
    def cli_name(self) -> str:
        return self.name.replace("_", "-")

    @property
    def summary(self) -> str:
        return getattr(self.module, "SUMMARY", self.name)

    @property
    def register_args(self) -> Optional[Callable[[argparse.ArgumentParser], None]]:
        return getattr(self.module, "register_args", None)

    @property
    def main(self) -> Optional[CommandMain]:
        return getattr(self.module, "main", None)


def _public_modules(package: ModuleType) -> Dict[str, bool]:
    """``{name: is_package}`` for the non-underscore children of ``package``."""
    return {
        info.name: info.ispkg
        for info in pkgutil.iter_modules(package.__path__)
        if not info.name.startswith("_")
    }


@lru_cache(maxsize=1)
def discover() -> Dict[str, Dict[str, Command]]:
    """Map each domain to its commands, both sorted by name.

    A command module that fails to import is reported on stderr and skipped
    so one broken command does not take the whole CLI down.
    """
    root = importlib.import_module("waypoint.cli")
    domains: Dict[str, Dict[str, Command]] = {}
    for domain, is_pkg in sorted(_public_modules(root).items()):
        if not is_pkg:
            continue
        package = importlib.import_module(f"waypoint.cli.{domain}")
        commands: Dict[str, Command] = {}
        for name, sub_is_pkg in sorted(_public_modules(package).items()):
            if sub_is_pkg:
                continue
            try:
                module = importlib.import_module(f"waypoint.cli.{domain}.{name}")
            except ImportError as e:
                print(f"Warning: Could not import {domain}.{name}: {e}", file=sys.stderr)
                continue
            commands[name] = Command(name, module)
        if commands:
            domains[domain] = commands
    return domains


def build_parser() -> argparse.ArgumentParser:
    from waypoint import __version__

    parser = argparse.ArgumentParser(
        prog="waypoint",
        description="Waypoint - guarded state transitions for domain entities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    domain_parsers = parser.add_subparsers(dest="domain", title="domains", metavar="<domain>")

    for domain, commands in discover().items():
        package = importlib.import_module(f"waypoint.cli.{domain}")
        help_text = (package.__doc__ or f"{domain} commands").strip().splitlines()[0]
        domain_parser = domain_parsers.add_parser(domain, help=help_text)
        domain_parser.set_defaults(_domain_parser=domain_parser)
        command_parsers = domain_parser.add_subparsers(
            dest="command", title="commands", metavar="<command>"
        )
        for command in commands.values():
            aliases = [command.name] if command.cli_name != command.name else []
            command_parser = command_parsers.add_parser(
                command.cli_name, aliases=aliases, help=command.summary
            )
            if command.register_args is not None:
                command.register_args(command_parser)
            if command.main is not None:
                command_parser.set_defaults(_func=command.main)

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    """Route stdlib logging per ``logging.stdlib``; a bad setup never blocks a command."""
    from waypoint.cli._utils import get_repo_root
    from waypoint.core.audit.stdlib_logging import configure_from_config

    try:
        configure_from_config(get_repo_root(args))
    except Exception as exc:
        logger.debug("stdlib logging not configured: %s", exc)


def main(argv: Optional[list] = None) -> int:
    """Run one command and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    func: Optional[CommandMain] = getattr(args, "_func", None)
    if func is None:
        getattr(args, "_domain_parser", parser).print_help()
        return 0

    _configure_logging(args)
    try:
        return int(func(args))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
