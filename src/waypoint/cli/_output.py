"""Output for CLI commands: human text by default, JSON with ``--json``.

Results go to stdout, errors to stderr, so JSON output stays parseable when a
command fails.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional


def format_json(data: Any, indent: int = 2) -> str:
    return json.dumps(data, indent=indent, default=str)


class OutputFormatter:
    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        """Print ``message``, or ``{"status": status, **data}`` in JSON mode."""
        if self.json_mode:
            print(format_json({"status": status, **data}, indent=self.indent))
        else:
            print(message)

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Report ``error`` on stderr.

        In JSON mode ``WaypointError`` context (field, states, entity type)
        is included under ``context``.
        """
        text = message or str(error)
        if not self.json_mode:
            print(f"Error: {text}", file=sys.stderr)
            return

        payload: Dict[str, Any] = {"error": error_code, "message": text}
        to_json_error = getattr(error, "to_json_error", None)
        if callable(to_json_error):
            payload["context"] = to_json_error().get("context", {})
        print(format_json(payload, indent=self.indent), file=sys.stderr)


__all__ = ["OutputFormatter", "format_json"]
