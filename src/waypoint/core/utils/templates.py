"""Jinja2 rendering for scaffolded source files."""
from __future__ import annotations

from typing import Any, Dict

from jinja2 import Environment, StrictUndefined

_ENV = Environment(
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)


def render_template_text(text: str, context: Dict[str, Any]) -> str:
    """Render ``text`` with Jinja2; missing variables raise."""
    return _ENV.from_string(text).render(**context)


__all__ = ["render_template_text"]
