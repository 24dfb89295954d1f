from __future__ import annotations

import json
import os
from enum import Enum
from pathlib import Path
from typing import Any


def _json_safe(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Enum):
        return _json_safe(value.value)
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    return repr(value)


def append_jsonl(*, path: Path, payload: dict[str, Any]) -> None:
    """Append one JSON line to `path` and fsync it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    safe = {k: _json_safe(v) for k, v in payload.items()}
    line = json.dumps(safe, ensure_ascii=False) + "\n"
    with path.open("a", encoding="utf-8") as fh:
        fh.write(line)
        fh.flush()
        os.fsync(fh.fileno())


__all__ = ["append_jsonl"]
