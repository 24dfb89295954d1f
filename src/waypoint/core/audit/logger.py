from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from waypoint.core.audit.jsonl import append_jsonl
from waypoint.core.config.domains.logging import LoggingConfig
from waypoint.core.utils.time import utc_timestamp

logger = logging.getLogger(__name__)


def audit_event(event: str, *, repo_root: Path | None = None, **fields: Any) -> None:
    """Emit a single structured audit event as JSONL (fail-open).

    This is separate from stdlib `logging` so the audit stream stays
    machine-readable. A broken audit sink never changes the outcome of the
    operation being audited; failures are reported on the module logger.
    """
    try:
        cfg = LoggingConfig(repo_root=repo_root)
        if not cfg.enabled or not cfg.audit_enabled or not cfg.category_enabled(event):
            return
        path = cfg.audit_path
        if path is None:
            return

        payload: dict[str, Any] = {
            "ts": utc_timestamp(),
            "event": event,
            "pid": os.getpid(),
        }
        payload.update(fields)
        append_jsonl(path=path, payload=payload)
    except Exception as exc:
        logger.warning("Failed to write audit event %s: %s", event, exc)


__all__ = ["audit_event"]
