"""Structured JSON log events shared by core and CLI."""

from __future__ import annotations

import json
import logging
from typing import Any

# Library loggers stay silent unless the host application configures logging.
logging.getLogger("linestats").addHandler(logging.NullHandler())


def dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Emit one compact JSON payload with an ``event`` key."""

    payload = {
        "event": event,
        **fields,
    }
    logger.log(level, dump_json(payload))
