"""
JSONL event logger for the audio pipeline.

- One JSON object per line
- Output to stdout through a patchable sink
- No buffering, no batching
- Never raises
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any, Callable, Mapping


# ------------------------------------------------------------------
# Explicit output sink (patchable in tests)
# ------------------------------------------------------------------

def _stdout_print(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()

_print: Callable[[str], None] = _stdout_print

_enabled: bool = True


def set_enabled(enabled: bool) -> None:
    """Turn JSONL output on or off (AppConfig.enable_json_logs)."""
    global _enabled
    _enabled = enabled


def now_ms() -> int:
    return int(time.time() * 1000)


def log_event(event: Mapping[str, Any]) -> None:
    """
    Write a single JSONL event to stdout.

    The caller supplies a fully-formed event dict (see emit() for the
    stamped variant). Non-serializable payloads are replaced by a
    LOGGER_SERIALIZATION_ERROR event rather than raising.
    """
    if not _enabled:
        return

    try:
        line = json.dumps(event, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        # logging must never break a decode/encode call
        fallback: dict[str, Any] = {
            "ts_ms": event.get("ts_ms"),
            "event_type": "LOGGER_SERIALIZATION_ERROR",
            "error": str(e),
            "original_event_repr": repr(event),
        }
        line = json.dumps(fallback, ensure_ascii=False, separators=(",", ":"))

    _print(line)


def emit(event_type: str, **fields: Any) -> None:
    """Log an event stamped with ts_ms and event_type."""
    log_event({"ts_ms": now_ms(), "event_type": event_type, **fields})
