"""
Timing helpers for codec observability.

Responsibilities:
- Measure durations using monotonic time (immune to clock changes)
- Emit one METRIC_TIMER event per measurement via observability.logger
- Never aggregate

Event timestamps (ts_ms) use wall-clock time for log correlation;
durations use time.perf_counter_ns.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

from observability.logger import emit


@contextmanager
def timed(
    name: str,
    *,
    details: dict[str, Any] | None = None,
) -> Iterator[dict[str, Any]]:
    """
    Measure the duration of the enclosed block.

    Guarantees:
    - The metric is emitted exactly once, on success or on error
    - Exceptions inside the block propagate unchanged

    The yielded dict is merged into `details`, so callers can attach
    values only known once the work is done:

        with timed("pcm_decode", details={"bytes": len(raw)}) as extra:
            buffer = decode_pcm16(raw, ...)
            extra["frames"] = buffer.frame_count
    """
    extra: dict[str, Any] = {}
    start_ns = time.perf_counter_ns()
    ok = False
    try:
        yield extra
        ok = True
    finally:
        duration_us = (time.perf_counter_ns() - start_ns) // 1_000
        emit(
            "METRIC_TIMER",
            metric=name,
            value_us=duration_us,
            ok=ok,
            details={**(details or {}), **extra},
        )
