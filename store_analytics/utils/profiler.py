"""
Profiling helpers for pipeline runs.

`profile_block` measures wall-clock time with perf_counter and, through
psutil, the process CPU percentage and resident memory at the end of the
block. Pipeline runs are short, so a single end-of-block sample is enough.

Usage:
    from store_analytics.utils.profiler import profile_block

    with profile_block("pipeline") as stats:
        run_pipeline()

    print(stats.duration_seconds, stats.rss_bytes)
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    rss_bytes: Optional[int] = field(default=None)
    cpu_percent: Optional[float] = field(default=None)
    extra: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "duration_seconds": round(self.duration_seconds, 4),
            "rss_bytes": self.rss_bytes,
            "cpu_percent": round(self.cpu_percent, 1) if self.cpu_percent is not None else None,
            **self.extra,
        }


@contextlib.contextmanager
def profile_block(label: str) -> Generator[ProfileStats, None, None]:
    """
    Context manager to profile a block of code.

    The stats object is yielded immediately so callers can attach `extra`
    values; timing and process figures are filled in when the block exits,
    including when it exits with an exception.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process()
    # cpu_percent needs a priming call to measure the interval that follows
    process.cpu_percent(interval=None)

    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts
        try:
            stats.rss_bytes = process.memory_info().rss
            stats.cpu_percent = process.cpu_percent(interval=None)
        except psutil.Error:
            stats.rss_bytes = None
            stats.cpu_percent = None


__all__ = ["ProfileStats", "profile_block"]
