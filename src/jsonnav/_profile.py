"""
Hot-path instrumentation for the decode and encode calls behind every hop.

Navigation deliberately decodes the whole buffer on each access and
re-encodes each sub-document it hands out. These counters make that cost
visible. Off unless JSONNAV_PROFILE is set or set_profiling(True) is called.
"""

import os
import time
from dataclasses import dataclass
from typing import Any

_enabled = __debug__ and "JSONNAV_PROFILE" in os.environ
_hot_path_stats: dict[str, "HotPathStats"] = {}


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during navigation."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_processed: int = 0

    def record_call(self, duration_ns: int, nbytes: int = 0) -> None:
        """Records a call with timing and payload size."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_processed += nbytes


class ProfileContext:
    """Context manager timing one decode or encode call."""

    __slots__ = ("func_name", "nbytes", "start_time")

    def __init__(self, func_name: str, nbytes: int = 0) -> None:
        self.func_name = func_name
        self.nbytes = nbytes
        self.start_time = 0

    def __enter__(self) -> "ProfileContext":
        if _enabled:
            self.start_time = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if not _enabled:
            return
        duration = time.perf_counter_ns() - self.start_time
        stats = _hot_path_stats.get(self.func_name)
        if stats is None:
            stats = _hot_path_stats[self.func_name] = HotPathStats(
                self.func_name
            )
        stats.record_call(duration, self.nbytes)


def set_profiling(enabled: bool) -> None:
    """Turns hot-path recording on or off at runtime."""
    global _enabled  # noqa: PLW0603
    if not isinstance(enabled, bool):
        raise TypeError("enabled must be a boolean")
    _enabled = enabled


def profiling_enabled() -> bool:
    return _enabled


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns current profiling statistics."""
    return _hot_path_stats.copy()


def clear_hot_path_stats() -> None:
    """Clears profiling statistics."""
    _hot_path_stats.clear()
