"""
Timing and memory capture for a single database operation.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

import psutil


_PROCESS = psutil.Process()


def current_memory() -> int:
    """Resident set size of the current process, in bytes."""
    return int(_PROCESS.memory_info().rss)


def format_runtime(seconds: float) -> str:
    """
    Render a runtime for humans.

    Units:
        < 1 ms   -> microseconds  ("250 µs")
        < 1 s    -> milliseconds  ("12.34 ms")
        < 60 s   -> seconds       ("1.500 s")
        otherwise minutes+seconds ("2m 5.0s")
    """
    seconds = max(0.0, seconds)

    # Units are chosen from the rounded value: 999.6 µs renders as "1.00 ms".
    micros = round(seconds * 1_000_000)
    if micros < 1000:
        return f"{micros} µs"
    millis = round(seconds * 1000, 2)
    if millis < 1000:
        return f"{millis:.2f} ms"
    secs = round(seconds, 3)
    if secs < 60:
        return f"{secs:.3f} s"

    minutes, rest = divmod(round(seconds, 1), 60)
    return f"{int(minutes)}m {rest:.1f}s"


@dataclass(frozen=True)
class SqlPerformance:
    """
    Elapsed time and memory usage for one operation.

    Attributes
    ----------
    runtime : float
        Elapsed wall time in seconds (never negative).
    memory : int
        Process memory in bytes, sampled when the object was built.
    """

    runtime: float
    memory: int

    @classmethod
    def from_runtime(cls, runtime: float) -> "SqlPerformance":
        """Build a snapshot for an elapsed time, sampling memory now."""
        return cls(runtime=max(0.0, float(runtime)), memory=current_memory())

    @property
    def pretty_runtime(self) -> str:
        return format_runtime(self.runtime)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "runtime": self.runtime,
            "memory": self.memory,
            "pretty_runtime": self.pretty_runtime,
        }


def timed(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Tuple[Any, float]:
    """
    Call ``fn`` and return ``(result, elapsed_seconds)``.

    Exceptions raised by ``fn`` propagate untouched.
    """
    elapsed = -time.perf_counter()
    result = fn(*args, **kwargs)
    elapsed += time.perf_counter()
    return result, elapsed


__all__ = [
    "SqlPerformance",
    "current_memory",
    "format_runtime",
    "timed",
]
