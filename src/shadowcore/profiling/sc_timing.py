"""
Section timings for shadowcore calls.

Solvers mark their hot paths with @timed; the engine switches recording on
for a single call and reads back one entry per section name:

    record_timings(True)
    EdgeSolver.solve(caster)
    record_timings(False)
    section_timings()
    # {'edge_solver': {'count': 1, 'total_ms': 0.412, 'avg_ms': 0.412}}

With SHADOWCORE_NO_PROFILING=1 (or python -O) at import time, @timed hands
back the function itself and recording can never be switched on.
"""

import functools
import os
import time
from contextlib import contextmanager
from typing import Callable, Dict, List

TIMING_DISABLED = (
    os.environ.get('SHADOWCORE_NO_PROFILING', '').lower() in ('1', 'true', 'yes')
    or not __debug__
)


class SectionTimes:
    """Call count and elapsed seconds accumulated per section name."""

    def __init__(self):
        self.recording = False
        self._totals: Dict[str, List] = {}

    def add(self, name: str, seconds: float) -> None:
        entry = self._totals.get(name)
        if entry is None:
            self._totals[name] = [1, seconds]
        else:
            entry[0] += 1
            entry[1] += seconds

    def clear(self) -> None:
        self._totals.clear()

    def summary(self) -> Dict[str, Dict[str, float]]:
        result = {}
        for name, (count, seconds) in self._totals.items():
            total_ms = seconds * 1000.0
            result[name] = {
                'count': count,
                'total_ms': round(total_ms, 3),
                'avg_ms': round(total_ms / count, 3),
            }
        return result


_times = SectionTimes()


def record_timings(enabled: bool = True) -> None:
    """Switch recording on or off. Ignored when timing is disabled."""
    if not TIMING_DISABLED:
        _times.recording = bool(enabled)


def is_recording() -> bool:
    return _times.recording


def clear_timings() -> None:
    _times.clear()


def section_timings() -> Dict[str, Dict[str, float]]:
    """Per-section count, total_ms and avg_ms recorded since the last clear."""
    return _times.summary()


@contextmanager
def timed_section(name: str):
    """Time the enclosed block under `name` while recording is on."""
    if not _times.recording:
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        _times.add(name, time.perf_counter() - start)


def timed(name: str) -> Callable[[Callable], Callable]:
    """Decorator timing every call of the wrapped function under `name`."""
    def decorator(func: Callable) -> Callable:
        if TIMING_DISABLED:
            return func

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not _times.recording:
                return func(*args, **kwargs)
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                _times.add(name, time.perf_counter() - start)

        return wrapper
    return decorator
