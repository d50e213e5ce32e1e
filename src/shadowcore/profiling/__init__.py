"""
Per-section call timings (@timed decorator, timed_section context manager).
"""

from .sc_timing import (
    TIMING_DISABLED,
    record_timings,
    is_recording,
    clear_timings,
    section_timings,
    timed_section,
    timed,
)

__all__ = [
    'TIMING_DISABLED',
    'record_timings',
    'is_recording',
    'clear_timings',
    'section_timings',
    'timed_section',
    'timed',
]
