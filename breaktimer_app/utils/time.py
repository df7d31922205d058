"""
Wall-clock time helpers.

All session arithmetic is done on integer epoch milliseconds so that
persisted timestamps and in-memory values share one representation.
"""

import time
from typing import Callable

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND

Clock = Callable[[], int]


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * MS_PER_SECOND)


def minutes_to_ms(minutes: int) -> int:
    return minutes * MS_PER_MINUTE


def elapsed_ms(start_ms: int, current_ms: int) -> int:
    """Elapsed time between two timestamps."""
    return current_ms - start_ms


def format_duration_ms(duration_ms: int) -> str:
    """
    Format a duration as HH:MM:SS.

    Negative durations (clock moved backwards) are shown as zero.
    """
    total_seconds = max(duration_ms, 0) // MS_PER_SECOND
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
