"""Nanosecond timing helpers and a duration tracker for timed behaviours."""

from __future__ import annotations

from time import time_ns
from typing import Callable, Optional

NANOSECONDS_PER_MILLISECOND = 1_000_000
MILLISECOND_MAX = 9223372036854.775807

Clock = Callable[[], int]


def _truncate_to_ms(nanoseconds: int) -> int:
    quotient = abs(nanoseconds) // NANOSECONDS_PER_MILLISECOND
    return quotient if nanoseconds >= 0 else -quotient


def nanosecond_now() -> int:
    """Nanoseconds since the epoch by the system clock."""
    return time_ns()


def millisecond_now() -> float:
    """Milliseconds since the epoch by the system clock, with fraction."""
    return time_ns() / 1_000_000.0


def nano_between(before: int, after: int) -> int:
    """Nanoseconds from one time point to another."""
    return after - before


def milli_between(before: int, after: int) -> int:
    """Whole milliseconds between two time points, each truncated first."""
    return _truncate_to_ms(after) - _truncate_to_ms(before)


class BehaviorDuration:
    """Tracks elapsed time against a duration, all in nanoseconds."""

    def __init__(self, duration: float = 1) -> None:
        self.duration = duration
        self.elapse = 0
        self.percent = 0.0
        self.timeout = False
        self.timeout_callbacks: list[Callable[[], None]] = []

    def init_duration(self) -> None:
        """Reset the elapsed time and the timeout flag."""
        self.timeout = False
        self.elapse = 0
        self.percent = 0.0

    def add_time(self, time: int) -> None:
        """Add elapsed nanoseconds; calls the timeout callbacks once the duration is reached."""
        self.elapse += time
        self.percent = self.elapse / self.duration
        if self.elapse >= self.duration:
            self.timeout = True
            for callback in list(self.timeout_callbacks):
                callback()


class Duration:
    """Measures the time between successive calls."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock or time_ns
        self.last = self._clock()
        self._first = True

    def get_nano_duration(self) -> int:
        """Nanoseconds since the previous call; the first call measures from itself."""
        if self._first:
            self.last = self._clock()
            self._first = False
        now = self._clock()
        elapsed = now - self.last
        self.last = now
        return elapsed

    def get_milli_duration(self) -> float:
        return self.get_nano_duration() / 1_000_000.0