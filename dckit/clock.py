"""Monotonic clock readings, sleeping, UTC timestamps and a stopwatch."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

__all__ = [
    "MAX_SLEEP_MS",
    "get_time_ns",
    "get_time_us",
    "sleep_ms",
    "Timestamp",
    "make_timestamp",
    "Stopwatch",
]

_U32_MAX = 0xFFFF_FFFF

# Longest sleep honoured; longer requests are clamped to this.
MAX_SLEEP_MS = _U32_MAX // 1_000

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000


def get_time_ns() -> int:
    """Return a reading of the monotonic high resolution clock in nanoseconds."""
    return time.monotonic_ns()


def get_time_us() -> int:
    """Return a reading of the monotonic high resolution clock in microseconds."""
    return get_time_ns() // _NS_PER_US


def sleep_ms(time_ms: int) -> None:
    """Yield execution for about ``time_ms`` milliseconds.

    Requests longer than ``MAX_SLEEP_MS`` are clamped to it.
    """
    if time_ms < 0:
        raise ValueError(f"sleep time cannot be negative: {time_ms}")
    time.sleep(min(time_ms, MAX_SLEEP_MS) / 1_000)


@dataclass(frozen=True)
class Timestamp:
    """A UTC wall clock reading."""

    year: int
    month: int  # [1, 12]
    day: int  # [1, 31]
    hour: int  # [0, 23]
    minute: int  # [0, 59]
    second: float  # [0, 60), with sub-second precision


def _timestamp_from_ns(epoch_ns: int) -> Timestamp:
    seconds, nanos = divmod(epoch_ns, _NS_PER_S)
    parts = time.gmtime(seconds)
    return Timestamp(
        year=parts.tm_year,
        month=parts.tm_mon,
        day=parts.tm_mday,
        hour=parts.tm_hour,
        minute=parts.tm_min,
        second=((seconds % 60) * _NS_PER_S + nanos) / _NS_PER_S,
    )


def make_timestamp() -> Timestamp:
    """Return the current time in UTC."""
    return _timestamp_from_ns(time.time_ns())


class Stopwatch:
    """Measures elapsed time on the monotonic clock. Starts on creation."""

    def __init__(self) -> None:
        self._start = 0
        self._stop: Optional[int] = None
        self.start()

    def __repr__(self) -> str:
        state = "running" if self._stop is None else f"stopped after {self.ns()} ns"
        return f"Stopwatch({state})"

    def start(self) -> None:
        """Start, or restart, the stopwatch."""
        self._start = time.monotonic_ns()
        self._stop = None

    def stop(self) -> None:
        """Stop the stopwatch; the elapsed time is then fixed."""
        self._stop = time.monotonic_ns()

    def _elapsed(self) -> int:
        if self._stop is None:
            raise RuntimeError("stopwatch has not been stopped")
        return self._stop - self._start

    def _since_start(self) -> int:
        return time.monotonic_ns() - self._start

    # Time from start to stop.

    def ns(self) -> int:
        return self._elapsed()

    def us(self) -> int:
        return self._elapsed() // _NS_PER_US

    def ms(self) -> int:
        return self._elapsed() // _NS_PER_MS

    def s(self) -> int:
        return self._elapsed() // _NS_PER_S

    def fs(self) -> float:
        """Seconds from start to stop, with full precision."""
        return self._elapsed() / _NS_PER_S

    # Time from start to now.

    def now_ns(self) -> int:
        return self._since_start()

    def now_us(self) -> int:
        return self._since_start() // _NS_PER_US

    def now_ms(self) -> int:
        return self._since_start() // _NS_PER_MS

    def now_s(self) -> int:
        return self._since_start() // _NS_PER_S

    def now_fs(self) -> float:
        """Seconds from start to now, with full precision."""
        return self._since_start() / _NS_PER_S