"""Time sources. All gameplay time is in milliseconds."""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Monotonic millisecond time source."""

    def now(self) -> float: ...


class MonotonicClock:
    """Wall clock for interactive play."""

    def now(self) -> float:
        return time.perf_counter() * 1000.0


class ManualClock:
    """Clock that only moves when told to. Used by the headless runner and tests."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        if ms < 0:
            raise ValueError("a monotonic clock cannot go backwards")
        self._now += ms
        return self._now

    def set(self, ms: float) -> None:
        if ms < self._now:
            raise ValueError("a monotonic clock cannot go backwards")
        self._now = float(ms)
