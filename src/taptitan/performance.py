"""Rolling accuracy and adaptive difficulty adjustment."""

from __future__ import annotations

from collections import deque

from taptitan.config import (
    LOWER_THRESHOLD,
    MAX_DIFFICULTY,
    PERFORMANCE_HISTORY_LENGTH,
    RAISE_THRESHOLD,
)
from taptitan.models import Adjustment


class PerformanceTracker:
    """FIFO window of performance weights that nudges the difficulty level.

    Between the lower and raise thresholds the player is "in flow" and the
    level stays put. Any change clears the window so the new level is judged
    on a full set of fresh results.
    """

    def __init__(
        self,
        capacity: int = PERFORMANCE_HISTORY_LENGTH,
        max_level: int = MAX_DIFFICULTY,
        raise_threshold: float = RAISE_THRESHOLD,
        lower_threshold: float = LOWER_THRESHOLD,
    ) -> None:
        self.capacity = capacity
        self.max_level = max_level
        self.raise_threshold = raise_threshold
        self.lower_threshold = lower_threshold
        self._history: deque[float] = deque(maxlen=capacity)

    @property
    def history(self) -> list[float]:
        return list(self._history)

    @property
    def average(self) -> float | None:
        if not self._history:
            return None
        return sum(self._history) / len(self._history)

    def reset(self) -> None:
        self._history.clear()

    def record(self, weight: float, level: int) -> Adjustment:
        """Push one weight and return the (possibly unchanged) level."""
        self._history.append(weight)
        average = sum(self._history) / len(self._history)

        new_level = level
        if len(self._history) >= self.capacity:
            if average > self.raise_threshold and level < self.max_level:
                new_level = level + 1
            elif average < self.lower_threshold and level > 1:
                new_level = level - 1

        if new_level != level:
            self._history.clear()
        return Adjustment(average=average, old_level=level, new_level=new_level)
