"""Headless fixed-timestep runner with a scripted auto-player."""

from __future__ import annotations

import heapq
import logging
import random

from taptitan.clock import ManualClock
from taptitan.config import FPS
from taptitan.models import GameSession, Note
from taptitan.session import SessionController

logger = logging.getLogger(__name__)


class AutoPlayer:
    """Taps each note it sees with probability ``accuracy`` and Gaussian timing error."""

    def __init__(
        self,
        accuracy: float = 0.9,
        jitter_ms: float = 30.0,
        rng: random.Random | None = None,
    ) -> None:
        self.accuracy = max(0.0, min(1.0, accuracy))
        self.jitter_ms = max(0.0, jitter_ms)
        self._rng = rng if rng is not None else random.Random()
        self._seen: set[Note] = set()
        self._taps: list[float] = []

    def plan(self, notes: list[Note]) -> None:
        """Decide, once per note, whether and when to tap it."""
        self._seen = {note for note in self._seen if note.pending}
        for note in notes:
            if note in self._seen:
                continue
            self._seen.add(note)
            if self._rng.random() < self.accuracy:
                heapq.heappush(self._taps, note.target_time + self._rng.gauss(0.0, self.jitter_ms))

    def due(self, until: float) -> list[float]:
        """Pop the planned tap times (game ms) at or before ``until``."""
        taps = []
        while self._taps and self._taps[0] <= until:
            taps.append(heapq.heappop(self._taps))
        return taps


def run_headless(
    controller: SessionController,
    clock: ManualClock,
    player: AutoPlayer,
    step_ms: float = 1000.0 / FPS,
    max_ms: float = 10 * 60 * 1000.0,
) -> GameSession:
    """Play one session to completion, or until ``max_ms`` of game time passes.

    Taps are delivered between frames at their own timestamps, the way
    input events arrive between rendered frames in the windowed game.
    """
    controller.start()
    frame_time = 0.0

    while controller.playing and frame_time < max_ms:
        frame_time += step_ms
        for tap_time in player.due(frame_time):
            clock.set(max(clock.now(), controller.start_time + tap_time))
            controller.handle_input()
            if not controller.playing:
                break
        else:
            clock.set(controller.start_time + frame_time)
            controller.tick()
            player.plan(controller.registry.pending())

    if controller.playing:
        logger.warning("Stopped after %.0f ms with the titan still standing", frame_time)
    return controller.session
