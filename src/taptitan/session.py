"""Session controller: per-tick update loop and run lifecycle."""

from __future__ import annotations

import logging
import random

from taptitan.choreographer import Choreographer
from taptitan.clock import Clock, MonotonicClock
from taptitan.config import Rules
from taptitan.judgment import OUTCOMES, JudgmentEngine, damage_for
from taptitan.models import (
    DifficultyState,
    GameSession,
    HitGrade,
    Judgment,
    PlayerStats,
    SessionPhase,
)
from taptitan.performance import PerformanceTracker
from taptitan.projection import FrameView, project
from taptitan.registry import NoteRegistry

logger = logging.getLogger(__name__)


class SessionController:
    """Drives one player's run against the titan.

    The tick order is fixed: advance time, schedule a due sequence, expire
    overdue notes, then judge taps. Taps are judged immediately against the
    clock time at which they are consumed.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        rules: Rules | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.clock = clock if clock is not None else MonotonicClock()
        self.rules = rules if rules is not None else Rules()
        self.registry = NoteRegistry()
        self.choreographer = Choreographer(
            travel_time=self.rules.travel_time_ms,
            rng=rng,
            difficulty=DifficultyState(max_level=self.rules.max_difficulty),
        )
        self.judge = JudgmentEngine(self.rules.perfect_window_ms, self.rules.good_window_ms)
        self.tracker = PerformanceTracker(
            capacity=self.rules.history_length, max_level=self.rules.max_difficulty
        )
        self.session = GameSession(stats=PlayerStats(titan_hp=self.rules.titan_max_hp))
        self.start_time = 0.0

    # -- lifecycle ---------------------------------------------------------

    @property
    def playing(self) -> bool:
        return self.session.phase is SessionPhase.PLAYING

    @property
    def difficulty(self) -> DifficultyState:
        return self.choreographer.difficulty

    def start(self) -> GameSession:
        """Reinitialise every piece of run state and begin playing."""
        self.registry.clear()
        self.tracker.reset()
        self.choreographer.reset(self.rules.travel_time_ms + self.rules.first_sequence_delay_ms)
        self.session = GameSession(
            phase=SessionPhase.PLAYING,
            stats=PlayerStats(titan_hp=self.rules.titan_max_hp),
        )
        self.start_time = self.clock.now()
        logger.info("Session started (titan HP %d)", self.rules.titan_max_hp)
        return self.session

    def restart(self) -> GameSession:
        logger.info("Restarting session")
        return self.start()

    def elapsed(self) -> float:
        return self.clock.now() - self.start_time

    # -- per-tick update ---------------------------------------------------

    def tick(self) -> list[Judgment]:
        """Advance to the clock's current time. Returns the notes that expired."""
        if not self.playing:
            return []
        return self.update(self.elapsed())

    def update(self, game_time: float) -> list[Judgment]:
        if not self.playing:
            logger.debug("Tick ignored in phase %s", self.session.phase.name)
            return []

        self.session.game_time = max(self.session.game_time, game_time)
        now = self.session.game_time

        self.choreographer.maybe_generate(now, self.registry)

        missed = self.judge.expire_overdue(now, self.registry)
        for judgment in missed:
            self._apply(judgment)
        return missed

    def handle_input(self) -> Judgment | None:
        """Consume one "activate" event, timestamped against the clock now."""
        if not self.playing:
            logger.debug("Input ignored in phase %s", self.session.phase.name)
            return None
        return self.tap(self.elapsed())

    def tap(self, game_time: float) -> Judgment | None:
        if not self.playing:
            return None

        judgment = self.judge.judge_input(game_time, self.registry)
        if judgment is None:
            if not self.rules.empty_tap_breaks_combo:
                return None
            judgment = Judgment(grade=HitGrade.MISS, time=game_time)
        self._apply(judgment)
        return judgment

    def snapshot(self) -> FrameView:
        return project(
            self.session,
            self.registry.pending(),
            self.choreographer.difficulty,
            self.rules,
        )

    # -- outcome bookkeeping -------------------------------------------------

    def _apply(self, judgment: Judgment) -> None:
        stats = self.session.stats
        outcome = OUTCOMES[judgment.grade]

        if outcome.keeps_combo:
            stats.combo += 1
            stats.max_combo = max(stats.max_combo, stats.combo)
        else:
            stats.combo = 0

        if judgment.grade is HitGrade.PERFECT:
            stats.perfect += 1
        elif judgment.grade is HitGrade.GOOD:
            stats.good += 1
        else:
            stats.missed += 1

        damage = damage_for(judgment.grade, self.rules.base_damage, self.rules.equipment_bonus)
        if damage > 0:
            stats.titan_hp = max(0, stats.titan_hp - damage)
            # Damage compounds with streak length
            stats.score += damage * stats.combo

        adjustment = self.tracker.record(outcome.performance_weight, self.difficulty.level)
        self.session.accuracy = adjustment.average
        if adjustment.changed:
            self.choreographer.difficulty = self.difficulty.shifted(
                adjustment.new_level - adjustment.old_level
            )
            logger.info(
                "Difficulty adjusted %d -> %d (accuracy %.0f%%)",
                adjustment.old_level, adjustment.new_level, adjustment.average * 100,
            )

        self.session.last_judgment = judgment

        if stats.titan_hp <= 0:
            self._end()

    def _end(self) -> None:
        self.session.phase = SessionPhase.ENDED
        logger.info(
            "Titan defeated at %.0f ms, final score %d",
            self.session.game_time, self.session.stats.score,
        )
