"""Adaptive combat choreographer: procedural note sequences scaled by difficulty."""

from __future__ import annotations

import logging
import random

from taptitan.config import REST_BEATS, SEQUENCE_LENGTH
from taptitan.models import DifficultyState, Note
from taptitan.registry import NoteRegistry

logger = logging.getLogger(__name__)


def generate_sequence(
    start_time: float,
    difficulty: DifficultyState,
    rng: random.Random,
    sequence_length: int = SEQUENCE_LENGTH,
    rest_beats: int = REST_BEATS,
) -> tuple[list[float], float]:
    """Roll one sequence of note target times starting at ``start_time``.

    Each beat has three independent slots: the beat itself (``density``), an
    off-beat eighth (level 4+) and a sixteenth after the beat (level 8+).

    Returns:
        The target times in ascending order, and the start time of the next
        sequence (one rest measure after the last beat).
    """
    beat = difficulty.beat_interval
    targets: list[float] = []
    beat_time = start_time

    for _ in range(sequence_length):
        if rng.random() < difficulty.density:
            targets.append(beat_time)
        if difficulty.level >= 4 and rng.random() < difficulty.syncopation_chance:
            targets.append(beat_time + beat / 2)
        if difficulty.level >= 8 and rng.random() < difficulty.subdivision_chance:
            targets.append(beat_time + beat / 4)
        beat_time += beat

    # beat_time is now last beat + one beat
    return sorted(targets), beat_time + beat * rest_beats


class Choreographer:
    """Owns the difficulty level and the schedule cursor for upcoming sequences."""

    def __init__(
        self,
        travel_time: float,
        rng: random.Random | None = None,
        difficulty: DifficultyState | None = None,
    ) -> None:
        self.travel_time = travel_time
        self.rng = rng if rng is not None else random.Random()
        self.difficulty = difficulty if difficulty is not None else DifficultyState()
        self.next_sequence_time = 0.0

    def reset(self, first_sequence_time: float, difficulty: DifficultyState | None = None) -> None:
        self.difficulty = difficulty if difficulty is not None else DifficultyState(
            max_level=self.difficulty.max_level
        )
        self.next_sequence_time = first_sequence_time

    def is_due(self, current_time: float) -> bool:
        # The first note must be scheduled before it has to start travelling
        return current_time >= self.next_sequence_time - self.travel_time

    def sequence_period(self) -> float:
        """Time from one sequence start to the next at the current level."""
        return self.difficulty.beat_interval * (SEQUENCE_LENGTH + REST_BEATS)

    def maybe_generate(self, current_time: float, registry: NoteRegistry) -> list[Note]:
        """Schedule every sequence that is due at ``current_time`` into ``registry``.

        A sequence whose start has already gone by (the host stalled) is
        skipped whole, so no note is ever scheduled overdue. On return the
        cursor is no longer due, so a repeat call at the same time is a no-op.
        """
        notes: list[Note] = []
        while self.is_due(current_time):
            start = self.next_sequence_time
            if start < current_time:
                self.next_sequence_time = start + self.sequence_period()
                logger.info("Skipped sequence at %.0f ms, %.0f ms behind", start, current_time - start)
                continue

            targets, self.next_sequence_time = generate_sequence(start, self.difficulty, self.rng)
            sequence = [Note.at(target, self.travel_time) for target in targets]
            registry.extend(sequence)
            notes.extend(sequence)
            logger.debug(
                "Sequence at %.0f ms: level %d, %d notes, next at %.0f ms",
                start, self.difficulty.level, len(sequence), self.next_sequence_time,
            )
        return notes
