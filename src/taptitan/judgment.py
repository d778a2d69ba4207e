"""Hit judgment: match taps to pending notes and time out the ones nobody hit."""

from __future__ import annotations

import math
from dataclasses import dataclass

from taptitan.config import GOOD_WINDOW_MS, PERFECT_WINDOW_MS
from taptitan.models import HitGrade, Judgment, NoteState
from taptitan.registry import NoteRegistry


@dataclass(frozen=True)
class Outcome:
    damage_multiplier: float
    performance_weight: float
    keeps_combo: bool


OUTCOMES: dict[HitGrade, Outcome] = {
    HitGrade.PERFECT: Outcome(damage_multiplier=1.5, performance_weight=1.0, keeps_combo=True),
    HitGrade.GOOD: Outcome(damage_multiplier=1.0, performance_weight=0.7, keeps_combo=True),
    HitGrade.MISS: Outcome(damage_multiplier=0.0, performance_weight=0.0, keeps_combo=False),
}


def classify_offset(
    offset_ms: float,
    perfect_window: float = PERFECT_WINDOW_MS,
    good_window: float = GOOD_WINDOW_MS,
) -> HitGrade | None:
    """Grade a tap by its distance from the target. None means out of range."""
    abs_offset = abs(offset_ms)
    if abs_offset <= perfect_window:
        return HitGrade.PERFECT
    if abs_offset <= good_window:
        return HitGrade.GOOD
    return None


def damage_for(grade: HitGrade, base_damage: float, equipment_bonus: float) -> int:
    """Whole damage points dealt to the titan for one judgment."""
    return math.floor(base_damage * OUTCOMES[grade].damage_multiplier * equipment_bonus)


class JudgmentEngine:
    """Stateless apart from its windows; the registry holds all note state."""

    def __init__(
        self,
        perfect_window: float = PERFECT_WINDOW_MS,
        good_window: float = GOOD_WINDOW_MS,
    ) -> None:
        self.perfect_window = perfect_window
        self.good_window = good_window

    def judge_input(self, current_time: float, registry: NoteRegistry) -> Judgment | None:
        """Resolve a tap against the earliest pending note within the good window.

        Returns None when no note is in range. A stray tap is not a miss.
        """
        for note in registry:
            grade = classify_offset(current_time - note.target_time, self.perfect_window, self.good_window)
            if grade is None:
                continue
            registry.resolve(note, NoteState.HIT, grade)
            return Judgment(grade=grade, time=current_time, note=note)
        return None

    def expire_overdue(self, current_time: float, registry: NoteRegistry) -> list[Judgment]:
        """Mark every pending note whose good window has fully passed as MISS."""
        missed: list[Judgment] = []
        for note in registry:
            if current_time > note.target_time + self.good_window:
                registry.resolve(note, NoteState.MISSED, HitGrade.MISS)
                missed.append(Judgment(grade=HitGrade.MISS, time=current_time, note=note))
        return missed
