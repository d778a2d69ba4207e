"""Core data models shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from taptitan.config import MAX_DIFFICULTY


class ScheduleError(Exception):
    """Raised when a note would become visible at or after its target time."""


class HitGrade(Enum):
    PERFECT = auto()
    GOOD = auto()
    MISS = auto()


class NoteState(Enum):
    PENDING = auto()
    HIT = auto()
    MISSED = auto()


class SessionPhase(Enum):
    LOADING = auto()
    PLAYING = auto()
    ENDED = auto()


@dataclass(eq=False)
class Note:
    """A single timed target on the lane. Notes compare by identity."""

    target_time: float  # ms since session start
    spawn_time: float  # ms since session start, when the note starts travelling
    state: NoteState = NoteState.PENDING
    grade: HitGrade | None = None

    def __post_init__(self) -> None:
        if self.spawn_time >= self.target_time:
            raise ScheduleError(
                f"note spawns at {self.spawn_time} ms but targets {self.target_time} ms"
            )

    @classmethod
    def at(cls, target_time: float, travel_time: float) -> Note:
        return cls(target_time=target_time, spawn_time=target_time - travel_time)

    @property
    def pending(self) -> bool:
        return self.state is NoteState.PENDING


@dataclass(frozen=True)
class DifficultyState:
    """The choreographer's operating point, derived entirely from ``level``."""

    level: int = 1
    max_level: int = MAX_DIFFICULTY

    def __post_init__(self) -> None:
        # Frozen dataclass: clamp through object.__setattr__
        object.__setattr__(self, "level", max(1, min(self.max_level, int(self.level))))

    @property
    def bpm(self) -> float:
        return 100.0 + (self.level - 1) * 10.0

    @property
    def beat_interval(self) -> float:
        """Milliseconds between two quarter-note beats."""
        return 60000.0 / self.bpm

    @property
    def density(self) -> float:
        """Chance of a note on each beat: 54% at level 1, 90% at level 10."""
        return 0.5 + self.level * 0.04

    @property
    def syncopation_chance(self) -> float:
        """Chance of an off-beat eighth note, from level 4 upwards."""
        if self.level < 4:
            return 0.0
        return (self.level - 3) * 0.1

    @property
    def subdivision_chance(self) -> float:
        """Chance of a fast sixteenth note, from level 8 upwards."""
        return 0.3 if self.level >= 8 else 0.0

    def shifted(self, step: int) -> DifficultyState:
        return DifficultyState(level=self.level + step, max_level=self.max_level)


@dataclass
class Judgment:
    """The verdict for one note, or for a stray tap when ``note`` is None."""

    grade: HitGrade
    time: float  # ms since session start
    note: Note | None = None

    @property
    def offset_ms(self) -> float | None:
        """Negative = early, positive = late."""
        if self.note is None:
            return None
        return self.time - self.note.target_time


@dataclass
class PlayerStats:
    score: int = 0
    combo: int = 0
    titan_hp: int = 0
    max_combo: int = 0
    perfect: int = 0
    good: int = 0
    missed: int = 0

    @property
    def judged(self) -> int:
        return self.perfect + self.good + self.missed


@dataclass
class Adjustment:
    """Outcome of recording one performance weight."""

    average: float
    old_level: int
    new_level: int

    @property
    def changed(self) -> bool:
        return self.old_level != self.new_level


@dataclass
class GameSession:
    """All mutable state of one run, owned by the session controller."""

    phase: SessionPhase = SessionPhase.LOADING
    stats: PlayerStats = field(default_factory=PlayerStats)
    game_time: float = 0.0
    accuracy: float | None = None
    last_judgment: Judgment | None = None
