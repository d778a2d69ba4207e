"""Stateless projection of session state into presentation data."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from taptitan.config import Rules
from taptitan.models import DifficultyState, GameSession, HitGrade, Note, PlayerStats, SessionPhase

# Notes keep drawing slightly past the target line before they expire
MAX_VISIBLE_PROGRESS = 1.1


@dataclass(frozen=True)
class NoteSprite:
    target_time: float
    progress: float  # 0.0 = spawn edge, 1.0 = target line


@dataclass(frozen=True)
class FrameView:
    """Read-only snapshot handed to the renderer once per tick."""

    phase: SessionPhase
    game_time: float
    stats: PlayerStats
    level: int
    bpm: float
    hp_fraction: float
    accuracy: float | None
    last_grade: HitGrade | None
    notes: list[NoteSprite] = field(default_factory=list)

    @property
    def accuracy_text(self) -> str:
        if self.accuracy is None:
            return "N/A"
        return f"{self.accuracy * 100:.0f}%"


def note_progress(note: Note, game_time: float, travel_time: float) -> float:
    return (game_time - note.spawn_time) / travel_time


def project(
    session: GameSession,
    notes: list[Note],
    difficulty: DifficultyState,
    rules: Rules,
) -> FrameView:
    sprites = []
    for note in notes:
        progress = note_progress(note, session.game_time, rules.travel_time_ms)
        if 0.0 <= progress <= MAX_VISIBLE_PROGRESS:
            sprites.append(NoteSprite(target_time=note.target_time, progress=progress))

    stats = session.stats
    return FrameView(
        phase=session.phase,
        game_time=session.game_time,
        stats=replace(stats),
        level=difficulty.level,
        bpm=difficulty.bpm,
        hp_fraction=max(0.0, min(1.0, stats.titan_hp / rules.titan_max_hp)),
        accuracy=session.accuracy,
        last_grade=session.last_judgment.grade if session.last_judgment else None,
        notes=sprites,
    )
