"""Short-lived presentation effects. Timed by the renderer, not the game core."""

from __future__ import annotations

from dataclasses import dataclass

from taptitan.models import HitGrade

FLASH_DURATION_MS = 400
TITAN_SHAKE_MS = 150


@dataclass
class HitFlash:
    """Hit-quality text that fades out after ``duration`` ms."""

    grade: HitGrade
    started_at: float
    duration: float = FLASH_DURATION_MS

    def expired(self, now: float) -> bool:
        return now - self.started_at >= self.duration

    def alpha(self, now: float) -> int:
        remaining = 1.0 - (now - self.started_at) / self.duration
        return int(255 * max(0.0, min(1.0, remaining)))

    def scale(self, now: float) -> float:
        """Pops in at 1.3x and settles to 1.0x over the first quarter."""
        t = (now - self.started_at) / (self.duration / 4)
        return 1.0 + 0.3 * max(0.0, 1.0 - t)


@dataclass
class TitanShake:
    started_at: float
    duration: float = TITAN_SHAKE_MS

    def expired(self, now: float) -> bool:
        return now - self.started_at >= self.duration

    def offset(self, now: float) -> int:
        if self.expired(now):
            return 0
        step = int((now - self.started_at) // 30)
        return 6 if step % 2 == 0 else -6


class EffectQueue:
    """Holds at most one flash and one shake, dropping them when expired."""

    def __init__(self) -> None:
        self.flash: HitFlash | None = None
        self.shake: TitanShake | None = None

    def on_judgment(self, grade: HitGrade, now: float, damaged: bool) -> None:
        self.flash = HitFlash(grade=grade, started_at=now)
        if damaged:
            self.shake = TitanShake(started_at=now)

    def prune(self, now: float) -> None:
        if self.flash and self.flash.expired(now):
            self.flash = None
        if self.shake and self.shake.expired(now):
            self.shake = None

    def clear(self) -> None:
        self.flash = None
        self.shake = None
