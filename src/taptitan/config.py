"""Global constants and default gameplay rules."""

from __future__ import annotations

from dataclasses import dataclass

WINDOW_WIDTH = 480
WINDOW_HEIGHT = 800
FPS = 60
WINDOW_TITLE = "TapTitan"

# Hit evaluation timing windows (milliseconds)
PERFECT_WINDOW_MS = 50
GOOD_WINDOW_MS = 120

# Approach rate: time (ms) for a note to cross the lane
NOTE_TRAVEL_TIME_MS = 1500
# Silence before the first sequence reaches the target line
FIRST_SEQUENCE_DELAY_MS = 1000

# Choreographer
MAX_DIFFICULTY = 10
SEQUENCE_LENGTH = 8  # beats
REST_BEATS = 4  # one silent measure between sequences

# Adaptive difficulty
PERFORMANCE_HISTORY_LENGTH = 20
RAISE_THRESHOLD = 0.90
LOWER_THRESHOLD = 0.60

# Combat
BASE_DAMAGE = 50
EQUIPMENT_BONUS = 1.1
TITAN_MAX_HP = 10000


@dataclass(frozen=True)
class Rules:
    """Gameplay tuning for one session. Defaults mirror the module constants."""

    perfect_window_ms: float = PERFECT_WINDOW_MS
    good_window_ms: float = GOOD_WINDOW_MS
    travel_time_ms: float = NOTE_TRAVEL_TIME_MS
    first_sequence_delay_ms: float = FIRST_SEQUENCE_DELAY_MS
    max_difficulty: int = MAX_DIFFICULTY
    history_length: int = PERFORMANCE_HISTORY_LENGTH
    base_damage: float = BASE_DAMAGE
    equipment_bonus: float = EQUIPMENT_BONUS
    titan_max_hp: int = TITAN_MAX_HP
    empty_tap_breaks_combo: bool = False

    def __post_init__(self) -> None:
        if not 0 < self.perfect_window_ms <= self.good_window_ms:
            raise ValueError("perfect window must be positive and no wider than the good window")
        if self.travel_time_ms <= 0:
            raise ValueError("travel_time_ms must be positive")
        if self.max_difficulty < 1:
            raise ValueError("max_difficulty must be at least 1")
        if self.history_length < 1:
            raise ValueError("history_length must be at least 1")
        if self.titan_max_hp < 1:
            raise ValueError("titan_max_hp must be at least 1")
        if self.base_damage < 0 or self.equipment_bonus < 0:
            raise ValueError("damage settings must be non-negative")
