"""Color palette."""

from taptitan.models import HitGrade

# RGB tuples
BG = (20, 16, 32)
LANE = (36, 30, 56)
TARGET_MARKER = (240, 240, 240)
TITLE = (241, 196, 15)
NOTE = (66, 135, 245)
HUD_TEXT = (220, 220, 220)
HP_BAR = (200, 40, 60)
HP_BAR_BG = (60, 40, 50)
TITAN = (120, 110, 150)
TITAN_HIT = (255, 120, 120)
OVERLAY = (0, 0, 0, 180)

GRADE_COLORS = {
    HitGrade.PERFECT: (241, 196, 15),
    HitGrade.GOOD: (46, 204, 113),
    HitGrade.MISS: (231, 76, 60),
}
