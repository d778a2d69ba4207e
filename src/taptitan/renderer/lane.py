"""Rhythm lane: notes travel down toward the target marker."""

from __future__ import annotations

import pygame

from taptitan.projection import FrameView
from taptitan.renderer.colors import LANE, NOTE, TARGET_MARKER

NOTE_HEIGHT = 18
LANE_MARGIN = 60


def lane_rect(surface: pygame.Surface, top: int) -> pygame.Rect:
    w, h = surface.get_size()
    return pygame.Rect(LANE_MARGIN, top, w - 2 * LANE_MARGIN, h - top - 40)


def target_y(rect: pygame.Rect) -> int:
    return rect.bottom - 60


def note_y(rect: pygame.Rect, progress: float) -> int:
    """Map travel progress onto the lane: 0 at the top edge, 1 at the target marker."""
    return int(rect.top + progress * (target_y(rect) - rect.top))


def render_lane(surface: pygame.Surface, frame: FrameView, rect: pygame.Rect) -> None:
    pygame.draw.rect(surface, LANE, rect, border_radius=6)

    ty = target_y(rect)
    pygame.draw.line(surface, TARGET_MARKER, (rect.left, ty), (rect.right - 1, ty), 3)

    for sprite in frame.notes:
        y = note_y(rect, sprite.progress)
        note_rect = pygame.Rect(rect.left + 12, y - NOTE_HEIGHT // 2, rect.width - 24, NOTE_HEIGHT)
        pygame.draw.rect(surface, NOTE, note_rect, border_radius=NOTE_HEIGHT // 2)
