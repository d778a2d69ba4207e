"""Heads-up display: titan, HP bar, score, combo, difficulty, accuracy, hit flash."""

from __future__ import annotations

import pygame

from taptitan.models import HitGrade
from taptitan.projection import FrameView
from taptitan.renderer import colors
from taptitan.renderer.feedback import EffectQueue

TITAN_AREA_HEIGHT = 230


def render_titan(surface: pygame.Surface, frame: FrameView, effects: EffectQueue, now: float) -> None:
    w = surface.get_width()
    shake = effects.shake.offset(now) if effects.shake else 0
    color = colors.TITAN_HIT if effects.shake else colors.TITAN

    body = pygame.Rect(0, 0, 120, 130)
    body.center = (w // 2 + shake, 110)
    pygame.draw.ellipse(surface, color, body)

    bar = pygame.Rect(40, 190, w - 80, 16)
    pygame.draw.rect(surface, colors.HP_BAR_BG, bar, border_radius=4)
    filled = bar.copy()
    filled.width = int(bar.width * frame.hp_fraction)
    if filled.width > 0:
        pygame.draw.rect(surface, colors.HP_BAR, filled, border_radius=4)


def render_hud(surface: pygame.Surface, frame: FrameView) -> None:
    font = pygame.font.SysFont("monospace", 18)

    lines = [
        f"Score: {frame.stats.score}",
        f"Combo: {frame.stats.combo}",
        f"Level: {frame.level} ({frame.bpm:.0f} BPM)",
        f"Accuracy: {frame.accuracy_text}",
    ]

    y = 10
    for line in lines:
        text = font.render(line, True, colors.HUD_TEXT)
        surface.blit(text, (10, y))
        y += 22


def render_flash(surface: pygame.Surface, effects: EffectQueue, now: float, center: tuple[int, int]) -> None:
    flash = effects.flash
    if flash is None:
        return
    size = int(32 * flash.scale(now))
    font = pygame.font.SysFont("monospace", size, bold=True)
    text = font.render(flash.grade.name, True, colors.GRADE_COLORS[flash.grade])
    text.set_alpha(flash.alpha(now))
    surface.blit(text, text.get_rect(center=center))


def render_victory(surface: pygame.Surface, frame: FrameView) -> None:
    w, h = surface.get_size()
    shade = pygame.Surface((w, h), pygame.SRCALPHA)
    shade.fill(colors.OVERLAY)
    surface.blit(shade, (0, 0))

    title_font = pygame.font.SysFont("monospace", 40, bold=True)
    font = pygame.font.SysFont("monospace", 20)
    stats = frame.stats

    title = title_font.render("Victory!", True, colors.GRADE_COLORS[HitGrade.PERFECT])
    surface.blit(title, title.get_rect(center=(w // 2, h // 3)))

    lines = [
        "The titan is defeated!",
        f"Final score: {stats.score}",
        f"Perfect {stats.perfect}  Good {stats.good}  Miss {stats.missed}",
        f"Max combo: {stats.max_combo}",
        "",
        "R / Enter: play again   Esc: title",
    ]
    y = h // 3 + 50
    for line in lines:
        text = font.render(line, True, colors.HUD_TEXT)
        surface.blit(text, text.get_rect(center=(w // 2, y)))
        y += 30
