"""Title screen shown while the session is loading."""

from __future__ import annotations

import pygame

from taptitan.config import WINDOW_TITLE
from taptitan.renderer import colors
from taptitan.views.base import ViewAction, ViewContext


class TitleView:
    name = "title"

    def __init__(self) -> None:
        self._font: pygame.font.Font | None = None
        self._title_font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._font = pygame.font.SysFont("monospace", 20)
        self._title_font = pygame.font.SysFont("monospace", 44, bold=True)
        context.tap_input.close()

    def on_exit(self) -> None:
        pass

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return ViewAction(kind="quit")
            if event.key in (pygame.K_SPACE, pygame.K_RETURN):
                return ViewAction(kind="push", target="battle")
        elif event.type == pygame.MOUSEBUTTONDOWN:
            return ViewAction(kind="push", target="battle")
        return None

    def update(self, dt: float) -> ViewAction | None:
        return None

    def draw(self, surface: pygame.Surface) -> None:
        if not self._font or not self._title_font:
            return

        surface.fill(colors.BG)
        w, h = surface.get_size()

        title = self._title_font.render(WINDOW_TITLE, True, colors.TITLE)
        surface.blit(title, title.get_rect(center=(w // 2, h // 3)))

        lines = [
            "Tap in time to strike the titan.",
            "Space / F / J / click to tap.",
            "",
            "Press Space to start",
        ]
        y = h // 3 + 70
        for line in lines:
            text = self._font.render(line, True, colors.HUD_TEXT)
            surface.blit(text, text.get_rect(center=(w // 2, y)))
            y += 30
