"""Top-level application: initializes pygame, manages screens, and runs the game loop."""

from __future__ import annotations

import random

import pygame

from taptitan.config import FPS, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH, Rules
from taptitan.session import SessionController
from taptitan.tap_input import TapInput
from taptitan.views.base import ViewContext, ViewManager
from taptitan.views.battle_view import BattleView
from taptitan.views.title_view import TitleView


class App:
    def __init__(self, rules: Rules | None = None, seed: int | None = None) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()

        self._tap_input = TapInput()
        controller = SessionController(rules=rules, rng=random.Random(seed))

        context = ViewContext(
            screen_size=(WINDOW_WIDTH, WINDOW_HEIGHT),
            controller=controller,
            tap_input=self._tap_input,
        )

        self.views = ViewManager(context)
        self.views.register(TitleView)
        self.views.register(BattleView)

        self.views.push("title")

    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    self._tap_input.feed_event(event)
                    if not self.views.handle_event(event):
                        running = False
            if running:
                if not self.views.update(dt):
                    running = False
            self.views.draw(self.screen)
            pygame.display.flip()

        self._cleanup()
        pygame.quit()

    def _cleanup(self) -> None:
        while self.views.active_view:
            self.views.pop()
        self._tap_input.close()
