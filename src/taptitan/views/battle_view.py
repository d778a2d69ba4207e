"""Battle view: one run against the titan."""

from __future__ import annotations

import pygame

from taptitan.models import HitGrade, SessionPhase
from taptitan.projection import FrameView
from taptitan.renderer import colors
from taptitan.renderer.feedback import EffectQueue
from taptitan.renderer.hud import TITAN_AREA_HEIGHT, render_flash, render_hud, render_titan, render_victory
from taptitan.renderer.lane import lane_rect, render_lane, target_y
from taptitan.views.base import ViewAction, ViewContext


class BattleView:
    name = "battle"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._effects = EffectQueue()
        self._frame: FrameView | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._effects.clear()
        # Drop the press that opened this view
        context.tap_input.close()
        context.controller.start()
        self._frame = context.controller.snapshot()

    def on_exit(self) -> None:
        self._effects.clear()

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN or self._context is None:
            return None

        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="pop")

        controller = self._context.controller
        if controller.session.phase is SessionPhase.ENDED and event.key in (pygame.K_r, pygame.K_RETURN):
            controller.restart()
            self._effects.clear()
            self._context.tap_input.close()
        return None

    def update(self, dt: float) -> ViewAction | None:
        if self._context is None:
            return None

        controller = self._context.controller
        tap_input = self._context.tap_input
        now = float(pygame.time.get_ticks())

        # Expiry runs before this frame's taps are judged
        for judgment in controller.tick():
            self._effects.on_judgment(judgment.grade, now, damaged=False)

        while tap_input.poll():
            judgment = controller.handle_input()
            if judgment is not None:
                self._effects.on_judgment(judgment.grade, now, damaged=judgment.grade is not HitGrade.MISS)

        self._effects.prune(now)
        self._frame = controller.snapshot()
        return None

    def draw(self, surface: pygame.Surface) -> None:
        frame = self._frame
        if frame is None:
            return

        now = float(pygame.time.get_ticks())
        surface.fill(colors.BG)

        render_titan(surface, frame, self._effects, now)
        rect = lane_rect(surface, TITAN_AREA_HEIGHT)
        render_lane(surface, frame, rect)
        render_hud(surface, frame)
        render_flash(surface, self._effects, now, (rect.centerx, target_y(rect) - 80))

        if frame.phase is SessionPhase.ENDED:
            render_victory(surface, frame)
