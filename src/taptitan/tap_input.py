"""Player input capture: keyboard and pointer presses become "activate" events."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import pygame

ACTIVATE_KEYS = frozenset({pygame.K_SPACE, pygame.K_f, pygame.K_j, pygame.K_k, pygame.K_d})


@runtime_checkable
class InputSource(Protocol):
    """Common interface for anything that produces payload-free taps."""
    def poll(self) -> bool: ...
    def close(self) -> None: ...


class TapInput:
    """Queues one activation per key press, mouse click or touch."""

    def __init__(self, keys: frozenset[int] = ACTIVATE_KEYS) -> None:
        self._keys = keys
        self._pending = 0
        self._held: set[int] = set()

    def feed_event(self, event: pygame.event.Event) -> None:
        """Call from the game loop for each pygame event."""
        if event.type == pygame.KEYDOWN and event.key in self._keys:
            # Ignore key repeat while held
            if event.key not in self._held:
                self._held.add(event.key)
                self._pending += 1
        elif event.type == pygame.KEYUP:
            self._held.discard(event.key)
        elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
            self._pending += 1

    def poll(self) -> bool:
        """Return True and consume one queued tap if there is one."""
        if self._pending:
            self._pending -= 1
            return True
        return False

    def close(self) -> None:
        self._pending = 0
        self._held.clear()
