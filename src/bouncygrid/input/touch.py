"""Touch/mouse input tracking."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import pygame


@dataclass
class TouchState:
    location: Optional[Tuple[int, int]] = None
    drag_dy: float = 0.0
    wheel_dy: float = 0.0

    @property
    def is_down(self) -> bool:
        return self.location is not None


class TouchInput:
    """Single-pointer tracker; drags and wheel turns accumulate until consumed."""

    def __init__(self, wheel_step: float = 40.0) -> None:
        self.state = TouchState()
        self.wheel_step = wheel_step

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.state.location = event.pos
        elif event.type == pygame.MOUSEMOTION and event.buttons[0] and self.state.is_down:
            self.state.drag_dy += event.rel[1]
            self.state.location = event.pos
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.state.location = None
        elif event.type == pygame.MOUSEWHEEL:
            self.state.wheel_dy += event.y * self.wheel_step

    def consume_scroll(self) -> float:
        """Return the content scroll distance gathered since the last call."""
        # Dragging down or wheeling up reveals content above, so both lower the origin.
        distance = -self.state.drag_dy - self.state.wheel_dy
        self.state.drag_dy = 0.0
        self.state.wheel_dy = 0.0
        return distance
