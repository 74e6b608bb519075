"""Frame timing utilities."""
from __future__ import annotations

from dataclasses import dataclass

import pygame


@dataclass
class FrameClock:
    target_fps: int
    max_frame_time: float = 0.25

    def __post_init__(self) -> None:
        self._clock = pygame.time.Clock()

    def tick(self) -> float:
        """Wait for the next frame and return its duration in seconds, clamped."""
        return min(self._clock.tick(self.target_fps) / 1000.0, self.max_frame_time)

    @property
    def fps(self) -> float:
        return self._clock.get_fps()
