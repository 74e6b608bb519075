"""Draws the bouncy grid and the active pointer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pygame

from bouncygrid.core.config import WindowConfig
from bouncygrid.core.geometry import ItemDescriptor, Rect
from bouncygrid.input.touch import TouchState
from bouncygrid.layout.bouncy import BouncyLayout


@dataclass
class Renderer:
    config: WindowConfig
    screen: pygame.Surface

    def draw(self, layout: BouncyLayout, bounds: Rect, touch_state: TouchState) -> int:
        """Draw every attached item meeting ``bounds``; returns how many were drawn."""
        self.screen.fill(self.config.background_color)
        items = layout.positions_in_region(bounds)
        for item in items:
            self._draw_item(item, bounds)
        self._draw_touch_point(touch_state)
        return len(items)

    def _item_color(self, item: ItemDescriptor) -> Tuple[int, int, int]:
        r, g, b = self.config.item_color
        # Alternate sections get a slightly darker shade.
        if item.id.section % 2:
            return (r * 3 // 4, g * 3 // 4, b * 3 // 4)
        return (r, g, b)

    def _draw_item(self, item: ItemDescriptor, bounds: Rect) -> None:
        frame = item.frame
        rect = pygame.Rect(
            round(frame.x - bounds.x),
            round(frame.y - bounds.y),
            round(frame.width),
            round(frame.height),
        )
        pygame.draw.rect(self.screen, self._item_color(item), rect, border_radius=6)

    def _draw_touch_point(self, touch_state: TouchState) -> None:
        if touch_state.location is None:
            return
        pygame.draw.circle(self.screen, self.config.pointer_color, touch_state.location, 12, width=2)
