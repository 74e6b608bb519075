"""Scrollable viewport over the bouncy layout's content."""
from __future__ import annotations

from typing import Optional, Tuple

from pymunk import Vec2d

from bouncygrid.core.geometry import Rect
from bouncygrid.input.touch import TouchInput
from bouncygrid.layout.bouncy import BouncyLayout
from bouncygrid.physics.perturbation import NO_POINTER


class ScrollView:
    def __init__(self, size: Tuple[int, int], layout: BouncyLayout, touch: Optional[TouchInput] = None) -> None:
        width, height = size
        self._bounds = Rect(0.0, 0.0, float(width), float(height))
        self.layout = layout
        self.touch = touch
        layout.attach(self)

    @property
    def bounds(self) -> Rect:
        return self._bounds

    @property
    def pointer_location(self) -> Vec2d:
        """Pointer in content coordinates, or the (0, 0) sentinel when released."""
        if self.touch is None or self.touch.state.location is None:
            return NO_POINTER
        x, y = self.touch.state.location
        return Vec2d(x + self._bounds.x, y + self._bounds.y)

    def max_offset_y(self) -> float:
        content = self.layout.content_size()
        if content is None:
            return 0.0
        return max(0.0, content.height - self._bounds.height)

    def scroll_to(self, origin: Vec2d) -> bool:
        """
        Move the viewport origin, clamped to the content.

        The layout sees the shift while the old bounds are still current.

        Returns:
            True if the origin changed
        """
        y = min(max(origin.y, 0.0), self.max_offset_y())
        new_origin = Vec2d(self._bounds.x, y)
        if new_origin == self._bounds.origin:
            return False

        invalidate = self.layout.on_viewport_shift(new_origin)
        self._bounds = self._bounds.with_origin(new_origin)
        if invalidate:
            self.layout.prepare_pass()
        return True

    def scroll_by(self, dy: float) -> bool:
        if not dy:
            return False
        return self.scroll_to(Vec2d(self._bounds.x, self._bounds.y + dy))
