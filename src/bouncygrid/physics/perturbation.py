"""Scroll perturbation: how far an item is pushed off its anchor by a scroll delta."""
from __future__ import annotations

from dataclasses import dataclass, field

from pymunk import Vec2d

RESISTANCE_DIVISOR = 1500.0

# A pointer reported at exactly (0, 0) is read as "no pointer down". A real
# touch at the content origin is indistinguishable and gets no perturbation.
NO_POINTER = Vec2d(0.0, 0.0)


def resistance(anchor_point: Vec2d, pointer_location: Vec2d, divisor: float = RESISTANCE_DIVISOR) -> float:
    """Manhattan distance from the pointer to the anchor, scaled by ``divisor``."""
    y_distance = abs(pointer_location.y - anchor_point.y)
    x_distance = abs(pointer_location.x - anchor_point.x)
    return (y_distance + x_distance) / divisor


def compute_offset(
    base_center_y: float,
    delta: float,
    anchor_point: Vec2d,
    pointer_location: Vec2d,
    resistance_divisor: float = RESISTANCE_DIVISOR,
) -> float:
    """
    Return the item's new center y after applying a scroll delta.

    The displacement is whichever of ``delta`` and ``delta * resistance`` is
    smaller in magnitude, so items near the pointer barely move off their
    springs while distant ones are displaced by up to the full delta.

    Args:
        base_center_y: Item center y before the shift
        delta: Scroll delta along y (negative when scrolling up)
        anchor_point: Anchor the item's spring pulls toward
        pointer_location: Current pointer, or NO_POINTER
        resistance_divisor: Distance at which resistance reaches 1.0

    Returns:
        Adjusted center y
    """
    if pointer_location == NO_POINTER:
        return base_center_y

    scroll_resistance = resistance(anchor_point, pointer_location, resistance_divisor)
    if delta < 0:
        return base_center_y + max(delta, delta * scroll_resistance)
    return base_center_y + min(delta, delta * scroll_resistance)


@dataclass
class ScrollState:
    latest_delta: float = 0.0
    pointer_location: Vec2d = field(default_factory=lambda: NO_POINTER)

    @property
    def has_pointer(self) -> bool:
        return self.pointer_location != NO_POINTER

    def record(self, delta: float, pointer_location: Vec2d) -> None:
        self.latest_delta = delta
        self.pointer_location = Vec2d(pointer_location.x, pointer_location.y)
