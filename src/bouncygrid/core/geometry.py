"""Geometry and item identity types shared by the layout and physics layers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from pymunk import Vec2d


@dataclass(frozen=True, order=True)
class ItemId:
    section: int
    item: int

    def __str__(self) -> str:
        return f"{self.section}.{self.item}"


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.width, self.height)


@dataclass(frozen=True)
class EdgeInsets:
    top: float = 0.0
    left: float = 0.0
    bottom: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "EdgeInsets":
        return cls(top=value, left=value, bottom=value, right=value)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in y-down view coordinates."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_center(cls, center: Vec2d, size: Size) -> "Rect":
        return cls(
            x=center.x - size.width / 2.0,
            y=center.y - size.height / 2.0,
            width=size.width,
            height=size.height,
        )

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def origin(self) -> Vec2d:
        return Vec2d(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def center(self) -> Vec2d:
        return Vec2d(self.x + self.width / 2.0, self.y + self.height / 2.0)

    def inset_by(self, dx: float, dy: float) -> "Rect":
        """Shrink by dx/dy on every side; negative values grow the rect."""
        return Rect(
            x=self.x + dx,
            y=self.y + dy,
            width=self.width - 2.0 * dx,
            height=self.height - 2.0 * dy,
        )

    def with_origin(self, origin: Vec2d) -> "Rect":
        return Rect(x=origin.x, y=origin.y, width=self.width, height=self.height)

    def intersects(self, other: "Rect") -> bool:
        return (
            self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )

    def contains_point(self, point: Vec2d) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom


@dataclass
class ItemDescriptor:
    """An item's identity plus its center and size.

    Descriptors handed out by the flow layout carry the natural position;
    the copy given to the spring engine is mutated as the item moves.
    """

    id: ItemId
    center: Vec2d
    size: Size = field(default_factory=lambda: Size(44.0, 44.0))

    @property
    def frame(self) -> Rect:
        return Rect.from_center(self.center, self.size)

    def copy(self, center: Optional[Vec2d] = None) -> "ItemDescriptor":
        return ItemDescriptor(
            id=self.id,
            center=self.center if center is None else Vec2d(center.x, center.y),
            size=self.size,
        )
