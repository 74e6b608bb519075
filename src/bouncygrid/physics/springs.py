"""Spring attachment engine built on a pymunk space.

Every attachment is a massive, non-rotating body for the item and a
``pymunk.DampedSpring`` tying it to a fixed anchor on the space's static body.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

import pymunk
from pymunk import Vec2d

from bouncygrid.core.config import SpringConfig
from bouncygrid.core.geometry import ItemDescriptor, ItemId, Rect

logger = logging.getLogger(__name__)


@dataclass
class SpringAttachment:
    item: ItemDescriptor
    anchor: Vec2d
    length: float
    damping: float
    body: pymunk.Body
    spring: pymunk.DampedSpring

    @property
    def item_id(self) -> ItemId:
        return self.item.id

    @property
    def position(self) -> Vec2d:
        return self.body.position


class SpringEngine:
    """Owns a pymunk space and the spring attachments living in it."""

    def __init__(self, config: Optional[SpringConfig] = None, space: Optional[pymunk.Space] = None) -> None:
        self.config = config or SpringConfig()
        self.space = space if space is not None else pymunk.Space()
        self._attachments: Dict[ItemId, SpringAttachment] = {}

    def __len__(self) -> int:
        return len(self._attachments)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._attachments

    def __iter__(self) -> Iterator[SpringAttachment]:
        return iter(list(self._attachments.values()))

    def _spring_constants(self, damping_ratio: float):
        mass = self.config.item_mass
        omega = 2.0 * math.pi * self.config.frequency
        stiffness = mass * omega * omega
        damping = 2.0 * damping_ratio * mass * omega
        return stiffness, damping

    def create_attachment(
        self,
        item: ItemDescriptor,
        anchor: Vec2d,
        length: float,
        damping: float,
    ) -> SpringAttachment:
        """
        Attach ``item`` to ``anchor`` with a damped spring.

        The body starts wherever ``item.center`` is, so a perturbed item
        animates from there toward the anchor.

        Args:
            item: Descriptor the engine takes ownership of
            anchor: Resting point in content coordinates
            length: Spring rest length
            damping: Damping ratio (1.0 is critically damped)

        Returns:
            Handle for the new attachment
        """
        if item.id in self._attachments:
            raise ValueError(f"item {item.id} already has a spring attachment")

        stiffness, damping_coefficient = self._spring_constants(damping)
        body = pymunk.Body(self.config.item_mass, float("inf"))
        body.position = item.center
        spring = pymunk.DampedSpring(
            body,
            self.space.static_body,
            (0, 0),
            (anchor.x, anchor.y),
            length,
            stiffness,
            damping_coefficient,
        )
        self.space.add(body, spring)

        attachment = SpringAttachment(
            item=item,
            anchor=Vec2d(anchor.x, anchor.y),
            length=length,
            damping=damping,
            body=body,
            spring=spring,
        )
        self._attachments[item.id] = attachment
        return attachment

    def remove_attachment(self, item_id: ItemId) -> None:
        attachment = self._attachments.pop(item_id, None)
        if attachment is None:
            raise KeyError(item_id)
        self.space.remove(attachment.spring, attachment.body)

    def notify_state_changed(self, item_id: ItemId) -> None:
        """Push the item's current center into its body; velocity is kept."""
        attachment = self._attachments.get(item_id)
        if attachment is None:
            raise KeyError(item_id)
        attachment.body.position = attachment.item.center

    def attachment(self, item_id: ItemId) -> Optional[SpringAttachment]:
        return self._attachments.get(item_id)

    def step(self, dt: float) -> None:
        if dt <= 0:
            return
        dt = min(dt, self.config.max_frame_time)
        steps = max(1, int(math.ceil(dt / self.config.physics_step)))
        sub_dt = dt / steps
        for _ in range(steps):
            self.space.step(sub_dt)
        for attachment in self._attachments.values():
            attachment.item.center = attachment.body.position

    def items_in_region(self, rect: Rect) -> List[SpringAttachment]:
        found = [
            attachment
            for attachment in self._attachments.values()
            if Rect.from_center(attachment.body.position, attachment.item.size).intersects(rect)
        ]
        found.sort(key=lambda attachment: attachment.item.id)
        return found

    def position_of(self, item_id: ItemId) -> Optional[Vec2d]:
        attachment = self._attachments.get(item_id)
        if attachment is None:
            return None
        return attachment.body.position

    def is_settled(self, tolerance: float = 0.5) -> bool:
        for attachment in self._attachments.values():
            body = attachment.body
            stretch = body.position.get_distance(attachment.anchor) - attachment.length
            if stretch > tolerance or body.velocity.length > tolerance:
                return False
        return True

    def clear(self) -> None:
        for item_id in list(self._attachments):
            self.remove_attachment(item_id)
        logger.debug("Spring engine cleared")
