"""Spring-animated flow layout.

Items inside an overscanned copy of the viewport are each tied to their
natural position by a damped spring. Scrolling nudges the attached items off
their anchors in proportion to their distance from the pointer, and the
springs pull them back, giving the grid its rubber-sheet feel.
"""
from __future__ import annotations

import logging
from typing import Dict, FrozenSet, List, Optional, Protocol, Sequence

from pymunk import Vec2d

from bouncygrid.core.config import FlowConfig, LayoutConfig
from bouncygrid.core.geometry import EdgeInsets, ItemDescriptor, ItemId, Rect, Size
from bouncygrid.layout.flow import FlowLayout
from bouncygrid.layout.window import WindowTracker
from bouncygrid.physics.perturbation import ScrollState, compute_offset
from bouncygrid.physics.springs import SpringAttachment, SpringEngine

logger = logging.getLogger(__name__)


class Viewport(Protocol):
    @property
    def bounds(self) -> Rect: ...

    @property
    def pointer_location(self) -> Vec2d: ...


class BouncyLayout:
    def __init__(
        self,
        flow_config: Optional[FlowConfig] = None,
        layout_config: Optional[LayoutConfig] = None,
        engine: Optional[SpringEngine] = None,
    ) -> None:
        self.config = layout_config or LayoutConfig()
        self.flow = FlowLayout(flow_config)
        self.engine = engine if engine is not None else SpringEngine()
        self.tracker = WindowTracker()
        self.scroll_state = ScrollState()
        self.viewport: Optional[Viewport] = None

    # -- lifecycle ---------------------------------------------------------------

    def attach(self, viewport: Viewport) -> None:
        self.viewport = viewport
        self.flow.invalidate()

    def detach(self) -> None:
        """Drop the viewport and tear down every attachment."""
        self._release_attachments()
        self.viewport = None
        self.scroll_state = ScrollState()

    def _release_attachments(self) -> None:
        released = self.tracker.clear()
        for item_id in sorted(released):
            self.engine.remove_attachment(item_id)
        if released:
            logger.debug("Released %d attachments", len(released))

    def invalidate(self) -> None:
        """Forget every natural position; the next pass re-anchors all items."""
        self.flow.invalidate()
        self._release_attachments()

    def reload(self, section_counts: Sequence[int]) -> None:
        self.flow.section_counts = section_counts
        self.invalidate()
        self.prepare_pass()

    @property
    def visible_items(self) -> FrozenSet[ItemId]:
        return self.tracker.visible

    # -- flow pass-through -------------------------------------------------------

    @property
    def interitem_spacing(self) -> float:
        return self.flow.interitem_spacing

    @interitem_spacing.setter
    def interitem_spacing(self, value: float) -> None:
        self.flow.interitem_spacing = value
        self.invalidate()

    @property
    def line_spacing(self) -> float:
        return self.flow.line_spacing

    @line_spacing.setter
    def line_spacing(self, value: float) -> None:
        self.flow.line_spacing = value
        self.invalidate()

    @property
    def item_size(self) -> Size:
        return self.flow.item_size

    @item_size.setter
    def item_size(self, value: Size) -> None:
        self.flow.item_size = value
        self.invalidate()

    @property
    def section_inset(self) -> EdgeInsets:
        return self.flow.section_inset

    @section_inset.setter
    def section_inset(self, value: EdgeInsets) -> None:
        self.flow.section_inset = value
        self.invalidate()

    def content_size(self) -> Optional[Size]:
        if self.viewport is None:
            return None
        self.flow.prepare(self.viewport.bounds.width)
        return self.flow.content_size()

    # -- passes ------------------------------------------------------------------

    def prepare_pass(self) -> None:
        """Bring the set of spring attachments in line with the viewport."""
        if self.viewport is None:
            return

        bounds = self.viewport.bounds
        self.flow.prepare(bounds.width)
        margin = self.config.overscan_margin
        region = bounds.inset_by(-margin, -margin)

        diff = self.tracker.reconcile(self.flow.items_in_region(region))
        if diff.is_empty:
            return

        for item_id in sorted(diff.to_remove):
            self.engine.remove_attachment(item_id)

        delta = self.scroll_state.latest_delta
        pointer = self.scroll_state.pointer_location
        created: Dict[ItemId, SpringAttachment] = {}
        for descriptor in diff.to_add:
            anchor = descriptor.center
            y = compute_offset(anchor.y, delta, anchor, pointer, self.config.resistance_divisor)
            item = descriptor.copy(center=Vec2d(anchor.x, y))
            created[descriptor.id] = self.engine.create_attachment(
                item, anchor, self.config.spring_length, self.config.spring_damping
            )

        self.tracker.commit(diff, created)
        logger.debug(
            "Layout pass: -%d +%d attachments, %d live",
            len(diff.to_remove), len(diff.to_add), len(self.tracker),
        )

    def on_viewport_shift(self, new_origin: Vec2d) -> bool:
        """
        Nudge every attached item for a change of viewport origin.

        Called before the viewport adopts ``new_origin``. Items are moved in
        place and the springs settle them; a full pass is never requested.

        Returns:
            Always False
        """
        if self.viewport is None:
            return False

        delta = new_origin.y - self.viewport.bounds.y
        self.scroll_state.record(delta, self.viewport.pointer_location)
        pointer = self.scroll_state.pointer_location

        for item_id, attachment in self.tracker.bound():
            center = attachment.item.center
            y = compute_offset(center.y, delta, attachment.anchor, pointer, self.config.resistance_divisor)
            attachment.item.center = Vec2d(center.x, y)
            self.engine.notify_state_changed(item_id)
        return False

    # -- queries -----------------------------------------------------------------

    def positions_in_region(self, rect: Rect) -> List[ItemDescriptor]:
        """Snapshot id, current center and size of attached items meeting ``rect``."""
        found = []
        for attachment in self.engine.items_in_region(rect):
            if not isinstance(attachment, SpringAttachment):
                continue
            if attachment.item.id not in self.tracker:
                continue
            found.append(attachment.item.copy(center=attachment.position))
        return found

    def position_of(self, item_id: ItemId) -> Optional[Vec2d]:
        if item_id not in self.tracker:
            return None
        position = self.engine.position_of(item_id)
        if not isinstance(position, Vec2d):
            return None
        return position
