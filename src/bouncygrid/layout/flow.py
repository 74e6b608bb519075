"""Vertical flow grid that places fixed-size items in rows, section by section.

This is the un-animated base layout: it knows where every item rests and
nothing about springs. ``BouncyLayout`` queries it for the items that belong
in a region and attaches springs to them.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from pymunk import Vec2d

from bouncygrid.core.config import FlowConfig
from bouncygrid.core.geometry import EdgeInsets, ItemDescriptor, ItemId, Rect, Size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _SectionGeometry:
    index: int
    rows_top: float
    count: int
    rows: int


class FlowLayout:
    """Computes natural item frames for a container of a given width."""

    def __init__(self, config: Optional[FlowConfig] = None) -> None:
        config = config or FlowConfig()
        self._interitem_spacing = config.interitem_spacing
        self._line_spacing = config.line_spacing
        self._item_size = config.item_size
        self._section_inset = config.section_inset
        self._section_counts: List[int] = list(config.section_counts)

        self._container_width: Optional[float] = None
        self._dirty = True
        self._columns = 1
        self._column_x: List[float] = []
        self._sections: List[_SectionGeometry] = []
        self._content_height = 0.0

    # -- configurable properties ------------------------------------------------

    @property
    def interitem_spacing(self) -> float:
        return self._interitem_spacing

    @interitem_spacing.setter
    def interitem_spacing(self, value: float) -> None:
        if value < 0:
            raise ValueError(f"interitem_spacing must be >= 0, got {value}")
        self._interitem_spacing = float(value)
        self.invalidate()

    @property
    def line_spacing(self) -> float:
        return self._line_spacing

    @line_spacing.setter
    def line_spacing(self, value: float) -> None:
        if value < 0:
            raise ValueError(f"line_spacing must be >= 0, got {value}")
        self._line_spacing = float(value)
        self.invalidate()

    @property
    def item_size(self) -> Size:
        return self._item_size

    @item_size.setter
    def item_size(self, value: Size) -> None:
        if value.width <= 0 or value.height <= 0:
            raise ValueError(f"item_size must be positive, got {value}")
        self._item_size = value
        self.invalidate()

    @property
    def section_inset(self) -> EdgeInsets:
        return self._section_inset

    @section_inset.setter
    def section_inset(self, value: EdgeInsets) -> None:
        self._section_inset = value
        self.invalidate()

    @property
    def section_counts(self) -> List[int]:
        return list(self._section_counts)

    @section_counts.setter
    def section_counts(self, counts: Sequence[int]) -> None:
        if any(count < 0 for count in counts):
            raise ValueError(f"section counts must be >= 0, got {list(counts)}")
        self._section_counts = list(counts)
        self.invalidate()

    # -- geometry ----------------------------------------------------------------

    def invalidate(self) -> None:
        self._dirty = True

    def prepare(self, container_width: float) -> None:
        if not self._dirty and container_width == self._container_width:
            return

        inset = self._section_inset
        item_w = self._item_size.width
        item_h = self._item_size.height
        spacing = self._interitem_spacing
        available = container_width - inset.left - inset.right

        columns = max(1, int(math.floor((available + spacing) / (item_w + spacing))))
        if columns == 1:
            column_x = [inset.left + (available - item_w) / 2.0]
        else:
            # Justify: leftover width is spread evenly between the columns.
            gap = (available - columns * item_w) / (columns - 1)
            column_x = [inset.left + column * (item_w + gap) for column in range(columns)]

        sections = []
        top = 0.0
        for index, count in enumerate(self._section_counts):
            rows = int(math.ceil(count / columns)) if count else 0
            sections.append(_SectionGeometry(index=index, rows_top=top + inset.top, count=count, rows=rows))
            rows_height = rows * item_h + max(rows - 1, 0) * self._line_spacing
            top += inset.top + rows_height + inset.bottom

        self._container_width = container_width
        self._columns = columns
        self._column_x = column_x
        self._sections = sections
        self._content_height = top
        self._dirty = False
        logger.debug(
            "Flow prepared: width=%.1f columns=%d sections=%d height=%.1f",
            container_width, columns, len(sections), top,
        )

    def _require_prepared(self) -> None:
        if self._dirty or self._container_width is None:
            raise RuntimeError("FlowLayout.prepare() must be called before querying geometry")

    @property
    def columns(self) -> int:
        self._require_prepared()
        return self._columns

    def content_size(self) -> Size:
        self._require_prepared()
        return Size(self._container_width, self._content_height)

    def _descriptor(self, section: _SectionGeometry, index: int) -> ItemDescriptor:
        row, column = divmod(index, self._columns)
        item_w = self._item_size.width
        item_h = self._item_size.height
        x = self._column_x[column] + item_w / 2.0
        y = section.rows_top + row * (item_h + self._line_spacing) + item_h / 2.0
        return ItemDescriptor(id=ItemId(section.index, index), center=Vec2d(x, y), size=self._item_size)

    def frame_of(self, item_id: ItemId) -> Optional[Rect]:
        self._require_prepared()
        if not 0 <= item_id.section < len(self._sections):
            return None
        section = self._sections[item_id.section]
        if not 0 <= item_id.item < section.count:
            return None
        return self._descriptor(section, item_id.item).frame

    def items_in_region(self, rect: Rect) -> List[ItemDescriptor]:
        """Return natural descriptors for every item whose frame meets ``rect``."""
        self._require_prepared()
        pitch = self._item_size.height + self._line_spacing
        found: List[ItemDescriptor] = []
        for section in self._sections:
            if not section.rows:
                continue
            first_row = max(0, int(math.floor((rect.top - section.rows_top) / pitch)))
            last_row = min(section.rows - 1, int(math.floor((rect.bottom - section.rows_top) / pitch)))
            for row in range(first_row, last_row + 1):
                start = row * self._columns
                for index in range(start, min(start + self._columns, section.count)):
                    descriptor = self._descriptor(section, index)
                    if descriptor.frame.intersects(rect):
                        found.append(descriptor)
        return found
