"""
Shared test fixtures for bouncygrid tests.

Provides flow/layout configs, a call-recording spring engine and a
minimal viewport so the layout can be driven without a window.
"""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from typing import List, Tuple

import pytest
from pymunk import Vec2d

from bouncygrid.core.config import FlowConfig, LayoutConfig, SpringConfig
from bouncygrid.core.geometry import EdgeInsets, ItemId, Rect, Size
from bouncygrid.layout.bouncy import BouncyLayout
from bouncygrid.physics.perturbation import NO_POINTER
from bouncygrid.physics.springs import SpringEngine


class RecordingEngine(SpringEngine):
    """SpringEngine that keeps a log of every call the layout makes."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls: List[Tuple[str, ItemId]] = []

    def create_attachment(self, item, anchor, length, damping):
        self.calls.append(("create", item.id))
        return super().create_attachment(item, anchor, length, damping)

    def remove_attachment(self, item_id):
        self.calls.append(("remove", item_id))
        super().remove_attachment(item_id)

    def notify_state_changed(self, item_id):
        self.calls.append(("notify", item_id))
        super().notify_state_changed(item_id)

    def calls_of(self, kind: str) -> List[ItemId]:
        return [item_id for name, item_id in self.calls if name == kind]

    def reset_calls(self) -> None:
        self.calls.clear()


class FakeViewport:
    """Viewport whose bounds and pointer the test sets directly."""

    def __init__(self, bounds: Rect, pointer: Vec2d = NO_POINTER):
        self.bounds = bounds
        self.pointer_location = pointer

    def shift_to(self, layout: BouncyLayout, origin: Vec2d) -> bool:
        invalidate = layout.on_viewport_shift(origin)
        self.bounds = self.bounds.with_origin(origin)
        return invalidate


@pytest.fixture
def flow_config() -> FlowConfig:
    """Five 44pt columns across a 320pt container, 10 items in one section."""
    return FlowConfig(
        interitem_spacing=10.0,
        line_spacing=10.0,
        item_size=Size(44.0, 44.0),
        section_inset=EdgeInsets.uniform(10.0),
        section_counts=(10,),
    )


@pytest.fixture
def layout_config() -> LayoutConfig:
    return LayoutConfig()


@pytest.fixture
def engine() -> RecordingEngine:
    return RecordingEngine(SpringConfig())


@pytest.fixture
def layout(flow_config, layout_config, engine) -> BouncyLayout:
    return BouncyLayout(flow_config=flow_config, layout_config=layout_config, engine=engine)


@pytest.fixture
def tall_layout(layout_config, engine) -> BouncyLayout:
    """Layout with enough rows to scroll through: 100 rows of 5 items."""
    config = FlowConfig(section_counts=(500,))
    return BouncyLayout(flow_config=config, layout_config=layout_config, engine=engine)
