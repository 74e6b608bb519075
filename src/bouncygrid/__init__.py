"""Spring-animated flow grid for scrollable collections of fixed-size items."""
from bouncygrid.core.geometry import EdgeInsets, ItemDescriptor, ItemId, Rect, Size
from bouncygrid.layout.bouncy import BouncyLayout
from bouncygrid.layout.flow import FlowLayout
from bouncygrid.physics.perturbation import NO_POINTER, ScrollState, compute_offset
from bouncygrid.physics.springs import SpringAttachment, SpringEngine

__version__ = "0.1.0"

__all__ = [
    "BouncyLayout",
    "EdgeInsets",
    "FlowLayout",
    "ItemDescriptor",
    "ItemId",
    "NO_POINTER",
    "Rect",
    "ScrollState",
    "Size",
    "SpringAttachment",
    "SpringEngine",
    "compute_offset",
]
