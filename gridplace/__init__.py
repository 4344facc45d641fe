"""
GridPlace - Grid Layout Engine

Places rectangular items on a column grid: converts between grid units and
pixels, detects overlaps, compacts layouts, resolves drag collisions by
displacing other items, and constrains resizes to the container.
"""

__version__ = "0.1.0"
__author__ = "GridPlace Team"

from .layout.abstraction import CompactType, Layout, LayoutItem, ResizeHandle
from .layout.geometry import GridParameters, Position
from .layout.validation import LayoutValidationError, validate_layout
from .placement.compactor import compact, correct_bounds
from .placement.move_engine import move_element
from .placement.resize import resize_item_in_direction
from .placement.synchronizer import GridChild, synchronize_layout_with_children
from .config import GridConfig, get_preset
from .api.session import GridSession

__all__ = [
    "CompactType",
    "Layout",
    "LayoutItem",
    "ResizeHandle",
    "GridParameters",
    "Position",
    "LayoutValidationError",
    "validate_layout",
    "compact",
    "correct_bounds",
    "move_element",
    "resize_item_in_direction",
    "GridChild",
    "synchronize_layout_with_children",
    "GridConfig",
    "get_preset",
    "GridSession",
]
