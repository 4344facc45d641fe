"""Layout data model: items, grid geometry and validation."""

from .abstraction import (
    CompactType,
    Layout,
    LayoutItem,
    ResizeHandle,
    bottom,
    clone_layout,
    clone_layout_item,
    get_layout_item,
    get_statics,
    modify_layout,
    resolve_compact_type,
    with_layout_item,
)
from .geometry import (
    DragState,
    GridParameters,
    ItemState,
    Position,
    ResizeState,
    calc_grid_col_width,
    calc_grid_item_position,
    calc_grid_item_wh_px,
    calc_wh,
    calc_xy,
    clamp,
    fast_position_equal,
)
from .validation import LayoutValidationError, validate_layout

__all__ = [
    # Data model
    "CompactType",
    "Layout",
    "LayoutItem",
    "ResizeHandle",
    "bottom",
    "clone_layout",
    "clone_layout_item",
    "get_layout_item",
    "get_statics",
    "modify_layout",
    "resolve_compact_type",
    "with_layout_item",
    # Geometry
    "DragState",
    "GridParameters",
    "ItemState",
    "Position",
    "ResizeState",
    "calc_grid_col_width",
    "calc_grid_item_position",
    "calc_grid_item_wh_px",
    "calc_wh",
    "calc_xy",
    "clamp",
    "fast_position_equal",
    # Validation
    "LayoutValidationError",
    "validate_layout",
]
