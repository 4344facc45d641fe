"""
Grid Geometry

Converts between pixel rectangles and grid units for a given set of grid
parameters. Margins are only added between units, never around them; the
container padding offsets the whole grid.

Rounding follows the convention of the rendering side (halves round toward
positive infinity) so that a position converted to pixels and back lands on
the same grid cell.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .abstraction import ResizeHandle

WEST_HANDLES = {h.value for h in ResizeHandle if h.is_west}
NORTH_HANDLES = {h.value for h in ResizeHandle if h.is_north}


@dataclass(frozen=True)
class GridParameters:
    """Parameters of the grid needed for coordinate calculations."""
    margin: Tuple[float, float] = (10, 10)  # px between items (horizontal, vertical)
    container_padding: Tuple[float, float] = (10, 10)  # px around the grid
    container_width: float = 1200.0  # px
    cols: int = 12
    row_height: float = 150.0  # px
    max_rows: float = math.inf


@dataclass
class Position:
    """Pixel rectangle relative to the container."""
    top: float
    left: float
    width: float
    height: float


@dataclass
class DragState:
    """Exact pixel offset reported while an item is being dragged."""
    top: float
    left: float


@dataclass
class ResizeState:
    """Exact pixel size (and optionally offset) reported while resizing."""
    width: float
    height: float
    top: Optional[float] = None
    left: Optional[float] = None


@dataclass
class ItemState:
    """Active drag/resize overrides for a single item."""
    dragging: Optional[DragState] = None
    resizing: Optional[ResizeState] = None


def _round(value: float) -> float:
    """Round half toward positive infinity; non-finite values pass through."""
    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))


def clamp(num: float, lower_bound: float, upper_bound: float) -> float:
    return max(min(num, upper_bound), lower_bound)


def calc_grid_col_width(params: GridParameters) -> float:
    """Width of a single column in pixels (unrounded)."""
    margin_x = params.margin[0]
    padding_x = params.container_padding[0]
    return (params.container_width - margin_x * (params.cols - 1) - padding_x * 2) / params.cols


def calc_grid_item_wh_px(grid_units: float, col_or_row_size: float, margin_px: float) -> float:
    """
    Convert a width or height in grid units to pixels.

    Called as calc_grid_item_wh_px(w, col_width, margin[0]) or
    calc_grid_item_wh_px(h, row_height, margin[1]).
    """
    # 0 * inf is nan, which breaks resize constraints downstream
    if not math.isfinite(grid_units):
        return grid_units
    return _round(col_or_row_size * grid_units + max(0, grid_units - 1) * margin_px)


def calc_grid_item_position(
    params: GridParameters,
    x: float,
    y: float,
    w: float,
    h: float,
    state: Optional[ItemState] = None,
) -> Position:
    """
    Return the pixel rectangle for an item at (x, y) of size (w, h).

    Active drag/resize state overrides the computed values: a resize supplies
    exact width/height (and top/left when both are numbers), a drag supplies
    exact top/left.
    """
    margin_x, margin_y = params.margin
    padding_x, padding_y = params.container_padding
    col_width = calc_grid_col_width(params)

    resizing = state.resizing if state else None
    dragging = state.dragging if state else None

    if resizing is not None:
        width = _round(resizing.width)
        height = _round(resizing.height)
    else:
        width = calc_grid_item_wh_px(w, col_width, margin_x)
        height = calc_grid_item_wh_px(h, params.row_height, margin_y)

    if dragging is not None:
        top = _round(dragging.top)
        left = _round(dragging.left)
    elif resizing is not None and resizing.top is not None and resizing.left is not None:
        top = _round(resizing.top)
        left = _round(resizing.left)
    else:
        top = _round((params.row_height + margin_y) * y + padding_y)
        left = _round((col_width + margin_x) * x + padding_x)

    return Position(top=top, left=left, width=width, height=height)


def calc_xy(
    params: GridParameters,
    top: float,
    left: float,
    w: float,
    h: float,
) -> Tuple[float, float]:
    """
    Translate a pixel offset to grid coordinates.

    Inverts the top/left formulas of calc_grid_item_position, then caps the
    result so the item stays within the columns and max_rows.

    Returns:
        (x, y) in grid units
    """
    margin_x, margin_y = params.margin
    padding_x, padding_y = params.container_padding
    col_width = calc_grid_col_width(params)

    x = _round((left - padding_x) / (col_width + margin_x))
    y = _round((top - padding_y) / (params.row_height + margin_y))

    x = clamp(x, 0, params.cols - w)
    y = clamp(y, 0, params.max_rows - h)
    return x, y


def calc_wh(
    params: GridParameters,
    width: float,
    height: float,
    x: float,
    y: float,
    handle: Union[ResizeHandle, str, None] = None,
) -> Tuple[float, float]:
    """
    Translate a pixel size to grid units.

    West and north handles move the item's origin along with its size, so
    their axis is capped by the full grid rather than the space left after x/y.

    Returns:
        (w, h) in grid units
    """
    margin_x, margin_y = params.margin
    col_width = calc_grid_col_width(params)

    w = _round((width + margin_x) / (col_width + margin_x))
    h = _round((height + margin_y) / (params.row_height + margin_y))

    capped_w = clamp(w, 0, params.cols - x)
    capped_h = clamp(h, 0, params.max_rows - y)

    handle_value = handle.value if isinstance(handle, ResizeHandle) else handle
    if handle_value in WEST_HANDLES:
        capped_w = clamp(w, 0, params.cols)
    if handle_value in NORTH_HANDLES:
        capped_h = clamp(h, 0, params.max_rows)
    return capped_w, capped_h


def fast_position_equal(a: Position, b: Position) -> bool:
    return (
        a.left == b.left
        and a.top == b.top
        and a.width == b.width
        and a.height == b.height
    )
