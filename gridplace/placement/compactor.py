"""
Layout Compactor

Removes gaps along the compaction axis and keeps items inside the grid's
columns. Both passes work on a cloned working set, so the caller's items
are never modified.

Compaction process:
1. Static items are seeded as obstacles so everything else flows around them
2. Items are visited in compaction order (row-major for vertical,
   column-major for horizontal)
3. Each item is pulled toward the origin until it would collide
4. Remaining collisions push the item past the obstacle, cascading the push
   to later items that now overlap it
"""

import logging
from typing import List, Optional

from ..layout.abstraction import (
    CompactType,
    Layout,
    LayoutItem,
    bottom,
    clone_layout,
    clone_layout_item,
    get_statics,
)
from .collision import collides, get_first_collision
from .ordering import sort_layout_items
from .tracing import LayoutTracer, NULL_TRACER

logger = logging.getLogger(__name__)


def compact(
    layout: Layout,
    compact_type: CompactType,
    cols: int,
    allow_overlap: bool = False,
    tracer: Optional[LayoutTracer] = None,
) -> Layout:
    """
    Compact a layout, removing gaps between items.

    Args:
        layout: Layout to compact (not modified)
        compact_type: Compaction mode
        cols: Number of grid columns
        allow_overlap: Leave overlaps alone when compaction is disabled
        tracer: Optional diagnostics tracer

    Returns:
        New layout in the same order as the input, with moved flags cleared
    """
    compact_type = CompactType.parse(compact_type)
    tracer = tracer or NULL_TRACER

    working = clone_layout(layout)
    # Statics go in the comparison set right away so items flow around them
    compare_with: List[LayoutItem] = get_statics(working)
    sorted_items = sort_layout_items(working, compact_type)
    index_of = {id(item): index for index, item in enumerate(working)}
    out: List[Optional[LayoutItem]] = [None] * len(working)

    for item in sorted_items:
        placed = clone_layout_item(item)

        if not placed.static:
            old_x, old_y = placed.x, placed.y
            placed = compact_item(
                compare_with, placed, compact_type, cols, sorted_items, allow_overlap
            )
            # Items only collide with those placed before them
            compare_with.append(placed)
            if tracer.enabled and (placed.x, placed.y) != (old_x, old_y):
                tracer.emit(
                    "compact.item",
                    item=placed.i,
                    old_x=old_x,
                    old_y=old_y,
                    x=placed.x,
                    y=placed.y,
                )

        # Keep the caller's ordering
        out[index_of[id(item)]] = placed
        placed.moved = False

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Compaction done: mode=%s cols=%d items=%d statics=%d",
            compact_type.value,
            cols,
            len(out),
            sum(1 for item in out if item.static),
        )
    return out


def resolve_compaction_collision(
    layout: Layout,
    item: LayoutItem,
    move_to_coord: float,
    direction: CompactType,
):
    """
    Move item to move_to_coord along the axis of direction, first pushing
    any later item that the move would run into.

    layout must be sorted for that axis; the scan stops at the first later
    item that starts past item's far edge.
    """
    axis = direction.axis
    size_prop = direction.extent
    setattr(item, axis, getattr(item, axis) + 1)

    item_index = -1
    for index, other in enumerate(layout):
        if other.i == item.i:
            item_index = index
            break

    for other in layout[item_index + 1:]:
        if other.static:
            continue
        # Sorted layout: nothing further on can reach this item
        if getattr(other, axis) > getattr(item, axis) + getattr(item, size_prop):
            break
        if collides(item, other):
            resolve_compaction_collision(
                layout, other, move_to_coord + getattr(item, size_prop), direction
            )

    setattr(item, axis, move_to_coord)


def _pull_toward_origin(compare_with: Layout, item: LayoutItem, axis: str):
    """Move item toward 0 along axis as far as it can go without colliding."""
    while getattr(item, axis) > 0 and get_first_collision(compare_with, item) is None:
        setattr(item, axis, getattr(item, axis) - 1)


def compact_item(
    compare_with: Layout,
    item: LayoutItem,
    compact_type: CompactType,
    cols: int,
    full_layout: Layout,
    allow_overlap: bool = False,
) -> LayoutItem:
    """
    Compact a single item against the already placed items. Modifies item.

    Args:
        compare_with: Items already placed (statics first)
        item: Item to place
        compact_type: Compaction mode
        cols: Number of grid columns
        full_layout: Whole layout sorted in compaction order
        allow_overlap: Skip collision resolution when compaction is disabled
    """
    compact_type = CompactType.parse(compact_type)

    if compact_type is CompactType.VERTICAL:
        # Lowest y possible is the bottom of what is placed so far; this is
        # what lets callers request y=inf to drop an item at the bottom
        item.y = min(bottom(compare_with), item.y)
        _pull_toward_origin(compare_with, item, "y")
    elif compact_type is CompactType.HORIZONTAL:
        _pull_toward_origin(compare_with, item, "x")

    while True:
        collision = get_first_collision(compare_with, item)
        if collision is None:
            break
        if compact_type is CompactType.NONE and allow_overlap:
            break

        if compact_type is CompactType.HORIZONTAL:
            resolve_compaction_collision(
                full_layout, item, collision.x + collision.w, CompactType.HORIZONTAL
            )
        else:
            # Without compaction, collisions still resolve downward
            resolve_compaction_collision(
                full_layout, item, collision.y + collision.h, CompactType.VERTICAL
            )

        # Columns are finite: wrap onto the next row and retry
        if compact_type is CompactType.HORIZONTAL and item.x + item.w > cols:
            item.x = cols - item.w
            item.y += 1
            _pull_toward_origin(compare_with, item, "x")

    item.y = max(item.y, 0)
    item.x = max(item.x, 0)
    return item


def correct_bounds(layout: Layout, cols: int) -> Layout:
    """
    Make sure every item fits within the grid's columns.

    Items overflowing the right edge are shifted left; items starting left
    of the grid are reset to x=0 and full width. Static items that end up
    colliding are pushed down one row at a time, never sideways.

    Returns:
        Corrected copy of the layout
    """
    corrected = clone_layout(layout)
    collides_with = get_statics(corrected)

    for item in corrected:
        # Overflows right
        if item.x + item.w > cols:
            item.x = cols - item.w
        # Overflows left
        if item.x < 0:
            item.x = 0
            item.w = cols

        if not item.static:
            collides_with.append(item)
        else:
            while get_first_collision(collides_with, item) is not None:
                item.y += 1
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Static %s pushed down to y=%s", item.i, item.y)

    return corrected
