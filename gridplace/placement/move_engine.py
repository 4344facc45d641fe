"""
Move Engine

Resolves a single position change of one item, cascading displacement to
every item it runs into.

Cascade rules:
- The item is placed at its target and flagged as moved
- Colliding items are visited nearest first (the traversal order is
  reversed when the move heads toward the origin)
- Each colliding item is displaced away from the mover; a static item
  cannot be displaced, so the mover yields to it instead
- An item already moved during this cascade is never displaced again,
  which is what bounds the recursion on rings of mutually colliding items

Only the primary, user-triggered collision tries to swap the displaced item
into the free space the mover came from; deeper collisions simply push one
unit further along the compaction axis.
"""

import logging
from typing import Optional, Union

from ..layout.abstraction import (
    CompactType,
    Layout,
    LayoutItem,
    clone_layout,
    clone_layout_item,
    get_layout_item,
)
from .collision import get_all_collisions, get_first_collision
from .ordering import sort_layout_items, sort_layout_items_by_row_col
from .tracing import LayoutTracer, NULL_TRACER

logger = logging.getLogger(__name__)

PROBE_ID = "__probe__"


class MoveEngine:
    """
    Cascading move resolution for one compaction mode and column count.

    The engine mutates the items of the layout it is given; callers hand it
    a working copy (see move_element below for the public entry point).
    """

    def __init__(self, compact_type: Union[CompactType, str, None] = CompactType.VERTICAL,
                 cols: int = 12, tracer: Optional[LayoutTracer] = None):
        self.compact_type = CompactType.parse(compact_type)
        self.cols = cols
        self.tracer = tracer or NULL_TRACER

    def move_element(
        self,
        layout: Layout,
        item: LayoutItem,
        x: Optional[float] = None,
        y: Optional[float] = None,
        is_user_action: bool = False,
        prevent_collision: bool = False,
        allow_overlap: bool = False,
    ) -> Layout:
        """
        Move item to (x, y) and push colliding items out of the way.

        A coordinate left as None keeps its current value.

        Returns:
            The resulting layout. This is the input list itself when nothing
            changed, and may be a re-sorted list after an uncompacted swap.
        """
        # Static items can only move when explicitly marked draggable
        if item.static and item.is_draggable is not True:
            return layout

        if item.y == y and item.x == x:
            return layout

        if self.tracer.enabled:
            self.tracer.emit("move.start", item=item.i, from_x=item.x, from_y=item.y, x=x, y=y)
        old_x, old_y = item.x, item.y

        if x is not None:
            item.x = x
        if y is not None:
            item.y = y
        item.moved = True

        # Sort so that, with several collisions, the nearest is resolved first
        sorted_items = sort_layout_items(layout, self.compact_type)
        if self._moving_toward_origin(old_x, old_y, x, y):
            sorted_items = list(reversed(sorted_items))
        no_compact_moving_up = (
            self.compact_type is CompactType.NONE and y is not None and old_y >= y
        )

        collisions = get_all_collisions(sorted_items, item)

        if collisions and allow_overlap:
            # Nothing to resolve, but the layout did change
            return clone_layout(layout)

        if collisions and prevent_collision:
            # Send the item back where it came from rather than to the target
            self.tracer.emit("move.prevented", item=item.i, x=old_x, y=old_y)
            item.x = old_x
            item.y = old_y
            item.moved = False
            return layout

        for collision in collisions:
            if self.tracer.enabled:
                self.tracer.emit(
                    "move.collision",
                    item=item.i,
                    x=item.x,
                    y=item.y,
                    other=collision.i,
                    other_x=collision.x,
                    other_y=collision.y,
                )

            # Already displaced in this cascade
            if collision.moved:
                continue

            if collision.static:
                # Static items stay put; this item has to yield
                layout = self.move_element_away_from_collision(
                    layout, collision, item, is_user_action, no_compact_moving_up
                )
            else:
                layout = self.move_element_away_from_collision(
                    layout, item, collision, is_user_action, no_compact_moving_up
                )

        return layout

    def move_element_away_from_collision(
        self,
        layout: Layout,
        collides_with: LayoutItem,
        item_to_move: LayoutItem,
        is_user_action: bool,
        no_compact_moving_up: bool = False,
    ) -> Layout:
        """
        Displace item_to_move so it no longer overlaps collides_with.

        On the primary collision the displaced item is first offered the
        space just before collides_with along the compaction axis; otherwise
        it is pushed one unit further along the axis.
        """
        compact_type = self.compact_type
        # Pushing against a static item must not overlap it again
        prevent_collision = collides_with.static

        if is_user_action:
            # Only the main collision gets the swap treatment
            is_user_action = False

            probe = self._probe_item(collides_with, item_to_move, no_compact_moving_up)
            first_collision = get_first_collision(layout, probe)

            if first_collision is None:
                self.tracer.emit(
                    "move.reverse", item=item_to_move.i, x=probe.x, y=probe.y
                )
                if compact_type is CompactType.NONE and not no_compact_moving_up:
                    return self.move_element(
                        layout, item_to_move, None, probe.y,
                        is_user_action, prevent_collision,
                    )
                return self.move_element(
                    layout,
                    item_to_move,
                    probe.x if compact_type is CompactType.HORIZONTAL else None,
                    probe.y if compact_type is CompactType.VERTICAL else None,
                    is_user_action,
                    prevent_collision,
                )

            collision_north = first_collision.y + first_collision.h > collides_with.y
            collision_west = collides_with.x + collides_with.w > first_collision.x

            if collision_north and compact_type is CompactType.VERTICAL:
                return self.move_element(
                    layout, item_to_move, None, collides_with.y + 1,
                    is_user_action, prevent_collision,
                )
            if collision_north and compact_type is CompactType.NONE:
                return self._resolve_uncompacted_collision(
                    layout, collides_with, item_to_move, prevent_collision, no_compact_moving_up
                )
            if collision_west and compact_type is CompactType.HORIZONTAL:
                return self.move_element(
                    layout, collides_with, item_to_move.x, None,
                    is_user_action, prevent_collision,
                )

        axis = compact_type.axis
        if axis is None:
            return layout

        new_x = item_to_move.x + 1 if axis == "x" else None
        new_y = item_to_move.y + 1 if axis == "y" else None
        return self.move_element(
            layout, item_to_move, new_x, new_y, is_user_action, prevent_collision
        )

    def _resolve_uncompacted_collision(
        self,
        layout: Layout,
        collides_with: LayoutItem,
        item_to_move: LayoutItem,
        prevent_collision: bool,
        moving_up: bool,
    ) -> Layout:
        """
        North collision with compaction disabled.

        Moving up: the displaced item drops directly below collides_with.
        Moving down: the displaced item steps down one row, leaving room for
        the mover to keep travelling. Either way the layout is re-sorted by
        row and column so the external order stays stable.
        """
        if moving_up:
            item_to_move.y = collides_with.y + collides_with.h
            self.tracer.emit("move.swap", item=item_to_move.i, y=item_to_move.y)
        else:
            self.move_element(
                layout, item_to_move, None, item_to_move.y + 1,
                False, prevent_collision,
            )
        return sort_layout_items_by_row_col(layout)

    def _moving_toward_origin(self, old_x: float, old_y: float,
                              x: Optional[float], y: Optional[float]) -> bool:
        """Whether the move heads toward the origin along the compaction axis."""
        axis = self.compact_type.axis
        if axis == "y" and y is not None:
            return old_y >= y
        if axis == "x" and x is not None:
            return old_x >= x
        return False

    def _probe_item(self, collides_with: LayoutItem, item_to_move: LayoutItem,
                    no_compact_moving_up: bool) -> LayoutItem:
        """Hypothetical placement of item_to_move just before collides_with."""
        compact_type = self.compact_type
        if compact_type is CompactType.NONE and not no_compact_moving_up:
            x = item_to_move.x
            y = max(collides_with.y - item_to_move.h, 0)
        else:
            if compact_type is CompactType.HORIZONTAL:
                x = max(collides_with.x - item_to_move.w, 0)
            else:
                x = item_to_move.x
            if compact_type is CompactType.VERTICAL:
                y = max(collides_with.y - item_to_move.h, 0)
            else:
                y = item_to_move.y
        return LayoutItem(i=PROBE_ID, x=x, y=y, w=item_to_move.w, h=item_to_move.h)


def move_element(
    layout: Layout,
    item: Union[LayoutItem, str],
    x: Optional[float] = None,
    y: Optional[float] = None,
    is_user_action: bool = False,
    prevent_collision: bool = False,
    compact_type: Union[CompactType, str, None] = CompactType.VERTICAL,
    cols: int = 12,
    allow_overlap: bool = False,
    tracer: Optional[LayoutTracer] = None,
) -> Layout:
    """
    Move one item and resolve the resulting cascade.

    The caller's layout and items are never modified. When nothing changes
    (static item, same position, unknown id, or a collision blocked by
    prevent_collision) the input layout itself is returned.

    Args:
        layout: Current layout
        item: The item (or its id) to move
        x, y: Target grid coordinates; None keeps the current value
        is_user_action: Move comes straight from user input
        prevent_collision: Refuse moves that would collide
        compact_type: Compaction mode driving the cascade direction
        cols: Number of grid columns
        allow_overlap: Place the item at its target without displacing others
        tracer: Optional diagnostics tracer

    Returns:
        Resulting layout with moved flags cleared
    """
    item_id = item.i if isinstance(item, LayoutItem) else str(item)
    current = get_layout_item(layout, item_id)
    if current is None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Move ignored: %s not in layout", item_id)
        return layout

    if current.static and current.is_draggable is not True:
        return layout
    if current.x == x and current.y == y:
        return layout

    if prevent_collision and not allow_overlap:
        target = clone_layout_item(current)
        if x is not None:
            target.x = x
        if y is not None:
            target.y = y
        if get_all_collisions(layout, target):
            if tracer is not None:
                tracer.emit("move.prevented", item=item_id, x=current.x, y=current.y)
            return layout

    working = clone_layout(layout)
    for working_item in working:
        working_item.moved = False

    engine = MoveEngine(compact_type, cols, tracer)
    result = engine.move_element(
        working,
        get_layout_item(working, item_id),
        x,
        y,
        is_user_action,
        prevent_collision,
        allow_overlap,
    )

    for result_item in result:
        result_item.moved = False
    return result
