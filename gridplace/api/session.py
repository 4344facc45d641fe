"""
GridPlace Session State Management

Owns the current layout of one grid and applies one interaction at a time
(a drag tick, a resize tick, an add or a remove). Each interaction clones
the current layout, applies its mutation, runs the engine, and keeps the
result as the new source of truth. Previous layouts are kept for undo/redo.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..config import GridConfig
from ..layout.abstraction import (
    CompactType,
    Layout,
    LayoutItem,
    ResizeHandle,
    bottom,
    clone_layout,
    get_layout_item,
    with_layout_item,
)
from ..layout.geometry import (
    GridParameters,
    ItemState,
    Position,
    calc_grid_item_position,
    calc_wh,
    calc_xy,
    clamp,
)
from ..layout.validation import validate_layout
from ..placement.collision import get_all_collisions
from ..placement.compactor import compact, correct_bounds
from ..placement.move_engine import move_element
from ..placement.resize import resize_item_in_direction
from ..placement.synchronizer import GridChild, synchronize_layout_with_children
from ..placement.tracing import LayoutTracer

logger = logging.getLogger(__name__)


@dataclass
class LayoutSnapshot:
    """Layout state for undo/redo."""
    layout: Layout
    description: str = ""


class GridSession:
    """
    Manages the lifecycle of a grid editing session.

    Provides:
    - Drag/resize interactions in grid units or pixels
    - Structural add/remove of items
    - Undo/redo stack
    - Dirty state tracking

    Interaction methods return True when the layout changed.
    """

    MAX_UNDO_STACK = 50

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        layout: Optional[Sequence[Union[LayoutItem, Mapping[str, Any]]]] = None,
        container_width: float = 1200.0,
        tracer: Optional[LayoutTracer] = None,
    ):
        self.config = config or GridConfig()
        self.container_width = container_width
        self.tracer = tracer
        self.layout: Layout = []
        self._undo_stack: List[LayoutSnapshot] = []
        self._redo_stack: List[LayoutSnapshot] = []
        self._dirty = False

        if layout:
            self.layout = self._settle(self._to_items(layout, "GridSession.layout"))

    @property
    def position_params(self) -> GridParameters:
        return self.config.position_params(self.container_width)

    @property
    def compact_type(self) -> CompactType:
        return self.config.effective_compact_type

    @property
    def is_dirty(self) -> bool:
        """Check if the layout changed since the session started."""
        return self._dirty

    def get_item(self, item_id: str) -> Optional[LayoutItem]:
        """Get a layout item by id. Treat the returned item as read-only."""
        return get_layout_item(self.layout, item_id)

    def item_position(self, item_id: str, state: Optional[ItemState] = None) -> Position:
        """Pixel rectangle of an item."""
        item = self._require(item_id)
        return calc_grid_item_position(
            self.position_params, item.x, item.y, item.w, item.h, state
        )

    # ------------------------------------------------------------------
    # Interactions
    # ------------------------------------------------------------------

    def drag(self, item_id: str, x: float, y: float) -> bool:
        """Move an item to grid position (x, y), displacing what it hits."""
        item = self._require(item_id)
        if not self._is_draggable(item):
            logger.debug("Drag ignored: %s is not draggable", item_id)
            return False

        # Targets past the grid edges are clamped, never rejected
        x = clamp(x, 0, self.config.cols - item.w)
        y = max(y, 0)
        if self._is_bounded(item):
            y = clamp(y, 0, self.config.max_rows - item.h)

        moved = move_element(
            self.layout,
            item_id,
            x,
            y,
            is_user_action=True,
            prevent_collision=self.config.prevent_collision,
            compact_type=self.compact_type,
            cols=self.config.cols,
            allow_overlap=self.config.allow_overlap,
            tracer=self.tracer,
        )
        if moved is self.layout:
            return False

        return self._commit(self._compact(moved), f"Drag {item_id}")

    def drag_to_pixels(self, item_id: str, top: float, left: float) -> bool:
        """Move an item to the grid cell nearest a pixel offset."""
        item = self._require(item_id)
        x, y = calc_xy(self.position_params, top, left, item.w, item.h)
        return self.drag(item_id, x, y)

    def resize(self, item_id: str, w: float, h: float,
               x: Optional[float] = None, y: Optional[float] = None) -> bool:
        """
        Resize an item to (w, h) grid units, optionally moving its origin.

        The size is clamped to the item's min/max constraints. With
        prevent_collision the resize is refused if it would collide.
        """
        item = self._require(item_id)
        if not self._is_resizable(item):
            logger.debug("Resize ignored: %s is not resizable", item_id)
            return False

        min_w = item.min_w if item.min_w is not None else 1
        max_w = item.max_w if item.max_w is not None else float("inf")
        min_h = item.min_h if item.min_h is not None else 1
        max_h = item.max_h if item.max_h is not None else float("inf")
        w = clamp(w, min_w, max_w)
        h = clamp(h, min_h, max_h)

        # The column bound wins over min_w: x + w never exceeds cols
        if x is not None:
            x = clamp(x, 0, self.config.cols - 1)
        origin_x = x if x is not None else item.x
        w = min(w, self.config.cols - origin_x)

        def apply(resized: LayoutItem) -> LayoutItem:
            resized.w = w
            resized.h = h
            if x is not None:
                resized.x = x
            if y is not None:
                resized.y = y
            return resized

        new_layout, resized = with_layout_item(self.layout, item_id, apply)

        if self.config.prevent_collision and not self.config.allow_overlap:
            if get_all_collisions(new_layout, resized):
                logger.debug("Resize of %s prevented by collision", item_id)
                return False

        return self._commit(self._compact(new_layout), f"Resize {item_id}")

    def resize_to_pixels(
        self,
        item_id: str,
        handle: Union[ResizeHandle, str],
        rect: Union[Position, Mapping[str, float]],
    ) -> bool:
        """
        Resize an item from a proposed pixel rectangle for one handle.

        West and north handles move the item's origin as well as its size.
        """
        item = self._require(item_id)
        handle = ResizeHandle(handle)
        if handle.value not in self._resize_handles(item):
            logger.debug("Resize ignored: handle %s not enabled on %s", handle.value, item_id)
            return False

        params = self.position_params
        current = calc_grid_item_position(params, item.x, item.y, item.w, item.h)
        constrained = resize_item_in_direction(handle, current, rect, self.container_width)

        w, h = calc_wh(params, constrained.width, constrained.height, item.x, item.y, handle)
        new_x, new_y = item.x, item.y
        if handle.is_west or handle.is_north:
            grid_x, grid_y = calc_xy(params, constrained.top, constrained.left, w, h)
            if handle.is_west:
                new_x = grid_x
            if handle.is_north:
                new_y = grid_y

        return self.resize(item_id, w, h, x=new_x, y=new_y)

    def add_item(self, item_id: str, w: float = 1, h: float = 1, x: float = 0,
                 y: Optional[float] = None, **options: Any) -> bool:
        """
        Add an item. Without a y it is appended below everything else.

        Raises:
            ValueError: If an item with this id already exists
        """
        if get_layout_item(self.layout, item_id) is not None:
            raise ValueError(f"Item {item_id} already in layout")

        item = LayoutItem.from_dict({
            **options,
            "i": item_id,
            "x": x,
            "y": bottom(self.layout) if y is None else y,
            "w": w,
            "h": h,
        })
        validate_layout([item], "GridSession.add_item")
        new_layout = clone_layout(self.layout) + [item]
        return self._commit(self._settle(new_layout), f"Add {item_id}")

    def remove_item(self, item_id: str) -> bool:
        """Remove an item and close the gap it leaves."""
        if get_layout_item(self.layout, item_id) is None:
            return False
        remaining = [item for item in self.layout if item.i != item_id]
        return self._commit(self._settle(remaining), f"Remove {item_id}")

    def synchronize(self, children: Iterable[GridChild]) -> bool:
        """Reconcile the layout with an external item list."""
        new_layout = synchronize_layout_with_children(
            self.layout,
            children,
            self.config.cols,
            self.compact_type,
            self.config.allow_overlap,
        )
        return self._commit(new_layout, "Synchronize")

    # ------------------------------------------------------------------
    # Undo / redo
    # ------------------------------------------------------------------

    def checkpoint(self, description: str = ""):
        """Save the current layout to the undo stack."""
        self._undo_stack.append(LayoutSnapshot(clone_layout(self.layout), description))
        self._redo_stack.clear()

        while len(self._undo_stack) > self.MAX_UNDO_STACK:
            self._undo_stack.pop(0)

    def undo(self) -> bool:
        """
        Undo last change.

        Returns:
            True if undo was performed, False if nothing to undo
        """
        if not self._undo_stack:
            return False

        snapshot = self._undo_stack.pop()
        self._redo_stack.append(LayoutSnapshot(self.layout, snapshot.description))
        self.layout = snapshot.layout
        self._dirty = True
        return True

    def redo(self) -> bool:
        """
        Redo last undone change.

        Returns:
            True if redo was performed, False if nothing to redo
        """
        if not self._redo_stack:
            return False

        snapshot = self._redo_stack.pop()
        self._undo_stack.append(LayoutSnapshot(self.layout, snapshot.description))
        self.layout = snapshot.layout
        self._dirty = True
        return True

    def get_stats(self) -> Dict[str, Any]:
        """Get session statistics."""
        return {
            "items": len(self.layout),
            "statics": sum(1 for item in self.layout if item.static),
            "rows": bottom(self.layout),
            "cols": self.config.cols,
            "compact_type": self.compact_type.value,
            "dirty": self.is_dirty,
            "undo_available": len(self._undo_stack) > 0,
            "redo_available": len(self._redo_stack) > 0,
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, item_id: str) -> LayoutItem:
        item = get_layout_item(self.layout, item_id)
        if item is None:
            raise KeyError(f"Item {item_id} not in layout")
        return item

    def _to_items(self, layout: Sequence[Union[LayoutItem, Mapping[str, Any]]],
                  context: str) -> Layout:
        validate_layout(list(layout), context)
        items = [
            item if isinstance(item, LayoutItem) else LayoutItem.from_dict(item)
            for item in layout
        ]
        ids = [item.i for item in items]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"{context} has duplicate item ids: {duplicates}")
        return clone_layout(items)

    def _compact(self, layout: Layout) -> Layout:
        if self.config.allow_overlap:
            return layout
        return compact(layout, self.compact_type, self.config.cols, tracer=self.tracer)

    def _settle(self, layout: Layout) -> Layout:
        """Bounds correction followed by compaction."""
        return self._compact(correct_bounds(layout, self.config.cols))

    def _commit(self, new_layout: Layout, description: str) -> bool:
        if _geometry(new_layout) == _geometry(self.layout):
            return False
        self.checkpoint(description)
        self.layout = new_layout
        self._dirty = True
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s: %d items, %s rows", description, len(new_layout), bottom(new_layout))
        return True

    def _is_draggable(self, item: LayoutItem) -> bool:
        if item.static and item.is_draggable is not True:
            return False
        if item.is_draggable is not None:
            return item.is_draggable
        return self.config.is_draggable

    def _is_resizable(self, item: LayoutItem) -> bool:
        if item.static:
            return False
        if item.is_resizable is not None:
            return item.is_resizable
        return self.config.is_resizable

    def _is_bounded(self, item: LayoutItem) -> bool:
        if item.is_bounded is not None:
            return item.is_bounded
        return self.config.is_bounded

    def _resize_handles(self, item: LayoutItem) -> List[str]:
        if item.resize_handles is not None:
            return list(item.resize_handles)
        return list(self.config.resize_handles)


def _geometry(layout: Layout):
    return [(item.i, item.x, item.y, item.w, item.h, item.static) for item in layout]
