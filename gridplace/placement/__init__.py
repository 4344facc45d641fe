"""Placement engine: collision detection, compaction and move resolution."""

from .collision import collides, get_all_collisions, get_first_collision
from .ordering import (
    sort_layout_items,
    sort_layout_items_by_col_row,
    sort_layout_items_by_row_col,
)
from .compactor import compact, compact_item, correct_bounds, resolve_compaction_collision
from .move_engine import MoveEngine, move_element
from .resize import resize_item_in_direction
from .synchronizer import GridChild, synchronize_layout_with_children
from .tracing import LayoutTracer

__all__ = [
    "collides",
    "get_all_collisions",
    "get_first_collision",
    "sort_layout_items",
    "sort_layout_items_by_col_row",
    "sort_layout_items_by_row_col",
    "compact",
    "compact_item",
    "correct_bounds",
    "resolve_compaction_collision",
    "MoveEngine",
    "move_element",
    "resize_item_in_direction",
    "GridChild",
    "synchronize_layout_with_children",
    "LayoutTracer",
]
