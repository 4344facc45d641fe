"""
Traversal order for compaction and collision resolution.

Sorting is stable and key based, so items sharing a position keep their
relative layout order on every platform.
"""

from ..layout.abstraction import CompactType, Layout


def sort_layout_items_by_row_col(layout: Layout) -> Layout:
    """Sort by row ascending, then column ascending. Returns a new list."""
    return sorted(layout, key=lambda item: (item.y, item.x))


def sort_layout_items_by_col_row(layout: Layout) -> Layout:
    """Sort by column ascending, then row ascending. Returns a new list."""
    return sorted(layout, key=lambda item: (item.x, item.y))


def sort_layout_items(layout: Layout, compact_type: CompactType) -> Layout:
    """
    Order items for the given compaction mode.

    With no compaction the input list itself is returned, not a copy.
    """
    compact_type = CompactType.parse(compact_type)
    if compact_type is CompactType.HORIZONTAL:
        return sort_layout_items_by_col_row(layout)
    if compact_type is CompactType.VERTICAL:
        return sort_layout_items_by_row_col(layout)
    return layout
