"""
Layout Synchronizer

Reconciles the externally supplied item list against the previous layout,
producing one layout entry per item: existing entries are reused, explicit
placements win over them, and anything unknown is appended at the bottom.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from ..layout.abstraction import (
    CompactType,
    Layout,
    LayoutItem,
    bottom,
    clone_layout_item,
    get_layout_item,
)
from ..layout.validation import validate_layout
from .compactor import compact, correct_bounds

logger = logging.getLogger(__name__)


@dataclass
class GridChild:
    """External item descriptor: an identity plus an optional explicit placement."""
    key: Optional[str]
    data_grid: Optional[Union[Mapping[str, Any], LayoutItem]] = None


def synchronize_layout_with_children(
    initial_layout: Optional[Layout],
    children: Iterable[GridChild],
    cols: int,
    compact_type: Union[CompactType, str, None],
    allow_overlap: bool = False,
) -> Layout:
    """
    Generate a layout using initial_layout and children as a template.

    Missing entries are added and extraneous ones dropped. initial_layout is
    not modified.

    Raises:
        LayoutValidationError: if a child's explicit placement is malformed
    """
    initial_layout = initial_layout or []

    layout: Layout = []
    for child in children:
        # Child may not have an identity
        if child.key is None:
            continue
        key = str(child.key)

        exists = get_layout_item(initial_layout, key)
        grid = child.data_grid

        if exists is not None and grid is None:
            layout.append(clone_layout_item(exists))
        elif grid is not None:
            validate_layout([grid], "children")
            if isinstance(grid, LayoutItem):
                item = clone_layout_item(grid)
                item.i = key
            else:
                item = LayoutItem.from_dict({**grid, "i": key})
            layout.append(item)
        else:
            # Nothing provided: add to the bottom
            layout.append(LayoutItem(i=key, w=1, h=1, x=0, y=bottom(layout)))
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Sync: %s placed at bottom y=%s", key, layout[-1].y)

    corrected = correct_bounds(layout, cols)
    if allow_overlap:
        return corrected
    return compact(corrected, compact_type, cols)
