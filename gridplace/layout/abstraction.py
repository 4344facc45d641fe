"""
Layout Abstraction Layer

Plain geometric data shared by every part of the engine: layout items
positioned on an integer grid, the compaction modes that drive the
placement passes, and the resize handles an item can expose.

A layout is an ordered list of items. Order is insertion order; it matters
for stable output but never for collision semantics.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union


class CompactType(Enum):
    """Direction in which the layout is compacted to remove gaps."""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    NONE = "none"

    @property
    def axis(self) -> Optional[str]:
        """Coordinate attribute pulled toward the origin ("x", "y" or None)."""
        return _AXIS[self]

    @property
    def extent(self) -> Optional[str]:
        """Size attribute measured along the compaction axis ("w", "h" or None)."""
        return _EXTENT[self]

    @classmethod
    def parse(cls, value: Union["CompactType", str, None]) -> "CompactType":
        """Accept an enum member, its string value, or None (no compaction)."""
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        available = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown compact type '{value}'. Available: {available}")


_AXIS = {
    CompactType.VERTICAL: "y",
    CompactType.HORIZONTAL: "x",
    CompactType.NONE: None,
}

_EXTENT = {
    CompactType.VERTICAL: "h",
    CompactType.HORIZONTAL: "w",
    CompactType.NONE: None,
}


def resolve_compact_type(compact_type: Union[CompactType, str, None],
                         vertical_compact: Optional[bool] = None) -> CompactType:
    """Legacy support: vertical_compact=False disables compaction entirely."""
    if vertical_compact is False:
        return CompactType.NONE
    return CompactType.parse(compact_type)


class ResizeHandle(Enum):
    """Resize handles, named by compass direction."""
    NORTH = "n"
    NORTH_EAST = "ne"
    EAST = "e"
    SOUTH_EAST = "se"
    SOUTH = "s"
    SOUTH_WEST = "sw"
    WEST = "w"
    NORTH_WEST = "nw"

    @property
    def is_west(self) -> bool:
        """Handle moves the item's left edge."""
        return self in (ResizeHandle.WEST, ResizeHandle.NORTH_WEST, ResizeHandle.SOUTH_WEST)

    @property
    def is_north(self) -> bool:
        """Handle moves the item's top edge."""
        return self in (ResizeHandle.NORTH, ResizeHandle.NORTH_WEST, ResizeHandle.NORTH_EAST)


# camelCase descriptor keys -> dataclass field names
_DESCRIPTOR_KEYS = {
    "id": "i",
    "minW": "min_w",
    "maxW": "max_w",
    "minH": "min_h",
    "maxH": "max_h",
    "isStatic": "static",
    "isDraggable": "is_draggable",
    "isResizable": "is_resizable",
    "isBounded": "is_bounded",
    "resizeHandles": "resize_handles",
}


@dataclass
class LayoutItem:
    """A rectangle on the grid, in grid units with a top-left origin."""
    i: str
    x: float = 0
    y: float = 0
    w: float = 1
    h: float = 1

    # Per-item size constraints (grid units)
    min_w: Optional[float] = None
    max_w: Optional[float] = None
    min_h: Optional[float] = None
    max_h: Optional[float] = None

    static: bool = False

    # None means "inherit the grid default"
    is_draggable: Optional[bool] = None
    is_resizable: Optional[bool] = None
    is_bounded: Optional[bool] = None
    resize_handles: Optional[List[str]] = None

    # Set while a single move cascade is being resolved; never persisted
    moved: bool = field(default=False, compare=False)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) in grid units."""
        return (self.x, self.y, self.x + self.w, self.y + self.h)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutItem":
        """Create from an external descriptor (camelCase or snake_case keys)."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _DESCRIPTOR_KEYS.get(key, key)
            if name in known and name != "moved":
                kwargs[name] = value
        if "i" not in kwargs:
            raise ValueError("Layout item descriptor requires an 'i' (or 'id') key")
        kwargs["i"] = str(kwargs["i"])
        kwargs["static"] = bool(kwargs.get("static", False))
        if kwargs.get("resize_handles") is not None:
            kwargs["resize_handles"] = list(kwargs["resize_handles"])
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase descriptor, omitting unset optional fields."""
        d: Dict[str, Any] = {"i": self.i, "x": self.x, "y": self.y, "w": self.w, "h": self.h}
        for key, name in _DESCRIPTOR_KEYS.items():
            if name in ("i", "static"):
                continue
            value = getattr(self, name)
            if value is not None:
                d[key] = list(value) if name == "resize_handles" else value
        if self.static:
            d["static"] = True
        return d


Layout = List[LayoutItem]


def bottom(layout: Layout) -> float:
    """Return the bottom coordinate (max y + h) of the layout, 0 when empty."""
    max_y = 0
    for item in layout:
        bottom_y = item.y + item.h
        if bottom_y > max_y:
            max_y = bottom_y
    return max_y


def clone_layout_item(item: LayoutItem) -> LayoutItem:
    """Copy an item. The handle list is copied, not shared."""
    return LayoutItem(
        i=item.i,
        x=item.x,
        y=item.y,
        w=item.w,
        h=item.h,
        min_w=item.min_w,
        max_w=item.max_w,
        min_h=item.min_h,
        max_h=item.max_h,
        static=bool(item.static),
        is_draggable=item.is_draggable,
        is_resizable=item.is_resizable,
        is_bounded=item.is_bounded,
        resize_handles=list(item.resize_handles) if item.resize_handles is not None else None,
        moved=bool(item.moved),
    )


def clone_layout(layout: Layout) -> Layout:
    return [clone_layout_item(item) for item in layout]


def get_layout_item(layout: Layout, item_id: str) -> Optional[LayoutItem]:
    """Get a layout item by id."""
    for item in layout:
        if item.i == item_id:
            return item
    return None


def get_statics(layout: Layout) -> Layout:
    return [item for item in layout if item.static]


def modify_layout(layout: Layout, layout_item: LayoutItem) -> Layout:
    """
    Replace the item sharing layout_item's id.

    Returns a new list; every other item is carried over unmodified.
    """
    return [layout_item if item.i == layout_item.i else item for item in layout]


def with_layout_item(
    layout: Layout,
    item_id: str,
    fn: Callable[[LayoutItem], LayoutItem],
) -> Tuple[Layout, Optional[LayoutItem]]:
    """
    Apply fn to a defensive clone of the item and splice it back in.

    Returns:
        (new_layout, modified_item), or (layout, None) if the id is absent
    """
    item = get_layout_item(layout, item_id)
    if item is None:
        return layout, None
    item = fn(clone_layout_item(item))
    return modify_layout(layout, item), item
