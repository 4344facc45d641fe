"""Axis-aligned collision detection between layout items."""

from typing import List, Optional

from ..layout.abstraction import Layout, LayoutItem


def collides(a: LayoutItem, b: LayoutItem) -> bool:
    """
    Check if two items overlap.

    An item never collides with itself (same id), and rectangles whose
    edges only touch do not collide.
    """
    if a.i == b.i:
        return False
    if a.x + a.w <= b.x:  # a is left of b
        return False
    if a.x >= b.x + b.w:  # a is right of b
        return False
    if a.y + a.h <= b.y:  # a is above b
        return False
    if a.y >= b.y + b.h:  # a is below b
        return False
    return True


def get_first_collision(layout: Layout, item: LayoutItem) -> Optional[LayoutItem]:
    """Return the first item in layout order that collides with item."""
    for other in layout:
        if collides(other, item):
            return other
    return None


def get_all_collisions(layout: Layout, item: LayoutItem) -> List[LayoutItem]:
    """Return every item colliding with item, in layout order."""
    return [other for other in layout if collides(other, item)]
