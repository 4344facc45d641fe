"""
Resize Direction Resolver

Constrains a proposed pixel rectangle for a given resize handle. Each
cardinal handle only touches its own edge; diagonal handles chain two
cardinal handlers, the second one receiving the first one's output as the
proposed rectangle.
"""

from dataclasses import asdict, replace
from typing import Callable, Dict, Mapping, Union

from ..layout.abstraction import ResizeHandle
from ..layout.geometry import Position

ResizeHandler = Callable[[Position, Position, float], Position]


def _constrain_width(left: float, current_width: float, new_width: float,
                     container_width: float) -> float:
    return current_width if left + new_width > container_width else new_width


def _constrain_height(top: float, current_height: float, new_height: float) -> float:
    return current_height if top < 0 else new_height


def _constrain_left(left: float) -> float:
    return max(0, left)


def _constrain_top(top: float) -> float:
    return max(0, top)


def resize_north(current: Position, new: Position, container_width: float) -> Position:
    top = current.top - (new.height - current.height)
    return Position(
        left=new.left,
        width=new.width,
        height=_constrain_height(top, current.height, new.height),
        top=_constrain_top(top),
    )


def resize_east(current: Position, new: Position, container_width: float) -> Position:
    return Position(
        top=new.top,
        height=new.height,
        width=_constrain_width(current.left, current.width, new.width, container_width),
        left=_constrain_left(new.left),
    )


def resize_west(current: Position, new: Position, container_width: float) -> Position:
    left = current.left - (new.width - current.width)
    if left < 0:
        width = current.width
    else:
        width = _constrain_width(current.left, current.width, new.width, container_width)
    return Position(
        height=new.height,
        width=width,
        top=_constrain_top(new.top),
        left=_constrain_left(left),
    )


def resize_south(current: Position, new: Position, container_width: float) -> Position:
    return Position(
        width=new.width,
        left=new.left,
        height=_constrain_height(new.top, current.height, new.height),
        top=_constrain_top(new.top),
    )


def resize_north_east(current: Position, new: Position, container_width: float) -> Position:
    return resize_north(current, resize_east(current, new, container_width), container_width)


def resize_north_west(current: Position, new: Position, container_width: float) -> Position:
    return resize_north(current, resize_west(current, new, container_width), container_width)


def resize_south_east(current: Position, new: Position, container_width: float) -> Position:
    return resize_south(current, resize_east(current, new, container_width), container_width)


def resize_south_west(current: Position, new: Position, container_width: float) -> Position:
    return resize_south(current, resize_west(current, new, container_width), container_width)


ORDINAL_RESIZE_HANDLERS: Dict[str, ResizeHandler] = {
    ResizeHandle.NORTH.value: resize_north,
    ResizeHandle.NORTH_EAST.value: resize_north_east,
    ResizeHandle.EAST.value: resize_east,
    ResizeHandle.SOUTH_EAST.value: resize_south_east,
    ResizeHandle.SOUTH.value: resize_south,
    ResizeHandle.SOUTH_WEST.value: resize_south_west,
    ResizeHandle.WEST.value: resize_west,
    ResizeHandle.NORTH_WEST.value: resize_north_west,
}


def resize_item_in_direction(
    direction: Union[ResizeHandle, str],
    current: Position,
    new_size: Union[Position, Mapping[str, float]],
    container_width: float,
) -> Position:
    """
    Clamp a resize of current toward new_size for the given handle.

    new_size may be partial (a mapping holding only the changed fields);
    missing fields are taken from current. An unknown direction returns
    the merged proposal unchanged.
    """
    if isinstance(new_size, Position):
        proposed = new_size
    else:
        known = asdict(current).keys()
        proposed = replace(current, **{k: v for k, v in new_size.items() if k in known})

    key = direction.value if isinstance(direction, ResizeHandle) else direction
    handler = ORDINAL_RESIZE_HANDLERS.get(key)
    if handler is None:
        return proposed
    return handler(current, proposed, container_width)
