"""Layout validation: reject malformed items instead of coercing them."""

import numbers
from typing import Any, Mapping, Optional, Sequence

from .abstraction import LayoutItem

REQUIRED_FIELDS = ("x", "y", "w", "h")


class LayoutValidationError(ValueError):
    """A layout (or one of its items) is malformed."""

    def __init__(self, message: str, context: str = "Layout",
                 index: Optional[int] = None, field: Optional[str] = None):
        super().__init__(message)
        self.context = context
        self.index = index
        self.field = field


def _get_field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_layout(layout: Sequence[Any], context_name: str = "Layout") -> None:
    """
    Validate a layout.

    Items may be LayoutItem instances or descriptor mappings. Every item must
    carry numeric x, y, w and h.

    Raises:
        LayoutValidationError: naming the offending index and field
    """
    if not isinstance(layout, (list, tuple)):
        raise LayoutValidationError(f"{context_name} must be an array!", context=context_name)

    for index, item in enumerate(layout):
        if not isinstance(item, (LayoutItem, Mapping)):
            raise LayoutValidationError(
                f"{context_name}[{index}] must be a layout item!",
                context=context_name,
                index=index,
            )
        for name in REQUIRED_FIELDS:
            if not _is_number(_get_field(item, name)):
                raise LayoutValidationError(
                    f"{context_name}[{index}].{name} must be a number!",
                    context=context_name,
                    index=index,
                    field=name,
                )
