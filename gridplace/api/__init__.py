"""GridPlace interaction API."""

from .session import GridSession, LayoutSnapshot

__all__ = [
    "GridSession",
    "LayoutSnapshot",
]
