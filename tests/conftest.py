"""
Shared test fixtures for GridPlace tests.

Provides reusable layouts, grid parameters, and config fixtures for the
placement engine, session API and CLI tests.
"""

import pytest
from typing import List

from gridplace.config import GridConfig
from gridplace.layout.abstraction import LayoutItem
from gridplace.layout.geometry import GridParameters


@pytest.fixture
def default_params() -> GridParameters:
    """12 columns over 1200px, 150px rows, 10px margins and padding."""
    return GridParameters()


@pytest.fixture
def dashboard_params() -> GridParameters:
    """Dense dashboard grid: 30px rows."""
    return GridParameters(
        margin=(10, 10),
        container_padding=(10, 10),
        container_width=1200,
        cols=12,
        row_height=30,
    )


@pytest.fixture
def stacked_layout() -> List[LayoutItem]:
    """Three 1x1 items stacked in the first column."""
    return [
        LayoutItem(i="a", x=0, y=0, w=1, h=1),
        LayoutItem(i="b", x=0, y=1, w=1, h=1),
        LayoutItem(i="c", x=0, y=2, w=1, h=1),
    ]


@pytest.fixture
def wide_stack() -> List[LayoutItem]:
    """Three 2x1 items stacked in the first two columns."""
    return [
        LayoutItem(i="a", x=0, y=0, w=2, h=1),
        LayoutItem(i="b", x=0, y=1, w=2, h=1),
        LayoutItem(i="c", x=0, y=2, w=2, h=1),
    ]


@pytest.fixture
def layout_with_static() -> List[LayoutItem]:
    """A static 2x2 block at the origin and a movable 2x2 item below it."""
    return [
        LayoutItem(i="static", x=0, y=0, w=2, h=2, static=True),
        LayoutItem(i="mover", x=0, y=4, w=2, h=2),
    ]


@pytest.fixture
def default_config() -> GridConfig:
    return GridConfig()
