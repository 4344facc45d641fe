"""Tests for grid/pixel coordinate conversion."""

import math

import pytest

from gridplace.layout.abstraction import ResizeHandle
from gridplace.layout.geometry import (
    DragState,
    GridParameters,
    ItemState,
    Position,
    ResizeState,
    calc_grid_col_width,
    calc_grid_item_position,
    calc_grid_item_wh_px,
    calc_wh,
    calc_xy,
    clamp,
    fast_position_equal,
)
from gridplace.layout import geometry


class TestRounding:
    """Tests for the half-up rounding convention."""

    def test_halves_round_up(self):
        assert geometry._round(2.5) == 3
        assert geometry._round(0.5) == 1

    def test_negative_halves_round_toward_positive(self):
        assert geometry._round(-2.5) == -2

    def test_non_finite_passes_through(self):
        assert geometry._round(math.inf) == math.inf


class TestColumnWidth:
    """Tests for column width computation."""

    def test_default_grid(self, default_params):
        """(1200 - 11 * 10 - 2 * 10) / 12."""
        assert calc_grid_col_width(default_params) == pytest.approx(1070 / 12)

    def test_padding_reduces_width(self):
        params = GridParameters(container_padding=(50, 10))
        assert calc_grid_col_width(params) == pytest.approx((1200 - 110 - 100) / 12)


class TestItemPosition:
    """Tests for grid to pixel conversion."""

    def test_origin_item(self, default_params):
        pos = calc_grid_item_position(default_params, 0, 0, 1, 1)
        assert pos.top == 10
        assert pos.left == 10
        assert pos.width == 89
        assert pos.height == 150

    def test_offset_item(self, default_params):
        """Margins are added between units, not around them."""
        pos = calc_grid_item_position(default_params, 1, 1, 2, 1)
        assert pos.width == 188
        assert pos.height == 150
        assert pos.top == 170
        assert pos.left == 109

    def test_dashboard_rows(self, dashboard_params):
        pos = calc_grid_item_position(dashboard_params, 0, 2, 1, 3)
        assert pos.top == 90
        assert pos.height == 110

    def test_drag_state_overrides_offset(self, default_params):
        state = ItemState(dragging=DragState(top=33.4, left=12.6))
        pos = calc_grid_item_position(default_params, 5, 5, 1, 1, state)
        assert (pos.top, pos.left) == (33, 13)
        assert pos.width == 89

    def test_resize_state_overrides_size(self, default_params):
        state = ItemState(resizing=ResizeState(width=200.4, height=99.5))
        pos = calc_grid_item_position(default_params, 0, 0, 1, 1, state)
        assert (pos.width, pos.height) == (200, 100)
        assert (pos.top, pos.left) == (10, 10)

    def test_resize_state_with_offset(self, default_params):
        state = ItemState(resizing=ResizeState(width=100, height=100, top=40, left=60))
        pos = calc_grid_item_position(default_params, 0, 0, 1, 1, state)
        assert (pos.top, pos.left) == (40, 60)

    def test_infinite_units_stay_infinite(self):
        assert calc_grid_item_wh_px(math.inf, 30, 10) == math.inf


class TestCalcXY:
    """Tests for pixel offset to grid coordinate conversion."""

    def test_inverts_item_position(self, default_params):
        pos = calc_grid_item_position(default_params, 1, 1, 2, 1)
        assert calc_xy(default_params, pos.top, pos.left, 2, 1) == (1, 1)

    @pytest.mark.parametrize("container_width", [320, 480, 996, 1200, 1920])
    @pytest.mark.parametrize("cols,row_height,margin", [
        (2, 30, (10, 10)),
        (4, 150, (0, 0)),
        (12, 30, (10, 10)),
        (12, 150, (16, 8)),
    ])
    def test_round_trip_every_cell(self, container_width, cols, row_height, margin):
        """Every in-bounds cell survives grid -> pixels -> grid."""
        params = GridParameters(
            margin=margin,
            container_padding=(10, 10),
            container_width=container_width,
            cols=cols,
            row_height=row_height,
        )
        for w in range(1, cols + 1):
            for x in range(0, cols - w + 1):
                for y, h in ((0, 1), (3, 2), (17, 5)):
                    pos = calc_grid_item_position(params, x, y, w, h)
                    assert calc_xy(params, pos.top, pos.left, w, h) == (x, y)

    def test_clamped_to_columns(self, default_params):
        x, y = calc_xy(default_params, 10, 5000, 2, 1)
        assert x == 10

    def test_clamped_to_origin(self, default_params):
        assert calc_xy(default_params, -500, -500, 1, 1) == (0, 0)

    def test_clamped_to_max_rows(self):
        params = GridParameters(max_rows=5)
        x, y = calc_xy(params, 5000, 10, 1, 2)
        assert y == 3


class TestCalcWH:
    """Tests for pixel size to grid unit conversion."""

    def test_inverts_item_size(self, default_params):
        assert calc_wh(default_params, 188, 150, 0, 0) == (2, 1)

    def test_capped_by_space_right_of_x(self, default_params):
        w, h = calc_wh(default_params, 188, 150, 11, 0)
        assert w == 1

    def test_west_handle_uses_full_grid(self, default_params):
        w, h = calc_wh(default_params, 188, 150, 11, 0, ResizeHandle.WEST)
        assert w == 2

    def test_north_handle_accepts_string(self):
        params = GridParameters(max_rows=4)
        w, h = calc_wh(params, 89, 470, 0, 3, "nw")
        assert h == 3

    def test_unknown_handle_is_ignored(self, default_params):
        assert calc_wh(default_params, 188, 150, 11, 0, "diagonal") == (1, 1)


class TestHelpers:
    """Tests for clamp and position comparison."""

    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0
        assert clamp(2, 0, 3) == 2

    def test_fast_position_equal(self):
        a = Position(top=1, left=2, width=3, height=4)
        assert fast_position_equal(a, Position(top=1, left=2, width=3, height=4))
        assert not fast_position_equal(a, Position(top=1, left=2, width=3, height=5))
