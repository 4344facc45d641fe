"""Tests for reconciling a layout with an external item list."""

import pytest

from gridplace.layout.abstraction import CompactType, LayoutItem, clone_layout
from gridplace.layout.validation import LayoutValidationError
from gridplace.placement.synchronizer import GridChild, synchronize_layout_with_children


def positions(layout):
    return {item.i: (item.x, item.y) for item in layout}


@pytest.fixture
def initial():
    return [
        LayoutItem(i="a", x=0, y=0, w=2, h=2),
        LayoutItem(i="b", x=2, y=0, w=2, h=1),
    ]


class TestSynchronize:
    """Tests for synchronize_layout_with_children."""

    def test_existing_entries_reused(self, initial):
        children = [GridChild("a"), GridChild("b")]
        result = synchronize_layout_with_children(initial, children, 12, CompactType.VERTICAL)
        assert positions(result) == {"a": (0, 0), "b": (2, 0)}
        assert result[0] is not initial[0]

    def test_unknown_child_appended_at_bottom(self, initial):
        children = [GridChild("a"), GridChild("new")]
        result = synchronize_layout_with_children(initial, children, 12, CompactType.VERTICAL)
        new = result[1]
        assert new.i == "new"
        assert (new.w, new.h) == (1, 1)
        assert (new.x, new.y) == (0, 2)

    def test_extraneous_entries_dropped(self, initial):
        result = synchronize_layout_with_children(initial, [GridChild("b")], 12, "vertical")
        assert [item.i for item in result] == ["b"]

    def test_children_without_key_skipped(self, initial):
        children = [GridChild(None), GridChild("a")]
        result = synchronize_layout_with_children(initial, children, 12, "vertical")
        assert [item.i for item in result] == ["a"]

    def test_explicit_placement_wins(self, initial):
        children = [GridChild("a", {"x": 6, "y": 0, "w": 3, "h": 1})]
        result = synchronize_layout_with_children(initial, children, 12, "vertical")
        assert (result[0].x, result[0].w) == (6, 3)

    def test_explicit_placement_as_item(self, initial):
        grid = LayoutItem(i="ignored", x=4, y=0, w=1, h=1, static=True)
        result = synchronize_layout_with_children(initial, [GridChild("a", grid)], 12, "vertical")
        assert result[0].i == "a"
        assert result[0].static is True

    def test_malformed_placement_rejected(self, initial):
        children = [GridChild("a", {"x": "left", "y": 0, "w": 1, "h": 1})]
        with pytest.raises(LayoutValidationError, match=r"children\[0\]\.x must be a number!"):
            synchronize_layout_with_children(initial, children, 12, "vertical")

    def test_bounds_corrected(self):
        children = [GridChild("a", {"x": 10, "y": 0, "w": 4, "h": 1})]
        result = synchronize_layout_with_children([], children, 12, "vertical")
        assert result[0].x == 8

    def test_compacted_unless_overlap_allowed(self):
        children = [
            GridChild("a", {"x": 0, "y": 0, "w": 2, "h": 2}),
            GridChild("b", {"x": 1, "y": 1, "w": 2, "h": 2}),
        ]
        compacted = synchronize_layout_with_children(None, children, 12, "vertical")
        overlapping = synchronize_layout_with_children(
            None, children, 12, "vertical", allow_overlap=True
        )
        assert positions(compacted)["b"] == (1, 2)
        assert positions(overlapping)["b"] == (1, 1)

    def test_initial_layout_not_modified(self, initial):
        before = clone_layout(initial)
        synchronize_layout_with_children(initial, [GridChild("b")], 12, "vertical")
        assert initial == before
