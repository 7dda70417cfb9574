"""
Tests for the geometry engine: snapping, bounds, hit testing, align,
distribute.
"""

import pytest

from label_designer.core.exceptions import InvalidGridSizeError
from label_designer.core.geometry import (
    Bounds,
    Point,
    align_elements,
    distribute_elements,
    element_at_point,
    get_element_bounds,
    is_point_in_element,
    selection_bounds,
    snap_point_to_grid,
    snap_to_grid,
    translate_element,
)
from label_designer.core.models import create_element


class TestSnapToGrid:
    @pytest.mark.parametrize("value", [-13.7, -5, 0, 0.3, 4.99, 7.5, 12.5, 101.2])
    @pytest.mark.parametrize("grid", [1, 2.5, 5, 10, 0.1])
    def test_idempotent(self, value, grid):
        """Snapping a snapped value changes nothing."""
        once = snap_to_grid(value, grid)
        assert snap_to_grid(once, grid) == once

    def test_rounds_to_nearest_multiple(self):
        assert snap_to_grid(14, 10) == 10
        assert snap_to_grid(16, 10) == 20
        assert snap_to_grid(15, 10) == 20

    def test_rejects_non_positive_grid(self):
        with pytest.raises(InvalidGridSizeError):
            snap_to_grid(5, 0)
        with pytest.raises(InvalidGridSizeError):
            snap_to_grid(5, -1)

    def test_snap_point(self):
        assert snap_point_to_grid(Point(12, 18), 5) == Point(10, 20)


class TestBounds:
    def test_line_bounds_normalized(self):
        """Reversed line endpoints still give left<=right, top<=bottom."""
        line = create_element("line", x=50, y=50, x2=10, y2=10)
        b = get_element_bounds(line)
        assert b == Bounds(left=10, top=10, right=50, bottom=50)

    def test_box_bounds(self):
        el = create_element("shape", x=5, y=6, width=10, height=20)
        b = get_element_bounds(el)
        assert (b.left, b.top, b.right, b.bottom) == (5, 6, 15, 26)
        assert (b.width, b.height) == (10, 20)
        assert (b.center_x, b.center_y) == (10, 16)

    def test_selection_bounds(self):
        a = create_element("shape", x=0, y=0, width=10, height=10)
        b = create_element("shape", x=20, y=5, width=10, height=30)
        assert selection_bounds([a, b]) == Bounds(0, 0, 30, 35)
        assert selection_bounds([]) is None


class TestHitTesting:
    def test_point_inside_inclusive(self):
        el = create_element("shape", x=10, y=10, width=10, height=10)
        assert is_point_in_element(Point(10, 10), el)
        assert is_point_in_element(Point(20, 20), el)
        assert is_point_in_element(Point(15, 12), el)
        assert not is_point_in_element(Point(20.01, 15), el)

    def test_topmost_visible_wins(self):
        bottom = create_element("shape", x=0, y=0, width=50, height=50)
        top = create_element("shape", x=10, y=10, width=10, height=10)
        hidden = create_element("shape", x=10, y=10, width=10, height=10, visible=False)
        elements = [bottom, top, hidden]
        assert element_at_point(Point(15, 15), elements) is top
        assert element_at_point(Point(40, 40), elements) is bottom
        assert element_at_point(Point(90, 90), elements) is None


class TestTranslate:
    def test_line_moves_both_endpoints(self):
        line = create_element("line", x=0, y=0, x2=10, y2=5)
        moved = translate_element(line, 3, 4)
        assert (moved.x, moved.y, moved.x2, moved.y2) == (3, 4, 13, 9)

    def test_zero_delta_returns_same(self):
        el = create_element("text")
        assert translate_element(el, 0, 0) is el


class TestAlign:
    def test_left(self):
        """Elements at x=30 and x=10 both end up at x=10."""
        a = create_element("text", x=30, width=10)
        b = create_element("text", x=10, width=10)
        out = align_elements([a, b], "left")
        assert [e.x for e in out] == [10, 10]

    def test_right_uses_max_right(self):
        a = create_element("text", x=0, width=10)
        b = create_element("text", x=20, width=30)
        out = align_elements([a, b], "right")
        assert [e.x + e.width for e in out] == [50, 50]

    def test_center_uses_average_of_centers(self):
        """Average of own centers, not the selection's bounding box center."""
        a = create_element("text", x=0, width=10)     # center 5
        b = create_element("text", x=10, width=10)    # center 15
        c = create_element("text", x=90, width=10)    # center 95
        out = align_elements([a, b, c], "center")
        for e in out:
            assert e.x + e.width / 2 == pytest.approx(115 / 3)

    def test_top_bottom_middle(self):
        a = create_element("text", y=10, height=10)
        b = create_element("text", y=40, height=20)
        assert [e.y for e in align_elements([a, b], "top")] == [10, 10]
        assert [e.y + e.height for e in align_elements([a, b], "bottom")] == [60, 60]
        middle = align_elements([a, b], "middle")
        assert [e.y + e.height / 2 for e in middle] == [32.5, 32.5]

    def test_line_aligns_by_bounds(self):
        """A reversed line aligns on its left-most endpoint."""
        box = create_element("shape", x=5, width=10)
        line = create_element("line", x=40, y=0, x2=20, y2=0)
        out = align_elements([box, line], "left")
        assert min(out[1].x, out[1].x2) == 5
        assert out[1].width == 20

    def test_fewer_than_two_is_noop(self):
        a = create_element("text", x=30)
        assert align_elements([a], "left") == [a]
        assert align_elements([], "left") == []

    def test_order_preserved(self):
        a = create_element("text", x=30)
        b = create_element("text", x=10)
        out = align_elements([a, b], "left")
        assert [e.id for e in out] == [a.id, b.id]

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            align_elements([create_element("text"), create_element("text")], "diagonal")


class TestDistribute:
    def test_horizontal_equal_gaps(self):
        """Three 10-wide elements at 0, 40, 100 -> 0, 50, 100."""
        els = [create_element("text", x=x, width=10) for x in (0, 40, 100)]
        out = distribute_elements(els, "horizontal")
        assert [e.x for e in out] == [0, 50, 100]

    def test_mixed_sizes(self):
        """Gaps are equal regardless of individual sizes."""
        a = create_element("shape", x=0, width=10)
        b = create_element("shape", x=15, width=30)
        c = create_element("shape", x=80, width=20)
        out = distribute_elements([a, b, c], "horizontal")
        gaps = [out[1].x - (out[0].x + 10), out[2].x - (out[1].x + 30)]
        assert gaps[0] == pytest.approx(gaps[1])
        assert out[0].x == 0
        assert out[2].x + 20 == 100

    def test_vertical(self):
        els = [create_element("text", y=y, height=10) for y in (0, 10, 60)]
        out = distribute_elements(els, "vertical")
        assert [e.y for e in out] == [0, 30, 60]

    def test_unsorted_input_keeps_caller_order(self):
        c = create_element("text", x=100, width=10)
        a = create_element("text", x=0, width=10)
        b = create_element("text", x=40, width=10)
        out = distribute_elements([c, a, b], "horizontal")
        assert [e.id for e in out] == [c.id, a.id, b.id]
        assert [e.x for e in out] == [100, 0, 50]

    def test_fewer_than_three_is_noop(self):
        els = [create_element("text", x=x) for x in (0, 40)]
        assert distribute_elements(els, "horizontal") == els

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            distribute_elements([create_element("text")] * 3, "diagonal")
