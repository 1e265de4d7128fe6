"""Tests for millpath/utils/tool_compensation.py."""
import math

import pytest

from millpath.errors import NumericalDegeneracyError
from millpath.models import MillingDirection, ToolPathMode
from millpath.utils.tool_compensation import (
    calculate_line_normal,
    get_compensation_offset,
    is_clockwise,
    offset_contour,
    orient_contour,
    signed_area,
)

SQUARE_CCW = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
SQUARE_CW = [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)]
HALF_DIAGONAL = math.sqrt(0.5)


class TestCompensationOffset:
    """Tests for get_compensation_offset."""

    def test_modes(self):
        """Outside grows by the radius, inside shrinks, on-line is zero."""
        assert get_compensation_offset(4.0, ToolPathMode.OUTSIDE) == 2.0
        assert get_compensation_offset(4.0, ToolPathMode.INSIDE) == -2.0
        assert get_compensation_offset(4.0, ToolPathMode.ON_LINE) == 0.0


class TestWinding:
    """Tests for signed area and orientation."""

    def test_signed_area_sign(self):
        """Counter-clockwise rings have positive area."""
        assert signed_area(SQUARE_CCW) == pytest.approx(100.0)
        assert signed_area(SQUARE_CW) == pytest.approx(-100.0)

    def test_closing_point_ignored(self):
        """A repeated closing point does not change the area."""
        assert signed_area(SQUARE_CCW + [SQUARE_CCW[0]]) == pytest.approx(100.0)

    def test_is_clockwise(self):
        """Clockwise detection follows the area sign."""
        assert is_clockwise(SQUARE_CW)
        assert not is_clockwise(SQUARE_CCW)

    def test_orient_reverses_keeping_first(self):
        """Reorienting keeps the first point and reverses the rest."""
        assert orient_contour(SQUARE_CCW, MillingDirection.CLOCKWISE) == SQUARE_CW

    def test_orient_keeps_matching_ring(self):
        """A ring already in the requested direction is unchanged."""
        assert orient_contour(SQUARE_CCW, MillingDirection.COUNTER_CLOCKWISE) == SQUARE_CCW

    def test_line_normal(self):
        """The left normal of +X is +Y; zero-length segments have none."""
        assert calculate_line_normal((0, 0), (5, 0)) == (0, 1)
        assert calculate_line_normal((1, 1), (1, 1)) is None


class TestOffsetContour:
    """Tests for the miter offset of arbitrary rings."""

    def test_inward_ccw(self):
        """Inward offset moves a corner along its bisector."""
        result = offset_contour(SQUARE_CCW, -1.0)
        assert result[0] == pytest.approx((HALF_DIAGONAL, HALF_DIAGONAL))
        assert result[2] == pytest.approx((10 - HALF_DIAGONAL, 10 - HALF_DIAGONAL))

    def test_inward_cw_same_geometry(self):
        """Winding does not change which way is inward."""
        result = offset_contour(SQUARE_CW, -1.0)
        assert result[0] == pytest.approx((HALF_DIAGONAL, HALF_DIAGONAL))
        assert result[2] == pytest.approx((10 - HALF_DIAGONAL, 10 - HALF_DIAGONAL))

    def test_outward(self):
        """Positive offsets grow the ring."""
        result = offset_contour(SQUARE_CCW, 1.0)
        assert result[0] == pytest.approx((-HALF_DIAGONAL, -HALF_DIAGONAL))
        assert abs(signed_area(result)) > 100.0

    def test_vertex_count_preserved(self):
        """Output has one vertex per distinct input vertex."""
        closed = SQUARE_CCW + [SQUARE_CCW[0]]
        assert len(offset_contour(closed, -1.0)) == 4

    def test_duplicate_vertex_reuses_neighbour_normal(self):
        """A zero-length edge borrows the previous edge's normal."""
        ring = [(0.0, 0.0), (10.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
        result = offset_contour(ring, -1.0)
        assert len(result) == 5
        assert all(math.isfinite(x) and math.isfinite(y) for x, y in result)
        assert result[1] == pytest.approx((10.0, 1.0))

    def test_no_usable_edge(self):
        """A ring collapsed to one point cannot be offset."""
        with pytest.raises(NumericalDegeneracyError):
            offset_contour([(1.0, 1.0), (1.0, 1.0), (1.0, 1.0)], -1.0)
