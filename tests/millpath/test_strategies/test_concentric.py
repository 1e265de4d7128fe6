"""Tests for millpath/strategies/concentric.py."""
import math
from dataclasses import replace

import pytest

from millpath.geometry import CircleGeometry, ContourGeometry, RectangleGeometry
from millpath.models import ArbitraryContour, MillingDirection, Rectangle
from millpath.motion import RapidMove
from millpath.strategies import ConcentricStrategy, StrategyContext, concentric_offsets
from millpath.strategies.base import stepped_values
from millpath.utils.multipass import Pass, calculate_step
from millpath.utils.tool_compensation import is_clockwise, signed_area


def make_context(geometry, params, writer):
    """Context for the first 1 mm layer of a pocket."""
    depth_pass = Pass(current_z=0.0, next_z=-1.0, index=1, taper_offset=0.0,
                      effective_offset=params.tool_radius)
    return StrategyContext(
        geometry=geometry,
        depth_pass=depth_pass,
        offset=params.tool_radius,
        step=calculate_step(params.tool_diameter, params.step_percent),
        params=params,
        writer=writer,
    )


class TestConcentricOffsets:
    """Tests for the ring offset sequence."""

    def test_even_division(self):
        """Offsets run from 0 to the maximum in whole steps."""
        assert concentric_offsets(8.0, 1.0) == [float(k) for k in range(9)]

    def test_partial_last_step(self):
        """The last offset lands exactly on the maximum."""
        assert concentric_offsets(7.5, 2.0) == [0.0, 2.0, 4.0, 6.0, 7.5]

    def test_no_room(self):
        """A shape with no room left still gets its boundary ring."""
        assert concentric_offsets(0.0, 1.0) == [0.0]
        assert concentric_offsets(-1.0, 1.0) == [0.0]

    def test_strictly_increasing(self):
        """Float residue does not produce a duplicate final offset."""
        offsets = concentric_offsets(0.3, 0.1)
        assert offsets == pytest.approx([0.0, 0.1, 0.2, 0.3])
        assert all(b > a for a, b in zip(offsets, offsets[1:]))

    def test_stepped_values_always_end_at_stop(self):
        """A non-positive step degenerates to just the stop value."""
        assert stepped_values(0.0, 5.0, 0.0) == [5.0]


class TestConcentricRings:
    """Tests for ring selection."""

    def test_circle_rings(self, circle, params, writer):
        """R10 circle, 4 mm tool, 25% step: nine rings of radius 0 to 8."""
        ctx = make_context(CircleGeometry(circle), params, writer)
        rings = ConcentricStrategy().rings(ctx)
        assert len(rings) == 9
        radii = [max(math.hypot(x, y) for x, y in ring) for ring in rings]
        assert radii == pytest.approx([0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0])
        assert rings[0] == [(0.0, 0.0)]

    def test_ring_winding(self, circle, params, writer):
        """Every ring follows the milling direction."""
        cw = replace(params, direction=MillingDirection.CLOCKWISE)
        ctx = make_context(CircleGeometry(circle), cw, writer)
        assert all(is_clockwise(ring) for ring in ConcentricStrategy().rings(ctx) if len(ring) >= 3)

    def test_small_contour_rings_dropped(self, params, writer):
        """Inner contour rings smaller than a stepover squared are skipped."""
        geometry = ContourGeometry(ArbitraryContour(((0, 0), (20, 0), (20, 20), (0, 20), (0, 0))))
        ctx = make_context(geometry, params, writer)
        rings = ConcentricStrategy().rings(ctx)
        assert rings[-1] == geometry.get_contour(2.0, params.direction)
        assert all(abs(signed_area(ring)) > ctx.step ** 2 for ring in rings[:-1])


class TestConcentricMotion:
    """Tests for the emitted motion."""

    def test_finishes_on_boundary(self, circle, params, writer, recorder, positions):
        """The last ring traced is the outer boundary, closed at its start."""
        writer.rapid(z=5.0)
        ConcentricStrategy().generate(make_context(CircleGeometry(circle), params, writer))
        x, y, z = positions(recorder.events)[-1]
        assert (x, y) == pytest.approx((8.0, 0.0))
        assert z == -1.0

    def test_rectangle_rings_joined_directly(self, params, writer, recorder):
        """Rectangle rings are connected without retracting."""
        writer.rapid(z=5.0)
        ctx = make_context(RectangleGeometry(Rectangle(20, 12)), params, writer)
        ConcentricStrategy().generate(ctx)
        assert sum(1 for e in recorder.events if isinstance(e, RapidMove)) == 3

    def test_circle_rings_retract(self, circle, params, writer, recorder):
        """Circle rings are connected by retract and plunge."""
        writer.rapid(z=5.0)
        ConcentricStrategy().generate(make_context(CircleGeometry(circle), params, writer))
        assert sum(1 for e in recorder.events if isinstance(e, RapidMove)) > 3
