"""Tests for millpath/strategies/spiral.py."""
import math

import pytest

from millpath.geometry import CircleGeometry, RectangleGeometry
from millpath.models import MillingDirection, Rectangle
from millpath.strategies import SpiralStrategy, StrategyContext, plan_spiral
from millpath.strategies.spiral import (
    SAMPLES_PER_REVOLUTION,
    entry_crossing,
    exit_crossing,
    spiral_samples,
)
from millpath.utils.contour_utils import point_in_polygon, project_onto_ring, segment_ring_crossings
from millpath.utils.multipass import Pass

CCW = MillingDirection.COUNTER_CLOCKWISE
CW = MillingDirection.CLOCKWISE


def diamond_ring(direction):
    """20 x 20 square rotated 45 degrees, offset for a 3 mm tool."""
    geometry = RectangleGeometry(Rectangle(20, 20, rotation=45))
    return geometry.get_contour(1.5, direction)


def notched_ring():
    """10 x 10 square with a 2 mm wide notch cut down from the top to y = 2."""
    return [(0, 0), (10, 0), (10, 10), (6, 10), (6, 2), (4, 2), (4, 10), (0, 10)]


def slit_ring(width=0.2):
    """24 x 24 square with a thin slit from radius 3 out through the right side.

    The slit runs half a spiral sample off the +X axis, so from radius 5 on
    the samples either side of it are both in the pocket.
    """
    angle = math.pi / SAMPLES_PER_REVOLUTION
    u = (math.cos(angle), math.sin(angle))
    n = (-u[1], u[0])
    half = width / 2

    def slit_point(along, side):
        return (u[0] * along + n[0] * side * half, u[1] * along + n[1] * side * half)

    return [
        slit_point(12.0, 1), (12.0, 12.0), (-12.0, 12.0), (-12.0, -12.0), (12.0, -12.0),
        slit_point(12.0, -1), slit_point(3.0, -1), slit_point(3.0, 1),
    ]


class TestSpiralSamples:
    """Tests for spiral sampling."""

    def test_starts_at_center(self):
        """The first sample is the center."""
        samples = spiral_samples((1.0, 2.0), 1.0, 5.0, CCW)
        assert samples[0] == (1.0, 2.0)

    def test_radius_grows_by_step_per_turn(self):
        """One revolution later the radius has grown by one step."""
        samples = spiral_samples((0.0, 0.0), 1.0, 5.0, CCW)
        x, y = samples[SAMPLES_PER_REVOLUTION]
        assert math.hypot(x, y) == pytest.approx(1.0)

    def test_passes_max_radius(self):
        """Sampling continues until the spiral is beyond max_radius."""
        samples = spiral_samples((0.0, 0.0), 1.0, 5.0, CCW)
        assert math.hypot(*samples[-1]) > 5.0

    def test_direction(self):
        """Clockwise spirals turn towards negative Y first."""
        assert spiral_samples((0.0, 0.0), 1.0, 5.0, CW)[5][1] < 0
        assert spiral_samples((0.0, 0.0), 1.0, 5.0, CCW)[5][1] > 0


class TestPlanSpiral:
    """Tests for spiral planning against the boundary ring."""

    @pytest.mark.parametrize('direction', [CCW, CW])
    def test_crossings_per_revolution(self, direction):
        """Revolutions 8 and 9 leave the rotated square once per side."""
        plan = plan_spiral(diamond_ring(direction), (0.0, 0.0), 1.2, direction)
        counts = plan.count_by_revolution()
        assert counts[8] == 4
        assert counts[9] == 4

    def test_crossings_on_ring(self):
        """Exit and entry points lie on the boundary ring."""
        ring = diamond_ring(CCW)
        plan = plan_spiral(ring, (0.0, 0.0), 1.2, CCW)
        assert plan.crossings
        for crossing in plan.crossings:
            assert project_onto_ring(crossing.exit, ring).distance < 1e-9
            assert project_onto_ring(crossing.entry, ring).distance < 1e-9

    def test_starts_with_plunge_at_center(self):
        """The plan plunges at the center before feeding outwards."""
        plan = plan_spiral(diamond_ring(CCW), (0.0, 0.0), 1.2, CCW)
        assert plan.steps[0] == ('plunge', (0.0, 0.0))
        assert all(kind == 'feed' for kind, _ in plan.steps[1:])

    def test_circle_has_no_crossings(self, circle):
        """A spiral inside a circle leaves it only once, at the end."""
        ring = CircleGeometry(circle).get_contour(2.0, CCW)
        plan = plan_spiral(ring, (0.0, 0.0), 1.6, CCW)
        assert plan.crossings == []

    def test_degenerate_ring(self):
        """Rings without area produce an empty plan."""
        plan = plan_spiral([(0.0, 0.0), (1.0, 0.0)], (0.5, 0.0), 1.0, CCW)
        assert plan.steps == [] and plan.crossings == []


class TestCrossingTieBreak:
    """Tests for chords that cross the boundary several times."""

    def test_exit_takes_first_crossing(self):
        """Leaving through a notch stops at the first wall, not the outer one."""
        ring = notched_ring()
        assert len(segment_ring_crossings((1.0, 5.0), (12.0, 5.0), ring)) == 3
        hit = exit_crossing((1.0, 5.0), (12.0, 5.0), ring)
        assert hit.point == pytest.approx((4.0, 5.0))

    def test_entry_takes_last_crossing(self):
        """Coming back across a notch enters at the wall nearest the inside sample."""
        hit = entry_crossing((12.0, 5.0), (1.0, 5.0), notched_ring())
        assert hit.point == pytest.approx((4.0, 5.0))

    def test_no_crossing(self):
        """A chord that stays inside has no exit."""
        assert exit_crossing((1.0, 1.0), (9.0, 1.0), notched_ring()) is None
        assert entry_crossing((1.0, 1.0), (9.0, 1.0), notched_ring()) is None

    def test_inside_chords_cut_straight_through_thin_slit(self):
        """Chords with both samples in the pocket are fed straight across a thin slit."""
        ring = slit_ring()
        max_radius = max(math.hypot(x, y) for x, y in ring)
        samples = set(spiral_samples((0.0, 0.0), 1.0, max_radius, CCW))
        plan = plan_spiral(ring, (0.0, 0.0), 1.0, CCW)

        straight_across = []
        for (_, a), (kind, b) in zip(plan.steps, plan.steps[1:]):
            if kind != 'feed' or a not in samples or b not in samples:
                continue
            if not (point_in_polygon(a[0], a[1], ring) and point_in_polygon(b[0], b[1], ring)):
                continue
            if len(segment_ring_crossings(a, b, ring)) == 2:
                straight_across.append(math.hypot(*a))

        # one chord per revolution from radius 5 to 11
        assert len(straight_across) == 7
        assert min(straight_across) == pytest.approx(5.0)
        assert max(straight_across) == pytest.approx(11.0)


class TestSpiralStrategy:
    """Tests for the emitted spiral motion."""

    def test_ends_on_boundary_at_depth(self, circle, params, writer, recorder, positions):
        """The layer ends with a lap of the boundary at the pass depth."""
        writer.rapid(z=5.0)
        ctx = StrategyContext(
            geometry=CircleGeometry(circle),
            depth_pass=Pass(current_z=0.0, next_z=-1.0, index=1, taper_offset=0.0, effective_offset=2.0),
            offset=2.0,
            step=1.0,
            params=params,
            writer=writer,
        )
        SpiralStrategy().generate(ctx)
        x, y, z = positions(recorder.events)[-1]
        assert z == -1.0
        assert math.hypot(x, y) == pytest.approx(8.0, abs=0.01)
        assert min(p[2] for p in positions(recorder.events)) == -1.0
