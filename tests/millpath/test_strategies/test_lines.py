"""Tests for millpath/strategies/lines.py."""
import math
from dataclasses import replace

import pytest

from millpath.geometry import CircleGeometry, RectangleGeometry
from millpath.models import PocketStrategy, Rectangle
from millpath.motion import LinearMove
from millpath.strategies import LinesStrategy, StrategyContext, ZigZagStrategy, create_strategy
from millpath.strategies.lines import line_axes, plan_lines
from millpath.utils.multipass import Pass, calculate_step


@pytest.fixture
def slot_params(params):
    """2 mm tool at 50% stepover: 1 mm between lines."""
    return replace(params, tool_diameter=2.0, step_percent=50.0)


def make_context(geometry, params, writer):
    return StrategyContext(
        geometry=geometry,
        depth_pass=Pass(current_z=0.0, next_z=-1.0, index=1, taper_offset=0.0,
                        effective_offset=params.tool_radius),
        offset=params.tool_radius,
        step=calculate_step(params.tool_diameter, params.step_percent),
        params=params,
        writer=writer,
    )


def plunges(events):
    return [e for e in events if isinstance(e, LinearMove) and e.x is None and e.y is None]


class TestLineLayout:
    """Tests for line placement."""

    def test_axes(self):
        """Zero degrees cuts along X with the normal along Y."""
        direction, normal = line_axes(0.0, 0.0)
        assert direction == pytest.approx((1.0, 0.0))
        assert normal == pytest.approx((0.0, 1.0))

    def test_rotation_adds_to_line_angle(self):
        """Shape rotation turns the lines with the shape."""
        direction, _ = line_axes(30.0, 60.0)
        assert direction == pytest.approx((0.0, 1.0), abs=1e-12)

    def test_horizontal_lines(self, slot_params, writer):
        """A 20 x 10 rectangle with a 2 mm tool gets nine lines from y=-4 to 4."""
        ctx = make_context(RectangleGeometry(Rectangle(20, 10)), slot_params, writer)
        segments = plan_lines(ctx, ctx.outer_ring())
        assert len(segments) == 9
        start, end = segments[0]
        assert start == pytest.approx((-9.0, -4.0))
        assert end == pytest.approx((9.0, -4.0))
        assert segments[-1][0][1] == pytest.approx(4.0)

    def test_vertical_lines(self, slot_params, writer):
        """At 90 degrees the lines run across the long side."""
        params = replace(slot_params, line_angle=90.0)
        ctx = make_context(RectangleGeometry(Rectangle(20, 10)), params, writer)
        assert len(plan_lines(ctx, ctx.outer_ring())) == 19

    def test_zigzag_alternates(self, slot_params, writer):
        """Every other zigzag line runs backwards."""
        ctx = make_context(RectangleGeometry(Rectangle(20, 10)), slot_params, writer)
        ring = ctx.outer_ring()
        segments = ZigZagStrategy().segments(ctx, ring)
        assert segments[1][0] == pytest.approx((9.0, -3.0))
        assert segments[1][1] == pytest.approx((-9.0, -3.0))
        assert LinesStrategy().segments(ctx, ring)[1][0] == pytest.approx((-9.0, -3.0))


class TestLinesMotion:
    """Tests for the emitted line motion."""

    def test_lines_plunge_every_line(self, slot_params, writer, recorder):
        """One-way lines retract and plunge for each line."""
        writer.rapid(z=5.0)
        LinesStrategy().generate(make_context(RectangleGeometry(Rectangle(20, 10)), slot_params, writer))
        assert len(plunges(recorder.events)) == 9

    def test_zigzag_plunges_once(self, slot_params, writer, recorder):
        """Zigzag lines are joined along the wall without lifting."""
        writer.rapid(z=5.0)
        ZigZagStrategy().generate(make_context(RectangleGeometry(Rectangle(20, 10)), slot_params, writer))
        assert len(plunges(recorder.events)) == 1

    @pytest.mark.parametrize('strategy', [LinesStrategy(), ZigZagStrategy()])
    def test_closing_lap_on_boundary(self, strategy, circle, params, writer, recorder, positions):
        """The layer ends on the boundary ring at depth."""
        writer.rapid(z=5.0)
        strategy.generate(make_context(CircleGeometry(circle), params, writer))
        x, y, z = positions(recorder.events)[-1]
        assert z == -1.0
        assert math.hypot(x, y) == pytest.approx(8.0, abs=0.01)

    def test_zigzag_in_circle_stays_down(self, circle, params, writer, recorder):
        """Walks along the circle replace retracts between lines."""
        writer.rapid(z=5.0)
        ZigZagStrategy().generate(make_context(CircleGeometry(circle), params, writer))
        assert len(plunges(recorder.events)) == 1


class TestCreateStrategy:
    """Tests for the strategy factory."""

    @pytest.mark.parametrize('kind', list(PocketStrategy))
    def test_every_kind(self, kind):
        """Every pocket strategy has an implementation."""
        assert hasattr(create_strategy(kind), 'generate')

    def test_unknown(self):
        """Unknown kinds are rejected."""
        with pytest.raises(ValueError):
            create_strategy('spiral')
