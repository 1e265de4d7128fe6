"""Tests for millpath/profile_generator.py."""
from dataclasses import replace

import pytest

from millpath.errors import DegenerateGeometryError
from millpath.models import (
    Circle,
    Ellipse,
    EntryMode,
    MillingDirection,
    ProfileOperation,
    Rectangle,
    RoundedRectangle,
    ToolPathMode,
)
from millpath.motion import ArcMove, Comment, LinearMove, RapidMove
from millpath.profile_generator import ProfileGenerator


def z_plunges(events):
    return [e for e in events if isinstance(e, LinearMove) and e.x is None and e.y is None]


class TestProfilePaths:
    """Tests for compensated profile paths."""

    def test_outside_ellipse(self, params, settings, recorder, positions):
        """A 2 mm tool outside a 10 x 5 ellipse runs on semi-axes 11 and 6."""
        outside = replace(params, tool_diameter=2.0, total_depth=1.0,
                          tool_path_mode=ToolPathMode.OUTSIDE)
        ProfileGenerator(settings).generate(ProfileOperation(Ellipse(0, 0, 10, 5), outside), recorder)
        cut = [(x, y) for x, y, z in positions(recorder.events) if z == -1.0]
        assert cut
        for x, y in cut:
            assert (x / 11.0) ** 2 + (y / 6.0) ** 2 == pytest.approx(1.0)
        assert max(x for x, _ in cut) == pytest.approx(11.0)

    def test_on_line_rectangle(self, params, settings, recorder, positions):
        """On the line the tool follows the rectangle corners."""
        ProfileGenerator(settings).generate(ProfileOperation(Rectangle(20, 10), params), recorder)
        cut = {(x, y) for x, y, z in positions(recorder.events) if z == -2.0}
        assert cut == {(-10.0, -5.0), (10.0, -5.0), (10.0, 5.0), (-10.0, 5.0)}

    def test_inside_too_small(self, params, settings, recorder):
        """Inside compensation larger than the shape is an error."""
        inside = replace(params, tool_path_mode=ToolPathMode.INSIDE)
        with pytest.raises(DegenerateGeometryError):
            ProfileGenerator(settings).generate(ProfileOperation(Circle(0, 0, 1), inside), recorder)


class TestProfilePasses:
    """Tests for depth passes and entries."""

    def test_vertical_entry(self, circle, params, settings, recorder):
        """Each pass plunges straight down once."""
        ProfileGenerator(settings).generate(ProfileOperation(circle, params, name="Rim"), recorder)
        texts = [e.text for e in recorder.events if isinstance(e, Comment)]
        assert texts[0] == "Rim: profile on_line"
        assert "Pass 2, depth -2.000" in texts
        assert [e.z for e in z_plunges(recorder.events)] == [-1.0, -2.0]

    def test_retract_between_passes(self, circle, params, settings, recorder):
        """After each pass the tool lifts to the retract height above it."""
        ProfileGenerator(settings).generate(ProfileOperation(circle, params), recorder)
        retracts = [e.z for e in recorder.events if isinstance(e, RapidMove) and e.z is not None]
        assert 0.0 in retracts
        assert retracts[-1] == 5.0

    def test_angled_entry(self, circle, params, settings, recorder, positions):
        """A ramped entry never plunges vertically into the material."""
        angled = replace(params, entry_mode=EntryMode.ANGLED, entry_angle=45.0)
        ProfileGenerator(settings).generate(ProfileOperation(circle, angled), recorder)
        assert z_plunges(recorder.events) == []
        ramps = [e for e in recorder.events
                 if isinstance(e, LinearMove) and e.z is not None and e.x is not None]
        assert len(ramps) >= 8
        assert min(z for _, _, z in positions(recorder.events)) == -2.0

    def test_ramp_lap_closes(self, circle, params, settings, recorder, positions):
        """After the ramp a full lap brings the tool back to the ramp end."""
        angled = replace(params, entry_mode=EntryMode.ANGLED, entry_angle=45.0, total_depth=1.0)
        ProfileGenerator(settings).generate(ProfileOperation(circle, angled), recorder)
        at_depth = [p for p in positions(recorder.events) if p[2] == -1.0]
        assert at_depth[0][:2] == pytest.approx(at_depth[-1][:2])


class TestProfileArcs:
    """Tests for arc output."""

    def test_circle_arcs(self, circle, params, arc_settings, recorder):
        """Circles are cut as two semicircles per pass."""
        ProfileGenerator(arc_settings).generate(ProfileOperation(circle, params), recorder)
        arcs = [e for e in recorder.events if isinstance(e, ArcMove)]
        assert len(arcs) == 4
        assert (arcs[0].i, arcs[0].j) == (-10.0, 0.0)
        assert not any(a.clockwise for a in arcs)

    def test_arcs_disabled(self, circle, params, settings, recorder):
        """Without arc output circles are cut with lines only."""
        ProfileGenerator(settings).generate(ProfileOperation(circle, params), recorder)
        assert not any(isinstance(e, ArcMove) for e in recorder.events)

    def test_rounded_rectangle_clockwise(self, params, arc_settings, recorder):
        """Clockwise fillets are emitted as clockwise arcs."""
        cw = replace(params, direction=MillingDirection.CLOCKWISE)
        shape = RoundedRectangle(20, 10, 2, 2, 2, 2)
        ProfileGenerator(arc_settings).generate(ProfileOperation(shape, cw), recorder)
        arcs = [e for e in recorder.events if isinstance(e, ArcMove)]
        assert len(arcs) == 8
        assert all(a.clockwise for a in arcs)
