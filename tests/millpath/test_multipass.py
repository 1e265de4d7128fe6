"""Tests for millpath/utils/multipass.py."""
import pytest

from millpath.geometry import RectangleGeometry
from millpath.models import Rectangle
from millpath.utils.multipass import (
    DepthStepper,
    calculate_num_passes,
    calculate_step,
    calculate_taper_offset,
)


class TestCalculateStep:
    """Tests for the stepover calculation."""

    def test_percentage_of_diameter(self):
        """25% of a 4 mm tool is 1 mm."""
        assert calculate_step(4.0, 25.0) == pytest.approx(1.0)

    def test_non_positive_percentage_defaults(self):
        """Zero or negative percentages fall back to 40%."""
        assert calculate_step(4.0, 0.0) == pytest.approx(1.6)
        assert calculate_step(4.0, -5.0) == pytest.approx(1.6)


class TestPassCounts:
    """Tests for pass counting and taper offsets."""

    def test_num_passes(self):
        """Partial steps round up; no depth means no passes."""
        assert calculate_num_passes(3.0, 1.0) == 3
        assert calculate_num_passes(2.5, 1.0) == 3
        assert calculate_num_passes(0.0, 1.0) == 0
        assert calculate_num_passes(2.0, 0.0) == 1

    def test_taper_offset(self):
        """Vertical walls need no offset; 45 degrees grows one for one."""
        assert calculate_taper_offset(10.0, 0.0) == 0.0
        assert calculate_taper_offset(10.0, 45.0) == pytest.approx(10.0)


class TestDepthStepper:
    """Tests for DepthStepper."""

    def test_even_steps(self):
        """Three full steps from the contour height."""
        passes = list(DepthStepper(0.0, 3.0, 1.0).passes())
        assert [p.next_z for p in passes] == [-1.0, -2.0, -3.0]
        assert [p.current_z for p in passes] == [0.0, -1.0, -2.0]
        assert [p.index for p in passes] == [1, 2, 3]

    def test_last_pass_clamped(self):
        """The last pass is shortened to end exactly at the final depth."""
        passes = list(DepthStepper(0.0, 2.5, 1.0).passes())
        assert [p.next_z for p in passes] == [-1.0, -2.0, -2.5]

    def test_float_residue_absorbed(self):
        """Repeated subtraction does not add a sliver pass."""
        stepper = DepthStepper(0.0, 0.3, 0.1)
        passes = list(stepper.passes())
        assert len(passes) == 3
        assert passes[-1].next_z == stepper.final_z

    def test_zero_step_single_pass(self):
        """A zero step depth cuts everything in one pass."""
        passes = list(DepthStepper(0.0, 2.0, 0.0).passes())
        assert [p.next_z for p in passes] == [-2.0]

    def test_no_depth_no_passes(self):
        """Nothing to cut yields nothing."""
        assert list(DepthStepper(0.0, 0.0, 1.0).passes()) == []

    def test_raised_contour_height(self):
        """Depth is measured down from the contour height."""
        stepper = DepthStepper(5.0, 2.0, 1.0)
        assert [p.next_z for p in stepper.passes()] == [4.0, 3.0]
        assert stepper.final_z == 3.0

    def test_taper_grows_offset(self):
        """A 45 degree taper adds the depth below the top to the offset."""
        passes = list(DepthStepper(0.0, 3.0, 1.0, tool_radius=2.0, taper_angle=45.0).passes())
        assert [p.effective_offset for p in passes] == pytest.approx([3.0, 4.0, 5.0])
        assert [p.taper_offset for p in passes] == pytest.approx([1.0, 2.0, 3.0])

    def test_taper_origin(self):
        """A layer starting below the top still measures taper from the top."""
        stepper = DepthStepper(-2.0, 1.0, 1.0, tool_radius=1.0, taper_angle=45.0, taper_origin=0.0)
        passes = list(stepper.passes())
        assert passes[0].effective_offset == pytest.approx(4.0)


class TestTaperStop:
    """Tests for stopping when the taper consumes the shape."""

    def _stepper(self, depth):
        # 6 mm tool in an 8 mm wide slot with a 5 degree taper
        geometry = RectangleGeometry(Rectangle(8.0, 30.0))
        return DepthStepper(0.0, depth, 1.0, tool_radius=3.0, taper_angle=5.0,
                            is_degenerate=geometry.is_degenerate)

    def test_shallow_pocket_completes(self):
        """At 10 mm deep the taper never reaches the slot walls."""
        stepper = self._stepper(10.0)
        passes = list(stepper.passes())
        assert len(passes) == 10
        assert not stepper.stopped_early
        assert stepper.stop_reason is None

    def test_deep_pocket_stops_early(self):
        """At 20 mm deep the twelfth pass would need an offset past the walls."""
        stepper = self._stepper(20.0)
        passes = list(stepper.passes())
        assert len(passes) == 11
        assert stepper.stopped_early
        assert stepper.stopped_at.index == 12
        assert stepper.stopped_at.next_z == pytest.approx(-12.0)
        assert "insufficient remaining material thickness" in stepper.stop_reason

    def test_offsets_never_shrink(self):
        """Effective offsets are non-decreasing with depth."""
        offsets = [p.effective_offset for p in self._stepper(20.0).passes()]
        assert offsets == sorted(offsets)
