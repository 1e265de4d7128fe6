"""Multi-pass depth calculation utilities."""
import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

logger = logging.getLogger(__name__)

DEFAULT_STEP_PERCENT = 40.0
Z_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Pass:
    """One depth layer of a multi-pass cut.

    Attributes:
        current_z: Z at the top of the layer (where the previous pass ended)
        next_z: Z this pass cuts down to
        index: One-based pass number
        taper_offset: Extra radial offset from the wall taper at next_z
        effective_offset: Tool radius plus taper offset
    """
    current_z: float
    next_z: float
    index: int
    taper_offset: float
    effective_offset: float


def calculate_step(tool_diameter: float, step_percent: float) -> float:
    """
    Calculate the stepover between neighbouring cuts.

    Args:
        tool_diameter: Tool diameter
        step_percent: Stepover as a percentage of the diameter (<= 0 means 40%)

    Returns:
        Stepover distance
    """
    percent = step_percent if step_percent > 0 else DEFAULT_STEP_PERCENT
    step = tool_diameter * percent / 100.0
    if step < 1e-6:
        step = tool_diameter * 0.4
    return step


def calculate_taper_offset(depth_from_top: float, taper_angle: float) -> float:
    """
    Radial offset that produces a tapered wall.

    Args:
        depth_from_top: Distance below the contour height
        taper_angle: Wall taper angle in degrees (0 = vertical wall)

    Returns:
        Offset to add to the tool radius at that depth
    """
    if taper_angle == 0:
        return 0.0
    return depth_from_top * math.tan(math.radians(taper_angle))


def calculate_num_passes(total_depth: float, step_depth: float) -> int:
    """
    Number of passes needed to cut total_depth in steps of step_depth.

    Returns:
        Pass count (0 when there is nothing to cut)
    """
    if total_depth <= 0:
        return 0
    if step_depth <= 0:
        return 1
    return max(1, math.ceil(total_depth / step_depth - 1e-9))


class DepthStepper:
    """Iterates Z from the contour height down to the final depth.

    Every step yields a Pass. When is_degenerate is given it is checked
    against each pass's effective offset; the first degenerate pass stops the
    iteration, and stopped_early / stop_reason record why.

    Example:
        stepper = DepthStepper(0.0, 3.0, 1.0, tool_radius=2.0)
        [p.next_z for p in stepper.passes()]  # [-1.0, -2.0, -3.0]
    """

    def __init__(
        self,
        contour_height: float,
        total_depth: float,
        step_depth: float,
        tool_radius: float = 0.0,
        taper_angle: float = 0.0,
        is_degenerate: Optional[Callable[[float], bool]] = None,
        taper_origin: Optional[float] = None
    ):
        self.contour_height = contour_height
        self.total_depth = total_depth
        self.step_depth = step_depth
        self.tool_radius = tool_radius
        self.taper_angle = taper_angle
        self.is_degenerate = is_degenerate
        # Height the wall taper is measured from (a layer may start below it)
        self.taper_origin = contour_height if taper_origin is None else taper_origin
        self.stopped_early = False
        self.stop_reason: Optional[str] = None
        self.stopped_at: Optional[Pass] = None

    @property
    def final_z(self) -> float:
        return self.contour_height - self.total_depth

    def passes(self) -> Iterator[Pass]:
        """Yield passes from the top down; the last one ends exactly at final_z."""
        final_z = self.final_z
        current_z = self.contour_height
        index = 0
        while current_z > final_z + Z_TOLERANCE:
            next_z = current_z - self.step_depth if self.step_depth > 0 else final_z
            # Clamp, absorbing float residue from repeated subtraction
            if next_z < final_z + Z_TOLERANCE:
                next_z = final_z
            index += 1
            taper = calculate_taper_offset(self.taper_origin - next_z, self.taper_angle)
            current = Pass(
                current_z=current_z,
                next_z=next_z,
                index=index,
                taper_offset=taper,
                effective_offset=self.tool_radius + taper
            )
            if self.is_degenerate is not None and self.is_degenerate(current.effective_offset):
                self.stopped_early = True
                self.stopped_at = current
                self.stop_reason = (
                    f"insufficient remaining material thickness at pass {index} "
                    f"(depth {next_z:g}): offset {current.effective_offset:.4f} "
                    f"consumes the shape"
                )
                logger.warning(self.stop_reason)
                return
            yield current
            current_z = next_z
