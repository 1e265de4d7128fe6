"""Profile generation: following a shape's outline pass by pass.

The tool runs on, outside or inside the outline (tool radius
compensation). Each pass enters either with a vertical plunge or with a ramp
along the contour, then cuts one full lap at depth.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from .errors import DegenerateGeometryError, ToolpathError
from .geometry import GeometryProvider, create_geometry, expand_shapes
from .models import EntryMode, GCodeSettings, MachiningParameters, PathMove, ProfileOperation
from .motion import MotionSink, MotionWriter
from .utils.lead_in import generate_ramp_points, ramp_length
from .utils.multipass import DepthStepper, Pass
from .utils.path_utils import rotate_path
from .utils.tool_compensation import get_compensation_offset
from .utils.validators import require_valid_parameters

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def emit_path(writer: MotionWriter, moves: Sequence[PathMove]) -> None:
    """Cut along path moves from the current position."""
    for move in moves:
        if move.move_type == 'arc':
            writer.arc(move.x, move.y, (move.arc_center_x, move.arc_center_y), move.clockwise)
        else:
            writer.feed_to((move.x, move.y))


class ProfileGenerator:
    """Generates motion for profile operations."""

    def __init__(
        self,
        settings: GCodeSettings,
        segment_length: Optional[float] = None,
        contour_tolerance: Optional[float] = None
    ):
        self.settings = settings
        self.segment_length = segment_length
        self.contour_tolerance = contour_tolerance
        self.warnings: List[str] = []

    def generate(self, operation: ProfileOperation, sink: MotionSink) -> None:
        """
        Emit the motion of one profile operation.

        Args:
            operation: Profile to cut
            sink: Receiver of the motion events

        Raises:
            ToolpathError: Invalid parameters, or a single shape that cannot
                be cut
        """
        params = operation.params
        require_valid_parameters(params)
        writer = MotionWriter(sink, self.settings, params)
        label = operation.name or 'Profile'
        shapes = expand_shapes(operation.shape)

        writer.comment(f"{label}: profile {params.tool_path_mode.value}")
        writer.retract(params.safe_z)
        for index, shape in enumerate(shapes, start=1):
            if len(shapes) > 1:
                writer.comment(f"Contour {index} of {len(shapes)}")
                try:
                    self._generate_shape(self._geometry(shape), params, writer)
                except ToolpathError as e:
                    message = f"{label}: contour {index} skipped: {e}"
                    logger.warning(message)
                    self.warnings.append(message)
                    writer.comment(message)
            else:
                self._generate_shape(self._geometry(shape), params, writer)
            writer.retract(params.safe_z)

    def _geometry(self, shape) -> GeometryProvider:
        return create_geometry(shape, self.segment_length, self.contour_tolerance)

    def _generate_shape(
        self,
        geometry: GeometryProvider,
        params: MachiningParameters,
        writer: MotionWriter
    ) -> None:
        tool_offset = get_compensation_offset(params.tool_diameter, params.tool_path_mode)
        allow_arcs = self.settings.allow_arcs and geometry.supports_arcs
        path = geometry.get_profile_path(-tool_offset, params.direction, allow_arcs)
        if path is None:
            raise DegenerateGeometryError(
                f"Geometry too small for tool diameter {params.tool_diameter:g}"
            )
        start, moves = path
        logger.debug(
            "Profile %s, %s entry, %d moves per lap",
            params.tool_path_mode.value, params.entry_mode.value, len(moves)
        )

        stepper = DepthStepper(params.contour_height, params.total_depth, params.step_depth)
        for depth_pass in stepper.passes():
            writer.comment(f"Pass {depth_pass.index}, depth {depth_pass.next_z:.{params.decimals}f}")
            if params.entry_mode is EntryMode.ANGLED:
                start, moves = self._ramp_entry(writer, params, depth_pass, start, moves)
            else:
                writer.reposition(
                    start,
                    clear_z=depth_pass.current_z + params.retract_height,
                    approach_z=depth_pass.current_z,
                    cut_z=depth_pass.next_z
                )
            emit_path(writer, moves)
            writer.retract(depth_pass.next_z + params.retract_height)

    def _ramp_entry(
        self,
        writer: MotionWriter,
        params: MachiningParameters,
        depth_pass: Pass,
        start: Point,
        moves: List[PathMove]
    ) -> Tuple[Point, List[PathMove]]:
        """
        Descend to the pass depth along the contour.

        Returns:
            The path restarted where the ramp ended, so the following lap
            begins there
        """
        retract_z = depth_pass.current_z + params.retract_height
        if not writer.is_at(start):
            if writer.z is None or writer.z < retract_z:
                writer.rapid(z=retract_z)
            writer.rapid(x=start[0], y=start[1])
        writer.rapid(z=retract_z)

        for x, y, z in generate_ramp_points(start, moves, retract_z, depth_pass.next_z, params.entry_angle):
            writer.feed(x=x, y=y, z=z)
        travelled = ramp_length(start, moves, retract_z - depth_pass.next_z, params.entry_angle)
        return rotate_path(start, moves, travelled)
