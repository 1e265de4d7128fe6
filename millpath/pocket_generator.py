"""Pocket generation: area clearing of closed shapes, layer by layer.

A pocket is roughed with the selected strategy and, when requested,
finished at the bottom and/or along the walls with the stock the roughing
left behind.
"""
import logging
import math
from typing import List, Optional

from .errors import DegenerateGeometryError, ToolpathError
from .geometry import GeometryProvider, create_geometry, expand_shapes
from .models import FinishingMode, GCodeSettings, MachiningParameters, PocketOperation
from .motion import MotionSink, MotionWriter
from .strategies import StrategyContext, create_strategy
from .strategies.base import plunge_at, trace_ring
from .utils.multipass import DepthStepper, calculate_step
from .utils.validators import require_valid_parameters

logger = logging.getLogger(__name__)

# Roughing always leaves at least this much depth for the bottom finish
MIN_ROUGHING_DEPTH = 1e-6


class PocketGenerator:
    """Generates motion for pocket operations."""

    def __init__(
        self,
        settings: GCodeSettings,
        segment_length: Optional[float] = None,
        contour_tolerance: Optional[float] = None
    ):
        """
        Initialize the generator.

        Args:
            settings: Output flags (comments, arcs)
            segment_length: Chord length for curve discretisation
            contour_tolerance: Closing tolerance for arbitrary contours
        """
        self.settings = settings
        self.segment_length = segment_length
        self.contour_tolerance = contour_tolerance
        self.warnings: List[str] = []

    def _warn(self, writer: MotionWriter, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)
        writer.comment(message)

    def generate(self, operation: PocketOperation, sink: MotionSink) -> None:
        """
        Emit the motion of one pocket operation.

        A ContourGroup is machined contour by contour; a contour that fails
        is reported and skipped while the others proceed.

        Args:
            operation: Pocket to machine
            sink: Receiver of the motion events

        Raises:
            ToolpathError: Invalid parameters, or a single shape that cannot
                be machined
        """
        params = operation.params
        require_valid_parameters(params)
        writer = MotionWriter(sink, self.settings, params)
        label = operation.name or 'Pocket'
        shapes = expand_shapes(operation.shape)

        writer.comment(f"{label}: {params.strategy.value} pocket")
        writer.retract(params.safe_z)
        for index, shape in enumerate(shapes, start=1):
            if len(shapes) > 1:
                writer.comment(f"Contour {index} of {len(shapes)}")
                try:
                    self._generate_shape(self._geometry(shape), params, writer, label)
                except ToolpathError as e:
                    self._warn(writer, f"{label}: contour {index} skipped: {e}")
            else:
                self._generate_shape(self._geometry(shape), params, writer, label)
            writer.retract(params.safe_z)

    def _geometry(self, shape) -> GeometryProvider:
        return create_geometry(shape, self.segment_length, self.contour_tolerance)

    def _generate_shape(
        self,
        geometry: GeometryProvider,
        params: MachiningParameters,
        writer: MotionWriter,
        label: str
    ) -> None:
        """Roughing and finishing of one closed shape."""
        if geometry.is_degenerate(params.tool_radius):
            raise DegenerateGeometryError(
                f"Geometry too small for tool diameter {params.tool_diameter:g}"
            )

        roughing = params.roughing_enabled
        finishing = params.finishing_enabled
        allowance = max(0.0, params.finish_allowance)
        if not roughing and not finishing:
            roughing = True
            allowance = 0.0

        if roughing:
            depth_allowance = min(allowance, max(0.0, params.total_depth - MIN_ROUGHING_DEPTH))
            if depth_allowance > 0 and geometry.is_degenerate(params.tool_radius + depth_allowance):
                writer.comment("Pocket too small after roughing allowance, skipping")
                message = f"{label}: pocket too small after roughing allowance, skipping"
                logger.warning(message)
                self.warnings.append(message)
                return
            self._run_layers(
                geometry, params, writer, label,
                contour_height=params.contour_height,
                total_depth=params.total_depth - depth_allowance,
                extra_offset=depth_allowance
            )

        if finishing and allowance > 0:
            depth_allowance = min(allowance, max(0.0, params.total_depth))
            if depth_allowance < MIN_ROUGHING_DEPTH:
                return
            if params.finishing_mode in (FinishingMode.BOTTOM, FinishingMode.ALL):
                if not geometry.is_degenerate(params.tool_radius + allowance):
                    writer.comment("Finishing bottom")
                    self._run_layers(
                        geometry, params, writer, label,
                        contour_height=params.contour_height - (params.total_depth - depth_allowance),
                        total_depth=depth_allowance,
                        extra_offset=allowance
                    )
            if params.finishing_mode in (FinishingMode.WALLS, FinishingMode.ALL):
                self._finish_walls(geometry, params, writer, label, allowance)

    def _run_layers(
        self,
        geometry: GeometryProvider,
        params: MachiningParameters,
        writer: MotionWriter,
        label: str,
        contour_height: float,
        total_depth: float,
        extra_offset: float
    ) -> None:
        """Clear contour_height down by total_depth with the selected strategy."""
        step = calculate_step(params.tool_diameter, params.step_percent)
        strategy = create_strategy(params.strategy)
        stepper = DepthStepper(
            contour_height,
            total_depth,
            params.step_depth,
            tool_radius=params.tool_radius + extra_offset,
            taper_angle=params.wall_taper_angle,
            is_degenerate=geometry.is_degenerate,
            taper_origin=params.contour_height
        )
        logger.debug(
            "%s: %s strategy, step %.4f, layer %g to %g",
            label, params.strategy.value, step, contour_height, stepper.final_z
        )

        for depth_pass in stepper.passes():
            writer.comment(f"Pass {depth_pass.index}, depth {depth_pass.next_z:.{params.decimals}f}")
            logger.debug("%s: pass %d to Z %g", label, depth_pass.index, depth_pass.next_z)
            ctx = StrategyContext(
                geometry=geometry,
                depth_pass=depth_pass,
                offset=depth_pass.effective_offset,
                step=step,
                params=params,
                writer=writer,
                warnings=self.warnings
            )
            strategy.generate(ctx)
            writer.retract(depth_pass.next_z + params.retract_height)

        if stepper.stopped_early:
            writer.comment("Taper offset too large, stopping")
            self.warnings.append(f"{label}: {stepper.stop_reason}")

    def _finish_walls(
        self,
        geometry: GeometryProvider,
        params: MachiningParameters,
        writer: MotionWriter,
        label: str,
        allowance: float
    ) -> None:
        """
        Remove the wall stock in radial passes over the full pocket depth.

        Args:
            allowance: Radial stock left on the walls by roughing
        """
        radial_step = params.step_depth if params.step_depth > 0 else params.tool_diameter * 0.25
        radial_passes = max(1, int(math.ceil(allowance / radial_step - 1e-9)))
        stock_step = allowance / radial_passes
        step = calculate_step(params.tool_diameter, params.step_percent)

        for radial_pass in range(1, radial_passes + 1):
            remaining = max(0.0, allowance - radial_pass * stock_step)
            writer.comment(
                f"Finishing walls radial pass {radial_pass}/{radial_passes}, "
                f"stock {remaining:.{params.decimals}f}"
            )
            stepper = DepthStepper(
                params.contour_height,
                params.total_depth,
                params.step_depth,
                tool_radius=params.tool_radius + remaining,
                taper_angle=params.wall_taper_angle,
                is_degenerate=geometry.is_degenerate
            )
            for depth_pass in stepper.passes():
                ring = geometry.get_contour(depth_pass.effective_offset, params.direction)
                if not ring:
                    continue
                ctx = StrategyContext(
                    geometry=geometry,
                    depth_pass=depth_pass,
                    offset=depth_pass.effective_offset,
                    step=step,
                    params=params,
                    writer=writer,
                    warnings=self.warnings
                )
                plunge_at(ctx, ring[0])
                trace_ring(ctx, ring)
            writer.retract(stepper.final_z + params.retract_height)
            if stepper.stopped_early:
                writer.comment("Taper offset too large, stopping finishing walls")
                self.warnings.append(f"{label}: {stepper.stop_reason}")
                return
