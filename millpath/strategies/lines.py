"""Parallel-line pocket strategies (Lines and ZigZag)."""
import logging
import math
from typing import List, Tuple

from ..utils.contour_utils import projected_extent
from .base import StrategyContext, plunge_at, stepped_values, trace_closing_contour, walk_to

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

# Lines shorter than this are tangents and are skipped
MIN_LINE_LENGTH = 1e-9


def line_axes(line_angle: float, rotation: float) -> Tuple[Point, Point]:
    """
    Cutting direction and line normal for a line angle.

    Args:
        line_angle: Line angle in degrees
        rotation: Shape rotation in degrees, added to the line angle

    Returns:
        (direction, normal) unit vectors
    """
    angle = math.radians(line_angle + rotation)
    direction = (math.cos(angle), math.sin(angle))
    normal = (-direction[1], direction[0])
    return direction, normal


def plan_lines(ctx: StrategyContext, ring: List[Point]) -> List[Tuple[Point, Point]]:
    """
    Segments (start, end) of the parallel lines covering the layer.

    Lines are spaced step apart along the normal over the projected extent
    of the ring, the last one exactly at the far extent. Each segment runs
    between the first and last crossing of its line with the boundary.
    """
    geometry = ctx.geometry
    center = geometry.get_center()
    direction, normal = line_axes(ctx.params.line_angle, geometry.get_rotation())
    low, high = projected_extent(ring, normal, center)

    segments = []
    for position in stepped_values(low, high, ctx.step):
        origin = (center[0] + normal[0] * position, center[1] + normal[1] * position)
        hits = geometry.line_intersections(origin, direction, ctx.offset)
        if len(hits) < 2 or hits[-1][0] - hits[0][0] < MIN_LINE_LENGTH:
            continue
        segments.append((hits[0][1], hits[-1][1]))
    return segments


class LinesStrategy:
    """One-way parallel lines; the tool retracts after every line."""

    alternate = False

    def segments(self, ctx: StrategyContext, ring: List[Point]) -> List[Tuple[Point, Point]]:
        segments = plan_lines(ctx, ring)
        if self.alternate:
            segments = [
                (end, start) if index % 2 else (start, end)
                for index, (start, end) in enumerate(segments)
            ]
        return segments

    def _connect(self, ctx: StrategyContext, ring: List[Point], start: Point, first: bool) -> None:
        plunge_at(ctx, start)

    def generate(self, ctx: StrategyContext) -> None:
        ring = ctx.outer_ring()
        if not ring:
            return
        segments = self.segments(ctx, ring)
        logger.debug(
            "%s pass %d: %d lines", type(self).__name__, ctx.depth_pass.index, len(segments)
        )
        for index, (start, end) in enumerate(segments):
            self._connect(ctx, ring, start, index == 0)
            ctx.writer.feed_to(end)
        trace_closing_contour(ctx, ring)


class ZigZagStrategy(LinesStrategy):
    """Lines in alternating directions joined by walks along the boundary."""

    alternate = True

    def _connect(self, ctx: StrategyContext, ring: List[Point], start: Point, first: bool) -> None:
        if first or len(ring) < 2:
            plunge_at(ctx, start)
        else:
            walk_to(ctx, ring, start)
