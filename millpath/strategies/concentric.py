"""Concentric pocket strategy.

Clears the pocket with offset copies of the boundary, from the innermost
ring outwards, so the final ring is the finished wall.
"""
import logging
from typing import List, Tuple

from ..utils.tool_compensation import signed_area
from .base import StrategyContext, plunge_at, stepped_values, trace_ring

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def concentric_offsets(max_offset: float, step: float) -> List[float]:
    """
    Extra offsets of the concentric rings, measured from the outer ring.

    Args:
        max_offset: Offset at which the shape collapses
        step: Stepover

    Returns:
        0, step, 2*step, ... strictly increasing and ending at max_offset
    """
    if max_offset <= 0:
        return [0.0]
    return stepped_values(0.0, max_offset, step)


class ConcentricStrategy:
    """Offset rings traced innermost first.

    Rings of rectangles share their start corner on the diagonal, so the
    tool feeds straight to the next ring; other shapes retract between
    rings.
    """

    def rings(self, ctx: StrategyContext) -> List[List[Point]]:
        """Rings to trace in cutting order (the outer boundary last)."""
        geometry = ctx.geometry
        max_offset = geometry.get_max_offset(ctx.offset)
        rings = []
        for extra in reversed(concentric_offsets(max_offset, ctx.step)):
            ring = geometry.get_contour(ctx.offset + extra, ctx.direction)
            if not ring:
                continue
            if (geometry.collapse_by_area and extra > 0 and len(ring) >= 3
                    and abs(signed_area(ring)) <= ctx.step ** 2):
                continue
            rings.append(ring)
        return rings

    def generate(self, ctx: StrategyContext) -> None:
        rings = self.rings(ctx)
        logger.debug("Concentric pass %d: %d rings", ctx.depth_pass.index, len(rings))
        direct = ctx.geometry.direct_ring_transition
        for index, ring in enumerate(rings):
            if index > 0 and direct and ctx.at_depth():
                ctx.writer.feed_to(ring[0])
            else:
                plunge_at(ctx, ring[0])
            trace_ring(ctx, ring)
