"""Radial pocket strategy: spokes from the center to the boundary."""
import logging
import math
from typing import List, Tuple

from ..utils.contour_utils import project_onto_ring, walk_ring_distance
from .base import StrategyContext, feed_through, plunge_at, trace_closing_contour

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

MIN_RAYS = 16


def ray_count(perimeter: float, step: float) -> int:
    """Number of spokes so neighbouring spokes meet the boundary about step apart."""
    if step <= 0:
        return MIN_RAYS
    return max(MIN_RAYS, int(math.ceil(perimeter / step)))


def ray_angles(count: int, sign: int) -> List[float]:
    return [sign * 2 * math.pi * i / count for i in range(count)]


class RadialStrategy:
    """Feed out along each spoke, follow the wall for one step, return.

    Every spoke starts with a plunge at the center; the layer ends with a
    full lap of the boundary.
    """

    def generate(self, ctx: StrategyContext) -> None:
        ring = ctx.outer_ring()
        if not ring:
            return
        geometry = ctx.geometry
        center = geometry.get_center()
        count = ray_count(geometry.get_perimeter(ctx.offset), ctx.step)
        logger.debug("Radial pass %d: %d rays", ctx.depth_pass.index, count)

        missed = 0
        for angle in ray_angles(count, ctx.direction.sign):
            hit = geometry.ray_intersection(angle, ctx.offset)
            if hit is None:
                missed += 1
                continue
            plunge_at(ctx, center)
            ctx.writer.feed_to(hit)
            if len(ring) > 1:
                projection = project_onto_ring(hit, ring)
                feed_through(ctx, walk_ring_distance(ring, projection.point, projection.edge, ctx.step))
            ctx.writer.retract(ctx.clear_z)

        if missed:
            message = f"Radial pass {ctx.depth_pass.index}: {missed} of {count} rays missed the boundary"
            logger.warning(message)
            ctx.warnings.append(message)
        trace_closing_contour(ctx, ring)
