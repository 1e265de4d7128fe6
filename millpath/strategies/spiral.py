"""Spiral pocket strategy.

An Archimedean spiral r = b * theta grows from the pocket center until it
passes the farthest point of the boundary ring. Where the spiral leaves the
pocket the tool follows the ring until the spiral comes back in.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..models import MillingDirection
from ..utils.contour_utils import (
    RingHit,
    distance,
    point_in_polygon,
    segment_ring_crossings,
    shortest_ring_walk,
)
from .base import StrategyContext, feed_through, plunge_at, trace_closing_contour

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

SAMPLES_PER_REVOLUTION = 128


@dataclass(frozen=True)
class SpiralCrossing:
    """A stretch where the spiral runs outside the boundary ring.

    Attributes:
        exit: Where the spiral leaves the ring
        entry: Where it comes back in
        revolution: Zero-based revolution of the exit sample
    """
    exit: Point
    entry: Point
    revolution: int


@dataclass
class SpiralPlan:
    """Planned spiral moves for one layer.

    steps holds ('plunge', point) and ('feed', point) entries in order.
    """
    steps: List[Tuple[str, Point]] = field(default_factory=list)
    crossings: List[SpiralCrossing] = field(default_factory=list)

    def count_by_revolution(self) -> Dict[int, int]:
        counts = {}
        for crossing in self.crossings:
            counts[crossing.revolution] = counts.get(crossing.revolution, 0) + 1
        return counts


def spiral_samples(
    center: Point,
    step: float,
    max_radius: float,
    direction: MillingDirection
) -> List[Point]:
    """
    Sample the spiral from the center until the radius exceeds max_radius.

    Args:
        center: Spiral origin
        step: Radial distance between neighbouring turns
        max_radius: Radius the spiral must pass
        direction: Turning direction of the spiral

    Returns:
        Points at SAMPLES_PER_REVOLUTION samples per turn, starting at center
    """
    b = step / (2 * math.pi)
    d_theta = 2 * math.pi / SAMPLES_PER_REVOLUTION
    count = int(math.ceil(max_radius / b / d_theta)) + 1
    sign = direction.sign
    points = []
    for k in range(count + 1):
        theta = k * d_theta
        r = b * theta
        points.append((center[0] + r * math.cos(sign * theta), center[1] + r * math.sin(sign * theta)))
    return points


def exit_crossing(inside: Point, outside: Point, ring: Sequence[Point]) -> Optional[RingHit]:
    """Where the chord inside -> outside leaves the ring.

    A chord may cross the ring several times; the crossing nearest the
    inside sample wins.
    """
    crossings = segment_ring_crossings(inside, outside, ring)
    return crossings[0] if crossings else None


def entry_crossing(outside: Point, inside: Point, ring: Sequence[Point]) -> Optional[RingHit]:
    """Where the chord outside -> inside comes back in: the last crossing."""
    crossings = segment_ring_crossings(outside, inside, ring)
    return crossings[-1] if crossings else None


def plan_spiral(
    ring: Sequence[Point],
    center: Point,
    step: float,
    direction: MillingDirection,
    walk_tolerance: float = 1e-3
) -> SpiralPlan:
    """
    Plan the spiral for one layer without emitting anything.

    Args:
        ring: Outer boundary ring, oriented in the milling direction
        center: Spiral origin
        step: Stepover
        direction: Milling direction
        walk_tolerance: Distance within which crossing points count as on the ring

    Returns:
        SpiralPlan with the moves and every exit/entry pair
    """
    plan = SpiralPlan()
    if len(ring) < 3 or step <= 0:
        return plan
    max_radius = max(distance(center, p) for p in ring)
    samples = spiral_samples(center, step, max_radius, direction)

    previous = samples[0]
    previous_inside = point_in_polygon(previous[0], previous[1], ring)
    if previous_inside:
        plan.steps.append(('plunge', previous))
    pending_exit: Optional[Tuple[Point, int]] = None

    for k in range(1, len(samples)):
        point = samples[k]
        inside = point_in_polygon(point[0], point[1], ring)
        if previous_inside and inside:
            # Cut straight; a notch narrower than one chord is not followed
            plan.steps.append(('feed', point))
        elif previous_inside and not inside:
            hit = exit_crossing(previous, point, ring)
            if hit is not None:
                plan.steps.append(('feed', hit.point))
                pending_exit = (hit.point, (k - 1) // SAMPLES_PER_REVOLUTION)
        elif not previous_inside and inside:
            hit = entry_crossing(previous, point, ring)
            entry = hit.point if hit is not None else point
            walk = None
            if pending_exit is not None:
                walk = shortest_ring_walk(ring, pending_exit[0], entry, walk_tolerance)
            if walk is None:
                plan.steps.append(('plunge', entry))
            else:
                plan.crossings.append(SpiralCrossing(pending_exit[0], entry, pending_exit[1]))
                plan.steps.extend(('feed', p) for p in walk)
            pending_exit = None
            plan.steps.append(('feed', point))
        previous = point
        previous_inside = inside
    return plan


class SpiralStrategy:
    """Archimedean spiral from the center, finished by one boundary lap."""

    def generate(self, ctx: StrategyContext) -> None:
        ring = ctx.outer_ring()
        if not ring:
            return
        plan = plan_spiral(ring, ctx.geometry.get_center(), ctx.step, ctx.direction)
        logger.debug(
            "Spiral pass %d: %d moves, %d boundary crossings",
            ctx.depth_pass.index, len(plan.steps), len(plan.crossings)
        )
        for kind, point in plan.steps:
            if kind == 'plunge':
                plunge_at(ctx, point)
            else:
                feed_through(ctx, [point])
        trace_closing_contour(ctx, ring)
