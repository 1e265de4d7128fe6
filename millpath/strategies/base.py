"""Base classes and shared motion helpers for pocket strategies.

Every area-clearing strategy implements the PocketStrategyGenerator
protocol. A strategy clears one depth layer: it receives a StrategyContext
holding the shape, the current pass and the motion writer, and emits its
waypoints through the writer.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Tuple, TYPE_CHECKING

from ..models import MachiningParameters, MillingDirection, PocketStrategy
from ..motion import MotionWriter
from ..utils.contour_utils import project_onto_ring, ring_loop_from, shortest_ring_walk
from ..utils.multipass import Pass

if TYPE_CHECKING:
    from ..geometry import GeometryProvider

Point = Tuple[float, float]

# Depth comparison tolerance
Z_EPSILON = 1e-9
# Points closer than this to a ring count as lying on it
MIN_RING_TOLERANCE = 1e-3


@dataclass
class StrategyContext:
    """Everything a strategy needs to clear one depth layer.

    Attributes:
        geometry: Provider of the shape being pocketed
        depth_pass: The pass being cut
        offset: Effective radial offset of the outer boundary ring
        step: Stepover between neighbouring cuts
        params: Machining parameters of the operation
        writer: Motion writer of the operation
        warnings: Warning list of the running generator
    """
    geometry: 'GeometryProvider'
    depth_pass: Pass
    offset: float
    step: float
    params: MachiningParameters
    writer: MotionWriter
    warnings: List[str] = field(default_factory=list)

    @property
    def direction(self) -> MillingDirection:
        return self.params.direction

    @property
    def current_z(self) -> float:
        return self.depth_pass.current_z

    @property
    def next_z(self) -> float:
        return self.depth_pass.next_z

    @property
    def clear_z(self) -> float:
        """Z used for repositioning inside the pass."""
        return max(self.next_z + self.params.retract_height, self.current_z)

    @property
    def ring_tolerance(self) -> float:
        """How far from a ring the tool may be and still join it directly.

        Closed-form intersections lie on the true curve, which is up to a
        chord sagitta away from the discretised ring.
        """
        return max(MIN_RING_TOLERANCE, self.step * 0.5)

    def outer_ring(self) -> Optional[List[Point]]:
        return self.geometry.get_contour(self.offset, self.direction)

    def at_depth(self) -> bool:
        z = self.writer.z
        return z is not None and abs(z - self.next_z) <= Z_EPSILON


class PocketStrategyGenerator(Protocol):
    """Protocol for area-clearing strategies.

    Methods:
        generate: Clear the layer described by the context
    """

    def generate(self, ctx: StrategyContext) -> None:
        """Emit the clearing moves for one depth layer.

        Args:
            ctx: StrategyContext of the current pass
        """
        ...


def plunge_at(ctx: StrategyContext, point: Point) -> None:
    """Retract, rapid over point, rapid down to the top of the layer and feed in."""
    ctx.writer.reposition(point, ctx.clear_z, ctx.current_z, ctx.next_z)


def feed_through(ctx: StrategyContext, points: Sequence[Point]) -> None:
    for point in points:
        ctx.writer.feed_to(point)


def trace_ring(ctx: StrategyContext, ring: Sequence[Point]) -> None:
    """Cut once around a ring, starting and ending at ring[0]."""
    if len(ring) < 2:
        return
    feed_through(ctx, ring[1:])
    ctx.writer.feed_to(ring[0])


def walk_to(ctx: StrategyContext, ring: Sequence[Point], target: Point) -> None:
    """Move to target along the shorter way round the ring.

    Falls back to retract, reposition and plunge when the tool is not at
    depth on the ring.
    """
    position = ctx.writer.position
    path = None
    if position is not None and ctx.at_depth():
        path = shortest_ring_walk(ring, position, target, ctx.ring_tolerance)
    if path is None:
        plunge_at(ctx, target)
        return
    feed_through(ctx, path)


def trace_closing_contour(ctx: StrategyContext, ring: Optional[Sequence[Point]] = None) -> None:
    """Trace the outer boundary ring once to finish the layer.

    When the tool already sits on the ring at depth the loop starts from its
    projection; otherwise the tool is repositioned to the ring start.
    """
    if ring is None:
        ring = ctx.outer_ring()
    if not ring:
        return
    position = ctx.writer.position
    if position is not None and ctx.at_depth() and len(ring) > 1:
        projection = project_onto_ring(position, ring)
        if projection is not None and projection.distance <= ctx.ring_tolerance:
            feed_through(ctx, ring_loop_from(ring, projection))
            return
    plunge_at(ctx, ring[0])
    trace_ring(ctx, ring)


def stepped_values(start: float, stop: float, step: float) -> List[float]:
    """start, start + step, ... below stop, then stop itself."""
    values = []
    if step > 0:
        k = 0
        while start + k * step < stop - 1e-9:
            values.append(start + k * step)
            k += 1
    values.append(stop)
    return values


def create_strategy(kind: PocketStrategy) -> PocketStrategyGenerator:
    """Factory function to create the strategy for a pocket.

    Args:
        kind: PocketStrategy selected in the machining parameters

    Returns:
        Strategy instance implementing PocketStrategyGenerator
    """
    # Import here to avoid circular imports
    from .concentric import ConcentricStrategy
    from .spiral import SpiralStrategy
    from .radial import RadialStrategy
    from .lines import LinesStrategy, ZigZagStrategy

    strategies = {
        PocketStrategy.CONCENTRIC: ConcentricStrategy,
        PocketStrategy.SPIRAL: SpiralStrategy,
        PocketStrategy.RADIAL: RadialStrategy,
        PocketStrategy.LINES: LinesStrategy,
        PocketStrategy.ZIGZAG: ZigZagStrategy,
    }
    try:
        return strategies[kind]()
    except KeyError:
        raise ValueError(f"Unknown pocket strategy: {kind}") from None
