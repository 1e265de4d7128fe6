"""Tool compensation utilities for offset calculations."""
import math
from typing import List, Optional, Sequence, Tuple

from ..errors import NumericalDegeneracyError
from ..models import MillingDirection, ToolPathMode

Point = Tuple[float, float]

# Edges shorter than this have no usable direction
EDGE_EPSILON = 1e-9


def get_compensation_offset(tool_diameter: float, mode: ToolPathMode) -> float:
    """
    Get the radial offset for tool compensation.

    The offset is added to the feature outline to get the toolpath.

    Args:
        tool_diameter: Tool diameter
        mode: Where the tool runs relative to the line

    Returns:
        Offset amount:
        - 0 for ON_LINE (tool center follows the line)
        - +tool_radius for OUTSIDE (grow path, cut outside)
        - -tool_radius for INSIDE (shrink path, cut inside)
    """
    tool_radius = tool_diameter / 2.0
    if mode is ToolPathMode.OUTSIDE:
        return tool_radius
    elif mode is ToolPathMode.INSIDE:
        return -tool_radius
    return 0.0


def signed_area(points: Sequence[Point]) -> float:
    """
    Signed area of a ring (shoelace formula).

    Positive for counter-clockwise rings, negative for clockwise ones. A
    repeated closing point does not change the result.
    """
    area = 0.0
    n = len(points)
    for i in range(n):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % n]
        area += x1 * y2 - x2 * y1
    return area / 2.0


def is_clockwise(points: Sequence[Point]) -> bool:
    """True when the ring winds clockwise (negative signed area)."""
    return signed_area(points) < 0


def orient_contour(points: Sequence[Point], direction: MillingDirection) -> List[Point]:
    """
    Return the ring ordered in the requested milling direction.

    The first point is kept as the first point; reversing keeps it in place
    and reverses the rest.
    """
    ring = list(points)
    want_clockwise = direction is MillingDirection.CLOCKWISE
    if len(ring) >= 3 and is_clockwise(ring) != want_clockwise:
        ring = [ring[0]] + ring[:0:-1]
    return ring


def calculate_line_normal(start: Point, end: Point) -> Optional[Point]:
    """
    Unit normal on the left side of the direction start -> end.

    Returns:
        (nx, ny), or None when the segment has no length
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length = math.hypot(dx, dy)
    if length < EDGE_EPSILON:
        return None
    return (-dy / length, dx / length)


def _open_ring(points: Sequence[Point], tolerance: float = 1e-9) -> List[Point]:
    ring = list(points)
    if len(ring) > 1 and math.hypot(ring[0][0] - ring[-1][0], ring[0][1] - ring[-1][1]) <= tolerance:
        ring = ring[:-1]
    return ring


def offset_contour(points: Sequence[Point], offset: float) -> List[Point]:
    """
    Grow or shrink a closed ring by a signed distance.

    Each vertex moves along the average of the unit normals of its two
    adjacent edges (a miter direction). The direction is oriented inward for
    either winding, then flipped for a positive (outward) offset. Vertex
    count and order are preserved. This is a first-order approximation:
    self-intersections at sharp concave corners or at offsets larger than
    the local feature size are not detected.

    Args:
        points: Ring of (x, y) points, with or without a repeated closing point
        offset: Signed distance, negative = inward, positive = outward

    Returns:
        Offset ring with the same number of vertices as the open input ring

    Raises:
        NumericalDegeneracyError: No edge of the ring has a usable length
    """
    ring = _open_ring(points)
    n = len(ring)
    normals: List[Optional[Point]] = [
        calculate_line_normal(ring[i], ring[(i + 1) % n]) for i in range(n)
    ]
    if all(normal is None for normal in normals):
        raise NumericalDegeneracyError("Contour has no edge with a usable length")

    # Fill degenerate edges from the nearest usable neighbour
    for i in range(n):
        if normals[i] is None:
            for k in range(1, n):
                candidate = normals[(i - k) % n]
                if candidate is not None:
                    normals[i] = candidate
                    break

    # Left normals point inward on a CCW ring
    sign = -1.0 if is_clockwise(ring) else 1.0
    if offset > 0:
        sign = -sign
    distance = abs(offset)

    result = []
    for i in range(n):
        n_in = normals[(i - 1) % n]
        n_out = normals[i]
        mx = n_in[0] + n_out[0]
        my = n_in[1] + n_out[1]
        length = math.hypot(mx, my)
        if length < EDGE_EPSILON:
            # Edges fold back on each other, keep the incoming normal
            mx, my = n_in
        else:
            mx /= length
            my /= length
        x, y = ring[i]
        result.append((x + sign * mx * distance, y + sign * my * distance))
    return result
