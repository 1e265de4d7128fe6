"""Polygon ring helpers: intersections, projection and walking along rings.

A ring is an open list of (x, y) points; edge i runs from ring[i] to
ring[(i + 1) % len(ring)].
"""
import math
from typing import List, NamedTuple, Optional, Sequence, Tuple

from ..models import MillingDirection

Point = Tuple[float, float]

INTERSECTION_EPSILON = 1e-12
# Intersections closer than this along a line are treated as one
DUPLICATE_TOLERANCE = 1e-7


class RingHit(NamedTuple):
    """An intersection with a ring edge.

    t is the parameter along the query segment/ray/line, edge the ring edge
    index and u the parameter along that edge (0 at ring[edge]).
    """
    t: float
    point: Point
    edge: int
    u: float


class RingProjection(NamedTuple):
    """Closest point of a ring to a query point."""
    point: Point
    edge: int
    u: float
    distance: float


def distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def is_closed_ring(points: Sequence[Point], tolerance: float) -> bool:
    """True when there are at least 3 points and the first matches the last."""
    if len(points) < 3:
        return False
    return distance(points[0], points[-1]) <= tolerance


def open_ring(points: Sequence[Point], tolerance: float = 1e-9) -> List[Point]:
    """Drop a repeated closing point and consecutive duplicates."""
    ring: List[Point] = []
    for p in points:
        if not ring or distance(ring[-1], p) > tolerance:
            ring.append((p[0], p[1]))
    if len(ring) > 1 and distance(ring[0], ring[-1]) <= tolerance:
        ring.pop()
    return ring


def ring_perimeter(ring: Sequence[Point]) -> float:
    """Length of the closed ring including the closing edge."""
    n = len(ring)
    if n < 2:
        return 0.0
    return sum(distance(ring[i], ring[(i + 1) % n]) for i in range(n))


def path_length(points: Sequence[Point]) -> float:
    """Length of an open polyline."""
    return sum(distance(points[i], points[i + 1]) for i in range(len(points) - 1))


def ring_centroid(ring: Sequence[Point]) -> Point:
    """
    Area centroid of a ring (shoelace formula).

    Falls back to the vertex mean when the area is close to zero.
    """
    n = len(ring)
    if n == 0:
        return (0.0, 0.0)
    area = 0.0
    cx = 0.0
    cy = 0.0
    for i in range(n):
        x1, y1 = ring[i]
        x2, y2 = ring[(i + 1) % n]
        cross = x1 * y2 - x2 * y1
        area += cross
        cx += (x1 + x2) * cross
        cy += (y1 + y2) * cross
    if abs(area) < 1e-12:
        return (sum(p[0] for p in ring) / n, sum(p[1] for p in ring) / n)
    area *= 0.5
    return (cx / (6.0 * area), cy / (6.0 * area))


def point_in_polygon(x: float, y: float, ring: Sequence[Point]) -> bool:
    """Ray-casting point in polygon test."""
    inside = False
    n = len(ring)
    j = n - 1
    for i in range(n):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def _intersect(
    origin: Point,
    direction: Point,
    a: Point,
    b: Point
) -> Optional[Tuple[float, float]]:
    """Parameters (t, u) where origin + t*direction meets a + u*(b - a)."""
    ex = b[0] - a[0]
    ey = b[1] - a[1]
    denom = direction[0] * ey - direction[1] * ex
    if abs(denom) < INTERSECTION_EPSILON:
        return None
    wx = a[0] - origin[0]
    wy = a[1] - origin[1]
    t = (wx * ey - wy * ex) / denom
    u = (wx * direction[1] - wy * direction[0]) / denom
    return (t, u)


def _edge_hits(origin: Point, direction: Point, ring: Sequence[Point]) -> List[RingHit]:
    hits = []
    n = len(ring)
    for i in range(n):
        a = ring[i]
        b = ring[(i + 1) % n]
        params = _intersect(origin, direction, a, b)
        if params is None:
            continue
        t, u = params
        if -1e-9 <= u <= 1.0 + 1e-9:
            u = min(max(u, 0.0), 1.0)
            point = (origin[0] + direction[0] * t, origin[1] + direction[1] * t)
            hits.append(RingHit(t, point, i, u))
    return hits


def segment_ring_crossings(p0: Point, p1: Point, ring: Sequence[Point]) -> List[RingHit]:
    """All crossings of the segment p0 -> p1 with ring edges, sorted by t."""
    direction = (p1[0] - p0[0], p1[1] - p0[1])
    hits = [h for h in _edge_hits(p0, direction, ring) if -1e-9 <= h.t <= 1.0 + 1e-9]
    hits.sort(key=lambda h: h.t)
    return hits


def ray_ring_intersection(origin: Point, direction: Point, ring: Sequence[Point]) -> Optional[RingHit]:
    """Nearest ring hit along a ray (t >= 0)."""
    hits = [h for h in _edge_hits(origin, direction, ring) if h.t >= 0]
    if not hits:
        return None
    return min(hits, key=lambda h: h.t)


def line_ring_intersections(origin: Point, direction: Point, ring: Sequence[Point]) -> List[RingHit]:
    """
    All hits of an infinite line with a ring, sorted by line parameter.

    A line through a vertex hits two edges at the same spot; such
    near-duplicate hits are collapsed to one.
    """
    hits = sorted(_edge_hits(origin, direction, ring), key=lambda h: h.t)
    unique: List[RingHit] = []
    for hit in hits:
        if unique and abs(hit.t - unique[-1].t) <= DUPLICATE_TOLERANCE:
            continue
        unique.append(hit)
    return unique


def project_onto_ring(point: Point, ring: Sequence[Point]) -> Optional[RingProjection]:
    """Closest point on the ring's edges to point."""
    best: Optional[RingProjection] = None
    n = len(ring)
    for i in range(n):
        a = ring[i]
        b = ring[(i + 1) % n]
        ex = b[0] - a[0]
        ey = b[1] - a[1]
        length_sq = ex * ex + ey * ey
        if length_sq < INTERSECTION_EPSILON:
            u = 0.0
        else:
            u = ((point[0] - a[0]) * ex + (point[1] - a[1]) * ey) / length_sq
            u = min(max(u, 0.0), 1.0)
        proj = (a[0] + ex * u, a[1] + ey * u)
        d = distance(point, proj)
        if best is None or d < best.distance:
            best = RingProjection(proj, i, u, d)
    return best


def walk_ring(
    ring: Sequence[Point],
    start_edge: int,
    start_u: float,
    end_edge: int,
    end_u: float,
    end_point: Point,
    forward: bool
) -> List[Point]:
    """
    Vertices passed when walking the ring between two points on its edges.

    Walking forward follows the ring order; backward goes against it. The
    returned list excludes the start point and ends with end_point.
    """
    n = len(ring)
    path: List[Point] = []
    if forward:
        count = (end_edge - start_edge) % n
        if count == 0 and end_u < start_u:
            count = n
        for k in range(1, count + 1):
            path.append(ring[(start_edge + k) % n])
    else:
        count = (start_edge - end_edge) % n
        if count == 0 and end_u > start_u:
            count = n
        for k in range(count):
            path.append(ring[(start_edge - k) % n])
    path.append(end_point)
    return path


def shortest_ring_walk(
    ring: Sequence[Point],
    start: Point,
    end: Point,
    tolerance: float = 1e-3
) -> Optional[List[Point]]:
    """
    Shorter of the two walks along the ring from start to end.

    Both points must lie on the ring within tolerance.

    Returns:
        Points to feed through (excluding start), or None when either point
        is off the ring
    """
    p_start = project_onto_ring(start, ring)
    p_end = project_onto_ring(end, ring)
    if p_start is None or p_end is None:
        return None
    if p_start.distance > tolerance or p_end.distance > tolerance:
        return None
    forward = walk_ring(ring, p_start.edge, p_start.u, p_end.edge, p_end.u, end, True)
    backward = walk_ring(ring, p_start.edge, p_start.u, p_end.edge, p_end.u, end, False)
    if path_length([start] + forward) <= path_length([start] + backward):
        return forward
    return backward


def walk_ring_distance(
    ring: Sequence[Point],
    start: Point,
    start_edge: int,
    length: float,
    forward: bool = True
) -> List[Point]:
    """
    Walk length units along the ring from a point on edge start_edge.

    Returns:
        Points passed (vertices, then the final point), excluding start
    """
    n = len(ring)
    if n < 2 or ring_perimeter(ring) < 1e-12 or length <= 0:
        return []
    path: List[Point] = []
    current = start
    remaining = length
    k = start_edge
    while True:
        nxt = ring[(k + 1) % n] if forward else ring[k % n]
        seg = distance(current, nxt)
        if seg >= remaining:
            if seg > 0:
                f = remaining / seg
                path.append((current[0] + (nxt[0] - current[0]) * f,
                             current[1] + (nxt[1] - current[1]) * f))
            else:
                path.append(nxt)
            return path
        path.append(nxt)
        remaining -= seg
        current = nxt
        k = k + 1 if forward else k - 1


def ring_loop_from(ring: Sequence[Point], projection: RingProjection) -> List[Point]:
    """
    Full loop around the ring starting and ending at a point on an edge.

    Returns:
        [start, ring[edge + 1], ..., ring[edge], start]
    """
    n = len(ring)
    loop = [projection.point]
    for k in range(1, n + 1):
        loop.append(ring[(projection.edge + k) % n])
    loop.append(projection.point)
    return loop


def contour_start_index(ring: Sequence[Point], direction: MillingDirection) -> int:
    """
    Index of the conventional start vertex of an arbitrary ring.

    Clockwise: lowest y, then lowest x. Counter-clockwise: highest y, then
    highest x.
    """
    if direction is MillingDirection.CLOCKWISE:
        return min(range(len(ring)), key=lambda i: (ring[i][1], ring[i][0]))
    return max(range(len(ring)), key=lambda i: (ring[i][1], ring[i][0]))


def rotate_ring(ring: Sequence[Point], start_index: int) -> List[Point]:
    return list(ring[start_index:]) + list(ring[:start_index])


def projected_extent(ring: Sequence[Point], axis: Point, origin: Point) -> Tuple[float, float]:
    """Min and max of (p - origin) . axis over the ring vertices."""
    values = [(p[0] - origin[0]) * axis[0] + (p[1] - origin[1]) * axis[1] for p in ring]
    return (min(values), max(values))
