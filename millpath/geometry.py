"""Geometry providers: one class per shape kind.

Every provider answers the same questions about its shape at a given
offset (positive = inward): the offset boundary ring, the center, point
containment, perimeter, the start point and ray/line intersections. Pocket
strategies and profile traversal only talk to shapes through this
interface.
"""
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .config import Config
from .errors import InvalidContourError
from .models import (
    ArbitraryContour,
    Circle,
    ContourGroup,
    Ellipse,
    MillingDirection,
    PathMove,
    Rectangle,
    RegularPolygon,
    RoundedRectangle,
)
from .utils.arc_utils import arc_angles, arc_through_points, interpolate_arc
from .utils.contour_utils import (
    contour_start_index,
    distance,
    line_ring_intersections,
    open_ring,
    point_in_polygon,
    ray_ring_intersection,
    ring_centroid,
    ring_perimeter,
    rotate_ring,
)
from .utils.path_utils import linear_path, reverse_path
from .utils.tool_compensation import offset_contour, orient_contour, signed_area
from .utils.validators import require_valid_shape, validate_contour

Point = Tuple[float, float]

# Offsets within this distance of the half extent collapse the shape
GEOMETRY_EPSILON = 1e-9
# Tolerance of the analytic containment tests
INSIDE_TOLERANCE = 1e-6
MIN_CURVE_SEGMENTS = 32
MIN_FILLET_SEGMENTS = 4


def _rotate(x: float, y: float, cos_r: float, sin_r: float) -> Point:
    return (x * cos_r - y * sin_r, x * sin_r + y * cos_r)


class GeometryProvider:
    """Base class with ring-based defaults for every query.

    Subclasses implement _build_ring (counter-clockwise, open ring, None when
    the offset consumes the shape), get_center and get_half_extent, and
    override queries that have a closed form.
    """

    supports_arcs = False
    # Concentric rings may be joined by a direct feed move
    direct_ring_transition = False
    # Inner rings enclosing less than one stepover squared are dropped
    collapse_by_area = False

    def __init__(self, segment_length: Optional[float] = None):
        self.segment_length = segment_length or Config.SEGMENT_LENGTH
        self._ring_cache: Dict[float, Optional[List[Point]]] = {}

    def _build_ring(self, offset: float) -> Optional[List[Point]]:
        raise NotImplementedError

    def _ring(self, offset: float) -> Optional[List[Point]]:
        key = round(offset, 12)
        if key not in self._ring_cache:
            self._ring_cache[key] = self._build_ring(offset)
        return self._ring_cache[key]

    def _order_start(self, ring: List[Point], direction: MillingDirection) -> List[Point]:
        return ring

    def get_center(self) -> Point:
        raise NotImplementedError

    def get_half_extent(self) -> float:
        """Distance from the center to the nearest boundary point."""
        raise NotImplementedError

    def get_rotation(self) -> float:
        """Shape rotation in degrees (0 for rotation-free shapes)."""
        return 0.0

    def get_contour(
        self,
        offset: float,
        direction: Optional[MillingDirection] = None
    ) -> Optional[List[Point]]:
        """
        Boundary shrunk by offset.

        Args:
            offset: Inward offset (negative grows the shape)
            direction: Orient the ring this way when given

        Returns:
            Open ring of points, a single point when the shape has just
            collapsed, or None when the offset exceeds the shape
        """
        ring = self._ring(offset)
        if ring is None:
            return None
        ring = list(ring)
        if direction is not None:
            ring = self._order_start(orient_contour(ring, direction), direction)
        return ring

    def is_degenerate(self, offset: float) -> bool:
        """True when offset leaves no area to machine."""
        return offset >= self.get_half_extent() - GEOMETRY_EPSILON

    def get_max_offset(self, offset: float) -> float:
        """Largest extra offset beyond offset that still leaves a ring."""
        return self.get_half_extent() - offset

    def is_point_inside(self, x: float, y: float, offset: float) -> bool:
        ring = self._ring(offset)
        if ring is None or len(ring) < 3:
            return False
        return point_in_polygon(x, y, ring)

    def get_perimeter(self, offset: float) -> float:
        ring = self._ring(offset)
        return ring_perimeter(ring) if ring else 0.0

    def get_max_radius(self, offset: float) -> float:
        """Distance from the center to the farthest ring vertex."""
        ring = self._ring(offset)
        if not ring:
            return 0.0
        center = self.get_center()
        return max(distance(center, p) for p in ring)

    def get_start_point(
        self,
        offset: float,
        direction: MillingDirection = MillingDirection.COUNTER_CLOCKWISE
    ) -> Optional[Point]:
        ring = self.get_contour(offset, direction)
        return ring[0] if ring else None

    def ray_intersection(self, angle: float, offset: float) -> Optional[Point]:
        """
        Where a ray from the center at angle (radians) leaves the boundary.

        Returns:
            Boundary point, or None when the ray misses the ring
        """
        ring = self._ring(offset)
        if not ring or len(ring) < 3:
            return None
        hit = ray_ring_intersection(self.get_center(), (math.cos(angle), math.sin(angle)), ring)
        return hit.point if hit else None

    def line_intersections(
        self,
        origin: Point,
        direction: Point,
        offset: float
    ) -> List[Tuple[float, Point]]:
        """
        Crossings of the infinite line origin + s * direction with the boundary.

        Returns:
            List of (s, point) sorted by s
        """
        ring = self._ring(offset)
        if not ring or len(ring) < 3:
            return []
        return [(hit.t, hit.point) for hit in line_ring_intersections(origin, direction, ring)]

    def get_profile_path(
        self,
        offset: float,
        direction: MillingDirection,
        allow_arcs: bool = False
    ) -> Optional[Tuple[Point, List[PathMove]]]:
        """
        Closed path for profile cutting.

        Returns:
            (start point, moves), or None when the offset consumes the shape
        """
        ring = self.get_contour(offset, direction)
        if ring is None or len(ring) < 2:
            return None
        return linear_path(ring)


class CircleGeometry(GeometryProvider):
    """Circle provider with closed-form queries."""

    supports_arcs = True

    def __init__(self, shape: Circle, segment_length: Optional[float] = None):
        super().__init__(segment_length)
        self.shape = shape

    def get_center(self) -> Point:
        return (self.shape.center_x, self.shape.center_y)

    def get_half_extent(self) -> float:
        return self.shape.radius

    def _radius(self, offset: float) -> float:
        return self.shape.radius - offset

    def _build_ring(self, offset: float) -> Optional[List[Point]]:
        r = self._radius(offset)
        if r < -GEOMETRY_EPSILON:
            return None
        cx, cy = self.get_center()
        if r <= GEOMETRY_EPSILON:
            return [(cx, cy)]
        segments = max(MIN_CURVE_SEGMENTS, int(math.ceil(2 * math.pi * r / self.segment_length)))
        return [
            (cx + r * math.cos(2 * math.pi * k / segments), cy + r * math.sin(2 * math.pi * k / segments))
            for k in range(segments)
        ]

    def is_point_inside(self, x: float, y: float, offset: float) -> bool:
        r = self._radius(offset)
        if r < 0:
            return False
        cx, cy = self.get_center()
        return math.hypot(x - cx, y - cy) <= r + INSIDE_TOLERANCE

    def get_perimeter(self, offset: float) -> float:
        return 2 * math.pi * max(self._radius(offset), 0.0)

    def get_max_radius(self, offset: float) -> float:
        return max(self._radius(offset), 0.0)

    def ray_intersection(self, angle: float, offset: float) -> Optional[Point]:
        r = self._radius(offset)
        if r < 0:
            return None
        cx, cy = self.get_center()
        return (cx + r * math.cos(angle), cy + r * math.sin(angle))

    def line_intersections(
        self,
        origin: Point,
        direction: Point,
        offset: float
    ) -> List[Tuple[float, Point]]:
        r = self._radius(offset)
        if r <= 0:
            return []
        cx, cy = self.get_center()
        dx, dy = direction
        wx = origin[0] - cx
        wy = origin[1] - cy
        a = dx * dx + dy * dy
        b = wx * dx + wy * dy
        c = wx * wx + wy * wy - r * r
        disc = b * b - a * c
        if disc < 0:
            return []
        root = math.sqrt(disc)
        hits = []
        for s in sorted({(-b - root) / a, (-b + root) / a}):
            hits.append((s, (origin[0] + dx * s, origin[1] + dy * s)))
        return hits

    def get_profile_path(
        self,
        offset: float,
        direction: MillingDirection,
        allow_arcs: bool = False
    ) -> Optional[Tuple[Point, List[PathMove]]]:
        r = self._radius(offset)
        if r <= GEOMETRY_EPSILON:
            return None
        if not allow_arcs:
            return super().get_profile_path(offset, direction, allow_arcs)
        cx, cy = self.get_center()
        clockwise = direction is MillingDirection.CLOCKWISE
        start = (cx + r, cy)
        # Two semicircles: a single full-circle arc is ambiguous for many controllers
        moves = [
            PathMove(x=cx - r, y=cy, move_type='arc', arc_center_x=cx, arc_center_y=cy,
                     clockwise=clockwise),
            PathMove(x=start[0], y=start[1], move_type='arc', arc_center_x=cx, arc_center_y=cy,
                     clockwise=clockwise),
        ]
        return start, moves


class RectangleGeometry(GeometryProvider):
    """Rotated rectangle; concentric rings are joined by direct moves."""

    direct_ring_transition = True

    def __init__(self, shape: Rectangle, segment_length: Optional[float] = None):
        super().__init__(segment_length)
        self.shape = shape
        rad = math.radians(shape.rotation)
        self._cos = math.cos(rad)
        self._sin = math.sin(rad)

    def get_center(self) -> Point:
        return self.shape.center

    def get_half_extent(self) -> float:
        return min(self.shape.width, self.shape.height) / 2.0

    def get_rotation(self) -> float:
        return self.shape.rotation

    def _halves(self, offset: float) -> Optional[Tuple[float, float]]:
        w = self.shape.width / 2.0 - offset
        h = self.shape.height / 2.0 - offset
        if min(w, h) < -GEOMETRY_EPSILON:
            return None
        return (max(w, 0.0), max(h, 0.0))

    def _to_world(self, x: float, y: float) -> Point:
        cx, cy = self.get_center()
        rx, ry = _rotate(x, y, self._cos, self._sin)
        return (cx + rx, cy + ry)

    def _to_local(self, x: float, y: float) -> Point:
        cx, cy = self.get_center()
        return _rotate(x - cx, y - cy, self._cos, -self._sin)

    def _build_ring(self, offset: float) -> Optional[List[Point]]:
        halves = self._halves(offset)
        if halves is None:
            return None
        w, h = halves
        corners = [(-w, -h), (w, -h), (w, h), (-w, h)]
        return open_ring([self._to_world(x, y) for x, y in corners])

    def is_point_inside(self, x: float, y: float, offset: float) -> bool:
        halves = self._halves(offset)
        if halves is None:
            return False
        lx, ly = self._to_local(x, y)
        return abs(lx) <= halves[0] + INSIDE_TOLERANCE and abs(ly) <= halves[1] + INSIDE_TOLERANCE

    def get_perimeter(self, offset: float) -> float:
        halves = self._halves(offset)
        if halves is None:
            return 0.0
        return 4.0 * (halves[0] + halves[1])


class RoundedRectangleGeometry(RectangleGeometry):
    """Rectangle with filleted corners; fillets are emitted as arcs."""

    supports_arcs = True
    direct_ring_transition = False

    def __init__(self, shape: RoundedRectangle, segment_length: Optional[float] = None):
        super().__init__(shape, segment_length)

    def _corner_radii(self, offset: float, w: float, h: float) -> List[float]:
        # Corner order: bottom-left, bottom-right, top-right, top-left
        limit = min(w, h)
        radii = (self.shape.radius_bottom_left, self.shape.radius_bottom_right,
                 self.shape.radius_top_right, self.shape.radius_top_left)
        return [min(max(r - offset, 0.0), limit) for r in radii]

    def _local_path(self, offset: float) -> Optional[Tuple[Point, List[PathMove]]]:
        """Counter-clockwise path in shape-local coordinates."""
        halves = self._halves(offset)
        if halves is None:
            return None
        w, h = halves
        r0, r1, r2, r3 = self._corner_radii(offset, w, h)
        start = (-w + r0, -h)
        moves = []

        def corner(end: Point, center: Point, radius: float) -> None:
            if radius > GEOMETRY_EPSILON:
                moves.append(PathMove(x=end[0], y=end[1], move_type='arc',
                                      arc_center_x=center[0], arc_center_y=center[1],
                                      clockwise=False))

        moves.append(PathMove(x=w - r1, y=-h))
        corner((w, -h + r1), (w - r1, -h + r1), r1)
        moves.append(PathMove(x=w, y=h - r2))
        corner((w - r2, h), (w - r2, h - r2), r2)
        moves.append(PathMove(x=-w + r3, y=h))
        corner((-w, h - r3), (-w + r3, h - r3), r3)
        moves.append(PathMove(x=-w, y=-h + r0))
        corner(start, (-w + r0, -h + r0), r0)
        return start, moves

    def _path_to_world(self, start: Point, moves: List[PathMove]) -> Tuple[Point, List[PathMove]]:
        world_moves = []
        for move in moves:
            x, y = self._to_world(move.x, move.y)
            cx, cy = self._to_world(move.arc_center_x, move.arc_center_y)
            world_moves.append(PathMove(x=x, y=y, move_type=move.move_type,
                                        arc_center_x=cx, arc_center_y=cy,
                                        clockwise=move.clockwise))
        return self._to_world(*start), world_moves

    def _build_ring(self, offset: float) -> Optional[List[Point]]:
        local = self._local_path(offset)
        if local is None:
            return None
        start, moves = local
        points = [start]
        current = start
        for move in moves:
            if move.move_type == 'arc':
                center = (move.arc_center_x, move.arc_center_y)
                radius = distance(center, current)
                a0, a1 = arc_angles(current, (move.x, move.y), center)
                points.extend(interpolate_arc(center, radius, a0, a1, clockwise=False,
                                              max_segment_length=self.segment_length,
                                              min_segments=MIN_FILLET_SEGMENTS))
            else:
                points.append((move.x, move.y))
            current = (move.x, move.y)
        return open_ring([self._to_world(x, y) for x, y in points])

    def is_point_inside(self, x: float, y: float, offset: float) -> bool:
        return GeometryProvider.is_point_inside(self, x, y, offset)

    def get_perimeter(self, offset: float) -> float:
        halves = self._halves(offset)
        if halves is None:
            return 0.0
        w, h = halves
        radii = self._corner_radii(offset, w, h)
        straight = 4.0 * (w + h) - 2.0 * sum(radii)
        return straight + math.pi / 2.0 * sum(radii)

    def get_profile_path(
        self,
        offset: float,
        direction: MillingDirection,
        allow_arcs: bool = False
    ) -> Optional[Tuple[Point, List[PathMove]]]:
        if not allow_arcs:
            return GeometryProvider.get_profile_path(self, offset, direction, allow_arcs)
        local = self._local_path(offset)
        if local is None:
            return None
        start, moves = self._path_to_world(*local)
        if direction is MillingDirection.CLOCKWISE:
            start, moves = reverse_path(start, moves)
        return start, moves


class EllipseGeometry(GeometryProvider):
    """Rotated ellipse with closed-form containment and intersections."""

    supports_arcs = True

    def __init__(self, shape: Ellipse, segment_length: Optional[float] = None):
        super().__init__(segment_length)
        self.shape = shape
        rad = math.radians(shape.rotation)
        self._cos = math.cos(rad)
        self._sin = math.sin(rad)

    def get_center(self) -> Point:
        return (self.shape.center_x, self.shape.center_y)

    def get_half_extent(self) -> float:
        return min(self.shape.radius_x, self.shape.radius_y)

    def get_rotation(self) -> float:
        return self.shape.rotation

    def _radii(self, offset: float) -> Optional[Tuple[float, float]]:
        a = self.shape.radius_x - offset
        b = self.shape.radius_y - offset
        if min(a, b) < -GEOMETRY_EPSILON:
            return None
        return (max(a, 0.0), max(b, 0.0))

    def _to_world(self, x: float, y: float) -> Point:
        rx, ry = _rotate(x, y, self._cos, self._sin)
        return (self.shape.center_x + rx, self.shape.center_y + ry)

    def _to_local(self, x: float, y: float) -> Point:
        return _rotate(x - self.shape.center_x, y - self.shape.center_y, self._cos, -self._sin)

    @staticmethod
    def _ramanujan(a: float, b: float) -> float:
        if a + b <= 0:
            return 0.0
        h = (a - b) ** 2 / (a + b) ** 2
        return math.pi * (a + b) * (1 + 3 * h / (10 + math.sqrt(4 - 3 * h)))

    def _build_ring(self, offset: float) -> Optional[List[Point]]:
        radii = self._radii(offset)
        if radii is None:
            return None
        a, b = radii
        if max(a, b) <= GEOMETRY_EPSILON:
            return [self.get_center()]
        segments = max(MIN_CURVE_SEGMENTS, int(math.ceil(self._ramanujan(a, b) / self.segment_length)))
        # Even count so the ring splits into three-point arcs
        segments += segments % 2
        points = []
        for k in range(segments):
            t = 2 * math.pi * k / segments
            points.append(self._to_world(a * math.cos(t), b * math.sin(t)))
        return open_ring(points)

    def is_point_inside(self, x: float, y: float, offset: float) -> bool:
        radii = self._radii(offset)
        if radii is None or min(radii) <= GEOMETRY_EPSILON:
            return False
        a, b = radii
        lx, ly = self._to_local(x, y)
        return (lx / a) ** 2 + (ly / b) ** 2 <= 1 + INSIDE_TOLERANCE

    def get_perimeter(self, offset: float) -> float:
        radii = self._radii(offset)
        if radii is None:
            return 0.0
        return self._ramanujan(*radii)

    def get_max_radius(self, offset: float) -> float:
        radii = self._radii(offset)
        return max(radii) if radii else 0.0

    def ray_intersection(self, angle: float, offset: float) -> Optional[Point]:
        radii = self._radii(offset)
        if radii is None or min(radii) <= GEOMETRY_EPSILON:
            return None
        a, b = radii
        local = angle - math.radians(self.shape.rotation)
        c = math.cos(local)
        s = math.sin(local)
        r = 1.0 / math.sqrt((c / a) ** 2 + (s / b) ** 2)
        return self._to_world(r * c, r * s)

    def line_intersections(
        self,
        origin: Point,
        direction: Point,
        offset: float
    ) -> List[Tuple[float, Point]]:
        radii = self._radii(offset)
        if radii is None or min(radii) <= GEOMETRY_EPSILON:
            return []
        a, b = radii
        ox, oy = self._to_local(*origin)
        dx, dy = _rotate(direction[0], direction[1], self._cos, -self._sin)
        qa = (dx / a) ** 2 + (dy / b) ** 2
        qb = 2 * (ox * dx / a ** 2 + oy * dy / b ** 2)
        qc = (ox / a) ** 2 + (oy / b) ** 2 - 1
        disc = qb * qb - 4 * qa * qc
        if qa <= 0 or disc < 0:
            return []
        root = math.sqrt(disc)
        hits = []
        for s in sorted({(-qb - root) / (2 * qa), (-qb + root) / (2 * qa)}):
            hits.append((s, (origin[0] + direction[0] * s, origin[1] + direction[1] * s)))
        return hits

    def get_profile_path(
        self,
        offset: float,
        direction: MillingDirection,
        allow_arcs: bool = False
    ) -> Optional[Tuple[Point, List[PathMove]]]:
        ring = self.get_contour(offset, direction)
        if ring is None or len(ring) < 3:
            return None
        if not allow_arcs or len(ring) % 2:
            return linear_path(ring)
        # Approximate the ellipse by circular arcs through consecutive point triples
        start = ring[0]
        moves = []
        n = len(ring)
        for k in range(0, n, 2):
            p0, p1, p2 = ring[k], ring[k + 1], ring[(k + 2) % n]
            arc = arc_through_points(p0, p1, p2)
            if arc is None:
                moves.append(PathMove(x=p1[0], y=p1[1]))
                moves.append(PathMove(x=p2[0], y=p2[1]))
                continue
            center, _radius, clockwise = arc
            moves.append(PathMove(x=p2[0], y=p2[1], move_type='arc',
                                  arc_center_x=center[0], arc_center_y=center[1],
                                  clockwise=clockwise))
        return start, moves


class PolygonGeometry(GeometryProvider):
    """Regular polygon; offsets move every side by exactly the offset."""

    def __init__(self, shape: RegularPolygon, segment_length: Optional[float] = None):
        super().__init__(segment_length)
        self.shape = shape

    def get_center(self) -> Point:
        return (self.shape.center_x, self.shape.center_y)

    def get_half_extent(self) -> float:
        # Apothem
        return self.shape.radius * math.cos(math.pi / self.shape.sides)

    def get_rotation(self) -> float:
        return self.shape.rotation

    def _circumradius(self, offset: float) -> float:
        return self.shape.radius - offset / math.cos(math.pi / self.shape.sides)

    def _build_ring(self, offset: float) -> Optional[List[Point]]:
        r = self._circumradius(offset)
        if r < -GEOMETRY_EPSILON:
            return None
        cx, cy = self.get_center()
        if r <= GEOMETRY_EPSILON:
            return [(cx, cy)]
        n = self.shape.sides
        rot = math.radians(self.shape.rotation)
        return [
            (cx + r * math.cos(2 * math.pi * i / n + rot), cy + r * math.sin(2 * math.pi * i / n + rot))
            for i in range(n)
        ]

    def get_perimeter(self, offset: float) -> float:
        r = max(self._circumradius(offset), 0.0)
        n = self.shape.sides
        return n * 2 * r * math.sin(math.pi / n)

    def get_max_radius(self, offset: float) -> float:
        return max(self._circumradius(offset), 0.0)


class ContourGeometry(GeometryProvider):
    """Arbitrary closed ring; offsets come from the miter offsetter."""

    collapse_by_area = True

    def __init__(
        self,
        shape: ArbitraryContour,
        segment_length: Optional[float] = None,
        tolerance: Optional[float] = None
    ):
        super().__init__(segment_length)
        self.shape = shape
        self.ring = validate_contour(shape, tolerance if tolerance is not None else Config.CONTOUR_TOLERANCE)
        self._area = signed_area(self.ring)
        if abs(self._area) < 1e-12:
            raise InvalidContourError("Contour encloses no area")
        self._center = ring_centroid(self.ring)

    def get_center(self) -> Point:
        return self._center

    def get_half_extent(self) -> float:
        # Largest vertex distance bounds how far concentric offsets can go
        return max(distance(self._center, p) for p in self.ring)

    def _build_ring(self, offset: float) -> Optional[List[Point]]:
        if abs(offset) <= GEOMETRY_EPSILON:
            return list(self.ring)
        ring = offset_contour(self.ring, -offset)
        area = signed_area(ring)
        # A ring that flipped winding or lost its area has collapsed
        if abs(area) < 1e-9 or (area > 0) != (self._area > 0):
            return None
        # Past the collapse a convex ring reappears point-reflected, its edges reversed
        if self._edge_alignment(ring) <= 0:
            return None
        return ring

    def _edge_alignment(self, ring: Sequence[Point]) -> float:
        n = len(ring)
        total = 0.0
        for i in range(n):
            j = (i + 1) % n
            total += ((ring[j][0] - ring[i][0]) * (self.ring[j][0] - self.ring[i][0])
                      + (ring[j][1] - ring[i][1]) * (self.ring[j][1] - self.ring[i][1]))
        return total

    def _order_start(self, ring: List[Point], direction: MillingDirection) -> List[Point]:
        return rotate_ring(ring, contour_start_index(ring, direction))

    def is_degenerate(self, offset: float) -> bool:
        return self._ring(offset) is None

    def get_max_offset(self, offset: float) -> float:
        return self.get_half_extent() - offset - 1e-6


def expand_shapes(shape) -> List:
    """Split a ContourGroup into its contours; other shapes pass through."""
    if isinstance(shape, ContourGroup):
        return list(shape.contours)
    return [shape]


def create_geometry(
    shape,
    segment_length: Optional[float] = None,
    tolerance: Optional[float] = None
) -> GeometryProvider:
    """
    Factory function to create the provider for a shape.

    Args:
        shape: Circle, Rectangle, RoundedRectangle, Ellipse, RegularPolygon or
               ArbitraryContour (expand ContourGroup with expand_shapes first)
        segment_length: Chord length for curve discretisation
        tolerance: Closing tolerance for arbitrary contours

    Returns:
        GeometryProvider for the shape

    Raises:
        InvalidParametersError: Non-positive dimensions
        InvalidContourError: Open or too short arbitrary contour
        TypeError: Unknown shape type
    """
    if isinstance(shape, ArbitraryContour):
        return ContourGeometry(shape, segment_length, tolerance)
    require_valid_shape(shape)
    if isinstance(shape, Circle):
        return CircleGeometry(shape, segment_length)
    if isinstance(shape, RoundedRectangle):
        return RoundedRectangleGeometry(shape, segment_length)
    if isinstance(shape, Rectangle):
        return RectangleGeometry(shape, segment_length)
    if isinstance(shape, Ellipse):
        return EllipseGeometry(shape, segment_length)
    if isinstance(shape, RegularPolygon):
        return PolygonGeometry(shape, segment_length)
    raise TypeError(f"Unsupported shape type: {type(shape).__name__}")
