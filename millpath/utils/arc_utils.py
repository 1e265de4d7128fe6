"""I/J offsets, angle normalisation and arc sampling utilities."""
import math
from typing import List, Optional, Tuple

Point = Tuple[float, float]


def calculate_ij_offsets(current: Point, center: Point) -> Tuple[float, float]:
    """
    Offsets from the arc start to the arc center, as used by I/J words.

    Args:
        current: Arc start position (x, y)
        center: Arc center (x, y)

    Returns:
        Tuple of (I, J) offsets
    """
    return (center[0] - current[0], center[1] - current[1])


def normalize_angle(angle: float) -> float:
    """Map an angle in degrees into [0, 360)."""
    normalized = math.fmod(angle, 360.0)
    if normalized < 0:
        normalized += 360.0
    # fmod of a tiny negative can round up to exactly 360
    if normalized >= 360.0:
        normalized -= 360.0
    return normalized


def normalize_arc_angles(start: float, end: float) -> Tuple[float, float]:
    """
    Normalise arc angles so the sweep from start to end is increasing.

    Both angles are mapped into [0, 360); when the end then lies before the
    start, 360 is added to the end. The result describes the
    counter-clockwise sweep. Applying the function to its own output
    returns the same pair.

    Args:
        start: Start angle in degrees
        end: End angle in degrees

    Returns:
        (start, end) with 0 <= start < 360 and start <= end < start + 360

    Example:
        normalize_arc_angles(350, 10) -> (350.0, 370.0)
    """
    start_n = normalize_angle(start)
    end_n = normalize_angle(end)
    if end_n < start_n:
        end_n += 360.0
    return (start_n, end_n)


def arc_sweep(start: float, end: float, clockwise: bool = False) -> float:
    """
    Signed sweep in degrees from start to end in the requested direction.

    Counter-clockwise sweeps are positive, clockwise sweeps negative. Equal
    angles give a zero sweep.
    """
    start_n, end_n = normalize_arc_angles(start, end)
    ccw = end_n - start_n
    if not clockwise:
        return ccw
    if ccw == 0:
        return 0.0
    return -(360.0 - ccw)


def interpolate_arc(
    center: Point,
    radius: float,
    start_angle: float,
    end_angle: float,
    clockwise: bool = False,
    max_segment_length: float = 0.5,
    min_segments: int = 1
) -> List[Point]:
    """
    Sample an arc as a polyline.

    The first point (at start_angle) is not included; the last point lies
    exactly at end_angle.

    Args:
        center: Arc center (x, y)
        radius: Arc radius
        start_angle: Start angle in degrees
        end_angle: End angle in degrees
        clockwise: Sweep direction
        max_segment_length: Longest chord allowed
        min_segments: Segment floor

    Returns:
        List of (x, y) points along the arc
    """
    sweep = math.radians(arc_sweep(start_angle, end_angle, clockwise))
    arc_length = abs(sweep) * radius
    segments = max(min_segments, int(math.ceil(arc_length / max(max_segment_length, 1e-3))))
    start = math.radians(start_angle)
    points = []
    for k in range(1, segments + 1):
        angle = start + sweep * k / segments
        points.append((center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle)))
    return points


def arc_through_points(
    p0: Point,
    p1: Point,
    p2: Point
) -> Optional[Tuple[Point, float, bool]]:
    """
    Circular arc starting at p0, passing through p1 and ending at p2.

    Args:
        p0: Start point
        p1: Intermediate point
        p2: End point

    Returns:
        (center, radius, clockwise), or None when the points are collinear
    """
    ax, ay = p0
    bx, by = p1
    cx, cy = p2
    d = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
    if abs(d) < 1e-12:
        return None
    a2 = ax * ax + ay * ay
    b2 = bx * bx + by * by
    c2 = cx * cx + cy * cy
    ux = (a2 * (by - cy) + b2 * (cy - ay) + c2 * (ay - by)) / d
    uy = (a2 * (cx - bx) + b2 * (ax - cx) + c2 * (bx - ax)) / d
    radius = math.hypot(ax - ux, ay - uy)
    # Orientation of p0 -> p1 -> p2 gives the sweep direction
    clockwise = d < 0
    return ((ux, uy), radius, clockwise)


def arc_angles(start: Point, end: Point, center: Point) -> Tuple[float, float]:
    """Start and end angles in degrees of the arc between two points."""
    a0 = math.degrees(math.atan2(start[1] - center[1], start[0] - center[0]))
    a1 = math.degrees(math.atan2(end[1] - center[1], end[0] - center[0]))
    return (a0, a1)


def arc_length(
    start: Point,
    end: Point,
    center: Point,
    clockwise: bool
) -> float:
    """
    Length of the arc from start to end around center.

    Coincident start and end points describe a full circle.
    """
    radius = math.hypot(start[0] - center[0], start[1] - center[1])
    a0, a1 = arc_angles(start, end, center)
    sweep = abs(arc_sweep(a0, a1, clockwise))
    if sweep < 1e-9:
        sweep = 360.0
    return math.radians(sweep) * radius


def point_on_arc(
    start: Point,
    center: Point,
    clockwise: bool,
    distance: float
) -> Point:
    """Point reached after travelling distance along an arc from start."""
    radius = math.hypot(start[0] - center[0], start[1] - center[1])
    if radius < 1e-12:
        return start
    a0 = math.atan2(start[1] - center[1], start[0] - center[0])
    delta = distance / radius
    angle = a0 - delta if clockwise else a0 + delta
    return (center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle))
