"""Lead-in utilities for profile cuts.

Implements the angled (ramped) entry: instead of plunging straight down,
the tool descends along the contour itself so the Z drop is spread over a
travel distance set by the entry angle.
"""
import math
from typing import List, Sequence, Tuple

from ..models import PathMove
from .path_utils import path_length, sample_path

Point = Tuple[float, float]

# Ramp resolution: segments per full lap of the contour
RAMP_SEGMENTS_PER_LAP = 32
MIN_RAMP_SEGMENTS = 4


def calculate_lead_in_distance(ramp_angle: float, depth: float) -> float:
    """
    Calculate ramp length from the entry angle and the Z drop.

    A shallower angle gives a longer, gentler ramp.

    Args:
        ramp_angle: Entry angle in degrees measured from horizontal
        depth: Z distance to descend

    Returns:
        Horizontal distance to travel while descending (0 for a
        vertical entry, i.e. angles of 90 or more, or no depth)
    """
    if depth <= 0 or ramp_angle >= 90:
        return 0.0
    if ramp_angle <= 0:
        raise ValueError(f"Entry angle must be positive, got {ramp_angle}")
    return depth / math.tan(math.radians(ramp_angle))


def generate_ramp_points(
    start: Point,
    moves: Sequence[PathMove],
    start_z: float,
    end_z: float,
    ramp_angle: float
) -> List[Tuple[float, float, float]]:
    """
    Ramp waypoints along a closed path.

    The ramp length is clamped to one lap of the path; a ramp that would
    need more than one lap descends more steeply. Z is interpolated from the
    cumulative distance actually travelled, so corners do not distort the
    slope.

    Args:
        start: Path start point, where the ramp begins at start_z
        moves: Closed path moves
        start_z: Z at the start of the ramp
        end_z: Z at the end of the ramp
        ramp_angle: Entry angle in degrees

    Returns:
        List of (x, y, z) waypoints, the last one at end_z
    """
    perimeter = path_length(start, moves)
    distance = calculate_lead_in_distance(ramp_angle, start_z - end_z)
    if perimeter < 1e-9 or distance <= 0:
        return [(start[0], start[1], end_z)]
    distance = min(distance, perimeter)

    fraction = distance / perimeter
    segments = max(MIN_RAMP_SEGMENTS, int(fraction * RAMP_SEGMENTS_PER_LAP))

    waypoints = []
    for point, travelled in sample_path(start, moves, distance, segments):
        z = start_z + (end_z - start_z) * (travelled / distance)
        waypoints.append((point[0], point[1], z))
    return waypoints


def ramp_length(start: Point, moves: Sequence[PathMove], depth: float, ramp_angle: float) -> float:
    """Distance along the path covered by a ramp (clamped to one lap)."""
    perimeter = path_length(start, moves)
    return min(calculate_lead_in_distance(ramp_angle, depth), perimeter)
