"""Distance queries over closed cutting paths made of PathMove segments.

A path is a start point plus a list of PathMove; each move ends where the
next begins and the last move returns to the start.
"""
import math
from typing import List, Sequence, Tuple

from ..models import PathMove
from .arc_utils import arc_length, point_on_arc

Point = Tuple[float, float]


def linear_path(points: Sequence[Point]) -> Tuple[Point, List[PathMove]]:
    """Closed path through an open ring of points."""
    start = points[0]
    moves = [PathMove(x=p[0], y=p[1]) for p in points[1:]]
    moves.append(PathMove(x=start[0], y=start[1]))
    return start, moves


def move_length(start: Point, move: PathMove) -> float:
    if move.move_type == 'arc':
        return arc_length(
            start, (move.x, move.y), (move.arc_center_x, move.arc_center_y), move.clockwise
        )
    return math.hypot(move.x - start[0], move.y - start[1])


def path_length(start: Point, moves: Sequence[PathMove]) -> float:
    total = 0.0
    current = start
    for move in moves:
        total += move_length(current, move)
        current = (move.x, move.y)
    return total


def _point_along_move(start: Point, move: PathMove, d: float) -> Point:
    if move.move_type == 'arc':
        return point_on_arc(start, (move.arc_center_x, move.arc_center_y), move.clockwise, d)
    length = math.hypot(move.x - start[0], move.y - start[1])
    if length < 1e-12:
        return (move.x, move.y)
    f = d / length
    return (start[0] + (move.x - start[0]) * f, start[1] + (move.y - start[1]) * f)


def point_at_distance(start: Point, moves: Sequence[PathMove], d: float) -> Point:
    """Point reached after travelling d along the closed path (wraps around)."""
    total = path_length(start, moves)
    if total < 1e-12:
        return start
    d = d % total
    current = start
    for move in moves:
        length = move_length(current, move)
        if d <= length:
            return _point_along_move(current, move, d)
        d -= length
        current = (move.x, move.y)
    return start


def rotate_path(
    start: Point,
    moves: Sequence[PathMove],
    d: float
) -> Tuple[Point, List[PathMove]]:
    """
    The same closed path, started d units further along.

    The move containing the new start is split in two: its tail opens the
    new path and its head closes it.
    """
    total = path_length(start, moves)
    if total < 1e-12:
        return start, list(moves)
    d = d % total
    if d < 1e-9 or total - d < 1e-9:
        return start, list(moves)

    current = start
    for index, move in enumerate(moves):
        length = move_length(current, move)
        if d <= length:
            split = _point_along_move(current, move, d)
            tail = PathMove(
                x=move.x, y=move.y, move_type=move.move_type,
                arc_center_x=move.arc_center_x, arc_center_y=move.arc_center_y,
                clockwise=move.clockwise
            )
            head = PathMove(
                x=split[0], y=split[1], move_type=move.move_type,
                arc_center_x=move.arc_center_x, arc_center_y=move.arc_center_y,
                clockwise=move.clockwise
            )
            rotated = [tail] + list(moves[index + 1:]) + list(moves[:index]) + [head]
            return split, rotated
        d -= length
        current = (move.x, move.y)
    return start, list(moves)


def sample_path(
    start: Point,
    moves: Sequence[PathMove],
    length: float,
    segments: int
) -> List[Tuple[Point, float]]:
    """
    Sample the first length units of a path.

    Uniform samples are merged with the corner points of the linear moves
    inside the range, so straight runs keep their true shape.

    Returns:
        List of (point, distance_from_start), excluding the start point and
        ending at distance length
    """
    if length <= 0 or segments <= 0:
        return []
    distances = {length * k / segments for k in range(1, segments + 1)}

    travelled = 0.0
    current = start
    for move in moves:
        travelled += move_length(current, move)
        current = (move.x, move.y)
        if travelled >= length - 1e-9:
            break
        if move.move_type != 'arc':
            distances.add(travelled)

    return [(point_at_distance(start, moves, d), d) for d in sorted(distances)]


def reverse_path(start: Point, moves: Sequence[PathMove]) -> Tuple[Point, List[PathMove]]:
    """The same closed path travelled the other way round from the same start."""
    points = [start] + [(m.x, m.y) for m in moves]
    reversed_moves = []
    for index in range(len(moves) - 1, -1, -1):
        move = moves[index]
        target = points[index]
        reversed_moves.append(PathMove(
            x=target[0], y=target[1], move_type=move.move_type,
            arc_center_x=move.arc_center_x, arc_center_y=move.arc_center_y,
            clockwise=not move.clockwise
        ))
    return start, reversed_moves
