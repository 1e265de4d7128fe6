"""Parameter and contour validation utilities."""
import math
from typing import List, Sequence, Tuple

from ..errors import InvalidContourError, InvalidParametersError
from ..models import (
    ArbitraryContour,
    Circle,
    Ellipse,
    MachiningParameters,
    Rectangle,
    RegularPolygon,
    RoundedRectangle,
)
from .contour_utils import distance, open_ring


def validate_machining_parameters(params: MachiningParameters) -> List[str]:
    """
    Check machining parameters for values the engine cannot work with.

    Args:
        params: Parameters of one operation

    Returns:
        List of error messages (empty if all valid)
    """
    errors = []
    if not params.tool_diameter > 0:
        errors.append(f"Tool diameter must be positive, got {params.tool_diameter}")
    if params.total_depth < 0:
        errors.append(f"Total depth must not be negative, got {params.total_depth}")
    if params.step_depth < 0:
        errors.append(f"Step depth must not be negative, got {params.step_depth}")
    if params.retract_height < 0:
        errors.append(f"Retract height must not be negative, got {params.retract_height}")
    if params.safe_z < params.contour_height:
        errors.append(
            f"Safe Z ({params.safe_z}) is below the contour height ({params.contour_height})"
        )
    if not 0 <= params.wall_taper_angle < 90:
        errors.append(f"Wall taper angle must be in [0, 90), got {params.wall_taper_angle}")
    if not 0 < params.entry_angle <= 90:
        errors.append(f"Entry angle must be in (0, 90], got {params.entry_angle}")
    if params.finish_allowance < 0:
        errors.append(f"Finish allowance must not be negative, got {params.finish_allowance}")
    return errors


def require_valid_parameters(params: MachiningParameters) -> None:
    """Raise InvalidParametersError listing every problem found."""
    errors = validate_machining_parameters(params)
    if errors:
        raise InvalidParametersError("; ".join(errors))


def validate_shape_dimensions(shape) -> List[str]:
    """
    Check analytic shapes for non-positive sizes.

    Arbitrary contours are checked by validate_contour instead.
    """
    errors = []
    if isinstance(shape, Circle):
        if not shape.radius > 0:
            errors.append(f"Circle radius must be positive, got {shape.radius}")
    elif isinstance(shape, (Rectangle, RoundedRectangle)):
        if not (shape.width > 0 and shape.height > 0):
            errors.append(f"Rectangle size must be positive, got {shape.width} x {shape.height}")
        if isinstance(shape, RoundedRectangle):
            radii = (shape.radius_top_left, shape.radius_top_right,
                     shape.radius_bottom_right, shape.radius_bottom_left)
            if any(r < 0 for r in radii):
                errors.append(f"Corner radii must not be negative, got {radii}")
    elif isinstance(shape, Ellipse):
        if not (shape.radius_x > 0 and shape.radius_y > 0):
            errors.append(
                f"Ellipse radii must be positive, got {shape.radius_x} and {shape.radius_y}"
            )
    elif isinstance(shape, RegularPolygon):
        if shape.sides < 3:
            errors.append(f"Polygon needs at least 3 sides, got {shape.sides}")
        if not shape.radius > 0:
            errors.append(f"Polygon radius must be positive, got {shape.radius}")
    return errors


def require_valid_shape(shape) -> None:
    errors = validate_shape_dimensions(shape)
    if errors:
        raise InvalidParametersError("; ".join(errors))


def validate_contour(
    contour: ArbitraryContour,
    tolerance: float
) -> List[Tuple[float, float]]:
    """
    Check an arbitrary contour and return it as an open ring.

    Args:
        contour: Contour to check
        tolerance: Largest first-to-last gap accepted as closed

    Returns:
        The ring without its closing point and consecutive duplicates

    Raises:
        InvalidContourError: Fewer than 3 points, not closed, or no area
    """
    points: Sequence[Tuple[float, float]] = contour.points
    if len(points) < 3:
        raise InvalidContourError(f"Contour has {len(points)} points, at least 3 are required")
    if any(not (math.isfinite(x) and math.isfinite(y)) for x, y in points):
        raise InvalidContourError("Contour contains non-finite coordinates")
    gap = distance(points[0], points[-1])
    if gap > tolerance:
        raise InvalidContourError(
            f"Contour is not closed: first and last points are {gap:.4f} apart"
        )
    ring = open_ring(points)
    if len(ring) > 1 and distance(ring[0], ring[-1]) <= tolerance:
        ring.pop()
    if len(ring) < 3:
        raise InvalidContourError("Contour has fewer than 3 distinct points")
    return ring
