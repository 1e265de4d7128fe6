"""Shared utility modules for toolpath generation."""

from .multipass import (
    Pass,
    DepthStepper,
    calculate_step,
    calculate_taper_offset,
    calculate_num_passes
)
from .tool_compensation import (
    get_compensation_offset,
    signed_area,
    is_clockwise,
    orient_contour,
    calculate_line_normal,
    offset_contour
)
from .arc_utils import (
    calculate_ij_offsets,
    normalize_angle,
    normalize_arc_angles,
    arc_sweep,
    interpolate_arc,
    arc_through_points
)
from .contour_utils import (
    point_in_polygon,
    ring_centroid,
    ring_perimeter,
    project_onto_ring,
    shortest_ring_walk
)
from .path_utils import (
    linear_path,
    path_length,
    point_at_distance,
    rotate_path,
    reverse_path
)
from .lead_in import (
    calculate_lead_in_distance,
    generate_ramp_points,
    ramp_length
)
from .validators import (
    validate_machining_parameters,
    require_valid_parameters,
    validate_shape_dimensions,
    validate_contour
)

__all__ = [
    # multipass
    'Pass',
    'DepthStepper',
    'calculate_step',
    'calculate_taper_offset',
    'calculate_num_passes',
    # tool_compensation
    'get_compensation_offset',
    'signed_area',
    'is_clockwise',
    'orient_contour',
    'calculate_line_normal',
    'offset_contour',
    # arc_utils
    'calculate_ij_offsets',
    'normalize_angle',
    'normalize_arc_angles',
    'arc_sweep',
    'interpolate_arc',
    'arc_through_points',
    # contour_utils
    'point_in_polygon',
    'ring_centroid',
    'ring_perimeter',
    'project_onto_ring',
    'shortest_ring_walk',
    # path_utils
    'linear_path',
    'path_length',
    'point_at_distance',
    'rotate_path',
    'reverse_path',
    # lead_in
    'calculate_lead_in_distance',
    'generate_ramp_points',
    'ramp_length',
    # validators
    'validate_machining_parameters',
    'require_valid_parameters',
    'validate_shape_dimensions',
    'validate_contour',
]
