"""2-D CNC toolpath generation: pockets and profiles as abstract motion events.

Usage:
    from millpath import Circle, MachiningParameters, PocketOperation, ToolpathGenerator
    from millpath.visualizer import plot_motion_preview, summarize_motion

    result = ToolpathGenerator().generate(
        [PocketOperation(Circle(0, 0, 10), MachiningParameters(4.0, 2.0, 1.0))]
    )
    print(summarize_motion(result.events))
    plot_motion_preview(result.events, output_file="pocket.png")

The preview lives in millpath.visualizer and is not imported here, so the
engine can be used without loading matplotlib.
"""

from .generator import ToolpathGenerator
from .pocket_generator import PocketGenerator
from .profile_generator import ProfileGenerator
from .models import (
    MillingDirection,
    PocketStrategy,
    ToolPathMode,
    EntryMode,
    FinishingMode,
    ReferencePoint,
    GCodeSettings,
    Circle,
    Rectangle,
    RoundedRectangle,
    Ellipse,
    RegularPolygon,
    ArbitraryContour,
    ContourGroup,
    MachiningParameters,
    PocketOperation,
    ProfileOperation,
    PathMove,
    GenerationResult
)
from .motion import (
    RapidMove,
    LinearMove,
    ArcMove,
    Comment,
    MotionSink,
    MotionRecorder,
    MotionWriter
)
from .geometry import (
    GeometryProvider,
    create_geometry,
    expand_shapes
)
from .errors import (
    ToolpathError,
    DegenerateGeometryError,
    InvalidContourError,
    NumericalDegeneracyError,
    InvalidParametersError
)

__all__ = [
    # Engine
    'ToolpathGenerator',
    'PocketGenerator',
    'ProfileGenerator',
    # Models
    'MillingDirection',
    'PocketStrategy',
    'ToolPathMode',
    'EntryMode',
    'FinishingMode',
    'ReferencePoint',
    'GCodeSettings',
    'Circle',
    'Rectangle',
    'RoundedRectangle',
    'Ellipse',
    'RegularPolygon',
    'ArbitraryContour',
    'ContourGroup',
    'MachiningParameters',
    'PocketOperation',
    'ProfileOperation',
    'PathMove',
    'GenerationResult',
    # Motion events
    'RapidMove',
    'LinearMove',
    'ArcMove',
    'Comment',
    'MotionSink',
    'MotionRecorder',
    'MotionWriter',
    # Geometry
    'GeometryProvider',
    'create_geometry',
    'expand_shapes',
    # Errors
    'ToolpathError',
    'DegenerateGeometryError',
    'InvalidContourError',
    'NumericalDegeneracyError',
    'InvalidParametersError',
]
