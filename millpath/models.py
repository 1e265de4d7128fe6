"""Shared dataclasses for toolpath generation modules."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Union

from .config import Config


class MillingDirection(Enum):
    """Direction the tool travels around a contour."""
    CLOCKWISE = 'cw'
    COUNTER_CLOCKWISE = 'ccw'

    @property
    def sign(self) -> int:
        """Angular sign: -1 for clockwise, +1 for counter-clockwise."""
        return -1 if self is MillingDirection.CLOCKWISE else 1


class PocketStrategy(Enum):
    """Area-clearing strategy for pocket operations."""
    CONCENTRIC = 'concentric'
    SPIRAL = 'spiral'
    RADIAL = 'radial'
    LINES = 'lines'
    ZIGZAG = 'zigzag'


class ToolPathMode(Enum):
    """Where the tool runs relative to a profile line."""
    ON_LINE = 'on_line'
    OUTSIDE = 'outside'
    INSIDE = 'inside'


class EntryMode(Enum):
    """How a profile pass enters the material."""
    VERTICAL = 'vertical'
    ANGLED = 'angled'


class FinishingMode(Enum):
    """Which surfaces the pocket finishing pass cleans up."""
    WALLS = 'walls'
    BOTTOM = 'bottom'
    ALL = 'all'


class ReferencePoint(Enum):
    """Which point of a rectangle the reference coordinates name."""
    CENTER = 'center'
    TOP_LEFT = 'top_left'
    TOP_RIGHT = 'top_right'
    BOTTOM_LEFT = 'bottom_left'
    BOTTOM_RIGHT = 'bottom_right'


@dataclass(frozen=True)
class GCodeSettings:
    """Output flags read by the engine.

    Attributes:
        use_comments: Emit diagnostic Comment events
        allow_arcs: Emit ArcMove events where the shape has exact arcs
        use_padded_gcodes: Carried through for the caller's text formatter
    """
    use_comments: bool = True
    allow_arcs: bool = False
    use_padded_gcodes: bool = False

    @classmethod
    def from_config(cls) -> 'GCodeSettings':
        """Build settings from environment-backed Config defaults."""
        return cls(
            use_comments=Config.USE_COMMENTS,
            allow_arcs=Config.ALLOW_ARCS,
            use_padded_gcodes=Config.USE_PADDED_GCODES
        )


# Shapes

@dataclass(frozen=True)
class Circle:
    """A circle given by center and radius."""
    center_x: float
    center_y: float
    radius: float


def _reference_to_center(
    reference_point: ReferencePoint,
    x: float,
    y: float,
    width: float,
    height: float
) -> Tuple[float, float]:
    half_w = width / 2.0
    half_h = height / 2.0
    if reference_point is ReferencePoint.TOP_LEFT:
        return (x + half_w, y - half_h)
    if reference_point is ReferencePoint.TOP_RIGHT:
        return (x - half_w, y - half_h)
    if reference_point is ReferencePoint.BOTTOM_LEFT:
        return (x + half_w, y + half_h)
    if reference_point is ReferencePoint.BOTTOM_RIGHT:
        return (x - half_w, y + half_h)
    return (x, y)


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned rectangle rotated about its center.

    The reference coordinates name the point picked by reference_point,
    before rotation.
    """
    width: float
    height: float
    reference_x: float = 0.0
    reference_y: float = 0.0
    reference_point: ReferencePoint = ReferencePoint.CENTER
    rotation: float = 0.0  # degrees, counter-clockwise

    @property
    def center(self) -> Tuple[float, float]:
        return _reference_to_center(
            self.reference_point, self.reference_x, self.reference_y,
            self.width, self.height
        )


@dataclass(frozen=True)
class RoundedRectangle:
    """A rectangle with an individual fillet radius on each corner."""
    width: float
    height: float
    radius_top_left: float = 0.0
    radius_top_right: float = 0.0
    radius_bottom_right: float = 0.0
    radius_bottom_left: float = 0.0
    reference_x: float = 0.0
    reference_y: float = 0.0
    reference_point: ReferencePoint = ReferencePoint.CENTER
    rotation: float = 0.0

    @property
    def center(self) -> Tuple[float, float]:
        return _reference_to_center(
            self.reference_point, self.reference_x, self.reference_y,
            self.width, self.height
        )


@dataclass(frozen=True)
class Ellipse:
    """An ellipse with semi-axes radius_x and radius_y."""
    center_x: float
    center_y: float
    radius_x: float
    radius_y: float
    rotation: float = 0.0


@dataclass(frozen=True)
class RegularPolygon:
    """A regular polygon; radius is the circumradius."""
    center_x: float
    center_y: float
    radius: float
    sides: int
    rotation: float = 0.0


@dataclass(frozen=True)
class ArbitraryContour:
    """A closed ring of points, e.g. a polyline read from a DXF file.

    The ring must be closed (first point equal to the last within
    Config.CONTOUR_TOLERANCE) and hold at least three points.
    """
    points: Tuple[Tuple[float, float], ...]

    def __post_init__(self):
        object.__setattr__(
            self, 'points', tuple((float(x), float(y)) for x, y in self.points)
        )


@dataclass(frozen=True)
class ContourGroup:
    """Several arbitrary contours machined by one operation."""
    contours: Tuple[ArbitraryContour, ...]

    def __post_init__(self):
        object.__setattr__(self, 'contours', tuple(self.contours))


Shape = Union[Circle, Rectangle, RoundedRectangle, Ellipse, RegularPolygon,
              ArbitraryContour, ContourGroup]


@dataclass(frozen=True)
class MachiningParameters:
    """Tool, depth, feed and strategy parameters for one operation.

    Lengths are in machine units (mm in practice), angles in degrees and
    feeds in units per minute.
    """
    tool_diameter: float
    total_depth: float
    step_depth: float
    step_percent: float = Config.STEP_PERCENT
    contour_height: float = 0.0
    safe_z: float = Config.SAFE_Z
    retract_height: float = Config.RETRACT_HEIGHT
    feed_xy_rapid: float = 1000.0
    feed_xy_work: float = 300.0
    feed_z_rapid: float = 500.0
    feed_z_work: float = 100.0
    decimals: int = 3
    direction: MillingDirection = MillingDirection.CLOCKWISE

    # Pocket-specific
    strategy: PocketStrategy = PocketStrategy.CONCENTRIC
    wall_taper_angle: float = 0.0
    line_angle: float = 0.0
    roughing_enabled: bool = False
    finishing_enabled: bool = False
    finish_allowance: float = 0.0
    finishing_mode: FinishingMode = FinishingMode.ALL

    # Profile-specific
    tool_path_mode: ToolPathMode = ToolPathMode.ON_LINE
    entry_mode: EntryMode = EntryMode.VERTICAL
    entry_angle: float = Config.ENTRY_ANGLE

    @property
    def tool_radius(self) -> float:
        return self.tool_diameter / 2.0

    @property
    def final_z(self) -> float:
        return self.contour_height - self.total_depth


@dataclass(frozen=True)
class PocketOperation:
    """Clear the area inside a shape."""
    shape: Shape
    params: MachiningParameters
    name: str = ''
    enabled: bool = True


@dataclass(frozen=True)
class ProfileOperation:
    """Cut along (or offset from) a shape outline."""
    shape: Shape
    params: MachiningParameters
    name: str = ''
    enabled: bool = True


Operation = Union[PocketOperation, ProfileOperation]


@dataclass
class PathMove:
    """A single move in a cutting path."""
    x: float
    y: float
    move_type: str = 'linear'  # 'linear' or 'arc'
    # Arc params (when move_type is 'arc')
    arc_center_x: float = 0.0
    arc_center_y: float = 0.0
    clockwise: bool = False


@dataclass
class GenerationResult:
    """Result of toolpath generation."""
    events: List = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    operations_generated: int = 0
    cancelled: bool = False
