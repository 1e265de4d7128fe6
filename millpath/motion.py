"""Abstract motion events and the writer that emits them.

The engine never produces G-code text. It emits RapidMove, LinearMove,
ArcMove and Comment events to a MotionSink in strict program order; turning
them into controller text is the caller's job.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple, Union

from .models import GCodeSettings, MachiningParameters
from .utils.arc_utils import calculate_ij_offsets

logger = logging.getLogger(__name__)

# Moves shorter than this are dropped as no-ops
POSITION_TOLERANCE = 1e-9


@dataclass(frozen=True)
class RapidMove:
    """Non-cutting positioning move (G0)."""
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    feed: Optional[float] = None


@dataclass(frozen=True)
class LinearMove:
    """Cutting move along a straight line (G1)."""
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    feed: Optional[float] = None


@dataclass(frozen=True)
class ArcMove:
    """Cutting move along a circular arc (G2/G3).

    i and j are the offsets from the start position to the arc center.
    """
    x: float
    y: float
    i: float
    j: float
    clockwise: bool
    z: Optional[float] = None
    feed: Optional[float] = None


@dataclass(frozen=True)
class Comment:
    """Diagnostic text for the program listing."""
    text: str


MotionCommand = Union[RapidMove, LinearMove, ArcMove, Comment]


class MotionSink(Protocol):
    """Receiver of motion events, owned by the caller."""

    def emit(self, command: MotionCommand) -> None:
        ...


@dataclass
class MotionRecorder:
    """MotionSink that keeps every event in a list."""
    events: List[MotionCommand] = field(default_factory=list)

    def emit(self, command: MotionCommand) -> None:
        self.events.append(command)

    def replay(self, sink: MotionSink) -> None:
        """Send all recorded events, in order, to another sink."""
        for command in self.events:
            sink.emit(command)


class MotionWriter:
    """Emits motion events for one operation and tracks the tool position.

    The writer picks the feed rate for every move from the machining
    parameters, drops moves that would not change the position, and gates
    comments on GCodeSettings.use_comments.
    """

    def __init__(
        self,
        sink: MotionSink,
        settings: GCodeSettings,
        params: MachiningParameters
    ):
        self.sink = sink
        self.settings = settings
        self.params = params
        self.x: Optional[float] = None
        self.y: Optional[float] = None
        self.z: Optional[float] = None

    @property
    def position(self) -> Optional[Tuple[float, float]]:
        """Current XY position, or None before the first XY move."""
        if self.x is None or self.y is None:
            return None
        return (self.x, self.y)

    def _changes(
        self,
        x: Optional[float],
        y: Optional[float],
        z: Optional[float]
    ) -> Tuple[Optional[float], Optional[float], Optional[float]]:
        # Keep only axes whose value differs from the tracked position
        if x is not None and self.x is not None and abs(x - self.x) <= POSITION_TOLERANCE:
            x = None
        if y is not None and self.y is not None and abs(y - self.y) <= POSITION_TOLERANCE:
            y = None
        if z is not None and self.z is not None and abs(z - self.z) <= POSITION_TOLERANCE:
            z = None
        return x, y, z

    def _update(self, x, y, z) -> None:
        if x is not None:
            self.x = x
        if y is not None:
            self.y = y
        if z is not None:
            self.z = z

    def rapid(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        z: Optional[float] = None
    ) -> None:
        """Emit a rapid move; XY and Z feeds come from the rapid rates."""
        x, y, z = self._changes(x, y, z)
        if x is None and y is None and z is None:
            return
        feed = self.params.feed_xy_rapid if (x is not None or y is not None) else self.params.feed_z_rapid
        self.sink.emit(RapidMove(x=x, y=y, z=z, feed=feed))
        self._update(x, y, z)

    def feed(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        z: Optional[float] = None
    ) -> None:
        """Emit a cutting move; pure Z moves use the Z work feed."""
        x, y, z = self._changes(x, y, z)
        if x is None and y is None and z is None:
            return
        feed = self.params.feed_xy_work if (x is not None or y is not None) else self.params.feed_z_work
        self.sink.emit(LinearMove(x=x, y=y, z=z, feed=feed))
        self._update(x, y, z)

    def feed_to(self, point: Tuple[float, float], z: Optional[float] = None) -> None:
        self.feed(x=point[0], y=point[1], z=z)

    def arc(
        self,
        x: float,
        y: float,
        center: Tuple[float, float],
        clockwise: bool,
        z: Optional[float] = None
    ) -> None:
        """Emit an arc from the current position to (x, y) around center."""
        if self.position is None:
            raise RuntimeError("Arc move requested before the tool has an XY position")
        i, j = calculate_ij_offsets(self.position, center)
        self.sink.emit(ArcMove(
            x=x, y=y, i=i, j=j, clockwise=clockwise, z=z,
            feed=self.params.feed_xy_work
        ))
        self._update(x, y, z)

    def comment(self, text: str) -> None:
        if self.settings.use_comments:
            self.sink.emit(Comment(text))

    def retract(self, z: float) -> None:
        """Rapid straight up (or down in air) to z."""
        self.rapid(z=z)

    def reposition(
        self,
        point: Tuple[float, float],
        clear_z: float,
        approach_z: float,
        cut_z: float
    ) -> None:
        """Retract to clear_z, rapid over point, rapid to approach_z, feed to cut_z.

        When the tool is already over point below clear_z the retract and
        the XY rapid are skipped.
        """
        if not self.is_at(point):
            if self.z is None or self.z < clear_z:
                self.rapid(z=clear_z)
            self.rapid(x=point[0], y=point[1])
        if self.z is None or self.z > approach_z:
            self.rapid(z=approach_z)
        self.feed(z=cut_z)

    def is_at(self, point: Tuple[float, float], tolerance: float = 1e-6) -> bool:
        if self.position is None:
            return False
        return math.hypot(point[0] - self.x, point[1] - self.y) <= tolerance
