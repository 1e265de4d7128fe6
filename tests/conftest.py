"""Test configuration and fixtures."""
import matplotlib

matplotlib.use('Agg')

import pytest

from millpath.models import (
    Circle,
    GCodeSettings,
    MachiningParameters,
    MillingDirection,
    PocketStrategy,
)
from millpath.motion import Comment, MotionRecorder, MotionWriter


@pytest.fixture
def settings():
    """Output settings with comments on and arcs off."""
    return GCodeSettings(use_comments=True, allow_arcs=False)


@pytest.fixture
def arc_settings():
    """Output settings with arcs enabled."""
    return GCodeSettings(use_comments=True, allow_arcs=True)


@pytest.fixture
def params():
    """Typical pocket parameters: 4 mm tool, 2 mm deep in 1 mm steps."""
    return MachiningParameters(
        tool_diameter=4.0,
        total_depth=2.0,
        step_depth=1.0,
        step_percent=25.0,
        safe_z=5.0,
        retract_height=1.0,
        direction=MillingDirection.COUNTER_CLOCKWISE,
        strategy=PocketStrategy.CONCENTRIC,
    )


@pytest.fixture
def circle():
    """Circle of radius 10 at the origin."""
    return Circle(0.0, 0.0, 10.0)


@pytest.fixture
def recorder():
    """Empty motion recorder."""
    return MotionRecorder()


@pytest.fixture
def writer(recorder, settings, params):
    """Motion writer recording into the recorder fixture."""
    return MotionWriter(recorder, settings, params)


def _positions(events):
    x = y = z = None
    positions = []
    for event in events:
        if isinstance(event, Comment):
            continue
        x = event.x if event.x is not None else x
        y = event.y if event.y is not None else y
        z = event.z if event.z is not None else z
        positions.append((x, y, z))
    return positions


@pytest.fixture
def positions():
    """Function replaying events into the (x, y, z) position after every move."""
    return _positions
