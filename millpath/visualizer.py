"""Static preview and statistics of a recorded motion program."""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .motion import ArcMove, Comment, LinearMove, MotionCommand, RapidMove
from .utils.arc_utils import arc_angles, interpolate_arc

logger = logging.getLogger(__name__)

# Chord length used to draw arcs
ARC_PREVIEW_SEGMENT = 0.25


@dataclass
class MotionSummary:
    """Statistics of a motion program.

    Attributes:
        rapid_length: Total length of rapid moves
        cut_length: Total length of cutting moves (lines and arcs)
        arc_count: Number of arc moves
        move_count: Number of motion events (comments excluded)
        min_z: Lowest Z reached (None when no Z was set)
        max_z: Highest Z reached
        bounds: (min_x, min_y, max_x, max_y) of all visited points
    """
    rapid_length: float = 0.0
    cut_length: float = 0.0
    arc_count: int = 0
    move_count: int = 0
    min_z: Optional[float] = None
    max_z: Optional[float] = None
    bounds: Optional[Tuple[float, float, float, float]] = None


def motion_segments(events: Sequence[MotionCommand]) -> List[Tuple[str, np.ndarray]]:
    """
    Turn motion events into 3-D polylines.

    Moves are drawn from the tracked position, so segments start only once
    X, Y and Z are all known. Arcs are sampled into short chords.

    Returns:
        List of ('rapid' | 'cut', array of shape (n, 3)) polylines
    """
    polylines: List[Tuple[str, np.ndarray]] = []
    position: List[Optional[float]] = [None, None, None]

    for event in events:
        if isinstance(event, Comment):
            continue
        if isinstance(event, ArcMove):
            target = [event.x, event.y, event.z if event.z is not None else position[2]]
            if None not in position:
                center = (position[0] + event.i, position[1] + event.j)
                radius = math.hypot(event.i, event.j)
                a0, a1 = arc_angles((position[0], position[1]), (event.x, event.y), center)
                samples = interpolate_arc(center, radius, a0, a1, event.clockwise,
                                          max_segment_length=ARC_PREVIEW_SEGMENT, min_segments=4)
                zs = np.linspace(position[2], target[2], len(samples) + 1)
                points = [position] + [[x, y, z] for (x, y), z in zip(samples, zs[1:])]
                polylines.append(('cut', np.array(points, dtype=float)))
            position = target
            continue

        target = [
            event.x if event.x is not None else position[0],
            event.y if event.y is not None else position[1],
            event.z if event.z is not None else position[2],
        ]
        if None not in position and None not in target:
            kind = 'rapid' if isinstance(event, RapidMove) else 'cut'
            polylines.append((kind, np.array([position, target], dtype=float)))
        position = target
    return polylines


def _polyline_length(points: np.ndarray) -> float:
    return float(np.linalg.norm(np.diff(points, axis=0), axis=1).sum())


def summarize_motion(events: Sequence[MotionCommand]) -> MotionSummary:
    """
    Compute lengths, counts and extents of a motion program.

    Args:
        events: Recorded motion events

    Returns:
        MotionSummary of the program
    """
    summary = MotionSummary()
    summary.move_count = sum(1 for e in events if isinstance(e, (RapidMove, LinearMove, ArcMove)))
    summary.arc_count = sum(1 for e in events if isinstance(e, ArcMove))

    zs = [e.z for e in events if isinstance(e, (RapidMove, LinearMove, ArcMove)) and e.z is not None]
    if zs:
        summary.min_z = float(np.min(zs))
        summary.max_z = float(np.max(zs))

    polylines = motion_segments(events)
    for kind, points in polylines:
        if kind == 'rapid':
            summary.rapid_length += _polyline_length(points)
        else:
            summary.cut_length += _polyline_length(points)
    if polylines:
        stacked = np.vstack([points for _, points in polylines])
        lo = stacked.min(axis=0)
        hi = stacked.max(axis=0)
        summary.bounds = (float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))
    return summary


def plot_motion_preview(
    events: Sequence[MotionCommand],
    output_file: Optional[str] = None,
    title: str = "Toolpath Preview",
    dpi: int = 150,
    font_size: int = 8
):
    """
    Plot the XY projection of a motion program.

    Rapid moves are dashed, cutting moves solid.

    Args:
        events: Recorded motion events
        output_file: Optional path to save the plot
        title: Plot title
        dpi: Plot resolution
        font_size: Font size for labels

    Returns:
        The matplotlib Figure
    """
    fig, ax = plt.subplots(figsize=(10, 8), dpi=dpi)

    rapid_labelled = False
    cut_labelled = False
    for kind, points in motion_segments(events):
        if kind == 'rapid':
            ax.plot(points[:, 0], points[:, 1], linestyle='--', color='gray', linewidth=0.8,
                    label="Rapid" if not rapid_labelled else "")
            rapid_labelled = True
        else:
            ax.plot(points[:, 0], points[:, 1], linestyle='-', color='blue', linewidth=1.2,
                    label="Cut" if not cut_labelled else "")
            cut_labelled = True

    summary = summarize_motion(events)
    ax.set_xlabel("X", fontsize=font_size + 2)
    ax.set_ylabel("Y", fontsize=font_size + 2)
    ax.set_title(title, fontsize=font_size + 4)
    if rapid_labelled or cut_labelled:
        ax.legend(fontsize=font_size)
    ax.grid(True, alpha=0.3)
    ax.set_aspect('equal', adjustable='datalim')
    ax.margins(0.1)

    stats_text = (
        f"Moves: {summary.move_count}\n"
        f"Cut length: {summary.cut_length:.1f}\n"
        f"Rapid length: {summary.rapid_length:.1f}"
    )
    if summary.min_z is not None:
        stats_text += f"\nZ range: {summary.min_z:.3f} .. {summary.max_z:.3f}"
    ax.text(0.02, 0.02, stats_text, transform=ax.transAxes,
            fontsize=font_size, verticalalignment='bottom', horizontalalignment='left',
            bbox=dict(boxstyle="round,pad=0.5", facecolor="lightblue", alpha=0.8))

    fig.tight_layout()

    if output_file:
        fig.savefig(output_file, dpi=dpi, bbox_inches='tight')
        logger.info("Plot saved to: %s", output_file)

    return fig
