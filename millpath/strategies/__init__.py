"""Area-clearing strategies for pockets.

Each strategy clears one depth layer of a pocket and implements the
PocketStrategyGenerator protocol.

Strategies:
- ConcentricStrategy: offset rings from the inside out
- SpiralStrategy: Archimedean spiral clipped to the boundary
- RadialStrategy: spokes from the center to the boundary
- LinesStrategy: parallel one-way lines
- ZigZagStrategy: parallel lines in alternating directions

Usage:
    from millpath.strategies import create_strategy, StrategyContext

    strategy = create_strategy(params.strategy)
    strategy.generate(ctx)
"""
from .base import (
    PocketStrategyGenerator,
    StrategyContext,
    create_strategy,
    trace_closing_contour,
)
from .concentric import ConcentricStrategy, concentric_offsets
from .spiral import (
    SpiralCrossing,
    SpiralPlan,
    SpiralStrategy,
    entry_crossing,
    exit_crossing,
    plan_spiral,
)
from .radial import RadialStrategy
from .lines import LinesStrategy, ZigZagStrategy

__all__ = [
    'PocketStrategyGenerator',
    'StrategyContext',
    'create_strategy',
    'trace_closing_contour',
    'ConcentricStrategy',
    'concentric_offsets',
    'SpiralCrossing',
    'SpiralPlan',
    'SpiralStrategy',
    'plan_spiral',
    'exit_crossing',
    'entry_crossing',
    'RadialStrategy',
    'LinesStrategy',
    'ZigZagStrategy',
]
