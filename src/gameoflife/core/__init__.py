"""Core Game of Life logic."""

from .cell import Cell, CellState, Position
from .random_source import NumpyRandomSource, RandomSource
from .universe import (
    Grid,
    InvalidDimensionError,
    Universe,
    neighbors_of,
    seed,
    step,
    tick,
)
from .simulation import Simulation

__all__ = [
    "Cell",
    "CellState",
    "Position",
    "Grid",
    "InvalidDimensionError",
    "Universe",
    "RandomSource",
    "NumpyRandomSource",
    "Simulation",
    "neighbors_of",
    "seed",
    "step",
    "tick",
]
