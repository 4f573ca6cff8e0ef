"""Conway's Game of Life simulation core with terminal and Tkinter frontends."""

__version__ = "0.1.0"

from .core.cell import Cell, CellState, Position
from .core.universe import InvalidDimensionError, Universe
from .core.simulation import Simulation
from .config import SimulationConfig

__all__ = [
    "Cell",
    "CellState",
    "Position",
    "InvalidDimensionError",
    "Universe",
    "Simulation",
    "SimulationConfig",
]
