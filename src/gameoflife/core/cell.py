"""Cell values for Conway's Game of Life."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class CellState(Enum):
    """State of a single cell."""

    DEAD = "dead"
    ALIVE = "alive"

    @property
    def is_alive(self) -> bool:
        return self is CellState.ALIVE


class Position(NamedTuple):
    """Location of a cell as (column, row)."""

    x: int
    y: int


@dataclass(frozen=True)
class Cell:
    """A cell state placed at a fixed position.

    Cells are immutable: advancing a generation creates new cells rather
    than changing existing ones.
    """

    state: CellState
    position: Position

    @property
    def is_alive(self) -> bool:
        """Whether the cell is alive."""
        return self.state is CellState.ALIVE

    def with_state(self, state: CellState) -> "Cell":
        """Return a cell at the same position with a new state."""
        return Cell(state, self.position)
