"""Universe (grid of cells) and the generation transition."""

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell, CellState, Position
from .random_source import NumpyRandomSource, RandomSource

Grid = Tuple[Tuple[Cell, ...], ...]

DEFAULT_LIVE_PROBABILITY = 0.3

# Moore neighborhood offsets, top row to bottom row, left to right
_NEIGHBOR_OFFSETS = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)


class InvalidDimensionError(ValueError):
    """Raised when a universe is given a negative or inconsistent size."""


def _check_dimensions(width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise InvalidDimensionError(f"Dimensions must be non-negative, got {width}x{height}")


def seed(
    width: int,
    height: int,
    live_probability: float = DEFAULT_LIVE_PROBABILITY,
    random_source: Optional[RandomSource] = None,
) -> Grid:
    """Create a randomly populated grid.

    One draw is taken per cell, row by row and left to right. A cell is
    alive when its draw is below ``live_probability``.

    Args:
        width: Number of columns
        height: Number of rows
        live_probability: Chance each cell starts alive (0.0 to 1.0)
        random_source: Source of draws; a fresh unseeded numpy source if omitted

    Returns:
        A grid of ``height`` rows with ``width`` cells each

    Raises:
        InvalidDimensionError: If width or height is negative
        ValueError: If live_probability is outside [0, 1]
    """
    _check_dimensions(width, height)
    if not 0.0 <= live_probability <= 1.0:
        raise ValueError(f"Live probability must be between 0.0 and 1.0, got {live_probability}")

    source = random_source if random_source is not None else NumpyRandomSource()

    rows = []
    for y in range(height):
        row = []
        for x in range(width):
            state = CellState.ALIVE if source.next() < live_probability else CellState.DEAD
            row.append(Cell(state, Position(x, y)))
        rows.append(tuple(row))
    return tuple(rows)


def neighbors_of(grid: Grid, position: Position) -> List[Cell]:
    """Get the cells in the Moore neighborhood of a position.

    Edges are hard boundaries: positions outside the grid are skipped
    rather than wrapped.

    Args:
        grid: Grid to read neighbors from
        position: Center of the neighborhood

    Returns:
        Between 0 and 8 neighboring cells, ordered by row then column
    """
    x, y = position
    height = len(grid)
    neighbors = []
    for dx, dy in _NEIGHBOR_OFFSETS:
        nx, ny = x + dx, y + dy
        if 0 <= ny < height and 0 <= nx < len(grid[ny]):
            neighbors.append(grid[ny][nx])
    return neighbors


def count_alive(cells: Iterable[Cell]) -> int:
    """Count the living cells in an iterable of cells."""
    return sum(1 for cell in cells if cell.state is CellState.ALIVE)


def tick(cell: Cell, grid: Grid) -> Cell:
    """Compute the next state of a single cell.

    Conway's rules:
    - Live cell with 2-3 live neighbors survives
    - Dead cell with exactly 3 live neighbors becomes alive
    - All other cells die or stay dead

    Args:
        cell: Cell to advance
        grid: Current generation, used as the neighbor source

    Returns:
        A new cell at the same position
    """
    alive_count = count_alive(neighbors_of(grid, cell.position))

    if cell.state is CellState.ALIVE:
        alive = alive_count in (2, 3)
    else:
        alive = alive_count == 3

    return cell.with_state(CellState.ALIVE if alive else CellState.DEAD)


def step(grid: Grid) -> Grid:
    """Produce the next generation of a grid.

    Every cell reads its neighbors from the same previous generation, so
    no cell ever sees an already-updated neighbor. The input is left
    untouched.

    Args:
        grid: Current generation

    Returns:
        Next generation with identical dimensions
    """
    return tuple(tuple(tick(cell, grid) for cell in row) for row in grid)


def _validate_grid(grid: Grid, width: int, height: int) -> None:
    if len(grid) != height:
        raise InvalidDimensionError(f"Expected {height} rows, got {len(grid)}")
    for y, row in enumerate(grid):
        if len(row) != width:
            raise InvalidDimensionError(f"Row {y} has {len(row)} cells, expected {width}")
        for x, cell in enumerate(row):
            if cell.position != (x, y):
                raise InvalidDimensionError(
                    f"Cell at ({x}, {y}) reports position {tuple(cell.position)}"
                )


class Universe:
    """An immutable generation of the Game of Life.

    Holds a row-major grid of cells with fixed dimensions. Advancing the
    universe returns a new Universe; earlier generations stay valid and
    unchanged.
    """

    def __init__(self, width: int, height: int, grid: Optional[Grid] = None) -> None:
        """Initialize a universe.

        Args:
            width: Number of columns
            height: Number of rows
            grid: Cells for the universe; all dead if omitted

        Raises:
            InvalidDimensionError: If dimensions are negative or the grid
                does not match them
        """
        _check_dimensions(width, height)
        if grid is None:
            grid = tuple(
                tuple(Cell(CellState.DEAD, Position(x, y)) for x in range(width))
                for y in range(height)
            )
        else:
            grid = tuple(tuple(row) for row in grid)
            _validate_grid(grid, width, height)

        self._width = width
        self._height = height
        self._grid: Grid = grid

    @classmethod
    def seed(
        cls,
        width: int,
        height: int,
        live_probability: float = DEFAULT_LIVE_PROBABILITY,
        random_source: Optional[RandomSource] = None,
    ) -> "Universe":
        """Create a randomly populated universe.

        See :func:`seed` for the meaning of the arguments.
        """
        return cls(width, height, seed(width, height, live_probability, random_source))

    @classmethod
    def from_strings(cls, rows: Sequence[str], alive: str = "*") -> "Universe":
        """Build a universe from text rows.

        Args:
            rows: One string per row; ``alive`` marks a live cell, any other
                character a dead one
            alive: Character used for live cells

        Raises:
            ValueError: If rows have different lengths
        """
        height = len(rows)
        width = len(rows[0]) if rows else 0
        if any(len(row) != width for row in rows):
            raise ValueError("All rows must have the same length")

        grid = tuple(
            tuple(
                Cell(CellState.ALIVE if char == alive else CellState.DEAD, Position(x, y))
                for x, char in enumerate(row)
            )
            for y, row in enumerate(rows)
        )
        return cls(width, height, grid)

    @classmethod
    def from_array(cls, data) -> "Universe":
        """Build a universe from a 2D array-like indexed as [row, column].

        Non-zero entries are alive.

        Raises:
            ValueError: If the data is not two-dimensional
        """
        arr = np.asarray(data)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {arr.shape}")

        height, width = arr.shape
        grid = tuple(
            tuple(
                Cell(CellState.ALIVE if arr[y, x] else CellState.DEAD, Position(x, y))
                for x in range(width)
            )
            for y in range(height)
        )
        return cls(width, height, grid)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Get universe dimensions as (width, height)."""
        return (self._width, self._height)

    @property
    def grid(self) -> Grid:
        """The underlying row-major grid of cells."""
        return self._grid

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return count_alive(self.cells())

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for row in self._grid:
            yield from row

    def cell(self, x: int, y: int) -> Cell:
        """Get the cell at a position.

        Raises:
            IndexError: If the coordinates are out of bounds
        """
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds")
        return self._grid[y][x]

    def is_alive(self, x: int, y: int) -> bool:
        return self.cell(x, y).is_alive

    def neighbors(self, position: Position) -> List[Cell]:
        """Get the in-bounds Moore neighbors of a position."""
        return neighbors_of(self._grid, position)

    def neighbor_count(self, position: Position) -> int:
        """Count living neighbors of a position.

        Raises:
            IndexError: If the position is out of bounds
        """
        x, y = position
        self.cell(x, y)
        return count_alive(neighbors_of(self._grid, Position(x, y)))

    def step(self) -> "Universe":
        """Return the next generation."""
        return Universe(self._width, self._height, step(self._grid))

    def changed_positions(self, other: "Universe") -> Iterator[Position]:
        """Get positions whose state differs from another universe.

        Raises:
            ValueError: If the universes have different dimensions
        """
        if other.shape != self.shape:
            raise ValueError(f"Universe dimensions don't match: {other.shape} vs {self.shape}")

        for mine, theirs in zip(self.cells(), other.cells()):
            if mine.state is not theirs.state:
                yield mine.position

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        living = [cell.position for cell in self.cells() if cell.is_alive]
        if not living:
            return None

        xs = [position.x for position in living]
        ys = [position.y for position in living]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_array(self) -> np.ndarray:
        """Convert to an int8 array of shape (height, width), 1 for alive."""
        arr = np.zeros((self._height, self._width), dtype=np.int8)
        for cell in self.cells():
            if cell.is_alive:
                arr[cell.position.y, cell.position.x] = 1
        return arr

    def _key(self) -> Tuple:
        return (self.shape, tuple(cell.is_alive for cell in self.cells()))

    def __eq__(self, other: object) -> bool:
        """Check if two universes have the same dimensions and cell states."""
        if not isinstance(other, Universe):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"Universe(width={self._width}, height={self._height}, population={self.population})"

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        return "\n".join(
            "".join("*" if cell.is_alive else "." for cell in row) for row in self._grid
        )
