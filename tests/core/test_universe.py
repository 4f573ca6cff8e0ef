"""Tests for the Universe class and the generation transition."""

import numpy as np
import pytest
from gameoflife.core.cell import Cell, CellState, Position
from gameoflife.core.random_source import NumpyRandomSource
from gameoflife.core.universe import (
    InvalidDimensionError,
    Universe,
    neighbors_of,
    seed,
    step,
    tick,
)


class FixedRandomSource:
    """Random source that replays a fixed list of draws."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.calls = 0

    def next(self):
        draw = self.draws[self.calls % len(self.draws)]
        self.calls += 1
        return draw


BLINKER_HORIZONTAL = [
    ".....",
    ".....",
    ".***.",
    ".....",
    ".....",
]

BLINKER_VERTICAL = [
    ".....",
    "..*..",
    "..*..",
    "..*..",
    ".....",
]

BLOCK = [
    "....",
    ".**.",
    ".**.",
    "....",
]


class TestSeed:
    """Test cases for seeding a universe."""

    @pytest.mark.parametrize("width,height", [(0, 0), (0, 3), (3, 0), (1, 1), (4, 3), (7, 5)])
    def test_shape_and_positions(self, width, height):
        """Test seeded grids have the requested shape and consistent positions."""
        grid = seed(width, height, 0.5, NumpyRandomSource(1))

        assert len(grid) == height
        for y, row in enumerate(grid):
            assert len(row) == width
            for x, cell in enumerate(row):
                assert cell.position == Position(x, y)

    def test_draws_below_probability_are_alive(self):
        """Test a cell is alive exactly when its draw is below the probability."""
        source = FixedRandomSource([0.1, 0.5, 0.29, 0.3])
        universe = Universe.seed(2, 2, 0.3, source)

        assert universe.is_alive(0, 0)
        assert not universe.is_alive(1, 0)
        assert universe.is_alive(0, 1)
        assert not universe.is_alive(1, 1)
        assert source.calls == 4

    def test_probability_extremes(self):
        """Test probability 0 gives all dead and 1 gives all alive."""
        assert Universe.seed(5, 5, 0.0, NumpyRandomSource(3)).population == 0
        assert Universe.seed(5, 5, 1.0, NumpyRandomSource(3)).population == 25

    def test_deterministic_with_seeded_source(self):
        """Test the same seed produces the same universe."""
        first = Universe.seed(8, 6, 0.3, NumpyRandomSource(42))
        second = Universe.seed(8, 6, 0.3, NumpyRandomSource(42))
        assert first == second

    def test_negative_dimensions_rejected(self):
        """Test negative dimensions raise InvalidDimensionError."""
        with pytest.raises(InvalidDimensionError):
            seed(-1, 5)
        with pytest.raises(InvalidDimensionError):
            Universe.seed(5, -2)
        with pytest.raises(InvalidDimensionError):
            Universe(-1, 0)

    def test_invalid_probability_rejected(self):
        """Test probabilities outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            seed(3, 3, 1.5)
        with pytest.raises(ValueError):
            seed(3, 3, -0.1)


class TestNeighbors:
    """Test cases for neighbor enumeration."""

    def test_neighbors_within_bounds(self):
        """Test every neighbor is adjacent, distinct from the center and in bounds."""
        universe = Universe.seed(4, 3, 0.5, NumpyRandomSource(7))

        for cell in universe.cells():
            neighbors = neighbors_of(universe.grid, cell.position)
            assert 0 <= len(neighbors) <= 8
            for neighbor in neighbors:
                nx, ny = neighbor.position
                assert neighbor.position != cell.position
                assert abs(nx - cell.position.x) <= 1
                assert abs(ny - cell.position.y) <= 1
                assert 0 <= nx < universe.width
                assert 0 <= ny < universe.height

    def test_center_has_eight_neighbors(self):
        """Test an interior cell has a full Moore neighborhood."""
        universe = Universe(3, 3)
        assert len(neighbors_of(universe.grid, Position(1, 1))) == 8

    def test_corner_does_not_wrap(self):
        """Test a corner cell only sees the three cells next to it."""
        universe = Universe.from_strings(["*..*", "....", "....", "*..*"])
        neighbors = neighbors_of(universe.grid, Position(0, 0))

        assert len(neighbors) == 3
        assert {n.position for n in neighbors} == {Position(1, 0), Position(0, 1), Position(1, 1)}
        assert universe.neighbor_count(Position(0, 0)) == 0

    def test_neighbor_order_is_stable(self):
        """Test neighbors come back row by row, left to right."""
        universe = Universe(3, 3)
        positions = [n.position for n in neighbors_of(universe.grid, Position(1, 1))]
        assert positions == [
            (0, 0), (1, 0), (2, 0),
            (0, 1), (2, 1),
            (0, 2), (1, 2), (2, 2),
        ]

    def test_single_cell_grid(self):
        """Test a lone cell has no neighbors."""
        universe = Universe(1, 1)
        assert neighbors_of(universe.grid, Position(0, 0)) == []

    def test_neighbor_count(self):
        """Test counting live neighbors."""
        universe = Universe.from_strings(BLOCK)
        assert universe.neighbor_count(Position(1, 1)) == 3
        assert universe.neighbor_count(Position(0, 0)) == 1
        assert universe.neighbor_count(Position(0, 1)) == 2

    def test_neighbor_count_out_of_bounds(self):
        """Test counting neighbors outside the universe raises IndexError."""
        universe = Universe(3, 3)
        with pytest.raises(IndexError):
            universe.neighbor_count(Position(3, 0))


class TestTick:
    """Test cases for the single-cell rule."""

    @pytest.mark.parametrize(
        "rows,expected",
        [
            (["...", ".*.", "..."], CellState.DEAD),  # underpopulation
            (["*..", ".*.", "..."], CellState.DEAD),
            (["*..", ".*.", "..*"], CellState.ALIVE),  # survival with 2
            (["**.", ".*.", "..*"], CellState.ALIVE),  # survival with 3
            (["***", ".*.", "..*"], CellState.DEAD),  # overpopulation
            (["***", "...", "..."], CellState.ALIVE),  # reproduction
            (["**.", "...", "..."], CellState.DEAD),
            (["***", "*..", "..."], CellState.DEAD),
        ],
    )
    def test_rules(self, rows, expected):
        """Test Conway's rules for the center cell."""
        universe = Universe.from_strings(rows)
        center = universe.cell(1, 1)

        result = tick(center, universe.grid)

        assert result.state is expected
        assert result.position == center.position


class TestStep:
    """Test cases for advancing a whole generation."""

    def test_all_dead_stays_dead(self):
        """Test an empty universe stays empty."""
        universe = Universe(6, 4)
        assert universe.step() == universe
        assert universe.step().population == 0

    def test_block_still_life(self):
        """Test the block is unchanged by a step."""
        universe = Universe.from_strings(BLOCK)
        assert universe.step() == universe

    def test_blinker_oscillates(self):
        """Test the blinker alternates between horizontal and vertical."""
        horizontal = Universe.from_strings(BLINKER_HORIZONTAL)
        vertical = Universe.from_strings(BLINKER_VERTICAL)

        assert horizontal.step() == vertical
        assert horizontal.step().step() == horizontal

    def test_synchronous_update(self):
        """Test a row is computed from the previous generation only."""
        # With in-place updates the left cell of the line would die before
        # the middle cell counted it.
        grid = Universe.from_strings(["...", "***", "..."]).grid
        next_grid = step(grid)
        assert [cell.state for cell in next_grid[1]] == [
            CellState.DEAD,
            CellState.ALIVE,
            CellState.DEAD,
        ]
        assert next_grid[0][1].state is CellState.ALIVE
        assert next_grid[2][1].state is CellState.ALIVE

    def test_step_is_pure(self):
        """Test stepping equal inputs gives equal outputs and leaves input intact."""
        grid = seed(6, 6, 0.4, NumpyRandomSource(5))
        snapshot = tuple(tuple(row) for row in grid)

        assert step(grid) == step(snapshot)
        assert grid == snapshot

    def test_previous_generation_remains_valid(self):
        """Test earlier generations are unaffected by later steps."""
        first = Universe.from_strings(BLINKER_HORIZONTAL)
        second = first.step()
        second.step()

        assert str(first) == "\n".join(BLINKER_HORIZONTAL)
        assert second == Universe.from_strings(BLINKER_VERTICAL)

    def test_step_keeps_dimensions_and_positions(self):
        """Test the next generation has the same shape and consistent positions."""
        universe = Universe.seed(7, 4, 0.5, NumpyRandomSource(11)).step()

        assert universe.shape == (7, 4)
        for y, row in enumerate(universe.grid):
            assert len(row) == 7
            for x, cell in enumerate(row):
                assert cell.position == (x, y)

    @pytest.mark.parametrize("width,height", [(0, 0), (0, 4), (4, 0)])
    def test_empty_universe(self, width, height):
        """Test stepping a universe without cells is a no-op."""
        universe = Universe(width, height)
        assert universe.step() == universe
        assert universe.step().shape == (width, height)


class TestUniverse:
    """Test cases for Universe construction and queries."""

    def test_initialization(self):
        """Test a new universe is all dead."""
        universe = Universe(10, 20)
        assert universe.width == 10
        assert universe.height == 20
        assert universe.shape == (10, 20)
        assert universe.population == 0

    def test_ragged_grid_rejected(self):
        """Test rows of different lengths are rejected."""
        grid = Universe(3, 2).grid
        ragged = (grid[0], grid[1][:2])
        with pytest.raises(InvalidDimensionError):
            Universe(3, 2, ragged)

    def test_misplaced_cell_rejected(self):
        """Test a cell whose position disagrees with its index is rejected."""
        grid = [list(row) for row in Universe(2, 2).grid]
        grid[0][0] = Cell(CellState.ALIVE, Position(1, 1))
        with pytest.raises(InvalidDimensionError):
            Universe(2, 2, grid)

    def test_cell_out_of_bounds(self):
        """Test cell access outside the universe raises IndexError."""
        universe = Universe(3, 3)
        with pytest.raises(IndexError):
            universe.cell(-1, 0)
        with pytest.raises(IndexError):
            universe.cell(0, 3)

    def test_from_strings(self):
        """Test parsing the text form."""
        universe = Universe.from_strings(BLINKER_VERTICAL)
        assert universe.shape == (5, 5)
        assert universe.population == 3
        assert universe.is_alive(2, 1)
        assert str(universe) == "\n".join(BLINKER_VERTICAL)

    def test_from_strings_ragged(self):
        """Test text rows of different lengths are rejected."""
        with pytest.raises(ValueError):
            Universe.from_strings(["..", "..."])

    def test_array_conversion(self):
        """Test conversion to and from numpy arrays."""
        universe = Universe.from_strings(["*..", "..*"])
        arr = universe.to_array()

        assert arr.shape == (2, 3)
        assert arr.dtype == np.int8
        assert arr.tolist() == [[1, 0, 0], [0, 0, 1]]
        assert Universe.from_array(arr) == universe

    def test_from_array_requires_2d(self):
        """Test one-dimensional data is rejected."""
        with pytest.raises(ValueError):
            Universe.from_array([1, 0, 1])

    def test_changed_positions(self):
        """Test finding the cells that changed between generations."""
        horizontal = Universe.from_strings(BLINKER_HORIZONTAL)
        changed = set(horizontal.step().changed_positions(horizontal))
        assert changed == {Position(1, 2), Position(3, 2), Position(2, 1), Position(2, 3)}

    def test_changed_positions_size_mismatch(self):
        """Test comparing universes of different sizes raises ValueError."""
        with pytest.raises(ValueError):
            list(Universe(2, 2).changed_positions(Universe(3, 3)))

    def test_bounding_box(self):
        """Test the bounding box of living cells."""
        assert Universe(4, 4).get_bounding_box() is None
        assert Universe.from_strings(BLINKER_VERTICAL).get_bounding_box() == (2, 1, 2, 3)

    def test_equality_and_hash(self):
        """Test universes compare by dimensions and cell states."""
        a = Universe.from_strings(BLOCK)
        b = Universe.from_strings(BLOCK)

        assert a == b
        assert hash(a) == hash(b)
        assert a != Universe(4, 4)
        assert Universe(2, 3) != Universe(3, 2)
        assert a != "not a universe"
