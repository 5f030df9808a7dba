"""Tests for the Grid class."""

import numpy as np
import pytest

from lifegrid.core.cell import Cell
from lifegrid.core.grid import Grid
from lifegrid.core.types import Coordinate


def alive_set(grid):
    return set(grid.alive_coords())


def shifted(points, dx, dy, width, height):
    return {Coordinate((x + dx) % width, (y + dy) % height) for x, y in points}


GLIDER = [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)]


class TestGridConstruction:
    """Test cases for building a grid."""

    def test_initialization(self):
        """Test grid initialization."""
        grid = Grid(10, 20)
        assert grid.width == 10
        assert grid.height == 20
        assert grid.shape == (10, 20)
        assert len(grid) == 200
        assert grid.population == 0

    def test_all_cells_start_dead(self):
        grid = Grid(4, 3)
        assert all(not cell.is_alive() for cell in grid)
        assert len(grid.cells) == 12

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (0, 0), (-1, 5), (5, -3)])
    def test_invalid_dimensions(self, width, height):
        """Zero or negative dimensions are rejected."""
        with pytest.raises(ValueError):
            Grid(width, height)

    def test_non_integer_dimensions(self):
        with pytest.raises(ValueError):
            Grid(2.5, 4)

        with pytest.raises(ValueError):
            Grid(True, 4)

    def test_single_cell_grid(self):
        grid = Grid(1, 1)
        assert len(grid) == 1
        assert grid.index_to_coords(0) == (0, 0)


class TestCoordinateMapping:
    """Test cases for the index <-> coordinate bijection."""

    def test_row_major_layout(self):
        grid = Grid(4, 3)
        assert grid.coords_to_index(Coordinate(0, 0)) == 0
        assert grid.coords_to_index(Coordinate(3, 0)) == 3
        assert grid.coords_to_index(Coordinate(0, 1)) == 4
        assert grid.coords_to_index((3, 2)) == 11
        assert grid.index_to_coords(5) == Coordinate(1, 1)

    @pytest.mark.parametrize("width,height", [(1, 1), (1, 7), (7, 1), (4, 3), (5, 9)])
    def test_round_trip(self, width, height):
        """Index and coordinate conversions are exact inverses."""
        grid = Grid(width, height)

        for index in range(width * height):
            assert grid.coords_to_index(grid.index_to_coords(index)) == index

        for y in range(height):
            for x in range(width):
                coord = Coordinate(x, y)
                assert grid.index_to_coords(grid.coords_to_index(coord)) == coord

    def test_index_out_of_range(self):
        grid = Grid(3, 3)
        with pytest.raises(IndexError):
            grid.index_to_coords(9)

        with pytest.raises(IndexError):
            grid.index_to_coords(-1)

    def test_non_integer_index_rejected(self):
        grid = Grid(3, 3)
        grid.set_state([(2, 0)])

        for bad in (2.7, 2.0, "2", True):
            with pytest.raises(TypeError):
                grid.index_to_coords(bad)

        with pytest.raises(TypeError):
            grid.is_alive(2.7)

        assert grid.is_alive(np.int64(2))

    def test_coords_out_of_range(self):
        grid = Grid(3, 3)
        with pytest.raises(IndexError):
            grid.coords_to_index(Coordinate(3, 0))

        with pytest.raises(IndexError):
            grid.coords_to_index(Coordinate(0, -1))

    def test_wrap(self):
        grid = Grid(4, 3)
        assert grid.wrap((-1, -1)) == (3, 2)
        assert grid.wrap((4, 3)) == (0, 0)
        assert grid.wrap((9, 7)) == (1, 1)


class TestSeeding:
    """Test cases for set_state."""

    def test_set_state(self):
        grid = Grid(5, 5)
        grid.set_state([Coordinate(1, 1), Coordinate(2, 3)])

        assert grid.population == 2
        assert grid.get_cell(1, 1)
        assert grid.get_cell(2, 3)
        assert not grid.get_cell(0, 0)

    def test_set_state_raw_tuples(self):
        """Raw integer pairs are converted to coordinates."""
        grid = Grid(5, 5)
        grid.set_state([(0, 0), [4, 4]])
        assert alive_set(grid) == {(0, 0), (4, 4)}

    def test_set_state_leaves_other_cells(self):
        """Cells not listed keep their state."""
        grid = Grid(5, 5)
        grid.set_state([(1, 1)])
        grid.set_state([(3, 3)])
        assert alive_set(grid) == {(1, 1), (3, 3)}

    def test_set_state_duplicates(self):
        grid = Grid(5, 5)
        grid.set_state([(2, 2), (2, 2)])
        assert grid.population == 1

    def test_out_of_range_points_wrap(self):
        """Seed points outside the grid wrap modulo the dimensions."""
        grid = Grid(4, 3)
        grid.set_state([(-1, 0), (4, 1), (5, 5), (-4, -3)])

        assert alive_set(grid) == {(3, 0), (0, 1), (1, 2), (0, 0)}

    def test_invalid_points(self):
        grid = Grid(4, 3)
        with pytest.raises(ValueError):
            grid.set_state([(1, 2, 3)])


class TestCellAccess:
    """Test cases for reading cells back."""

    def test_getitem_returns_copy(self):
        """Cells read from the grid are values, not views."""
        grid = Grid(3, 3)
        grid.set_state([(1, 0)])

        cell = grid[1]
        assert cell == Cell(True)
        cell.set_alive(False)
        assert grid.is_alive(1)

    def test_getitem_out_of_range(self):
        grid = Grid(3, 3)
        with pytest.raises(IndexError):
            grid[9]

    def test_iteration_order(self):
        """Iteration follows index order."""
        grid = Grid(3, 2)
        grid.set_state([(2, 0), (0, 1)])
        assert [cell.is_alive() for cell in grid] == [False, False, True, True, False, False]

    def test_render_read(self):
        """Every live index maps back to the coordinate it was seeded at."""
        grid = Grid(6, 4)
        points = {Coordinate(0, 0), Coordinate(5, 3), Coordinate(2, 1)}
        grid.set_state(points)

        indices = grid.alive_indices()
        assert list(indices) == sorted(indices)
        assert {grid.index_to_coords(int(i)) for i in indices} == points

    def test_set_and_get_cell_wrap(self):
        grid = Grid(3, 3)
        grid.set_cell(-1, -1, True)
        assert grid.get_cell(2, 2)
        assert grid.get_cell(-1, -1)

        grid.set_cell(2, 2, False)
        assert grid.population == 0

    def test_clear(self):
        grid = Grid(5, 5)
        grid.set_state([(1, 1), (2, 2)])
        grid.clear()
        assert grid.population == 0

    def test_copy_is_independent(self):
        grid = Grid(4, 4)
        grid.set_state([(1, 1)])

        other = grid.copy()
        assert other == grid

        other.set_cell(2, 2, True)
        assert other != grid
        assert not grid.get_cell(2, 2)

    def test_to_array(self):
        grid = Grid(3, 2)
        grid.set_state([(2, 1)])

        arr = grid.to_array()
        assert arr.shape == (2, 3)
        assert arr[1, 2] == 1
        arr[0, 0] = 1
        assert not grid.get_cell(0, 0)

    def test_equality(self):
        assert Grid(3, 3) == Grid(3, 3)
        assert Grid(3, 3) != Grid(3, 4)
        assert Grid(3, 3) != "not a grid"

    def test_string_representation(self):
        grid = Grid(3, 2)
        assert str(grid) == "...\n..."

        grid.set_state([(0, 0), (2, 1)])
        assert str(grid) == "*..\n..*"


class TestNeighborCounting:
    """Test cases for neighbor counting."""

    def test_count_neighbors(self):
        grid = Grid(5, 5)
        grid.set_state([(1, 1), (1, 2), (2, 1)])

        assert grid.count_neighbors((2, 2)) == 3
        assert grid.count_neighbors((1, 1)) == 2
        assert grid.count_neighbors((0, 0)) == 1
        assert grid.count_neighbors((3, 3)) == 0

    def test_count_neighbors_wraps(self):
        """Opposite corners are neighbors on the torus."""
        grid = Grid(3, 3)
        grid.set_state([(0, 0), (2, 2)])

        assert grid.count_neighbors((0, 0)) == 1
        assert grid.count_neighbors((2, 2)) == 1

    def test_count_all_neighbors(self):
        grid = Grid(5, 5)
        grid.set_state([(2, 1), (2, 2), (2, 3)])

        counts = grid.count_all_neighbors()
        assert counts.shape == (5, 5)
        assert counts[2, 2] == 2
        assert counts[2, 1] == 3
        assert counts[2, 3] == 3
        assert counts[0, 0] == 0

    @pytest.mark.parametrize("width,height", [(7, 6), (3, 3), (2, 5), (1, 4)])
    def test_vectorized_matches_scalar(self, width, height):
        """Convolution counts agree with the per-cell toroidal formula."""
        rng = np.random.default_rng(42)
        grid = Grid(width, height)
        for y in range(height):
            for x in range(width):
                grid.set_cell(x, y, rng.random() < 0.5)

        counts = grid.count_all_neighbors()
        for y in range(height):
            for x in range(width):
                assert counts[y, x] == grid.count_neighbors((x, y))

    def test_single_cell_grid_counts_itself(self):
        """On a 1x1 torus all eight offsets land on the cell itself."""
        grid = Grid(1, 1)
        grid.set_state([(0, 0)])
        assert grid.count_neighbors((0, 0)) == 8
        assert grid.count_all_neighbors()[0, 0] == 8


class TestUpdate:
    """Test cases for advancing generations."""

    def test_empty_grid_stays_empty(self):
        grid = Grid(8, 8)
        for _ in range(5):
            grid.update()
            assert grid.population == 0

    @pytest.mark.parametrize(
        "points",
        [
            [(1, 2), (2, 2), (3, 2)],
            [(2, 1), (2, 2), (2, 3)],
        ],
    )
    def test_blinker_period_two(self, points):
        grid = Grid(5, 5)
        grid.set_state(points)
        start = alive_set(grid)

        grid.update()
        assert alive_set(grid) != start
        assert grid.population == 3

        grid.update()
        assert alive_set(grid) == start

    def test_blinker_flips_orientation(self):
        grid = Grid(5, 5)
        grid.set_state([(1, 2), (2, 2), (3, 2)])
        grid.update()
        assert alive_set(grid) == {(2, 1), (2, 2), (2, 3)}

    def test_glider_moves_diagonally(self):
        """After 4 generations the glider reappears shifted by (1, 1)."""
        grid = Grid(10, 10)
        grid.set_state([(x + 2, y + 2) for x, y in GLIDER])
        start = alive_set(grid)

        for _ in range(4):
            grid.update()

        assert alive_set(grid) == shifted(start, 1, 1, 10, 10)

    def test_glider_crosses_edges(self):
        """A glider leaving the bottom right corner comes back at the top left."""
        grid = Grid(6, 6)
        grid.set_state(GLIDER)
        start = alive_set(grid)

        for _ in range(4 * 6):
            grid.update()

        # six diagonal steps on a 6x6 torus is a full lap
        assert alive_set(grid) == start

    def test_block_is_still(self):
        grid = Grid(6, 6)
        grid.set_state([(2, 2), (3, 2), (2, 3), (3, 3)])
        grid.update()
        assert alive_set(grid) == {(2, 2), (3, 2), (2, 3), (3, 3)}

    def test_deterministic(self):
        """Equal grids advance to equal grids."""
        rng = np.random.default_rng(7)
        points = [(int(x), int(y)) for x, y in rng.integers(0, 12, size=(40, 2))]

        first = Grid(12, 12)
        second = Grid(12, 12)
        first.set_state(points)
        second.set_state(points)

        for _ in range(10):
            first.update()
            second.update()
            assert first == second

    def test_reads_current_generation_only(self):
        """Births and deaths in one generation don't affect each other's counts."""
        grid = Grid(5, 5)
        grid.set_state([(1, 2), (2, 2), (3, 2)])
        expected = {(2, 1), (2, 2), (2, 3)}

        # An in-place sweep would see (2, 1) born before counting (1, 2)
        grid.update()
        assert alive_set(grid) == expected

    def test_blinker_across_edge(self):
        """A blinker straddling the x edge flips like an interior one."""
        grid = Grid(5, 5)
        grid.set_state([(4, 2), (0, 2), (1, 2)])

        grid.update()
        assert alive_set(grid) == {(0, 1), (0, 2), (0, 3)}

        grid.update()
        assert alive_set(grid) == {(4, 2), (0, 2), (1, 2)}

    def test_corner_cells_match_interior_behavior(self):
        """Three wrap-adjacent corners grow the same block as an interior L."""
        corners = Grid(5, 5)
        corners.set_state([(0, 0), (4, 4), (0, 4)])

        interior = Grid(5, 5)
        interior.set_state(shifted([(0, 0), (4, 4), (0, 4)], 2, 2, 5, 5))

        corners.update()
        interior.update()

        assert alive_set(corners) == {(0, 0), (4, 0), (0, 4), (4, 4)}
        assert alive_set(interior) == shifted(alive_set(corners), 2, 2, 5, 5)

    @pytest.mark.parametrize("width,height", [(5, 5), (3, 4), (2, 2), (1, 1)])
    def test_full_grid_dies(self, width, height):
        """Every cell of a fully alive torus has 8 live neighbors and dies."""
        grid = Grid(width, height)
        grid.set_state([(x, y) for y in range(height) for x in range(width)])
        assert grid.population == width * height

        grid.update()
        assert grid.population == 0

    def test_cell_count_never_changes(self):
        grid = Grid(7, 4)
        grid.set_state(GLIDER)
        for _ in range(3):
            grid.update()
            assert len(grid) == 28
            assert len(grid.cells) == 28
            assert grid.to_array().shape == (4, 7)
