"""Toroidal grid of cells for Conway's Game of Life."""

import logging
from numbers import Integral
from typing import Iterable, Iterator, List, Sequence, Tuple, Union

import numpy as np
import torch
import torch.nn.functional as F

from .cell import RULE_TABLE, Cell
from .types import Coordinate

logger = logging.getLogger(__name__)

Point = Union[Coordinate, Sequence[int]]

# Moore neighborhood, center excluded
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)


class Grid:
    """A fixed-size toroidal grid of binary cells.

    Cells are stored row-major in a numpy array of shape (height, width), so
    the linear index of (x, y) is ``y * width + x``. Opposite edges are
    adjacent: every neighbor lookup and every seed point is taken modulo the
    grid dimensions.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize a grid with every cell dead.

        Args:
            width: Number of columns (> 0)
            height: Number of rows (> 0)

        Raises:
            ValueError: If either dimension is not a positive integer
        """
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, Integral) or value <= 0:
                raise ValueError(f"Grid {name} must be a positive integer, got {value!r}")

        self._width = int(width)
        self._height = int(height)
        self._cells = np.zeros((self._height, self._width), dtype=np.int8)
        # Back buffer for update(); swapped with _cells every generation
        self._next_cells = np.zeros_like(self._cells)

        # Keep torch off extra threads, the engine is single-threaded
        torch.set_num_threads(1)

        self._torch_input = torch.zeros(1, 1, self._height, self._width, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

        logger.debug("Created %dx%d toroidal grid", self._width, self._height)

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (width, height)."""
        return (self._width, self._height)

    def __len__(self) -> int:
        return self._width * self._height

    # Coordinate <-> index mapping

    def index_to_coords(self, index: int) -> Coordinate:
        """Map a linear cell index to its coordinate.

        Raises:
            TypeError: If index is not an integer
            IndexError: If index is outside [0, width * height)
        """
        if isinstance(index, bool) or not isinstance(index, Integral):
            raise TypeError(f"Cell index must be an integer, got {index!r}")
        if not 0 <= index < len(self):
            raise IndexError(f"Cell index {index} out of range for {self._width}x{self._height} grid")
        return Coordinate.from_index(int(index), self._width)

    def coords_to_index(self, coord: Point) -> int:
        """Map an in-range coordinate to its linear cell index.

        Raises:
            IndexError: If the coordinate lies outside the grid
        """
        coord = Coordinate.from_tuple(coord)
        if not (0 <= coord.x < self._width and 0 <= coord.y < self._height):
            raise IndexError(f"Coordinates ({coord.x}, {coord.y}) out of bounds")
        return coord.to_index(self._width)

    def wrap(self, coord: Point) -> Coordinate:
        """Bring any coordinate onto the torus."""
        coord = Coordinate.from_tuple(coord)
        return Coordinate(coord.x % self._width, coord.y % self._height)

    # Seeding

    def set_state(self, points: Iterable[Point]) -> None:
        """Mark each listed point alive, leaving every other cell untouched.

        Points outside the grid wrap modulo width/height, the same way
        neighbor lookups do, so (-1, 0) lands on (width - 1, 0).

        Args:
            points: Coordinates or raw (x, y) integer pairs
        """
        seeded = 0
        wrapped = 0
        for point in points:
            coord = Coordinate.from_tuple(point)
            target = self.wrap(coord)
            if target != coord:
                wrapped += 1
            self._cells[target.y, target.x] = 1
            seeded += 1

        if wrapped:
            logger.debug("Wrapped %d of %d seed points onto the grid", wrapped, seeded)
        logger.debug("Seeded %d points, population now %d", seeded, self.population)

    # Cell access

    def __getitem__(self, index: int) -> Cell:
        coord = self.index_to_coords(index)
        return Cell(bool(self._cells[coord.y, coord.x]))

    def __iter__(self) -> Iterator[Cell]:
        for value in self._cells.ravel():
            yield Cell(bool(value))

    @property
    def cells(self) -> Tuple[Cell, ...]:
        """Copies of every cell in index order."""
        return tuple(self)

    def is_alive(self, index: int) -> bool:
        """State of the cell at a linear index."""
        coord = self.index_to_coords(index)
        return bool(self._cells[coord.y, coord.x])

    def get_cell(self, x: int, y: int) -> bool:
        """State of the cell at (x, y), wrapping out-of-range coordinates."""
        return bool(self._cells[y % self._height, x % self._width])

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """Set the cell at (x, y), wrapping out-of-range coordinates."""
        self._cells[y % self._height, x % self._width] = 1 if alive else 0

    def alive_indices(self) -> np.ndarray:
        """Linear indices of live cells, ascending."""
        return np.flatnonzero(self._cells)

    def alive_coords(self) -> List[Coordinate]:
        """Coordinates of live cells in index order."""
        return [Coordinate.from_index(int(i), self._width) for i in self.alive_indices()]

    @property
    def population(self) -> int:
        """Number of living cells."""
        return int(np.count_nonzero(self._cells))

    def clear(self) -> None:
        """Set every cell dead."""
        self._cells.fill(0)

    def copy(self) -> "Grid":
        """Independent grid with the same dimensions and cell states."""
        other = Grid(self._width, self._height)
        other._cells[:] = self._cells
        return other

    def to_array(self) -> np.ndarray:
        """Copy of the cells as a (height, width) int8 array."""
        return self._cells.copy()

    # Neighbor counting

    def count_neighbors(self, coord: Point) -> int:
        """Count live cells around one coordinate with toroidal wraparound.

        Args:
            coord: Cell whose neighborhood is counted

        Returns:
            Number of live neighbors (0-8)
        """
        x, y = self.wrap(coord)
        count = 0
        for dx, dy in NEIGHBOR_OFFSETS:
            nx = (x + dx + self._width) % self._width
            ny = (y + dy + self._height) % self._height
            count += int(self._cells[ny, nx])
        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for every cell at once.

        Circular padding followed by a 3x3 convolution reads exactly the
        cells ``((x + dx) mod width, (y + dy) mod height)``, including on
        grids only one or two cells wide.

        Returns:
            (height, width) int8 array of neighbor counts
        """
        self._torch_input[0, 0] = torch.from_numpy(self._cells.astype(np.float32))
        padded = F.pad(self._torch_input, (1, 1, 1, 1), mode="circular")
        neighbors = F.conv2d(padded, self._torch_kernel)
        return neighbors[0, 0].numpy().astype(np.int8)

    # Generation advance

    def update(self) -> None:
        """Advance the grid by exactly one generation.

        All neighbor counts come from the current generation; the next
        generation is written to the back buffer and only then swapped in.
        """
        counts = self.count_all_neighbors()
        self._next_cells[...] = RULE_TABLE[self._cells, counts]
        self._cells, self._next_cells = self._next_cells, self._cells

    def __eq__(self, other: object) -> bool:
        """Check if two grids have the same dimensions and cell states."""
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        return "\n".join("".join("*" if value else "." for value in row) for row in self._cells)
