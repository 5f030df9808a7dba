"""Single cell state and the B3/S23 transition rule."""

import numpy as np

BIRTH_COUNTS = frozenset({3})
SURVIVAL_COUNTS = frozenset({2, 3})
MAX_NEIGHBORS = 8


class Cell:
    """A binary-state cell.

    Cells are plain values: the grid hands out copies, so changing a Cell
    read from a grid does not change the grid.
    """

    __slots__ = ("_alive",)

    def __init__(self, alive: bool = False) -> None:
        self._alive = bool(alive)

    def is_alive(self) -> bool:
        """Whether the cell is alive."""
        return self._alive

    def set_alive(self, alive: bool) -> None:
        """Set the cell state."""
        self._alive = bool(alive)

    def next_state(self, alive_neighbor_count: int) -> bool:
        """Apply Conway's rule to this cell.

        - Live cell with 2 or 3 live neighbors survives
        - Dead cell with exactly 3 live neighbors becomes alive
        - Every other cell dies or stays dead

        Args:
            alive_neighbor_count: Live cells in the Moore neighborhood (0-8)

        Returns:
            State of the cell in the next generation

        Raises:
            ValueError: If the count is outside 0-8
        """
        if not 0 <= alive_neighbor_count <= MAX_NEIGHBORS:
            raise ValueError(f"Neighbor count must be in 0-{MAX_NEIGHBORS}, got {alive_neighbor_count}")

        if self._alive:
            return alive_neighbor_count in SURVIVAL_COUNTS
        return alive_neighbor_count in BIRTH_COUNTS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self._alive == other._alive

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Cell(alive={self._alive})"


def build_rule_table() -> np.ndarray:
    """Tabulate Cell.next_state as a (2, 9) lookup indexed by [state, count]."""
    table = np.zeros((2, MAX_NEIGHBORS + 1), dtype=np.int8)
    for state in (0, 1):
        cell = Cell(bool(state))
        for count in range(MAX_NEIGHBORS + 1):
            table[state, count] = 1 if cell.next_state(count) else 0
    table.setflags(write=False)
    return table


RULE_TABLE = build_rule_table()
