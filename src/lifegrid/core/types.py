"""Coordinate type shared by the grid and the pattern tables."""

from numbers import Integral
from typing import NamedTuple, Sequence


class Coordinate(NamedTuple):
    """An (x, y) cell position, x being the column and y the row."""

    x: int
    y: int

    @classmethod
    def from_tuple(cls, raw: Sequence[int]) -> "Coordinate":
        """Build a coordinate from a raw integer pair.

        Pattern tables and the random seeder hand over plain ``(x, y)``
        tuples; this is the one place they become coordinates. Any pair of
        integers is accepted, range handling is left to the grid.

        Args:
            raw: Two-element sequence of integers

        Returns:
            New Coordinate

        Raises:
            TypeError: If raw is not a sequence
            ValueError: If raw does not hold exactly two integers
        """
        if isinstance(raw, Coordinate):
            return raw
        if isinstance(raw, (str, bytes)) or not hasattr(raw, "__len__"):
            raise TypeError(f"Expected an (x, y) pair, got {type(raw).__name__}")
        if len(raw) != 2:
            raise ValueError(f"Expected an (x, y) pair, got {len(raw)} values")

        x, y = raw
        # bool is an Integral, but True/False as a position is always a mistake
        if any(isinstance(v, bool) or not isinstance(v, Integral) for v in (x, y)):
            raise ValueError(f"Coordinate values must be integers, got {tuple(raw)!r}")
        return cls(int(x), int(y))

    @classmethod
    def from_index(cls, index: int, width: int) -> "Coordinate":
        """Coordinate of a row-major linear index."""
        return cls(index % width, index // width)

    def to_index(self, width: int) -> int:
        """Row-major linear index of this coordinate."""
        return self.y * width + self.x
