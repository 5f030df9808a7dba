"""Named seed patterns for Conway's Game of Life.

Patterns are plain coordinate lists. They never touch a grid directly; a
driver turns them into points and hands those to ``Grid.set_state``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .types import Coordinate

logger = logging.getLogger(__name__)


class Pattern:
    """Represents a Game of Life pattern."""

    def __init__(
        self,
        name: str,
        cells: Sequence[Tuple[int, int]],
        description: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: (x, y) coordinates of living cells
            description: Optional description
            metadata: Optional metadata dictionary
        """
        self.name = name
        self.cells = [Coordinate.from_tuple(cell) for cell in cells]
        self.description = description
        self.metadata = metadata or {}

    def offset(self, dx: int = 0, dy: int = 0) -> List[Coordinate]:
        """Pattern cells shifted by (dx, dy)."""
        return [Coordinate(x + dx, y + dy) for x, y in self.cells]

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        xs, ys = zip(*self.cells)
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (width, height)."""
        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def normalize(self) -> "Pattern":
        """Return a copy with coordinates moved to start at (0, 0)."""
        if not self.cells:
            return Pattern(self.name, [], self.description, self.metadata.copy())

        min_x, min_y, _, _ = self.get_bounding_box()
        return Pattern(self.name, self.offset(-min_x, -min_y), self.description, self.metadata.copy())

    def to_dict(self) -> Dict[str, Any]:
        """Convert pattern to a JSON-friendly dictionary."""
        return {
            "name": self.name,
            "cells": [list(cell) for cell in self.cells],
            "description": self.description,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pattern":
        """Create pattern from dictionary.

        Raises:
            KeyError: If name or cells are missing
            ValueError: If a cell is not an integer pair
        """
        return cls(
            name=data["name"],
            cells=[tuple(cell) for cell in data["cells"]],
            description=data.get("description", ""),
            metadata=data.get("metadata", {}),
        )

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, {len(self.cells)} cells)"


GOSPER_GLIDER_GUN = [
    (24, 0),
    (22, 1), (24, 1),
    (12, 2), (13, 2), (20, 2), (21, 2), (34, 2), (35, 2),
    (11, 3), (15, 3), (20, 3), (21, 3), (34, 3), (35, 3),
    (0, 4), (1, 4), (10, 4), (16, 4), (20, 4), (21, 4),
    (0, 5), (1, 5), (10, 5), (14, 5), (16, 5), (17, 5), (22, 5), (24, 5),
    (10, 6), (16, 6), (24, 6),
    (11, 7), (15, 7),
    (12, 8), (13, 8),
]  # fmt: skip

PULSAR_QUADRANT = [(2, 0), (3, 0), (4, 0), (0, 2), (5, 2), (0, 3), (5, 3), (0, 4), (5, 4), (2, 5), (3, 5), (4, 5)]


def _mirror_quadrant(quadrant: List[Tuple[int, int]], size: int) -> List[Tuple[int, int]]:
    cells = set()
    for x, y in quadrant:
        cells.update({(x, y), (size - 1 - x, y), (x, size - 1 - y), (size - 1 - x, size - 1 - y)})
    return sorted(cells, key=lambda c: (c[1], c[0]))


class PatternLibrary:
    """Read-only lookup from pattern name to pattern, case-insensitive."""

    CATEGORIES: Dict[str, List[str]] = {
        "Still Life": ["block", "beehive"],
        "Oscillators": ["blinker", "toad", "beacon", "pulsar"],
        "Spaceships": ["glider", "lwss"],
        "Guns": ["glider-gun"],
        "Collisions": ["glider-collision"],
        "Methuselahs": ["r-pentomino", "diehard", "acorn"],
    }

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in common patterns."""
        self.add_pattern(Pattern("block", [(0, 0), (1, 0), (0, 1), (1, 1)], "2x2 still life block"))
        self.add_pattern(
            Pattern("beehive", [(1, 0), (2, 0), (0, 1), (3, 1), (1, 2), (2, 2)], "Beehive still life")
        )

        self.add_pattern(
            Pattern("blinker", [(0, 1), (1, 1), (2, 1)], "Period-2 oscillator", {"period": 2})
        )
        self.add_pattern(
            Pattern(
                "toad",
                [(1, 0), (2, 0), (3, 0), (0, 1), (1, 1), (2, 1)],
                "Period-2 oscillator",
                {"period": 2},
            )
        )
        self.add_pattern(
            Pattern(
                "beacon",
                [(0, 0), (1, 0), (0, 1), (3, 2), (2, 3), (3, 3)],
                "Period-2 oscillator",
                {"period": 2},
            )
        )
        self.add_pattern(
            Pattern("pulsar", _mirror_quadrant(PULSAR_QUADRANT, 13), "Period-3 oscillator", {"period": 3})
        )

        self.add_pattern(
            Pattern(
                "glider",
                [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)],
                "Smallest spaceship, moves one cell diagonally every 4 generations",
                {"period": 4, "displacement": (1, 1)},
            )
        )
        self.add_pattern(
            Pattern(
                "lwss",
                [(1, 0), (4, 0), (0, 1), (0, 2), (4, 2), (0, 3), (1, 3), (2, 3), (3, 3)],
                "Lightweight spaceship, period 4",
                {"period": 4, "displacement": (-2, 0)},
            )
        )

        self.add_pattern(
            Pattern("glider-gun", GOSPER_GLIDER_GUN, "Gosper glider gun, emits a glider every 30 generations")
        )

        southeast = [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)]
        northwest = [(12 - x, 12 - y) for x, y in southeast]
        self.add_pattern(
            Pattern("glider-collision", southeast + northwest, "Two gliders on a head-on collision course")
        )

        self.add_pattern(
            Pattern(
                "r-pentomino",
                [(1, 0), (2, 0), (0, 1), (1, 1), (1, 2)],
                "Methuselah that stabilizes after 1103 generations",
            )
        )
        self.add_pattern(
            Pattern(
                "diehard",
                [(6, 0), (0, 1), (1, 1), (1, 2), (5, 2), (6, 2), (7, 2)],
                "Dies after exactly 130 generations",
            )
        )
        self.add_pattern(
            Pattern(
                "acorn",
                [(1, 0), (3, 1), (0, 2), (1, 2), (4, 2), (5, 2), (6, 2)],
                "Takes 5206 generations to stabilize",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern, replacing any pattern with the same name."""
        self._patterns[pattern.name.lower()] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name, or None if unknown."""
        return self._patterns.get(name.lower())

    def require(self, name: str) -> Pattern:
        """Get a pattern by name.

        Raises:
            KeyError: If no pattern has that name
        """
        pattern = self.get_pattern(name)
        if pattern is None:
            raise KeyError(f"Unknown pattern '{name}'. Available: {', '.join(self.list_patterns())}")
        return pattern

    def list_patterns(self) -> List[str]:
        """Names of all patterns."""
        return [pattern.name for pattern in self._patterns.values()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._patterns

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Pattern names grouped by category, custom patterns last."""
        categories = {cat: [n for n in names if n in self] for cat, names in self.CATEGORIES.items()}

        builtin = {name for names in self.CATEGORIES.values() for name in names}
        categories["Custom"] = [name for name in self.list_patterns() if name.lower() not in builtin]

        return {cat: names for cat, names in categories.items() if names}

    def load_file(self, path: Union[str, Path]) -> Pattern:
        """Load a pattern from a JSON file and add it to the library.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file isn't a valid pattern
        """
        path = Path(path)
        with open(path, "r") as f:
            data = json.load(f)

        try:
            pattern = Pattern.from_dict(data)
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid pattern file {path.name}: {e}") from e

        self.add_pattern(pattern)
        logger.info("Loaded pattern '%s' (%d cells) from %s", pattern.name, len(pattern.cells), path)
        return pattern
