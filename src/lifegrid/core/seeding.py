"""Initial point sources: named patterns or per-cell random draws."""

import logging
from typing import List, Optional

import numpy as np

from .patterns import PatternLibrary
from .types import Coordinate

logger = logging.getLogger(__name__)

RANDOM = "random"


def random_points(
    width: int,
    height: int,
    rng: Optional[np.random.Generator] = None,
    probability: float = 0.5,
) -> List[Coordinate]:
    """Pick live cells independently at random.

    Args:
        width: Grid width
        height: Grid height
        rng: Random generator; pass ``np.random.default_rng(seed)`` for
            reproducible seeds. A fresh unseeded generator is used if omitted.
        probability: Chance each cell will be alive (0.0 to 1.0)

    Returns:
        Live-cell coordinates in row-major order

    Raises:
        ValueError: If probability is outside [0, 1]
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"Probability must be between 0.0 and 1.0, got {probability}")
    if rng is None:
        rng = np.random.default_rng()

    mask = rng.random((height, width)) < probability
    ys, xs = np.nonzero(mask)
    return [Coordinate(int(x), int(y)) for x, y in zip(xs, ys)]


def initial_points(
    selector: str,
    width: int,
    height: int,
    library: Optional[PatternLibrary] = None,
    rng: Optional[np.random.Generator] = None,
    center: bool = True,
) -> List[Coordinate]:
    """Resolve an initial-state selector to seed points.

    Args:
        selector: Pattern name, or "random"
        width: Grid width
        height: Grid height
        library: Pattern lookup (built-in library if omitted)
        rng: Random generator for the random fallback
        center: Place named patterns in the middle of the grid instead of at
            the origin

    Returns:
        Points to hand to ``Grid.set_state``. Unknown names fall back to a
        random seed.
    """
    if selector.lower() != RANDOM:
        library = library or PatternLibrary()
        pattern = library.get_pattern(selector)
        if pattern is not None:
            dx = dy = 0
            if center:
                size_x, size_y = pattern.get_size()
                min_x, min_y, _, _ = pattern.get_bounding_box()
                dx = max(0, (width - size_x) // 2) - min_x
                dy = max(0, (height - size_y) // 2) - min_y
            logger.info("Seeding pattern '%s' at offset (%d, %d)", pattern.name, dx, dy)
            return pattern.offset(dx, dy)

        logger.warning("Pattern '%s' not found, using random population", selector)

    points = random_points(width, height, rng)
    logger.info("Seeding %d random cells on %dx%d grid", len(points), width, height)
    return points
