"""Simulation driver for Conway's Game of Life."""

import hashlib
import logging
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple

import numpy as np

from .grid import Grid

logger = logging.getLogger(__name__)


class GameOfLife:
    """Drives a Grid one generation at a time.

    The grid knows nothing about generation numbers or history; this class
    keeps that bookkeeping and detects when the grid revisits a state.
    """

    def __init__(self, grid: Grid, history_size: int = 100, cycle_window: int = 1000) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The grid to simulate
            history_size: Number of population samples to keep
            cycle_window: Number of recent states remembered for cycle
                detection; longer periods go unnoticed

        Raises:
            ValueError: If cycle_window is not positive
        """
        if cycle_window <= 0:
            raise ValueError(f"cycle_window must be positive, got {cycle_window}")

        self.grid = grid
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=history_size)
        self._state_history: Deque[bytes] = deque(maxlen=cycle_window)
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._population_history.append(self.population)

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> List[int]:
        """Recent population counts, oldest first."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where the repeated state first appeared (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> None:
        """Advance the simulation by one generation.

        The new state is compared with the remembered ones right after the
        update, so a cycle is flagged at the generation that repeats.
        """
        if not self._state_history:
            self._check_for_cycles()
        self.grid.update()
        self._generation += 1
        self._population_history.append(self.population)
        self._check_for_cycles()

    def run(self, generations: int) -> None:
        """Advance a fixed number of generations."""
        for _ in range(generations):
            self.step()

    def _check_for_cycles(self) -> None:
        if self._cycle_detected:
            return

        state = hashlib.blake2b(self.grid.to_array().tobytes(), digest_size=16).digest()
        first_seen = self._seen_states.get(state)
        if first_seen is not None:
            self._cycle_detected = True
            self._cycle_length = self._generation - first_seen
            self._cycle_start_generation = first_seen
            logger.info(
                "Cycle of length %d detected at generation %d (first seen at %d)",
                self._cycle_length,
                self._generation,
                first_seen,
            )
            return

        # Keys in the window are unique until a cycle is found
        if len(self._state_history) == self._state_history.maxlen:
            del self._seen_states[self._state_history[0]]
        self._state_history.append(state)
        self._seen_states[state] = self._generation

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it dies out or repeats a state.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            if self._cycle_detected:
                return self._generation, "cycle"

            if self.population == 0:
                return self._generation, "extinction"

        return self._generation, "max_generations"

    def reset(self, clear_grid: bool = True) -> None:
        """Reset generation count, history and cycle detection.

        Args:
            clear_grid: Whether to clear the grid as well
        """
        if clear_grid:
            self.grid.clear()

        self._generation = 0
        self._population_history.clear()
        self._state_history.clear()
        self._seen_states.clear()
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._population_history.append(self.population)

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Average population change per generation over the recent window."""
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        return float(np.mean(np.diff(recent_history)))

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """(min_x, min_y, max_x, max_y) of living cells, or None if empty."""
        coords = self.grid.alive_coords()
        if not coords:
            return None

        xs, ys = zip(*coords)
        return (min(xs), min(ys), max(xs), max(ys))

    def get_statistics(self) -> Dict[str, Any]:
        """Snapshot of the simulation state for display."""
        bbox = self.get_bounding_box()

        stats = {
            "generation": self._generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": self.population_history,
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "grid_size": self.grid.shape,
            "population_density": self.population / len(self.grid),
            "bounding_box": bbox,
        }

        if bbox:
            stats["bounding_box_size"] = (bbox[2] - bbox[0] + 1, bbox[3] - bbox[1] + 1)
        else:
            stats["bounding_box_size"] = (0, 0)

        return stats
