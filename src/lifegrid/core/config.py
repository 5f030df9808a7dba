"""Run configuration for a Game of Life session."""

import argparse
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .seeding import RANDOM


@dataclass
class Config:
    """Settings chosen at startup, before the grid is built."""

    grid_width: int = 500
    grid_height: int = 500
    screen_size: Tuple[float, float] = (700.0, 700.0)
    fps: int = 30
    initial_state: str = RANDOM
    seed: Optional[int] = None
    show_grid_lines: bool = False

    @property
    def cell_size(self) -> float:
        """Side of one cell on screen, in pixels."""
        return self.screen_size[0] / self.grid_width

    def validate(self) -> List[str]:
        """Check the settings.

        Returns:
            Human-readable error messages, empty when the config is usable
        """
        errors = []

        if self.grid_width <= 0:
            errors.append("Width must be positive")

        if self.grid_height <= 0:
            errors.append("Height must be positive")

        if self.fps <= 0:
            errors.append("FPS must be positive")

        if any(side <= 0 for side in self.screen_size):
            errors.append("Screen size must be positive")

        if not self.initial_state:
            errors.append("Initial state must not be empty")

        return errors

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Config":
        """Build a config from parsed command-line arguments."""
        return cls(
            grid_width=args.width,
            grid_height=args.height,
            screen_size=(float(args.screen_size), float(args.screen_size)),
            fps=args.fps,
            initial_state=args.initial_state,
            seed=args.seed,
            show_grid_lines=args.grid_lines,
        )
