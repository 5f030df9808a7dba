"""Conway's Game of Life on a toroidal grid."""

__version__ = "0.1.0"

from .core.types import Coordinate
from .core.cell import Cell
from .core.grid import Grid
from .core.game import GameOfLife
from .core.patterns import Pattern, PatternLibrary

__all__ = ["Coordinate", "Cell", "Grid", "GameOfLife", "Pattern", "PatternLibrary"]
