"""Cellular automaton engine and its seed sources."""

from .types import Coordinate
from .cell import Cell, RULE_TABLE
from .grid import Grid
from .game import GameOfLife
from .patterns import Pattern, PatternLibrary
from .config import Config

__all__ = ["Coordinate", "Cell", "RULE_TABLE", "Grid", "GameOfLife", "Pattern", "PatternLibrary", "Config"]
