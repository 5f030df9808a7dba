"""Frontend interfaces for the Game of Life."""

from .tkinter_gui import TkinterLifeView
from .cli import CLIGameOfLife

__all__ = ["TkinterLifeView", "CLIGameOfLife"]
