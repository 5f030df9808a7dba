"""Tkinter window that renders a running Game of Life."""

import logging
import tkinter as tk
from typing import Optional

import numpy as np

from ..core.config import Config
from ..core.game import GameOfLife
from ..core.grid import Grid
from ..core.patterns import PatternLibrary
from ..core.seeding import initial_points

logger = logging.getLogger(__name__)

BACKGROUND = "#000000"
CELL_COLOR = "#00c800"
GRID_LINE_COLOR = "#0a0a0a"


class TkinterLifeView:
    """Paints every live cell as a square and steps the game on a timer.

    The view owns the frame cadence; the grid is only read between steps.
    """

    def __init__(
        self,
        master: tk.Tk,
        config: Config,
        library: Optional[PatternLibrary] = None,
        autostart: bool = True,
    ) -> None:
        """Initialize the view.

        Args:
            master: Root Tkinter window
            config: Grid size, screen size, frame rate and initial state
            library: Pattern lookup for named initial states
            autostart: Schedule the update loop immediately
        """
        self.master = master
        self.master.title("Game of life")
        self.master.configure(bg=BACKGROUND)

        self.config = config
        self.library = library or PatternLibrary()
        self.cell_size = config.cell_size
        self.update_interval = max(1, 1000 // config.fps)
        self.running = True
        self._after_id: Optional[str] = None

        self.grid = Grid(config.grid_width, config.grid_height)
        self.game = GameOfLife(self.grid)
        self.rng = np.random.default_rng(config.seed)

        width, height = config.screen_size
        self.canvas = tk.Canvas(
            self.master,
            width=int(width),
            height=int(height),
            bg=BACKGROUND,
            highlightthickness=0,
        )
        self.canvas.pack()

        self.master.bind("<space>", lambda event: self.toggle_running())
        self.master.bind("r", lambda event: self.reseed())

        self.reseed()
        if autostart:
            self.update_loop()

    def reseed(self) -> None:
        """Clear the grid and seed it from the configured initial state."""
        self.grid.clear()
        points = initial_points(
            self.config.initial_state,
            self.grid.width,
            self.grid.height,
            self.library,
            self.rng,
        )
        self.grid.set_state(points)
        self.game.reset(clear_grid=False)
        self.redraw()

    def toggle_running(self) -> None:
        """Pause or resume stepping."""
        self.running = not self.running
        logger.debug("Simulation %s at generation %d", "resumed" if self.running else "paused", self.game.generation)

    def redraw(self) -> None:
        """Repaint the canvas from the current grid."""
        self.canvas.delete("all")
        size = self.cell_size

        for index in self.grid.alive_indices():
            pos = self.grid.index_to_coords(int(index))
            x1 = pos.x * size
            y1 = pos.y * size
            self.canvas.create_rectangle(x1, y1, x1 + size, y1 + size, fill=CELL_COLOR, outline="", tags="cell")

        if self.config.show_grid_lines:
            self._draw_grid_lines()

        self.master.title(f"Game of life - generation {self.game.generation}")

    def _draw_grid_lines(self) -> None:
        size = self.cell_size
        width, height = self.config.screen_size
        for col in range(self.grid.width + 1):
            self.canvas.create_line(col * size, 0, col * size, height, fill=GRID_LINE_COLOR, tags="grid")
        for row in range(self.grid.height + 1):
            self.canvas.create_line(0, row * size, width, row * size, fill=GRID_LINE_COLOR, tags="grid")

    def tick(self) -> None:
        """Advance one generation (when running) and repaint."""
        if self.running:
            self.game.step()
            self.redraw()

    def update_loop(self) -> None:
        """Main update loop."""
        self.tick()
        self._after_id = self.master.after(self.update_interval, self.update_loop)

    def stop(self) -> None:
        """Cancel the scheduled update loop."""
        if self._after_id is not None:
            self.master.after_cancel(self._after_id)
            self._after_id = None


def run_gui(config: Config, library: Optional[PatternLibrary] = None) -> None:
    """Open the window and block until it is closed."""
    root = tk.Tk()
    root.resizable(False, False)
    TkinterLifeView(root, config, library)
    root.mainloop()
