"""Command-line interface for Conway's Game of Life."""

import argparse
import logging
import sys
import time
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..core.config import Config
from ..core.game import GameOfLife
from ..core.grid import Grid
from ..core.patterns import PatternLibrary
from ..core.seeding import RANDOM, initial_points
from .tkinter_gui import run_gui


class CLIGameOfLife:
    """Runs simulations for the command line, headless or in a window."""

    def __init__(self) -> None:
        self.pattern_library = PatternLibrary()

    def run_simulation(
        self,
        config: Config,
        generations: int,
        until_stable: bool = False,
        verbose: bool = False,
        show_grid: bool = False,
    ) -> Tuple[int, str, Dict[str, Any]]:
        """Run a headless simulation.

        Args:
            config: Grid size, initial state and random seed
            generations: Generations to run (the cap when until_stable)
            until_stable: Stop early on extinction or a repeated state
            verbose: Print progress updates
            show_grid: Show initial and final grid states

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        grid = Grid(config.grid_width, config.grid_height)
        rng = np.random.default_rng(config.seed)
        grid.set_state(
            initial_points(config.initial_state, grid.width, grid.height, self.pattern_library, rng)
        )
        game = GameOfLife(grid)
        initial_population = game.population

        if verbose:
            print(f"Initializing {grid.width}x{grid.height} toroidal grid")
            print(f"Initial state: {config.initial_state}")
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(grid))

        start_time = time.time()

        if until_stable:
            final_generation, reason = game.run_until_stable(generations)
        else:
            game.run(generations)
            final_generation, reason = game.generation, "completed"

        duration = time.time() - start_time

        stats = game.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        if show_grid:
            print(f"\nFinal grid (generation {final_generation}):")
            print(self._format_grid(grid))

        return final_generation, reason, stats

    def run_window(self, config: Config) -> None:
        """Open the graphical view; returns when the window is closed."""
        run_gui(config, self.pattern_library)

    def _format_grid(self, grid: Grid, max_size: int = 80) -> str:
        """Format grid for display, refusing grids too large to read."""
        if grid.width > max_size or grid.height > max_size:
            return f"Grid too large to display ({grid.width}x{grid.height})"

        return str(grid)

    def list_patterns(self) -> None:
        """List available patterns by category."""
        print("Available patterns:")
        for category, names in self.pattern_library.get_patterns_by_category().items():
            print(f"\n{category}:")
            for name in names:
                pattern = self.pattern_library.require(name)
                size = pattern.get_size()
                print(f"  {pattern.name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                if pattern.description:
                    print(f"    {pattern.description}")
        print(f"\n{RANDOM}:\n  Every cell alive with probability 0.5")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Conway's Game of Life on a toroidal grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Random 500x500 grid in a window
  lifegrid

  # Gosper glider gun on a 100x100 grid
  lifegrid -W 100 -H 100 -s glider-gun

  # Headless: 200 generations of a reproducible random seed
  lifegrid --headless -n 200 -W 64 -H 64 --seed 7

  # Headless: run a glider until it repeats, showing the grid
  lifegrid --headless --until-stable -W 10 -H 10 -s glider --show-grid
        """,
    )

    parser.add_argument("-W", "--width", type=int, default=500, help="Grid width (default: 500)")

    parser.add_argument("-H", "--height", type=int, default=500, help="Grid height (default: 500)")

    parser.add_argument(
        "-s",
        "--initial-state",
        type=str,
        default=RANDOM,
        help="Initial state: a pattern name (blinker, toad, glider, glider-gun, ...) or 'random' (default: random)",
    )

    parser.add_argument("--seed", type=int, help="Random seed for reproducible random initial states")

    parser.add_argument("--fps", type=int, default=30, help="Generations per second in the window (default: 30)")

    parser.add_argument(
        "--screen-size",
        type=float,
        default=700.0,
        help="Window side length in pixels (default: 700)",
    )

    parser.add_argument("--grid-lines", action="store_true", help="Draw cell outlines in the window")

    parser.add_argument("--headless", action="store_true", help="Run without a window and print results")

    parser.add_argument(
        "-n",
        "--generations",
        type=int,
        default=1000,
        help="Generations to run headless, or the cap with --until-stable (default: 1000)",
    )

    parser.add_argument(
        "--until-stable",
        action="store_true",
        help="Headless: stop at extinction or when a state repeats",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Headless: print initial and final grid states (small grids only)",
    )

    parser.add_argument("--list-patterns", action="store_true", help="List all available patterns and exit")

    parser.add_argument("-v", "--verbose", action="store_true", help="Print detailed progress information")

    return parser


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display."""
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    elif reason == "completed":
        return f"Completed {stats.get('generation', 0)} generations"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation finished after {final_generation} generations")
    print(f"Reason: {format_finish_reason(reason, stats)}")

    initial_pop = stats.get("initial_population", 0)
    final_pop = stats.get("population", 0)
    duration = stats.get("duration_seconds", 0.0)
    speed = stats.get("generations_per_second", 0.0)

    if verbose:
        width, height = stats.get("grid_size", (0, 0))
        print(f"\nGrid size: {width}x{height}")
        print(f"Initial population: {initial_pop}")
        print(f"Final population: {final_pop}")
        print(f"Population density: {stats.get('population_density', 0.0):.2%}")
        print(f"Population change rate: {stats.get('population_change_rate', 0.0):.2f}/gen")
        if stats.get("bounding_box"):
            box_w, box_h = stats["bounding_box_size"]
            print(f"Bounding box: {stats['bounding_box']} ({box_w}x{box_h})")
        print(f"Duration: {duration:.3f} seconds ({speed:.0f} generations/second)")
    else:
        print(f"Population: {initial_pop} → {final_pop}, Duration: {duration:.3f}s, Speed: {speed:.0f} gen/s")


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments, printing any problems.

    Returns:
        True if arguments are valid
    """
    errors = Config.from_args(args).validate()

    if args.generations <= 0:
        errors.append("Generations must be positive")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def configure_logging(verbose: bool) -> None:
    """Send library log records to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[list] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    config = Config.from_args(args)
    if config.initial_state.lower() != RANDOM and cli.pattern_library.get_pattern(config.initial_state) is None:
        print(f"Warning: Pattern '{config.initial_state}' not found, using random population")
        config.initial_state = RANDOM

    try:
        if args.headless:
            final_generation, reason, stats = cli.run_simulation(
                config,
                generations=args.generations,
                until_stable=args.until_stable,
                verbose=args.verbose,
                show_grid=args.show_grid,
            )
            print_results(final_generation, reason, stats, args.verbose)
        else:
            cli.run_window(config)

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
