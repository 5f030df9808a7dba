#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import GameOfLife, Grid, PatternLibrary


def main():
    """Seed a glider, step it and print each generation."""
    grid = Grid(12, 12)
    game = GameOfLife(grid)

    glider = PatternLibrary().require("glider")
    grid.set_state(glider.offset(4, 4))

    print("Initial state:")
    print(grid)
    print()

    for _ in range(8):
        game.step()
        print(f"Generation {game.generation} (population {game.population}):")
        print(grid)
        print()

    # Render-read: what a drawing routine would paint at cell_size 10
    cell_size = 10
    for index in grid.alive_indices():
        pos = grid.index_to_coords(int(index))
        print(f"rect at ({pos.x * cell_size}, {pos.y * cell_size}) size {cell_size}x{cell_size}")


if __name__ == "__main__":
    main()
