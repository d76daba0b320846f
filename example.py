#!/usr/bin/env python3
"""
Headless usage of the termlife engine: step a grid, follow a resize and
print the step-duration telemetry that the terminal frontend graphs.
"""

from termlife import GameOfLife, Grid, RandomFill


def main():
    """Demonstrate programmatic usage of the termlife package."""
    grid = Grid(12, 30, random_fill=RandomFill(42), randomize=True)
    game = GameOfLife(grid, history_size=20)

    print("Initial state:")
    print(grid)
    print(f"Population: {game.population}")
    print()

    for i in range(50):
        # Pretend the terminal grew halfway through
        size = (16, 36) if i == 25 else None
        game.tick(size)

    print(f"After {game.iteration_count} steps on a {grid.height}x{grid.width} grid:")
    print(grid)
    print()

    stats = game.get_statistics()
    print("Statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")

    history = game.history
    print(f"All-time log capacity: {history.all_time_capacity}")
    print("Long-range averages:", ", ".join(f"{v:.6f}" for v in history.downsampled()))


if __name__ == "__main__":
    main()
