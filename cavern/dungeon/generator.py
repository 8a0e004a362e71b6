"""Terrain synthesis phases: random fill, cellular automata smoothing, border stamp."""
from __future__ import annotations

import random
from typing import NamedTuple

from .grid import Grid
from .tiles import FLOOR, WALL

# Asymmetric survival / birth thresholds (wall-neighbour counts out of 8)
WALL_SURVIVES_AT = 5
FLOOR_BECOMES_WALL_AT = 6


def bounded_randrange(rng: random.Random, lo: int, hi: int) -> int:
    """``rng.randrange(lo, hi)`` that collapses to ``lo`` on an empty range."""
    if hi <= lo:
        return lo
    return rng.randrange(lo, hi)


def random_fill(width: int, height: int, wall_percent: int, rng: random.Random) -> Grid:
    grid = Grid(width, height)
    for y in range(height):
        for x in range(width):
            if x == 0 or x == width - 1 or y == 0 or y == height - 1:
                continue
            grid.set(x, y, WALL if rng.randrange(100) < wall_percent else FLOOR)
    return grid


def count_wall_neighbors(grid: Grid, x: int, y: int) -> int:
    """Walls among the 8 surrounding cells; off-grid neighbours count as walls."""
    count = 0
    for ny in range(y - 1, y + 2):
        for nx in range(x - 1, x + 2):
            if nx == x and ny == y:
                continue
            if not grid.in_bounds(nx, ny) or grid.get(nx, ny) == WALL:
                count += 1
    return count


def smooth_map(grid: Grid) -> Grid:
    """One automata pass; reads only ``grid`` and returns a fresh grid."""
    smoothed = Grid(grid.width, grid.height)
    for y in range(grid.height):
        for x in range(grid.width):
            walls = count_wall_neighbors(grid, x, y)
            if grid.get(x, y) == WALL:
                tile = WALL if walls >= WALL_SURVIVES_AT else FLOOR
            else:
                tile = WALL if walls >= FLOOR_BECOMES_WALL_AT else FLOOR
            smoothed.set(x, y, tile)
    return smoothed


def add_borders(grid: Grid) -> None:
    for x, y in grid.border_cells():
        grid.set(x, y, WALL)


class TerrainOutputs(NamedTuple):
    grid: Grid
    floor_initial: int
    floor_smoothed: int


class Generator:
    def __init__(self, width: int, height: int, rng: random.Random):
        self.width = width
        self.height = height
        self.rng = rng

    def run(self, wall_percent: int, smoothing_iterations: int) -> TerrainOutputs:
        grid = random_fill(self.width, self.height, wall_percent, self.rng)
        floor_initial = grid.count(FLOOR)
        for _ in range(max(smoothing_iterations, 0)):
            grid = smooth_map(grid)
        add_borders(grid)
        return TerrainOutputs(grid, floor_initial, grid.count(FLOOR))


__all__ = [
    "Generator",
    "TerrainOutputs",
    "add_borders",
    "bounded_randrange",
    "count_wall_neighbors",
    "random_fill",
    "smooth_map",
]
