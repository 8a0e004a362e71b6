"""Spawn point searches over a finished grid.

Both searches are bounded rejection samplers with deterministic fallbacks;
neither raises when the level is cramped.
"""
from __future__ import annotations

import random

from .generator import bounded_randrange
from .grid import ORTHOGONAL, Grid, Point

MAX_ATTEMPTS = 100
MARGIN = 3
MIN_OPEN_NEIGHBORHOOD = 5  # floor cells required in the 3x3 block, centre included


def _force_open_3x3(grid: Grid, x: int, y: int) -> None:
    for nx in range(x - 1, x + 2):
        for ny in range(y - 1, y + 2):
            grid.set_floor_if_interior(nx, ny)


def _sample(grid: Grid, rng: random.Random, margin: int) -> Point:
    return (
        bounded_randrange(rng, margin, grid.width - margin),
        bounded_randrange(rng, margin, grid.height - margin),
    )


def find_start_position(grid: Grid, rng: random.Random) -> Point:
    """Pick the player spawn, carving a small clearing if the level is too tight.

    Tiers, first hit wins:
      1. grid centre when it and its east and south neighbours are floor;
      2. up to 100 samples needing >= 5 floor cells in the 3x3 block;
      3. up to 100 samples needing floor plus one floor orthogonal neighbour,
         after which the 3x3 block is forced open;
      4. force the 3x3 block at the centre open and return the centre.
    """
    cx, cy = grid.center
    if grid.is_floor(cx, cy) and grid.is_floor(cx + 1, cy) and grid.is_floor(cx, cy + 1):
        return (cx, cy)

    for _ in range(MAX_ATTEMPTS):
        x, y = _sample(grid, rng, MARGIN)
        if grid.is_floor(x, y) and grid.floor_count_3x3(x, y) >= MIN_OPEN_NEIGHBORHOOD:
            return (x, y)

    for _ in range(MAX_ATTEMPTS):
        x, y = _sample(grid, rng, MARGIN)
        if not grid.is_floor(x, y):
            continue
        if any(grid.is_floor(x + dx, y + dy) for dx, dy in ORTHOGONAL):
            _force_open_3x3(grid, x, y)
            return (x, y)

    _force_open_3x3(grid, cx, cy)
    return (cx, cy)


def find_random_floor_tile(grid: Grid, rng: random.Random) -> Point:
    """Random roomy floor tile away from the edges, for arriving on a built level.

    Falls back to the first floor tile of a column-by-column scan inside the
    margin, and finally to the grid centre whatever its tile.
    """
    for _ in range(MAX_ATTEMPTS):
        x, y = _sample(grid, rng, MARGIN)
        if grid.is_floor(x, y) and grid.floor_count_3x3(x, y) >= MIN_OPEN_NEIGHBORHOOD:
            return (x, y)

    for x in range(MARGIN, grid.width - MARGIN):
        for y in range(MARGIN, grid.height - MARGIN):
            if grid.is_floor(x, y):
                return (x, y)

    return grid.center


def random_interior_point(grid: Grid, rng: random.Random) -> Point:
    return (
        bounded_randrange(rng, 1, grid.width - 1),
        bounded_randrange(rng, 1, grid.height - 1),
    )


def manhattan(a: Point, b: Point) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


__all__ = [
    "MAX_ATTEMPTS",
    "find_random_floor_tile",
    "find_start_position",
    "manhattan",
    "random_interior_point",
]
