"""Feature carving: corridors, rooms, caverns and pools stamped over smoothed terrain.

Phase order (each phase consumes the RNG in turn, so the order is part of the
determinism contract):
  * Main corridors: a band through the middle row, then the middle column.
  * 2-4 winding corridors starting in the central half of the map.
  * 3 + W/20 rectangular rooms, a third of them with an interior feature.
  * 2 + W/30 rough circular caverns.
  * 1 + W/40 pools built from rejection-sampled points.

Only the room features write WALL; everything else opens floor.
"""
from __future__ import annotations

import math
import random
from typing import List, NamedTuple

from .generator import bounded_randrange
from .grid import Grid
from .rooms import Room, place_rooms
from .tunnels import carve_corridor, carve_winding_corridor

POOL_SAMPLES = 50
POOL_CLEAR_PERCENT = 70


class FeatureSummary(NamedTuple):
    winding_corridors: int
    rooms: List[Room]
    caves: int
    pools: int

    @property
    def room_features(self) -> int:
        return sum(1 for r in self.rooms if r.feature)


def room_count(width: int) -> int:
    return 3 + width // 20


def cave_count(width: int) -> int:
    return 2 + width // 30


def pool_count(width: int) -> int:
    return 1 + width // 40


def create_main_corridors(grid: Grid, rng: random.Random) -> int:
    """Carve the two crossing corridors, then the winding ones; returns winding count."""
    w, h = grid.width, grid.height
    path_y = h // 2
    carve_corridor(grid, (1, path_y), (w - 2, path_y), rng.randrange(2, 4))
    path_x = w // 2
    carve_corridor(grid, (path_x, 1), (path_x, h - 2), rng.randrange(2, 4))

    winding = rng.randrange(2, 5)
    for _ in range(winding):
        start = (
            bounded_randrange(rng, w // 4, 3 * w // 4),
            bounded_randrange(rng, h // 4, 3 * h // 4),
        )
        end = (bounded_randrange(rng, 1, w - 1), bounded_randrange(rng, 1, h - 1))
        carve_winding_corridor(grid, start, end, rng.randrange(1, 3), rng)
    return winding


def create_cave_areas(grid: Grid, count: int, rng: random.Random) -> None:
    w, h = grid.width, grid.height
    for _ in range(count):
        cx = bounded_randrange(rng, w // 4, 3 * w // 4)
        cy = bounded_randrange(rng, h // 4, 3 * h // 4)
        radius = rng.randrange(5, 10)
        for x in range(cx - radius, cx + radius + 1):
            for y in range(cy - radius, cy + radius + 1):
                if not grid.in_interior(x, y):
                    continue
                dist = math.hypot(x - cx, y - cy)
                # jitter in [-1, 1) roughens the outline
                if dist < radius + rng.random() * 2 - 1:
                    grid.set_floor_if_interior(x, y)


def create_pools(grid: Grid, count: int, rng: random.Random) -> None:
    w, h = grid.width, grid.height
    for _ in range(count):
        cx = bounded_randrange(rng, w // 5, 4 * w // 5)
        cy = bounded_randrange(rng, h // 5, 4 * h // 5)
        size = rng.randrange(3, 8)
        for _attempt in range(POOL_SAMPLES):
            dx = rng.randrange(-size, size + 1)
            dy = rng.randrange(-size, size + 1)
            x, y = cx + dx, cy + dy
            if not (1 < x < w - 2 and 1 < y < h - 2):
                continue
            if math.hypot(dx, dy) > size:
                continue
            grid.set_floor_if_interior(x, y)
            if rng.randrange(100) < POOL_CLEAR_PERCENT:
                for nx in range(x - 1, x + 2):
                    for ny in range(y - 1, y + 2):
                        grid.set_floor_if_interior(nx, ny)


def create_dungeon_features(grid: Grid, rng: random.Random) -> FeatureSummary:
    winding = create_main_corridors(grid, rng)
    rooms = place_rooms(grid, room_count(grid.width), rng)
    caves = cave_count(grid.width)
    create_cave_areas(grid, caves, rng)
    pools = pool_count(grid.width)
    create_pools(grid, pools, rng)
    return FeatureSummary(winding, rooms, caves, pools)


__all__ = [
    "FeatureSummary",
    "cave_count",
    "create_cave_areas",
    "create_dungeon_features",
    "create_main_corridors",
    "create_pools",
    "pool_count",
    "room_count",
]
