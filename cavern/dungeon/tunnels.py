"""Corridor carving primitives.

Every primitive only ever writes FLOOR and only inside the outer ring, so the
border invariant survives any sequence of calls.
"""
from __future__ import annotations

import random

from .grid import Grid, Point
from .rooms import carve_room

SIDE_ROOM_CHANCE = 20  # one in N walk steps opens a small side room
SIDE_ROOM_MIN = 3
SIDE_ROOM_MAX = 5


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def stamp_brush(grid: Grid, x: int, y: int, width: int) -> None:
    half = width // 2
    for dx in range(-half, half + 1):
        for dy in range(-half, half + 1):
            grid.set_floor_if_interior(x + dx, y + dy)


def carve_corridor(grid: Grid, start: Point, end: Point, width: int) -> None:
    """Straight axis-aligned corridor: a band of floor centred on the segment.

    The band spans offsets ``-(width // 2) .. width // 2`` across the axis, so
    widths 2 and 3 both produce a three-cell band. Diagonal segments are ignored.
    """
    (sx, sy), (ex, ey) = start, end
    half = width // 2
    if sx == ex:
        for y in range(min(sy, ey), max(sy, ey) + 1):
            for x in range(sx - half, sx + half + 1):
                grid.set_floor_if_interior(x, y)
    elif sy == ey:
        for x in range(min(sx, ex), max(sx, ex) + 1):
            for y in range(sy - half, sy + half + 1):
                grid.set_floor_if_interior(x, y)


def carve_winding_corridor(grid: Grid, start: Point, end: Point, width: int, rng: random.Random) -> int:
    """Axis-biased random walk from ``start`` to ``end``; returns steps taken.

    Each step flips a coin between the X and Y axis (X is forced once Y is
    aligned, Y once X is aligned), moves one cell toward the target and stamps
    a square brush. Consecutive positions differ by one orthogonal step, so
    the carved path is 4-connected from start to end.
    """
    x, y = start
    ex, ey = end
    steps = 0
    while (x, y) != (ex, ey):
        move_x = rng.randrange(2) == 0 or y == ey
        if move_x and x != ex:
            x += _sign(ex - x)
        elif y != ey:
            y += _sign(ey - y)
        steps += 1
        stamp_brush(grid, x, y, width)
        if rng.randrange(SIDE_ROOM_CHANCE) == 0:
            size = rng.randrange(SIDE_ROOM_MIN, SIDE_ROOM_MAX + 1)
            carve_room(grid, x, y, size, size)
    return steps


def carve_straight_path(grid: Grid, start: Point, end: Point) -> None:
    """Three-wide L path: horizontal leg first, then vertical."""
    x, y = start
    ex, ey = end
    while x != ex:
        x += _sign(ex - x)
        for dy in (-1, 0, 1):
            grid.set_floor_if_interior(x, y + dy)
    while y != ey:
        y += _sign(ey - y)
        for dx in (-1, 0, 1):
            grid.set_floor_if_interior(x + dx, y)


__all__ = ["carve_corridor", "carve_straight_path", "carve_winding_corridor", "stamp_brush"]
