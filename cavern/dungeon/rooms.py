from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Tuple

from .generator import bounded_randrange
from .grid import Grid
from .tiles import FLOOR, WALL

ROOM_MIN_SIDE = 5
ROOM_MAX_SIDE = 9
FEATURE_CHANCE = 3  # one in N rooms gets an interior feature

PILLARS = "pillars"
CHAMBER = "chamber"
CHECKERED = "checkered"
ROOM_FEATURES = (PILLARS, CHAMBER, CHECKERED)


@dataclass
class Room:
    x: int
    y: int
    w: int
    h: int
    feature: str | None = None

    def cells(self):
        for ix in range(self.x, self.x + self.w):
            for iy in range(self.y, self.y + self.h):
                yield ix, iy

    def contains_strictly(self, x: int, y: int) -> bool:
        """True when (x, y) lies inside the room without touching its outline."""
        return self.x < x < self.x + self.w - 1 and self.y < y < self.y + self.h - 1

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.w // 2, self.y + self.h // 2)


def carve_room(grid: Grid, x: int, y: int, w: int, h: int) -> None:
    """Stamp a w x h block of floor with its top-left corner at (x, y)."""
    for rx in range(w):
        for ry in range(h):
            grid.set_floor_if_interior(x + rx, y + ry)


def place_rooms(grid: Grid, count: int, rng: random.Random) -> List[Room]:
    """Carve ``count`` rectangular rooms; about a third receive an interior feature.

    Rooms may overlap each other and anything carved earlier. The origin is
    drawn from [5, W-10) x [5, H-10) so a maximum-size room still clears the
    outer ring on a full-size map.
    """
    rooms: List[Room] = []
    for _ in range(count):
        room = Room(
            x=bounded_randrange(rng, 5, grid.width - 10),
            y=bounded_randrange(rng, 5, grid.height - 10),
            w=rng.randrange(ROOM_MIN_SIDE, ROOM_MAX_SIDE + 1),
            h=rng.randrange(ROOM_MIN_SIDE, ROOM_MAX_SIDE + 1),
        )
        carve_room(grid, room.x, room.y, room.w, room.h)
        if rng.randrange(FEATURE_CHANCE) == 0:
            room.feature = add_room_feature(grid, room, rng)
        rooms.append(room)
    return rooms


def add_room_feature(grid: Grid, room: Room, rng: random.Random) -> str:
    feature = ROOM_FEATURES[rng.randrange(len(ROOM_FEATURES))]
    if feature == PILLARS:
        _add_pillars(grid, room, rng)
    elif feature == CHAMBER:
        _add_inner_chamber(grid, room, rng)
    else:
        _add_checkered_walls(grid, room, rng)
    return feature


def _set_wall_inside(grid: Grid, room: Room, x: int, y: int) -> None:
    if room.contains_strictly(x, y) and grid.in_interior(x, y):
        grid.set(x, y, WALL)


def _add_pillars(grid: Grid, room: Room, rng: random.Random) -> None:
    cx, cy = room.center
    for _ in range(rng.randrange(1, 5)):
        # quantized to thirds of the room: left/centre/right by top/centre/bottom
        px = cx + (rng.randrange(3) - 1) * (room.w // 3)
        py = cy + (rng.randrange(3) - 1) * (room.h // 3)
        _set_wall_inside(grid, room, px, py)


def _add_inner_chamber(grid: Grid, room: Room, rng: random.Random) -> None:
    ix, iy = room.x + room.w // 4, room.y + room.h // 4
    iw, ih = room.w // 2, room.h // 2
    for x in range(ix, ix + iw):
        for y in range(iy, iy + ih):
            if x in (ix, ix + iw - 1) or y in (iy, iy + ih - 1):
                _set_wall_inside(grid, room, x, y)
    side = rng.randrange(4)
    if side in (0, 2):  # north / south
        door = (ix + rng.randrange(iw), iy if side == 0 else iy + ih - 1)
    else:  # east / west
        door = (ix + iw - 1 if side == 1 else ix, iy + rng.randrange(ih))
    if grid.in_interior(*door):
        grid.set(door[0], door[1], FLOOR)


def _add_checkered_walls(grid: Grid, room: Room, rng: random.Random) -> None:
    for x in range(room.x, room.x + room.w):
        for y in range(room.y, room.y + room.h):
            if (x + y) % 2 == 0 and rng.randrange(3) == 0:
                _set_wall_inside(grid, room, x, y)


__all__ = [
    "Room",
    "ROOM_FEATURES",
    "PILLARS",
    "CHAMBER",
    "CHECKERED",
    "add_room_feature",
    "carve_room",
    "place_rooms",
]
