"""Connectivity labelling and repair.

Floor regions are labelled with a 4-connected breadth-first flood fill into a
flat integer buffer indexed exactly like the tile grid (0 = unlabelled). Regions
are numbered in row-major discovery order, so each region's seed cell is also
its first cell in a row-major scan and doubles as its representative point.

Repair is a chain merge: region i is bridged to region i+1 with a winding
corridor between their representatives. A winding corridor always reaches its
target, so a single chain normally joins every region; ``verify=True`` re-labels
afterwards and runs further chain rounds (bounded) if anything is still apart.
"""
from __future__ import annotations

import random
from collections import deque
from typing import List, NamedTuple, Optional

from .grid import ORTHOGONAL, Grid, Point
from .tiles import FLOOR
from .tunnels import carve_winding_corridor


class RegionMap(NamedTuple):
    labels: List[int]
    count: int
    seeds: List[Point]  # seeds[i] is the first cell of region i + 1

    def label_at(self, grid: Grid, x: int, y: int) -> int:
        return self.labels[grid.index(x, y)]


class ConnectivityReport(NamedTuple):
    regions_initial: int
    regions_final: int
    bridges: int
    rounds: int


def _flood_fill(grid: Grid, start: Point, region_id: int, labels: List[int]) -> None:
    w = grid.width
    q = deque([start])
    labels[start[1] * w + start[0]] = region_id
    while q:
        cx, cy = q.popleft()
        for dx, dy in ORTHOGONAL:
            nx, ny = cx + dx, cy + dy
            if not grid.in_interior(nx, ny):
                continue
            idx = ny * w + nx
            if labels[idx] == 0 and grid.get(nx, ny) == FLOOR:
                labels[idx] = region_id
                q.append((nx, ny))


def label_regions(grid: Grid) -> RegionMap:
    labels = [0] * (grid.width * grid.height)
    seeds: List[Point] = []
    w = grid.width
    for y in range(1, grid.height - 1):
        for x in range(1, w - 1):
            if labels[y * w + x] == 0 and grid.get(x, y) == FLOOR:
                seeds.append((x, y))
                _flood_fill(grid, (x, y), len(seeds), labels)
    return RegionMap(labels, len(seeds), seeds)


def find_point_in_region(grid: Grid, regions: RegionMap, region_id: int) -> Point:
    """First cell carrying ``region_id`` in a row-major scan; grid centre if absent."""
    w = grid.width
    for y in range(1, grid.height - 1):
        for x in range(1, w - 1):
            if regions.labels[y * w + x] == region_id:
                return (x, y)
    return grid.center


def region_count(grid: Grid) -> int:
    return label_regions(grid).count


def is_fully_connected(grid: Grid) -> bool:
    return region_count(grid) <= 1


def _bridge_chain(grid: Grid, regions: RegionMap, rng: random.Random) -> int:
    bridges = 0
    for region_id in range(1, regions.count):
        a = regions.seeds[region_id - 1]
        b = regions.seeds[region_id]
        carve_winding_corridor(grid, a, b, rng.randrange(1, 3), rng)
        bridges += 1
    return bridges


def connect_isolated_areas(
    grid: Grid,
    rng: random.Random,
    *,
    verify: bool = True,
    max_rounds: int = 4,
) -> ConnectivityReport:
    """Bridge every floor region into one; draws nothing when already connected."""
    regions = label_regions(grid)
    initial = regions.count
    if initial <= 1:
        return ConnectivityReport(initial, initial, 0, 0)
    bridges = _bridge_chain(grid, regions, rng)
    rounds = 1
    if not verify:
        # single unverified chain pass; the final count is not re-measured
        return ConnectivityReport(initial, initial, bridges, rounds)
    regions = label_regions(grid)
    while regions.count > 1 and rounds < max_rounds:
        bridges += _bridge_chain(grid, regions, rng)
        rounds += 1
        regions = label_regions(grid)
    return ConnectivityReport(initial, regions.count, bridges, rounds)


def clear_area(
    grid: Grid,
    center: Point,
    radius: int,
    rng: Optional[random.Random] = None,
    *,
    max_rounds: int = 4,
) -> ConnectivityReport:
    """Open a (2r+1)^2 safe zone around ``center`` and keep the level in one piece.

    The square is clamped to the interior. If the opened floor ends up split
    from the rest of the level the resolver bridges it back in; that needs an
    RNG, so callers clearing isolated spots must pass the level's shared one.
    """
    cx, cy = center
    for x in range(cx - radius, cx + radius + 1):
        for y in range(cy - radius, cy + radius + 1):
            grid.set_floor_if_interior(x, y)
    regions = label_regions(grid)
    if regions.count <= 1:
        return ConnectivityReport(regions.count, regions.count, 0, 0)
    if rng is None:
        raise ValueError("clear_area split the level into regions; an rng is required to reconnect it")
    return connect_isolated_areas(grid, rng, verify=True, max_rounds=max_rounds)


__all__ = [
    "ConnectivityReport",
    "RegionMap",
    "clear_area",
    "connect_isolated_areas",
    "find_point_in_region",
    "is_fully_connected",
    "label_regions",
    "region_count",
]
