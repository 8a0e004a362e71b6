"""Cave generation invariant tests.

These tests sweep a range of seeds and sizes and check structural integrity
against independent helpers rather than exhaustive statistical properties.

Invariants covered:
1. Every perimeter cell is wall.
2. All floor forms exactly one 4-connected region.
3. Identical seeds and call sequences give identical grids and placements.
"""

from __future__ import annotations

import random

import pytest

from cavern.dungeon.pipeline import Dungeon, generate
from cavern.dungeon.tiles import FLOOR
from tests.dungeon_test_utils import border_is_solid, count_components

SIZES = [(80, 40), (50, 30), (33, 21), (120, 60)]


def gen(seed: int = 12345, size=(80, 40)) -> Dungeon:
    return Dungeon(seed=seed, size=size)


@pytest.mark.structure
@pytest.mark.parametrize("seed", [1, 7, 42, 1001, 292372, 730727])
@pytest.mark.parametrize("size", SIZES)
def test_border_and_single_region(seed, size):
    d = gen(seed, size)
    assert d.grid.size == size
    assert border_is_solid(d.grid)
    assert d.grid.count(FLOOR) > 0
    assert count_components(d.grid) == 1


@pytest.mark.structure
@pytest.mark.parametrize("wall_percent", [0, 45, 60, 100])
def test_extreme_densities_stay_connected(wall_percent):
    grid = generate(60, 30, wall_percent, 4, random.Random(wall_percent))
    assert border_is_solid(grid)
    assert count_components(grid) == 1


def test_unverified_mode_still_yields_valid_levels():
    for seed in range(5):
        grid = generate(80, 40, 45, 4, random.Random(seed), verify_connectivity=False)
        assert border_is_solid(grid)
        assert count_components(grid) == 1


def test_generate_matches_dungeon_for_same_rng():
    grid = generate(80, 40, 28, 4, random.Random(55))
    assert grid == Dungeon(seed=55).grid


def test_full_call_sequence_is_reproducible():
    def run(seed):
        d = gen(seed)
        start = d.find_start_position()
        enemies = d.place_enemies(15, start, ("Goblin", "Rat"))
        items = d.place_items(20, ["health-potion", "sword"])
        return d.grid.rows(), start, enemies, items

    assert run(99) == run(99)
    assert run(99)[0] != run(100)[0]


def test_small_grid_minimum_size():
    d = gen(3, (3, 3))
    assert d.grid.rows() == ["###", "#.#", "###"]
    assert d.find_start_position() == (1, 1)


def test_seed_zero_is_deterministic():
    assert gen(0).grid == gen(0).grid
