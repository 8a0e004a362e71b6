import random

import pytest

from cavern.dungeon.placement import manhattan
from cavern.world import DUNGEON, NEXT_LEVEL, VICTORY, GameWorld, level_dimensions
from tests.dungeon_test_utils import border_is_solid, count_components


@pytest.fixture(scope="module")
def world():
    return GameWorld(3, seed=2468)


def test_level_dimensions():
    assert level_dimensions(1) == (80, 40, 30)
    assert level_dimensions(3) == (100, 50, 34)


def test_levels_are_sized_and_valid(world):
    assert sorted(world.levels) == [1, 2, 3]
    for n, level in world.levels.items():
        w, h, _ = level_dimensions(n)
        assert level.grid.size == (w, h)
        assert border_is_solid(level.grid)
        assert count_components(level.grid) == 1
        assert level.grid.is_floor(*level.start)
        assert len(level.enemies) <= 10 + 3 * n
        assert len(level.items) <= 10 + 5 * n


def test_exit_and_shop_zones_on_non_final_levels(world):
    for n in (1, 2):
        level = world.levels[n]
        ex, ey = level.exit
        sx, sy = level.shop
        assert all(level.grid.is_floor(ex + dx, ey + dy) for dx in range(-3, 4) for dy in range(-3, 4))
        assert all(level.grid.is_floor(sx + dx, sy + dy) for dx in range(-2, 3) for dy in range(-2, 3))
    assert world.levels[3].exit is None
    assert world.levels[3].shop is None


def test_enemy_distance_from_spawn(world):
    first = world.levels[1]
    assert all(manhattan(e.position, first.start) >= 10 for e in first.enemies)
    deeper = world.levels[2]
    assert all(manhattan(e.position, deeper.start) >= 5 for e in deeper.enemies)
    assert {e.type for e in deeper.enemies} <= {"Goblin", "Skeleton", "Rat"}
    assert all(e.level == 2 for e in deeper.enemies)


def test_world_is_deterministic():
    a = GameWorld(2, seed=13)
    b = GameWorld(2, seed=13)
    for n in (1, 2):
        assert a.levels[n].grid == b.levels[n].grid
        assert a.levels[n].enemies == b.levels[n].enemies
        assert a.levels[n].items == b.levels[n].items


def test_shared_rng_drives_every_level():
    rng = random.Random(5)
    w = GameWorld(2, rng=rng)
    assert w.rng is rng
    assert w.seed is None


def test_progression_through_levels():
    w = GameWorld(2, seed=31)
    assert (w.current_level, w.state) == (1, DUNGEON)
    ex, ey = w.exit_position()
    assert not w.check_special_tiles(ex + 2, ey)
    assert w.check_special_tiles(ex + 1, ey - 1)
    assert w.state == NEXT_LEVEL
    pos = w.advance_to_next_level()
    assert (w.current_level, w.state) == (2, DUNGEON)
    assert w.level.grid.is_floor(*pos)
    # final level has no exit to find
    assert not w.check_special_tiles(*pos)
    assert w.advance_to_next_level() is None
    assert w.state == VICTORY


def test_direction_to_exit():
    w = GameWorld(2, seed=4)
    ex, ey = w.exit_position()
    assert w.direction_to_exit(ex - 5, ey - 5) == "southeast"
    assert w.direction_to_exit(ex + 1, ey) == "west"
    assert w.direction_to_exit(ex, ey + 3) == "north"
    assert w.direction_to_exit(ex, ey) == "nearby"


def test_invalid_level_count():
    with pytest.raises(ValueError):
        GameWorld(0)


def test_world_logs_each_level(capsys):
    GameWorld(2, seed=1)
    out = capsys.readouterr().out
    assert out.count("event=level_generated") == 2
