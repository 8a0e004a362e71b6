import random

from cavern.dungeon.features import (
    cave_count,
    create_cave_areas,
    create_dungeon_features,
    create_main_corridors,
    create_pools,
    pool_count,
    room_count,
)
from cavern.dungeon.generator import Generator
from cavern.dungeon.grid import Grid
from cavern.dungeon.rooms import ROOM_FEATURES, Room, add_room_feature, carve_room, place_rooms
from cavern.dungeon.tiles import FLOOR, WALL
from cavern.dungeon.tunnels import carve_corridor, carve_straight_path, carve_winding_corridor
from tests.dungeon_test_utils import border_is_solid, bfs_reachable


def test_feature_counts_scale_with_width():
    assert (room_count(80), cave_count(80), pool_count(80)) == (7, 4, 3)
    assert (room_count(50), cave_count(50), pool_count(50)) == (5, 3, 2)


def test_corridor_widths_two_and_three_share_a_band():
    a, b = Grid(20, 11), Grid(20, 11)
    carve_corridor(a, (1, 5), (18, 5), 2)
    carve_corridor(b, (1, 5), (18, 5), 3)
    assert a == b
    assert all(a.is_floor(x, y) for x in range(1, 19) for y in (4, 5, 6))
    assert a.count(FLOOR) == 18 * 3


def test_corridor_width_one_is_a_single_line():
    g = Grid(10, 10)
    carve_corridor(g, (4, 1), (4, 8), 1)
    assert g.count(FLOOR) == 8
    assert all(g.is_floor(4, y) for y in range(1, 9))


def test_scenario_all_wall_terrain_still_gets_main_corridors():
    rng = random.Random(2024)
    grid = Generator(50, 30, rng).run(100, 4).grid
    assert grid.count(FLOOR) == 0
    create_main_corridors(grid, rng)
    cy, cx = 30 // 2, 50 // 2
    assert all(grid.is_floor(x, cy) for x in range(1, 49))
    assert all(grid.is_floor(cx, y) for y in range(1, 29))
    assert border_is_solid(grid)


def test_winding_corridor_reaches_target_connected():
    g = Grid(30, 20)
    rng = random.Random(11)
    start, end = (3, 3), (25, 16)
    steps = carve_winding_corridor(g, start, end, 1, rng)
    assert steps >= abs(25 - 3) + abs(16 - 3)
    assert end in bfs_reachable(g, (4, 3)) or end in bfs_reachable(g, (3, 4))
    assert g.is_floor(*end)
    assert border_is_solid(g)


def test_winding_corridor_to_itself_takes_no_steps(rng):
    g = Grid(10, 10)
    state = rng.getstate()
    assert carve_winding_corridor(g, (5, 5), (5, 5), 2, rng) == 0
    assert rng.getstate() == state
    assert g.count(FLOOR) == 0


def test_straight_path_is_three_wide_and_l_shaped():
    g = Grid(20, 20)
    carve_straight_path(g, (3, 3), (12, 15))
    for x in range(4, 13):
        assert g.is_floor(x, 2) and g.is_floor(x, 3) and g.is_floor(x, 4)
    for y in range(4, 16):
        assert g.is_floor(11, y) and g.is_floor(12, y) and g.is_floor(13, y)
    assert border_is_solid(g)


def test_straight_path_clamped_at_edges():
    g = Grid(10, 10)
    carve_straight_path(g, (1, 1), (8, 8))
    assert border_is_solid(g)
    assert g.is_floor(8, 8)


def test_carve_room_stays_inside_border():
    g = Grid(10, 10)
    carve_room(g, 6, 6, 9, 9)
    assert border_is_solid(g)
    assert g.count(FLOOR) == 3 * 3


def test_place_rooms_origin_and_features(rng):
    g = Grid(80, 40)
    rooms = place_rooms(g, 30, rng)
    assert len(rooms) == 30
    for r in rooms:
        assert 5 <= r.x < 70 and 5 <= r.y < 30
        assert 5 <= r.w <= 9 and 5 <= r.h <= 9
        assert r.feature is None or r.feature in ROOM_FEATURES
    assert any(r.feature for r in rooms)
    assert border_is_solid(g)


def test_room_features_only_wall_strict_interior():
    seen = set()
    for seed in range(30):
        g = Grid(30, 30)
        room = Room(5, 5, 9, 7)
        carve_room(g, room.x, room.y, room.w, room.h)
        room.feature = add_room_feature(g, room, random.Random(seed))
        seen.add(room.feature)
        for x, y, tile in g.cells():
            if tile == FLOOR:
                assert (x, y) in set(room.cells())
            elif (x, y) in set(room.cells()):
                assert room.contains_strictly(x, y), f"{room.feature} walled outline at {(x, y)}"
    assert seen == set(ROOM_FEATURES)


def test_caves_and_pools_only_open_floor():
    rng = random.Random(9)
    g = Grid(60, 40)
    create_cave_areas(g, 3, rng)
    after_caves = g.count(FLOOR)
    assert after_caves > 0
    create_pools(g, 2, rng)
    assert g.count(FLOOR) >= after_caves
    assert g.count(WALL) + g.count(FLOOR) == 60 * 40
    assert border_is_solid(g)


def test_create_dungeon_features_summary():
    rng = random.Random(31)
    grid = Generator(80, 40, rng).run(28, 4).grid
    summary = create_dungeon_features(grid, rng)
    assert 2 <= summary.winding_corridors <= 4
    assert len(summary.rooms) == room_count(80)
    assert summary.caves == cave_count(80)
    assert summary.pools == pool_count(80)
    assert 0 <= summary.room_features <= len(summary.rooms)
    assert border_is_solid(grid)
