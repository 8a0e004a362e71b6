"""Multi-level world orchestration.

A world is a fixed stack of levels built up front from one shared random
source, so a seed reproduces the whole descent. Each level grows a little
larger and rockier than the last; every level but the final one carries an
exit zone and a shop zone tied to the spawn point with straight paths.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from cavern.dungeon.config import DungeonConfig
from cavern.dungeon.connectivity import clear_area, connect_isolated_areas
from cavern.dungeon.grid import Grid, Point
from cavern.dungeon.pipeline import Dungeon
from cavern.dungeon.placement import find_random_floor_tile, find_start_position
from cavern.dungeon.tunnels import carve_straight_path
from cavern.logging_utils import get_logger
from cavern.loot.generator import Item, item_kinds_for_level, place_items
from cavern.services.spawn_service import Enemy, enemy_types_for_level, place_enemies

log = get_logger("cavern.world")

DUNGEON = "dungeon"
NEXT_LEVEL = "next_level"
VICTORY = "victory"

START_CLEAR_RADIUS = 2
EXIT_RADIUS = 3  # 7x7
SHOP_RADIUS = 2  # 5x5
ZONE_MARGIN = 5


@dataclass
class Level:
    number: int
    dungeon: Dungeon
    start: Point
    exit: Optional[Point] = None
    shop: Optional[Point] = None
    enemies: List[Enemy] = field(default_factory=list)
    items: Dict[Point, Item] = field(default_factory=dict)

    @property
    def grid(self) -> Grid:
        return self.dungeon.grid


def level_dimensions(level: int) -> tuple:
    """(width, height, wall_percent) for a 1-based level number."""
    return 80 + (level - 1) * 10, 40 + (level - 1) * 5, 30 + (level - 1) * 2


def _zone_anchor(size: int, numerator: int, denominator: int) -> int:
    return min(max(ZONE_MARGIN, size * numerator // denominator), size - ZONE_MARGIN)


class GameWorld:
    def __init__(
        self,
        max_levels: int = 3,
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
        config: DungeonConfig | None = None,
    ):
        if max_levels < 1:
            raise ValueError("max_levels must be at least 1")
        if rng is None:
            if seed is None:
                seed = random.randint(0, 2**31 - 1)
            rng = random.Random(seed)
        self.seed = seed
        self.rng = rng
        self.max_levels = max_levels
        self.base_config = config or DungeonConfig()
        self.current_level = 1
        self.state = DUNGEON
        self.levels: Dict[int, Level] = {}
        for n in range(1, max_levels + 1):
            self.levels[n] = self._build_level(n)
        self.player_pos: Point = self.levels[1].start

    def _build_level(self, n: int) -> Level:
        width, height, wall_percent = level_dimensions(n)
        with log.timed("level_generated", depth=n, width=width, height=height, wall_percent=wall_percent) as fields:
            level = self._populate_level(n, width, height, wall_percent)
            fields.update(
                enemies=len(level.enemies),
                items=len(level.items),
                bridges=level.dungeon.metrics.get("bridges_carved"),
            )
        return level

    def _populate_level(self, n: int, width: int, height: int, wall_percent: int) -> Level:
        cfg = replace(
            self.base_config,
            width=width,
            height=height,
            wall_percent=wall_percent,
            smoothing_iterations=4,
            seed=self.seed,
        )
        dungeon = Dungeon(cfg, rng=self.rng)
        grid = dungeon.grid
        rounds = cfg.max_bridge_rounds

        start = find_start_position(grid, self.rng)
        clear_area(grid, start, START_CLEAR_RADIUS, self.rng, max_rounds=rounds)
        level = Level(number=n, dungeon=dungeon, start=start)

        if n < self.max_levels:
            level.exit = (_zone_anchor(width, 2, 3), _zone_anchor(height, 2, 3))
            clear_area(grid, level.exit, EXIT_RADIUS, self.rng, max_rounds=rounds)
            level.shop = (_zone_anchor(width, 1, 3), _zone_anchor(height, 1, 3))
            clear_area(grid, level.shop, SHOP_RADIUS, self.rng, max_rounds=rounds)
            carve_straight_path(grid, start, level.exit)
            carve_straight_path(grid, start, level.shop)
            # paths only ever join regions, so this draws nothing in practice
            connect_isolated_areas(grid, self.rng, max_rounds=rounds)

        level.enemies = place_enemies(
            grid,
            10 + 3 * n,
            start,
            enemy_types_for_level(n),
            self.rng,
            min_distance=10 if n == 1 else 5,
            level=n,
        )
        level.items = place_items(grid, 10 + 5 * n, item_kinds_for_level(n), self.rng)
        return level

    @property
    def level(self) -> Level:
        return self.levels[self.current_level]

    def exit_position(self) -> Optional[Point]:
        return self.level.exit

    def shop_position(self) -> Optional[Point]:
        return self.level.shop

    def check_special_tiles(self, x: int, y: int) -> bool:
        """Flag the level as finished when (x, y) is on or next to the exit."""
        ex = self.level.exit
        if self.current_level < self.max_levels and ex is not None:
            if abs(x - ex[0]) <= 1 and abs(y - ex[1]) <= 1:
                self.state = NEXT_LEVEL
                return True
        return False

    def advance_to_next_level(self) -> Optional[Point]:
        """Move down one level and return the arrival tile; None once the world is won."""
        if self.current_level >= self.max_levels:
            self.state = VICTORY
            return None
        self.current_level += 1
        self.state = DUNGEON
        self.player_pos = find_random_floor_tile(self.level.grid, self.rng)
        return self.player_pos

    def direction_to_exit(self, x: int, y: int) -> str:
        ex = self.level.exit
        if ex is None:
            return "nearby"
        dx, dy = ex[0] - x, ex[1] - y
        horizontal = "east" if dx > 0 else "west" if dx < 0 else ""
        vertical = "south" if dy > 0 else "north" if dy < 0 else ""
        return (vertical + horizontal) or "nearby"


__all__ = ["DUNGEON", "GameWorld", "Level", "NEXT_LEVEL", "VICTORY", "level_dimensions"]
