"""Enemy spawn selection, scaling and placement.

Stats come from two layers: a level baseline (deeper levels hit harder and pay
more XP) and a per-type template multiplier. Unknown types are not an error;
they spawn with the bare baseline so callers can introduce new monsters
without touching this table.

Placement is rejection sampling with a per-enemy retry cap. A slot whose 100
attempts all miss is dropped, so the result may be shorter than requested.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from cavern.dungeon.grid import Grid, Point
from cavern.dungeon.placement import MAX_ATTEMPTS, manhattan, random_interior_point

DEFAULT_MIN_DISTANCE = 5
BASE_DETECTION_RANGE = 5

# type -> (hp multiplier, damage multiplier, xp multiplier)
ENEMY_TEMPLATES: Dict[str, Tuple[float, float, float]] = {
    "Rat": (0.6, 0.6, 0.5),
    "Goblin": (1.0, 1.0, 1.0),
    "Skeleton": (1.1, 1.1, 1.2),
    "Orc": (1.4, 1.3, 1.5),
    "Undead": (1.3, 1.2, 1.4),
    "Demon": (1.8, 1.6, 2.0),
}
_NEUTRAL_TEMPLATE = (1.0, 1.0, 1.0)

LEVEL_ENEMY_TYPES: Dict[int, Tuple[str, ...]] = {
    1: ("Goblin", "Rat"),
    2: ("Goblin", "Skeleton", "Rat"),
    3: ("Skeleton", "Orc", "Undead"),
}
DEEP_ENEMY_TYPES: Tuple[str, ...] = ("Demon", "Orc", "Undead")


@dataclass
class Enemy:
    x: int
    y: int
    type: str
    hp: int
    damage: int
    xp_value: int
    detection_range: int = BASE_DETECTION_RANGE
    level: int = 1

    @property
    def position(self) -> Point:
        return (self.x, self.y)


def enemy_types_for_level(level: int) -> Tuple[str, ...]:
    return LEVEL_ENEMY_TYPES.get(level, DEEP_ENEMY_TYPES)


def base_stats(level: int) -> Tuple[int, int, int]:
    """Return (hp, damage, xp_value) baseline for a 1-based dungeon level."""
    level = max(level, 1)
    return 20 + (level - 1) * 10, 5 + (level - 1) * 2, 10 * level


def build_enemy(x: int, y: int, enemy_type: str, level: int = 1) -> Enemy:
    hp, damage, xp = base_stats(level)
    hp_mod, dmg_mod, xp_mod = ENEMY_TEMPLATES.get(enemy_type, _NEUTRAL_TEMPLATE)
    return Enemy(
        x=x,
        y=y,
        type=enemy_type,
        hp=max(1, round(hp * hp_mod)),
        damage=max(1, round(damage * dmg_mod)),
        xp_value=max(1, round(xp * xp_mod)),
        detection_range=BASE_DETECTION_RANGE,
        level=max(level, 1),
    )


def place_enemies(
    grid: Grid,
    count: int,
    reference: Point,
    type_set: Sequence[str],
    rng: random.Random,
    min_distance: int = DEFAULT_MIN_DISTANCE,
    level: int = 1,
) -> List[Enemy]:
    """Scatter up to ``count`` enemies on floor tiles far enough from ``reference``.

    Raises ValueError if ``type_set`` is empty.
    """
    if not type_set:
        raise ValueError("place_enemies needs at least one enemy type")
    enemies: List[Enemy] = []
    for _ in range(count):
        for _attempt in range(MAX_ATTEMPTS):
            x, y = random_interior_point(grid, rng)
            if grid.is_floor(x, y) and manhattan((x, y), reference) >= min_distance:
                enemy_type = type_set[rng.randrange(len(type_set))]
                enemies.append(build_enemy(x, y, enemy_type, level))
                break
    return enemies


__all__ = [
    "DEFAULT_MIN_DISTANCE",
    "ENEMY_TEMPLATES",
    "Enemy",
    "base_stats",
    "build_enemy",
    "enemy_types_for_level",
    "place_enemies",
]
