"""Loot generation utilities.

Items are described by a closed table of kind slugs. Placement picks a kind
uniformly from the caller's list (repeat a slug to weight it) and builds a
fresh Item from the table, so no two placements share an instance.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Sequence

from cavern.dungeon.grid import Grid, Point
from cavern.dungeon.placement import MAX_ATTEMPTS, random_interior_point

WEAPON = "weapon"
ARMOR = "armor"
CONSUMABLE = "consumable"


@dataclass(frozen=True)
class ItemSpec:
    name: str
    type: str
    power: int
    description: str = ""


@dataclass
class Item:
    slug: str
    name: str
    type: str
    power: int
    description: str = ""

    def __str__(self) -> str:
        return self.name


ITEM_TABLE: Dict[str, ItemSpec] = {
    'sword': ItemSpec('Sword', WEAPON, 5, 'A sharp sword that deals +5 damage.'),
    'battle-axe': ItemSpec('Battle Axe', WEAPON, 8, 'A heavy battle axe that deals +8 damage.'),
    'magic-staff': ItemSpec('Magic Staff', WEAPON, 12, 'A staff imbued with magical energy.'),
    'leather-armor': ItemSpec('Leather Armor', ARMOR, 2, 'Basic leather armor that gives +2 defense.'),
    'chain-mail': ItemSpec('Chain Mail', ARMOR, 5, 'Strong chain mail that gives +5 defense.'),
    'plate-armor': ItemSpec('Plate Armor', ARMOR, 10, 'Heavy plate armor.'),
    'health-potion': ItemSpec('Health Potion', CONSUMABLE, 20, 'Restores 20 HP when consumed.'),
    'greater-health-potion': ItemSpec('Greater Health Potion', CONSUMABLE, 50, 'Restores 50 HP when consumed.'),
    'strength-potion': ItemSpec('Strength Potion', CONSUMABLE, 5, 'Temporarily increases attack power by 5.'),
}

# Health potions are listed twice so they drop twice as often
LEVEL_ITEM_KINDS: Dict[int, tuple] = {
    1: ('health-potion', 'health-potion', 'sword', 'leather-armor'),
    2: ('health-potion', 'health-potion', 'sword', 'battle-axe', 'leather-armor', 'chain-mail'),
}
DEEP_ITEM_KINDS = ('health-potion', 'health-potion', 'battle-axe', 'chain-mail', 'magic-staff', 'plate-armor')


def item_kinds_for_level(level: int) -> tuple:
    return LEVEL_ITEM_KINDS.get(level, DEEP_ITEM_KINDS)


def create_item(slug: str) -> Item:
    spec = ITEM_TABLE.get(slug)
    if spec is None:
        raise ValueError(f"Unknown item kind '{slug}'")
    return Item(slug=slug, name=spec.name, type=spec.type, power=spec.power, description=spec.description)


def place_items(grid: Grid, count: int, kinds: Sequence[str], rng: random.Random) -> Dict[Point, Item]:
    """Drop up to ``count`` items on distinct floor tiles.

    Keys are unique by construction: an occupied tile is rejected like a wall.
    Slots that miss 100 times are skipped. Raises ValueError for an empty or
    unknown kind list before drawing anything.
    """
    if not kinds:
        raise ValueError("place_items needs at least one item kind")
    unknown = sorted({k for k in kinds if k not in ITEM_TABLE})
    if unknown:
        raise ValueError(f"Unknown item kinds: {', '.join(unknown)}")
    items: Dict[Point, Item] = {}
    for _ in range(count):
        for _attempt in range(MAX_ATTEMPTS):
            pos = random_interior_point(grid, rng)
            if grid.is_floor(*pos) and pos not in items:
                items[pos] = create_item(kinds[rng.randrange(len(kinds))])
                break
    return items


def summarize(items: Dict[Point, Item]) -> List[tuple]:
    """(name, count) pairs sorted by descending count then name."""
    counts: Dict[str, int] = {}
    for it in items.values():
        counts[it.name] = counts.get(it.name, 0) + 1
    return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))


__all__ = [
    "ITEM_TABLE",
    "Item",
    "ItemSpec",
    "create_item",
    "item_kinds_for_level",
    "place_items",
    "summarize",
]
