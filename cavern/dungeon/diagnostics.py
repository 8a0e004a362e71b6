"""Structural checks over a generated level.

Used by the ``diagnose`` CLI command and ``scripts/diagnose_seeds.py`` to
sweep seeds for border leaks, split regions and bad spawn placements.
"""
from __future__ import annotations

from typing import Dict, Iterable, Optional

from .config import DungeonConfig
from .connectivity import label_regions
from .grid import Grid, Point
from .placement import manhattan
from .tiles import WALL


def border_violations(grid: Grid) -> int:
    return sum(1 for x, y in grid.border_cells() if grid.get(x, y) != WALL)


def blocked_points(grid: Grid, points: Iterable[Point]) -> int:
    return sum(1 for x, y in points if not grid.is_floor(x, y))


def analyze(
    grid: Grid,
    enemies=(),
    items: Optional[Dict[Point, object]] = None,
    reference: Optional[Point] = None,
    min_distance: int = 0,
) -> Dict[str, int]:
    """Count issues per category; a healthy level reports zero everywhere."""
    regions = label_regions(grid).count
    enemy_points = [e.position for e in enemies]
    too_close = 0
    if reference is not None:
        too_close = sum(1 for p in enemy_points if manhattan(p, reference) < min_distance)
    return {
        "border_violations": border_violations(grid),
        "extra_regions": max(regions - 1, 0),
        "enemies_off_floor": blocked_points(grid, enemy_points),
        "items_off_floor": blocked_points(grid, (items or {}).keys()),
        "enemies_too_close": too_close,
    }


def is_healthy(issues: Dict[str, int]) -> bool:
    return all(v == 0 for v in issues.values())


def diagnose_seed(seed: int, config: Optional[DungeonConfig] = None, enemies: int = 13, items: int = 15) -> dict:
    """Generate and populate one level for ``seed`` and report its issues."""
    from cavern.loot.generator import item_kinds_for_level
    from cavern.services.spawn_service import enemy_types_for_level

    from .pipeline import Dungeon

    d = Dungeon(config, seed=seed)
    start = d.find_start_position()
    placed = d.place_enemies(enemies, start, enemy_types_for_level(1))
    loot = d.place_items(items, item_kinds_for_level(1))
    issues = analyze(d.grid, placed, loot, reference=start, min_distance=5)
    return {"seed": seed, "issues": issues, "ok": is_healthy(issues)}


__all__ = ["analyze", "blocked_points", "border_violations", "diagnose_seed", "is_healthy"]
