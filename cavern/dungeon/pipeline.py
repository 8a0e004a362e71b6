"""
project: Cavern
module: dungeon/pipeline.py
License: MIT

Pipeline orchestration for cave level generation.

Phases run in a fixed order against one random source:
    fill -> smooth x k -> border -> features -> connectivity

``generate`` is the bare pipeline. ``Dungeon`` wraps it with config handling,
per-phase timing metrics and the placement operations callers run afterwards.
Because every phase draws from the same RNG, reproducing a level means
replaying the same seed *and* the same sequence of calls.
"""
from __future__ import annotations

import random
import time
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

from .config import DungeonConfig
from .connectivity import ConnectivityReport, clear_area, connect_isolated_areas, region_count
from .features import create_dungeon_features
from .generator import Generator
from .grid import Grid, Point
from .metrics import init_metrics
from .placement import find_random_floor_tile, find_start_position
from .tiles import FLOOR
from cavern.logging_utils import get_logger

log = get_logger("cavern.dungeon")


def generate(
    width: int,
    height: int,
    wall_percent: int,
    smoothing_iterations: int,
    rng: random.Random,
    *,
    verify_connectivity: bool = True,
    max_bridge_rounds: int = 4,
) -> Grid:
    """Run the full pipeline and return a bordered, connected grid.

    Width and height below 3 are not checked here; callers enforce the minimum.
    """
    terrain = Generator(width, height, rng).run(wall_percent, smoothing_iterations)
    grid = terrain.grid
    create_dungeon_features(grid, rng)
    connect_isolated_areas(grid, rng, verify=verify_connectivity, max_rounds=max_bridge_rounds)
    return grid


class Dungeon:
    def __init__(
        self,
        config: DungeonConfig | None = None,
        *,
        seed: int | None = None,
        size: tuple | None = None,
        rng: random.Random | None = None,
    ):
        # Accept either a config object or the (seed, size) call style
        config = replace(config) if config is not None else DungeonConfig()
        if seed is not None:
            config.seed = seed
        if size is not None and len(size) >= 2:
            config.width, config.height = size[0], size[1]
        # None => random seed; 0 is a valid deterministic seed
        if config.seed is None and rng is None:
            config.seed = random.randint(0, 2**31 - 1)
        self.config = config
        self.seed = config.seed
        # Shared RNG when injected (multi-level worlds), else a private one from the seed
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.metrics: Dict[str, Any] = init_metrics() if config.enable_metrics else {}
        self.rooms: List = []
        self.connectivity: Optional[ConnectivityReport] = None
        self.grid: Grid = self._run_pipeline()

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def _run_pipeline(self) -> Grid:
        cfg = self.config
        if cfg.enable_metrics:
            start = time.perf_counter()
            phase_times: Dict[str, int] = {}

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter()
                r = fn(*a, **k)
                phase_times[label] = int((time.perf_counter() - ps) * 1000)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        terrain = _phase('terrain', Generator(cfg.width, cfg.height, self.rng).run,
                         cfg.wall_percent, cfg.smoothing_iterations)
        grid = terrain.grid
        features = _phase('features', create_dungeon_features, grid, self.rng)
        self.rooms = features.rooms
        report = _phase('connectivity', connect_isolated_areas, grid, self.rng,
                        verify=cfg.verify_connectivity, max_rounds=cfg.max_bridge_rounds)
        self.connectivity = report

        if cfg.enable_metrics:
            self.metrics.update({
                'floor_tiles_initial': terrain.floor_initial,
                'floor_tiles_smoothed': terrain.floor_smoothed,
                'floor_tiles_final': grid.count(FLOOR),
                'winding_corridors': features.winding_corridors,
                'rooms_carved': len(features.rooms),
                'room_features': features.room_features,
                'caves': features.caves,
                'pools': features.pools,
                'regions_initial': report.regions_initial,
                'regions_final': report.regions_final,
                'bridges_carved': report.bridges,
                'bridge_rounds': report.rounds,
                'runtime_ms': int((time.perf_counter() - start) * 1000),
                'phase_ms': phase_times,
            })
        log.debug(
            event="dungeon_generated",
            seed=self.seed,
            width=cfg.width,
            height=cfg.height,
            regions=report.regions_initial,
            bridges=report.bridges,
            runtime_ms=self.metrics.get('runtime_ms'),
        )
        return grid

    # ------------------------------------------------------------------
    # Placement (consumes the same RNG, after generation)
    # ------------------------------------------------------------------
    def find_start_position(self) -> Point:
        return find_start_position(self.grid, self.rng)

    def find_random_floor_tile(self) -> Point:
        return find_random_floor_tile(self.grid, self.rng)

    def place_enemies(self, count: int, reference: Point, type_set: Sequence[str],
                      min_distance: int = 5, level: int = 1):
        from cavern.services.spawn_service import place_enemies
        return place_enemies(self.grid, count, reference, type_set, self.rng,
                             min_distance=min_distance, level=level)

    def place_items(self, count: int, kinds: Sequence[str]):
        from cavern.loot.generator import place_items
        return place_items(self.grid, count, kinds, self.rng)

    def clear_area(self, center: Point, radius: int) -> ConnectivityReport:
        return clear_area(self.grid, center, radius, self.rng, max_rounds=self.config.max_bridge_rounds)

    def is_connected(self) -> bool:
        return region_count(self.grid) <= 1

    def is_walkable(self, x: int, y: int) -> bool:
        return self.grid.is_floor(x, y)


__all__ = ["Dungeon", "generate"]
