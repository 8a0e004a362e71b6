import random

from cavern.dungeon.config import DungeonConfig
from cavern.dungeon.metrics import init_metrics
from cavern.dungeon.pipeline import Dungeon
from cavern.dungeon.tiles import FLOOR


def test_metrics_keys_populated():
    d = Dungeon(seed=12345)
    m = d.metrics
    for k in init_metrics():
        assert k in m
    assert m["floor_tiles_final"] == d.grid.count(FLOOR)
    assert m["rooms_carved"] == len(d.rooms) == 7
    assert 2 <= m["winding_corridors"] <= 4
    assert m["regions_final"] == 1
    assert set(m["phase_ms"]) == {"terrain", "features", "connectivity"}
    assert isinstance(m["runtime_ms"], int)


def test_metrics_disabled():
    d = Dungeon(DungeonConfig(enable_metrics=False), seed=3)
    assert d.metrics == {}
    assert d.connectivity is not None


def test_metrics_env_toggle(monkeypatch):
    monkeypatch.setenv("CAVERN_ENABLE_METRICS", "0")
    d = Dungeon(DungeonConfig.from_env(), seed=3)
    assert d.metrics == {}


def test_config_is_not_mutated_by_dungeon():
    cfg = DungeonConfig(width=40, height=20)
    d = Dungeon(cfg, size=(50, 30))
    assert (cfg.width, cfg.height, cfg.seed) == (40, 20, None)
    assert (d.width, d.height) == (50, 30)
    assert d.seed is not None


def test_injected_rng_is_shared():
    rng = random.Random(10)
    d = Dungeon(DungeonConfig(width=40, height=20), rng=rng)
    assert d.rng is rng
    assert d.seed is None
    replay = Dungeon(DungeonConfig(width=40, height=20), rng=random.Random(10))
    assert replay.grid == d.grid


def test_generation_logs_debug_event(monkeypatch, capsys):
    monkeypatch.setenv("CAVERN_LOG_LEVEL", "debug")
    Dungeon(seed=8, size=(40, 20))
    out = capsys.readouterr().out
    assert "event=dungeon_generated" in out
    assert "seed=8" in out


def test_clear_area_keeps_single_region():
    d = Dungeon(seed=77)
    d.clear_area((5, 5), 2)
    assert d.is_connected()
    assert d.is_walkable(5, 5)
