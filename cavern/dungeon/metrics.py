from __future__ import annotations

from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'floor_tiles_initial': 0,
        'floor_tiles_smoothed': 0,
        'floor_tiles_final': 0,
        'winding_corridors': 0,
        'rooms_carved': 0,
        'room_features': 0,
        'caves': 0,
        'pools': 0,
        'regions_initial': 0,
        'regions_final': 0,
        'bridges_carved': 0,
        'bridge_rounds': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
