"""
project: Cavern
module: __init__.py
License: MIT

Procedural cave level generation.

The ``dungeon`` package builds a single level (terrain, features and a
connectivity guarantee) from one random source. ``services`` and ``loot``
populate a finished level with enemies and items, and ``world`` strings levels
together into a short descent with a start, a shop and an exit.
"""

__version__ = "0.1.0"

from .dungeon import FLOOR, WALL, Dungeon, DungeonConfig, Grid, generate  # noqa: E402
from .world import GameWorld  # noqa: E402

__all__ = ["Dungeon", "DungeonConfig", "FLOOR", "GameWorld", "Grid", "WALL", "generate", "__version__"]
