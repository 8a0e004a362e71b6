"""Public dungeon package interface."""

from .config import DungeonConfig
from .connectivity import clear_area, connect_isolated_areas, is_fully_connected, label_regions
from .generator import Generator, add_borders, random_fill, smooth_map
from .grid import Grid, Point
from .pipeline import Dungeon, generate
from .placement import find_random_floor_tile, find_start_position
from .tiles import FLOOR, WALL
from .tunnels import carve_straight_path

__all__ = [
    "Dungeon",
    "DungeonConfig",
    "FLOOR",
    "Generator",
    "Grid",
    "Point",
    "WALL",
    "add_borders",
    "carve_straight_path",
    "clear_area",
    "connect_isolated_areas",
    "find_random_floor_tile",
    "find_start_position",
    "generate",
    "is_fully_connected",
    "label_regions",
    "random_fill",
    "smooth_map",
]
