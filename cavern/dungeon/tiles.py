# Tile constants centralized for modular imports; each doubles as its ASCII glyph
WALL = "#"
FLOOR = "."

TILES = (WALL, FLOOR)

__all__ = ["WALL", "FLOOR", "TILES"]
