"""Flat row-major tile grid.

A level is a W x H array of WALL/FLOOR tiles stored in one list of length
W*H. ``index(x, y)`` is the only way coordinates become offsets and it raises
IndexError outside the grid, so a slipped carve fails loudly instead of
wrapping into the neighbouring row.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple

from .tiles import FLOOR, TILES, WALL

Point = Tuple[int, int]

ORTHOGONAL: Tuple[Point, ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))


class Grid:
    __slots__ = ("_width", "_height", "_cells")

    def __init__(self, width: int, height: int, fill: str = WALL):
        self._width = width
        self._height = height
        self._cells: List[str] = [fill] * (width * height)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Grid":
        """Build a grid from equal-length strings of tile glyphs (top row first)."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        grid = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has length {len(row)}, expected {width}")
            for x, ch in enumerate(row):
                if ch not in TILES:
                    raise ValueError(f"Unknown tile {ch!r} at {(x, y)}")
                grid._cells[y * width + x] = ch
        return grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    @property
    def center(self) -> Point:
        return (self._width // 2, self._height // 2)

    def index(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"({x}, {y}) outside {self._width}x{self._height} grid")
        return y * self._width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def in_interior(self, x: int, y: int) -> bool:
        return 0 < x < self._width - 1 and 0 < y < self._height - 1

    def get(self, x: int, y: int) -> str:
        return self._cells[self.index(x, y)]

    def set(self, x: int, y: int, tile: str) -> None:
        self._cells[self.index(x, y)] = tile

    def is_floor(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self._cells[y * self._width + x] == FLOOR

    def is_border(self, x: int, y: int) -> bool:
        return x in (0, self._width - 1) or y in (0, self._height - 1)

    def set_floor_if_interior(self, x: int, y: int) -> bool:
        if self.in_interior(x, y):
            self._cells[y * self._width + x] = FLOOR
            return True
        return False

    def count(self, tile: str) -> int:
        return self._cells.count(tile)

    def cells(self) -> Iterator[Tuple[int, int, str]]:
        """Yield (x, y, tile) in row-major order."""
        w = self._width
        for i, tile in enumerate(self._cells):
            yield i % w, i // w, tile

    def border_cells(self) -> Iterable[Point]:
        w, h = self._width, self._height
        for x in range(w):
            yield x, 0
            if h > 1:
                yield x, h - 1
        for y in range(1, h - 1):
            yield 0, y
            if w > 1:
                yield w - 1, y

    def floor_count_3x3(self, x: int, y: int) -> int:
        """Floor tiles in the 3x3 block centred on (x, y), the centre included."""
        total = 0
        for ny in range(y - 1, y + 2):
            for nx in range(x - 1, x + 2):
                if self.is_floor(nx, ny):
                    total += 1
        return total

    def copy(self) -> "Grid":
        clone = Grid(self._width, self._height)
        clone._cells = list(self._cells)
        return clone

    def rows(self) -> List[str]:
        w = self._width
        return ["".join(self._cells[y * w:(y + 1) * w]) for y in range(self._height)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and self._cells == other._cells

    def __repr__(self) -> str:
        return f"Grid({self._width}x{self._height}, floor={self.count(FLOOR)})"


__all__ = ["Grid", "Point", "ORTHOGONAL"]
