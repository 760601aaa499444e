"""Fixed-size tile grid on an odd-by-odd lattice.

Odd coordinates are cell centres (room interiors and maze cells); even
coordinates are the wall/gap positions shared by two neighbouring cells.
Both dimensions must therefore be odd, otherwise the last row or column
has no wall to close it off.

Storage is column-major (``cells[x][y]``) like the rest of the package.
"""
from __future__ import annotations

from typing import Iterator, List, Tuple

from .cells import Coord2D, LevelCell
from .errors import ConfigurationError, FrozenGridError
from .tiles import EMPTY, Tile

# north, south, east, west
CARDINALS: Tuple[Coord2D, ...] = ((0, -1), (0, 1), (1, 0), (-1, 0))


def get_neighbours(coord: Coord2D, step: int, width: int, height: int) -> List[Coord2D]:
    """Bounds-checked cardinal neighbours of ``coord`` at distance ``step``.

    Pure function: ordering is always north, south, east, west with the
    out-of-bounds entries dropped.
    """
    x, y = coord
    out = []
    for dx, dy in CARDINALS:
        nx, ny = x + dx * step, y + dy * step
        if 0 <= nx < width and 0 <= ny < height:
            out.append((nx, ny))
    return out


def validate_dimensions(width: int, height: int) -> None:
    for name, value in (("width", width), ("height", height)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigurationError(name, f"must be an integer, got {value!r}")
        if value < 1:
            raise ConfigurationError(name, f"must be positive, got {value}")
        if value % 2 == 0:
            raise ConfigurationError(name, f"must be odd, got {value}")


class Grid:
    def __init__(self, width: int, height: int):
        validate_dimensions(width, height)
        self.width = width
        self.height = height
        self.cells: List[List[LevelCell]] = [[LevelCell() for _ in range(height)] for _ in range(width)]
        self._frozen = False

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject further tile writes. Wall flags stay writable."""
        self._frozen = True

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> LevelCell:
        return self.cells[x][y]

    def tile_at(self, x: int, y: int) -> Tile:
        return self.cells[x][y].tile

    def set_tile(self, x: int, y: int, tile: Tile) -> None:
        if self._frozen:
            raise FrozenGridError(f"grid is frozen; cannot set {(x, y)} to {tile.name}")
        self.cells[x][y].tile = tile

    def is_empty(self, x: int, y: int) -> bool:
        return self.cells[x][y].tile is EMPTY

    def get_neighbours(self, coord: Coord2D, step: int = 1) -> List[Coord2D]:
        return get_neighbours(coord, step, self.width, self.height)

    def count_empty_neighbours(self, x: int, y: int) -> int:
        return sum(1 for nx, ny in self.get_neighbours((x, y), 1) if self.cells[nx][ny].tile is EMPTY)

    def iter_tiles(self) -> Iterator[Tuple[int, int, LevelCell]]:
        for x in range(self.width):
            column = self.cells[x]
            for y in range(self.height):
                yield x, y, column[y]

    def count(self, tile: Tile) -> int:
        return sum(1 for _, _, c in self.iter_tiles() if c.tile is tile)

    def copy(self) -> "Grid":
        """Deep, unfrozen copy (tiles and wall flags)."""
        clone = Grid.__new__(Grid)
        clone.width = self.width
        clone.height = self.height
        clone.cells = [[c.copy() for c in column] for column in self.cells]
        clone._frozen = False
        return clone

    def to_rows(self) -> List[str]:
        """Row-major text rows (``rows[y][x]``) for display."""
        return ["".join(self.cells[x][y].tile.value for x in range(self.width)) for y in range(self.height)]


__all__ = ["Grid", "CARDINALS", "get_neighbours", "validate_dimensions"]
