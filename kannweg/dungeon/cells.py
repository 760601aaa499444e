from dataclasses import dataclass, fields
from typing import List, Tuple

from .tiles import EMPTY, Tile


@dataclass
class WallFlags:
    """Half-edge wall bookkeeping for one tile.

    Each edge is split in two halves so neighbouring tiles can record the
    geometry they already received without consulting each other.
    """

    up_left: bool = False
    up_right: bool = False
    right_up: bool = False
    right_down: bool = False
    down_left: bool = False
    down_right: bool = False
    left_up: bool = False
    left_down: bool = False

    def any(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


class LevelCell:
    """Lightweight container for a level grid cell."""
    __slots__ = ("tile", "walls")

    def __init__(self, tile: Tile = EMPTY, walls: WallFlags = None):
        self.tile = tile
        self.walls = walls or WallFlags()

    def copy(self) -> "LevelCell":
        return LevelCell(self.tile, WallFlags(**self.walls.to_dict()))


Coord2D = Tuple[int, int]
Region = List[Coord2D]
