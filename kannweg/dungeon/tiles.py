"""Tile kinds centralized for modular imports.

A closed tagged variant: every grid position holds exactly one of these.
The string values double as the ASCII rendering characters.
"""
from enum import Enum


class Tile(str, Enum):
    EMPTY = "#"  # solid rock (default)
    FLOOR = "."  # room interior
    CORRIDOR = ","  # maze passage
    DOOR = "+"  # connector opened between two regions

    @property
    def walkable(self) -> bool:
        return self is not Tile.EMPTY


EMPTY = Tile.EMPTY
FLOOR = Tile.FLOOR
CORRIDOR = Tile.CORRIDOR
DOOR = Tile.DOOR

_TYPE_NAMES = {
    EMPTY: "empty",
    FLOOR: "floor",
    CORRIDOR: "corridor",
    DOOR: "door",
}


def tile_to_type(tile: Tile) -> str:
    """Lower-case type name used by JSON consumers."""
    return _TYPE_NAMES[tile]


__all__ = ["Tile", "EMPTY", "FLOOR", "CORRIDOR", "DOOR", "tile_to_type"]
