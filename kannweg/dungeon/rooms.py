import random
from dataclasses import dataclass, field
from typing import List

from .cells import Coord2D
from .config import RoomOptions
from .grid import Grid
from .tiles import FLOOR, Tile


@dataclass
class Room:
    x: int
    y: int
    w: int
    h: int
    tiles: List[Coord2D] = field(default_factory=list, repr=False)

    def cells(self):
        for ix in range(self.x, self.x + self.w):
            for iy in range(self.y, self.y + self.h):
                yield ix, iy

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.w and self.y <= y < self.y + self.h


def _random_odd(rng, upper: int) -> int:
    """Uniform odd value in [1, upper] (upper is odd)."""
    return 2 * rng.randrange((upper + 1) // 2) + 1


def _random_even_extent(rng, min_size: int, max_size: int) -> int:
    lo = min_size + (min_size % 2)
    candidates = range(lo, max_size, 2)
    if not candidates:
        return min_size - (min_size % 2)
    return rng.choice(candidates)


def place_rooms(grid: Grid, options: RoomOptions, room_tile: Tile = FLOOR, rng=None) -> List[Room]:
    """Rejection-sample non-overlapping rooms onto the grid.

    Rooms start on odd coordinates and span an even extent, so they cover
    odd..odd inclusive and the even ring around them stays rock. A slot that
    runs out of attempts is skipped; the caller gets however many rooms fit.
    """
    if rng is None:
        rng = random.Random()
    options.validate()
    rooms: List[Room] = []
    if grid.width < 3 or grid.height < 3:
        return rooms
    max_x = grid.width - 2
    max_y = grid.height - 2
    for _ in range(options.max_rooms):
        for _attempt in range(options.max_attempts):
            x = _random_odd(rng, max_x)
            x_extent = min(_random_even_extent(rng, options.min_size, options.max_size), max_x - x)
            y = _random_odd(rng, max_y)
            y_extent = min(_random_even_extent(rng, options.min_size, options.max_size), max_y - y)
            room = Room(x, y, x_extent + 1, y_extent + 1)
            if any(not grid.is_empty(ix, iy) for ix, iy in room.cells()):
                continue
            for ix, iy in room.cells():
                grid.set_tile(ix, iy, room_tile)
                room.tiles.append((ix, iy))
            rooms.append(room)
            break
    return rooms


__all__ = ["Room", "place_rooms"]
