"""Wall and corner annotation for renderers.

Derived pass over a finished grid. It works out which tile edges face rock
and where corner pieces belong, records the placements, and marks the
half-edge wall flags so no edge receives geometry twice.

Only wall flags are written. The tile layout is left untouched, so a frozen
grid can be annotated. Callers that keep the generated level around should
annotate ``grid.copy()`` instead of the original.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

from .grid import Grid
from .tiles import EMPTY, FLOOR

WALL = "wall"
INNER_CORNER = "inner_corner"
OUTER_CORNER = "outer_corner"
FLOOR_PIECE = "floor"
CORRIDOR_PIECE = "corridor"


@dataclass(frozen=True)
class Placement:
    kind: str
    x: int
    y: int
    rotation: float = 0.0
    offset: Tuple[float, float] = (0.0, 0.0)

    def to_dict(self):
        return {"kind": self.kind, "x": self.x, "y": self.y, "rotation": self.rotation, "offset": list(self.offset)}


class WallAnnotation(NamedTuple):
    grid: Grid
    placements: List[Placement]

    def of_kind(self, kind: str) -> List[Placement]:
        return [p for p in self.placements if p.kind == kind]


def _sides(grid: Grid, x: int, y: int, want_empty: bool):
    """Which of left/right/up/down neighbours are (not) rock."""
    left = right = up = down = False
    for nx, ny in grid.get_neighbours((x, y), 1):
        if (grid.tile_at(nx, ny) is EMPTY) != want_empty:
            continue
        if nx < x:
            left = True
        elif nx > x:
            right = True
        elif ny < y:
            up = True
        else:
            down = True
    return left, right, up, down


def _outer_corners(grid: Grid, x: int, y: int, out: List[Placement]) -> None:
    left, right, up, down = _sides(grid, x, y, want_empty=False)
    if left and up:
        out.append(Placement(OUTER_CORNER, x, y, 0.0))
        grid.cell(x - 1, y).walls.right_up = True
        grid.cell(x, y - 1).walls.down_left = True
    if left and down:
        out.append(Placement(OUTER_CORNER, x, y, 90.0))
        grid.cell(x - 1, y).walls.right_down = True
        grid.cell(x, y + 1).walls.up_left = True
    if right and up:
        out.append(Placement(OUTER_CORNER, x, y, -90.0))
        grid.cell(x + 1, y).walls.left_up = True
        grid.cell(x, y - 1).walls.down_right = True
    if right and down:
        out.append(Placement(OUTER_CORNER, x, y, 180.0))
        grid.cell(x + 1, y).walls.left_down = True
        grid.cell(x, y + 1).walls.up_right = True


def _inner_corners(grid: Grid, x: int, y: int, out: List[Placement]) -> None:
    left, right, up, down = _sides(grid, x, y, want_empty=True)
    walls = grid.cell(x, y).walls
    if left and up:
        walls.up_left = walls.left_up = True
        out.append(Placement(INNER_CORNER, x, y, 0.0))
    if right and up:
        walls.up_right = walls.right_up = True
        out.append(Placement(INNER_CORNER, x, y, -90.0))
    if left and down:
        walls.down_left = walls.left_down = True
        out.append(Placement(INNER_CORNER, x, y, 90.0))
    if right and down:
        walls.down_right = walls.right_down = True
        out.append(Placement(INNER_CORNER, x, y, 180.0))


# (side, flag, rotation, offset) per wall half
_WALL_HALVES = {
    "left": (("left_up", 90.0, (0.0, -0.5)), ("left_down", 90.0, (0.0, 0.0))),
    "right": (("right_up", -90.0, (0.0, 0.0)), ("right_down", -90.0, (0.0, 0.5))),
    "up": (("up_left", 0.0, (0.0, 0.0)), ("up_right", 0.0, (0.5, 0.0))),
    "down": (("down_left", 180.0, (-0.5, 0.0)), ("down_right", 180.0, (0.0, 0.0))),
}


def _fill_walls(grid: Grid, x: int, y: int, out: List[Placement]) -> None:
    left, right, up, down = _sides(grid, x, y, want_empty=True)
    walls = grid.cell(x, y).walls
    for side, present in (("left", left), ("right", right), ("up", up), ("down", down)):
        if not present:
            continue
        for flag, rotation, offset in _WALL_HALVES[side]:
            if not getattr(walls, flag):
                out.append(Placement(WALL, x, y, rotation, offset))
                setattr(walls, flag, True)


def annotate_walls(grid: Grid) -> WallAnnotation:
    """Compute corner and wall placements, marking wall flags as it goes.

    Corners run first over the whole grid so that the wall fill afterwards
    skips halves a corner piece already covers.
    """
    placements: List[Placement] = []
    for x, y, cell in grid.iter_tiles():
        if cell.tile is EMPTY:
            _outer_corners(grid, x, y, placements)
        else:
            _inner_corners(grid, x, y, placements)
    for x, y, cell in grid.iter_tiles():
        if cell.tile is EMPTY:
            continue
        kind = FLOOR_PIECE if cell.tile is FLOOR else CORRIDOR_PIECE
        placements.append(Placement(kind, x, y))
        _fill_walls(grid, x, y, placements)
    return WallAnnotation(grid, placements)


def open_sides(grid: Grid, x: int, y: int) -> List[str]:
    """Edges of (x, y) that face rock, as 'left'/'right'/'up'/'down'."""
    left, right, up, down = _sides(grid, x, y, want_empty=True)
    return [name for name, present in (("left", left), ("right", right), ("up", up), ("down", down)) if present]


__all__ = [
    "Placement",
    "WallAnnotation",
    "annotate_walls",
    "open_sides",
    "WALL",
    "INNER_CORNER",
    "OUTER_CORNER",
    "FLOOR_PIECE",
    "CORRIDOR_PIECE",
]
