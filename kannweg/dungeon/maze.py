"""Randomized depth-first maze carving on the odd-cell lattice.

Every odd cell left empty after room placement becomes part of a perfect
maze. Steps are two tiles long; the even tile in between is opened as the
passage, so each component is a spanning tree over its cells.
"""
from __future__ import annotations

import random
from typing import List

from .cells import Coord2D, Region
from .grid import Grid
from .tiles import CORRIDOR, Tile


def _wall_between(a: Coord2D, b: Coord2D) -> Coord2D:
    (ax, ay), (bx, by) = a, b
    return (ax + (bx > ax) - (bx < ax), ay + (by > ay) - (by < ay))


def carve_component(grid: Grid, start: Coord2D, corridor_tile: Tile, rng) -> Region:
    """Grow one spanning tree from ``start`` and return its tile list.

    The list is ordered by carving: start cell first, then (wall, cell)
    pairs as they are opened.
    """
    grid.set_tile(start[0], start[1], corridor_tile)
    region: Region = [start]
    stack: List[Coord2D] = [start]
    while stack:
        current = stack.pop()
        unvisited = [n for n in grid.get_neighbours(current, 2) if grid.is_empty(*n)]
        if not unvisited:
            continue
        stack.append(current)
        chosen = rng.choice(unvisited)
        wx, wy = _wall_between(current, chosen)
        grid.set_tile(wx, wy, corridor_tile)
        grid.set_tile(chosen[0], chosen[1], corridor_tile)
        stack.append(chosen)
        region.append((wx, wy))
        region.append(chosen)
    return region


def carve_maze(grid: Grid, corridor_tile: Tile = CORRIDOR, rng=None) -> List[Region]:
    """Fill every unvisited odd cell with maze corridors.

    Returns one tile list per connected component; rooms fragment the carve
    space, so several components are normal.
    """
    if rng is None:
        rng = random.Random()
    corridors: List[Region] = []
    for x in range(1, grid.width, 2):
        for y in range(1, grid.height, 2):
            if grid.is_empty(x, y):
                corridors.append(carve_component(grid, (x, y), corridor_tile, rng))
    return corridors


__all__ = ["carve_maze", "carve_component"]
