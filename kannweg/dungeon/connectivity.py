"""Region merging (door insertion) and connectivity checks.

Rooms and maze components start out as disjoint regions held in an arena
with stable integer ids. A wall tile whose opposite neighbours belong to two
different regions is a connector; opening it as a door unions the two
regions. The scan walks the interior in a shuffled order so doors are not
biased toward one side of the map.
"""
from __future__ import annotations

import random
from collections import deque
from typing import Dict, List, NamedTuple, Optional, Sequence, Set

from .cells import Coord2D, Region
from .grid import Grid
from .tiles import DOOR, EMPTY, Tile


class RegionSet:
    """Arena of regions plus a disjoint-set forest over their ids."""

    def __init__(self, regions: Sequence[Region], width: int, height: int):
        self.regions: List[Region] = list(regions)
        self.parent = list(range(len(self.regions)))
        self.components = len(self.regions)
        self.owner: List[List[Optional[int]]] = [[None] * height for _ in range(width)]
        for rid, tiles in enumerate(self.regions):
            for x, y in tiles:
                self.owner[x][y] = rid

    def find(self, a: int) -> int:
        parent = self.parent
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    def union(self, keep: int, absorb: int) -> bool:
        rk, ra = self.find(keep), self.find(absorb)
        if rk == ra:
            return False
        self.parent[ra] = rk
        self.components -= 1
        return True

    def owner_at(self, coord: Coord2D) -> Optional[int]:
        x, y = coord
        return self.owner[x][y]


class ConnectResult(NamedTuple):
    doors: List[Coord2D]
    regions_remaining: int
    extra_doors: int


def connect_regions(
    grid: Grid,
    rooms: Sequence[Region],
    corridors: Sequence[Region],
    door_tile: Tile = DOOR,
    rng=None,
    retain_chance: float = 0.4,
) -> ConnectResult:
    """Open doors until every room and corridor component is one region.

    When a door merges region ``b`` into ``a``, ``b`` stays open with
    probability ``retain_chance`` and may receive one further door later,
    which gives rooms a second entrance. Connectors whose two sides belong to
    the same base region are never opened.
    """
    if rng is None:
        rng = random.Random()
    regions = RegionSet(list(rooms) + list(corridors), grid.width, grid.height)
    doors: List[Coord2D] = []
    extra_doors = 0
    retained: Set[int] = set()
    opened: Set[Coord2D] = set()
    if regions.components <= 1:
        return ConnectResult(doors, regions.components, 0)

    xs = list(range(1, grid.width - 1))
    ys = list(range(1, grid.height - 1))
    rng.shuffle(xs)
    rng.shuffle(ys)

    def open_door(x: int, y: int) -> bool:
        if (x, y) in opened:
            return False
        grid.set_tile(x, y, door_tile)
        doors.append((x, y))
        opened.add((x, y))
        return True

    def try_pair(x: int, y: int, a: Optional[int], b: Optional[int]) -> None:
        nonlocal extra_doors
        if a is None or b is None or a == b:
            return
        if regions.union(a, b):
            open_door(x, y)
            if rng.random() < retain_chance:
                retained.add(b)
            return
        for rid in (a, b):
            if rid in retained:
                if open_door(x, y):
                    extra_doors += 1
                if rng.random() >= retain_chance:
                    retained.discard(rid)
                return

    done = False
    for x in xs:
        for y in ys:
            if grid.tile_at(x, y) is not EMPTY:
                continue
            # horizontal and vertical pairs are independent; one door tile may join both
            try_pair(x, y, regions.owner_at((x - 1, y)), regions.owner_at((x + 1, y)))
            try_pair(x, y, regions.owner_at((x, y - 1)), regions.owner_at((x, y + 1)))
            if regions.components == 1 and not retained:
                done = True
                break
        if done:
            break
    return ConnectResult(doors, regions.components, extra_doors)


def flood_reachable(grid: Grid, start: Coord2D) -> Set[Coord2D]:
    """All non-empty tiles 4-connected to ``start`` (empty start -> empty set)."""
    sx, sy = start
    if not grid.in_bounds(sx, sy) or grid.tile_at(sx, sy) is EMPTY:
        return set()
    q = deque([start])
    visited = {start}
    while q:
        cx, cy = q.popleft()
        for nx, ny in grid.get_neighbours((cx, cy), 1):
            if (nx, ny) not in visited and grid.tile_at(nx, ny) is not EMPTY:
                visited.add((nx, ny))
                q.append((nx, ny))
    return visited


def count_components(grid: Grid) -> int:
    """Number of 4-connected groups of non-empty tiles."""
    seen: Set[Coord2D] = set()
    components = 0
    for x, y, cell in grid.iter_tiles():
        if cell.tile is EMPTY or (x, y) in seen:
            continue
        components += 1
        seen |= flood_reachable(grid, (x, y))
    return components


def is_fully_connected(grid: Grid) -> bool:
    return count_components(grid) <= 1


def door_region_counts(grid: Grid, regions: Sequence[Region]) -> Dict[int, int]:
    """Doors bordering each region id (orthogonal adjacency)."""
    counts: Dict[int, int] = {}
    for rid, tiles in enumerate(regions):
        seen: Set[Coord2D] = set()
        for tx, ty in tiles:
            for nx, ny in grid.get_neighbours((tx, ty), 1):
                if grid.tile_at(nx, ny) is DOOR:
                    seen.add((nx, ny))
        counts[rid] = len(seen)
    return counts


__all__ = [
    "RegionSet",
    "ConnectResult",
    "connect_regions",
    "flood_reachable",
    "count_components",
    "is_fully_connected",
    "door_region_counts",
]
