"""Pruning passes for level cleanup.

Removes corridor tiles that have become dead ends (three sides open to rock,
one side leading back into the maze). One pass can expose new dead ends, so
callers repeat until a pass removes nothing.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from .cells import Coord2D, Region
from .grid import Grid
from .tiles import EMPTY

DEAD_END_EMPTY_NEIGHBOURS = 3


def _is_dead_end(grid: Grid, x: int, y: int) -> bool:
    return grid.count_empty_neighbours(x, y) == DEAD_END_EMPTY_NEIGHBOURS


def prune_dead_ends(grid: Grid, corridors: Sequence[Region], doors: Optional[List[Coord2D]] = None) -> int:
    """Single pruning pass; returns number of tiles reset to rock.

    Each corridor list is walked in reverse so the most recently carved
    tiles (the leaves of the carving tree) go first. When ``doors`` is given,
    doors left dangling into rock are erased the same way.
    """
    removed = 0
    for region in corridors:
        for idx in range(len(region) - 1, -1, -1):
            x, y = region[idx]
            if _is_dead_end(grid, x, y):
                grid.set_tile(x, y, EMPTY)
                del region[idx]
                removed += 1
    if doors is not None:
        for idx in range(len(doors) - 1, -1, -1):
            x, y = doors[idx]
            if _is_dead_end(grid, x, y):
                grid.set_tile(x, y, EMPTY)
                del doors[idx]
                removed += 1
    return removed


def prune_until_fixed_point(
    grid: Grid, corridors: Sequence[Region], doors: Optional[List[Coord2D]] = None
) -> Tuple[int, int]:
    """Repeat :func:`prune_dead_ends` until it removes nothing.

    Returns (tiles removed, passes run including the final empty pass).
    Terminates because every productive pass shrinks the corridor count.
    """
    total = 0
    passes = 0
    while True:
        passes += 1
        removed = prune_dead_ends(grid, corridors, doors)
        total += removed
        if removed == 0:
            return total, passes


def run_pruning(grid: Grid, corridors: Sequence[Region], doors: List[Coord2D], metrics: Dict[str, Any], *, prune_doors: bool = True) -> None:
    """Prune to the fixed point and record counts in ``metrics``."""
    before = sum(len(r) for r in corridors)
    doors_before = len(doors)
    removed, passes = prune_until_fixed_point(grid, corridors, doors if prune_doors else None)
    metrics["dead_ends_pruned"] = before - sum(len(r) for r in corridors)
    metrics["doors_pruned"] = doors_before - len(doors)
    metrics["prune_passes"] = passes
    metrics["tiles_pruned"] = removed


__all__ = ["prune_dead_ends", "prune_until_fixed_point", "run_pruning"]
