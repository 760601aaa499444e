"""Pipeline orchestration for level generation.

Runs the structural phases strictly in order (each reads the settled tile
state of the previous one):

    rooms -> maze -> doors -> dead-end pruning

then freezes the grid and hands a :class:`Level` to the caller. All
randomness flows from a single ``random.Random`` passed to every phase, so a
seed reproduces a level exactly.
"""
from __future__ import annotations

import random
import time
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..logging_utils import get_logger
from .cells import Coord2D, LevelCell, Region
from .config import DungeonConfig, RoomOptions
from .connectivity import connect_regions, count_components
from .grid import Grid
from .maze import carve_maze
from .metrics import count_tiles, init_metrics
from .pruning import run_pruning
from .rooms import Room, place_rooms
from .seeds import random_seed
from .tiles import CORRIDOR, DOOR, FLOOR, Tile, tile_to_type

_log = get_logger("dungeon")


class Level:
    """Finished level: frozen grid plus region membership and metrics."""

    def __init__(
        self,
        grid: Grid,
        room_rects: List[Room],
        corridors: List[Region],
        doors: List[Coord2D],
        seed: Optional[int],
        metrics: Dict[str, Any],
    ):
        self.grid = grid
        self.room_rects = room_rects
        self.corridors = corridors
        self.doors = doors
        self.seed = seed
        self.metrics = metrics

    @property
    def rooms(self) -> List[Region]:
        return [r.tiles for r in self.room_rects]

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def tile_at(self, x: int, y: int) -> Tile:
        return self.grid.tile_at(x, y)

    def iter_tiles(self) -> Iterator[Tuple[int, int, LevelCell]]:
        return self.grid.iter_tiles()

    def get_neighbours(self, coord: Coord2D, step: int = 1) -> List[Coord2D]:
        return self.grid.get_neighbours(coord, step)

    def is_walkable(self, x: int, y: int) -> bool:
        return self.grid.in_bounds(x, y) and self.grid.tile_at(x, y).walkable

    def to_ascii(self) -> str:
        return "\n".join(self.grid.to_rows())

    def to_dict(self, encode=None) -> Dict[str, Any]:
        """JSON-ready view; grid rows are row-major (``grid[y][x]``).

        ``encode`` optionally maps each region tile list to a compact form.
        """
        enc = encode or (lambda tiles: [list(t) for t in tiles])
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "grid": [[tile_to_type(self.grid.tile_at(x, y)) for x in range(self.width)] for y in range(self.height)],
            "rooms": [enc(r) for r in self.rooms],
            "room_rects": [{"x": r.x, "y": r.y, "w": r.w, "h": r.h} for r in self.room_rects],
            "corridors": [enc(c) for c in self.corridors],
            "doors": [list(d) for d in self.doors],
            "metrics": self.metrics,
        }


def create_dungeon(
    width: int,
    height: int,
    room_options: Optional[RoomOptions] = None,
    room_tile: Tile = FLOOR,
    corridor_tile: Tile = CORRIDOR,
    *,
    door_tile: Tile = DOOR,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    config: Optional[DungeonConfig] = None,
) -> Level:
    """Generate one level.

    Raises ConfigurationError for even/non-positive dimensions or invalid
    room options. Everything else degrades softly: fewer rooms or (should
    it ever happen) a residual disconnected region are reported in
    ``Level.metrics`` and logged.
    """
    if config is None:
        config = DungeonConfig(width=width, height=height, rooms=room_options or RoomOptions(), seed=seed)
    else:
        config.width, config.height = width, height
        if room_options is not None:
            config.rooms = room_options
        if seed is not None:
            config.seed = seed
    config.validate()
    grid = Grid(config.width, config.height)
    if rng is None:
        # 0 is a valid deterministic seed; None => random
        if config.seed is None:
            config.seed = random_seed()
        rng = random.Random(config.seed)

    metrics: Dict[str, Any] = init_metrics()
    phase_times: Dict[str, int] = {}
    start = time.perf_counter()

    def _phase(label, fn, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        phase_times[label] = int((time.perf_counter() - ps) * 1000)
        return r

    rooms = _phase("place_rooms", place_rooms, grid, config.rooms, room_tile, rng)
    metrics["rooms_attempted"] = config.rooms.max_rooms
    metrics["rooms_placed"] = len(rooms)
    if len(rooms) < config.rooms.max_rooms:
        _log.debug(event="rooms_budget_short", placed=len(rooms), attempted=config.rooms.max_rooms, seed=config.seed)

    corridors = _phase("carve_maze", carve_maze, grid, corridor_tile, rng)
    metrics["corridor_components"] = len(corridors)
    metrics["regions_initial"] = len(rooms) + len(corridors)

    result = _phase(
        "connect_regions",
        connect_regions,
        grid,
        [r.tiles for r in rooms],
        corridors,
        door_tile,
        rng,
        config.door_retain_chance,
    )
    doors = list(result.doors)
    metrics["doors_created"] = len(doors)
    metrics["extra_doors"] = result.extra_doors
    metrics["regions_remaining"] = result.regions_remaining

    if config.remove_dead_ends:
        _phase("prune_dead_ends", run_pruning, grid, corridors, doors, metrics, prune_doors=config.prune_doors)
        corridors = [c for c in corridors if c]

    grid.freeze()
    components = count_components(grid)
    metrics["connected"] = components <= 1
    if components > 1:
        _log.warn(event="level_disconnected", seed=config.seed, components=components)
    metrics.update(count_tiles(grid))
    metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
    metrics["phase_ms"] = phase_times
    _log.info(
        event="level_generated",
        seed=config.seed,
        width=grid.width,
        height=grid.height,
        rooms=len(rooms),
        corridors=len(corridors),
        doors=len(doors),
        runtime_ms=metrics["runtime_ms"],
    )
    return Level(grid, rooms, corridors, doors, config.seed, metrics)


__all__ = ["Level", "create_dungeon"]
