"""Public level generator interface.

    create_dungeon(width, height, RoomOptions(...)) -> Level

plus the individual phases (rooms, maze, doors, pruning) for callers and
tests that drive them one at a time, and the wall/fixture passes used by
renderers.
"""

from .cells import Coord2D, LevelCell, Region, WallFlags
from .config import DungeonConfig, RoomOptions
from .connectivity import ConnectResult, connect_regions, count_components, flood_reachable, is_fully_connected
from .errors import ConfigurationError, FrozenGridError
from .features import Fixtures, place_fixtures
from .grid import Grid, get_neighbours
from .maze import carve_maze
from .pipeline import Level, create_dungeon
from .pruning import prune_dead_ends, prune_until_fixed_point
from .rooms import Room, place_rooms
from .seeds import coerce_seed
from .tiles import CORRIDOR, DOOR, EMPTY, FLOOR, Tile
from .walls import WallAnnotation, annotate_walls

__all__ = [
    "Coord2D",
    "Region",
    "LevelCell",
    "WallFlags",
    "DungeonConfig",
    "RoomOptions",
    "ConnectResult",
    "connect_regions",
    "count_components",
    "flood_reachable",
    "is_fully_connected",
    "ConfigurationError",
    "FrozenGridError",
    "Fixtures",
    "place_fixtures",
    "Grid",
    "get_neighbours",
    "carve_maze",
    "Level",
    "create_dungeon",
    "prune_dead_ends",
    "prune_until_fixed_point",
    "Room",
    "place_rooms",
    "coerce_seed",
    "Tile",
    "EMPTY",
    "FLOOR",
    "CORRIDOR",
    "DOOR",
    "WallAnnotation",
    "annotate_walls",
]
