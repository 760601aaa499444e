"""Fixture placement for finished levels (lights, air vents, oxygen tanks).

Works on an annotated grid: vents need the wall flags produced by
:func:`kannweg.dungeon.walls.annotate_walls` to know which room edges have a
wall to mount on.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .grid import Grid
from .tiles import CORRIDOR, EMPTY

CORRIDOR_LIGHT_STRIDE = 3
TANK_ROTATIONS = (0.0, 90.0, 180.0, 270.0)

# wall flag -> (vent rotation, sound emitter offset), checked in this order
VENT_MOUNTS: Tuple[Tuple[str, float, Tuple[float, float]], ...] = (
    ("up_left", 0.0, (0.0, -0.5)),
    ("right_up", 270.0, (0.5, 0.0)),
    ("down_left", 180.0, (0.0, 0.5)),
    ("left_up", 90.0, (-0.5, 0.0)),
)


@dataclass
class Fixture:
    kind: str
    x: int
    y: int
    room: Optional[int] = None
    rotation: float = 0.0
    sound_offset: Optional[Tuple[float, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        d = {"kind": self.kind, "x": self.x, "y": self.y, "rotation": self.rotation}
        if self.room is not None:
            d["room"] = self.room
        if self.sound_offset is not None:
            d["sound_offset"] = list(self.sound_offset)
        return d


@dataclass
class Fixtures:
    room_lights: List[Fixture] = field(default_factory=list)
    corridor_lights: List[Fixture] = field(default_factory=list)
    vents: List[Fixture] = field(default_factory=list)
    oxygen_tanks: List[Fixture] = field(default_factory=list)

    def all(self) -> List[Fixture]:
        return self.room_lights + self.corridor_lights + self.vents + self.oxygen_tanks

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "room_lights": [f.to_dict() for f in self.room_lights],
            "corridor_lights": [f.to_dict() for f in self.corridor_lights],
            "vents": [f.to_dict() for f in self.vents],
            "oxygen_tanks": [f.to_dict() for f in self.oxygen_tanks],
        }


def room_light_position(room_tiles) -> Tuple[int, int]:
    """Median tile of the sorted room tile list."""
    ordered = sorted(room_tiles)
    return ordered[len(ordered) // 2]


def room_edges(room_tiles) -> List[Tuple[int, int]]:
    ordered = sorted(room_tiles)
    min_x, min_y = ordered[0]
    max_x, max_y = ordered[-1]
    return [(x, y) for x, y in ordered if x in (min_x, max_x) or y in (min_y, max_y)]


def _place_vent(grid: Grid, room_index: int, tiles, rng) -> Optional[Fixture]:
    edges = room_edges(tiles)
    rng.shuffle(edges)
    for x, y in edges:
        walls = grid.cell(x, y).walls
        for flag, rotation, offset in VENT_MOUNTS:
            if getattr(walls, flag):
                return Fixture("air_vent", x, y, room_index, rotation, offset)
    return None


def place_fixtures(rooms, grid: Grid, rng=None, metrics: Optional[Dict[str, Any]] = None) -> Fixtures:
    """Choose fixture positions for every room plus corridor lighting.

    ``rooms`` is the list of room tile lists (``Level.rooms``); ``grid``
    should already be annotated. Rooms with no walled edge simply get no vent.
    """
    if rng is None:
        rng = random.Random()
    out = Fixtures()
    tile_count = 0
    for x, y, cell in grid.iter_tiles():
        if cell.tile is EMPTY:
            continue
        tile_count += 1
        if cell.tile is CORRIDOR and tile_count % CORRIDOR_LIGHT_STRIDE == 0:
            out.corridor_lights.append(Fixture("corridor_light", x, y))
    for i, tiles in enumerate(rooms):
        if not tiles:
            continue
        lx, ly = room_light_position(tiles)
        out.room_lights.append(Fixture("room_light", lx, ly, i))
        vent = _place_vent(grid, i, tiles, rng)
        if vent is not None:
            out.vents.append(vent)
        tx, ty = rng.choice(list(tiles))
        out.oxygen_tanks.append(Fixture("oxygen_tank", tx, ty, i, rng.choice(TANK_ROTATIONS)))
    if metrics is not None:
        metrics["fixtures_room_lights"] = len(out.room_lights)
        metrics["fixtures_corridor_lights"] = len(out.corridor_lights)
        metrics["fixtures_vents"] = len(out.vents)
        metrics["fixtures_oxygen_tanks"] = len(out.oxygen_tanks)
    return out


__all__ = ["Fixture", "Fixtures", "place_fixtures", "room_light_position", "room_edges", "VENT_MOUNTS"]
