import random

import pytest

from kannweg.dungeon import (
    CORRIDOR,
    DOOR,
    EMPTY,
    FLOOR,
    ConfigurationError,
    DungeonConfig,
    FrozenGridError,
    Level,
    RoomOptions,
    Tile,
    create_dungeon,
)
from kannweg.utils.tile_compress import decode_tiles, encode_tiles
from tests.dungeon_test_utils import all_connected, snapshot_tiles


def test_same_seed_same_level():
    a = create_dungeon(31, 31, seed=777)
    b = create_dungeon(31, 31, seed=777)
    assert snapshot_tiles(a.grid) == snapshot_tiles(b.grid)
    assert a.rooms == b.rooms
    assert a.corridors == b.corridors
    assert a.doors == b.doors


def test_different_seeds_usually_differ():
    grids = {create_dungeon(31, 31, seed=s).to_ascii() for s in range(5)}
    assert len(grids) > 1


def test_injected_rng_drives_generation():
    a = create_dungeon(23, 23, rng=random.Random(5))
    b = create_dungeon(23, 23, rng=random.Random(5))
    assert a.to_ascii() == b.to_ascii()


def test_seed_zero_is_deterministic():
    a = create_dungeon(21, 21, seed=0)
    assert a.seed == 0
    assert a.to_ascii() == create_dungeon(21, 21, seed=0).to_ascii()


def test_missing_seed_is_generated_and_reported():
    level = create_dungeon(21, 21)
    assert isinstance(level.seed, int)
    assert level.to_ascii() == create_dungeon(21, 21, seed=level.seed).to_ascii()


@pytest.mark.parametrize("w,h", [(22, 39), (23, 38), (0, 0)])
def test_even_dimensions_raise(w, h):
    with pytest.raises(ConfigurationError):
        create_dungeon(w, h)


def test_bad_room_options_raise():
    with pytest.raises(ConfigurationError):
        create_dungeon(23, 39, RoomOptions(min_size=8, max_size=4))


def test_level_grid_is_frozen():
    level = create_dungeon(21, 21, seed=3)
    assert level.grid.frozen
    with pytest.raises(FrozenGridError):
        level.grid.set_tile(1, 1, EMPTY)


def test_finished_level_parity_and_border():
    level = create_dungeon(41, 31, seed=9)
    for x, y, cell in level.iter_tiles():
        if x in (0, level.width - 1) or y in (0, level.height - 1):
            assert cell.tile is EMPTY
    for room in level.room_rects:
        assert room.x % 2 == 1 and room.y % 2 == 1
    assert all_connected(level.grid)


def test_custom_tiles_are_used():
    level = create_dungeon(21, 21, room_tile=Tile.CORRIDOR, corridor_tile=Tile.FLOOR, seed=4)
    for tiles in level.rooms:
        assert all(level.tile_at(x, y) is CORRIDOR for x, y in tiles)
    for region in level.corridors:
        assert all(level.tile_at(x, y) is FLOOR for x, y in region)


def test_config_controls_pruning():
    kept = create_dungeon(31, 31, config=DungeonConfig(seed=12, remove_dead_ends=False))
    pruned = create_dungeon(31, 31, seed=12)
    assert kept.metrics["tiles_pruned"] == 0
    assert pruned.metrics["tiles_pruned"] > 0
    assert pruned.grid.count(CORRIDOR) < kept.grid.count(CORRIDOR)


def test_metrics_are_consistent():
    level = create_dungeon(31, 31, seed=21)
    m = level.metrics
    assert m["rooms_placed"] == len(level.rooms)
    assert m["rooms_attempted"] == 10
    assert m["connected"] is True
    assert m["regions_remaining"] == 1
    assert m["doors_created"] - m["doors_pruned"] == len(level.doors)
    assert m["tiles_door"] == len(level.doors)
    assert sum(v for k, v in m.items() if k.startswith("tiles_") and k != "tiles_pruned") == 31 * 31
    assert set(m["phase_ms"]) == {"place_rooms", "carve_maze", "connect_regions", "prune_dead_ends"}


def test_level_accessors():
    level = create_dungeon(21, 25, seed=1)
    assert isinstance(level, Level)
    assert (level.width, level.height) == (21, 25)
    rows = level.to_ascii().splitlines()
    assert len(rows) == 25 and all(len(r) == 21 for r in rows)
    x, y = level.doors[0] if level.doors else level.rooms[0][0]
    assert level.is_walkable(x, y)
    assert not level.is_walkable(0, 0)
    assert not level.is_walkable(-1, 5)
    assert level.get_neighbours((0, 0)) == [(0, 1), (1, 0)]
    assert level.tile_at(x, y) in (FLOOR, CORRIDOR, DOOR)


def test_to_dict_shape_and_compact_regions():
    level = create_dungeon(21, 21, seed=2)
    d = level.to_dict()
    assert d["width"] == 21 and d["height"] == 21 and d["seed"] == 2
    assert len(d["grid"]) == 21 and len(d["grid"][0]) == 21
    assert {c for row in d["grid"] for c in row} <= {"empty", "floor", "corridor", "door"}
    assert len(d["rooms"]) == len(d["room_rects"])
    compact = level.to_dict(encode=encode_tiles)
    assert all(isinstance(r, str) for r in compact["rooms"])
    assert [decode_tiles(r) for r in compact["corridors"]] == [list(c) for c in level.corridors]


def test_walkable_follows_tile_kind():
    level = create_dungeon(21, 21, seed=6)
    for x, y, cell in level.iter_tiles():
        assert level.is_walkable(x, y) == (cell.tile is not EMPTY)
    assert not Tile.EMPTY.walkable
    assert all(t.walkable for t in (Tile.FLOOR, Tile.CORRIDOR, Tile.DOOR))


def test_phases_without_rng_leave_global_random_alone():
    from kannweg.dungeon import Grid, annotate_walls, carve_maze, connect_regions, place_fixtures, place_rooms

    random.seed(1234)
    state = random.getstate()
    g = Grid(21, 21)
    rooms = [r.tiles for r in place_rooms(g, RoomOptions())]
    corridors = carve_maze(g)
    connect_regions(g, rooms, corridors)
    place_fixtures(rooms, annotate_walls(g).grid)
    assert random.getstate() == state
