import random

import pytest

from kannweg.dungeon import FLOOR, ConfigurationError, Grid, RoomOptions, place_rooms


def _overlap(a, b):
    return set(a.cells()) & set(b.cells())


@pytest.mark.parametrize("seed", [1, 7, 42, 1234])
def test_rooms_do_not_overlap_and_stay_inside(seed):
    g = Grid(41, 41)
    rooms = place_rooms(g, RoomOptions(), rng=random.Random(seed))
    assert rooms
    for i, a in enumerate(rooms):
        assert a.x >= 1 and a.y >= 1
        assert a.x + a.w - 1 <= g.width - 2
        assert a.y + a.h - 1 <= g.height - 2
        for b in rooms[i + 1:]:
            assert not _overlap(a, b)


@pytest.mark.parametrize("seed", [3, 99])
def test_rooms_sit_on_odd_lattice(seed):
    g = Grid(31, 31)
    for room in place_rooms(g, RoomOptions(), rng=random.Random(seed)):
        assert room.x % 2 == 1 and room.y % 2 == 1
        # odd..odd inclusive
        assert (room.x + room.w - 1) % 2 == 1
        assert (room.y + room.h - 1) % 2 == 1


def test_room_tiles_are_stamped_and_recorded():
    g = Grid(31, 31)
    rooms = place_rooms(g, RoomOptions(max_rooms=3), rng=random.Random(5))
    stamped = {(x, y) for x, y, c in g.iter_tiles() if c.tile is FLOOR}
    recorded = {t for r in rooms for t in r.tiles}
    assert stamped == recorded
    for r in rooms:
        assert len(r.tiles) == r.w * r.h
        assert all(r.contains(x, y) for x, y in r.tiles)


def test_budget_is_an_upper_bound():
    g = Grid(11, 11)
    rooms = place_rooms(g, RoomOptions(max_rooms=50, max_attempts=20), rng=random.Random(11))
    assert 0 < len(rooms) < 50


def test_zero_budget_places_nothing():
    g = Grid(21, 21)
    assert place_rooms(g, RoomOptions(max_rooms=0), rng=random.Random(1)) == []
    assert g.count(FLOOR) == 0


def test_tiny_grid_places_nothing():
    g = Grid(1, 1)
    assert place_rooms(g, RoomOptions(), rng=random.Random(1)) == []


def test_extent_clamped_near_border():
    g = Grid(5, 5)
    rooms = place_rooms(g, RoomOptions(max_rooms=1, min_size=4, max_size=10), rng=random.Random(2))
    assert len(rooms) == 1
    r = rooms[0]
    assert r.x + r.w - 1 <= 3 and r.y + r.h - 1 <= 3


@pytest.mark.parametrize(
    "opts,field",
    [
        (RoomOptions(min_size=1), "min_size"),
        (RoomOptions(min_size=6, max_size=6), "max_size"),
        (RoomOptions(max_rooms=-1), "max_rooms"),
        (RoomOptions(max_attempts=-5), "max_attempts"),
    ],
)
def test_invalid_room_options(opts, field):
    with pytest.raises(ConfigurationError) as exc:
        place_rooms(Grid(21, 21), opts, rng=random.Random(1))
    assert exc.value.field == field
