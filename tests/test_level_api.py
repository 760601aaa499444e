from kannweg.routes import level_api
from kannweg.utils.tile_compress import decode_tiles


def test_level_json_shape(client):
    resp = client.get("/api/level?seed=123&width=21&height=25")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["seed"] == 123
    assert data["width"] == 21 and data["height"] == 25
    assert len(data["grid"]) == 25 and len(data["grid"][0]) == 21
    for key in ("rooms", "room_rects", "corridors", "doors", "metrics"):
        assert key in data
    assert data["metrics"]["connected"] is True


def test_level_is_deterministic_per_seed(client):
    a = client.get("/api/level/ascii?seed=99").get_data(as_text=True)
    level_api.clear_level_cache()
    b = client.get("/api/level/ascii?seed=99").get_data(as_text=True)
    assert a == b


def test_string_seed_is_hashed(client):
    a = client.get("/api/level?seed=lantern").get_json()
    b = client.get("/api/level?seed=lantern").get_json()
    assert isinstance(a["seed"], int)
    assert a["seed"] == b["seed"]


def test_compact_regions(client):
    full = client.get("/api/level?seed=5").get_json()
    compact = client.get("/api/level?seed=5&compact=1").get_json()
    assert all(isinstance(r, str) for r in compact["rooms"])
    assert [[list(t) for t in decode_tiles(r)] for r in compact["rooms"]] == full["rooms"]


def test_ascii_endpoint(client):
    resp = client.get("/api/level/ascii?seed=7&width=15&height=11")
    assert resp.status_code == 200
    assert resp.mimetype == "text/plain"
    assert resp.headers["X-Level-Seed"] == "7"
    rows = resp.get_data(as_text=True).splitlines()
    assert len(rows) == 11 and all(len(r) == 15 for r in rows)


def test_fixtures_endpoint(client):
    resp = client.get("/api/level/fixtures?seed=11&placements=1")
    assert resp.status_code == 200
    data = resp.get_json()
    assert set(data["fixtures"]) == {"room_lights", "corridor_lights", "vents", "oxygen_tanks"}
    assert data["counts"]["fixtures_room_lights"] == len(data["fixtures"]["room_lights"])
    assert data["placements"]
    # annotation ran on a copy; the cached level keeps clear wall flags
    level = next(iter(level_api._level_cache.values()))
    assert not any(c.walls.any() for _, _, c in level.grid.iter_tiles())


def test_even_dimension_rejected(client):
    resp = client.get("/api/level?width=22")
    assert resp.status_code == 400
    data = resp.get_json()
    assert data["field"] == "width"
    assert "odd" in data["error"]


def test_non_integer_param_rejected(client):
    resp = client.get("/api/level?max_rooms=lots")
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "max_rooms"


def test_oversized_level_rejected(client, test_app):
    test_app.config["LEVEL_MAX_DIMENSION"] = 31
    resp = client.get("/api/level/ascii?width=33&height=21")
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "width"


def test_oversized_room_budget_rejected(client):
    resp = client.get("/api/level/ascii?seed=1&max_rooms=100000000")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "must not exceed 64", "field": "max_rooms"}
    resp = client.get("/api/level/ascii?seed=1&max_attempts=100000000")
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "max_attempts"
    assert level_api._level_cache == {}


def test_room_budget_limits_come_from_config(client, test_app):
    test_app.config["LEVEL_MAX_ROOMS"] = 4
    assert client.get("/api/level/ascii?seed=1&max_rooms=4").status_code == 200
    resp = client.get("/api/level/ascii?seed=1&max_rooms=5")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "must not exceed 4"


def test_invalid_room_options_rejected(client):
    resp = client.get("/api/level/fixtures?min_size=9&max_size=5")
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "max_size"


def test_cache_reuses_levels_and_is_capped(client, test_app):
    test_app.config["LEVEL_CACHE_MAX"] = 2
    client.get("/api/level?seed=1")
    first = dict(level_api._level_cache)
    client.get("/api/level/ascii?seed=1")
    assert dict(level_api._level_cache) == first
    client.get("/api/level?seed=2")
    client.get("/api/level?seed=3")
    assert len(level_api._level_cache) == 2


def test_cache_can_be_disabled(client, monkeypatch):
    monkeypatch.setenv("LEVEL_DISABLE_CACHE", "1")
    client.get("/api/level?seed=4")
    assert level_api._level_cache == {}


def test_seed_endpoint(client):
    assert client.post("/api/level/seed", json={"seed": 42}).get_json() == {"seed": 42}
    assert client.post("/api/level/seed", json={"seed": "42"}).get_json() == {"seed": 42}
    hashed = client.post("/api/level/seed", json={"seed": "moss"}).get_json()["seed"]
    assert hashed == client.post("/api/level/seed", json={"seed": "moss"}).get_json()["seed"]
    assert isinstance(client.post("/api/level/seed", json={"regenerate": True}).get_json()["seed"], int)
    assert isinstance(client.post("/api/level/seed").get_json()["seed"], int)


def test_seed_endpoint_rejects_bad_type(client):
    resp = client.post("/api/level/seed", json={"seed": [1, 2]})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "seed"
