"""
project: kannweg
module: level_api.py
License: MIT

Level generation API routes.

Every endpoint builds (or reuses) a level from query parameters:

  seed, width, height, max_rooms, max_attempts, min_size, max_size

Unset parameters fall back to ``LEVEL_DEFAULTS`` in the app config. Invalid
values answer ``400 {"error": ..., "field": ...}``.
"""

import copy
import os
import random
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from kannweg.dungeon import ConfigurationError, Level, annotate_walls, coerce_seed, create_dungeon, place_fixtures
from kannweg.dungeon.grid import validate_dimensions
from kannweg.logging_utils import get_logger
from kannweg.utils.tile_compress import encode_tiles

_log = get_logger("level_api")

# Fixture placement uses its own stream so it never shifts the level layout
FIXTURE_SEED_SALT = 0x5EED_F1C7

# Simple in-process cache (seed, params) -> Level. Levels are frozen, so
# handing the same instance to concurrent requests is safe.
_level_cache = {}
_level_cache_lock = threading.Lock()

_INT_PARAMS = (
    ("width", None),
    ("height", None),
    ("max_rooms", "rooms"),
    ("max_attempts", "rooms"),
    ("min_size", "rooms"),
    ("max_size", "rooms"),
)


def _cache_key(config):
    r = config.rooms
    return (
        config.seed,
        config.width,
        config.height,
        (r.max_rooms, r.max_attempts, r.min_size, r.max_size),
        config.door_retain_chance,
        config.remove_dead_ends,
        config.prune_doors,
    )


def get_cached_level(config) -> Level:
    """Return the level for ``config`` (whose seed must be set), generating on a miss."""
    if os.environ.get("LEVEL_DISABLE_CACHE") == "1":
        return create_dungeon(config.width, config.height, config=config)
    key = _cache_key(config)
    with _level_cache_lock:
        level = _level_cache.get(key)
        if level is not None:
            return level
    level = create_dungeon(config.width, config.height, config=config)
    cap = current_app.config.get("LEVEL_CACHE_MAX", 8)
    with _level_cache_lock:
        _level_cache[key] = level
        while len(_level_cache) > cap:
            first_key = next(iter(_level_cache.keys()))
            if first_key == key:
                break
            _level_cache.pop(first_key, None)
    return level


def clear_level_cache() -> None:
    with _level_cache_lock:
        _level_cache.clear()


def _config_from_request():
    config = copy.deepcopy(current_app.config["LEVEL_DEFAULTS"])
    for name, group in _INT_PARAMS:
        raw = request.args.get(name)
        if raw is None or raw == "":
            continue
        try:
            value = int(raw)
        except ValueError:
            raise ConfigurationError(name, f"expected an integer, got {raw!r}") from None
        setattr(config.rooms if group == "rooms" else config, name, value)

    validate_dimensions(config.width, config.height)
    limits = (
        (config, "width", current_app.config.get("LEVEL_MAX_DIMENSION", 201)),
        (config, "height", current_app.config.get("LEVEL_MAX_DIMENSION", 201)),
        (config.rooms, "max_rooms", current_app.config.get("LEVEL_MAX_ROOMS", 64)),
        (config.rooms, "max_attempts", current_app.config.get("LEVEL_MAX_ATTEMPTS", 1000)),
    )
    for target, name, limit in limits:
        if getattr(target, name) > limit:
            raise ConfigurationError(name, f"must not exceed {limit}")
    config.validate()

    raw_seed = request.args.get("seed")
    if raw_seed is not None:
        config.seed = coerce_seed(raw_seed)
    elif config.seed is None:
        config.seed = coerce_seed(None)
    return config


bp_level = Blueprint("level", __name__)


@bp_level.errorhandler(ConfigurationError)
def _configuration_error(exc):
    _log.debug(event="level_request_rejected", field=exc.field, error=exc.message)
    return jsonify({"error": exc.message, "field": exc.field}), 400


@bp_level.route("/api/level")
def level_json():
    """
    Return the generated level.
    Response: { seed, width, height, grid: [[type,...],...], rooms, room_rects, corridors, doors, metrics }

    ``compact=1`` delta-encodes room and corridor tile lists (see tile_compress).
    """
    level = get_cached_level(_config_from_request())
    encode = encode_tiles if request.args.get("compact") == "1" else None
    return jsonify(level.to_dict(encode=encode))


@bp_level.route("/api/level/ascii")
def level_ascii():
    level = get_cached_level(_config_from_request())
    resp = Response(level.to_ascii() + "\n", mimetype="text/plain")
    resp.headers["X-Level-Seed"] = str(level.seed)
    return resp


@bp_level.route("/api/level/fixtures")
def level_fixtures():
    """
    Return fixture placements for the level.
    Response: { seed, fixtures: {room_lights, corridor_lights, vents, oxygen_tanks}, counts }

    ``placements=1`` adds the wall/corner placements the fixtures were derived from.
    """
    level = get_cached_level(_config_from_request())
    # the cached grid is frozen and shared; wall flags go on a private copy
    annotation = annotate_walls(level.grid.copy())
    counts = {}
    fixtures = place_fixtures(
        level.rooms,
        annotation.grid,
        rng=random.Random(level.seed ^ FIXTURE_SEED_SALT),
        metrics=counts,
    )
    body = {"seed": level.seed, "fixtures": fixtures.to_dict(), "counts": counts}
    if request.args.get("placements") == "1":
        body["placements"] = [p.to_dict() for p in annotation.placements]
    return jsonify(body)


@bp_level.route("/api/level/seed", methods=["POST"])
def level_seed():
    """Coerce (or generate) a seed.

    Body JSON (all optional):
      { "seed": <int|str|null>, "regenerate": <bool> }
    - ``regenerate`` true or seed omitted/null => random seed.
    - int or string seed => deterministic value (strings are hashed).

    Response: { "seed": <int> }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    provided = data.get("seed")
    if data.get("regenerate") and provided is None:
        seed = coerce_seed(None)
    else:
        seed = coerce_seed(provided)
    return jsonify({"seed": seed})


__all__ = ["bp_level", "get_cached_level", "clear_level_cache"]
