"""
project: kannweg
module: __init__.py
License: MIT

Flask application factory.

Configuration is sourced from environment variables (optionally loaded from
a ``.env`` file) with defaults suitable for development. A local
``instance/`` directory holds runtime files such as the rotating log.
"""

import os

from dotenv import load_dotenv
from flask import Flask

from kannweg.dungeon.config import DungeonConfig

__version__ = "0.4.0"

# Load .env if present so DUNGEON_* and KANNWEG_* settings can be supplied
# without exporting shell variables during development.
load_dotenv()


def create_app(overrides=None) -> Flask:
    """Build the Flask app and register the level blueprint.

    ``overrides`` is applied last, after the environment, so tests can pin
    individual settings.
    """
    app = Flask(__name__, instance_relative_config=True)

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # read-only checkouts still serve levels; only the file log is lost
        pass

    app.config.update(
        LEVEL_DEFAULTS=DungeonConfig.from_env(),
        LEVEL_MAX_DIMENSION=int(os.getenv("LEVEL_MAX_DIMENSION", "201")),
        LEVEL_MAX_ROOMS=int(os.getenv("LEVEL_MAX_ROOMS", "64")),
        LEVEL_MAX_ATTEMPTS=int(os.getenv("LEVEL_MAX_ATTEMPTS", "1000")),
        LEVEL_CACHE_MAX=int(os.getenv("LEVEL_CACHE_MAX", "8")),
    )
    if overrides:
        app.config.update(overrides)

    from kannweg.routes.level_api import bp_level

    app.register_blueprint(bp_level)
    return app


__all__ = ["create_app", "__version__"]
