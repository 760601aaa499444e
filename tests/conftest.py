import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from kannweg import create_app  # noqa: E402
from kannweg.dungeon import DungeonConfig  # noqa: E402
from kannweg.routes.level_api import clear_level_cache  # noqa: E402


@pytest.fixture()
def test_app(tmp_path, monkeypatch):
    # pin defaults so DUNGEON_* from a developer .env cannot leak in
    for key in list(os.environ):
        if key.startswith("DUNGEON_"):
            monkeypatch.delenv(key, raising=False)
    app = create_app({"TESTING": True, "LEVEL_DEFAULTS": DungeonConfig()})
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    clear_level_cache()
    yield app
    clear_level_cache()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch):
    """Keep generator info lines out of captured stdout unless a test opts in."""
    monkeypatch.setenv("KANNWEG_LOG_LEVEL", "warn")
    monkeypatch.delenv("KANNWEG_LOG_JSON", raising=False)


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: generation timing guardrails (deselect with -m 'not performance')")
