import json

from kannweg.dungeon import create_dungeon
from kannweg.logging_utils import get_logger


def test_key_value_format(monkeypatch, capsys):
    monkeypatch.setenv("KANNWEG_LOG_LEVEL", "info")
    get_logger("t").info(event="hello", seed=5, note="two words", skip=None)
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=info ts=")
    assert "event=hello" in out and "seed=5" in out
    assert "note=two_words" in out
    assert "skip=" not in out
    assert "logger=t" in out


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setenv("KANNWEG_LOG_LEVEL", "debug")
    monkeypatch.setenv("KANNWEG_LOG_JSON", "1")
    get_logger("t").debug(event="probe", rooms=3)
    rec = json.loads(capsys.readouterr().out)
    assert rec["event"] == "probe" and rec["rooms"] == 3 and rec["level"] == "debug"


def test_level_threshold_and_error_stream(monkeypatch, capsys):
    monkeypatch.setenv("KANNWEG_LOG_LEVEL", "warn")
    log = get_logger("t")
    log.info(event="hidden")
    log.error(event="boom")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=boom" in captured.err


def test_logger_cache():
    assert get_logger("same") is get_logger("same")


def test_generation_logs_summary(monkeypatch, capsys):
    monkeypatch.setenv("KANNWEG_LOG_LEVEL", "info")
    create_dungeon(15, 15, seed=8)
    out = capsys.readouterr().out
    assert "event=level_generated" in out
    assert "seed=8" in out


def test_short_room_budget_logged_at_debug(monkeypatch, capsys):
    monkeypatch.setenv("KANNWEG_LOG_LEVEL", "debug")
    # 3x3 grid has room for a single room at most
    create_dungeon(3, 3, seed=1)
    assert "event=rooms_budget_short" in capsys.readouterr().out
