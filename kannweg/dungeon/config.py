import os
from dataclasses import dataclass, field
from typing import Optional

from .errors import ConfigurationError


@dataclass
class RoomOptions:
    """Room placement budget. Fewer rooms than ``max_rooms`` is a valid outcome."""

    max_rooms: int = 10
    max_attempts: int = 125
    min_size: int = 4
    max_size: int = 10

    def validate(self) -> None:
        for name in ("max_rooms", "max_attempts"):
            if getattr(self, name) < 0:
                raise ConfigurationError(name, "must not be negative")
        if self.min_size < 2:
            raise ConfigurationError("min_size", "must be at least 2")
        if self.max_size <= self.min_size:
            raise ConfigurationError("max_size", "must be greater than min_size")


@dataclass
class DungeonConfig:
    width: int = 23
    height: int = 39
    rooms: RoomOptions = field(default_factory=RoomOptions)
    seed: Optional[int] = None
    # Chance that a region absorbed by a door stays open for one more entrance
    door_retain_chance: float = 0.4
    remove_dead_ends: bool = True
    prune_doors: bool = True

    def validate(self) -> None:
        self.rooms.validate()
        if not 0.0 <= self.door_retain_chance < 1.0:
            raise ConfigurationError("door_retain_chance", "must be in [0, 1)")

    @classmethod
    def from_env(cls, environ=None) -> "DungeonConfig":
        """Build a config from ``DUNGEON_*`` environment variables.

        Unset variables keep the dataclass defaults; malformed integers raise
        ConfigurationError naming the variable.
        """
        env = os.environ if environ is None else environ
        cfg = cls()
        int_map = {
            "DUNGEON_WIDTH": (cfg, "width"),
            "DUNGEON_HEIGHT": (cfg, "height"),
            "DUNGEON_SEED": (cfg, "seed"),
            "DUNGEON_MAX_ROOMS": (cfg.rooms, "max_rooms"),
            "DUNGEON_MAX_ATTEMPTS": (cfg.rooms, "max_attempts"),
            "DUNGEON_MIN_ROOM_SIZE": (cfg.rooms, "min_size"),
            "DUNGEON_MAX_ROOM_SIZE": (cfg.rooms, "max_size"),
        }
        for key, (target, attr) in int_map.items():
            raw = env.get(key)
            if raw is None or raw == "":
                continue
            try:
                setattr(target, attr, int(raw))
            except ValueError:
                raise ConfigurationError(key, f"expected an integer, got {raw!r}") from None
        flag_map = {
            "DUNGEON_REMOVE_DEAD_ENDS": "remove_dead_ends",
            "DUNGEON_PRUNE_DOORS": "prune_doors",
        }
        for key, attr in flag_map.items():
            if key in env:
                setattr(cfg, attr, env.get(key, "").lower() not in {"0", "false", "no", ""})
        if env.get("DUNGEON_DOOR_RETAIN_CHANCE"):
            try:
                cfg.door_retain_chance = float(env["DUNGEON_DOOR_RETAIN_CHANCE"])
            except ValueError:
                raise ConfigurationError("DUNGEON_DOOR_RETAIN_CHANCE", "expected a float") from None
        return cfg


__all__ = ["RoomOptions", "DungeonConfig"]
