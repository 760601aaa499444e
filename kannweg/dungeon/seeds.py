"""Seed coercion shared by the HTTP layer, the CLI and diagnostics.

Seeds may arrive as ints, numeric strings or arbitrary phrases; all of them
are folded into a bounded non-negative int so the same input always yields
the same level.
"""
import hashlib
import random

from .errors import ConfigurationError

MAX_SEED = 9223372036854775807


def random_seed() -> int:
    return random.randint(0, 2**31 - 1)


def coerce_seed(value):
    """Convert a provided seed (int or str) into a bounded 64-bit int.

    ``None`` and blank strings produce a fresh random seed. Numeric strings
    are taken literally, anything else is hashed (first 8 bytes of sha256).
    """
    if value is None:
        return random_seed()
    if isinstance(value, bool):
        raise ConfigurationError("seed", "seed must be an integer or string")
    if isinstance(value, int):
        return value % MAX_SEED
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return random_seed()
        if s.isdigit():
            return int(s) % MAX_SEED
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % MAX_SEED
    raise ConfigurationError("seed", "seed must be an integer or string")


__all__ = ["coerce_seed", "random_seed", "MAX_SEED"]
