"""Compact encoding of region tile lists for API payloads.

Format:
  D:x0,y0|dx1,dy1|dx2,dy2|...

The first pair is absolute, every following pair is the delta from the
previous coordinate. Order is preserved (region lists are ordered by carving
and pruning relies on that order), so unlike a set encoding nothing is
sorted. Consecutive maze tiles are usually neighbours, which keeps most
deltas to a single digit.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

PREFIX = "D:"


def encode_tiles(tiles: Sequence[Tuple[int, int]]) -> str:
    """Delta-encode an ordered list of ``(x, y)`` pairs.

    An empty list encodes to ``"D:"``.
    """
    pieces = []
    prev_x, prev_y = None, None
    for x, y in tiles:
        if prev_x is None:
            pieces.append(f"{x},{y}")
        else:
            pieces.append(f"{x - prev_x},{y - prev_y}")
        prev_x, prev_y = x, y
    return PREFIX + "|".join(pieces)


def decode_tiles(data: str) -> List[Tuple[int, int]]:
    """Inverse of :func:`encode_tiles`.

    Raises ValueError on input without the ``D:`` prefix or with malformed
    pairs; callers decoding untrusted payloads should catch it.
    """
    if not data.startswith(PREFIX):
        raise ValueError("missing D: prefix")
    body = data[len(PREFIX):]
    if not body:
        return []
    coords: List[Tuple[int, int]] = []
    prev_x, prev_y = None, None
    for token in body.split("|"):
        x_s, y_s = token.split(",")
        dx, dy = int(x_s), int(y_s)
        if prev_x is None:
            x, y = dx, dy
        else:
            x, y = prev_x + dx, prev_y + dy
        coords.append((x, y))
        prev_x, prev_y = x, y
    return coords


__all__ = ["encode_tiles", "decode_tiles"]
