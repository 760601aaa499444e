#!/usr/bin/env python3
"""Level structural diagnostics for specific seeds.

Usage:
  python scripts/diagnose_seeds.py 292372 730727
  DIAG_WIDTH=41 DIAG_HEIGHT=41 python scripts/diagnose_seeds.py

If no seeds are provided as CLI args, seeds 1..50 are used.
Exits with non-zero status if structural issues are detected.
"""

from __future__ import annotations

import json
import os
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from kannweg.dungeon import EMPTY, count_components, create_dungeon, flood_reachable  # noqa: E402 import after path fix
from kannweg.dungeon.pruning import DEAD_END_EMPTY_NEIGHBOURS  # noqa: E402 import after path fix

DEFAULT_SEEDS = list(range(1, 51))


def analyze(level) -> dict:
    grid = level.grid
    walkable = [(x, y) for x, y, cell in grid.iter_tiles() if cell.tile is not EMPTY]
    reached = flood_reachable(grid, walkable[0]) if walkable else set()
    unreachable_rooms = [i for i, tiles in enumerate(level.rooms) if tiles and tiles[0] not in reached]
    dead_ends = [
        (x, y)
        for region in level.corridors
        for x, y in region
        if grid.count_empty_neighbours(x, y) == DEAD_END_EMPTY_NEIGHBOURS
    ]
    return {
        "components": count_components(grid),
        "unreachable_rooms": unreachable_rooms,
        "dead_ends": dead_ends,
    }


def run_for_seed(seed: int, width: int, height: int) -> dict:
    level = create_dungeon(width, height, seed=seed)
    res = analyze(level)
    issues = {
        "extra_components": max(0, res["components"] - 1),
        "unreachable_rooms": len(res["unreachable_rooms"]),
        "dead_ends": len(res["dead_ends"]),
    }
    stats = {k: level.metrics.get(k, 0) for k in ("rooms_placed", "doors_created", "extra_doors", "tiles_pruned", "prune_passes")}
    return {"seed": seed, "issues": issues, "stats": stats, "ok": all(v == 0 for v in issues.values())}


def main(argv: List[str]) -> int:
    os.environ.setdefault("KANNWEG_LOG_LEVEL", "warn")
    width = int(os.getenv("DIAG_WIDTH", "23"))
    height = int(os.getenv("DIAG_HEIGHT", "39"))
    seeds = [int(a) for a in argv] if argv else DEFAULT_SEEDS
    results = [run_for_seed(s, width, height) for s in seeds]
    failed = [r["seed"] for r in results if not r["ok"]]
    print(json.dumps({"width": width, "height": height, "results": results, "failed": failed}, indent=2))
    # Non-zero exit if any failure
    if failed:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
