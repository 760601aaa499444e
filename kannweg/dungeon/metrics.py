from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'rooms_attempted': 0,
        'rooms_placed': 0,
        'corridor_components': 0,
        'regions_initial': 0,
        'regions_remaining': 0,
        'doors_created': 0,
        'extra_doors': 0,
        'dead_ends_pruned': 0,
        'doors_pruned': 0,
        'prune_passes': 0,
        'tiles_pruned': 0,
        'connected': False,
        'runtime_ms': 0.0,
    }


def count_tiles(grid) -> Dict[str, int]:
    """Per-kind tile totals keyed ``tiles_<kind>``."""
    from .tiles import Tile, tile_to_type

    counts = {f"tiles_{tile_to_type(t)}": 0 for t in Tile}
    for _, _, cell in grid.iter_tiles():
        counts[f"tiles_{tile_to_type(cell.tile)}"] += 1
    return counts
