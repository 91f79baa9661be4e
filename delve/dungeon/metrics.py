from typing import Any, Dict


def init_metrics() -> Dict[str, Any]:
    return {
        'partitions': 0,
        'leaves': 0,
        'tree_depth': 0,
        'rooms': 0,
        'corridors': 0,
        'corridor_tiles': 0,
        'walls_inferred': 0,
        'tiles_floor': 0,
        'tiles_wall': 0,
        'tiles_empty': 0,
        'floor_components': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
