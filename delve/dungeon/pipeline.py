"""Pipeline orchestration for dungeon generation.

Phases run in a fixed order against a single grid owned by the run:

    validate -> init grid -> partition -> place rooms -> connect -> walls -> select start/boss

All randomness flows through one ``random.Random`` instance. When the caller
only supplies a seed (or nothing), the generator creates that instance itself
and records the seed on the result so the run can be replayed exactly.
"""
from __future__ import annotations

import os
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .config import BORDER, DungeonConfig, draw_seed
from .connectivity import floor_components
from .corridors import Corridor, connect_partitions
from .errors import DungeonConfigError, DungeonGenerationError
from .grid import TileGrid
from .metrics import init_metrics
from .partition import PartitionTree, Rect, build_partition_tree
from .rooms import Room, place_rooms
from .selection import select_start_and_boss
from .tiles import TileType
from .walls import infer_walls

log = get_logger("delve.dungeon")


@dataclass
class DungeonResult:
    grid: TileGrid
    rooms: List[Room]
    corridors: List[Corridor]
    start_room: Room
    boss_room: Room
    seed: Optional[int] = None
    config: Optional[DungeonConfig] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def tiles(self) -> List[List[TileType]]:
        return self.grid.rows

    def to_ascii(self) -> str:
        return self.grid.to_ascii()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "tiles": [[int(t) for t in row] for row in self.grid.rows],
            "rooms": [r.to_dict() for r in self.rooms],
            "corridors": [c.to_dict() for c in self.corridors],
            "start_room": self.start_room.id,
            "boss_room": self.boss_room.id,
            "metrics": self.metrics,
        }


def _metrics_enabled() -> bool:
    """Timing collection flag: Flask app config wins over the environment."""
    from flask import current_app, has_app_context

    if has_app_context() and "DELVE_ENABLE_GENERATION_METRICS" in current_app.config:
        return bool(current_app.config["DELVE_ENABLE_GENERATION_METRICS"])
    return os.getenv("DELVE_ENABLE_GENERATION_METRICS", "1").lower() not in {"0", "false", "no", ""}


class DungeonGenerator:
    def __init__(self, config: Optional[DungeonConfig] = None, rng: Optional[random.Random] = None):
        self.config = config if config is not None else DungeonConfig()
        try:
            self.config.validate()
        except DungeonConfigError as e:
            log.warn(event="dungeon_config_rejected", error=str(e), fields=",".join(e.fields))
            raise
        if rng is None:
            if self.config.seed is None:
                self.config = self.config.with_seed(draw_seed())
            rng = random.Random(self.config.seed)
        self.seed = self.config.seed
        self.rng = rng
        self.enable_metrics = _metrics_enabled()

    def generate(self) -> DungeonResult:
        """Execute the ordered generation phases and assemble the result."""
        metrics = init_metrics()
        phase_times: Dict[str, int] = {}
        if self.enable_metrics:
            start = time.perf_counter()

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter()
                r = fn(*a, **k)
                phase_times[label] = int((time.perf_counter() - ps) * 1000)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        cfg = self.config
        grid = _phase("init_grid", TileGrid, cfg.width, cfg.height)
        root = Rect(BORDER, BORDER, cfg.inset_width, cfg.inset_height)
        tree: PartitionTree = _phase("partition", build_partition_tree, root, cfg, self.rng)
        rooms = _phase("place_rooms", place_rooms, tree, grid, cfg, self.rng)
        if not rooms:
            raise DungeonGenerationError(
                f"partitioning {cfg.width}x{cfg.height} produced no rooms (seed={self.seed})"
            )
        corridors = _phase("connect", connect_partitions, tree, rooms, grid)
        walls = _phase("infer_walls", infer_walls, grid)
        start_room, boss_room = _phase("select_rooms", select_start_and_boss, rooms)

        metrics["partitions"] = len(tree)
        metrics["leaves"] = len(tree.leaves())
        metrics["tree_depth"] = tree.depth()
        metrics["rooms"] = len(rooms)
        metrics["corridors"] = len(corridors)
        metrics["corridor_tiles"] = sum(len(c) for c in corridors)
        metrics["walls_inferred"] = walls
        metrics["tiles_floor"] = grid.count(TileType.FLOOR)
        metrics["tiles_wall"] = grid.count(TileType.WALL)
        metrics["tiles_empty"] = grid.count(TileType.EMPTY)
        metrics["floor_components"] = len(floor_components(grid))
        if self.enable_metrics:
            metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
            metrics["phase_ms"] = phase_times

        log.info(
            event="dungeon_generated",
            seed=self.seed,
            width=cfg.width,
            height=cfg.height,
            rooms=len(rooms),
            corridors=len(corridors),
            start_room=start_room.id,
            boss_room=boss_room.id,
            runtime_ms=metrics["runtime_ms"],
        )
        return DungeonResult(
            grid=grid,
            rooms=rooms,
            corridors=corridors,
            start_room=start_room,
            boss_room=boss_room,
            seed=self.seed,
            config=cfg,
            metrics=metrics,
        )


def generate_dungeon(config: Optional[DungeonConfig] = None, rng: Optional[random.Random] = None) -> DungeonResult:
    """Validate ``config`` and run one full generation.

    Raises DungeonConfigError before any grid is allocated when the config is
    invalid, and DungeonGenerationError if the run yields no rooms.
    """
    return DungeonGenerator(config, rng=rng).generate()


__all__ = ["DungeonGenerator", "DungeonResult", "generate_dungeon"]
