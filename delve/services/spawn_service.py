"""Entity spawn planning for a generated dungeon.

Turns a DungeonResult into a plain-data spawn plan: where the player starts,
where the boss waits, and which enemies populate the remaining rooms. Nothing
here instantiates game entities; consumers map ``kind`` strings to their own
classes and use the world-space coordinates directly.

World coordinates are the pixel center of a tile:
``world = grid * tile_size + tile_size // 2``.

Stateless; every random decision is drawn from the ``rng`` passed in, so a
plan is reproducible alongside the dungeon it was planned for.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from delve.dungeon import DungeonResult, Room

ENEMY_WEIGHTS = {
    "slime": 1.0,
    "skeleton": 0.55,
    "demon": 0.25,
}
BOSS_KIND = "demon"
DEFAULT_TILE_SIZE = 16


@dataclass(frozen=True)
class Spawn:
    kind: str
    room_id: int
    tile_x: int
    tile_y: int
    world_x: int
    world_y: int


@dataclass
class SpawnPlan:
    tile_size: int
    player: Spawn
    boss: Spawn
    enemies: List[Spawn] = field(default_factory=list)

    def enemies_in(self, room_id: int) -> List[Spawn]:
        return [e for e in self.enemies if e.room_id == room_id]

    def to_dict(self) -> Dict:
        return {
            "tile_size": self.tile_size,
            "player": asdict(self.player),
            "boss": asdict(self.boss),
            "enemies": [asdict(e) for e in self.enemies],
        }


def tile_to_world(x: int, y: int, tile_size: int = DEFAULT_TILE_SIZE) -> Tuple[int, int]:
    half = tile_size // 2
    return x * tile_size + half, y * tile_size + half


def _spawn_at(kind: str, room: Room, x: int, y: int, tile_size: int) -> Spawn:
    wx, wy = tile_to_world(x, y, tile_size)
    return Spawn(kind, room.id, x, y, wx, wy)


def choose_enemy_kind(rng: random.Random, weights: Optional[Dict[str, float]] = None) -> str:
    """Weighted pick over ``weights`` (defaults to ENEMY_WEIGHTS)."""
    weights = weights or ENEMY_WEIGHTS
    kinds = list(weights.keys())
    total = sum(max(w, 0.0) for w in weights.values())
    if total <= 0:
        raise ValueError("enemy weights must contain at least one positive weight")
    pivot = rng.random() * total
    acc = 0.0
    for kind in kinds:
        acc += max(weights[kind], 0.0)
        if pivot < acc:
            return kind
    return kinds[-1]


def _interior_tiles(room: Room, reserved: Sequence[Tuple[int, int]]) -> List[Tuple[int, int]]:
    taken = set(reserved)
    return [(x, y) for x, y in room.cells() if (x, y) not in taken]


def plan_spawns(
    result: DungeonResult,
    rng: random.Random,
    tile_size: int = DEFAULT_TILE_SIZE,
    min_enemies: int = 1,
    max_enemies: int = 3,
    weights: Optional[Dict[str, float]] = None,
) -> SpawnPlan:
    """Build the spawn plan for ``result``.

    The player stands on the start room's center and the boss on the boss
    room's center. The start room is left free of enemies; every other room
    rolls ``rng.randint(min_enemies, max_enemies)`` enemies placed on distinct
    floor tiles of that room, never on a reserved center.
    Raises ValueError for non-positive tile sizes or an inverted enemy range.
    """
    if tile_size <= 0:
        raise ValueError(f"tile_size must be positive (got {tile_size})")
    if min_enemies < 0 or max_enemies < min_enemies:
        raise ValueError(f"invalid enemy range [{min_enemies}, {max_enemies}]")

    start, boss_room = result.start_room, result.boss_room
    player = _spawn_at("player", start, start.center_x, start.center_y, tile_size)
    boss = _spawn_at(BOSS_KIND, boss_room, boss_room.center_x, boss_room.center_y, tile_size)
    reserved = [start.center, boss_room.center]

    enemies: List[Spawn] = []
    for room in result.rooms:
        if room.id == start.id:
            continue
        count = rng.randint(min_enemies, max_enemies)
        free = _interior_tiles(room, reserved)
        for x, y in rng.sample(free, min(count, len(free))):
            enemies.append(_spawn_at(choose_enemy_kind(rng, weights), room, x, y, tile_size))
    return SpawnPlan(tile_size=tile_size, player=player, boss=boss, enemies=enemies)


__all__ = ["Spawn", "SpawnPlan", "plan_spawns", "tile_to_world", "choose_enemy_kind", "ENEMY_WEIGHTS", "BOSS_KIND"]
