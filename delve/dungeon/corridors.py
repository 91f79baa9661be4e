"""Corridor carving between sibling BSP subtrees.

Each internal node of the partition tree joins its two children with one
L-shaped corridor running from the left child's representative room to the
right child's. The representative of a subtree is the first room found by a
depth-first search that always tries the left child first, so a subtree is
always anchored on its leftmost leaf. On lopsided trees this can produce
long or crossing corridors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .grid import TileGrid
from .partition import PartitionTree
from .rooms import Room
from .tiles import TileType


@dataclass(frozen=True)
class Corridor:
    start_room: int
    end_room: int
    path: Tuple[Tuple[int, int], ...]

    def __len__(self) -> int:
        return len(self.path)

    def to_dict(self) -> dict:
        return {
            "start_room": self.start_room,
            "end_room": self.end_room,
            "path": [list(p) for p in self.path],
        }


def representative_room(tree: PartitionTree, index: int, rooms: Sequence[Room]) -> Optional[Room]:
    for i in tree.walk(index):
        room_id = tree[i].room
        if room_id is not None:
            return rooms[room_id]
    return None


def carve_corridor(a: Room, b: Room, grid: TileGrid) -> Corridor:
    """Walk from a's center to b's center, x first then y, flooring as we go.

    Only tiles that were not already FLOOR are recorded, so the path never
    repeats a coordinate and never includes room interiors. The starting
    center itself is never stepped onto.
    """
    x, y = a.center
    tx, ty = b.center
    path: List[Tuple[int, int]] = []
    while x != tx or y != ty:
        if x != tx:
            x += 1 if x < tx else -1
        else:
            y += 1 if y < ty else -1
        if grid.get(x, y) != TileType.FLOOR:
            grid.set(x, y, TileType.FLOOR)
            path.append((x, y))
    return Corridor(a.id, b.id, tuple(path))


def connect_partitions(tree: PartitionTree, rooms: Sequence[Room], grid: TileGrid) -> List[Corridor]:
    corridors: List[Corridor] = []
    _connect(tree, PartitionTree.ROOT, rooms, grid, corridors)
    return corridors


def _connect(tree: PartitionTree, index: int, rooms: Sequence[Room], grid: TileGrid, corridors: List[Corridor]) -> None:
    node = tree[index]
    if node.left is None or node.right is None:
        return
    _connect(tree, node.left, rooms, grid, corridors)
    _connect(tree, node.right, rooms, grid, corridors)
    left_room = representative_room(tree, node.left, rooms)
    right_room = representative_room(tree, node.right, rooms)
    if left_room is not None and right_room is not None:
        corridors.append(carve_corridor(left_room, right_room, grid))


__all__ = ["Corridor", "carve_corridor", "connect_partitions", "representative_room"]
