import random
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .config import ROOM_MARGIN, DungeonConfig
from .grid import TileGrid
from .partition import PartitionTree
from .tiles import TileType


@dataclass(frozen=True)
class Room:
    id: int
    x: int
    y: int
    width: int
    height: int

    @property
    def center_x(self) -> int:
        return self.x + self.width // 2

    @property
    def center_y(self) -> int:
        return self.y + self.height // 2

    @property
    def center(self) -> Tuple[int, int]:
        return (self.center_x, self.center_y)

    @property
    def area(self) -> int:
        return self.width * self.height

    def cells(self) -> Iterator[Tuple[int, int]]:
        for iy in range(self.y, self.y + self.height):
            for ix in range(self.x, self.x + self.width):
                yield ix, iy

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "center_x": self.center_x,
            "center_y": self.center_y,
        }


def place_rooms(tree: PartitionTree, grid: TileGrid, config: DungeonConfig, rng: random.Random) -> List[Room]:
    """Carve one room per leaf partition, depth-first, left before right.

    Room edges are drawn from ``[min_room_size, min(partition_edge - 2*margin, max_room_size)]``
    (width first, then height) and the room is centered in its leaf with
    floor division. Tiles are written as FLOOR immediately; the room id is its
    index in the returned list and is recorded on the leaf.
    """
    rooms: List[Room] = []
    for index in tree.leaves():
        leaf = tree[index]
        room_w = rng.randint(config.min_room_size, min(leaf.width - 2 * ROOM_MARGIN, config.max_room_size))
        room_h = rng.randint(config.min_room_size, min(leaf.height - 2 * ROOM_MARGIN, config.max_room_size))
        x = leaf.x + (leaf.width - room_w) // 2
        y = leaf.y + (leaf.height - room_h) // 2
        room = Room(len(rooms), x, y, room_w, room_h)
        grid.fill_rect(room.x, room.y, room.width, room.height, TileType.FLOOR)
        leaf.room = room.id
        rooms.append(room)
    return rooms


__all__ = ["Room", "place_rooms"]
