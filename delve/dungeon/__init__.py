"""Public dungeon package interface.

BSP dungeon generation: partition the map, drop one room per leaf, join
sibling subtrees with L-shaped corridors, wrap floors in walls and pick the
two most distant rooms as start and boss.
"""

from .config import DungeonConfig  # noqa: F401
from .connectivity import flood_floor, floor_components, is_fully_connected  # noqa: F401
from .corridors import Corridor  # noqa: F401
from .errors import DungeonConfigError, DungeonGenerationError  # noqa: F401
from .grid import TileGrid  # noqa: F401
from .pipeline import DungeonGenerator, DungeonResult, generate_dungeon  # noqa: F401
from .rooms import Room  # noqa: F401
from .tiles import TILE_CHARS, TileType, char_to_type  # noqa: F401

EMPTY = TileType.EMPTY
WALL = TileType.WALL
FLOOR = TileType.FLOOR
DOOR = TileType.DOOR

__all__ = [
    "DungeonConfig",
    "DungeonConfigError",
    "DungeonGenerationError",
    "DungeonGenerator",
    "DungeonResult",
    "generate_dungeon",
    "TileGrid",
    "TileType",
    "TILE_CHARS",
    "char_to_type",
    "Room",
    "Corridor",
    "flood_floor",
    "floor_components",
    "is_fully_connected",
    "EMPTY",
    "WALL",
    "FLOOR",
    "DOOR",
]
