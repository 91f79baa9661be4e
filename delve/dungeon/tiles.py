# Tile constants centralized for modular imports
from enum import IntEnum


class TileType(IntEnum):
    EMPTY = 0
    WALL = 1
    FLOOR = 2
    DOOR = 3  # reserved; the generator never places doors


# Default ASCII glyphs used by the CLI and the /ascii endpoint only
TILE_CHARS = {
    TileType.EMPTY: " ",
    TileType.WALL: "#",
    TileType.FLOOR: ".",
    TileType.DOOR: "+",
}

_CHAR_TO_TILE = {ch: tile for tile, ch in TILE_CHARS.items()}


def char_to_type(ch: str) -> TileType:
    """Inverse of TILE_CHARS; unknown glyphs map to EMPTY."""
    return _CHAR_TO_TILE.get(ch, TileType.EMPTY)


__all__ = ["TileType", "TILE_CHARS", "char_to_type"]
