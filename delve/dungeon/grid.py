from typing import Iterator, List, Tuple

from .tiles import TILE_CHARS, TileType

Coord2D = Tuple[int, int]


class TileGrid:
    """Fixed-size height x width matrix of TileType, addressed as (x, y).

    Storage is row-major (``rows[y][x]``) so ``rows`` can be handed to a
    renderer unchanged. One generation run owns a grid; phases receive it as
    an argument and never keep a reference after returning.
    """

    __slots__ = ("width", "height", "_rows")

    def __init__(self, width: int, height: int, fill: TileType = TileType.EMPTY):
        self.width = width
        self.height = height
        self._rows: List[List[TileType]] = [[fill for _ in range(width)] for _ in range(height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> TileType:
        return self._rows[y][x]

    def set(self, x: int, y: int, tile: TileType) -> None:
        self._rows[y][x] = tile

    def fill_rect(self, x: int, y: int, w: int, h: int, tile: TileType) -> None:
        for iy in range(y, y + h):
            row = self._rows[iy]
            for ix in range(x, x + w):
                row[ix] = tile

    def coords(self) -> Iterator[Coord2D]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def positions_of(self, tile: TileType) -> List[Coord2D]:
        return [(x, y) for y, row in enumerate(self._rows) for x, t in enumerate(row) if t == tile]

    def count(self, tile: TileType) -> int:
        return sum(row.count(tile) for row in self._rows)

    @property
    def rows(self) -> List[List[TileType]]:
        """Copy of the grid as a list of rows (height rows of width tiles)."""
        return [list(row) for row in self._rows]

    def to_ascii(self, chars=None) -> str:
        chars = chars or TILE_CHARS
        return "\n".join("".join(chars[t] for t in row) for row in self._rows)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TileGrid):
            return NotImplemented
        return self.width == other.width and self.height == other.height and self._rows == other._rows

    def __repr__(self) -> str:
        return f"TileGrid(width={self.width}, height={self.height})"


__all__ = ["TileGrid", "Coord2D"]
