from .grid import TileGrid
from .tiles import TileType

NEIGHBORHOOD = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)]


def infer_walls(grid: TileGrid) -> int:
    """Turn every EMPTY tile in the 8-neighbourhood of a FLOOR tile into WALL.

    Floor positions are snapshotted first so new walls never seed more walls.
    Returns the number of walls created.
    """
    created = 0
    for x, y in grid.positions_of(TileType.FLOOR):
        for dx, dy in NEIGHBORHOOD:
            nx, ny = x + dx, y + dy
            if grid.in_bounds(nx, ny) and grid.get(nx, ny) == TileType.EMPTY:
                grid.set(nx, ny, TileType.WALL)
                created += 1
    return created


__all__ = ["infer_walls", "NEIGHBORHOOD"]
