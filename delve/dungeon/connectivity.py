"""Flood-fill helpers over FLOOR tiles (4-connected).

Used to record connectivity metrics after generation and by tests and
consumers that need to confirm every room is reachable from the start room.
"""
from __future__ import annotations

from collections import deque
from typing import List, Set, Tuple

from .grid import TileGrid
from .tiles import TileType

Coord2D = Tuple[int, int]
ORTHOGONAL = [(-1, 0), (1, 0), (0, -1), (0, 1)]


def flood_floor(grid: TileGrid, start: Coord2D) -> Set[Coord2D]:
    sx, sy = start
    if not grid.in_bounds(sx, sy) or grid.get(sx, sy) != TileType.FLOOR:
        return set()
    visited = {start}
    q = deque([start])
    while q:
        cx, cy = q.popleft()
        for dx, dy in ORTHOGONAL:
            nx, ny = cx + dx, cy + dy
            if (nx, ny) not in visited and grid.in_bounds(nx, ny) and grid.get(nx, ny) == TileType.FLOOR:
                visited.add((nx, ny))
                q.append((nx, ny))
    return visited


def floor_components(grid: TileGrid) -> List[Set[Coord2D]]:
    seen: Set[Coord2D] = set()
    components: List[Set[Coord2D]] = []
    for pos in grid.positions_of(TileType.FLOOR):
        if pos in seen:
            continue
        comp = flood_floor(grid, pos)
        seen |= comp
        components.append(comp)
    return components


def is_fully_connected(grid: TileGrid) -> bool:
    return len(floor_components(grid)) <= 1


__all__ = ["flood_floor", "floor_components", "is_fully_connected"]
