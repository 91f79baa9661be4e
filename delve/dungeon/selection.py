import math
from typing import Optional, Sequence, Tuple

from .rooms import Room


def center_distance(a: Room, b: Room) -> float:
    return math.hypot(a.center_x - b.center_x, a.center_y - b.center_y)


def select_start_and_boss(rooms: Sequence[Room]) -> Tuple[Optional[Room], Optional[Room]]:
    """Return the (start, boss) pair whose centers are farthest apart.

    Pairs are scanned with i < j in list order and only a strictly larger
    distance replaces the current best, so ties keep the earliest pair and the
    lower-indexed room is always the start. A single room is both start and
    boss; an empty list yields ``(None, None)``. The pipeline rejects a run
    with no rooms before selection, so results always carry real rooms.
    """
    if not rooms:
        return None, None
    start, boss = rooms[0], rooms[-1]
    best = 0.0
    for i in range(len(rooms)):
        for j in range(i + 1, len(rooms)):
            dist = center_distance(rooms[i], rooms[j])
            if dist > best:
                best = dist
                start, boss = rooms[i], rooms[j]
    return start, boss


__all__ = ["select_start_and_boss", "center_distance"]
