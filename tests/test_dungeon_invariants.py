import pytest

from delve.dungeon import DungeonConfig, generate_dungeon
from delve.dungeon.selection import center_distance
from tests.dungeon_test_utils import (
    EMPTY,
    FLOOR,
    SAMPLE_CONFIGS,
    all_of,
    bfs_floor,
    neighbors8,
    rects_overlap,
)

SEEDS = [1, 7, 42, 1337, 9001]


@pytest.mark.parametrize("cfg", SAMPLE_CONFIGS)
@pytest.mark.parametrize("seed", SEEDS)
def test_generated_dungeon_invariants(cfg, seed):
    res = generate_dungeon(cfg.with_seed(seed))
    tiles = res.tiles
    assert len(tiles) == cfg.height
    assert all(len(row) == cfg.width for row in tiles)

    # rooms are floor, disjoint and strictly inside the border
    for room in res.rooms:
        assert room.x >= 1 and room.y >= 1
        assert room.x + room.width <= cfg.width - 1
        assert room.y + room.height <= cfg.height - 1
        assert all(tiles[y][x] == FLOOR for x, y in room.cells())
    for i, a in enumerate(res.rooms):
        for b in res.rooms[i + 1:]:
            assert not rects_overlap(a, b)

    # no floor on the outer ring
    for x in range(cfg.width):
        assert tiles[0][x] != FLOOR and tiles[cfg.height - 1][x] != FLOOR
    for y in range(cfg.height):
        assert tiles[y][0] != FLOOR and tiles[y][cfg.width - 1] != FLOOR

    # one corridor per sibling join, all floor, no repeated coordinates
    assert len(res.corridors) == len(res.rooms) - 1
    for c in res.corridors:
        assert len(set(c.path)) == len(c.path)
        assert all(tiles[y][x] == FLOOR for x, y in c.path)

    # every floor tile reachable from the start room
    floors = all_of(tiles, FLOOR)
    assert bfs_floor(tiles, res.start_room.center) == floors

    # walls fully enclose the floor
    for x, y in floors:
        assert all(t != EMPTY for _, _, t in neighbors8(tiles, x, y))

    # start/boss come from the room list and are the farthest pair
    assert res.start_room in res.rooms and res.boss_room in res.rooms
    best = max(
        (center_distance(a, b) for i, a in enumerate(res.rooms) for b in res.rooms[i + 1:]),
        default=0.0,
    )
    assert center_distance(res.start_room, res.boss_room) == best
    assert res.metrics["floor_components"] == 1


def test_default_eighty_square_has_multiple_rooms():
    res = generate_dungeon(DungeonConfig(seed=42))
    assert (res.width, res.height) == (80, 80)
    assert len(res.rooms) >= 2
    assert res.start_room != res.boss_room
    # rooms keep a margin inside their leaves, so the first join always carves something
    assert len(res.corridors[0].path) > 0


@pytest.mark.parametrize(
    "cfg",
    [
        DungeonConfig(width=20, height=20, max_partition_size=18),
        DungeonConfig(width=13, height=13, max_partition_size=11, max_room_size=9),
    ],
)
def test_unsplittable_map_yields_single_room(cfg):
    for seed in (3, 4, 5):
        res = generate_dungeon(cfg.with_seed(seed))
        assert len(res.rooms) == 1
        assert res.corridors == []
        assert res.start_room == res.boss_room == res.rooms[0]
        assert res.metrics["partitions"] == 1


def test_zero_rooms_fails_loudly(monkeypatch):
    from delve.dungeon import DungeonGenerationError, pipeline

    monkeypatch.setattr(pipeline, "place_rooms", lambda *a, **k: [])
    with pytest.raises(DungeonGenerationError, match="no rooms"):
        generate_dungeon(DungeonConfig(seed=2))
