from delve.dungeon import TileGrid, TileType
from delve.dungeon.corridors import carve_corridor, connect_partitions, representative_room
from delve.dungeon.partition import PartitionTree, Rect
from delve.dungeon.rooms import Room

A = Room(0, 1, 1, 3, 3)
B = Room(1, 10, 5, 3, 3)


def _floor_rooms(grid, *rooms):
    for r in rooms:
        grid.fill_rect(r.x, r.y, r.width, r.height, TileType.FLOOR)


def test_corridor_walks_x_then_y_on_empty_grid():
    grid = TileGrid(20, 10)
    c = carve_corridor(A, B, grid)
    assert (c.start_room, c.end_room) == (0, 1)
    # 9 steps along x then 4 along y; the start center is not recorded
    assert len(c) == 13
    assert c.path[0] == (3, 2)
    assert c.path[8] == (11, 2)
    assert c.path[-1] == (11, 6)
    assert all(grid.get(x, y) == TileType.FLOOR for x, y in c.path)


def test_corridor_records_only_newly_carved_tiles():
    grid = TileGrid(20, 10)
    _floor_rooms(grid, A, B)
    c = carve_corridor(A, B, grid)
    expected = [(x, 2) for x in range(4, 12)] + [(11, 3), (11, 4)]
    assert list(c.path) == expected
    assert len(set(c.path)) == len(c.path)
    assert not any(A.contains(x, y) or B.contains(x, y) for x, y in c.path)


def test_corridor_between_touching_floor_is_empty():
    grid = TileGrid(20, 10)
    grid.fill_rect(0, 0, 20, 10, TileType.FLOOR)
    c = carve_corridor(A, B, grid)
    assert c.path == ()
    assert c.to_dict() == {"start_room": 0, "end_room": 1, "path": []}


def _three_leaf_tree():
    # root splits into a leaf (room 0) and an internal node holding rooms 1 and 2
    tree = PartitionTree(Rect(0, 0, 30, 10))
    left = tree.add(Rect(0, 0, 10, 10))
    right = tree.add(Rect(10, 0, 20, 10))
    tree[0].left, tree[0].right = left, right
    rl = tree.add(Rect(10, 0, 10, 10))
    rr = tree.add(Rect(20, 0, 10, 10))
    tree[right].left, tree[right].right = rl, rr
    rooms = [Room(0, 2, 2, 5, 5), Room(1, 12, 3, 5, 4), Room(2, 22, 2, 6, 6)]
    tree[left].room, tree[rl].room, tree[rr].room = 0, 1, 2
    return tree, rooms


def test_representative_room_is_leftmost_leaf():
    tree, rooms = _three_leaf_tree()
    assert representative_room(tree, 0, rooms) == rooms[0]
    assert representative_room(tree, tree[0].right, rooms) == rooms[1]
    assert representative_room(tree, tree[tree[0].right].right, rooms) == rooms[2]


def test_connect_partitions_post_order():
    tree, rooms = _three_leaf_tree()
    grid = TileGrid(30, 10)
    _floor_rooms(grid, *rooms)
    corridors = connect_partitions(tree, rooms, grid)
    # the deeper sibling pair is joined first, then root joins room 0 to room 1
    assert [(c.start_room, c.end_room) for c in corridors] == [(1, 2), (0, 1)]
    assert len(corridors) == len(rooms) - 1
