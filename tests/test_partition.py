import random

import pytest

from delve.dungeon import DungeonConfig
from delve.dungeon.partition import PartitionTree, Rect, build_partition_tree, split_partition
from tests.dungeon_test_utils import SAMPLE_CONFIGS, ScriptedRandom


def _tree(rect, cfg, rng):
    tree = PartitionTree(rect)
    split_partition(tree, PartitionTree.ROOT, cfg, rng)
    return tree


def test_small_partition_is_leaf_without_draws():
    cfg = DungeonConfig()
    rng = ScriptedRandom()
    tree = _tree(Rect(0, 0, 24, 24), cfg, rng)
    assert len(tree) == 1
    assert tree.is_leaf(0)
    assert rng.random_calls == 0 and rng.randint_calls == []


def test_wide_partition_split_vertically_regardless_of_coin():
    cfg = DungeonConfig(min_partition_size=10, max_partition_size=25)
    # 0.9 would mean a horizontal split; the 30x20 aspect ratio (1.5) forces vertical
    rng = ScriptedRandom(randoms=[0.9], randints=[12])
    tree = _tree(Rect(0, 0, 30, 20), cfg, rng)
    assert rng.randint_calls == [(10, 20)]
    root = tree[0]
    assert tree[root.left].rect == Rect(0, 0, 12, 20)
    assert tree[root.right].rect == Rect(12, 0, 18, 20)
    assert len(tree) == 3


def test_tall_partition_split_horizontally():
    cfg = DungeonConfig(min_partition_size=10, max_partition_size=25)
    rng = ScriptedRandom(randoms=[0.1], randints=[11])
    tree = _tree(Rect(2, 3, 20, 30), cfg, rng)
    root = tree[0]
    assert tree[root.left].rect == Rect(2, 3, 20, 11)
    assert tree[root.right].rect == Rect(2, 14, 20, 19)


def test_square_partition_follows_coin():
    cfg = DungeonConfig(min_partition_size=10, max_partition_size=25)
    # each 26x13 half is then forced to split along its long side
    horizontal = _tree(Rect(0, 0, 26, 26), cfg, ScriptedRandom(randoms=[0.75, 0.5, 0.5], randints=[13, 13, 13]))
    assert horizontal[horizontal[0].left].rect == Rect(0, 0, 26, 13)
    vertical = _tree(Rect(0, 0, 26, 26), cfg, ScriptedRandom(randoms=[0.25, 0.5, 0.5], randints=[13, 13, 13]))
    assert vertical[vertical[0].left].rect == Rect(0, 0, 13, 26)


def test_degenerate_split_range_leaves_node_unsplit():
    cfg = DungeonConfig(min_partition_size=12, max_partition_size=20)
    rng = ScriptedRandom(randoms=[0.9])
    tree = _tree(Rect(0, 0, 22, 22), cfg, rng)
    # 22 - 12 = 10 <= 12: splitting abandoned after the orientation draw
    assert len(tree) == 1
    assert rng.random_calls == 1
    assert rng.randint_calls == []


def test_left_subtree_recurses_before_right():
    cfg = DungeonConfig(min_partition_size=10, max_partition_size=25)
    rng = ScriptedRandom(randoms=[0.9, 0.1], randints=[20, 15])
    tree = _tree(Rect(0, 0, 50, 20), cfg, rng)
    root = tree[0]
    # left 20x20 is a leaf; right 30x20 splits again
    assert tree.is_leaf(root.left)
    right = tree[root.right]
    assert not right.is_leaf
    assert tree[right.left].rect == Rect(20, 0, 15, 20)
    assert tree[right.right].rect == Rect(35, 0, 15, 20)
    assert [tree[i].rect for i in tree.leaves()] == [Rect(0, 0, 20, 20), Rect(20, 0, 15, 20), Rect(35, 0, 15, 20)]
    assert tree.depth() == 2


@pytest.mark.parametrize("cfg", SAMPLE_CONFIGS)
def test_tree_structure_invariants(cfg):
    for seed in range(8):
        root = Rect(1, 1, cfg.inset_width, cfg.inset_height)
        tree = build_partition_tree(root, cfg, random.Random(seed))
        for i in tree.walk():
            node = tree[i]
            if node.is_leaf:
                continue
            assert node.left is not None and node.right is not None
            left, right = tree[node.left], tree[node.right]
            # children tile the parent exactly along one axis
            assert left.width * left.height + right.width * right.height == node.width * node.height
            assert (left.x, left.y) == (node.x, node.y)
            for child in (left, right):
                assert child.width >= cfg.min_partition_size or child.width == node.width
                assert child.height >= cfg.min_partition_size or child.height == node.height
        # a full binary tree: internal nodes == leaves - 1
        assert len(tree.internal_nodes()) == len(tree.leaves()) - 1
        for i in tree.leaves():
            leaf = tree[i]
            if leaf.width >= cfg.max_partition_size or leaf.height >= cfg.max_partition_size:
                # only possible when the chosen axis was too short to split
                assert min(leaf.width, leaf.height) <= 2 * cfg.min_partition_size


def test_same_seed_same_tree():
    cfg = DungeonConfig()
    root = Rect(1, 1, 78, 78)
    a = build_partition_tree(root, cfg, random.Random(11)).to_dict()
    b = build_partition_tree(root, cfg, random.Random(11)).to_dict()
    assert a == b
