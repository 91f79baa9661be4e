"""BSP partitioning.

The tree lives in a flat arena (``PartitionTree.nodes``); children are
referenced by integer index and node 0 is always the root. Leaves are the
nodes without children, and each one receives exactly one room later on.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional

from .config import DungeonConfig

# Aspect ratio at which the split axis stops being a coin flip
SPLIT_RATIO = 1.25


class Rect(NamedTuple):
    x: int
    y: int
    w: int
    h: int


@dataclass
class Partition:
    x: int
    y: int
    width: int
    height: int
    left: Optional[int] = None
    right: Optional[int] = None
    room: Optional[int] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


class PartitionTree:
    ROOT = 0

    def __init__(self, root: Rect):
        self.nodes: List[Partition] = [Partition(root.x, root.y, root.w, root.h)]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Partition:
        return self.nodes[index]

    def add(self, rect: Rect) -> int:
        self.nodes.append(Partition(rect.x, rect.y, rect.w, rect.h))
        return len(self.nodes) - 1

    def is_leaf(self, index: int) -> bool:
        return self.nodes[index].is_leaf

    def walk(self, index: int = ROOT) -> Iterator[int]:
        """Pre-order, left subtree before right subtree."""
        stack = [index]
        while stack:
            i = stack.pop()
            yield i
            node = self.nodes[i]
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def leaves(self, index: int = ROOT) -> List[int]:
        return [i for i in self.walk(index) if self.nodes[i].is_leaf]

    def internal_nodes(self, index: int = ROOT) -> List[int]:
        return [i for i in self.walk(index) if not self.nodes[i].is_leaf]

    def depth(self, index: int = ROOT) -> int:
        node = self.nodes[index]
        if node.is_leaf:
            return 0
        return 1 + max(self.depth(node.left), self.depth(node.right))

    def to_dict(self) -> List[dict]:
        return [
            {"x": n.x, "y": n.y, "width": n.width, "height": n.height, "left": n.left, "right": n.right, "room": n.room}
            for n in self.nodes
        ]


def build_partition_tree(root: Rect, config: DungeonConfig, rng: random.Random) -> PartitionTree:
    tree = PartitionTree(root)
    split_partition(tree, PartitionTree.ROOT, config, rng)
    return tree


def split_partition(tree: PartitionTree, index: int, config: DungeonConfig, rng: random.Random) -> None:
    """Recursively split ``tree[index]`` until both sides are under max_partition_size.

    A node too small to split on the chosen axis stays a leaf; that is the
    normal base case, not an error.
    """
    node = tree[index]
    if node.width < config.max_partition_size and node.height < config.max_partition_size:
        return

    split_h = rng.random() > 0.5
    if node.width > node.height and node.width / node.height >= SPLIT_RATIO:
        split_h = False
    elif node.height > node.width and node.height / node.width >= SPLIT_RATIO:
        split_h = True

    upper = (node.height if split_h else node.width) - config.min_partition_size
    if upper <= config.min_partition_size:
        return

    at = rng.randint(config.min_partition_size, upper)
    if split_h:
        left = Rect(node.x, node.y, node.width, at)
        right = Rect(node.x, node.y + at, node.width, node.height - at)
    else:
        left = Rect(node.x, node.y, at, node.height)
        right = Rect(node.x + at, node.y, node.width - at, node.height)
    node.left = tree.add(left)
    node.right = tree.add(right)

    split_partition(tree, node.left, config, rng)
    split_partition(tree, node.right, config, rng)


__all__ = ["Rect", "Partition", "PartitionTree", "build_partition_tree", "split_partition", "SPLIT_RATIO"]
