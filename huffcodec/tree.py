"""Implicit Huffman tree stored as a flat, weight-sorted list.

The first ``n`` entries are the leaves in ascending weight order, the remaining
``n - 1`` are merge nodes in the order they were created (which is also
ascending weight order). The last entry is the root. No child pointers are
kept: the children of every merge node are recovered by replaying the merge
order backwards, see :func:`generate_codes`.
"""
from collections import deque
from typing import Any, Callable, List, Optional

from .errors import EmptyAlphabet


class Node:
    def __init__(self, weight, sym: Optional[Any] = None):
        # sym: None for merge nodes
        self.weight = weight
        self.sym = sym

    def __repr__(self):
        return f"Node({self.weight!r}, {self.sym!r})"

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return self.weight == other.weight and self.sym == other.sym


def weight_less(x: Node, y: Node) -> bool:
    return x.weight < y.weight


def merge_weights(x: Node, y: Node) -> Node:
    return Node(x.weight + y.weight)


def leaf_count(nodes: List[Node]) -> int:
    # a full binary tree with k nodes has k // 2 + 1 leaves
    return len(nodes) // 2 + 1 if nodes else 0


class Run:
    """Cursor over the positions ``first, first + step, ...`` stopping before ``last``."""

    def __init__(self, first: int, last: int, step: int = 1):
        self.first = first
        self.last = last
        self.step = step

    def __bool__(self):
        return self.first != self.last

    def pop(self) -> int:
        if self.first == self.last:
            raise IndexError("pop from an exhausted run")
        pos = self.first
        self.first += self.step
        return pos


def next_node(nodes: List[Node], run0: Run, run1: Run, less: Callable[[Node, Node], bool]) -> int:
    """Consume and return the position at the smaller front of the two runs.

    ``run1`` only wins when its front is strictly less than ``run0``'s.
    """
    if not run1:
        return run0.pop()
    if not run0:
        return run1.pop()
    if less(nodes[run1.first], nodes[run0.first]):
        return run1.pop()
    return run0.pop()


# ------------------------------------------
# 1) Sorted leaves -> flat Huffman array
# ------------------------------------------
def build_tree(
    leaves: List[Node],
    less: Callable[[Node, Node], bool] = weight_less,
    combine: Callable[[Node, Node], Node] = merge_weights,
) -> List[Node]:
    n = len(leaves)
    if n == 0:
        raise EmptyAlphabet("cannot build a Huffman tree from zero symbols")
    for prev, cur in zip(leaves, leaves[1:]):
        if less(cur, prev):
            raise ValueError("leaves must be sorted ascending by weight")

    nodes = list(leaves)
    if n == 1:
        # the lone leaf is its own root
        return nodes

    total = 2 * n - 1
    # positions 0 and 1 are the two smallest leaves
    nodes.append(combine(nodes[0], nodes[1]))
    leaf_run = Run(2, n)
    merge_run = Run(n, len(nodes))

    while len(nodes) < total:
        x = next_node(nodes, leaf_run, merge_run, less)
        y = next_node(nodes, leaf_run, merge_run, less)
        nodes.append(combine(nodes[x], nodes[y]))
        merge_run.last = len(nodes)
    return nodes


# ------------------------------------------------
# 2) Replay merge order root-down -> codewords
# ------------------------------------------------
def generate_codes(
    nodes: List[Node],
    leaves: int,
    sink: Callable[[int, str], None],
    less: Callable[[Node, Node], bool] = weight_less,
) -> None:
    """Call ``sink(position, codeword)`` once for every leaf of ``nodes``.

    ``less`` is the ascending order the array was merged in; the walk runs
    the merge backwards, so it prefers the merge run on ties. Merge nodes are
    visited in reverse creation order, and each one takes the next two
    positions of the reversed merge sequence as its children: the first gets
    ``prefix + "1"``, the second ``prefix + "0"``.
    """
    total = len(nodes)
    if total == 0:
        raise EmptyAlphabet("cannot generate codes for an empty tree")

    def downward(x: Node, y: Node) -> bool:
        return not less(x, y)

    leaf_run = Run(leaves - 1, -1, -1)
    merge_run = Run(total - 1, leaves - 1, -1)
    root = merge_run.pop() if merge_run else leaf_run.pop()

    pending = deque([(root, "")])
    while pending:
        pos, prefix = pending.popleft()
        if pos < leaves:
            sink(pos, prefix)
            continue
        x = next_node(nodes, leaf_run, merge_run, downward)
        y = next_node(nodes, leaf_run, merge_run, downward)
        pending.append((x, prefix + "1"))
        pending.append((y, prefix + "0"))
