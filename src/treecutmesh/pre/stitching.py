"""
Neighbor Stitching
==================
Re-threads the neighbor graph after a cell has been subdivided.

Why is this file needed?
------------------------
The O(1) neighbor lookup only holds if every subdivision immediately links
the new children to each other and to the cells around their parent. This
module implements that protocol, and the adjacency query that routes around
the pointers the protocol leaves stale.

Stale pointers
--------------
When the parent's neighbor is a leaf, only the new children are pointed at
it; the neighbor keeps pointing at the (now internal) parent. Such pointers
are tolerated: `adjacent_leaves` descends from an internal target to the
leaves that actually touch the edge. A pointer may also reference a cell
finer than its owner; `neighbor_across` climbs back to the owner's level.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from treecutmesh.config import EDGE_TOLERANCE
from treecutmesh.model.cell import Cell, Direction, Quadrant

if TYPE_CHECKING:
    from treecutmesh.model.quadtree import QuadTree


# Children of a subdivided cell that sit on each side of it
_CHILDREN_ON_SIDE: dict[Direction, tuple[Quadrant, Quadrant]] = {
    Direction.SOUTH: (Quadrant.SW, Quadrant.SE),
    Direction.NORTH: (Quadrant.NW, Quadrant.NE),
    Direction.WEST: (Quadrant.SW, Quadrant.NW),
    Direction.EAST: (Quadrant.SE, Quadrant.NE),
}


def _coincide(a: float, b: float, scale: float) -> bool:
    return abs(a - b) <= EDGE_TOLERANCE * scale


def faces_touch(cell: Cell, other: Cell, direction: Direction) -> bool:
    """
    True if `other` lies across the `direction` edge of `cell` and shares a
    positive-length piece of it.
    """
    position, start, end = cell.edge(direction)
    other_position, other_start, other_end = other.edge(direction.opposite)
    scale = max(cell.width, cell.height, other.width, other.height)
    if not _coincide(position, other_position, scale):
        return False
    overlap = min(end, other_end) - max(start, other_start)
    return overlap > EDGE_TOLERANCE * scale


def link(first: Cell, second: Cell, direction: Direction) -> None:
    """Set a bidirectional pointer pair: `second` is across the `direction` edge of `first`."""
    first.set_neighbor(direction, second.index)
    second.set_neighbor(direction.opposite, first.index)


def neighbor_across(tree: QuadTree, cell: Cell, direction: Direction) -> Cell | None:
    """
    Resolve the `direction` pointer of `cell` to a cell no finer than `cell`.

    A bidirectional link made along a longer edge leaves the coarse side pointing
    at one fine cell only. Climbing to the ancestor at the level of `cell` gives
    the cell that covers the whole edge again.
    """
    neighbor = tree.neighbor_of(cell, direction)
    while neighbor is not None and neighbor.level > cell.level and neighbor.parent is not None:
        neighbor = tree[neighbor.parent]
    return neighbor


def stitch_children(tree: QuadTree, parent: Cell, children: list[Cell]) -> None:
    """
    Connect freshly created children to their siblings and to the parent's neighbors.

    Args:
        tree: The owning tree.
        parent: The cell that was just subdivided.
        children: Its children in SW, SE, NW, NE order.
    """
    sw, se, nw, ne = children

    # 1. Sibling links
    link(sw, se, Direction.EAST)
    link(sw, nw, Direction.NORTH)
    link(se, ne, Direction.NORTH)
    link(nw, ne, Direction.EAST)

    # 2. External links through the parent's prior neighbors
    for direction in (Direction.SOUTH, Direction.NORTH, Direction.WEST, Direction.EAST):
        neighbor = neighbor_across(tree, parent, direction)
        if neighbor is None:
            continue

        side = [children[quadrant] for quadrant in _CHILDREN_ON_SIDE[direction]]
        if neighbor.is_leaf:
            # The neighbor's own pointer keeps referencing the parent
            for child in side:
                child.set_neighbor(direction, neighbor.index)
            continue

        for neighbor_child in tree.children_of(neighbor):
            for child in side:
                if faces_touch(child, neighbor_child, direction):
                    link(child, neighbor_child, direction)


def adjacent_leaves(tree: QuadTree, cell: Cell, direction: Direction) -> list[Cell]:
    """
    Leaves sharing a positive-length piece of the `direction` edge of `cell`.

    A leaf neighbor is returned as is. An internal neighbor (refined after the
    pointer was set) is descended with an explicit stack, keeping only the
    descendants that touch the edge.
    """
    neighbor = neighbor_across(tree, cell, direction)
    if neighbor is None:
        return []
    if neighbor.is_leaf:
        return [neighbor]

    leaves: list[Cell] = []
    stack: list[Cell] = tree.children_of(neighbor)
    while stack:
        candidate = stack.pop()
        if not faces_touch(cell, candidate, direction):
            continue
        if candidate.is_leaf:
            leaves.append(candidate)
        else:
            stack.extend(tree.children_of(candidate))
    return leaves
