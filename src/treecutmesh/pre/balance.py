"""
2:1 Balance Enforcement
=======================
Refines leaves until no two adjacent leaves differ by more than one level.

The check walks the neighbor pointers of every leaf. A pointer may reference a
cell that has been subdivided since it was set; `adjacent_leaves` then descends
to the leaves that really touch the edge, so stale pointers never hide a
violation.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from treecutmesh.errors import RefinementStage
from treecutmesh.model.cell import Direction
from treecutmesh.model.quadtree import get_leaf_cells
from treecutmesh.pre.stitching import adjacent_leaves, stitch_children

if TYPE_CHECKING:
    from treecutmesh.model.cell import Cell
    from treecutmesh.model.quadtree import QuadTree

logger = logging.getLogger(__name__)


def violates_balance(tree: QuadTree, leaf: Cell) -> bool:
    """True if some leaf adjacent to `leaf` is more than one level finer."""
    for direction in Direction:
        for other in adjacent_leaves(tree, leaf, direction):
            if other.level > leaf.level + 1:
                return True
    return False


def balance(tree: QuadTree, max_level: int, min_cell_size: float) -> int:
    """
    Enforce the 2:1 level invariant by fixpoint iteration.

    Each pass marks every leaf with a too-fine neighbor and splits all marked
    leaves at once (a plain split, no level-set test). Leaves stopped by
    `max_level` or `min_cell_size` are not marked; they are recorded on
    `tree.floor_hits` and may keep a larger gap.

    Args:
        tree: The tree to balance in place.
        max_level: Hard depth cap.
        min_cell_size: No cell narrower than this is split.

    Returns:
        The number of passes that refined at least one leaf.
    """
    passes = 0
    while True:
        marked: list[Cell] = []
        for leaf in get_leaf_cells(tree):
            if not violates_balance(tree, leaf):
                continue
            if leaf.can_refine(max_level, min_cell_size):
                marked.append(leaf)
            else:
                tree.record_floor_hit(leaf, RefinementStage.BALANCE)

        if not marked:
            break

        for leaf in marked:
            children = tree.subdivide(leaf)
            stitch_children(tree, leaf, children)
        passes += 1
        logger.debug(f"Balance pass {passes}: refined {len(marked)} leaves.")

    return passes
