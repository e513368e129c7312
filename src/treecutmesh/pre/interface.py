"""
Interface-Level Equalization
============================
Brings every leaf crossed by the interface to the same refinement level.

Mixed leaves are found with the corner-only sign test, which is coarser
than the Whitney stencil. Each mixed leaf below the deepest mixed level is
split and its children are re-refined with the Whitney criterion, capped at
that deepest level.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from treecutmesh.config import EQUALIZER_LIP_CONST
from treecutmesh.errors import RefinementStage
from treecutmesh.model.quadtree import get_leaf_cells
from treecutmesh.pre.refinement import is_mixed_cell, refine
from treecutmesh.pre.stitching import stitch_children

if TYPE_CHECKING:
    from treecutmesh.model.level_sets import LevelSetFunction
    from treecutmesh.model.quadtree import QuadTree

logger = logging.getLogger(__name__)


def equalize_interface_levels(
    tree: QuadTree,
    level_set: LevelSetFunction,
    max_level: int,
    min_cell_size: float,
) -> bool:
    """
    Refine mixed leaves that are coarser than the deepest mixed leaf.

    Args:
        tree: The tree to modify in place.
        level_set: Interface definition.
        max_level: Hard depth cap.
        min_cell_size: No cell narrower than this is split.

    Returns:
        True if any leaf was subdivided.
    """
    mixed = [leaf for leaf in get_leaf_cells(tree) if is_mixed_cell(leaf, level_set)]
    if not mixed:
        return False

    max_interface_level = max(leaf.level for leaf in mixed)
    depth_cap = min(max_level, max_interface_level)

    changed = False
    refined = 0
    for leaf in mixed:
        if leaf.level >= max_interface_level:
            continue
        if not leaf.can_refine(max_level, min_cell_size):
            tree.record_floor_hit(leaf, RefinementStage.EQUALIZE)
            continue

        children = tree.subdivide(leaf)
        stitch_children(tree, leaf, children)
        for child in children:
            refine(tree, child, level_set, depth_cap, min_cell_size, EQUALIZER_LIP_CONST)
        changed = True
        refined += 1

    logger.debug(
        f"Equalization: {len(mixed)} mixed leaves, target level {max_interface_level}, "
        f"{refined} refined."
    )
    return changed
