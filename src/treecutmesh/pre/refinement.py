"""
Whitney Refinement
==================
Subdivides cells around the zero contour of a level set.

Why is this file needed?
------------------------
1. Detection: A cell is split when its sample stencil shows a sign change
   (the interface certainly crosses it).
2. Proximity: A cell is also split when the sample closest to zero is within
   `lip_const * diagonal`, because a Lipschitz level set could then still
   reach zero inside the cell between the samples.

Refinement stops at `max_level` or when the cell is smaller than
`min_cell_size`; both are policy floors, not failures.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from treecutmesh.config import DENSE_STENCIL_MAX_LEVEL, DENSE_STENCIL_OFFSETS
from treecutmesh.pre.stitching import stitch_children

if TYPE_CHECKING:
    import numpy.typing as npt

    from treecutmesh.model.cell import Cell
    from treecutmesh.model.level_sets import LevelSetFunction
    from treecutmesh.model.quadtree import QuadTree

logger = logging.getLogger(__name__)


def sample_stencil(cell: Cell) -> npt.NDArray[np.float64]:
    """
    Sample points used by the Whitney test, shape (N, 2).

    Always the 4 corners, 4 edge midpoints and the centre. Coarse cells
    (level <= DENSE_STENCIL_MAX_LEVEL) also get a 3x3 interior grid, since
    a strongly curved interface can slip between the 9 base points.
    """
    x_center, y_center = cell.center
    points = [
        (cell.x_min, cell.y_min),
        (cell.x_max, cell.y_min),
        (cell.x_min, cell.y_max),
        (cell.x_max, cell.y_max),
        (x_center, cell.y_min),
        (x_center, cell.y_max),
        (cell.x_min, y_center),
        (cell.x_max, y_center),
        (x_center, y_center),
    ]
    if cell.level <= DENSE_STENCIL_MAX_LEVEL:
        for i in DENSE_STENCIL_OFFSETS:
            for j in DENSE_STENCIL_OFFSETS:
                points.append((cell.x_min + i * cell.width, cell.y_min + j * cell.height))
    return np.array(points, dtype=np.float64)


def evaluate_level_set(level_set: LevelSetFunction, points: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Evaluate a scalar level set at each row of `points`."""
    return np.fromiter(
        (level_set(float(x), float(y)) for x, y in points),
        dtype=np.float64,
        count=len(points),
    )


def has_sign_change(values: npt.NDArray[np.float64]) -> bool:
    """True if the values contain both a strictly positive and a strictly negative entry."""
    return bool(np.any(values > 0.0) and np.any(values < 0.0))


def is_mixed_cell(cell: Cell, level_set: LevelSetFunction) -> bool:
    """
    Determine if a cell is cut by the interface, using its 4 corners only.
    """
    return has_sign_change(evaluate_level_set(level_set, cell.corners()))


def whitney_criterion(cell: Cell, level_set: LevelSetFunction, lip_const: float) -> bool:
    """
    Decide whether `cell` should be split.

    Returns:
        True if the stencil detects a sign change, or if the smallest absolute
        sample is within `lip_const` times the cell diagonal.
    """
    values = evaluate_level_set(level_set, sample_stencil(cell))
    is_interface_cell = has_sign_change(values)
    needs_refinement = float(np.min(np.abs(values))) <= lip_const * cell.diagonal
    return needs_refinement or is_interface_cell


def refine(
    tree: QuadTree,
    cell: Cell,
    level_set: LevelSetFunction,
    max_level: int,
    min_cell_size: float,
    lip_const: float = 1.0,
) -> int:
    """
    Refine `cell` and its descendants with the Whitney criterion.

    Every new subdivision is stitched into the neighbor graph before its
    children are examined. Children are processed from an explicit stack in
    SW, SE, NW, NE order, which produces the same tree as a recursive descent.

    Args:
        tree: The owning tree.
        cell: The cell to start from; must be a leaf to have any effect.
        level_set: Interface definition.
        max_level: Hard depth cap.
        min_cell_size: No cell narrower than this is split.
        lip_const: Lipschitz constant of the proximity test.

    Returns:
        The number of subdivisions performed.
    """
    subdivisions = 0
    stack: list[Cell] = [cell]
    while stack:
        current = stack.pop()
        if not current.is_leaf or not current.can_refine(max_level, min_cell_size):
            continue
        if not whitney_criterion(current, level_set, lip_const):
            continue

        children = tree.subdivide(current)
        stitch_children(tree, current, children)
        subdivisions += 1
        stack.extend(reversed(children))

    logger.debug(f"Whitney refinement from cell {cell.index}: {subdivisions} subdivisions.")
    return subdivisions
