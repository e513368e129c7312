"""
Geometric Fractions
===================
Volume and face fractions of leaf cells for cut-cell methods.

Why is this file needed?
------------------------
Cut-cell discretisations weight fluxes and volumes by the share of each
cell (and of each of its faces) lying on the fluid side of the interface.
This module estimates those shares by point-sampling the fluid indicator
`level_set < 0` at Gauss-Legendre points mapped onto each cell.

Note: This is a quadrature of a discontinuous indicator, not an exact
boundary integration. Cells fully on one side converge to 1 or 0; cut cells
keep an error that depends on how the interface falls between the points.
"""
from __future__ import annotations

import logging
from typing import Iterable, TYPE_CHECKING

import numpy as np

from treecutmesh.analysis.gauss import gauss_legendre_rule
from treecutmesh.config import DEFAULT_QUADRATURE_POINTS
from treecutmesh.model.cell import Direction
from treecutmesh.model.geometry import CellGeometry
from treecutmesh.pre.refinement import evaluate_level_set

if TYPE_CHECKING:
    import numpy.typing as npt

    from treecutmesh.analysis.gauss import QuadratureRule
    from treecutmesh.model.cell import Cell
    from treecutmesh.model.level_sets import LevelSetFunction

logger = logging.getLogger(__name__)

# Length of the reference segment [-1, 1]
REFERENCE_LENGTH = 2.0


def _fluid_indicator(level_set: LevelSetFunction, points: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    return (evaluate_level_set(level_set, points) < 0.0).astype(np.float64)


def _to_cell(reference: npt.NDArray[np.float64], start: float, length: float) -> npt.NDArray[np.float64]:
    """Affine map from [-1, 1] onto [start, start + length]."""
    return start + 0.5 * (reference + 1.0) * length


def _face_points(cell: Cell, direction: Direction, mapped: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    position, _, _ = cell.edge(direction)
    fixed = np.full_like(mapped, position)
    if direction.is_horizontal:
        return np.column_stack((mapped, fixed))
    return np.column_stack((fixed, mapped))


def cell_fractions(cell: Cell, level_set: LevelSetFunction, rule: QuadratureRule) -> CellGeometry:
    """
    Compute the fractions of a single cell.

    Args:
        cell: The cell to integrate over.
        level_set: Interface definition, negative inside.
        rule: 1D quadrature rule; the volume uses its tensor product.

    Returns:
        The volume fraction and the four face fractions.
    """
    # Tabulated rules integrate [-1, 1] to 2 up to rounding; the fallback rule does not
    measure = REFERENCE_LENGTH if rule.is_exact else rule.measure

    xs = _to_cell(rule.points, cell.x_min, cell.width)
    ys = _to_cell(rule.points, cell.y_min, cell.height)

    grid_x, grid_y = np.meshgrid(xs, ys, indexing="ij")
    volume_points = np.column_stack((grid_x.ravel(), grid_y.ravel()))
    volume_weights = np.outer(rule.weights, rule.weights).ravel()
    volume = float(volume_weights @ _fluid_indicator(level_set, volume_points)) / measure ** 2

    faces: dict[Direction, float] = {}
    for direction in Direction:
        mapped = xs if direction.is_horizontal else ys
        indicator = _fluid_indicator(level_set, _face_points(cell, direction, mapped))
        faces[direction] = float(rule.weights @ indicator) / measure

    return CellGeometry(
        volume_fraction=float(np.clip(volume, 0.0, 1.0)),
        face_fraction_north=float(np.clip(faces[Direction.NORTH], 0.0, 1.0)),
        face_fraction_south=float(np.clip(faces[Direction.SOUTH], 0.0, 1.0)),
        face_fraction_east=float(np.clip(faces[Direction.EAST], 0.0, 1.0)),
        face_fraction_west=float(np.clip(faces[Direction.WEST], 0.0, 1.0)),
        exact_rule=rule.is_exact,
    )


def compute_fractions(
    leaves: Iterable[Cell],
    level_set: LevelSetFunction,
    num_points: int = DEFAULT_QUADRATURE_POINTS,
) -> dict[int, CellGeometry]:
    """
    Compute geometric fractions for every leaf.

    Args:
        leaves: The cells to process, typically `get_leaf_cells(tree)`.
        level_set: Interface definition, negative inside.
        num_points: Quadrature order per axis. 8 and 10 use tabulated
            Gauss-Legendre rules; other orders use a reduced-accuracy rule.

    Returns:
        One `CellGeometry` per leaf, keyed by the leaf's handle (`cell.index`).
    """
    rule = gauss_legendre_rule(num_points)
    geometries: dict[int, CellGeometry] = {}
    for cell in leaves:
        geometries[cell.index] = cell_fractions(cell, level_set, rule)

    logger.debug(f"Computed geometric fractions of {len(geometries)} cells with {num_points} points.")
    return geometries


compute_geometric_fractions = compute_fractions
