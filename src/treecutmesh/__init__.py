"""
TreeCutMesh
===========
Fully-threaded quadtree meshes refined around a level-set interface, with
2:1 balancing, interface-level equalization and quadrature-based geometric
fractions for cut-cell methods.
"""
from treecutmesh.analysis.fractions import compute_fractions, compute_geometric_fractions
from treecutmesh.analysis.gauss import QuadratureRule, gauss_legendre_rule
from treecutmesh.errors import (
    InvalidDomainError,
    InvalidSettingsError,
    QuadtreeError,
    RefinementFloorHit,
    RefinementStage,
)
from treecutmesh.model.cell import Cell, Direction, Quadrant, Rect
from treecutmesh.model.geometry import CellGeometry
from treecutmesh.model.level_sets import circle, flower, level_set_circle, level_set_flower
from treecutmesh.model.quadtree import QuadTree, are_neighbors, create_root, get_leaf_cells, subdivide
from treecutmesh.pre.balance import balance
from treecutmesh.pre.interface import equalize_interface_levels
from treecutmesh.pre.mesher import MeshSettings, MeshStats, QuadtreeMesher, build
from treecutmesh.pre.refinement import is_mixed_cell, refine
from treecutmesh.pre.stitching import adjacent_leaves, stitch_children

__all__ = [
    "Cell",
    "CellGeometry",
    "Direction",
    "InvalidDomainError",
    "InvalidSettingsError",
    "MeshSettings",
    "MeshStats",
    "Quadrant",
    "QuadratureRule",
    "QuadTree",
    "QuadtreeError",
    "QuadtreeMesher",
    "Rect",
    "RefinementFloorHit",
    "RefinementStage",
    "adjacent_leaves",
    "are_neighbors",
    "balance",
    "build",
    "circle",
    "compute_fractions",
    "compute_geometric_fractions",
    "create_root",
    "equalize_interface_levels",
    "flower",
    "gauss_legendre_rule",
    "get_leaf_cells",
    "is_mixed_cell",
    "level_set_circle",
    "level_set_flower",
    "refine",
    "stitch_children",
    "subdivide",
]
