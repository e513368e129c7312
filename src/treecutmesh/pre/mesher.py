"""
Quadtree Mesh Generation
========================
Sequences the refinement stages into a finished cut-cell mesh.

Why is this file needed?
------------------------
1. Ordering: Whitney refinement, 2:1 balancing and interface equalization
   interact (equalizing can unbalance the tree and balancing can create new
   mixed leaves), so they are looped here until a fixpoint is reached.
2. Reporting: It collects the mesh metadata (counts, passes, floor hits)
   that callers and the example driver log.
"""
from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from treecutmesh.config import DEFAULT_LIP_CONST, DEFAULT_MAX_LEVEL, DEFAULT_MIN_CELL_SIZE
from treecutmesh.errors import InvalidSettingsError
from treecutmesh.model.cell import Rect
from treecutmesh.model.quadtree import QuadTree, get_leaf_cells
from treecutmesh.pre.balance import balance
from treecutmesh.pre.interface import equalize_interface_levels
from treecutmesh.pre.refinement import is_mixed_cell, refine

if TYPE_CHECKING:
    from treecutmesh.model.level_sets import LevelSetFunction

logger = logging.getLogger(__name__)


@dataclass
class MeshSettings:
    """Refinement parameters of a mesh build."""
    max_level: int = DEFAULT_MAX_LEVEL
    min_cell_size: float = DEFAULT_MIN_CELL_SIZE
    lip_const: float = DEFAULT_LIP_CONST

    def __post_init__(self) -> None:
        level = self.max_level
        is_whole = (isinstance(level, numbers.Integral) and not isinstance(level, bool)) or (
            isinstance(level, float) and level.is_integer()
        )
        if not is_whole or level < 0:
            raise InvalidSettingsError(f"max_level must be a non-negative integer, got {level!r}.")
        self.max_level = int(level)

        for name in ("min_cell_size", "lip_const"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidSettingsError(f"{name} must be a number, got {value!r}.")
            if not math.isfinite(value) or value < 0.0:
                raise InvalidSettingsError(f"{name} must be a non-negative number, got {value!r}.")
            setattr(self, name, float(value))


@dataclass
class MeshStats:
    """Return object containing mesh metadata."""
    num_cells: int = 0
    num_leaves: int = 0
    num_mixed: int = 0
    max_level: int = 0
    whitney_subdivisions: int = 0
    balance_passes: int = 0
    equalization_rounds: int = 0
    floor_hits: int = 0
    leaves_per_level: dict[int, int] = field(default_factory=dict)


class QuadtreeMesher:
    """
    Builds a balanced, interface-equalized quadtree for a level set.
    """
    def __init__(self, settings: MeshSettings | None = None) -> None:
        """
        Initialize the mesher.

        Args:
            settings: Refinement parameters, defaults from `treecutmesh.config` if omitted.
        """
        self.settings = settings or MeshSettings()
        self.stats: MeshStats | None = None

    def generate(
        self,
        bounds: Rect | tuple[float, float, float, float],
        level_set: LevelSetFunction,
    ) -> QuadTree:
        """
        Generate the mesh over `bounds`.

        Raises:
            InvalidDomainError: If the domain has a non-positive size.

        Returns:
            The finished tree; its root is `tree.root`.
        """
        domain = Rect.from_bounds(bounds)
        max_level = self.settings.max_level
        min_cell_size = self.settings.min_cell_size
        stats = MeshStats()

        logger.info(
            f"Generating quadtree on {domain} "
            f"(max_level={max_level}, min_cell_size={min_cell_size}, lip_const={self.settings.lip_const})."
        )
        tree = QuadTree(domain)

        # 1. Whitney refinement
        stats.whitney_subdivisions = refine(
            tree, tree.root, level_set, max_level, min_cell_size, self.settings.lip_const
        )
        logger.debug(f"Whitney pass done: {len(tree)} cells.")

        # 2. Balance
        stats.balance_passes += balance(tree, max_level, min_cell_size)

        # 3. Equalize interface levels until nothing changes, rebalancing after each change
        while equalize_interface_levels(tree, level_set, max_level, min_cell_size):
            stats.equalization_rounds += 1
            stats.balance_passes += balance(tree, max_level, min_cell_size)

        leaves = get_leaf_cells(tree)
        stats.num_cells = len(tree)
        stats.num_leaves = len(leaves)
        stats.num_mixed = sum(1 for leaf in leaves if is_mixed_cell(leaf, level_set))
        stats.max_level = max(leaf.level for leaf in leaves)
        stats.floor_hits = len(tree.floor_hits)
        for leaf in leaves:
            stats.leaves_per_level[leaf.level] = stats.leaves_per_level.get(leaf.level, 0) + 1

        if tree.floor_hits:
            logger.info(f"{len(tree.floor_hits)} cells were kept coarse by a refinement floor.")
        logger.info(
            f"Quadtree generated: {stats.num_leaves} leaves ({stats.num_mixed} mixed), "
            f"max level {stats.max_level}."
        )
        self.stats = stats
        return tree


def build(
    bounds: Rect | tuple[float, float, float, float],
    level_set: LevelSetFunction,
    max_level: int = DEFAULT_MAX_LEVEL,
    min_cell_size: float = DEFAULT_MIN_CELL_SIZE,
    lip_const: float = DEFAULT_LIP_CONST,
) -> QuadTree:
    """
    Build a Whitney-refined, 2:1-balanced quadtree with a uniform interface level.

    Args:
        bounds: Domain as a `Rect` or an (x_min, y_min, width, height) tuple.
        level_set: Interface definition, negative inside.
        max_level: Hard depth cap.
        min_cell_size: Absolute size floor, overrides the depth cap.
        lip_const: Sensitivity of the proximity test; larger values refine more.

    Returns:
        The finished tree.
    """
    mesher = QuadtreeMesher(MeshSettings(max_level=max_level, min_cell_size=min_cell_size, lip_const=lip_const))
    return mesher.generate(bounds, level_set)
