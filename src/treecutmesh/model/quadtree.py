"""
Quadtree Arena
==============
Owns every cell of a mesh and hands out stable integer handles.

Why is this file needed?
------------------------
The cells reference each other cyclically (parent, children, four
neighbors). Storing them in one list and linking them by index keeps the
graph free of object cycles while every lookup stays O(1). Cells are only
ever appended: subdivision adds nodes, nothing is deleted.
"""
from __future__ import annotations

import logging
from typing import Iterator, TYPE_CHECKING

from treecutmesh.errors import QuadtreeError, RefinementFloorHit
from treecutmesh.model.cell import Cell, Direction, Rect

if TYPE_CHECKING:
    from treecutmesh.errors import RefinementStage

logger = logging.getLogger(__name__)


class QuadTree:
    """
    Arena of quadtree cells. The root always has handle 0.
    """
    def __init__(self, domain: Rect) -> None:
        """
        Initialize the tree with a single leaf root covering the domain.

        Args:
            domain: The rectangle covered by the root cell.
        """
        self.domain = domain
        self.cells: list[Cell] = []
        self.floor_hits: list[RefinementFloorHit] = []
        self._floor_hit_keys: set[RefinementFloorHit] = set()
        self._new_cell(domain.x_min, domain.y_min, domain.width, domain.height, level=0, parent=None)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(cells={len(self.cells)}, domain={self.domain})"

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    @property
    def root(self) -> Cell:
        return self.cells[0]

    def _new_cell(
        self,
        x_min: float,
        y_min: float,
        width: float,
        height: float,
        level: int,
        parent: int | None,
    ) -> Cell:
        cell = Cell(
            index=len(self.cells),
            x_min=x_min,
            y_min=y_min,
            width=width,
            height=height,
            level=level,
            parent=parent,
        )
        self.cells.append(cell)
        return cell

    def subdivide(self, cell: Cell) -> list[Cell]:
        """
        Split a leaf into four congruent children.

        Neighbor handles of the children are left empty; the stitching protocol
        fills them in.

        Args:
            cell: The leaf to split.

        Raises:
            QuadtreeError: If `cell` already has children.

        Returns:
            The children in SW, SE, NW, NE order.
        """
        if not cell.is_leaf:
            raise QuadtreeError(f"{cell!r} is already subdivided.")

        half_width = cell.width / 2
        half_height = cell.height / 2
        level = cell.level + 1
        x_mid = cell.x_min + half_width
        y_mid = cell.y_min + half_height

        children = [
            self._new_cell(cell.x_min, cell.y_min, half_width, half_height, level, cell.index),  # SW
            self._new_cell(x_mid, cell.y_min, half_width, half_height, level, cell.index),       # SE
            self._new_cell(cell.x_min, y_mid, half_width, half_height, level, cell.index),       # NW
            self._new_cell(x_mid, y_mid, half_width, half_height, level, cell.index),            # NE
        ]
        cell.children = [child.index for child in children]
        return children

    def children_of(self, cell: Cell) -> list[Cell]:
        return [self.cells[index] for index in cell.children]

    def parent_of(self, cell: Cell) -> Cell | None:
        return None if cell.parent is None else self.cells[cell.parent]

    def neighbor_of(self, cell: Cell, direction: Direction) -> Cell | None:
        """Resolve the neighbor handle of `cell` in `direction`."""
        index = cell.neighbor(direction)
        return None if index is None else self.cells[index]

    def record_floor_hit(self, cell: Cell, stage: RefinementStage) -> None:
        """Remember that a floor kept `cell` coarse during `stage` (once per cell and stage)."""
        hit = RefinementFloorHit(cell_index=cell.index, level=cell.level, stage=stage)
        if hit in self._floor_hit_keys:
            return
        self._floor_hit_keys.add(hit)
        self.floor_hits.append(hit)
        logger.debug(f"Refinement floor kept {cell!r} coarse during {stage}.")

    @property
    def max_level(self) -> int:
        """Deepest level present in the tree."""
        return max(cell.level for cell in self.cells)


def create_root(x_min: float, y_min: float, width: float, height: float) -> QuadTree:
    """
    Create a tree holding a single level-0 leaf.

    Raises:
        InvalidDomainError: If width or height is not a positive finite number.
    """
    return QuadTree(Rect(float(x_min), float(y_min), float(width), float(height)))


def subdivide(tree: QuadTree, cell: Cell) -> list[Cell]:
    """Split `cell` into its SW, SE, NW, NE children."""
    return tree.subdivide(cell)


def get_leaf_cells(tree: QuadTree, start: Cell | None = None) -> list[Cell]:
    """
    Collect every leaf below `start` (the root by default).

    Uses an explicit stack so very deep trees cannot exhaust the call stack.
    The order of the result is not spatially meaningful.
    """
    leaves: list[Cell] = []
    stack: list[Cell] = [start if start is not None else tree.root]
    while stack:
        cell = stack.pop()
        if cell.is_leaf:
            leaves.append(cell)
        else:
            stack.extend(tree.children_of(cell))
    return leaves


def are_neighbors(first: Cell, second: Cell) -> bool:
    """O(1) test whether `first` points at `second` in any direction."""
    return any(first.neighbor(direction) == second.index for direction in Direction)
