"""
Quadtree Cell (Data Model)
==========================
Defines the axis-aligned cell of a fully-threaded quadtree.

Why is this file needed?
------------------------
1. Geometry: A cell is a rectangle at an integer refinement level; this
   module owns the derived quantities (corners, centre, diagonal, edges).
2. Threading: Every cell stores the handles of its parent, its children and
   its four neighbors, so adjacency queries are O(1) lookups into the owning
   `QuadTree` arena instead of tree descents.

Classes:
    Direction: The four compass directions of a cell edge.
    Quadrant: Child position inside a subdivided cell.
    Rect: Plain rectangle used to describe a domain.
    Cell: The quadtree node.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import Optional, TYPE_CHECKING

import numpy as np

from treecutmesh.errors import InvalidDomainError

if TYPE_CHECKING:
    import numpy.typing as npt


class Direction(StrEnum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def opposite(self) -> Direction:
        return _OPPOSITE[self]

    @property
    def is_horizontal(self) -> bool:
        """True for edges normal to the y-axis (north, south)."""
        return self in (Direction.NORTH, Direction.SOUTH)


_OPPOSITE = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


class Quadrant(IntEnum):
    """Child order inside a subdivided cell."""
    SW = 0
    SE = 1
    NW = 2
    NE = 3


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its lower-left corner and its size."""
    x_min: float
    y_min: float
    width: float
    height: float

    def __post_init__(self) -> None:
        for name in ("x_min", "y_min", "width", "height"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidDomainError(f"Domain {name} must be finite, got {getattr(self, name)}.")
        if self.width <= 0.0 or self.height <= 0.0:
            raise InvalidDomainError(
                f"Domain must have a positive size, got width={self.width}, height={self.height}."
            )

    @classmethod
    def from_bounds(cls, bounds: Rect | tuple[float, float, float, float]) -> Rect:
        if isinstance(bounds, Rect):
            return bounds
        x_min, y_min, width, height = bounds
        return cls(float(x_min), float(y_min), float(width), float(height))

    @property
    def x_max(self) -> float:
        return self.x_min + self.width

    @property
    def y_max(self) -> float:
        return self.y_min + self.height


@dataclass(eq=False)
class Cell:
    """
    Represents a cell of a fully-threaded quadtree.

    All references to other cells are integer handles into the owning
    `QuadTree.cells` list. Equality is identity, so two cells covering the same
    rectangle are still distinct.
    """
    index: int
    x_min: float
    y_min: float
    width: float
    height: float
    level: int
    parent: Optional[int] = None
    children: list[int] = field(default_factory=list)

    north: Optional[int] = None
    south: Optional[int] = None
    east: Optional[int] = None
    west: Optional[int] = None

    def __repr__(self) -> str:
        """String representation of the cell."""
        return (
            f"{self.__class__.__name__}(id={self.index}, level={self.level}, "
            f"[{self.x_min:.4g}, {self.x_max:.4g}]x[{self.y_min:.4g}, {self.y_max:.4g}], "
            f"leaf={self.is_leaf})"
        )

    @property
    def is_leaf(self) -> bool:
        """True if the cell has no children."""
        return not self.children

    @property
    def x_max(self) -> float:
        return self.x_min + self.width

    @property
    def y_max(self) -> float:
        return self.y_min + self.height

    @property
    def center(self) -> tuple[float, float]:
        return self.x_min + 0.5 * self.width, self.y_min + 0.5 * self.height

    @property
    def diagonal(self) -> float:
        return math.sqrt(self.width ** 2 + self.height ** 2)

    @property
    def area(self) -> float:
        return self.width * self.height

    def corners(self) -> npt.NDArray[np.float64]:
        """
        Return the 4 corner coordinates as an array of shape (4, 2).

        Order: SW, SE, NW, NE.
        """
        return np.array(
            [
                [self.x_min, self.y_min],
                [self.x_max, self.y_min],
                [self.x_min, self.y_max],
                [self.x_max, self.y_max],
            ],
            dtype=np.float64,
        )

    def neighbor(self, direction: Direction) -> Optional[int]:
        """Handle of the neighbor in the given direction, None on the domain boundary."""
        return getattr(self, direction.value)

    def set_neighbor(self, direction: Direction, index: Optional[int]) -> None:
        setattr(self, direction.value, index)

    def can_refine(self, max_level: int, min_cell_size: float) -> bool:
        """True if neither the depth cap nor the size floor stops this cell from splitting."""
        return self.level < max_level and min(self.width, self.height) >= min_cell_size

    def edge(self, direction: Direction) -> tuple[float, float, float]:
        """
        Describe one edge of the cell.

        Returns:
            A tuple (position, start, end): the fixed coordinate of the edge and
            the interval it spans along the other axis.
        """
        if direction == Direction.NORTH:
            return self.y_max, self.x_min, self.x_max
        if direction == Direction.SOUTH:
            return self.y_min, self.x_min, self.x_max
        if direction == Direction.EAST:
            return self.x_max, self.y_min, self.y_max
        return self.x_min, self.y_min, self.y_max
