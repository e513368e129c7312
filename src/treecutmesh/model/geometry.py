from __future__ import annotations

from dataclasses import dataclass

from treecutmesh.model.cell import Direction


@dataclass
class CellGeometry:
    """
    Geometric fractions of one leaf, used by cut-cell methods.

    All fractions are the share of the cell area (or edge length) on the fluid
    side of the interface, i.e. where the level set is negative.
    """
    volume_fraction: float = 0.0
    face_fraction_north: float = 0.0
    face_fraction_south: float = 0.0
    face_fraction_east: float = 0.0
    face_fraction_west: float = 0.0

    # False when the fractions come from the approximate fallback rule
    exact_rule: bool = True

    def face_fraction(self, direction: Direction) -> float:
        return getattr(self, f"face_fraction_{direction.value}")

    @property
    def is_cut(self) -> bool:
        """True when the cell is neither fully fluid nor fully solid."""
        return 0.0 < self.volume_fraction < 1.0
