"""
Error Types
===========
Contract violations raised by the mesher, plus the informational record kept
when a refinement floor stops a cell from refining.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class QuadtreeError(Exception):
    """Base class for all errors raised by treecutmesh."""


class InvalidDomainError(QuadtreeError, ValueError):
    """Raised when a root cell would have a non-positive or non-finite size."""


class InvalidSettingsError(QuadtreeError, ValueError):
    """Raised when the refinement parameters are out of range."""


class RefinementStage(StrEnum):
    BALANCE = "balance"
    EQUALIZE = "equalize"


@dataclass(frozen=True)
class RefinementFloorHit:
    """
    A cell that a criterion wanted refined but `max_level` or `min_cell_size` kept coarse.

    This is not an error: the coarser cell is valid output. Callers needing strict
    balance or interface uniformity can inspect these records.
    """
    cell_index: int
    level: int
    stage: RefinementStage
