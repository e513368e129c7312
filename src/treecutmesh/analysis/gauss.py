"""
Gauss-Legendre quadrature rules on the reference segment [-1, 1].
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


_GAUSS_LEGENDRE_TABLES: dict[int, tuple[list[float], list[float]]] = {
    8: (
        [-0.9602898564975363, -0.7966664774136267, -0.5255324099163290, -0.1834346424956498,
         0.1834346424956498, 0.5255324099163290, 0.7966664774136267, 0.9602898564975363],
        [0.1012285362903763, 0.2223810344533745, 0.3137066458778873, 0.3626837833783620,
         0.3626837833783620, 0.3137066458778873, 0.2223810344533745, 0.1012285362903763],
    ),
    10: (
        [-0.9739065285171717, -0.8650633666889845, -0.6794095682990244, -0.4333953941292472,
         -0.1488743389816312, 0.1488743389816312, 0.4333953941292472, 0.6794095682990244,
         0.8650633666889845, 0.9739065285171717],
        [0.0666713443086881, 0.1494513491505806, 0.2190863625159820, 0.2692667193099963,
         0.2955242247147529, 0.2955242247147529, 0.2692667193099963, 0.2190863625159820,
         0.1494513491505806, 0.0666713443086881],
    ),
}


@dataclass(frozen=True)
class QuadratureRule:
    """
    A 1D quadrature rule on the reference segment [-1, 1].

    Attributes:
        points: Integration points.
        weights: Integration weights.
        is_exact: True for a tabulated Gauss-Legendre rule, False for the
            uniform-angle approximation used for other orders.
    """
    points: npt.NDArray[np.float64]
    weights: npt.NDArray[np.float64]
    is_exact: bool

    @property
    def n_points(self) -> int:
        return len(self.points)

    @property
    def measure(self) -> float:
        """Sum of the weights, the length the rule assigns to [-1, 1]."""
        return float(np.sum(self.weights))


def gauss_legendre_rule(n_points: int) -> QuadratureRule:
    """
    Get the quadrature rule used for geometric fractions.

    Args:
        n_points: Number of integration points.

    Raises:
        ValueError: If `n_points` is smaller than 1.

    Returns:
        The tabulated Gauss-Legendre rule for 8 or 10 points. Any other order
        returns Chebyshev-spaced points with equal weights pi/n, which is NOT
        a Gauss-Legendre rule and is flagged with `is_exact=False`.
    """
    if n_points < 1:
        raise ValueError(f"Unsupported number of Gauss points: {n_points}. "
                         f"'n_points' must be at least 1.")

    if n_points in _GAUSS_LEGENDRE_TABLES:
        points, weights = _GAUSS_LEGENDRE_TABLES[n_points]
        return QuadratureRule(np.array(points), np.array(weights), is_exact=True)

    logger.warning(f"No tabulated Gauss-Legendre rule for {n_points} points, "
                   f"using a reduced-accuracy uniform-angle rule.")
    theta = np.linspace(np.pi / (2 * n_points), np.pi - np.pi / (2 * n_points), n_points)
    return QuadratureRule(-np.cos(theta), np.full(n_points, np.pi / n_points), is_exact=False)
