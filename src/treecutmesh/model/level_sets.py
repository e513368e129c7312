"""
Level-Set Functions
===================
Signed implicit shapes used to drive refinement.

Sign convention: negative inside (fluid), positive outside (solid), zero on
the interface. The functions are built from numpy ufuncs, so they accept
scalars as well as coordinate arrays (handy for contour plots).
"""
from __future__ import annotations

from typing import Callable, Union, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

    ArrayOrFloat = Union[float, npt.NDArray[np.float64]]

LevelSetFunction = Callable[[float, float], float]

# Angular offset of the flower petals
FLOWER_PHASE_DEG = 9.0


def level_set_circle(
    x: ArrayOrFloat,
    y: ArrayOrFloat,
    center_x: float,
    center_y: float,
    radius: float,
) -> ArrayOrFloat:
    """
    Signed distance to a circle.

    Args:
        x, y: Evaluation point(s).
        center_x, center_y: Circle centre.
        radius: Circle radius.

    Returns:
        Distance to the centre minus the radius.
    """
    return np.sqrt((x - center_x) ** 2 + (y - center_y) ** 2) - radius


def level_set_flower(
    x: ArrayOrFloat,
    y: ArrayOrFloat,
    center_x: float,
    center_y: float,
    radius: float,
    petals: int,
    amplitude: float,
) -> ArrayOrFloat:
    """
    Level set of a flower (star) shape whose radius oscillates with the polar angle.

    Args:
        x, y: Evaluation point(s).
        center_x, center_y: Flower centre.
        radius: Base radius.
        petals: Number of petals.
        amplitude: Petal strength, 0 gives a circle.

    Returns:
        Distance to the centre minus the angle-dependent interface radius.
    """
    dx = x - center_x
    dy = y - center_y
    r = np.sqrt(dx ** 2 + dy ** 2)
    theta = np.arctan2(dy, dx) - np.deg2rad(FLOWER_PHASE_DEG)
    r_interface = radius * (1.0 + amplitude * np.cos(petals * theta))
    return r - r_interface


def circle(center_x: float, center_y: float, radius: float) -> LevelSetFunction:
    """Bind the circle parameters into a two-argument level set."""
    return lambda x, y: level_set_circle(x, y, center_x, center_y, radius)


def flower(
    center_x: float,
    center_y: float,
    radius: float,
    petals: int = 5,
    amplitude: float = 0.3,
) -> LevelSetFunction:
    """Bind the flower parameters into a two-argument level set."""
    return lambda x, y: level_set_flower(x, y, center_x, center_y, radius, petals, amplitude)
