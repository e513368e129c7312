"""
Configuration & Global Constants
================================
This module serves as the central registry for mesher defaults and paths.

Why is this file needed?
------------------------
1. Defaults: The refinement floors and the Whitney sensitivity are shared by
   the orchestrator, the equalizer and the example driver. Keeping them here
   avoids magic numbers scattered throughout the code.
2. Output: It resolves where the example driver writes its figures.

Exports:
    DEFAULT_MAX_LEVEL (int): Hard depth cap used when none is given.
    DEFAULT_MIN_CELL_SIZE (float): Absolute size floor used when none is given.
    DEFAULT_LIP_CONST (float): Lipschitz constant of the proximity heuristic.
    DENSE_STENCIL_MAX_LEVEL (int): Deepest level sampled with the 3x3 interior grid.
    EDGE_TOLERANCE (float): Relative tolerance for edge coincidence tests.
    OUTPUT_PATH (str): Absolute path to the figure output directory.
"""
import os
from pathlib import Path


DEFAULT_MAX_LEVEL: int = 8
DEFAULT_MIN_CELL_SIZE: float = 0.001
DEFAULT_LIP_CONST: float = 1.0

# The equalizer always re-refines with the nominal Lipschitz constant
EQUALIZER_LIP_CONST: float = 1.0

DENSE_STENCIL_MAX_LEVEL: int = 4
DENSE_STENCIL_OFFSETS: tuple[float, ...] = (0.25, 0.5, 0.75)

EDGE_TOLERANCE: float = 1e-9

DEFAULT_QUADRATURE_POINTS: int = 8


def get_output_path(relative_path: str = "output") -> str:
    """
    Get absolute path to the output directory.

    The TREECUTMESH_OUTPUT environment variable takes precedence; otherwise the
    directory is resolved relative to the project root.
    """
    env_path = os.environ.get("TREECUTMESH_OUTPUT")
    if env_path:
        return os.path.abspath(env_path)

    # config.py is in src/treecutmesh/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


OUTPUT_PATH: str = get_output_path()
