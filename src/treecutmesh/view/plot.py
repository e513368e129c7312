"""
Matplotlib helpers for inspecting quadtree meshes.

Each function returns a new Figure and leaves saving or showing it to the
caller. The zero contour of the level set is drawn on every panel.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection, PatchCollection
from matplotlib.patches import Rectangle

from treecutmesh.analysis.fractions import compute_fractions
from treecutmesh.model.quadtree import get_leaf_cells
from treecutmesh.pre.refinement import is_mixed_cell

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

    from treecutmesh.model.cell import Cell
    from treecutmesh.model.geometry import CellGeometry
    from treecutmesh.model.level_sets import LevelSetFunction
    from treecutmesh.model.quadtree import QuadTree


def _draw_interface(
    ax: Axes,
    level_set: LevelSetFunction,
    x_range: tuple[float, float],
    y_range: tuple[float, float],
    resolution: int = 400,
    linewidth: float = 2.0,
) -> None:
    xs = np.linspace(x_range[0], x_range[1], resolution)
    ys = np.linspace(y_range[0], y_range[1], resolution)
    grid_x, grid_y = np.meshgrid(xs, ys)
    values = np.vectorize(level_set, otypes=[np.float64])(grid_x, grid_y)
    if values.min() < 0.0 < values.max():
        ax.contour(grid_x, grid_y, values, levels=[0.0], colors="red", linewidths=linewidth)


def _rectangles(cells: list[Cell]) -> list[Rectangle]:
    return [Rectangle((cell.x_min, cell.y_min), cell.width, cell.height) for cell in cells]


def _fraction_colors(geometries: list[CellGeometry]) -> np.ndarray:
    """White at 0.5, red towards solid (0), blue towards fluid (1)."""
    colors = np.ones((len(geometries), 4))
    colors[:, 3] = 0.7
    for i, geom in enumerate(geometries):
        value = geom.volume_fraction
        if value > 0.5:
            intensity = 2.0 * (value - 0.5)
            colors[i, 0:2] = 1.0 - intensity
        else:
            colors[i, 1:3] = 2.0 * value
    return colors


def plot_quadtree(
    tree: QuadTree,
    level_set: LevelSetFunction,
    color_by_level: bool = False,
) -> Figure:
    """
    Plot the leaf cells and the interface.

    Args:
        tree: The mesh.
        level_set: Interface definition.
        color_by_level: Fill cells by refinement level, split by the sign at their centre.
    """
    leaves = get_leaf_cells(tree)
    domain = tree.domain

    fig, ax = plt.subplots(figsize=(10, 10))
    ax.set_title("Quadtree mesh with Whitney decomposition (fully-threaded structure)")
    ax.set_aspect("equal")
    ax.set_xlim(domain.x_min, domain.x_max)
    ax.set_ylim(domain.y_min, domain.y_max)

    collection = PatchCollection(_rectangles(leaves), edgecolor="black", linewidth=0.5)
    if color_by_level:
        max_level = max(max(cell.level for cell in leaves), 1)
        colors = np.zeros((len(leaves), 4))
        for i, cell in enumerate(leaves):
            value = cell.level / max_level
            if level_set(*cell.center) < 0.0:
                colors[i] = (0.8 * value, 0.2, 1.0 - 0.8 * value, 0.4)
            else:
                colors[i] = (0.2 * value, 0.2 + 0.6 * value, 0.9 - 0.5 * value, 0.2)
        collection.set_facecolor(colors)
    else:
        collection.set_facecolor("none")
    ax.add_collection(collection)

    _draw_interface(ax, level_set, (domain.x_min, domain.x_max), (domain.y_min, domain.y_max))
    return fig


def plot_geometric_fractions(
    tree: QuadTree,
    level_set: LevelSetFunction,
    num_points: int = 8,
) -> Figure:
    """
    Plot volume fractions (left) and face fractions (right).

    Face colours: north red, south green, east blue, west yellow; line width
    grows with the fraction.
    """
    leaves = get_leaf_cells(tree)
    geometries = compute_fractions(leaves, level_set, num_points=num_points)
    domain = tree.domain

    fig, (ax_volume, ax_faces) = plt.subplots(1, 2, figsize=(18, 9))
    for ax in (ax_volume, ax_faces):
        ax.set_aspect("equal")
        ax.set_xlim(domain.x_min, domain.x_max)
        ax.set_ylim(domain.y_min, domain.y_max)

    ax_volume.set_title("Volume fraction")
    volume = np.array([geometries[cell.index].volume_fraction for cell in leaves])
    collection = PatchCollection(_rectangles(leaves), cmap="Blues", edgecolor="black", linewidth=0.5)
    collection.set_array(volume)
    collection.set_clim(0.0, 1.0)
    ax_volume.add_collection(collection)
    fig.colorbar(collection, ax=ax_volume, fraction=0.046)

    for cell in leaves:
        if cell.width > domain.width / 30 and cell.height > domain.height / 30:
            ax_volume.text(*cell.center, f"{geometries[cell.index].volume_fraction:.2f}",
                           ha="center", va="center", fontsize=8, color="gray")

    ax_faces.set_title("Surface fractions")
    segments, colors, widths = [], [], []
    for cell in leaves:
        geom = geometries[cell.index]
        x0, y0, x1, y1 = cell.x_min, cell.y_min, cell.x_max, cell.y_max
        for segment, value, rgb in (
            (((x0, y1), (x1, y1)), geom.face_fraction_north, (1.0, 0.0, 0.0)),
            (((x0, y0), (x1, y0)), geom.face_fraction_south, (0.0, 1.0, 0.0)),
            (((x1, y0), (x1, y1)), geom.face_fraction_east, (0.0, 0.0, 1.0)),
            (((x0, y0), (x0, y1)), geom.face_fraction_west, (1.0, 1.0, 0.0)),
        ):
            segments.append(segment)
            colors.append(tuple(channel * value for channel in rgb))
            widths.append(3.0 * value + 0.5)
    ax_faces.add_collection(LineCollection(segments, colors=colors, linewidths=widths))

    for ax in (ax_volume, ax_faces):
        _draw_interface(ax, level_set, (domain.x_min, domain.x_max), (domain.y_min, domain.y_max))
    return fig


def plot_interface_zoom(
    tree: QuadTree,
    level_set: LevelSetFunction,
    zoom_factor: float = 0.3,
    num_points: int = 10,
) -> Figure:
    """
    Plot an overview next to a zoom on the cells crossed by the interface.

    Args:
        tree: The mesh.
        level_set: Interface definition.
        zoom_factor: Margin added around the mixed cells, relative to their extent.
        num_points: Quadrature order for the fractions.

    Raises:
        ValueError: If no leaf is crossed by the interface.
    """
    leaves = get_leaf_cells(tree)
    mixed = [cell for cell in leaves if is_mixed_cell(cell, level_set)]
    if not mixed:
        raise ValueError("No mixed cells found to zoom on interface.")

    geometries = compute_fractions(leaves, level_set, num_points=num_points)
    domain = tree.domain

    x_min = min(cell.x_min for cell in mixed)
    x_max = max(cell.x_max for cell in mixed)
    y_min = min(cell.y_min for cell in mixed)
    y_max = max(cell.y_max for cell in mixed)
    width, height = x_max - x_min, y_max - y_min
    x_min = max(domain.x_min, x_min - width * zoom_factor)
    x_max = min(domain.x_max, x_max + width * zoom_factor)
    y_min = max(domain.y_min, y_min - height * zoom_factor)
    y_max = min(domain.y_max, y_max + height * zoom_factor)

    fig, (ax_overview, ax_zoom) = plt.subplots(1, 2, figsize=(18, 9), width_ratios=(1, 2))

    ax_overview.set_title("Overview")
    ax_overview.set_aspect("equal")
    ax_overview.set_xlim(domain.x_min, domain.x_max)
    ax_overview.set_ylim(domain.y_min, domain.y_max)
    overview = PatchCollection(_rectangles(leaves), edgecolor="black", linewidth=0.3)
    overview.set_facecolor(_fraction_colors([geometries[cell.index] for cell in leaves]))
    ax_overview.add_collection(overview)
    ax_overview.add_patch(Rectangle((x_min, y_min), x_max - x_min, y_max - y_min,
                                    facecolor=(1.0, 0.0, 0.0, 0.2), edgecolor="red", linewidth=2))
    _draw_interface(ax_overview, level_set, (domain.x_min, domain.x_max), (domain.y_min, domain.y_max))

    ax_zoom.set_title("Zoom on interface - Volume fraction")
    ax_zoom.set_xlabel("x")
    ax_zoom.set_ylabel("y")
    ax_zoom.set_aspect("equal")
    ax_zoom.set_xlim(x_min, x_max)
    ax_zoom.set_ylim(y_min, y_max)
    visible = [
        cell for cell in leaves
        if cell.x_min <= x_max and cell.x_max >= x_min and cell.y_min <= y_max and cell.y_max >= y_min
    ]
    zoom = PatchCollection(_rectangles(visible), edgecolor="black", linewidth=1.0)
    zoom.set_facecolor(_fraction_colors([geometries[cell.index] for cell in visible]))
    ax_zoom.add_collection(zoom)

    for cell in visible:
        if (x_max - x_min) / 20 < cell.width and is_mixed_cell(cell, level_set):
            value = geometries[cell.index].volume_fraction
            ax_zoom.text(*cell.center, f"{value:.2f}", ha="center", va="center",
                         fontsize=min(14.0, 6.0 + 40.0 * cell.width / (x_max - x_min)),
                         color="black" if value > 0.3 else "white")
    _draw_interface(ax_zoom, level_set, (x_min, x_max), (y_min, y_max), linewidth=3.0)
    return fig
