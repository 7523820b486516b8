"""
SVG ternary plots of opening outcomes and of the fitted Dirichlet density.

Rendering goes through matplotlib's object-oriented Figure API so no pyplot
global state is touched. Data coordinates are the plot coordinates from
pypolya.ternary, with the y axis inverted to keep SVG orientation.
"""

from typing import Dict, List, Mapping, Tuple

import numpy as np
from loguru import logger
from matplotlib.collections import LineCollection, PolyCollection
from matplotlib.colors import hsv_to_rgb
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Polygon

from .openings import OpeningResult
from .stats import dirichlet_pdf
from .ternary import (
    ALTITUDE_RATIO,
    SIDE,
    Point,
    centroid,
    corners,
    edge_ticks,
    subdivide,
    to_plot_coords,
)

Line = Tuple[Point, Point]

# Margins around the plot
MARGIN = 80.
# The number of ticks on an axis
NUM_TICKS = 10
TICK_LENGTH = 40.
TICK_FONT_SIZE = 8.

AXIS_ARROW_SPACE = 60.
AXIS_LABEL_FONT_SIZE = 16.

# Divisions per edge of the mesh used for density shading
NUM_DIV = 25
# Hue of the lowest density, the highest being red (0)
MAX_HUE = 240.

DPI = 100


def tick_lines(num_ticks: int = NUM_TICKS) -> Dict[str, List[Line]]:
    """
    Graduation lines for each outcome axis, in plot coordinates.

    Each line runs across the triangle along a constant probability of one
    outcome and sticks out of the triangle by TICK_LENGTH; its outer end is
    where the percentage label goes. Line i of every axis marks the
    fraction edge_ticks(num_ticks)[i].
    """
    fractions = edge_ticks(num_ticks)

    # The ticks are ordered clockwise
    right_ticks = [to_plot_coords((0., 1. - prob)) for prob in fractions]
    bottom_ticks = [to_plot_coords((prob, 0.)) for prob in fractions]
    left_ticks = [to_plot_coords((1. - prob, prob)) for prob in fractions]

    draw_lines = [
        (end, (start[0] - TICK_LENGTH, start[1]))
        for start, end in zip(left_ticks, reversed(right_ticks))
    ]
    black_lines = [
        (start, (end[0] + TICK_LENGTH / 2., end[1] - TICK_LENGTH * ALTITUDE_RATIO))
        for start, end in zip(reversed(bottom_ticks), right_ticks)
    ]
    white_lines = [
        (start, (end[0] + TICK_LENGTH / 2., end[1] + TICK_LENGTH * ALTITUDE_RATIO))
        for start, end in zip(reversed(left_ticks), bottom_ticks)
    ]

    return {"draw": draw_lines, "black_win": black_lines, "white_win": white_lines}


def shaded_triangles(alpha, resolution: int = NUM_DIV) -> Tuple[np.ndarray, np.ndarray]:
    """
    Mesh triangles in plot coordinates with the density at their centroids.

    Returns:
        np.ndarray: Triangle corners of shape (resolution**2, 3, 2)
        np.ndarray: Density values of shape (resolution**2,)
    """
    mesh = subdivide(resolution)
    polygons = np.array(
        [[to_plot_coords(vertex) for vertex in triangle] for triangle in mesh],
        dtype=np.float64
    ).reshape(len(mesh), 3, 2)
    midpoints = np.array([centroid(triangle) for triangle in mesh],
                         dtype=np.float64).reshape(len(mesh), 2)

    values = dirichlet_pdf(alpha, midpoints[:, 0], midpoints[:, 1])
    return polygons, np.atleast_1d(values)


def density_colors(values: np.ndarray) -> np.ndarray:
    """RGB colors running from blue (lowest) to red (highest density)."""
    max_value = values.max() if values.size else 0.
    scale = max_value if max_value > 0 else 1.
    hue = MAX_HUE * (1. - values / scale)
    hsv = np.stack([hue / 360., np.ones_like(hue), np.ones_like(hue)], axis=-1)
    return hsv_to_rgb(hsv)


def _new_figure() -> Tuple[Figure, object]:
    top = SIDE * (1. - ALTITUDE_RATIO)
    width = SIDE + 2. * MARGIN
    height = SIDE - top + 2. * MARGIN

    fig = Figure(figsize=(width / DPI, height / DPI), dpi=DPI)
    ax = fig.add_axes([0., 0., 1., 1.])
    ax.set_xlim(-MARGIN, SIDE + MARGIN)
    ax.set_ylim(SIDE + MARGIN, top - MARGIN)
    ax.set_aspect("equal")
    ax.axis("off")
    return fig, ax


def _draw_axis_arrow(ax, start: Point, end: Point, label: str,
                     rotation: float, va: str):
    ax.annotate(
        "", xy=end, xytext=start,
        arrowprops=dict(arrowstyle="-|>", color="black", lw=1.5)
    )
    midpoint = ((start[0] + end[0]) / 2., (start[1] + end[1]) / 2.)
    ax.text(
        midpoint[0], midpoint[1], label,
        rotation=rotation, rotation_mode="anchor",
        ha="center", va=va, fontsize=AXIS_LABEL_FONT_SIZE
    )


def _draw_main_triangle(ax, num_ticks: int = NUM_TICKS):
    w_corner, d_corner, l_corner = corners()

    ax.add_patch(Polygon([w_corner, l_corner, d_corner], closed=True,
                         fill=False, edgecolor="black", linewidth=1.5, zorder=3))

    lines = tick_lines(num_ticks)
    fractions = edge_ticks(num_ticks)
    ax.add_collection(LineCollection(
        [line for axis_lines in lines.values() for line in axis_lines],
        colors="0.6", linewidths=0.5, zorder=2
    ))

    label_alignment = {
        "draw": dict(ha="right", va="center"),
        "black_win": dict(ha="left", va="bottom"),
        "white_win": dict(ha="left", va="top"),
    }
    for axis, axis_lines in lines.items():
        for (_, outer), perc in zip(axis_lines, fractions):
            ax.text(outer[0], outer[1], f"{100. * perc:.0f}",
                    fontsize=TICK_FONT_SIZE, **label_alignment[axis])

    left_midpoint = ((w_corner[0] + d_corner[0]) / 2., (w_corner[1] + d_corner[1]) / 2.)
    left_center = (
        left_midpoint[0] - AXIS_ARROW_SPACE * ALTITUDE_RATIO,
        left_midpoint[1] - AXIS_ARROW_SPACE / 2.,
    )
    _draw_axis_arrow(
        ax,
        (left_center[0] - SIDE / 8., left_center[1] + SIDE / 4. * ALTITUDE_RATIO),
        (left_center[0] + SIDE / 8., left_center[1] - SIDE / 4. * ALTITUDE_RATIO),
        "Draw", rotation=60., va="bottom"
    )

    right_midpoint = ((d_corner[0] + l_corner[0]) / 2., (d_corner[1] + l_corner[1]) / 2.)
    right_center = (
        right_midpoint[0] + AXIS_ARROW_SPACE * ALTITUDE_RATIO,
        right_midpoint[1] - AXIS_ARROW_SPACE / 2.,
    )
    _draw_axis_arrow(
        ax,
        (right_center[0] - SIDE / 8., right_center[1] - SIDE / 4. * ALTITUDE_RATIO),
        (right_center[0] + SIDE / 8., right_center[1] + SIDE / 4. * ALTITUDE_RATIO),
        "Black Win", rotation=-60., va="bottom"
    )

    bottom_midpoint = ((l_corner[0] + w_corner[0]) / 2., (l_corner[1] + w_corner[1]) / 2.)
    bottom_center = (bottom_midpoint[0], bottom_midpoint[1] + AXIS_ARROW_SPACE)
    _draw_axis_arrow(
        ax,
        (bottom_center[0] + SIDE / 4., bottom_center[1]),
        (bottom_center[0] - SIDE / 4., bottom_center[1]),
        "White Win", rotation=0., va="top"
    )


def _check_num_ticks(num_ticks: int):
    if num_ticks < 1:
        raise ValueError(f"num_ticks must be at least 1, got {num_ticks}")


def scatter_figure(wdb_counts: Mapping[OpeningResult, int],
                   num_ticks: int = NUM_TICKS) -> Figure:
    """
    Scatter plot of opening outcome proportions.

    One circle is drawn per distinct outcome triple; its radius grows with
    the square root of the number of openings sharing that triple.

    Parameters:
        wdb_counts (mapping): OpeningResult -> number of openings
        num_ticks (int): Graduations per axis, at least 1
    """
    _check_num_ticks(num_ticks)
    fig, ax = _new_figure()
    _draw_main_triangle(ax, num_ticks)

    max_count = float(max(wdb_counts.values(), default=1))
    for result, count in wdb_counts.items():
        center = to_plot_coords((result.white_win_proportion, result.draw_proportion))
        radius = SIDE / 2. / num_ticks * np.sqrt(count / max_count)
        ax.add_patch(Circle(center, radius, facecolor="tab:blue",
                            edgecolor="none", alpha=0.5, zorder=4))

    logger.debug("Drawing scatter plot of {} outcome triples", len(wdb_counts))
    return fig


def dirichlet_figure(alpha, resolution: int = NUM_DIV,
                     num_ticks: int = NUM_TICKS) -> Figure:
    """
    Contour plot of the Dirichlet density with parameters alpha.

    Parameters:
        alpha (array-like): Concentration parameters
        resolution (int): Divisions per edge of the shading mesh
        num_ticks (int): Graduations per axis, at least 1
    """
    _check_num_ticks(num_ticks)
    fig, ax = _new_figure()

    polygons, values = shaded_triangles(alpha, resolution)
    colors = density_colors(values)
    ax.add_collection(PolyCollection(
        polygons, facecolors=colors, edgecolors=colors,
        linewidths=0.5, zorder=1
    ))

    _draw_main_triangle(ax, num_ticks)

    logger.debug("Drawing Dirichlet plot over {} triangles", len(values))
    return fig


def draw_scatter_plot(handle, wdb_counts: Mapping[OpeningResult, int],
                      num_ticks: int = NUM_TICKS):
    """Write scatter_figure() to handle (a path or file) as SVG."""
    scatter_figure(wdb_counts, num_ticks).savefig(handle, format="svg")


def draw_dirichlet_plot(handle, alpha, resolution: int = NUM_DIV,
                        num_ticks: int = NUM_TICKS):
    """Write dirichlet_figure() to handle (a path or file) as SVG."""
    dirichlet_figure(alpha, resolution, num_ticks).savefig(handle, format="svg")
