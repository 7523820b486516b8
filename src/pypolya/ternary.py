"""
Ternary plot geometry.

Simplex points are (p1, p2) pairs of the white win and draw probabilities,
the black win probability being implied as 1 - p1 - p2. Plot coordinates
follow SVG orientation (y grows downwards): white win certainty is the
bottom-left corner, draw certainty the top corner and black win certainty
the bottom-right corner.
"""

import math
from typing import Iterator, List, Tuple

Point = Tuple[float, float]
Triangle = Tuple[Point, Point, Point]

# The length of the side of the triangle
SIDE = 400.
# Ratio of altitude to side of an equilateral triangle
ALTITUDE_RATIO = math.sqrt(3.) / 2.


def to_plot_coords(point: Point, side: float = SIDE) -> Point:
    """Convert (white win prob, draw prob) to coordinates on the plot."""
    p1, p2 = point
    return (
        side * (1. - p1 - p2 / 2.),
        side * (1. - ALTITUDE_RATIO * p2),
    )


def corners(side: float = SIDE) -> Tuple[Point, Point, Point]:
    """Plot coordinates of the white win, draw and black win corners."""
    return (
        to_plot_coords((1., 0.), side),
        to_plot_coords((0., 1.), side),
        to_plot_coords((0., 0.), side),
    )


def edge_ticks(count: int) -> List[float]:
    """
    Fractions 1/count, 2/count, ..., (count-1)/count in ascending order.

    The corners (0 and 1) are left out so ticks on the three edges never
    coincide.
    """
    if count < 0:
        raise ValueError(f"Tick count cannot be negative: {count}")
    return [index / count for index in range(1, count)]


def centroid(triangle: Triangle) -> Point:
    """Mean of the three vertices of a simplex triangle."""
    return (
        sum(vertex[0] for vertex in triangle) / 3.,
        sum(vertex[1] for vertex in triangle) / 3.,
    )


class TriangleMesh:
    """
    Uniform subdivision of the simplex into resolution**2 small triangles.

    Rows run from the draw corner (p2 = 1) down to the p2 = 0 edge. Row r
    (1-based) is a trapezoidal strip holding 2r - 1 triangles of
    alternating orientation; each triangle after the first reuses the last
    two vertices of its predecessor and takes one new vertex alternately
    from the upper and the lower edge of the strip.

    The mesh can be iterated any number of times; triangles are generated
    lazily on each pass.
    """

    def __init__(self, resolution: int):
        if resolution < 0:
            raise ValueError(f"Mesh resolution cannot be negative: {resolution}")
        self.resolution = resolution

    def __len__(self) -> int:
        return self.resolution * self.resolution

    def __iter__(self) -> Iterator[Triangle]:
        n = self.resolution
        for row in range(1, n + 1):
            top = 1. - (row - 1) / n
            bottom = 1. - row / n
            left = row / n
            right = (row - 1) / n

            point1 = (left, bottom)
            point2 = (right, top)
            point3 = (right, bottom)
            yield (point1, point2, point3)

            for index in range(2, 2 * row):
                point1, point2 = point2, point3
                point3 = (
                    (row - 1 - index // 2) / n,
                    1. - (row - (index - 1) % 2) / n,
                )
                yield (point1, point2, point3)

    def __repr__(self) -> str:
        return f"TriangleMesh(resolution={self.resolution})"


def subdivide(resolution: int) -> TriangleMesh:
    """Triangular mesh of the simplex with `resolution` divisions per edge."""
    return TriangleMesh(resolution)
