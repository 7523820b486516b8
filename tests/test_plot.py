"""
Tests for the SVG ternary plots
"""

import io

import pytest
import numpy as np
from matplotlib.collections import PolyCollection
from matplotlib.patches import Circle

from pypolya.openings import OpeningResult
from pypolya.plot import (
    TICK_LENGTH,
    density_colors,
    dirichlet_figure,
    draw_dirichlet_plot,
    draw_scatter_plot,
    scatter_figure,
    shaded_triangles,
    tick_lines,
)
from pypolya.ternary import SIDE, to_plot_coords


class TestTickLines:
    """Test graduation line geometry"""

    def setup_method(self):
        self.lines = tick_lines(10)

    def test_line_counts(self):
        assert set(self.lines) == {"draw", "black_win", "white_win"}
        for axis_lines in self.lines.values():
            assert len(axis_lines) == 9

    def test_draw_lines_are_horizontal(self):
        """Test that constant-draw lines keep their height"""
        for inner, outer in self.lines["draw"]:
            assert inner[1] == pytest.approx(outer[1])
            assert outer[0] < inner[0]

    def test_draw_lines_mark_fractions(self):
        """Test that draw line i sits at draw probability (i + 1) / 10"""
        for index, (inner, _) in enumerate(self.lines["draw"]):
            expected = to_plot_coords((0., (index + 1) / 10.))
            assert inner == pytest.approx(expected)

    def test_lines_stick_out_by_tick_length(self):
        """Test that each line leaves the triangle by TICK_LENGTH"""
        for axis, edge_point in [
            ("black_win", lambda i: to_plot_coords((0., 1. - (i + 1) / 10.))),
            ("white_win", lambda i: to_plot_coords(((i + 1) / 10., 0.))),
            ("draw", lambda i: to_plot_coords((1. - (i + 1) / 10., (i + 1) / 10.))),
        ]:
            for index, (_, outer) in enumerate(self.lines[axis]):
                assert np.hypot(*np.subtract(outer, edge_point(index))) == pytest.approx(TICK_LENGTH)

    def test_no_ticks(self):
        assert all(lines == [] for lines in tick_lines(1).values())


class TestShading:
    """Test the density shading data"""

    def test_shaded_triangles_shape(self):
        polygons, values = shaded_triangles([2., 2., 2.], resolution=25)

        assert polygons.shape == (625, 3, 2)
        assert values.shape == (625,)
        assert np.all(values >= 0)

    def test_polygons_inside_plot_triangle(self):
        polygons, _ = shaded_triangles([2., 3., 4.], resolution=5)

        assert np.all(polygons[..., 0] >= -1e-9)
        assert np.all(polygons[..., 0] <= SIDE + 1e-9)
        assert np.all(polygons[..., 1] <= SIDE + 1e-9)

    def test_uniform_density_is_flat(self):
        _, values = shaded_triangles([1., 1., 1.], resolution=4)

        np.testing.assert_allclose(values, 2.0)

    def test_density_colors(self):
        """Test that the highest density is red and zero density is blue"""
        colors = density_colors(np.array([0., 0.5, 1.]))

        np.testing.assert_allclose(colors[0], [0., 0., 1.], atol=1e-12)
        np.testing.assert_allclose(colors[2], [1., 0., 0.], atol=1e-12)
        assert colors.shape == (3, 3)

    def test_density_colors_all_zero(self):
        colors = density_colors(np.zeros(4))

        assert np.all(np.isfinite(colors))


class TestFigures:
    """Test the content of the plot figures"""

    def test_dirichlet_figure_shades_every_triangle(self):
        fig = dirichlet_figure(np.array([5., 3., 2.]), resolution=10)
        ax = fig.axes[0]

        shading = [c for c in ax.collections if isinstance(c, PolyCollection)]
        assert len(shading) == 1
        assert len(shading[0].get_paths()) == 100

    def test_axis_labels(self):
        fig = dirichlet_figure(np.array([2., 2., 2.]), resolution=4)
        labels = {text.get_text() for text in fig.axes[0].texts}

        assert {"Draw", "Black Win", "White Win"} <= labels
        assert {"10", "50", "90"} <= labels

    def test_scatter_figure_circles(self):
        """Test one circle per outcome triple, the most common being largest"""
        counts = {OpeningResult(2, 1, 1): 4, OpeningResult(0, 4, 0): 1}
        fig = scatter_figure(counts, num_ticks=10)

        circles = [p for p in fig.axes[0].patches if isinstance(p, Circle)]
        radii = sorted(circle.get_radius() for circle in circles)
        assert radii == pytest.approx([SIDE / 20. / 2., SIDE / 20.])

    def test_zero_ticks_rejected(self):
        with pytest.raises(ValueError, match="num_ticks"):
            scatter_figure({OpeningResult(1, 1, 1): 1}, num_ticks=0)

        with pytest.raises(ValueError, match="num_ticks"):
            draw_dirichlet_plot(io.StringIO(), [2., 2., 2.], num_ticks=0)


class TestSvgOutput:
    """Test that the plots are written as SVG documents"""

    def test_scatter_plot(self, tmp_path):
        counts = {OpeningResult(2, 1, 1): 3, OpeningResult(0, 4, 0): 1, OpeningResult(1, 0, 3): 2}
        path = tmp_path / "scatter_plot.svg"

        draw_scatter_plot(path, counts)

        content = path.read_text(encoding="utf-8")
        assert "<svg" in content
        assert content.rstrip().endswith("</svg>")

    def test_scatter_plot_to_stream(self):
        buffer = io.StringIO()

        draw_scatter_plot(buffer, {OpeningResult(1, 1, 1): 1})

        assert "<svg" in buffer.getvalue()

    def test_dirichlet_plot(self, tmp_path):
        path = tmp_path / "dirichlet_contour_plot.svg"

        draw_dirichlet_plot(path, np.array([5., 3., 2.]), resolution=10)

        content = path.read_text(encoding="utf-8")
        assert "<svg" in content
        assert "PolyCollection" in content

    def test_dirichlet_plot_rejects_bad_alpha(self, tmp_path):
        with pytest.raises(ValueError):
            draw_dirichlet_plot(tmp_path / "bad.svg", [1., -1., 1.])
