"""
pyPolya: Polya (Dirichlet-multinomial) fitting for opening book analysis

This package fits a Dirichlet distribution to the win / draw / loss
counts of chess openings and draws ternary plots of the observations and
of the fitted density.
"""

from loguru import logger

from .core import PolyaFitter, PolyaFitResult
from .exceptions import ConvergenceError, PGNFormatError, PolyaError
from .stats import dirichlet_pdf, fit_polya
from .ternary import edge_ticks, subdivide, to_plot_coords

__version__ = "0.1.0"
__all__ = [
    "PolyaFitter",
    "PolyaFitResult",
    "ConvergenceError",
    "PGNFormatError",
    "PolyaError",
    "dirichlet_pdf",
    "fit_polya",
    "edge_ticks",
    "subdivide",
    "to_plot_coords",
]

# Library code stays silent unless an application enables it
logger.disable("pypolya")
