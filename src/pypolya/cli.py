"""
Command line entry point: analyse an opening book from engine self-play.
"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from . import __version__
from .core import PolyaFitter
from .exceptions import PolyaError
from .openings import (
    count_matrix,
    opening_stats_frame,
    read_opening_stats,
    wdb_counts,
    wdb_counts_frame,
)
from .plot import NUM_DIV, NUM_TICKS, dirichlet_figure, scatter_figure
from .stats import DEFAULT_MAX_ITER


def setup_logger(verbose: bool = False):
    """Route pyPolya log messages to stderr."""
    logger.remove()
    logger.enable("pypolya")
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
               "<cyan>{name}:{line}</cyan> - <level>{message}</level>"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pypolya",
        description="Analyzes opening books based on engine self-play"
    )
    parser.add_argument("input", metavar="INPUT",
                        help="A PGN file containing the engine self-play results")
    parser.add_argument("output", metavar="OUTPUT",
                        help="The path to output the analysis (must not exist)")
    parser.add_argument("--resolution", type=int, default=NUM_DIV,
                        help=f"Divisions per edge of the density mesh (default: {NUM_DIV})")
    parser.add_argument("--ticks", type=int, default=NUM_TICKS,
                        help=f"Graduations per plot axis, at least 1 (default: {NUM_TICKS})")
    parser.add_argument("--max-iter", type=int, default=DEFAULT_MAX_ITER,
                        help=f"Fixed-point round limit (default: {DEFAULT_MAX_ITER})")
    parser.add_argument("--tol", type=float, default=None,
                        help="Squared step tolerance (default: machine epsilon)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log fitting progress")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(input_path: str, output_dir: str, resolution: int = NUM_DIV,
        num_ticks: int = NUM_TICKS, max_iter: int = DEFAULT_MAX_ITER,
        tol: float = None, verbose: bool = False):
    """
    Write the opening statistics, the plots and the fitted alpha.

    The PGN is read, the model fitted and both plots built before the output
    directory is created, so a failed run leaves nothing behind.
    """
    with open(input_path, encoding="utf-8-sig") as handle:
        opening_stats, total_games = read_opening_stats(handle)
    counts = wdb_counts(opening_stats)

    fitter = PolyaFitter(tol=tol, max_iter=max_iter, verbose=verbose)
    fitter.fit(count_matrix(opening_stats))
    alpha = fitter.alpha_

    scatter = scatter_figure(counts, num_ticks=num_ticks)
    contour = dirichlet_figure(alpha, resolution=resolution, num_ticks=num_ticks)

    output_path = Path(output_dir)
    output_path.mkdir()

    print(f"Total games: {total_games}")
    print(f"Total openings: {len(opening_stats)}")
    opening_stats_frame(opening_stats).to_csv(output_path / "opening_stats.csv", index=False)
    wdb_counts_frame(counts).to_csv(output_path / "wdb_counts.csv", index=False)
    scatter.savefig(output_path / "scatter_plot.svg", format="svg")

    print(f"Fitted Dirichlet Alpha: ({alpha[0]:.3f}, {alpha[1]:.3f}, {alpha[2]:.3f})")
    contour.savefig(output_path / "dirichlet_contour_plot.svg", format="svg")
    logger.info("Analysis written to {}", output_path)
    return alpha


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(args.verbose)

    try:
        run(args.input, args.output, resolution=args.resolution,
            num_ticks=args.ticks, max_iter=args.max_iter, tol=args.tol,
            verbose=args.verbose)
    except (PolyaError, ValueError, OSError) as err:
        print(f"Something went wrong! Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
