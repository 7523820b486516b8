"""
Aggregation of engine self-play games into per-opening outcome counts.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Mapping, TextIO, Tuple

import chess.pgn
import numpy as np
import pandas as pd
from loguru import logger

from .exceptions import PGNFormatError

# PGN result tag -> index in the (white win, draw, black win) triple
RESULT_INDEX = {
    "1-0": 0,
    "1/2-1/2": 1,
    "0-1": 2,
}


@dataclass(frozen=True)
class OpeningResult:
    """Outcome counts of all games started from one opening position."""
    white_win_count: int
    draw_count: int
    black_win_count: int

    @property
    def total_games(self) -> int:
        return self.white_win_count + self.draw_count + self.black_win_count

    @property
    def white_win_proportion(self) -> float:
        return self.white_win_count / self.total_games

    @property
    def draw_proportion(self) -> float:
        return self.draw_count / self.total_games

    @property
    def black_win_proportion(self) -> float:
        return self.black_win_count / self.total_games

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.white_win_count, self.draw_count, self.black_win_count)


def read_opening_stats(handle: TextIO) -> Tuple[Dict[str, OpeningResult], int]:
    """
    Count game outcomes per starting position in a PGN stream.

    Every game must carry a FEN tag (the opening position) and a decisive
    or drawn Result tag.

    Returns:
        dict: FEN -> OpeningResult
        int: Total number of games read
    """
    counts: Dict[str, list] = {}
    total_games = 0

    while True:
        headers = chess.pgn.read_headers(handle)
        if headers is None:
            break
        total_games += 1

        fen = headers.get("FEN")
        if not fen:
            raise PGNFormatError("FEN tag not found", total_games)

        result = headers.get("Result", "*")
        if result not in RESULT_INDEX:
            raise PGNFormatError(f"Bad game termination found: {result!r}", total_games)

        counts.setdefault(fen, [0, 0, 0])[RESULT_INDEX[result]] += 1

    logger.debug("Read {} games over {} openings", total_games, len(counts))

    stats = {fen: OpeningResult(*triple) for fen, triple in counts.items()}
    return stats, total_games


def wdb_counts(opening_stats: Mapping[str, OpeningResult]) -> Counter:
    """Number of openings sharing each distinct outcome triple."""
    return Counter(opening_stats.values())


def count_matrix(opening_stats: Mapping[str, OpeningResult]) -> np.ndarray:
    """Count triples of shape (n_openings, 3) for fitting."""
    if not opening_stats:
        return np.empty((0, 3), dtype=np.int64)
    return np.array([result.as_tuple() for result in opening_stats.values()],
                    dtype=np.int64)


def opening_stats_frame(opening_stats: Mapping[str, OpeningResult]) -> pd.DataFrame:
    """Per-opening totals and outcome proportions, one row per opening."""
    rows = [
        {
            # Only the piece placement field identifies the opening in the table
            "FEN": fen.split(" ")[0],
            "total": result.total_games,
            "white_win": result.white_win_proportion,
            "draw": result.draw_proportion,
            "black_win": result.black_win_proportion,
        }
        for fen, result in opening_stats.items()
    ]
    return pd.DataFrame(rows, columns=["FEN", "total", "white_win", "draw", "black_win"])


def wdb_counts_frame(counts: Mapping[OpeningResult, int]) -> pd.DataFrame:
    """Outcome proportions written as 'w-d-b' with their multiplicity."""
    rows = [
        {
            "WDB": f"{result.white_win_proportion}-{result.draw_proportion}"
                   f"-{result.black_win_proportion}",
            "Count": count,
        }
        for result, count in counts.items()
    ]
    return pd.DataFrame(rows, columns=["WDB", "Count"])
