"""
Pytest configuration and fixtures for pyPolya tests
"""

import pytest
import numpy as np


def make_polya_samples(alpha, n_samples, mean_games=50, min_games=20, seed=42):
    """Draw count triples from a Dirichlet-multinomial model."""
    np.random.seed(seed)

    samples = []
    for i in range(n_samples):
        probs = np.random.dirichlet(alpha)
        total_games = np.random.poisson(mean_games) + min_games
        samples.append(np.random.multinomial(total_games, probs))

    return np.array(samples, dtype=np.int64)


@pytest.fixture
def polya_data():
    """Fixture providing count triples drawn with a known alpha"""
    true_alpha = np.array([5.0, 3.0, 2.0])
    return {
        'data': make_polya_samples(true_alpha, 300),
        'true_alpha': true_alpha,
        'n_samples': 300,
    }


@pytest.fixture
def underdispersed_data():
    """Fixture providing counts less spread out than a single multinomial"""
    return np.array([
        [10, 5, 5],
        [8, 6, 6],
        [12, 4, 4]
    ], dtype=np.int64)


@pytest.fixture
def overdispersed_data():
    """Fixture providing a small, widely spread set of count triples"""
    return np.array([
        [5, 0, 0],
        [0, 5, 0],
        [0, 0, 5],
        [2, 2, 1],
        [1, 1, 3]
    ], dtype=np.int64)


START_FENS = [
    "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1",
    "rnbqkbnr/pppppppp/8/8/3P4/8/PPP1PPPP/RNBQKBNR b KQkq - 0 1",
    "rnbqkbnr/pppppppp/8/8/2P5/8/PP1PPPPP/RNBQKBNR b KQkq - 0 1",
    "rnbqkbnr/pppppppp/8/8/8/5N2/PPPPPPPP/RNBQKB1R b KQkq - 1 1",
    "rnbqkbnr/pppppppp/8/8/8/6P1/PPPPPP1P/RNBQKBNR b KQkq - 0 1",
]

# Outcome counts (white wins, draws, black wins) per opening in START_FENS
START_COUNTS = [
    (5, 0, 0),
    (0, 5, 0),
    (0, 0, 5),
    (2, 2, 1),
    (1, 1, 3),
]


def make_pgn(games):
    """Build PGN text from (fen, result) pairs; fen may be None."""
    chunks = []
    for index, (fen, result) in enumerate(games):
        tags = [
            '[Event "Self-play"]',
            f'[Round "{index + 1}"]',
            '[White "Engine"]',
            '[Black "Engine"]',
            f'[Result "{result}"]',
        ]
        if fen is not None:
            tags.append(f'[FEN "{fen}"]')
            tags.append('[SetUp "1"]')
        chunks.append("\n".join(tags) + f"\n\n{result}\n")
    return "\n".join(chunks)


def games_from_counts(fens, counts):
    results = ("1-0", "1/2-1/2", "0-1")
    games = []
    for fen, triple in zip(fens, counts):
        for result, count in zip(results, triple):
            games.extend([(fen, result)] * count)
    return games


@pytest.fixture
def opening_pgn():
    """Fixture providing PGN text for START_FENS played START_COUNTS times"""
    return make_pgn(games_from_counts(START_FENS, START_COUNTS))
