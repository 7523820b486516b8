"""
Exceptions raised by pyPolya.

Hierarchy:
    PolyaError
    ├── ConvergenceError  - fixed-point iteration hit its round limit
    └── PGNFormatError    - a game record cannot be aggregated
"""

import numpy as np


class PolyaError(Exception):
    """Base exception for pyPolya"""
    pass


class ConvergenceError(PolyaError, RuntimeError):
    """The fixed-point iteration did not converge within max_iter rounds."""

    def __init__(self, alpha, n_iter: int, dist2: float):
        self.alpha = alpha
        self.n_iter = n_iter
        self.dist2 = dist2
        super().__init__(
            f"Polya fit did not converge after {n_iter} iterations "
            f"(last squared step {dist2:.3e}, alpha={np.asarray(alpha).tolist()})"
        )


class PGNFormatError(PolyaError, ValueError):
    """A game record is missing a FEN tag or has an unusable result."""

    def __init__(self, message: str, game_index: int = None):
        self.game_index = game_index
        if game_index is not None:
            message = f"game {game_index}: {message}"
        super().__init__(message)
