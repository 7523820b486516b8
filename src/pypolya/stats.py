"""
Dirichlet density and Polya (Dirichlet-multinomial) fitting for
three-outcome count data.
"""

import warnings
from typing import Union, Sequence

import numpy as np
from loguru import logger
from scipy.special import digamma, gammaln, xlogy

from .exceptions import ConvergenceError

N_CATEGORIES = 3

# Squared step below which the fixed-point iteration is considered converged
DEFAULT_TOL = np.finfo(np.float64).eps
DEFAULT_MAX_ITER = 100000
DEFAULT_INIT_ALPHA = 10.0

# Slack allowed on p3 = 1 - p1 - p2 for round-off at the simplex boundary
SIMPLEX_ROUNDOFF = 1e-12

_PROGRESS_EVERY = 1000

ArrayLike = Union[np.ndarray, Sequence]


def check_alpha(alpha: ArrayLike) -> np.ndarray:
    """Return alpha as a float array of three positive finite values."""
    alpha = np.asarray(alpha, dtype=np.float64)
    if alpha.shape != (N_CATEGORIES,):
        raise ValueError(f"alpha must have exactly {N_CATEGORIES} values, got shape {alpha.shape}")
    if not np.all(np.isfinite(alpha)) or np.any(alpha <= 0):
        raise ValueError(f"alpha values must be positive and finite: {alpha}")
    return alpha


def check_counts(samples: ArrayLike, for_fitting: bool = True) -> np.ndarray:
    """
    Validate a collection of count triples and return it as an int64 array
    of shape (n_samples, 3).

    With for_fitting, also reject sets the fixed-point iteration cannot
    start from: all-zero data and categories never observed.
    """
    counts = np.asarray(samples)

    if counts.ndim != 2:
        raise ValueError("Samples must be a 2-dimensional array of count triples")
    if counts.shape[0] == 0:
        raise ValueError("At least one sample is required")
    if counts.shape[1] != N_CATEGORIES:
        raise ValueError(
            f"Each sample must have exactly {N_CATEGORIES} counts, got {counts.shape[1]}"
        )
    if not np.issubdtype(counts.dtype, np.number):
        raise ValueError("Samples must contain numeric counts")
    if not np.all(np.isfinite(counts)):
        raise ValueError("Samples cannot contain NaN or infinite counts")
    if np.any(counts < 0):
        raise ValueError("Samples cannot contain negative counts")

    if not np.issubdtype(counts.dtype, np.integer):
        if not np.all(counts == np.round(counts)):
            warnings.warn(
                "Input data contains non-integer values. Converting to integers.",
                UserWarning
            )
    # Reductions over either axis must not depend on the input memory layout
    counts = np.ascontiguousarray(counts, dtype=np.int64)
    if not for_fitting:
        return counts

    if counts.sum() == 0:
        raise ValueError("Samples must contain at least one non-zero count")
    if np.any(counts.sum(axis=0) == 0):
        raise ValueError(
            "Every category must be observed at least once; "
            f"category totals are {counts.sum(axis=0).tolist()}"
        )
    return counts


def dirichlet_pdf(alpha: ArrayLike, p1, p2):
    """
    Density of the 3-category Dirichlet distribution at (p1, p2, 1 - p1 - p2).

    Parameters:
        alpha (array-like): Concentration parameters, three positive values
        p1, p2 (float or np.ndarray): First two simplex coordinates

    Returns:
        float or np.ndarray: Density value(s), same shape as the broadcast
        of p1 and p2
    """
    alpha = check_alpha(alpha)
    p1 = np.asarray(p1, dtype=np.float64)
    p2 = np.asarray(p2, dtype=np.float64)

    if np.any(p1 < 0):
        raise ValueError("p1 has a negative value")
    if np.any(p2 < 0):
        raise ValueError("p2 has a negative value")
    p3 = 1.0 - p1 - p2
    if np.any(p3 < -SIMPLEX_ROUNDOFF):
        raise ValueError("p1 + p2 exceeds 1, point is outside the simplex")
    p3 = np.maximum(p3, 0.0)

    # log-space keeps Gamma(sum(alpha)) from overflowing for large alphas
    log_norm = gammaln(alpha.sum()) - gammaln(alpha).sum()
    log_density = (
        log_norm
        + xlogy(alpha[0] - 1.0, p1)
        + xlogy(alpha[1] - 1.0, p2)
        + xlogy(alpha[2] - 1.0, p3)
    )
    density = np.exp(log_density)
    return density[()] if density.ndim == 0 else density


def dirichlet_multinomial_loglik(alpha: ArrayLike, samples: ArrayLike) -> float:
    """Log-likelihood of count triples under the Polya model with given alpha."""
    alpha = check_alpha(alpha)
    counts = np.asarray(samples, dtype=np.float64)
    totals = counts.sum(axis=1)
    alpha_sum = alpha.sum()

    log_coef = gammaln(totals + 1) - gammaln(counts + 1).sum(axis=1)
    log_ratio = (
        gammaln(alpha_sum) - gammaln(totals + alpha_sum)
        + (gammaln(counts + alpha) - gammaln(alpha)).sum(axis=1)
    )
    return float(np.sum(log_coef + log_ratio))


def fit_polya(samples: ArrayLike, init_alpha: Union[float, ArrayLike] = DEFAULT_INIT_ALPHA,
              tol: float = None, max_iter: int = DEFAULT_MAX_ITER,
              verbose: bool = False, return_n_iter: bool = False):
    """
    Fit the Dirichlet prior of a Dirichlet-multinomial (Polya) model to
    count triples with Minka's fixed-point iteration.

    See "Estimating a Dirichlet distribution", T. P. Minka, section 2.

    Parameters:
        samples (array-like): Count triples of shape (n_samples, 3), in the
            order (white wins, draws, black wins)
        init_alpha (float or array-like): Starting point (default: 10 for
            every category)
        tol (float): Squared distance between consecutive iterates below
            which iteration stops (default: float64 machine epsilon)
        max_iter (int): Maximum number of rounds before ConvergenceError
        verbose (bool): Log progress at INFO instead of DEBUG level
        return_n_iter (bool): Also return the number of rounds run

    Returns:
        np.ndarray: Fitted concentration parameters (alpha_white,
        alpha_draw, alpha_black)
        int: Number of rounds run, only if return_n_iter is True

    Raises:
        ValueError: If the samples are empty, malformed or degenerate
        ConvergenceError: If max_iter rounds pass without convergence
    """
    counts = check_counts(samples).astype(np.float64)
    totals = counts.sum(axis=1)

    if tol is None:
        tol = DEFAULT_TOL
    if max_iter < 1:
        raise ValueError(f"max_iter must be at least 1, got {max_iter}")

    alpha = check_alpha(np.broadcast_to(
        np.asarray(init_alpha, dtype=np.float64), (N_CATEGORIES,)
    ).copy())
    level = "INFO" if verbose else "DEBUG"

    dist2 = np.inf
    for n_iter in range(1, max_iter + 1):
        alpha_sum = alpha.sum()
        denominator = np.sum(digamma(totals + alpha_sum) - digamma(alpha_sum))
        numerator = np.sum(digamma(counts + alpha) - digamma(alpha), axis=0)
        new_alpha = alpha * numerator / denominator

        dist2 = float(np.sum((alpha - new_alpha) ** 2))
        alpha = new_alpha

        if dist2 < tol:
            logger.log(level, "Polya fit converged after {} iterations: alpha={}",
                       n_iter, alpha.tolist())
            if return_n_iter:
                return alpha, n_iter
            return alpha

        if n_iter % _PROGRESS_EVERY == 0:
            logger.log(level, "Iteration {}: squared step {:.3e}, alpha={}",
                       n_iter, dist2, alpha.tolist())

    raise ConvergenceError(alpha, max_iter, dist2)
