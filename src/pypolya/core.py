"""
Core Python interface for Polya (Dirichlet-multinomial) model fitting
"""

import numpy as np
import pandas as pd
from typing import Union, Dict, Any, Optional
from sklearn.base import BaseEstimator

from .stats import (
    DEFAULT_INIT_ALPHA,
    DEFAULT_MAX_ITER,
    check_counts,
    dirichlet_multinomial_loglik,
    dirichlet_pdf,
    fit_polya,
)

OUTCOME_NAMES = ["white_win", "draw", "black_win"]


class PolyaFitResult:
    """
    Results from Polya model fitting.

    Attributes:
        alpha (np.ndarray): Fitted Dirichlet concentration parameters
        n_iter (int): Number of fixed-point rounds until convergence
        n_samples (int): Number of count triples in the dataset
        feature_names (list): Names of the three outcome categories
    """

    def __init__(self, alpha: np.ndarray, n_iter: int, n_samples: int,
                 feature_names: Optional[list] = None):
        self.alpha = alpha
        self.n_iter = n_iter
        self.n_samples = n_samples
        self.feature_names = feature_names if feature_names is not None else list(OUTCOME_NAMES)

    @property
    def precision(self) -> float:
        """Sum of the concentration parameters."""
        return float(self.alpha.sum())

    @property
    def mean(self) -> np.ndarray:
        """Expected outcome probabilities under the fitted Dirichlet."""
        return self.alpha / self.alpha.sum()

    def density(self, p1, p2):
        """Fitted Dirichlet density at (p1, p2, 1 - p1 - p2)."""
        return dirichlet_pdf(self.alpha, p1, p2)

    def get_alpha_series(self) -> pd.Series:
        """Get the concentration parameters as a pandas Series."""
        return pd.Series(self.alpha, index=self.feature_names, name="alpha")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the fitting results."""
        return {
            "n_samples": self.n_samples,
            "n_iter": self.n_iter,
            "alpha": self.alpha,
            "precision": self.precision,
            "mean": self.mean,
        }


class PolyaFitter(BaseEstimator):
    """
    Dirichlet-multinomial (Polya) model for three-outcome count data.

    This class provides a scikit-learn style interface to Minka's
    fixed-point maximum-likelihood estimate of the Dirichlet prior.

    Parameters:
        init_alpha (float or array-like): Starting point of the iteration
            (default: 10 for every category)
        tol (float): Squared step below which iteration stops
            (default: None, meaning float64 machine epsilon)
        max_iter (int): Round limit before ConvergenceError (default: 100000)
        verbose (bool): Whether to log fitting progress (default: False)

    Attributes:
        alpha_ (np.ndarray): Fitted concentration parameters
        n_iter_ (int): Number of rounds run
        result_ (PolyaFitResult): Fitting results (available after fit)
    """

    def __init__(self, init_alpha: Union[float, np.ndarray] = DEFAULT_INIT_ALPHA,
                 tol: Optional[float] = None, max_iter: int = DEFAULT_MAX_ITER,
                 verbose: bool = False):
        self.init_alpha = init_alpha
        self.tol = tol
        self.max_iter = max_iter
        self.verbose = verbose

    @property
    def result(self):
        """Alias for result_ for convenience."""
        return getattr(self, 'result_', None)

    @property
    def is_fitted(self) -> bool:
        return hasattr(self, 'result_')

    def _validate_input(self, X: Union[np.ndarray, pd.DataFrame, list],
                        for_fitting: bool = True) -> tuple:
        """Validate and convert input data."""
        if isinstance(X, pd.DataFrame):
            feature_names = [str(column) for column in X.columns]
            X_array = X.values
        elif isinstance(X, (np.ndarray, list, tuple)):
            feature_names = None
            X_array = np.asarray(X)
        else:
            raise ValueError("Input must be a pandas DataFrame, numpy array or list of count triples")

        return check_counts(X_array, for_fitting=for_fitting), feature_names

    def fit(self, X: Union[np.ndarray, pd.DataFrame], y=None) -> 'PolyaFitter':
        """
        Fit the Polya model to the data.

        Parameters:
            X (array-like): Count triples of shape (n_samples, 3)
                          Can be a pandas DataFrame or numpy array
            y: Ignored, present for scikit-learn API consistency

        Returns:
            self : PolyaFitter
                Returns self for method chaining
        """
        X_array, feature_names = self._validate_input(X)

        alpha, n_iter = fit_polya(
            X_array,
            init_alpha=self.init_alpha,
            tol=self.tol,
            max_iter=self.max_iter,
            verbose=self.verbose,
            return_n_iter=True
        )

        self.alpha_ = alpha
        self.n_iter_ = n_iter
        self.result_ = PolyaFitResult(
            alpha,
            n_iter=n_iter,
            n_samples=X_array.shape[0],
            feature_names=feature_names
        )
        return self

    def score(self, X: Union[np.ndarray, pd.DataFrame], y=None) -> float:
        """
        Return the log-likelihood of the data under the fitted model.

        Parameters:
            X (array-like): Count triples
            y: Ignored

        Returns:
            float: Log-likelihood (higher is better)
        """
        if not self.is_fitted:
            raise ValueError("Model must be fitted before scoring")

        X_array, _ = self._validate_input(X, for_fitting=False)
        return dirichlet_multinomial_loglik(self.alpha_, X_array)
