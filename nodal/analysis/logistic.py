"""One-covariate logistic regression used as a parametric cross-check."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

import warnings
from typing import Optional

import numpy as np
import statsmodels.api as sm
from scipy.special import expit
from statsmodels.tools.sm_exceptions import (
    PerfectSeparationError,
    PerfectSeparationWarning,
)

from nodal.exceptions import InsufficientDataError, NonConvergenceError
from nodal.utils import logging

logger = logging.get_default_logger()


class LogisticModel:
    """Fitted model ``P(label = 1 | x) = expit(intercept + slope * x)``."""

    def __init__(self, intercept: float, slope: float, n_iter: Optional[int] = None, converged: bool = True):
        self.intercept = float(intercept)
        self.slope = float(slope)
        self.n_iter = n_iter
        self.converged = converged

    @property
    def params(self) -> np.ndarray:
        return np.array([self.intercept, self.slope])

    def predict(self, x):
        p = expit(self.intercept + self.slope * np.asarray(x, dtype=float))
        return float(p) if np.ndim(p) == 0 else p

    def to_dict(self) -> dict:
        return {
            "intercept": self.intercept,
            "slope": self.slope,
            "n_iter": self.n_iter,
            "converged": self.converged,
        }

    def __repr__(self) -> str:
        return f"LogisticModel(intercept={self.intercept:.4f}, slope={self.slope:.4f})"


def _as_observations(observations) -> np.ndarray:
    if not isinstance(observations, np.ndarray):
        observations = list(observations)
    data = np.asarray(observations, dtype=float)
    if data.size == 0:
        data = data.reshape(0, 2)
    if data.ndim != 2 or data.shape[1] != 2:
        raise ValueError(f"Observations must be (x, label) pairs, got shape {data.shape}")

    return data


def _check_separation(x: np.ndarray, y: np.ndarray) -> None:
    """Raise if the labels are (quasi-)completely separated by x."""
    if np.all(y == y[0]):
        raise NonConvergenceError(f"All observations carry label {int(y[0])}")
    if np.ptp(x) == 0:
        raise NonConvergenceError("Covariate is constant; the design matrix is singular")

    x0, x1 = x[y == 0], x[y == 1]
    if x0.max() <= x1.min() or x1.max() <= x0.min():
        raise NonConvergenceError(
            "Labels are separated by the covariate; the maximum likelihood estimate is not finite"
        )


def fit_logistic(observations, max_iter: int = 100, tol: float = 1e-8) -> LogisticModel:
    """Fit a binomial GLM with logit link by iteratively reweighted least squares.

    Args:
        observations: Iterable of ``(x, label)`` pairs or an (n, 2) array
        max_iter: Maximum number of IRLS iterations
        tol: Convergence tolerance on the deviance

    Returns:
        LogisticModel: the fitted model

    Raises:
        InsufficientDataError: fewer than two observations
        NonConvergenceError: separation, singular design or no convergence
    """
    data = _as_observations(observations)
    if data.shape[0] < 2:
        raise InsufficientDataError(
            f"Logistic regression needs at least 2 observations, got {data.shape[0]}",
            size=data.shape[0],
        )

    x, y = data[:, 0], data[:, 1]
    if not np.all(np.isin(y, (0, 1))):
        raise ValueError("Labels must be 0 or 1")

    _check_separation(x, y)

    X = sm.add_constant(x, has_constant="add")
    model = sm.GLM(y, X, family=sm.families.Binomial())
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", PerfectSeparationWarning)
            result = model.fit(method="IRLS", maxiter=max_iter, tol=tol)
    except (PerfectSeparationError, PerfectSeparationWarning, np.linalg.LinAlgError) as e:
        raise NonConvergenceError(f"Logistic regression failed: {e}") from e

    n_iter = result.fit_history.get("iteration")
    params = np.asarray(result.params, dtype=float)
    if not result.converged or not np.all(np.isfinite(params)):
        raise NonConvergenceError(
            f"Logistic regression did not converge after {n_iter} iterations",
            params=params,
            n_iter=n_iter,
        )

    logger.debug(f"Logistic fit converged after {n_iter} iterations: {params}")

    return LogisticModel(params[0], params[1], n_iter=n_iter, converged=True)
