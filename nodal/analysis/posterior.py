"""Posterior probability of recurrence from two class-conditional densities."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd

from nodal.analysis.difference import interpolate_onto
from nodal.analysis.kde import DensityCurve
from nodal.utils import logging

logger = logging.get_default_logger()

REFERENCES = ("no", "yes")
PRIOR_TOLERANCE = 1e-6


@dataclass(frozen=True, eq=False)
class PosteriorCurve:
    """P(recurrence | x) tabulated on a grid."""

    x: np.ndarray
    probability: np.ndarray

    def __post_init__(self):
        for name in ("x", "probability"):
            a = np.array(getattr(self, name), dtype=float)
            a.setflags(write=False)
            object.__setattr__(self, name, a)

        if self.x.shape != self.probability.shape:
            raise ValueError("Grid and probabilities must have equal length")

    def __len__(self) -> int:
        return self.x.size

    def at(self, x):
        """Linearly interpolated posterior at `x`."""
        return np.interp(x, self.x, self.probability)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"x": self.x, "probability": self.probability})


def priors_from_labels(labels) -> Tuple[float, float]:
    """Empirical ``(prior_no, prior_yes)`` from 0/1 labels."""
    y = np.asarray(labels).reshape(-1)
    if y.size == 0:
        raise ValueError("Cannot compute priors from an empty label vector")
    if not np.all(np.isin(y, (0, 1))):
        raise ValueError("Labels must be 0 or 1")

    prior_yes = float(np.mean(y == 1))
    return 1.0 - prior_yes, prior_yes


def _check_priors(prior_no: float, prior_yes: float) -> None:
    for name, p in (("prior_no", prior_no), ("prior_yes", prior_yes)):
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"{name} must lie in [0, 1], got {p}")
    if abs(prior_no + prior_yes - 1.0) > PRIOR_TOLERANCE:
        raise ValueError(f"Priors must sum to 1, got {prior_no} + {prior_yes}")


def posterior(
    curve_no: DensityCurve,
    curve_yes: DensityCurve,
    prior_no: float,
    prior_yes: float,
    reference: str = "no",
) -> PosteriorCurve:
    """Bayes' rule ``P(yes | x) = pi_yes f_yes / (pi_yes f_yes + pi_no f_no)``.

    Args:
        curve_no: Density of the no-recurrence group
        curve_yes: Density of the recurrence group
        prior_no: Proportion of the no-recurrence group
        prior_yes: Proportion of the recurrence group
        reference: ``"no"`` or ``"yes"``, the group whose grid is kept; the
            other density is interpolated onto it and clamped at its
            boundary values

    Returns:
        PosteriorCurve: probabilities in [0, 1]; 0 where both densities vanish
    """
    if reference not in REFERENCES:
        raise ValueError(f"Reference must be one of {REFERENCES}, got {reference!r}")
    _check_priors(prior_no, prior_yes)

    if reference == "no":
        grid = curve_no.x
        f_no = curve_no.y
        f_yes = interpolate_onto(curve_yes, grid)
    else:
        grid = curve_yes.x
        f_no = interpolate_onto(curve_no, grid)
        f_yes = curve_yes.y

    numerator = prior_yes * f_yes
    denominator = numerator + prior_no * f_no

    p = np.zeros_like(grid)
    evidence = denominator > 0
    p[evidence] = numerator[evidence] / denominator[evidence]
    p = np.clip(p, 0.0, 1.0)

    if not np.all(evidence):
        logger.debug(f"No density mass at {np.sum(~evidence)} grid point(s); posterior set to 0")

    return PosteriorCurve(x=grid, probability=p)
