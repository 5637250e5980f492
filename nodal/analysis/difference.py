"""Pointwise difference of two density curves."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

import numpy as np

from nodal.analysis.kde import DensityCurve
from nodal.utils import logging

logger = logging.get_default_logger()

REFERENCES = ("a", "b")


def interpolate_onto(curve: DensityCurve, grid: np.ndarray) -> np.ndarray:
    """Linearly interpolate `curve` onto `grid`.

    Grid points outside the curve's domain take the nearest boundary value.
    """
    return np.interp(grid, curve.x, curve.y, left=curve.y[0], right=curve.y[-1])


def difference(curve_a: DensityCurve, curve_b: DensityCurve, reference: str = "a") -> DensityCurve:
    """Signed difference ``f_b - f_a`` on the grid of the reference curve.

    Args:
        curve_a: Density subtracted from `curve_b`
        curve_b: Density the difference is taken from
        reference: ``"a"`` or ``"b"``, the curve whose grid is kept; the other
            curve is interpolated onto it

    Returns:
        DensityCurve: the difference; negative where `curve_a` dominates
    """
    if reference not in REFERENCES:
        raise ValueError(f"Reference must be one of {REFERENCES}, got {reference!r}")

    if reference == "a":
        grid = curve_a.x
        f_a = curve_a.y
        f_b = interpolate_onto(curve_b, grid)
    else:
        grid = curve_b.x
        f_a = interpolate_onto(curve_a, grid)
        f_b = curve_b.y

    logger.debug(f"Difference of densities on the grid of curve {reference} ({grid.size} points)")

    return DensityCurve(x=grid, y=f_b - f_a)
