"""Test the density differencer."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

import numpy as np
import pytest

from nodal.analysis import kde
from nodal.analysis.difference import difference, interpolate_onto
from nodal.analysis.kde import DensityCurve

NO = [0.0, 0.0, 0.0, 0.0, 1.0, 2.0]
YES = [2.0, 3.0, 4.0, 5.0, 6.0, 8.0]


def test_interpolate_onto_clamps_outside_domain():
    curve = DensityCurve(x=[0.0, 1.0, 2.0], y=[0.5, 1.0, 0.25])
    y = interpolate_onto(curve, np.array([-5.0, 0.5, 1.5, 10.0]))
    assert np.allclose(y, [0.5, 0.75, 0.625, 0.25])


def test_difference_on_reference_grid():
    a = kde.estimate(NO, 1.2)
    b = kde.estimate(YES, 1.2)

    d = difference(a, b)
    assert np.array_equal(d.x, a.x)
    assert np.allclose(d.y, interpolate_onto(b, a.x) - a.y)

    d = difference(a, b, reference="b")
    assert np.array_equal(d.x, b.x)
    assert np.allclose(d.y, b.y - interpolate_onto(a, b.x))


@pytest.mark.parametrize("reference", ["a", "b"])
def test_difference_antisymmetric(reference):
    a = kde.estimate(NO, 1.2)
    b = kde.estimate(YES, 1.2)
    other = "b" if reference == "a" else "a"

    forward = difference(a, b, reference=reference)
    backward = difference(b, a, reference=other)

    assert np.array_equal(forward.x, backward.x)
    assert np.allclose(forward.y, -backward.y, atol=1e-12)


def test_difference_of_identical_curves_is_zero():
    a = kde.estimate(YES, 1.0)
    assert np.allclose(difference(a, a).y, 0.0)


def test_difference_sign_convention():
    no = kde.estimate(NO, 1.2)
    yes = kde.estimate(YES, 1.2)

    # evaluate on the recurrence grid which covers both regions
    d = difference(no, yes, reference="b")
    at = lambda x: np.interp(x, d.x, d.y)  # noqa: E731

    assert at(0.0) < -0.3
    assert at(4.0) > 0.1
    assert at(5.0) > 0.1


def test_difference_rejects_unknown_reference():
    a = kde.estimate(NO, 1.0)
    with pytest.raises(ValueError):
        difference(a, a, reference="pooled")
