"""Test the Bayesian posterior of recurrence."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

import numpy as np
import pytest

from nodal.analysis import kde
from nodal.analysis.kde import DensityCurve
from nodal.analysis.posterior import posterior, priors_from_labels

NO = [0.0, 0.0, 0.0, 0.0, 1.0, 2.0]
YES = [2.0, 3.0, 4.0, 5.0, 6.0, 8.0]


def _rng():
    return np.random.default_rng(0)


@pytest.mark.parametrize("reference", ["no", "yes"])
def test_posterior_in_unit_interval(reference):
    rng = _rng()
    no = kde.estimate(rng.poisson(1.0, size=80), 3.0)
    yes = kde.estimate(rng.poisson(4.0, size=40), 3.0)
    post = posterior(no, yes, 2 / 3, 1 / 3, reference=reference)

    assert np.all(post.probability >= 0.0)
    assert np.all(post.probability <= 1.0)
    expected_grid = no.x if reference == "no" else yes.x
    assert np.array_equal(post.x, expected_grid)


def test_posterior_equal_densities_gives_prior():
    curve = kde.estimate(YES, 1.0)
    post = posterior(curve, curve, 0.7, 0.3)
    assert np.allclose(post.probability, 0.3)


def test_posterior_limits():
    grid = np.linspace(0.0, 4.0, 5)
    no = DensityCurve(x=grid, y=[1.0, 0.5, 0.0, 0.0, 0.0])
    yes = DensityCurve(x=grid, y=[0.0, 0.0, 0.0, 0.5, 1.0])
    post = posterior(no, yes, 0.5, 0.5)

    # only "no" mass, no mass at all, only "yes" mass
    assert post.probability[0] == 0.0
    assert post.probability[2] == 0.0
    assert post.probability[4] == 1.0


def test_posterior_zero_denominator_without_warning():
    grid = np.linspace(0.0, 1.0, 3)
    zero = DensityCurve(x=grid, y=np.zeros(3))
    with np.errstate(all="raise"):
        post = posterior(zero, zero, 0.5, 0.5)
    assert np.all(post.probability == 0.0)


def test_posterior_example_both_references():
    # comparison smoothing
    no = kde.estimate(NO, 1.2)
    yes = kde.estimate(YES, 1.2)

    post = posterior(no, yes, 0.5, 0.5, reference="yes")
    assert post.at(0.0) < 0.1
    assert post.at(6.0) > 0.9

    post = posterior(no, yes, 0.5, 0.5, reference="no")
    assert post.at(0.0) < 0.1
    assert post.x[-1] < 6.0


def test_posterior_classification_smoothing():
    no = kde.estimate(NO, 3.0)
    yes = kde.estimate(YES, 3.0)
    post = posterior(no, yes, 0.5, 0.5, reference="yes")
    assert post.at(0.0) < 0.25
    assert post.at(6.0) > 0.9
    assert post.at(6.0) > post.at(3.0) > post.at(0.0)


def test_posterior_validates_priors():
    curve = kde.estimate(YES, 1.0)
    with pytest.raises(ValueError):
        posterior(curve, curve, 0.6, 0.6)
    with pytest.raises(ValueError):
        posterior(curve, curve, 1.5, -0.5)
    with pytest.raises(ValueError):
        posterior(curve, curve, 0.5, 0.5, reference="pooled")


def test_priors_from_labels():
    prior_no, prior_yes = priors_from_labels([0, 0, 0, 1])
    assert prior_no == 0.75
    assert prior_yes == 0.25

    with pytest.raises(ValueError):
        priors_from_labels([0, 2])
    with pytest.raises(ValueError):
        priors_from_labels([])
