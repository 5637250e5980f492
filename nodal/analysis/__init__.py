"""Statistical core of the recurrence analysis.

This module provides kernel density estimation, density differences, a
bootstrap test of equal densities, the Bayesian posterior of recurrence and
a logistic regression cross-check.
"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"
