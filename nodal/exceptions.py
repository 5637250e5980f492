"""Errors raised by the nodal analysis."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"


class NodalError(Exception):
    """Base class for all analysis errors."""


class InsufficientDataError(NodalError, ValueError):
    """A group holds too few observations for a density comparison.

    Parameters
    ----------
    message : str
        Human readable description.
    group : str, optional
        Name of the offending group.
    size : int, optional
        Number of observations found.
    """

    def __init__(self, message, group=None, size=None):
        super().__init__(message)
        self.group = group
        self.size = size


class NonConvergenceError(NodalError, RuntimeError):
    """The logistic regression has no finite maximum likelihood estimate.

    The last available coefficients are kept in ``params`` (``None`` when
    the fit never started) so that callers can report a partial result.
    """

    def __init__(self, message, params=None, n_iter=None):
        super().__init__(message)
        self.params = params
        self.n_iter = n_iter


class MissingSeedError(NodalError, ValueError):
    """A randomised computation was requested without an explicit seed."""
