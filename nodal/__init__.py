"""Lymph-node involvement and cancer recurrence analysis."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"
__version__ = "0.1.0"
