"""Logging utilities"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

import json
import logging

import numpy as np


# Standard levels used by the log decorators
DEBUG = logging.DEBUG
ERROR = logging.ERROR


def get_default_logger(prefix="nodal") -> logging.Logger:
    """
    Get the default logger instance with the given prefix.

    Args:
        prefix: Logger name prefix

    Returns:
        Logger instance
    """
    return logging.getLogger(prefix)


class NpEncoder(json.JSONEncoder):
    """Encode numpy types."""

    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.bool_):
            return bool(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if hasattr(obj, "item"):
            try:
                return obj.item()
            except ValueError:
                return str(obj)
        return super(NpEncoder, self).default(obj)
