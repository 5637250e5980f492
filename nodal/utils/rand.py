"""Utilities for randomization."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

import functools
from typing import List

import numpy as np
from omegaconf import DictConfig

from nodal.exceptions import MissingSeedError
from nodal.utils import logging

logger = logging.get_default_logger()


def require_seed(func):
    """Decorate a function so that it refuses to run without an explicit seed.

    Randomised analyses must be reproducible. A configuration with
    ``seed: null`` is rejected instead of drawing a seed from the system.
    """

    @functools.wraps(func)
    def decorate(cfg: DictConfig, *args, **kwargs):
        if cfg.get("seed") is None:
            raise MissingSeedError(
                "No random number seed configured; set `seed` to an integer"
            )

        logger.debug(f"Use random number seed {cfg.seed}")
        return func(cfg, *args, **kwargs)

    return decorate


def spawn_generators(seed: int, n: int) -> List[np.random.Generator]:
    """Derive `n` independent random number generators from a single seed.

    The i-th generator depends only on `seed` and `i`, never on how many
    workers consume the streams.
    """
    if seed is None:
        raise MissingSeedError("A seed is required to spawn random streams")

    children = np.random.SeedSequence(seed).spawn(n)
    return [np.random.default_rng(child) for child in children]
