"""Statistical Functions."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

import multiprocessing as mp
from typing import Callable, List

import numpy as np
from pathos.multiprocessing import ProcessPool as Pool

from nodal.utils import logging, rand

logger = logging.get_default_logger()


def chunk_sizes(total: int, chunk_size: int) -> List[int]:
    """Split `total` replicates into consecutive chunks of at most `chunk_size`."""
    if total < 1:
        raise ValueError(f"Number of replicates must be at least 1, got {total}")
    if chunk_size < 1:
        raise ValueError(f"Chunk size must be at least 1, got {chunk_size}")

    full, extra = divmod(total, chunk_size)
    sizes = [chunk_size] * full
    if extra:
        sizes.append(extra)

    return sizes


def replicate(
    sim: Callable[[np.random.Generator, int], np.ndarray],
    B: int,
    seed: int,
    chunk_size: int = 250,
    num_threads: int = 1,
) -> np.ndarray:
    """Compute `B` independent replicates of a randomised statistic.

    Parameters
    ----------
     sim : function
        Called as ``sim(rng, size)``; must return an array with `size`
        replicate values drawn using only `rng`.
     B : int
        Number of replicates.
     seed : int
        Seed of the root ``SeedSequence``.
     chunk_size : int, optional
        Number of replicates drawn from one random stream. Defaults to 250.
     num_threads : int, optional
        Number of processes for multicore processing. Defaults to 1,
        meaning all calculations will be done in the calling process.
        Set to -1 to use all available cores.

    Returns
    -------
     theta_star : ndarray
        The `B` replicate values, in chunk order.

    Notes
    -----
    Chunk *i* always consumes the *i*-th child stream of the root seed, so
    the result does not depend on `num_threads`.
    """
    if num_threads == -1:
        num_threads = mp.cpu_count()

    sizes = chunk_sizes(B, chunk_size)
    rngs = rand.spawn_generators(seed, len(sizes))
    logger.debug(f"Draw {B} replicates in {len(sizes)} chunks")

    if num_threads == 1 or len(sizes) == 1:
        return np.hstack([sim(rng, size) for rng, size in zip(rngs, sizes)])

    pool = Pool(num_threads)
    try:
        pool.restart()
    except AssertionError:
        pass

    try:
        results = [pool.apipe(sim, rng, size) for rng, size in zip(rngs, sizes)]
        theta_star = np.hstack([res.get() for res in results])
    finally:
        pool.close()
        pool.join()

    return theta_star
