"""Test the rand utilities."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

from dataclasses import dataclass
from typing import Optional

import numpy as np
import pytest
from omegaconf import OmegaConf

from nodal.exceptions import MissingSeedError
from nodal.utils import rand


@dataclass
class Config:
    seed: Optional[int] = None


def config():
    return OmegaConf.structured(Config)


def test_missing_seed_is_rejected():
    cfg = config()

    assert cfg.seed is None

    @rand.require_seed
    def wrapped(cfg):
        return cfg.seed

    with pytest.raises(MissingSeedError):
        wrapped(cfg)


def test_seed_already_set():
    cfg = config()
    cfg.seed = 42

    @rand.require_seed
    def wrapped(cfg, offset=0):
        return cfg.seed + offset

    assert wrapped(cfg) == 42
    assert wrapped(cfg, offset=1) == 43


def test_seed_is_not_modified():
    cfg = config()
    cfg.seed = 7

    @rand.require_seed
    def method1(cfg):
        return cfg.seed

    @rand.require_seed
    def pipeline(cfg):
        seed = cfg.seed
        method1(cfg)
        return seed == cfg.seed

    assert pipeline(cfg)


def test_spawn_generators_reproducible():
    g1 = rand.spawn_generators(42, 3)
    g2 = rand.spawn_generators(42, 3)
    for a, b in zip(g1, g2):
        assert np.array_equal(a.random(5), b.random(5))


def test_spawn_generators_prefix_stable():
    # the i-th stream does not depend on how many streams are spawned
    few = rand.spawn_generators(42, 2)
    many = rand.spawn_generators(42, 5)
    for a, b in zip(few, many):
        assert np.array_equal(a.random(5), b.random(5))


def test_spawn_generators_independent_streams():
    g = rand.spawn_generators(1, 2)
    assert not np.array_equal(g[0].random(5), g[1].random(5))


def test_spawn_generators_requires_seed():
    with pytest.raises(MissingSeedError):
        rand.spawn_generators(None, 2)
