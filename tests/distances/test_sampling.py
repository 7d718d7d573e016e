# tests/distances/test_sampling.py
import math

import numpy as np
import pytest

from statdist.distributions import Normal, Uniform
from statdist.distances import (
    bhattacharyya_normal,
    bhattacharyya_uniform,
    kl_normal,
    kl_uniform,
    bhattacharyya_sample,
    kl_sample,
)


def close(got, want, tol):
    return abs(got - want) <= tol or abs(got - want) <= tol * abs(want)


@pytest.fixture
def close_normal_pair(rng):
    a = Normal([0.0, 0.0], np.eye(2), rng=rng)
    b = Normal([0.3, -0.2], np.array([[1.2, 0.3], [0.3, 0.8]]), rng=rng)
    return a, b


class TestNormalSampling:

    def test_bhattacharyya_close_pair(self, close_normal_pair):
        a, b = close_normal_pair
        want = bhattacharyya_sample(a, b, 100_000)
        assert abs(bhattacharyya_normal(a, b) - want) <= 1e-2

    def test_kl_close_pair(self, close_normal_pair):
        a, b = close_normal_pair
        want = kl_sample(a, b, 100_000)
        assert close(kl_normal(a, b), want, 1e-2)

    def test_bhattacharyya_separated_pair(self, normal_pair):
        # heavier tailed importance weights, so more samples
        a, b = normal_pair
        want = bhattacharyya_sample(a, b, 1_000_000)
        assert abs(bhattacharyya_normal(a, b) - want) <= 1e-2

    def test_kl_separated_pair(self, normal_pair):
        a, b = normal_pair
        want = kl_sample(a, b, 1_000_000)
        assert close(kl_normal(a, b), want, 1e-2)


class TestUniformSampling:

    def test_bhattacharyya(self, uniform_pair):
        a, b = uniform_pair
        want = bhattacharyya_sample(a, b, 100_000)
        assert abs(bhattacharyya_uniform(a, b) - want) <= 1e-2

    def test_kl_not_contained(self, rng):
        a = Uniform([(-5, 2), (-7, 12)], rng=rng)
        b = Uniform([(-4, 1), (-7, 10)], rng=rng)
        assert kl_sample(a, b, 100_000) == math.inf
        assert kl_uniform(a, b) == math.inf

    def test_kl_contained(self, rng):
        a = Uniform([(-3, 0), (-5, 8)], rng=rng)
        b = Uniform([(-4, 1), (-7, 10)], rng=rng)
        assert kl_sample(a, b, 100_000) == pytest.approx(kl_uniform(a, b), rel=1e-12)


class RandOnly:
    """Exposes rand and log_prob but no batch sampler."""

    def __init__(self, dist):
        self.dist = dist
        self.calls = 0

    def rand(self, out=None):
        self.calls += 1
        return self.dist.rand(out)

    def log_prob(self, x):
        return self.dist.log_prob(x)


def test_falls_back_to_rand(uniform_pair):
    a, b = uniform_pair
    wrapped = RandOnly(a)
    est = bhattacharyya_sample(wrapped, b, 2000)
    assert wrapped.calls == 2000
    assert abs(est - bhattacharyya_uniform(a, b)) < 0.1

@pytest.mark.parametrize("estimator", [bhattacharyya_sample, kl_sample])
def test_invalid_sample_count(estimator, uniform_pair):
    a, b = uniform_pair
    with pytest.raises(ValueError):
        estimator(a, b, 0)
