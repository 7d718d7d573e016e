import pytest
import numpy as np

from statdist.distributions import Normal, Uniform, Bound


@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def spd_matrix():
    A = np.eye(3) * 2.0
    A[0, 1] = A[1, 0] = 0.3
    A[1, 2] = A[2, 1] = -0.4
    return A

@pytest.fixture
def normal_pair(rng):
    a = Normal([2.0, 3.0], np.array([[3.0, -1.0], [-1.0, 2.0]]), rng=rng)
    b = Normal([-1.0, 1.0], np.array([[1.5, 0.2], [0.2, 0.9]]), rng=rng)
    return a, b

@pytest.fixture
def uniform_pair(rng):
    a = Uniform([Bound(-3, 2), Bound(-5, 8)], rng=rng)
    b = Uniform([Bound(-4, 1), Bound(-7, 10)], rng=rng)
    return a, b
