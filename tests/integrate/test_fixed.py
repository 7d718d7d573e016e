import math

import numpy as np
import pytest

from statdist.integrate import fixed
from statdist.integrate.legendre import Legendre


class Midpoint:
    """Composite midpoint rule, to check that `fixed` honours a custom rule."""

    def fixed_locations(self, n, a, b):
        h = (b - a) / n
        return a + h * (np.arange(n) + 0.5), np.full(n, h)


def test_polynomial_is_exact():
    assert fixed(lambda x: x ** 2, 0.0, 1.0, 5) == pytest.approx(1.0 / 3.0, abs=1e-15)

def test_smooth_integrand():
    assert fixed(np.sin, 0.0, math.pi, 20) == pytest.approx(2.0, abs=1e-13)

def test_scalar_integrand():
    assert fixed(math.exp, 0.0, 1.0, 15, vectorized=False) == pytest.approx(math.e - 1.0, abs=1e-14)

def test_constant_return_is_broadcast():
    assert fixed(lambda x: 2.0, -1.0, 3.0, 4) == pytest.approx(8.0)

@pytest.mark.parametrize("concurrent", [2, 3, 8, 64])
def test_concurrent_matches_sequential(concurrent):
    f = lambda x: np.exp(-x) * np.cos(3 * x)
    seq = fixed(f, 0.0, 2.0, 50)
    par = fixed(f, 0.0, 2.0, 50, concurrent=concurrent)
    assert par == pytest.approx(seq, rel=1e-14)

def test_concurrent_scalar_integrand():
    seq = fixed(math.sqrt, 0.0, 4.0, 40, vectorized=False)
    par = fixed(math.sqrt, 0.0, 4.0, 40, concurrent=4, vectorized=False)
    assert par == pytest.approx(seq, rel=1e-14)

def test_custom_rule():
    assert fixed(lambda x: x, 0.0, 2.0, 10, rule=Midpoint()) == pytest.approx(2.0)

def test_explicit_legendre_rule():
    rule = Legendre()
    assert fixed(lambda x: x ** 3, 0.0, 1.0, 2, rule=rule) == pytest.approx(0.25, abs=1e-15)

def test_non_finite_values_propagate():
    assert math.isinf(fixed(lambda x: np.full_like(x, np.inf), 0.0, 1.0, 3))
    assert math.isnan(fixed(lambda x: np.full_like(x, np.nan), 0.0, 1.0, 3))

@pytest.mark.parametrize("n", [0, -3])
def test_invalid_node_count(n):
    with pytest.raises(ValueError):
        fixed(np.sin, 0.0, 1.0, n)

def test_invalid_concurrency():
    with pytest.raises(ValueError):
        fixed(np.sin, 0.0, 1.0, 5, concurrent=-1)
