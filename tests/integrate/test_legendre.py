import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.special import roots_legendre

from statdist.integrate.legendre import (
    Legendre,
    LEGENDRE_ASYMPTOTIC_THRESHOLD,
    _asymptotic_nodes,
    _bessel_j0_zeros,
)
from scipy.special import jn_zeros


@pytest.mark.parametrize("n", [1, 2, 5, 10, 100])
def test_small_rules_match_scipy(n):
    x, w = Legendre().fixed_locations(n, -1.0, 1.0)
    x_ref, w_ref = roots_legendre(n)
    assert_allclose(x, x_ref, atol=1e-15)
    assert_allclose(w, w_ref, rtol=1e-13)

@pytest.mark.parametrize("n", [1000, 1001])
def test_asymptotic_rule_matches_scipy(n):
    x, w = _asymptotic_nodes(n)
    x_ref, w_ref = roots_legendre(n)
    assert x.shape == (n,)
    assert_allclose(x, x_ref, atol=1e-10)
    assert_allclose(w, w_ref, rtol=1e-11)

def test_asymptotic_rule_is_symmetric():
    x, w = _asymptotic_nodes(2001)
    assert np.all(np.diff(x) > 0)
    assert_allclose(x, -x[::-1], atol=0)
    assert_allclose(w, w[::-1], atol=0)
    assert x[1000] == 0.0

def test_rule_just_above_threshold_matches_scipy():
    n = LEGENDRE_ASYMPTOTIC_THRESHOLD + 1
    x, w = Legendre().fixed_locations(n, -1.0, 1.0)
    x_ref, w_ref = roots_legendre(n)
    assert_allclose(x, x_ref, atol=1e-13)
    assert_allclose(w, w_ref, rtol=1e-11)
    assert np.sum(w) == pytest.approx(2.0, abs=1e-13)

@pytest.mark.parametrize("n", [LEGENDRE_ASYMPTOTIC_THRESHOLD, LEGENDRE_ASYMPTOTIC_THRESHOLD + 1])
def test_accuracy_is_continuous_across_threshold(n):
    x, w = Legendre().fixed_locations(n, -1.0, 1.0)
    assert np.dot(w, np.cos(x)) == pytest.approx(2.0 * np.sin(1.0), abs=1e-13)
    assert np.dot(w, x ** 10) == pytest.approx(2.0 / 11.0, abs=1e-13)

def test_bessel_zeros_expansion():
    zeros = _bessel_j0_zeros(60)
    assert_allclose(zeros, jn_zeros(0, 60), rtol=1e-13)

def test_large_rule_integrates_polynomials():
    n = 2 * LEGENDRE_ASYMPTOTIC_THRESHOLD + 1
    x, w = Legendre().fixed_locations(n, 0.0, 1.0)
    assert x.shape == w.shape == (n,)
    assert np.all((x > 0) & (x < 1))
    assert np.sum(w) == pytest.approx(1.0, abs=1e-13)
    assert np.dot(w, x ** 4) == pytest.approx(0.2, rel=1e-12)

def test_interval_mapping():
    x, w = Legendre().fixed_locations(3, 2.0, 5.0)
    x_ref, w_ref = roots_legendre(3)
    assert_allclose(x, 3.5 + 1.5 * x_ref)
    assert_allclose(w, 1.5 * w_ref)
    # degree 2n - 1 = 5 is integrated exactly
    assert np.dot(w, x ** 5) == pytest.approx((5.0 ** 6 - 2.0 ** 6) / 6.0, rel=1e-13)

def test_cached_nodes_are_not_mutated():
    rule = Legendre()
    x1, _ = rule.fixed_locations(7, 0.0, 1.0)
    x1[:] = 0.0
    x2, _ = rule.fixed_locations(7, 0.0, 1.0)
    assert np.all(x2 > 0)

def test_invalid_node_count():
    with pytest.raises(ValueError):
        Legendre().fixed_locations(0, 0.0, 1.0)
