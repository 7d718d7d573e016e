# integrate/legendre.py
"""
Gauss-Legendre quadrature rule.

Small rules come from `scipy.special.roots_legendre` (Golub-Welsch followed
by a Newton polish). That routine costs O(n^2), which rules out rules with
millions of nodes, so above `LEGENDRE_ASYMPTOTIC_THRESHOLD` nodes and
weights are built in O(n) from asymptotic expansions.

Nodes come from the Bessel-function asymptotics of the Legendre polynomials,

    theta_k = a_k + v^2 (a_k cot(a_k) - 1) / (8 a_k),   a_k = j_k v,  v = 1/(n + 1/2)

where j_k is the k-th zero of J_0 and x_k = cos(theta_k). The omitted terms
are O(v^4), see I. Bogaert, "Iteration-free computation of Gauss-Legendre
quadrature nodes and weights", SIAM J. Sci. Comput. 36 (2014).

Weights are w_k = 2 / (d/dtheta P_n(cos theta_k))^2. Away from x = +-1 the
derivative is summed from Stieltjes' expansion

    P_n(cos t) = C_n sum_m h_m cos((n + m + 1/2) t - (m + 1/2) pi/2) / (2 sin t)^(m + 1/2)

with C_n = 2 Gamma(n + 1) / (sqrt(pi) Gamma(n + 3/2)), as in N. Hale and
A. Townsend, "Fast and accurate computation of Gauss-Legendre and
Gauss-Jacobi quadrature nodes and weights", SIAM J. Sci. Comput. 35 (2013).
Its phases are formed relative to the known multiple of pi/2 at each node,
so no large angle is ever reduced in floating point. The few nodes next to
the endpoints, where the expansion does not converge fast enough, use the
three-term recurrence instead.
"""

from __future__ import annotations

import logging
from functools import lru_cache

import numpy as np
from scipy import special

from ..custom_types import Array

logger = logging.getLogger(__name__)

__all__ = ["Legendre", "LEGENDRE_ASYMPTOTIC_THRESHOLD"]

LEGENDRE_ASYMPTOTIC_THRESHOLD = 5000

# Zeros of J_0 below this index are taken from scipy; above it McMahon's
# expansion is accurate to machine precision.
_N_TABULATED_BESSEL_ZEROS = 20

# With n sin(theta) >= 80 the first omitted term of a 12 term Stieltjes
# sum is below 1e-19 relative to the leading one.
_STIELTJES_TERMS = 12
_STIELTJES_MIN_N_SIN = 80.0


def _bessel_j0_zero_offsets(m: int) -> Array:
    """j_k - (k - 1/4) pi for the first `m` positive zeros j_k of J_0."""
    k = np.arange(1, m + 1, dtype=float)
    beta = (k - 0.25) * np.pi
    n_tab = min(m, _N_TABULATED_BESSEL_ZEROS)
    offsets = np.empty(m)
    offsets[:n_tab] = special.jn_zeros(0, n_tab) - beta[:n_tab]
    if m > n_tab:
        r = 1.0 / (8.0 * beta[n_tab:])
        r2 = r * r
        # McMahon's asymptotic expansion for the zeros of J_0.
        offsets[n_tab:] = r * (1.0 + r2 * (-124.0 / 3.0 + r2 * (120928.0 / 15.0
                               + r2 * (-401743168.0 / 105.0))))
    return offsets


def _bessel_j0_zeros(m: int) -> Array:
    """First `m` positive zeros of the Bessel function J_0."""
    k = np.arange(1, m + 1, dtype=float)
    return (k - 0.25) * np.pi + _bessel_j0_zero_offsets(m)


def _gamma_ratio(n: int) -> float:
    """Gamma(n + 1) / Gamma(n + 3/2), from its large-n expansion."""
    z = n + 1.0
    series = 1.0 + (-1.0 / 8.0 + (1.0 / 128.0 + (5.0 / 1024.0 - 21.0 / (32768.0 * z)) / z) / z) / z
    return 1.0 / (np.sqrt(z) * series)


def _dtheta_stieltjes(n: int, k: Array, theta: Array, shift: Array) -> Array:
    """d/dtheta P_n(cos theta) at nodes away from the endpoints.

    `k` is the node index counted from x = +1 and `shift` the small phase
    (n + 1/2) theta - (k - 1/4) pi, so that the m-th phase of the sum is
    (2k - 1 - m) pi/2 + shift + m theta.
    """
    sin_t = np.sin(theta)
    two_sin = 2.0 * sin_t
    cot = np.cos(theta) / sin_t

    total = np.zeros_like(theta)
    h = 1.0
    scale = 1.0 / np.sqrt(two_sin)
    for m in range(_STIELTJES_TERMS):
        t = shift + m * theta
        quarter = (2 * k - 1 - m) % 4
        s, c = np.sin(t), np.cos(t)
        sin_phase = np.choose(quarter, (s, c, -s, -c))
        cos_phase = np.choose(quarter, (c, -s, -c, s))
        total -= h * scale * ((n + m + 0.5) * sin_phase + (m + 0.5) * cot * cos_phase)
        h *= (m + 0.5) ** 2 / ((m + 1.0) * (n + m + 1.5))
        scale /= two_sin

    return 2.0 / np.sqrt(np.pi) * _gamma_ratio(n) * total


def _dtheta_recurrence(n: int, x: Array, theta: Array) -> Array:
    """d/dtheta P_n(cos theta) from (1 - x^2) P_n'(x) = n (P_{n-1}(x) - x P_n(x))."""
    p_n = special.eval_legendre(n, x)
    p_prev = special.eval_legendre(n - 1, x)
    return -n * (p_prev - x * p_n) / np.sin(theta)


def _asymptotic_nodes(n: int) -> tuple[Array, Array]:
    """Nodes and weights on [-1, 1] for large n, in O(n)."""
    m = (n + 1) // 2
    v = 1.0 / (n + 0.5)
    offsets = _bessel_j0_zero_offsets(m)
    k = np.arange(1, m + 1)
    alpha = ((k - 0.25) * np.pi + offsets) * v

    correction = (alpha / np.tan(alpha) - 1.0) / (8.0 * alpha)
    theta = alpha + v * v * correction
    x_half = np.cos(theta)  # descending, nearest +1 first

    dtheta = np.empty(m)
    edge = n * np.sin(theta) < _STIELTJES_MIN_N_SIN
    inner = ~edge
    dtheta[inner] = _dtheta_stieltjes(n, k[inner], theta[inner],
                                      offsets[inner] + v * correction[inner])
    dtheta[edge] = _dtheta_recurrence(n, x_half[edge], theta[edge])
    w_half = 2.0 / dtheta ** 2

    if n % 2:
        x_half[-1] = 0.0
        x = np.concatenate((-x_half, x_half[-2::-1]))
        w = np.concatenate((w_half, w_half[-2::-1]))
    else:
        x = np.concatenate((-x_half, x_half[::-1]))
        w = np.concatenate((w_half, w_half[::-1]))
    return x, w


@lru_cache(maxsize=8)
def _legendre_nodes(n: int) -> tuple[Array, Array]:
    if n <= LEGENDRE_ASYMPTOTIC_THRESHOLD:
        logger.debug("Computing %d Gauss-Legendre nodes with scipy", n)
        x, w = special.roots_legendre(n)
    else:
        logger.debug("Computing %d Gauss-Legendre nodes from asymptotic expansions", n)
        x, w = _asymptotic_nodes(n)
    x.setflags(write=False)
    w.setflags(write=False)
    return x, w


class Legendre:
    """Gauss-Legendre rule. Integrates polynomials of degree 2n-1 exactly,
    up to rounding, for every n.

    Node sets on [-1, 1] are cached per node count, so reusing the rule for
    repeated integrations with the same `n` skips recomputing them.
    """

    def fixed_locations(self, n: int, a: float, b: float) -> tuple[Array, Array]:
        """Return ascending nodes and weights of the n-point rule on [a, b]."""
        if n < 1:
            raise ValueError(f"Number of quadrature nodes must be positive. Got {n}.")
        x, w = _legendre_nodes(int(n))
        half = 0.5 * (b - a)
        return a + half * (x + 1.0), half * w

    def __repr__(self) -> str:
        return "Legendre()"
