# expected.py
from __future__ import annotations

import numpy as np

from .custom_types import ScalarFunc
from .distributions.interfaces import Quantiler
from .integrate.fixed import fixed

__all__ = ["expected_fixed"]


def expected_fixed(f: ScalarFunc, q: Quantiler, evals: int, concurrent: int = 0,
                   *, vectorized: bool = True) -> float:
    """Numerically compute the expected value of `f` under the distribution `q`.

    .. math::

        E[f] = \\int_{-\\infty}^{\\infty} f(x) p(x) dx = \\int_0^1 f(Q(u)) du

    where :math:`Q` is the quantile function of `q`. Substituting
    :math:`x = Q(u)` turns the improper integral into one over the unit
    interval, which puts the quadrature nodes where the distribution has its
    mass, and also works for distributions without a density. The right
    hand side is computed with `evals` Gauss-Legendre nodes.

    Args:
        f: function whose expectation is wanted. Called on arrays of values
           unless `vectorized=False`.
        q: anything with a `quantile(p)` method. It must accept arrays
           unless `vectorized=False`, in which case it is called with one
           float at a time, like `f`.
        evals: number of quadrature nodes.
        concurrent: maximum number of threads evaluating `f`; 0 is sequential.

    Returns:
        float, the estimate of E[f].
    """
    quantile = q.quantile

    if vectorized:
        def g(p):
            return f(quantile(p))
    else:
        def g(p):
            return np.fromiter((f(float(quantile(float(pi)))) for pi in p),
                               dtype=float, count=len(p))

    return fixed(g, 0.0, 1.0, evals, concurrent=concurrent)
