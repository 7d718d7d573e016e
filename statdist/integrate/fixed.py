# integrate/fixed.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

import numpy as np

from ..custom_types import Array, ScalarFunc
from .legendre import Legendre

logger = logging.getLogger(__name__)

__all__ = ["FixedLocationer", "fixed"]


class FixedLocationer(Protocol):
    """A quadrature rule that places a fixed number of nodes on an interval."""

    def fixed_locations(self, n: int, a: float, b: float) -> tuple[Array, Array]:
        ...


_DEFAULT_RULE = Legendre()


def _evaluate(f: ScalarFunc, x: Array, vectorized: bool) -> Array:
    if vectorized:
        return np.broadcast_to(np.asarray(f(x), dtype=float), x.shape)
    return np.fromiter((f(float(xi)) for xi in x), dtype=float, count=x.size)


def fixed(f: ScalarFunc, a: float, b: float, n: int,
          rule: FixedLocationer | None = None, concurrent: int = 0,
          *, vectorized: bool = True) -> float:
    """Approximate the integral of `f` over [a, b] with an n-node fixed rule.

    .. math::

        \\int_a^b f(x) dx \\approx \\sum_i w_i f(x_i)

    Args:
        f: integrand. With `vectorized=True` it is called on 1d arrays of
           nodes and must return an array of the same length (or a scalar);
           otherwise it is called once per node with a float.
        a, b: integration bounds.
        n: number of quadrature nodes, at least one.
        rule: quadrature rule providing `fixed_locations`. Defaults to a
           shared `Legendre` instance, whose node cache is then reused.
        concurrent: maximum number of worker threads evaluating `f`. Zero or
           one evaluates sequentially.

    Returns:
        float, the estimate. Non-finite values of `f` propagate.

    Raises:
        ValueError if `n < 1` or `concurrent < 0`.
    """
    if n < 1:
        raise ValueError(f"Number of quadrature nodes must be positive. Got {n}.")
    if concurrent < 0:
        raise ValueError(f"concurrent must be non-negative. Got {concurrent}.")
    if rule is None:
        rule = _DEFAULT_RULE

    x, w = rule.fixed_locations(n, a, b)

    workers = min(concurrent, x.size)
    if workers <= 1:
        fx = _evaluate(f, x, vectorized)
    else:
        logger.debug("Evaluating %d quadrature nodes on %d threads", x.size, workers)
        chunks = np.array_split(x, workers)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            parts = list(executor.map(lambda c: _evaluate(f, c, vectorized), chunks))
        fx = np.concatenate(parts)

    return float(np.dot(w, fx))
