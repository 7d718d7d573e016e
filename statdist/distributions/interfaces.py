# distributions/interfaces.py
"""
Capability contracts a distribution must satisfy to take part in the
expected-value estimator and the distance computations.

These are structural (`typing.Protocol`) so that any object with the right
methods qualifies; statdist itself never requires inheriting from them.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..custom_types import Array, ArrayLike

__all__ = [
    "Quantiler",
    "Rander",
    "LogProber",
    "Entropier",
    "RandLogProber",
]


@runtime_checkable
class Quantiler(Protocol):
    """Inverse CDF, defined for p in (0, 1). Must accept arrays of p."""

    def quantile(self, p: ArrayLike) -> float | Array:
        ...


@runtime_checkable
class Rander(Protocol):
    """Draws one random vector.

    If `out` is given and non-empty the sample is written into it and `out`
    is returned; otherwise a new vector of the distribution's dimension is
    allocated.
    """

    def rand(self, out: Array | None = None) -> Array:
        ...


@runtime_checkable
class LogProber(Protocol):
    """Log of the probability density at `x`, a vector (d,) or batch (n, d)."""

    def log_prob(self, x: ArrayLike) -> float | Array:
        ...


@runtime_checkable
class Entropier(Protocol):

    def entropy(self) -> float:
        ...


@runtime_checkable
class RandLogProber(Rander, LogProber, Protocol):
    """Both samples and evaluates its own log density."""
