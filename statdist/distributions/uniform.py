# distributions/uniform.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from ..custom_types import Array, ArrayLike, PRNG
from ..array_backend.utils import _ensure_vector, _ensure_batch_vector
from ..exceptions import DimensionMismatchError

__all__ = ["Bound", "Uniform"]


@dataclass(frozen=True)
class Bound:
    """Closed interval [min, max] of one axis, with min < max."""

    min: float
    max: float

    def __post_init__(self) -> None:
        lo, hi = float(self.min), float(self.max)
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise ValueError(f"Bound limits must be finite. Got ({lo}, {hi}).")
        if not lo < hi:
            raise ValueError(f"Bound requires min < max. Got ({lo}, {hi}).")
        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)

    @property
    def width(self) -> float:
        return self.max - self.min


class Uniform:
    """Uniform distribution over an axis-aligned box.

    Args:
        bounds: one `Bound`, or `(min, max)` pair, per axis.
        rng: np.random.Generator, optional.
    """

    def __init__(self, bounds: Iterable[Bound | tuple[float, float]], *,
                 rng: PRNG | None = None) -> None:
        self._bounds = tuple(b if isinstance(b, Bound) else Bound(*b) for b in bounds)
        if not self._bounds:
            raise ValueError("Uniform requires at least one bound.")
        self._lo = np.array([b.min for b in self._bounds])
        self._hi = np.array([b.max for b in self._bounds])
        self._entropy = float(np.sum(np.log(self._hi - self._lo)))
        self._rng = rng or np.random.default_rng()

    @classmethod
    def unit(cls, dim: int, *, rng: PRNG | None = None) -> Uniform:
        """Uniform distribution on the unit hypercube [0, 1]^dim."""
        return cls([Bound(0.0, 1.0)] * int(dim), rng=rng)

    @property
    def dim(self) -> int:
        return len(self._bounds)

    def bounds(self) -> list[Bound]:
        return list(self._bounds)

    def entropy(self) -> float:
        """log of the box volume; the density is exp(-entropy) inside the box."""
        return self._entropy

    def log_prob(self, x: ArrayLike) -> float | Array:
        """Log density at a single point (d,) -> float, or a batch (n, d) -> (n,)."""
        X, single = _ensure_batch_vector(x, length=self.dim, copy=False)
        inside = np.all((X >= self._lo) & (X <= self._hi), axis=1)
        lp = np.where(inside, -self._entropy, -np.inf)
        return float(lp[0]) if single else lp

    def prob(self, x: ArrayLike) -> float | Array:
        return np.exp(self.log_prob(x))

    def rand(self, out: Array | None = None) -> Array:
        """Draw one sample, writing into `out` when it is a non-empty buffer."""
        x = self._lo + (self._hi - self._lo) * self._rng.random(self.dim)
        if out is None or np.size(out) == 0:
            return x
        if np.size(out) != self.dim:
            raise DimensionMismatchError(np.size(out), self.dim, "output buffer and distribution")
        out[...] = x
        return out

    def sample(self, n_samples: int = 1) -> Array:
        """Draw (n, d) samples."""
        U = self._rng.random((int(n_samples), self.dim))
        return self._lo + (self._hi - self._lo) * U

    def quantile(self, p: ArrayLike) -> Array:
        """Componentwise quantile of p in [0, 1]^d."""
        p = _ensure_vector(p, length=self.dim)
        return self._lo + (self._hi - self._lo) * p

    def __repr__(self) -> str:
        return f"Uniform(bounds={[(b.min, b.max) for b in self._bounds]})"
