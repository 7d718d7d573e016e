# distributions/univariate.py
from __future__ import annotations

import numpy as np
from scipy.stats import norm, expon

from ..custom_types import Array, ArrayLike, PRNG
from ..array_backend.utils import _ensure_real_scalar

__all__ = ["Normal1D", "UnitNormal", "Exponential"]


class _ScipyUnivariate:
    """Shared plumbing for univariate distributions backed by a frozen scipy.stats object."""

    _dist = None

    def __init__(self, *, rng: PRNG | None = None) -> None:
        self._rng = rng or np.random.default_rng()

    def quantile(self, p: ArrayLike) -> float | Array:
        """Inverse CDF. Accepts a scalar or an array of probabilities."""
        return self._dist.ppf(p)

    def cdf(self, x: ArrayLike) -> float | Array:
        return self._dist.cdf(x)

    def log_prob(self, x: ArrayLike) -> float | Array:
        return self._dist.logpdf(x)

    def prob(self, x: ArrayLike) -> float | Array:
        return self._dist.pdf(x)

    def rand(self) -> float:
        return float(self._dist.rvs(random_state=self._rng))

    def sample(self, n_samples: int) -> Array:
        """Draw `n_samples` values, shape (n_samples,)."""
        return np.asarray(self._dist.rvs(size=int(n_samples), random_state=self._rng), dtype=float)

    def entropy(self) -> float:
        return float(self._dist.entropy())

    def mean(self) -> float:
        return float(self._dist.mean())

    def std(self) -> float:
        return float(self._dist.std())


class Normal1D(_ScipyUnivariate):
    """Univariate Normal distribution N(mu, sigma^2).

    Args:
        mu: Mean of the distribution.
        sigma: Standard deviation (must be > 0).
        rng: Random number generator. If ``None``, a default generator is created.

    Raises:
        ValueError: If ``sigma`` is not positive.
    """

    def __init__(self, mu: float, sigma: float, *, rng: PRNG | None = None) -> None:
        mu = _ensure_real_scalar(mu, name="mu")
        sigma = _ensure_real_scalar(sigma, name="sigma")
        if sigma <= 0:
            raise ValueError("sigma must be > 0")
        super().__init__(rng=rng)
        self.mu = mu
        self.sigma = sigma
        self._dist = norm(loc=self.mu, scale=self.sigma)

    def __repr__(self) -> str:
        return f"Normal1D(mu={self.mu}, sigma={self.sigma})"


class Exponential(_ScipyUnivariate):
    """Exponential distribution with density rate * exp(-rate * x) on x >= 0.

    Raises:
        ValueError: If ``rate`` is not positive.
    """

    def __init__(self, rate: float, *, rng: PRNG | None = None) -> None:
        rate = _ensure_real_scalar(rate, name="rate")
        if rate <= 0:
            raise ValueError("rate must be > 0")
        super().__init__(rng=rng)
        self.rate = rate
        self._dist = expon(scale=1.0 / self.rate)

    def __repr__(self) -> str:
        return f"Exponential(rate={self.rate})"


UnitNormal = Normal1D(0.0, 1.0)
