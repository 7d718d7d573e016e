# distributions/normal.py
from __future__ import annotations

import math
import numpy as np
from scipy.special import ndtri

from ..custom_types import Array, ArrayLike, PRNG
from ..array_backend.utils import (
    _ensure_vector,
    _ensure_square_matrix,
    _ensure_batch_vector,
)
from ..exceptions import DimensionMismatchError, NotPositiveDefiniteError
from ..linalg.linop import TriangularLinOp, CholeskyLinOp
from ..linalg.operations import factorize, mah_dist_squared

__all__ = ["Normal"]

LOG_TWO_PI = math.log(2.0 * math.pi)


def _ensure_mean(mean: ArrayLike) -> Array:
    mean = _ensure_vector(mean)
    if mean.size == 0:
        raise ValueError("Normal requires dimension of at least one.")
    if not np.all(np.isfinite(mean)):
        raise ValueError(f"Normal mean must be finite. Got {mean}.")
    return mean


class Normal:
    """Multivariate normal distribution N(mean, cov).

    The covariance is factored once, at construction, and its lower
    Cholesky factor and log(sqrt(det(cov))) are kept for the lifetime of the
    object. Construction fails with `NotPositiveDefiniteError` when `cov` is
    not symmetric positive definite, so an existing `Normal` always carries a
    valid factorization.

    Args:
        mean: array-like, shape (d,).
        cov: array-like, shape (d, d), symmetric positive definite.
        rng: np.random.Generator, optional.
    """

    def __init__(self, mean: ArrayLike, cov: ArrayLike, *, rng: PRNG | None = None) -> None:
        mean = _ensure_mean(mean)
        cov = _ensure_square_matrix(cov)
        if cov.shape[0] != mean.size:
            raise DimensionMismatchError(mean.size, cov.shape[0], "mean and covariance")
        self._setup(mean, cov, factorize(cov), rng)

    @classmethod
    def from_cholesky(cls, mean: ArrayLike, chol: ArrayLike, *, rng: PRNG | None = None) -> Normal:
        """Build from the lower Cholesky factor L of the covariance (cov = L @ L.T)."""
        mean = _ensure_mean(mean)
        L = _ensure_square_matrix(chol)
        if L.shape[0] != mean.size:
            raise DimensionMismatchError(mean.size, L.shape[0], "mean and Cholesky factor")
        if not np.all(np.isfinite(L)) or np.any(np.diag(L) <= 0):
            raise NotPositiveDefiniteError("Cholesky factor must be finite with a positive diagonal.")
        obj = cls.__new__(cls)
        chol_op = CholeskyLinOp(TriangularLinOp(L, lower=True, copy=False))
        obj._setup(mean, chol_op.to_dense(), chol_op, rng)
        return obj

    def _setup(self, mean: Array, cov: Array, chol: CholeskyLinOp, rng: PRNG | None) -> None:
        self._dim = mean.size
        self._mean = mean
        self._cov = cov
        self._chol = chol
        self._log_sqrt_det = chol.log_sqrt_det()
        self._rng = rng or np.random.default_rng()

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def mean(self) -> Array:
        return self._mean.copy()

    @property
    def cov(self) -> Array:
        return self._cov.copy()

    @property
    def chol(self) -> CholeskyLinOp:
        """Cholesky representation of the covariance."""
        return self._chol

    @property
    def log_sqrt_det(self) -> float:
        return self._log_sqrt_det

    def log_prob(self, x: ArrayLike) -> float | Array:
        """Log density at a single point (d,) -> float, or a batch (n, d) -> (n,)."""
        X, single = _ensure_batch_vector(x, length=self._dim, copy=False)
        mah = mah_dist_squared(X, self._chol, self._mean)
        lp = -0.5 * self._dim * LOG_TWO_PI - self._log_sqrt_det - 0.5 * mah
        return float(lp[0]) if single else lp

    def prob(self, x: ArrayLike) -> float | Array:
        return np.exp(self.log_prob(x))

    def rand(self, out: Array | None = None) -> Array:
        """Draw one sample, writing into `out` when it is a non-empty buffer."""
        z = self._rng.standard_normal(self._dim)
        x = self._mean + self._chol.root.matvec(z)
        if out is None or np.size(out) == 0:
            return x
        if np.size(out) != self._dim:
            raise DimensionMismatchError(np.size(out), self._dim, "output buffer and distribution")
        out[...] = x
        return out

    def sample(self, n_samples: int = 1) -> Array:
        """Draw (n, d) samples."""
        Z = self._rng.standard_normal((int(n_samples), self._dim))
        return self._mean + Z @ self._chol.root.tri.T

    def entropy(self) -> float:
        """Differential entropy 0.5 d (1 + log 2 pi) + log(sqrt(det(cov)))."""
        return 0.5 * self._dim * (1.0 + LOG_TWO_PI) + self._log_sqrt_det

    def quantile(self, p: ArrayLike) -> Array:
        """Map p in (0, 1)^d to mean + L z, with z the componentwise standard
        normal quantile of p.
        """
        p = _ensure_vector(p, length=self._dim)
        return self._mean + self._chol.root.matvec(ndtri(p))

    def __repr__(self) -> str:
        return f"Normal(dim={self._dim})"
