# linalg/operations.py
"""
Functions that accept linear operator inputs. This includes the basic
operations like `solve()` that are also implemented as `LinOp` methods, so
users may call `solve(A, b)` rather than `A.solve(b)`, and the specialized
operations the divergence computations are built from: Cholesky
factorization with explicit failure signalling, `trace_Ainv_B()` and the
squared Mahalanobis distance.
"""

from __future__ import annotations

import numpy as np
from typing import TypeAlias
from scipy.linalg import cholesky as _scipy_cholesky

from ..custom_types import Array, ArrayLike
from ..array_backend.utils import _as_array, _ensure_matrix
from ..exceptions import NotPositiveDefiniteError
from .linop import LinOp, DenseLinOp, TriangularLinOp, CholeskyLinOp

LinOpLike: TypeAlias = LinOp | ArrayLike

# Tolerances used when checking that a matrix handed to `factorize` is symmetric.
SYMMETRY_RTOL = 1e-10
SYMMETRY_ATOL = 1e-12


def _as_linear_operator(A: LinOpLike) -> LinOp:
    if isinstance(A, LinOp):
        return A
    return DenseLinOp(A)


# -----------------------------------------------------------------------------
# Factorization
# -----------------------------------------------------------------------------

def factorize(A: LinOpLike) -> CholeskyLinOp:
    """Return the Cholesky representation of a symmetric positive definite matrix.

    Args:
        A: LinOpLike, square (d, d). A `CholeskyLinOp` is returned unchanged.

    Returns:
        CholeskyLinOp wrapping the lower factor L with A = L @ L.T.

    Raises:
        NotPositiveDefiniteError: if `A` is not square, contains non-finite
            entries, is not symmetric, or the factorization breaks down.
    """
    if isinstance(A, CholeskyLinOp):
        return A

    mat = _as_linear_operator(A).to_dense()
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise NotPositiveDefiniteError(f"Matrix is not square. Has shape {mat.shape}")
    if not np.all(np.isfinite(mat)):
        raise NotPositiveDefiniteError("Matrix contains non-finite entries.")
    if not np.allclose(mat, mat.T, rtol=SYMMETRY_RTOL, atol=SYMMETRY_ATOL):
        raise NotPositiveDefiniteError("Matrix is not symmetric.")

    try:
        L = _scipy_cholesky(mat, lower=True, check_finite=False)
    except np.linalg.LinAlgError as e:
        raise NotPositiveDefiniteError(f"Cholesky factorization failed: {e}") from e

    return CholeskyLinOp(TriangularLinOp(L, lower=True, copy=False))


def cholesky(A: LinOpLike, lower: bool = True) -> TriangularLinOp:
    """Return L (lower) or U = L.T (upper) such that A = L @ L.T = U.T @ U."""
    return factorize(A).cholesky(lower=lower)


# -----------------------------------------------------------------------------
# Expose LinOp methods as functions
# -----------------------------------------------------------------------------

def to_dense(A: LinOpLike) -> Array:
    return _as_linear_operator(A).to_dense()

def solve(A: LinOpLike, b: ArrayLike) -> Array:
    return _as_linear_operator(A).solve(b)

def logdet(A: LinOpLike) -> float:
    return _as_linear_operator(A).logdet()

def log_sqrt_det(A: LinOpLike) -> float:
    return factorize(A).log_sqrt_det()

def trace(A: LinOpLike) -> float:
    return _as_linear_operator(A).trace()


# -----------------------------------------------------------------------------
# Specialized operations, not core LinOp methods
# -----------------------------------------------------------------------------

def trace_Ainv_B(A: LinOpLike, B: LinOpLike) -> float:
    """ Compute the trace of the product of an inverse of a matrix times another matrix

    For symmetric positive definite :math:`A` and :math:`B` of equal dimension,
    this computes :math:`\\text{trace}(A^{-1}B)` without forming an inverse.
    Writing :math:`B = U^\\top U` with :math:`U` the upper Cholesky factor of
    :math:`B`, the system :math:`A X = U^\\top` is solved with the Cholesky
    factor of :math:`A`, multiplied back by :math:`U`, and the trace taken.

    Args:
        A: LinOpLike, square (d, d) positive definite.
        B: LinOpLike, square (d, d) positive definite.

    Returns:
        float, the trace.

    Raises:
        NotPositiveDefiniteError if either matrix cannot be factored, and
        LinAlgError if a triangular solve with the factor of A breaks down.
    """
    A_chol = factorize(A)
    U = factorize(B).cholesky(lower=False)
    if A_chol.shape != U.shape:
        raise np.linalg.LinAlgError(
            f"trace_Ainv_B requires A and B to be square and of equal dimension.\n"
            f"Got A and B with shapes {A_chol.shape} and {U.shape}, respectively."
        )

    M = A_chol.solve(U.T.to_dense())
    M = M @ U.tri
    return float(np.trace(M))


def mah_dist_squared(x: ArrayLike,
                     A: LinOpLike,
                     y: ArrayLike | None = None) -> Array:
    """ Compute squared Mahalanobis distance(s) between one or more vectors

    The squared Mahalanobis distance between vectors :math:`x` and :math:`y`
    with respect to the positive definite matrix :math:`A` is

    .. math::

        D^2(x, y; A) = (x - y)^\\top A^{-1} (x - y)

    and is computed as :math:`\\|L^{-1}(x - y)\\|^2` with the Cholesky factor
    :math:`L` of :math:`A`.

    If multiple observations are provided as rows of `x` (or `y`), one
    distance per row is returned. Either both contain the same number of
    rows, or one of them is a single point that is repeated. If `y` is
    `None`, it is the zero vector.

    Args:
        x: ArrayLike, of shape (d,) or (n,d).
        A: LinOpLike, positive definite and shape (d,d). Passing a
           `CholeskyLinOp` reuses an existing factorization.
        y: ArrayLike or None, shape (d,) or (n,d).

    Returns:
        Array of shape (n,)
    """
    A_chol = factorize(A)
    d = A_chol.shape[0]
    X = _ensure_matrix(x, as_row_matrix=True, num_cols=d)
    if y is not None:
        Y = _ensure_matrix(y, as_row_matrix=True, num_cols=d)
        if Y.shape[0] not in (1, X.shape[0]) and X.shape[0] != 1:
            raise ValueError("y must have same batch dimension `n` as x, or have batch dimension one.")
        X = X - Y

    Z = A_chol.cholesky(lower=True).solve(X.T)  # (d, n)
    return np.sum(Z ** 2, axis=0)


def mahalanobis(x: ArrayLike, y: ArrayLike, A: LinOpLike) -> float:
    """Mahalanobis distance between two single vectors under `A`."""
    x = _as_array(x, dtype=float)
    if x.ndim > 1 and x.shape[0] != 1:
        raise ValueError("mahalanobis expects single vectors; use mah_dist_squared for batches.")
    return float(np.sqrt(mah_dist_squared(x, A, y)[0]))
