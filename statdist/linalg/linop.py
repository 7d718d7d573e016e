# linalg/linop.py
from __future__ import annotations

from typing import Any
import numpy as np
from abc import ABC, abstractmethod
from scipy.linalg import solve_triangular

from ..custom_types import Array, ArrayLike
from ..array_backend.utils import (
    _as_array,
    _ensure_vector,
    _ensure_matrix,
    _ensure_square_matrix
)

__all__ = [
    "LinOp",
    "DenseLinOp",
    "TriangularLinOp",
    "CholeskyLinOp",
]


# ---- Base operator ----

class LinOp(ABC):
    """Abstract base class for a square-or-rectangular linear operator.

    Concrete subclasses must provide `shape`, `dtype` and `to_dense`. The
    remaining numeric methods fall back to dense numpy routines and are
    overridden where the structure of the operator allows something cheaper
    or more stable (e.g. triangular solves for Cholesky factors).
    """

    @property
    @abstractmethod
    def shape(self) -> tuple[int, int]:
        """(rows, columns) of the operator."""
        ...

    @property
    @abstractmethod
    def dtype(self) -> Any:
        """numpy dtype of the entries."""
        ...

    @abstractmethod
    def to_dense(self) -> Array:
        """Return dense array representation of the operator."""
        ...

    # ---- Argument checks ----

    def _check_square(self) -> None:
        """Raise LinAlgError unless the operator is square."""
        n_out, n_in = self.shape
        if n_out != n_in:
            raise np.linalg.LinAlgError(f"Operator of shape ({n_out}, {n_in}) is not square.")

    def _check_rhs(self, b: ArrayLike) -> Array:
        """Validate the right-hand side of a solve: (n,) or (n, k)."""
        b = _as_array(b, dtype=float)
        if b.ndim not in (1, 2) or b.shape[0] != self.shape[0]:
            raise ValueError(
                f"Right-hand side of shape {b.shape} incompatible with operator of shape {self.shape}."
            )
        return b

    # ---- Convenience methods that implementors may override ----
    def matvec(self, x: ArrayLike) -> Array:
        """A @ x for a single vector x."""
        x = _ensure_vector(x, length=self.shape[1], copy=False)
        return self.to_dense() @ x

    def matmat(self, X: ArrayLike) -> Array:
        """Return A @ X for X shape (n_in, k)."""
        X = _ensure_matrix(X, num_rows=self.shape[1], copy=False)
        return self.to_dense() @ X

    def solve(self, b: ArrayLike) -> Array:
        """Solve A x = b for a vector or a matrix of right-hand sides."""
        self._check_square()
        return np.linalg.solve(self.to_dense(), self._check_rhs(b))

    def diag(self) -> Array:
        """Diagonal entries as a new array."""
        return np.diag(self.to_dense()).copy()

    def logdet(self) -> float:
        """log(det(A)). Raises LinAlgError when det(A) <= 0."""
        self._check_square()
        sign, log_det = np.linalg.slogdet(self.to_dense())
        if sign <= 0:
            raise np.linalg.LinAlgError("Determinant is not positive; log-determinant undefined.")
        return float(log_det)

    def trace(self) -> float:
        """Sum of the diagonal."""
        self._check_square()
        return float(np.trace(self.to_dense()))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(shape={self.shape}, dtype={self.dtype})"


# ---- Concrete operators ----

class DenseLinOp(LinOp):
    """Operator given by an explicit 2d array."""

    def __init__(self, arr: ArrayLike, copy: bool = True) -> None:
        self.array = _ensure_matrix(arr, copy=copy)

    @property
    def shape(self) -> tuple[int, int]:
        return self.array.shape

    @property
    def dtype(self) -> Any:
        return self.array.dtype

    def to_dense(self) -> Array:
        return self.array


class TriangularLinOp(LinOp):
    """Lower (`lower=True`) or upper triangular operator.

    Only the selected triangle of `tri` is kept; entries on the other side
    of the diagonal are zeroed.
    """

    def __init__(self, tri: ArrayLike, *, lower: bool = True, copy: bool = True) -> None:
        tri = _ensure_square_matrix(tri, copy=copy)
        self.lower = bool(lower)
        self.tri = np.tril(tri) if self.lower else np.triu(tri)
        self._n = self.tri.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        return (self._n, self._n)

    @property
    def dtype(self) -> Any:
        return self.tri.dtype

    @property
    def T(self) -> TriangularLinOp:
        """Transpose, which swaps the triangle."""
        return TriangularLinOp(self.tri.T, lower=not self.lower, copy=False)

    def to_dense(self) -> Array:
        return np.array(self.tri)

    def diag(self) -> Array:
        return np.diag(self.tri).copy()

    def solve(self, b: ArrayLike, *, trans: int = 0) -> Array:
        """
        Solve the triangular system Lx=b or Ux=b by substitution. With
        trans=1 solves the transposed system instead.

        Raises:
            LinAlgError if the factor has a zero on its diagonal.
        """
        return solve_triangular(self.tri, self._check_rhs(b), trans=trans,
                                lower=self.lower, check_finite=True)

    def logdet(self) -> float:
        d = np.diag(self.tri)
        if np.any(d <= 0):
            raise np.linalg.LinAlgError("Triangular factor has non-positive diagonal; logdet undefined.")
        return float(np.sum(np.log(d)))


class CholeskyLinOp(LinOp):
    """A positive definite operator A stored through its lower Cholesky
    factor L, so that A = L @ L.T.

    Everything the distance computations need (solves, log-determinants,
    the upper factor U = L.T) comes from the factor without forming an
    inverse.
    """

    def __init__(self, root: TriangularLinOp) -> None:
        if not isinstance(root, TriangularLinOp):
            raise ValueError(f"CholeskyLinOp needs a TriangularLinOp root. Got {type(root).__name__}.")
        if not root.lower:
            root = root.T
        self.root = root
        self._n = root.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        return (self._n, self._n)

    @property
    def dtype(self) -> Any:
        return self.root.dtype

    def matvec(self, x: ArrayLike) -> Array:
        L = self.root.tri
        x = _ensure_vector(x, length=self._n, copy=False)
        return L @ (L.T @ x)

    def matmat(self, X: ArrayLike) -> Array:
        L = self.root.tri
        X = _ensure_matrix(X, num_rows=self._n, copy=False)
        return L @ (L.T @ X)

    def solve(self, b: ArrayLike) -> Array:
        """Solve A x = b as L y = b followed by L.T x = y."""
        y = self.root.solve(b)
        return self.root.solve(y, trans=1)

    def cholesky(self, lower: bool = True) -> TriangularLinOp:
        """Return L (lower=True) or U = L.T (lower=False)."""
        return self.root if lower else self.root.T

    def diag(self) -> Array:
        L = self.root.tri
        return np.einsum('ij,ij->i', L, L)

    def trace(self) -> float:
        return float(np.sum(self.root.tri ** 2))

    def logdet(self) -> float:
        return 2.0 * self.log_sqrt_det()

    def log_sqrt_det(self) -> float:
        """log(sqrt(det(A))) = sum(log(diag(L)))"""
        return self.root.logdet()

    def to_dense(self) -> Array:
        L = self.root.tri
        return L @ L.T
