# array_backend/utils.py
"""
Input canonicalization for statdist.

Public functions take `ArrayLike` and call these helpers once at the boundary,
so that the numerical code behind them only ever sees float arrays of a known
shape. Helpers returning arrays take `copy`; with `copy=True` the result never
aliases the caller's buffer and may be stored on an object.
"""

from __future__ import annotations

import numpy as np
from typing import Any

from ..custom_types import Array, ArrayLike


def _as_array(x: Any, dtype: Any = None) -> Array:
    try:
        return np.asarray(x, dtype=dtype)
    except (TypeError, ValueError) as e:
        raise TypeError(
            f"Cannot interpret {type(x).__name__} value {x!r} as an array: {e}"
        ) from e


def _ensure_real_scalar(x: Any, *, name: str = "value") -> float:
    """Return `x` as a Python float.

    `x` may be a Python or numpy scalar, or any array with exactly one
    element. `name` is used in the error message.

    Raises:
      ValueError if `x` has more than one element, is complex, or is nan/inf.
    """
    arr = _as_array(x)
    if arr.size != 1:
        raise ValueError(f"{name} must be a single number. Got shape {arr.shape}.")
    if np.iscomplexobj(arr):
        raise ValueError(f"{name} must be real. Got {x!r}.")
    value = float(arr.reshape(()))
    if not np.isfinite(value):
        raise ValueError(f"{name} must be finite. Got {value}.")
    return value


def _ensure_vector(x: ArrayLike, *, as_column: bool = False,
                   length: int | None = None, copy: bool = True) -> Array:
    """Return `x` as a float vector of shape (n,), or (n, 1) if `as_column`.

    Scalars count as vectors of length one, and (1, n) or (n, 1) matrices are
    flattened. Anything else, or a vector whose length differs from
    `length`, raises ValueError.
    """
    arr = _as_array(x, dtype=float)

    if arr.ndim == 1:
        out = arr
    elif arr.ndim == 0 or (arr.ndim == 2 and min(arr.shape) == 1):
        out = arr.reshape(-1)
    else:
        raise ValueError(f"Expected a vector. Got shape {arr.shape}.")

    if length is not None and out.size != length:
        raise ValueError(f"Expected a vector of length {length}. Got length {out.size}.")

    if as_column:
        out = out.reshape(-1, 1)
    return out.copy() if copy else out


def _ensure_matrix(x: ArrayLike, *, as_row_matrix: bool = False,
                   num_rows: int | None = None, num_cols: int | None = None,
                   copy: bool = True) -> Array:
    """Return `x` as a 2d float array.

    A scalar becomes (1, 1); a vector becomes a single row when
    `as_row_matrix` is set and a single column otherwise.
    """
    arr = _as_array(x, dtype=float)

    if arr.ndim > 2:
        raise ValueError(f"Expected at most two dimensions. Got shape {arr.shape}.")
    if arr.ndim == 2:
        out = arr
    elif as_row_matrix:
        out = arr.reshape(1, -1)
    else:
        out = arr.reshape(-1, 1)

    rows, cols = out.shape
    if num_rows is not None and rows != num_rows:
        raise ValueError(f"Expected {num_rows} rows. Got {rows}.")
    if num_cols is not None and cols != num_cols:
        raise ValueError(f"Expected {num_cols} columns. Got {cols}.")

    return out.copy() if copy else out


def _ensure_square_matrix(x: ArrayLike, n: int | None = None, *, copy: bool = True) -> Array:
    out = _ensure_matrix(x, copy=copy)
    if out.shape[0] != out.shape[1]:
        raise ValueError(f"Expected a square matrix. Got shape {out.shape}.")
    if n is not None and out.shape[0] != n:
        raise ValueError(f"Expected a ({n}, {n}) matrix. Got shape {out.shape}.")
    return out


def _ensure_batch_vector(x: ArrayLike, length: int | None = None,
                         *, copy: bool = True) -> tuple[Array, bool]:
    """Return `x` as a stack of row vectors, shape (B, d).

    The second return value is True when `x` was a single vector, in which
    case B == 1 and callers usually hand back a scalar result.
    """
    arr = _as_array(x, dtype=float)

    if arr.ndim < 2:
        v = _ensure_vector(arr, length=length, copy=copy)
        return v.reshape(1, -1), True

    if arr.ndim != 2:
        raise ValueError(f"Expected a vector or a (B, d) batch of vectors. Got shape {arr.shape}.")
    if length is not None and arr.shape[1] != length:
        raise ValueError(f"Expected vectors of length {length}. Got length {arr.shape[1]}.")

    return (arr.copy() if copy else arr), False
