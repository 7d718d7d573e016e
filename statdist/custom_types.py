# custom_types.py
"""
Type aliases shared across statdist.

We generally follow the conventions:
- Annotate function input with `ArrayLike`
- Annotate function output with `Array`
"""
from __future__ import annotations
from typing import Callable, TypeAlias
from numpy.random import Generator as NumpyRNG

from numpy.typing import (
    NDArray as NumpyArray,
    ArrayLike as NumpyArrayLike
)

from numpy import floating as NumpyFloating

Array = NumpyArray
ArrayLike: TypeAlias = NumpyArrayLike
Float: TypeAlias = NumpyFloating
PRNG: TypeAlias = NumpyRNG

# A real function of one variable. Depending on the caller it receives either
# a Python float or a 1d array of evaluation points.
ScalarFunc: TypeAlias = Callable[..., "float | Array"]
