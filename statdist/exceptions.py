# exceptions.py
"""
Exception hierarchy for statdist.

Every class also derives from the builtin (or numpy) exception that code
would otherwise have raised, so callers catching `ValueError`, `TypeError`
or `numpy.linalg.LinAlgError` keep working.
"""

import numpy as np

__all__ = [
    "StatDistError",
    "DimensionMismatchError",
    "NotPositiveDefiniteError",
    "FamilyMismatchError",
]


class StatDistError(Exception):
    """Base class for all statdist errors."""


class DimensionMismatchError(StatDistError, ValueError):
    """Two operands that must share a dimension do not.

    Raised by the distance functions before any arithmetic is done, since a
    number computed from mismatched inputs would be meaningless.
    """

    def __init__(self, left: int, right: int, what: str = "distributions") -> None:
        self.left = left
        self.right = right
        super().__init__(f"Dimension mismatch between {what}: {left} != {right}.")


class NotPositiveDefiniteError(StatDistError, np.linalg.LinAlgError):
    """A matrix required to be symmetric positive definite is not."""


class FamilyMismatchError(StatDistError, TypeError):
    """No closed-form measure exists for the given pair of distribution types."""

    def __init__(self, measure: str, left: object, right: object) -> None:
        self.measure = measure
        super().__init__(
            f"{measure} is not defined between {type(left).__name__} and "
            f"{type(right).__name__}; both arguments must be of the same supported family."
        )
