import logging

from statdist.exceptions import (
    StatDistError,
    DimensionMismatchError,
    NotPositiveDefiniteError,
    FamilyMismatchError,
)
from statdist.distributions import (
    Normal,
    Uniform,
    Bound,
    Normal1D,
    UnitNormal,
    Exponential,
)
from statdist.expected import expected_fixed
from statdist.distances import (
    Bhattacharyya,
    KullbackLeibler,
    bhattacharyya,
    kullback_leibler,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
