# distances/bhattacharyya.py
"""
Bhattacharyya distance between probability distributions.

The Bhattacharyya distance is defined as

    D_B = -ln(BC(l, r)),    BC = int_x sqrt(p(x) q(x)) dx

where BC is the Bhattacharyya coefficient. It is related to the Hellinger
distance by H = sqrt(1 - BC). Closed forms exist for pairs of normal and
pairs of uniform distributions; both are symmetric in (l, r).
"""
from __future__ import annotations

import logging
import math
from typing import Sequence

from ..distributions.normal import Normal
from ..distributions.uniform import Bound, Uniform
from ..exceptions import DimensionMismatchError, NotPositiveDefiniteError
from ..linalg.operations import factorize, mah_dist_squared

logger = logging.getLogger(__name__)

__all__ = [
    "bhattacharyya_normal",
    "bhattacharyya_uniform",
    "uniform_log_vol_overlap",
]


def bhattacharyya_normal(l: Normal, r: Normal) -> float:
    """Bhattacharyya distance between normal distributions `l` and `r`.

    With :math:`\\Sigma = (\\Sigma_l + \\Sigma_r)/2`,

    .. math::

        D_B = \\frac{1}{8}(\\mu_l - \\mu_r)^\\top \\Sigma^{-1} (\\mu_l - \\mu_r)
              + \\frac{1}{2} \\ln \\frac{\\det \\Sigma}{\\sqrt{\\det \\Sigma_l \\det \\Sigma_r}}

    Raises:
        DimensionMismatchError if the dimensions differ.

    Returns:
        float, or nan if the averaged covariance cannot be factored.
    """
    if l.dim != r.dim:
        raise DimensionMismatchError(l.dim, r.dim)

    sigma = 0.5 * (l.cov + r.cov)
    try:
        chol = factorize(sigma)
    except NotPositiveDefiniteError as e:
        logger.warning("Bhattacharyya distance undefined: %s", e)
        return math.nan

    mah_sq = float(mah_dist_squared(l.mean, chol, r.mean)[0])

    # log(sqrt(det)) of both inputs is cached on them
    half_ds = chol.log_sqrt_det()
    return 0.125 * mah_sq + half_ds - 0.5 * (l.log_sqrt_det + r.log_sqrt_det)


def uniform_log_vol_overlap(b1: Sequence[Bound], b2: Sequence[Bound]) -> float:
    """Log of the volume of the box on which both sets of bounds overlap.

    Returns -inf as soon as one axis has no overlap of positive width.
    """
    log_vol = 0.0
    for v1, v2 in zip(b1, b2):
        if v1.max <= v2.min or v2.max <= v1.min:
            return -math.inf
        log_vol += math.log(min(v1.max, v2.max) - max(v1.min, v2.min))
    return log_vol


def bhattacharyya_uniform(l: Uniform, r: Uniform) -> float:
    """Bhattacharyya distance between uniform distributions `l` and `r`.

    sqrt(p(x) q(x)) is constant on the overlap of the two boxes and zero
    elsewhere, so BC = volume * sqrt(p q). The densities are exp(-entropy):

        log BC = log(volume) - 0.5 * (H_l + H_r)

    Disjoint boxes give +inf.

    Raises:
        DimensionMismatchError if the dimensions differ.
    """
    bl = l.bounds()
    br = r.bounds()
    if len(bl) != len(br):
        raise DimensionMismatchError(len(bl), len(br))

    return -uniform_log_vol_overlap(bl, br) + 0.5 * (l.entropy() + r.entropy())
