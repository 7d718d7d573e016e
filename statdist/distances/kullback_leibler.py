# distances/kullback_leibler.py
"""
Kullback-Leibler divergence from l to r,

    D_KL(l || r) = int_x p(x) log(p(x) / q(x)) dx

Note that it is not symmetric in its arguments.
"""
from __future__ import annotations

import logging
import math

import numpy as np

from ..distributions.normal import Normal
from ..distributions.uniform import Uniform
from ..exceptions import DimensionMismatchError
from ..linalg.operations import mah_dist_squared, trace_Ainv_B

logger = logging.getLogger(__name__)

__all__ = ["kl_normal", "kl_uniform"]


def kl_normal(l: Normal, r: Normal) -> float:
    """Kullback-Leibler divergence between normal distributions `l` and `r`.

    .. math::

        D_{KL}(l \\| r) = \\frac{1}{2}\\left[\\ln|\\Sigma_r| - \\ln|\\Sigma_l|
            + (\\mu_l - \\mu_r)^\\top \\Sigma_r^{-1} (\\mu_l - \\mu_r)
            + \\text{tr}(\\Sigma_r^{-1} \\Sigma_l) - d\\right]

    The trace is computed from the Cholesky factors, without an inverse.

    Raises:
        DimensionMismatchError if the dimensions differ.

    Returns:
        float, or nan if a triangular solve with the factor of
        :math:`\\Sigma_r` breaks down.
    """
    if l.dim != r.dim:
        raise DimensionMismatchError(l.dim, r.dim)

    try:
        mah_sq = float(mah_dist_squared(l.mean, r.chol, r.mean)[0])
        tr = trace_Ainv_B(r.chol, l.chol)
    except np.linalg.LinAlgError as e:
        logger.warning("Kullback-Leibler divergence undefined: %s", e)
        return math.nan

    return r.log_sqrt_det - l.log_sqrt_det + 0.5 * (mah_sq + tr - l.dim)


def kl_uniform(l: Uniform, r: Uniform) -> float:
    """Kullback-Leibler divergence between uniform distributions `l` and `r`.

    The divergence is +inf unless the box of `l` lies inside the box of `r`,
    since otherwise q(x) is zero where p(x) is not. Inside, both densities
    are constant and 0 * log(0) = 0 outside the support of `l`, so the
    integral collapses to log p - log q = H_r - H_l.

    Raises:
        DimensionMismatchError if the dimensions differ.
    """
    bl = l.bounds()
    br = r.bounds()
    if len(bl) != len(br):
        raise DimensionMismatchError(len(bl), len(br))

    for vl, vr in zip(bl, br):
        if vr.min > vl.min or vr.max < vl.max:
            return math.inf

    log_px = -l.entropy()
    log_qx = -r.entropy()
    return log_px - log_qx
