# distances/sampling.py
"""
Sampling estimates of the Bhattacharyya distance and the Kullback-Leibler
divergence. They only need `l` to sample and both distributions to evaluate
their log density, and serve as an independent check on the closed forms.
"""
from __future__ import annotations

import math

import numpy as np
from scipy.special import logsumexp

from ..custom_types import Array
from ..distributions.interfaces import LogProber, RandLogProber

__all__ = ["bhattacharyya_sample", "kl_sample"]


def _draw(l: RandLogProber, n_samples: int) -> Array:
    if n_samples < 1:
        raise ValueError(f"n_samples must be positive. Got {n_samples}.")
    sample = getattr(l, "sample", None)
    if callable(sample):
        return np.asarray(sample(n_samples), dtype=float)
    return np.stack([np.asarray(l.rand(), dtype=float) for _ in range(n_samples)])


def bhattacharyya_sample(l: RandLogProber, r: LogProber, n_samples: int) -> float:
    """Estimate the Bhattacharyya distance by importance sampling under `l`.

    BC = int sqrt(p q) / p * p dx, so each sample contributes
    exp(0.5 log q(x) - 0.5 log p(x)); the mean is taken in log space.
    """
    X = _draw(l, n_samples)
    log_pa = np.asarray(l.log_prob(X), dtype=float)
    log_pb = np.asarray(r.log_prob(X), dtype=float)
    l_bhatt = 0.5 * log_pb - 0.5 * log_pa
    log_bc = logsumexp(l_bhatt) - math.log(n_samples)
    return -float(log_bc)


def kl_sample(l: RandLogProber, r: LogProber, n_samples: int) -> float:
    """Monte Carlo estimate of the Kullback-Leibler divergence from `l` to `r`."""
    X = _draw(l, n_samples)
    log_pa = np.asarray(l.log_prob(X), dtype=float)
    log_pb = np.asarray(r.log_prob(X), dtype=float)
    return float(np.mean(log_pa - log_pb))
