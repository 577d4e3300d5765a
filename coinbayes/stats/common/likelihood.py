"""
coinbayes.stats.common.likelihood
=================================

Binomial likelihood functions for a coin with bias ``p``.

`binomial_likelihood` returns the *kernel* ``p**k * (1-p)**(N-k)``. The
binomial coefficient C(N, k) is the same for every hypothesis under a fixed
observation, so it cancels when posteriors are normalized; leaving it out
changes no posterior and avoids large integers. Within a single update use
either the kernel or `binomial_pmf` for every hypothesis, never a mix.

Examples
--------
>>> from coinbayes.stats.common.likelihood import binomial_likelihood, binomial_coefficient
>>> binomial_likelihood(1, 2, 0.5)
0.25
>>> binomial_coefficient(2, 4)
6
>>> binomial_likelihood(0, 1, 1.0)
Traceback (most recent call last):
...
coinbayes.core.errors.ValidationError: p must be in (0, 1), got 1.0
"""

from __future__ import annotations
import math
from typing import Callable

from scipy.special import comb, xlog1py, xlogy

from coinbayes.core.errors import InvalidObservationError, ValidationError

LikelihoodFn = Callable[[int, int, float], float]


def check_observation(k: int, N: int) -> None:
    """Raise `InvalidObservationError` unless ``0 <= k <= N`` and ``N >= 0``."""
    if N < 0:
        raise InvalidObservationError(f"N must be non-negative, got {N}")
    if k < 0 or k > N:
        raise InvalidObservationError(f"k must be in [0, N={N}], got {k}")


def check_bias(p: float) -> None:
    """Raise `ValidationError` unless ``0 < p < 1``."""
    if not (0.0 < p < 1.0):
        raise ValidationError(f"p must be in (0, 1), got {p}")


def binomial_likelihood(k: int, N: int, p: float) -> float:
    """
    Unnormalized binomial likelihood ``p**k * (1-p)**(N-k)``.

    Args:
        k: Number of heads observed
        N: Number of flips
        p: Hypothesized probability of heads, strictly inside (0, 1)

    Returns:
        The likelihood kernel (without C(N, k))
    """
    check_observation(k, N)
    check_bias(p)
    return p**k * (1 - p) ** (N - k)


def binomial_coefficient(k: int, N: int) -> int:
    """Exact C(N, k)."""
    check_observation(k, N)
    return int(comb(N, k, exact=True))


def binomial_pmf(k: int, N: int, p: float) -> float:
    """Full binomial probability ``C(N, k) * p**k * (1-p)**(N-k)``."""
    return binomial_coefficient(k, N) * binomial_likelihood(k, N, p)


def log_binomial_likelihood(k: int, N: int, p: float) -> float:
    """
    Natural log of the likelihood kernel.

    Uses ``xlogy``/``xlog1py`` so that ``k == 0`` or ``k == N`` contribute
    exactly zero rather than ``0 * log(...)``.

    >>> round(log_binomial_likelihood(1, 2, 0.5), 6) == round(2 * math.log(0.5), 6)
    True
    """
    check_observation(k, N)
    check_bias(p)
    return float(xlogy(k, p) + xlog1py(N - k, -p))
