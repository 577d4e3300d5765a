"""
coinbayes.stats.common.bayes
============================

Generic Bayes-rule helpers over a finite hypothesis space.

These functions know nothing about coins: they take ordered priors and
ordered likelihoods and return ordered posteriors. They never mutate their
inputs.

Examples
--------
>>> from coinbayes.stats.common.bayes import bayes_posterior, normalize
>>> posteriors, total = bayes_posterior([0.5, 0.5], [0.2, 0.6])
>>> [round(x, 3) for x in posteriors], round(total, 3)
([0.25, 0.75], 0.4)
>>> [round(x, 6) for x in normalize([0.2, 0.2, 0.2])]
[0.333333, 0.333333, 0.333333]
"""

from __future__ import annotations
import math
from typing import List, Sequence, Tuple

from coinbayes.core.errors import DegenerateStateError, ImpossibleDataError


def normalize(values: Sequence[float]) -> List[float]:
    """Rescale non-negative values so they sum to one.

    Raises:
        DegenerateStateError: if the values sum to zero
    """
    total = math.fsum(values)
    if total == 0:
        raise DegenerateStateError("Cannot normalize: sum of values is zero.")
    return [v / total for v in values]


def unnormalized_posterior(
    priors: Sequence[float], likelihoods: Sequence[float]
) -> List[float]:
    """Elementwise ``likelihood * prior``."""
    if len(priors) != len(likelihoods):
        raise ValueError("priors and likelihoods must have same length")
    return [lik * prior for prior, lik in zip(priors, likelihoods)]


def bayes_posterior(
    priors: Sequence[float],
    likelihoods: Sequence[float],
    halt_threshold: float = 0.0,
) -> Tuple[List[float], float]:
    """
    Posterior distribution and total probability P(data).

    Args:
        priors: Prior probability of each hypothesis
        likelihoods: Likelihood of the data under each hypothesis
        halt_threshold: Halt when total probability is ``<=`` this value.
            With the default ``0.0`` only an exact zero halts, so extreme but
            representable totals such as ``1e-300`` still update.

    Returns:
        Tuple of (posteriors, total_probability)

    Raises:
        ImpossibleDataError: if the total probability is at or below the
            halt threshold
    """
    weighted = unnormalized_posterior(priors, likelihoods)
    total = sum(weighted)
    if total <= halt_threshold:
        raise ImpossibleDataError(
            "The data is impossible given the current set of hypotheses "
            f"(total probability {total!r}). Update halted.",
            total_probability=total,
        )
    return [w / total for w in weighted], total


def expected_value(values: Sequence[float], weights: Sequence[float]) -> float:
    """Weighted mean of ``values`` under a distribution ``weights``."""
    if len(values) != len(weights):
        raise ValueError("values and weights must have same length")
    return math.fsum(v * w for v, w in zip(values, weights))


def argmax(weights: Sequence[float]) -> int:
    """Index of the largest weight (first one on ties)."""
    if not weights:
        raise ValueError("weights must be non-empty")
    return max(range(len(weights)), key=lambda i: weights[i])
