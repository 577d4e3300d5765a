"""
coinbayes.stats.schemes.coin.hypotheses
=======================================

The hypothesis set: an ordered, fixed-size collection of candidate coin
biases with their priors and posteriors.

Order is significant (it drives colour assignment and table column order).
A set is created once per configuration and replaced, never resized, when
the user reconfigures. Single-field edits are validated and atomic: a
rejected edit leaves the whole set untouched.

Examples
--------
>>> from coinbayes.stats.schemes.coin.hypotheses import HypothesisSet
>>> hs = HypothesisSet.initialize(5)
>>> hs.p_values()
(0.01, 0.25, 0.5, 0.75, 0.99)
>>> round(hs.prior_sum(), 9)
1.0
>>> hs.set_prior(0, 0.0)
>>> hs.is_prior_sum_valid()
False
>>> hs.normalize_priors(); hs.is_prior_sum_valid()
True
"""

from __future__ import annotations
import logging
from dataclasses import replace
from typing import Iterator, List, Optional, Sequence, Tuple

from coinbayes.core.config import UpdatePolicy, resolve_policy
from coinbayes.core.errors import (
    ConfigurationError,
    DegenerateStateError,
    ValidationError,
)
from coinbayes.stats.common.bayes import expected_value, normalize
from coinbayes.stats.schemes.coin.model import Hypothesis

logger = logging.getLogger(__name__)


def evenly_spaced_p_values(count: int, policy: UpdatePolicy) -> List[float]:
    """``i / (count - 1)`` for each i, clamped into the policy bounds and rounded."""
    values = []
    for i in range(count):
        p = i / (count - 1)
        p = min(max(p, policy.p_value_min), policy.p_value_max)
        values.append(round(p, policy.p_value_decimals))
    return values


class HypothesisSet:
    """Ordered hypotheses with validated editing operations."""

    def __init__(
        self,
        hypotheses: Sequence[Hypothesis],
        policy: Optional[UpdatePolicy] = None,
    ):
        self.policy = resolve_policy(policy)
        self._check_count(len(hypotheses), self.policy)
        self._hypotheses: List[Hypothesis] = [replace(h) for h in hypotheses]

    # ---- construction ----

    @staticmethod
    def _check_count(count: int, policy: UpdatePolicy) -> None:
        if count < policy.min_hypotheses or count > policy.max_hypotheses:
            raise ConfigurationError(
                f"Please enter a number of states between {policy.min_hypotheses} "
                f"and {policy.max_hypotheses} (got {count})."
            )

    @classmethod
    def initialize(
        cls, count: int, policy: Optional[UpdatePolicy] = None
    ) -> "HypothesisSet":
        """
        Create ``count`` evenly spaced hypotheses with a uniform prior.

        Raises:
            ConfigurationError: if ``count`` is outside the policy range
        """
        policy = resolve_policy(policy)
        cls._check_count(count, policy)
        uniform = 1 / count
        hypotheses = [
            Hypothesis(p_value=p, prior=uniform, posterior=uniform)
            for p in evenly_spaced_p_values(count, policy)
        ]
        logger.debug("initialized %d hypotheses", count)
        return cls(hypotheses, policy)

    @classmethod
    def from_values(
        cls,
        p_values: Sequence[float],
        priors: Optional[Sequence[float]] = None,
        policy: Optional[UpdatePolicy] = None,
    ) -> "HypothesisSet":
        """
        Create a set from explicit p-values and (optionally) priors.

        Priors default to uniform. Each value is validated with the same rules
        as `set_p_value` / `set_prior`; the prior sum is not enforced.

        >>> HypothesisSet.from_values([0.3, 0.7], [0.5, 0.5]).priors()
        (0.5, 0.5)
        """
        policy = resolve_policy(policy)
        cls._check_count(len(p_values), policy)
        if priors is None:
            priors = [1 / len(p_values)] * len(p_values)
        if len(priors) != len(p_values):
            raise ConfigurationError(
                f"Got {len(p_values)} p-values but {len(priors)} priors."
            )
        for p in p_values:
            cls._check_p_value(p, policy)
        for prior in priors:
            cls._check_prior(prior)
        return cls(
            [
                Hypothesis(p_value=float(p), prior=float(q), posterior=float(q))
                for p, q in zip(p_values, priors)
            ],
            policy,
        )

    def copy(self) -> "HypothesisSet":
        return HypothesisSet(self._hypotheses, self.policy)

    # ---- read access ----

    def __len__(self) -> int:
        return len(self._hypotheses)

    def __iter__(self) -> Iterator[Hypothesis]:
        return (replace(h) for h in self._hypotheses)

    def __getitem__(self, index: int) -> Hypothesis:
        return replace(self._hypotheses[self._check_index(index)])

    def __repr__(self) -> str:
        return f"HypothesisSet({self._hypotheses!r})"

    def p_values(self) -> Tuple[float, ...]:
        return tuple(h.p_value for h in self._hypotheses)

    def priors(self) -> Tuple[float, ...]:
        return tuple(h.prior for h in self._hypotheses)

    def posteriors(self) -> Tuple[float, ...]:
        return tuple(h.posterior for h in self._hypotheses)

    # ---- validation ----

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._hypotheses):
            raise ValidationError(
                f"Hypothesis index must be in [0, {len(self._hypotheses) - 1}], got {index}"
            )
        return index

    @staticmethod
    def _check_p_value(value: float, policy: UpdatePolicy) -> None:
        # Written so that NaN fails the check.
        if not (policy.p_value_min <= value <= policy.p_value_max):
            raise ValidationError(
                f"P-values must be between {policy.p_value_min} and "
                f"{policy.p_value_max}, got {value}."
            )

    @staticmethod
    def _check_prior(value: float) -> None:
        if not (0.0 <= value <= 1.0):
            raise ValidationError(f"Priors must be between 0 and 1, got {value}.")

    # ---- edits ----

    def set_p_value(self, index: int, value: float) -> None:
        """Set one hypothesis' p-value; `ValidationError` leaves it unchanged."""
        self._check_index(index)
        self._check_p_value(value, self.policy)
        self._hypotheses[index].p_value = float(value)

    def set_prior(self, index: int, value: float) -> None:
        """Set one prior. The set is not renormalized; check `prior_sum`."""
        self._check_index(index)
        self._check_prior(value)
        self._hypotheses[index].prior = float(value)

    def prior_sum(self) -> float:
        return sum(h.prior for h in self._hypotheses)

    def is_prior_sum_valid(self) -> bool:
        """True when priors sum to one within the policy tolerance."""
        return abs(self.prior_sum() - 1.0) < self.policy.prior_sum_tolerance

    def normalize_priors(self) -> None:
        """
        Divide every prior by the prior sum.

        Raises:
            DegenerateStateError: if the priors sum to zero
        """
        try:
            scaled = normalize(self.priors())
        except DegenerateStateError:
            logger.warning("cannot normalize priors: sum is zero")
            raise
        for h, prior in zip(self._hypotheses, scaled):
            h.prior = prior
        logger.debug("normalized priors to %s", scaled)

    def adopt_posteriors(self) -> None:
        """Make every posterior the prior of the next step."""
        for h in self._hypotheses:
            h.prior = h.posterior

    def apply_update(
        self, priors: Sequence[float], posteriors: Sequence[float]
    ) -> None:
        """Commit the priors and posteriors of a completed update step."""
        if len(priors) != len(self) or len(posteriors) != len(self):
            raise ValueError("priors and posteriors must match the hypothesis count")
        for h, prior, posterior in zip(self._hypotheses, priors, posteriors):
            h.prior = prior
            h.posterior = posterior

    def expected_bias(self) -> float:
        """Posterior mean of the coin bias."""
        return expected_value(self.p_values(), self.posteriors())
