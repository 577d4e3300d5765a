"""
coinbayes.core.config
=====================

Update policy: the bounds and knobs that govern configuration, validation
and the sequential update.

Two behaviours are policy rather than fixed law:

- the halt condition on total probability (exact zero by default, or a small
  threshold such as ``1e-10``), and
- whether the posterior of one trial automatically becomes the prior of the
  next one.

Examples
--------
>>> from coinbayes.core.config import UpdatePolicy, DEFAULT_POLICY, EPSILON_POLICY
>>> DEFAULT_POLICY.halt_threshold
0.0
>>> EPSILON_POLICY.halt_threshold
1e-10
>>> UpdatePolicy(max_flips=0).validate()
Traceback (most recent call last):
...
coinbayes.core.errors.ConfigurationError: max_flips must be positive, got 0
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any

from coinbayes.core.errors import ConfigurationError


@dataclass(frozen=True)
class UpdatePolicy:
    """
    Bounds and update rules for a Bayes session.

    Attributes
    ----------
    min_hypotheses, max_hypotheses : int
        Allowed hypothesis count (inclusive).
    p_value_min, p_value_max : float
        Allowed p-value range. Both must lie strictly inside (0, 1) so the
        likelihood never evaluates ``0 ** 0``.
    p_value_decimals : int
        Rounding applied to generated p-values.
    max_flips : int
        Largest N accepted per trial.
    prior_sum_tolerance : float
        Priors are considered normalized when ``abs(sum - 1) < tolerance``.
    halt_threshold : float
        An update halts when total probability is ``<=`` this value.
        ``0.0`` means only exact zero halts.
    auto_iterate : bool
        When true, each update after the first starts from the previous
        posterior. When false, the caller advances explicitly.
    require_normalized_priors : bool
        When true, a session refuses to start with un-normalized priors.
    """

    min_hypotheses: int = 2
    max_hypotheses: int = 10
    p_value_min: float = 0.01
    p_value_max: float = 0.99
    p_value_decimals: int = 3
    max_flips: int = 100
    prior_sum_tolerance: float = 1e-3
    halt_threshold: float = 0.0
    auto_iterate: bool = True
    require_normalized_priors: bool = True

    def validate(self) -> None:
        """Validate policy values."""
        if self.min_hypotheses < 1:
            raise ConfigurationError(
                f"min_hypotheses must be at least 1, got {self.min_hypotheses}"
            )
        if self.max_hypotheses < self.min_hypotheses:
            raise ConfigurationError(
                "max_hypotheses must be >= min_hypotheses, "
                f"got {self.max_hypotheses} < {self.min_hypotheses}"
            )
        if not (0.0 < self.p_value_min <= self.p_value_max < 1.0):
            raise ConfigurationError(
                "p-value bounds must satisfy 0 < min <= max < 1, "
                f"got [{self.p_value_min}, {self.p_value_max}]"
            )
        if self.p_value_decimals < 0:
            raise ConfigurationError(
                f"p_value_decimals must be non-negative, got {self.p_value_decimals}"
            )
        if self.max_flips < 1:
            raise ConfigurationError(
                f"max_flips must be positive, got {self.max_flips}"
            )
        if self.prior_sum_tolerance <= 0:
            raise ConfigurationError(
                f"prior_sum_tolerance must be positive, got {self.prior_sum_tolerance}"
            )
        if self.halt_threshold < 0:
            raise ConfigurationError(
                f"halt_threshold must be non-negative, got {self.halt_threshold}"
            )

    def with_overrides(self, **changes: Any) -> "UpdatePolicy":
        """Return a validated copy with the given fields replaced."""
        policy = replace(self, **changes)
        policy.validate()
        return policy


DEFAULT_POLICY = UpdatePolicy()
EPSILON_POLICY = UpdatePolicy(halt_threshold=1e-10)


def resolve_policy(policy: UpdatePolicy | None) -> UpdatePolicy:
    """Return ``policy`` validated, or the default policy."""
    if policy is None:
        return DEFAULT_POLICY
    policy.validate()
    return policy
