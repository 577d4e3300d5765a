"""
coinbayes.runtime.session
=========================

The session object that owns all mutable state of one calculator run:
the hypothesis set, the trial history and the trial counter.

Lifecycle
---------
1. Configure hypotheses with `initialize` (evenly spaced) or `configure`
   (explicit values), then edit individual p-values and priors.
2. `start_session` clears the history and resets the trial counter.
3. Each `update` performs one Bayesian step and appends a trial record.

Reconfiguring hypotheses stops the running session; history is cleared the
next time `start_session` is called. Sessions share nothing, so independent
users each get their own instance.

Examples
--------
>>> from coinbayes.runtime.session import BayesSession
>>> session = BayesSession()
>>> _ = session.initialize(5)
>>> session.start_session()
>>> result = session.update(10, 7)
>>> session.trial_count, len(session.history())
(1, 1)
>>> round(sum(result.posteriors), 9)
1.0
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence

from coinbayes.backends.polars.ledger import PolarsLedger
from coinbayes.core.config import UpdatePolicy, resolve_policy
from coinbayes.core.errors import ConfigurationError, ValidationError
from coinbayes.stats.common.bayes import argmax
from coinbayes.stats.schemes.coin import engine
from coinbayes.stats.schemes.coin.hypotheses import HypothesisSet
from coinbayes.stats.schemes.coin.history import TrialHistory
from coinbayes.stats.schemes.coin.model import TrialRecord, UpdateResult

logger = logging.getLogger(__name__)


class BayesSession:
    """
    One interactive Bayesian-updating session over a coin's bias.

    Attributes:
        session_id: Identifier written to every ledger event
        policy: Bounds and update rules
        trial_history: Ledger-backed trial log
    """

    def __init__(
        self,
        session_id: str = "coin",
        policy: Optional[UpdatePolicy] = None,
        ledger: Optional[PolarsLedger] = None,
    ):
        self.session_id = session_id
        self.policy = resolve_policy(policy)
        self.trial_history = TrialHistory(ledger, session_id=session_id)
        self._hypotheses: Optional[HypothesisSet] = None
        self._trial_counter = 0
        self._is_started = False

    # ---- configuration ----

    @property
    def hypotheses(self) -> HypothesisSet:
        if self._hypotheses is None:
            raise ConfigurationError("Please set up the hypotheses first.")
        return self._hypotheses

    @property
    def is_configured(self) -> bool:
        return self._hypotheses is not None

    @property
    def is_started(self) -> bool:
        return self._is_started

    @property
    def trial_count(self) -> int:
        return self._trial_counter

    def initialize(self, count: int) -> HypothesisSet:
        """Replace the hypotheses with ``count`` evenly spaced ones."""
        hypotheses = HypothesisSet.initialize(count, self.policy)
        self._replace_hypotheses(hypotheses)
        return hypotheses

    def configure(
        self, p_values: Sequence[float], priors: Optional[Sequence[float]] = None
    ) -> HypothesisSet:
        """Replace the hypotheses with explicit p-values and priors."""
        hypotheses = HypothesisSet.from_values(p_values, priors, self.policy)
        self._replace_hypotheses(hypotheses)
        return hypotheses

    def _replace_hypotheses(self, hypotheses: HypothesisSet) -> None:
        self._hypotheses = hypotheses
        self._is_started = False
        logger.info(
            "session %s configured with %d hypotheses", self.session_id, len(hypotheses)
        )

    def set_p_value(self, index: int, value: float) -> None:
        self.hypotheses.set_p_value(index, value)

    def set_prior(self, index: int, value: float) -> None:
        self.hypotheses.set_prior(index, value)

    def prior_sum(self) -> float:
        return self.hypotheses.prior_sum()

    def normalize_priors(self) -> None:
        self.hypotheses.normalize_priors()

    def can_start(self) -> bool:
        """Whether `start_session` would succeed."""
        if self._hypotheses is None:
            return False
        return (
            not self.policy.require_normalized_priors
            or self._hypotheses.is_prior_sum_valid()
        )

    # ---- lifecycle ----

    def start_session(self) -> None:
        """
        Clear the history and reset the trial counter.

        Raises:
            ConfigurationError: if no hypotheses are configured
            ValidationError: if the policy requires normalized priors and the
                prior sum is outside tolerance
        """
        hypotheses = self.hypotheses
        if self.policy.require_normalized_priors and not hypotheses.is_prior_sum_valid():
            raise ValidationError(
                f"Priors must sum to 1 (current prior sum: {hypotheses.prior_sum():.3f})."
            )
        self.trial_history.reset()
        self._trial_counter = 0
        self.trial_history.register_design(hypotheses.p_values(), hypotheses.priors())
        self._is_started = True
        logger.info("session %s started", self.session_id)

    def update(self, N: int, k: int) -> UpdateResult:
        """
        Run one trial and append it to the history.

        Raises:
            ConfigurationError: if the session has not been started
            InvalidObservationError: if N or k is out of range
            ImpossibleDataError: if the data has zero total probability
        """
        if not self._is_started:
            raise ConfigurationError("Start the session before running updates.")
        hypotheses = self.hypotheses
        before = (hypotheses.priors(), hypotheses.posteriors())
        result = engine.update(
            hypotheses,
            N,
            k,
            is_first_trial=self._trial_counter == 0,
            policy=self.policy,
        )
        trial = self._trial_counter + 1
        try:
            self.trial_history.record(
                trial, result.N, result.k, result.posteriors, result.p_values, result.priors
            )
        except Exception:
            # history and hypotheses move together
            hypotheses.apply_update(*before)
            raise
        self._trial_counter = trial
        return result

    def adopt_posteriors(self) -> None:
        """Advance priors to the current posteriors (manual iteration)."""
        self.hypotheses.adopt_posteriors()

    def history(self) -> List[TrialRecord]:
        return self.trial_history.all()

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the session state."""
        summary: Dict[str, Any] = {
            "session_id": self.session_id,
            "status": "running" if self._is_started else (
                "configured" if self.is_configured else "not_configured"
            ),
            "trials": self._trial_counter,
        }
        if self._hypotheses is not None:
            hs = self._hypotheses
            posteriors = hs.posteriors()
            summary.update(
                {
                    "hypotheses": len(hs),
                    "p_values": list(hs.p_values()),
                    "prior_sum": hs.prior_sum(),
                    "posteriors": list(posteriors),
                    "most_probable_p": hs.p_values()[argmax(posteriors)],
                    "expected_bias": hs.expected_bias(),
                }
            )
        return summary

    def reset(self) -> None:
        """Clear history and counter but keep the hypothesis configuration."""
        self.trial_history.reset()
        self._trial_counter = 0
        self._is_started = False
