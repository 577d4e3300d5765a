"""
coinbayes.runtime.runners
=========================

Runners that replay a sequence of trials through one or more sessions.

The session holds the update logic; runners only feed it data, which makes
it easy to replay a recorded flip sequence or to compare how differently
configured sessions react to the same observations.

Examples
--------
>>> from coinbayes.runtime.session import BayesSession
>>> from coinbayes.runtime.runners import SequentialRunner
>>> session = BayesSession()
>>> _ = session.initialize(3)
>>> runner = SequentialRunner(session)
>>> results = runner.run([(10, 7), (10, 6)])
>>> len(results), runner.get_summary()["trials"]
(2, 2)
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from coinbayes.runtime.session import BayesSession
from coinbayes.stats.schemes.coin.model import UpdateResult

Trial = Tuple[int, int]


class SequentialRunner:
    """
    Feeds trials one by one into a single session.

    Starts the session on first use when it is configured but not yet started.
    """

    def __init__(self, session: BayesSession):
        self.session = session
        self._results_history: List[UpdateResult] = []

    def _ensure_started(self) -> None:
        if not self.session.is_started:
            self.session.start_session()

    def step(self, N: int, k: int) -> UpdateResult:
        """Run a single trial."""
        self._ensure_started()
        result = self.session.update(N, k)
        self._results_history.append(result)
        return result

    def run(self, trials: Iterable[Trial]) -> List[UpdateResult]:
        """Run trials in order; stops at the first error, keeping earlier results."""
        return [self.step(N, k) for N, k in trials]

    def get_summary(self) -> Dict[str, Any]:
        """Get session summary extended with runner state."""
        summary = self.session.get_summary()
        summary.update(
            {
                "runner_type": "sequential",
                "steps_run": len(self._results_history),
            }
        )
        return summary

    def get_results_history(self) -> List[UpdateResult]:
        return self._results_history.copy()

    def reset(self) -> None:
        """Reset both session and runner state."""
        self.session.reset()
        self._results_history.clear()


class BatchRunner:
    """
    Applies the same trials to several independent sessions.

    Useful for comparing priors, hypothesis grids or update policies side by
    side.
    """

    def __init__(self, sessions: Sequence[BayesSession]):
        """
        Raises:
            ValueError: if two sessions share a session id
        """
        self.sessions = list(sessions)
        ids = [s.session_id for s in self.sessions]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"session ids must be unique, repeated: {duplicates}")
        self.runners = [SequentialRunner(s) for s in self.sessions]

    def run_all(self, trials: Iterable[Trial]) -> Dict[str, List[UpdateResult]]:
        """Run the trials through every session, keyed by session id."""
        trial_list = list(trials)
        return {
            runner.session.session_id: runner.run(trial_list)
            for runner in self.runners
        }

    def get_comparison_summary(self) -> Dict[str, Any]:
        """Get comparative summary across all sessions."""
        summaries = [runner.get_summary() for runner in self.runners]
        return {
            "total_sessions": len(self.sessions),
            "sessions": summaries,
        }
