"""
coinbayes.api.coin
==================

Convenience constructors for common coin-bias questions.

Examples
--------
>>> from coinbayes.api.coin import posterior_after
>>> result = posterior_after([(10, 8)], p_values=[0.3, 0.7])
>>> result.posteriors[1] > 0.9
True
>>> from coinbayes.api.coin import uniform_session
>>> session = uniform_session(5)
>>> session.is_started
True
"""

from __future__ import annotations
from typing import Iterable, Optional, Sequence, Tuple

from coinbayes.core.config import UpdatePolicy
from coinbayes.runtime.runners import SequentialRunner
from coinbayes.runtime.session import BayesSession
from coinbayes.stats.schemes.coin.model import UpdateResult


def uniform_session(
    count: int = 5,
    session_id: str = "coin",
    policy: Optional[UpdatePolicy] = None,
) -> BayesSession:
    """
    Create and start a session with ``count`` evenly spaced hypotheses
    and a uniform prior.

    Parameters
    ----------
    count : int, default=5
        Number of hypotheses (2-10 under the default policy)
    session_id : str, default="coin"
        Identifier written to the session ledger
    policy : UpdatePolicy, optional
        Bounds and update rules

    Returns
    -------
    BayesSession
        A started session ready for `update`
    """
    session = BayesSession(session_id, policy=policy)
    session.initialize(count)
    session.start_session()
    return session


def custom_session(
    p_values: Sequence[float],
    priors: Optional[Sequence[float]] = None,
    session_id: str = "coin",
    policy: Optional[UpdatePolicy] = None,
) -> BayesSession:
    """
    Create and start a session from explicit p-values and priors.

    Priors default to uniform.
    """
    session = BayesSession(session_id, policy=policy)
    session.configure(p_values, priors)
    session.start_session()
    return session


def posterior_after(
    trials: Iterable[Tuple[int, int]],
    count: int = 5,
    p_values: Optional[Sequence[float]] = None,
    priors: Optional[Sequence[float]] = None,
    policy: Optional[UpdatePolicy] = None,
) -> UpdateResult:
    """
    Posterior after running ``trials`` (``(N, k)`` pairs) in order.

    Uses explicit ``p_values`` when given, otherwise ``count`` evenly spaced
    hypotheses.

    Raises
    ------
    ValueError
        If no trials are given
    """
    if p_values is not None:
        session = custom_session(p_values, priors, policy=policy)
    else:
        session = uniform_session(count, policy=policy)
    results = SequentialRunner(session).run(trials)
    if not results:
        raise ValueError("at least one trial is required")
    return results[-1]
