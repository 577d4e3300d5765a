"""
coinbayes.stats.schemes.coin.engine
===================================

Sequential Bayesian update for the coin-bias scheme.

One call to `update` performs one trial:

1. **Iteration**: after the first trial, each hypothesis starts from its
   previous posterior (when the policy iterates automatically).
2. **Unnormalized posterior**: ``likelihood(k, N, p) * prior`` per hypothesis.
3. **Total probability**: the sum of step 2, i.e. P(data).
4. **Halt**: total probability at or below the policy threshold raises
   `ImpossibleDataError`.
5. **Normalization**: each unnormalized posterior divided by the total.

Steps 1-5 run on local copies; the hypothesis set is written only after the
halt check passes, so a failed update leaves priors and posteriors as they
were. After a successful update the priors hold the values used for this
trial; they are advanced to the posteriors at the start of the next one.

Examples
--------
>>> from coinbayes.stats.schemes.coin.hypotheses import HypothesisSet
>>> from coinbayes.stats.schemes.coin.engine import update
>>> hs = HypothesisSet.from_values([0.3, 0.7], [0.5, 0.5])
>>> result = update(hs, 10, 8, is_first_trial=True)
>>> result.posteriors[1] > 0.9
True
>>> hs.priors()
(0.5, 0.5)
"""

from __future__ import annotations
import logging
import operator
from typing import Optional, Tuple

from coinbayes.core.config import UpdatePolicy, resolve_policy
from coinbayes.core.errors import ImpossibleDataError, InvalidObservationError
from coinbayes.stats.common.bayes import bayes_posterior
from coinbayes.stats.common.likelihood import LikelihoodFn, binomial_likelihood
from coinbayes.stats.schemes.coin.hypotheses import HypothesisSet
from coinbayes.stats.schemes.coin.model import UpdateResult

logger = logging.getLogger(__name__)


def check_trial(
    N: int, k: int, policy: Optional[UpdatePolicy] = None
) -> Tuple[int, int]:
    """
    Validate one trial's data.

    Accepts anything usable as an index (``int``, NumPy integers) and returns
    the pair as plain ``int``.

    Raises:
        InvalidObservationError: unless N and k are integers with
            ``1 <= N <= max_flips`` and ``0 <= k <= N``
    """
    policy = resolve_policy(policy)
    if isinstance(N, bool) or isinstance(k, bool):
        raise InvalidObservationError("N and k must be integers.")
    try:
        N, k = operator.index(N), operator.index(k)
    except TypeError:
        raise InvalidObservationError(
            f"N and k must be integers (got N={N!r}, k={k!r})."
        ) from None
    if not (1 <= N <= policy.max_flips) or not (0 <= k <= N):
        raise InvalidObservationError(
            f"Invalid input. N must be 1-{policy.max_flips}, and k must be "
            f"between 0 and N (got N={N}, k={k})."
        )
    return N, k


def update(
    hypothesis_set: HypothesisSet,
    N: int,
    k: int,
    is_first_trial: bool,
    policy: Optional[UpdatePolicy] = None,
    likelihood: LikelihoodFn = binomial_likelihood,
) -> UpdateResult:
    """
    Perform one Bayesian update step in place.

    Args:
        hypothesis_set: Hypotheses to update; mutated only on success
        N: Flips in this trial
        k: Heads in this trial
        is_first_trial: When false (and the policy iterates automatically)
            the previous posterior is used as this step's prior
        policy: Bounds and halt threshold; defaults to the hypothesis set's
        likelihood: Per-hypothesis likelihood, applied to every hypothesis

    Returns:
        UpdateResult with the new posteriors and the priors used

    Raises:
        InvalidObservationError: if N or k is out of range
        ImpossibleDataError: if the total probability is at or below the
            halt threshold
    """
    policy = resolve_policy(policy or hypothesis_set.policy)
    N, k = check_trial(N, k, policy)

    if not is_first_trial and policy.auto_iterate:
        priors = hypothesis_set.posteriors()
    else:
        priors = hypothesis_set.priors()
    p_values = hypothesis_set.p_values()

    likelihoods = [likelihood(k, N, p) for p in p_values]
    try:
        posteriors, total = bayes_posterior(
            priors, likelihoods, halt_threshold=policy.halt_threshold
        )
    except ImpossibleDataError as exc:
        logger.warning(
            "update halted for N=%d, k=%d: total probability %r",
            N,
            k,
            exc.total_probability,
        )
        raise

    hypothesis_set.apply_update(priors, posteriors)
    logger.debug(
        "updated N=%d k=%d total=%r posteriors=%s", N, k, total, posteriors
    )
    return UpdateResult(
        posteriors=tuple(posteriors),
        priors=tuple(priors),
        total_probability=total,
        N=N,
        k=k,
        p_values=p_values,
    )
