"""
coinbayes.stats.schemes.coin
============================

Coin-bias scheme: a discrete set of candidate biases updated trial by trial.

- `model`: hypothesis, trial record and update result types
- `hypotheses`: the configurable hypothesis set
- `engine`: one Bayesian update step
- `history`: ledger-backed trial history
"""

from coinbayes.stats.schemes.coin.model import Hypothesis, TrialRecord, UpdateResult
from coinbayes.stats.schemes.coin.hypotheses import HypothesisSet
from coinbayes.stats.schemes.coin.engine import update
from coinbayes.stats.schemes.coin.history import TrialHistory

__all__ = [
    "Hypothesis",
    "TrialRecord",
    "UpdateResult",
    "HypothesisSet",
    "update",
    "TrialHistory",
]
