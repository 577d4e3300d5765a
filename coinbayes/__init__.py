"""
coinbayes: sequential Bayesian updating over a discrete set of coin biases.

A user picks a handful of candidate biases (hypotheses), assigns prior
probabilities, then feeds observed trials (N flips, k heads). Each trial
updates the distribution by Bayes' rule, and the posterior of one trial
becomes the prior of the next.

Every session writes its facts (the registered hypothesis design, each
observation, each posterior) to an *append-only ledger*. The trial history,
the tables and the chart series are all read back from that ledger, so a
session's evolution can always be replayed and inspected.

Example
-------
>>> import coinbayes
>>> assert hasattr(coinbayes, "core")
>>> assert hasattr(coinbayes, "stats")
"""

from coinbayes import core, stats
from coinbayes.__version__ import __version__

__all__ = ["core", "stats", "__version__"]
