"""
Statistical methods for sequential Bayesian updating.

1. **Common** (coinbayes.stats.common):
   Generic building blocks that know nothing about coins: likelihood
   kernels and Bayes-rule normalization over a finite hypothesis space.

2. **Schemes** (coinbayes.stats.schemes):
   Problem-specific applications of the common methods. The coin scheme
   holds the hypothesis set, the update engine and the trial history.

Example:
--------
>>> from coinbayes.stats.common.likelihood import binomial_likelihood
>>> binomial_likelihood(2, 2, 0.5)
0.25

>>> from coinbayes.stats.schemes.coin.hypotheses import HypothesisSet
>>> len(HypothesisSet.initialize(4))
4
"""
