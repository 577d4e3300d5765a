"""
coinbayes.api - User-Friendly Facade
====================================

Ready-made sessions for the common questions:

- `uniform_session()`: evenly spaced hypotheses with a uniform prior
- `custom_session()`: explicit p-values and priors
- `posterior_after()`: posterior after a list of trials, in one call

Examples
--------
>>> from coinbayes.api.coin import uniform_session
>>> session = uniform_session(3)
>>> _ = session.update(4, 4)
>>> session.trial_count
1
"""
