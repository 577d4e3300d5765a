"""
coinbayes.runtime
=================

Runtime objects that own and drive session state.

Key Components
--------------
- `BayesSession`: owns the hypothesis set, trial history and trial counter
- `SequentialRunner`: feeds a sequence of trials into one session
- `BatchRunner`: applies the same trials to several sessions

Examples
--------
>>> from coinbayes.runtime.session import BayesSession
>>> from coinbayes.runtime.runners import SequentialRunner
>>> session = BayesSession()
>>> _ = session.initialize(5)
>>> runner = SequentialRunner(session)
>>> _ = runner.run([(10, 7)])
>>> session.trial_count
1
"""
