"""
coinbayes.core.errors
=====================

Exceptions raised by the hypothesis model, the update engine and the session.

Every error is recoverable: the operation that raised it leaves the model,
the history and the trial counter exactly as they were, so callers can show
the message and let the user retry.

Examples
--------
>>> from coinbayes.core.errors import ImpossibleDataError, CoinBayesError
>>> issubclass(ImpossibleDataError, CoinBayesError)
True
>>> issubclass(CoinBayesError, ValueError)
True
"""

from __future__ import annotations


class CoinBayesError(ValueError):
    """Base class for all coinbayes errors."""


class ConfigurationError(CoinBayesError):
    """Hypothesis count or policy outside the supported range."""


class ValidationError(CoinBayesError):
    """A single field (p-value, prior, index) was rejected."""


class DegenerateStateError(CoinBayesError):
    """Priors cannot be normalized because they sum to zero."""


class InvalidObservationError(CoinBayesError):
    """Flip count N or head count k is out of range."""


class ImpossibleDataError(CoinBayesError):
    """Observed data has zero total probability under every hypothesis."""

    def __init__(self, message: str, total_probability: float = 0.0):
        super().__init__(message)
        self.total_probability = total_probability
