"""
coinbayes.stats.schemes.coin.model
==================================

Typed payloads for the *coin-bias* scheme.

- `Hypothesis`: one candidate bias with its prior and posterior
- `TrialRecord`: immutable history entry for one update step
- `UpdateResult`: what one update step produced
- TypedDict payload contracts for ledger records (mypy-friendly)

Examples
--------
>>> from coinbayes.core.ledger import PayloadRegistry
>>> from coinbayes.stats.schemes.coin.model import TrialRecord
>>> rec = PayloadRegistry.decode("CoinPosterior", {"trial": 1, "N": 10, "k": 7,
...     "posterior": [0.2, 0.8], "p_values": [0.3, 0.7], "prior": [0.5, 0.5]})
>>> isinstance(rec, TrialRecord), rec.posterior
(True, (0.2, 0.8))
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, TypedDict

from coinbayes.core.ledger import PayloadRegistry


# --- Typed payloads used in ledger records (mypy-friendly) ---


class DesignPayload(TypedDict):
    p_values: List[float]
    priors: List[float]


class ObservationPayload(TypedDict):
    N: int
    k: int


class PosteriorPayload(TypedDict):
    trial: int
    N: int
    k: int
    posterior: List[float]
    p_values: List[float]
    prior: List[float]


# --- Typed objects ---


@dataclass
class Hypothesis:
    """A candidate coin bias with its current prior and posterior."""

    p_value: float
    prior: float
    posterior: float


@dataclass(frozen=True)
class TrialRecord:
    """One completed update step, as kept in the trial history."""

    trial: int
    N: int
    k: int
    posterior: Tuple[float, ...]
    p_values: Tuple[float, ...]
    prior: Tuple[float, ...] = ()

    def to_payload(self) -> PosteriorPayload:
        return {
            "trial": self.trial,
            "N": self.N,
            "k": self.k,
            "posterior": list(self.posterior),
            "p_values": list(self.p_values),
            "prior": list(self.prior),
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TrialRecord":
        return cls(
            trial=int(payload["trial"]),
            N=int(payload["N"]),
            k=int(payload["k"]),
            posterior=tuple(float(x) for x in payload["posterior"]),
            p_values=tuple(float(x) for x in payload["p_values"]),
            prior=tuple(float(x) for x in payload.get("prior", ())),
        )


@dataclass(frozen=True)
class UpdateResult:
    """
    Outcome of one Bayesian update.

    Attributes:
        posteriors: New posterior per hypothesis, in hypothesis order
        priors: Priors the step actually used (after the iteration step)
        total_probability: P(data) marginalized over hypotheses
        N: Flips observed
        k: Heads observed
    """

    posteriors: Tuple[float, ...]
    priors: Tuple[float, ...]
    total_probability: float
    N: int
    k: int
    p_values: Tuple[float, ...] = field(default=())


PayloadRegistry.register("CoinPosterior", TrialRecord.from_payload)
