"""
coinbayes.stats.schemes.coin.history
====================================

Append-only trial history backed by the session ledger.

Each recorded trial appends two ledger events, the raw observation
(``obs`` namespace) and the resulting posterior (``stats`` namespace).
Reads decode the posterior events back into immutable `TrialRecord` objects,
so the ledger stays the single source of truth for both the table and the
chart views.

Examples
--------
>>> from coinbayes.stats.schemes.coin.history import TrialHistory
>>> h = TrialHistory()
>>> h.record(1, 10, 7, [0.2, 0.8], [0.3, 0.7])
>>> h.record(2, 5, 3, [0.1, 0.9], [0.3, 0.7])
>>> [r.trial for r in h.all()]
[1, 2]
>>> h.series_for(1)
[(1, 0.8), (2, 0.9)]
>>> h.reset(); len(h)
0
"""

from __future__ import annotations
import logging
import operator
from typing import List, Optional, Sequence, Tuple

import polars as pl

from coinbayes.backends.polars.ledger import PolarsLedger
from coinbayes.core.names import (
    DESIGN_TAG,
    OBSERVATION_TAG,
    POSTERIOR_TAG,
    Namespace,
    SessionId,
)
from coinbayes.stats.schemes.coin.model import (
    DesignPayload,
    ObservationPayload,
    TrialRecord,
)

logger = logging.getLogger(__name__)


class TrialHistory:
    """Ledger-backed, append-only log of completed update steps."""

    def __init__(
        self,
        ledger: Optional[PolarsLedger] = None,
        session_id: str = "coin",
    ):
        self.ledger = ledger if ledger is not None else PolarsLedger()
        self.session_id = SessionId(session_id)

    # ---- writers ----

    def register_design(
        self, p_values: Sequence[float], priors: Sequence[float]
    ) -> None:
        """Record the hypothesis configuration a session starts from."""
        payload: DesignPayload = {
            "p_values": [float(p) for p in p_values],
            "priors": [float(q) for q in priors],
        }
        self.ledger.write_event(
            time_index="t0",
            namespace=Namespace.DESIGN,
            kind="registered",
            session_id=self.session_id,
            step_key="design",
            payload_type="CoinDesign",
            payload=dict(payload),
            tag=DESIGN_TAG,
        )

    def record(
        self,
        trial: int,
        N: int,
        k: int,
        posteriors: Sequence[float],
        p_values: Sequence[float],
        priors: Optional[Sequence[float]] = None,
    ) -> None:
        """
        Append one trial.

        Raises:
            TypeError: if ``trial``, ``N`` or ``k`` is not an integer
            ValueError: if ``trial`` does not follow the last recorded trial,
                or the sequences disagree in length
        """
        trial, N, k = operator.index(trial), operator.index(N), operator.index(k)
        last = self.latest()
        if trial < 1 or (last is not None and trial <= last.trial):
            raise ValueError(
                f"trial numbers must increase from 1, got {trial} after "
                f"{last.trial if last else 0}"
            )
        if len(posteriors) != len(p_values) or (
            priors is not None and len(priors) != len(p_values)
        ):
            raise ValueError("posteriors, priors and p_values must have same length")

        rec = TrialRecord(
            trial=trial,
            N=N,
            k=k,
            posterior=tuple(float(x) for x in posteriors),
            p_values=tuple(float(p) for p in p_values),
            prior=tuple(float(q) for q in priors) if priors is not None else (),
        )
        time_index = f"t{trial}"
        step_key = f"trial-{trial}"
        observation: ObservationPayload = {"N": N, "k": k}
        self.ledger.write_event(
            time_index=time_index,
            namespace=Namespace.OBS,
            kind="observed",
            session_id=self.session_id,
            step_key=step_key,
            payload_type="CoinObservation",
            payload=dict(observation),
            tag=OBSERVATION_TAG,
        )
        self.ledger.write_event(
            time_index=time_index,
            namespace=Namespace.STATS,
            kind="updated",
            session_id=self.session_id,
            step_key=step_key,
            payload_type="CoinPosterior",
            payload=dict(rec.to_payload()),
            tag=POSTERIOR_TAG,
        )
        logger.debug("recorded trial %d (N=%d, k=%d)", trial, N, k)

    def reset(self) -> None:
        """
        Drop this session's records; the next trial number is 1 again.

        Other sessions sharing the ledger keep their rows.
        """
        self.ledger.clear(entity=str(self.session_id))

    # ---- readers ----

    def all(self) -> List[TrialRecord]:
        """Every recorded trial, oldest first."""
        return [
            row.payload
            for row in self.ledger.iter_ns(
                namespace=Namespace.STATS,
                session_id=self.session_id,
                tag=POSTERIOR_TAG,
            )
        ]

    def latest(self) -> Optional[TrialRecord]:
        row = self.ledger.latest(
            namespace=Namespace.STATS, session_id=self.session_id, tag=POSTERIOR_TAG
        )
        return row.payload if row is not None else None

    def design(self) -> Optional[DesignPayload]:
        """The hypothesis configuration registered at session start, if any."""
        row = self.ledger.latest(
            namespace=Namespace.DESIGN, session_id=self.session_id, tag=DESIGN_TAG
        )
        return row.payload if row is not None else None

    def __len__(self) -> int:
        return self.ledger.reader().count(
            namespace=Namespace.STATS, entity=str(self.session_id), tag=POSTERIOR_TAG
        )

    def series_for(self, hypothesis_index: int) -> List[Tuple[int, float]]:
        """
        ``(trial, posterior)`` points for one hypothesis, oldest first.

        Raises:
            IndexError: if the index is outside the recorded hypothesis range
        """
        records = self.all()
        if hypothesis_index < 0 or (
            records and hypothesis_index >= len(records[0].posterior)
        ):
            raise IndexError(f"no hypothesis at index {hypothesis_index}")
        return [(r.trial, r.posterior[hypothesis_index]) for r in records]

    def frame(self) -> pl.DataFrame:
        """Long-format frame: one row per (trial, hypothesis)."""
        rows = [
            {
                "trial": r.trial,
                "N": r.N,
                "k": r.k,
                "hypothesis": i,
                "p_value": p,
                "prior": r.prior[i] if r.prior else None,
                "posterior": r.posterior[i],
            }
            for r in self.all()
            for i, p in enumerate(r.p_values)
        ]
        return pl.DataFrame(
            rows,
            schema={
                "trial": pl.Int64,
                "N": pl.Int64,
                "k": pl.Int64,
                "hypothesis": pl.Int64,
                "p_value": pl.Float64,
                "prior": pl.Float64,
                "posterior": pl.Float64,
            },
        )
