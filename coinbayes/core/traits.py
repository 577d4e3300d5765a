"""
coinbayes.core.traits
=====================

Trait (mixin) that attaches a small, typed DSL to any `LedgerBase`
implementation.

This mixin assumes the host implements `LedgerBase.append` and
`LedgerBase.reader`. By inheriting `LedgerOps`, concrete ledgers gain:

- `write_event()` : append a record with typed parameters
- `latest()` / `iter_ns()` : typed convenience readers

Examples
--------
>>> from coinbayes.backends.polars.ledger import PolarsLedger
>>> from coinbayes.core.names import Namespace
>>> L = PolarsLedger()
>>> L.write_event(time_index="t1", namespace=Namespace.OBS, kind="observed",
...               session_id="coin#1", step_key="trial-1",
...               payload_type="CoinObservation", payload={"N": 10, "k": 7})
>>> L.latest(namespace=Namespace.OBS).payload_type
'CoinObservation'
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Union

from coinbayes.core.ledger import LedgerBase, NamespaceLike, Row, namespace_value
from coinbayes.core.names import SessionId, StepKey, TimeIndex


class LedgerOps(LedgerBase):
    """A trait that attaches a small, typed DSL onto a ledger implementation."""

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    # ---- writers ----

    def write_event(
        self,
        *,
        time_index: Union[TimeIndex, str],
        namespace: NamespaceLike,
        kind: str,
        session_id: Union[SessionId, str],
        step_key: Union[StepKey, str],
        payload_type: str,
        payload: Dict[str, Any],
        tag: Optional[str] = None,
        ts: Optional[datetime] = None,
    ) -> None:
        """Append a typed event to the ledger."""
        self.append(
            time_index=str(time_index),
            ts=ts or self._now(),
            namespace=namespace_value(namespace),
            kind=kind,
            entity=str(session_id),
            snapshot_id=str(step_key),
            payload_type=payload_type,
            payload=payload,
            tag=tag,
        )

    # ---- readers ----

    def latest(
        self,
        *,
        namespace: Optional[NamespaceLike] = None,
        kind: Optional[str] = None,
        session_id: Optional[Union[SessionId, str]] = None,
        tag: Optional[str] = None,
    ) -> Optional[Row]:
        """Return latest row for given filters (or None)."""
        return self.reader().latest(
            namespace=namespace_value(namespace) if namespace is not None else None,
            kind=kind,
            entity=str(session_id) if session_id else None,
            tag=tag,
        )

    def iter_ns(
        self,
        *,
        namespace: NamespaceLike,
        session_id: Optional[Union[SessionId, str]] = None,
        tag: Optional[str] = None,
    ) -> Iterable[Row]:
        """Iterate rows in a namespace (optionally filtered by session and tag)."""
        return self.reader().iter_rows(
            namespace=namespace_value(namespace),
            entity=str(session_id) if session_id else None,
            tag=tag,
        )
