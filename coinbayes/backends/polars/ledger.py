"""
coinbayes.backends.polars.ledger
================================

A concrete **Polars-backed** ledger with JSON-UTF8 payload.
Lives in memory only; a session's ledger is dropped with the session.

- Inherits `LedgerOps` to expose the typed DSL as native methods.
- Implements `append()`, `clear()` and a `LedgerReader`.

Examples
--------
>>> from coinbayes.backends.polars.ledger import PolarsLedger
>>> from coinbayes.core.names import Namespace
>>> L = PolarsLedger()
>>> L.write_event(time_index="t1", namespace=Namespace.OBS, kind="observed",
...               session_id="coin#1", step_key="trial-1",
...               payload_type="CoinObservation", payload={"N": 10, "k": 7}, tag="obs:flips")
>>> L.reader().count(namespace=Namespace.OBS.value)
1
>>> L.clear(); L.reader().count()
0
"""

from __future__ import annotations
import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional, cast

import polars as pl

from coinbayes.core.ledger import (
    LedgerReader,
    NamespaceLike,
    PayloadRegistry,
    Row,
    namespace_value,
)
from coinbayes.core.traits import LedgerOps


class PolarsLedger(LedgerOps):
    """Polars-backed append-only ledger with JSON-UTF8 payload column."""

    _SCHEMA = {
        "uuid": pl.Utf8,
        "time_index": pl.Utf8,
        "ts": pl.Datetime(time_unit="us", time_zone="UTC"),
        "namespace": pl.Utf8,
        "kind": pl.Utf8,
        "entity": pl.Utf8,  # session_id
        "snapshot_id": pl.Utf8,  # step_key
        "tag": pl.Utf8,
        "payload_type": pl.Utf8,
        "payload": pl.Utf8,  # JSON string
    }

    def __init__(self, df: Optional[pl.DataFrame] = None) -> None:
        self._df = df if df is not None else self._empty()

    @classmethod
    def _empty(cls) -> pl.DataFrame:
        return pl.DataFrame(schema=cast(Any, cls._SCHEMA))

    # ---- Ledger interface ----

    def append(
        self,
        *,
        time_index: str,
        ts: datetime,
        namespace: NamespaceLike,
        kind: str,
        entity: str,
        snapshot_id: str,
        payload_type: str,
        payload: Dict[str, Any],
        tag: Optional[str] = None,
    ) -> "PolarsLedger":
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        else:
            ts = ts.astimezone(timezone.utc)
        row = pl.DataFrame(
            {
                "uuid": [str(uuid.uuid4())],
                "time_index": [time_index],
                "ts": [ts],
                "namespace": [namespace_value(namespace)],
                "kind": [kind],
                "entity": [entity],
                "snapshot_id": [snapshot_id],
                "tag": [tag],
                "payload_type": [payload_type],
                "payload": [json.dumps(payload, separators=(",", ":"))],
            },
            schema=cast(Any, self._SCHEMA),
        )
        self._df = pl.concat([self._df, row], how="vertical_relaxed")
        return self

    def clear(self, entity: Optional[str] = None) -> None:
        if entity is None:
            self._df = self._empty()
        else:
            self._df = self._df.filter(pl.col("entity") != entity)

    class _Reader(LedgerReader):
        def __init__(self, df: pl.DataFrame) -> None:
            self.df = df

        def _filter(
            self,
            *,
            namespace: Optional[NamespaceLike] = None,
            kind: Optional[str] = None,
            entity: Optional[str] = None,
            tag: Optional[str] = None,
        ) -> pl.DataFrame:
            q = self.df
            if namespace is not None:
                q = q.filter(pl.col("namespace") == namespace_value(namespace))
            if kind is not None:
                q = q.filter(pl.col("kind") == kind)
            if entity is not None:
                q = q.filter(pl.col("entity") == entity)
            if tag is not None:
                q = q.filter(pl.col("tag") == tag)
            return q

        @staticmethod
        def _to_row(rec: Dict[str, Any]) -> Row:
            payload = json.loads(rec["payload"]) if rec["payload"] else {}
            return Row(
                uuid=rec["uuid"],
                time_index=rec["time_index"],
                ts=rec["ts"],
                namespace=rec["namespace"],
                kind=rec["kind"],
                entity=rec["entity"],
                snapshot_id=rec["snapshot_id"],
                tag=rec["tag"],
                payload_type=rec["payload_type"],
                payload=PayloadRegistry.decode(rec["payload_type"], payload),
            )

        def iter_rows(
            self,
            *,
            namespace: Optional[NamespaceLike] = None,
            kind: Optional[str] = None,
            entity: Optional[str] = None,
            tag: Optional[str] = None,
        ) -> Iterator[Row]:
            q = self._filter(namespace=namespace, kind=kind, entity=entity, tag=tag)
            for rec in q.iter_rows(named=True):
                yield self._to_row(rec)

        def latest(
            self,
            *,
            namespace: Optional[NamespaceLike] = None,
            kind: Optional[str] = None,
            entity: Optional[str] = None,
            tag: Optional[str] = None,
        ) -> Optional[Row]:
            q = self._filter(namespace=namespace, kind=kind, entity=entity, tag=tag)
            if q.height == 0:
                return None
            return self._to_row(q.tail(1).to_dicts()[0])

        def count(self, **filters: Any) -> int:
            return int(self._filter(**filters).height)

    def reader(self) -> LedgerReader:
        return PolarsLedger._Reader(self._df)

    # ---- frame helpers (no I/O) ----
    def frame(self) -> pl.DataFrame:
        """Return a copy of the underlying Polars DataFrame."""
        return self._df.clone()
