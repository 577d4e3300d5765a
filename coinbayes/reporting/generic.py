"""
coinbayes.reporting.generic
===========================

A scheme-agnostic reporter over a session ledger: which namespaces and
kinds of events exist and how many of each. Queries are ibis expressions
executed against an in-memory table built from the ledger frame.

Examples
--------
>>> from coinbayes.backends.polars.ledger import PolarsLedger
>>> from coinbayes.reporting.generic import LedgerReporter
>>> rep = LedgerReporter(PolarsLedger())
>>> rep.unique_namespaces()
[]
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List

import ibis
import polars as pl

from coinbayes.backends.polars.ledger import PolarsLedger


@dataclass
class LedgerReporter:
    """
    A generic, scheme-agnostic reporter for a session ledger.
    """

    ledger: PolarsLedger

    def ledger_table(self) -> Any:
        """Return the ledger as an ibis table expression."""
        return ibis.memtable(self.ledger.frame())

    def _distinct(self, column: str) -> List[str]:
        table = self.ledger_table()
        result = table.select(column).distinct().order_by(column).to_polars()
        return [v for v in result.get_column(column).to_list() if v is not None]

    def unique_entities(self) -> List[str]:
        """List all session ids present in the ledger."""
        return self._distinct("entity")

    def unique_namespaces(self) -> List[str]:
        """List all event namespaces."""
        return self._distinct("namespace")

    def unique_kinds(self) -> List[str]:
        """List all event kinds."""
        return self._distinct("kind")

    def namespace_kind_counts(self) -> pl.DataFrame:
        """
        Return counts of events grouped by namespace and kind.

        Returns
        -------
        polars.DataFrame
            Columns ``namespace``, ``kind`` and ``count``
        """
        table = self.ledger_table()
        return (
            table.group_by(["namespace", "kind"])
            .aggregate(count=ibis._.count())
            .order_by(["namespace", "kind"])
            .to_polars()
        )
