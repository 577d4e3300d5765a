"""
coinbayes.core.ledger
=====================

Backend-agnostic ledger contracts.

A ledger is an append-only timeline of typed events. Every fact a session
produces (the registered hypothesis design, each observation, each posterior)
is appended as a `Row`; readers never mutate it.

- `Row`: one immutable ledger record
- `LedgerReader`: read-only, filtered access to rows
- `LedgerBase`: the write/read contract concrete ledgers implement
- `PayloadRegistry`: optional decoders from JSON payloads to typed objects

Examples
--------
>>> from coinbayes.core.ledger import PayloadRegistry
>>> PayloadRegistry.register("Pair", lambda d: (d["a"], d["b"]))
>>> PayloadRegistry.decode("Pair", {"a": 1, "b": 2})
(1, 2)
>>> PayloadRegistry.decode("Unknown", {"a": 1})
{'a': 1}
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, ClassVar, Dict, Iterator, Optional, Union

from coinbayes.core.names import Namespace

# Type aliases
NamespaceLike = Union[Namespace, str]


def namespace_value(namespace: NamespaceLike) -> str:
    """Return the plain string value of a namespace."""
    return namespace.value if isinstance(namespace, Namespace) else str(namespace)


@dataclass(frozen=True)
class Row:
    """A single ledger record."""

    uuid: str
    time_index: str
    ts: datetime
    namespace: str
    kind: str
    entity: str
    snapshot_id: str
    tag: Optional[str]
    payload_type: str
    payload: Any


class LedgerReader(ABC):
    """Read-only, filtered view over ledger rows."""

    @abstractmethod
    def iter_rows(
        self,
        *,
        namespace: Optional[NamespaceLike] = None,
        kind: Optional[str] = None,
        entity: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> Iterator[Row]:
        """Iterate rows in append order."""

    @abstractmethod
    def latest(
        self,
        *,
        namespace: Optional[NamespaceLike] = None,
        kind: Optional[str] = None,
        entity: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> Optional[Row]:
        """Return the most recently appended matching row (or None)."""

    @abstractmethod
    def count(self, **filters: Any) -> int:
        """Count matching rows."""


class LedgerBase(ABC):
    """Contract every concrete ledger implements."""

    @abstractmethod
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
    ) -> "LedgerBase":
        """Append one record."""

    @abstractmethod
    def reader(self) -> LedgerReader:
        """Return a read-only view of the current rows."""

    @abstractmethod
    def clear(self, entity: Optional[str] = None) -> None:
        """Drop every record, or only those of ``entity`` when given."""


class PayloadRegistry:
    """Registry of payload decoders keyed by ``payload_type``."""

    _decoders: ClassVar[Dict[str, Callable[[Dict[str, Any]], Any]]] = {}

    @classmethod
    def register(
        cls, payload_type: str, decoder: Callable[[Dict[str, Any]], Any]
    ) -> None:
        """Register a decoder for a payload type."""
        cls._decoders[payload_type] = decoder

    @classmethod
    def decode(cls, payload_type: str, payload: Dict[str, Any]) -> Any:
        """Decode a payload, falling back to the raw dict."""
        decoder = cls._decoders.get(payload_type)
        if decoder is None:
            return payload
        return decoder(payload)
