"""
coinbayes.core.names
====================

Typed names shared across the package.

- `Namespace`: an Enum for well-known ledger namespaces.
- `SessionId`, `StepKey`, `TimeIndex`: NewType wrappers for clarity.
- Common `Literal` tags for the coin-bias scheme.

Examples
--------
>>> from coinbayes.core.names import Namespace, SessionId
>>> Namespace.OBS.value
'obs'
>>> sid = SessionId("coin#1"); isinstance(sid, str)
True
"""

from __future__ import annotations
from enum import Enum
from typing import Literal, NewType


class Namespace(str, Enum):
    """Well-known ledger namespaces.

    - DESIGN: hypothesis configuration registered at session start
    - OBS: raw observations (flips, heads)
    - STATS: posterior distributions (derived)
    """

    DESIGN = "design"
    OBS = "obs"
    STATS = "stats"


SessionId = NewType("SessionId", str)
StepKey = NewType("StepKey", str)
TimeIndex = NewType("TimeIndex", str)

DesignTag = Literal["design:hypotheses"]
ObservationTag = Literal["obs:flips"]
PosteriorTag = Literal["stat:posterior"]

DESIGN_TAG: DesignTag = "design:hypotheses"
OBSERVATION_TAG: ObservationTag = "obs:flips"
POSTERIOR_TAG: PosteriorTag = "stat:posterior"
