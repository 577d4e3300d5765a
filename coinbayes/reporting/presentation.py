"""
coinbayes.reporting.presentation
================================

Pure-data presentation adapter.

Turns the hypothesis set and the trial history into plain series and frames
that any front-end (terminal, web, notebook) can draw. Nothing here renders;
the consumer decides how bars, lines and tables look.

- `distribution_series`: ``(value, label)`` pairs for a bar view
- `history_table`: wide Polars frame, one row per trial
- `history_chart`: one `ChartSeries` per hypothesis for a line view

Examples
--------
>>> from coinbayes.stats.schemes.coin.hypotheses import HypothesisSet
>>> from coinbayes.reporting.presentation import distribution_series, p_label
>>> distribution_series(HypothesisSet.from_values([0.3, 0.7]), which="prior")
[(0.5, 'p=0.300'), (0.5, 'p=0.700')]
>>> p_label(0.25, decimals=3)
'p=0.250'
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence, Tuple

import polars as pl

from coinbayes.stats.schemes.coin.hypotheses import HypothesisSet
from coinbayes.stats.schemes.coin.model import TrialRecord

# Fixed palette; series i always gets colour i (cycled).
CHART_COLORS: Tuple[str, ...] = (
    "#E67E22",
    "#3498DB",
    "#27AE60",
    "#8E44AD",
    "#C0392B",
    "#34495E",
    "#1ABC9C",
    "#F39C12",
    "#2980B9",
    "#2C3E50",
)


@dataclass(frozen=True)
class ChartSeries:
    """One line of the posterior-evolution chart."""

    label: str
    color: str
    points: Tuple[Tuple[int, float], ...]


def p_label(p_value: float, decimals: Optional[int] = None) -> str:
    """``p=<value>``, fixed to ``decimals`` places when given."""
    if decimals is None:
        return f"p={p_value}"
    return f"p={p_value:.{decimals}f}"


def color_for(index: int) -> str:
    return CHART_COLORS[index % len(CHART_COLORS)]


def distribution_series(
    hypotheses: HypothesisSet,
    which: Literal["prior", "posterior"] = "posterior",
) -> List[Tuple[float, str]]:
    """``(value, label)`` pairs in hypothesis order."""
    if which == "prior":
        values = hypotheses.priors()
    elif which == "posterior":
        values = hypotheses.posteriors()
    else:
        raise ValueError(f"which must be 'prior' or 'posterior', got {which!r}")
    return [(v, p_label(p, decimals=3)) for v, p in zip(values, hypotheses.p_values())]


def column_label(p_value: float) -> str:
    return f"P(H:{p_label(p_value, decimals=3)})"


def history_table(history: Sequence[TrialRecord]) -> pl.DataFrame:
    """
    Wide table: ``trial``, ``N``, ``k`` and one posterior column per hypothesis.

    Column labels come from the first record's p-values so they stay stable
    even if a p-value is edited mid-session.
    """
    if not history:
        return pl.DataFrame(
            schema={"trial": pl.Int64, "N": pl.Int64, "k": pl.Int64}
        )
    labels = [column_label(p) for p in history[0].p_values]
    data = {
        "trial": [r.trial for r in history],
        "N": [r.N for r in history],
        "k": [r.k for r in history],
    }
    for i, label in enumerate(labels):
        data[label] = [r.posterior[i] for r in history]
    return pl.DataFrame(data)


def format_history_rows(
    history: Sequence[TrialRecord], decimals: int = 4
) -> List[List[str]]:
    """History rows as strings, posteriors fixed to ``decimals`` places."""
    return [
        [str(r.trial), str(r.N), str(r.k)]
        + [f"{p:.{decimals}f}" for p in r.posterior]
        for r in history
    ]


def history_chart(history: Sequence[TrialRecord]) -> List[ChartSeries]:
    """One series per hypothesis with ``(trial, posterior)`` points."""
    if not history:
        return []
    return [
        ChartSeries(
            label=f"p = {p:.3f}",
            color=color_for(i),
            points=tuple((r.trial, r.posterior[i]) for r in history),
        )
        for i, p in enumerate(history[0].p_values)
    ]
