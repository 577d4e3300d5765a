"""
coinbayes.cli
=============

Terminal front-end: configure hypotheses, feed trials, print the prior and
posterior distributions and the trial history.

    coinbayes run --count 5 --trial 10:7 --trial 5:3
    coinbayes run -p 0.3 -p 0.7 --prior 0.5 --prior 0.5 --trial 10:8
"""

import logging
from typing import List, Optional, Tuple

import typer

from coinbayes.__version__ import __version__
from coinbayes.core.config import DEFAULT_POLICY, EPSILON_POLICY
from coinbayes.core.errors import CoinBayesError
from coinbayes.reporting.presentation import (
    distribution_series,
    format_history_rows,
    history_table,
)
from coinbayes.runtime.session import BayesSession

app = typer.Typer(add_completion=False, help="Bayesian updating for a coin's bias.")

BAR_WIDTH = 40


def parse_trial(text: str) -> Tuple[int, int]:
    """Parse ``"N:k"`` into ``(N, k)``."""
    try:
        n_text, k_text = text.split(":")
        return int(n_text), int(k_text)
    except ValueError:
        raise typer.BadParameter(f"trial must look like N:k, got {text!r}")


def render_bars(series: List[Tuple[float, str]]) -> str:
    lines = []
    for value, label in series:
        bar = "#" * int(round(value * BAR_WIDTH))
        lines.append(f"{label:>8} | {bar:<{BAR_WIDTH}} {value:.3f}")
    return "\n".join(lines)


@app.command("run")
def run_cmd(
    count: int = typer.Option(5, "--count", "-n", help="Number of evenly spaced hypotheses."),
    p_values: Optional[List[float]] = typer.Option(
        None, "--p-value", "-p", help="Explicit hypothesis p-value (repeatable)."
    ),
    priors: Optional[List[float]] = typer.Option(
        None, "--prior", help="Prior for each hypothesis, in order (repeatable)."
    ),
    trials: Optional[List[str]] = typer.Option(
        None, "--trial", "-t", help="Observed trial as N:k (repeatable)."
    ),
    normalize: bool = typer.Option(False, help="Rescale priors to sum to one."),
    epsilon: bool = typer.Option(
        False, help="Halt when total probability is below 1e-10 instead of exactly 0."
    ),
    manual: bool = typer.Option(
        False, help="Update every trial from the configured priors."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
):
    """
    Run a sequence of trials and print the resulting distributions.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    policy = EPSILON_POLICY if epsilon else DEFAULT_POLICY
    if manual:
        policy = policy.with_overrides(auto_iterate=False)
    parsed = [parse_trial(t) for t in trials or []]

    session = BayesSession(policy=policy)
    try:
        if p_values:
            session.configure(p_values)
        else:
            session.initialize(count)
        for i, prior in enumerate(priors or []):
            session.set_prior(i, prior)
        if normalize:
            session.normalize_priors()
        typer.echo(f"Current Prior Sum: {session.prior_sum():.3f}")
        session.start_session()
        typer.echo("Prior:")
        typer.echo(render_bars(distribution_series(session.hypotheses, "prior")))
        for N, k in parsed:
            session.update(N, k)
    except CoinBayesError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)

    if parsed:
        typer.echo("Posterior:")
        typer.echo(render_bars(distribution_series(session.hypotheses, "posterior")))
        typer.echo(history_table(session.history()))


@app.command("table")
def table_cmd(
    count: int = typer.Option(5, "--count", "-n", help="Number of evenly spaced hypotheses."),
    trials: Optional[List[str]] = typer.Option(
        None, "--trial", "-t", help="Observed trial as N:k (repeatable)."
    ),
):
    """
    Print the trial history as tab-separated text.
    """
    session = BayesSession()
    try:
        session.initialize(count)
        session.start_session()
        for text in trials or []:
            session.update(*parse_trial(text))
    except CoinBayesError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)
    history = session.history()
    header = ["Trial", "N", "k"] + [
        f"P(H:p={p:.3f})" for p in session.hypotheses.p_values()
    ]
    typer.echo("\t".join(header))
    for row in format_history_rows(history):
        typer.echo("\t".join(row))


@app.command("version")
def version_cmd():
    """Show the installed version."""
    typer.echo(__version__)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
