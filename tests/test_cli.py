"""
Tests for the command-line interface.
"""

from typer.testing import CliRunner

from coinbayes.cli import app

runner = CliRunner()


class TestCli:
    """Test the run and table commands."""

    def test_run_with_trials(self):
        result = runner.invoke(app, ["run", "--count", "3", "--trial", "10:7", "--trial", "5:2"])
        assert result.exit_code == 0
        assert "Prior:" in result.output
        assert "Posterior:" in result.output
        assert "p=0.500" in result.output

    def test_run_explicit_hypotheses(self):
        result = runner.invoke(
            app,
            ["run", "-p", "0.3", "-p", "0.7", "--prior", "0.5", "--prior", "0.5", "-t", "10:8"],
        )
        assert result.exit_code == 0
        assert "p=0.700 |" in result.output

    def test_run_rejects_bad_count(self):
        result = runner.invoke(app, ["run", "--count", "11"])
        assert result.exit_code == 1
        assert "error:" in result.output

    def test_run_rejects_bad_trial(self):
        result = runner.invoke(app, ["run", "--trial", "5:9"])
        assert result.exit_code == 1

    def test_run_unnormalized_priors(self):
        args = ["run", "--count", "2", "--prior", "0.2", "--prior", "0.2", "-t", "2:1"]
        assert runner.invoke(app, args).exit_code == 1
        assert runner.invoke(app, args + ["--normalize"]).exit_code == 0

    def test_table(self):
        result = runner.invoke(app, ["table", "--count", "2", "-t", "4:4"])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0].split("\t") == ["Trial", "N", "k", "P(H:p=0.010)", "P(H:p=0.990)"]
        assert lines[1].split("\t")[:3] == ["1", "4", "4"]
