"""
Tests for the session lifecycle, runners and facade.
"""

import numpy as np
import pytest

from coinbayes.api.coin import custom_session, posterior_after, uniform_session
from coinbayes.backends.polars.ledger import PolarsLedger
from coinbayes.core.config import UpdatePolicy
from coinbayes.core.errors import (
    ConfigurationError,
    ImpossibleDataError,
    InvalidObservationError,
    ValidationError,
)
from coinbayes.runtime.runners import BatchRunner, SequentialRunner
from coinbayes.runtime.session import BayesSession


class TestBayesSession:
    """Test the session object."""

    @pytest.fixture
    def session(self):
        s = BayesSession()
        s.initialize(5)
        s.start_session()
        return s

    def test_requires_configuration(self):
        session = BayesSession()
        assert not session.can_start()
        with pytest.raises(ConfigurationError):
            session.start_session()
        with pytest.raises(ConfigurationError):
            session.prior_sum()

    def test_update_requires_start(self):
        session = BayesSession()
        session.initialize(3)
        with pytest.raises(ConfigurationError):
            session.update(10, 5)

    def test_trials_are_numbered_from_one(self, session):
        session.update(10, 7)
        session.update(10, 6)
        session.update(1, 1)
        assert [r.trial for r in session.history()] == [1, 2, 3]
        assert session.trial_count == 3

    def test_sequential_law_through_session(self, session):
        first = session.update(10, 7)
        second = session.update(3, 0)
        assert second.priors == first.posteriors
        assert session.history()[1].prior == first.posteriors

    def test_start_gated_on_prior_sum(self):
        session = BayesSession()
        session.initialize(3)
        session.set_prior(0, 0.9)
        assert not session.can_start()
        with pytest.raises(ValidationError):
            session.start_session()
        session.normalize_priors()
        session.start_session()
        assert session.is_started

    def test_ungated_policy(self):
        session = BayesSession(policy=UpdatePolicy(require_normalized_priors=False))
        session.configure([0.3, 0.7], [0.2, 0.2])
        session.start_session()
        result = session.update(2, 1)
        assert result.posteriors == pytest.approx((0.5, 0.5))

    def test_restart_clears_history(self, session):
        session.update(10, 7)
        session.update(10, 7)
        session.initialize(3)
        assert not session.is_started
        assert len(session.history()) == 2

        session.start_session()
        assert session.history() == []
        assert session.trial_count == 0
        session.update(4, 2)
        assert session.history()[0].trial == 1
        assert len(session.history()[0].p_values) == 3

    def test_failed_update_changes_nothing(self, session):
        session.update(10, 7)
        posteriors = session.hypotheses.posteriors()

        with pytest.raises(InvalidObservationError):
            session.update(10, 11)
        assert session.trial_count == 1
        assert len(session.history()) == 1
        assert session.hypotheses.posteriors() == posteriors

    def test_non_integer_trial_changes_nothing(self, session):
        session.update(10, 7)
        posteriors = session.hypotheses.posteriors()

        with pytest.raises(InvalidObservationError):
            session.update(10.5, 7.5)
        assert session.trial_count == 1
        assert [(r.N, r.k) for r in session.history()] == [(10, 7)]
        assert session.hypotheses.posteriors() == posteriors

    def test_numpy_counts_are_recorded(self, session):
        session.update(np.int64(10), np.int64(7))
        record = session.history()[0]
        assert (record.N, record.k) == (10, 7)
        assert session.trial_count == 1

    def test_failed_history_write_rolls_back(self, session, monkeypatch):
        before = (session.hypotheses.priors(), session.hypotheses.posteriors())

        def broken_record(*args, **kwargs):
            raise RuntimeError("ledger unavailable")

        monkeypatch.setattr(session.trial_history, "record", broken_record)
        with pytest.raises(RuntimeError):
            session.update(10, 7)
        assert (session.hypotheses.priors(), session.hypotheses.posteriors()) == before
        assert session.trial_count == 0

    def test_sessions_sharing_a_ledger(self):
        ledger = PolarsLedger()
        a = BayesSession("a", ledger=ledger)
        a.initialize(3)
        a.start_session()
        a.update(10, 7)

        b = BayesSession("b", ledger=ledger)
        b.initialize(3)
        b.start_session()
        b.update(5, 1)

        assert [r.trial for r in a.history()] == [1]
        a.update(4, 2)
        assert [r.trial for r in a.history()] == [1, 2]
        assert [r.k for r in b.history()] == [1]

    def test_impossible_data_changes_nothing(self):
        session = BayesSession(policy=UpdatePolicy(require_normalized_priors=False))
        session.configure([0.3, 0.7], [0.0, 0.0])
        session.start_session()
        with pytest.raises(ImpossibleDataError):
            session.update(5, 2)
        assert session.trial_count == 0
        assert session.history() == []

    def test_invalid_edit_is_rejected(self, session):
        with pytest.raises(ValidationError):
            session.set_p_value(0, 1.0)
        assert session.hypotheses.p_values()[0] == 0.01

    def test_p_value_labels_snapshot(self, session):
        session.update(10, 7)
        session.set_p_value(0, 0.05)
        session.update(10, 7)
        records = session.history()
        assert records[0].p_values[0] == 0.01
        assert records[1].p_values[0] == 0.05

    def test_manual_iteration(self):
        session = BayesSession(policy=UpdatePolicy(auto_iterate=False))
        session.initialize(3)
        session.start_session()
        first = session.update(10, 9)
        second = session.update(10, 9)
        assert second.posteriors == first.posteriors

        session.adopt_posteriors()
        third = session.update(10, 9)
        assert third.priors == first.posteriors

    def test_summary(self, session):
        session.update(20, 19)
        summary = session.get_summary()
        assert summary["status"] == "running"
        assert summary["trials"] == 1
        assert summary["most_probable_p"] == 0.99
        assert 0.5 < summary["expected_bias"] < 1.0

    def test_reset_keeps_configuration(self, session):
        session.update(10, 7)
        session.reset()
        assert session.history() == []
        assert session.is_configured
        assert not session.is_started


class TestRunners:
    """Test trial replay."""

    def test_sequential_runner_starts_session(self):
        session = BayesSession()
        session.initialize(4)
        runner = SequentialRunner(session)
        results = runner.run([(10, 2), (10, 3), (10, 1)])

        assert len(results) == 3
        assert runner.get_summary()["steps_run"] == 3
        assert len(runner.get_results_history()) == 3

        runner.reset()
        assert runner.get_results_history() == []
        assert session.history() == []

    def test_batch_runner_compares_priors(self):
        flat = BayesSession("flat")
        flat.configure([0.3, 0.7])
        skeptical = BayesSession("skeptical")
        skeptical.configure([0.3, 0.7], [0.9, 0.1])

        batch = BatchRunner([flat, skeptical])
        results = batch.run_all([(10, 8)])

        assert set(results) == {"flat", "skeptical"}
        assert results["flat"][0].posteriors[1] > results["skeptical"][0].posteriors[1]
        assert batch.get_comparison_summary()["total_sessions"] == 2

    def test_batch_runner_rejects_duplicate_ids(self):
        with pytest.raises(ValueError):
            BatchRunner([BayesSession(), BayesSession()])


class TestFacade:
    """Test the convenience constructors."""

    def test_uniform_session(self):
        session = uniform_session(4)
        assert session.is_started
        assert len(session.hypotheses) == 4

    def test_custom_session(self):
        session = custom_session([0.2, 0.8], [0.25, 0.75])
        assert session.hypotheses.priors() == (0.25, 0.75)

    def test_posterior_after(self):
        result = posterior_after([(10, 8)], p_values=[0.3, 0.7], priors=[0.5, 0.5])
        assert result.posteriors[1] > 0.9
        with pytest.raises(ValueError):
            posterior_after([])
