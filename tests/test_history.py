"""
Tests for the ledger-backed trial history.
"""

import dataclasses

import pytest

from coinbayes.backends.polars.ledger import PolarsLedger
from coinbayes.core.names import Namespace
from coinbayes.stats.schemes.coin.history import TrialHistory
from coinbayes.stats.schemes.coin.model import TrialRecord


class TestTrialHistory:
    """Test recording and reading trials."""

    @pytest.fixture
    def history(self):
        h = TrialHistory()
        h.record(1, 10, 7, [0.1, 0.3, 0.6], [0.01, 0.5, 0.99], [1 / 3, 1 / 3, 1 / 3])
        h.record(2, 5, 5, [0.05, 0.15, 0.8], [0.01, 0.5, 0.99], [0.1, 0.3, 0.6])
        return h

    def test_all_returns_records_in_order(self, history):
        records = history.all()
        assert [r.trial for r in records] == [1, 2]
        assert records[0] == TrialRecord(
            trial=1,
            N=10,
            k=7,
            posterior=(0.1, 0.3, 0.6),
            p_values=(0.01, 0.5, 0.99),
            prior=(1 / 3, 1 / 3, 1 / 3),
        )
        assert len(history) == 2
        assert history.latest().trial == 2

    def test_records_are_immutable(self, history):
        with pytest.raises(dataclasses.FrozenInstanceError):
            history.all()[0].k = 3

    def test_series_for(self, history):
        assert history.series_for(2) == [(1, 0.6), (2, 0.8)]
        assert history.series_for(0) == [(1, 0.1), (2, 0.05)]

    def test_series_for_bad_index(self, history):
        with pytest.raises(IndexError):
            history.series_for(3)
        with pytest.raises(IndexError):
            history.series_for(-1)

    def test_reads_are_non_destructive(self, history):
        history.all()
        history.series_for(1)
        assert len(history.all()) == 2

    def test_trial_numbers_must_increase(self, history):
        with pytest.raises(ValueError):
            history.record(2, 1, 0, [0.3, 0.3, 0.4], [0.01, 0.5, 0.99])
        with pytest.raises(ValueError):
            TrialHistory().record(0, 1, 0, [0.5, 0.5], [0.3, 0.7])

    def test_length_mismatch(self, history):
        with pytest.raises(ValueError):
            history.record(3, 1, 0, [0.5, 0.5], [0.01, 0.5, 0.99])
        assert len(history) == 2

    def test_reset(self, history):
        history.reset()
        assert history.all() == []
        assert history.latest() is None
        history.record(1, 3, 2, [0.5, 0.5], [0.3, 0.7])
        assert len(history) == 1

    def test_frame(self, history):
        df = history.frame()
        assert df.height == 6
        assert df.columns == ["trial", "N", "k", "hypothesis", "p_value", "prior", "posterior"]
        assert df.filter(df["trial"] == 2)["posterior"].to_list() == [0.05, 0.15, 0.8]

    def test_empty_frame(self):
        assert TrialHistory().frame().height == 0


class TestLedgerEvents:
    """Test what the history writes to the ledger."""

    def test_observation_and_posterior_events(self):
        ledger = PolarsLedger()
        history = TrialHistory(ledger, session_id="s1")
        history.register_design([0.3, 0.7], [0.5, 0.5])
        history.record(1, 10, 8, [0.1, 0.9], [0.3, 0.7])

        reader = ledger.reader()
        assert reader.count(namespace=Namespace.DESIGN) == 1
        assert reader.count(namespace=Namespace.OBS) == 1
        assert reader.count(namespace=Namespace.STATS) == 1
        assert ledger.latest(namespace=Namespace.OBS).payload == {"N": 10, "k": 8}
        assert history.design() == {"p_values": [0.3, 0.7], "priors": [0.5, 0.5]}

    def test_sessions_sharing_a_ledger_stay_separate(self):
        ledger = PolarsLedger()
        a = TrialHistory(ledger, session_id="a")
        b = TrialHistory(ledger, session_id="b")
        a.record(1, 2, 1, [0.5, 0.5], [0.3, 0.7])

        assert len(a) == 1
        assert b.all() == []

    def test_reset_keeps_other_sessions(self):
        ledger = PolarsLedger()
        a = TrialHistory(ledger, session_id="a")
        b = TrialHistory(ledger, session_id="b")
        a.record(1, 2, 1, [0.5, 0.5], [0.3, 0.7])
        b.record(1, 4, 4, [0.2, 0.8], [0.3, 0.7])

        b.reset()

        assert len(b) == 0
        assert [r.trial for r in a.all()] == [1]

    def test_record_rejects_non_integer_counts(self):
        history = TrialHistory()
        with pytest.raises(TypeError):
            history.record(1, 10.5, 7, [0.5, 0.5], [0.3, 0.7])
        assert len(history) == 0
