"""
Tests for the hypothesis set model.
"""

import math

import pytest

from coinbayes.core.config import UpdatePolicy
from coinbayes.core.errors import ConfigurationError, DegenerateStateError, ValidationError
from coinbayes.stats.schemes.coin.hypotheses import HypothesisSet


class TestInitialize:
    """Test evenly spaced initialization."""

    @pytest.mark.parametrize("count", range(2, 11))
    def test_valid_counts(self, count):
        hs = HypothesisSet.initialize(count)
        p_values = hs.p_values()

        assert len(hs) == count
        assert sum(hs.priors()) == pytest.approx(1.0, abs=1e-9)
        assert all(0.01 <= p <= 0.99 for p in p_values)
        assert all(a <= b for a, b in zip(p_values, p_values[1:]))

    @pytest.mark.parametrize("count", [-1, 0, 1, 11, 50])
    def test_invalid_counts(self, count):
        with pytest.raises(ConfigurationError):
            HypothesisSet.initialize(count)

    def test_clamping_and_rounding(self):
        assert HypothesisSet.initialize(2).p_values() == (0.01, 0.99)
        assert HypothesisSet.initialize(4).p_values() == (0.01, 0.333, 0.667, 0.99)

    def test_posterior_starts_at_prior(self):
        hs = HypothesisSet.initialize(4)
        assert hs.posteriors() == hs.priors()

    def test_custom_policy_bounds(self):
        policy = UpdatePolicy(max_hypotheses=3)
        with pytest.raises(ConfigurationError):
            HypothesisSet.initialize(4, policy)


class TestFromValues:
    """Test explicit configuration."""

    def test_uniform_default_priors(self):
        hs = HypothesisSet.from_values([0.2, 0.5, 0.8])
        assert hs.priors() == pytest.approx((1 / 3, 1 / 3, 1 / 3))

    def test_mismatched_lengths(self):
        with pytest.raises(ConfigurationError):
            HypothesisSet.from_values([0.2, 0.5], [1.0])

    def test_rejects_out_of_range_values(self):
        with pytest.raises(ValidationError):
            HypothesisSet.from_values([0.0, 0.5])
        with pytest.raises(ValidationError):
            HypothesisSet.from_values([0.2, 0.5], [1.5, 0.0])


class TestEdits:
    """Test single-field edits and their atomicity."""

    @pytest.fixture
    def hs(self):
        return HypothesisSet.initialize(3)

    def test_set_p_value(self, hs):
        hs.set_p_value(1, 0.42)
        assert hs.p_values()[1] == 0.42

    @pytest.mark.parametrize("value", [0.01, 0.99])
    def test_p_value_bounds_inclusive(self, hs, value):
        hs.set_p_value(0, value)
        assert hs.p_values()[0] == value

    @pytest.mark.parametrize("value", [0.0, 1.0, 0.005, 0.995, math.nan])
    def test_invalid_p_value_leaves_set_unchanged(self, hs, value):
        before = hs.p_values()
        with pytest.raises(ValidationError):
            hs.set_p_value(1, value)
        assert hs.p_values() == before

    @pytest.mark.parametrize("value", [-0.1, 1.1, math.nan])
    def test_invalid_prior_leaves_set_unchanged(self, hs, value):
        before = hs.priors()
        with pytest.raises(ValidationError):
            hs.set_prior(0, value)
        assert hs.priors() == before

    def test_bad_index(self, hs):
        with pytest.raises(ValidationError):
            hs.set_prior(3, 0.5)
        with pytest.raises(ValidationError):
            hs.set_p_value(-1, 0.5)

    def test_no_automatic_renormalization(self, hs):
        hs.set_prior(0, 1.0)
        assert hs.prior_sum() == pytest.approx(1.0 + 2 / 3)
        assert not hs.is_prior_sum_valid()

    def test_items_are_copies(self, hs):
        item = hs[0]
        item.prior = 0.9
        assert hs.priors()[0] == pytest.approx(1 / 3)


class TestNormalizePriors:
    """Test prior normalization."""

    def test_rescales(self):
        hs = HypothesisSet.from_values([0.2, 0.5, 0.8], [0.2, 0.2, 0.2])
        hs.normalize_priors()
        assert hs.priors() == pytest.approx((1 / 3, 1 / 3, 1 / 3))
        assert hs.is_prior_sum_valid()

    def test_zero_sum_raises_and_keeps_priors(self):
        hs = HypothesisSet.from_values([0.2, 0.8], [0.0, 0.0])
        with pytest.raises(DegenerateStateError):
            hs.normalize_priors()
        assert hs.priors() == (0.0, 0.0)

    def test_tolerance(self):
        hs = HypothesisSet.from_values([0.2, 0.8], [0.5, 0.4995])
        assert hs.is_prior_sum_valid()
        hs.set_prior(1, 0.498)
        assert not hs.is_prior_sum_valid()
