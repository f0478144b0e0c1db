"""
Tests for Empirical Data Distributions

Counting semantics of DataDistribution and the moments, distribution
function and quantiles of ScalarDataDistribution.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import copy
import math

import numpy as np
import pytest

from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.families import (
    DataDistribution,
    DataDistributionEstimator,
    ScalarDataDistribution,
)


class TestDataDistribution:
    def setup_method(self):
        self.data = DataDistribution(["a", "b", "a", "c", "a"])

    def test_counts_and_fractions(self):
        assert self.data.get("a") == 3.0
        assert self.data.total == 5.0
        assert self.data.fraction("a") == pytest.approx(0.6)
        assert self.data.pmf("missing") == 0.0
        assert self.data.log_pmf("missing") == -math.inf
        assert self.data.log_fraction("b") == pytest.approx(math.log(0.2))

    def test_domain_keeps_insertion_order(self):
        assert self.data.domain == ["a", "b", "c"]
        assert self.data.domain_size == 3
        assert len(self.data) == 3
        assert "b" in self.data
        assert list(self.data) == ["a", "b", "c"]

    def test_from_mapping(self):
        data = DataDistribution({"x": 2.0, "y": 6.0})
        assert data.fraction("y") == pytest.approx(0.75)

    def test_decrement_clamps_at_zero(self):
        assert self.data.decrement("b", 5.0) == 0.0
        assert self.data.total == 4.0
        assert "b" in self.data.domain
        assert self.data.pmf("b") == 0.0

    def test_non_positive_increment_of_missing_key_is_ignored(self):
        assert self.data.increment("z", -2.0) == 0.0
        assert self.data.increment("z", 0.0) == 0.0
        assert "z" not in self.data
        assert self.data.total == 5.0

    def test_set_adjusts_total(self):
        self.data.set("a", 1.0)
        assert self.data.get("a") == 1.0
        assert self.data.total == 3.0

        self.data.set("d", 2.0)
        assert self.data.total == 5.0

        self.data.set("c", -4.0)
        assert self.data.get("c") == 0.0
        assert self.data.total == 4.0

    def test_max_value_key(self):
        assert self.data.max_value_key == "a"
        assert self.data.max_value == 3.0
        assert DataDistribution().max_value_key is None

    def test_max_value_key_ties_pick_first(self):
        data = DataDistribution({"first": 2.0, "second": 2.0})
        assert data.max_value_key == "first"

    def test_entropy_in_bits(self):
        assert DataDistribution(["x", "y", "z", "w"]).entropy == pytest.approx(2.0)
        assert DataDistribution().entropy == 0.0

    def test_empty_distribution(self):
        empty = DataDistribution()
        assert empty.fraction("a") == 0.0
        with pytest.raises(InvalidParameterError, match="empty"):
            empty.sample(3, np.random.default_rng(0))

    def test_sample_keys(self, rng):
        draws = self.data.sample(3000, rng)
        assert set(draws) <= {"a", "b", "c"}
        assert draws.count("a") / 3000 == pytest.approx(0.6, abs=0.05)

    def test_copy_is_independent(self):
        clone = copy.deepcopy(self.data)
        clone.increment("a")
        assert self.data.get("a") == 3.0
        assert clone != self.data
        assert self.data.copy() == self.data

    def test_clear(self):
        self.data.clear()
        assert self.data.total == 0.0
        assert self.data.domain == []

    def test_merge_another_distribution(self):
        self.data.increment_all(DataDistribution({"a": 1.0, "e": 2.0}))
        assert self.data.get("a") == 4.0
        assert self.data.get("e") == 2.0
        assert self.data.total == 8.0


class TestDataDistributionEstimator:
    def test_weighted_learning(self):
        estimator = DataDistributionEstimator()
        learned = estimator.learn(["x", "y", "x"], [1.0, 2.0, 0.5])
        assert learned.get("x") == 1.5
        assert learned.get("y") == 2.0

    def test_incremental_updates(self):
        estimator = DataDistributionEstimator()
        statistic = estimator.create_initial()
        estimator.update(statistic, "k")
        estimator.update(statistic, "k", 2.0)
        assert statistic.get("k") == 3.0

    @pytest.mark.parametrize(
        "weights", [[1.0], [1.0, 1.0, 1.0]], ids=["too_few", "too_many"]
    )
    def test_mismatched_weights(self, weights):
        with pytest.raises(InvalidParameterError, match="Expected 2 weights"):
            DataDistributionEstimator().learn(["x", "y"], weights)


class TestScalarDataDistribution:
    def setup_method(self):
        self.data = ScalarDataDistribution([3.0, 1.0, 2.0, 2.0, 5.0])

    def test_moments(self):
        values = np.array([3.0, 1.0, 2.0, 2.0, 5.0])
        assert self.data.mean == pytest.approx(values.mean())
        assert self.data.variance == pytest.approx(values.var())

    def test_integer_keys_are_floats(self):
        data = ScalarDataDistribution([1, 1, 2])
        assert data.get(1.0) == 2.0
        assert data.pmf(1) == pytest.approx(2.0 / 3.0)

    def test_pmf_arrays(self):
        np.testing.assert_allclose(self.data.pmf([2.0, 4.0]), [0.4, 0.0])
        assert self.data.log_pmf(4.0) == -math.inf

    def test_cdf(self):
        np.testing.assert_allclose(
            self.data.cdf([0.0, 1.0, 1.5, 2.0, 4.9, 5.0, 10.0]),
            [0.0, 0.2, 0.2, 0.6, 0.8, 1.0, 1.0],
        )
        assert math.isnan(self.data.cdf(math.nan))

    def test_ppf(self):
        np.testing.assert_array_equal(
            self.data.ppf([0.0, 0.1, 0.2, 0.5, 0.8, 0.9, 1.0]),
            [1.0, 1.0, 1.0, 2.0, 3.0, 5.0, 5.0],
        )

    def test_ppf_skips_zeroed_keys(self):
        self.data.set(1.0, 0.0)
        assert self.data.ppf(0.0) == 2.0

    def test_support(self):
        support = self.data.support
        assert support.first() == 1.0
        assert support.last() == 5.0
        assert support.contains(3.0)
        assert not support.contains(4.0)

    def test_empty_distribution(self):
        empty = ScalarDataDistribution()
        assert empty.mean == 0.0
        assert empty.variance == 0.0
        assert empty.cdf(1.0) == 0.0
        with pytest.raises(InvalidParameterError, match="empty"):
            empty.ppf(0.5)

    def test_sample(self, rng):
        draws = self.data.sample(2000, rng)
        assert set(np.unique(draws).tolist()) <= {1.0, 2.0, 3.0, 5.0}
        assert draws.mean() == pytest.approx(self.data.mean, abs=0.15)

    def test_estimator(self):
        learned = ScalarDataDistribution.estimator().learn([1.0, 2.0, 2.0], [1.0, 0.5, 0.5])
        assert isinstance(learned, ScalarDataDistribution)
        assert learned.get(2.0) == 1.0
        assert learned.mean == pytest.approx(1.5)

    def test_estimator_weight_mismatch(self):
        with pytest.raises(InvalidParameterError, match="Expected 3 weights"):
            ScalarDataDistribution.estimator().learn([1.0, 2.0, 2.0], [1.0])

    @pytest.mark.parametrize(
        "data, match",
        [
            ([], "at least one observation"),
            ([1.0, math.nan], "finite"),
            ([math.inf], "finite"),
            (None, "None"),
        ],
        ids=["empty", "nan", "infinite", "none"],
    )
    def test_estimator_rejects_invalid_data(self, data, match):
        with pytest.raises(InvalidParameterError, match=match):
            ScalarDataDistribution.estimator().learn(data)
