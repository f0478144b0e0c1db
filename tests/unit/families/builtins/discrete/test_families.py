"""
Tests for Discrete Distribution Families

Parameter validation, edge parameters and estimators of the binomial,
beta-binomial, Poisson, negative binomial, uniform integer and categorical
families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.families import (
    BetaBinomialDistribution,
    BinomialDistribution,
    CategoricalDistribution,
    NegativeBinomialDistribution,
    PoissonDistribution,
    UniformIntegerDistribution,
)
from pysatl_distributions.families.configuration import configure_families_register
from pysatl_distributions.types import FamilyName, UnivariateDiscrete


class TestBinomial:
    def setup_method(self):
        self.binomial = BinomialDistribution(10, 0.25)

    def test_reference_cdf_value(self):
        assert self.binomial.cdf(5.0) == pytest.approx(0.980272, abs=1e-6)
        assert self.binomial.cdf(5.7) == self.binomial.cdf(5.0)

    def test_registered_family(self):
        family = configure_families_register().get(FamilyName.BINOMIAL)
        assert family(n=10, p=0.25) == self.binomial
        assert self.binomial.distribution_type == UnivariateDiscrete

    def test_integral_float_trials(self):
        assert BinomialDistribution(10.0, 0.25).n == 10
        with pytest.raises(InvalidParameterError, match="integer"):
            BinomialDistribution(10.5, 0.25)

    @pytest.mark.parametrize(
        "n, p, match",
        [(0, 0.5, "n >= 1"), (5, -0.1, "0 <= p <= 1"), (5, 1.5, "0 <= p <= 1")],
        ids=["no_trials", "negative_p", "p_above_one"],
    )
    def test_constraints(self, n, p, match):
        with pytest.raises(InvalidParameterError, match=match):
            BinomialDistribution(n, p)

    @pytest.mark.parametrize("p, point", [(0.0, 0.0), (1.0, 4.0)], ids=["p_zero", "p_one"])
    def test_degenerate_probability(self, p, point):
        binomial = BinomialDistribution(4, p)
        assert binomial.pmf(point) == pytest.approx(1.0)
        assert binomial.cdf(point) == pytest.approx(1.0)
        assert binomial.ppf(0.5) == point

    def test_quantile_limits(self):
        assert self.binomial.ppf(0.0) == 0.0
        assert self.binomial.ppf(1.0) == 10.0

    def test_estimator_with_known_trials(self):
        fitted = BinomialDistribution.estimator(10).learn([2, 3, 1, 4])
        assert fitted.n == 10
        assert fitted.p == pytest.approx(0.25)

    def test_estimator_defaults_trials_to_maximum(self):
        fitted = BinomialDistribution.estimator().learn([2, 4, 0, 2])
        assert fitted.n == 4
        assert fitted.p == pytest.approx(0.5)

    @pytest.mark.parametrize(
        "data", [[1.5, 2.0], [-1.0, 2.0], [11.0, 2.0]], ids=["fractional", "negative", "too_large"]
    )
    def test_estimator_rejects_invalid_counts(self, data):
        with pytest.raises(InvalidParameterError):
            BinomialDistribution.estimator(10).learn(data)


class TestBetaBinomial:
    def test_uniform_prior_gives_uniform_counts(self):
        distribution = BetaBinomialDistribution(4, 1.0, 1.0)
        np.testing.assert_allclose(distribution.pmf(np.arange(5.0)), np.full(5, 0.2))

    def test_large_shapes_approach_binomial(self):
        beta_binomial = BetaBinomialDistribution(6, 3e6, 1e6)
        binomial = BinomialDistribution(6, 0.75)
        np.testing.assert_allclose(
            beta_binomial.pmf(np.arange(7.0)), binomial.pmf(np.arange(7.0)), rtol=1e-4
        )

    def test_invalid_shape(self):
        with pytest.raises(InvalidParameterError, match="0 < shape < inf"):
            BetaBinomialDistribution(3, 0.0, 1.0)


class TestPoisson:
    def test_unbounded_support(self):
        poisson = PoissonDistribution(2.0)
        assert poisson.support.last() is None
        assert poisson.ppf(1.0) == math.inf
        assert poisson.pmf(-1.0) == 0.0

    def test_estimator(self):
        fitted = PoissonDistribution.estimator().learn([0, 1, 2, 5])
        assert fitted.rate == pytest.approx(2.0)

    def test_weighted_estimator(self):
        fitted = PoissonDistribution.estimator().learn([1, 4], [2.0, 1.0])
        assert fitted.rate == pytest.approx(2.0)

    def test_estimator_rejects_fractional_counts(self):
        with pytest.raises(InvalidParameterError, match="non-negative integers"):
            PoissonDistribution.estimator().learn([0.5, 1.0])

    def test_all_zero_counts_have_no_fit(self):
        with pytest.raises(InvalidParameterError):
            PoissonDistribution.estimator().learn([0, 0, 0])


class TestNegativeBinomial:
    def test_real_valued_failures(self):
        distribution = NegativeBinomialDistribution(0.5, 0.3)
        assert distribution.r == 0.5
        assert distribution.mean == pytest.approx(0.5 * 0.3 / 0.7)

    def test_zero_success_probability(self):
        distribution = NegativeBinomialDistribution(2.0, 0.0)
        assert distribution.pmf(0.0) == pytest.approx(1.0)
        assert distribution.cdf(0.0) == pytest.approx(1.0)

    def test_probability_one_is_rejected(self):
        with pytest.raises(InvalidParameterError, match="0 <= p < 1"):
            NegativeBinomialDistribution(2.0, 1.0)

    def test_moment_matching(self):
        data = np.array([0.0, 1.0, 1.0, 3.0, 5.0, 8.0])
        mean, variance = data.mean(), data.var(ddof=1)
        ratio = mean / variance
        r = abs(mean * ratio / (ratio - 1.0))

        fitted = NegativeBinomialDistribution.estimator().learn(data)

        assert fitted.r == pytest.approx(r)
        assert fitted.p == pytest.approx(mean / (mean + r))
        assert fitted.mean == pytest.approx(mean)

    def test_equidispersed_sample_has_no_fit(self):
        with pytest.raises(InvalidParameterError):
            NegativeBinomialDistribution.estimator().learn([2.0, 2.0, 2.0])


class TestUniformInteger:
    def test_single_point(self):
        distribution = UniformIntegerDistribution(3, 3)
        assert distribution.pmf(3.0) == 1.0
        assert distribution.variance == 0.0
        assert distribution.entropy == 0.0
        assert distribution.ppf(0.5) == 3.0

    def test_reversed_bounds_are_rejected(self):
        with pytest.raises(InvalidParameterError, match="min_support <= max_support"):
            UniformIntegerDistribution(4, 2)

    def test_entropy_in_bits(self):
        assert UniformIntegerDistribution(0, 7).entropy == pytest.approx(3.0)

    def test_estimator(self):
        fitted = UniformIntegerDistribution.estimator().learn([3, -1, 7, 2], [1.0, 1.0, 0.0, 1.0])
        assert (fitted.min_support, fitted.max_support) == (-1, 3)

    def test_estimator_rejects_fractional_values(self):
        with pytest.raises(InvalidParameterError):
            UniformIntegerDistribution.estimator().learn([1.0, 2.5])


class TestCategorical:
    def setup_method(self):
        self.categorical = CategoricalDistribution([0.5, 0.25, 0.25])

    def test_labels(self):
        assert self.categorical.num_categories == 3
        assert self.categorical.pmf(1.0) == pytest.approx(0.25)
        assert self.categorical.pmf(3.0) == 0.0
        assert self.categorical.cdf(1.0) == pytest.approx(0.75)

    def test_entropy_in_bits(self):
        assert self.categorical.entropy == pytest.approx(1.5)

    @pytest.mark.parametrize(
        "probabilities",
        [[1.0], [0.5, 0.6], [1.5, -0.5], [[0.5, 0.5]], 0.5],
        ids=["single", "not_normalised", "negative", "matrix", "scalar"],
    )
    def test_invalid_probabilities(self, probabilities):
        with pytest.raises(InvalidParameterError):
            CategoricalDistribution(probabilities)

    def test_scalar_assignment_leaves_probabilities_intact(self):
        with pytest.raises(InvalidParameterError, match="vector of at least 2"):
            self.categorical.probabilities = 1.0
        np.testing.assert_array_equal(self.categorical.probabilities, [0.5, 0.25, 0.25])

    def test_vector_round_trip(self):
        other = CategoricalDistribution([0.1, 0.1, 0.8])
        other.convert_from_vector(self.categorical.convert_to_vector())
        assert other == self.categorical

    def test_vector_must_stay_on_simplex(self):
        with pytest.raises(InvalidParameterError, match="simplex"):
            self.categorical.convert_from_vector([0.5, 0.5, 0.5])
        assert self.categorical.pmf(0.0) == pytest.approx(0.5)

    def test_estimator(self):
        fitted = CategoricalDistribution.estimator().learn([0, 1, 1, 2, 2, 2, 2, 0])
        np.testing.assert_allclose(fitted.probabilities, [0.25, 0.25, 0.5])

    def test_estimator_with_fixed_size_and_weights(self):
        fitted = CategoricalDistribution.estimator(4).learn([0, 1], [3.0, 1.0])
        np.testing.assert_allclose(fitted.probabilities, [0.75, 0.25, 0.0, 0.0])

    def test_estimator_rejects_large_labels(self):
        with pytest.raises(InvalidParameterError, match="below 2"):
            CategoricalDistribution.estimator(2).learn([0, 2])
