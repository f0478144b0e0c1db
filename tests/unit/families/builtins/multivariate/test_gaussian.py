"""
Tests for Multivariate Gaussian Distribution

This module tests the multivariate Gaussian family against
scipy.stats.multivariate_normal, its product and convolution algebra, the
maximum-likelihood estimator and the running sufficient statistic.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy import integrate, stats

from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.families import (
    MultivariateGaussian,
    MultivariateGaussianIncrementalEstimator,
    MultivariateGaussianMaximumLikelihoodEstimator,
    MultivariateGaussianSufficientStatistic,
)
from pysatl_distributions.types import EuclideanDistributionType, FamilyName, Kind


class TestMultivariateGaussian:
    """Density, moments and sampling of the multivariate Gaussian."""

    def setup_method(self):
        self.mean = np.array([1.0, -2.0, 0.5])
        self.covariance = np.array(
            [
                [2.0, 0.3, 0.1],
                [0.3, 1.0, -0.2],
                [0.1, -0.2, 0.5],
            ]
        )
        self.gaussian = MultivariateGaussian(self.mean, self.covariance)
        self.reference = stats.multivariate_normal(self.mean, self.covariance)

    def test_family_and_type(self):
        assert self.gaussian.family.name == FamilyName.MULTIVARIATE_GAUSSIAN
        assert self.gaussian.distribution_type == EuclideanDistributionType(
            kind=Kind.CONTINUOUS, dimension=3
        )
        assert self.gaussian.dimension == 3

    def test_default_is_standard_bivariate(self):
        default = MultivariateGaussian()
        np.testing.assert_array_equal(default.mean, [0.0, 0.0])
        np.testing.assert_array_equal(default.covariance, np.eye(2))

    def test_density_matches_scipy(self, rng):
        points = rng.normal(size=(20, 3))
        np.testing.assert_allclose(
            self.gaussian.pdf(points), self.reference.pdf(points), rtol=1e-10
        )
        np.testing.assert_allclose(
            self.gaussian.log_pdf(points), self.reference.logpdf(points), rtol=1e-10
        )

    def test_single_vector_returns_float(self):
        value = self.gaussian.log_pdf(self.mean)
        assert isinstance(value, float)
        assert value == pytest.approx(self.reference.logpdf(self.mean), rel=1e-12)

    def test_bivariate_density_integrates_to_one(self):
        gaussian = MultivariateGaussian([0.5, -1.0], [[1.0, 0.3], [0.3, 0.5]])
        total, _ = integrate.dblquad(
            lambda y, x: gaussian.pdf([x, y]), -math.inf, math.inf, -math.inf, math.inf
        )
        assert total == pytest.approx(1.0, abs=1e-6)

    def test_mahalanobis_squared(self):
        x = np.array([0.0, 0.0, 0.0])
        delta = x - self.mean
        expected = delta @ np.linalg.solve(self.covariance, delta)
        assert self.gaussian.mahalanobis_squared(x) == pytest.approx(expected)

    def test_moments_and_derived_matrices(self):
        np.testing.assert_array_equal(self.gaussian.mean, self.mean)
        np.testing.assert_array_equal(self.gaussian.variance, self.covariance)
        np.testing.assert_allclose(
            self.gaussian.precision @ self.covariance, np.eye(3), atol=1e-12
        )
        assert self.gaussian.log_determinant == pytest.approx(
            np.log(np.linalg.det(self.covariance))
        )

    def test_variance_is_a_copy(self):
        self.gaussian.variance[0, 0] = 100.0
        assert self.gaussian.covariance[0, 0] == 2.0

    @pytest.mark.parametrize(
        "shape",
        [(2,), (4,), (5, 2), (2, 3, 3)],
        ids=["short_vector", "long_vector", "wrong_columns", "three_dimensional"],
    )
    def test_wrong_dimension_raises(self, shape):
        with pytest.raises(InvalidParameterError, match="Expected a vector of dimension 3"):
            self.gaussian.pdf(np.zeros(shape))

    @pytest.mark.parametrize(
        "mean, covariance, match",
        [
            ([0.0, 0.0], [[1.0, 0.0], [0.0, -1.0]], "positive definite"),
            ([0.0, 0.0], [[1.0, 0.5], [0.0, 1.0]], "positive definite"),
            ([0.0, 0.0], [[1.0]], "d x d"),
            ([0.0, np.inf], [[1.0, 0.0], [0.0, 1.0]], "finite"),
        ],
        ids=["indefinite", "asymmetric", "wrong_shape", "infinite_mean"],
    )
    def test_invalid_parameters(self, mean, covariance, match):
        with pytest.raises(InvalidParameterError, match=match):
            MultivariateGaussian(mean, covariance)

    def test_sample_moments(self, rng):
        sample = self.gaussian.sample(20000, rng)

        assert sample.shape == (20000, 3)
        np.testing.assert_allclose(sample.mean(axis=0), self.mean, atol=0.05)
        np.testing.assert_allclose(np.cov(sample, rowvar=False), self.covariance, atol=0.08)

    def test_sampling_is_reproducible(self):
        first = self.gaussian.sample(5, np.random.default_rng(7))
        second = self.gaussian.sample(5, np.random.default_rng(7))
        np.testing.assert_array_equal(first, second)

    def test_vector_round_trip(self):
        vector = self.gaussian.convert_to_vector()
        assert vector.shape == (3 + 9,)

        other = MultivariateGaussian([0.0, 0.0, 0.0], np.eye(3))
        other.convert_from_vector(vector)
        assert other == self.gaussian


class TestMultivariateGaussianAlgebra:
    def setup_method(self):
        self.first = MultivariateGaussian([0.0, 1.0], [[1.0, 0.2], [0.2, 2.0]])
        self.second = MultivariateGaussian([2.0, -1.0], [[0.5, 0.0], [0.0, 0.5]])

    def test_convolution_adds_moments(self):
        result = self.first.convolve(self.second)
        np.testing.assert_allclose(result.mean, [2.0, 0.0])
        np.testing.assert_allclose(result.covariance, [[1.5, 0.2], [0.2, 2.5]])

    def test_product_combines_precisions(self):
        result = self.first.times(self.second)
        precision = self.first.precision + self.second.precision
        expected_mean = np.linalg.solve(
            precision,
            self.first.precision @ self.first.mean + self.second.precision @ self.second.mean,
        )
        np.testing.assert_allclose(result.precision, precision, rtol=1e-10)
        np.testing.assert_allclose(result.mean, expected_mean, rtol=1e-10)

    def test_product_is_proportional_to_density_product(self, rng):
        result = self.first.times(self.second)
        points = rng.normal(size=(6, 2))
        log_ratio = (
            self.first.log_pdf(points) + self.second.log_pdf(points) - result.log_pdf(points)
        )
        np.testing.assert_allclose(log_ratio, np.full(6, log_ratio[0]), rtol=1e-9)

    def test_dimension_mismatch(self):
        other = MultivariateGaussian([0.0, 0.0, 0.0])
        with pytest.raises(InvalidParameterError, match="same dimension"):
            self.first.times(other)
        with pytest.raises(InvalidParameterError, match="same dimension"):
            self.first.convolve(other)


class TestMultivariateGaussianEstimators:
    def setup_method(self):
        self.data = np.array(
            [
                [1.0, 2.0],
                [2.0, 1.0],
                [4.0, 5.0],
                [0.0, -1.0],
                [3.0, 3.0],
            ]
        )

    def test_unweighted_fit_is_unbiased(self):
        fitted = MultivariateGaussian.estimator().learn(self.data)

        np.testing.assert_allclose(fitted.mean, self.data.mean(axis=0))
        np.testing.assert_allclose(
            fitted.covariance, np.cov(self.data, rowvar=False) + 1e-5 * np.eye(2)
        )

    def test_weighted_fit_is_biased(self):
        weights = np.array([1.0, 2.0, 1.0, 0.5, 1.5])
        fitted = MultivariateGaussianMaximumLikelihoodEstimator(0.0).learn(self.data, weights)

        mean = np.average(self.data, axis=0, weights=weights)
        delta = self.data - mean
        covariance = (weights[:, None] * delta).T @ delta / weights.sum()
        np.testing.assert_allclose(fitted.mean, mean)
        np.testing.assert_allclose(fitted.covariance, covariance)

    def test_too_few_observations(self):
        with pytest.raises(InvalidParameterError, match="two observations"):
            MultivariateGaussian.estimator().learn([[1.0, 2.0]])

    def test_negative_default_covariance(self):
        with pytest.raises(InvalidParameterError, match="non-negative"):
            MultivariateGaussianMaximumLikelihoodEstimator(-1.0)

    def test_recovers_parameters(self, rng):
        truth = MultivariateGaussian([1.0, -1.0], [[1.0, 0.6], [0.6, 2.0]])
        fitted = MultivariateGaussian.estimator().learn(truth.sample(20000, rng))
        np.testing.assert_allclose(fitted.mean, truth.mean, atol=0.05)
        np.testing.assert_allclose(fitted.covariance, truth.covariance, atol=0.08)


class TestMultivariateGaussianSufficientStatistic:
    def setup_method(self):
        self.data = np.array([[1.0, 0.0], [2.0, 2.0], [4.0, 1.0], [3.0, 5.0], [0.0, 1.0]])

    def test_running_moments(self):
        statistic = MultivariateGaussianIncrementalEstimator().learn(self.data)

        assert statistic.count == 5
        np.testing.assert_allclose(statistic.mean, self.data.mean(axis=0))
        np.testing.assert_allclose(statistic.covariance, np.cov(self.data, rowvar=False))

    def test_single_observation_has_zero_covariance(self):
        statistic = MultivariateGaussianSufficientStatistic()
        statistic.update([1.0, 2.0])
        np.testing.assert_array_equal(statistic.covariance, np.zeros((2, 2)))

    def test_merge_equals_sequential(self):
        left = MultivariateGaussianIncrementalEstimator().learn(self.data[:2])
        right = MultivariateGaussianIncrementalEstimator().learn(self.data[2:])
        combined = left + right
        sequential = MultivariateGaussianIncrementalEstimator().learn(self.data)

        assert combined.count == sequential.count
        np.testing.assert_allclose(combined.mean, sequential.mean)
        np.testing.assert_allclose(combined.covariance, sequential.covariance)
        assert left.count == 2

    def test_merge_with_empty(self):
        statistic = MultivariateGaussianIncrementalEstimator().learn(self.data)
        empty = MultivariateGaussianSufficientStatistic()

        statistic.merge(MultivariateGaussianSufficientStatistic())
        empty.merge(statistic)

        assert statistic.count == 5
        np.testing.assert_allclose(empty.mean, statistic.mean)

    def test_dimension_mismatch(self):
        statistic = MultivariateGaussianIncrementalEstimator().learn(self.data)
        with pytest.raises(InvalidParameterError, match="dimension 2"):
            statistic.update([1.0, 2.0, 3.0])

    def test_to_distribution(self):
        statistic = MultivariateGaussianIncrementalEstimator().learn(self.data)
        distribution = statistic.to_distribution()

        np.testing.assert_allclose(distribution.mean, self.data.mean(axis=0))
        np.testing.assert_allclose(
            distribution.covariance, np.cov(self.data, rowvar=False) + 1e-5 * np.eye(2)
        )

    def test_empty_statistic_has_no_distribution(self):
        with pytest.raises(InvalidParameterError, match="empty"):
            MultivariateGaussianSufficientStatistic().to_distribution()

    def test_clear(self):
        statistic = MultivariateGaussianIncrementalEstimator().learn(self.data)
        statistic.clear()
        assert statistic.count == 0
        assert statistic.mean is None
