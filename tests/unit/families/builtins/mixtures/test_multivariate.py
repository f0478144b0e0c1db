"""
Tests for Multivariate Mixture Models

This module tests MultivariateMixtureDensityModel over components from
different families against weighted sums of scipy.stats densities.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest
from scipy import stats

from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.families import (
    DirichletDistribution,
    MixtureOfGaussians,
    MultivariateGaussian,
    MultivariateMixtureDensityModel,
    MultivariateStudentT,
)


class TestMultivariateMixtureDensityModel:
    def setup_method(self):
        self.location = np.array([3.0, 1.0])
        self.scale = np.array([[1.0, 0.2], [0.2, 0.5]])
        self.mixture = MultivariateMixtureDensityModel(
            [
                MultivariateGaussian([-2.0, 0.0], np.eye(2)),
                MultivariateStudentT(6.0, self.location, np.linalg.inv(self.scale)),
            ],
            [3.0, 1.0],
        )
        self.references = [
            stats.multivariate_normal([-2.0, 0.0], np.eye(2)),
            stats.multivariate_t(self.location, self.scale, df=6.0),
        ]
        self.weights = np.array([0.75, 0.25])

    def reference_pdf(self, x):
        return sum(w * ref.pdf(x) for w, ref in zip(self.weights, self.references))

    def test_density_matches_weighted_sum(self, rng):
        points = rng.normal(scale=3.0, size=(25, 2))
        np.testing.assert_allclose(self.mixture.pdf(points), self.reference_pdf(points), rtol=1e-8)
        np.testing.assert_allclose(
            self.mixture.log_pdf(points), np.log(self.reference_pdf(points)), rtol=1e-8
        )

    def test_single_point(self):
        value = self.mixture.pdf([0.0, 0.0])
        assert isinstance(value, float)
        assert value == pytest.approx(self.reference_pdf(np.array([0.0, 0.0])), rel=1e-8)

    def test_component_probabilities(self):
        points = np.array([[-2.0, 0.0], [3.0, 1.0]])
        probabilities = self.mixture.component_probabilities(points)

        joint = np.stack([w * ref.pdf(points) for w, ref in zip(self.weights, self.references)], 1)
        np.testing.assert_allclose(probabilities, joint / joint.sum(axis=1, keepdims=True))
        np.testing.assert_array_equal(self.mixture.most_likely_component(points), [0, 1])

    def test_component_likelihoods(self):
        point = np.array([0.5, 0.5])
        expected = [ref.pdf(point) for ref in self.references]
        np.testing.assert_allclose(self.mixture.component_likelihoods(point), expected, rtol=1e-8)

    def test_moments_use_total_covariance(self):
        means = [np.array([-2.0, 0.0]), self.location]
        covariances = [np.eye(2), 6.0 / 4.0 * self.scale]
        mean = self.weights[0] * means[0] + self.weights[1] * means[1]
        covariance = sum(
            w * (c + np.outer(m - mean, m - mean))
            for w, m, c in zip(self.weights, means, covariances)
        )
        np.testing.assert_allclose(self.mixture.mean, mean)
        np.testing.assert_allclose(self.mixture.variance, covariance)

    def test_sample(self, rng):
        sample = self.mixture.sample(20000, rng)
        assert sample.shape == (20000, 2)
        np.testing.assert_allclose(sample.mean(axis=0), self.mixture.mean, atol=0.08)

    def test_vector_holds_weights_only(self):
        np.testing.assert_allclose(self.mixture.convert_to_vector(), self.weights)
        self.mixture.convert_from_vector([0.5, 0.5])
        np.testing.assert_array_equal(self.mixture.prior_weights, [0.5, 0.5])

    @pytest.mark.parametrize(
        "vector, match",
        [([1.0], "Expected 2 prior weights"), ([0.7, 0.7], "sum to one"), ([1.5, -0.5], "non")],
        ids=["wrong_length", "off_simplex", "negative"],
    )
    def test_invalid_vector_leaves_weights(self, vector, match):
        with pytest.raises(InvalidParameterError, match=match):
            self.mixture.convert_from_vector(vector)
        np.testing.assert_allclose(self.mixture.prior_weights, self.weights)

    def test_components_share_dimension(self):
        with pytest.raises(InvalidParameterError, match="same dimension"):
            MultivariateMixtureDensityModel(
                [MultivariateGaussian([0.0, 0.0]), DirichletDistribution([1.0, 1.0, 1.0])]
            )

    def test_wrong_point_dimension(self):
        with pytest.raises(InvalidParameterError, match="dimension 2"):
            self.mixture.pdf([1.0, 2.0, 3.0])

    def test_copy_is_independent(self):
        clone = self.mixture.copy()
        clone.convert_from_vector([0.1, 0.9])
        np.testing.assert_allclose(self.mixture.prior_weights, self.weights)
        assert isinstance(clone, MultivariateMixtureDensityModel)

    def test_gaussian_mixture_is_a_multivariate_mixture(self):
        mixture = MixtureOfGaussians([MultivariateGaussian([0.0, 0.0])])
        assert isinstance(mixture, MultivariateMixtureDensityModel)
        assert mixture.fit_single_gaussian() == MultivariateGaussian([0.0, 0.0])
