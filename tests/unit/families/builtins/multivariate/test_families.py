"""
Tests for Multivariate Families

The Dirichlet, multinomial and multivariate Student-t families compared with
their scipy.stats counterparts.
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
    DirichletDistribution,
    MultinomialDistribution,
    MultivariateStudentT,
)
from pysatl_distributions.types import FamilyName


class TestDirichlet:
    def setup_method(self):
        self.alpha = np.array([2.0, 3.5, 1.5])
        self.dirichlet = DirichletDistribution(self.alpha)

    def test_density_matches_scipy(self, rng):
        points = rng.dirichlet(self.alpha, size=10)
        for point in points:
            assert self.dirichlet.pdf(point) == pytest.approx(
                stats.dirichlet.pdf(point, self.alpha), rel=1e-10
            )
            assert self.dirichlet.log_pdf(point) == pytest.approx(
                stats.dirichlet.logpdf(point, self.alpha), rel=1e-10
            )

    def test_batch_evaluation(self, rng):
        points = rng.dirichlet(self.alpha, size=4)
        expected = [self.dirichlet.log_pdf(point) for point in points]
        np.testing.assert_allclose(self.dirichlet.log_pdf(points), expected)

    @pytest.mark.parametrize(
        "point",
        [[0.5, 0.5, 0.5], [0.0, 0.5, 0.5], [1.2, -0.1, -0.1]],
        ids=["off_simplex", "boundary", "negative"],
    )
    def test_density_outside_open_simplex(self, point):
        assert self.dirichlet.pdf(point) == 0.0
        assert self.dirichlet.log_pdf(point) == -math.inf

    def test_moments_match_scipy(self):
        reference = stats.dirichlet(self.alpha)
        np.testing.assert_allclose(self.dirichlet.mean, reference.mean())
        np.testing.assert_allclose(np.diag(self.dirichlet.variance), reference.var())

    def test_off_diagonal_covariance_is_negative(self):
        covariance = self.dirichlet.variance
        assert np.all(covariance[~np.eye(3, dtype=bool)] < 0.0)

    def test_density_integrates_over_simplex(self):
        total, _ = integrate.dblquad(
            lambda y, x: self.dirichlet.pdf([x, y, 1.0 - x - y]), 0.0, 1.0, 0.0, lambda x: 1.0 - x
        )
        assert total == pytest.approx(1.0, abs=1e-6)

    def test_samples_lie_on_simplex(self, rng):
        sample = self.dirichlet.sample(500, rng)
        assert sample.shape == (500, 3)
        np.testing.assert_allclose(sample.sum(axis=1), np.ones(500))
        np.testing.assert_allclose(sample.mean(axis=0), self.dirichlet.mean, atol=0.03)

    @pytest.mark.parametrize(
        "alpha, match",
        [([1.0], "at least 2"), ([1.0, 0.0], "0 < alpha"), ([1.0, np.inf], "0 < alpha")],
        ids=["single", "zero", "infinite"],
    )
    def test_invalid_alpha(self, alpha, match):
        with pytest.raises(InvalidParameterError, match=match):
            DirichletDistribution(alpha)

    def test_registered_family(self):
        assert self.dirichlet.family.name == FamilyName.DIRICHLET
        assert self.dirichlet.distribution_type.dimension == 3


class TestMultinomial:
    def setup_method(self):
        self.probabilities = np.array([0.2, 0.5, 0.3])
        self.multinomial = MultinomialDistribution(4, self.probabilities)
        self.reference = stats.multinomial(4, self.probabilities)

    def test_pmf_matches_scipy_on_domain(self):
        domain = np.array(list(self.multinomial.iter_domain()))
        assert domain.shape == (self.multinomial.domain_size, 3)
        np.testing.assert_allclose(
            self.multinomial.pmf(domain), self.reference.pmf(domain), rtol=1e-10
        )
        assert self.multinomial.pmf(domain).sum() == pytest.approx(1.0)

    def test_domain_size(self):
        assert self.multinomial.domain_size == math.comb(6, 2)
        assert len(set(map(tuple, self.multinomial.iter_domain()))) == 15

    @pytest.mark.parametrize(
        "counts",
        [[1.0, 1.0, 1.0], [1.5, 1.5, 1.0], [-1.0, 3.0, 2.0], [0.0, 0.0, 5.0]],
        ids=["too_few", "fractional", "negative", "too_many"],
    )
    def test_pmf_is_zero_off_domain(self, counts):
        assert self.multinomial.pmf(counts) == 0.0
        assert self.multinomial.log_pmf(counts) == -math.inf

    def test_zero_probability_category(self):
        multinomial = MultinomialDistribution(3, [0.0, 1.0])
        assert multinomial.pmf([0.0, 3.0]) == pytest.approx(1.0)
        assert multinomial.pmf([1.0, 2.0]) == 0.0

    def test_wrong_dimension_raises(self):
        with pytest.raises(InvalidParameterError, match="dimension 3"):
            self.multinomial.pmf([2.0, 2.0])

    def test_moments(self):
        np.testing.assert_allclose(self.multinomial.mean, self.reference.mean())
        np.testing.assert_allclose(self.multinomial.variance, self.reference.cov())

    def test_sample_counts(self, rng):
        sample = self.multinomial.sample(1000, rng)
        assert sample.shape == (1000, 3)
        np.testing.assert_array_equal(sample.sum(axis=1), np.full(1000, 4.0))
        np.testing.assert_allclose(sample.mean(axis=0), self.multinomial.mean, atol=0.1)

    @pytest.mark.parametrize(
        "num_trials, probabilities, match",
        [
            (0, [0.5, 0.5], "num_trials >= 1"),
            (2, [0.5, 0.6], "simplex"),
            (2, [1.0], "at least 2"),
            (2.5, [0.5, 0.5], "integer"),
        ],
        ids=["no_trials", "not_normalised", "single_category", "fractional_trials"],
    )
    def test_invalid_parameters(self, num_trials, probabilities, match):
        with pytest.raises(InvalidParameterError, match=match):
            MultinomialDistribution(num_trials, probabilities)


class TestMultivariateStudentT:
    def setup_method(self):
        self.location = np.array([1.0, -1.0])
        self.scale = np.array([[2.0, 0.4], [0.4, 1.0]])
        self.student = MultivariateStudentT(5.0, self.location, np.linalg.inv(self.scale))
        self.reference = stats.multivariate_t(self.location, self.scale, df=5.0)

    def test_density_matches_scipy(self, rng):
        points = rng.normal(scale=2.0, size=(15, 2))
        np.testing.assert_allclose(
            self.student.log_pdf(points), self.reference.logpdf(points), rtol=1e-8
        )
        np.testing.assert_allclose(self.student.pdf(points), self.reference.pdf(points), rtol=1e-8)

    def test_moments(self):
        np.testing.assert_array_equal(self.student.mean, self.location)
        np.testing.assert_allclose(self.student.variance, 5.0 / 3.0 * self.scale, rtol=1e-10)

    @pytest.mark.parametrize(
        "dof, expected_mean, expected_variance",
        [(0.8, math.nan, math.nan), (1.5, 0.0, math.inf)],
        ids=["no_mean", "infinite_variance"],
    )
    def test_heavy_tail_moments(self, dof, expected_mean, expected_variance):
        student = MultivariateStudentT(dof, [0.0, 0.0])
        np.testing.assert_array_equal(student.mean, np.full(2, expected_mean))
        np.testing.assert_array_equal(student.variance, np.full((2, 2), expected_variance))

    def test_large_dof_approaches_gaussian(self):
        student = MultivariateStudentT(1e7, self.location, np.linalg.inv(self.scale))
        gaussian = stats.multivariate_normal(self.location, self.scale)
        point = np.array([0.5, 0.0])
        assert student.pdf(point) == pytest.approx(gaussian.pdf(point), rel=1e-5)

    def test_density_integrates_to_one(self):
        total, _ = integrate.dblquad(
            lambda y, x: self.student.pdf([x, y]), -math.inf, math.inf, -math.inf, math.inf
        )
        assert total == pytest.approx(1.0, abs=1e-5)

    def test_sample_location(self, rng):
        sample = self.student.sample(20000, rng)
        assert sample.shape == (20000, 2)
        np.testing.assert_allclose(np.median(sample, axis=0), self.location, atol=0.05)
        np.testing.assert_allclose(np.cov(sample, rowvar=False), self.student.variance, rtol=0.2)

    @pytest.mark.parametrize(
        "dof, precision, match",
        [
            (0.0, np.eye(2), "degrees_of_freedom"),
            (3.0, [[1.0, 2.0], [2.0, 1.0]], "positive definite"),
            (3.0, np.eye(3), "d x d"),
        ],
        ids=["zero_dof", "indefinite", "wrong_shape"],
    )
    def test_invalid_parameters(self, dof, precision, match):
        with pytest.raises(InvalidParameterError, match=match):
            MultivariateStudentT(dof, [0.0, 0.0], precision)
