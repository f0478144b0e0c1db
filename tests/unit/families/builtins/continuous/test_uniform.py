"""
Tests for Uniform Distribution Family

This module tests the functionality of the uniform distribution family,
including parameterizations, characteristics, and sampling.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import numpy as np
import pytest
from scipy.stats import uniform

from pysatl_distributions.distributions.support import ContinuousSupport
from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.families import UniformDistribution
from pysatl_distributions.families.configuration import configure_families_register
from pysatl_distributions.types import (
    CharacteristicName,
    ContinuousSupportShape1D,
    FamilyName,
    UnivariateContinuous,
)

from .base import BaseDistributionTest


class TestUniformFamily(BaseDistributionTest):
    """Test suite for Uniform distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.uniform_family = registry.get(FamilyName.UNIFORM)
        self.uniform_dist_example = self.uniform_family(min_support=2.0, max_support=5.0)

    def test_family_properties(self):
        """Test basic properties of uniform family."""
        assert self.uniform_family.name == FamilyName.UNIFORM
        assert self.uniform_family.parametrization_names == ["bounds", "meanWidth"]
        assert self.uniform_family.base_parametrization_name == "bounds"

    def test_bounds_parametrization_creation(self):
        """Test creation of distribution with the bounds parametrization."""
        dist = self.uniform_dist_example

        assert isinstance(dist, UniformDistribution)
        assert dist.distribution_type == UnivariateContinuous
        assert dist.parameters.parameters == {"min_support": 2.0, "max_support": 5.0}

    def test_mean_width_parametrization_creation(self):
        """Mean-width values are converted to bounds."""
        dist = self.uniform_family.distribution("meanWidth", mean=3.5, width=3.0)
        assert dist == self.uniform_dist_example

    def test_moments(self):
        """Test moment calculations."""
        assert self.uniform_dist_example.mean == pytest.approx(3.5)
        assert self.uniform_dist_example.variance == pytest.approx(0.75)

        var_func = self.uniform_dist_example.query_method(CharacteristicName.VAR)
        assert abs(var_func(None) - 0.75) < self.CALCULATION_PRECISION

    @pytest.mark.parametrize(
        "char_name, test_data, scipy_func",
        [
            (CharacteristicName.PDF, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0], uniform.pdf),
            (CharacteristicName.CDF, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0], uniform.cdf),
            (CharacteristicName.PPF, [0.0, 0.001, 0.25, 0.5, 0.75, 0.999, 1.0], uniform.ppf),
        ],
        ids=["pdf", "cdf", "ppf"],
    )
    def test_array_input_for_characteristics(self, char_name, test_data, scipy_func):
        """Test that characteristics support array inputs."""
        char_func = self.uniform_dist_example.query_method(char_name)

        input_array = np.array(test_data)
        result_array = char_func(input_array)

        assert result_array.shape == input_array.shape
        self.assert_arrays_almost_equal(
            result_array, scipy_func(input_array, loc=2.0, scale=3.0)
        )

    def test_uniform_support(self):
        """Support is the closed interval between the bounds."""
        support = self.uniform_dist_example.support

        assert isinstance(support, ContinuousSupport)
        assert support.left == 2.0
        assert support.right == 5.0
        assert support.left_closed
        assert support.right_closed
        assert support.shape == ContinuousSupportShape1D.BOUNDED_INTERVAL

        results = support.contains(np.array([1.9, 2.0, 3.5, 5.0, 5.1]))
        np.testing.assert_array_equal(results, [False, True, True, True, False])

    def test_density_at_bounds(self):
        assert self.uniform_dist_example.pdf(2.0) == pytest.approx(1.0 / 3.0)
        assert self.uniform_dist_example.pdf(5.0) == pytest.approx(1.0 / 3.0)
        assert self.uniform_dist_example.cdf(5.0) == 1.0

    def test_set_bounds_is_atomic(self):
        dist = UniformDistribution(0.0, 1.0)
        dist.set_bounds(4.0, 6.0)
        assert (dist.min_support, dist.max_support) == (4.0, 6.0)

        with pytest.raises(InvalidParameterError, match="min_support < max_support"):
            dist.set_bounds(7.0, 6.0)
        assert (dist.min_support, dist.max_support) == (4.0, 6.0)

    def test_single_setter_keeps_ordering_invariant(self):
        dist = UniformDistribution(0.0, 1.0)
        with pytest.raises(InvalidParameterError):
            dist.min_support = 2.0
        assert dist.min_support == 0.0


class TestUniformFamilyEdgeCases(BaseDistributionTest):
    """Test edge cases and error conditions for uniform distribution."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.uniform_family = registry.get(FamilyName.UNIFORM)

    def test_invalid_parameterization(self):
        """Test error for invalid parameterization name."""
        with pytest.raises(KeyError):
            self.uniform_family.distribution("invalid_name", min_support=0.0, max_support=1.0)

    def test_missing_parameters(self):
        """Test error for missing required parameters."""
        with pytest.raises(TypeError):
            self.uniform_family.distribution(min_support=0.0)

    def test_out_of_range_probabilities(self):
        """Quantiles below 0 and above 1 clamp to the bounds."""
        dist = UniformDistribution(0.0, 1.0)
        assert dist.ppf(-0.1) == 0.0
        assert dist.ppf(1.1) == 1.0

    def test_single_value_uniform(self):
        """A degenerate interval is rejected."""
        with pytest.raises(InvalidParameterError, match="min_support < max_support"):
            UniformDistribution(2.0, 2.0)

    def test_infinite_bounds(self):
        with pytest.raises(InvalidParameterError, match="finite"):
            UniformDistribution(0.0, float("inf"))

    def test_negative_width(self):
        """Test that negative width is rejected."""
        with pytest.raises(InvalidParameterError, match="width > 0"):
            self.uniform_family.distribution("meanWidth", mean=0.0, width=-1.0)


class TestUniformEstimator:
    def test_bounds_from_extremes(self):
        fitted = UniformDistribution.estimator().learn([0.5, -1.0, 2.0, 0.0])
        assert (fitted.min_support, fitted.max_support) == (-1.0, 2.0)

    def test_zero_weights_are_ignored(self):
        fitted = UniformDistribution.estimator().learn([-10.0, 0.0, 1.0, 10.0], [0.0, 1.0, 1.0, 0.0])
        assert (fitted.min_support, fitted.max_support) == (0.0, 1.0)

    def test_degenerate_sample(self):
        with pytest.raises(InvalidParameterError):
            UniformDistribution.estimator().learn([1.0, 1.0])
