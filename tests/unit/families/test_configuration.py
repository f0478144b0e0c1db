"""
Tests for Distribution Families Configuration

This module tests the configuration and registration of distribution families
in the global ParametricFamilyRegister.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.families import (
    GammaDistribution,
    UnivariateGaussian,
)
from pysatl_distributions.families.configuration import (
    configure_families_register,
    reset_families_register,
)
from pysatl_distributions.families.parametric_family import ParametricFamily
from pysatl_distributions.families.registry import ParametricFamilyRegister
from pysatl_distributions.types import FamilyName, UnivariateContinuous


class TestConfiguration:
    """Test suite for configuration functionality."""

    def setup_method(self):
        """Setup before each test method."""
        self.registry = configure_families_register()

    def test_configure_families_register_returns_registry(self):
        """Test that configure_families_register returns a ParametricFamilyRegister."""
        assert isinstance(self.registry, ParametricFamilyRegister)

    def test_configure_families_register_is_singleton(self):
        """Test that configure_families_register returns the same instance."""
        assert self.registry is configure_families_register()

    def test_all_builtin_families_registered(self):
        """Every built-in family name is present in the registry."""
        assert set(self.registry.names()) == {name.value for name in FamilyName}
        for name in FamilyName:
            assert self.registry.contains(name)

    def test_registered_family_is_the_module_family(self):
        """The registry hands out the family objects of the builtin modules."""
        assert self.registry.get(FamilyName.GAUSSIAN) is UnivariateGaussian.family

    def test_reset_families_register(self):
        """Test that reset_families_register clears the cache."""
        registry1 = configure_families_register()
        reset_families_register()
        registry2 = configure_families_register()

        assert registry1 is not registry2
        assert registry2.contains(FamilyName.GAMMA)

    def test_registry_singleton_pattern(self):
        """Test that ParametricFamilyRegister itself follows singleton pattern."""
        assert ParametricFamilyRegister() is ParametricFamilyRegister()

    def test_unknown_family(self):
        """Requesting an unregistered family raises ValueError."""
        with pytest.raises(ValueError, match="No family Unknown found"):
            self.registry.get("Unknown")

    def test_duplicate_registration(self):
        """Registering a second family under a taken name is refused."""
        clash = ParametricFamily(
            name=FamilyName.GAMMA,
            distr_type=UnivariateContinuous,
            distr_parametrizations=["shapeScale"],
        )
        with pytest.raises(ValueError, match="already found"):
            self.registry.register(clash)


class TestRegisteredFamilies:
    """Distributions created through registered families."""

    def setup_method(self):
        self.registry = configure_families_register()

    def test_distribution_from_alternative_parametrization(self):
        family = self.registry.get(FamilyName.GAUSSIAN)
        distribution = family.distribution("meanStd", mean=1.0, std=2.0)

        assert isinstance(distribution, UnivariateGaussian)
        assert distribution.mean == 1.0
        assert distribution.variance == pytest.approx(4.0)
        assert distribution.parameters.name == "meanVariance"

    def test_call_is_distribution(self):
        family = self.registry.get(FamilyName.GAMMA)
        distribution = family(shape=2.0, scale=3.0)

        assert isinstance(distribution, GammaDistribution)
        assert distribution == GammaDistribution(2.0, 3.0)

    def test_base_parametrization_by_default(self):
        family = self.registry.get(FamilyName.GAMMA)
        via_rate = family.distribution("shapeRate", shape=2.0, rate=0.5)
        assert via_rate == family.distribution(shape=2.0, scale=2.0)

    def test_invalid_values_raise(self):
        family = self.registry.get(FamilyName.GAUSSIAN)
        with pytest.raises(InvalidParameterError, match="std > 0"):
            family.distribution("meanStd", mean=0.0, std=-1.0)

    def test_unknown_parametrization(self):
        family = self.registry.get(FamilyName.GAUSSIAN)
        with pytest.raises(InvalidParameterError, match="no parametrization 'meanSkew'"):
            family.distribution("meanSkew", mean=0.0, skew=1.0)

    @pytest.mark.parametrize(
        "values",
        [{"mean": 0.0}, {"mean": 0.0, "std": 1.0, "skew": 0.0}],
        ids=["missing", "unexpected"],
    )
    def test_wrong_parameter_names(self, values):
        family = self.registry.get(FamilyName.GAUSSIAN)
        with pytest.raises(InvalidParameterError, match="meanStd"):
            family.distribution("meanStd", **values)

    @pytest.mark.parametrize(
        "name",
        [name for name in FamilyName],
        ids=[name.value for name in FamilyName],
    )
    def test_every_family_has_bound_class(self, name):
        family = self.registry.get(name)
        assert family.distribution_class.family is family
        assert family.base.__param_name__ == family.base_parametrization_name
