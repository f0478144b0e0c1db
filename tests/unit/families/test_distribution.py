"""
Tests for the behaviour shared by all parametric distributions.

Parameter access and atomic updates, copies and equality, flat parameter
vectors and characteristic lookup by name.
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
    CategoricalDistribution,
    GammaDistribution,
    PoissonDistribution,
    UnivariateGaussian,
)
from pysatl_distributions.types import CharacteristicName, UnivariateContinuous


class TestParameterAccess:
    """Reading and assigning parameters through distribution attributes."""

    def setup_method(self):
        self.gamma = GammaDistribution(shape=2.0, scale=3.0)

    def test_read_parameters(self):
        assert self.gamma.shape == 2.0
        assert self.gamma.scale == 3.0
        assert self.gamma.parameters.parameters == {"shape": 2.0, "scale": 3.0}

    def test_valid_assignment(self):
        self.gamma.shape = 4.0
        assert self.gamma.shape == 4.0
        assert self.gamma.mean == pytest.approx(12.0)

    def test_invalid_assignment_leaves_state(self):
        with pytest.raises(InvalidParameterError, match="0 < shape < inf"):
            self.gamma.shape = -1.0
        assert self.gamma.shape == 2.0
        assert self.gamma.scale == 3.0

    @pytest.mark.parametrize("value", [None, float("nan"), math.inf], ids=["none", "nan", "inf"])
    def test_rejected_values(self, value):
        with pytest.raises(InvalidParameterError):
            self.gamma.scale = value
        assert self.gamma.scale == 3.0

    def test_derived_setter(self):
        self.gamma.rate = 0.5
        assert self.gamma.scale == pytest.approx(2.0)

    def test_invalid_constructor_arguments(self):
        with pytest.raises(InvalidParameterError):
            GammaDistribution(shape=0.0, scale=1.0)

    def test_array_parameters_are_copies(self):
        categorical = CategoricalDistribution([0.2, 0.8])
        probabilities = categorical.probabilities
        probabilities[0] = 0.9
        np.testing.assert_allclose(categorical.probabilities, [0.2, 0.8])


class TestVectorConversion:
    def setup_method(self):
        self.gamma = GammaDistribution(shape=2.0, scale=3.0)

    def test_round_trip(self):
        vector = self.gamma.convert_to_vector()
        np.testing.assert_array_equal(vector, [2.0, 3.0])

        other = GammaDistribution()
        other.convert_from_vector(vector)
        assert other == self.gamma

    @pytest.mark.parametrize(
        "vector",
        [None, [1.0], [1.0, 2.0, 3.0], [-1.0, 2.0]],
        ids=["none", "short", "long", "invalid"],
    )
    def test_invalid_vector_leaves_state(self, vector):
        with pytest.raises(InvalidParameterError):
            self.gamma.convert_from_vector(vector)
        assert self.gamma == GammaDistribution(shape=2.0, scale=3.0)


class TestCopyAndEquality:
    def setup_method(self):
        self.gaussian = UnivariateGaussian(mean=1.0, variance=2.0)

    def test_copy_is_independent(self):
        clone = self.gaussian.copy()
        assert clone == self.gaussian
        assert clone is not self.gaussian

        clone.mean = 5.0
        assert self.gaussian.mean == 1.0
        assert clone != self.gaussian

    def test_copy_module_support(self):
        assert copy.copy(self.gaussian) == self.gaussian
        assert copy.deepcopy(self.gaussian) == self.gaussian

    def test_different_types_are_not_equal(self):
        assert self.gaussian != GammaDistribution(1.0, 2.0)
        assert self.gaussian != "Gaussian"

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(self.gaussian)

    def test_repr_lists_parameters(self):
        text = repr(self.gaussian)
        assert text.startswith("UnivariateGaussian(")
        assert "mean=1.0" in text
        assert "variance=2.0" in text

    def test_distribution_type(self):
        assert self.gaussian.distribution_type == UnivariateContinuous

    def test_from_parameters(self):
        rebuilt = UnivariateGaussian.from_parameters(self.gaussian.parameters)
        assert rebuilt == self.gaussian


class TestQueryMethod:
    def setup_method(self):
        self.gaussian = UnivariateGaussian(mean=1.0, variance=4.0)

    def test_moments(self):
        assert self.gaussian.calculate_characteristic(CharacteristicName.MEAN) == 1.0
        assert self.gaussian.calculate_characteristic(CharacteristicName.VAR) == 4.0

    @pytest.mark.parametrize(
        "name, value",
        [
            (CharacteristicName.PDF, 1.0),
            (CharacteristicName.LOG_PDF, 1.0),
            (CharacteristicName.CDF, 1.0),
            (CharacteristicName.PPF, 0.5),
        ],
        ids=["pdf", "log_pdf", "cdf", "ppf"],
    )
    def test_evaluators(self, name, value):
        method = self.gaussian.query_method(name)
        assert method(value) == getattr(self.gaussian, name.value)(value)

    def test_string_names(self):
        assert self.gaussian.query_method("cdf")(1.0) == pytest.approx(0.5)

    def test_missing_characteristic(self):
        with pytest.raises(RuntimeError, match="not available"):
            self.gaussian.query_method(CharacteristicName.PMF)
        with pytest.raises(RuntimeError, match="not available"):
            PoissonDistribution(2.0).query_method(CharacteristicName.PDF)

    def test_unknown_characteristic(self):
        with pytest.raises(ValueError):
            self.gaussian.query_method("skewness")


class TestSampling:
    def test_same_seed_same_sample(self):
        gaussian = UnivariateGaussian(0.0, 1.0)
        first = gaussian.sample(10, np.random.default_rng(3))
        second = gaussian.sample(10, np.random.default_rng(3))
        np.testing.assert_array_equal(first, second)

    def test_invalid_requests(self, rng):
        gaussian = UnivariateGaussian(0.0, 1.0)
        with pytest.raises(InvalidParameterError):
            gaussian.sample(-1, rng)
        with pytest.raises(InvalidParameterError):
            gaussian.sample(3, 42)

    def test_empty_sample(self, rng):
        assert GammaDistribution().sample(0, rng).shape == (0,)
