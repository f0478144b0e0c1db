"""
Uniform distribution family implementation.

Contains the Uniform family with bounds and mean/width parameterizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_distributions.distributions.statistics import validate_sample
from pysatl_distributions.distributions.strategies import check_sample_request
from pysatl_distributions.distributions.support import ContinuousSupport
from pysatl_distributions.families.distribution import (
    ContinuousUnivariateDistribution,
    ParameterProperty,
)
from pysatl_distributions.families.parametric_family import ParametricFamily
from pysatl_distributions.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_distributions.types import FamilyName, UnivariateContinuous

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from pysatl_distributions.types import NumericArray


UNIFORM = ParametricFamily(
    name=FamilyName.UNIFORM,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["bounds", "meanWidth"],
)
UNIFORM.__doc__ = """
Uniform (continuous) distribution.

Probability density function:
    f(x) = 1 / (max_support - min_support) for x in [min_support, max_support], 0 otherwise
"""


@parametrization(family=UNIFORM, name="bounds")
class _Bounds(Parametrization):
    """
    Standard parametrization of uniform distribution.

    Parameters
    ----------
    min_support : float
        Lower bound of the distribution.
    max_support : float
        Upper bound of the distribution.
    """

    min_support: float
    max_support: float

    @constraint(description="bounds are finite")
    def check_bounds_finite(self) -> bool:
        return math.isfinite(self.min_support) and math.isfinite(self.max_support)

    @constraint(description="min_support < max_support")
    def check_lower_less_than_upper(self) -> bool:
        return self.min_support < self.max_support


@parametrization(family=UNIFORM, name="meanWidth")
class _MeanWidth(Parametrization):
    """
    Mean-width parametrization of uniform distribution.

    Parameters
    ----------
    mean : float
        Center of the interval.
    width : float
        Length of the interval.
    """

    mean: float
    width: float

    @constraint(description="width > 0")
    def check_width_positive(self) -> bool:
        return self.width > 0

    def transform_to_base_parametrization(self) -> Parametrization:
        half = 0.5 * self.width
        return _Bounds(min_support=self.mean - half, max_support=self.mean + half)


@UNIFORM.bind
class UniformDistribution(ContinuousUnivariateDistribution[_Bounds]):
    """
    Continuous uniform distribution on ``[min_support, max_support]``.

    Parameters
    ----------
    min_support : float, default 0.0
        Lower bound.
    max_support : float, default 1.0
        Upper bound, strictly greater than ``min_support``.
    """

    min_support = ParameterProperty("Lower bound of the support.")
    max_support = ParameterProperty("Upper bound of the support.")

    def __init__(self, min_support: float = 0.0, max_support: float = 1.0) -> None:
        super().__init__(_Bounds(min_support=min_support, max_support=max_support))

    def set_bounds(self, min_support: float, max_support: float) -> None:
        """Replace both bounds at once."""
        self._update(min_support=min_support, max_support=max_support)

    @property
    def mean(self) -> float:
        return 0.5 * (self.parameters.min_support + self.parameters.max_support)

    @property
    def variance(self) -> float:
        width = self.parameters.max_support - self.parameters.min_support
        return width * width / 12.0

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=self.parameters.min_support, right=self.parameters.max_support)

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        width = self.parameters.max_support - self.parameters.min_support
        return np.full_like(x, -math.log(width))

    def _cdf(self, x: NumericArray) -> NumericArray:
        lo, hi = self.parameters.min_support, self.parameters.max_support
        return (x - lo) / (hi - lo)

    def _ppf(self, p: NumericArray) -> NumericArray:
        lo, hi = self.parameters.min_support, self.parameters.max_support
        return lo + p * (hi - lo)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.uniform(self.parameters.min_support, self.parameters.max_support, size=n)

    @staticmethod
    def estimator() -> UniformMaximumLikelihoodEstimator:
        return UniformMaximumLikelihoodEstimator()


class UniformMaximumLikelihoodEstimator:
    """
    Bounds from the smallest and largest observation.

    Observations with zero weight are ignored.
    """

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> UniformDistribution:
        arr, w = validate_sample(data, weights)
        if w is not None:
            arr = arr[w > 0.0]
        return UniformDistribution(float(arr.min()), float(arr.max()))


__all__ = ["UNIFORM", "UniformDistribution", "UniformMaximumLikelihoodEstimator"]
