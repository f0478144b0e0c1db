"""
Chi-square distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import gammainc, gammaincinv, gammaln

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


CHI_SQUARE = ParametricFamily(
    name=FamilyName.CHI_SQUARE,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["degreesOfFreedom"],
)


@parametrization(family=CHI_SQUARE, name="degreesOfFreedom")
class _DegreesOfFreedom(Parametrization):
    degrees_of_freedom: float

    @constraint(description="0 < degrees_of_freedom < inf")
    def check_dof_positive(self) -> bool:
        return 0.0 < self.degrees_of_freedom < math.inf


@CHI_SQUARE.bind
class ChiSquareDistribution(ContinuousUnivariateDistribution[_DegreesOfFreedom]):
    """
    Chi-square distribution with ``k`` degrees of freedom.

    Equivalent to a Gamma distribution with shape ``k / 2`` and scale 2.
    """

    degrees_of_freedom = ParameterProperty("Degrees of freedom, strictly positive.")

    def __init__(self, degrees_of_freedom: float = 2.0) -> None:
        super().__init__(_DegreesOfFreedom(degrees_of_freedom=degrees_of_freedom))

    @property
    def mean(self) -> float:
        return self.parameters.degrees_of_freedom

    @property
    def variance(self) -> float:
        return 2.0 * self.parameters.degrees_of_freedom

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=0.0, left_closed=False)

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        half = 0.5 * self.parameters.degrees_of_freedom
        return (half - 1.0) * np.log(x) - 0.5 * x - gammaln(half) - half * math.log(2.0)

    def _cdf(self, x: NumericArray) -> NumericArray:
        return gammainc(0.5 * self.parameters.degrees_of_freedom, 0.5 * x)

    def _ppf(self, p: NumericArray) -> NumericArray:
        return 2.0 * gammaincinv(0.5 * self.parameters.degrees_of_freedom, p)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.chisquare(self.parameters.degrees_of_freedom, size=n)

    @staticmethod
    def estimator() -> ChiSquareMomentEstimator:
        return ChiSquareMomentEstimator()


class ChiSquareMomentEstimator:
    """Degrees of freedom equal to the (weighted) sample mean."""

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> ChiSquareDistribution:
        arr, w = validate_sample(data, weights)
        return ChiSquareDistribution(float(np.average(arr, weights=w)))


__all__ = ["CHI_SQUARE", "ChiSquareDistribution", "ChiSquareMomentEstimator"]
