"""
Exponential distribution family implementation.

Contains the Exponential family in rate and scale parameterizations and its
maximum-likelihood estimator.
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
from pysatl_distributions.exceptions import InvalidParameterError
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


EXPONENTIAL = ParametricFamily(
    name=FamilyName.EXPONENTIAL,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["rate", "scale"],
)
EXPONENTIAL.__doc__ = """
Exponential distribution.

Probability density function:
    f(x) = lambda * exp(-lambda x),  x >= 0
"""


@parametrization(family=EXPONENTIAL, name="rate")
class _Rate(Parametrization):
    """
    Rate parametrization of the Exponential distribution.

    Parameters
    ----------
    rate : float
        Rate ``lambda``, the inverse of the mean.
    """

    rate: float

    @constraint(description="0 < rate < inf")
    def check_rate_positive(self) -> bool:
        return 0.0 < self.rate < math.inf


@parametrization(family=EXPONENTIAL, name="scale")
class _Scale(Parametrization):
    """Scale parametrization ``beta = 1 / lambda``."""

    scale: float

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    def transform_to_base_parametrization(self) -> Parametrization:
        return _Rate(rate=1.0 / self.scale)


@EXPONENTIAL.bind
class ExponentialDistribution(ContinuousUnivariateDistribution[_Rate]):
    """
    Exponential distribution on ``[0, inf)``.

    Parameters
    ----------
    rate : float, default 1.0
        Rate, strictly positive.
    """

    rate = ParameterProperty("Rate, strictly positive.")

    def __init__(self, rate: float = 1.0) -> None:
        super().__init__(_Rate(rate=rate))

    @property
    def mean(self) -> float:
        return 1.0 / self.parameters.rate

    @property
    def variance(self) -> float:
        return 1.0 / self.parameters.rate**2

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=0.0)

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        rate = self.parameters.rate
        return math.log(rate) - rate * x

    def _cdf(self, x: NumericArray) -> NumericArray:
        return -np.expm1(-self.parameters.rate * x)

    def _ppf(self, p: NumericArray) -> NumericArray:
        return -np.log1p(-p) / self.parameters.rate

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.exponential(1.0 / self.parameters.rate, size=n)

    @staticmethod
    def estimator() -> ExponentialMaximumLikelihoodEstimator:
        return ExponentialMaximumLikelihoodEstimator()


class ExponentialMaximumLikelihoodEstimator:
    """Rate estimate ``1 / mean`` of non-negative observations."""

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> ExponentialDistribution:
        arr, w = validate_sample(data, weights)
        if np.any(arr < 0.0):
            raise InvalidParameterError("Exponential observations must be non-negative")
        mean = float(np.average(arr, weights=w))
        return ExponentialDistribution(1.0 / mean if mean > 0.0 else math.inf)


__all__ = ["EXPONENTIAL", "ExponentialDistribution", "ExponentialMaximumLikelihoodEstimator"]
