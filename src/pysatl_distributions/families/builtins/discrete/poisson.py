"""
Poisson distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import gammaincc, gammaln, xlogy

from pysatl_distributions.distributions.numerics import integer_mask
from pysatl_distributions.distributions.statistics import validate_sample
from pysatl_distributions.distributions.strategies import check_sample_request
from pysatl_distributions.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.families.distribution import (
    DiscreteUnivariateDistribution,
    ParameterProperty,
)
from pysatl_distributions.families.parametric_family import ParametricFamily
from pysatl_distributions.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_distributions.types import FamilyName, UnivariateDiscrete

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from pysatl_distributions.types import NumericArray


POISSON = ParametricFamily(
    name=FamilyName.POISSON,
    distr_type=UnivariateDiscrete,
    distr_parametrizations=["rate"],
)


@parametrization(family=POISSON, name="rate")
class _Rate(Parametrization):
    rate: float

    @constraint(description="0 < rate < inf")
    def check_rate_positive(self) -> bool:
        return 0.0 < self.rate < math.inf


@POISSON.bind
class PoissonDistribution(DiscreteUnivariateDistribution[_Rate]):
    """
    Poisson distribution over ``0, 1, 2, ...``.

    Parameters
    ----------
    rate : float, default 1.0
        Expected count, strictly positive.
    """

    rate = ParameterProperty("Expected count, strictly positive.")

    def __init__(self, rate: float = 1.0) -> None:
        super().__init__(_Rate(rate=rate))

    @property
    def mean(self) -> float:
        return self.parameters.rate

    @property
    def variance(self) -> float:
        return self.parameters.rate

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(min_k=0)

    def _log_pmf(self, k: NumericArray) -> NumericArray:
        rate = self.parameters.rate
        return xlogy(k, rate) - rate - gammaln(k + 1.0)

    def _cdf(self, k: NumericArray) -> NumericArray:
        return gammaincc(k + 1.0, self.parameters.rate)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.poisson(self.parameters.rate, size=n)

    @staticmethod
    def estimator() -> PoissonMaximumLikelihoodEstimator:
        return PoissonMaximumLikelihoodEstimator()


class PoissonMaximumLikelihoodEstimator:
    """Rate equal to the (weighted) sample mean of non-negative counts."""

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> PoissonDistribution:
        arr, w = validate_sample(data, weights)
        if not np.all(integer_mask(arr)) or np.any(arr < 0.0):
            raise InvalidParameterError("Poisson observations must be non-negative integers")
        return PoissonDistribution(float(np.average(arr, weights=w)))


__all__ = ["POISSON", "PoissonDistribution", "PoissonMaximumLikelihoodEstimator"]
