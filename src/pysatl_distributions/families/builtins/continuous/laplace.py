"""
Laplace distribution family implementation.
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


LAPLACE = ParametricFamily(
    name=FamilyName.LAPLACE,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["meanScale"],
)


@parametrization(family=LAPLACE, name="meanScale")
class _MeanScale(Parametrization):
    mean: float
    scale: float

    @constraint(description="mean is finite")
    def check_mean_finite(self) -> bool:
        return math.isfinite(self.mean)

    @constraint(description="0 < scale < inf")
    def check_scale_positive(self) -> bool:
        return 0.0 < self.scale < math.inf


@LAPLACE.bind
class LaplaceDistribution(ContinuousUnivariateDistribution[_MeanScale]):
    """
    Laplace (double exponential) distribution.

    Probability density function:
        f(x) = exp(-|x - m| / b) / (2 b)
    """

    mean = ParameterProperty("Mean (and median) of the distribution.")
    scale = ParameterProperty("Scale ``b``, strictly positive.")

    def __init__(self, mean: float = 0.0, scale: float = 1.0) -> None:
        super().__init__(_MeanScale(mean=mean, scale=scale))

    @property
    def variance(self) -> float:
        return 2.0 * self.parameters.scale**2

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport()

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        b = self.parameters.scale
        return -np.abs(x - self.parameters.mean) / b - math.log(2.0 * b)

    def _cdf(self, x: NumericArray) -> NumericArray:
        z = (x - self.parameters.mean) / self.parameters.scale
        return np.where(z < 0.0, 0.5 * np.exp(np.minimum(z, 0.0)), 1.0 - 0.5 * np.exp(-np.abs(z)))

    def _ppf(self, p: NumericArray) -> NumericArray:
        m, b = self.parameters.mean, self.parameters.scale
        return np.where(p < 0.5, m + b * np.log(2.0 * p), m - b * np.log(2.0 - 2.0 * p))

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.laplace(self.parameters.mean, self.parameters.scale, size=n)

    @staticmethod
    def estimator() -> LaplaceMaximumLikelihoodEstimator:
        return LaplaceMaximumLikelihoodEstimator()


class LaplaceMaximumLikelihoodEstimator:
    """
    Fit by the (weighted) sample mean and the mean absolute deviation from it.
    """

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> LaplaceDistribution:
        arr, w = validate_sample(data, weights)
        mean = float(np.average(arr, weights=w))
        scale = float(np.average(np.abs(arr - mean), weights=w))
        return LaplaceDistribution(mean, scale)


__all__ = ["LAPLACE", "LaplaceDistribution", "LaplaceMaximumLikelihoodEstimator"]
