"""
Logistic distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import expit, logit

from pysatl_distributions.distributions.statistics import (
    mean_and_variance,
    weighted_mean_and_variance,
)
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


LOGISTIC = ParametricFamily(
    name=FamilyName.LOGISTIC,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["meanScale"],
)


@parametrization(family=LOGISTIC, name="meanScale")
class _MeanScale(Parametrization):
    mean: float
    scale: float

    @constraint(description="mean is finite")
    def check_mean_finite(self) -> bool:
        return math.isfinite(self.mean)

    @constraint(description="0 < scale < inf")
    def check_scale_positive(self) -> bool:
        return 0.0 < self.scale < math.inf


@LOGISTIC.bind
class LogisticDistribution(ContinuousUnivariateDistribution[_MeanScale]):
    """
    Logistic distribution with CDF ``1 / (1 + exp(-(x - m) / s))``.
    """

    mean = ParameterProperty("Mean (and median) of the distribution.")
    scale = ParameterProperty("Scale ``s``, strictly positive.")

    def __init__(self, mean: float = 0.0, scale: float = 1.0) -> None:
        super().__init__(_MeanScale(mean=mean, scale=scale))

    @property
    def variance(self) -> float:
        return (math.pi * self.parameters.scale) ** 2 / 3.0

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport()

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        s = self.parameters.scale
        z = -np.abs((x - self.parameters.mean) / s)
        return z - 2.0 * np.log1p(np.exp(z)) - math.log(s)

    def _cdf(self, x: NumericArray) -> NumericArray:
        return expit((x - self.parameters.mean) / self.parameters.scale)

    def _ppf(self, p: NumericArray) -> NumericArray:
        return self.parameters.mean + self.parameters.scale * logit(p)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.logistic(self.parameters.mean, self.parameters.scale, size=n)

    @staticmethod
    def estimator() -> LogisticMomentMatchingEstimator:
        return LogisticMomentMatchingEstimator()


class LogisticMomentMatchingEstimator:
    """Mean from the sample mean, ``scale = sqrt(3 variance) / pi``."""

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> LogisticDistribution:
        if weights is None:
            mean, variance = mean_and_variance(data)
        else:
            mean, variance = weighted_mean_and_variance(data, weights)
        return LogisticDistribution(mean, math.sqrt(3.0 * variance) / math.pi)


__all__ = ["LOGISTIC", "LogisticDistribution", "LogisticMomentMatchingEstimator"]
