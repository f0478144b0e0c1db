"""
Log-normal distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import ndtr, ndtri

from pysatl_distributions.distributions.statistics import (
    mean_and_variance,
    validate_sample,
    weighted_mean_and_variance,
)
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


LOG_NORMAL = ParametricFamily(
    name=FamilyName.LOG_NORMAL,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["logMeanLogVariance"],
)


@parametrization(family=LOG_NORMAL, name="logMeanLogVariance")
class _LogMeanLogVariance(Parametrization):
    """
    Mean and variance of the underlying Gaussian ``log X``.

    Parameters
    ----------
    log_normal_mean : float
        Mean of ``log X``.
    log_normal_variance : float
        Variance of ``log X``.
    """

    log_normal_mean: float
    log_normal_variance: float

    @constraint(description="log_normal_mean is finite")
    def check_mean_finite(self) -> bool:
        return math.isfinite(self.log_normal_mean)

    @constraint(description="0 < log_normal_variance < inf")
    def check_variance_positive(self) -> bool:
        return 0.0 < self.log_normal_variance < math.inf


@LOG_NORMAL.bind
class LogNormalDistribution(ContinuousUnivariateDistribution[_LogMeanLogVariance]):
    """
    Log-normal distribution: ``X = exp(Y)`` with Gaussian ``Y``.

    Parameters
    ----------
    log_normal_mean : float, default 0.0
        Mean of ``log X``.
    log_normal_variance : float, default 1.0
        Variance of ``log X``, strictly positive.
    """

    log_normal_mean = ParameterProperty("Mean of the underlying Gaussian.")
    log_normal_variance = ParameterProperty("Variance of the underlying Gaussian.")

    def __init__(self, log_normal_mean: float = 0.0, log_normal_variance: float = 1.0) -> None:
        super().__init__(
            _LogMeanLogVariance(
                log_normal_mean=log_normal_mean, log_normal_variance=log_normal_variance
            )
        )

    @property
    def mean(self) -> float:
        p = self.parameters
        return math.exp(p.log_normal_mean + 0.5 * p.log_normal_variance)

    @property
    def variance(self) -> float:
        p = self.parameters
        return math.expm1(p.log_normal_variance) * math.exp(
            2.0 * p.log_normal_mean + p.log_normal_variance
        )

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=0.0, left_closed=False)

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        m, v = self.parameters.log_normal_mean, self.parameters.log_normal_variance
        logx = np.log(x)
        return -((logx - m) ** 2) / (2.0 * v) - logx - 0.5 * math.log(2.0 * math.pi * v)

    def _cdf(self, x: NumericArray) -> NumericArray:
        p = self.parameters
        return ndtr((np.log(x) - p.log_normal_mean) / math.sqrt(p.log_normal_variance))

    def _ppf(self, q: NumericArray) -> NumericArray:
        p = self.parameters
        return np.exp(p.log_normal_mean + math.sqrt(p.log_normal_variance) * ndtri(q))

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        p = self.parameters
        return rng.lognormal(p.log_normal_mean, math.sqrt(p.log_normal_variance), size=n)

    @staticmethod
    def estimator() -> LogNormalMaximumLikelihoodEstimator:
        return LogNormalMaximumLikelihoodEstimator()


class LogNormalMaximumLikelihoodEstimator:
    """
    Gaussian fit of the logarithms of the observations.

    Unweighted observations must be positive. With weights, non-positive
    observations are given zero weight.
    """

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> LogNormalDistribution:
        arr, w = validate_sample(data, weights)
        positive = arr > 0.0
        if w is None:
            if not np.all(positive):
                raise InvalidParameterError("Log-normal observations must be positive")
            mean, variance = mean_and_variance(np.log(arr))
        else:
            logs = np.log(np.where(positive, arr, 1.0))
            mean, variance = weighted_mean_and_variance(logs, np.where(positive, w, 0.0))
        return LogNormalDistribution(mean, variance)


__all__ = ["LOG_NORMAL", "LogNormalDistribution", "LogNormalMaximumLikelihoodEstimator"]
