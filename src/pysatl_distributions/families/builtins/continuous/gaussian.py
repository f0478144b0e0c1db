"""
Univariate Gaussian distribution family implementation.

Contains the Gaussian family with mean/variance, mean/standard deviation and
mean/precision parameterizations, its maximum-likelihood estimators and the
incremental sufficient statistic.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import ndtr, ndtri

from pysatl_distributions.config import DEFAULT_SETTINGS
from pysatl_distributions.distributions.statistics import (
    IncrementalSummaryStatistics,
    mean_and_variance,
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

    from pysatl_distributions.types import Number, NumericArray


GAUSSIAN = ParametricFamily(
    name=FamilyName.GAUSSIAN,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["meanVariance", "meanStd", "meanPrecision"],
)
GAUSSIAN.__doc__ = """
Univariate Gaussian (normal) distribution.

Probability density function:
    f(x) = 1/sqrt(2 pi v) * exp(-(x - m)^2 / (2 v))
"""


@parametrization(family=GAUSSIAN, name="meanVariance")
class _MeanVariance(Parametrization):
    """
    Base parametrization of the Gaussian distribution.

    Parameters
    ----------
    mean : float
        Mean of the distribution.
    variance : float
        Variance of the distribution.
    """

    mean: float
    variance: float

    @constraint(description="mean is finite")
    def check_mean_finite(self) -> bool:
        return math.isfinite(self.mean)

    @constraint(description="0 < variance < inf")
    def check_variance_positive(self) -> bool:
        return 0.0 < self.variance < math.inf


@parametrization(family=GAUSSIAN, name="meanStd")
class _MeanStd(Parametrization):
    """Mean and standard deviation ``sigma = sqrt(variance)``."""

    mean: float
    std: float

    @constraint(description="std > 0")
    def check_std_positive(self) -> bool:
        return self.std > 0

    def transform_to_base_parametrization(self) -> Parametrization:
        return _MeanVariance(mean=self.mean, variance=self.std**2)


@parametrization(family=GAUSSIAN, name="meanPrecision")
class _MeanPrecision(Parametrization):
    """Mean and precision ``tau = 1 / variance``."""

    mean: float
    precision: float

    @constraint(description="precision > 0")
    def check_precision_positive(self) -> bool:
        return self.precision > 0

    def transform_to_base_parametrization(self) -> Parametrization:
        return _MeanVariance(mean=self.mean, variance=1.0 / self.precision)


@GAUSSIAN.bind
class UnivariateGaussian(ContinuousUnivariateDistribution[_MeanVariance]):
    """
    Univariate Gaussian distribution.

    Parameters
    ----------
    mean : float, default 0.0
        Mean of the distribution.
    variance : float, default 1.0
        Variance of the distribution, strictly positive.
    """

    DEFAULT_MEAN = 0.0
    DEFAULT_VARIANCE = 1.0

    mean = ParameterProperty("Mean of the distribution.")
    variance = ParameterProperty("Variance of the distribution, strictly positive.")

    def __init__(self, mean: float = DEFAULT_MEAN, variance: float = DEFAULT_VARIANCE) -> None:
        super().__init__(_MeanVariance(mean=mean, variance=variance))

    @property
    def standard_deviation(self) -> float:
        return math.sqrt(self.parameters.variance)

    @property
    def precision(self) -> float:
        return 1.0 / self.parameters.variance

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport()

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        mean, variance = self.parameters.mean, self.parameters.variance
        return -0.5 * (x - mean) ** 2 / variance - 0.5 * math.log(2.0 * math.pi * variance)

    def _cdf(self, x: NumericArray) -> NumericArray:
        return ndtr((x - self.parameters.mean) / self.standard_deviation)

    def _ppf(self, p: NumericArray) -> NumericArray:
        return self.parameters.mean + self.standard_deviation * ndtri(p)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.normal(self.parameters.mean, self.standard_deviation, size=n)

    def times(self, other: UnivariateGaussian) -> UnivariateGaussian:
        """
        Normalised product of two Gaussian densities.

        Returns
        -------
        UnivariateGaussian
            Gaussian proportional to ``self.pdf(x) * other.pdf(x)``.
        """
        v1, v2 = self.parameters.variance, other.parameters.variance
        m1, m2 = self.parameters.mean, other.parameters.mean
        total = v1 + v2
        return UnivariateGaussian((m1 * v2 + m2 * v1) / total, v1 * v2 / total)

    def convolve(self, other: UnivariateGaussian) -> UnivariateGaussian:
        """Distribution of the sum of two independent Gaussian variables."""
        return UnivariateGaussian(
            self.parameters.mean + other.parameters.mean,
            self.parameters.variance + other.parameters.variance,
        )

    @staticmethod
    def estimator() -> GaussianMaximumLikelihoodEstimator:
        return GaussianMaximumLikelihoodEstimator()


class GaussianMaximumLikelihoodEstimator:
    """
    Maximum-likelihood fit of a univariate Gaussian.

    Without weights the variance is the unbiased sample variance; with
    weights it is divided by the total absolute weight. ``default_variance``
    is added in both cases so that degenerate samples still yield a valid
    distribution.
    """

    def __init__(self, default_variance: float = DEFAULT_SETTINGS.default_variance) -> None:
        if not default_variance >= 0.0:
            raise InvalidParameterError("default_variance must be non-negative")
        self.default_variance = default_variance

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> UnivariateGaussian:
        if weights is None:
            mean, variance = mean_and_variance(data)
        else:
            mean, variance = weighted_mean_and_variance(data, weights)
        return UnivariateGaussian(mean, variance + self.default_variance)


class GaussianSufficientStatistic(IncrementalSummaryStatistics):
    """
    Running summary that converts to a Gaussian.

    Parameters
    ----------
    default_variance : float
        Variance added when converting to a distribution.
    """

    __slots__ = ("default_variance",)

    def __init__(self, default_variance: float = DEFAULT_SETTINGS.default_variance) -> None:
        super().__init__()
        self.default_variance = default_variance

    def to_distribution(self) -> UnivariateGaussian:
        """
        Gaussian with the summarised mean and unbiased variance.

        Raises
        ------
        InvalidParameterError
            If no observation has been added.
        """
        if self.count == 0:
            raise InvalidParameterError("Cannot build a distribution from an empty statistic")
        return UnivariateGaussian(self.mean, self.variance + self.default_variance)


class GaussianIncrementalEstimator:
    """Incremental learner of :class:`GaussianSufficientStatistic`."""

    def __init__(self, default_variance: float = DEFAULT_SETTINGS.default_variance) -> None:
        self.default_variance = default_variance

    def create_initial(self) -> GaussianSufficientStatistic:
        return GaussianSufficientStatistic(self.default_variance)

    def update(self, statistic: GaussianSufficientStatistic, value: Number) -> None:
        statistic.update(value)

    def learn(self, data: ArrayLike) -> GaussianSufficientStatistic:
        statistic = self.create_initial()
        statistic.update_all(data)
        return statistic


__all__ = [
    "GAUSSIAN",
    "UnivariateGaussian",
    "GaussianMaximumLikelihoodEstimator",
    "GaussianSufficientStatistic",
    "GaussianIncrementalEstimator",
]
