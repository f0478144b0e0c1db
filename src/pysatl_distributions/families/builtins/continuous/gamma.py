"""
Gamma distribution family implementation.

Contains the Gamma family in shape/scale and shape/rate parameterizations
and its moment-matching estimator.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import gammainc, gammaincinv, gammaln

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


GAMMA = ParametricFamily(
    name=FamilyName.GAMMA,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["shapeScale", "shapeRate"],
)
GAMMA.__doc__ = """
Gamma distribution.

Probability density function:
    f(x) = x^(k-1) exp(-x / theta) / (Gamma(k) theta^k),  x > 0
"""


@parametrization(family=GAMMA, name="shapeScale")
class _ShapeScale(Parametrization):
    """
    Base parametrization of the Gamma distribution.

    Parameters
    ----------
    shape : float
        Shape ``k``.
    scale : float
        Scale ``theta``.
    """

    shape: float
    scale: float

    @constraint(description="0 < shape < inf")
    def check_shape_positive(self) -> bool:
        return 0.0 < self.shape < math.inf

    @constraint(description="0 < scale < inf")
    def check_scale_positive(self) -> bool:
        return 0.0 < self.scale < math.inf


@parametrization(family=GAMMA, name="shapeRate")
class _ShapeRate(Parametrization):
    """Shape ``k`` and rate ``beta = 1 / theta``."""

    shape: float
    rate: float

    @constraint(description="rate > 0")
    def check_rate_positive(self) -> bool:
        return self.rate > 0

    def transform_to_base_parametrization(self) -> Parametrization:
        return _ShapeScale(shape=self.shape, scale=1.0 / self.rate)


@GAMMA.bind
class GammaDistribution(ContinuousUnivariateDistribution[_ShapeScale]):
    """
    Gamma distribution.

    The density is 0 for ``x <= 0``.

    Parameters
    ----------
    shape : float, default 1.0
        Shape ``k > 0``.
    scale : float, default 1.0
        Scale ``theta > 0``.
    """

    DEFAULT_SHAPE = 1.0
    DEFAULT_SCALE = 1.0

    shape = ParameterProperty("Shape parameter, strictly positive.")
    scale = ParameterProperty("Scale parameter, strictly positive.")

    def __init__(self, shape: float = DEFAULT_SHAPE, scale: float = DEFAULT_SCALE) -> None:
        super().__init__(_ShapeScale(shape=shape, scale=scale))

    @property
    def rate(self) -> float:
        """Inverse scale."""
        return 1.0 / self.parameters.scale

    @rate.setter
    def rate(self, value: float) -> None:
        self._update(scale=1.0 / value if value != 0 else math.inf)

    @property
    def mean(self) -> float:
        return self.parameters.shape * self.parameters.scale

    @property
    def variance(self) -> float:
        return self.parameters.shape * self.parameters.scale**2

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=0.0, left_closed=False)

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        k, theta = self.parameters.shape, self.parameters.scale
        return (k - 1.0) * np.log(x) - x / theta - gammaln(k) - k * math.log(theta)

    def _cdf(self, x: NumericArray) -> NumericArray:
        return gammainc(self.parameters.shape, x / self.parameters.scale)

    def _ppf(self, p: NumericArray) -> NumericArray:
        return self.parameters.scale * gammaincinv(self.parameters.shape, p)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.gamma(self.parameters.shape, self.parameters.scale, size=n)

    @staticmethod
    def estimator() -> GammaMomentMatchingEstimator:
        return GammaMomentMatchingEstimator()


class GammaMomentMatchingEstimator:
    """
    Fit a Gamma distribution by matching the first two moments.

    ``scale = variance / mean`` and ``shape = mean**2 / variance``.
    """

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> GammaDistribution:
        if weights is None:
            mean, variance = mean_and_variance(data)
        else:
            mean, variance = weighted_mean_and_variance(data, weights)
        scale = variance / mean if mean != 0.0 else math.inf
        shape = mean * mean / variance if variance != 0.0 else math.inf
        return GammaDistribution(shape, scale)


__all__ = ["GAMMA", "GammaDistribution", "GammaMomentMatchingEstimator"]
