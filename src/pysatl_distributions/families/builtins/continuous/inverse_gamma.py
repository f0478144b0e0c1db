"""
Inverse-Gamma distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import gammaincc, gammainccinv, gammaln

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


INVERSE_GAMMA = ParametricFamily(
    name=FamilyName.INVERSE_GAMMA,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["shapeScale"],
)


@parametrization(family=INVERSE_GAMMA, name="shapeScale")
class _ShapeScale(Parametrization):
    shape: float
    scale: float

    @constraint(description="0 < shape < inf")
    def check_shape_positive(self) -> bool:
        return 0.0 < self.shape < math.inf

    @constraint(description="0 < scale < inf")
    def check_scale_positive(self) -> bool:
        return 0.0 < self.scale < math.inf


@INVERSE_GAMMA.bind
class InverseGammaDistribution(ContinuousUnivariateDistribution[_ShapeScale]):
    """
    Inverse-Gamma distribution: the law of ``1 / X`` for a Gamma ``X``.

    Probability density function:
        f(x) = b^a / Gamma(a) * x^(-a-1) * exp(-b / x),  x > 0

    The mean is infinite for ``shape <= 1`` and the variance for
    ``shape <= 2``.
    """

    shape = ParameterProperty("Shape ``a``, strictly positive.")
    scale = ParameterProperty("Scale ``b``, strictly positive.")

    def __init__(self, shape: float = 3.0, scale: float = 1.0) -> None:
        super().__init__(_ShapeScale(shape=shape, scale=scale))

    @property
    def mean(self) -> float:
        a, b = self.parameters.shape, self.parameters.scale
        return b / (a - 1.0) if a > 1.0 else math.inf

    @property
    def variance(self) -> float:
        a, b = self.parameters.shape, self.parameters.scale
        if a <= 2.0:
            return math.inf
        return b * b / ((a - 1.0) ** 2 * (a - 2.0))

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=0.0, left_closed=False)

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        a, b = self.parameters.shape, self.parameters.scale
        return a * math.log(b) - gammaln(a) - (a + 1.0) * np.log(x) - b / x

    def _cdf(self, x: NumericArray) -> NumericArray:
        return gammaincc(self.parameters.shape, self.parameters.scale / x)

    def _ppf(self, p: NumericArray) -> NumericArray:
        return self.parameters.scale / gammainccinv(self.parameters.shape, p)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return self.parameters.scale / rng.gamma(self.parameters.shape, 1.0, size=n)

    @staticmethod
    def estimator() -> InverseGammaMomentMatchingEstimator:
        return InverseGammaMomentMatchingEstimator()


class InverseGammaMomentMatchingEstimator:
    """
    Fit by matching mean ``m`` and variance ``v``.

    ``shape = m**2 / v + 2`` and ``scale = m (shape - 1)``.
    """

    def learn(
        self, data: ArrayLike, weights: ArrayLike | None = None
    ) -> InverseGammaDistribution:
        if weights is None:
            mean, variance = mean_and_variance(data)
        else:
            mean, variance = weighted_mean_and_variance(data, weights)
        shape = mean * mean / variance + 2.0 if variance > 0.0 else math.inf
        return InverseGammaDistribution(shape, mean * (shape - 1.0))


__all__ = ["INVERSE_GAMMA", "InverseGammaDistribution", "InverseGammaMomentMatchingEstimator"]
