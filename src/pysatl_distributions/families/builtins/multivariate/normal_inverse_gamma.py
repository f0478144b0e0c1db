"""
Normal-inverse-gamma distribution family implementation.

Observations are pairs ``(mean, variance)``: the joint conjugate prior of
the mean and variance of a univariate Gaussian.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import gammaln

from pysatl_distributions.distributions.strategies import check_sample_request
from pysatl_distributions.families.distribution import (
    MultivariateDistribution,
    ParameterProperty,
)
from pysatl_distributions.families.parametric_family import ParametricFamily
from pysatl_distributions.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_distributions.types import EuclideanDistributionType, FamilyName, Kind

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from pysatl_distributions.types import NumericArray


NORMAL_INVERSE_GAMMA = ParametricFamily(
    name=FamilyName.NORMAL_INVERSE_GAMMA,
    distr_type=EuclideanDistributionType(kind=Kind.CONTINUOUS, dimension=2),
    distr_parametrizations=["locationPrecisionShapeScale"],
)


@parametrization(family=NORMAL_INVERSE_GAMMA, name="locationPrecisionShapeScale")
class _LocationPrecisionShapeScale(Parametrization):
    location: float
    precision: float
    shape: float
    scale: float

    @constraint(description="-inf < location < inf")
    def check_location_finite(self) -> bool:
        return -math.inf < self.location < math.inf

    @constraint(description="0 < precision < inf")
    def check_precision_positive(self) -> bool:
        return 0.0 < self.precision < math.inf

    @constraint(description="0 < shape < inf")
    def check_shape_positive(self) -> bool:
        return 0.0 < self.shape < math.inf

    @constraint(description="0 < scale < inf")
    def check_scale_positive(self) -> bool:
        return 0.0 < self.scale < math.inf


@NORMAL_INVERSE_GAMMA.bind
class NormalInverseGammaDistribution(MultivariateDistribution[_LocationPrecisionShapeScale]):
    """
    Joint distribution of a Gaussian mean ``m`` and variance ``s``.

    The variance follows an inverse-gamma distribution with the given shape
    ``a`` and scale ``b``; given the variance, the mean is Gaussian with
    variance ``s / k``.

    Probability density function:
        f(m, s) = N(m | u, s / k) * b^a / Gamma(a) * s^(-a - 1) * exp(-b / s)

    Parameters
    ----------
    location : float, default 0.0
        Location ``u`` of the mean.
    precision : float, default 1.0
        Precision multiplier ``k`` of the mean, strictly positive.
    shape : float, default 1.0
        Inverse-gamma shape ``a``, strictly positive.
    scale : float, default 1.0
        Inverse-gamma scale ``b``, strictly positive.
    """

    location = ParameterProperty("Location of the mean.")
    precision = ParameterProperty("Precision multiplier of the mean, strictly positive.")
    shape = ParameterProperty("Shape of the variance, strictly positive.")
    scale = ParameterProperty("Scale of the variance, strictly positive.")

    def __init__(
        self,
        location: float = 0.0,
        precision: float = 1.0,
        shape: float = 1.0,
        scale: float = 1.0,
    ) -> None:
        super().__init__(
            _LocationPrecisionShapeScale(
                location=location, precision=precision, shape=shape, scale=scale
            )
        )

    @property
    def dimension(self) -> int:
        return 2

    @property
    def mean(self) -> NumericArray:
        """
        ``(u, b / (a - 1))``.

        The variance entry is infinite for ``a <= 1``; the mean entry is
        undefined (NaN) for ``a <= 1/2``.
        """
        u, a, b = self.parameters.location, self.parameters.shape, self.parameters.scale
        return np.array([u if a > 0.5 else math.nan, b / (a - 1.0) if a > 1.0 else math.inf])

    @property
    def variance(self) -> NumericArray:
        """
        Covariance matrix of ``(m, s)``.

        The two coordinates are uncorrelated. ``Var(m) = b / ((a - 1) k)``
        for ``a > 1`` and ``Var(s) = b^2 / ((a - 1)^2 (a - 2))`` for
        ``a > 2``; entries are infinite past those bounds and NaN where the
        mean itself is not finite.
        """
        k, a, b = self.parameters.precision, self.parameters.shape, self.parameters.scale
        if a <= 0.5:
            var_mean = math.nan
        elif a <= 1.0:
            var_mean = math.inf
        else:
            var_mean = b / ((a - 1.0) * k)

        if a <= 1.0:
            var_variance = math.nan
        elif a <= 2.0:
            var_variance = math.inf
        else:
            var_variance = b * b / ((a - 1.0) ** 2 * (a - 2.0))

        covariance = 0.0 if math.isfinite(var_mean) and math.isfinite(var_variance) else math.nan
        return np.array([[var_mean, covariance], [covariance, var_variance]])

    def log_pdf(self, x: ArrayLike) -> float | NumericArray:
        points, single = self._points(x)
        u, k = self.parameters.location, self.parameters.precision
        a, b = self.parameters.shape, self.parameters.scale
        m, s = points[:, 0], points[:, 1]

        values = np.full(points.shape[0], -math.inf)
        positive = s > 0.0
        m, s = m[positive], s[positive]
        log_gaussian = -0.5 * (np.log(2.0 * math.pi * s / k) + k * (m - u) ** 2 / s)
        log_inverse_gamma = a * math.log(b) - gammaln(a) - (a + 1.0) * np.log(s) - b / s
        values[positive] = log_gaussian + log_inverse_gamma
        return self._finish(values, single)

    def pdf(self, x: ArrayLike) -> float | NumericArray:
        points, single = self._points(x)
        return self._finish(np.exp(np.atleast_1d(self.log_pdf(points))), single)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        """Draw ``n`` pairs ``(mean, variance)`` as an array of shape ``(n, 2)``."""
        n = check_sample_request(n, rng)
        p = self.parameters
        variances = p.scale / rng.gamma(p.shape, 1.0, size=n)
        means = rng.normal(p.location, np.sqrt(variances / p.precision))
        return np.column_stack([means, variances])


__all__ = ["NORMAL_INVERSE_GAMMA", "NormalInverseGammaDistribution"]
