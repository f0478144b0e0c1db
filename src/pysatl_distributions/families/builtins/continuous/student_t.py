"""
Student-t distribution family implementation.

The family is parameterised by degrees of freedom, location and precision
(inverse squared scale).
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import gammaln, stdtr, stdtrit

from pysatl_distributions.config import DEFAULT_SETTINGS
from pysatl_distributions.distributions.statistics import (
    kurtosis,
    mean_and_variance,
    weighted_kurtosis,
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


STUDENT_T = ParametricFamily(
    name=FamilyName.STUDENT_T,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["dofLocationPrecision"],
)


@parametrization(family=STUDENT_T, name="dofLocationPrecision")
class _DofLocationPrecision(Parametrization):
    degrees_of_freedom: float
    location: float
    precision: float

    @constraint(description="0 < degrees_of_freedom < inf")
    def check_dof_positive(self) -> bool:
        return 0.0 < self.degrees_of_freedom < math.inf

    @constraint(description="location is finite")
    def check_location_finite(self) -> bool:
        return math.isfinite(self.location)

    @constraint(description="0 < precision < inf")
    def check_precision_positive(self) -> bool:
        return 0.0 < self.precision < math.inf


@STUDENT_T.bind
class StudentTDistribution(ContinuousUnivariateDistribution[_DofLocationPrecision]):
    """
    Location-scale Student-t distribution.

    Parameters
    ----------
    degrees_of_freedom : float, default 1.0
        Degrees of freedom ``v``, strictly positive.
    location : float, default 0.0
        Center of the distribution.
    precision : float, default 1.0
        Inverse squared scale, strictly positive.

    Notes
    -----
    The mean is ``nan`` (undefined) for ``v <= 1``; the variance is ``inf``
    for ``1 < v <= 2`` and ``nan`` for ``v <= 1``.
    """

    degrees_of_freedom = ParameterProperty("Degrees of freedom, strictly positive.")
    location = ParameterProperty("Center of the distribution.")
    precision = ParameterProperty("Inverse squared scale, strictly positive.")

    def __init__(
        self, degrees_of_freedom: float = 1.0, location: float = 0.0, precision: float = 1.0
    ) -> None:
        super().__init__(
            _DofLocationPrecision(
                degrees_of_freedom=degrees_of_freedom, location=location, precision=precision
            )
        )

    @property
    def mean(self) -> float:
        return self.parameters.location if self.parameters.degrees_of_freedom > 1.0 else math.nan

    @property
    def variance(self) -> float:
        v = self.parameters.degrees_of_freedom
        if v <= 1.0:
            return math.nan
        if v <= 2.0:
            return math.inf
        return v / (v - 2.0) / self.parameters.precision

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport()

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        v, loc, lam = (
            self.parameters.degrees_of_freedom,
            self.parameters.location,
            self.parameters.precision,
        )
        norm = gammaln(0.5 * (v + 1.0)) - gammaln(0.5 * v) + 0.5 * math.log(lam / (math.pi * v))
        return norm - 0.5 * (v + 1.0) * np.log1p(lam * (x - loc) ** 2 / v)

    def _cdf(self, x: NumericArray) -> NumericArray:
        p = self.parameters
        return stdtr(p.degrees_of_freedom, (x - p.location) * math.sqrt(p.precision))

    def _ppf(self, q: NumericArray) -> NumericArray:
        p = self.parameters
        return p.location + stdtrit(p.degrees_of_freedom, q) / math.sqrt(p.precision)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        p = self.parameters
        return p.location + rng.standard_t(p.degrees_of_freedom, size=n) / math.sqrt(p.precision)

    @staticmethod
    def estimator() -> StudentTMomentEstimator:
        return StudentTMomentEstimator()


class StudentTMomentEstimator:
    """
    Moment-based fit using the sample excess kurtosis ``k``.

    ``dof = 6 / (|k| + default_variance) + 4`` and
    ``precision = dof / (variance (dof - 2))``; the location is the sample
    mean.
    """

    def __init__(self, default_variance: float = DEFAULT_SETTINGS.default_variance) -> None:
        self.default_variance = default_variance

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> StudentTDistribution:
        if weights is None:
            mean, variance = mean_and_variance(data)
            excess = kurtosis(data)
        else:
            mean, variance = weighted_mean_and_variance(data, weights)
            excess = weighted_kurtosis(data, weights)
        if math.isnan(excess):
            excess = 0.0
        dof = 6.0 / (abs(excess) + self.default_variance) + 4.0
        precision = dof / (variance * (dof - 2.0)) if variance > 0.0 else math.inf
        return StudentTDistribution(dof, mean, precision)


__all__ = ["STUDENT_T", "StudentTDistribution", "StudentTMomentEstimator"]
