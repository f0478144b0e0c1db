"""
Cauchy distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

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
    from pysatl_distributions.types import NumericArray


CAUCHY = ParametricFamily(
    name=FamilyName.CAUCHY,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["locationScale"],
)


@parametrization(family=CAUCHY, name="locationScale")
class _LocationScale(Parametrization):
    location: float
    scale: float

    @constraint(description="location is finite")
    def check_location_finite(self) -> bool:
        return math.isfinite(self.location)

    @constraint(description="0 < scale < inf")
    def check_scale_positive(self) -> bool:
        return 0.0 < self.scale < math.inf


@CAUCHY.bind
class CauchyDistribution(ContinuousUnivariateDistribution[_LocationScale]):
    """
    Cauchy distribution.

    Neither the mean nor the variance exists; both are reported as ``nan``.
    """

    location = ParameterProperty("Median of the distribution.")
    scale = ParameterProperty("Half width at half maximum, strictly positive.")

    def __init__(self, location: float = 0.0, scale: float = 1.0) -> None:
        super().__init__(_LocationScale(location=location, scale=scale))

    @property
    def mean(self) -> float:
        return math.nan

    @property
    def variance(self) -> float:
        return math.nan

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport()

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        s = self.parameters.scale
        z = (x - self.parameters.location) / s
        return -math.log(math.pi * s) - np.log1p(z * z)

    def _cdf(self, x: NumericArray) -> NumericArray:
        z = (x - self.parameters.location) / self.parameters.scale
        return 0.5 + np.arctan(z) / math.pi

    def _ppf(self, p: NumericArray) -> NumericArray:
        return self.parameters.location + self.parameters.scale * np.tan(math.pi * (p - 0.5))

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return self.parameters.location + self.parameters.scale * rng.standard_cauchy(size=n)


__all__ = ["CAUCHY", "CauchyDistribution"]
