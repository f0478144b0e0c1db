"""
Shifted Pareto distribution family implementation.
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


PARETO = ParametricFamily(
    name=FamilyName.PARETO,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["shapeScaleShift"],
)


@parametrization(family=PARETO, name="shapeScaleShift")
class _ShapeScaleShift(Parametrization):
    shape: float
    scale: float
    shift: float

    @constraint(description="0 < shape < inf")
    def check_shape_positive(self) -> bool:
        return 0.0 < self.shape < math.inf

    @constraint(description="0 < scale < inf")
    def check_scale_positive(self) -> bool:
        return 0.0 < self.scale < math.inf

    @constraint(description="shift is finite")
    def check_shift_finite(self) -> bool:
        return math.isfinite(self.shift)


@PARETO.bind
class ParetoDistribution(ContinuousUnivariateDistribution[_ShapeScaleShift]):
    """
    Pareto distribution shifted to start at ``scale - shift``.

    Probability density function:
        f(x) = a s^a / (x + c)^(a + 1),  x >= s - c

    The mean is infinite for ``shape <= 1`` and the variance for
    ``shape <= 2``.
    """

    shape = ParameterProperty("Shape (tail index) ``a``, strictly positive.")
    scale = ParameterProperty("Scale ``s``, strictly positive.")
    shift = ParameterProperty("Shift ``c`` subtracted from the classical Pareto variable.")

    def __init__(self, shape: float = 2.0, scale: float = 1.0, shift: float = 0.0) -> None:
        super().__init__(_ShapeScaleShift(shape=shape, scale=scale, shift=shift))

    @property
    def mean(self) -> float:
        a, s, c = self.parameters.shape, self.parameters.scale, self.parameters.shift
        return a * s / (a - 1.0) - c if a > 1.0 else math.inf

    @property
    def variance(self) -> float:
        a, s = self.parameters.shape, self.parameters.scale
        if a <= 2.0:
            return math.inf
        return s * s * a / ((a - 1.0) ** 2 * (a - 2.0))

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=self.parameters.scale - self.parameters.shift)

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        a, s, c = self.parameters.shape, self.parameters.scale, self.parameters.shift
        return math.log(a) + a * math.log(s) - (a + 1.0) * np.log(x + c)

    def _cdf(self, x: NumericArray) -> NumericArray:
        a, s, c = self.parameters.shape, self.parameters.scale, self.parameters.shift
        return -np.expm1(a * np.log(s / (x + c)))

    def _ppf(self, p: NumericArray) -> NumericArray:
        a, s, c = self.parameters.shape, self.parameters.scale, self.parameters.shift
        return s * np.exp(-np.log1p(-p) / a) - c

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        a, s, c = self.parameters.shape, self.parameters.scale, self.parameters.shift
        return s * (1.0 + rng.pareto(a, size=n)) - c


__all__ = ["PARETO", "ParetoDistribution"]
