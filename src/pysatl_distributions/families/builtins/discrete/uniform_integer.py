"""
Discrete uniform distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_distributions.distributions.numerics import integer_mask
from pysatl_distributions.distributions.statistics import validate_sample
from pysatl_distributions.distributions.strategies import check_sample_request
from pysatl_distributions.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.families.distribution import (
    DiscreteUnivariateDistribution,
    ParameterProperty,
)
from pysatl_distributions.families.parametric_family import ParametricFamily
from pysatl_distributions.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_distributions.types import FamilyName, UnivariateDiscrete

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from pysatl_distributions.types import NumericArray


UNIFORM_INTEGER = ParametricFamily(
    name=FamilyName.UNIFORM_INTEGER,
    distr_type=UnivariateDiscrete,
    distr_parametrizations=["bounds"],
)


@parametrization(family=UNIFORM_INTEGER, name="bounds")
class _Bounds(Parametrization):
    min_support: int
    max_support: int

    @constraint(description="min_support <= max_support")
    def check_bounds_order(self) -> bool:
        return self.min_support <= self.max_support


@UNIFORM_INTEGER.bind
class UniformIntegerDistribution(DiscreteUnivariateDistribution[_Bounds]):
    """
    Equal mass on every integer of ``[min_support, max_support]``.

    Parameters
    ----------
    min_support : int, default 0
        Smallest value of the support.
    max_support : int, default 0
        Largest value of the support; a single point when equal to
        ``min_support``.
    """

    min_support = ParameterProperty("Smallest value of the support.")
    max_support = ParameterProperty("Largest value of the support.")

    def __init__(self, min_support: int = 0, max_support: int = 0) -> None:
        super().__init__(_Bounds(min_support=min_support, max_support=max_support))

    @property
    def domain_size(self) -> int:
        return self.parameters.max_support - self.parameters.min_support + 1

    @property
    def mean(self) -> float:
        return (self.parameters.min_support + self.parameters.max_support) / 2.0

    @property
    def variance(self) -> float:
        size = float(self.domain_size)
        return (size * size - 1.0) / 12.0

    @property
    def entropy(self) -> float:
        """Entropy in bits."""
        return math.log2(self.domain_size)

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(
            min_k=self.parameters.min_support, max_k=self.parameters.max_support
        )

    def _log_pmf(self, k: NumericArray) -> NumericArray:
        return np.full(k.shape, -math.log(self.domain_size))

    def _cdf(self, k: NumericArray) -> NumericArray:
        return (k - self.parameters.min_support + 1.0) / self.domain_size

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        p = self.parameters
        return rng.integers(p.min_support, p.max_support, size=n, endpoint=True)

    @staticmethod
    def estimator() -> UniformIntegerMaximumLikelihoodEstimator:
        return UniformIntegerMaximumLikelihoodEstimator()


class UniformIntegerMaximumLikelihoodEstimator:
    """Support spanning the smallest and largest observation with non-zero weight."""

    def learn(
        self, data: ArrayLike, weights: ArrayLike | None = None
    ) -> UniformIntegerDistribution:
        arr, w = validate_sample(data, weights)
        if w is not None:
            arr = arr[w > 0.0]
        if not np.all(integer_mask(arr)):
            raise InvalidParameterError("Uniform integer observations must be integers")
        return UniformIntegerDistribution(int(arr.min()), int(arr.max()))


__all__ = [
    "UNIFORM_INTEGER",
    "UniformIntegerDistribution",
    "UniformIntegerMaximumLikelihoodEstimator",
]
