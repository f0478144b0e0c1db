"""
Beta-binomial distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import betaln, gammaln

from pysatl_distributions.distributions.strategies import check_sample_request
from pysatl_distributions.distributions.support import IntegerLatticeDiscreteSupport
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
    from pysatl_distributions.types import NumericArray


BETA_BINOMIAL = ParametricFamily(
    name=FamilyName.BETA_BINOMIAL,
    distr_type=UnivariateDiscrete,
    distr_parametrizations=["trialsShapeScale"],
)


@parametrization(family=BETA_BINOMIAL, name="trialsShapeScale")
class _TrialsShapeScale(Parametrization):
    n: int
    shape: float
    scale: float

    @constraint(description="n >= 1")
    def check_trials_positive(self) -> bool:
        return self.n >= 1

    @constraint(description="0 < shape < inf")
    def check_shape_positive(self) -> bool:
        return 0.0 < self.shape < math.inf

    @constraint(description="0 < scale < inf")
    def check_scale_positive(self) -> bool:
        return 0.0 < self.scale < math.inf


@BETA_BINOMIAL.bind
class BetaBinomialDistribution(DiscreteUnivariateDistribution[_TrialsShapeScale]):
    """
    Binomial distribution whose success probability is Beta(shape, scale).

    Parameters
    ----------
    n : int, default 1
        Number of trials, at least 1.
    shape : float, default 1.0
        First Beta parameter ``a``.
    scale : float, default 1.0
        Second Beta parameter ``b``.
    """

    n = ParameterProperty("Number of trials, at least 1.")
    shape = ParameterProperty("First shape parameter of the Beta prior.")
    scale = ParameterProperty("Second shape parameter of the Beta prior.")

    def __init__(self, n: int = 1, shape: float = 1.0, scale: float = 1.0) -> None:
        super().__init__(_TrialsShapeScale(n=n, shape=shape, scale=scale))

    @property
    def mean(self) -> float:
        p = self.parameters
        return p.n * p.shape / (p.shape + p.scale)

    @property
    def variance(self) -> float:
        n, a, b = self.parameters.n, self.parameters.shape, self.parameters.scale
        total = a + b
        return n * a * b * (total + n) / (total * total * (total + 1.0))

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(min_k=0, max_k=self.parameters.n)

    def _log_pmf(self, k: NumericArray) -> NumericArray:
        n, a, b = self.parameters.n, self.parameters.shape, self.parameters.scale
        log_choose = gammaln(n + 1.0) - gammaln(k + 1.0) - gammaln(n - k + 1.0)
        return log_choose + betaln(k + a, n - k + b) - betaln(a, b)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        p = self.parameters
        return rng.binomial(p.n, rng.beta(p.shape, p.scale, size=n))


__all__ = ["BETA_BINOMIAL", "BetaBinomialDistribution"]
