"""
Negative binomial distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import betainc, gammaln, xlogy

from pysatl_distributions.distributions.statistics import (
    mean_and_variance,
    weighted_mean_and_variance,
)
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
    from numpy.typing import ArrayLike

    from pysatl_distributions.types import NumericArray


NEGATIVE_BINOMIAL = ParametricFamily(
    name=FamilyName.NEGATIVE_BINOMIAL,
    distr_type=UnivariateDiscrete,
    distr_parametrizations=["failuresProbability"],
)


@parametrization(family=NEGATIVE_BINOMIAL, name="failuresProbability")
class _FailuresProbability(Parametrization):
    r: float
    p: float

    @constraint(description="0 < r < inf")
    def check_r_positive(self) -> bool:
        return 0.0 < self.r < math.inf

    @constraint(description="0 <= p < 1")
    def check_probability(self) -> bool:
        return 0.0 <= self.p < 1.0


@NEGATIVE_BINOMIAL.bind
class NegativeBinomialDistribution(DiscreteUnivariateDistribution[_FailuresProbability]):
    """
    Number of successes before the ``r``-th failure, with success probability ``p``.

    Probability mass function:
        f(k) = Gamma(k + r) / (k! Gamma(r)) (1 - p)^r p^k,  k = 0, 1, ...

    Parameters
    ----------
    r : float, default 1.0
        Number of failures, strictly positive (need not be an integer).
    p : float, default 0.5
        Success probability in ``[0, 1)``.
    """

    r = ParameterProperty("Number of failures, strictly positive.")
    p = ParameterProperty("Success probability in [0, 1).")

    def __init__(self, r: float = 1.0, p: float = 0.5) -> None:
        super().__init__(_FailuresProbability(r=r, p=p))

    @property
    def mean(self) -> float:
        r, p = self.parameters.r, self.parameters.p
        return r * p / (1.0 - p)

    @property
    def variance(self) -> float:
        r, p = self.parameters.r, self.parameters.p
        return r * p / (1.0 - p) ** 2

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(min_k=0)

    def _log_pmf(self, k: NumericArray) -> NumericArray:
        r, p = self.parameters.r, self.parameters.p
        return gammaln(k + r) - gammaln(k + 1.0) - gammaln(r) + r * math.log1p(-p) + xlogy(k, p)

    def _cdf(self, k: NumericArray) -> NumericArray:
        return betainc(self.parameters.r, k + 1.0, 1.0 - self.parameters.p)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.negative_binomial(self.parameters.r, 1.0 - self.parameters.p, size=n)

    @staticmethod
    def estimator() -> NegativeBinomialMomentMatchingEstimator:
        return NegativeBinomialMomentMatchingEstimator()


class NegativeBinomialMomentMatchingEstimator:
    """
    Fit by matching mean ``m`` and variance ``v``.

    With ``c = m / v``: ``r = |m c / (c - 1)|`` and ``p = m / (m + r)``.
    Samples whose variance equals their mean, or whose mean is zero, have no
    valid fit and raise :class:`InvalidParameterError`.
    """

    def learn(
        self, data: ArrayLike, weights: ArrayLike | None = None
    ) -> NegativeBinomialDistribution:
        if weights is None:
            mean, variance = mean_and_variance(data)
        else:
            mean, variance = weighted_mean_and_variance(data, weights)
        ratio = mean / variance if variance > 0.0 else math.inf
        r = abs(mean * ratio / (ratio - 1.0)) if ratio != 1.0 else math.inf
        p = mean / (mean + r) if math.isfinite(r) else 1.0
        return NegativeBinomialDistribution(r, p)


__all__ = [
    "NEGATIVE_BINOMIAL",
    "NegativeBinomialDistribution",
    "NegativeBinomialMomentMatchingEstimator",
]
