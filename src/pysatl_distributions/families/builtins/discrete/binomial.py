"""
Binomial distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

import numpy as np
from scipy.special import betainc, gammaln, xlog1py, xlogy

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


BINOMIAL = ParametricFamily(
    name=FamilyName.BINOMIAL,
    distr_type=UnivariateDiscrete,
    distr_parametrizations=["trialsProbability"],
)


@parametrization(family=BINOMIAL, name="trialsProbability")
class _TrialsProbability(Parametrization):
    """
    Parameters
    ----------
    n : int
        Number of trials.
    p : float
        Success probability of a single trial.
    """

    n: int
    p: float

    @constraint(description="n >= 1")
    def check_trials_positive(self) -> bool:
        return self.n >= 1

    @constraint(description="0 <= p <= 1")
    def check_probability(self) -> bool:
        return 0.0 <= self.p <= 1.0


@BINOMIAL.bind
class BinomialDistribution(DiscreteUnivariateDistribution[_TrialsProbability]):
    """
    Number of successes in ``n`` independent Bernoulli(``p``) trials.

    Parameters
    ----------
    n : int, default 1
        Number of trials, at least 1. Integral floats are accepted.
    p : float, default 0.5
        Success probability in ``[0, 1]``.
    """

    n = ParameterProperty("Number of trials, at least 1.")
    p = ParameterProperty("Success probability in [0, 1].")

    def __init__(self, n: int = 1, p: float = 0.5) -> None:
        super().__init__(_TrialsProbability(n=n, p=p))

    @property
    def mean(self) -> float:
        return self.parameters.n * self.parameters.p

    @property
    def variance(self) -> float:
        p = self.parameters.p
        return self.parameters.n * p * (1.0 - p)

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(min_k=0, max_k=self.parameters.n)

    def _log_pmf(self, k: NumericArray) -> NumericArray:
        n, p = self.parameters.n, self.parameters.p
        log_choose = gammaln(n + 1.0) - gammaln(k + 1.0) - gammaln(n - k + 1.0)
        return log_choose + xlogy(k, p) + xlog1py(n - k, -p)

    def _cdf(self, k: NumericArray) -> NumericArray:
        n, p = self.parameters.n, self.parameters.p
        return betainc(n - k, k + 1.0, 1.0 - p)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.binomial(self.parameters.n, self.parameters.p, size=n)

    @staticmethod
    def estimator(n: int | None = None) -> BinomialMaximumLikelihoodEstimator:
        return BinomialMaximumLikelihoodEstimator(n)


class BinomialMaximumLikelihoodEstimator:
    """
    Estimate the success probability for a known number of trials.

    Parameters
    ----------
    n : int, optional
        Number of trials; when omitted the largest observation is used.
    """

    def __init__(self, n: int | None = None) -> None:
        self.n = n

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> BinomialDistribution:
        arr, w = validate_sample(data, weights)
        if not np.all(integer_mask(arr)) or np.any(arr < 0.0):
            raise InvalidParameterError("Binomial observations must be non-negative integers")
        n = self.n if self.n is not None else max(1, int(arr.max()))
        if np.any(arr > n):
            raise InvalidParameterError(f"Binomial observations must not exceed n={n}")
        return BinomialDistribution(n, float(np.average(arr, weights=w)) / n)


__all__ = ["BINOMIAL", "BinomialDistribution", "BinomialMaximumLikelihoodEstimator"]
