"""
Beta distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import betainc, betaincinv, betaln, xlog1py, xlogy

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


BETA = ParametricFamily(
    name=FamilyName.BETA,
    distr_type=UnivariateContinuous,
    distr_parametrizations=["alphaBeta"],
)


@parametrization(family=BETA, name="alphaBeta")
class _AlphaBeta(Parametrization):
    """
    Shape parameters of the Beta distribution.

    Parameters
    ----------
    alpha : float
        First shape parameter.
    beta : float
        Second shape parameter.
    """

    alpha: float
    beta: float

    @constraint(description="0 < alpha < inf")
    def check_alpha_positive(self) -> bool:
        return 0.0 < self.alpha < math.inf

    @constraint(description="0 < beta < inf")
    def check_beta_positive(self) -> bool:
        return 0.0 < self.beta < math.inf


@BETA.bind
class BetaDistribution(ContinuousUnivariateDistribution[_AlphaBeta]):
    """
    Beta distribution on ``[0, 1]``.

    Parameters
    ----------
    alpha : float, default 1.0
        First shape parameter, strictly positive.
    beta : float, default 1.0
        Second shape parameter, strictly positive.
    """

    alpha = ParameterProperty("First shape parameter, strictly positive.")
    beta = ParameterProperty("Second shape parameter, strictly positive.")

    def __init__(self, alpha: float = 1.0, beta: float = 1.0) -> None:
        super().__init__(_AlphaBeta(alpha=alpha, beta=beta))

    @property
    def mean(self) -> float:
        a, b = self.parameters.alpha, self.parameters.beta
        return a / (a + b)

    @property
    def variance(self) -> float:
        a, b = self.parameters.alpha, self.parameters.beta
        total = a + b
        return a * b / (total * total * (total + 1.0))

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=0.0, right=1.0)

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        a, b = self.parameters.alpha, self.parameters.beta
        return xlogy(a - 1.0, x) + xlog1py(b - 1.0, -x) - betaln(a, b)

    def _cdf(self, x: NumericArray) -> NumericArray:
        return betainc(self.parameters.alpha, self.parameters.beta, x)

    def _ppf(self, p: NumericArray) -> NumericArray:
        return betaincinv(self.parameters.alpha, self.parameters.beta, p)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.beta(self.parameters.alpha, self.parameters.beta, size=n)

    @staticmethod
    def estimator() -> BetaMomentMatchingEstimator:
        return BetaMomentMatchingEstimator()


class BetaMomentMatchingEstimator:
    """
    Fit a Beta distribution by matching mean ``m`` and variance ``v``.

    With ``s = m (1 - m) / v - 1`` the shapes are ``|s m|`` and
    ``|s (1 - m)|``.
    """

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> BetaDistribution:
        if weights is None:
            mean, variance = mean_and_variance(data)
        else:
            mean, variance = weighted_mean_and_variance(data, weights)
        total = mean * (1.0 - mean) / variance - 1.0 if variance > 0.0 else math.inf
        return BetaDistribution(abs(total * mean), abs(total * (1.0 - mean)))


__all__ = ["BETA", "BetaDistribution", "BetaMomentMatchingEstimator"]
