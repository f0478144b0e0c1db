"""
Multinomial distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import comb
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import gammaln, xlogy

from pysatl_distributions.config import DEFAULT_SETTINGS
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
    from collections.abc import Iterator

    from numpy.typing import ArrayLike

    from pysatl_distributions.types import NumericArray


MULTINOMIAL = ParametricFamily(
    name=FamilyName.MULTINOMIAL,
    distr_type=lambda params: EuclideanDistributionType(
        kind=Kind.DISCRETE, dimension=int(params.probabilities.size)
    ),
    distr_parametrizations=["trialsProbabilities"],
)


@parametrization(family=MULTINOMIAL, name="trialsProbabilities")
class _TrialsProbabilities(Parametrization):
    num_trials: int
    probabilities: NumericArray

    @constraint(description="num_trials >= 1")
    def check_trials_positive(self) -> bool:
        return self.num_trials >= 1

    @constraint(description="probabilities is a vector of at least 2 entries")
    def check_shape(self) -> bool:
        return np.ndim(self.probabilities) == 1 and np.size(self.probabilities) >= 2

    @constraint(description="probabilities lie on the simplex")
    def check_simplex(self) -> bool:
        p = self.probabilities
        return bool(
            np.all(p >= 0.0) and abs(p.sum() - 1.0) <= DEFAULT_SETTINGS.simplex_tolerance
        )


def _compositions(total: int, parts: int) -> Iterator[tuple[int, ...]]:
    if parts == 1:
        yield (total,)
        return
    for head in range(total + 1):
        for tail in _compositions(total - head, parts - 1):
            yield (head, *tail)


@MULTINOMIAL.bind
class MultinomialDistribution(MultivariateDistribution[_TrialsProbabilities]):
    """
    Category counts of ``num_trials`` independent categorical draws.

    Parameters
    ----------
    num_trials : int, default 1
        Number of draws, at least 1.
    probabilities : ArrayLike, default (0.5, 0.5)
        Probability of each of the ``K >= 2`` categories; copied.
    """

    num_trials = ParameterProperty("Number of draws, at least 1.")
    probabilities = ParameterProperty("Probability of each category.")

    def __init__(self, num_trials: int = 1, probabilities: ArrayLike = (0.5, 0.5)) -> None:
        super().__init__(
            _TrialsProbabilities(num_trials=num_trials, probabilities=probabilities)
        )

    @property
    def dimension(self) -> int:
        return int(self.parameters.probabilities.size)

    @property
    def mean(self) -> NumericArray:
        return self.parameters.num_trials * self.parameters.probabilities

    @property
    def variance(self) -> NumericArray:
        """Covariance matrix."""
        p = self.parameters.probabilities
        return self.parameters.num_trials * (np.diag(p) - np.outer(p, p))

    @property
    def domain_size(self) -> int:
        """Number of count vectors summing to ``num_trials``."""
        k = self.dimension
        return comb(self.parameters.num_trials + k - 1, k - 1)

    def iter_domain(self) -> Iterator[NumericArray]:
        """Every count vector with non-negative entries summing to ``num_trials``."""
        for counts in _compositions(self.parameters.num_trials, self.dimension):
            yield np.array(counts, dtype=float)

    def log_pmf(self, x: ArrayLike) -> float | NumericArray:
        """Log-mass; ``-inf`` for vectors that are not counts summing to ``num_trials``."""
        points, single = self._points(x)
        n, p = self.parameters.num_trials, self.parameters.probabilities
        inside = (
            np.all((points >= 0.0) & (points == np.floor(points)), axis=1)
            & (points.sum(axis=1) == n)
        )
        values = np.full(points.shape[0], -np.inf)
        counts = points[inside]
        with np.errstate(divide="ignore"):
            values[inside] = (
                gammaln(n + 1.0)
                - gammaln(counts + 1.0).sum(axis=1)
                + xlogy(counts, p).sum(axis=1)
            )
        return self._finish(values, single)

    def pmf(self, x: ArrayLike) -> float | NumericArray:
        points, single = self._points(x)
        return self._finish(np.exp(np.atleast_1d(self.log_pmf(points))), single)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.multinomial(
            self.parameters.num_trials, self.parameters.probabilities, size=n
        ).astype(float)


__all__ = ["MULTINOMIAL", "MultinomialDistribution"]
