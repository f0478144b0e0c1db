"""
Categorical distribution family implementation.

Categories are labelled ``0, 1, ..., K - 1``.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

import numpy as np
from scipy.special import entr

from pysatl_distributions.config import DEFAULT_SETTINGS
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


CATEGORICAL = ParametricFamily(
    name=FamilyName.CATEGORICAL,
    distr_type=UnivariateDiscrete,
    distr_parametrizations=["probabilities"],
)


@parametrization(family=CATEGORICAL, name="probabilities")
class _Probabilities(Parametrization):
    probabilities: NumericArray

    @constraint(description="probabilities is a vector of at least 2 entries")
    def check_shape(self) -> bool:
        return np.ndim(self.probabilities) == 1 and np.size(self.probabilities) >= 2

    @constraint(description="probabilities lie on the simplex")
    def check_simplex(self) -> bool:
        p = self.probabilities
        return bool(
            np.all(p >= 0.0) and abs(p.sum() - 1.0) <= DEFAULT_SETTINGS.simplex_tolerance
        )


@CATEGORICAL.bind
class CategoricalDistribution(DiscreteUnivariateDistribution[_Probabilities]):
    """
    Distribution over ``K >= 2`` labelled categories.

    Parameters
    ----------
    probabilities : ArrayLike, default (0.5, 0.5)
        Probability of each category; non-negative and summing to one.
        The values are copied.
    """

    probabilities = ParameterProperty("Probability of each category.")

    def __init__(self, probabilities: ArrayLike = (0.5, 0.5)) -> None:
        super().__init__(_Probabilities(probabilities=probabilities))

    @property
    def num_categories(self) -> int:
        return int(self.parameters.probabilities.size)

    @property
    def mean(self) -> float:
        p = self.parameters.probabilities
        return float(np.dot(np.arange(p.size), p))

    @property
    def variance(self) -> float:
        p = self.parameters.probabilities
        k = np.arange(p.size)
        return float(np.dot(k * k, p)) - self.mean**2

    @property
    def entropy(self) -> float:
        """Entropy in bits."""
        return float(entr(self.parameters.probabilities).sum() / np.log(2.0))

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(min_k=0, max_k=self.num_categories - 1)

    def _log_pmf(self, k: NumericArray) -> NumericArray:
        return np.log(self.parameters.probabilities[k.astype(int)])

    def _cdf(self, k: NumericArray) -> NumericArray:
        return np.cumsum(self.parameters.probabilities)[k.astype(int)]

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.choice(self.num_categories, size=n, p=self.parameters.probabilities)

    @staticmethod
    def estimator(num_categories: int | None = None) -> CategoricalMaximumLikelihoodEstimator:
        return CategoricalMaximumLikelihoodEstimator(num_categories)


class CategoricalMaximumLikelihoodEstimator:
    """
    Category frequencies of the (weighted) observations.

    Parameters
    ----------
    num_categories : int, optional
        Number of categories; when omitted it is one more than the largest
        observed label, and at least 2.
    """

    def __init__(self, num_categories: int | None = None) -> None:
        self.num_categories = num_categories

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> CategoricalDistribution:
        arr, w = validate_sample(data, weights)
        if not np.all(integer_mask(arr)) or np.any(arr < 0.0):
            raise InvalidParameterError("Category labels must be non-negative integers")
        labels = arr.astype(int)
        size = self.num_categories or max(2, int(labels.max()) + 1)
        if labels.max() >= size:
            raise InvalidParameterError(f"Category labels must be below {size}")
        counts = np.bincount(labels, weights=w, minlength=size)
        return CategoricalDistribution(counts / counts.sum())


__all__ = ["CATEGORICAL", "CategoricalDistribution", "CategoricalMaximumLikelihoodEstimator"]
