"""
Multivariate Gaussian distribution family implementation.

Contains the family with a mean vector and a covariance matrix, its
maximum-likelihood estimators and the incremental sufficient statistic.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import copy
import math
from typing import TYPE_CHECKING, Self

import numpy as np
from scipy.linalg import cho_factor, cho_solve

from pysatl_distributions.config import DEFAULT_SETTINGS
from pysatl_distributions.distributions.statistics import validate_sample
from pysatl_distributions.distributions.strategies import check_sample_request
from pysatl_distributions.exceptions import InvalidParameterError
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
    from numpy.typing import ArrayLike

    from pysatl_distributions.types import NumericArray


def is_symmetric_positive_definite(matrix: NumericArray) -> bool:
    """Whether ``matrix`` is square, symmetric and admits a Cholesky factor."""
    matrix = np.asarray(matrix, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or not np.all(np.isfinite(matrix)):
        return False
    if not np.allclose(matrix, matrix.T):
        return False
    try:
        np.linalg.cholesky(matrix)
    except np.linalg.LinAlgError:
        return False
    return True


MULTIVARIATE_GAUSSIAN = ParametricFamily(
    name=FamilyName.MULTIVARIATE_GAUSSIAN,
    distr_type=lambda params: EuclideanDistributionType(
        kind=Kind.CONTINUOUS, dimension=int(params.mean.size)
    ),
    distr_parametrizations=["meanCovariance"],
)


@parametrization(family=MULTIVARIATE_GAUSSIAN, name="meanCovariance")
class _MeanCovariance(Parametrization):
    """
    Parameters
    ----------
    mean : NumericArray
        Mean vector of length ``d``.
    covariance : NumericArray
        Symmetric positive definite ``d x d`` matrix, flattened row-major in
        the parameter vector.
    """

    mean: NumericArray
    covariance: NumericArray

    @constraint(description="mean is a finite non-empty vector")
    def check_mean_vector(self) -> bool:
        mean = self.mean
        return np.ndim(mean) == 1 and np.size(mean) >= 1 and bool(np.all(np.isfinite(mean)))

    @constraint(description="covariance is a d x d matrix")
    def check_covariance_shape(self) -> bool:
        return np.shape(self.covariance) == (self.mean.size, self.mean.size)

    @constraint(description="covariance is symmetric positive definite")
    def check_covariance_spd(self) -> bool:
        return is_symmetric_positive_definite(self.covariance)


@MULTIVARIATE_GAUSSIAN.bind
class MultivariateGaussian(MultivariateDistribution[_MeanCovariance]):
    """
    Gaussian distribution over ``R^d``.

    Parameters
    ----------
    mean : ArrayLike, default (0, 0)
        Mean vector; copied.
    covariance : ArrayLike, optional
        Covariance matrix; copied. Defaults to the identity.
    """

    mean = ParameterProperty("Mean vector.")
    covariance = ParameterProperty("Covariance matrix, symmetric positive definite.")

    def __init__(self, mean: ArrayLike = (0.0, 0.0), covariance: ArrayLike | None = None) -> None:
        mean_arr = np.array(mean, dtype=float)
        if covariance is None:
            covariance = np.eye(mean_arr.size)
        super().__init__(_MeanCovariance(mean=mean_arr, covariance=covariance))

    @property
    def dimension(self) -> int:
        return int(self.parameters.mean.size)

    @property
    def variance(self) -> NumericArray:
        """Covariance matrix (a copy)."""
        return self.parameters.covariance.copy()

    @property
    def precision(self) -> NumericArray:
        """Inverse of the covariance matrix."""
        return cho_solve(cho_factor(self.parameters.covariance), np.eye(self.dimension))

    @property
    def log_determinant(self) -> float:
        """Natural logarithm of the covariance determinant."""
        return float(np.linalg.slogdet(self.parameters.covariance)[1])

    def _mahalanobis(self, points: NumericArray) -> NumericArray:
        factor = cho_factor(self.parameters.covariance)
        delta = points - self.parameters.mean
        return np.einsum("ij,ij->i", delta, cho_solve(factor, delta.T).T)

    def mahalanobis_squared(self, x: ArrayLike) -> float | NumericArray:
        """Squared Mahalanobis distance of ``x`` from the mean."""
        points, single = self._points(x)
        return self._finish(self._mahalanobis(points), single)

    def log_pdf(self, x: ArrayLike) -> float | NumericArray:
        points, single = self._points(x)
        d = self.dimension
        values = -0.5 * (
            d * math.log(2.0 * math.pi) + self.log_determinant + self._mahalanobis(points)
        )
        return self._finish(values, single)

    def pdf(self, x: ArrayLike) -> float | NumericArray:
        points, single = self._points(x)
        return self._finish(np.exp(np.atleast_1d(self.log_pdf(points))), single)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.multivariate_normal(
            self.parameters.mean, self.parameters.covariance, size=n, method="cholesky"
        )

    def times(self, other: MultivariateGaussian) -> MultivariateGaussian:
        """Normalised product of two Gaussian densities of the same dimension."""
        if other.dimension != self.dimension:
            raise InvalidParameterError("Gaussians must have the same dimension")
        p1, p2 = self.precision, other.precision
        covariance = np.linalg.inv(p1 + p2)
        covariance = 0.5 * (covariance + covariance.T)
        mean = covariance @ (p1 @ self.parameters.mean + p2 @ other.parameters.mean)
        return MultivariateGaussian(mean, covariance)

    def convolve(self, other: MultivariateGaussian) -> MultivariateGaussian:
        """Distribution of the sum of two independent Gaussian vectors."""
        if other.dimension != self.dimension:
            raise InvalidParameterError("Gaussians must have the same dimension")
        return MultivariateGaussian(
            self.parameters.mean + other.parameters.mean,
            self.parameters.covariance + other.parameters.covariance,
        )

    @staticmethod
    def estimator() -> MultivariateGaussianMaximumLikelihoodEstimator:
        return MultivariateGaussianMaximumLikelihoodEstimator()


class MultivariateGaussianMaximumLikelihoodEstimator:
    """
    Maximum-likelihood fit of a multivariate Gaussian.

    Without weights the covariance is the unbiased sample covariance; with
    weights it is divided by the total absolute weight. ``default_covariance``
    is added to the diagonal in both cases.

    Raises
    ------
    InvalidParameterError
        From :meth:`learn` when fewer than two observations are given.
    """

    def __init__(self, default_covariance: float = DEFAULT_SETTINGS.default_variance) -> None:
        if not default_covariance >= 0.0:
            raise InvalidParameterError("default_covariance must be non-negative")
        self.default_covariance = default_covariance

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> MultivariateGaussian:
        arr, w = validate_sample(data, weights, ndim=2)
        if arr.shape[0] < 2:
            raise InvalidParameterError("At least two observations are needed for a covariance")
        if w is None:
            mean = arr.mean(axis=0)
            covariance = np.atleast_2d(np.cov(arr, rowvar=False, ddof=1))
        else:
            mean = np.average(arr, axis=0, weights=w)
            covariance = np.atleast_2d(np.cov(arr, rowvar=False, aweights=w, bias=True))
        covariance = covariance + self.default_covariance * np.eye(arr.shape[1])
        return MultivariateGaussian(mean, covariance)


class MultivariateGaussianSufficientStatistic:
    """
    Running mean and scatter matrix of vector observations.

    The scatter matrix is updated with the outer-product form of Welford's
    algorithm; partial statistics are combined with the pairwise formula of
    Chan et al.

    Parameters
    ----------
    default_covariance : float
        Value added to the covariance diagonal when converting to a
        distribution.
    """

    __slots__ = ("_count", "_mean", "_scatter", "default_covariance")

    def __init__(self, default_covariance: float = DEFAULT_SETTINGS.default_variance) -> None:
        self.default_covariance = default_covariance
        self.clear()

    def clear(self) -> None:
        self._count = 0
        self._mean: NumericArray | None = None
        self._scatter: NumericArray | None = None

    def _check_dimension(self, d: int) -> None:
        if self._mean is not None and self._mean.size != d:
            raise InvalidParameterError(
                f"Expected vectors of dimension {self._mean.size}, got {d}"
            )

    def update(self, value: ArrayLike) -> None:
        x = np.array(value, dtype=float).ravel()
        self._check_dimension(x.size)
        if self._mean is None or self._scatter is None:
            self._mean = np.zeros(x.size)
            self._scatter = np.zeros((x.size, x.size))
        self._count += 1
        delta = x - self._mean
        self._mean = self._mean + delta / self._count
        self._scatter = self._scatter + np.outer(delta, x - self._mean)

    def update_all(self, values: ArrayLike) -> None:
        for row in np.atleast_2d(np.asarray(values, dtype=float)):
            self.update(row)

    def merge(self, other: MultivariateGaussianSufficientStatistic) -> None:
        """Fold ``other`` into this statistic as if its data were observed here."""
        if other._count == 0 or other._mean is None or other._scatter is None:
            return
        if self._count == 0 or self._mean is None or self._scatter is None:
            self._count = other._count
            self._mean = other._mean.copy()
            self._scatter = other._scatter.copy()
            return
        self._check_dimension(other._mean.size)
        count = self._count + other._count
        delta = other._mean - self._mean
        self._scatter = (
            self._scatter
            + other._scatter
            + np.outer(delta, delta) * self._count * other._count / count
        )
        self._mean = self._mean + delta * other._count / count
        self._count = count

    def copy(self) -> Self:
        clone = copy.copy(self)
        if self._mean is not None and self._scatter is not None:
            clone._mean = self._mean.copy()
            clone._scatter = self._scatter.copy()
        return clone

    def __add__(self, other: MultivariateGaussianSufficientStatistic) -> Self:
        result = self.copy()
        result.merge(other)
        return result

    @property
    def count(self) -> int:
        return self._count

    @property
    def mean(self) -> NumericArray | None:
        return None if self._mean is None else self._mean.copy()

    @property
    def covariance(self) -> NumericArray | None:
        """Unbiased covariance; zeros for a single observation."""
        if self._scatter is None:
            return None
        if self._count < 2:
            return np.zeros_like(self._scatter)
        return self._scatter / (self._count - 1)

    def to_distribution(self) -> MultivariateGaussian:
        """
        Gaussian with the summarised mean and covariance.

        Raises
        ------
        InvalidParameterError
            If no observation has been added.
        """
        covariance = self.covariance
        if self._mean is None or covariance is None:
            raise InvalidParameterError("Cannot build a distribution from an empty statistic")
        covariance = covariance + self.default_covariance * np.eye(self._mean.size)
        return MultivariateGaussian(self._mean, 0.5 * (covariance + covariance.T))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(count={self._count}, mean={self._mean!r})"


class MultivariateGaussianIncrementalEstimator:
    """Incremental learner of :class:`MultivariateGaussianSufficientStatistic`."""

    def __init__(self, default_covariance: float = DEFAULT_SETTINGS.default_variance) -> None:
        self.default_covariance = default_covariance

    def create_initial(self) -> MultivariateGaussianSufficientStatistic:
        return MultivariateGaussianSufficientStatistic(self.default_covariance)

    def update(self, statistic: MultivariateGaussianSufficientStatistic, value: ArrayLike) -> None:
        statistic.update(value)

    def learn(self, data: ArrayLike) -> MultivariateGaussianSufficientStatistic:
        statistic = self.create_initial()
        statistic.update_all(data)
        return statistic


__all__ = [
    "MULTIVARIATE_GAUSSIAN",
    "MultivariateGaussian",
    "MultivariateGaussianMaximumLikelihoodEstimator",
    "MultivariateGaussianSufficientStatistic",
    "MultivariateGaussianIncrementalEstimator",
    "is_symmetric_positive_definite",
]
