"""
Multivariate Student-t distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import gammaln

from pysatl_distributions.distributions.strategies import check_sample_request
from pysatl_distributions.families.builtins.multivariate.gaussian import (
    is_symmetric_positive_definite,
)
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


MULTIVARIATE_STUDENT_T = ParametricFamily(
    name=FamilyName.MULTIVARIATE_STUDENT_T,
    distr_type=lambda params: EuclideanDistributionType(
        kind=Kind.CONTINUOUS, dimension=int(params.location.size)
    ),
    distr_parametrizations=["dofLocationPrecision"],
)


@parametrization(family=MULTIVARIATE_STUDENT_T, name="dofLocationPrecision")
class _DofLocationPrecision(Parametrization):
    """
    Parameters
    ----------
    degrees_of_freedom : float
        Degrees of freedom.
    location : NumericArray
        Location vector of length ``d``.
    precision : NumericArray
        Symmetric positive definite ``d x d`` precision (inverse scale) matrix.
    """

    degrees_of_freedom: float
    location: NumericArray
    precision: NumericArray

    @constraint(description="0 < degrees_of_freedom < inf")
    def check_dof_positive(self) -> bool:
        return 0.0 < self.degrees_of_freedom < math.inf

    @constraint(description="location is a finite non-empty vector")
    def check_location_vector(self) -> bool:
        location = self.location
        return (
            np.ndim(location) == 1
            and np.size(location) >= 1
            and bool(np.all(np.isfinite(location)))
        )

    @constraint(description="precision is a d x d matrix")
    def check_precision_shape(self) -> bool:
        return np.shape(self.precision) == (self.location.size, self.location.size)

    @constraint(description="precision is symmetric positive definite")
    def check_precision_spd(self) -> bool:
        return is_symmetric_positive_definite(self.precision)


@MULTIVARIATE_STUDENT_T.bind
class MultivariateStudentT(MultivariateDistribution[_DofLocationPrecision]):
    """
    Student-t distribution over ``R^d``.

    Probability density function:
        f(x) = Gamma((v + d)/2) / Gamma(v/2) * |L|^(1/2) / (v pi)^(d/2)
               * (1 + (x - m)' L (x - m) / v)^(-(v + d)/2)

    Parameters
    ----------
    degrees_of_freedom : float, default 3.0
        Degrees of freedom ``v``, strictly positive.
    location : ArrayLike, default (0, 0)
        Location vector ``m``; copied.
    precision : ArrayLike, optional
        Precision matrix ``L``; copied. Defaults to the identity.
    """

    degrees_of_freedom = ParameterProperty("Degrees of freedom, strictly positive.")
    location = ParameterProperty("Location vector.")
    precision = ParameterProperty("Precision matrix, symmetric positive definite.")

    def __init__(
        self,
        degrees_of_freedom: float = 3.0,
        location: ArrayLike = (0.0, 0.0),
        precision: ArrayLike | None = None,
    ) -> None:
        location_arr = np.array(location, dtype=float)
        if precision is None:
            precision = np.eye(location_arr.size)
        super().__init__(
            _DofLocationPrecision(
                degrees_of_freedom=degrees_of_freedom, location=location_arr, precision=precision
            )
        )

    @property
    def dimension(self) -> int:
        return int(self.parameters.location.size)

    @property
    def mean(self) -> NumericArray:
        """Location vector for ``v > 1``; NaN entries otherwise."""
        if self.parameters.degrees_of_freedom <= 1.0:
            return np.full(self.dimension, np.nan)
        return self.parameters.location.copy()

    @property
    def variance(self) -> NumericArray:
        """
        Covariance matrix ``v / (v - 2) * inv(L)``.

        Infinite for ``1 < v <= 2`` and undefined (NaN) for ``v <= 1``.
        """
        v, d = self.parameters.degrees_of_freedom, self.dimension
        if v <= 1.0:
            return np.full((d, d), np.nan)
        if v <= 2.0:
            return np.full((d, d), np.inf)
        return v / (v - 2.0) * np.linalg.inv(self.parameters.precision)

    def log_pdf(self, x: ArrayLike) -> float | NumericArray:
        points, single = self._points(x)
        v, d = self.parameters.degrees_of_freedom, self.dimension
        precision = self.parameters.precision
        delta = points - self.parameters.location
        z2 = np.einsum("ij,jk,ik->i", delta, precision, delta)
        half = 0.5 * (v + d)
        values = (
            gammaln(half)
            - gammaln(0.5 * v)
            + 0.5 * np.linalg.slogdet(precision)[1]
            - 0.5 * d * math.log(math.pi * v)
            - half * np.log1p(z2 / v)
        )
        return self._finish(values, single)

    def pdf(self, x: ArrayLike) -> float | NumericArray:
        points, single = self._points(x)
        return self._finish(np.exp(np.atleast_1d(self.log_pdf(points))), single)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        v, d = self.parameters.degrees_of_freedom, self.dimension
        scale = np.linalg.inv(self.parameters.precision)
        scale = 0.5 * (scale + scale.T)
        z = rng.multivariate_normal(np.zeros(d), scale, size=n, method="cholesky")
        chi2 = rng.chisquare(v, size=n)
        return self.parameters.location + z * np.sqrt(v / chi2)[:, None]


__all__ = ["MULTIVARIATE_STUDENT_T", "MultivariateStudentT"]
