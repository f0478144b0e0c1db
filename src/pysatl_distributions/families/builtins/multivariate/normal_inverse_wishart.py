"""
Normal-inverse-Wishart distribution family implementation.

Observations pack a Gaussian mean ``m`` and covariance ``S`` side by side
into a ``d x (d + 1)`` matrix ``[m | S]``: the first column is the mean and
the remaining ``d x d`` block is the covariance.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_distributions.distributions.strategies import check_sample_request
from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.families.builtins.multivariate.gaussian import (
    is_symmetric_positive_definite,
)
from pysatl_distributions.families.builtins.multivariate.inverse_wishart import (
    InverseWishartDistribution,
    inverse_wishart_log_pdf,
    sample_inverse_wishart,
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


NORMAL_INVERSE_WISHART = ParametricFamily(
    name=FamilyName.NORMAL_INVERSE_WISHART,
    distr_type=lambda params: EuclideanDistributionType(
        kind=Kind.CONTINUOUS, dimension=int(params.location.size * (params.location.size + 1))
    ),
    distr_parametrizations=["divisorLocationDofInverseScale"],
)


@parametrization(family=NORMAL_INVERSE_WISHART, name="divisorLocationDofInverseScale")
class _DivisorLocationDofInverseScale(Parametrization):
    """
    Parameters
    ----------
    covariance_divisor : float
        Number of pseudo-observations ``k`` behind the mean.
    location : NumericArray
        Location vector of length ``d``.
    degrees_of_freedom : float
        Degrees of freedom ``v > d - 1`` of the covariance.
    inverse_scale : NumericArray
        Symmetric positive definite ``d x d`` scale matrix ``Psi``.
    """

    covariance_divisor: float
    location: NumericArray
    degrees_of_freedom: float
    inverse_scale: NumericArray

    @constraint(description="0 < covariance_divisor < inf")
    def check_divisor_positive(self) -> bool:
        return 0.0 < self.covariance_divisor < math.inf

    @constraint(description="location is a finite non-empty vector")
    def check_location_vector(self) -> bool:
        location = self.location
        return (
            np.ndim(location) == 1
            and np.size(location) >= 1
            and bool(np.all(np.isfinite(location)))
        )

    @constraint(description="inverse_scale is a d x d matrix")
    def check_inverse_scale_shape(self) -> bool:
        return np.shape(self.inverse_scale) == (self.location.size, self.location.size)

    @constraint(description="inverse_scale is symmetric positive definite")
    def check_inverse_scale_spd(self) -> bool:
        return is_symmetric_positive_definite(self.inverse_scale)

    @constraint(description="d - 1 < degrees_of_freedom < inf")
    def check_dof(self) -> bool:
        return self.location.size - 1.0 < self.degrees_of_freedom < math.inf


@NORMAL_INVERSE_WISHART.bind
class NormalInverseWishartDistribution(
    MultivariateDistribution[_DivisorLocationDofInverseScale]
):
    """
    Joint conjugate prior of the mean and covariance of a multivariate
    Gaussian.

    The covariance ``S`` follows an inverse-Wishart distribution with scale
    ``Psi`` and ``v`` degrees of freedom; given ``S``, the mean is Gaussian
    around ``u`` with covariance ``S / k``.

    Probability density function:
        f([m | S]) = N(m | u, S / k) * IW(S | Psi, v)

    Parameters
    ----------
    location : ArrayLike, default (0, 0)
        Location vector ``u``; copied.
    covariance_divisor : float, default 1.0
        Divisor ``k`` of the conditional covariance of the mean.
    inverse_scale : ArrayLike, optional
        Scale matrix ``Psi``; copied. Defaults to the identity.
    degrees_of_freedom : float, optional
        Degrees of freedom ``v > d - 1``. Defaults to ``d + 2``.

    Notes
    -----
    The parameter vector is ``k``, then ``u``, then ``v``, then the
    row-major entries of ``Psi``.
    """

    covariance_divisor = ParameterProperty("Divisor of the conditional mean covariance.")
    location = ParameterProperty("Location vector of the mean.")
    degrees_of_freedom = ParameterProperty("Degrees of freedom, greater than d - 1.")
    inverse_scale = ParameterProperty("Scale matrix, symmetric positive definite.")

    def __init__(
        self,
        location: ArrayLike = (0.0, 0.0),
        covariance_divisor: float = 1.0,
        inverse_scale: ArrayLike | None = None,
        degrees_of_freedom: float | None = None,
    ) -> None:
        location_arr = np.array(location, dtype=float)
        if inverse_scale is None:
            inverse_scale = np.eye(location_arr.size)
        if degrees_of_freedom is None:
            degrees_of_freedom = location_arr.size + 2.0
        super().__init__(
            _DivisorLocationDofInverseScale(
                covariance_divisor=covariance_divisor,
                location=location_arr,
                degrees_of_freedom=degrees_of_freedom,
                inverse_scale=inverse_scale,
            )
        )

    @property
    def dimension(self) -> int:
        """Dimension ``d`` of the Gaussian the prior describes."""
        return int(self.parameters.location.size)

    @property
    def inverse_wishart(self) -> InverseWishartDistribution:
        """Marginal distribution of the covariance."""
        return InverseWishartDistribution(
            self.parameters.inverse_scale, self.parameters.degrees_of_freedom
        )

    @property
    def mean(self) -> NumericArray:
        """
        ``[u | Psi / (v - d - 1)]``.

        The covariance block is NaN for ``v <= d + 1`` and the mean column
        is NaN for ``v <= d``.
        """
        v, d = self.parameters.degrees_of_freedom, self.dimension
        location = self.parameters.location if v > d else np.full(d, np.nan)
        return np.column_stack([location, self.inverse_wishart.mean])

    @property
    def variance(self) -> NumericArray:
        """
        Variance of every entry of ``[m | S]``.

        The mean column holds ``diag(Psi) / (k (v - d - 1))``; the covariance
        block is the entrywise inverse-Wishart variance.
        """
        v, d = self.parameters.degrees_of_freedom, self.dimension
        if v <= d + 1.0:
            mean_column = np.full(d, np.inf if v > d else np.nan)
        else:
            mean_column = np.diag(self.parameters.inverse_scale) / (
                self.parameters.covariance_divisor * (v - d - 1.0)
            )
        return np.column_stack([mean_column, self.inverse_wishart.variance])

    def _points(self, x: ArrayLike) -> tuple[NumericArray, bool]:
        arr = np.asarray(x, dtype=float)
        d = self.dimension
        if arr.shape == (d, d + 1):
            return arr.reshape(1, d, d + 1), True
        if arr.ndim == 3 and arr.shape[1:] == (d, d + 1):
            return arr, False
        raise InvalidParameterError(
            f"Expected a {d} x {d + 1} matrix or an array of shape (n, {d}, {d + 1}), "
            f"got shape {arr.shape}"
        )

    def log_pdf(self, x: ArrayLike) -> float | NumericArray:
        points, single = self._points(x)
        p = self.parameters
        d = self.dimension
        means, covariances = points[:, :, 0], points[:, :, 1:]

        values = inverse_wishart_log_pdf(covariances, p.inverse_scale, p.degrees_of_freedom)
        valid = np.isfinite(values)
        if valid.any():
            scatter = covariances[valid]
            delta = means[valid] - p.location
            solved = np.linalg.solve(scatter, delta[:, :, None])[:, :, 0]
            mahalanobis = p.covariance_divisor * np.einsum("ij,ij->i", delta, solved)
            log_det = np.linalg.slogdet(scatter)[1] - d * math.log(p.covariance_divisor)
            values[valid] += -0.5 * (d * math.log(2.0 * math.pi) + log_det + mahalanobis)
        return self._finish(values, single)

    def pdf(self, x: ArrayLike) -> float | NumericArray:
        points, single = self._points(x)
        return self._finish(np.exp(np.atleast_1d(self.log_pdf(points))), single)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        """Draw ``n`` matrices ``[m | S]`` as an array of shape ``(n, d, d + 1)``."""
        n = check_sample_request(n, rng)
        p = self.parameters
        covariances = sample_inverse_wishart(p.inverse_scale, p.degrees_of_freedom, n, rng)
        roots = np.linalg.cholesky(covariances / p.covariance_divisor)
        noise = rng.standard_normal((n, self.dimension))
        means = p.location + np.einsum("nij,nj->ni", roots, noise)
        return np.concatenate([means[:, :, None], covariances], axis=2)


__all__ = ["NORMAL_INVERSE_WISHART", "NormalInverseWishartDistribution"]
