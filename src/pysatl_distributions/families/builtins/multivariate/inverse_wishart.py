"""
Inverse-Wishart distribution family implementation.

Observations are symmetric positive definite ``p x p`` matrices; evaluators
take a single matrix or a stack of shape ``(n, p, p)``.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import multigammaln

from pysatl_distributions.distributions.strategies import check_sample_request
from pysatl_distributions.exceptions import InvalidParameterError
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


def as_matrix_stack(x: ArrayLike, p: int) -> tuple[NumericArray, bool]:
    """
    Read ``x`` as one ``p x p`` matrix or a stack of them.

    Returns
    -------
    tuple[NumericArray, bool]
        Array of shape ``(n, p, p)`` and whether ``x`` was a single matrix.
    """
    arr = np.asarray(x, dtype=float)
    if arr.shape == (p, p):
        return arr.reshape(1, p, p), True
    if arr.ndim == 3 and arr.shape[1:] == (p, p):
        return arr, False
    raise InvalidParameterError(
        f"Expected a {p} x {p} matrix or an array of shape (n, {p}, {p}), got shape {arr.shape}"
    )


def inverse_wishart_log_pdf(
    matrices: NumericArray, inverse_scale: NumericArray, degrees_of_freedom: float
) -> NumericArray:
    """
    Log-density of a stack of matrices; ``-inf`` for matrices that are not
    symmetric positive definite.
    """
    p = inverse_scale.shape[0]
    v = degrees_of_freedom
    values = np.full(matrices.shape[0], -math.inf)
    valid = np.array([is_symmetric_positive_definite(m) for m in matrices], dtype=bool)
    if not valid.any():
        return values

    good = matrices[valid]
    log_det = np.linalg.slogdet(good)[1]
    trace = np.trace(
        np.linalg.solve(good, np.broadcast_to(inverse_scale, good.shape)), axis1=1, axis2=2
    )
    norm = (
        0.5 * v * np.linalg.slogdet(inverse_scale)[1]
        - 0.5 * v * p * math.log(2.0)
        - multigammaln(0.5 * v, p)
    )
    values[valid] = norm - 0.5 * (v + p + 1.0) * log_det - 0.5 * trace
    return values


def sample_inverse_wishart(
    inverse_scale: NumericArray, degrees_of_freedom: float, n: int, rng: np.random.Generator
) -> NumericArray:
    """Draw ``n`` matrices by inverting Bartlett-decomposition Wishart draws."""
    p = inverse_scale.shape[0]
    factor = np.linalg.cholesky(np.linalg.inv(inverse_scale))
    bartlett = np.zeros((n, p, p))
    rows, cols = np.tril_indices(p, -1)
    bartlett[:, rows, cols] = rng.standard_normal((n, rows.size))
    diagonal = np.arange(p)
    bartlett[:, diagonal, diagonal] = np.sqrt(
        rng.chisquare(degrees_of_freedom - diagonal, size=(n, p))
    )
    root = factor @ bartlett
    draws = np.linalg.inv(root @ np.swapaxes(root, 1, 2))
    return 0.5 * (draws + np.swapaxes(draws, 1, 2))


INVERSE_WISHART = ParametricFamily(
    name=FamilyName.INVERSE_WISHART,
    distr_type=lambda params: EuclideanDistributionType(
        kind=Kind.CONTINUOUS, dimension=int(np.size(params.inverse_scale))
    ),
    distr_parametrizations=["dofInverseScale"],
)


@parametrization(family=INVERSE_WISHART, name="dofInverseScale")
class _DofInverseScale(Parametrization):
    """
    Parameters
    ----------
    degrees_of_freedom : float
        Degrees of freedom ``v > p - 1``.
    inverse_scale : NumericArray
        Symmetric positive definite ``p x p`` scale matrix ``Psi``.
    """

    degrees_of_freedom: float
    inverse_scale: NumericArray

    @constraint(description="inverse_scale is symmetric positive definite")
    def check_inverse_scale_spd(self) -> bool:
        return is_symmetric_positive_definite(self.inverse_scale)

    @constraint(description="p - 1 < degrees_of_freedom < inf")
    def check_dof(self) -> bool:
        return np.shape(self.inverse_scale)[0] - 1.0 < self.degrees_of_freedom < math.inf


@INVERSE_WISHART.bind
class InverseWishartDistribution(MultivariateDistribution[_DofInverseScale]):
    """
    Distribution of the inverse of a Wishart matrix; the conjugate prior of
    a Gaussian covariance.

    Probability density function:
        f(X) = |Psi|^(v/2) / (2^(v p/2) Gamma_p(v/2))
               * |X|^(-(v + p + 1)/2) * exp(-tr(Psi X^-1) / 2)

    Parameters
    ----------
    inverse_scale : ArrayLike, optional
        Scale matrix ``Psi``; copied. Defaults to the 2 x 2 identity.
    degrees_of_freedom : float, optional
        Degrees of freedom ``v > p - 1``. Defaults to ``p + 2``.

    Notes
    -----
    The parameter vector is the degrees of freedom followed by the
    row-major entries of ``Psi``.
    """

    degrees_of_freedom = ParameterProperty("Degrees of freedom, greater than p - 1.")
    inverse_scale = ParameterProperty("Scale matrix, symmetric positive definite.")

    def __init__(
        self, inverse_scale: ArrayLike | None = None, degrees_of_freedom: float | None = None
    ) -> None:
        psi = np.eye(2) if inverse_scale is None else np.array(inverse_scale, dtype=float)
        if degrees_of_freedom is None:
            degrees_of_freedom = np.shape(psi)[0] + 2.0 if psi.ndim == 2 else 4.0
        super().__init__(
            _DofInverseScale(degrees_of_freedom=degrees_of_freedom, inverse_scale=psi)
        )

    @property
    def dimension(self) -> int:
        """Order ``p`` of the matrices."""
        return int(self.parameters.inverse_scale.shape[0])

    @property
    def mean(self) -> NumericArray:
        """``Psi / (v - p - 1)`` for ``v > p + 1``; NaN entries otherwise."""
        v, p = self.parameters.degrees_of_freedom, self.dimension
        if v <= p + 1.0:
            return np.full((p, p), np.nan)
        return self.parameters.inverse_scale / (v - p - 1.0)

    @property
    def mode(self) -> NumericArray:
        v, p = self.parameters.degrees_of_freedom, self.dimension
        return self.parameters.inverse_scale / (v + p + 1.0)

    @property
    def variance(self) -> NumericArray:
        """
        Variance of every matrix entry.

        Finite for ``v > p + 3``, infinite for ``p + 1 < v <= p + 3`` and
        undefined (NaN) otherwise.
        """
        v, p = self.parameters.degrees_of_freedom, self.dimension
        if v <= p + 1.0:
            return np.full((p, p), np.nan)
        if v <= p + 3.0:
            return np.full((p, p), np.inf)
        psi = self.parameters.inverse_scale
        diagonal = np.diag(psi)
        numerator = (v - p + 1.0) * psi**2 + (v - p - 1.0) * np.outer(diagonal, diagonal)
        return numerator / ((v - p) * (v - p - 1.0) ** 2 * (v - p - 3.0))

    def _points(self, x: ArrayLike) -> tuple[NumericArray, bool]:
        return as_matrix_stack(x, self.dimension)

    def log_pdf(self, x: ArrayLike) -> float | NumericArray:
        matrices, single = self._points(x)
        values = inverse_wishart_log_pdf(
            matrices, self.parameters.inverse_scale, self.parameters.degrees_of_freedom
        )
        return self._finish(values, single)

    def pdf(self, x: ArrayLike) -> float | NumericArray:
        matrices, single = self._points(x)
        return self._finish(np.exp(np.atleast_1d(self.log_pdf(matrices))), single)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        """Draw ``n`` matrices as an array of shape ``(n, p, p)``."""
        n = check_sample_request(n, rng)
        return sample_inverse_wishart(
            self.parameters.inverse_scale, self.parameters.degrees_of_freedom, n, rng
        )


__all__ = [
    "INVERSE_WISHART",
    "InverseWishartDistribution",
    "as_matrix_stack",
    "inverse_wishart_log_pdf",
    "sample_inverse_wishart",
]
