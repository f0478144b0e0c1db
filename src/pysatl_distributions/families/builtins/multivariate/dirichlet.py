"""
Dirichlet distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

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
    from numpy.typing import ArrayLike

    from pysatl_distributions.types import NumericArray


DIRICHLET = ParametricFamily(
    name=FamilyName.DIRICHLET,
    distr_type=lambda params: EuclideanDistributionType(
        kind=Kind.CONTINUOUS, dimension=int(params.alpha.size)
    ),
    distr_parametrizations=["concentration"],
)


@parametrization(family=DIRICHLET, name="concentration")
class _Concentration(Parametrization):
    alpha: NumericArray

    @constraint(description="alpha is a vector of at least 2 entries")
    def check_shape(self) -> bool:
        return np.ndim(self.alpha) == 1 and np.size(self.alpha) >= 2

    @constraint(description="0 < alpha < inf")
    def check_alpha_positive(self) -> bool:
        return bool(np.all((self.alpha > 0.0) & np.isfinite(self.alpha)))


@DIRICHLET.bind
class DirichletDistribution(MultivariateDistribution[_Concentration]):
    """
    Distribution over the open probability simplex of dimension ``K``.

    Probability density function:
        f(x) = Gamma(sum a) / prod Gamma(a_i) * prod x_i^(a_i - 1)

    Parameters
    ----------
    alpha : ArrayLike, default (1, 1)
        Concentration parameters, ``K >= 2`` strictly positive values; copied.
    """

    alpha = ParameterProperty("Concentration parameters, strictly positive.")

    def __init__(self, alpha: ArrayLike = (1.0, 1.0)) -> None:
        super().__init__(_Concentration(alpha=alpha))

    @property
    def dimension(self) -> int:
        return int(self.parameters.alpha.size)

    @property
    def mean(self) -> NumericArray:
        alpha = self.parameters.alpha
        return alpha / alpha.sum()

    @property
    def variance(self) -> NumericArray:
        """Covariance matrix."""
        alpha = self.parameters.alpha
        mean = self.mean
        return (np.diag(mean) - np.outer(mean, mean)) / (alpha.sum() + 1.0)

    def _in_support(self, points: NumericArray) -> NumericArray:
        inside = np.all((points > 0.0) & (points < 1.0), axis=1)
        return inside & (np.abs(points.sum(axis=1) - 1.0) <= DEFAULT_SETTINGS.simplex_tolerance)

    def log_pdf(self, x: ArrayLike) -> float | NumericArray:
        """Log-density; ``-inf`` off the open simplex."""
        points, single = self._points(x)
        alpha = self.parameters.alpha
        log_norm = gammaln(alpha.sum()) - gammaln(alpha).sum()
        values = np.full(points.shape[0], -np.inf)
        inside = self._in_support(points)
        values[inside] = log_norm + xlogy(alpha - 1.0, points[inside]).sum(axis=1)
        return self._finish(values, single)

    def pdf(self, x: ArrayLike) -> float | NumericArray:
        points, single = self._points(x)
        return self._finish(np.exp(np.atleast_1d(self.log_pdf(points))), single)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        return rng.dirichlet(self.parameters.alpha, size=n)


__all__ = ["DIRICHLET", "DirichletDistribution"]
