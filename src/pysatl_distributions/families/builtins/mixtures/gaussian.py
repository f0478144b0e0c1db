"""
Mixtures of multivariate Gaussians and their soft EM learner.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
import warnings
from typing import TYPE_CHECKING

import numpy as np

from pysatl_distributions.config import DEFAULT_SETTINGS
from pysatl_distributions.distributions.statistics import validate_sample
from pysatl_distributions.exceptions import ConvergenceWarning, InvalidParameterError
from pysatl_distributions.families.builtins.mixtures.multivariate import (
    MultivariateMixtureDensityModel,
)
from pysatl_distributions.families.builtins.multivariate.gaussian import (
    MultivariateGaussian,
    MultivariateGaussianMaximumLikelihoodEstimator,
)

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from pysatl_distributions.types import NumericArray

logger = logging.getLogger(__name__)


class MixtureOfGaussians(MultivariateMixtureDensityModel[MultivariateGaussian]):
    """
    Weighted combination of multivariate Gaussians of one dimension.

    Parameters
    ----------
    components : Sequence[MultivariateGaussian]
        At least one Gaussian; each is copied.
    prior_weights : ArrayLike, optional
        Non-negative component weights, normalised to sum to one. Uniform
        when omitted.

    Notes
    -----
    The parameter vector holds the prior weights only; the component
    Gaussians are not part of it.
    """

    def fit_single_gaussian(self) -> MultivariateGaussian:
        """Gaussian with the mean and covariance of the mixture."""
        return MultivariateGaussian(self.mean, self.variance)


def _relative_change(old: NumericArray, new: NumericArray) -> float:
    scale = float(np.linalg.norm(old))
    return float(np.linalg.norm(new - old)) / (scale if scale > 0.0 else 1.0)


class MixtureOfGaussiansEMLearner:
    """
    Soft expectation-maximisation for :class:`MixtureOfGaussians`.

    Every component starts from the maximum-likelihood Gaussian of the
    pooled data, with its covariance scaled by ``covariance_scale**k`` for
    the ``k``-th component, and equal prior weights. Iteration stops when
    every component's mean and covariance move by less than
    ``converge_tolerance`` relative to their previous norms.

    Parameters
    ----------
    num_components : int, default 2
        Number of Gaussians.
    max_iterations : int
        Iteration cap; reaching it issues :class:`ConvergenceWarning`.
    converge_tolerance : float
        Relative parameter change under which the learner stops.
    covariance_scale : float, default 0.5
        Factor between the initial covariances of successive components.

    Attributes
    ----------
    performance : float
        Largest relative change of a mean or covariance in the last
        iteration.
    iterations : int
        Number of iterations performed by the last :meth:`learn` call.
    converged : bool
        Whether the last :meth:`learn` call met the tolerance.
    """

    def __init__(
        self,
        num_components: int = 2,
        max_iterations: int = DEFAULT_SETTINGS.gaussian_mixture_max_iterations,
        converge_tolerance: float = DEFAULT_SETTINGS.gaussian_mixture_tolerance,
        covariance_scale: float = 0.5,
    ) -> None:
        if num_components < 1:
            raise InvalidParameterError("num_components must be at least 1")
        if max_iterations < 1:
            raise InvalidParameterError("max_iterations must be at least 1")
        if not 0.0 < covariance_scale <= 1.0:
            raise InvalidParameterError("covariance_scale must be in (0, 1]")
        self.num_components = num_components
        self.max_iterations = max_iterations
        self.converge_tolerance = converge_tolerance
        self.covariance_scale = covariance_scale
        self.performance = math.nan
        self.iterations = 0
        self.converged = False

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> MixtureOfGaussians:
        arr, w = validate_sample(data, weights, ndim=2)
        estimator = MultivariateGaussianMaximumLikelihoodEstimator()

        pooled = estimator.learn(arr, w)
        if w is None:
            w = np.ones(arr.shape[0])
        components = [
            MultivariateGaussian(
                pooled.parameters.mean, pooled.parameters.covariance * self.covariance_scale**k
            )
            for k in range(self.num_components)
        ]
        mixture = MixtureOfGaussians(components)

        self.converged = False
        self.iterations = 0
        for iteration in range(1, self.max_iterations + 1):
            self.iterations = iteration
            responsibilities = w[:, None] * mixture.component_probabilities(arr)
            priors = responsibilities.sum(axis=0) / w.sum()
            updated = [
                estimator.learn(arr, responsibilities[:, k]) for k in range(self.num_components)
            ]

            changes = [
                max(
                    _relative_change(old.parameters.mean, new.parameters.mean),
                    _relative_change(old.parameters.covariance, new.parameters.covariance),
                )
                for old, new in zip(mixture.components, updated, strict=True)
            ]
            self.performance = max(changes)
            logger.debug(
                "Gaussian mixture EM iteration %d: change=%.6g", iteration, self.performance
            )
            mixture = MixtureOfGaussians(updated, priors)
            if self.performance <= self.converge_tolerance:
                self.converged = True
                return mixture

        warnings.warn(
            f"Gaussian mixture EM did not converge within {self.max_iterations} iterations",
            ConvergenceWarning,
            stacklevel=2,
        )
        return mixture


__all__ = ["MixtureOfGaussians", "MixtureOfGaussiansEMLearner"]
