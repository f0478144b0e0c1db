"""
Mixtures of multivariate continuous distributions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, Self

import numpy as np
from scipy.special import logsumexp

from pysatl_distributions.distributions.strategies import check_sample_request
from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.families.builtins.mixtures.scalar import (
    check_simplex,
    normalize_prior_weights,
)
from pysatl_distributions.types import EuclideanDistributionType, Kind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import ArrayLike

    from pysatl_distributions.families.distribution import MultivariateDistribution
    from pysatl_distributions.types import DistributionType, NumericArray


class MultivariateMixtureDensityModel[C: MultivariateDistribution[Any]]:
    """
    Weighted combination of multivariate continuous distributions.

    The components may come from different families as long as they share
    the dimension of their observations.

    Parameters
    ----------
    components : Sequence[MultivariateDistribution]
        At least one distribution with a density; each is copied.
    prior_weights : ArrayLike, optional
        Non-negative component weights, normalised to sum to one. Uniform
        when omitted.

    Notes
    -----
    The parameter vector holds the prior weights only; the component
    parameters are not part of it.
    """

    def __init__(self, components: Sequence[C], prior_weights: ArrayLike | None = None) -> None:
        self._components = [component.copy() for component in components]
        self._weights = normalize_prior_weights(prior_weights, len(self._components))
        dimensions = {component.dimension for component in self._components}
        if len(dimensions) != 1:
            raise InvalidParameterError("All components must have the same dimension")

    @property
    def components(self) -> list[C]:
        """Copies of the components."""
        return [component.copy() for component in self._components]

    @property
    def prior_weights(self) -> NumericArray:
        return self._weights.copy()

    @property
    def num_components(self) -> int:
        return len(self._components)

    @property
    def dimension(self) -> int:
        return self._components[0].dimension

    @property
    def distribution_type(self) -> DistributionType:
        return EuclideanDistributionType(kind=Kind.CONTINUOUS, dimension=self.dimension)

    def _points(self, x: ArrayLike) -> tuple[NumericArray, bool]:
        return self._components[0]._points(x)

    def _log_joint(self, points: NumericArray) -> NumericArray:
        with np.errstate(divide="ignore"):
            log_weights = np.log(self._weights)
        return np.stack(
            [
                log_w + np.atleast_1d(component.log_pdf(points))
                for log_w, component in zip(log_weights, self._components, strict=True)
            ],
            axis=1,
        )

    def log_pdf(self, x: ArrayLike) -> float | NumericArray:
        points, single = self._points(x)
        with np.errstate(divide="ignore", invalid="ignore"):
            values = logsumexp(self._log_joint(points), axis=1)
        return float(values[0]) if single else values

    def pdf(self, x: ArrayLike) -> float | NumericArray:
        points, single = self._points(x)
        values = np.exp(np.atleast_1d(self.log_pdf(points)))
        return float(values[0]) if single else values

    def component_likelihoods(self, x: ArrayLike) -> NumericArray:
        """Density of ``x`` under every component, without the prior weights."""
        points, single = self._points(x)
        values = np.stack(
            [np.atleast_1d(component.pdf(points)) for component in self._components], axis=1
        )
        return values[0] if single else values

    def component_probabilities(self, x: ArrayLike) -> NumericArray:
        """
        Posterior probability of every component given ``x``.

        Points with zero density under every component fall back to the
        prior weights.
        """
        points, single = self._points(x)
        log_joint = self._log_joint(points)
        with np.errstate(divide="ignore", invalid="ignore"):
            total = logsumexp(log_joint, axis=1, keepdims=True)
            probabilities = np.exp(log_joint - total)
        unresolved = ~np.isfinite(total[:, 0])
        probabilities[unresolved] = self._weights
        return probabilities[0] if single else probabilities

    def most_likely_component(self, x: ArrayLike) -> int | NumericArray:
        """Index of the component with the largest posterior probability."""
        probabilities = self.component_probabilities(x)
        if probabilities.ndim == 1:
            return int(np.argmax(probabilities))
        return np.argmax(probabilities, axis=1)

    @property
    def mean(self) -> NumericArray:
        return np.sum(
            [w * np.asarray(c.mean) for w, c in zip(self._weights, self._components, strict=True)],
            axis=0,
        )

    @property
    def variance(self) -> NumericArray:
        """Covariance matrix by the law of total covariance."""
        mean = self.mean
        covariance = np.zeros((self.dimension, self.dimension))
        for w, component in zip(self._weights, self._components, strict=True):
            delta = np.asarray(component.mean) - mean
            covariance += w * (np.asarray(component.variance) + np.outer(delta, delta))
        return 0.5 * (covariance + covariance.T)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        """Pick a component by prior weight, then draw from it."""
        n = check_sample_request(n, rng)
        choices = rng.choice(self.num_components, size=n, p=self._weights)
        out = np.empty((n, self.dimension))
        for k, component in enumerate(self._components):
            mask = choices == k
            count = int(mask.sum())
            if count:
                out[mask] = component.sample(count, rng)
        return out

    def convert_to_vector(self) -> NumericArray:
        return self._weights.copy()

    def convert_from_vector(self, vector: ArrayLike) -> None:
        """
        Replace the prior weights.

        Raises
        ------
        InvalidParameterError
            If the vector has the wrong length or is off the simplex; the
            mixture is then left unchanged.
        """
        if vector is None:
            raise InvalidParameterError("Parameter vector must not be None")
        weights = np.array(vector, dtype=float)
        if weights.shape != self._weights.shape:
            raise InvalidParameterError(
                f"Expected {self.num_components} prior weights, got shape {weights.shape}"
            )
        check_simplex(weights)
        self._weights = weights

    def copy(self) -> Self:
        return type(self)(self._components, self._weights)

    def __copy__(self) -> Self:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self.copy()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(components={self._components!r}, "
            f"prior_weights={self._weights!r})"
        )


__all__ = ["MultivariateMixtureDensityModel"]
