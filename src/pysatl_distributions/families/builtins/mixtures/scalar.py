"""
Mixtures of univariate continuous distributions and their EM learner.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
import warnings
from typing import TYPE_CHECKING, Any, Self

import numpy as np
from scipy.special import logsumexp

from pysatl_distributions.config import DEFAULT_SETTINGS
from pysatl_distributions.distributions.numerics import (
    as_scalar_or_array,
    ppf_from_cdf,
    vectorize_quantile,
)
from pysatl_distributions.distributions.statistics import validate_sample
from pysatl_distributions.distributions.strategies import check_sample_request
from pysatl_distributions.exceptions import ConvergenceWarning, InvalidParameterError
from pysatl_distributions.families.builtins.continuous.gaussian import (
    GaussianMaximumLikelihoodEstimator,
)
from pysatl_distributions.types import UnivariateContinuous

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import ArrayLike

    from pysatl_distributions.distributions.distribution import DistributionEstimator
    from pysatl_distributions.families.distribution import ContinuousUnivariateDistribution
    from pysatl_distributions.types import DistributionType, Number, NumericArray

logger = logging.getLogger(__name__)


def normalize_prior_weights(
    weights: ArrayLike | None, num_components: int
) -> NumericArray:
    """
    Validate mixture weights and scale them onto the simplex.

    ``None`` yields uniform weights.

    Raises
    ------
    InvalidParameterError
        If the weights have the wrong length, are negative or non-finite, or
        sum to zero.
    """
    if num_components < 1:
        raise InvalidParameterError("A mixture needs at least one component")
    if weights is None:
        return np.full(num_components, 1.0 / num_components)
    w = np.array(weights, dtype=float)
    if w.shape != (num_components,):
        raise InvalidParameterError(
            f"Expected {num_components} prior weights, got an array of shape {w.shape}"
        )
    if not np.all(np.isfinite(w)) or np.any(w < 0.0):
        raise InvalidParameterError("Prior weights must be finite and non-negative")
    total = w.sum()
    if total <= 0.0:
        raise InvalidParameterError("Prior weights must not sum to zero")
    return w / total


def check_simplex(
    weights: NumericArray, tolerance: float = DEFAULT_SETTINGS.simplex_tolerance
) -> None:
    """Raise :class:`InvalidParameterError` unless ``weights`` lie on the simplex."""
    if not np.all(np.isfinite(weights)) or np.any(weights < 0.0):
        raise InvalidParameterError("Prior weights must be finite and non-negative")
    if abs(weights.sum() - 1.0) > tolerance:
        raise InvalidParameterError("Prior weights must sum to one")


class ScalarMixtureDensityModel:
    """
    Weighted combination of univariate continuous distributions.

    Parameters
    ----------
    components : Sequence[ContinuousUnivariateDistribution]
        At least one component; each is copied.
    prior_weights : ArrayLike, optional
        Non-negative component weights, normalised to sum to one. Uniform
        when omitted.

    Notes
    -----
    The parameter vector is the prior weights followed by the parameter
    vector of every component, in order.
    """

    def __init__(
        self,
        components: Sequence[ContinuousUnivariateDistribution[Any]],
        prior_weights: ArrayLike | None = None,
    ) -> None:
        self._components = [component.copy() for component in components]
        self._weights = normalize_prior_weights(prior_weights, len(self._components))

    @property
    def components(self) -> list[ContinuousUnivariateDistribution[Any]]:
        """Copies of the components."""
        return [component.copy() for component in self._components]

    @property
    def prior_weights(self) -> NumericArray:
        return self._weights.copy()

    @property
    def num_components(self) -> int:
        return len(self._components)

    @property
    def distribution_type(self) -> DistributionType:
        return UnivariateContinuous

    def _component_log_pdfs(self, x: NumericArray) -> NumericArray:
        with np.errstate(divide="ignore"):
            log_weights = np.log(self._weights)
        return np.stack(
            [
                log_w + np.asarray(component.log_pdf(x), dtype=float)
                for log_w, component in zip(log_weights, self._components, strict=True)
            ]
        )

    def log_pdf(self, x: Number | NumericArray) -> float | NumericArray:
        arr = np.asarray(x, dtype=float)
        with np.errstate(divide="ignore", invalid="ignore"):
            values = logsumexp(self._component_log_pdfs(arr), axis=0)
        return as_scalar_or_array(np.asarray(values, dtype=float), x)

    def pdf(self, x: Number | NumericArray) -> float | NumericArray:
        arr = np.asarray(x, dtype=float)
        values = sum(
            w * np.asarray(component.pdf(arr), dtype=float)
            for w, component in zip(self._weights, self._components, strict=True)
        )
        return as_scalar_or_array(np.asarray(values, dtype=float), x)

    def cdf(self, x: Number | NumericArray) -> float | NumericArray:
        arr = np.asarray(x, dtype=float)
        values = sum(
            w * np.asarray(component.cdf(arr), dtype=float)
            for w, component in zip(self._weights, self._components, strict=True)
        )
        return as_scalar_or_array(np.clip(np.asarray(values, dtype=float), 0.0, 1.0), x)

    def ppf(self, p: Number | NumericArray) -> float | NumericArray:
        """Quantile found by numerically inverting :meth:`cdf`."""
        lower = min(component.support.left for component in self._components)
        upper = max(component.support.right for component in self._components)
        mean, variance = self.mean, self.variance
        step = math.sqrt(variance) if math.isfinite(variance) and variance > 0.0 else 1.0

        def quantile(q: float) -> float:
            if q != q:
                return math.nan
            return ppf_from_cdf(
                lambda v: float(self.cdf(v)), q, x0=mean, init_step=step, lower=lower, upper=upper
            )

        return vectorize_quantile(quantile, p)

    @property
    def mean(self) -> float:
        return float(
            sum(w * c.mean for w, c in zip(self._weights, self._components, strict=True))
        )

    @property
    def variance(self) -> float:
        """Law of total variance over the components."""
        second_moment = sum(
            w * (c.variance + c.mean**2)
            for w, c in zip(self._weights, self._components, strict=True)
        )
        return float(second_moment - self.mean**2)

    def component_probabilities(self, x: Number | NumericArray) -> NumericArray:
        """
        Posterior probability of every component given ``x``.

        Returns an array of shape ``(K,)`` for a scalar and ``(n, K)`` for
        ``n`` points. Points with zero density under every component get
        all-zero rows.
        """
        arr = np.asarray(x, dtype=float)
        log_joint = self._component_log_pdfs(arr.reshape(-1))
        with np.errstate(divide="ignore", invalid="ignore"):
            total = logsumexp(log_joint, axis=0)
            probabilities = np.zeros_like(log_joint)
            finite = np.isfinite(total)
            probabilities[:, finite] = np.exp(log_joint[:, finite] - total[finite])
        probabilities = probabilities.T
        return probabilities[0] if arr.ndim == 0 else probabilities.reshape(*arr.shape, -1)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        """Pick a component by prior weight, then draw from it."""
        n = check_sample_request(n, rng)
        choices = rng.choice(self.num_components, size=n, p=self._weights)
        out = np.empty(n)
        for k, component in enumerate(self._components):
            mask = choices == k
            count = int(mask.sum())
            if count:
                out[mask] = component.sample(count, rng)
        return out

    def convert_to_vector(self) -> NumericArray:
        return np.concatenate(
            [self._weights] + [component.convert_to_vector() for component in self._components]
        )

    def convert_from_vector(self, vector: ArrayLike) -> None:
        """
        Replace the weights and component parameters from ``vector``.

        Raises
        ------
        InvalidParameterError
            If the vector has the wrong length, its weight block is off the
            simplex or a component block is invalid; the mixture is then
            left unchanged.
        """
        if vector is None:
            raise InvalidParameterError("Parameter vector must not be None")
        flat = np.asarray(vector, dtype=float)
        expected = self.convert_to_vector().size
        if flat.ndim != 1 or flat.size != expected:
            raise InvalidParameterError(
                f"Expected a parameter vector of dimension {expected}, got shape {flat.shape}"
            )
        k = self.num_components
        weights = flat[:k].copy()
        check_simplex(weights)

        components = []
        offset = k
        for component in self._components:
            size = component.convert_to_vector().size
            updated = component.copy()
            updated.convert_from_vector(flat[offset : offset + size])
            components.append(updated)
            offset += size
        self._weights = weights
        self._components = components

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


class ScalarMixtureEMLearner:
    """
    Soft-assignment expectation-maximisation for :class:`ScalarMixtureDensityModel`.

    Initial centres are random observations jittered by standard normal
    noise; points are softly assigned to centres in proportion to
    ``exp(-|x - centre|)``. Each iteration recomputes the responsibilities,
    re-fits every component with its weighted estimator and sets the prior
    weights to the responsibility shares. Iteration stops once the total
    absolute change of the responsibilities is at most ``tolerance``.

    Parameters
    ----------
    num_components : int, default 2
        Number of components, used with ``estimator``.
    estimator : DistributionEstimator, optional
        Weighted estimator shared by every component. Defaults to the
        Gaussian maximum-likelihood estimator with a default variance of 1.
    component_estimators : Sequence[DistributionEstimator], optional
        One estimator per component; overrides ``num_components`` and
        ``estimator``.
    max_iterations : int
        Iteration cap; reaching it issues :class:`ConvergenceWarning`.
    tolerance : float
        Responsibility change under which the learner stops.
    rng : numpy.random.Generator
        Source of the random initial centres.

    Attributes
    ----------
    performance : float
        Responsibility change of the last iteration.
    iterations : int
        Number of iterations performed by the last :meth:`learn` call.
    converged : bool
        Whether the last :meth:`learn` call met the tolerance.
    """

    PERFORMANCE_NAME = "Assignment Change"

    def __init__(
        self,
        num_components: int = 2,
        estimator: DistributionEstimator[Any] | None = None,
        *,
        component_estimators: Sequence[DistributionEstimator[Any]] | None = None,
        max_iterations: int = DEFAULT_SETTINGS.mixture_max_iterations,
        tolerance: float = DEFAULT_SETTINGS.mixture_tolerance,
        rng: np.random.Generator,
    ) -> None:
        if component_estimators is None:
            if num_components < 1:
                raise InvalidParameterError("num_components must be at least 1")
            shared = estimator or GaussianMaximumLikelihoodEstimator(default_variance=1.0)
            component_estimators = [shared] * num_components
        if not component_estimators:
            raise InvalidParameterError("At least one component estimator is required")
        if max_iterations < 1:
            raise InvalidParameterError("max_iterations must be at least 1")
        if not tolerance >= 0.0:
            raise InvalidParameterError("tolerance must be non-negative")
        if not isinstance(rng, np.random.Generator):
            raise InvalidParameterError("A numpy.random.Generator must be provided")

        self.component_estimators = list(component_estimators)
        self.max_iterations = max_iterations
        self.tolerance = tolerance
        self.rng = rng
        self.performance = math.nan
        self.iterations = 0
        self.converged = False

    @property
    def num_components(self) -> int:
        return len(self.component_estimators)

    def _initial_assignments(self, data: NumericArray) -> NumericArray:
        k = self.num_components
        centres = data[self.rng.integers(data.size, size=k)] + self.rng.standard_normal(k)
        distances = np.abs(data[:, None] - centres[None, :])
        affinity = np.exp(-(distances - distances.min(axis=1, keepdims=True)))
        return affinity / affinity.sum(axis=1, keepdims=True)

    def _fit_components(
        self, data: NumericArray, weights: NumericArray, assignments: NumericArray
    ) -> list[Any]:
        return [
            estimator.learn(data, weights * assignments[:, k])
            for k, estimator in enumerate(self.component_estimators)
        ]

    def learn(
        self, data: ArrayLike, weights: ArrayLike | None = None
    ) -> ScalarMixtureDensityModel:
        arr, w = validate_sample(data, weights)
        if w is None:
            w = np.ones_like(arr)

        assignments = self._initial_assignments(arr)
        priors = (w[:, None] * assignments).sum(axis=0) / w.sum()
        mixture = ScalarMixtureDensityModel(self._fit_components(arr, w, assignments), priors)

        self.converged = False
        self.performance = float(arr.size)
        self.iterations = 0
        for iteration in range(1, self.max_iterations + 1):
            self.iterations = iteration
            responsibilities = mixture.component_probabilities(arr)
            empty = responsibilities.sum(axis=1) <= 0.0
            responsibilities[empty] = 1.0 / self.num_components

            self.performance = float(np.abs(responsibilities - assignments).sum())
            assignments = responsibilities
            priors = (w[:, None] * assignments).sum(axis=0) / w.sum()
            logger.debug(
                "EM iteration %d: %s=%.6g", iteration, self.PERFORMANCE_NAME, self.performance
            )
            if self.performance <= self.tolerance:
                self.converged = True
                return ScalarMixtureDensityModel(mixture.components, priors)

            mixture = ScalarMixtureDensityModel(self._fit_components(arr, w, assignments), priors)

        warnings.warn(
            f"Mixture EM did not converge within {self.max_iterations} iterations "
            f"({self.PERFORMANCE_NAME.lower()} {self.performance:.3g})",
            ConvergenceWarning,
            stacklevel=2,
        )
        return mixture


__all__ = [
    "ScalarMixtureDensityModel",
    "ScalarMixtureEMLearner",
    "normalize_prior_weights",
    "check_simplex",
]
