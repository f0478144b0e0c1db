"""
Sampling Strategies
===================

Pluggable samplers used by distributions without a dedicated generator:

- :class:`SamplingStrategy` draws samples from a distribution.
- :class:`InverseTransformSamplingStrategy` applies ``ppf`` to i.i.d.
  uniforms ``U ~ U(0, 1)``.
- :class:`DiscreteTableSamplingStrategy` draws from an explicit table of
  points and probabilities.

Notes
-----
- Strategies are stateless; the random source is always passed in.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail, Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol

import numpy as np

from pysatl_distributions.exceptions import InvalidParameterError

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from pysatl_distributions.distributions.distribution import InvertibleCumulativeFunction
    from pysatl_distributions.types import NumericArray


def check_sample_request(n: int, rng: np.random.Generator) -> int:
    """
    Validate a sampling request.

    Raises
    ------
    InvalidParameterError
        If ``n`` is not a non-negative integer or ``rng`` is not a
        :class:`numpy.random.Generator`.
    """
    if isinstance(n, bool) or not isinstance(n, int | np.integer):
        raise InvalidParameterError(f"Sample size must be an integer, got {n!r}")
    if n < 0:
        raise InvalidParameterError(f"Sample size must be non-negative, got {n}")
    if not isinstance(rng, np.random.Generator):
        raise InvalidParameterError("A numpy.random.Generator must be provided")
    return int(n)


class SamplingStrategy(Protocol):
    """Protocol for sampling strategies."""

    def sample(
        self, n: int, distr: InvertibleCumulativeFunction, rng: np.random.Generator
    ) -> NumericArray: ...


class InverseTransformSamplingStrategy(SamplingStrategy):
    """
    Univariate sampler using inverse transform sampling.

    Returns
    -------
    NumericArray
        A 1D sample of shape ``(n,)``.
    """

    def sample(
        self, n: int, distr: InvertibleCumulativeFunction, rng: np.random.Generator
    ) -> NumericArray:
        n = check_sample_request(n, rng)
        return np.asarray(distr.ppf(rng.random(n)), dtype=float).reshape(n)


class DiscreteTableSamplingStrategy:
    """
    Sampler over an explicit table of points with given probabilities.

    Parameters
    ----------
    points : ArrayLike
        Support points.
    probabilities : ArrayLike
        Non-negative weights of the points; they are normalised.
    """

    __slots__ = ("_points", "_probabilities")

    def __init__(self, points: ArrayLike, probabilities: ArrayLike) -> None:
        self._points = np.array(points)
        weights = np.asarray(probabilities, dtype=float)
        if self._points.shape[0] != weights.shape[0] or weights.ndim != 1:
            raise InvalidParameterError("Points and probabilities must have matching lengths")
        total = weights.sum()
        if weights.size == 0 or total <= 0.0 or np.any(weights < 0.0):
            raise InvalidParameterError("Probabilities must be non-negative with a positive sum")
        self._probabilities = weights / total

    def draw(self, n: int, rng: np.random.Generator) -> NumericArray:
        n = check_sample_request(n, rng)
        indices = rng.choice(self._probabilities.size, size=n, p=self._probabilities)
        return self._points[indices]


__all__ = [
    "check_sample_request",
    "SamplingStrategy",
    "InverseTransformSamplingStrategy",
    "DiscreteTableSamplingStrategy",
]
