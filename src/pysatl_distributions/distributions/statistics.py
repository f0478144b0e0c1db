"""
Sample Statistics
=================

Numerically stable summaries of (optionally weighted) observations used by
the estimators of the catalog.

Unweighted summaries use the unbiased (``n - 1``) variance; weighted ones
divide by the sum of the absolute weights.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import copy
from math import inf, sqrt
from typing import TYPE_CHECKING, Self

import numpy as np

from pysatl_distributions.exceptions import InvalidParameterError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from numpy.typing import ArrayLike

    from pysatl_distributions.types import Number, NumericArray


def validate_sample(
    data: ArrayLike, weights: ArrayLike | None = None, *, ndim: int = 1
) -> tuple[NumericArray, NumericArray | None]:
    """
    Convert observations (and weights) to fresh float arrays and check them.

    Parameters
    ----------
    data : ArrayLike
        Observations: a 1D sequence of scalars (``ndim=1``) or a 2D array of
        vectors, one per row (``ndim=2``).
    weights : ArrayLike, optional
        One weight per observation; absolute values are used.
    ndim : int, default 1
        Expected dimensionality of ``data``.

    Returns
    -------
    tuple[NumericArray, NumericArray | None]
        Copies of the observations and of the absolute weights.

    Raises
    ------
    InvalidParameterError
        On missing or empty data, non-finite values, wrong shape, a
        weights/data length mismatch or weights summing to zero.
    """
    if data is None:
        raise InvalidParameterError("Data must not be None")
    arr = np.array(data, dtype=float)
    if ndim == 2 and arr.ndim == 1 and arr.size > 0:
        arr = arr.reshape(-1, 1)
    if arr.ndim != ndim:
        raise InvalidParameterError(f"Expected {ndim}-dimensional data, got shape {arr.shape}")
    if arr.shape[0] == 0:
        raise InvalidParameterError("Data must contain at least one observation")
    if not np.all(np.isfinite(arr)):
        raise InvalidParameterError("Data must contain finite values only")

    if weights is None:
        return arr, None

    w = np.abs(np.array(weights, dtype=float))
    if w.shape != (arr.shape[0],):
        raise InvalidParameterError(
            f"Expected {arr.shape[0]} weights, got an array of shape {w.shape}"
        )
    if not np.all(np.isfinite(w)):
        raise InvalidParameterError("Weights must be finite")
    if w.sum() <= 0.0:
        raise InvalidParameterError("Weights must not sum to zero")
    return arr, w


def mean_and_variance(data: ArrayLike) -> tuple[float, float]:
    """
    Mean and unbiased variance of the observations in one pass.

    The variance of a single observation is 0.
    """
    arr, _ = validate_sample(data)
    stats = IncrementalSummaryStatistics()
    stats.update_all(arr)
    return stats.mean, stats.variance


def weighted_mean_and_variance(data: ArrayLike, weights: ArrayLike) -> tuple[float, float]:
    """
    Weighted mean and biased variance in one pass.

    Uses West's incremental update, dividing the squared deviations by the
    total absolute weight.
    """
    arr, w = validate_sample(data, weights)
    assert w is not None

    mean = 0.0
    m2 = 0.0
    total = 0.0
    for x, weight in zip(arr.tolist(), w.tolist(), strict=True):
        if weight == 0.0:
            continue
        total += weight
        delta = x - mean
        mean += delta * weight / total
        m2 += weight * delta * (x - mean)
    return mean, m2 / total


def _central_moments(arr: NumericArray, w: NumericArray) -> tuple[float, float]:
    total = float(w.sum())
    mean = float(np.dot(w, arr)) / total
    deviations = arr - mean
    m2 = float(np.dot(w, deviations**2)) / total
    m4 = float(np.dot(w, deviations**4)) / total
    return m2, m4


def kurtosis(data: ArrayLike) -> float:
    """
    Biased excess kurtosis ``m4 / m2**2 - 3``.

    Returns ``nan`` for a sample without spread.
    """
    arr, _ = validate_sample(data)
    m2, m4 = _central_moments(arr, np.ones_like(arr))
    return m4 / (m2 * m2) - 3.0 if m2 > 0.0 else float("nan")


def weighted_kurtosis(data: ArrayLike, weights: ArrayLike) -> float:
    """Weighted version of :func:`kurtosis` with absolute weights."""
    arr, w = validate_sample(data, weights)
    assert w is not None
    m2, m4 = _central_moments(arr, w)
    return m4 / (m2 * m2) - 3.0 if m2 > 0.0 else float("nan")


class IncrementalSummaryStatistics:
    """
    Running count, mean, variance, minimum and maximum of scalar data.

    The mean and the sum of squared deviations are updated with Welford's
    algorithm and partial summaries are combined with the pairwise formula
    of Chan et al., so results stay accurate for data with a large offset.

    An empty summary has mean and variance 0, minimum ``inf`` and maximum
    ``-inf``.
    """

    __slots__ = ("_count", "_mean", "_m2", "_min", "_max")

    def __init__(self) -> None:
        self.clear()

    def clear(self) -> None:
        self._count = 0
        self._mean = 0.0
        self._m2 = 0.0
        self._min = inf
        self._max = -inf

    def update(self, value: Number) -> None:
        x = float(value)
        self._count += 1
        delta = x - self._mean
        self._mean += delta / self._count
        self._m2 += delta * (x - self._mean)
        self._min = min(self._min, x)
        self._max = max(self._max, x)

    def update_all(self, values: Iterable[Number]) -> None:
        for value in np.asarray(values, dtype=float).ravel().tolist():
            self.update(value)

    def merge(self, other: IncrementalSummaryStatistics) -> None:
        """Fold ``other`` into this summary as if its data were observed here."""
        if other._count == 0:
            return
        if self._count == 0:
            self._count, self._mean, self._m2 = other._count, other._mean, other._m2
            self._min, self._max = other._min, other._max
            return

        count = self._count + other._count
        delta = other._mean - self._mean
        self._mean += delta * other._count / count
        self._m2 += other._m2 + delta * delta * self._count * other._count / count
        self._count = count
        self._min = min(self._min, other._min)
        self._max = max(self._max, other._max)

    def copy(self) -> Self:
        return copy.copy(self)

    def __add__(self, other: IncrementalSummaryStatistics) -> Self:
        result = self.copy()
        result.merge(other)
        return result

    @property
    def count(self) -> int:
        return self._count

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def sum_squared_differences(self) -> float:
        return self._m2

    @property
    def variance(self) -> float:
        """Unbiased variance, 0 for fewer than two observations."""
        return self._m2 / (self._count - 1) if self._count > 1 else 0.0

    @property
    def standard_deviation(self) -> float:
        return sqrt(self.variance)

    @property
    def min(self) -> float:
        return self._min

    @property
    def max(self) -> float:
        return self._max

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(count={self._count}, mean={self._mean}, "
            f"variance={self.variance}, min={self._min}, max={self._max})"
        )


__all__ = [
    "validate_sample",
    "mean_and_variance",
    "weighted_mean_and_variance",
    "kurtosis",
    "weighted_kurtosis",
    "IncrementalSummaryStatistics",
]
