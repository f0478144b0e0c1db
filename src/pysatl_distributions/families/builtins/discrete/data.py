"""
Empirical distributions over observed values.

A data distribution keeps a non-negative count per key and normalises by
the running total. Counts never go below zero: a decrement past zero clamps
the count to zero (the key stays in the domain) and an increment of a
missing key by a non-positive amount is ignored.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, Self

import numpy as np
from scipy.special import entr

from pysatl_distributions.distributions.numerics import as_scalar_or_array
from pysatl_distributions.distributions.statistics import validate_sample
from pysatl_distributions.distributions.strategies import (
    DiscreteTableSamplingStrategy,
    check_sample_request,
)
from pysatl_distributions.distributions.support import ExplicitTableDiscreteSupport
from pysatl_distributions.exceptions import InvalidParameterError

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from pysatl_distributions.types import Number, NumericArray


class DataDistribution[K: Hashable]:
    """
    Counts over hashable keys, read as a probability mass function.

    Parameters
    ----------
    data : Iterable[K] or Mapping[K, float], optional
        Initial observations, each counted once, or a mapping of keys to
        counts.
    """

    def __init__(self, data: Iterable[K] | Mapping[K, float] | None = None) -> None:
        self._counts: dict[K, float] = {}
        self._total = 0.0
        if data is not None:
            self.increment_all(data)

    def increment(self, key: K, amount: float = 1.0) -> float:
        """
        Add ``amount`` to the count of ``key``.

        Returns
        -------
        float
            The new count of ``key``.
        """
        amount = float(amount)
        current = self._counts.get(key)
        if current is None:
            if amount > 0.0:
                self._counts[key] = amount
                self._total += amount
            return max(amount, 0.0)

        updated = current + amount
        if updated < 0.0:
            updated = 0.0
        self._total += updated - current
        self._counts[key] = updated
        return updated

    def decrement(self, key: K, amount: float = 1.0) -> float:
        """Subtract ``amount`` from the count of ``key``, clamping at zero."""
        return self.increment(key, -amount)

    def increment_all(self, data: Iterable[K] | Mapping[K, float]) -> None:
        if isinstance(data, DataDistribution):
            data = data.as_dict()
        if isinstance(data, Mapping):
            for key, amount in data.items():
                self.increment(key, amount)
        else:
            for key in data:
                self.increment(key)

    def set(self, key: K, value: float) -> None:
        """
        Set the count of ``key``.

        Non-positive values zero an existing key and are ignored for a
        missing one.
        """
        value = max(float(value), 0.0)
        current = self._counts.get(key)
        if current is None:
            if value > 0.0:
                self._counts[key] = value
                self._total += value
            return
        self._total += value - current
        self._counts[key] = value

    def get(self, key: K) -> float:
        """Count of ``key``; 0 for keys outside the domain."""
        return self._counts.get(key, 0.0)

    def as_dict(self) -> dict[K, float]:
        return dict(self._counts)

    @property
    def total(self) -> float:
        return self._total

    @property
    def domain(self) -> list[K]:
        """Keys in insertion order, including keys whose count dropped to 0."""
        return list(self._counts)

    @property
    def domain_size(self) -> int:
        return len(self._counts)

    def fraction(self, key: K) -> float:
        """Share of the total held by ``key``; 0 when the total is 0."""
        return self.get(key) / self._total if self._total > 0.0 else 0.0

    def log_fraction(self, key: K) -> float:
        fraction = self.fraction(key)
        return math.log(fraction) if fraction > 0.0 else -math.inf

    def pmf(self, key: K) -> float:
        return self.fraction(key)

    def log_pmf(self, key: K) -> float:
        return self.log_fraction(key)

    @property
    def max_value_key(self) -> K | None:
        """Key with the largest count (the first one on ties); ``None`` if empty."""
        if not self._counts:
            return None
        return max(self._counts, key=self._counts.__getitem__)

    @property
    def max_value(self) -> float:
        return max(self._counts.values(), default=0.0)

    @property
    def entropy(self) -> float:
        """Entropy of the normalised counts, in bits."""
        if self._total <= 0.0:
            return 0.0
        fractions = np.fromiter(self._counts.values(), dtype=float) / self._total
        return float(entr(fractions).sum() / math.log(2.0))

    def sample(self, n: int, rng: np.random.Generator) -> list[K]:
        """
        Draw ``n`` keys with probability proportional to their counts.

        Raises
        ------
        InvalidParameterError
            If the distribution holds no mass.
        """
        n = check_sample_request(n, rng)
        if self._total <= 0.0:
            raise InvalidParameterError("Cannot sample from an empty data distribution")
        keys = list(self._counts)
        table = DiscreteTableSamplingStrategy(np.arange(len(keys)), list(self._counts.values()))
        return [keys[i] for i in table.draw(n, rng).tolist()]

    def clear(self) -> None:
        self._counts.clear()
        self._total = 0.0

    def copy(self) -> Self:
        clone = type(self).__new__(type(self))
        clone._counts = dict(self._counts)
        clone._total = self._total
        return clone

    def __copy__(self) -> Self:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self.copy()

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, key: object) -> bool:
        return key in self._counts

    def __iter__(self) -> Iterator[K]:
        return iter(self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataDistribution):
            return NotImplemented
        return self._counts == other._counts

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._counts!r})"


class ScalarDataDistribution(DataDistribution[float]):
    """
    Data distribution over real values, with moments, CDF and quantiles.

    Evaluators accept scalars or arrays, like the parametric univariate
    distributions.
    """

    def increment(self, key: float, amount: float = 1.0) -> float:
        return super().increment(float(key), amount)

    def set(self, key: float, value: float) -> None:
        super().set(float(key), value)

    def get(self, key: float) -> float:
        return super().get(float(key))

    def _table(self) -> tuple[NumericArray, NumericArray]:
        keys = np.fromiter(self._counts, dtype=float, count=len(self._counts))
        counts = np.fromiter(self._counts.values(), dtype=float, count=len(self._counts))
        order = np.argsort(keys)
        return keys[order], counts[order]

    @property
    def support(self) -> ExplicitTableDiscreteSupport:
        return ExplicitTableDiscreteSupport(self._counts)

    @property
    def mean(self) -> float:
        """Weighted mean of the keys; 0 when the total is 0."""
        if self._total <= 0.0:
            return 0.0
        keys, counts = self._table()
        return float(np.dot(keys, counts) / self._total)

    @property
    def variance(self) -> float:
        """Population variance of the keys weighted by their counts."""
        if self._total <= 0.0:
            return 0.0
        keys, counts = self._table()
        deviations = keys - self.mean
        return float(np.dot(counts, deviations * deviations) / self._total)

    def pmf(self, x: Any) -> Any:
        arr = np.asarray(x, dtype=float)
        values = np.array([self.fraction(v) for v in arr.reshape(-1).tolist()]).reshape(arr.shape)
        return as_scalar_or_array(values, x)

    def log_pmf(self, x: Any) -> Any:
        with np.errstate(divide="ignore"):
            return as_scalar_or_array(np.log(np.asarray(self.pmf(x), dtype=float)), x)

    def cdf(self, x: Number | NumericArray) -> float | NumericArray:
        """Share of the total held by keys ``<= x``; 0 when the total is 0."""
        arr = np.asarray(x, dtype=float)
        if self._total <= 0.0:
            return as_scalar_or_array(np.zeros(arr.shape), x)
        keys, counts = self._table()
        cumulative = np.concatenate(([0.0], np.cumsum(counts))) / self._total
        values = np.clip(cumulative[np.searchsorted(keys, arr, side="right")], 0.0, 1.0)
        values = np.where(np.isnan(arr), np.nan, values)
        return as_scalar_or_array(values, x)

    def ppf(self, p: Number | NumericArray) -> float | NumericArray:
        """
        Smallest key whose CDF reaches ``p``.

        Raises
        ------
        InvalidParameterError
            If the distribution holds no mass.
        """
        if self._total <= 0.0:
            raise InvalidParameterError("Quantiles of an empty data distribution are undefined")
        keys, counts = self._table()
        keys, counts = keys[counts > 0.0], counts[counts > 0.0]
        cumulative = np.cumsum(counts) / self._total
        arr = np.asarray(p, dtype=float)
        index = np.searchsorted(cumulative, np.clip(arr, 0.0, 1.0), side="left")
        values = keys[np.minimum(index, keys.size - 1)]
        values = np.where(np.isnan(arr), np.nan, values)
        return as_scalar_or_array(values, p)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:  # type: ignore[override]
        n = check_sample_request(n, rng)
        if self._total <= 0.0:
            raise InvalidParameterError("Cannot sample from an empty data distribution")
        keys, counts = self._table()
        return DiscreteTableSamplingStrategy(keys, counts).draw(n, rng)

    @staticmethod
    def estimator() -> ScalarDataDistributionEstimator:
        return ScalarDataDistributionEstimator()


class DataDistributionEstimator[K: Hashable]:
    """
    Batch and incremental learner of :class:`DataDistribution`.

    Each observation adds its weight (1 when unweighted) to its key.
    """

    def create_initial(self) -> DataDistribution[K]:
        return DataDistribution()

    def update(self, statistic: DataDistribution[K], value: K, weight: float = 1.0) -> None:
        statistic.increment(value, weight)

    def learn(
        self, data: Iterable[K], weights: Iterable[float] | None = None
    ) -> DataDistribution[K]:
        """
        Count the observations into a fresh distribution.

        Raises
        ------
        InvalidParameterError
            If ``weights`` does not hold one weight per observation.
        """
        statistic = self.create_initial()
        if weights is None:
            for value in data:
                self.update(statistic, value)
            return statistic

        values, amounts = list(data), list(weights)
        if len(amounts) != len(values):
            raise InvalidParameterError(f"Expected {len(values)} weights, got {len(amounts)}")
        for value, weight in zip(values, amounts):
            self.update(statistic, value, weight)
        return statistic


class ScalarDataDistributionEstimator(DataDistributionEstimator[float]):
    """Learner of :class:`ScalarDataDistribution` from real-valued observations."""

    def create_initial(self) -> ScalarDataDistribution:
        return ScalarDataDistribution()

    def learn(  # type: ignore[override]
        self, data: ArrayLike, weights: ArrayLike | None = None
    ) -> ScalarDataDistribution:
        arr, w = validate_sample(data, weights)
        if w is None:
            return super().learn(arr.tolist())  # type: ignore[return-value]
        return super().learn(arr.tolist(), w.tolist())  # type: ignore[return-value]


__all__ = [
    "DataDistribution",
    "ScalarDataDistribution",
    "DataDistributionEstimator",
    "ScalarDataDistributionEstimator",
]
