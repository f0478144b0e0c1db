"""
Distribution Interfaces
=======================

Capability protocols implemented by the distributions of the catalog:

- :class:`Distribution`: parameters, moments and sampling.
- :class:`VectorConvertible`: conversion to and from a flat parameter vector.
- :class:`DensityFunction` / :class:`MassFunction`: densities of continuous
  and mass functions of discrete distributions.
- :class:`CumulativeFunction` / :class:`InvertibleCumulativeFunction`:
  cumulative distribution functions and their quantiles.
- :class:`DistributionEstimator`, :class:`IncrementalEstimator` and
  :class:`SufficientStatistic`: batch and incremental learning.

Notes
-----
- Univariate evaluators accept scalars or arrays and return a ``float`` for
  a scalar input.
- Sampling always takes an explicit :class:`numpy.random.Generator`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import ArrayLike

    from pysatl_distributions.distributions.support import Support
    from pysatl_distributions.types import DistributionType, Number, NumericArray


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface."""

    @property
    def distribution_type(self) -> DistributionType: ...

    @property
    def parameters(self) -> Any: ...

    @property
    def mean(self) -> Any: ...

    @property
    def variance(self) -> Any: ...

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray: ...


@runtime_checkable
class VectorConvertible(Protocol):
    """Objects whose parameters round-trip through a flat float vector."""

    def convert_to_vector(self) -> NumericArray: ...

    def convert_from_vector(self, vector: ArrayLike) -> None: ...


@runtime_checkable
class DensityFunction(Protocol):
    def pdf(self, x: Any) -> Any: ...

    def log_pdf(self, x: Any) -> Any: ...


@runtime_checkable
class MassFunction(Protocol):
    @property
    def support(self) -> Support: ...

    def pmf(self, x: Any) -> Any: ...

    def log_pmf(self, x: Any) -> Any: ...


@runtime_checkable
class CumulativeFunction(Protocol):
    def cdf(self, x: Number | NumericArray) -> float | NumericArray: ...


@runtime_checkable
class InvertibleCumulativeFunction(CumulativeFunction, Protocol):
    def ppf(self, p: Number | NumericArray) -> float | NumericArray: ...


@runtime_checkable
class DistributionEstimator[D](Protocol):
    """Batch learner producing a distribution from (weighted) observations."""

    def learn(self, data: ArrayLike, weights: ArrayLike | None = None) -> D: ...


@runtime_checkable
class SufficientStatistic[D](Protocol):
    """Running summary of observations that can be turned into a distribution."""

    @property
    def count(self) -> int: ...

    def update(self, value: Any) -> None: ...

    def update_all(self, values: Any) -> None: ...

    def merge(self, other: Self) -> None: ...

    def __add__(self, other: Self) -> Self: ...

    def to_distribution(self) -> D: ...


@runtime_checkable
class IncrementalEstimator[S](Protocol):
    """Learner that folds observations into a sufficient statistic one at a time."""

    def create_initial(self) -> S: ...

    def update(self, statistic: S, value: Any) -> None: ...

    def learn(self, data: ArrayLike) -> S: ...


__all__ = [
    "Distribution",
    "VectorConvertible",
    "DensityFunction",
    "MassFunction",
    "CumulativeFunction",
    "InvertibleCumulativeFunction",
    "DistributionEstimator",
    "SufficientStatistic",
    "IncrementalEstimator",
]
