"""
Core Type Definitions
=====================

Fundamental types shared by the distribution catalog: distribution kinds,
numeric aliases, one-dimensional intervals and the enumerations of family
and characteristic names.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, StrEnum, auto
from math import inf
from typing import Any, cast, overload

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """
    Enumeration of distribution kinds.

    Attributes
    ----------
    DISCRETE : str
        Distribution over a countable domain, described by a mass function.
    CONTINUOUS : str
        Distribution over a continuum, described by a density function.
    """

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


class DistributionType:
    """Base class for distribution type descriptors."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class EuclideanDistributionType(DistributionType):
    """
    Distribution type for distributions over a Euclidean space.

    Parameters
    ----------
    kind : Kind
        Distribution kind (discrete or continuous).
    dimension : int
        Dimension of the observations (1 for univariate).
    """

    kind: Kind
    dimension: int

    @property
    def is_univariate(self) -> bool:
        return self.dimension == 1


UnivariateContinuous = EuclideanDistributionType(kind=Kind.CONTINUOUS, dimension=1)
"""Type for univariate continuous distributions."""

UnivariateDiscrete = EuclideanDistributionType(kind=Kind.DISCRETE, dimension=1)
"""Type for univariate discrete distributions."""

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[NumPyNumber]
"""Type alias for numeric arrays."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""


class ContinuousSupportShape1D(Enum):
    """
    Enumeration of 1D continuous support shapes.

    Attributes
    ----------
    REAL_LINE
        Entire real line (-inf, inf).
    RAY_LEFT
        Right-bounded ray (-inf, b] or (-inf, b).
    RAY_RIGHT
        Left-bounded ray [a, inf) or (a, inf).
    BOUNDED_INTERVAL
        Bounded interval [a, b], (a, b], [a, b) or (a, b).
    EMPTY
        Empty support.
    SINGLE_POINT
        Single point {a}.
    """

    REAL_LINE = auto()
    RAY_LEFT = auto()
    RAY_RIGHT = auto()
    BOUNDED_INTERVAL = auto()
    EMPTY = auto()
    SINGLE_POINT = auto()


@dataclass(frozen=True, slots=True)
class Interval1D:
    """
    1D interval with configurable closure.

    Parameters
    ----------
    left : float, default=-inf
        Left endpoint of the interval.
    right : float, default=inf
        Right endpoint of the interval.
    left_closed : bool, default=True
        Whether the left endpoint belongs to the interval (forced to False
        for an infinite endpoint).
    right_closed : bool, default=True
        Whether the right endpoint belongs to the interval (forced to False
        for an infinite endpoint).
    """

    left: float = -inf
    right: float = inf
    left_closed: bool = True
    right_closed: bool = True

    def __post_init__(self) -> None:
        if self.left == -inf and self.left_closed:
            object.__setattr__(self, "left_closed", False)
        if self.right == inf and self.right_closed:
            object.__setattr__(self, "right_closed", False)

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """
        Check whether point(s) lie in the interval.

        Infinite values are limits, not points, so they are never contained.
        """
        arr = np.asarray(x, dtype=float)

        above = arr >= self.left if self.left_closed else arr > self.left
        below = arr <= self.right if self.right_closed else arr < self.right
        result = above & below & np.isfinite(arr)

        if np.ndim(arr) == 0:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    @property
    def is_empty(self) -> bool:
        if self.left > self.right:
            return True
        return bool(self.left == self.right and not (self.left_closed and self.right_closed))

    @property
    def shape(self) -> ContinuousSupportShape1D:
        """Topological shape of the interval."""
        if self.is_empty:
            return ContinuousSupportShape1D.EMPTY
        if self.left == self.right:
            return ContinuousSupportShape1D.SINGLE_POINT
        if self.left == -inf:
            if self.right == inf:
                return ContinuousSupportShape1D.REAL_LINE
            return ContinuousSupportShape1D.RAY_LEFT
        if self.right == inf:
            return ContinuousSupportShape1D.RAY_RIGHT
        return ContinuousSupportShape1D.BOUNDED_INTERVAL


type ParametrizationName = str
"""Type alias for parametrization names."""

ScalarFunc = Callable[[float], float]
"""Type alias for scalar functions (float -> float)."""


class CharacteristicName(StrEnum):
    """
    Names of the characteristics a distribution can be queried for.

    Not every distribution provides every characteristic: continuous
    distributions expose densities, discrete ones expose mass functions.
    """

    PDF = "pdf"
    LOG_PDF = "log_pdf"
    PMF = "pmf"
    LOG_PMF = "log_pmf"
    CDF = "cdf"
    PPF = "ppf"
    MEAN = "mean"
    VAR = "var"


class FamilyName(StrEnum):
    """Names of the built-in parametric families."""

    GAUSSIAN = "Gaussian"
    GAMMA = "Gamma"
    BETA = "Beta"
    EXPONENTIAL = "Exponential"
    CHI_SQUARE = "ChiSquare"
    INVERSE_GAMMA = "InverseGamma"
    LAPLACE = "Laplace"
    LOG_NORMAL = "LogNormal"
    LOGISTIC = "Logistic"
    PARETO = "Pareto"
    STUDENT_T = "StudentT"
    UNIFORM = "Uniform"
    CAUCHY = "Cauchy"
    BINOMIAL = "Binomial"
    BETA_BINOMIAL = "BetaBinomial"
    POISSON = "Poisson"
    NEGATIVE_BINOMIAL = "NegativeBinomial"
    UNIFORM_INTEGER = "UniformInteger"
    CATEGORICAL = "Categorical"
    MULTIVARIATE_GAUSSIAN = "MultivariateGaussian"
    DIRICHLET = "Dirichlet"
    MULTINOMIAL = "Multinomial"
    MULTIVARIATE_STUDENT_T = "MultivariateStudentT"
    INVERSE_WISHART = "InverseWishart"
    NORMAL_INVERSE_GAMMA = "NormalInverseGamma"
    NORMAL_INVERSE_WISHART = "NormalInverseWishart"


__all__ = [
    "Kind",
    "DistributionType",
    "EuclideanDistributionType",
    "UnivariateContinuous",
    "UnivariateDiscrete",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "BoolArray",
    "ContinuousSupportShape1D",
    "Interval1D",
    "ParametrizationName",
    "ScalarFunc",
    "CharacteristicName",
    "FamilyName",
]
