"""
Concrete distribution instances with specific parameter values.

This module provides the base classes of the distributions evaluating
parametric families:

- :class:`ParametricDistribution`: parameter handling, vector conversion,
  copying, characteristic lookup and sampling.
- :class:`ContinuousUnivariateDistribution`: density, CDF and quantile
  evaluation over a :class:`ContinuousSupport`.
- :class:`DiscreteUnivariateDistribution`: mass function, step CDF and
  quantile over an :class:`IntegerLatticeDiscreteSupport`.
- :class:`MultivariateDistribution`: evaluation of vector observations.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import floor, isfinite, sqrt
from typing import TYPE_CHECKING, Any, ClassVar, Self

import numpy as np

from pysatl_distributions.distributions.numerics import (
    as_scalar_or_array,
    discrete_ppf_from_cdf,
    ppf_from_cdf,
    vectorize_quantile,
)
from pysatl_distributions.distributions.strategies import InverseTransformSamplingStrategy
from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.types import CharacteristicName

if TYPE_CHECKING:
    from collections.abc import Callable

    from numpy.typing import ArrayLike

    from pysatl_distributions.distributions.strategies import SamplingStrategy
    from pysatl_distributions.distributions.support import (
        ContinuousSupport,
        IntegerLatticeDiscreteSupport,
    )
    from pysatl_distributions.families.parametric_family import ParametricFamily
    from pysatl_distributions.families.parametrizations import Parametrization
    from pysatl_distributions.types import DistributionType, Number, NumericArray


class ParameterProperty:
    """
    Descriptor exposing one field of the distribution's parametrization.

    Reading returns the stored value (a copy for array fields); assigning
    goes through :meth:`ParametricDistribution._update`, so an invalid value
    raises :class:`InvalidParameterError` and leaves the distribution as it
    was.
    """

    def __init__(self, doc: str | None = None) -> None:
        self.__doc__ = doc
        self._name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = name

    def __get__(
        self, instance: ParametricDistribution[Any] | None, owner: type | None = None
    ) -> Any:
        if instance is None:
            return self
        value = getattr(instance.parameters, self._name)
        return value.copy() if isinstance(value, np.ndarray) else value

    def __set__(self, instance: ParametricDistribution[Any], value: Any) -> None:
        instance._update(**{self._name: value})


class ParametricDistribution[P: Parametrization]:
    """
    A distribution of a parametric family with specific parameter values.

    Parameters
    ----------
    parameters : Parametrization
        Base parameters of the family; they are validated.
    """

    family: ClassVar[ParametricFamily]
    sampling_strategy: ClassVar[SamplingStrategy] = InverseTransformSamplingStrategy()

    def __init__(self, parameters: P) -> None:
        self._parameters: P = parameters.validate()

    @classmethod
    def from_parameters(cls, parameters: P) -> Self:
        """Create an instance directly from a base parametrization."""
        instance = cls.__new__(cls)
        ParametricDistribution.__init__(instance, parameters)
        return instance

    @property
    def parameters(self) -> P:
        """Immutable parameters of the distribution."""
        return self._parameters

    @property
    def distribution_type(self) -> DistributionType:
        return self.family.distribution_type(self._parameters)

    def _update(self, **changes: Any) -> None:
        self._parameters = self._parameters.replace(**changes)

    def convert_to_vector(self) -> NumericArray:
        """Flat float vector of the parameters, in declaration order."""
        return self._parameters.to_vector()

    def convert_from_vector(self, vector: ArrayLike) -> None:
        """
        Replace the parameters with the ones decoded from ``vector``.

        Raises
        ------
        InvalidParameterError
            If the vector is ``None``, has the wrong length or decodes to
            invalid parameters; the distribution is then left unchanged.
        """
        self._parameters = self._parameters.from_vector(vector)

    @property
    def mean(self) -> Any:
        raise NotImplementedError

    @property
    def variance(self) -> Any:
        raise NotImplementedError

    def copy(self) -> Self:
        return self.from_parameters(self._parameters)

    def __copy__(self) -> Self:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, ParametricDistribution)
        return bool(self._parameters == other._parameters)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self._parameters.parameters.items())
        return f"{type(self).__name__}({args})"

    def query_method(self, characteristic_name: str) -> Callable[..., Any]:
        """
        Resolve a characteristic by name.

        Raises
        ------
        RuntimeError
            If the distribution does not provide the characteristic.
        """
        name = CharacteristicName(characteristic_name)
        if name is CharacteristicName.MEAN:
            return lambda _=None: self.mean
        if name is CharacteristicName.VAR:
            return lambda _=None: self.variance
        method = getattr(self, name.value, None)
        if method is None:
            raise RuntimeError(
                f"Characteristic '{name}' is not available for {type(self).__name__}."
            )
        return method  # type: ignore[no-any-return]

    def calculate_characteristic(self, characteristic_name: str, value: Any = None) -> Any:
        return self.query_method(characteristic_name)(value)

    def sample(self, n: int, rng: np.random.Generator) -> NumericArray:
        """Draw ``n`` independent observations using ``rng``."""
        return self.sampling_strategy.sample(n, self, rng)  # type: ignore[arg-type]


def _evaluate(
    x: Number | NumericArray,
    fill: float,
    mask: Callable[[NumericArray], Any],
    func: Callable[[NumericArray], NumericArray],
) -> float | NumericArray:
    """Apply ``func`` where ``mask`` holds and ``fill`` elsewhere; NaN stays NaN."""
    arr = np.asarray(x, dtype=float)
    flat = arr.reshape(-1)
    inside = np.asarray(mask(flat), dtype=bool)
    out = np.full(flat.shape, fill)
    if np.any(inside):
        with np.errstate(divide="ignore", invalid="ignore", over="ignore", under="ignore"):
            out[inside] = func(flat[inside])
    out[np.isnan(flat)] = np.nan
    return as_scalar_or_array(out.reshape(arr.shape), x)


class ContinuousUnivariateDistribution[P: Parametrization](ParametricDistribution[P]):
    """
    Base of continuous univariate families.

    Subclasses provide ``support``, ``_log_pdf`` (called on points of the
    support only) and ``_cdf`` (called on points strictly inside the
    support's bounds). ``_ppf`` defaults to numerical inversion of the CDF.
    """

    @property
    def support(self) -> ContinuousSupport:
        raise NotImplementedError

    def _log_pdf(self, x: NumericArray) -> NumericArray:
        raise NotImplementedError

    def _cdf(self, x: NumericArray) -> NumericArray:
        raise NotImplementedError

    def _ppf(self, p: NumericArray) -> NumericArray:
        mean, variance = self.mean, self.variance
        x0 = mean if isfinite(mean) else 0.0
        step = sqrt(variance) if isfinite(variance) and variance > 0.0 else 1.0
        support = self.support

        def cdf(x: float) -> float:
            return float(self.cdf(x))

        return np.array(
            [
                ppf_from_cdf(cdf, q, x0=x0, init_step=step, lower=support.left, upper=support.right)
                for q in p.tolist()
            ]
        )

    def log_pdf(self, x: Number | NumericArray) -> float | NumericArray:
        """Natural logarithm of the density; ``-inf`` outside the support."""
        return _evaluate(x, -np.inf, self.support.contains, self._log_pdf)

    def pdf(self, x: Number | NumericArray) -> float | NumericArray:
        """Probability density; 0 outside the support."""
        return as_scalar_or_array(np.exp(np.asarray(self.log_pdf(x))), x)

    def cdf(self, x: Number | NumericArray) -> float | NumericArray:
        """Cumulative distribution function, clipped to ``[0, 1]``."""
        support = self.support
        arr = np.asarray(x, dtype=float)
        values = np.where(arr >= support.right, 1.0, 0.0)

        def strictly_inside(v: NumericArray) -> NumericArray:
            return (v > support.left) & (v < support.right)

        inner = np.asarray(_evaluate(arr, 0.0, strictly_inside, self._cdf), dtype=float)
        values = np.where(strictly_inside(arr), np.clip(inner, 0.0, 1.0), values)
        values = np.where(np.isnan(arr), np.nan, values)
        return as_scalar_or_array(values, x)

    def ppf(self, p: Number | NumericArray) -> float | NumericArray:
        """
        Quantile function.

        Returns the lower support bound for ``p <= 0`` and the upper bound
        for ``p >= 1``.
        """
        support = self.support
        arr = np.asarray(p, dtype=float)
        values = np.where(arr <= 0.0, support.left, support.right)

        def strictly_inside(v: NumericArray) -> NumericArray:
            return (v > 0.0) & (v < 1.0)

        inner = np.asarray(_evaluate(arr, 0.0, strictly_inside, self._ppf), dtype=float)
        values = np.where(strictly_inside(arr), inner, values)
        values = np.where(np.isnan(arr), np.nan, values)
        return as_scalar_or_array(values, p)


class DiscreteUnivariateDistribution[P: Parametrization](ParametricDistribution[P]):
    """
    Base of discrete univariate families over a left-bounded integer lattice.

    Subclasses provide ``support`` and ``_log_pmf`` (called on support
    points only). ``_cdf`` is called on integer points between the first
    and the last support point and defaults to summing the mass function.
    """

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        raise NotImplementedError

    def _log_pmf(self, k: NumericArray) -> NumericArray:
        raise NotImplementedError

    def _cdf(self, k: NumericArray) -> NumericArray:
        support = self.support
        return np.array(
            [float(np.sum(self.pmf(np.array(list(support.iter_leq(v)))))) for v in k.tolist()]
        )

    def log_pmf(self, x: Number | NumericArray) -> float | NumericArray:
        """Natural logarithm of the mass; ``-inf`` off the support and at fractional points."""
        return _evaluate(x, -np.inf, self.support.contains, self._log_pmf)

    def pmf(self, x: Number | NumericArray) -> float | NumericArray:
        """Probability mass; 0 off the support and at fractional points."""
        return as_scalar_or_array(np.exp(np.asarray(self.log_pmf(x))), x)

    def cdf(self, x: Number | NumericArray) -> float | NumericArray:
        """Step cumulative distribution function ``P(X <= x)``."""
        support = self.support
        first, last = support.first(), support.last()
        arr = np.asarray(x, dtype=float)
        floored = np.floor(np.where(np.isfinite(arr), arr, 0.0))

        above = arr == np.inf
        if last is not None:
            above |= arr >= last
        values = np.where(above, 1.0, 0.0)
        inner_mask = np.isfinite(arr) & ~above
        if first is not None:
            inner_mask &= floored >= first

        inner = np.asarray(
            _evaluate(floored, 0.0, lambda _: inner_mask.reshape(-1), self._cdf), dtype=float
        )
        values = np.where(inner_mask, np.clip(inner, 0.0, 1.0), values)
        values = np.where(np.isnan(arr), np.nan, values)
        return as_scalar_or_array(values, x)

    def ppf(self, p: Number | NumericArray) -> float | NumericArray:
        """Leftmost support point whose CDF reaches ``p``."""
        support = self.support
        mean = self.mean
        start = int(floor(mean)) if isfinite(mean) else None

        def quantile(q: float) -> float:
            if q != q:
                return float("nan")
            return discrete_ppf_from_cdf(lambda k: float(self.cdf(k)), q, support, start=start)

        return vectorize_quantile(quantile, p)


class MultivariateDistribution[P: Parametrization](ParametricDistribution[P]):
    """
    Base of multivariate families.

    Evaluators accept a single vector of length ``dimension`` (returning a
    ``float``) or a 2D array with one observation per row.
    """

    @property
    def dimension(self) -> int:
        raise NotImplementedError

    def _points(self, x: ArrayLike) -> tuple[NumericArray, bool]:
        arr = np.asarray(x, dtype=float)
        d = self.dimension
        if arr.ndim == 1 and arr.shape[0] == d:
            return arr.reshape(1, d), True
        if arr.ndim == 2 and arr.shape[1] == d:
            return arr, False
        raise InvalidParameterError(
            f"Expected a vector of dimension {d} or an array of shape (n, {d}), "
            f"got shape {arr.shape}"
        )

    @staticmethod
    def _finish(values: NumericArray, single: bool) -> float | NumericArray:
        return float(values[0]) if single else values


__all__ = [
    "ParameterProperty",
    "ParametricDistribution",
    "ContinuousUnivariateDistribution",
    "DiscreteUnivariateDistribution",
    "MultivariateDistribution",
]
