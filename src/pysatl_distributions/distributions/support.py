"""
Supports
========

Domains of univariate distributions: a (possibly unbounded) interval for
continuous families, an integer lattice or an explicit table of points for
discrete ones.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from itertools import count
from math import floor, inf
from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_distributions.types import BoolArray, Interval1D, Number, NumericArray

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


class ContinuousSupport(Interval1D, Support):
    """Interval support of a continuous univariate distribution."""


@runtime_checkable
class DiscreteSupport(Support, Protocol):
    def iter_points(self) -> Iterator[Number]: ...

    def iter_leq(self, x: Number) -> Iterator[Number]: ...

    def prev(self, x: Number) -> Number | None: ...


class ExplicitTableDiscreteSupport(DiscreteSupport):
    """
    Finite support given by an explicit table of points.

    Parameters
    ----------
    points : Iterable[Number]
        Support points; they are sorted and de-duplicated.
    """

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[Number]) -> None:
        arr = np.unique(np.asarray(list(points), dtype=float))
        if arr.size == 0:
            raise ValueError("Points must be non-empty")
        self._points = arr

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        arr = np.asarray(x, dtype=float)
        idx = np.minimum(np.searchsorted(self._points, arr, side="left"), self._points.size - 1)
        result = self._points[idx] == arr

        if np.ndim(arr) == 0:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def iter_points(self) -> Iterator[Number]:
        return iter(self._points.tolist())

    def iter_leq(self, x: Number) -> Iterator[Number]:
        return iter(self._points[: np.searchsorted(self._points, x, side="right")].tolist())

    def prev(self, x: Number) -> Number | None:
        idx = int(np.searchsorted(self._points, x, side="left"))
        return None if idx == 0 else float(self._points[idx - 1])

    def next(self, current: Number) -> Number | None:
        idx = int(np.searchsorted(self._points, current, side="right"))
        return None if idx == self._points.size else float(self._points[idx])

    def first(self) -> Number:
        return float(self._points[0])

    def last(self) -> Number:
        return float(self._points[-1])

    @property
    def points(self) -> NumericArray:
        return cast(NumericArray, self._points.copy())

    @property
    def size(self) -> int:
        return int(self._points.size)

    __iter__ = iter_points


@dataclass(frozen=True, slots=True)
class IntegerLatticeDiscreteSupport(DiscreteSupport):
    """
    Support ``{k : k = residue (mod modulus), min_k <= k <= max_k}``.

    Parameters
    ----------
    residue : int, default 0
        Residue of the lattice points.
    modulus : int, default 1
        Lattice step, a positive integer.
    min_k : int or None, default None
        Smallest admissible point, ``None`` for a left-unbounded lattice.
    max_k : int or None, default None
        Largest admissible point, ``None`` for a right-unbounded lattice.
    """

    residue: int = 0
    modulus: int = 1
    min_k: int | None = None
    max_k: int | None = None

    def __post_init__(self) -> None:
        if self.modulus <= 0:
            raise ValueError("modulus must be a positive integer.")

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """Check membership; fractional and infinite inputs are never contained."""
        xf = np.asarray(x, dtype=float)
        finite = np.isfinite(xf)
        v = np.where(finite, np.floor(np.where(finite, xf, 0.0)), 0.0)

        mask = finite & (xf == v) & (np.mod(v - self.residue, self.modulus) == 0)
        if self.min_k is not None:
            mask &= v >= self.min_k
        if self.max_k is not None:
            mask &= v <= self.max_k

        if np.ndim(xf) == 0:
            return bool(mask)
        return cast(BoolArray, mask)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def _align_down(self, k: int) -> int:
        return k - (k - self.residue) % self.modulus

    def _align_up(self, k: int) -> int:
        return k + (self.residue - k) % self.modulus

    def first(self) -> int | None:
        if self.min_k is None:
            return None
        first = self._align_up(self.min_k)
        if self.max_k is not None and first > self.max_k:
            return None
        return first

    def last(self) -> int | None:
        if self.max_k is None:
            return None
        last = self._align_down(self.max_k)
        if self.min_k is not None and last < self.min_k:
            return None
        return last

    def iter_points(self) -> Iterator[int]:
        """
        Iterate over the lattice points in increasing order.

        Raises
        ------
        RuntimeError
            If the lattice is unbounded on the left.
        """
        first = self.first()
        if first is None:
            if self.min_k is None:
                raise RuntimeError(
                    "Cannot iterate points of a left-unbounded IntegerLatticeDiscreteSupport."
                )
            return iter(())
        if self.max_k is None:
            return count(first, self.modulus)
        return iter(range(first, self.max_k + 1, self.modulus))

    def iter_leq(self, x: Number) -> Iterator[int]:
        """Iterate over the lattice points not exceeding ``x``."""
        first = self.first()
        if first is None:
            return self.iter_points()
        if float(x) == inf:
            return self.iter_points()
        threshold = int(floor(float(x))) if float(x) > -inf else first - 1
        if self.max_k is not None:
            threshold = min(threshold, self.max_k)
        return iter(range(first, threshold + 1, self.modulus))

    def prev(self, x: Number) -> int | None:
        """Largest lattice point strictly below ``x``."""
        target = int(np.ceil(float(x))) - 1
        if self.max_k is not None:
            target = min(target, self.max_k)
        candidate = self._align_down(target)
        if self.min_k is not None and candidate < self.min_k:
            return None
        return candidate

    def next(self, current: int) -> int | None:
        nxt = current + self.modulus
        if self.max_k is not None and nxt > self.max_k:
            return None
        return nxt

    @property
    def is_left_bounded(self) -> bool:
        return self.min_k is not None

    @property
    def is_right_bounded(self) -> bool:
        return self.max_k is not None

    @property
    def size(self) -> int | float:
        """Number of lattice points, ``inf`` for an unbounded lattice."""
        if not (self.is_left_bounded and self.is_right_bounded):
            return inf
        first, last = self.first(), self.last()
        if first is None or last is None:
            return 0
        return (last - first) // self.modulus + 1

    __iter__ = iter_points


__all__ = [
    "Support",
    "ContinuousSupport",
    "DiscreteSupport",
    "ExplicitTableDiscreteSupport",
    "IntegerLatticeDiscreteSupport",
]
