"""
Numerical Helpers
=================

Quantile inversion for distributions without a closed-form ``ppf`` and
small array utilities shared by the evaluators.

- :func:`ppf_from_cdf` inverts a monotone continuous CDF through bracket
  expansion followed by bisection.
- :func:`discrete_ppf_from_cdf` finds the leftmost lattice point whose
  CDF reaches the requested level.

Both routines are capped and issue :class:`ConvergenceWarning` when a cap
is reached.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import warnings
from math import inf, isfinite
from typing import TYPE_CHECKING

import numpy as np

from pysatl_distributions.config import DEFAULT_SETTINGS
from pysatl_distributions.exceptions import ConvergenceWarning

if TYPE_CHECKING:
    from collections.abc import Callable

    from pysatl_distributions.distributions.support import IntegerLatticeDiscreteSupport
    from pysatl_distributions.types import BoolArray, Number, NumericArray, ScalarFunc

logger = logging.getLogger(__name__)


def as_scalar_or_array(values: NumericArray, like: object) -> float | NumericArray:
    """Return a Python ``float`` when ``like`` is a scalar, the array otherwise."""
    if np.ndim(like) == 0:
        return float(np.asarray(values).reshape(()))
    return values


def integer_mask(x: NumericArray) -> BoolArray:
    """Mask of finite entries with an integral value."""
    finite = np.isfinite(x)
    return finite & (x == np.floor(np.where(finite, x, 0.0)))


def _bracket(
    cdf: ScalarFunc,
    q: float,
    x0: float,
    init_step: float,
    lower: float,
    upper: float,
    max_expand: int,
) -> tuple[float, float] | None:
    """Find ``L < R`` with ``cdf(L) < q <= cdf(R)`` inside ``[lower, upper]``."""
    step = init_step
    left = max(x0 - step, lower)
    right = min(x0 + step, upper)

    for _ in range(max_expand):
        need_left = cdf(left) >= q and left > lower
        need_right = cdf(right) < q and right < upper
        if not (need_left or need_right):
            return left, right
        step *= 2.0
        if need_left:
            left = max(left - step, lower)
        if need_right:
            right = min(right + step, upper)
    return None


def ppf_from_cdf(
    cdf: ScalarFunc,
    q: float,
    *,
    x0: float = 0.0,
    init_step: float = 1.0,
    lower: float = -inf,
    upper: float = inf,
    x_tol: float = DEFAULT_SETTINGS.quantile_x_tol,
    max_expand: int = DEFAULT_SETTINGS.quantile_max_expand,
    max_iter: int = DEFAULT_SETTINGS.quantile_max_iter,
) -> float:
    """
    Invert a monotone scalar CDF at level ``q``.

    Parameters
    ----------
    cdf : Callable[[float], float]
        Non-decreasing function with limits 0 and 1.
    q : float
        Probability level.
    x0 : float, default 0.0
        Initial bracket center (typically the mean).
    init_step : float, default 1.0
        Initial half-width of the bracket (typically the standard deviation).
    lower, upper : float
        Support bounds; the bracket never leaves them and they are
        returned for ``q <= 0`` and ``q >= 1``.
    x_tol : float
        Relative width at which bisection stops.
    max_expand : int
        Maximum number of bracket doublings.
    max_iter : int
        Maximum number of bisection steps.

    Returns
    -------
    float
        The leftmost ``x`` (within tolerance) with ``cdf(x) >= q``.
    """
    if q <= 0.0:
        return lower
    if q >= 1.0:
        return upper
    if not isfinite(init_step) or init_step <= 0.0:
        init_step = 1.0
    if not isfinite(x0):
        x0 = 0.0
    x0 = min(max(x0, lower), upper)

    bracket = _bracket(cdf, q, x0, init_step, lower, upper, max_expand)
    if bracket is None:
        warnings.warn(
            f"Could not bracket the quantile {q} within {max_expand} expansions",
            ConvergenceWarning,
            stacklevel=2,
        )
        return float("nan")

    left, right = bracket
    for _ in range(max_iter):
        if right - left <= x_tol * (1.0 + max(abs(left), abs(right))):
            return right
        middle = 0.5 * (left + right)
        if cdf(middle) >= q:
            right = middle
        else:
            left = middle

    logger.debug("Quantile bisection stopped at the cap for q=%s: [%s, %s]", q, left, right)
    warnings.warn(
        f"Quantile bisection did not converge within {max_iter} iterations",
        ConvergenceWarning,
        stacklevel=2,
    )
    return right


def discrete_ppf_from_cdf(
    cdf: Callable[[int], float],
    q: float,
    support: IntegerLatticeDiscreteSupport,
    *,
    start: int | None = None,
    max_expand: int = DEFAULT_SETTINGS.discrete_quantile_max_expand,
) -> float:
    """
    Leftmost lattice point ``k`` with ``cdf(k) >= q``.

    Parameters
    ----------
    cdf : Callable[[int], float]
        Step CDF evaluated at lattice points.
    q : float
        Probability level.
    support : IntegerLatticeDiscreteSupport
        Left-bounded integer lattice of the distribution.
    start : int, optional
        Hint for the right end of the search (typically near the mean).
    max_expand : int
        Maximum number of doublings of the search window on an unbounded
        lattice.

    Returns
    -------
    float
        The quantile; the first support point for ``q <= 0`` and the last
        one (``inf`` when unbounded) for ``q >= 1``.
    """
    first = support.first()
    if first is None:
        raise RuntimeError("Discrete quantile search requires a left-bounded support.")
    last = support.last()
    if q <= 0.0:
        return float(first)
    if q >= 1.0:
        return float(last) if last is not None else inf

    step = support.modulus
    lo = 0
    if last is not None:
        hi = (last - first) // step
    else:
        hi = max(1, ((start if start is not None else first) - first) // step)
        for _ in range(max_expand):
            if cdf(first + hi * step) >= q:
                break
            lo, hi = hi, 2 * hi
        else:
            warnings.warn(
                f"Could not bracket the discrete quantile {q} within {max_expand} expansions",
                ConvergenceWarning,
                stacklevel=2,
            )
            return inf

    if cdf(first + lo * step) >= q:
        return float(first + lo * step)
    # invariant: cdf at index lo is below q, cdf at index hi reaches q
    while hi - lo > 1:
        middle = (lo + hi) // 2
        if cdf(first + middle * step) >= q:
            hi = middle
        else:
            lo = middle
    return float(first + hi * step)


def vectorize_quantile(
    quantile: Callable[[float], float], p: Number | NumericArray
) -> float | NumericArray:
    """Apply a scalar quantile function elementwise."""
    arr = np.asarray(p, dtype=float)
    out = np.array([quantile(float(v)) for v in arr.ravel()], dtype=float).reshape(arr.shape)
    return as_scalar_or_array(out, p)


__all__ = [
    "as_scalar_or_array",
    "integer_mask",
    "ppf_from_cdf",
    "discrete_ppf_from_cdf",
    "vectorize_quantile",
]
