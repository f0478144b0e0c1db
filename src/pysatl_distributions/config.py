"""
Numerical Settings
==================

Default tolerances and iteration caps used by numerical inversion,
estimators and mixture learners. Every component takes the value it needs
as a keyword argument defaulting to :data:`DEFAULT_SETTINGS`.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NumericSettings:
    """
    Immutable bundle of numerical defaults.

    Parameters
    ----------
    quantile_x_tol : float
        Absolute tolerance of the bisection used to invert a continuous CDF.
    quantile_max_expand : int
        Maximum number of bracket doublings before bisection starts.
    quantile_max_iter : int
        Maximum number of bisection iterations.
    discrete_quantile_max_expand : int
        Maximum number of doublings of the right end of an integer search.
    default_variance : float
        Variance added to maximum-likelihood Gaussian fits.
    mixture_max_iterations : int
        Iteration cap of the scalar mixture EM learner.
    mixture_tolerance : float
        Assignment change under which the scalar mixture EM learner stops.
    gaussian_mixture_max_iterations : int
        Iteration cap of the Gaussian mixture EM learner.
    gaussian_mixture_tolerance : float
        Normalised parameter change under which the Gaussian mixture EM
        learner stops.
    simplex_tolerance : float
        Allowed deviation of a probability vector's sum from one.
    """

    quantile_x_tol: float = 1e-12
    quantile_max_expand: int = 60
    quantile_max_iter: int = 200
    discrete_quantile_max_expand: int = 64
    default_variance: float = 1e-5
    mixture_max_iterations: int = 100
    mixture_tolerance: float = 1e-5
    gaussian_mixture_max_iterations: int = 1000
    gaussian_mixture_tolerance: float = 1e-4
    simplex_tolerance: float = 1e-8


DEFAULT_SETTINGS = NumericSettings()
"""Settings used wherever no explicit value is passed."""


__all__ = ["NumericSettings", "DEFAULT_SETTINGS"]
