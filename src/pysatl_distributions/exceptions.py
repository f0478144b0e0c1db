"""
Exceptions and warnings raised by the distribution catalog.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class InvalidParameterError(ValueError):
    """
    Raised when parameters, parameter vectors or observations are invalid.

    Constructors, property setters, ``convert_from_vector``, estimators and
    multivariate evaluators raise it. A failing setter leaves the object it
    was called on unchanged.
    """


class ConvergenceWarning(RuntimeWarning):
    """Issued when an iterative routine stops at its iteration cap."""


__all__ = ["InvalidParameterError", "ConvergenceWarning"]
