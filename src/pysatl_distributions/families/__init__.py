"""
Parametric Families module for working with statistical distribution families.

This package provides the parametrization layer, the family descriptors and
their registry, the shared distribution base classes and the built-in
catalog of families, data distributions and mixtures.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .builtins import *
from .builtins import __all__ as _builtins_all
from .configuration import configure_families_register, reset_families_register
from .distribution import (
    ContinuousUnivariateDistribution,
    DiscreteUnivariateDistribution,
    MultivariateDistribution,
    ParameterProperty,
    ParametricDistribution,
)
from .parametric_family import ParametricFamily
from .parametrizations import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .registry import ParametricFamilyRegister

__all__ = [
    "ParametricFamilyRegister",
    "ParametrizationConstraint",
    "Parametrization",
    "ParametricFamily",
    "ParameterProperty",
    "ParametricDistribution",
    "ContinuousUnivariateDistribution",
    "DiscreteUnivariateDistribution",
    "MultivariateDistribution",
    "constraint",
    "parametrization",
    "configure_families_register",
    "reset_families_register",
    *_builtins_all,
]

del _builtins_all
