"""
Built-in distribution families for PySATL.

This package contains implementations of standard statistical distribution
families, the empirical data distributions and the mixture models that are
available by default in PySATL.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_distributions.families.builtins.continuous import *
from pysatl_distributions.families.builtins.continuous import CONTINUOUS_FAMILIES
from pysatl_distributions.families.builtins.continuous import __all__ as _continuous_all
from pysatl_distributions.families.builtins.discrete import *
from pysatl_distributions.families.builtins.discrete import DISCRETE_FAMILIES
from pysatl_distributions.families.builtins.discrete import __all__ as _discrete_all
from pysatl_distributions.families.builtins.mixtures import *
from pysatl_distributions.families.builtins.mixtures import __all__ as _mixtures_all
from pysatl_distributions.families.builtins.multivariate import *
from pysatl_distributions.families.builtins.multivariate import MULTIVARIATE_FAMILIES
from pysatl_distributions.families.builtins.multivariate import __all__ as _multivariate_all

BUILTIN_FAMILIES = (*CONTINUOUS_FAMILIES, *DISCRETE_FAMILIES, *MULTIVARIATE_FAMILIES)
"""Every built-in parametric family in registration order."""

__all__ = [
    "BUILTIN_FAMILIES",
    *_continuous_all,
    *_discrete_all,
    *_multivariate_all,
    *_mixtures_all,
]

del _continuous_all
del _discrete_all
del _multivariate_all
del _mixtures_all
