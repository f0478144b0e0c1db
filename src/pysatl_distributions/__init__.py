"""
PySATL Distributions
====================

Catalog of closed-form probability distributions: validated
parametrizations, densities and mass functions, cumulative and quantile
functions, moments, sampling, parameter estimators and mixture models.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .config import *
from .config import __all__ as _config_all
from .distributions import *
from .distributions import __all__ as _distr_all
from .exceptions import *
from .exceptions import __all__ as _exceptions_all
from .families import *
from .families import __all__ as _family_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-distributions")
__all__ = [
    "__version__",
    *_config_all,
    *_distr_all,
    *_exceptions_all,
    *_family_all,
    *_types_all,
]

del _config_all
del _distr_all
del _exceptions_all
del _family_all
del _types_all
