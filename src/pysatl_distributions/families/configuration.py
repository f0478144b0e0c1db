"""
Distribution Families Configuration
====================================

Registers the built-in parametric families (continuous, discrete and
multivariate) in the global :class:`ParametricFamilyRegister`.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_distributions.families.builtins import BUILTIN_FAMILIES
from pysatl_distributions.families.registry import ParametricFamilyRegister


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Register all built-in families in the global registry.

    Returns
    -------
    ParametricFamilyRegister
        The global registry of parametric families.
    """
    register = ParametricFamilyRegister()
    for family in BUILTIN_FAMILIES:
        if not register.contains(family.name):
            register.register(family)
    return register


def reset_families_register() -> None:
    """Reset the cached families registry."""
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()


__all__ = ["configure_families_register", "reset_families_register"]
