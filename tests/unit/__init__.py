"""
PySATL Distributions
====================

Unit tests of the distribution catalog: core types, numerics, statistics,
parametric families, data distributions and mixtures.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
