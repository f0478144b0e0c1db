"""
PySATL Distributions
====================

Unit tests of supports, numerical helpers, sample statistics and sampling
strategies.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
