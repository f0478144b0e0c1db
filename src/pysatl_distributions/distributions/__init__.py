"""
Distributions subpackage

Interfaces and shared machinery for probability distributions used by
PySATL:

- capability protocols (:mod:`.distribution`);
- domains of discrete and continuous distributions (:mod:`.support`);
- numerical quantile inversion (:mod:`.numerics`);
- sample statistics and running summaries (:mod:`.statistics`);
- sampling strategies (:mod:`.strategies`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .distribution import (
    CumulativeFunction,
    DensityFunction,
    Distribution,
    DistributionEstimator,
    IncrementalEstimator,
    InvertibleCumulativeFunction,
    MassFunction,
    SufficientStatistic,
    VectorConvertible,
)
from .numerics import discrete_ppf_from_cdf, ppf_from_cdf
from .statistics import (
    IncrementalSummaryStatistics,
    kurtosis,
    mean_and_variance,
    validate_sample,
    weighted_kurtosis,
    weighted_mean_and_variance,
)
from .strategies import (
    DiscreteTableSamplingStrategy,
    InverseTransformSamplingStrategy,
    SamplingStrategy,
)
from .support import (
    ContinuousSupport,
    DiscreteSupport,
    ExplicitTableDiscreteSupport,
    IntegerLatticeDiscreteSupport,
    Support,
)

__all__ = [
    # protocols
    "Distribution",
    "VectorConvertible",
    "DensityFunction",
    "MassFunction",
    "CumulativeFunction",
    "InvertibleCumulativeFunction",
    "DistributionEstimator",
    "SufficientStatistic",
    "IncrementalEstimator",
    # support
    "Support",
    "ContinuousSupport",
    "DiscreteSupport",
    "ExplicitTableDiscreteSupport",
    "IntegerLatticeDiscreteSupport",
    # numerics
    "ppf_from_cdf",
    "discrete_ppf_from_cdf",
    # statistics
    "validate_sample",
    "mean_and_variance",
    "weighted_mean_and_variance",
    "kurtosis",
    "weighted_kurtosis",
    "IncrementalSummaryStatistics",
    # strategies
    "SamplingStrategy",
    "InverseTransformSamplingStrategy",
    "DiscreteTableSamplingStrategy",
]
