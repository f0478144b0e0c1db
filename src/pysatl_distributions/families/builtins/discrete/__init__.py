"""
Built-in discrete distribution families.

This module contains implementations of discrete univariate parametric
families, their estimators and the empirical data distributions.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_distributions.families.builtins.discrete.beta_binomial import (
    BETA_BINOMIAL,
    BetaBinomialDistribution,
)
from pysatl_distributions.families.builtins.discrete.binomial import (
    BINOMIAL,
    BinomialDistribution,
    BinomialMaximumLikelihoodEstimator,
)
from pysatl_distributions.families.builtins.discrete.categorical import (
    CATEGORICAL,
    CategoricalDistribution,
    CategoricalMaximumLikelihoodEstimator,
)
from pysatl_distributions.families.builtins.discrete.data import (
    DataDistribution,
    DataDistributionEstimator,
    ScalarDataDistribution,
    ScalarDataDistributionEstimator,
)
from pysatl_distributions.families.builtins.discrete.negative_binomial import (
    NEGATIVE_BINOMIAL,
    NegativeBinomialDistribution,
    NegativeBinomialMomentMatchingEstimator,
)
from pysatl_distributions.families.builtins.discrete.poisson import (
    POISSON,
    PoissonDistribution,
    PoissonMaximumLikelihoodEstimator,
)
from pysatl_distributions.families.builtins.discrete.uniform_integer import (
    UNIFORM_INTEGER,
    UniformIntegerDistribution,
    UniformIntegerMaximumLikelihoodEstimator,
)

DISCRETE_FAMILIES = (
    BINOMIAL,
    BETA_BINOMIAL,
    POISSON,
    NEGATIVE_BINOMIAL,
    UNIFORM_INTEGER,
    CATEGORICAL,
)

__all__ = [
    "DISCRETE_FAMILIES",
    "BinomialDistribution",
    "BinomialMaximumLikelihoodEstimator",
    "BetaBinomialDistribution",
    "PoissonDistribution",
    "PoissonMaximumLikelihoodEstimator",
    "NegativeBinomialDistribution",
    "NegativeBinomialMomentMatchingEstimator",
    "UniformIntegerDistribution",
    "UniformIntegerMaximumLikelihoodEstimator",
    "CategoricalDistribution",
    "CategoricalMaximumLikelihoodEstimator",
    "DataDistribution",
    "DataDistributionEstimator",
    "ScalarDataDistribution",
    "ScalarDataDistributionEstimator",
]
