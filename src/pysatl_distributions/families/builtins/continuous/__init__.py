"""
Built-in continuous distribution families.

This module contains implementations of continuous univariate parametric
families and their estimators.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_distributions.families.builtins.continuous.beta import (
    BETA,
    BetaDistribution,
    BetaMomentMatchingEstimator,
)
from pysatl_distributions.families.builtins.continuous.cauchy import CAUCHY, CauchyDistribution
from pysatl_distributions.families.builtins.continuous.chi_square import (
    CHI_SQUARE,
    ChiSquareDistribution,
    ChiSquareMomentEstimator,
)
from pysatl_distributions.families.builtins.continuous.exponential import (
    EXPONENTIAL,
    ExponentialDistribution,
    ExponentialMaximumLikelihoodEstimator,
)
from pysatl_distributions.families.builtins.continuous.gamma import (
    GAMMA,
    GammaDistribution,
    GammaMomentMatchingEstimator,
)
from pysatl_distributions.families.builtins.continuous.gaussian import (
    GAUSSIAN,
    GaussianIncrementalEstimator,
    GaussianMaximumLikelihoodEstimator,
    GaussianSufficientStatistic,
    UnivariateGaussian,
)
from pysatl_distributions.families.builtins.continuous.inverse_gamma import (
    INVERSE_GAMMA,
    InverseGammaDistribution,
    InverseGammaMomentMatchingEstimator,
)
from pysatl_distributions.families.builtins.continuous.laplace import (
    LAPLACE,
    LaplaceDistribution,
    LaplaceMaximumLikelihoodEstimator,
)
from pysatl_distributions.families.builtins.continuous.log_normal import (
    LOG_NORMAL,
    LogNormalDistribution,
    LogNormalMaximumLikelihoodEstimator,
)
from pysatl_distributions.families.builtins.continuous.logistic import (
    LOGISTIC,
    LogisticDistribution,
    LogisticMomentMatchingEstimator,
)
from pysatl_distributions.families.builtins.continuous.pareto import PARETO, ParetoDistribution
from pysatl_distributions.families.builtins.continuous.student_t import (
    STUDENT_T,
    StudentTDistribution,
    StudentTMomentEstimator,
)
from pysatl_distributions.families.builtins.continuous.uniform import (
    UNIFORM,
    UniformDistribution,
    UniformMaximumLikelihoodEstimator,
)

CONTINUOUS_FAMILIES = (
    GAUSSIAN,
    GAMMA,
    BETA,
    EXPONENTIAL,
    CHI_SQUARE,
    INVERSE_GAMMA,
    LAPLACE,
    LOG_NORMAL,
    LOGISTIC,
    PARETO,
    STUDENT_T,
    UNIFORM,
    CAUCHY,
)

__all__ = [
    "CONTINUOUS_FAMILIES",
    "UnivariateGaussian",
    "GaussianMaximumLikelihoodEstimator",
    "GaussianSufficientStatistic",
    "GaussianIncrementalEstimator",
    "GammaDistribution",
    "GammaMomentMatchingEstimator",
    "BetaDistribution",
    "BetaMomentMatchingEstimator",
    "ExponentialDistribution",
    "ExponentialMaximumLikelihoodEstimator",
    "ChiSquareDistribution",
    "ChiSquareMomentEstimator",
    "InverseGammaDistribution",
    "InverseGammaMomentMatchingEstimator",
    "LaplaceDistribution",
    "LaplaceMaximumLikelihoodEstimator",
    "LogNormalDistribution",
    "LogNormalMaximumLikelihoodEstimator",
    "LogisticDistribution",
    "LogisticMomentMatchingEstimator",
    "ParetoDistribution",
    "StudentTDistribution",
    "StudentTMomentEstimator",
    "UniformDistribution",
    "UniformMaximumLikelihoodEstimator",
    "CauchyDistribution",
]
