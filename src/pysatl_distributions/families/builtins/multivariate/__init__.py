"""
Built-in multivariate distribution families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_distributions.families.builtins.multivariate.dirichlet import (
    DIRICHLET,
    DirichletDistribution,
)
from pysatl_distributions.families.builtins.multivariate.gaussian import (
    MULTIVARIATE_GAUSSIAN,
    MultivariateGaussian,
    MultivariateGaussianIncrementalEstimator,
    MultivariateGaussianMaximumLikelihoodEstimator,
    MultivariateGaussianSufficientStatistic,
)
from pysatl_distributions.families.builtins.multivariate.inverse_wishart import (
    INVERSE_WISHART,
    InverseWishartDistribution,
)
from pysatl_distributions.families.builtins.multivariate.multinomial import (
    MULTINOMIAL,
    MultinomialDistribution,
)
from pysatl_distributions.families.builtins.multivariate.normal_inverse_gamma import (
    NORMAL_INVERSE_GAMMA,
    NormalInverseGammaDistribution,
)
from pysatl_distributions.families.builtins.multivariate.normal_inverse_wishart import (
    NORMAL_INVERSE_WISHART,
    NormalInverseWishartDistribution,
)
from pysatl_distributions.families.builtins.multivariate.student_t import (
    MULTIVARIATE_STUDENT_T,
    MultivariateStudentT,
)

MULTIVARIATE_FAMILIES = (
    MULTIVARIATE_GAUSSIAN,
    DIRICHLET,
    MULTINOMIAL,
    MULTIVARIATE_STUDENT_T,
    INVERSE_WISHART,
    NORMAL_INVERSE_GAMMA,
    NORMAL_INVERSE_WISHART,
)

__all__ = [
    "MULTIVARIATE_FAMILIES",
    "MultivariateGaussian",
    "MultivariateGaussianMaximumLikelihoodEstimator",
    "MultivariateGaussianSufficientStatistic",
    "MultivariateGaussianIncrementalEstimator",
    "DirichletDistribution",
    "MultinomialDistribution",
    "MultivariateStudentT",
    "InverseWishartDistribution",
    "NormalInverseGammaDistribution",
    "NormalInverseWishartDistribution",
]
