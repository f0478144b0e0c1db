"""
Mixture models over the built-in families and their EM learners.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_distributions.families.builtins.mixtures.gaussian import (
    MixtureOfGaussians,
    MixtureOfGaussiansEMLearner,
)
from pysatl_distributions.families.builtins.mixtures.multivariate import (
    MultivariateMixtureDensityModel,
)
from pysatl_distributions.families.builtins.mixtures.scalar import (
    ScalarMixtureDensityModel,
    ScalarMixtureEMLearner,
)

__all__ = [
    "ScalarMixtureDensityModel",
    "ScalarMixtureEMLearner",
    "MultivariateMixtureDensityModel",
    "MixtureOfGaussians",
    "MixtureOfGaussiansEMLearner",
]
