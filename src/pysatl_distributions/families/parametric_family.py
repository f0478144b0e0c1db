"""
Parametric family definitions and management infrastructure.

This module contains the descriptor of a parametric family: its name, the
ordered parametrizations it can be specified in and the distribution class
that evaluates it.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, dataclass_transform

from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.types import DistributionType

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from pysatl_distributions.families.distribution import ParametricDistribution
    from pysatl_distributions.families.parametrizations import Parametrization
    from pysatl_distributions.types import ParametrizationName

    type DistributionClass = type[ParametricDistribution[Any]]


class ParametricFamily:
    """
    A family of distributions with multiple parametrizations.

    Parameters
    ----------
    name : str
        Name of the distribution family.
    distr_type : DistributionType or Callable[[Parametrization], DistributionType]
        Distribution type or function that infers it from base parameters
        (multivariate families depend on the dimension).
    distr_parametrizations : list[ParametrizationName]
        List of parametrization names (first is base parametrization).
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType | Callable[[Parametrization], DistributionType],
        distr_parametrizations: list[ParametrizationName],
    ):
        self._name = name
        self._distr_type: Callable[[Parametrization], DistributionType] = (
            (lambda params: distr_type) if isinstance(distr_type, DistributionType) else distr_type
        )

        # Ordered names; the first one is the base parametrization name
        self.parametrization_names: list[ParametrizationName] = distr_parametrizations
        self.base_parametrization_name: ParametrizationName = self.parametrization_names[0]

        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}
        self._distribution_class: DistributionClass | None = None

    @property
    def name(self) -> str:
        """Get the family name."""
        return self._name

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        """Get mapping from parametrization names to classes."""
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        Get the base parametrization class.

        Raises
        ------
        ValueError
            If base parametrization is not registered.
        """
        try:
            return self._parametrizations[self.base_parametrization_name]
        except KeyError as exc:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' is not registered."
            ) from exc

    @property
    def distribution_class(self) -> DistributionClass:
        """
        Get the class evaluating distributions of this family.

        Raises
        ------
        ValueError
            If no class has been bound to the family.
        """
        if self._distribution_class is None:
            raise ValueError(f"No distribution class is bound to family '{self.name}'.")
        return self._distribution_class

    def distribution_type(self, parameters: Parametrization) -> DistributionType:
        """Distribution type of the distribution with the given base parameters."""
        return self._distr_type(parameters)

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Register a parametrization class.

        Raises
        ------
        ValueError
            If the name is not declared by the family or is already registered.
        """
        if name not in self.parametrization_names:
            raise ValueError(f"Parametrization '{name}' is not declared by family '{self.name}'.")
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def get_parametrization(self, name: ParametrizationName) -> type[Parametrization]:
        """
        Fetch a parametrization class by name.

        Raises
        ------
        KeyError
            If name is not registered.
        """
        return self._parametrizations[name]

    def to_base(self, parameters: Parametrization) -> Parametrization:
        """Convert parameters in any parametrization to the base one."""
        if parameters.name == self.base_parametrization_name:
            return parameters
        return parameters.transform_to_base_parametrization().validate()

    def bind[D: DistributionClass](self, distribution_class: D) -> D:
        """
        Class decorator attaching the distribution class of the family.

        Raises
        ------
        ValueError
            If another class is already bound.
        """
        if self._distribution_class is not None:
            raise ValueError(f"Family '{self.name}' already has a distribution class.")
        distribution_class.family = self
        self._distribution_class = distribution_class
        return distribution_class

    def distribution(
        self,
        parametrization_name: str | None = None,
        **parameters_values: Any,
    ) -> ParametricDistribution[Any]:
        """
        Create a distribution instance with given parameters.

        Parameters
        ----------
        parametrization_name : str, optional
            Name of parametrization to use (defaults to base).
        **parameters_values
            Parameter values for the distribution.

        Returns
        -------
        ParametricDistribution
            Distribution instance with the equivalent base parameters.

        Raises
        ------
        InvalidParameterError
            If the parametrization name is not registered, a parameter is
            missing or unknown, or the parameters don't satisfy constraints.
        """
        if parametrization_name is None:
            parametrization_class = self.base
        elif parametrization_name in self._parametrizations:
            parametrization_class = self._parametrizations[parametrization_name]
        else:
            raise InvalidParameterError(
                f"Family '{self.name}' has no parametrization '{parametrization_name}'; "
                f"expected one of {list(self._parametrizations)}"
            )

        try:
            parameters = parametrization_class(**parameters_values)
        except TypeError as exc:
            raise InvalidParameterError(
                f"Invalid parameters for '{self.name}' parametrization "
                f"'{parametrization_class.__param_name__}': {exc}"
            ) from exc
        parameters = parameters.validate()
        return self.distribution_class.from_parameters(self.to_base(parameters))

    @dataclass_transform()
    def parametrization(
        self, *, name: str
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """
        Create a class decorator that registers a parametrization.

        Parameters
        ----------
        name : str
            Name of the parametrization.

        Returns
        -------
        Callable[[type[Parametrization]], type[Parametrization]]
            Class decorator for registering parametrizations.
        """
        from pysatl_distributions.families.parametrizations import parametrization as _param_deco

        return _param_deco(family=self, name=name)

    def __repr__(self) -> str:
        return f"ParametricFamily(name={self.name!r}, parametrizations={self.parametrization_names})"

    __call__ = distribution


__all__ = ["ParametricFamily"]
