"""
Global registry for parametric distribution families using singleton pattern.

The registry only holds immutable family descriptors, so sharing it across
the process does not introduce mutable global state.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import ClassVar

    from pysatl_distributions.families.parametric_family import ParametricFamily


class ParametricFamilyRegister:
    """
    Singleton registry for parametric distribution families.

    Families are accessed by name (see :class:`pysatl_distributions.types.FamilyName`).
    """

    _instance: ClassVar[ParametricFamilyRegister | None] = None
    _registered_families: dict[str, ParametricFamily]

    def __new__(cls) -> ParametricFamilyRegister:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._registered_families = {}
        return cls._instance

    @classmethod
    def get(cls, name: str) -> ParametricFamily:
        """
        Retrieve a parametric family by name.

        Raises
        ------
        ValueError
            If no family with the given name exists.
        """
        self = cls()
        if name not in self._registered_families:
            raise ValueError(f"No family {name} found in register")
        return self._registered_families[name]

    @classmethod
    def register(cls, family: ParametricFamily) -> None:
        """
        Register a new parametric family.

        Raises
        ------
        ValueError
            If a family with the same name is already registered.
        """
        self = cls()
        if family.name in self._registered_families:
            raise ValueError(f"Family {family.name} already found in register")
        self._registered_families[family.name] = family

    @classmethod
    def contains(cls, name: str) -> bool:
        return name in cls()._registered_families

    @classmethod
    def names(cls) -> list[str]:
        """Names of the registered families in registration order."""
        return list(cls()._registered_families)

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None


__all__ = ["ParametricFamilyRegister"]
