"""
Parametrization classes and constraints for distribution families.

This module provides the core abstractions for defining parameterizations of
statistical distributions: constraint validation, immutable updates,
conversion between parameterizations and to/from flat parameter vectors.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import dataclasses
from abc import ABC
from dataclasses import dataclass, is_dataclass
from functools import wraps
from inspect import isfunction
from math import isnan, prod
from typing import TYPE_CHECKING, ParamSpec, Self

import numpy as np

from pysatl_distributions.exceptions import InvalidParameterError
from pysatl_distributions.types import ParametrizationName

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from typing import Any, ClassVar

    from numpy.typing import ArrayLike

    from pysatl_distributions.families.parametric_family import ParametricFamily
    from pysatl_distributions.types import NumericArray


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values for a parametrization.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    """

    description: str
    check: Callable[[Any], bool]


def _coerce_field(name: str, annotation: object, value: Any) -> Any:
    """Copy a field value into its stored form."""
    if value is None:
        raise InvalidParameterError(f"Parameter '{name}' must not be None")
    if isinstance(value, np.ndarray | list | tuple):
        try:
            arr = np.array(value, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidParameterError(f"Parameter '{name}' must be numeric") from e
        if np.any(np.isnan(arr)):
            raise InvalidParameterError(f"Parameter '{name}' must not contain NaN")
        arr.setflags(write=False)
        return arr
    if annotation in (int, "int"):
        if isinstance(value, int | np.integer) and not isinstance(value, bool):
            return int(value)
        if isinstance(value, float | np.floating) and float(value).is_integer():
            return int(value)
        raise InvalidParameterError(f"Parameter '{name}' must be an integer, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"Parameter '{name}' must be numeric, got {value!r}") from e
    if isnan(number):
        raise InvalidParameterError(f"Parameter '{name}' must not be NaN")
    return number


class Parametrization(ABC):
    """
    Abstract base class for distribution parametrizations.

    Concrete parametrizations are frozen dataclasses created with the
    :func:`parametrization` decorator. Array fields are stored as read-only
    copies, so a parametrization never aliases caller state.
    """

    # These attributes are set by the @parametrization decorator
    __family__: ClassVar[ParametricFamily]
    __param_name__: ClassVar[ParametrizationName]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):  # type: ignore[arg-type]
            object.__setattr__(self, f.name, _coerce_field(f.name, f.type, getattr(self, f.name)))

    def _items(self) -> Iterator[tuple[str, Any]]:
        for f in dataclasses.fields(self):  # type: ignore[arg-type]
            yield f.name, getattr(self, f.name)

    @property
    def name(self) -> str:
        """Get the name of this parametrization."""
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Get parameters as a dictionary."""
        return dict(self._items())

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        """Get constraints for this parametrization."""
        return self._constraints

    @property
    def dimension(self) -> int:
        """Length of the flat parameter vector."""
        return sum(int(np.size(value)) for _, value in self._items())

    def validate(self) -> Self:
        """
        Validate all constraints for this parametrization.

        Returns
        -------
        Self
            The parametrization itself, for chaining.

        Raises
        ------
        InvalidParameterError
            If any constraint is not satisfied.
        """
        for constraint in self._constraints:
            if not constraint.check(self):
                raise InvalidParameterError(f'Constraint "{constraint.description}" does not hold')
        return self

    def replace(self, **changes: Any) -> Self:
        """
        Return a validated copy with some fields replaced.

        The receiver is never modified, so a failing update leaves it usable.
        """
        try:
            candidate = dataclasses.replace(self, **changes)  # type: ignore[type-var]
        except TypeError as e:
            raise InvalidParameterError(str(e)) from e
        return candidate.validate()

    def to_vector(self) -> NumericArray:
        """Flatten the fields, in declaration order, into a fresh float array."""
        chunks = [np.ravel(np.asarray(value, dtype=float)) for _, value in self._items()]
        return np.concatenate(chunks) if chunks else np.empty(0)

    def from_vector(self, vector: ArrayLike | None) -> Self:
        """
        Build a validated parametrization of the same shape from a flat vector.

        Raises
        ------
        InvalidParameterError
            If ``vector`` is ``None``, not one-dimensional, has the wrong length
            or decodes to parameters violating a constraint.
        """
        if vector is None:
            raise InvalidParameterError("Parameter vector must not be None")
        flat = np.asarray(vector, dtype=float)
        if flat.ndim != 1 or flat.size != self.dimension:
            raise InvalidParameterError(
                f"Expected a parameter vector of dimension {self.dimension}, "
                f"got shape {flat.shape}"
            )

        values: dict[str, Any] = {}
        offset = 0
        for name, current in self._items():
            shape = np.shape(current)
            size = prod(shape)
            chunk = flat[offset : offset + size]
            offset += size
            values[name] = chunk.reshape(shape).copy() if shape else float(chunk[0])
        return self.replace(**values)

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Convert this parametrization to the base parametrization.

        Returns
        -------
        Parametrization
            Equivalent parameters in the base parametrization.

        Notes
        -----
        Base implementation returns self. Alternative parametrizations
        override it.
        """
        return self

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, Parametrization)
        return bool(np.array_equal(self.to_vector(), other.to_vector()))

    __hash__ = None  # type: ignore[assignment]


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.

    Returns
    -------
    Callable[[Callable[P, bool]], Callable[P, bool]]
        Decorator that marks the function as a constraint.

    Notes
    -----
    The decorated function must be a predicate returning bool.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return bool(func(*args, **kwargs))

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def _collect_constraints(cls: type[Parametrization]) -> list[ParametrizationConstraint]:
    constraints: list[ParametrizationConstraint] = []
    for attr_name, attr in cls.__dict__.items():
        if isinstance(attr, staticmethod | classmethod) and getattr(
            attr.__func__, "__is_constraint", False
        ):
            raise TypeError(f"@constraint '{attr_name}' must be an instance method")
        if isfunction(attr) and getattr(attr, "__is_constraint", False):
            desc = getattr(attr, "__constraint_description", attr.__name__)
            constraints.append(ParametrizationConstraint(description=desc, check=attr))
    return constraints


def parametrization(
    *,
    family: ParametricFamily,
    name: str,
) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Decorator to register a class as a parametrization for a family.

    Parameters
    ----------
    family : ParametricFamily
        Family to register the parametrization with.
    name : str
        Name of the parametrization.

    Returns
    -------
    Callable[[type[Parametrization]], type[Parametrization]]
        Class decorator that registers the parametrization.

    Notes
    -----
    Converts the class into a frozen slotted dataclass and collects the
    methods marked with @constraint.
    """

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True, eq=False)(cls)

        cls.__family__ = family
        cls.__param_name__ = name
        cls._constraints = _collect_constraints(cls)

        family.register_parametrization(name, cls)
        return cls

    return decorator


__all__ = [
    "ParametrizationConstraint",
    "Parametrization",
    "constraint",
    "parametrization",
]
