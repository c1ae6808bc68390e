# plane_components/components.py
"""
POINT VECTORS AND SUPPORT CONSTRAINTS
=====================================

PURPOSE:
--------
Two-component (x, y) values attached to a node:

    PlaneForce          Fx, Fy   (default N)
    PlaneDisplacement   ux, uy   (default mm)

and the boolean support descriptor Constraint(x, y).

DOF NUMBERING:
--------------
Nodal vectors are flattened with 2 DOF per node:

    node 0 -> [0, 1]     node 1 -> [2, 3]     node i -> [2i, 2i + 1]

This is the layout ForceVector / DisplacementVector use when built from a
list of point vectors, and the layout constrained_indexes() reports.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterable, List, Tuple

import numpy as np

from . import kernel
from .base import UnitConvertibleMixin, _FreshZero, _frozen, _is_scalar, resolve_unit, sanitize_angle
from .config import CONFIG
from .units import Force, Length, Quantity, _Unit, quantity_from

DOF_PER_NODE = 2


class ComponentDirection(Enum):
    """Which of the x / y components are present."""
    NONE = (False, False)
    X = (True, False)
    Y = (False, True)
    BOTH = (True, True)

    def __init__(self, x: bool, y: bool):
        self.x = x
        self.y = y

    @classmethod
    def from_flags(cls, x: bool, y: bool) -> "ComponentDirection":
        return cls((bool(x), bool(y)))


@dataclass(frozen=True)
class Constraint:
    """
    Support condition of a node: True means the displacement in that
    direction is prevented.
    """
    x: bool = False
    y: bool = False

    FREE: ClassVar["Constraint"]
    FULL: ClassVar["Constraint"]
    X_ONLY: ClassVar["Constraint"]
    Y_ONLY: ClassVar["Constraint"]

    @classmethod
    def from_direction(cls, direction: ComponentDirection) -> "Constraint":
        return cls(direction.x, direction.y)

    @property
    def direction(self) -> ComponentDirection:
        return ComponentDirection.from_flags(self.x, self.y)

    @property
    def is_free(self) -> bool:
        return not (self.x or self.y)

    @property
    def is_full(self) -> bool:
        return self.x and self.y


Constraint.FREE = Constraint(False, False)
Constraint.FULL = Constraint(True, True)
Constraint.X_ONLY = Constraint(True, False)
Constraint.Y_ONLY = Constraint(False, True)


def dof_index(node: int, local_dof: int) -> int:
    """Global index of a node's local DOF (0 = x, 1 = y)."""
    return DOF_PER_NODE * node + local_dof


def constrained_indexes(constraints: Iterable[Constraint]) -> List[int]:
    """
    Flat DOF indexes fixed by one Constraint per node.

    >>> constrained_indexes([Constraint.FULL, Constraint.FREE, Constraint.Y_ONLY])
    [0, 1, 5]
    """
    indexes = []
    for node, constraint in enumerate(constraints):
        if constraint.x:
            indexes.append(dof_index(node, 0))
        if constraint.y:
            indexes.append(dof_index(node, 1))
    return indexes


class PlaneComponent(UnitConvertibleMixin):
    """
    Shared (x, y) storage with an eager resultant.

    Subclasses set `_QUANTITY`, `_DEFAULT_UNIT` (a CONFIG field name) and
    `_SYMBOLS`.
    """

    _DEFAULT_UNIT: ClassVar[str]
    _SYMBOLS: ClassVar[Tuple[str, str]]

    __array_ufunc__ = None
    __hash__ = None

    ZERO = _FreshZero()

    def __init__(self, x, y, unit: _Unit = None):
        self._unit = resolve_unit(x, unit, getattr(CONFIG, self._DEFAULT_UNIT))
        values = [quantity_from(c, self._QUANTITY, self._unit).as_unit(self._unit) for c in (x, y)]
        self._values = _frozen(kernel.sanitize(values, 2))
        self._refresh()

    def _refresh(self) -> None:
        x, y = self._values
        tolerance = self._tolerance_value()
        self._resultant = kernel.calculate_resultant(x, y, tolerance)
        self._resultant_angle = kernel.calculate_resultant_angle(x, y, tolerance)

    @classmethod
    def zero(cls, unit: _Unit = None):
        return cls(0.0, 0.0, unit)

    @classmethod
    def from_resultant(cls, resultant, angle: float, unit: _Unit = None):
        """Build from magnitude and direction (radians from +x)."""
        unit = resolve_unit(resultant, unit, getattr(CONFIG, cls._DEFAULT_UNIT))
        magnitude = quantity_from(resultant, cls._QUANTITY, unit).as_unit(unit)
        x, y = kernel.calculate_components(magnitude, sanitize_angle(angle))
        return cls(x, y, unit)

    @property
    def x(self) -> Quantity:
        return self._wrap(self._values[0])

    @property
    def y(self) -> Quantity:
        return self._wrap(self._values[1])

    @property
    def resultant(self) -> Quantity:
        return self._wrap(self._resultant)

    @property
    def resultant_angle(self) -> float:
        """Angle of the resultant in [0, 2*pi)."""
        return self._resultant_angle

    @property
    def is_x_zero(self) -> bool:
        return abs(self._values[0]) <= self._tolerance_value()

    @property
    def is_y_zero(self) -> bool:
        return abs(self._values[1]) <= self._tolerance_value()

    @property
    def is_zero(self) -> bool:
        return self.is_x_zero and self.is_y_zero

    @property
    def direction(self) -> ComponentDirection:
        return ComponentDirection.from_flags(not self.is_x_zero, not self.is_y_zero)

    def as_vector(self, unit: _Unit = None) -> np.ndarray:
        if unit is None:
            return np.array(self._values, dtype=float)
        return self._values * self._factor_to(unit)

    def copy(self):
        return type(self)(*self._values, self._unit)

    def approaches(self, other, tolerance=None) -> bool:
        if type(other) is not type(self):
            return False
        other_values = other._values * self._factor_from(other)
        return bool(np.all(np.abs(self._values - other_values) <= self._tolerance_value(tolerance)))

    def __eq__(self, other) -> bool:
        if not isinstance(other, PlaneComponent):
            return NotImplemented
        return self.approaches(other)

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(*(self._values + other._values * self._factor_from(other)), self._unit)

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(*(self._values - other._values * self._factor_from(other)), self._unit)

    def __neg__(self):
        return type(self)(*(-self._values), self._unit)

    def __mul__(self, multiplier):
        if not _is_scalar(multiplier):
            return NotImplemented
        return type(self)(*(self._values * multiplier), self._unit)

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        if not _is_scalar(divisor):
            return NotImplemented
        return type(self)(*(self._values / divisor), self._unit)

    def __str__(self) -> str:
        sx, sy = self._SYMBOLS
        x, y = self._values
        return (
            f"{sx} = {self._format(x)}\n"
            f"{sy} = {self._format(y)}\n"
            f"|R| = {self._format(self._resultant)} at {math.degrees(self._resultant_angle):.4g}°"
        )

    def __repr__(self) -> str:
        x, y = self._values
        return f"{type(self).__name__}({x!r}, {y!r}, unit={self._unit.name})"


class PlaneForce(PlaneComponent):
    """Nodal force (Fx, Fy)."""

    _QUANTITY = Force
    _DEFAULT_UNIT = "default_force_unit"
    _SYMBOLS = ("Fx", "Fy")


class PlaneDisplacement(PlaneComponent):
    """Nodal displacement (ux, uy)."""

    _QUANTITY = Length
    _DEFAULT_UNIT = "default_length_unit"
    _SYMBOLS = ("ux", "uy")
