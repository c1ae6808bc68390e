# plane_components/units.py
"""
QUANTITIES AND UNITS
====================

PURPOSE:
--------
Minimal value+unit layer for the quantity kinds the tensor engine touches:

    Pressure  (stress)        PressureUnit   SI base: Pa
    Force     (nodal forces)  ForceUnit      SI base: N
    Length    (displacements) LengthUnit     SI base: m

Strain is dimensionless and is carried as a plain float.

Each unit enum member carries its symbol and its factor to the SI base unit,
so a conversion is a single multiplication:

    value_in_b = value_in_a * a.factor / b.factor

TOLERANCES:
-----------
Every kind defines a static small magnitude used by all equality and
zero-tests in the package:

    STRESS_TOLERANCE        1e-3 Pa
    STRAIN_TOLERANCE        1e-12
    FORCE_TOLERANCE         1e-6 N
    DISPLACEMENT_TOLERANCE  1e-6 mm
"""

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Type, TypeVar, Union


class _Unit(Enum):
    """Base for unit enums: each member is (symbol, factor to SI base unit)."""

    def __init__(self, symbol: str, factor: float):
        self.symbol = symbol
        self.factor = factor

    def __str__(self) -> str:
        return self.symbol


class PressureUnit(_Unit):
    PASCAL = ("Pa", 1.0)
    KILOPASCAL = ("kPa", 1e3)
    MEGAPASCAL = ("MPa", 1e6)
    GIGAPASCAL = ("GPa", 1e9)
    POUND_FORCE_PER_SQUARE_INCH = ("psi", 6894.757293168361)
    KILOPOUND_FORCE_PER_SQUARE_INCH = ("ksi", 6894757.293168361)


class ForceUnit(_Unit):
    NEWTON = ("N", 1.0)
    KILONEWTON = ("kN", 1e3)
    MEGANEWTON = ("MN", 1e6)
    POUND_FORCE = ("lbf", 4.4482216152605)
    KILOPOUND_FORCE = ("kip", 4448.2216152605)


class LengthUnit(_Unit):
    MILLIMETER = ("mm", 1e-3)
    CENTIMETER = ("cm", 1e-2)
    METER = ("m", 1.0)
    INCH = ("in", 0.0254)
    FOOT = ("ft", 0.3048)


def conversion_factor(from_unit: _Unit, to_unit: _Unit) -> float:
    """
    Multiplier that converts a value in `from_unit` to `to_unit`.

    Raises:
        TypeError: If the units belong to different quantity kinds.
    """
    if type(from_unit) is not type(to_unit):
        raise TypeError(
            f"Cannot convert {type(from_unit).__name__}.{from_unit.name} "
            f"to {type(to_unit).__name__}.{to_unit.name}"
        )
    if from_unit is to_unit:
        return 1.0
    return from_unit.factor / to_unit.factor


Q = TypeVar("Q", bound="Quantity")


@dataclass(frozen=True, eq=False)
class Quantity:
    """
    A scalar value paired with a unit.

    Concrete kinds (Pressure, Force, Length) fix `unit_type` and a default
    unit. Arithmetic between two quantities of the same kind converts the
    right operand to the left operand's unit; mixing kinds raises TypeError.
    Equality is tolerance-based (the kind's TOLERANCE), so quantities are
    not hashable.
    """
    value: float
    unit: _Unit

    unit_type: ClassVar[Type[_Unit]] = _Unit
    TOLERANCE: ClassVar["Quantity"]

    def __post_init__(self):
        if not isinstance(self.unit, self.unit_type):
            raise TypeError(
                f"{type(self).__name__} needs a {self.unit_type.__name__}, "
                f"got {self.unit!r}"
            )
        object.__setattr__(self, "value", float(self.value))

    # ------------------------------------------------------------------
    # Construction / conversion
    # ------------------------------------------------------------------

    @classmethod
    def zero(cls: Type[Q], unit: _Unit = None) -> Q:
        return cls(0.0, unit) if unit is not None else cls(0.0)

    def as_unit(self, unit: _Unit) -> float:
        """Value expressed in `unit`."""
        return self.value * conversion_factor(self.unit, unit)

    def to_unit(self: Q, unit: _Unit) -> Q:
        if unit is self.unit:
            return self
        return type(self)(self.as_unit(unit), unit)

    def _check_kind(self, other) -> "Quantity":
        if not isinstance(other, Quantity) or other.unit_type is not self.unit_type:
            raise TypeError(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}"
            )
        return other

    # ------------------------------------------------------------------
    # Tolerance-based comparisons
    # ------------------------------------------------------------------

    def approx_zero(self, tolerance: Union["Quantity", float] = None) -> bool:
        return abs(self.value) <= _tolerance_in(self, tolerance)

    def approx(self, other: "Quantity", tolerance: Union["Quantity", float] = None) -> bool:
        other = self._check_kind(other)
        return abs(self.value - other.as_unit(self.unit)) <= _tolerance_in(self, tolerance)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quantity) or other.unit_type is not self.unit_type:
            return NotImplemented
        return self.approx(other)

    def __lt__(self, other) -> bool:
        return self.value < self._check_kind(other).as_unit(self.unit)

    def __le__(self, other) -> bool:
        return self.value <= self._check_kind(other).as_unit(self.unit)

    def __gt__(self, other) -> bool:
        return self.value > self._check_kind(other).as_unit(self.unit)

    def __ge__(self, other) -> bool:
        return self.value >= self._check_kind(other).as_unit(self.unit)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self: Q, other: "Quantity") -> Q:
        if not isinstance(other, Quantity):
            return NotImplemented
        other = self._check_kind(other)
        return type(self)(self.value + other.as_unit(self.unit), self.unit)

    def __sub__(self: Q, other: "Quantity") -> Q:
        if not isinstance(other, Quantity):
            return NotImplemented
        other = self._check_kind(other)
        return type(self)(self.value - other.as_unit(self.unit), self.unit)

    def __neg__(self: Q) -> Q:
        return type(self)(-self.value, self.unit)

    def __abs__(self: Q) -> Q:
        return type(self)(abs(self.value), self.unit)

    def __mul__(self: Q, multiplier: float) -> Q:
        if not isinstance(multiplier, numbers.Real):
            return NotImplemented
        return type(self)(self.value * multiplier, self.unit)

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        # Same kind: dimensionless ratio
        if isinstance(divisor, Quantity):
            return self.value / self._check_kind(divisor).as_unit(self.unit)
        if not isinstance(divisor, numbers.Real):
            return NotImplemented
        return type(self)(self.value / divisor, self.unit)

    def __str__(self) -> str:
        return f"{self.value:g} {self.unit.symbol}"


def _tolerance_in(quantity: Quantity, tolerance) -> float:
    """Tolerance as a float in the unit of `quantity`."""
    if tolerance is None:
        tolerance = type(quantity).TOLERANCE
    if isinstance(tolerance, Quantity):
        return abs(quantity._check_kind(tolerance).as_unit(quantity.unit))
    return abs(float(tolerance))


@dataclass(frozen=True, eq=False)
class Pressure(Quantity):
    """Stress / pressure quantity (default unit: MPa)."""
    value: float
    unit: PressureUnit = PressureUnit.MEGAPASCAL

    unit_type: ClassVar[Type[_Unit]] = PressureUnit


@dataclass(frozen=True, eq=False)
class Force(Quantity):
    """Force quantity (default unit: N)."""
    value: float
    unit: ForceUnit = ForceUnit.NEWTON

    unit_type: ClassVar[Type[_Unit]] = ForceUnit


@dataclass(frozen=True, eq=False)
class Length(Quantity):
    """Length / displacement quantity (default unit: mm)."""
    value: float
    unit: LengthUnit = LengthUnit.MILLIMETER

    unit_type: ClassVar[Type[_Unit]] = LengthUnit


STRESS_TOLERANCE = Pressure(1e-3, PressureUnit.PASCAL)
STRAIN_TOLERANCE = 1e-12
FORCE_TOLERANCE = Force(1e-6, ForceUnit.NEWTON)
DISPLACEMENT_TOLERANCE = Length(1e-6, LengthUnit.MILLIMETER)

Pressure.TOLERANCE = STRESS_TOLERANCE
Force.TOLERANCE = FORCE_TOLERANCE
Length.TOLERANCE = DISPLACEMENT_TOLERANCE


def quantity_from(value: Union[Quantity, float], quantity_type: Type[Q], unit: _Unit) -> Q:
    """
    Accept either a quantity of `quantity_type` or a raw number in `unit`.

    Raw numbers that are NaN or infinite are kept as-is; sanitization is the
    caller's job.
    """
    if isinstance(value, Quantity):
        if value.unit_type is not quantity_type.unit_type:
            raise TypeError(
                f"Expected {quantity_type.__name__}, got {type(value).__name__}"
            )
        return value if isinstance(value, quantity_type) else quantity_type(value.value, value.unit)
    return quantity_type(float(value), unit)


_QUANTITY_TYPES = {
    PressureUnit: Pressure,
    ForceUnit: Force,
    LengthUnit: Length,
}


def quantity_type_for(unit: _Unit) -> Type[Quantity]:
    """Quantity class whose values are expressed in `unit`."""
    try:
        return _QUANTITY_TYPES[type(unit)]
    except KeyError:
        raise TypeError(f"Not a supported unit: {unit!r}") from None
