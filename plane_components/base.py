# plane_components/base.py
"""
STATE BASES: Shared Behaviour of General and Principal Plane States
===================================================================

PURPOSE:
--------
StressState and StrainState are the same object with different units,
symbols and shear conventions. Likewise for their principal counterparts.
This module holds everything they share:

    PlaneState       {X, Y, XY} at reference angle theta_x
    PrincipalState   {T1, T2} at principal angle theta1
    UnitConvertibleMixin   unit bookkeeping for kinds that carry a unit

Concrete kinds plug in through a handful of class attributes:

    _ENGINEERING_SHEAR   True for strain (XY is gamma_xy)
    _TOLERANCE           zero-test magnitude for unit-free kinds
    _SYMBOLS             component symbols for __str__
    _GENERAL / _PRINCIPAL   the paired class of the same kind

MUTABILITY:
-----------
States behave as values. The only in-place operation is change_unit(),
which rescales the stored components. Do not call it on an instance that
other code (or another thread) is reading; use convert() for a copy.
"""

import logging
import math
import numbers
from enum import Enum
from typing import ClassVar, Optional, Protocol, Tuple, Type, runtime_checkable

import numpy as np

from . import kernel
from .config import CONFIG
from .numeric import HALF_PI, QUARTER_PI, angle_near, to_zero
from .units import Quantity, _Unit, conversion_factor, quantity_from

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Capability contracts
# ----------------------------------------------------------------------

@runtime_checkable
class ApproxEquatable(Protocol):
    """Values compared with a tolerance instead of exact equality."""

    def approaches(self, other, tolerance=None) -> bool:
        ...


@runtime_checkable
class UnitConvertible(Protocol):
    """Values that carry a unit and can be rescaled to another one."""

    @property
    def unit(self) -> _Unit:
        ...

    def change_unit(self, unit: _Unit) -> None:
        ...

    def convert(self, unit: _Unit):
        ...


@runtime_checkable
class Stateful(Protocol):
    """
    A plane tensor state, in general or principal form.

    x, y and xy are quantities for kinds with a unit and floats otherwise.
    A principal state reads as {T1, T2, 0} at theta_x = theta1.
    """

    @property
    def x(self):
        ...

    @property
    def y(self):
        ...

    @property
    def xy(self):
        ...

    @property
    def theta_x(self) -> float:
        ...

    @property
    def is_zero(self) -> bool:
        ...

    @property
    def is_horizontal(self) -> bool:
        ...

    @property
    def is_vertical(self) -> bool:
        ...

    def to_horizontal(self):
        ...

    def transform(self, theta: float):
        ...


class PrincipalCase(Enum):
    """Sign pattern of the principal values."""
    ZERO = "zero"
    PURE_TENSION = "pure tension"
    PURE_COMPRESSION = "pure compression"
    TENSION_COMPRESSION = "tension-compression"


def classify_principal(t1: float, t2: float, tolerance: float) -> PrincipalCase:
    """
    Principal case from (t1, t2), both expressed in the unit of `tolerance`.

        both ≈ 0                     -> ZERO
        t1 > tol  and t2 >= -tol     -> PURE_TENSION
        t1 <= tol and t2 < -tol      -> PURE_COMPRESSION
        anything else                -> TENSION_COMPRESSION
    """
    if abs(t1) <= tolerance and abs(t2) <= tolerance:
        return PrincipalCase.ZERO
    if t1 > tolerance and t2 >= -tolerance:
        return PrincipalCase.PURE_TENSION
    if t1 <= tolerance and t2 < -tolerance:
        return PrincipalCase.PURE_COMPRESSION
    return PrincipalCase.TENSION_COMPRESSION


def sanitize_angle(theta: float) -> float:
    value = to_zero(theta)
    if value != theta:
        logger.debug("Coercing non-finite angle %r to zero", theta)
    return value


def resolve_unit(first, unit: Optional[_Unit], default: _Unit) -> _Unit:
    """
    Unit for a multi-component value: explicit `unit`, else the unit of the
    first component if it is a quantity, else `default`.
    """
    if unit is not None:
        return unit
    if isinstance(first, Quantity):
        return first.unit
    return default


class _FreshZero:
    """Class attribute returning a new zero state on every access."""

    def __get__(self, instance, owner):
        return owner.zero()


# ----------------------------------------------------------------------
# Unit bookkeeping
# ----------------------------------------------------------------------

class UnitConvertibleMixin:
    """
    Unit support for objects storing float components in `_values`
    expressed in `_unit`. The quantity class is `_QUANTITY`.
    Hosts must define `_refresh()` to recompute eager derived fields.
    """

    _QUANTITY: ClassVar[Type[Quantity]]
    _unit: _Unit
    _values: np.ndarray

    @property
    def unit(self) -> _Unit:
        return self._unit

    def change_unit(self, unit: _Unit) -> None:
        """Rescale every component to `unit`, in place. Not safe on shared instances."""
        factor = conversion_factor(self._unit, unit)
        if unit is self._unit:
            return
        logger.debug("%s: changing unit %s -> %s", type(self).__name__, self._unit, unit)
        self._values = _frozen(self._values * factor)
        self._unit = unit
        self._refresh()

    def convert(self, unit: _Unit):
        """Copy of this object expressed in `unit`."""
        converted = self.copy()
        converted.change_unit(unit)
        return converted

    def _factor_from(self, other) -> float:
        return conversion_factor(other._unit, self._unit)

    def _factor_to(self, unit: _Unit) -> float:
        return conversion_factor(self._unit, unit)

    def _tolerance_value(self, tolerance=None) -> float:
        if tolerance is None:
            tolerance = self._QUANTITY.TOLERANCE
        if isinstance(tolerance, Quantity):
            return abs(quantity_from(tolerance, self._QUANTITY, self._unit).as_unit(self._unit))
        return abs(float(tolerance))

    def _wrap(self, value: float) -> Quantity:
        return self._QUANTITY(value, self._unit)

    def _format(self, value: float) -> str:
        return f"{value:.4g} {self._unit.symbol}"

    def _unit_kwargs(self) -> dict:
        return {"unit": self._unit}


def _frozen(values) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


def _is_scalar(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class _StateBase:
    """Hooks shared by general and principal states of unit-free kinds."""

    _ENGINEERING_SHEAR: ClassVar[bool] = False
    _TOLERANCE: ClassVar[float] = 0.0
    _SYMBOLS: ClassVar[Tuple[str, ...]] = ()
    _GENERAL: ClassVar[type]
    _PRINCIPAL: ClassVar[type]

    _values: np.ndarray

    # numpy defers to our reflected operators
    __array_ufunc__ = None
    __hash__ = None

    ZERO = _FreshZero()

    @classmethod
    def zero(cls):
        raise NotImplementedError

    def _refresh(self) -> None:
        pass

    def _factor_from(self, other) -> float:
        return 1.0

    def _factor_to(self, unit) -> float:
        raise TypeError(f"{type(self).__name__} is dimensionless and has no unit")

    def _tolerance_value(self, tolerance=None) -> float:
        return abs(float(self._TOLERANCE if tolerance is None else tolerance))

    def _wrap(self, value: float):
        return float(value)

    def _format(self, value: float) -> str:
        return f"{value:.4E}"

    def _unit_kwargs(self) -> dict:
        return {}

    def _same_kind(self, other) -> bool:
        return isinstance(other, (self._GENERAL, self._PRINCIPAL))

    def _values_close(self, other, tolerance) -> bool:
        other_values = other._values * self._factor_from(other)
        return bool(np.all(np.abs(self._values - other_values) <= self._tolerance_value(tolerance)))

    def as_vector(self, unit=None) -> np.ndarray:
        """Components as a new float array, optionally converted to `unit`."""
        if unit is None:
            return np.array(self._values, dtype=float)
        return self._values * self._factor_to(unit)

    def as_tuple(self) -> Tuple[float, ...]:
        return tuple(float(v) for v in self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, _StateBase):
            return NotImplemented
        return self.approaches(other)

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result


# ----------------------------------------------------------------------
# General state
# ----------------------------------------------------------------------

class PlaneState(_StateBase):
    """
    A 2D symmetric tensor {X, Y, XY} referred to axes rotated `theta_x`
    (radians, counterclockwise) from the horizontal.

    The 3x3 transformation matrix of `theta_x` is computed at construction.
    """

    def _init_state(self, values, theta_x: float) -> None:
        self._values = _frozen(kernel.sanitize(values, 3))
        self._theta_x = sanitize_angle(theta_x)
        self._matrix = _frozen(kernel.rotation_matrix(self._theta_x, self._ENGINEERING_SHEAR))

    def _spawn(self, cls, values, theta: float):
        return cls(*values, theta, **self._unit_kwargs())

    # ------------------------------------------------------------------
    # Components and angles
    # ------------------------------------------------------------------

    @property
    def theta_x(self) -> float:
        return self._theta_x

    @property
    def theta_y(self) -> float:
        return self._theta_x + HALF_PI

    @property
    def x(self):
        return self._wrap(self._values[0])

    @property
    def y(self):
        return self._wrap(self._values[1])

    @property
    def xy(self):
        """Stored shear component (gamma_xy for strain)."""
        return self._wrap(self._values[2])

    @property
    def transformation_matrix(self) -> np.ndarray:
        """Rotation matrix of theta_x (read-only)."""
        return self._matrix

    @property
    def is_x_zero(self) -> bool:
        return abs(self._values[0]) <= self._tolerance_value()

    @property
    def is_y_zero(self) -> bool:
        return abs(self._values[1]) <= self._tolerance_value()

    @property
    def is_xy_zero(self) -> bool:
        return abs(self._values[2]) <= self._tolerance_value()

    @property
    def is_zero(self) -> bool:
        return self.is_x_zero and self.is_y_zero and self.is_xy_zero

    @property
    def is_principal(self) -> bool:
        """No shear and at least one nonzero normal component."""
        return self.is_xy_zero and not (self.is_x_zero and self.is_y_zero)

    @property
    def is_pure_shear(self) -> bool:
        return self.is_x_zero and self.is_y_zero and not self.is_xy_zero

    @property
    def is_horizontal(self) -> bool:
        return angle_near(self._theta_x, 0.0, period=math.pi)

    @property
    def is_vertical(self) -> bool:
        return angle_near(self._theta_x, HALF_PI, period=math.pi)

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------

    def transform(self, theta: float):
        """
        Same tensor referred to axes rotated a further `theta` radians.

        Rotations below CONFIG.rotation_skip_tolerance return a copy.
        """
        theta = to_zero(theta)
        if abs(theta) <= CONFIG.rotation_skip_tolerance:
            return self.copy()
        values = kernel.transform(self._values, theta, self._ENGINEERING_SHEAR)
        return self._spawn(type(self), values, self._theta_x + theta)

    def to_horizontal(self):
        return self.transform(-self._theta_x)

    def to_principal(self):
        t1, t2 = kernel.calculate_principal(self._values, self._ENGINEERING_SHEAR)
        theta1, _ = kernel.calculate_principal_angles(self._values, t2, self._ENGINEERING_SHEAR)
        return self._spawn(self._PRINCIPAL, (t1, t2), self._theta_x + theta1)

    @classmethod
    def from_principal(cls, principal):
        """Horizontal state equivalent to a principal state of the same kind."""
        if not isinstance(principal, cls._PRINCIPAL):
            raise TypeError(
                f"{cls.__name__}.from_principal needs a {cls._PRINCIPAL.__name__}, "
                f"got {type(principal).__name__}"
            )
        t1, t2 = principal._values
        theta1 = principal.theta1

        if abs(theta1) <= CONFIG.rotation_skip_tolerance:
            values = (t1, t2, 0.0)
        else:
            values = kernel.from_principal(t1, t2, theta1, cls._ENGINEERING_SHEAR)

        return principal._spawn(cls, values, 0.0)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def approaches(self, other, tolerance=None) -> bool:
        """
        Approximate equality with a state of the same kind.

        Angles are compared at CONFIG.angle_tolerance, components at
        `tolerance` (default: the kind tolerance) after unit conversion.
        A principal state is compared at horizontal axes.
        """
        if not self._same_kind(other):
            return False

        if isinstance(other, self._PRINCIPAL):
            return self.to_horizontal().approaches(self.from_principal(other), tolerance)

        return (
            angle_near(self._theta_x, other._theta_x)
            and self._values_close(other, tolerance)
        )

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _as_general(self, other):
        if isinstance(other, self._PRINCIPAL):
            return other.as_general_state()
        return other

    def __add__(self, other):
        if not self._same_kind(other):
            return NotImplemented
        left = self.to_horizontal()
        right = self._as_general(other).to_horizontal()
        values = left._values + right._values * left._factor_from(right)
        return self._spawn(type(self), values, 0.0)

    def __sub__(self, other):
        if not self._same_kind(other):
            return NotImplemented
        return self + (-other)

    def __neg__(self):
        return self._spawn(type(self), -self._values, self._theta_x)

    def __mul__(self, multiplier):
        if not _is_scalar(multiplier):
            return NotImplemented
        return self._spawn(type(self), self._values * multiplier, self._theta_x)

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        if not _is_scalar(divisor):
            return NotImplemented
        return self._spawn(type(self), self._values / divisor, self._theta_x)

    def copy(self):
        return self._spawn(type(self), self._values, self._theta_x)

    def __str__(self) -> str:
        sx, sy, sxy = self._SYMBOLS
        x, y, xy = self._values
        return (
            f"{sx} = {self._format(x)}\n"
            f"{sy} = {self._format(y)}\n"
            f"{sxy} = {self._format(xy)}\n"
            f"θx = {math.degrees(self._theta_x):.4g}°"
        )

    def __repr__(self) -> str:
        x, y, xy = self._values
        extra = "".join(f", {k}={v.name}" for k, v in self._unit_kwargs().items())
        return f"{type(self).__name__}({x!r}, {y!r}, {xy!r}, theta_x={self._theta_x!r}{extra})"


# ----------------------------------------------------------------------
# Principal state
# ----------------------------------------------------------------------

class PrincipalState(_StateBase):
    """
    Principal values T1 (at `theta1`) and T2 (at `theta2 = theta1 + pi/2`).

    T1 >= T2 is expected but not checked. The principal case is computed at
    construction.
    """

    def _init_state(self, values, theta1: float) -> None:
        self._values = _frozen(kernel.sanitize(values, 2))
        self._theta1 = sanitize_angle(theta1)
        self._refresh()

    def _refresh(self) -> None:
        t1, t2 = self._values
        self._case = classify_principal(t1, t2, self._tolerance_value())

    def _spawn(self, cls, values, theta: float):
        return cls(*values, theta, **self._unit_kwargs())

    @property
    def theta1(self) -> float:
        return self._theta1

    @property
    def theta2(self) -> float:
        return self._theta1 + HALF_PI

    @property
    def x(self):
        return self._wrap(self._values[0])

    @property
    def y(self):
        return self._wrap(self._values[1])

    @property
    def xy(self):
        return self._wrap(0.0)

    @property
    def theta_x(self) -> float:
        return self._theta1

    @property
    def case(self) -> PrincipalCase:
        return self._case

    @property
    def is_1_zero(self) -> bool:
        return abs(self._values[0]) <= self._tolerance_value()

    @property
    def is_2_zero(self) -> bool:
        return abs(self._values[1]) <= self._tolerance_value()

    @property
    def is_zero(self) -> bool:
        return self.is_1_zero and self.is_2_zero

    @property
    def is_horizontal(self) -> bool:
        return angle_near(self._theta1, 0.0, period=math.pi)

    @property
    def is_vertical(self) -> bool:
        return angle_near(self._theta1, HALF_PI, period=math.pi)

    @property
    def is_at_45_degrees(self) -> bool:
        return angle_near(self._theta1, QUARTER_PI, period=HALF_PI)

    @property
    def is_isotropic(self) -> bool:
        """T1 ≈ T2: every direction is principal."""
        return abs(self._values[0] - self._values[1]) <= self._tolerance_value()

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def as_general_state(self):
        """General state {T1, T2, 0} referred to axes at theta1."""
        t1, t2 = self._values
        return self._spawn(self._GENERAL, (t1, t2, 0.0), self._theta1)

    @classmethod
    def from_general(cls, state):
        if not isinstance(state, cls._GENERAL):
            raise TypeError(
                f"{cls.__name__}.from_general needs a {cls._GENERAL.__name__}, "
                f"got {type(state).__name__}"
            )
        return state.to_principal()

    def to_horizontal(self):
        return self.as_general_state().to_horizontal()

    def transform(self, theta: float):
        return self.as_general_state().transform(theta)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def approaches(self, other, tolerance=None) -> bool:
        """
        Approximate equality with a state of the same kind.

        General states are converted with to_principal() first. theta1 is an
        axial direction, compared modulo pi, and ignored for isotropic states.
        """
        if not self._same_kind(other):
            return False

        if isinstance(other, self._GENERAL):
            other = other.to_principal()

        if not self._values_close(other, tolerance):
            return False

        if self.is_isotropic and other.is_isotropic:
            return True

        return angle_near(self._theta1, other._theta1, period=math.pi)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other):
        if not self._same_kind(other):
            return NotImplemented
        return self.as_general_state() + other

    def __sub__(self, other):
        if not self._same_kind(other):
            return NotImplemented
        return self.as_general_state() - other

    def __neg__(self):
        return self._spawn(type(self), -self._values, self._theta1)

    def __mul__(self, multiplier):
        if not _is_scalar(multiplier):
            return NotImplemented
        return self._spawn(type(self), self._values * multiplier, self._theta1)

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        if not _is_scalar(divisor):
            return NotImplemented
        return self._spawn(type(self), self._values / divisor, self._theta1)

    def copy(self):
        return self._spawn(type(self), self._values, self._theta1)

    def __str__(self) -> str:
        s1, s2 = self._SYMBOLS
        t1, t2 = self._values
        return (
            f"{s1} = {self._format(t1)}\n"
            f"{s2} = {self._format(t2)}\n"
            f"θ1 = {math.degrees(self._theta1):.4g}°\n"
            f"θ2 = {math.degrees(self.theta2):.4g}°"
        )

    def __repr__(self) -> str:
        t1, t2 = self._values
        extra = "".join(f", {k}={v.name}" for k, v in self._unit_kwargs().items())
        return f"{type(self).__name__}({t1!r}, {t2!r}, theta1={self._theta1!r}{extra})"
