# plane_components/vectors.py
"""
QUANTITY VECTORS: Unit-Consistent Nodal Vectors
===============================================

PURPOSE:
--------
A QuantityVector is a fixed-length numpy array of one quantity kind in one
unit. It is what system-assembly code works with:

    F = ForceVector([PlaneForce(0, -10, ForceUnit.KILONEWTON), ...])
    d = DisplacementVector.zero(F.size)

Point vectors are flattened with 2 DOF per node ([x0, y0, x1, y1, ...]);
see components.constrained_indexes() for the matching index layout.

UNIT RULES:
-----------
- Binary operations convert the RIGHT operand to the LEFT operand's unit.
- Mixing kinds (forces with displacements) raises TypeError.
- Vectors of different lengths raise DimensionMismatchError.
- Every operation returns a new vector; only change_unit() mutates.
"""

import logging
import numbers
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar, Union

import numpy as np

from . import kernel
from .base import UnitConvertibleMixin, _frozen, _is_scalar
from .components import PlaneComponent
from .config import CONFIG
from .units import Force, ForceUnit, Length, LengthUnit, Quantity, _Unit, quantity_from, quantity_type_for

logger = logging.getLogger(__name__)

Q = TypeVar("Q", bound=Quantity)
U = TypeVar("U", bound=_Unit)


class DimensionMismatchError(ValueError):
    """Raised when vectors of different lengths are combined."""
    pass


class QuantityVector(UnitConvertibleMixin, Generic[Q, U]):
    """
    Vector of quantities sharing one unit.

    Parameters:
    -----------
    values : iterable
        Raw numbers (read in `unit`), quantities, point vectors
        (PlaneForce / PlaneDisplacement, flattened to x, y pairs) or a
        numpy array.
    unit : unit enum, optional
        Defaults to the unit of the first quantity or point vector, then to
        the class default. The generic QuantityVector has no default unit,
        so raw numbers need one.
    """

    # Name of the CONFIG field holding the default unit, if any
    _DEFAULT_UNIT: Optional[str] = None
    _UNIT_TYPE: Optional[type] = None

    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, values: Iterable, unit: U = None):
        if isinstance(values, np.ndarray):
            items = list(values.reshape(-1))
        else:
            items = list(values)

        self._unit = self._resolve_unit(items, unit)
        self._QUANTITY = quantity_type_for(self._unit)

        floats: List[float] = []
        for item in items:
            if isinstance(item, PlaneComponent):
                floats.extend(item.as_vector(self._unit))
            else:
                floats.append(quantity_from(item, self._QUANTITY, self._unit).as_unit(self._unit))

        self._values = _frozen(kernel.sanitize(floats, len(floats)))

    def _resolve_unit(self, items: list, unit) -> _Unit:
        if unit is None and items and isinstance(items[0], (Quantity, PlaneComponent)):
            unit = items[0].unit
        if unit is None and self._DEFAULT_UNIT is not None:
            unit = getattr(CONFIG, self._DEFAULT_UNIT)
        if unit is None:
            raise TypeError(f"{type(self).__name__} built from raw numbers needs a unit")
        if self._UNIT_TYPE is not None and not isinstance(unit, self._UNIT_TYPE):
            raise TypeError(f"{type(self).__name__} needs a {self._UNIT_TYPE.__name__}, got {unit!r}")
        return unit

    @classmethod
    def zero(cls, size: int, unit: U = None) -> "QuantityVector":
        return cls(np.zeros(size), unit)

    def _spawn(self, values) -> "QuantityVector":
        return type(self)(np.asarray(values, dtype=float), self._unit)

    def _refresh(self) -> None:
        pass

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._spawn(self._values[index])
        return self._wrap(self._values[index])

    def __iter__(self) -> Iterator[Q]:
        return (self._wrap(v) for v in self._values)

    def as_vector(self, unit: U = None) -> np.ndarray:
        if unit is None:
            return np.array(self._values, dtype=float)
        return self._values * self._factor_to(unit)

    def copy(self) -> "QuantityVector":
        return self._spawn(self._values)

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _check_vector(self, other: "QuantityVector") -> np.ndarray:
        """Values of `other` in this vector's unit, after kind and length checks."""
        if other._QUANTITY is not self._QUANTITY:
            raise TypeError(
                f"Cannot combine a vector of {self._QUANTITY.__name__} "
                f"with a vector of {other._QUANTITY.__name__}"
            )
        if len(other) != len(self):
            raise DimensionMismatchError(
                f"Vector lengths differ: {len(self)} and {len(other)}"
            )
        return other._values * self._factor_from(other)

    def _scalar_value(self, scalar) -> float:
        """A quantity (any unit of this kind) or a raw number in this unit, as float."""
        if isinstance(scalar, Quantity):
            return quantity_from(scalar, self._QUANTITY, self._unit).as_unit(self._unit)
        if _is_scalar(scalar):
            return float(scalar)
        raise TypeError(f"Expected a {self._QUANTITY.__name__} or a number, got {type(scalar).__name__}")

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other) -> "QuantityVector":
        if isinstance(other, QuantityVector):
            return self._spawn(self._values + self._check_vector(other))
        value = self._scalar_value(other)
        if value == 0:
            return self.copy()
        return self._spawn(self._values + value)

    def subtract(self, other) -> "QuantityVector":
        if isinstance(other, QuantityVector):
            return self._spawn(self._values - self._check_vector(other))
        value = self._scalar_value(other)
        if value == 0:
            return self.copy()
        return self._spawn(self._values - value)

    def subtract_from(self, scalar) -> "QuantityVector":
        """scalar - self, element-wise."""
        return self._spawn(self._scalar_value(scalar) - self._values)

    def multiply(self, multiplier: float) -> "QuantityVector":
        if not _is_scalar(multiplier):
            raise TypeError(f"Expected a number, got {type(multiplier).__name__}")
        return self._spawn(self._values * multiplier)

    def divide(self, divisor) -> Union["QuantityVector", np.ndarray]:
        """
        Divide by a number (same kind result) or by a quantity of the same
        kind (dimensionless numpy array).
        """
        if isinstance(divisor, Quantity):
            return self._values / self._scalar_value(divisor)
        if not _is_scalar(divisor):
            raise TypeError(f"Expected a number or quantity, got {type(divisor).__name__}")
        return self._spawn(self._values / divisor)

    def divide_into(self, quantity: Quantity) -> np.ndarray:
        """quantity / self, element-wise, as a dimensionless numpy array."""
        if not isinstance(quantity, Quantity):
            raise TypeError(f"Expected a {self._QUANTITY.__name__}, got {type(quantity).__name__}")
        return self._scalar_value(quantity) / self._values

    def negate(self) -> "QuantityVector":
        return self._spawn(-self._values)

    def dot(self, other) -> float:
        """
        Dot product. Another vector of this kind is converted to this unit
        first; any other array-like is used as plain numbers.
        """
        if isinstance(other, QuantityVector):
            other_values = self._check_vector(other)
        else:
            other_values = np.asarray(other, dtype=float).reshape(-1)
            if len(other_values) != len(self):
                raise DimensionMismatchError(
                    f"Vector lengths differ: {len(self)} and {len(other_values)}"
                )
        return float(np.dot(self._values, other_values))

    # ------------------------------------------------------------------
    # Reductions
    # ------------------------------------------------------------------

    def sum(self) -> Q:
        return self._wrap(float(np.sum(self._values)))

    def maximum(self) -> Q:
        return self._wrap(float(np.max(self._values)))

    def minimum(self) -> Q:
        return self._wrap(float(np.min(self._values)))

    def absolute_maximum(self) -> Q:
        return self._wrap(float(np.max(np.abs(self._values))))

    def absolute_minimum(self) -> Q:
        return self._wrap(float(np.min(np.abs(self._values))))

    # ------------------------------------------------------------------
    # Cleanup and comparison
    # ------------------------------------------------------------------

    def simplified(self, indexes: Iterable[int] = None, threshold=None) -> "QuantityVector":
        """
        Copy with the given indexes set to zero and every value smaller than
        `threshold` (default: the kind tolerance) snapped to zero.

        Typical use: zero the constrained DOFs of a displacement vector.
        """
        values = np.array(self._values, dtype=float)
        if indexes is not None:
            indexes = list(indexes)
            if indexes:
                values[indexes] = 0.0
        limit = self._tolerance_value(threshold)
        values[np.abs(values) < limit] = 0.0
        logger.debug("Simplified %s (zeroed %s, threshold %g)", type(self).__name__, indexes, limit)
        return self._spawn(values)

    def approaches(self, other, tolerance=None) -> bool:
        if not isinstance(other, QuantityVector) or other._QUANTITY is not self._QUANTITY:
            return False
        if len(other) != len(self):
            return False
        other_values = other._values * self._factor_from(other)
        return bool(np.all(np.abs(self._values - other_values) <= self._tolerance_value(tolerance)))

    def __eq__(self, other) -> bool:
        if not isinstance(other, QuantityVector):
            return NotImplemented
        return self.approaches(other)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __add__(self, other):
        if not isinstance(other, (QuantityVector, Quantity, numbers.Real)):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        if not isinstance(other, (Quantity, numbers.Real)):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, (QuantityVector, Quantity, numbers.Real)):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        if not isinstance(other, (Quantity, numbers.Real)):
            return NotImplemented
        return self.subtract_from(other)

    def __mul__(self, multiplier):
        if not _is_scalar(multiplier):
            return NotImplemented
        return self.multiply(multiplier)

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        if not isinstance(divisor, (Quantity, numbers.Real)):
            return NotImplemented
        return self.divide(divisor)

    def __rtruediv__(self, dividend):
        if not isinstance(dividend, Quantity):
            return NotImplemented
        return self.divide_into(dividend)

    def __neg__(self):
        return self.negate()

    def __rmatmul__(self, matrix):
        """matrix @ vector, same kind and unit as this vector."""
        matrix = np.asarray(matrix, dtype=float)
        if matrix.ndim != 2 or matrix.shape[1] != len(self):
            raise DimensionMismatchError(
                f"Cannot multiply a {matrix.shape} matrix by a vector of length {len(self)}"
            )
        return self._spawn(matrix @ self._values)

    def __str__(self) -> str:
        return f"{type(self).__name__} ({self._unit.symbol}): {np.array2string(self._values, precision=4)}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values.tolist()!r}, unit={self._unit.name})"


class ForceVector(QuantityVector[Force, ForceUnit]):
    """Nodal force vector (default unit N, tolerance 1e-6 N)."""

    _DEFAULT_UNIT = "default_force_unit"
    _UNIT_TYPE = ForceUnit


class DisplacementVector(QuantityVector[Length, LengthUnit]):
    """Nodal displacement vector (default unit mm, tolerance 1e-6 mm)."""

    _DEFAULT_UNIT = "default_length_unit"
    _UNIT_TYPE = LengthUnit
