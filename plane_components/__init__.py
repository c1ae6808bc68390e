# plane_components - Plane stress/strain states and unit-aware nodal vectors
"""
PLANE-COMPONENTS: 2D Tensor States and Quantity Vectors
=======================================================

This package provides:
- Plane stress and strain states (general and principal form)
- Closed-form rotation and principal decomposition of 2D tensors
- Unit-aware nodal force/displacement vectors for system assembly

ARCHITECTURE:
-------------
    config.py       EngineConfig + global CONFIG (tolerances, default units)
    numeric.py      NaN coercion, tolerance comparisons, exact axis cosines
    units.py        Pressure / Force / Length quantities and unit enums
    kernel/         Unit-free transformation engine (pure functions)
    base.py         Shared state machinery, capability protocols
    stress.py       StressState, PrincipalStressState
    strain.py       StrainState, PrincipalStrainState
    components.py   PlaneForce, PlaneDisplacement, Constraint
    vectors.py      QuantityVector, ForceVector, DisplacementVector

QUICK START:
------------
    >>> from plane_components import StressState
    >>> s = StressState(10, 0, 5)            # MPa
    >>> p = s.to_principal()
    >>> round(p.sigma1.value, 3), round(p.sigma2.value, 3)
    (12.071, -2.071)
"""

from .base import (
    ApproxEquatable,
    PrincipalCase,
    Stateful,
    UnitConvertible,
)
from .components import (
    ComponentDirection,
    Constraint,
    PlaneDisplacement,
    PlaneForce,
    constrained_indexes,
)
from .config import CONFIG, EngineConfig
from .strain import PrincipalStrainState, StrainState
from .stress import PrincipalStressState, StressState
from .units import (
    DISPLACEMENT_TOLERANCE,
    FORCE_TOLERANCE,
    STRAIN_TOLERANCE,
    STRESS_TOLERANCE,
    Force,
    ForceUnit,
    Length,
    LengthUnit,
    Pressure,
    PressureUnit,
)
from .vectors import (
    DimensionMismatchError,
    DisplacementVector,
    ForceVector,
    QuantityVector,
)

__version__ = "0.1.0"
