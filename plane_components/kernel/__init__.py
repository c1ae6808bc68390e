# plane_components/kernel - Unit-free plane tensor mathematics
"""
KERNEL: THE UNIT-FREE TRANSFORMATION ENGINE
===========================================

Everything in here works on bare floats and numpy arrays:
- {X, Y, XY} triples of a 2D symmetric tensor (stress or strain)
- (x, y) pairs of a 2-component vector (force or displacement)

The state classes (StressState, StrainState, ...) own the units and the
tolerances. The kernel only owns the formulas.
"""

from .transform import (
    calculate_components,
    calculate_principal,
    calculate_principal_angles,
    calculate_resultant,
    calculate_resultant_angle,
    from_principal,
    rotation_matrix,
    sanitize,
    transform,
)
