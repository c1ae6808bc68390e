# plane_components/kernel/transform.py
"""
TRANSFORMATION ENGINE: Plane-Tensor Rotation and Principal Values
=================================================================

PURPOSE:
--------
Pure functions over {X, Y, XY} triples (a 2D symmetric tensor in Voigt
order) and over 2-component vectors. They know nothing about units or
quantity kinds: the state classes strip units before calling in and put
them back on the way out.

SHEAR CONVENTION:
-----------------
Internally every formula works on the TENSOR shear component:

    stress:  XY = tau_xy
    strain:  XY = eps_xy = gamma_xy / 2

Strain states store ENGINEERING shear (gamma_xy = 2 eps_xy). Functions that
take a triple accept `engineering_shear=True`, which halves the shear term on
the way in and doubles it on the way out. That is the only place the factor
of two is applied.

ROTATION (Mohr's circle, counterclockwise theta):
-------------------------------------------------
    a = (X + Y) / 2          b = (X - Y) / 2

    X'  = a + b cos2θ + XY sin2θ
    Y'  = a - b cos2θ - XY sin2θ
    XY' = XY cos2θ - b sin2θ

PRINCIPAL VALUES:
-----------------
    T1, T2 = a ± sqrt(b² + XY²)

FAILURE POLICY:
---------------
Nothing here raises for numeric input: NaN and infinities are coerced to
zero before any formula runs, so every transformation is total.
"""

import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from ..numeric import (
    HALF_PI,
    QUARTER_PI,
    THREE_HALVES_PI,
    approx,
    approx_zero,
    direction_cosines,
    normalize_angle,
    to_zero,
)

logger = logging.getLogger(__name__)


def sanitize(vector: Sequence[float], size: int) -> np.ndarray:
    """Flatten to a float array of `size` entries with NaN and infinities set to 0."""
    values = np.asarray(vector, dtype=float).reshape(-1)
    if values.shape != (size,):
        raise ValueError(f"Expected {size} components, got shape {values.shape}")
    finite = np.isfinite(values)
    if not finite.all():
        logger.debug("Coercing non-finite components to zero: %s", values)
        values = np.where(finite, values, 0.0)
    return values


def _to_tensor(vector: Sequence[float], engineering_shear: bool) -> np.ndarray:
    values = sanitize(vector, 3)
    if engineering_shear:
        values = values.copy()
        values[2] *= 0.5
    return values


def _from_tensor(values: np.ndarray, engineering_shear: bool) -> np.ndarray:
    if engineering_shear:
        values[2] *= 2.0
    return values


def rotation_matrix(theta: float, engineering_shear: bool = False) -> np.ndarray:
    """
    3x3 axis-rotation matrix of a plane tensor.

    `rotation_matrix(theta) @ v` rotates the {X, Y, XY} triple `v` by `theta`
    (counterclockwise, radians), the same as `transform(v, theta)`.

    With `engineering_shear=True` the matrix acts on {X, Y, 2·XY}
    (strain with gamma_xy):

        [[  c²,   s²,   cs   ],
         [  s²,   c²,  -cs   ],
         [-2cs,  2cs,  c²-s² ]]

    Otherwise (tensor shear):

        [[  c²,   s²,  2cs   ],
         [  s²,   c², -2cs   ],
         [ -cs,   cs,  c²-s² ]]

    Direction cosines are exact at 0, 90, 180 and 270 degrees.
    """
    c, s = direction_cosines(theta)
    c2 = c * c
    s2 = s * s
    cs = c * s

    if engineering_shear:
        return np.array([
            [      c2,      s2,       cs],
            [      s2,      c2,      -cs],
            [-2.0 * cs, 2.0 * cs, c2 - s2],
        ], dtype=float)

    return np.array([
        [ c2,  s2,  2.0 * cs],
        [ s2,  c2, -2.0 * cs],
        [-cs,  cs,   c2 - s2],
    ], dtype=float)


def transform(vector: Sequence[float], theta: float, engineering_shear: bool = False) -> np.ndarray:
    """
    Rotate a {X, Y, XY} triple by `theta` (radians, counterclockwise).

    Uses the closed-form double-angle identities, not a matrix product.

    Parameters:
    -----------
    vector : sequence of 3 floats
        {X, Y, XY}. XY is engineering shear if `engineering_shear` is True.
    theta : float
        Rotation angle in radians (positive counterclockwise).
    engineering_shear : bool
        True for strain triples carrying gamma_xy.

    Returns:
    --------
    np.ndarray
        Shape (3,) rotated triple, in the same shear convention as the input.
    """
    x, y, xy = _to_tensor(vector, engineering_shear)
    cos2, sin2 = direction_cosines(2.0 * to_zero(theta))

    a = 0.5 * (x + y)
    b = 0.5 * (x - y)

    rotated = np.array([
        a + b * cos2 + xy * sin2,
        a - b * cos2 - xy * sin2,
        xy * cos2 - b * sin2,
    ], dtype=float)

    return _from_tensor(rotated, engineering_shear)


def calculate_principal(vector: Sequence[float], engineering_shear: bool = False) -> Tuple[float, float]:
    """
    Principal values (T1, T2) of a {X, Y, XY} triple, T1 >= T2.

    Center and radius of Mohr's circle:
        average = (X + Y) / 2
        radius  = sqrt(((X - Y) / 2)² + XY²)
    """
    x, y, xy = _to_tensor(vector, engineering_shear)

    if approx_zero(x) and approx_zero(y) and approx_zero(xy):
        return 0.0, 0.0

    if approx_zero(xy):
        return max(x, y), min(x, y)

    average = 0.5 * (x + y)
    radius = math.sqrt(0.25 * (x - y) ** 2 + xy * xy)

    return average + radius, average - radius


def calculate_principal_angles(
    vector: Sequence[float],
    t2: Optional[float] = None,
    engineering_shear: bool = False,
) -> Tuple[float, float]:
    """
    Angles (theta1, theta2) of the principal directions, in radians,
    measured from the X axis of the triple.

    Branches, in order:
        null tensor       -> theta1 = pi/4
        XY ≈ 0            -> theta1 = 0 if X >= Y else pi/2
        X ≈ Y             -> theta1 = pi/4 if XY > 0 else -pi/4
        general           -> theta1 = pi/2 - atan((X - T2) / XY)

    The explicit branches keep the general formula away from its
    division by zero and its sign ambiguity.

    Parameters:
    -----------
    vector : sequence of 3 floats
        {X, Y, XY}
    t2 : float, optional
        Minimum principal value, if already known. Must use the same shear
        convention as `vector`'s normal terms (normals never change).
    engineering_shear : bool
        True for strain triples carrying gamma_xy.

    Returns:
    --------
    (theta1, theta2) with theta2 = theta1 + pi/2
    """
    x, y, xy = _to_tensor(vector, engineering_shear)
    theta1 = QUARTER_PI

    if not (approx_zero(x) and approx_zero(y) and approx_zero(xy)):
        if approx_zero(xy):
            theta1 = 0.0 if x >= y else HALF_PI

        elif approx(x, y):
            theta1 = QUARTER_PI if xy > 0 else -QUARTER_PI

        else:
            if t2 is None:
                _, t2 = calculate_principal((x, y, xy))
            theta1 = HALF_PI - math.atan((x - to_zero(t2)) / xy)

        if math.isnan(theta1):
            theta1 = QUARTER_PI

    return theta1, theta1 + HALF_PI


def from_principal(t1: float, t2: float, theta1: float, engineering_shear: bool = False) -> np.ndarray:
    """
    {X, Y, XY} at theta = 0 of a tensor whose principal values are (t1, t2),
    with t1 acting at `theta1` from the horizontal axis.

        X  = c + r cos2θ1
        Y  = c - r cos2θ1
        XY = r sin2θ1

    with c = (t1 + t2)/2 and r = (t1 - t2)/2.
    """
    t1 = to_zero(t1)
    t2 = to_zero(t2)
    cos2, sin2 = direction_cosines(2.0 * to_zero(theta1))

    center = 0.5 * (t1 + t2)
    radius = 0.5 * (t1 - t2)

    values = np.array([
        center + radius * cos2,
        center - radius * cos2,
        radius * sin2,
    ], dtype=float)

    return _from_tensor(values, engineering_shear)


# ----------------------------------------------------------------------
# 2-component vectors (forces, displacements)
# ----------------------------------------------------------------------

def calculate_resultant(x: float, y: float, tolerance: float = None) -> float:
    """Magnitude sqrt(x² + y²); exactly 0 when both components are ≈ 0."""
    x, y = to_zero(x), to_zero(y)
    if approx_zero(x, tolerance) and approx_zero(y, tolerance):
        return 0.0
    return math.hypot(x, y)


def calculate_resultant_angle(x: float, y: float, tolerance: float = None) -> float:
    """
    Angle of the resultant in [0, 2*pi), radians from the +X axis.

    Axis-aligned vectors return the exact angles 0, pi/2, pi and 3*pi/2.
    A null vector has angle 0.
    """
    x, y = to_zero(x), to_zero(y)
    x_zero = approx_zero(x, tolerance)
    y_zero = approx_zero(y, tolerance)

    if x_zero and y_zero:
        return 0.0
    if y_zero:
        return 0.0 if x > 0 else math.pi
    if x_zero:
        return HALF_PI if y > 0 else THREE_HALVES_PI

    return normalize_angle(math.atan2(y, x))


def calculate_components(resultant: float, angle: float) -> Tuple[float, float]:
    """(x, y) of a vector of magnitude `resultant` pointing at `angle` (radians)."""
    resultant = to_zero(resultant)
    cos, sin = direction_cosines(to_zero(angle))
    return resultant * cos, resultant * sin

