# plane_components/numeric.py
"""
Numeric safeguards shared by the whole package.

Every formula in the engine goes through these helpers:
- non-finite values (NaN, +/-inf) are coerced to zero, never propagated
- comparisons are absolute-tolerance comparisons, never exact float equality
- direction cosines are exact at axis-aligned angles
"""

import math
from typing import Iterable, List, Tuple

from .config import CONFIG

HALF_PI = 0.5 * math.pi
QUARTER_PI = 0.25 * math.pi
THREE_HALVES_PI = 1.5 * math.pi
TWO_PI = 2.0 * math.pi

# (cos, sin) at 0, 90, 180 and 270 degrees
_AXIS_COSINES = ((1.0, 0.0), (0.0, 1.0), (-1.0, 0.0), (0.0, -1.0))


def to_zero(value: float) -> float:
    """Return `value` as float, or 0.0 if it is NaN or infinite."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise TypeError(f"Expected a real number, got {type(value).__name__}")
    return value if math.isfinite(value) else 0.0


def to_zero_all(values: Iterable[float]) -> List[float]:
    return [to_zero(v) for v in values]


def approx_zero(value: float, tolerance: float = None) -> bool:
    """True if abs(value) <= tolerance (default: CONFIG.zero_tolerance)."""
    if tolerance is None:
        tolerance = CONFIG.zero_tolerance
    return abs(value) <= tolerance


def approx(value: float, other: float, tolerance: float = None) -> bool:
    """True if abs(value - other) <= tolerance (default: CONFIG.zero_tolerance)."""
    if tolerance is None:
        tolerance = CONFIG.zero_tolerance
    return abs(value - other) <= tolerance


def coerce_zero(value: float, threshold: float) -> float:
    """Snap values smaller than `threshold` in magnitude to exactly zero."""
    return 0.0 if abs(value) < threshold else value


def normalize_angle(angle: float) -> float:
    """Map an angle to [0, 2*pi)."""
    angle = math.fmod(angle, TWO_PI)
    if angle < 0.0:
        angle += TWO_PI
    # fmod of a tiny negative number can land exactly on 2*pi
    return 0.0 if angle >= TWO_PI else angle


def angle_near(angle: float, target: float, tolerance: float = None, period: float = TWO_PI) -> bool:
    """
    True if `angle` is within `tolerance` of `target` modulo `period`.

    Use period=pi for axial directions (principal axes), where theta and
    theta + pi describe the same direction.
    """
    if tolerance is None:
        tolerance = CONFIG.angle_tolerance
    difference = math.fmod(abs(angle - target), period)
    return min(difference, period - difference) <= tolerance


def direction_cosines(angle: float) -> Tuple[float, float]:
    """
    Return (cos, sin) of an angle in radians.

    At multiples of 90 degrees (within CONFIG.axis_snap_tolerance) the exact
    values {0, +1, -1} are returned, so round-off such as cos(pi/2) = 6e-17
    never reaches later zero-tests.
    """
    angle = to_zero(angle)
    quarter_turns = angle / HALF_PI
    nearest = round(quarter_turns)
    if abs(angle - nearest * HALF_PI) <= CONFIG.axis_snap_tolerance:
        return _AXIS_COSINES[int(nearest) % 4]
    return math.cos(angle), math.sin(angle)
