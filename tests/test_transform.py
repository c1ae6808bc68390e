import math

import numpy as np
import pytest

from plane_components.kernel import (
    calculate_components,
    calculate_principal,
    calculate_principal_angles,
    calculate_resultant,
    calculate_resultant_angle,
    from_principal,
    rotation_matrix,
    transform,
)
from plane_components.numeric import HALF_PI, QUARTER_PI, THREE_HALVES_PI, angle_near


def test_rotation_matrix_is_exact_on_axes():
    """
    WHAT IS THIS TEST?
    ==================
    At 90 degrees the direction cosines are exactly (0, 1), so the matrix
    must contain only 0, +1 and -1.

    WHY DOES THIS MATTER?
    ====================
    cos(pi/2) in floating point is 6e-17, not 0. If that leaks into the
    matrix, a state rotated by 90 degrees picks up a tiny fake shear and
    every "is the shear zero?" branch downstream becomes unreliable.
    """
    R = rotation_matrix(HALF_PI)
    expected = np.array([
        [0.0, 1.0, 0.0],
        [1.0, 0.0, 0.0],
        [0.0, 0.0, -1.0],
    ])
    assert np.array_equal(R, expected)

    assert np.array_equal(rotation_matrix(0.0), np.eye(3))
    assert np.array_equal(rotation_matrix(math.pi), np.eye(3))


@pytest.mark.parametrize("theta", [0.2, -0.7, 1.1, 2.5, 4.0])
@pytest.mark.parametrize("engineering_shear", [False, True])
def test_rotation_matrix_matches_closed_form(theta, engineering_shear):
    v = np.array([10.0, -4.0, 3.0])
    np.testing.assert_allclose(
        rotation_matrix(theta, engineering_shear) @ v,
        transform(v, theta, engineering_shear),
        rtol=1e-12, atol=1e-12,
    )


def test_transform_by_zero_is_identity():
    v = [7.0, -2.0, 1.5]
    np.testing.assert_allclose(transform(v, 0.0), v, atol=0.0)


def test_rotation_composition():
    """Rotating by a then by b equals rotating by a + b."""
    v = np.array([12.0, 3.0, -5.0])
    a, b = 0.35, 1.2
    np.testing.assert_allclose(
        transform(transform(v, a), b),
        transform(v, a + b),
        rtol=1e-12, atol=1e-12,
    )


def test_rotation_preserves_invariants():
    """Trace and determinant of the tensor do not depend on the axes."""
    x, y, xy = 8.0, -3.0, 4.0
    rx, ry, rxy = transform((x, y, xy), 0.77)
    assert rx + ry == pytest.approx(x + y)
    assert rx * ry - rxy ** 2 == pytest.approx(x * y - xy ** 2)


def test_uniaxial_state_at_45_degrees():
    # sigma_x = 10 rotated 45 degrees: 5, 5, -5
    np.testing.assert_allclose(transform((10.0, 0.0, 0.0), QUARTER_PI), [5.0, 5.0, -5.0], atol=1e-12)


def test_principal_of_uniaxial_state():
    assert calculate_principal((10.0, 0.0, 0.0)) == (10.0, 0.0)
    assert calculate_principal_angles((10.0, 0.0, 0.0)) == (0.0, HALF_PI)


def test_principal_when_y_dominates():
    assert calculate_principal((0.0, 10.0, 0.0)) == (10.0, 0.0)
    theta1, theta2 = calculate_principal_angles((0.0, 10.0, 0.0))
    assert theta1 == HALF_PI
    assert theta2 == math.pi


def test_pure_shear():
    t1, t2 = calculate_principal((0.0, 0.0, 5.0))
    assert t1 == pytest.approx(5.0)
    assert t2 == pytest.approx(-5.0)
    assert calculate_principal_angles((0.0, 0.0, 5.0))[0] == QUARTER_PI
    assert calculate_principal_angles((0.0, 0.0, -5.0))[0] == -QUARTER_PI


def test_null_state_reports_45_degrees():
    assert calculate_principal((0.0, 0.0, 0.0)) == (0.0, 0.0)
    assert calculate_principal_angles((0.0, 0.0, 0.0)) == (QUARTER_PI, QUARTER_PI + HALF_PI)


def test_general_principal_angle():
    # tan(2θ) = 2τ / (σx - σy) = 1  ->  θ = 22.5°
    t1, t2 = calculate_principal((10.0, 0.0, 5.0))
    assert t1 == pytest.approx(5.0 + math.sqrt(50.0))
    assert t2 == pytest.approx(5.0 - math.sqrt(50.0))

    theta1, _ = calculate_principal_angles((10.0, 0.0, 5.0))
    assert theta1 == pytest.approx(math.pi / 8)

    # Rotating onto theta1 removes the shear and leaves T1 on x
    np.testing.assert_allclose(transform((10.0, 0.0, 5.0), theta1), [t1, t2, 0.0], atol=1e-12)


def test_principal_angle_with_known_t2():
    v = (10.0, 0.0, 5.0)
    _, t2 = calculate_principal(v)
    assert calculate_principal_angles(v, t2) == pytest.approx(calculate_principal_angles(v))


def test_engineering_shear_factor():
    """gamma_xy = 2 eps_xy: the engine halves it going in and doubles it going out."""
    assert calculate_principal((1e-3, 0.0, 2e-3), engineering_shear=True) == pytest.approx(
        calculate_principal((1e-3, 0.0, 1e-3))
    )

    rotated = transform((1e-3, 0.0, 0.0), QUARTER_PI, engineering_shear=True)
    np.testing.assert_allclose(rotated, [5e-4, 5e-4, -1e-3], atol=1e-18)


def test_non_finite_inputs_are_coerced_to_zero():
    np.testing.assert_allclose(
        transform([np.nan, 1.0, np.inf], 0.3),
        transform([0.0, 1.0, 0.0], 0.3),
    )
    np.testing.assert_allclose(transform([1.0, 2.0, 3.0], np.nan), [1.0, 2.0, 3.0])
    assert calculate_principal((np.nan, np.nan, -np.inf)) == (0.0, 0.0)


@pytest.mark.parametrize("theta1", [0.3, 1.0, -0.4, 2.0])
def test_from_principal_round_trip(theta1):
    v = from_principal(12.0, -3.0, theta1)
    t1, t2 = calculate_principal(v)
    assert (t1, t2) == pytest.approx((12.0, -3.0))
    angle, _ = calculate_principal_angles(v, t2)
    assert angle_near(angle, theta1, 1e-9, period=math.pi)


def test_from_principal_at_zero_angle():
    np.testing.assert_allclose(from_principal(4.0, 1.0, 0.0), [4.0, 1.0, 0.0], atol=0.0)


@pytest.mark.parametrize("x, y, expected", [
    (1.0, 0.0, 0.0),
    (0.0, 1.0, HALF_PI),
    (-1.0, 0.0, math.pi),
    (0.0, -1.0, THREE_HALVES_PI),
    (0.0, 0.0, 0.0),
])
def test_resultant_angle_on_axes(x, y, expected):
    assert calculate_resultant_angle(x, y) == expected


def test_resultant_angle_off_axes():
    assert calculate_resultant_angle(1.0, 1.0) == pytest.approx(QUARTER_PI)
    assert calculate_resultant_angle(-1.0, -1.0) == pytest.approx(5 * QUARTER_PI)
    assert calculate_resultant_angle(1.0, -1.0) == pytest.approx(7 * QUARTER_PI)


def test_resultant_magnitude():
    assert calculate_resultant(3.0, 4.0) == pytest.approx(5.0)
    assert calculate_resultant(1e-15, -1e-15) == 0.0
    assert calculate_resultant(1e-8, 0.0, tolerance=1e-6) == 0.0


def test_components_from_resultant():
    assert calculate_components(2.0, HALF_PI) == (0.0, 2.0)
    assert calculate_components(2.0, math.pi) == (-2.0, 0.0)
    x, y = calculate_components(5.0, math.atan2(4.0, 3.0))
    assert (x, y) == pytest.approx((3.0, 4.0))
