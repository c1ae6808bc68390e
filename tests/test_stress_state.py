import logging
import math

import numpy as np
import pytest

from plane_components import (
    PrincipalCase,
    PrincipalStressState,
    Pressure,
    PressureUnit,
    StrainState,
    StressState,
    UnitConvertible,
)
from plane_components.kernel import rotation_matrix
from plane_components.numeric import HALF_PI, QUARTER_PI


def plane_stress_stiffness(E: float, nu: float) -> np.ndarray:
    """Isotropic plane-stress constitutive matrix (engineering shear)."""
    factor = E / (1.0 - nu ** 2)
    return factor * np.array([
        [1.0, nu, 0.0],
        [nu, 1.0, 0.0],
        [0.0, 0.0, 0.5 * (1.0 - nu)],
    ])


def test_default_unit_is_megapascal():
    s = StressState(10, 0, 5)
    assert s.unit is PressureUnit.MEGAPASCAL
    assert s.sigma_x == Pressure(10.0)
    assert s.tau_xy.value == 5.0
    assert s.theta_x == 0.0
    assert s.theta_y == HALF_PI


def test_components_follow_the_unit_of_sigma_x():
    s = StressState(Pressure(1000, PressureUnit.KILOPASCAL), Pressure(2.0), 0.5)
    assert s.unit is PressureUnit.KILOPASCAL
    assert s.sigma_y.value == pytest.approx(2000.0)
    # raw numbers are read in the resolved unit
    assert s.tau_xy.value == 0.5


def test_non_finite_inputs_become_zero(caplog):
    caplog.set_level(logging.DEBUG, logger="plane_components")
    s = StressState(np.nan, 5.0, np.inf, theta_x=np.nan)
    assert s.as_tuple() == (0.0, 5.0, 0.0)
    assert s.theta_x == 0.0
    assert "non-finite" in caplog.text


def test_transformation_matrix_is_eager_and_read_only():
    s = StressState(1, 2, 3, theta_x=0.4)
    np.testing.assert_allclose(s.transformation_matrix, rotation_matrix(0.4))
    with pytest.raises(ValueError):
        s.transformation_matrix[0, 0] = 5.0


def test_uniaxial_principal_state():
    p = StressState(10, 0, 0).to_principal()
    assert isinstance(p, PrincipalStressState)
    assert p.sigma1.value == pytest.approx(10.0)
    assert p.sigma2.value == pytest.approx(0.0)
    assert p.theta1 == 0.0
    assert p.case is PrincipalCase.PURE_TENSION


def test_pure_shear_principal_state():
    s = StressState(0, 0, 5)
    assert s.is_pure_shear
    p = s.to_principal()
    assert p.sigma1.value == pytest.approx(5.0)
    assert p.sigma2.value == pytest.approx(-5.0)
    assert p.theta1 == pytest.approx(QUARTER_PI)
    assert p.case is PrincipalCase.TENSION_COMPRESSION


def test_principal_angle_includes_reference_angle():
    p = StressState(10, 0, 0, theta_x=0.3).to_principal()
    assert p.theta1 == pytest.approx(0.3)


def test_to_horizontal_is_idempotent():
    s = StressState(10, -4, 3, theta_x=0.6)
    h1 = s.to_horizontal()
    h2 = h1.to_horizontal()
    assert h1.theta_x == 0.0
    assert h2 == h1
    assert h2 is not h1
    assert h1 == StressState(*h1.as_tuple())


def test_small_rotation_returns_a_copy():
    s = StressState(1, 2, 3)
    t = s.transform(1e-8)
    assert t == s
    assert t is not s


def test_rescaling_a_rotated_state_leaves_the_source_alone():
    """
    WHAT IS THIS TEST?
    ==================
    change_unit() works in place, so a state returned by to_horizontal() or
    by a tiny transform() must be a separate object from its source.
    Rescaling it must not touch the state it came from.
    """
    s = StressState(10, -4, 3)
    h = s.to_horizontal()
    h.change_unit(PressureUnit.KILOPASCAL)
    assert s.unit is PressureUnit.MEGAPASCAL
    assert s.as_tuple() == (10.0, -4.0, 3.0)

    t = s.transform(1e-7)
    t.change_unit(PressureUnit.PASCAL)
    assert s.unit is PressureUnit.MEGAPASCAL
    assert s.as_tuple() == (10.0, -4.0, 3.0)


def test_reference_angle_is_compared_over_a_full_turn():
    s = StressState(10, -4, 3, theta_x=0.2)
    assert s == StressState(10, -4, 3, theta_x=0.2 + 2 * math.pi)
    assert s != StressState(10, -4, 3, theta_x=0.2 + math.pi)


def test_rotation_composition():
    s = StressState(12, 3, -5, theta_x=0.1)
    assert s.transform(0.3).transform(0.5) == s.transform(0.8)


def test_rotate_and_back():
    s = StressState(12, 3, -5)
    assert s.transform(0.4).to_horizontal() == s


def test_rotating_to_principal_axes_removes_shear():
    s = StressState(10, 0, 5)
    p = s.to_principal()
    rotated = s.transform(p.theta1)
    assert rotated.is_principal
    assert rotated.sigma_x == p.sigma1


def test_from_principal_round_trip():
    p = PrincipalStressState(12, -3, 0.7)
    s = StressState.from_principal(p)
    assert s.theta_x == 0.0
    assert s.to_principal() == p


def test_from_principal_fast_path():
    s = StressState.from_principal(PrincipalStressState(4, 1, 0.0))
    assert s.as_tuple() == (4.0, 1.0, 0.0)


def test_from_principal_rejects_other_kinds():
    with pytest.raises(TypeError):
        StressState.from_principal(StrainState(1e-3, 0, 0).to_principal())


def test_unit_invariance():
    s = StressState(10, -4, 3, theta_x=0.2)
    converted = s.convert(PressureUnit.KILOPASCAL)

    assert converted == s
    assert converted.unit is PressureUnit.KILOPASCAL
    assert s.unit is PressureUnit.MEGAPASCAL

    p, pk = s.to_principal(), converted.to_principal()
    assert pk.sigma1.value == pytest.approx(1000.0 * p.sigma1.value)
    assert pk.sigma2.value == pytest.approx(1000.0 * p.sigma2.value)
    assert pk.theta1 == pytest.approx(p.theta1)


def test_change_unit_is_in_place():
    s = StressState(1, 2, 3, theta_x=0.5)
    s.change_unit(PressureUnit.KILOPASCAL)
    assert s.unit is PressureUnit.KILOPASCAL
    np.testing.assert_allclose(s.as_vector(), [1000.0, 2000.0, 3000.0])
    np.testing.assert_allclose(s.as_vector(PressureUnit.MEGAPASCAL), [1.0, 2.0, 3.0])
    assert s.theta_x == 0.5


def test_change_unit_rejects_other_kinds():
    from plane_components import ForceUnit

    with pytest.raises(TypeError):
        StressState(1, 2, 3).change_unit(ForceUnit.NEWTON)


def test_predicates():
    assert StressState(10, 0, 0).is_principal
    assert not StressState.ZERO.is_principal
    assert StressState.ZERO.is_zero
    assert not StressState(0, 0, 5).is_principal

    assert StressState(1, 0, 0, theta_x=math.pi).is_horizontal
    assert StressState(1, 0, 0, theta_x=HALF_PI).is_vertical
    assert StressState(1, 0, 0, theta_x=3 * HALF_PI).is_vertical
    assert not StressState(1, 0, 0, theta_x=QUARTER_PI).is_horizontal

    # 1e-4 Pa is below the stress tolerance of 1e-3 Pa
    assert StressState(1e-10, 0, 0).is_x_zero


def test_zero_is_a_fresh_instance():
    z = StressState.ZERO
    z.change_unit(PressureUnit.PASCAL)
    assert StressState.ZERO.unit is PressureUnit.MEGAPASCAL


def test_equality_checks_angle():
    assert StressState(1, 2, 3, theta_x=0.5) != StressState(1, 2, 3, theta_x=0.0)
    assert StressState(1, 2, 3, theta_x=0.5) == StressState(1, 2, 3, theta_x=0.5002)


def test_states_are_not_hashable():
    with pytest.raises(TypeError):
        hash(StressState(1, 2, 3))


def test_addition_goes_to_horizontal_in_left_unit():
    a = StressState(10, 0, 0, theta_x=HALF_PI)
    b = StressState(1000, 0, 0, unit=PressureUnit.KILOPASCAL)
    total = a + b

    assert total.theta_x == 0.0
    assert total.unit is PressureUnit.MEGAPASCAL
    np.testing.assert_allclose(total.as_vector(), [1.0, 10.0, 0.0], atol=1e-12)

    difference = a - a
    assert difference.is_zero


def test_scalar_arithmetic_keeps_angle():
    s = StressState(1, 2, 3, theta_x=0.5)
    doubled = 2 * s
    assert doubled.theta_x == 0.5
    assert doubled.as_tuple() == (2.0, 4.0, 6.0)
    assert (s / 2).as_tuple() == (0.5, 1.0, 1.5)
    assert (-s).as_tuple() == (-1.0, -2.0, -3.0)
    assert (s * np.float64(3.0)).as_tuple() == (3.0, 6.0, 9.0)


def test_from_vector():
    s = StressState.from_vector(np.array([1.0, 2.0, 3.0]), 0.25, PressureUnit.KILOPASCAL)
    assert s == StressState(1, 2, 3, 0.25, PressureUnit.KILOPASCAL)


def test_from_strains():
    """
    WHAT IS THIS TEST?
    ==================
    Uniaxial strain through an isotropic plane-stress stiffness matrix:

        sigma_x = E / (1 - nu²) * eps_x
        sigma_y = nu * sigma_x

    and back again with StrainState.from_stresses.
    """
    D = plane_stress_stiffness(E=30000.0, nu=0.2)
    strain = StrainState(1e-4, 0.0, 0.0, theta_x=0.3)

    stress = StressState.from_strains(strain, D)
    assert stress.unit is PressureUnit.MEGAPASCAL
    assert stress.theta_x == 0.3
    np.testing.assert_allclose(stress.as_vector(), [3.125, 0.625, 0.0], atol=1e-12)

    assert StrainState.from_stresses(stress, D) == strain


def test_from_strains_of_zero_state():
    D = plane_stress_stiffness(E=30000.0, nu=0.2)
    stress = StressState.from_strains(StrainState(0, 0, 0, theta_x=0.4), D)
    assert stress.is_zero
    assert stress.theta_x == 0.4


def test_from_strains_rejects_bad_matrix():
    with pytest.raises(ValueError):
        StressState.from_strains(StrainState(1e-4, 0, 0), np.eye(2))


def test_stress_and_strain_are_never_equal():
    assert StressState.ZERO != StrainState.ZERO


def test_capabilities():
    assert isinstance(StressState.ZERO, UnitConvertible)
    assert not isinstance(StrainState.ZERO, UnitConvertible)


def test_str_uses_symbols():
    text = str(StressState(10, 0, 5))
    assert "σx = 10 MPa" in text
    assert "τxy = 5 MPa" in text
    assert "θx = 0°" in text
