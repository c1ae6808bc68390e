# plane_components/stress.py
"""
STRESS STATES
=============

    StressState           {sigma_x, sigma_y, tau_xy} at theta_x
    PrincipalStressState  {sigma1, sigma2} at theta1

Sign convention: tension positive, counterclockwise angles positive.
Components are Pressure quantities; all three share one unit (default MPa,
see CONFIG.default_stress_unit).
"""

import numpy as np

from .base import PlaneState, PrincipalState, UnitConvertibleMixin, resolve_unit
from .config import CONFIG
from .numeric import QUARTER_PI
from .units import Pressure, PressureUnit, quantity_from


def _pressure_values(components, unit: PressureUnit):
    return [quantity_from(c, Pressure, unit).as_unit(unit) for c in components]


class StressState(UnitConvertibleMixin, PlaneState):
    """
    Plane stress state.

    Parameters:
    -----------
    sigma_x, sigma_y, tau_xy : float or Pressure
        Normal and shear stresses. Raw numbers are read in `unit`; Pressure
        inputs are converted to it. NaN or infinite inputs become zero.
    theta_x : float
        Angle of the x axis from the horizontal (radians).
    unit : PressureUnit, optional
        Defaults to the unit of `sigma_x` if it is a Pressure, else
        CONFIG.default_stress_unit.
    """

    _QUANTITY = Pressure
    _SYMBOLS = ("σx", "σy", "τxy")

    def __init__(self, sigma_x, sigma_y, tau_xy, theta_x: float = 0.0, unit: PressureUnit = None):
        self._unit = resolve_unit(sigma_x, unit, CONFIG.default_stress_unit)
        self._init_state(_pressure_values((sigma_x, sigma_y, tau_xy), self._unit), theta_x)

    @classmethod
    def zero(cls, unit: PressureUnit = None) -> "StressState":
        return cls(0.0, 0.0, 0.0, unit=unit)

    @classmethod
    def from_vector(cls, vector, theta_x: float = 0.0, unit: PressureUnit = None) -> "StressState":
        """Build from a {sigma_x, sigma_y, tau_xy} sequence in `unit`."""
        sigma_x, sigma_y, tau_xy = np.asarray(vector, dtype=float).reshape(3)
        return cls(sigma_x, sigma_y, tau_xy, theta_x, unit)

    @classmethod
    def from_strains(cls, strain, stiffness: np.ndarray) -> "StressState":
        """
        Stresses (MPa) produced by a strain state: sigma = D @ epsilon.

        Args:
            strain: StrainState or PrincipalStrainState
            stiffness: 3x3 material stiffness matrix in MPa

        Returns:
            StressState in MPa referred to the same axes as `strain`.
        """
        from .strain import PrincipalStrainState, StrainState

        if isinstance(strain, PrincipalStrainState):
            strain = strain.as_strain_state()
        if not isinstance(strain, StrainState):
            raise TypeError(f"Expected a strain state, got {type(strain).__name__}")

        unit = PressureUnit.MEGAPASCAL
        if strain.is_zero:
            return cls(0.0, 0.0, 0.0, strain.theta_x, unit)

        stiffness = check_material_matrix(stiffness)
        return cls.from_vector(stiffness @ strain.as_vector(), strain.theta_x, unit)

    @property
    def sigma_x(self) -> Pressure:
        return self._wrap(self._values[0])

    @property
    def sigma_y(self) -> Pressure:
        return self._wrap(self._values[1])

    @property
    def tau_xy(self) -> Pressure:
        return self._wrap(self._values[2])


class PrincipalStressState(UnitConvertibleMixin, PrincipalState):
    """
    Principal stresses: sigma1 (maximum, at theta1) and sigma2 (minimum,
    at theta2 = theta1 + pi/2).

    sigma1 >= sigma2 is the caller's responsibility.
    """

    _QUANTITY = Pressure
    _SYMBOLS = ("σ1", "σ2")

    def __init__(self, sigma1, sigma2, theta1: float = QUARTER_PI, unit: PressureUnit = None):
        self._unit = resolve_unit(sigma1, unit, CONFIG.default_stress_unit)
        self._init_state(_pressure_values((sigma1, sigma2), self._unit), theta1)

    @classmethod
    def zero(cls, unit: PressureUnit = None) -> "PrincipalStressState":
        return cls(0.0, 0.0, unit=unit)

    @property
    def sigma1(self) -> Pressure:
        return self._wrap(self._values[0])

    @property
    def sigma2(self) -> Pressure:
        return self._wrap(self._values[1])

    def as_stress_state(self) -> StressState:
        return self.as_general_state()


def check_material_matrix(matrix) -> np.ndarray:
    matrix = np.asarray(matrix, dtype=float)
    if matrix.shape != (3, 3):
        raise ValueError(f"Expected a 3x3 material matrix, got shape {matrix.shape}")
    return matrix


StressState._GENERAL = PrincipalStressState._GENERAL = StressState
StressState._PRINCIPAL = PrincipalStressState._PRINCIPAL = PrincipalStressState
