# plane_components/strain.py
"""
STRAIN STATES
=============

    StrainState           {epsilon_x, epsilon_y, gamma_xy} at theta_x
    PrincipalStrainState  {epsilon1, epsilon2} at theta1

Strains are dimensionless floats. The shear component is ENGINEERING shear:

    gamma_xy = 2 * epsilon_xy

so rotation and principal decomposition go through the kernel with
engineering_shear=True.
"""

import numpy as np

from .base import PlaneState, PrincipalState
from .numeric import QUARTER_PI
from .stress import PrincipalStressState, StressState, check_material_matrix
from .units import STRAIN_TOLERANCE, PressureUnit


class StrainState(PlaneState):
    """
    Plane strain state.

    Args:
        epsilon_x: Normal strain along x
        epsilon_y: Normal strain along y
        gamma_xy: Engineering shear strain
        theta_x: Angle of the x axis from the horizontal (radians)
    """

    _ENGINEERING_SHEAR = True
    _TOLERANCE = STRAIN_TOLERANCE
    _SYMBOLS = ("εx", "εy", "γxy")

    def __init__(self, epsilon_x: float, epsilon_y: float, gamma_xy: float, theta_x: float = 0.0):
        self._init_state((epsilon_x, epsilon_y, gamma_xy), theta_x)

    @classmethod
    def zero(cls) -> "StrainState":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_vector(cls, vector, theta_x: float = 0.0) -> "StrainState":
        """Build from a {epsilon_x, epsilon_y, gamma_xy} sequence."""
        epsilon_x, epsilon_y, gamma_xy = np.asarray(vector, dtype=float).reshape(3)
        return cls(epsilon_x, epsilon_y, gamma_xy, theta_x)

    @classmethod
    def from_stresses(cls, stress, stiffness: np.ndarray) -> "StrainState":
        """
        Strains that produce a stress state: solves D @ epsilon = sigma.

        Args:
            stress: StressState or PrincipalStressState (any pressure unit)
            stiffness: 3x3 material stiffness matrix in MPa

        Returns:
            StrainState referred to the same axes as `stress`.

        Raises:
            numpy.linalg.LinAlgError: If the stiffness matrix is singular.
        """
        if isinstance(stress, PrincipalStressState):
            stress = stress.as_stress_state()
        if not isinstance(stress, StressState):
            raise TypeError(f"Expected a stress state, got {type(stress).__name__}")

        if stress.is_zero:
            return cls(0.0, 0.0, 0.0, stress.theta_x)

        stiffness = check_material_matrix(stiffness)
        strains = np.linalg.solve(stiffness, stress.as_vector(PressureUnit.MEGAPASCAL))
        return cls.from_vector(strains, stress.theta_x)

    @property
    def epsilon_x(self) -> float:
        return float(self._values[0])

    @property
    def epsilon_y(self) -> float:
        return float(self._values[1])

    @property
    def gamma_xy(self) -> float:
        return float(self._values[2])

    @property
    def epsilon_xy(self) -> float:
        """Tensor shear strain, gamma_xy / 2."""
        return 0.5 * float(self._values[2])


class PrincipalStrainState(PrincipalState):
    """Principal strains epsilon1 (at theta1) and epsilon2 (at theta1 + pi/2)."""

    _ENGINEERING_SHEAR = True
    _TOLERANCE = STRAIN_TOLERANCE
    _SYMBOLS = ("ε1", "ε2")

    def __init__(self, epsilon1: float, epsilon2: float, theta1: float = QUARTER_PI):
        self._init_state((epsilon1, epsilon2), theta1)

    @classmethod
    def zero(cls) -> "PrincipalStrainState":
        return cls(0.0, 0.0)

    @property
    def epsilon1(self) -> float:
        return float(self._values[0])

    @property
    def epsilon2(self) -> float:
        return float(self._values[1])

    def as_strain_state(self) -> StrainState:
        return self.as_general_state()


StrainState._GENERAL = PrincipalStrainState._GENERAL = StrainState
StrainState._PRINCIPAL = PrincipalStrainState._PRINCIPAL = PrincipalStrainState
