# plane_components/config.py
"""
Engine configuration and defaults.
"""

from dataclasses import dataclass

from .units import ForceUnit, LengthUnit, PressureUnit


@dataclass
class EngineConfig:
    """Global numeric configuration for the transformation engine."""

    # Absolute tolerance for raw numbers with no quantity kind attached
    zero_tolerance: float = 1e-12

    # Angles (rad)
    angle_tolerance: float = 1e-3          # state equality, axis predicates
    rotation_skip_tolerance: float = 1e-6  # transform() returns the same state below this
    axis_snap_tolerance: float = 1e-9      # exact cosines at 0/90/180/270 degrees

    # Default units
    default_stress_unit: PressureUnit = PressureUnit.MEGAPASCAL
    default_force_unit: ForceUnit = ForceUnit.NEWTON
    default_length_unit: LengthUnit = LengthUnit.MILLIMETER


# Global config instance
CONFIG = EngineConfig()
