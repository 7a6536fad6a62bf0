"""
SSTO Ascent Simulation - Force Computations

This module implements the point-mass force models:
- Inverse-square gravity
- Dynamic pressure
- Mach-dependent drag (default aerodynamics collaborator)
"""

import numpy as np

from . import constants as C
from .atmosphere import compute_atmosphere_properties
from .design import PlaneDesign, DEFAULT_DESIGN


def gravity_acceleration(altitude: float) -> float:
    """Gravitational acceleration at altitude (m/s^2), g = mu / r^2."""
    r = C.R_EARTH + max(0.0, float(altitude))
    return C.MU_EARTH / (r * r)


def dynamic_pressure(altitude: float, velocity: float) -> float:
    """q = 0.5 * rho * v^2 (Pa)."""
    rho = compute_atmosphere_properties(altitude).density
    return 0.5 * rho * velocity * velocity


def reference_area(volume: float, coeff: float = C.REFERENCE_AREA_COEFF) -> float:
    """Aerodynamic reference area (m^2) for an internal volume, A = k * V^(2/3)."""
    if volume < 0.0:
        raise ValueError(f"Volume must be non-negative, got {volume}")
    return coeff * volume ** (2.0 / 3.0)


class DragModel:
    """
    Drag from a Cd(Mach) table and a reference area.

    Any object exposing ``drag(altitude, velocity) -> N`` can stand in for
    this model in the simulator.
    """

    def __init__(self, area: float, drag_multiplier: float = 1.0,
                 mach_breakpoints: np.ndarray = C.MACH_BREAKPOINTS,
                 cd_values: np.ndarray = C.CD_VALUES):
        if area < 0.0:
            raise ValueError(f"Reference area must be non-negative, got {area}")
        self.area = float(area)
        self.drag_multiplier = float(drag_multiplier)
        self._mach = np.asarray(mach_breakpoints, dtype=np.float64)
        self._cd = np.asarray(cd_values, dtype=np.float64)

    @classmethod
    def for_vehicle(cls, volume: float, design: PlaneDesign = DEFAULT_DESIGN,
                    area_coeff: float = C.REFERENCE_AREA_COEFF) -> 'DragModel':
        """Drag model for a vehicle of given internal volume and leading-edge design."""
        return cls(reference_area(volume, area_coeff), design.drag_multiplier())

    def drag_coefficient(self, mach: float) -> float:
        return float(np.interp(mach, self._mach, self._cd)) * self.drag_multiplier

    def drag(self, altitude: float, velocity: float) -> float:
        """Drag force magnitude (N)."""
        v = abs(float(velocity))
        if v <= 0.0:
            return 0.0
        atm = compute_atmosphere_properties(altitude)
        q = 0.5 * atm.density * v * v
        return q * self.drag_coefficient(v / atm.speed_of_sound) * self.area
