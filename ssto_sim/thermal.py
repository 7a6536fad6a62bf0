"""
SSTO Ascent Simulation - Aerodynamic Heating Model

Leading-edge temperature from the turbulent recovery-temperature relation,
scaled by the design's heating-rate multiplier, and the design-dependent
structural ceiling it is checked against.

    T_r = T_amb * (1 + r * (gamma - 1)/2 * M^2),   r = 0.9

Only the rise above ambient is scaled by the heating-rate multiplier.
"""

from enum import Enum, auto
from typing import NamedTuple

from . import constants as C
from .atmosphere import compute_atmosphere_properties
from .design import PlaneDesign, DEFAULT_DESIGN


class ThermalRegime(Enum):
    COOL = auto()
    WARM = auto()
    HOT = auto()
    CRITICAL = auto()
    OVERHEAT = auto()


class ThermalCheck(NamedTuple):
    """Result of a thermal limit check (temperatures in °C)."""
    exceeded: bool
    temperature: float
    margin: float


def recovery_temperature(altitude: float, velocity: float,
                         design: PlaneDesign = DEFAULT_DESIGN) -> float:
    """
    Leading-edge recovery temperature (°C).

    Args:
        altitude: Geometric altitude (m)
        velocity: Airspeed (m/s)
        design: Leading-edge design supplying the heating multiplier

    Returns:
        Temperature in degrees Celsius
    """
    atm = compute_atmosphere_properties(altitude)
    t_amb = atm.temperature
    if velocity < 1.0:
        return t_amb - C.KELVIN_OFFSET

    mach = velocity / atm.speed_of_sound
    ratio = 1.0 + C.RECOVERY_FACTOR * 0.5 * (C.GAMMA - 1.0) * mach * mach
    rise = t_amb * (ratio - 1.0) * design.heating_rate_multiplier()
    return t_amb + rise - C.KELVIN_OFFSET


def max_temperature(design: PlaneDesign = DEFAULT_DESIGN) -> float:
    """Structural temperature limit for a design (°C)."""
    return C.BASE_MAX_TEMPERATURE_C * design.thermal_limit_multiplier()


def sustained_temperature(design: PlaneDesign = DEFAULT_DESIGN) -> float:
    """Long-duration temperature limit for a design (°C)."""
    return C.BASE_SUSTAINED_TEMPERATURE_C * design.thermal_limit_multiplier()


def check_thermal_limits(altitude: float, velocity: float,
                         design: PlaneDesign = DEFAULT_DESIGN) -> ThermalCheck:
    """Compare the recovery temperature against the design limit."""
    temperature = recovery_temperature(altitude, velocity, design)
    limit = max_temperature(design)
    return ThermalCheck(
        exceeded=temperature > limit,
        temperature=temperature,
        margin=limit - temperature,
    )


def max_safe_velocity(altitude: float, design: PlaneDesign = DEFAULT_DESIGN,
                      iterations: int = C.MAX_SAFE_VELOCITY_ITERATIONS,
                      upper: float = C.MAX_SAFE_VELOCITY_UPPER) -> float:
    """
    Highest velocity (m/s) whose recovery temperature stays below the limit.

    Bisection on [0, upper]; relies on the recovery temperature being
    monotone increasing in velocity at fixed altitude. Returns the lower
    bracket so the answer is always on the safe side.
    """
    limit = max_temperature(design)
    low, high = 0.0, float(upper)
    for _ in range(iterations):
        mid = 0.5 * (low + high)
        if recovery_temperature(altitude, mid, design) < limit:
            low = mid
        else:
            high = mid
    return low


def thermal_regime(temperature: float,
                   design: PlaneDesign = DEFAULT_DESIGN) -> ThermalRegime:
    """Classify a leading-edge temperature (°C)."""
    if temperature < C.THERMAL_COOL_LIMIT_C:
        return ThermalRegime.COOL
    if temperature < C.THERMAL_WARM_LIMIT_C:
        return ThermalRegime.WARM
    if temperature < sustained_temperature(design):
        return ThermalRegime.HOT
    if temperature < max_temperature(design):
        return ThermalRegime.CRITICAL
    return ThermalRegime.OVERHEAT


def thermal_stress_factor(temperature: float,
                          design: PlaneDesign = DEFAULT_DESIGN) -> float:
    """Temperature as a fraction of the design limit."""
    return temperature / max_temperature(design)


def material_limit(material: str) -> float:
    """Reference service temperature for a TPS material (°C)."""
    key = material.strip().lower().replace("-", "_").replace(" ", "_")
    return C.MATERIAL_LIMITS_C.get(key, C.BASE_MAX_TEMPERATURE_C)
