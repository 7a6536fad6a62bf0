"""
SSTO Ascent Simulation - Mass model and propellant bookkeeping.

Dry mass is a pure function of internal volume, the waypoint list, the
design and the peak temperature the structure must survive:

    dry = structure(V) + thermal_protection(V, T_max) + sum(engines)

Engine mass follows the peak thrust each engine mode must deliver over
the waypoints it flies to, sized on a half-fuelled vehicle.
"""

from dataclasses import dataclass, field
from typing import Dict, Sequence

from . import constants as C
from .atmosphere import speed_of_sound
from .config import SimulationConfig, create_default_config
from .design import PlaneDesign, DEFAULT_DESIGN
from .flight_plan import EngineMode, Waypoint
from .forces import DragModel, gravity_acceleration
from .propulsion_manager import PropulsionManager


@dataclass(frozen=True)
class MassBreakdown:
    """Dry mass components (kg)."""
    structure: float
    thermal_protection: float
    engines: Dict[EngineMode, float] = field(default_factory=dict)
    engine_counts: Dict[EngineMode, int] = field(default_factory=dict)

    @property
    def engine_total(self) -> float:
        return sum(self.engines.values())

    @property
    def total(self) -> float:
        return self.structure + self.thermal_protection + self.engine_total


def fuel_capacity(volume: float, density: float = C.PROPELLANT_DENSITY) -> float:
    """Propellant mass (kg) that fills an internal volume (m^3)."""
    if volume < 0.0:
        raise ValueError(f"Volume must be non-negative, got {volume}")
    return volume * density


def structural_mass(volume: float) -> float:
    """Airframe and tankage mass, proportional to volume."""
    return volume * C.STRUCTURAL_DENSITY


def thermal_protection_mass(volume: float, max_temperature: float) -> float:
    """TPS penalty, growing linearly once the peak temperature passes the baseline."""
    excess = max_temperature - C.TPS_BASELINE_C
    if excess <= 0.0:
        return 0.0
    return volume * C.TPS_MASS_PER_M3_PER_100C * excess / 100.0


def required_thrust(mass: float, altitude: float, velocity: float,
                    drag_model: DragModel) -> float:
    """
    Thrust (N) needed at a flight condition:
    max(margin * drag + climb * W, min_tw * W).
    """
    weight = mass * gravity_acceleration(altitude)
    drag = drag_model.drag(altitude, velocity)
    return max(C.THRUST_DRAG_MARGIN * drag + C.THRUST_CLIMB_FRACTION * weight,
               C.THRUST_MIN_TW * weight)


def resolve_engine_mode(waypoint: Waypoint, manager: PropulsionManager) -> EngineMode:
    """Concrete engine mode for a waypoint; AUTO resolves by efficiency at the waypoint."""
    if waypoint.engine_mode is not EngineMode.AUTO:
        return waypoint.engine_mode
    return manager.select_best(waypoint.altitude, waypoint.speed)


def peak_thrust_requirements(volume: float, waypoints: Sequence[Waypoint],
                             design: PlaneDesign, estimated_mass: float,
                             config: SimulationConfig = None) -> Dict[EngineMode, float]:
    """Largest thrust each engine mode must deliver over the waypoints it flies to."""
    config = config or create_default_config()
    manager = PropulsionManager(config=config)
    drag_model = DragModel.for_vehicle(volume, design, config.reference_area_coeff)

    peaks: Dict[EngineMode, float] = {}
    for waypoint in waypoints:
        mode = resolve_engine_mode(waypoint, manager)
        altitude = waypoint.altitude_m
        velocity = waypoint.speed * speed_of_sound(altitude)
        thrust = required_thrust(estimated_mass, altitude, velocity, drag_model)
        peaks[mode] = max(peaks.get(mode, 0.0), thrust)
    return peaks


def mass_breakdown(volume: float, waypoints: Sequence[Waypoint],
                   design: PlaneDesign = DEFAULT_DESIGN,
                   max_temperature: float = C.DESIGN_MAX_TEMPERATURE_C,
                   config: SimulationConfig = None) -> MassBreakdown:
    """Itemised dry mass for a vehicle."""
    if volume < 0.0:
        raise ValueError(f"Volume must be non-negative, got {volume}")
    config = config or create_default_config()

    structure = structural_mass(volume)
    tps = thermal_protection_mass(volume, max_temperature)
    estimated_mass = (structure + tps + config.payload_mass_kg
                      + C.SIZING_FUEL_FRACTION * fuel_capacity(volume, config.propellant_density))

    manager = PropulsionManager(config=config)
    peaks = peak_thrust_requirements(volume, waypoints, design, estimated_mass, config)
    engines = {mode: manager.engine(mode).engine_mass(thrust) for mode, thrust in peaks.items()}
    counts = {mode: manager.engine(mode).engine_count(thrust) for mode, thrust in peaks.items()}
    return MassBreakdown(structure, tps, engines, counts)


def dry_mass(volume: float, waypoints: Sequence[Waypoint],
             design: PlaneDesign = DEFAULT_DESIGN,
             max_temperature: float = C.DESIGN_MAX_TEMPERATURE_C,
             config: SimulationConfig = None) -> float:
    """Dry mass (kg) of a vehicle with internal volume ``volume`` (m^3)."""
    return mass_breakdown(volume, waypoints, design, max_temperature, config).total


def is_propellant_exhausted(propellant: float) -> bool:
    """True once the tanks are empty."""
    return propellant <= 0.0


def get_propellant_fraction(propellant: float, capacity: float) -> float:
    """Fraction of the loaded propellant remaining."""
    if capacity <= 0.0:
        return 0.0
    return min(1.0, max(0.0, propellant) / capacity)
