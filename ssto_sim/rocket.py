"""
SSTO Ascent Simulation - Rocket Propellant Analysis

Tsiolkovsky sizing of the rocket legs of a flight plan:

    dv = sqrt(dv_velocity^2 + (sqrt(2 g dh))^2)
    m_prop = m0 * (1 - exp(-dv / (Isp g0)))

Propellant is split into oxidizer and fuel by the engine mixture ratio.
One PropellantRequirement is produced per contiguous run of rocket legs.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from . import constants as C
from .atmosphere import speed_of_sound
from .config import SimulationConfig, create_default_config
from .engines import RocketEngine
from .flight_plan import EngineMode, Waypoint
from .forces import gravity_acceleration
from .mass import resolve_engine_mode
from .propulsion_manager import PropulsionManager


@dataclass(frozen=True)
class PropellantRequirement:
    """Propellant needed for one contiguous run of rocket legs."""
    delta_v: float            # m/s
    initial_mass: float       # kg
    final_mass: float         # kg
    propellant_mass: float    # kg
    oxidizer_mass: float      # kg
    fuel_mass: float          # kg
    average_isp: float        # s
    start_index: int          # waypoint index where the run starts
    end_index: int            # waypoint index where the run ends


def waypoint_velocity(waypoint: Waypoint) -> float:
    """Waypoint speed in m/s."""
    return waypoint.speed * speed_of_sound(waypoint.altitude_m)


def segment_delta_v(start: Waypoint, end: Waypoint) -> float:
    """Ideal delta-V (m/s) between two waypoints, including the climb's potential energy."""
    dv_velocity = abs(waypoint_velocity(end) - waypoint_velocity(start))
    dh = end.altitude_m - start.altitude_m
    dv_gravity = 0.0
    if dh > 0.0:
        g = gravity_acceleration(0.5 * (start.altitude_m + end.altitude_m))
        dv_gravity = np.sqrt(2.0 * g * dh)
    return float(np.hypot(dv_velocity, dv_gravity))


def propellant_fraction(delta_v: float, isp: float) -> float:
    """Fraction of the initial mass burned for ``delta_v`` at ``isp``."""
    if delta_v <= 0.0:
        return 0.0
    if isp <= 0.0:
        return 1.0
    return float(1.0 - np.exp(-delta_v / (isp * C.G0)))


def average_isp(engine: RocketEngine, start: Waypoint, end: Waypoint,
                samples: int = C.ESTIMATOR_SAMPLES) -> float:
    """Mean rocket Isp (s) over a leg, sampled along altitude."""
    altitudes = np.linspace(start.altitude, end.altitude, max(2, samples))
    return float(np.mean([engine.isp_at(h) for h in altitudes]))


def propellant_requirement(start: Waypoint, end: Waypoint, initial_mass: float,
                           engine: Optional[RocketEngine] = None,
                           margin: float = 1.0,
                           start_index: int = 0) -> PropellantRequirement:
    """Tsiolkovsky requirement for a single rocket leg starting at waypoint ``start_index``."""
    engine = engine or RocketEngine()
    dv = segment_delta_v(start, end) * margin
    isp = average_isp(engine, start, end)
    propellant = initial_mass * propellant_fraction(dv, isp)
    oxidizer, fuel = engine.propellant_split(propellant)
    return PropellantRequirement(
        delta_v=dv,
        initial_mass=initial_mass,
        final_mass=initial_mass - propellant,
        propellant_mass=propellant,
        oxidizer_mass=oxidizer,
        fuel_mass=fuel,
        average_isp=isp,
        start_index=start_index,
        end_index=start_index + 1,
    )


def analyze_rocket_segments(waypoints: Sequence[Waypoint], initial_mass: float,
                            config: SimulationConfig = None,
                            margin: float = 1.0,
                            run_masses: Optional[Sequence[float]] = None) -> List[PropellantRequirement]:
    """
    Propellant requirement per contiguous run of rocket legs.

    ``initial_mass`` is the mass at the start of the first rocket run. Later
    runs start from the previous run's burnout mass; propellant burned on
    air-breathing legs between runs is not deducted. Pass ``run_masses``
    (one start mass per run, in order) to supply those masses instead.
    """
    if initial_mass <= 0.0:
        raise ValueError(f"Initial mass must be positive, got {initial_mass}")
    run_masses = list(run_masses or ())
    if any(m <= 0.0 for m in run_masses):
        raise ValueError(f"Run start masses must be positive, got {run_masses}")
    config = config or create_default_config()
    manager = PropulsionManager(config=config)
    engine = manager.engine(EngineMode.ROCKET)

    requirements: List[PropellantRequirement] = []
    mass = initial_mass
    run = None
    waypoints = list(waypoints)
    for i in range(1, len(waypoints)):
        start, end = waypoints[i - 1], waypoints[i]
        if resolve_engine_mode(end, manager) is not EngineMode.ROCKET:
            if run is not None:
                requirements.append(_close_run(run, engine))
                mass = run["mass"]
                run = None
            continue

        if run is None and len(requirements) < len(run_masses):
            mass = run_masses[len(requirements)]
        leg = propellant_requirement(start, end, mass if run is None else run["mass"],
                                     engine, margin, i - 1)
        if run is None:
            run = {"start": i - 1, "m0": leg.initial_mass, "dv": 0.0}
        run["dv"] += leg.delta_v
        run["mass"] = leg.final_mass
        run["end"] = i

    if run is not None:
        requirements.append(_close_run(run, engine))
    return requirements


def _close_run(run: dict, engine: RocketEngine) -> PropellantRequirement:
    m0, mf, dv = run["m0"], run["mass"], run["dv"]
    propellant = m0 - mf
    isp = dv / (C.G0 * np.log(m0 / mf)) if propellant > 0.0 else 0.0
    oxidizer, fuel = engine.propellant_split(propellant)
    return PropellantRequirement(
        delta_v=dv,
        initial_mass=m0,
        final_mass=mf,
        propellant_mass=propellant,
        oxidizer_mass=oxidizer,
        fuel_mass=fuel,
        average_isp=float(isp),
        start_index=run["start"],
        end_index=run["end"],
    )
