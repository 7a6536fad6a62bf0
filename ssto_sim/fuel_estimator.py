"""
SSTO Ascent Simulation - Mission Fuel Estimate

Fast, smooth whole-mission propellant estimate used by the sizing
optimizer instead of the time-stepped integrator.

Each leg's delta-V (with a loss margin) is spread evenly over sample
points between its waypoints. At each point the leg's engine (or the
automatic choice) gives an effective exhaust velocity; where it cannot
produce thrust the rocket's is used instead. The leg then burns

    m_prop = m * (1 - exp(-dv * mean(1 / ve)))

of the mass it starts with, and the remainder carries into the next leg.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from . import constants as C
from .config import SimulationConfig, create_default_config
from .flight_plan import EngineMode, Waypoint
from .propulsion_manager import PropulsionManager
from .rocket import segment_delta_v


@dataclass(frozen=True)
class SegmentEstimate:
    index: int                # index of the leg's end waypoint
    engine_mode: EngineMode
    delta_v: float            # m/s, margin included
    effective_isp: float      # s
    initial_mass: float       # kg
    fuel_mass: float          # kg
    time: float               # s


@dataclass(frozen=True)
class FuelEstimate:
    initial_mass: float
    segments: Tuple[SegmentEstimate, ...]

    @property
    def total_fuel(self) -> float:
        return sum(s.fuel_mass for s in self.segments)

    @property
    def final_mass(self) -> float:
        return self.initial_mass - self.total_fuel

    @property
    def total_time(self) -> float:
        return sum(s.time for s in self.segments)

    @property
    def total_delta_v(self) -> float:
        return sum(s.delta_v for s in self.segments)


class FuelEstimator:
    """Whole-mission propellant estimate from the engine models."""

    def __init__(self, config: SimulationConfig = None):
        self.config = config or create_default_config()
        self.manager = PropulsionManager(config=self.config)
        self.rocket = self.manager.engine(EngineMode.ROCKET)

    def _sample_points(self, start: Waypoint, end: Waypoint) -> List[Tuple[float, float]]:
        n = max(1, self.config.estimator_samples)
        fractions = (np.arange(n) + 0.5) / n
        return [(start.altitude + f * (end.altitude - start.altitude),
                 start.speed + f * (end.speed - start.speed)) for f in fractions]

    def _mode_at(self, end: Waypoint, altitude_ft: float, mach: float) -> EngineMode:
        if end.engine_mode is EngineMode.AUTO:
            return self.manager.select_best(altitude_ft, mach)
        return end.engine_mode

    def estimate_leg(self, index: int, start: Waypoint, end: Waypoint,
                     initial_mass: float) -> SegmentEstimate:
        """Propellant burned flying from ``start`` to ``end`` at ``initial_mass``."""
        dv = segment_delta_v(start, end) * self.config.delta_v_margin
        inverse_ve = []
        accels = []
        modes = []
        for altitude_ft, mach in self._sample_points(start, end):
            mode = self._mode_at(end, altitude_ft, mach)
            perf = self.manager.engine(mode).performance(altitude_ft, mach)
            if perf.thrust <= 0.0:
                mode = EngineMode.ROCKET
                perf = self.rocket.performance(altitude_ft, mach)
            isp = (perf.thrust / (perf.fuel_flow * C.G0)) if perf.fuel_flow > 0.0 \
                else self.rocket.isp_at(altitude_ft)
            inverse_ve.append(1.0 / (isp * C.G0))
            accels.append(min(perf.thrust / initial_mass, end.max_g * C.G0))
            modes.append(mode)

        mean_inverse_ve = float(np.mean(inverse_ve))
        fuel = initial_mass * (1.0 - np.exp(-dv * mean_inverse_ve))
        accel = max(float(np.mean(accels)), self.config.min_guidance_accel)
        dominant = max(set(modes), key=modes.count)

        return SegmentEstimate(
            index=index,
            engine_mode=dominant,
            delta_v=dv,
            effective_isp=1.0 / (mean_inverse_ve * C.G0),
            initial_mass=initial_mass,
            fuel_mass=float(fuel),
            time=dv / accel,
        )

    def estimate(self, waypoints: Sequence[Waypoint], initial_mass: float) -> FuelEstimate:
        """Estimate every leg in order, carrying the mass forward."""
        if initial_mass <= 0.0:
            raise ValueError(f"Initial mass must be positive, got {initial_mass}")
        waypoints = list(waypoints)
        mass = initial_mass
        segments = []
        for i in range(1, len(waypoints)):
            leg = self.estimate_leg(i, waypoints[i - 1], waypoints[i], mass)
            segments.append(leg)
            mass -= leg.fuel_mass
        return FuelEstimate(initial_mass=initial_mass, segments=tuple(segments))
