"""
SSTO Ascent Simulation - Result Types

Immutable outputs handed back to callers: trajectory samples, per-segment
outcomes, the whole-mission result with its success flag and score, and
the sizing optimizer result.

Units follow the planner: altitude in feet, speed in Mach, fuel in kg,
temperature in °C, time in seconds.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Sequence, Tuple

from . import constants as C
from .atmosphere import speed_of_sound
from .config import SimulationConfig, create_default_config
from .design import PlaneDesign, DEFAULT_DESIGN
from .flight_plan import EngineMode
from .thermal import max_temperature


class TerminationReason(Enum):
    FUEL_EXHAUSTED = auto()
    TARGET_REACHED = auto()
    DIVERGED = auto()
    TIMEOUT = auto()
    CANCELLED = auto()


@dataclass(frozen=True)
class TrajectoryPoint:
    time: float               # s since mission start
    altitude: float           # ft
    speed: float              # Mach
    fuel_remaining: float     # kg
    engine_mode: EngineMode
    temperature: float        # °C, leading edge


@dataclass(frozen=True)
class FlightSegmentResult:
    """Outcome of one waypoint-to-waypoint segment."""
    trajectory: Tuple[TrajectoryPoint, ...]
    fuel_used: float          # kg
    final_altitude: float     # ft
    final_speed: float        # Mach
    duration: float           # s
    engine_used: EngineMode
    termination: TerminationReason
    max_temperature: float    # °C
    thermal_limit_exceeded: bool = False

    @property
    def target_reached(self) -> bool:
        return self.termination is TerminationReason.TARGET_REACHED


@dataclass(frozen=True)
class MissionResult:
    """Whole-mission outcome; never mutated after construction."""
    segments: Tuple[FlightSegmentResult, ...]
    total_fuel_used: float    # kg
    total_duration: float     # s
    success: bool
    final_altitude: float     # ft
    final_speed: float        # Mach
    score: int
    max_temperature: float    # °C

    def complete_trajectory(self) -> List[TrajectoryPoint]:
        """All samples of all segments, in time order."""
        return [point for segment in self.segments for point in segment.trajectory]

    def summary(self) -> str:
        status = "ORBIT ACHIEVED" if self.success else "MISSION FAILED"
        lines = [
            f"{status} | score {self.score:,}",
            f"  Final:    {self.final_altitude:,.0f} ft | Mach {self.final_speed:.2f}",
            f"  Fuel:     {self.total_fuel_used:,.0f} kg",
            f"  Time:     {self.total_duration:.1f} s",
            f"  Max temp: {self.max_temperature:.0f} °C",
        ]
        for i, segment in enumerate(self.segments, start=1):
            lines.append(
                f"  Seg {i}: {segment.engine_used.value:<15} {segment.termination.name:<15} "
                f"{segment.duration:7.1f} s {segment.fuel_used:12,.0f} kg"
            )
        return "\n".join(lines)


@dataclass(frozen=True)
class OptimizationResult:
    """Sizing optimizer outcome. Check ``converged`` before trusting ``optimal_length``."""
    optimal_length: float     # m
    fuel_capacity: float      # kg
    converged: bool
    iterations: int
    length_history: Tuple[float, ...]
    error_history: Tuple[float, ...]
    fuel_required: float = 0.0   # kg
    dry_mass: float = 0.0        # kg

    def __post_init__(self):
        if len(self.length_history) < 1 or len(self.length_history) != len(self.error_history):
            raise ValueError("Optimization history must be non-empty and paired")

    @property
    def fuel_error(self) -> float:
        return self.error_history[-1]

    def summary(self) -> str:
        status = "converged" if self.converged else "NOT converged"
        return (f"Length {self.optimal_length:.2f} m ({status} in {self.iterations} iterations) | "
                f"capacity {self.fuel_capacity:,.0f} kg | required {self.fuel_required:,.0f} kg")


def is_orbit_reached(altitude_m: float, mach: float,
                     config: SimulationConfig = None) -> bool:
    """Final state meets the orbital altitude and Mach thresholds."""
    config = config or create_default_config()
    return (altitude_m >= config.orbit_altitude_m - config.orbit_altitude_tolerance_m
            and mach >= config.orbit_mach - config.orbit_mach_tolerance)


def calculate_score(success: bool, fuel_used: float, duration: float,
                    thermal_margin: float, config: SimulationConfig = None) -> int:
    """Mission score; zero unless the mission succeeded."""
    if not success:
        return 0
    config = config or create_default_config()
    score = float(config.score_base)
    score += max(0.0, (config.score_fuel_baseline_kg - fuel_used) * config.score_fuel_weight)
    score += max(0.0, (config.score_time_baseline_s - duration) * config.score_time_weight)
    score += max(0.0, thermal_margin * config.score_thermal_weight)
    return int(score)


def build_mission_result(segments: Sequence[FlightSegmentResult],
                         design: PlaneDesign = DEFAULT_DESIGN,
                         config: SimulationConfig = None) -> MissionResult:
    """Aggregate segment outcomes and classify success against orbit thresholds."""
    config = config or create_default_config()
    segments = tuple(segments)
    if not segments:
        raise ValueError("A mission result needs at least one segment")

    total_fuel = sum(s.fuel_used for s in segments)
    total_time = sum(s.duration for s in segments)
    final = segments[-1]
    peak = max(s.max_temperature for s in segments)

    final_altitude_m = final.final_altitude * C.FT_TO_M
    success = is_orbit_reached(final_altitude_m, final.final_speed, config)
    score = calculate_score(success, total_fuel, total_time,
                            max_temperature(design) - peak, config)

    return MissionResult(
        segments=segments,
        total_fuel_used=total_fuel,
        total_duration=total_time,
        success=success,
        final_altitude=final.final_altitude,
        final_speed=final.final_speed,
        score=score,
        max_temperature=peak,
    )


def mach_to_velocity(altitude_m: float, mach: float) -> float:
    """Convert a Mach number at altitude to m/s."""
    return mach * speed_of_sound(altitude_m)
