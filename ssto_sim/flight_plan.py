"""
SSTO Ascent Simulation - Flight Plan Data Model

Waypoints are stored in the planner's native units (feet, Mach). The
first waypoint is always the runway start and cannot be moved or removed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from . import constants as C
from .config import SimulationConfig, create_default_config
from .validation import ValidationError, validate_waypoint, validate_flight_plan


class EngineMode(Enum):
    AUTO = "Auto"
    EJECTOR_RAMJET = "Ejector-Ramjet"
    RAMJET = "Ramjet"
    SCRAMJET = "Scramjet"
    ROCKET = "Rocket"


@dataclass(frozen=True)
class Waypoint:
    """
    Target condition at the end of a flight segment.

    Attributes:
        altitude: Altitude (ft)
        speed: Speed (Mach)
        engine_mode: Engine used to reach this waypoint
        max_g: Longitudinal acceleration limit (g)
    """
    altitude: float
    speed: float
    engine_mode: EngineMode = EngineMode.AUTO
    max_g: float = C.DEFAULT_MAX_G

    def __post_init__(self):
        validate_waypoint(self)

    @property
    def altitude_m(self) -> float:
        """Altitude in meters."""
        return self.altitude * C.FT_TO_M

    @classmethod
    def runway(cls, engine_mode: EngineMode = EngineMode.AUTO) -> 'Waypoint':
        """Runway start: 0 ft, Mach 0."""
        return cls(altitude=0.0, speed=0.0, engine_mode=engine_mode)

    @classmethod
    def from_metric(cls, altitude_m: float, speed: float,
                    engine_mode: EngineMode = EngineMode.AUTO,
                    max_g: float = C.DEFAULT_MAX_G) -> 'Waypoint':
        """Build a waypoint from an altitude in meters."""
        return cls(altitude=altitude_m * C.M_TO_FT, speed=speed,
                   engine_mode=engine_mode, max_g=max_g)


class FlightPlan:
    """
    Ordered waypoint list whose first entry is the protected runway start.
    """

    def __init__(self, waypoints: Optional[Sequence[Waypoint]] = None):
        self._waypoints: List[Waypoint] = [Waypoint.runway()]
        for waypoint in waypoints or ():
            self.add_waypoint(waypoint)

    @property
    def waypoints(self) -> Tuple[Waypoint, ...]:
        return tuple(self._waypoints)

    def __len__(self) -> int:
        return len(self._waypoints)

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(tuple(self._waypoints))

    def __getitem__(self, index: int) -> Waypoint:
        return self._waypoints[index]

    def segments(self) -> List[Tuple[Waypoint, Waypoint]]:
        """Consecutive (start, end) waypoint pairs."""
        return list(zip(self._waypoints[:-1], self._waypoints[1:]))

    def add_waypoint(self, waypoint: Waypoint) -> None:
        self._waypoints.append(self._checked(waypoint))

    def insert_waypoint(self, index: int, waypoint: Waypoint) -> None:
        """Insert before ``index``; index 0 is reserved for the runway."""
        if not 1 <= index <= len(self._waypoints):
            raise ValidationError(
                f"Insert index must be in [1, {len(self._waypoints)}], got {index}"
            )
        self._waypoints.insert(index, self._checked(waypoint))

    def remove_waypoint(self, index: int) -> Waypoint:
        if index == 0 or index == -len(self._waypoints):
            raise ValidationError("The runway waypoint cannot be removed")
        return self._waypoints.pop(index)

    def update_waypoint(self, index: int, waypoint: Waypoint) -> None:
        """
        Replace a waypoint. For the runway only the engine mode is taken.
        """
        if index == 0 or index == -len(self._waypoints):
            self._waypoints[0] = Waypoint.runway(engine_mode=waypoint.engine_mode)
            return
        self._waypoints[index] = self._checked(waypoint)

    def reset(self) -> None:
        """Drop everything but the runway waypoint."""
        self._waypoints = [Waypoint.runway()]

    def reaches_orbit(self, config: SimulationConfig = None) -> bool:
        """Last waypoint is at or above the orbital altitude and Mach."""
        config = config or create_default_config()
        last = self._waypoints[-1]
        return (last.altitude >= config.orbit_altitude_m * C.M_TO_FT
                and last.speed >= config.orbit_mach)

    def is_valid_for_flight(self, config: SimulationConfig = None) -> bool:
        """Plan can be simulated and its last waypoint targets orbit."""
        try:
            validate_flight_plan(self)
        except ValidationError:
            return False
        return self.reaches_orbit(config)

    def validate(self) -> bool:
        """Raise ValidationError if the plan cannot be simulated."""
        return validate_flight_plan(self)

    def summary(self) -> str:
        lines = [f"Flight plan: {len(self._waypoints)} waypoints"]
        for i, w in enumerate(self._waypoints):
            lines.append(
                f"  {i}: {w.altitude:,.0f} ft | Mach {w.speed:.1f} | "
                f"{w.engine_mode.value} | {w.max_g:.1f} g"
            )
        return "\n".join(lines)

    @staticmethod
    def _checked(waypoint: Waypoint) -> Waypoint:
        if not isinstance(waypoint, Waypoint):
            raise ValidationError(f"Expected Waypoint, got {type(waypoint).__name__}")
        validate_waypoint(waypoint)
        return waypoint
