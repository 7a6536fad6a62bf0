"""
SSTO Ascent Simulation - Vehicle State

Point-mass state along the flight path. All values are SI; conversions
to the planner's feet / Mach units are provided as properties.
"""

from dataclasses import dataclass, replace

from . import constants as C
from .atmosphere import speed_of_sound


@dataclass
class State:
    """
    Vehicle state for the segment integrator.

    Attributes:
        altitude: Geometric altitude (m)
        velocity: Speed along the flight path (m/s)
        propellant: Propellant remaining (kg)
        dry_mass: Mass with empty tanks (kg)
        t: Elapsed mission time (s)
    """
    altitude: float = 0.0
    velocity: float = 0.0
    propellant: float = 0.0
    dry_mass: float = 0.0
    t: float = 0.0

    def copy(self) -> 'State':
        return replace(self)

    @property
    def mass(self) -> float:
        """Total vehicle mass (kg)."""
        return self.dry_mass + self.propellant

    @property
    def altitude_ft(self) -> float:
        return self.altitude * C.M_TO_FT

    @property
    def mach(self) -> float:
        return max(0.0, self.velocity) / speed_of_sound(self.altitude)

    @property
    def grounded(self) -> bool:
        return self.altitude <= 0.0

    def __str__(self) -> str:
        return (
            f"State(t={self.t:.1f}s, "
            f"alt={self.altitude/1000:.2f}km, "
            f"v={self.velocity:.1f}m/s, "
            f"prop={self.propellant:.0f}kg)"
        )


def create_initial_state(dry_mass: float, propellant: float,
                         altitude: float = 0.0, velocity: float = 0.0) -> State:
    """
    Create a state at the start of a mission.

    Raises:
        ValueError: If masses are negative or the dry mass is not positive
    """
    if dry_mass <= 0.0:
        raise ValueError(f"Dry mass must be positive, got {dry_mass}")
    if propellant < 0.0:
        raise ValueError(f"Propellant must be non-negative, got {propellant}")
    return State(altitude=float(altitude), velocity=float(velocity),
                 propellant=float(propellant), dry_mass=float(dry_mass), t=0.0)
