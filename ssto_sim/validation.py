"""
SSTO Ascent Simulation - Flight Plan Validation

Eager checks applied by the data model before a plan is accepted for
simulation:
- Altitude and speed non-negative and finite
- Target Mach compatible with the waypoint's engine mode
- Positive g-limit
- First waypoint pinned at the runway (0 ft, Mach 0, Auto)

Raise ValidationError on violation; nothing here runs mid-simulation.
"""

import numpy as np

from . import constants as C


class ValidationError(ValueError):
    """Raised when a waypoint or flight plan fails validation."""
    pass


def check_finite(name: str, value: float) -> bool:
    """Reject NaN / infinite inputs."""
    if not np.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")
    return True


def validate_waypoint(waypoint) -> bool:
    """
    Validate a single waypoint.

    Args:
        waypoint: Waypoint instance

    Returns:
        True if valid, raises ValidationError otherwise
    """
    check_finite("altitude", waypoint.altitude)
    check_finite("speed", waypoint.speed)
    check_finite("max_g", waypoint.max_g)

    if waypoint.altitude < 0.0:
        raise ValidationError(f"Waypoint altitude must be >= 0 ft, got {waypoint.altitude}")
    if waypoint.speed < 0.0:
        raise ValidationError(f"Waypoint speed must be >= 0 Mach, got {waypoint.speed}")
    if waypoint.max_g <= 0.0:
        raise ValidationError(f"Waypoint max_g must be > 0, got {waypoint.max_g}")

    limits = C.WAYPOINT_MACH_LIMITS.get(waypoint.engine_mode.name)
    if limits is not None:
        lo, hi = limits
        if not lo <= waypoint.speed <= hi:
            raise ValidationError(
                f"Mach {waypoint.speed:.2f} is outside the {waypoint.engine_mode.value} "
                f"range [{lo:.1f}, {hi:.1f}]"
            )
    return True


def validate_flight_plan(plan) -> bool:
    """
    Validate a complete flight plan before simulation.

    Args:
        plan: FlightPlan instance

    Returns:
        True if valid, raises ValidationError otherwise
    """
    waypoints = plan.waypoints
    if len(waypoints) < 2:
        raise ValidationError("Flight plan needs at least one waypoint after the start")

    start = waypoints[0]
    if start.altitude != 0.0 or start.speed != 0.0:
        raise ValidationError(
            f"First waypoint must be the runway (0 ft, Mach 0), got "
            f"{start.altitude:.0f} ft / Mach {start.speed:.2f}"
        )

    for i, waypoint in enumerate(waypoints):
        try:
            validate_waypoint(waypoint)
        except ValidationError as e:
            raise ValidationError(f"Waypoint {i}: {e}") from e
    return True
