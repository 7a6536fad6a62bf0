"""
SSTO Ascent Simulation - Segment Guidance

Flight-path angle and throttle commands that drive the vehicle from its
current state toward a waypoint's altitude and speed.

The climb rate is chosen so the altitude error closes over the time the
speed change needs (time-to-go). The climb may spend only a share of the
excess thrust, so the vehicle keeps accelerating while it climbs. Once on
speed, the throttle holds it with a first-order speed loop.
"""

from typing import NamedTuple

import numpy as np

from .config import SimulationConfig, create_default_config
from .state import State


class GuidanceCommand(NamedTuple):
    flight_path_angle: float   # rad
    throttle: float            # 0..1
    time_to_go: float          # s


def compute_guidance(state: State, target_altitude: float, target_velocity: float,
                     max_thrust: float, drag: float, gravity: float,
                     config: SimulationConfig = None) -> GuidanceCommand:
    """
    Compute the flight-path angle and throttle for one step.

    Args:
        state: Current state
        target_altitude: Segment target altitude (m)
        target_velocity: Segment target speed (m/s)
        max_thrust: Thrust available after any limits (N)
        drag: Current drag (N)
        gravity: Local gravitational acceleration (m/s^2)
        config: Simulation configuration

    Returns:
        GuidanceCommand
    """
    config = config or create_default_config()
    m = state.mass
    dv = target_velocity - state.velocity
    dh = target_altitude - state.altitude
    on_speed = abs(dv) <= config.speed_tolerance_mps

    excess_accel = (max_thrust - drag) / m
    accel = max(abs(excess_accel), config.min_guidance_accel)
    time_to_go = max(config.min_time_to_go, abs(dv) / accel)

    climb_rate = dh / time_to_go
    sin_cmd = climb_rate / max(state.velocity, 1.0)

    share = config.hold_climb_thrust_share if on_speed else config.climb_thrust_share
    sin_up = min(np.sin(np.radians(config.max_climb_angle_deg)),
                 max(0.0, share * (max_thrust - drag) / (m * gravity)))
    sin_down = 0.0 if state.grounded else -np.sin(np.radians(config.max_descent_angle_deg))
    sin_gamma = float(np.clip(sin_cmd, sin_down, sin_up))

    if max_thrust > 0.0:
        needed = drag + m * gravity * sin_gamma + m * dv / config.speed_hold_time_constant
        throttle = float(np.clip(needed / max_thrust, 0.0, 1.0))
    else:
        throttle = 0.0

    return GuidanceCommand(float(np.arcsin(sin_gamma)), throttle, float(time_to_go))
