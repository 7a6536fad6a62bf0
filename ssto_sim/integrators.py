"""
SSTO Ascent Simulation - Numerical Integration

Explicit (semi-implicit) Euler step for the point-mass state: velocity is
advanced first and the new velocity drives the altitude update.

    v'   = v + a dt
    h'   = h + v' sin(gamma) dt
    m_p' = max(0, m_p - mdot dt)
"""

import numpy as np

from .state import State


def euler_step(state: State, acceleration: float, flight_path_angle: float,
               fuel_flow: float, dt: float) -> State:
    """
    Advance the state by one step.

    Args:
        state: Current state
        acceleration: Along-path acceleration (m/s^2)
        flight_path_angle: Flight-path angle (rad, positive climbing)
        fuel_flow: Propellant mass flow (kg/s)
        dt: Time step (s)

    Returns:
        New state after integration

    Raises:
        ValueError: If dt <= 0 or any input is not finite
    """
    if dt <= 0:
        raise ValueError(f"Time step dt must be positive, got {dt}")
    if not np.all(np.isfinite([acceleration, flight_path_angle, fuel_flow])):
        raise ValueError(
            f"Non-finite step inputs: a={acceleration}, gamma={flight_path_angle}, "
            f"mdot={fuel_flow}"
        )

    velocity = state.velocity + acceleration * dt
    altitude = state.altitude + velocity * np.sin(flight_path_angle) * dt
    propellant = max(0.0, state.propellant - max(0.0, fuel_flow) * dt)

    # Runway: cannot sink below ground or roll backwards
    if altitude <= 0.0:
        altitude = 0.0
        velocity = max(0.0, velocity)

    return State(
        altitude=float(altitude),
        velocity=float(velocity),
        propellant=float(propellant),
        dry_mass=state.dry_mass,
        t=state.t + dt,
    )
