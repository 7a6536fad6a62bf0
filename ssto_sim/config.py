"""
SSTO Ascent Simulation - Configuration

This module provides a SimulationConfig dataclass for dependency injection,
allowing different simulation and sizing parameters to be passed without
modifying global constants.

All optional physics features default to OFF (False) so existing behaviour
is unchanged until the caller explicitly enables them.
"""

from dataclasses import dataclass

from . import constants as C


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable configuration for simulation and sizing parameters.

    Using frozen=True ensures configs cannot be accidentally modified.
    Create new configs via dataclass replace() if needed.

    Section grouping:
      1. Simulation timing
      2. Segment termination
      3. Guidance
      4. Physics feature toggles
      5. Vehicle / propellant
      6. Mission success
      7. Scoring
      8. Sizing optimizer
      9. Misc
    """

    # ── 1. Simulation timing ─────────────────────────────────────────────
    dt: float = C.DT
    max_segment_time: float = C.MAX_SEGMENT_TIME
    sample_interval: float = C.SAMPLE_INTERVAL

    # ── 2. Segment termination ───────────────────────────────────────────
    # Waypoints are in ft / Mach; tolerances are pinned to ft and m/s.
    altitude_tolerance_ft: float = C.ALTITUDE_TOLERANCE_FT
    speed_tolerance_mps: float = C.SPEED_TOLERANCE_MPS
    divergence_check_time: float = C.DIVERGENCE_CHECK_TIME
    divergence_altitude_margin_ft: float = C.DIVERGENCE_ALTITUDE_MARGIN_FT

    # ── 3. Guidance ──────────────────────────────────────────────────────
    max_climb_angle_deg: float = C.MAX_CLIMB_ANGLE_DEG
    max_descent_angle_deg: float = C.MAX_DESCENT_ANGLE_DEG
    climb_thrust_share: float = C.CLIMB_THRUST_SHARE
    hold_climb_thrust_share: float = C.HOLD_CLIMB_THRUST_SHARE
    min_time_to_go: float = C.MIN_TIME_TO_GO
    min_guidance_accel: float = C.MIN_GUIDANCE_ACCEL
    speed_hold_time_constant: float = C.SPEED_HOLD_TIME_CONSTANT

    # ── 4. Physics feature toggles ───────────────────────────────────────
    # Per-mode dynamic pressure limit (default OFF → full thrust at any q)
    enable_max_q_limit: bool = False
    # Waypoint max_g caps net acceleration (default ON)
    enable_g_limit: bool = True

    # ── 5. Vehicle / propellant ──────────────────────────────────────────
    propellant_density: float = C.PROPELLANT_DENSITY
    low_speed_engine: str = "ejector_ramjet"     # or "jet"
    low_speed_engine_count: int = 0              # 0 → engine default
    rocket_engine_count: int = C.ROCKET_ENGINE_COUNT
    ramjet_capture_area: float = C.RAMJET_CAPTURE_AREA
    scramjet_capture_area: float = C.SCRAMJET_CAPTURE_AREA
    reference_area_coeff: float = C.REFERENCE_AREA_COEFF

    # ── 6. Mission success ───────────────────────────────────────────────
    orbit_altitude_m: float = C.ORBIT_ALTITUDE
    orbit_mach: float = C.ORBIT_MACH
    orbit_altitude_tolerance_m: float = C.ORBIT_ALTITUDE_TOLERANCE
    orbit_mach_tolerance: float = C.ORBIT_MACH_TOLERANCE

    # ── 7. Scoring ───────────────────────────────────────────────────────
    score_base: int = C.SCORE_BASE
    score_fuel_baseline_kg: float = C.SCORE_FUEL_BASELINE
    score_fuel_weight: float = C.SCORE_FUEL_WEIGHT
    score_time_baseline_s: float = C.SCORE_TIME_BASELINE
    score_time_weight: float = C.SCORE_TIME_WEIGHT
    score_thermal_weight: float = C.SCORE_THERMAL_WEIGHT

    # ── 8. Sizing optimizer ──────────────────────────────────────────────
    reference_length_m: float = C.REFERENCE_LENGTH
    reference_volume_m3: float = C.REFERENCE_VOLUME
    min_length_m: float = C.MIN_LENGTH
    max_length_m: float = C.MAX_LENGTH
    sizing_max_iterations: int = C.SIZING_MAX_ITERATIONS
    sizing_tolerance: float = C.SIZING_TOLERANCE
    sizing_derivative_step_m: float = C.SIZING_DERIVATIVE_STEP
    sizing_min_derivative: float = C.SIZING_MIN_DERIVATIVE
    payload_mass_kg: float = C.PAYLOAD_MASS
    design_max_temperature_c: float = C.DESIGN_MAX_TEMPERATURE_C
    estimator_samples: int = C.ESTIMATOR_SAMPLES
    delta_v_margin: float = C.DELTA_V_MARGIN

    # ── 9. Misc ──────────────────────────────────────────────────────────
    verbose: bool = True


def create_default_config() -> SimulationConfig:
    """Create a SimulationConfig with default values from constants."""
    return SimulationConfig()


def create_test_config(dt: float = 0.1, max_segment_time: float = C.MAX_SEGMENT_TIME,
                       **overrides) -> SimulationConfig:
    """Create a quiet config suitable for testing.

    Any keyword arg accepted by SimulationConfig can be passed as an override.
    """
    defaults = dict(dt=dt, max_segment_time=max_segment_time, verbose=False)
    defaults.update(overrides)
    return SimulationConfig(**defaults)
