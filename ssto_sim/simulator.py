"""
SSTO Ascent Simulation - Segment Integrator and Mission Runner

This module implements the time-stepped flight of one waypoint-to-waypoint
segment and the mission loop that chains segments together:
- Engine selection (Auto) or the segment's manual engine
- Thrust limits (max-q when enabled, per-waypoint g-limit)
- Guidance, explicit Euler integration, propellant burn
- Termination in priority order and ~1 Hz trajectory sampling

Each call builds its own engines and state, so independent missions can
run on separate threads. A CancellationToken is checked once per step.
"""

from collections import Counter
from concurrent.futures import Executor, Future
import logging
import threading
from typing import List, Optional, Tuple

import numpy as np

from . import constants as C
from .config import SimulationConfig, create_default_config
from .design import PlaneDesign, DEFAULT_DESIGN
from .engines import NO_THRUST
from .flight_plan import EngineMode, FlightPlan, Waypoint
from .forces import DragModel, dynamic_pressure, gravity_acceleration
from .guidance import compute_guidance
from .integrators import euler_step
from .mass import dry_mass as compute_dry_mass, fuel_capacity, is_propellant_exhausted
from .propulsion_manager import PropulsionManager
from .results import (
    FlightSegmentResult, MissionResult, TerminationReason, TrajectoryPoint,
    build_mission_result, mach_to_velocity,
)
from .state import State, create_initial_state
from .thermal import max_temperature, recovery_temperature

logger = logging.getLogger(__name__)


class CancellationToken:
    """Thread-safe flag a caller sets to stop a running simulation."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class FlightSegmentSimulator:
    """
    Integrates the vehicle from its current state toward one waypoint.

    The propulsion manager is owned by the caller and keeps its selection
    across segments; the simulator only switches it between Auto and the
    target waypoint's manual engine at the start of each segment.
    """

    def __init__(self, manager: PropulsionManager = None,
                 design: PlaneDesign = DEFAULT_DESIGN,
                 drag_model: DragModel = None,
                 config: SimulationConfig = None,
                 cancel_token: Optional[CancellationToken] = None):
        self.config = config or create_default_config()
        if self.config.dt <= 0:
            raise ValueError(f"Time step dt must be positive, got {self.config.dt}")
        self.manager = manager or PropulsionManager(config=self.config)
        self.design = design
        self.drag_model = drag_model or DragModel.for_vehicle(
            C.REFERENCE_VOLUME, design, self.config.reference_area_coeff)
        self.cancel_token = cancel_token
        self.temperature_limit = max_temperature(design)

    # =========================================================================
    # TERMINATION
    # =========================================================================

    def check_termination(self, state: State, elapsed: float, target_altitude: float,
                          target_velocity: float, initial_error_ft: float) -> Optional[TerminationReason]:
        """
        Termination reason for the current state, or None to keep flying.

        Priority: propellant exhausted, target reached, diverged (only
        after the check time), segment timeout.
        """
        cfg = self.config
        if is_propellant_exhausted(state.propellant):
            return TerminationReason.FUEL_EXHAUSTED

        error_ft = abs(target_altitude - state.altitude) * C.M_TO_FT
        if (error_ft < cfg.altitude_tolerance_ft
                and abs(target_velocity - state.velocity) < cfg.speed_tolerance_mps):
            return TerminationReason.TARGET_REACHED

        if elapsed >= cfg.divergence_check_time:
            if error_ft > initial_error_ft + cfg.divergence_altitude_margin_ft or state.velocity < 0.0:
                return TerminationReason.DIVERGED

        if elapsed >= cfg.max_segment_time - C.ZERO_TOLERANCE:
            return TerminationReason.TIMEOUT
        return None

    # =========================================================================
    # ONE STEP
    # =========================================================================

    def available_thrust(self, state: State, thrust: float, drag: float,
                         mode: EngineMode, max_g: float) -> float:
        """Engine thrust after the max-q and g limits (N)."""
        if self.config.enable_max_q_limit:
            q_limit = C.MAX_Q_LIMITS.get(mode.name)
            q = dynamic_pressure(state.altitude, state.velocity)
            if q_limit is not None and q > q_limit:
                thrust *= q_limit / q
        if self.config.enable_g_limit:
            thrust = min(thrust, drag + state.mass * max_g * C.G0)
        return max(0.0, thrust)

    def step(self, state: State, target_altitude: float, target_velocity: float,
             max_g: float) -> Tuple[State, EngineMode]:
        """Advance one timestep. Returns the new state and the engine that flew it."""
        altitude_ft, mach = state.altitude_ft, state.mach
        mode = self.manager.update(altitude_ft, mach)

        if state.propellant > 0.0:
            perf = self.manager.get_performance(altitude_ft, mach)
        else:
            perf = NO_THRUST

        drag = self.drag_model.drag(state.altitude, state.velocity)
        gravity = gravity_acceleration(state.altitude)
        max_thrust = self.available_thrust(state, perf.thrust, drag, mode, max_g)

        command = compute_guidance(state, target_altitude, target_velocity,
                                   max_thrust, drag, gravity, self.config)
        thrust = command.throttle * max_thrust
        fuel_flow = perf.fuel_flow * thrust / perf.thrust if perf.thrust > 0.0 else 0.0

        acceleration = (thrust - drag) / state.mass - gravity * np.sin(command.flight_path_angle)
        new_state = euler_step(state, acceleration, command.flight_path_angle,
                               fuel_flow, self.config.dt)
        return new_state, mode

    # =========================================================================
    # SEGMENT LOOP
    # =========================================================================

    def _sample(self, state: State) -> TrajectoryPoint:
        return TrajectoryPoint(
            time=state.t,
            altitude=state.altitude_ft,
            speed=state.mach,
            fuel_remaining=state.propellant,
            engine_mode=self.manager.current_mode,
            temperature=recovery_temperature(state.altitude, state.velocity, self.design),
        )

    def _apply_engine_mode(self, target: Waypoint) -> None:
        if target.engine_mode is EngineMode.AUTO:
            self.manager.enable_auto_mode()
        else:
            self.manager.set_manual_engine(target.engine_mode)

    def simulate_segment(self, state: State, target: Waypoint) -> Tuple[FlightSegmentResult, State]:
        """
        Fly from ``state`` toward ``target``.

        Args:
            state: State at the start of the segment (not modified)
            target: Waypoint to reach; its engine mode applies to the whole segment

        Returns:
            (FlightSegmentResult, final_state) tuple
        """
        cfg = self.config
        self._apply_engine_mode(target)

        target_altitude = target.altitude_m
        target_velocity = mach_to_velocity(target_altitude, target.speed)
        state = state.copy()
        start_propellant = state.propellant
        start_time = state.t
        initial_error_ft = abs(target_altitude - state.altitude) * C.M_TO_FT
        sample_every = max(1, int(round(cfg.sample_interval / cfg.dt)))
        self.manager.update(state.altitude_ft, state.mach)

        logger.info(f"Segment start: {state} -> {target.altitude:,.0f} ft, Mach {target.speed:.2f} "
                    f"({self.manager.status()})")

        trajectory: List[TrajectoryPoint] = [self._sample(state)]
        peak_temperature = trajectory[0].temperature
        mode_steps = Counter()
        steps = 0
        last_sample_step = 0
        last_print_time = state.t

        while True:
            reason = self.check_termination(state, steps * cfg.dt, target_altitude,
                                            target_velocity, initial_error_ft)
            if reason is None and self.cancel_token is not None and self.cancel_token.cancelled:
                reason = TerminationReason.CANCELLED
            if reason is not None:
                break

            state, mode = self.step(state, target_altitude, target_velocity, target.max_g)
            steps += 1
            mode_steps[mode] += 1
            peak_temperature = max(peak_temperature, recovery_temperature(
                state.altitude, state.velocity, self.design))

            if steps % sample_every == 0:
                trajectory.append(self._sample(state))
                last_sample_step = steps
            if cfg.verbose and state.t - last_print_time >= C.PRINT_INTERVAL:
                _print_status(state, mode)
                last_print_time = state.t

        if steps == 0 or last_sample_step != steps:
            trajectory.append(self._sample(state))

        engine_used = mode_steps.most_common(1)[0][0] if mode_steps else self.manager.current_mode
        result = FlightSegmentResult(
            trajectory=tuple(trajectory),
            fuel_used=start_propellant - state.propellant,
            final_altitude=state.altitude_ft,
            final_speed=state.mach,
            duration=state.t - start_time,
            engine_used=engine_used,
            termination=reason,
            max_temperature=peak_temperature,
            thermal_limit_exceeded=peak_temperature > self.temperature_limit,
        )

        log = logger.info if reason is TerminationReason.TARGET_REACHED else logger.warning
        log(f"Segment terminated: {reason.name} after {result.duration:.1f}s, "
            f"{result.fuel_used:,.0f} kg used, {result.final_altitude:,.0f} ft, "
            f"Mach {result.final_speed:.2f}")
        if cfg.verbose:
            print(f"  -> {reason.name} | {result.final_altitude:,.0f} ft | "
                  f"Mach {result.final_speed:.2f} | {result.fuel_used:,.0f} kg")
        return result, state


def _print_status(state: State, mode: EngineMode):
    """Print a formatted status row."""
    print(f"{state.t:10.1f} | {state.altitude_ft:12,.0f} | {state.mach:8.2f} | "
          f"{state.propellant:12,.0f} | {mode.value:<15}")


# =============================================================================
# MISSION
# =============================================================================

def simulate_mission(plan: FlightPlan,
                     design: PlaneDesign = DEFAULT_DESIGN,
                     volume: float = C.REFERENCE_VOLUME,
                     dry_mass: Optional[float] = None,
                     propellant: Optional[float] = None,
                     config: SimulationConfig = None,
                     drag_model: DragModel = None,
                     cancel_token: Optional[CancellationToken] = None) -> MissionResult:
    """
    Fly every segment of a flight plan and classify the outcome.

    Args:
        plan: Flight plan; validated before anything runs
        design: Leading-edge design (thermal limits, drag multiplier)
        volume: Internal volume (m^3), sets tankage, dry mass and drag area
        dry_mass: Mass without propellant (kg). Defaults to the mass model
            plus the configured payload.
        propellant: Propellant loaded (kg). Defaults to a full tank.
        config: Simulation configuration
        drag_model: Drag collaborator. Defaults to the built-in Mach table.
        cancel_token: Optional token checked once per step

    Returns:
        MissionResult

    Raises:
        ValidationError: If the plan cannot be simulated
    """
    config = config or create_default_config()
    plan.validate()

    if dry_mass is None:
        dry_mass = compute_dry_mass(volume, plan.waypoints, design,
                                    config.design_max_temperature_c, config) + config.payload_mass_kg
    if propellant is None:
        propellant = fuel_capacity(volume, config.propellant_density)

    drag_model = drag_model or DragModel.for_vehicle(volume, design, config.reference_area_coeff)
    manager = PropulsionManager(config=config)
    simulator = FlightSegmentSimulator(manager, design, drag_model, config, cancel_token)
    state = create_initial_state(dry_mass, propellant)

    logger.info(f"Starting mission: {len(plan) - 1} segments, dry={dry_mass:,.0f} kg, "
                f"propellant={propellant:,.0f} kg, dt={config.dt}s")
    if config.verbose:
        print("\n" + "=" * 80)
        print(f"SSTO ASCENT SIMULATION    | dt={config.dt}s | segments={len(plan) - 1} | "
              f"design={design.summary()}")
        print("=" * 80)
        print(f"{'Time (s)':^10} | {'Alt (ft)':^12} | {'Mach':^8} | {'Fuel (kg)':^12} | {'Engine':<15}")
        print("-" * 80)

    segments = []
    for i, (_, target) in enumerate(plan.segments(), start=1):
        result, state = simulator.simulate_segment(state, target)
        segments.append(result)
        if result.termination in (TerminationReason.FUEL_EXHAUSTED, TerminationReason.CANCELLED):
            logger.warning(f"Mission stopped in segment {i}: {result.termination.name}")
            break

    mission = build_mission_result(segments, design, config)
    logger.info(f"Mission complete: success={mission.success}, score={mission.score}")
    if config.verbose:
        print("-" * 80)
        print(mission.summary())
        print("=" * 80)
    return mission


def submit_mission(executor: Executor, *args, **kwargs) -> Future:
    """Run simulate_mission on an executor; arguments are passed through."""
    return executor.submit(simulate_mission, *args, **kwargs)
