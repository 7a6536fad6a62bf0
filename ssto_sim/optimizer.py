"""
SSTO Ascent Simulation - Vehicle Sizing

Newton-Raphson search for the vehicle length whose tankage exactly holds
the propellant the mission needs:

    e(L) = capacity(V(L)) - required(V(L), m0(L)),   V(L) = V_ref (L / L_ref)^3

where m0 = dry(V) + payload + capacity. The derivative is a central
finite difference. Steps that would leave the current bracket (or a
near-zero derivative) fall back to bisection of the bracket, so the
search never stalls. Non-convergence is reported, never raised.
"""

import logging
from typing import Callable, NamedTuple, Optional, Sequence, Union

import numpy as np

from .config import SimulationConfig, create_default_config
from .design import PlaneDesign, DEFAULT_DESIGN
from .flight_plan import FlightPlan, Waypoint
from .fuel_estimator import FuelEstimator
from .mass import dry_mass, fuel_capacity
from .results import OptimizationResult

logger = logging.getLogger(__name__)

# (volume m^3, initial mass kg) -> propellant required (kg)
FuelRequirement = Callable[[float, float], float]


class SizingPoint(NamedTuple):
    length: float
    volume: float
    dry_mass: float
    capacity: float
    required: float
    error: float


def length_to_volume(length: float, config: SimulationConfig = None) -> float:
    """Internal volume (m^3) of the vehicle scaled uniformly to ``length`` (m)."""
    config = config or create_default_config()
    return config.reference_volume_m3 * (length / config.reference_length_m) ** 3


def volume_to_length(volume: float, config: SimulationConfig = None) -> float:
    """Inverse of length_to_volume."""
    config = config or create_default_config()
    return config.reference_length_m * np.cbrt(volume / config.reference_volume_m3)


class SizingOptimizer:
    """
    Finds the minimum vehicle length that carries enough propellant.

    Args:
        waypoints: Flight plan (or its waypoints) to size for
        design: Leading-edge design
        config: Simulation configuration (sizing section)
        fuel_requirement: Optional replacement for the mission fuel estimate

    Raises:
        ValueError: If the configured iteration limit is below one
    """

    def __init__(self, waypoints: Union[FlightPlan, Sequence[Waypoint]],
                 design: PlaneDesign = DEFAULT_DESIGN,
                 config: SimulationConfig = None,
                 fuel_requirement: Optional[FuelRequirement] = None):
        if isinstance(waypoints, FlightPlan):
            waypoints.validate()
            waypoints = waypoints.waypoints
        self.waypoints = tuple(waypoints)
        self.design = design
        self.config = config or create_default_config()
        if self.config.sizing_max_iterations < 1:
            raise ValueError(f"sizing_max_iterations must be at least 1, "
                             f"got {self.config.sizing_max_iterations}")
        if fuel_requirement is None:
            estimator = FuelEstimator(self.config)
            fuel_requirement = lambda volume, mass: estimator.estimate(self.waypoints, mass).total_fuel
        self.fuel_requirement = fuel_requirement

    def evaluate(self, length: float) -> SizingPoint:
        """Fuel balance at one candidate length."""
        cfg = self.config
        volume = length_to_volume(length, cfg)
        dry = dry_mass(volume, self.waypoints, self.design, cfg.design_max_temperature_c, cfg)
        capacity = fuel_capacity(volume, cfg.propellant_density)
        initial_mass = dry + cfg.payload_mass_kg + capacity
        required = self.fuel_requirement(volume, initial_mass)
        return SizingPoint(length, volume, dry, capacity, required, capacity - required)

    def error_derivative(self, length: float) -> float:
        """Central difference de/dL (kg/m)."""
        h = self.config.sizing_derivative_step_m
        return (self.evaluate(length + h).error - self.evaluate(length - h).error) / (2.0 * h)

    def optimize_length(self, initial_length: float = None) -> OptimizationResult:
        """
        Run the safeguarded Newton iteration from ``initial_length`` (m).

        Returns:
            OptimizationResult with every (length, error) pair visited
        """
        cfg = self.config
        lo, hi = cfg.min_length_m, cfg.max_length_m
        if initial_length is None:
            initial_length = cfg.reference_length_m
        length = float(np.clip(initial_length, lo, hi))

        lengths, errors = [], []
        converged = False
        point = None

        logger.info(f"Sizing start: L0={length:.2f} m, bounds=[{lo}, {hi}] m, "
                    f"{len(self.waypoints)} waypoints")
        if cfg.verbose:
            print("\n" + "=" * 80)
            print(f"SIZING OPTIMIZER    | L0={length:.1f} m | max_iter={cfg.sizing_max_iterations}")
            print("=" * 80)
            print(f"{'Iter':^6} | {'Length (m)':^12} | {'Error (kg)':^14} | {'Dry (kg)':^12} | {'Step':<10}")
            print("-" * 80)

        for iteration in range(1, cfg.sizing_max_iterations + 1):
            point = self.evaluate(length)
            lengths.append(length)
            errors.append(point.error)

            if abs(point.error) < cfg.sizing_tolerance * point.dry_mass:
                converged = True
                logger.info(f"Iter {iteration}: L={length:.3f} m, e={point.error:,.1f} kg (converged)")
                if cfg.verbose:
                    print(f"{iteration:6d} | {length:12.3f} | {point.error:14,.1f} | "
                          f"{point.dry_mass:12,.0f} | converged")
                break

            # Too little tankage means the root lies at a larger length
            if point.error < 0.0:
                lo = max(lo, length)
            else:
                hi = min(hi, length)

            derivative = self.error_derivative(length)
            step = "newton"
            candidate = np.nan
            if abs(derivative) > cfg.sizing_min_derivative:
                candidate = length - point.error / derivative
            if not (np.isfinite(candidate) and lo <= candidate <= hi):
                candidate = 0.5 * (lo + hi)
                step = "bisection"
            new_length = float(np.clip(candidate, cfg.min_length_m, cfg.max_length_m))

            logger.info(f"Iter {iteration}: L={length:.3f} m, e={point.error:,.1f} kg, "
                        f"de/dL={derivative:,.1f} kg/m, {step} -> {new_length:.3f} m")
            if cfg.verbose:
                print(f"{iteration:6d} | {length:12.3f} | {point.error:14,.1f} | "
                      f"{point.dry_mass:12,.0f} | {step}")

            if abs(new_length - length) < 1e-9:
                logger.warning(f"Sizing stuck at {length:.3f} m")
                break
            length = new_length

        if not converged:
            logger.warning(f"Sizing did not converge after {len(lengths)} iterations: "
                           f"L={point.length:.3f} m, e={point.error:,.1f} kg")

        result = OptimizationResult(
            optimal_length=point.length,
            fuel_capacity=point.capacity,
            converged=converged,
            iterations=len(lengths),
            length_history=tuple(lengths),
            error_history=tuple(errors),
            fuel_required=point.required,
            dry_mass=point.dry_mass,
        )
        if cfg.verbose:
            print("-" * 80)
            print(result.summary())
            print("=" * 80)
        return result
