"""
SSTO Ascent Simulation Package

Point-mass ascent of a lifting-body single-stage-to-orbit vehicle through
its propulsion regimes, plus a Newton-Raphson sizing solver.

Modules:
    - constants: Physical constants, US-76 tables, engine reference values
    - config: SimulationConfig and factories
    - atmosphere: US Standard Atmosphere 1976
    - thermal: Leading-edge recovery temperature and limits
    - design: Leading-edge design parameters
    - flight_plan: Engine modes, waypoints and flight plans
    - engines: Propulsion system models
    - propulsion_manager: Auto / manual engine selection
    - forces: Gravity and drag
    - guidance: Flight-path angle and throttle commands
    - simulator: Segment integrator and mission runner
    - mass: Dry mass model
    - rocket: Rocket propellant analysis
    - fuel_estimator: Whole-mission fuel estimate
    - optimizer: Vehicle sizing
"""

from .config import SimulationConfig, create_default_config, create_test_config
from .design import PlaneDesign, DEFAULT_DESIGN, OPTIMAL_DESIGN
from .flight_plan import EngineMode, Waypoint, FlightPlan
from .validation import ValidationError
from .propulsion_manager import PropulsionManager
from .results import (
    TerminationReason, TrajectoryPoint, FlightSegmentResult, MissionResult,
    OptimizationResult,
)
from .simulator import (
    CancellationToken, FlightSegmentSimulator, simulate_mission, submit_mission,
)
from .fuel_estimator import FuelEstimator, FuelEstimate
from .optimizer import SizingOptimizer, length_to_volume

__version__ = "1.0.0"
__author__ = "SSTO Simulation Team"

__all__ = [
    'SimulationConfig',
    'create_default_config',
    'create_test_config',
    'PlaneDesign',
    'DEFAULT_DESIGN',
    'OPTIMAL_DESIGN',
    'EngineMode',
    'Waypoint',
    'FlightPlan',
    'ValidationError',
    'PropulsionManager',
    'TerminationReason',
    'TrajectoryPoint',
    'FlightSegmentResult',
    'MissionResult',
    'OptimizationResult',
    'CancellationToken',
    'FlightSegmentSimulator',
    'simulate_mission',
    'submit_mission',
    'FuelEstimator',
    'FuelEstimate',
    'SizingOptimizer',
    'length_to_volume',
]
