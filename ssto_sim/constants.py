"""
SSTO Ascent Simulation - Physical Constants and Vehicle Parameters

This module defines all physical constants, standard-atmosphere tables,
engine reference values, vehicle sizing parameters and simulation defaults
used throughout the package.

VALUES FROM: US Standard Atmosphere 1976, J58 / RS-25 public data,
and the lifting-body reference vehicle.
"""

import numpy as np

# =============================================================================
# EARTH PARAMETERS
# =============================================================================

# Gravitational parameter (m^3/s^2)
MU_EARTH = 3.986004418e14

# Earth mean radius (m)
R_EARTH = 6.371e6

# Standard gravitational acceleration at sea level (m/s^2)
G0 = 9.80665

# =============================================================================
# ATMOSPHERE (US Standard Atmosphere 1976)
# =============================================================================

ATM_T0 = 288.15      # Sea level temperature (K)
ATM_P0 = 101325.0    # Sea level pressure (Pa)
ATM_RHO0 = 1.225     # Sea level density (kg/m^3)

# Thermodynamics
GAMMA = 1.4          # Adiabatic index for air
R_GAS = 287.058      # Specific gas constant for dry air (J/(kg·K))

# Layer base altitudes (m, geometric) and lapse rates (K/m)
US76_ALTITUDES = np.array([0.0, 11000.0, 20000.0, 32000.0, 47000.0, 51000.0, 71000.0, 84852.0])
US76_LAPSE_RATES = np.array([-0.0065, 0.0, 0.0010, 0.0028, 0.0, -0.0028, -0.0020])

# Sutherland's law for dynamic viscosity
SUTHERLAND_MU_REF = 1.716e-5   # Pa·s
SUTHERLAND_T_REF = 273.15      # K
SUTHERLAND_S = 110.4           # K

# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

FT_TO_M = 0.3048
M_TO_FT = 1.0 / FT_TO_M
LITERS_PER_M3 = 1000.0
KELVIN_OFFSET = 273.15

# =============================================================================
# THERMAL MODEL
# =============================================================================

RECOVERY_FACTOR = 0.9                 # Turbulent boundary layer recovery factor
BASE_MAX_TEMPERATURE_C = 600.0        # Structural limit for the default design (°C)
BASE_SUSTAINED_TEMPERATURE_C = 550.0  # Long-duration limit (°C)

# Inversion of the recovery relation for the maximum safe velocity
MAX_SAFE_VELOCITY_UPPER = 10000.0     # m/s
MAX_SAFE_VELOCITY_ITERATIONS = 20

# Regime thresholds (°C)
THERMAL_COOL_LIMIT_C = 100.0
THERMAL_WARM_LIMIT_C = 300.0

# Reference service temperatures (°C)
MATERIAL_LIMITS_C = {
    "aluminum": 150.0,
    "titanium": 500.0,
    "inconel": 700.0,
    "carbon_carbon": 1600.0,
}

# =============================================================================
# PLANE DESIGN
# =============================================================================

DEFAULT_TILT_DEG = 0.0
DEFAULT_SWEEP_DEG = 92.0
DEFAULT_POSITION = 0.0

OPTIMAL_TILT_DEG = 0.0
OPTIMAL_SWEEP_DEG = 80.0
OPTIMAL_POSITION = 174.0

# Sweep band in which the leading edge neither gains nor loses much margin
SWEEP_NEUTRAL_MIN_DEG = 90.0
SWEEP_NEUTRAL_MAX_DEG = 100.0

THERMAL_MULTIPLIER_MIN = 0.6
THERMAL_MULTIPLIER_MAX = 1.3
DRAG_MULTIPLIER_MIN = 0.7
DRAG_MULTIPLIER_MAX = 2.0

# =============================================================================
# PROPELLANTS
# =============================================================================

H2_HEATING_VALUE = 1.2e8        # Lower heating value of hydrogen (J/kg)
CP_AIR = 1005.0                 # Specific heat of air at constant pressure (J/(kg·K))
SLUSH_H2_DENSITY = 86.0         # kg/m^3
JET_FUEL_DENSITY = 790.0        # JP-7 (kg/m^3)
LOX_LH2_BULK_DENSITY = 360.0    # LOX/LH2 at O/F 6 (kg/m^3)

# Isp that maps to efficiency 1.0 when ranking engines
ISP_REFERENCE = 8000.0          # s

# =============================================================================
# ENGINE REFERENCE VALUES
# =============================================================================

# Turbojet (J58 class, afterburning)
JET_THRUST_PER_ENGINE = 151000.0      # N, sea level static with afterburner
JET_ENGINE_COUNT = 6
JET_TSFC = 1.9 / 3600.0 / G0          # kg/(N·s), 1.9 lb/(lbf·h)
JET_MACH_CEILING = 3.0                # thrust lapse starts here
JET_DENSITY_EXPONENT = 0.7
JET_DENSITY_SCALE_HEIGHT = 8500.0     # m
JET_THRUST_TO_WEIGHT = 5.0
JET_MACH_RANGE = (0.0, 3.2)
JET_ALTITUDE_RANGE_FT = (0.0, 85000.0)

# Ejector ramjet (air-augmented rocket + ramjet duct)
EJECTOR_PRIMARY_THRUST = 1.0e6        # N per module, primary rocket
EJECTOR_PRIMARY_ISP = 420.0           # s
EJECTOR_MODULE_COUNT = 2
EJECTOR_AUGMENTATION = 0.6            # extra thrust fraction at sea-level density
EJECTOR_CAPTURE_AREA = 6.0            # m^2 per module
EJECTOR_T0_MAX = 2600.0               # K
EJECTOR_ETA_INLET = 0.85
EJECTOR_ETA_BURNER = 0.92
EJECTOR_ETA_NOZZLE = 0.94
EJECTOR_HEAT_ADDITION = 1300.0        # K
EJECTOR_RAM_MACH = 2.0                # ramjet takeover centre
EJECTOR_RAM_WIDTH = 0.3
EJECTOR_THRUST_TO_WEIGHT = 10.0
EJECTOR_MACH_RANGE = (0.0, 6.0)
EJECTOR_ALTITUDE_RANGE_FT = (0.0, 120000.0)

# Ramjet
RAMJET_CAPTURE_AREA = 12.0            # m^2
RAMJET_T0_MAX = 2400.0                # K
RAMJET_ETA_INLET = 0.90
RAMJET_ETA_BURNER = 0.95
RAMJET_ETA_NOZZLE = 0.95
RAMJET_HEAT_ADDITION = 1200.0         # K
RAMJET_ACTIVATION_MACH = 2.5
RAMJET_ACTIVATION_WIDTH = 0.5
RAMJET_THRUST_TO_WEIGHT = 15.0
RAMJET_MACH_RANGE = (1.5, 7.0)
RAMJET_ALTITUDE_RANGE_FT = (20000.0, 150000.0)

# Scramjet
SCRAMJET_CAPTURE_AREA = 20.0          # m^2
SCRAMJET_T0_MAX = 4500.0              # K
SCRAMJET_ETA_BURNER = 0.85
SCRAMJET_SIGMA_BURNER = 0.92          # combustor total pressure ratio
SCRAMJET_ETA_NOZZLE = 0.95
SCRAMJET_HEAT_ADDITION = 1500.0       # K
SCRAMJET_RECOVERY_PEAK = 0.5          # inlet pressure recovery at the design Mach
SCRAMJET_RECOVERY_PEAK_MACH = 7.0
SCRAMJET_RECOVERY_WIDTH = 5.0
SCRAMJET_RECOVERY_MIN = 0.05
SCRAMJET_ACTIVATION_MACH = 5.5
SCRAMJET_ACTIVATION_WIDTH = 0.5
SCRAMJET_THRUST_TO_WEIGHT = 10.0
SCRAMJET_MACH_RANGE = (4.5, 15.0)
SCRAMJET_ALTITUDE_RANGE_FT = (60000.0, 250000.0)

# Rocket (LOX/LH2, RS-25 class)
ROCKET_THRUST_SL = 1.86e6             # N per engine
ROCKET_ISP_SL = 366.0                 # s
ROCKET_ISP_VAC = 452.0                # s
ROCKET_MIXTURE_RATIO = 6.0            # O/F by mass
ROCKET_ENGINE_COUNT = 3
ROCKET_THRUST_TO_WEIGHT = 70.0
ROCKET_MACH_RANGE = (0.0, 35.0)
ROCKET_ALTITUDE_RANGE_FT = (0.0, 1.0e6)

# Dynamic pressure limits per engine mode (Pa), applied when enabled
MAX_Q_LIMITS = {
    "EJECTOR_RAMJET": 50000.0,
    "RAMJET": 75000.0,
    "SCRAMJET": 100000.0,
    "ROCKET": 150000.0,
}

# Waypoint target Mach limits per engine mode (inclusive)
WAYPOINT_MACH_LIMITS = {
    "EJECTOR_RAMJET": (0.0, 6.0),
    "RAMJET": (1.5, 7.0),
    "SCRAMJET": (4.5, 15.0),
}

# =============================================================================
# AERODYNAMICS
# =============================================================================

# Lifting-body drag coefficient vs Mach, referenced to REFERENCE_AREA_COEFF·V^(2/3)
MACH_BREAKPOINTS = np.array([0.0, 0.8, 1.05, 1.3, 2.0, 5.0, 10.0, 25.0])
CD_VALUES = np.array([0.020, 0.020, 0.036, 0.032, 0.026, 0.020, 0.018, 0.016])
REFERENCE_AREA_COEFF = 0.6

# =============================================================================
# MASS MODEL
# =============================================================================

STRUCTURAL_DENSITY = 50.0             # kg per m^3 of internal volume
TPS_BASELINE_C = 600.0                # °C, no thermal protection penalty below
TPS_MASS_PER_M3_PER_100C = 10.0       # kg/m^3 per 100 °C above baseline
PROPELLANT_DENSITY = LOX_LH2_BULK_DENSITY

# Required thrust: max(margin·D + climb·W, min_tw·W)
THRUST_DRAG_MARGIN = 1.2
THRUST_CLIMB_FRACTION = 0.1
THRUST_MIN_TW = 0.3
# Share of the tank load assumed on board when sizing engines
SIZING_FUEL_FRACTION = 0.5

# =============================================================================
# SIMULATION
# =============================================================================

DT = 0.1                              # s
MAX_SEGMENT_TIME = 1000.0             # s
SAMPLE_INTERVAL = 1.0                 # s between trajectory samples

ALTITUDE_TOLERANCE_FT = 1000.0
SPEED_TOLERANCE_MPS = 50.0
DIVERGENCE_CHECK_TIME = 10.0          # s
DIVERGENCE_ALTITUDE_MARGIN_FT = 50000.0

DEFAULT_MAX_G = 3.0
PRINT_INTERVAL = 60.0                 # s between verbose status rows

# =============================================================================
# GUIDANCE
# =============================================================================

MAX_CLIMB_ANGLE_DEG = 45.0
MAX_DESCENT_ANGLE_DEG = 30.0
CLIMB_THRUST_SHARE = 0.5              # while accelerating
HOLD_CLIMB_THRUST_SHARE = 0.9         # once on target speed
MIN_TIME_TO_GO = 20.0                 # s
MIN_GUIDANCE_ACCEL = 0.5              # m/s^2
SPEED_HOLD_TIME_CONSTANT = 5.0        # s

# =============================================================================
# MISSION SUCCESS AND SCORING
# =============================================================================

ORBIT_ALTITUDE = 200000.0             # m
ORBIT_MACH = 24.0
ORBIT_ALTITUDE_TOLERANCE = 1000.0     # m
ORBIT_MACH_TOLERANCE = 0.25

SCORE_BASE = 10000
SCORE_FUEL_BASELINE = 500000.0        # kg
SCORE_FUEL_WEIGHT = 0.05              # points per kg saved
SCORE_TIME_BASELINE = 3000.0          # s
SCORE_TIME_WEIGHT = 5.0               # points per second saved
SCORE_THERMAL_WEIGHT = 10.0           # points per °C of margin

# =============================================================================
# SIZING OPTIMIZER
# =============================================================================

REFERENCE_LENGTH = 100.0              # m
REFERENCE_VOLUME = 3000.0             # m^3 at REFERENCE_LENGTH
MIN_LENGTH = 10.0                     # m
MAX_LENGTH = 500.0                    # m
SIZING_MAX_ITERATIONS = 20
SIZING_TOLERANCE = 0.001              # fraction of dry mass
SIZING_DERIVATIVE_STEP = 0.5          # m
SIZING_MIN_DERIVATIVE = 1e-6          # kg/m
PAYLOAD_MASS = 10000.0                # kg
DESIGN_MAX_TEMPERATURE_C = 800.0
ESTIMATOR_SAMPLES = 5
DELTA_V_MARGIN = 1.1

# =============================================================================
# NUMERICAL TOLERANCES
# =============================================================================

ZERO_TOLERANCE = 1e-10
DENSITY_FLOOR = 1e-12                 # kg/m^3, treated as vacuum below
