"""
SSTO Ascent Simulation - Propulsion System Variants

Every engine exposes the same capability set so the propulsion manager can
treat them uniformly:

- envelope / can_operate(altitude_ft, mach)
- thrust(altitude_ft, mach)                  N
- fuel_consumption(altitude_ft, mach)        kg/s of propellant (all variants)
- volumetric_fuel_consumption(...)           L/s at the engine's propellant density
- efficiency(altitude_ft, mach)              [0, 1], Isp normalised by ISP_REFERENCE

Engines never raise for flight conditions. Outside the envelope, or when
the cycle cannot close, they return zero thrust and zero fuel flow.

Air-breathing cycles (ramjet, scramjet, ejector-ramjet duct) use an ideal
Brayton cycle on the US-76 ambient state:
    inlet compression -> heat addition capped at T0_max -> nozzle expansion
    f  = Cp (T03 - T02) / (eta_b H)
    F/mdot_air = (1 + f) Ve - Va
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from . import constants as C
from .atmosphere import compute_atmosphere_properties
from .config import SimulationConfig, create_default_config
from .flight_plan import EngineMode


class OperatingEnvelope(NamedTuple):
    """Inclusive Mach and altitude (ft) ranges."""
    mach_range: Tuple[float, float]
    altitude_range_ft: Tuple[float, float]

    def contains(self, altitude_ft: float, mach: float) -> bool:
        return (self.mach_range[0] <= mach <= self.mach_range[1]
                and self.altitude_range_ft[0] <= altitude_ft <= self.altitude_range_ft[1])


class EnginePerformance(NamedTuple):
    """Thrust (N) and propellant mass flow (kg/s) at one flight condition."""
    thrust: float
    fuel_flow: float


NO_THRUST = EnginePerformance(0.0, 0.0)


class CyclePoint(NamedTuple):
    """Per-unit-airflow Brayton cycle result."""
    specific_thrust: float   # N per kg/s of air
    fuel_air_ratio: float


def activation(mach: float, centre: float, width: float) -> float:
    """Smooth 0 -> 1 sigmoid gate on Mach number."""
    x = float(np.clip((mach - centre) / width, -60.0, 60.0))
    return float(1.0 / (1.0 + np.exp(-x)))


@dataclass(frozen=True)
class BraytonCycle:
    """
    Ideal air-breathing cycle.

    With ``inlet_efficiency`` set, the inlet is efficiency-discounted
    (ramjet style): both the temperature rise and the pressure gain are
    scaled by eta_inlet. Without it the compression is adiabatic and the
    total pressure is multiplied by the recovery passed to ``evaluate``.
    """
    t0_max: float
    burner_efficiency: float
    nozzle_efficiency: float
    heat_addition: float
    inlet_efficiency: Optional[float] = None
    burner_pressure_ratio: float = 1.0
    heating_value: float = C.H2_HEATING_VALUE

    def evaluate(self, altitude_m: float, mach: float,
                 inlet_recovery: float = 1.0) -> Optional[CyclePoint]:
        """
        Solve the cycle; None when it cannot produce thrust.
        """
        atm = compute_atmosphere_properties(altitude_m)
        t_amb = atm.temperature
        p_amb = atm.pressure
        va = mach * atm.speed_of_sound
        if va <= 0.0:
            return None

        exponent = C.GAMMA / (C.GAMMA - 1.0)
        t02_ideal = t_amb * (1.0 + 0.5 * (C.GAMMA - 1.0) * mach * mach)
        pr_ideal = (t02_ideal / t_amb) ** exponent

        if self.inlet_efficiency is not None:
            t02 = t_amb + self.inlet_efficiency * (t02_ideal - t_amb)
            p02 = p_amb * (1.0 + self.inlet_efficiency * (pr_ideal - 1.0))
        else:
            t02 = t02_ideal
            p02 = p_amb * pr_ideal * inlet_recovery

        # Fails closed: the inlet alone already reaches the combustor ceiling
        if t02 >= self.t0_max:
            return None

        t03 = min(self.t0_max, t02 + self.heat_addition)
        f = C.CP_AIR * (t03 - t02) / (self.burner_efficiency * self.heating_value)
        p03 = p02 * self.burner_pressure_ratio
        if p03 <= p_amb:
            return None

        expansion = 1.0 - (p_amb / p03) ** (1.0 / exponent)
        ve = np.sqrt(2.0 * self.nozzle_efficiency * C.CP_AIR * t03 * expansion)
        specific_thrust = (1.0 + f) * ve - va
        if not np.isfinite(specific_thrust) or specific_thrust <= 0.0:
            return None
        return CyclePoint(float(specific_thrust), float(f))


class PropulsionSystem(ABC):
    """Common engine interface."""

    name = "engine"
    propellant_density = C.SLUSH_H2_DENSITY   # kg/m^3
    thrust_to_weight = 10.0
    unit_thrust = 1.0e6                         # N per installed unit

    def __init__(self, envelope: OperatingEnvelope):
        self.envelope = envelope

    def can_operate(self, altitude_ft: float, mach: float) -> bool:
        return self.envelope.contains(altitude_ft, mach)

    @abstractmethod
    def _performance(self, altitude_ft: float, mach: float) -> EnginePerformance:
        """Raw performance inside the envelope."""

    def performance(self, altitude_ft: float, mach: float) -> EnginePerformance:
        """Thrust and fuel flow, zero outside the envelope or when the cycle closes."""
        if not self.can_operate(altitude_ft, mach):
            return NO_THRUST
        perf = self._performance(altitude_ft, mach)
        if not (np.isfinite(perf.thrust) and np.isfinite(perf.fuel_flow)) or perf.thrust <= 0.0:
            return NO_THRUST
        return EnginePerformance(float(perf.thrust), max(0.0, float(perf.fuel_flow)))

    def thrust(self, altitude_ft: float, mach: float) -> float:
        """Thrust (N)."""
        return self.performance(altitude_ft, mach).thrust

    def fuel_consumption(self, altitude_ft: float, mach: float) -> float:
        """Propellant mass flow (kg/s)."""
        return self.performance(altitude_ft, mach).fuel_flow

    def volumetric_fuel_consumption(self, altitude_ft: float, mach: float) -> float:
        """Propellant volume flow (L/s)."""
        return (self.fuel_consumption(altitude_ft, mach) / self.propellant_density
                * C.LITERS_PER_M3)

    def specific_impulse(self, altitude_ft: float, mach: float) -> float:
        """Effective Isp (s), 0 when not producing thrust."""
        perf = self.performance(altitude_ft, mach)
        if perf.fuel_flow <= 0.0:
            return 0.0
        return perf.thrust / (perf.fuel_flow * C.G0)

    def efficiency(self, altitude_ft: float, mach: float) -> float:
        """Thrust per unit propellant flow, normalised to [0, 1]."""
        return float(np.clip(self.specific_impulse(altitude_ft, mach) / C.ISP_REFERENCE,
                             0.0, 1.0))

    def engine_mass(self, required_thrust: float) -> float:
        """Installed mass (kg) to deliver ``required_thrust``."""
        return max(0.0, required_thrust) / (self.thrust_to_weight * C.G0)

    def engine_count(self, required_thrust: float) -> int:
        """Whole units needed for ``required_thrust`` (at least one)."""
        return max(1, int(np.ceil(max(0.0, required_thrust) / self.unit_thrust)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class JetEngine(PropulsionSystem):
    """
    Afterburning turbojet cluster referenced to the J58.

    Empirical curve: ram recovery (1 + 0.2 M^2), density lapse
    exp(-h/H)^0.7 and a linear thrust collapse above Mach 3.
    TSFC grows with Mach.
    """

    name = "J58 turbojet"
    propellant_density = C.JET_FUEL_DENSITY
    thrust_to_weight = C.JET_THRUST_TO_WEIGHT
    unit_thrust = C.JET_THRUST_PER_ENGINE

    def __init__(self, engine_count: int = C.JET_ENGINE_COUNT):
        super().__init__(OperatingEnvelope(C.JET_MACH_RANGE, C.JET_ALTITUDE_RANGE_FT))
        self.count = engine_count

    def _performance(self, altitude_ft: float, mach: float) -> EnginePerformance:
        altitude_m = altitude_ft * C.FT_TO_M
        density_factor = np.exp(-altitude_m / C.JET_DENSITY_SCALE_HEIGHT) ** C.JET_DENSITY_EXPONENT
        ram_factor = 1.0 + 0.2 * mach * mach
        lapse = 1.0
        if mach > C.JET_MACH_CEILING:
            lapse = max(0.0, 1.0 - (mach - C.JET_MACH_CEILING) * 2.0)

        thrust = self.count * C.JET_THRUST_PER_ENGINE * density_factor * ram_factor * lapse
        tsfc = C.JET_TSFC * (1.0 + 0.3 * mach)
        return EnginePerformance(thrust, tsfc * thrust)


class RamjetEngine(PropulsionSystem):
    """Hydrogen ramjet, efficiency-discounted inlet, sigmoid takeover near Mach 2.5."""

    name = "ramjet"
    thrust_to_weight = C.RAMJET_THRUST_TO_WEIGHT
    unit_thrust = 250000.0

    cycle = BraytonCycle(
        t0_max=C.RAMJET_T0_MAX,
        burner_efficiency=C.RAMJET_ETA_BURNER,
        nozzle_efficiency=C.RAMJET_ETA_NOZZLE,
        heat_addition=C.RAMJET_HEAT_ADDITION,
        inlet_efficiency=C.RAMJET_ETA_INLET,
    )

    def __init__(self, capture_area: float = C.RAMJET_CAPTURE_AREA):
        super().__init__(OperatingEnvelope(C.RAMJET_MACH_RANGE, C.RAMJET_ALTITUDE_RANGE_FT))
        self.capture_area = capture_area

    def _performance(self, altitude_ft: float, mach: float) -> EnginePerformance:
        altitude_m = altitude_ft * C.FT_TO_M
        point = self.cycle.evaluate(altitude_m, mach)
        if point is None:
            return NO_THRUST
        gate = activation(mach, C.RAMJET_ACTIVATION_MACH, C.RAMJET_ACTIVATION_WIDTH)
        mdot_air = _capture_mass_flow(altitude_m, mach, self.capture_area) * gate
        return EnginePerformance(point.specific_thrust * mdot_air,
                                 point.fuel_air_ratio * mdot_air)


def scramjet_inlet_recovery(mach: float) -> float:
    """Total pressure recovery of the scramjet inlet, peaking near Mach 7."""
    x = (mach - C.SCRAMJET_RECOVERY_PEAK_MACH) / C.SCRAMJET_RECOVERY_WIDTH
    recovery = C.SCRAMJET_RECOVERY_PEAK * np.exp(-x * x)
    return float(max(C.SCRAMJET_RECOVERY_MIN, recovery))


class ScramjetEngine(PropulsionSystem):
    """
    Supersonic-combustion ramjet with a hotter combustor ceiling.

    The envelope runs to Mach 15, but the cycle fails closed once the inlet
    stagnation temperature reaches SCRAMJET_T0_MAX. With ambient 217-271 K
    that happens between about Mach 8.8 and Mach 10, so thrust is zero
    above roughly Mach 9 whatever the waypoint target.
    """

    name = "scramjet"
    thrust_to_weight = C.SCRAMJET_THRUST_TO_WEIGHT
    unit_thrust = 250000.0

    cycle = BraytonCycle(
        t0_max=C.SCRAMJET_T0_MAX,
        burner_efficiency=C.SCRAMJET_ETA_BURNER,
        nozzle_efficiency=C.SCRAMJET_ETA_NOZZLE,
        heat_addition=C.SCRAMJET_HEAT_ADDITION,
        burner_pressure_ratio=C.SCRAMJET_SIGMA_BURNER,
    )

    def __init__(self, capture_area: float = C.SCRAMJET_CAPTURE_AREA):
        super().__init__(OperatingEnvelope(C.SCRAMJET_MACH_RANGE, C.SCRAMJET_ALTITUDE_RANGE_FT))
        self.capture_area = capture_area

    def _performance(self, altitude_ft: float, mach: float) -> EnginePerformance:
        altitude_m = altitude_ft * C.FT_TO_M
        point = self.cycle.evaluate(altitude_m, mach, scramjet_inlet_recovery(mach))
        if point is None:
            return NO_THRUST
        gate = activation(mach, C.SCRAMJET_ACTIVATION_MACH, C.SCRAMJET_ACTIVATION_WIDTH)
        mdot_air = _capture_mass_flow(altitude_m, mach, self.capture_area) * gate
        return EnginePerformance(point.specific_thrust * mdot_air,
                                 point.fuel_air_ratio * mdot_air)


class EjectorRamjetEngine(PropulsionSystem):
    """
    Combined low-speed engine: an air-augmented primary rocket that hands
    over to its own ramjet duct as Mach rises.

    Ejector thrust = primary * (1 + augmentation * sigma), faded out by the
    same sigmoid that fades the ramjet duct in.
    """

    name = "ejector-ramjet"
    thrust_to_weight = C.EJECTOR_THRUST_TO_WEIGHT
    unit_thrust = C.EJECTOR_PRIMARY_THRUST

    cycle = BraytonCycle(
        t0_max=C.EJECTOR_T0_MAX,
        burner_efficiency=C.EJECTOR_ETA_BURNER,
        nozzle_efficiency=C.EJECTOR_ETA_NOZZLE,
        heat_addition=C.EJECTOR_HEAT_ADDITION,
        inlet_efficiency=C.EJECTOR_ETA_INLET,
    )

    def __init__(self, module_count: int = C.EJECTOR_MODULE_COUNT):
        super().__init__(OperatingEnvelope(C.EJECTOR_MACH_RANGE, C.EJECTOR_ALTITUDE_RANGE_FT))
        self.module_count = module_count

    def _performance(self, altitude_ft: float, mach: float) -> EnginePerformance:
        altitude_m = altitude_ft * C.FT_TO_M
        ram_weight = activation(mach, C.EJECTOR_RAM_MACH, C.EJECTOR_RAM_WIDTH)

        atm = compute_atmosphere_properties(altitude_m)
        sigma = atm.density / C.ATM_RHO0
        primary = C.EJECTOR_PRIMARY_THRUST * self.module_count * (1.0 - ram_weight)
        thrust = primary * (1.0 + C.EJECTOR_AUGMENTATION * sigma)
        fuel = primary / (C.EJECTOR_PRIMARY_ISP * C.G0)

        point = self.cycle.evaluate(altitude_m, mach)
        if point is not None:
            area = C.EJECTOR_CAPTURE_AREA * self.module_count
            mdot_air = _capture_mass_flow(altitude_m, mach, area) * ram_weight
            thrust += point.specific_thrust * mdot_air
            fuel += point.fuel_air_ratio * mdot_air
        return EnginePerformance(thrust, fuel)


class RocketEngine(PropulsionSystem):
    """
    LOX/LH2 rocket cluster. Isp interpolates between sea level and vacuum
    with the ambient pressure ratio; mass flow is fixed by the sea-level
    rating, so thrust grows with Isp.
    """

    name = "LOX/LH2 rocket"
    propellant_density = C.LOX_LH2_BULK_DENSITY
    thrust_to_weight = C.ROCKET_THRUST_TO_WEIGHT
    unit_thrust = C.ROCKET_THRUST_SL

    def __init__(self, engine_count: int = C.ROCKET_ENGINE_COUNT,
                 mixture_ratio: float = C.ROCKET_MIXTURE_RATIO):
        super().__init__(OperatingEnvelope(C.ROCKET_MACH_RANGE, C.ROCKET_ALTITUDE_RANGE_FT))
        self.count = engine_count
        self.mixture_ratio = mixture_ratio

    def isp_at(self, altitude_ft: float) -> float:
        """Isp (s) at altitude, independent of the envelope check."""
        delta = compute_atmosphere_properties(altitude_ft * C.FT_TO_M).pressure / C.ATM_P0
        delta = min(1.0, max(0.0, delta))
        return C.ROCKET_ISP_VAC - (C.ROCKET_ISP_VAC - C.ROCKET_ISP_SL) * delta

    def mass_flow(self) -> float:
        """Total propellant mass flow at full throttle (kg/s)."""
        return self.count * C.ROCKET_THRUST_SL / (C.ROCKET_ISP_SL * C.G0)

    def _performance(self, altitude_ft: float, mach: float) -> EnginePerformance:
        mdot = self.mass_flow()
        return EnginePerformance(mdot * self.isp_at(altitude_ft) * C.G0, mdot)

    def propellant_split(self, propellant_mass: float) -> Tuple[float, float]:
        """(oxidizer, fuel) for a propellant mass or mass flow."""
        fuel = propellant_mass / (self.mixture_ratio + 1.0)
        return propellant_mass - fuel, fuel


def _capture_mass_flow(altitude_m: float, mach: float, area: float) -> float:
    """Captured air mass flow rho * V * A (kg/s)."""
    atm = compute_atmosphere_properties(altitude_m)
    return atm.density * mach * atm.speed_of_sound * area


def create_low_speed_engine(kind: str = "ejector_ramjet", count: Optional[int] = None) -> PropulsionSystem:
    """Engine filling the low-speed slot: 'ejector_ramjet' or 'jet'."""
    if kind == "jet":
        return JetEngine(engine_count=count or C.JET_ENGINE_COUNT)
    if kind == "ejector_ramjet":
        return EjectorRamjetEngine(module_count=count or C.EJECTOR_MODULE_COUNT)
    raise ValueError(f"Unknown low-speed engine '{kind}' (expected 'ejector_ramjet' or 'jet')")


def create_engines(config: SimulationConfig = None) -> List[Tuple[EngineMode, PropulsionSystem]]:
    """
    Fresh engine set in the fixed selection order.

    Each call builds new instances so concurrent simulations never share one.
    """
    config = config or create_default_config()
    return [
        (EngineMode.EJECTOR_RAMJET,
         create_low_speed_engine(config.low_speed_engine, config.low_speed_engine_count)),
        (EngineMode.RAMJET, RamjetEngine(capture_area=config.ramjet_capture_area)),
        (EngineMode.SCRAMJET, ScramjetEngine(capture_area=config.scramjet_capture_area)),
        (EngineMode.ROCKET, RocketEngine(engine_count=config.rocket_engine_count)),
    ]
