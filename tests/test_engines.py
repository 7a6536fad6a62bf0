"""Tests for the propulsion system variants."""
import pytest
import numpy as np

from ssto_sim import constants as C
from ssto_sim import engines
from ssto_sim.config import create_test_config
from ssto_sim.engines import (
    BraytonCycle, EjectorRamjetEngine, JetEngine, RamjetEngine, RocketEngine,
    ScramjetEngine, NO_THRUST,
)
from ssto_sim.flight_plan import EngineMode


ALL_ENGINES = [JetEngine, EjectorRamjetEngine, RamjetEngine, ScramjetEngine, RocketEngine]


# =============================================================================
# COMMON CONTRACT
# =============================================================================

@pytest.mark.parametrize("engine_cls", ALL_ENGINES)
def test_outside_envelope_gives_zero(engine_cls):
    engine = engine_cls()
    lo_mach, hi_mach = engine.envelope.mach_range
    assert not engine.can_operate(10000.0, hi_mach + 1.0)
    assert engine.performance(10000.0, hi_mach + 1.0) == NO_THRUST
    assert engine.thrust(10000.0, hi_mach + 1.0) == 0.0
    assert engine.fuel_consumption(10000.0, hi_mach + 1.0) == 0.0
    assert engine.efficiency(10000.0, hi_mach + 1.0) == 0.0


@pytest.mark.parametrize("engine_cls", ALL_ENGINES)
def test_efficiency_bounded(engine_cls):
    engine = engine_cls()
    for altitude_ft in np.linspace(0.0, 300000.0, 13):
        for mach in np.linspace(0.0, 25.0, 26):
            eff = engine.efficiency(altitude_ft, mach)
            assert 0.0 <= eff <= 1.0
            perf = engine.performance(altitude_ft, mach)
            assert perf.thrust >= 0.0
            assert perf.fuel_flow >= 0.0


@pytest.mark.parametrize("engine_cls", ALL_ENGINES)
def test_engine_mass_scales_with_thrust(engine_cls):
    engine = engine_cls()
    assert engine.engine_mass(0.0) == 0.0
    assert engine.engine_mass(2.0e6) == pytest.approx(2.0 * engine.engine_mass(1.0e6))
    assert engine.engine_mass(1.0e6) == pytest.approx(1.0e6 / (engine.thrust_to_weight * C.G0))


def test_engine_count_rounds_up():
    rocket = RocketEngine()
    assert rocket.engine_count(0.0) == 1
    assert rocket.engine_count(C.ROCKET_THRUST_SL * 1.5) == 2
    assert rocket.engine_count(C.ROCKET_THRUST_SL * 2.9) == 3


def test_activation_midpoint():
    assert engines.activation(2.5, 2.5, 0.5) == pytest.approx(0.5)
    assert engines.activation(100.0, 2.5, 0.5) == pytest.approx(1.0)
    assert engines.activation(-100.0, 2.5, 0.5) == pytest.approx(0.0)


# =============================================================================
# ROCKET
# =============================================================================

def test_rocket_sea_level_thrust():
    rocket = RocketEngine()
    assert rocket.thrust(0.0, 0.0) == pytest.approx(3 * C.ROCKET_THRUST_SL)
    assert rocket.specific_impulse(0.0, 0.0) == pytest.approx(C.ROCKET_ISP_SL)


def test_rocket_isp_rises_to_vacuum():
    rocket = RocketEngine()
    assert rocket.isp_at(0.0) == pytest.approx(C.ROCKET_ISP_SL)
    assert rocket.isp_at(1.0e6) == pytest.approx(C.ROCKET_ISP_VAC, abs=0.01)
    assert rocket.thrust(200000.0, 10.0) > rocket.thrust(0.0, 0.0)


def test_rocket_fuel_flow_constant():
    rocket = RocketEngine()
    mdot = 3 * C.ROCKET_THRUST_SL / (C.ROCKET_ISP_SL * C.G0)
    assert rocket.fuel_consumption(0.0, 0.0) == pytest.approx(mdot)
    assert rocket.fuel_consumption(300000.0, 20.0) == pytest.approx(mdot)


def test_rocket_volumetric_consumption():
    rocket = RocketEngine()
    expected = rocket.fuel_consumption(0.0, 0.0) / C.LOX_LH2_BULK_DENSITY * 1000.0
    assert rocket.volumetric_fuel_consumption(0.0, 0.0) == pytest.approx(expected)


def test_rocket_propellant_split():
    oxidizer, fuel = RocketEngine().propellant_split(7000.0)
    assert oxidizer == pytest.approx(6000.0)
    assert fuel == pytest.approx(1000.0)


# =============================================================================
# AIR-BREATHERS
# =============================================================================

def test_brayton_cycle_needs_airspeed():
    assert RamjetEngine.cycle.evaluate(10000.0, 0.0) is None


def test_brayton_cycle_fails_closed_above_combustor_limit():
    cycle = BraytonCycle(t0_max=1000.0, burner_efficiency=0.9, nozzle_efficiency=0.9,
                         heat_addition=500.0, inlet_efficiency=0.9)
    assert cycle.evaluate(20000.0, 8.0) is None


def test_ramjet_needs_altitude_and_speed():
    ramjet = RamjetEngine()
    assert ramjet.thrust(0.0, 0.0) == 0.0
    assert ramjet.thrust(10000.0, 4.0) == 0.0


def test_ramjet_in_design_regime():
    ramjet = RamjetEngine()
    perf = ramjet.performance(60000.0, 4.0)
    assert perf.thrust > 0.0
    assert perf.fuel_flow > 0.0
    assert ramjet.specific_impulse(60000.0, 4.0) > RocketEngine().specific_impulse(60000.0, 4.0)


def test_ramjet_thrust_scales_with_capture_area():
    small = RamjetEngine(capture_area=6.0).thrust(60000.0, 4.0)
    large = RamjetEngine(capture_area=12.0).thrust(60000.0, 4.0)
    assert large == pytest.approx(2.0 * small)


def test_scramjet_fails_closed_at_high_mach():
    scramjet = ScramjetEngine()
    assert scramjet.can_operate(200000.0, 14.0)
    assert scramjet.thrust(200000.0, 14.0) == 0.0
    assert scramjet.fuel_consumption(200000.0, 14.0) == 0.0


def test_scramjet_usable_ceiling_near_mach_nine():
    scramjet = ScramjetEngine()
    altitude_ft = 25000.0 * C.M_TO_FT
    assert scramjet.thrust(altitude_ft, 7.0) > 0.0
    assert scramjet.can_operate(altitude_ft, 10.0)
    assert scramjet.thrust(altitude_ft, 10.0) == 0.0


def test_scramjet_inlet_recovery():
    assert engines.scramjet_inlet_recovery(C.SCRAMJET_RECOVERY_PEAK_MACH) == \
        pytest.approx(C.SCRAMJET_RECOVERY_PEAK)
    assert engines.scramjet_inlet_recovery(40.0) == C.SCRAMJET_RECOVERY_MIN


def test_ejector_static_thrust_is_augmented_rocket():
    ejector = EjectorRamjetEngine()
    perf = ejector.performance(0.0, 0.0)
    primary = C.EJECTOR_PRIMARY_THRUST * C.EJECTOR_MODULE_COUNT
    assert perf.thrust == pytest.approx(primary * (1.0 + C.EJECTOR_AUGMENTATION), rel=0.01)
    assert ejector.specific_impulse(0.0, 0.0) == pytest.approx(
        C.EJECTOR_PRIMARY_ISP * (1.0 + C.EJECTOR_AUGMENTATION), rel=1e-3)


def test_jet_static_thrust():
    jet = JetEngine()
    assert jet.thrust(0.0, 0.0) == pytest.approx(C.JET_ENGINE_COUNT * C.JET_THRUST_PER_ENGINE)


# =============================================================================
# FACTORIES
# =============================================================================

def test_create_engines_order():
    registry = engines.create_engines(create_test_config())
    modes = [mode for mode, _ in registry]
    assert modes == [EngineMode.EJECTOR_RAMJET, EngineMode.RAMJET,
                     EngineMode.SCRAMJET, EngineMode.ROCKET]


def test_create_engines_builds_fresh_instances():
    a = engines.create_engines()
    b = engines.create_engines()
    for (_, engine_a), (_, engine_b) in zip(a, b):
        assert engine_a is not engine_b


def test_create_engines_low_speed_jet():
    registry = engines.create_engines(create_test_config(low_speed_engine="jet",
                                                         low_speed_engine_count=4))
    low_speed = registry[0][1]
    assert isinstance(low_speed, JetEngine)
    assert low_speed.count == 4


def test_create_low_speed_engine_unknown_kind():
    with pytest.raises(ValueError):
        engines.create_low_speed_engine("turboprop")
