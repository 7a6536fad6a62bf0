"""Tests for the propulsion manager state machine."""
import pytest

from ssto_sim import constants as C
from ssto_sim.config import create_test_config
from ssto_sim.engines import (
    EnginePerformance, OperatingEnvelope, PropulsionSystem, RamjetEngine, RocketEngine,
)
from ssto_sim.flight_plan import EngineMode
from ssto_sim.propulsion_manager import ControlState, PropulsionManager


class FixedEngine(PropulsionSystem):
    """Engine with a constant Isp everywhere."""

    def __init__(self, isp: float):
        super().__init__(OperatingEnvelope((0.0, 100.0), (0.0, 1.0e7)))
        self.isp = isp

    def _performance(self, altitude_ft, mach):
        return EnginePerformance(self.isp * C.G0, 1.0)


@pytest.fixture
def manager():
    return PropulsionManager(config=create_test_config())


def test_starts_in_auto_on_fallback(manager):
    assert manager.is_auto
    assert manager.control_state is ControlState.AUTO
    assert manager.current_mode is EngineMode.ROCKET
    assert manager.modes == (EngineMode.EJECTOR_RAMJET, EngineMode.RAMJET,
                             EngineMode.SCRAMJET, EngineMode.ROCKET)


def test_auto_picks_ejector_on_runway(manager):
    assert manager.update(0.0, 0.0) is EngineMode.EJECTOR_RAMJET
    assert manager.current_mode is EngineMode.EJECTOR_RAMJET
    assert manager.get_thrust(0.0, 0.0) > 0.0


def test_auto_picks_rocket_above_air_breathers(manager):
    assert manager.update(300000.0, 20.0) is EngineMode.ROCKET


def test_auto_picks_air_breather_in_ramjet_regime(manager):
    mode = manager.update(60000.0, 4.0)
    assert mode in (EngineMode.EJECTOR_RAMJET, EngineMode.RAMJET)
    assert manager.current_engine.efficiency(60000.0, 4.0) > \
        manager.engine(EngineMode.ROCKET).efficiency(60000.0, 4.0)


def test_selection_is_maximum_efficiency(manager):
    for altitude_ft, mach in [(0.0, 0.5), (40000.0, 2.0), (90000.0, 6.0), (150000.0, 9.0)]:
        best = manager.select_best(altitude_ft, mach)
        effs = dict(manager.efficiencies(altitude_ft, mach))
        assert effs[best] == max(effs.values())


def test_fallback_when_no_engine_operates(manager):
    assert manager.select_best(0.0, 50.0) is EngineMode.ROCKET


def test_fallback_outside_registry():
    manager = PropulsionManager([(EngineMode.RAMJET, RamjetEngine())])
    assert manager.fallback_mode is EngineMode.RAMJET
    assert manager.select_best(0.0, 0.0) is EngineMode.RAMJET


def test_ties_go_to_first_registered():
    manager = PropulsionManager([
        (EngineMode.SCRAMJET, FixedEngine(2000.0)),
        (EngineMode.RAMJET, FixedEngine(2000.0)),
    ])
    assert manager.select_best(10000.0, 3.0) is EngineMode.SCRAMJET


def test_higher_isp_wins_regardless_of_order():
    manager = PropulsionManager([
        (EngineMode.SCRAMJET, FixedEngine(1000.0)),
        (EngineMode.RAMJET, FixedEngine(3000.0)),
    ])
    assert manager.select_best(10000.0, 3.0) is EngineMode.RAMJET


def test_manual_override_is_respected(manager):
    manager.set_manual_engine(EngineMode.RAMJET)
    assert not manager.is_auto
    assert manager.update(0.0, 0.0) is EngineMode.RAMJET
    # Manual engines are kept even where they cannot operate
    assert manager.get_thrust(0.0, 0.0) == 0.0
    assert manager.get_fuel_consumption(0.0, 0.0) == 0.0


def test_set_manual_auto_reenables_auto(manager):
    manager.set_manual_engine(EngineMode.RAMJET)
    manager.set_manual_engine(EngineMode.AUTO)
    assert manager.is_auto
    assert manager.update(0.0, 0.0) is EngineMode.EJECTOR_RAMJET


def test_enable_auto_mode(manager):
    manager.set_manual_engine(EngineMode.SCRAMJET)
    manager.enable_auto_mode()
    assert manager.is_auto
    assert manager.update(300000.0, 20.0) is EngineMode.ROCKET


def test_manual_unknown_engine_raises():
    manager = PropulsionManager([(EngineMode.ROCKET, RocketEngine())])
    with pytest.raises(KeyError):
        manager.set_manual_engine(EngineMode.RAMJET)
    with pytest.raises(KeyError):
        manager.engine(EngineMode.AUTO)


def test_performance_delegates_to_current_engine(manager):
    manager.set_manual_engine(EngineMode.ROCKET)
    rocket = manager.engine(EngineMode.ROCKET)
    assert manager.get_performance(0.0, 0.0) == rocket.performance(0.0, 0.0)


@pytest.mark.parametrize("registry", [
    [],
    [(EngineMode.AUTO, RocketEngine())],
    [(EngineMode.ROCKET, RocketEngine()), (EngineMode.ROCKET, RocketEngine())],
])
def test_invalid_registry_rejected(registry):
    with pytest.raises(ValueError):
        PropulsionManager(registry)


def test_status(manager):
    assert manager.status() == "Auto: Rocket"
    manager.set_manual_engine(EngineMode.SCRAMJET)
    assert manager.status() == "Manual: Scramjet"


def test_separate_managers_do_not_share_engines():
    a = PropulsionManager()
    b = PropulsionManager()
    assert a.engine(EngineMode.ROCKET) is not b.engine(EngineMode.ROCKET)
