"""Tests for the dry mass model and propellant bookkeeping."""
import pytest

from ssto_sim import constants as C
from ssto_sim import mass
from ssto_sim.config import create_test_config
from ssto_sim.design import DEFAULT_DESIGN
from ssto_sim.flight_plan import EngineMode, Waypoint
from ssto_sim.forces import DragModel
from ssto_sim.propulsion_manager import PropulsionManager


@pytest.fixture
def waypoints():
    return (
        Waypoint.runway(),
        Waypoint.from_metric(20000.0, 3.0, EngineMode.EJECTOR_RAMJET),
        Waypoint.from_metric(40000.0, 6.0, EngineMode.RAMJET),
        Waypoint.from_metric(200000.0, 24.0, EngineMode.ROCKET),
    )


@pytest.fixture
def cfg():
    return create_test_config()


def test_fuel_capacity():
    assert mass.fuel_capacity(100.0) == pytest.approx(36000.0)
    assert mass.fuel_capacity(100.0, density=70.0) == pytest.approx(7000.0)
    with pytest.raises(ValueError):
        mass.fuel_capacity(-1.0)


def test_structural_mass():
    assert mass.structural_mass(100.0) == pytest.approx(100.0 * C.STRUCTURAL_DENSITY)


def test_thermal_protection_penalty():
    assert mass.thermal_protection_mass(100.0, 500.0) == 0.0
    assert mass.thermal_protection_mass(100.0, C.TPS_BASELINE_C) == 0.0
    assert mass.thermal_protection_mass(100.0, 800.0) == pytest.approx(2000.0)


def test_required_thrust_static():
    model = DragModel(area=50.0)
    assert mass.required_thrust(1000.0, 0.0, 0.0, model) == pytest.approx(
        C.THRUST_MIN_TW * 1000.0 * 9.8202, rel=1e-3)


def test_required_thrust_drag_dominated():
    model = DragModel(area=500.0)
    thrust = mass.required_thrust(1000.0, 0.0, 300.0, model)
    assert thrust == pytest.approx(C.THRUST_DRAG_MARGIN * model.drag(0.0, 300.0)
                                   + C.THRUST_CLIMB_FRACTION * 1000.0 * 9.8202, rel=1e-3)


def test_resolve_engine_mode(waypoints):
    manager = PropulsionManager()
    assert mass.resolve_engine_mode(waypoints[0], manager) is EngineMode.EJECTOR_RAMJET
    assert mass.resolve_engine_mode(waypoints[2], manager) is EngineMode.RAMJET


def test_mass_breakdown(waypoints, cfg):
    breakdown = mass.mass_breakdown(500.0, waypoints, DEFAULT_DESIGN, 800.0, cfg)
    assert breakdown.structure == pytest.approx(500.0 * C.STRUCTURAL_DENSITY)
    assert breakdown.thermal_protection == pytest.approx(10000.0)
    assert set(breakdown.engines) == {EngineMode.EJECTOR_RAMJET, EngineMode.RAMJET,
                                      EngineMode.ROCKET}
    assert all(m > 0.0 for m in breakdown.engines.values())
    assert all(n >= 1 for n in breakdown.engine_counts.values())
    assert breakdown.total == pytest.approx(
        breakdown.structure + breakdown.thermal_protection + breakdown.engine_total)


def test_dry_mass_matches_breakdown(waypoints, cfg):
    assert mass.dry_mass(500.0, waypoints, DEFAULT_DESIGN, 800.0, cfg) == \
        pytest.approx(mass.mass_breakdown(500.0, waypoints, DEFAULT_DESIGN, 800.0, cfg).total)


def test_dry_mass_is_pure(waypoints, cfg):
    a = mass.dry_mass(750.0, waypoints, DEFAULT_DESIGN, 700.0, cfg)
    mass.dry_mass(1500.0, waypoints, DEFAULT_DESIGN, 900.0, cfg)
    b = mass.dry_mass(750.0, waypoints, DEFAULT_DESIGN, 700.0, cfg)
    assert a == b


def test_dry_mass_increases_with_volume(waypoints, cfg):
    masses = [mass.dry_mass(v, waypoints, DEFAULT_DESIGN, 800.0, cfg)
              for v in (100.0, 500.0, 1000.0, 3000.0)]
    assert masses == sorted(masses)
    assert masses[0] < masses[-1]


def test_dry_mass_increases_with_temperature(waypoints, cfg):
    cool = mass.dry_mass(1000.0, waypoints, DEFAULT_DESIGN, 600.0, cfg)
    hot = mass.dry_mass(1000.0, waypoints, DEFAULT_DESIGN, 900.0, cfg)
    assert hot > cool


def test_negative_volume_rejected(waypoints):
    with pytest.raises(ValueError):
        mass.mass_breakdown(-1.0, waypoints)


def test_propellant_bookkeeping():
    assert mass.is_propellant_exhausted(0.0)
    assert not mass.is_propellant_exhausted(1.0)
    assert mass.get_propellant_fraction(50.0, 100.0) == pytest.approx(0.5)
    assert mass.get_propellant_fraction(150.0, 100.0) == 1.0
    assert mass.get_propellant_fraction(-5.0, 100.0) == 0.0
    assert mass.get_propellant_fraction(50.0, 0.0) == 0.0
