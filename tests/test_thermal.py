"""Tests for the leading-edge thermal model."""
import pytest

from ssto_sim import thermal
from ssto_sim import constants as C
from ssto_sim.design import PlaneDesign, DEFAULT_DESIGN, OPTIMAL_DESIGN


def test_recovery_temperature_at_rest_is_ambient():
    assert thermal.recovery_temperature(0.0, 0.0) == pytest.approx(15.0)


def test_recovery_temperature_increases_with_velocity():
    temps = [thermal.recovery_temperature(30000.0, v) for v in (500.0, 1000.0, 2000.0, 4000.0)]
    assert temps == sorted(temps)
    assert temps[0] < temps[-1]


def test_recovery_temperature_uses_heating_multiplier():
    sharp = PlaneDesign(sweep_angle=130.0)
    blunt = PlaneDesign(sweep_angle=60.0)
    assert thermal.recovery_temperature(30000.0, 2000.0, sharp) > \
        thermal.recovery_temperature(30000.0, 2000.0, blunt)


def test_max_temperature_default_design():
    assert thermal.max_temperature(DEFAULT_DESIGN) == pytest.approx(582.0)


def test_max_temperature_optimal_design():
    assert thermal.max_temperature(OPTIMAL_DESIGN) == pytest.approx(648.0)


def test_sustained_below_max():
    assert thermal.sustained_temperature(DEFAULT_DESIGN) == pytest.approx(550.0 * 0.97)
    assert thermal.sustained_temperature() < thermal.max_temperature()


def test_check_thermal_limits():
    cool = thermal.check_thermal_limits(0.0, 0.0)
    assert not cool.exceeded
    assert cool.margin == pytest.approx(thermal.max_temperature() - cool.temperature)

    hot = thermal.check_thermal_limits(30000.0, 5000.0)
    assert hot.exceeded
    assert hot.margin < 0.0


def test_sea_level_mach_nine_exceeds_default_limit():
    check = thermal.check_thermal_limits(0.0, 3000.0, DEFAULT_DESIGN)
    assert check.exceeded
    assert check.temperature > C.TPS_BASELINE_C
    assert check.margin < 0.0


def test_max_safe_velocity_brackets_the_limit():
    limit = thermal.max_temperature()
    v_safe = thermal.max_safe_velocity(40000.0)
    assert 0.0 < v_safe < C.MAX_SAFE_VELOCITY_UPPER
    assert thermal.recovery_temperature(40000.0, v_safe) < limit
    assert thermal.recovery_temperature(40000.0, v_safe + 1.0) >= limit


def test_max_safe_velocity_higher_for_better_design():
    assert thermal.max_safe_velocity(40000.0, OPTIMAL_DESIGN) > \
        thermal.max_safe_velocity(40000.0, DEFAULT_DESIGN)


@pytest.mark.parametrize("temperature, regime", [
    (50.0, thermal.ThermalRegime.COOL),
    (200.0, thermal.ThermalRegime.WARM),
    (400.0, thermal.ThermalRegime.HOT),
    (560.0, thermal.ThermalRegime.CRITICAL),
    (700.0, thermal.ThermalRegime.OVERHEAT),
])
def test_thermal_regime(temperature, regime):
    assert thermal.thermal_regime(temperature, DEFAULT_DESIGN) is regime


def test_thermal_stress_factor():
    assert thermal.thermal_stress_factor(291.0, DEFAULT_DESIGN) == pytest.approx(0.5)


def test_material_limit():
    assert thermal.material_limit("Carbon-Carbon") == 1600.0
    assert thermal.material_limit("titanium") == 500.0
    assert thermal.material_limit("unobtainium") == C.BASE_MAX_TEMPERATURE_C
