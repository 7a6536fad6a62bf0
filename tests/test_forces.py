"""Tests for gravity and drag."""
import pytest
import numpy as np

from ssto_sim import constants as C
from ssto_sim import forces
from ssto_sim.design import DEFAULT_DESIGN, OPTIMAL_DESIGN


def test_gravity_at_surface():
    assert forces.gravity_acceleration(0.0) == pytest.approx(C.MU_EARTH / C.R_EARTH**2)
    assert forces.gravity_acceleration(0.0) == pytest.approx(9.82, abs=0.01)


def test_gravity_inverse_square():
    g0 = forces.gravity_acceleration(0.0)
    g = forces.gravity_acceleration(C.R_EARTH)
    assert g == pytest.approx(g0 / 4.0)


def test_gravity_clamped_below_ground():
    assert forces.gravity_acceleration(-100.0) == forces.gravity_acceleration(0.0)


def test_dynamic_pressure():
    assert forces.dynamic_pressure(0.0, 100.0) == pytest.approx(6125.0, rel=1e-3)
    assert forces.dynamic_pressure(0.0, 0.0) == 0.0


def test_reference_area():
    assert forces.reference_area(1000.0, 0.6) == pytest.approx(60.0)
    with pytest.raises(ValueError):
        forces.reference_area(-1.0)


def test_drag_zero_at_rest():
    model = forces.DragModel(area=50.0)
    assert model.drag(0.0, 0.0) == 0.0


def test_drag_coefficient_table():
    model = forces.DragModel(area=50.0, drag_multiplier=1.5)
    assert model.drag_coefficient(0.4) == pytest.approx(0.020 * 1.5)
    assert model.drag_coefficient(30.0) == pytest.approx(C.CD_VALUES[-1] * 1.5)
    assert model.drag_coefficient(1.05) == pytest.approx(C.CD_VALUES.max() * 1.5)


def test_drag_force():
    model = forces.DragModel(area=50.0)
    q = forces.dynamic_pressure(0.0, 100.0)
    expected = q * model.drag_coefficient(100.0 / 340.294) * 50.0
    assert model.drag(0.0, 100.0) == pytest.approx(expected, rel=1e-4)


def test_drag_for_vehicle():
    model = forces.DragModel.for_vehicle(1000.0, DEFAULT_DESIGN)
    assert model.area == pytest.approx(C.REFERENCE_AREA_COEFF * 100.0)
    assert model.drag_multiplier == pytest.approx(DEFAULT_DESIGN.drag_multiplier())
    optimal = forces.DragModel.for_vehicle(1000.0, OPTIMAL_DESIGN)
    assert optimal.drag(10000.0, 600.0) < model.drag(10000.0, 600.0)


def test_negative_area_rejected():
    with pytest.raises(ValueError):
        forces.DragModel(area=-1.0)


def test_drag_vanishes_in_vacuum():
    model = forces.DragModel(area=50.0)
    assert model.drag(400000.0, 7000.0) < 1e-3 * model.drag(50000.0, 7000.0)
