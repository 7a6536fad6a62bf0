"""Tests for segment guidance commands."""
import pytest
import numpy as np

from ssto_sim import constants as C
from ssto_sim.config import create_test_config
from ssto_sim.guidance import compute_guidance
from ssto_sim.state import State

G = 9.8


@pytest.fixture
def cfg():
    return create_test_config()


def _state(**kwargs):
    values = dict(altitude=10000.0, velocity=600.0, propellant=50000.0, dry_mass=50000.0)
    values.update(kwargs)
    return State(**values)


def test_commands_within_limits(cfg):
    max_climb = np.radians(cfg.max_climb_angle_deg)
    max_descent = np.radians(cfg.max_descent_angle_deg)
    for target_alt in (0.0, 10000.0, 50000.0):
        for target_v in (100.0, 600.0, 3000.0):
            cmd = compute_guidance(_state(), target_alt, target_v, 2.0e6, 1.0e5, G, cfg)
            assert 0.0 <= cmd.throttle <= 1.0
            assert -max_descent - 1e-9 <= cmd.flight_path_angle <= max_climb + 1e-9
            assert cmd.time_to_go >= cfg.min_time_to_go


def test_climbs_toward_higher_target(cfg):
    cmd = compute_guidance(_state(), 20000.0, 1200.0, 2.0e6, 1.0e5, G, cfg)
    assert cmd.flight_path_angle > 0.0
    assert cmd.throttle == pytest.approx(1.0)


def test_descends_toward_lower_target(cfg):
    cmd = compute_guidance(_state(), 5000.0, 600.0, 2.0e6, 1.0e5, G, cfg)
    assert cmd.flight_path_angle < 0.0


def test_holds_when_on_target(cfg):
    cmd = compute_guidance(_state(), 10000.0, 600.0, 2.0e6, 1.0e5, G, cfg)
    assert cmd.flight_path_angle == pytest.approx(0.0)
    assert cmd.throttle == pytest.approx(1.0e5 / 2.0e6)


def test_no_descent_on_ground(cfg):
    cmd = compute_guidance(_state(altitude=0.0, velocity=0.0), 0.0, 0.0, 2.0e6, 0.0, G, cfg)
    assert cmd.flight_path_angle >= 0.0


def test_climb_limited_by_excess_thrust(cfg):
    s = _state()
    thrust, drag = 1.1e5, 1.0e5
    cmd = compute_guidance(s, 60000.0, 2000.0, thrust, drag, G, cfg)
    limit = cfg.climb_thrust_share * (thrust - drag) / (s.mass * G)
    assert np.sin(cmd.flight_path_angle) == pytest.approx(limit)


def test_no_thrust_no_throttle(cfg):
    cmd = compute_guidance(_state(), 20000.0, 1200.0, 0.0, 1.0e5, G, cfg)
    assert cmd.throttle == 0.0
    assert cmd.flight_path_angle <= 0.0
