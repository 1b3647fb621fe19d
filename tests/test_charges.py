import dataclasses

import numpy as np
import pytest

from physics.charges import ChargeSource, build_charge_list, charge_configs, charge_positions
from physics.coulomb import coulomb_coefficient, coulomb_convention_registry
from physics.trajectories import circular_orbit, linear_oscillation, static, uniform_motion


def test_position_clamps_negative_time(params):
    source = ChargeSource(circular_orbit(2.0, 0.25 * params['c'], phase=0.5), 1.0)
    np.testing.assert_allclose(source.position(-3e-9), source.position(0.0))
    x, y = source.position(np.array([-1e-9, 0.0, -5.0]))
    np.testing.assert_allclose(x, 2.0 * np.cos(0.5))
    np.testing.assert_allclose(y, 2.0 * np.sin(0.5))


def test_charge_source_is_immutable():
    source = ChargeSource(static(), 1.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        source.charge = 2.0


def test_trajectories_accept_arrays():
    t = np.linspace(0.0, 1.0, 5)
    x, y = static(1.0, -2.0)(t)
    assert x.shape == t.shape and np.all(x == 1.0) and np.all(y == -2.0)

    x, y = uniform_motion((1.0, 1.0), (2.0, -1.0))(t)
    np.testing.assert_allclose(x, 1.0 + 2.0 * t)
    np.testing.assert_allclose(y, 1.0 - t)

    x, y = linear_oscillation(0.5, np.pi, direction=(0.0, 3.0))(t)
    np.testing.assert_allclose(x, 0.0, atol=1e-15)
    np.testing.assert_allclose(y, 0.5 * np.sin(np.pi * t))


def test_linear_oscillation_rejects_zero_direction():
    with pytest.raises(ValueError):
        linear_oscillation(1.0, 1.0, direction=(0.0, 0.0))


def test_orbiting_dipole_starts_on_opposite_sides(params):
    params['charge_config_name'] = 'orbiting_dipole'
    charge_list = build_charge_list(params)
    assert [pc.charge for pc in charge_list] == [1.0, -1.0]

    positions = charge_positions(charge_list, 0.0)
    np.testing.assert_allclose(positions, [[2.0, 0.0], [-2.0, 0.0]], atol=1e-12)

    # 半径 2、角速度 0.25c：速度 0.5c
    quarter_period = (np.pi / 2.0) / (0.25 * params['c'])
    np.testing.assert_allclose(charge_positions(charge_list, quarter_period), [[0.0, 2.0], [0.0, -2.0]], atol=1e-9)


@pytest.mark.parametrize('name', sorted(charge_configs))
def test_every_charge_config_builds(params, name):
    params['charge_config_name'] = name
    charge_list = build_charge_list(params)
    assert charge_list
    positions = charge_positions(charge_list, 5 * params['dt'])
    assert positions.shape == (len(charge_list), 2)
    assert np.all(np.isfinite(positions))


def test_charge_positions_of_empty_list():
    assert charge_positions([], 1.0).shape == (0, 2)


def test_coulomb_conventions(params):
    eps0 = params['epsilon_0']
    params['coulomb_convention'] = 'standard'
    assert coulomb_coefficient(params) == pytest.approx(8.9875517923e9, rel=1e-8)
    params['coulomb_convention'] = 'legacy'
    assert coulomb_coefficient(params) == pytest.approx(np.pi * eps0 / 4.0, rel=1e-15)
    assert set(coulomb_convention_registry) == {'standard', 'legacy'}
